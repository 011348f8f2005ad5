import dataclasses
import sys

from batch_playground.batch.types import ImageReference
from batch_playground.config.config_class import ConfigType

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self


@dataclasses.dataclass(frozen=True)
class ImageReferenceConfig(ConfigType):
    """A marketplace VM image given as ``PUBLISHER:OFFER:SKU[:VERSION]``."""

    publisher: str
    offer: str
    sku: str
    version: str = "latest"

    def __post_init__(self):
        for name in ("publisher", "offer", "sku", "version"):
            if not getattr(self, name):
                raise ValueError(f"image reference {name} cannot be empty")

    @classmethod
    def from_string(cls, value: str) -> Self:
        parts = value.strip().split(":")
        if len(parts) not in (3, 4):
            raise ValueError(f"image reference must be PUBLISHER:OFFER:SKU[:VERSION], got {value!r}")
        return cls(*parts)

    def to_reference(self) -> ImageReference:
        return ImageReference(publisher=self.publisher, offer=self.offer, sku=self.sku, version=self.version)

    def __str__(self) -> str:
        return f"{self.publisher}:{self.offer}:{self.sku}:{self.version}"
