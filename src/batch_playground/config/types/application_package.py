import dataclasses
import sys
from typing import Optional

from batch_playground.batch.types import ApplicationPackageReference
from batch_playground.config.config_class import ConfigType

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self


@dataclasses.dataclass(frozen=True)
class ApplicationPackageReferenceConfig(ConfigType):
    """An application package given as ``APP_ID`` or ``APP_ID:VERSION``."""

    application_id: str
    version: Optional[str] = None

    def __post_init__(self):
        if not self.application_id:
            raise ValueError("application id cannot be empty")

        if self.version is not None and not self.version:
            raise ValueError("application package version cannot be empty, omit it to use the default version")

    @classmethod
    def from_string(cls, value: str) -> Self:
        application_id, sep, version = value.strip().partition(":")
        if not sep:
            return cls(application_id)
        return cls(application_id, version)

    def to_reference(self) -> ApplicationPackageReference:
        return ApplicationPackageReference(application_id=self.application_id, version=self.version)

    def __str__(self) -> str:
        if self.version is None:
            return self.application_id
        return f"{self.application_id}:{self.version}"
