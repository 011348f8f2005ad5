import dataclasses
from typing import List, Optional, Tuple

from batch_playground.batch.types import PoolSpec
from batch_playground.config.config_class import ConfigClass
from batch_playground.config.types.application_package import ApplicationPackageReferenceConfig
from batch_playground.config.types.image_reference import ImageReferenceConfig
from batch_playground.utility.logging.utility import LoggingLevel

BACKENDS = ("azure", "memory")


@dataclasses.dataclass
class ProvisionerConfig(ConfigClass):
    # Batch account
    batch_account_name: Optional[str] = dataclasses.field(
        default=None, metadata=dict(help="Azure Batch account name", env_var="AZURE_BATCH_ACCOUNT_NAME")
    )
    batch_account_url: Optional[str] = dataclasses.field(
        default=None,
        metadata=dict(
            help="Azure Batch account endpoint, e.g. https://myaccount.westeurope.batch.azure.com",
            env_var="AZURE_BATCH_ACCOUNT_URL",
        ),
    )
    batch_account_location: Optional[str] = dataclasses.field(
        default=None,
        metadata=dict(
            help="Azure region of the account, used to build the endpoint when no url is given, e.g. westeurope",
            env_var="AZURE_BATCH_ACCOUNT_LOCATION",
        ),
    )
    batch_account_key: Optional[str] = dataclasses.field(
        default=None,
        metadata=dict(help="Azure Batch account primary or secondary key", env_var="AZURE_BATCH_ACCOUNT_KEY"),
    )

    # Pool
    pool_id: str = dataclasses.field(default="Hello_World_Pool", metadata=dict(help="id of the pool to ensure"))
    vm_size: str = dataclasses.field(default="STANDARD_A1_v2", metadata=dict(help="VM size of the pool nodes"))
    target_dedicated_nodes: int = dataclasses.field(
        default=1, metadata=dict(help="number of dedicated nodes requested when the pool is created")
    )
    image_reference: ImageReferenceConfig = dataclasses.field(
        default=ImageReferenceConfig("MicrosoftWindowsServer", "WindowsServer", "2019-Datacenter", "latest"),
        metadata=dict(help="marketplace image as PUBLISHER:OFFER:SKU[:VERSION]"),
    )
    node_agent_sku_id: str = dataclasses.field(
        default="batch.node.windows amd64", metadata=dict(help="node agent SKU matching the image")
    )
    application_packages: List[ApplicationPackageReferenceConfig] = dataclasses.field(
        default_factory=lambda: [ApplicationPackageReferenceConfig("HelloWorldApp", "1.0")],
        metadata=dict(help="application packages installed on each node, as APP_ID[:VERSION]"),
    )

    # Job and task
    job_id: str = dataclasses.field(default="Hello_World_Job", metadata=dict(help="id of the job to ensure"))
    task_id_prefix: str = dataclasses.field(
        default="Hello_World_Task_", metadata=dict(help="prefix of the submitted task id, followed by a timestamp")
    )
    task_executable: str = dataclasses.field(
        default="HelloWorld.exe", metadata=dict(help="executable inside the first application package to run")
    )

    backend: str = dataclasses.field(
        default="azure", metadata=dict(help="batch service backend: 'azure' or 'memory' (local dry run)")
    )

    # Logging
    logging_paths: Tuple[str, ...] = dataclasses.field(
        default=("/dev/stdout",), metadata=dict(help="where to write logs, /dev/stdout or file paths")
    )
    logging_level: str = dataclasses.field(default="INFO", metadata=dict(help="logging level"))
    logging_config_file: Optional[str] = dataclasses.field(
        default=None, metadata=dict(help="logging.config file, overrides the other logging options")
    )

    def __post_init__(self):
        if not self.pool_id:
            raise ValueError("pool_id cannot be empty.")

        if not self.job_id:
            raise ValueError("job_id cannot be empty.")

        if self.target_dedicated_nodes < 0:
            raise ValueError(f"target_dedicated_nodes must be non-negative, got {self.target_dedicated_nodes}")

        if not self.application_packages:
            raise ValueError("at least one application package is required.")

        if self.backend not in BACKENDS:
            raise ValueError(f"backend must be one of {', '.join(BACKENDS)}, got '{self.backend}'")

        if self.logging_level.upper() not in LoggingLevel.__members__:
            raise ValueError(f"unknown logging level '{self.logging_level}'")

        if self.backend == "azure":
            if not self.batch_account_name:
                raise ValueError("batch_account_name is required for the azure backend.")

            if not self.batch_account_key:
                raise ValueError("batch_account_key is required for the azure backend.")

            if not self.batch_account_url and not self.batch_account_location:
                raise ValueError("either batch_account_url or batch_account_location is required for the azure backend.")

    def account_url(self) -> str:
        if self.batch_account_url:
            return self.batch_account_url.rstrip("/")

        return f"https://{self.batch_account_name}.{self.batch_account_location}.batch.azure.com"

    def pool_spec(self) -> PoolSpec:
        return PoolSpec(
            pool_id=self.pool_id,
            vm_size=self.vm_size,
            image_reference=self.image_reference.to_reference(),
            node_agent_sku_id=self.node_agent_sku_id,
            target_dedicated_nodes=self.target_dedicated_nodes,
            application_packages=[package.to_reference() for package in self.application_packages],
        )

    def is_windows(self) -> bool:
        return self.node_agent_sku_id.lower().startswith("batch.node.windows")
