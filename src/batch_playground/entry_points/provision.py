import asyncio
import logging
import sys
from typing import List, Optional

from batch_playground.batch.service import BatchService
from batch_playground.config.section.provisioner import ProvisionerConfig
from batch_playground.provisioner.provisioner import Provisioner, ProvisioningOutcome
from batch_playground.utility.logging.utility import get_logger_info, setup_logger


def create_batch_service(config: ProvisionerConfig) -> BatchService:
    if config.backend == "memory":
        from batch_playground.batch.memory_service import InMemoryBatchService

        logging.info("Using in-memory batch service, nothing will be created on Azure")
        return InMemoryBatchService()

    from batch_playground.batch.azure_service import AzureBatchService

    return AzureBatchService(
        account_name=config.batch_account_name,
        account_key=config.batch_account_key,
        account_url=config.account_url(),
    )


async def provision(config: ProvisionerConfig, service: Optional[BatchService] = None) -> ProvisioningOutcome:
    if service is None:
        service = create_batch_service(config)

    async with service:
        return await Provisioner(service, config).run()


def main(argv: Optional[List[str]] = None):
    config = ProvisionerConfig.parse("Batch Playground Provisioner", "provisioner", argv)

    setup_logger(config.logging_paths, config.logging_config_file, config.logging_level)

    _, log_level_str, log_paths = get_logger_info(logging.getLogger())
    logging.debug(f"logging to {', '.join(log_paths)} at {log_level_str}")

    try:
        outcome = asyncio.run(provision(config))
    except KeyboardInterrupt:
        sys.exit(0)

    logging.debug(f"provisioning finished: {outcome}")


if __name__ == "__main__":
    main()
