"""
Batch Playground.

Provisions a pool, a job and a single application-package task on Azure Batch.

Architecture:
    ProvisionerConfig → Provisioner → BatchService (AzureBatchService | InMemoryBatchService)

Run flow:
    ensure pool → check pool ready → ensure job → submit task
"""

from batch_playground.about import __version__
from batch_playground.batch import BatchService, BatchServiceError, ErrorKind
from batch_playground.config.section.provisioner import ProvisionerConfig
from batch_playground.provisioner import Provisioner, ProvisioningOutcome

__all__ = [
    "__version__",
    "BatchService",
    "BatchServiceError",
    "ErrorKind",
    "ProvisionerConfig",
    "Provisioner",
    "ProvisioningOutcome",
]
