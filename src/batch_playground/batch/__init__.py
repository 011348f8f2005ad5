from batch_playground.batch.service import BatchService, BatchServiceError, ErrorKind
from batch_playground.batch.types import (
    READY_NODE_STATES,
    AllocationState,
    ApplicationPackageReference,
    ComputeNodeInfo,
    ComputeNodeState,
    ImageReference,
    JobInfo,
    JobSpec,
    PoolInfo,
    PoolSpec,
    TaskSpec,
)

__all__ = [
    "BatchService",
    "BatchServiceError",
    "ErrorKind",
    "READY_NODE_STATES",
    "AllocationState",
    "ApplicationPackageReference",
    "ComputeNodeInfo",
    "ComputeNodeState",
    "ImageReference",
    "JobInfo",
    "JobSpec",
    "PoolInfo",
    "PoolSpec",
    "TaskSpec",
]
