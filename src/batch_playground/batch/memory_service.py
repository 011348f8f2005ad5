"""
In-memory batch service.

Keeps pools, nodes, jobs and tasks in local dictionaries so a provisioning run
can be exercised without an Azure Batch account (``--backend memory``).
"""

import logging
from typing import Dict, List, Optional

from batch_playground.batch.service import BatchService, BatchServiceError, ErrorKind
from batch_playground.batch.types import (
    AllocationState,
    ComputeNodeInfo,
    ComputeNodeState,
    JobInfo,
    JobSpec,
    PoolInfo,
    PoolSpec,
    TaskSpec,
)

logger = logging.getLogger(__name__)


class InMemoryBatchService(BatchService):
    """
    Batch service backed by plain dictionaries.

    Newly created pools settle immediately: the allocation state becomes steady
    and ``target_dedicated_nodes`` nodes are added in ``initial_node_state``.
    Pass ``initial_node_state=None`` to leave new pools resizing with no nodes.
    """

    def __init__(self, initial_node_state: Optional[ComputeNodeState] = ComputeNodeState.IDLE):
        self._initial_node_state = initial_node_state

        self._pools: Dict[str, PoolInfo] = {}
        self._pool_specs: Dict[str, PoolSpec] = {}
        self._nodes: Dict[str, List[ComputeNodeInfo]] = {}
        self._jobs: Dict[str, JobInfo] = {}
        self._tasks: Dict[str, List[TaskSpec]] = {}
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def pool_specs(self) -> Dict[str, PoolSpec]:
        return dict(self._pool_specs)

    @property
    def jobs(self) -> Dict[str, JobInfo]:
        return dict(self._jobs)

    def tasks(self, job_id: str) -> List[TaskSpec]:
        return list(self._tasks.get(job_id, []))

    def set_pool(
        self, pool_id: str, allocation_state: AllocationState, node_states: Optional[List[ComputeNodeState]] = None
    ):
        """Place a pool directly, as if it had been created by an earlier run."""
        self._pools[pool_id] = PoolInfo(pool_id=pool_id, allocation_state=allocation_state)
        self._nodes[pool_id] = [
            ComputeNodeInfo(node_id=f"{pool_id}-node-{i}", state=state) for i, state in enumerate(node_states or [])
        ]

    def set_job(self, job_id: str, pool_id: str):
        self._jobs[job_id] = JobInfo(job_id=job_id, pool_id=pool_id)

    async def get_pool(self, pool_id: str) -> PoolInfo:
        pool = self._pools.get(pool_id)
        if pool is None:
            raise BatchServiceError(ErrorKind.NOT_FOUND, f"pool {pool_id} does not exist", code="PoolNotFound")
        return pool

    async def create_pool(self, spec: PoolSpec) -> None:
        if spec.pool_id in self._pools:
            raise BatchServiceError(ErrorKind.OTHER, f"pool {spec.pool_id} already exists", code="PoolExists")

        self._pool_specs[spec.pool_id] = spec
        if self._initial_node_state is None:
            self.set_pool(spec.pool_id, AllocationState.RESIZING)
        else:
            self.set_pool(
                spec.pool_id, AllocationState.STEADY, [self._initial_node_state] * spec.target_dedicated_nodes
            )

        logger.debug(f"created pool {spec.pool_id} with {spec.target_dedicated_nodes} node(s)")

    async def list_compute_nodes(self, pool_id: str) -> List[ComputeNodeInfo]:
        await self.get_pool(pool_id)
        return list(self._nodes.get(pool_id, []))

    async def get_job(self, job_id: str) -> JobInfo:
        job = self._jobs.get(job_id)
        if job is None:
            raise BatchServiceError(ErrorKind.NOT_FOUND, f"job {job_id} does not exist", code="JobNotFound")
        return job

    async def create_job(self, spec: JobSpec) -> None:
        if spec.job_id in self._jobs:
            raise BatchServiceError(ErrorKind.OTHER, f"job {spec.job_id} already exists", code="JobExists")

        self.set_job(spec.job_id, spec.pool_id)
        logger.debug(f"created job {spec.job_id} on pool {spec.pool_id}")

    async def add_task(self, job_id: str, task: TaskSpec) -> None:
        await self.get_job(job_id)
        self._tasks.setdefault(job_id, []).append(task)
        logger.debug(f"added task {task.task_id} to job {job_id}")

    async def close(self) -> None:
        self._closed = True
