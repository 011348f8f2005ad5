"""
Pool, job and task provisioning.

Ensures a pool and a job exist, gates on the pool having at least one node able
to take work, then submits a single task that runs an application package.
"""

import dataclasses
import datetime
import enum
import logging
from typing import Callable, Optional

from batch_playground.batch.service import BatchService, BatchServiceError
from batch_playground.batch.types import AllocationState, JobSpec, TaskSpec
from batch_playground.config.section.provisioner import ProvisionerConfig
from batch_playground.provisioner.task import build_task
from batch_playground.utility.logging.status import Severity, report


class ProvisioningOutcome(enum.Enum):
    TASK_SUBMITTED = "task_submitted"
    POOL_NOT_READY = "pool_not_ready"

    def __str__(self):
        return self.name


class Provisioner:
    def __init__(
        self,
        service: BatchService,
        config: ProvisionerConfig,
        clock: Callable[[], datetime.datetime] = datetime.datetime.now,
    ):
        self._service = service
        self._config = config
        self._clock = clock

    async def run(self) -> ProvisioningOutcome:
        pool_id = self._config.pool_id
        job_id = self._config.job_id

        await self.ensure_pool(pool_id)

        not_ready_reason = await self._pool_not_ready_reason(pool_id)
        if not_ready_reason is not None:
            report(Severity.NOTICE, f"{not_ready_reason} Please try again later.")
            return ProvisioningOutcome.POOL_NOT_READY

        await self.ensure_job(job_id, pool_id)
        await self.submit_task(job_id)
        return ProvisioningOutcome.TASK_SUBMITTED

    async def ensure_pool(self, pool_id: str) -> bool:
        """Create the pool unless it exists. Returns True if it was created."""
        report(Severity.PROGRESS, f"Checking if pool {pool_id} exists...")
        try:
            await self._service.get_pool(pool_id)
        except BatchServiceError as e:
            if not e.is_not_found():
                report(Severity.FAILURE, f"Failed to look up pool {pool_id}: {e.message}")
                raise
        else:
            report(Severity.SUCCESS, f"Pool {pool_id} already exists!")
            return False

        report(Severity.PROGRESS, f"Creating pool {pool_id}...")
        try:
            await self._service.create_pool(dataclasses.replace(self._config.pool_spec(), pool_id=pool_id))
        except BatchServiceError as e:
            report(Severity.FAILURE, f"Failed to create pool {pool_id}: {e.message}")
            raise

        report(Severity.SUCCESS, f"Pool {pool_id} successfully created!")
        return True

    async def check_pool_ready(self, pool_id: str) -> bool:
        """
        Point-in-time readiness check: the pool has finished allocating and at
        least one node is running, idle, or past its start task.
        """
        return await self._pool_not_ready_reason(pool_id) is None

    async def _pool_not_ready_reason(self, pool_id: str) -> Optional[str]:
        try:
            pool = await self._service.get_pool(pool_id)
        except BatchServiceError as e:
            report(Severity.FAILURE, f"Failed to look up pool {pool_id}: {e.message}")
            raise

        if pool.allocation_state != AllocationState.STEADY:
            return f"Pool {pool_id} is {pool.allocation_state}, nodes are not ready to create job / task."

        try:
            nodes = await self._service.list_compute_nodes(pool_id)
        except BatchServiceError as e:
            report(Severity.FAILURE, f"Failed to list nodes of pool {pool_id}: {e.message}")
            raise

        ready_nodes = sum(1 for node in nodes if node.is_ready())
        logging.debug(f"pool {pool_id}: {ready_nodes} of {len(nodes)} node(s) ready")

        if ready_nodes == 0:
            return f"Pool {pool_id} is steady but nodes are still not ready to create job / task."

        return None

    async def ensure_job(self, job_id: str, pool_id: str) -> bool:
        """Create the job on the pool unless it exists. Returns True if it was created."""
        report(Severity.PROGRESS, f"Checking if job {job_id} exists...")
        try:
            await self._service.get_job(job_id)
        except BatchServiceError as e:
            if not e.is_not_found():
                report(Severity.FAILURE, f"Failed to look up job {job_id}: {e.message}")
                raise
        else:
            report(Severity.SUCCESS, f"Job {job_id} already exists!")
            return False

        report(Severity.PROGRESS, f"Creating job {job_id}...")
        try:
            await self._service.create_job(JobSpec(job_id=job_id, pool_id=pool_id))
        except BatchServiceError as e:
            report(Severity.FAILURE, f"Failed to create job {job_id}: {e.message}")
            raise

        report(Severity.SUCCESS, f"Job {job_id} successfully created!")
        return True

    async def submit_task(self, job_id: str) -> TaskSpec:
        report(Severity.PROGRESS, "Adding task...")
        task = build_task(
            prefix=self._config.task_id_prefix,
            application_id=self._config.application_packages[0].application_id,
            executable=self._config.task_executable,
            windows=self._config.is_windows(),
            now=self._clock(),
        )

        try:
            await self._service.add_task(job_id, task)
        except BatchServiceError as e:
            report(Severity.FAILURE, f"Failed to add task {task.task_id} to job {job_id}: {e.message}")
            raise

        report(Severity.SUCCESS, f"Task {task.task_id} successfully added!")
        return task
