"""
Abstract client interface for the batch service.

The provisioner only talks to the batch service through this interface, so the
real Azure Batch client and the in-memory stand-in are interchangeable.
"""

import enum
from abc import ABC, abstractmethod
from typing import List, Optional

from batch_playground.batch.types import ComputeNodeInfo, JobInfo, JobSpec, PoolInfo, PoolSpec, TaskSpec


class ErrorKind(enum.Enum):
    NOT_FOUND = "not_found"
    OTHER = "other"

    def __str__(self):
        return self.name


class BatchServiceError(Exception):
    """Raised by a BatchService when a remote call fails."""

    def __init__(
        self, kind: ErrorKind, message: str, code: Optional[str] = None, status_code: Optional[int] = None
    ):
        super().__init__(message)
        self._kind = kind
        self._message = message
        self._code = code
        self._status_code = status_code

    @property
    def kind(self) -> ErrorKind:
        return self._kind

    @property
    def message(self) -> str:
        return self._message

    @property
    def code(self) -> Optional[str]:
        return self._code

    @property
    def status_code(self) -> Optional[int]:
        return self._status_code

    def is_not_found(self) -> bool:
        return self._kind == ErrorKind.NOT_FOUND

    def __repr__(self):
        return (
            f"BatchServiceError(kind={self._kind}, message={self._message!r}, "
            f"code={self._code!r}, status_code={self._status_code!r})"
        )


class BatchService(ABC):
    """Abstract base class for batch service clients."""

    async def __aenter__(self) -> "BatchService":
        return self

    async def __aexit__(self, exc_type, exc_value, traceback) -> None:
        await self.close()

    @abstractmethod
    async def get_pool(self, pool_id: str) -> PoolInfo:
        """
        Fetch a pool by id.

        Args:
            pool_id: Id of the pool

        Returns:
            Current pool information

        Raises:
            BatchServiceError: ErrorKind.NOT_FOUND if the pool does not exist
        """
        pass

    @abstractmethod
    async def create_pool(self, spec: PoolSpec) -> None:
        """
        Create a pool.

        Args:
            spec: Pool specification, including image and application packages
        """
        pass

    @abstractmethod
    async def list_compute_nodes(self, pool_id: str) -> List[ComputeNodeInfo]:
        """
        List the compute nodes currently in a pool.

        Args:
            pool_id: Id of the pool

        Returns:
            One entry per node, in service order
        """
        pass

    @abstractmethod
    async def get_job(self, job_id: str) -> JobInfo:
        """
        Fetch a job by id.

        Args:
            job_id: Id of the job

        Returns:
            Current job information

        Raises:
            BatchServiceError: ErrorKind.NOT_FOUND if the job does not exist
        """
        pass

    @abstractmethod
    async def create_job(self, spec: JobSpec) -> None:
        """
        Create a job bound to an existing pool.

        Args:
            spec: Job id and the id of the pool it runs on
        """
        pass

    @abstractmethod
    async def add_task(self, job_id: str, task: TaskSpec) -> None:
        """
        Submit a task to a job.

        Args:
            job_id: Id of the job
            task: Task id and command line
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release the underlying connection. Safe to call more than once."""
        pass
