"""
Azure Batch client.

Wraps the blocking azure-batch SDK behind the async BatchService interface and
translates SDK errors into BatchServiceError with a structured ErrorKind.
"""

import asyncio
import functools
import logging
from typing import Any, Callable, List, Optional

import azure.batch.models as batchmodels
from azure.batch import BatchServiceClient
from azure.batch.batch_auth import SharedKeyCredentials
from msrest.exceptions import ClientException

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

NOT_FOUND_ERROR_CODES = frozenset({"PoolNotFound", "JobNotFound", "NodeNotFound", "TaskNotFound", "ResourceNotFound"})

# message the service client reports for a bare 404 without a decoded error body
NOT_FOUND_MESSAGE = "Operation returned an invalid status code 'NotFound'"


def classify_batch_error(error: Exception) -> BatchServiceError:
    """Turn an azure-batch exception into a BatchServiceError."""
    code = None
    message = str(error)

    batch_error = getattr(error, "error", None)
    if batch_error is not None:
        code = getattr(batch_error, "code", None)
        error_message = getattr(batch_error, "message", None)
        if error_message is not None and getattr(error_message, "value", None):
            message = error_message.value

    response = getattr(error, "response", None)
    status_code = getattr(response, "status_code", None)

    if code in NOT_FOUND_ERROR_CODES or status_code == 404 or NOT_FOUND_MESSAGE in (str(error), message):
        kind = ErrorKind.NOT_FOUND
    else:
        kind = ErrorKind.OTHER

    return BatchServiceError(kind, message, code=code, status_code=status_code)


def _enum_value(value: Any) -> str:
    return getattr(value, "value", value) or "unknown"


class AzureBatchService(BatchService):
    def __init__(
        self,
        account_name: str,
        account_key: str,
        account_url: str,
        client: Optional[BatchServiceClient] = None,
    ):
        self._account_name = account_name
        self._account_url = account_url

        if client is None:
            credentials = SharedKeyCredentials(account_name, account_key)
            client = BatchServiceClient(credentials, batch_url=account_url)

        self._client = client
        self._closed = False

        logging.info(f"Azure Batch client opened: account={account_name}, url={account_url}")

    async def get_pool(self, pool_id: str) -> PoolInfo:
        pool = await self._call(self._client.pool.get, pool_id)
        return PoolInfo(pool_id=pool.id, allocation_state=AllocationState(_enum_value(pool.allocation_state)))

    async def create_pool(self, spec: PoolSpec) -> None:
        image = spec.image_reference
        pool = batchmodels.PoolAddParameter(
            id=spec.pool_id,
            vm_size=spec.vm_size,
            virtual_machine_configuration=batchmodels.VirtualMachineConfiguration(
                image_reference=batchmodels.ImageReference(
                    publisher=image.publisher, offer=image.offer, sku=image.sku, version=image.version
                ),
                node_agent_sku_id=spec.node_agent_sku_id,
            ),
            target_dedicated_nodes=spec.target_dedicated_nodes,
            application_package_references=[
                batchmodels.ApplicationPackageReference(application_id=package.application_id, version=package.version)
                for package in spec.application_packages
            ],
        )
        await self._call(self._client.pool.add, pool)

    async def list_compute_nodes(self, pool_id: str) -> List[ComputeNodeInfo]:
        # the SDK pages lazily, so drain the pager inside the executor
        nodes = await self._call(lambda: list(self._client.compute_node.list(pool_id)))
        return [ComputeNodeInfo(node_id=node.id, state=ComputeNodeState(_enum_value(node.state))) for node in nodes]

    async def get_job(self, job_id: str) -> JobInfo:
        job = await self._call(self._client.job.get, job_id)
        pool_info = getattr(job, "pool_info", None)
        return JobInfo(job_id=job.id, pool_id=getattr(pool_info, "pool_id", None))

    async def create_job(self, spec: JobSpec) -> None:
        job = batchmodels.JobAddParameter(id=spec.job_id, pool_info=batchmodels.PoolInformation(pool_id=spec.pool_id))
        await self._call(self._client.job.add, job)

    async def add_task(self, job_id: str, task: TaskSpec) -> None:
        parameter = batchmodels.TaskAddParameter(id=task.task_id, command_line=task.command_line)
        await self._call(self._client.task.add, job_id=job_id, task=parameter)

    async def close(self) -> None:
        if self._closed:
            return

        self._closed = True
        self._client.close()
        logging.debug(f"Azure Batch client closed: account={self._account_name}")

    async def _call(self, func: Callable, *args, **kwargs):
        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(None, functools.partial(func, *args, **kwargs))
        except batchmodels.BatchErrorException as e:
            raise classify_batch_error(e) from e
        except ClientException as e:
            # transport failures: DNS, connection refused, TLS
            raise BatchServiceError(ErrorKind.OTHER, str(e)) from e
