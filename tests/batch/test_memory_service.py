import unittest

from batch_playground.batch.memory_service import InMemoryBatchService
from batch_playground.batch.service import BatchServiceError, ErrorKind
from batch_playground.batch.types import (
    AllocationState,
    ApplicationPackageReference,
    ComputeNodeState,
    ImageReference,
    JobSpec,
    PoolSpec,
    TaskSpec,
)


def _pool_spec(pool_id: str = "pool", nodes: int = 2) -> PoolSpec:
    return PoolSpec(
        pool_id=pool_id,
        vm_size="STANDARD_A1_v2",
        image_reference=ImageReference("Canonical", "ubuntu", "22_04-lts"),
        node_agent_sku_id="batch.node.ubuntu 22.04",
        target_dedicated_nodes=nodes,
        application_packages=[ApplicationPackageReference("app", "2.0")],
    )


class TestInMemoryBatchService(unittest.IsolatedAsyncioTestCase):
    async def test_missing_resources_are_not_found(self):
        service = InMemoryBatchService()

        for lookup in (service.get_pool("pool"), service.get_job("job"), service.list_compute_nodes("pool")):
            with self.assertRaises(BatchServiceError) as context:
                await lookup
            self.assertEqual(context.exception.kind, ErrorKind.NOT_FOUND)

    async def test_created_pool_settles_with_target_nodes(self):
        service = InMemoryBatchService(initial_node_state=ComputeNodeState.IDLE)
        await service.create_pool(_pool_spec(nodes=3))

        pool = await service.get_pool("pool")
        nodes = await service.list_compute_nodes("pool")

        self.assertEqual(pool.allocation_state, AllocationState.STEADY)
        self.assertEqual([node.state for node in nodes], [ComputeNodeState.IDLE] * 3)
        self.assertEqual(service.pool_specs["pool"].application_packages[0].version, "2.0")

    async def test_created_pool_can_stay_resizing(self):
        service = InMemoryBatchService(initial_node_state=None)
        await service.create_pool(_pool_spec())

        self.assertEqual((await service.get_pool("pool")).allocation_state, AllocationState.RESIZING)
        self.assertEqual(await service.list_compute_nodes("pool"), [])

    async def test_duplicate_create_is_rejected(self):
        service = InMemoryBatchService()
        await service.create_pool(_pool_spec())
        await service.create_job(JobSpec("job", "pool"))

        with self.assertRaises(BatchServiceError) as context:
            await service.create_pool(_pool_spec())
        self.assertEqual(context.exception.code, "PoolExists")
        self.assertEqual(context.exception.kind, ErrorKind.OTHER)

        with self.assertRaises(BatchServiceError) as context:
            await service.create_job(JobSpec("job", "pool"))
        self.assertEqual(context.exception.code, "JobExists")

    async def test_add_task_requires_job(self):
        service = InMemoryBatchService()

        with self.assertRaises(BatchServiceError):
            await service.add_task("job", TaskSpec("task", "echo"))

        service.set_job("job", "pool")
        await service.add_task("job", TaskSpec("task", "echo"))
        self.assertEqual(service.tasks("job"), [TaskSpec("task", "echo")])

    async def test_context_manager_closes(self):
        async with InMemoryBatchService() as service:
            self.assertFalse(service.closed)

        self.assertTrue(service.closed)
