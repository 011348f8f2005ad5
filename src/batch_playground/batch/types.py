import dataclasses
import enum
from typing import FrozenSet, List, Optional


class AllocationState(enum.Enum):
    STEADY = "steady"
    RESIZING = "resizing"
    STOPPING = "stopping"
    UNKNOWN = "unknown"

    @classmethod
    def _missing_(cls, value):
        return cls.UNKNOWN

    def __str__(self):
        return self.value


class ComputeNodeState(enum.Enum):
    IDLE = "idle"
    REBOOTING = "rebooting"
    REIMAGING = "reimaging"
    RUNNING = "running"
    UNUSABLE = "unusable"
    CREATING = "creating"
    STARTING = "starting"
    WAITING_FOR_START_TASK = "waitingforstarttask"
    START_TASK_FAILED = "starttaskfailed"
    UNKNOWN = "unknown"
    LEAVING_POOL = "leavingpool"
    OFFLINE = "offline"
    PREEMPTED = "preempted"
    UPGRADING_OS = "upgradingos"

    @classmethod
    def _missing_(cls, value):
        return cls.UNKNOWN

    def __str__(self):
        return self.value


# nodes in these states can accept a task once the job exists
READY_NODE_STATES: FrozenSet[ComputeNodeState] = frozenset(
    {
        ComputeNodeState.RUNNING,
        ComputeNodeState.IDLE,
        ComputeNodeState.WAITING_FOR_START_TASK,
        ComputeNodeState.START_TASK_FAILED,
    }
)


@dataclasses.dataclass(frozen=True)
class ImageReference:
    publisher: str
    offer: str
    sku: str
    version: str = "latest"


@dataclasses.dataclass(frozen=True)
class ApplicationPackageReference:
    application_id: str
    version: Optional[str] = None


@dataclasses.dataclass(frozen=True)
class PoolSpec:
    pool_id: str
    vm_size: str
    image_reference: ImageReference
    node_agent_sku_id: str
    target_dedicated_nodes: int = 1
    application_packages: List[ApplicationPackageReference] = dataclasses.field(default_factory=list)


@dataclasses.dataclass(frozen=True)
class PoolInfo:
    pool_id: str
    allocation_state: AllocationState


@dataclasses.dataclass(frozen=True)
class ComputeNodeInfo:
    node_id: str
    state: ComputeNodeState

    def is_ready(self) -> bool:
        return self.state in READY_NODE_STATES


@dataclasses.dataclass(frozen=True)
class JobSpec:
    job_id: str
    pool_id: str


@dataclasses.dataclass(frozen=True)
class JobInfo:
    job_id: str
    pool_id: Optional[str]


@dataclasses.dataclass(frozen=True)
class TaskSpec:
    task_id: str
    command_line: str
