from __future__ import annotations

from enum import Enum
from typing import List
from typing import Optional

from pydantic import BaseModel
from pydantic import computed_field
from pydantic import ConfigDict
from pydantic import Field
from pydantic import model_validator

MAX_LEVELS = 5
MAX_DOMAINS_PER_PARENT = 10
MAX_NODES_PER_PARENT = 100
MAX_REPLICATION_FACTOR = 99

DEFAULT_LEVEL_NAMES = ("Region", "DC", "AZ", "Node")
DEFAULT_CHILD_COUNT = 3
DEFAULT_REPLICATION_FACTOR = 3


class InvalidTopologyShape(ValueError):
    """The level count or a child count is outside the supported bounds"""


###############################################################################
#              Models (structs) for how we describe a topology                #
###############################################################################


class DomainState(str, Enum):
    def __str__(self):
        return str(self.value)

    healthy = "healthy"
    empty = "empty"
    failed = "failed"


class LevelSpec(BaseModel):
    name: str = Field(
        default="",
        description="Display label for domains at this depth, e.g. Region",
    )
    child_count: int = Field(
        default=DEFAULT_CHILD_COUNT,
        ge=1,
        description="How many domains at this depth live under each parent",
    )
    model_config = ConfigDict(frozen=True)


def default_levels() -> List[LevelSpec]:
    return [LevelSpec(name=name) for name in DEFAULT_LEVEL_NAMES]


class ClusterTopology(BaseModel):
    """The shape of a cluster and how many copies of a range it keeps

    The last level is the individual node, every earlier level is a
    failure domain that contains the levels after it.
    """

    levels: List[LevelSpec] = Field(
        default_factory=default_levels,
        min_length=1,
        max_length=MAX_LEVELS,
        description="Failure domain levels ordered from outermost to nodes",
    )
    replication_factor: int = Field(
        default=DEFAULT_REPLICATION_FACTOR,
        ge=1,
        le=MAX_REPLICATION_FACTOR,
        description="How many copies of the range exist, must be odd so a "
        "majority quorum is well defined",
    )

    @model_validator(mode="after")
    def _check_bounds(self) -> ClusterTopology:
        if self.replication_factor % 2 == 0:
            raise ValueError(
                f"replication_factor must be odd, got {self.replication_factor}"
            )
        for depth, level in enumerate(self.levels, start=1):
            maximum = (
                MAX_NODES_PER_PARENT
                if depth == len(self.levels)
                else MAX_DOMAINS_PER_PARENT
            )
            if level.child_count > maximum:
                raise ValueError(
                    f"Level {depth} ({level.name or 'unnamed'}) allows at most "
                    f"{maximum} children per parent, got {level.child_count}"
                )
        return self

    @property
    def child_counts(self) -> List[int]:
        return [level.child_count for level in self.levels]

    @property
    def level_names(self) -> List[str]:
        return [level.name for level in self.levels]

    @computed_field(return_type=int)  # type: ignore
    @property
    def node_count(self) -> int:
        count = 1
        for level in self.levels:
            count *= level.child_count
        return count

    @computed_field(return_type=int)  # type: ignore
    @property
    def allowable_dead(self) -> int:
        """How many replicas can be lost while a majority survives"""
        return self.replication_factor // 2

    @computed_field(return_type=bool)  # type: ignore
    @property
    def under_replicated(self) -> bool:
        return self.node_count < self.replication_factor

    def under_replicated_message(self) -> Optional[str]:
        if not self.under_replicated:
            return None
        return (
            f"The system is underreplicated: There are {self.node_count} nodes, "
            f"but {self.replication_factor} are needed."
        )


class NodeResources(BaseModel):
    """Per node resource assumptions used for the capacity summary"""

    cpu_cores: int = Field(default=0, ge=0)
    ram_gib: float = Field(default=0, ge=0)
    disk_gib: float = Field(default=0, ge=0)
    iops: int = Field(default=0, ge=0, description="Disk IO operations per second")


###############################################################################
#              Models (structs) for what a simulation produced                #
###############################################################################


class FailureScenario(BaseModel):
    failure_granularity: int = 0
    budget: int = 0
    replicas_killed: int = 0
    # Position 0 is depth 1 (the outermost real domain)
    failures_per_level: List[int] = []

    @classmethod
    def empty(
        cls, level_count: int, failure_granularity: int = 0, budget: int = 0
    ) -> FailureScenario:
        return cls(
            failure_granularity=failure_granularity,
            budget=budget,
            replicas_killed=0,
            failures_per_level=[0] * level_count,
        )

    @property
    def domains_failed(self) -> int:
        return sum(self.failures_per_level)


class DomainSnapshot(BaseModel):
    name: str
    depth: int
    index: int
    replicas: int
    failed: bool = False
    state: DomainState = DomainState.healthy
    children: List[DomainSnapshot] = []
    model_config = ConfigDict(frozen=True)


class ClusterCapacity(BaseModel):
    node_count: int
    cpu_cores: int = 0
    ram_gib: float = 0
    disk_gib: float = 0
    iops: int = 0
    # Distinct data the cluster can hold once every replica is stored
    usable_disk_gib: float = 0


class TopologyReport(BaseModel):
    topology: ClusterTopology
    failure: FailureScenario
    domains: List[DomainSnapshot] = []
    capacity: Optional[ClusterCapacity] = None
    message: Optional[str] = None
