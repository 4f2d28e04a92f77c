"""
Topology builder for nested failure domains.

A cluster is described as an ordered list of levels, e.g.

    Region -> DC -> AZ -> Node

where each level says how many domains of that kind live under one domain
of the previous level. The builder turns that description into a strict
tree of DomainNode objects hanging off a synthetic root at depth 0. The
root is not a real domain, it only owns the depth 1 domains.

Every depth uses the same node type, the depth alone says what kind of
domain a node is.
"""

import logging
from dataclasses import dataclass
from dataclasses import field
from typing import Iterator
from typing import List
from typing import Sequence
from typing import Union

import numpy as np

from failure_domain_modeling.interface import DomainSnapshot
from failure_domain_modeling.interface import DomainState
from failure_domain_modeling.interface import InvalidTopologyShape
from failure_domain_modeling.interface import LevelSpec
from failure_domain_modeling.interface import MAX_LEVELS

logger = logging.getLogger(__name__)

__all__ = [
    "DomainNode",
    "build_topology",
    "iter_domains",
    "domains_at_depth",
    "leaf_count",
    "topology_height",
    "level_sizes",
    "snapshot",
]


@dataclass
class DomainNode:
    depth: int
    index: int
    replica_count: int = 0
    failed: bool = False
    children: List["DomainNode"] = field(default_factory=list)

    @property
    def is_leaf(self) -> bool:
        return not self.children

    @property
    def state(self) -> DomainState:
        if self.failed:
            return DomainState.failed
        if self.replica_count == 0:
            return DomainState.empty
        return DomainState.healthy


def _child_counts(levels: Sequence[Union[LevelSpec, int]]) -> List[int]:
    counts = [
        level.child_count if isinstance(level, LevelSpec) else int(level)
        for level in levels
    ]
    if not 1 <= len(counts) <= MAX_LEVELS:
        raise InvalidTopologyShape(
            f"A topology needs between 1 and {MAX_LEVELS} levels, got {len(counts)}"
        )
    for depth, count in enumerate(counts, start=1):
        if count < 1:
            raise InvalidTopologyShape(
                f"Level {depth} must have at least one child per parent, got {count}"
            )
    return counts


def _populate(node: DomainNode, child_counts: Sequence[int]) -> None:
    if node.depth == len(child_counts):
        return
    for position in range(child_counts[node.depth]):
        child = DomainNode(depth=node.depth + 1, index=position + 1)
        _populate(child, child_counts)
        node.children.append(child)


def build_topology(levels: Sequence[Union[LevelSpec, int]]) -> DomainNode:
    """Build the domain tree and return its sentinel root

    Args:
        levels: One entry per depth, outermost first. Either LevelSpec
            objects or plain child counts.

    Raises:
        InvalidTopologyShape: if there are not 1 to MAX_LEVELS levels or
            any level has fewer than one child per parent.
    """
    child_counts = _child_counts(levels)
    root = DomainNode(depth=0, index=1)
    _populate(root, child_counts)
    logger.debug(
        "Built topology with levels %s and %d nodes",
        child_counts,
        level_sizes(child_counts)[-1],
    )
    return root


def iter_domains(root: DomainNode) -> Iterator[DomainNode]:
    """Yield every real domain in pre-order, the sentinel root excluded"""
    stack = list(reversed(root.children))
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def domains_at_depth(root: DomainNode, depth: int) -> List[DomainNode]:
    return [node for node in iter_domains(root) if node.depth == depth]


def topology_height(root: DomainNode) -> int:
    height = 0
    node = root
    while node.children:
        node = node.children[0]
        height += 1
    return height


def leaf_count(root: DomainNode) -> int:
    return sum(1 for node in iter_domains(root) if node.is_leaf)


def level_sizes(child_counts: Sequence[int]) -> List[int]:
    """How many domains exist at each depth, depth 1 first

    >>> level_sizes([3, 3, 2])
    [3, 9, 18]
    """
    sizes = np.cumprod(np.asarray(child_counts, dtype=np.int64))
    return [int(size) for size in sizes]


def snapshot(node: DomainNode, level_names: Sequence[str] = ()) -> DomainSnapshot:
    if 0 < node.depth <= len(level_names) and level_names[node.depth - 1]:
        name = f"{level_names[node.depth - 1]} {node.index}"
    else:
        name = str(node.index)
    return DomainSnapshot(
        name=name,
        depth=node.depth,
        index=node.index,
        replicas=node.replica_count,
        failed=node.failed,
        state=node.state,
        children=[snapshot(child, level_names) for child in node.children],
    )
