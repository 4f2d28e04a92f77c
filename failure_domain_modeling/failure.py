"""
Worst case failure domain destruction.

Given a topology with the replicas of one range already placed, find the
largest set of whole domains that can be destroyed while a majority of the
replicas survives. The budget is the number of replicas that may be lost,
floor(RF / 2) for a majority quorum.

SEARCH ORDER
------------
Replicas are spread round robin over siblings, so the worst realistic
outage takes "the first domain of every branch" before "the second domain
of every branch". The search walks the tree one depth at a time and
interleaves the siblings of different parents in exactly that order:

    depth 1:  R1, R2, R3
    depth 2:  R1/DC1, R2/DC1, R3/DC1, R1/DC2, R2/DC2, ...

Two FIFO queues of (parent, child position) hold the work for the current
depth and the next one. Domains that are not destroyed are descended into
on the next depth instead.

LARGEST FIRST
-------------
Once a domain has been passed over at some depth, no domain holding fewer
replicas may be destroyed later at that same depth. Destroying the smaller
one would not be a worst case, a real outage takes out the bigger domain.
The largest replica count passed over so far is tracked per depth and the
kill test refuses anything smaller. Ties are still destroyed.

A parent holding no replicas ends the whole search: everything after it in
the queue order is empty as well when replicas were placed by
distribute_replicas.
"""

import logging
from collections import deque
from typing import Deque
from typing import Tuple

from failure_domain_modeling.interface import FailureScenario
from failure_domain_modeling.topology import DomainNode
from failure_domain_modeling.topology import leaf_count
from failure_domain_modeling.topology import topology_height

logger = logging.getLogger(__name__)

__all__ = ["simulate_failure"]


def simulate_failure(
    root: DomainNode, failure_granularity: int, budget: int
) -> FailureScenario:
    """Destroy the largest domains the replica budget allows

    Marks destroyed domains as failed in place. Replica counts are never
    rewritten.

    Args:
        root: The sentinel root of a tree that went through
            distribute_replicas.
        failure_granularity: The shallowest depth that may be destroyed as a
            whole. 0 disables the simulation, the leaf depth only allows
            individual nodes to fail.
        budget: How many replicas may be lost, normally floor(RF / 2).

    Returns:
        The replicas destroyed and how many domains failed at each depth.
    """
    level_count = topology_height(root)
    if not 0 <= failure_granularity <= level_count:
        raise ValueError(
            f"failure_granularity must be between 0 and {level_count}, "
            f"got {failure_granularity}"
        )
    if budget < 0:
        raise ValueError(f"budget must not be negative, got {budget}")

    scenario = FailureScenario.empty(
        level_count, failure_granularity=failure_granularity, budget=budget
    )
    if failure_granularity == 0:
        return scenario

    nodes = leaf_count(root)
    if nodes < root.replica_count:
        logger.info(
            "Not simulating failures, %d nodes cannot hold %d replicas",
            nodes,
            root.replica_count,
        )
        return scenario

    failures_per_level = scenario.failures_per_level
    remaining = budget
    current_level: Deque[Tuple[DomainNode, int]] = deque([(root, 0)])
    next_level: Deque[Tuple[DomainNode, int]] = deque()
    skipped_level_replica_count = 0

    while remaining > 0:
        if not current_level:
            if not next_level:
                break
            current_level, next_level = next_level, deque()
            skipped_level_replica_count = 0

        parent, position = current_level.popleft()
        if parent.replica_count == 0:
            break

        child = parent.children[position]
        if (
            child.depth >= failure_granularity
            and skipped_level_replica_count <= child.replica_count <= remaining
        ):
            child.failed = True
            failures_per_level[child.depth - 1] += 1
            remaining -= child.replica_count
            logger.debug(
                "Failed domain at depth %d index %d holding %d replicas",
                child.depth,
                child.index,
                child.replica_count,
            )
        elif child.children:
            next_level.append((child, 0))
            skipped_level_replica_count = max(
                skipped_level_replica_count, child.replica_count
            )

        if position + 1 < len(parent.children):
            current_level.append((parent, position + 1))

    scenario.replicas_killed = budget - remaining
    logger.debug(
        "Granularity %d destroyed %d of %d replicas, failures per level %s",
        failure_granularity,
        scenario.replicas_killed,
        budget,
        failures_per_level,
    )
    return scenario
