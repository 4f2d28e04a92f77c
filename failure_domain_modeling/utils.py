from typing import Optional
from typing import Sequence

from failure_domain_modeling.interface import ClusterTopology
from failure_domain_modeling.interface import DEFAULT_LEVEL_NAMES
from failure_domain_modeling.interface import LevelSpec
from failure_domain_modeling.interface import MAX_DOMAINS_PER_PARENT
from failure_domain_modeling.interface import MAX_NODES_PER_PARENT
from failure_domain_modeling.interface import MAX_REPLICATION_FACTOR


def limit(value: int, minimum: int, maximum: int) -> int:
    if value < minimum:
        return minimum
    if value > maximum:
        return maximum
    return value


def clamp_child_count(value: int, leaf: bool) -> int:
    """Nodes per parent go up to 100, every other domain up to 10"""
    return limit(value, 1, MAX_NODES_PER_PARENT if leaf else MAX_DOMAINS_PER_PARENT)


def odd_replication_factor(requested: int, previous: Optional[int] = None) -> int:
    """Turn a requested replication factor into a usable odd one

    An even request is treated as a step from the previous value and keeps
    going in that direction: coming down from 5 to 4 lands on 3, going up
    from 3 to 4 lands on 5. Without a previous value even requests round up.
    """
    value = requested
    if value % 2 == 0:
        if previous is not None and previous > value:
            value -= 1
        else:
            value += 1
    return limit(value, 1, MAX_REPLICATION_FACTOR)


def default_level_name(depth: int, level_count: int) -> str:
    if depth == level_count:
        return DEFAULT_LEVEL_NAMES[-1]
    if depth < len(DEFAULT_LEVEL_NAMES):
        return DEFAULT_LEVEL_NAMES[depth - 1]
    return f"Level {depth}"


def normalize_topology(
    child_counts: Sequence[int],
    replication_factor: int,
    previous_replication_factor: Optional[int] = None,
    names: Optional[Sequence[str]] = None,
) -> ClusterTopology:
    """Build a valid ClusterTopology out of raw user input

    Child counts are clamped into their allowed range and the replication
    factor is made odd. The number of levels is not adjusted, a wrong level
    count fails validation.
    """
    level_count = len(child_counts)
    levels = []
    for depth, count in enumerate(child_counts, start=1):
        if names is not None and depth <= len(names) and names[depth - 1]:
            name = names[depth - 1]
        else:
            name = default_level_name(depth, level_count)
        levels.append(
            LevelSpec(
                name=name,
                child_count=clamp_child_count(count, leaf=depth == level_count),
            )
        )

    return ClusterTopology(
        levels=levels,
        replication_factor=odd_replication_factor(
            replication_factor, previous_replication_factor
        ),
    )
