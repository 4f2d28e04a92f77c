import pytest
from pydantic import ValidationError

from failure_domain_modeling.utils import clamp_child_count
from failure_domain_modeling.utils import default_level_name
from failure_domain_modeling.utils import limit
from failure_domain_modeling.utils import normalize_topology
from failure_domain_modeling.utils import odd_replication_factor


def test_limit():
    assert limit(0, 1, 10) == 1
    assert limit(5, 1, 10) == 5
    assert limit(11, 1, 10) == 10


def test_clamp_child_count():
    assert clamp_child_count(0, leaf=False) == 1
    assert clamp_child_count(11, leaf=False) == 10
    assert clamp_child_count(11, leaf=True) == 11
    assert clamp_child_count(150, leaf=True) == 100


@pytest.mark.parametrize(
    "requested,previous,expected",
    [
        # Odd values pass through
        (3, None, 3),
        (7, 3, 7),
        # Even values keep moving in the direction of the change
        (4, 5, 3),
        (4, 3, 5),
        (4, None, 5),
        (98, 99, 97),
        # Then clamped into [1, 99]
        (100, None, 99),
        (101, None, 99),
        (0, 3, 1),
        (0, None, 1),
        (-5, None, 1),
    ],
)
def test_odd_replication_factor(requested, previous, expected):
    assert odd_replication_factor(requested, previous) == expected


def test_default_level_names():
    assert [default_level_name(d, 4) for d in range(1, 5)] == [
        "Region",
        "DC",
        "AZ",
        "Node",
    ]
    assert [default_level_name(d, 2) for d in range(1, 3)] == ["Region", "Node"]
    assert [default_level_name(d, 5) for d in range(1, 6)] == [
        "Region",
        "DC",
        "AZ",
        "Level 4",
        "Node",
    ]


def test_normalize_topology_fixes_input():
    topology = normalize_topology([20, 0, 200], 4, previous_replication_factor=5)

    assert topology.child_counts == [10, 1, 100]
    assert topology.level_names == ["Region", "DC", "Node"]
    assert topology.replication_factor == 3


def test_normalize_topology_names():
    topology = normalize_topology([3, 5], 3, names=["Zone", ""])
    assert topology.level_names == ["Zone", "Node"]


@pytest.mark.parametrize("child_counts", [[], [3, 3, 3, 3, 3, 3]])
def test_normalize_topology_keeps_level_count(child_counts):
    with pytest.raises(ValidationError):
        normalize_topology(child_counts, 3)
