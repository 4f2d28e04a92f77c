import pytest
from pydantic import ValidationError

from failure_domain_modeling.interface import ClusterTopology
from failure_domain_modeling.interface import DomainSnapshot
from failure_domain_modeling.interface import DomainState
from failure_domain_modeling.interface import FailureScenario
from failure_domain_modeling.interface import LevelSpec


def _levels(*counts):
    return [LevelSpec(child_count=c) for c in counts]


def test_default_topology():
    topology = ClusterTopology()

    assert topology.level_names == ["Region", "DC", "AZ", "Node"]
    assert topology.child_counts == [3, 3, 3, 3]
    assert topology.replication_factor == 3
    assert topology.node_count == 81
    assert topology.allowable_dead == 1
    assert not topology.under_replicated
    assert topology.under_replicated_message() is None


@pytest.mark.parametrize(
    "rf,allowable_dead", [(1, 0), (3, 1), (5, 2), (7, 3), (99, 49)]
)
def test_allowable_dead_is_minority(rf, allowable_dead):
    topology = ClusterTopology(levels=_levels(10, 10), replication_factor=rf)
    assert topology.allowable_dead == allowable_dead


def test_under_replicated():
    topology = ClusterTopology(levels=_levels(1), replication_factor=3)

    assert topology.node_count == 1
    assert topology.under_replicated
    assert topology.under_replicated_message() == (
        "The system is underreplicated: There are 1 nodes, but 3 are needed."
    )


def test_node_count_matches_rf_is_not_under_replicated():
    topology = ClusterTopology(levels=_levels(3), replication_factor=3)
    assert not topology.under_replicated


@pytest.mark.parametrize("rf", [0, 2, 4, 98, 100, 101])
def test_invalid_replication_factor(rf):
    with pytest.raises(ValidationError):
        ClusterTopology(replication_factor=rf)


def test_even_replication_factor_message():
    with pytest.raises(ValueError, match="must be odd"):
        ClusterTopology(replication_factor=4)


def test_level_count_bounds():
    with pytest.raises(ValidationError):
        ClusterTopology(levels=[])
    with pytest.raises(ValidationError):
        ClusterTopology(levels=_levels(1, 1, 1, 1, 1, 1))
    assert ClusterTopology(levels=_levels(1, 1, 1, 1, 1)).node_count == 1


def test_child_count_bounds():
    assert ClusterTopology(levels=_levels(10, 100)).node_count == 1000
    with pytest.raises(ValidationError, match="at most 10 children"):
        ClusterTopology(levels=_levels(11, 3))
    with pytest.raises(ValidationError, match="at most 100 children"):
        ClusterTopology(levels=_levels(3, 101))
    with pytest.raises(ValidationError):
        LevelSpec(child_count=0)


def test_topology_dump_has_derived_fields():
    dumped = ClusterTopology().model_dump()
    assert dumped["node_count"] == 81
    assert dumped["allowable_dead"] == 1
    assert dumped["under_replicated"] is False
    assert dumped["levels"][0] == {"name": "Region", "child_count": 3}


def test_schema_has_descriptions():
    schema = ClusterTopology.model_json_schema()
    assert "odd" in schema["properties"]["replication_factor"]["description"]


def test_empty_failure_scenario():
    scenario = FailureScenario.empty(3, failure_granularity=2, budget=1)
    assert scenario.failures_per_level == [0, 0, 0]
    assert scenario.replicas_killed == 0
    assert scenario.domains_failed == 0
    assert scenario.budget == 1


def test_snapshot_round_trips_through_json():
    tree = DomainSnapshot(
        name="Region 1",
        depth=1,
        index=1,
        replicas=1,
        children=[
            DomainSnapshot(
                name="Node 1",
                depth=2,
                index=1,
                replicas=1,
                failed=True,
                state=DomainState.failed,
            )
        ],
    )
    assert DomainSnapshot.model_validate_json(tree.model_dump_json()) == tree
