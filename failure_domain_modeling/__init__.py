from failure_domain_modeling.failure import simulate_failure
from failure_domain_modeling.interface import ClusterTopology
from failure_domain_modeling.interface import FailureScenario
from failure_domain_modeling.interface import InvalidTopologyShape
from failure_domain_modeling.interface import LevelSpec
from failure_domain_modeling.interface import TopologyReport
from failure_domain_modeling.planner import plan_topology
from failure_domain_modeling.replication import distribute_replicas
from failure_domain_modeling.topology import build_topology
from failure_domain_modeling.topology import DomainNode

__all__ = [
    "build_topology",
    "distribute_replicas",
    "simulate_failure",
    "plan_topology",
    "ClusterTopology",
    "DomainNode",
    "FailureScenario",
    "InvalidTopologyShape",
    "LevelSpec",
    "TopologyReport",
]
