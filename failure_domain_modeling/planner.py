# -*- coding: utf-8 -*-
import logging
from typing import Optional

from failure_domain_modeling.capacity import estimate_cluster_capacity
from failure_domain_modeling.failure import simulate_failure
from failure_domain_modeling.interface import ClusterTopology
from failure_domain_modeling.interface import FailureScenario
from failure_domain_modeling.interface import NodeResources
from failure_domain_modeling.interface import TopologyReport
from failure_domain_modeling.replication import distribute_replicas
from failure_domain_modeling.topology import build_topology
from failure_domain_modeling.topology import DomainNode
from failure_domain_modeling.topology import snapshot

logger = logging.getLogger(__name__)


def place_replicas(topology: ClusterTopology) -> DomainNode:
    """Build the tree for a topology and place one range on it"""
    root = build_topology(topology.levels)
    distribute_replicas(root, topology.replication_factor)
    return root


def plan_topology(
    topology: ClusterTopology,
    failure_granularity: int = 0,
    node_resources: Optional[NodeResources] = None,
    include_tree: bool = True,
) -> TopologyReport:
    """Place a range on the topology and find the worst survivable outage

    Args:
        topology: The validated cluster shape and replication factor
        failure_granularity: Shallowest depth that may fail as a whole,
            1 is the outermost level and 0 turns the simulation off
        node_resources: Per node assumptions for the capacity summary
        include_tree: Attach a snapshot of every domain to the report

    Returns:
        A TopologyReport. An under replicated topology still gets its
        replicas placed but no failures are simulated.
    """
    level_count = len(topology.levels)
    if not 0 <= failure_granularity <= level_count:
        raise ValueError(
            f"failure_granularity must be between 0 and {level_count}, "
            f"got {failure_granularity}"
        )

    root = place_replicas(topology)

    if topology.under_replicated:
        logger.info(
            "Topology with %d nodes is under replicated for RF=%d",
            topology.node_count,
            topology.replication_factor,
        )
        failure = FailureScenario.empty(
            level_count,
            failure_granularity=failure_granularity,
            budget=topology.allowable_dead,
        )
    else:
        failure = simulate_failure(
            root, failure_granularity, budget=topology.allowable_dead
        )

    capacity = None
    if node_resources is not None:
        capacity = estimate_cluster_capacity(
            topology.node_count, topology.replication_factor, node_resources
        )

    return TopologyReport(
        topology=topology,
        failure=failure,
        domains=(
            [snapshot(domain, topology.level_names) for domain in root.children]
            if include_tree
            else []
        ),
        capacity=capacity,
        message=topology.under_replicated_message(),
    )
