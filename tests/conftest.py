from typing import Sequence

import pytest

from failure_domain_modeling.replication import distribute_replicas
from failure_domain_modeling.topology import build_topology
from failure_domain_modeling.topology import DomainNode


@pytest.fixture
def placed():
    """Build a topology from child counts and place one range on it"""

    def _placed(child_counts: Sequence[int], replication_factor: int) -> DomainNode:
        root = build_topology(child_counts)
        distribute_replicas(root, replication_factor)
        return root

    return _placed
