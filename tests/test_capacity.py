import pytest
from pytest import approx

from failure_domain_modeling.capacity import estimate_cluster_capacity
from failure_domain_modeling.interface import NodeResources


def test_scales_per_node_resources():
    resources = NodeResources(cpu_cores=8, ram_gib=32, disk_gib=1000, iops=3000)
    capacity = estimate_cluster_capacity(81, 3, resources)

    assert capacity.node_count == 81
    assert capacity.cpu_cores == 648
    assert capacity.ram_gib == approx(2592)
    assert capacity.disk_gib == approx(81000)
    assert capacity.iops == 243000
    assert capacity.usable_disk_gib == approx(27000)


def test_empty_resources():
    capacity = estimate_cluster_capacity(9, 5, NodeResources())
    assert capacity.cpu_cores == 0
    assert capacity.usable_disk_gib == 0


def test_invalid_arguments():
    with pytest.raises(ValueError):
        estimate_cluster_capacity(-1, 3, NodeResources())
    with pytest.raises(ValueError):
        estimate_cluster_capacity(3, 0, NodeResources())
