import logging

from failure_domain_modeling.interface import ClusterCapacity
from failure_domain_modeling.interface import NodeResources

logger = logging.getLogger(__name__)


def estimate_cluster_capacity(
    node_count: int, replication_factor: int, resources: NodeResources
) -> ClusterCapacity:
    """Scale per node resources up to the whole topology

    Every replica of the data takes disk, so only 1 / RF of the raw disk
    holds distinct data.
    """
    if node_count < 0:
        raise ValueError(f"node_count must not be negative, got {node_count}")
    if replication_factor < 1:
        raise ValueError(
            f"replication_factor must be at least 1, got {replication_factor}"
        )

    disk_gib = node_count * resources.disk_gib
    capacity = ClusterCapacity(
        node_count=node_count,
        cpu_cores=node_count * resources.cpu_cores,
        ram_gib=node_count * resources.ram_gib,
        disk_gib=disk_gib,
        iops=node_count * resources.iops,
        usable_disk_gib=disk_gib / replication_factor,
    )
    logger.debug(
        "Need (cpu, mem, disk, usable) = (%s, %s, %s, %f)",
        capacity.cpu_cores,
        capacity.ram_gib,
        capacity.disk_gib,
        capacity.usable_disk_gib,
    )
    return capacity
