import logging

from failure_domain_modeling.topology import DomainNode

logger = logging.getLogger(__name__)


def distribute_replicas(node: DomainNode, replicas: int) -> None:
    """Spread the replicas of one range across the subtree rooted at node

    Every parent splits its replicas as evenly as possible between its
    children, earlier children get the extra replica when it does not
    divide evenly. So 5 replicas over 3 regions lands as [2, 2, 1] and each
    region then splits its share the same way over its own children.

    The tree is modified in place.
    """
    if replicas < 0:
        raise ValueError(f"Cannot place a negative number of replicas: {replicas}")

    node.replica_count = replicas
    if not node.children:
        return

    base, remainder = divmod(replicas, len(node.children))
    for position, child in enumerate(node.children):
        share = base + 1 if position < remainder else base
        # Shares never grow along the siblings
        if share == 0:
            break
        distribute_replicas(child, share)

    if node.depth == 0:
        logger.debug(
            "Placed %d replicas over %d top level domains as %s",
            replicas,
            len(node.children),
            [child.replica_count for child in node.children],
        )
