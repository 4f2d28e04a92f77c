import argparse
import logging
import sys
from typing import List
from typing import Optional
from typing import Sequence

from failure_domain_modeling.interface import DEFAULT_CHILD_COUNT
from failure_domain_modeling.interface import DEFAULT_LEVEL_NAMES
from failure_domain_modeling.interface import DEFAULT_REPLICATION_FACTOR
from failure_domain_modeling.interface import NodeResources
from failure_domain_modeling.planner import plan_topology
from failure_domain_modeling.utils import normalize_topology

logger = logging.getLogger(__name__)


def parse_levels(inp: str) -> List[int]:
    """Parses strings like 3,3,3,3 to [3, 3, 3, 3]"""
    try:
        return [int(part.strip()) for part in inp.split(",")]
    except ValueError as e:
        raise argparse.ArgumentTypeError(
            "Levels should be comma separated child counts, outermost first. "
            "For example 3 regions of 3 DCs of 3 AZs of 3 nodes is 3,3,3,3."
        ) from e


def parse_names(inp: str) -> List[str]:
    return [part.strip() for part in inp.split(",")]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="failure-domains",
        description="Place one range on a failure domain topology and compute "
        "the worst outage that still keeps quorum",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--levels",
        type=parse_levels,
        default=[DEFAULT_CHILD_COUNT] * len(DEFAULT_LEVEL_NAMES),
        help="Comma separated children per parent for every level, the last "
        "level is nodes. Values are clamped to 1-10 (1-100 for nodes).",
    )
    parser.add_argument(
        "--names",
        type=parse_names,
        default=None,
        help="Comma separated display names for the levels, e.g. Region,DC,AZ,Node",
    )
    parser.add_argument(
        "--replication-factor",
        type=int,
        default=DEFAULT_REPLICATION_FACTOR,
        help="Copies of the range. Even values move to the neighbouring odd value.",
    )
    parser.add_argument(
        "--previous-replication-factor",
        type=int,
        default=None,
        help="The replication factor before this change, decides which way an "
        "even value is moved",
    )
    parser.add_argument(
        "--failure-granularity",
        type=int,
        default=1,
        help="Shallowest level that may fail as a whole, 1 is the outermost "
        "level and 0 disables the failure simulation",
    )
    parser.add_argument("--cpu-cores", type=int, default=None)
    parser.add_argument("--ram-gib", type=float, default=None)
    parser.add_argument("--disk-gib", type=float, default=None)
    parser.add_argument("--iops", type=int, default=None)
    parser.add_argument(
        "--no-tree",
        action="store_true",
        help="Leave the per domain breakdown out of the report",
    )
    parser.add_argument("--debug", action="store_true", help="Show verbose output")
    return parser


def _node_resources(args: argparse.Namespace) -> Optional[NodeResources]:
    given = {
        name: getattr(args, name)
        for name in ("cpu_cores", "ram_gib", "disk_gib", "iops")
        if getattr(args, name) is not None
    }
    if not given:
        return None
    return NodeResources(**given)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.debug else logging.WARNING)

    try:
        topology = normalize_topology(
            args.levels,
            args.replication_factor,
            previous_replication_factor=args.previous_replication_factor,
            names=args.names,
        )
        report = plan_topology(
            topology,
            failure_granularity=args.failure_granularity,
            node_resources=_node_resources(args),
            include_tree=not args.no_tree,
        )
    except ValueError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    if report.message is not None:
        print(f"WARNING: {report.message}", file=sys.stderr)
    print(report.model_dump_json(indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
