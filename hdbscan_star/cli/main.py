"""Main CLI entry point."""

import argparse
import logging
import sys

from ..config import METRIC_ALIASES, SUPPORTED_METRICS
from ..config.constants import LOG_FORMAT
from ..utils.logging import set_package_level
from .base import add_common_arguments
from .commands import ClusterCommand


def create_parser():
    """Create argument parser for CLI."""
    parser = argparse.ArgumentParser(
        description='Hierarchical density-based clustering (HDBSCAN*) with outlier scores'
    )

    add_common_arguments(parser)

    subparsers = parser.add_subparsers(
        dest='command',
        help='Available commands'
    )

    cluster_parser = subparsers.add_parser(
        'cluster',
        help='Cluster vectors or a distance matrix'
    )
    cluster_parser.add_argument(
        '--input', '-i',
        required=True,
        help='JSON file with feature vectors or a distance matrix'
    )
    cluster_parser.add_argument(
        '--output', '-o',
        required=True,
        help='Output directory for results'
    )
    cluster_parser.add_argument(
        '--distance-matrix',
        action='store_true',
        help='Treat the input as a precomputed distance matrix'
    )
    cluster_parser.add_argument(
        '--metric', '-m',
        choices=SUPPORTED_METRICS + list(METRIC_ALIASES),
        help='Distance metric for feature vectors'
    )
    cluster_parser.add_argument(
        '--min-points', '-k',
        type=int,
        help='Neighborhood size for core distances'
    )
    cluster_parser.add_argument(
        '--min-cluster-size',
        type=int,
        help='Smallest component that counts as a cluster'
    )
    cluster_parser.add_argument(
        '--constraints', '-c',
        help='CSV file with pointA,pointB,ml|cl constraints'
    )
    cluster_parser.add_argument(
        '--no-self-edges',
        action='store_true',
        help='Do not add self-edges to the spanning tree'
    )
    cluster_parser.add_argument(
        '--config-file',
        help='JSON file with HDBSCAN* parameters'
    )

    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.quiet:
        args.log_level = 'ERROR'
    level = args.log_level
    logging.basicConfig(level=getattr(logging, level), format=LOG_FORMAT)
    set_package_level(level)

    if args.command == 'cluster':
        command = ClusterCommand(args)
    else:
        parser.print_help()
        sys.exit(1)

    try:
        command.execute()
    except Exception as e:
        logging.error(f"Command failed: {e}", exc_info=True)
        sys.exit(1)


if __name__ == '__main__':
    main()
