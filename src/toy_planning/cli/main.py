"""Main CLI entry point for toy-planning."""

import sys
import argparse
import logging
from typing import List, Optional

from toy_planning.search.errors import InvariantViolation

from . import commands
from .utils import setup_logging, positive_int, non_negative_int


def _add_search_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        '--strategy', '-s',
        choices=['bfs', 'dfs'],
        help='Exploration order: breadth-first (shortest plan) or depth-first '
             '(default: search.strategy from the configuration)'
    )
    parser.add_argument(
        '--max-nodes',
        type=positive_int,
        help='Stop after expanding this many nodes (default: unlimited)'
    )
    parser.add_argument(
        '--timeout', '-t',
        type=float,
        help='Stop after this many seconds (default: unlimited)'
    )
    parser.add_argument(
        '--no-color',
        action='store_true',
        help='Disable colored output'
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog='toy-planning',
        description='Toy planning - state-space search for river crossing puzzles',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  toy-planning humans-and-zombies                     # 3 humans, 3 zombies, boat of 2
  toy-planning humans-and-zombies -H 4 -Z 4 -B 3      # Bigger instance
  toy-planning bridge-and-torch --people 1 2 5 8 --fuel 15
  toy-planning -vv wolf-goat-cabbage --strategy dfs   # Trace the exploration
  toy-planning config show                            # Show current configuration
        """
    )

    # Global options
    parser.add_argument(
        '--config', '-c',
        action='append',
        help='Configuration override, may be repeated (e.g., search.strategy=dfs)'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='count',
        default=0,
        help='Increase verbosity (use -v or -vv)'
    )

    parser.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='Suppress all output except results'
    )

    parser.add_argument(
        '--output', '-o',
        type=str,
        help='Output file for results (JSON format)'
    )

    subparsers = parser.add_subparsers(
        dest='command',
        help='Available commands',
        metavar='COMMAND'
    )

    # Humans and zombies
    hz_parser = subparsers.add_parser(
        'humans-and-zombies',
        help='Humans and zombies river crossing',
        description='Zombies must never outnumber the humans on either bank'
    )
    hz_parser.add_argument(
        '--humans', '-H',
        type=positive_int,
        metavar='COUNT',
        help='The number of humans on the river bank (default: 3)'
    )
    hz_parser.add_argument(
        '--zombies', '-Z',
        type=positive_int,
        metavar='COUNT',
        help='The number of zombies on the river bank (default: 3)'
    )
    hz_parser.add_argument(
        '--boat', '-B',
        type=positive_int,
        metavar='COUNT',
        help='The capacity of the boat (default: 2)'
    )
    _add_search_options(hz_parser)

    # Wolf, goat and cabbage
    wgc_parser = subparsers.add_parser(
        'wolf-goat-cabbage',
        help='Wolf, goat and cabbage river crossing',
        description='A farmer must bring wolves, goats and cabbages across the river'
    )
    for name, default in [('farmers', 1), ('wolves', 1), ('goats', 1), ('cabbages', 1)]:
        wgc_parser.add_argument(
            f'--{name}',
            type=positive_int,
            metavar='COUNT',
            help=f'The number of {name} on the river bank (default: {default})'
        )
    wgc_parser.add_argument(
        '--boat', '-B',
        type=positive_int,
        metavar='COUNT',
        help='The capacity of the boat (default: 2)'
    )
    _add_search_options(wgc_parser)

    # Bridge and torch
    bt_parser = subparsers.add_parser(
        'bridge-and-torch',
        help='Bridge and torch crossing',
        description='Cross a bridge at night before the torch burns out'
    )
    bt_parser.add_argument(
        '--people', '-p',
        type=positive_int,
        nargs='+',
        metavar='MINUTES',
        help='Walking time of each person (default: 1 2 5 8)'
    )
    bt_parser.add_argument(
        '--fuel', '-f',
        type=non_negative_int,
        metavar='MINUTES',
        help='How long the torch burns (default: 15)'
    )
    bt_parser.add_argument(
        '--capacity', '-B',
        type=positive_int,
        metavar='COUNT',
        help='How many people the bridge holds (default: 2)'
    )
    _add_search_options(bt_parser)

    # Config command
    config_parser = subparsers.add_parser(
        'config',
        help='Configuration management',
        description='Inspect the configuration'
    )
    config_subparsers = config_parser.add_subparsers(
        dest='config_action',
        help='Configuration actions'
    )
    config_subparsers.add_parser('show', help='Show current configuration')
    config_subparsers.add_parser('validate', help='Validate configuration')
    config_subparsers.add_parser('dump', help='Print configuration as JSON')
    save_parser = config_subparsers.add_parser('save', help='Save configuration as YAML')
    save_parser.add_argument('path', help='Output YAML file')

    return parser


def main_cli(args: Optional[List[str]] = None) -> int:
    """Main CLI entry point.

    Args:
        args: Command line arguments (uses sys.argv if None)

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    # Setup logging based on verbosity
    if parsed_args.quiet:
        log_level = logging.ERROR
    elif parsed_args.verbose == 0:
        log_level = logging.WARNING
    elif parsed_args.verbose == 1:
        log_level = logging.INFO
    else:
        log_level = logging.DEBUG

    setup_logging(log_level)
    logger = logging.getLogger(__name__)

    if not parsed_args.command:
        parser.print_help()
        return 1

    try:
        if parsed_args.command in commands.PUZZLE_OPTIONS:
            return commands.solve_command(parsed_args)
        if parsed_args.command == 'config':
            return commands.config_command(parsed_args)

        logger.error(f"Unknown command: {parsed_args.command}")
        return 1

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130  # Standard exit code for SIGINT
    except InvariantViolation as e:
        logger.critical(f"Search aborted: {e}")
        return 2
    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        return 1


def main() -> None:
    """Entry point for console script."""
    sys.exit(main_cli())


if __name__ == '__main__':
    main()
