"""CLI command implementations."""

import json
import logging
import time
from typing import Any, Dict, List, Optional

from omegaconf import OmegaConf

from toy_planning import __version__
from toy_planning.config import (
    ConfigManager, load_config, get_parameter, validate_config, ConfigValidationError
)
from toy_planning.core.contract import State
from toy_planning.problems import build_initial_state
from toy_planning.search import PlanSearcher, SearchConfig, SearchResult

from .utils import save_results, format_duration, render_plan, supports_color, colorize, RED

logger = logging.getLogger(__name__)

# CLI option name -> config key under puzzles.<puzzle>
PUZZLE_OPTIONS = {
    'humans-and-zombies': ['humans', 'zombies', 'boat'],
    'wolf-goat-cabbage': ['farmers', 'wolves', 'goats', 'cabbages', 'boat'],
    'bridge-and-torch': ['people', 'fuel', 'capacity'],
}


def puzzle_config_key(puzzle: str) -> str:
    return puzzle.replace('-', '_')


class PuzzleSolver:
    """Wires configuration, puzzle models and the search engine together."""

    def __init__(self, config_overrides: Optional[List[str]] = None, config_dir=None):
        """Initialize the solver.

        Args:
            config_overrides: List of configuration overrides
            config_dir: Optional configuration directory
        """
        self.config = load_config(overrides=config_overrides or [], config_dir=config_dir)
        self.search_config = SearchConfig.from_config(self.config)
        self.searcher = PlanSearcher(self.search_config)

        logger.info(f"Puzzle solver initialized with strategy={self.search_config.strategy}")

    def build_initial_state(self, puzzle: str) -> State:
        """Build the initial state of a puzzle from the ``puzzles`` config group."""
        params = self.config.get('puzzles', {}).get(puzzle_config_key(puzzle), {})
        params = OmegaConf.to_container(params, resolve=True) if params else {}
        return build_initial_state(puzzle, **params)

    def solve(self, puzzle: str) -> SearchResult:
        """Search a plan for the configured instance of ``puzzle``."""
        initial_state = self.build_initial_state(puzzle)
        logger.info(f"Solving {puzzle}: {initial_state!r}")
        return self.searcher.search(initial_state)

    def get_stats(self) -> Dict[str, Any]:
        return {'search_stats': self.searcher.get_search_stats()}


def build_config_overrides(args) -> List[str]:
    """Translate parsed command line arguments into Hydra overrides."""
    overrides = []
    key = puzzle_config_key(args.command)

    for option in PUZZLE_OPTIONS.get(args.command, []):
        value = getattr(args, option, None)
        if value is None:
            continue
        if isinstance(value, list):
            value = "[" + ",".join(str(v) for v in value) + "]"
        overrides.append(f"puzzles.{key}.{option}={value}")

    if getattr(args, 'strategy', None):
        overrides.append(f"search.strategy={args.strategy}")
    if getattr(args, 'max_nodes', None) is not None:
        overrides.append(f"search.max_nodes_expanded={args.max_nodes}")
    if getattr(args, 'timeout', None) is not None:
        overrides.append(f"search.max_computation_time={args.timeout}")
    if getattr(args, 'no_color', False):
        overrides.append("output.color=false")

    # Global config overrides come last so they win
    if getattr(args, 'config', None):
        overrides.extend(args.config)

    return overrides


def solve_command(args) -> int:
    """Handle the puzzle subcommands.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code: 0 if a plan was found, 1 otherwise
    """
    try:
        solver = PuzzleSolver(build_config_overrides(args))
    except (ConfigValidationError, ValueError) as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    try:
        start_time = time.perf_counter()
        result = solver.solve(args.command)
        total_time = time.perf_counter() - start_time
    except (ValueError, KeyError) as e:
        logger.error(f"Failed to build puzzle '{args.command}': {e}")
        return 1

    color = bool(get_parameter('output.color', True)) and supports_color()
    show_stats = bool(get_parameter('output.show_stats', True))

    if result.success:
        print("\nSolution:\n")
        for line in render_plan(result.plan, color=color):
            print(line)
    elif result.termination_reason == "exhausted":
        print(colorize("No solution found.", RED, color))
    else:
        print(colorize(f"Search stopped before finding a solution: {result.termination_reason}",
                       RED, color))

    if show_stats and not args.quiet:
        print(f"\nStrategy: {result.strategy}")
        if result.success:
            print(f"Plan length: {result.plan_length}")
        print(f"Nodes expanded: {result.nodes_expanded}")
        print(f"Nodes generated: {result.nodes_generated}")
        print(f"Duplicates discarded: {result.duplicates_discarded}")
        print(f"Computation time: {format_duration(result.computation_time)}")

    if args.output:
        report = result.to_dict()
        report.update({
            'puzzle': args.command,
            'initial_state': repr(result.plan[0].state) if result.plan else None,
            'solver_version': __version__,
            'total_time': total_time,
            'timestamp': time.time()
        })
        save_results(report, args.output)
        logger.info(f"Results saved to {args.output}")

    return 0 if result.success else 1


def config_command(args) -> int:
    """Handle config command.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code
    """
    overrides = list(args.config or [])

    if args.config_action in ('show', 'save'):
        manager = ConfigManager()
        try:
            manager.load_config(overrides=overrides, validate=False)
        except Exception as e:
            logger.error(f"Config command failed: {e}")
            return 1

        if args.config_action == 'show':
            manager.print_config()
        else:
            manager.save_config(args.path)
            print(f"Configuration saved to {args.path}")
        return 0

    if args.config_action == 'validate':
        try:
            config = load_config(overrides=overrides, validate=False)
            validate_config(config)
        except ConfigValidationError as e:
            print(f"❌ Configuration validation failed: {e}")
            return 1
        except Exception as e:
            logger.error(f"Config command failed: {e}")
            return 1
        print("✅ Configuration is valid")
        return 0

    if args.config_action == 'dump':
        config = load_config(overrides=overrides, validate=False)
        print(json.dumps(OmegaConf.to_container(config, resolve=True), indent=2, sort_keys=True))
        return 0

    print("Unknown config action")
    return 1
