"""Configuration validation for toy-planning."""

import logging
from typing import Any, List
from omegaconf import DictConfig

logger = logging.getLogger(__name__)

VALID_STRATEGIES = ('bfs', 'dfs', 'fifo', 'lifo')


class ConfigValidationError(Exception):
    """Exception raised when configuration validation fails."""
    pass


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_config(config: DictConfig) -> None:
    """Validate the complete configuration.

    Args:
        config: Configuration to validate

    Raises:
        ConfigValidationError: If validation fails
    """
    validate_search_config(config.get('search', {}))
    validate_output_config(config.get('output', {}))
    validate_puzzles_config(config.get('puzzles', {}))

    for issue in check_config_consistency(config):
        logger.warning(issue)

    logger.debug("Configuration validation passed")


def validate_search_config(search_config: DictConfig) -> None:
    """Validate search configuration section.

    Args:
        search_config: Search configuration section
    """
    if not search_config:
        return

    strategy = search_config.get('strategy', 'bfs')
    if not isinstance(strategy, str) or strategy.lower() not in VALID_STRATEGIES:
        raise ConfigValidationError(
            f"search.strategy must be one of {VALID_STRATEGIES}, got {strategy}"
        )

    max_nodes = search_config.get('max_nodes_expanded', None)
    if max_nodes is not None and (not _is_int(max_nodes) or max_nodes <= 0):
        raise ConfigValidationError(
            f"search.max_nodes_expanded must be positive integer or null, got {max_nodes}"
        )

    max_time = search_config.get('max_computation_time', None)
    if max_time is not None and (not _is_number(max_time) or max_time <= 0):
        raise ConfigValidationError(
            f"search.max_computation_time must be positive number or null, got {max_time}"
        )


def validate_output_config(output_config: DictConfig) -> None:
    """Validate output configuration section."""
    if not output_config:
        return

    for key in ['color', 'show_stats']:
        value = output_config.get(key, True)
        if not isinstance(value, bool):
            raise ConfigValidationError(f"output.{key} must be boolean, got {value}")


def _validate_counts(section: str, puzzle_config: DictConfig, keys: List[str]) -> None:
    for key in keys:
        value = puzzle_config.get(key, 0)
        if not _is_int(value) or value < 0:
            raise ConfigValidationError(
                f"puzzles.{section}.{key} must be non-negative integer, got {value}"
            )


def validate_puzzles_config(puzzles_config: DictConfig) -> None:
    """Validate the per-puzzle default parameters.

    Args:
        puzzles_config: Puzzles configuration section
    """
    if not puzzles_config:
        return

    hz_config = puzzles_config.get('humans_and_zombies', {})
    if hz_config:
        _validate_counts('humans_and_zombies', hz_config, ['humans', 'zombies', 'boat'])

    wgc_config = puzzles_config.get('wolf_goat_cabbage', {})
    if wgc_config:
        _validate_counts('wolf_goat_cabbage', wgc_config,
                         ['farmers', 'wolves', 'goats', 'cabbages', 'boat'])

    bt_config = puzzles_config.get('bridge_and_torch', {})
    if bt_config:
        _validate_counts('bridge_and_torch', bt_config, ['fuel', 'capacity'])
        people = bt_config.get('people', [])
        if people is None or isinstance(people, (str, bytes)):
            raise ConfigValidationError(
                f"puzzles.bridge_and_torch.people must be a list of walking times, got {people}"
            )
        for walking_time in people:
            if not _is_int(walking_time) or walking_time <= 0:
                raise ConfigValidationError(
                    f"puzzles.bridge_and_torch.people must contain positive integers, got {walking_time}"
                )


def check_config_consistency(config: DictConfig) -> List[str]:
    """Check for settings that are valid but leave a puzzle unsolvable.

    Args:
        config: Configuration to check

    Returns:
        List of consistency issues
    """
    issues = []
    puzzles = config.get('puzzles', {}) or {}

    hz_config = puzzles.get('humans_and_zombies', {}) or {}
    if hz_config.get('boat', 2) == 0:
        issues.append("puzzles.humans_and_zombies.boat is 0, the puzzle has no solution")
    humans = hz_config.get('humans', 3)
    zombies = hz_config.get('zombies', 3)
    if 0 < humans < zombies:
        issues.append(
            f"puzzles.humans_and_zombies starts with zombies outnumbering humans "
            f"({zombies} > {humans})"
        )

    wgc_config = puzzles.get('wolf_goat_cabbage', {}) or {}
    if wgc_config.get('farmers', 1) == 0 or wgc_config.get('boat', 2) == 0:
        issues.append("puzzles.wolf_goat_cabbage has nobody to steer the boat")

    bt_config = puzzles.get('bridge_and_torch', {}) or {}
    if bt_config.get('capacity', 2) == 0:
        issues.append("puzzles.bridge_and_torch.capacity is 0, the puzzle has no solution")

    return issues
