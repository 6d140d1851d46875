"""CLI utility functions."""

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from toy_planning.core.contract import PlanStep

# ANSI color codes
YELLOW = "\033[93m"
RED = "\033[91m"
RESET = "\033[0m"


def setup_logging(level: int = logging.INFO,
                  format_string: Optional[str] = None) -> None:
    """Setup logging configuration.

    Args:
        level: Logging level
        format_string: Custom format string
    """
    if format_string is None:
        if level <= logging.DEBUG:
            format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_string = "%(levelname)s: %(message)s"

    logging.basicConfig(
        level=level,
        format=format_string,
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True
    )

    # Hydra is chatty at DEBUG
    logging.getLogger('hydra').setLevel(logging.WARNING)


def supports_color(stream=None) -> bool:
    """Check if the stream is a terminal that supports color output."""
    stream = stream if stream is not None else sys.stdout
    if os.getenv("NO_COLOR"):
        return False
    if os.getenv("FORCE_COLOR"):
        return True
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def colorize(text: str, color_code: str, enabled: bool = True) -> str:
    """Wrap text in an ANSI color code if enabled."""
    if enabled:
        return f"{color_code}{text}{RESET}"
    return text


def positive_int(value: str) -> int:
    """argparse type for strictly positive integers."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer value: '{value}'") from None
    if number <= 0:
        raise argparse.ArgumentTypeError("value must be positive")
    return number


def non_negative_int(value: str) -> int:
    """argparse type for integers >= 0."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer value: '{value}'") from None
    if number < 0:
        raise argparse.ArgumentTypeError("value must not be negative")
    return number


def render_plan(plan: List[PlanStep], color: bool = False) -> List[str]:
    """Render a plan as output lines.

    Each action is printed (highlighted if ``color``) above the state it
    produced; the initial state has no action.

    Args:
        plan: Plan steps from the initial state to the goal
        color: Highlight actions with ANSI colors

    Returns:
        Lines to print
    """
    lines = []
    for action, state in plan:
        if action is not None:
            lines.append("  " + colorize(action.pretty_print(state), YELLOW, color))
        lines.append("  " + state.pretty_print())
    return lines


def save_results(results: Dict[str, Any],
                 output_path: Union[str, Path],
                 pretty: bool = True) -> None:
    """Save results to JSON file.

    Args:
        results: Results dictionary
        output_path: Output file path
        pretty: Whether to pretty-print JSON
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w', encoding='utf-8') as f:
        if pretty:
            json.dump(results, f, indent=2, sort_keys=True, ensure_ascii=False)
        else:
            json.dump(results, f, ensure_ascii=False)


def format_duration(seconds: float) -> str:
    """Format duration in human-readable format.

    Args:
        seconds: Duration in seconds

    Returns:
        Formatted duration string
    """
    if seconds < 0.001:
        return f"{seconds*1000000:.1f}µs"
    elif seconds < 1:
        return f"{seconds*1000:.1f}ms"
    elif seconds < 60:
        return f"{seconds:.2f}s"
    else:
        minutes = int(seconds // 60)
        secs = seconds % 60
        return f"{minutes}m {secs:.1f}s"
