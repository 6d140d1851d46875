"""Command-line interface for toy-planning.

This module provides one CLI command per puzzle plus configuration helpers.
"""

from .main import main_cli
from .commands import solve_command, config_command, PuzzleSolver
from .utils import setup_logging, save_results, render_plan

__all__ = [
    'main_cli',
    'solve_command',
    'config_command',
    'PuzzleSolver',
    'setup_logging',
    'save_results',
    'render_plan'
]
