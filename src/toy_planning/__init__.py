"""State-space search for river-crossing planning puzzles."""

__version__ = "0.1.0"

from .core.contract import State, Action, PlanStep
from .search import PlanSearcher, SearchConfig, SearchResult, create_searcher, search

__all__ = [
    '__version__',
    'State',
    'Action',
    'PlanStep',
    'PlanSearcher',
    'SearchConfig',
    'SearchResult',
    'create_searcher',
    'search'
]
