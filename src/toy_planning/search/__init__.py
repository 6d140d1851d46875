"""Search engine for deterministic, finite planning problems.

This package implements uninformed frontier search (breadth-first or
depth-first) with fingerprint-based duplicate suppression and an append-only
lineage store for plan reconstruction.
"""

from .frontier import Frontier, FifoFrontier, LifoFrontier, create_frontier
from .lineage import LineageEntry, LineageStore
from .dedup import DeduplicationSet
from .observer import SearchObserver, NullObserver, LoggingObserver, CompositeObserver
from .errors import SearchError, InvariantViolation, LineageError, ModelContractError
from .driver import PlanSearcher, SearchConfig, SearchResult, SearchStatistics, create_searcher, search

__all__ = [
    'Frontier',
    'FifoFrontier',
    'LifoFrontier',
    'create_frontier',
    'LineageEntry',
    'LineageStore',
    'DeduplicationSet',
    'SearchObserver',
    'NullObserver',
    'LoggingObserver',
    'CompositeObserver',
    'SearchError',
    'InvariantViolation',
    'LineageError',
    'ModelContractError',
    'PlanSearcher',
    'SearchConfig',
    'SearchResult',
    'SearchStatistics',
    'create_searcher',
    'search'
]
