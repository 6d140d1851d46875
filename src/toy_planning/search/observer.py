"""Observers notified by the search driver at fixed extension points.

The driver itself never prints; tracing, statistics collection or progress
reporting are plugged in through these hooks.
"""

import logging
from typing import List, Optional, Sequence

from toy_planning.core.contract import Action, PlanStep, State

logger = logging.getLogger(__name__)


class SearchObserver:
    """Base observer; every hook is a no-op."""

    def on_search_started(self, initial_state: State, strategy: str) -> None:
        pass

    def on_node_popped(self, entry) -> None:
        pass

    def on_child_accepted(self, parent, child) -> None:
        pass

    def on_child_discarded(self, parent, action: Action, state: State) -> None:
        """Called when a child state was already discovered earlier."""
        pass

    def on_dead_end(self, entry) -> None:
        pass

    def on_goal_reached(self, entry, plan: List[PlanStep]) -> None:
        pass

    def on_search_finished(self, result) -> None:
        pass


NullObserver = SearchObserver


class LoggingObserver(SearchObserver):
    """Traces the exploration through the standard logging module."""

    def __init__(self, log: Optional[logging.Logger] = None, level: int = logging.DEBUG):
        self.log = log or logger
        self.level = level

    def on_search_started(self, initial_state: State, strategy: str) -> None:
        self.log.info(f"Starting {strategy} search from {initial_state!r}")

    def on_node_popped(self, entry) -> None:
        self.log.log(self.level, f"Exploring state {entry.id}: {entry.state!r}")

    def on_child_accepted(self, parent, child) -> None:
        self.log.log(self.level, f"  Applicable: {child.action!r} leads to state {child.state!r}")

    def on_child_discarded(self, parent, action: Action, state: State) -> None:
        self.log.log(self.level, f"  Ignored:    {action!r} (already discovered)")

    def on_dead_end(self, entry) -> None:
        self.log.log(self.level, f"  Dead end: state {entry.id} could not be expanded")

    def on_goal_reached(self, entry, plan: List[PlanStep]) -> None:
        self.log.log(self.level, f"  Goal reached at state {entry.id}")

    def on_search_finished(self, result) -> None:
        self.log.info(
            f"Search finished: {result.termination_reason} after expanding "
            f"{result.nodes_expanded} nodes ({result.nodes_generated} generated, "
            f"{result.duplicates_discarded} duplicates) in {result.computation_time:.4f}s"
        )


class CompositeObserver(SearchObserver):
    """Forwards every notification to a list of observers."""

    def __init__(self, observers: Sequence[SearchObserver]):
        self.observers = list(observers)

    def on_search_started(self, initial_state, strategy):
        for observer in self.observers:
            observer.on_search_started(initial_state, strategy)

    def on_node_popped(self, entry):
        for observer in self.observers:
            observer.on_node_popped(entry)

    def on_child_accepted(self, parent, child):
        for observer in self.observers:
            observer.on_child_accepted(parent, child)

    def on_child_discarded(self, parent, action, state):
        for observer in self.observers:
            observer.on_child_discarded(parent, action, state)

    def on_dead_end(self, entry):
        for observer in self.observers:
            observer.on_dead_end(entry)

    def on_goal_reached(self, entry, plan):
        for observer in self.observers:
            observer.on_goal_reached(entry, plan)

    def on_search_finished(self, result):
        for observer in self.observers:
            observer.on_search_finished(result)
