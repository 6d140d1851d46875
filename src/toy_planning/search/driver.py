"""Uninformed state-space search for river-crossing style planning problems.

This module implements the search driver: it pops lineage entries from a
frontier, tests them against the goal, expands them through the puzzle
model, suppresses already discovered states and finally backtracks the plan
through the lineage store.
"""

import time
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from toy_planning.core.contract import PlanStep, State
from .dedup import DeduplicationSet
from .errors import ModelContractError
from .frontier import FRONTIERS, create_frontier
from .lineage import LineageEntry, LineageStore
from .observer import LoggingObserver, SearchObserver

logger = logging.getLogger(__name__)


@dataclass
class SearchConfig:
    """Configuration for the search driver."""
    strategy: str = 'bfs'  # 'bfs' (FIFO frontier) or 'dfs' (LIFO frontier)
    max_nodes_expanded: Optional[int] = None  # None means unlimited
    max_computation_time: Optional[float] = None  # seconds, None means unlimited

    def __post_init__(self) -> None:
        if self.strategy.lower() not in FRONTIERS:
            raise ValueError(f"Unknown search strategy '{self.strategy}'")
        if self.max_nodes_expanded is not None and self.max_nodes_expanded <= 0:
            raise ValueError(f"max_nodes_expanded must be positive, got {self.max_nodes_expanded}")
        if self.max_computation_time is not None and self.max_computation_time <= 0:
            raise ValueError(f"max_computation_time must be positive, got {self.max_computation_time}")

    @classmethod
    def from_config(cls, cfg) -> 'SearchConfig':
        """Build a search configuration from the ``search`` config group.

        Args:
            cfg: Full configuration (DictConfig or dict) or its ``search`` group
        """
        search_cfg = cfg.get('search', cfg) if cfg is not None else {}
        if search_cfg is None:
            search_cfg = {}
        max_nodes = search_cfg.get('max_nodes_expanded', None)
        max_time = search_cfg.get('max_computation_time', None)
        return cls(
            strategy=str(search_cfg.get('strategy', 'bfs')),
            max_nodes_expanded=int(max_nodes) if max_nodes is not None else None,
            max_computation_time=float(max_time) if max_time is not None else None
        )


@dataclass
class SearchStatistics:
    """Counters collected during one search run."""
    nodes_expanded: int = 0
    nodes_generated: int = 0
    duplicates_discarded: int = 0
    dead_ends: int = 0
    max_depth_reached: int = 0
    average_branching_factor: float = 0.0

    def update_branching_factor(self, new_children: int) -> None:
        """Update the running mean of new children per expanded node."""
        if self.nodes_expanded > 0:
            self.average_branching_factor = (
                (self.average_branching_factor * (self.nodes_expanded - 1) + new_children)
                / self.nodes_expanded
            )
        else:
            self.average_branching_factor = float(new_children)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'nodes_expanded': self.nodes_expanded,
            'nodes_generated': self.nodes_generated,
            'duplicates_discarded': self.duplicates_discarded,
            'dead_ends': self.dead_ends,
            'max_depth_reached': self.max_depth_reached,
            'average_branching_factor': self.average_branching_factor
        }


@dataclass
class SearchResult:
    """Result of a search run."""
    success: bool
    plan: Optional[List[PlanStep]] = None
    termination_reason: str = "unknown"
    strategy: str = 'bfs'
    nodes_expanded: int = 0
    nodes_generated: int = 0
    duplicates_discarded: int = 0
    dead_ends: int = 0
    max_depth_reached: int = 0
    computation_time: float = 0.0
    statistics: Dict[str, Any] = field(default_factory=dict)

    @property
    def plan_length(self) -> Optional[int]:
        """Number of actions in the plan, None if no plan was found."""
        if self.plan is None:
            return None
        return len(self.plan) - 1

    def to_dict(self, render: bool = True) -> Dict[str, Any]:
        """Convert the result into a JSON-serializable dictionary.

        Args:
            render: Use the models' pretty printers instead of repr()
        """
        steps = None
        if self.plan is not None:
            steps = []
            for action, state in self.plan:
                if render:
                    steps.append({
                        'action': action.pretty_print(state).strip() if action is not None else None,
                        'state': state.pretty_print()
                    })
                else:
                    steps.append({
                        'action': repr(action) if action is not None else None,
                        'state': repr(state)
                    })

        return {
            'success': self.success,
            'termination_reason': self.termination_reason,
            'strategy': self.strategy,
            'plan_length': self.plan_length,
            'plan': steps,
            'search_stats': {
                'nodes_expanded': self.nodes_expanded,
                'nodes_generated': self.nodes_generated,
                'duplicates_discarded': self.duplicates_discarded,
                'dead_ends': self.dead_ends,
                'max_depth_reached': self.max_depth_reached,
                'average_branching_factor': self.statistics.get('average_branching_factor', 0.0)
            },
            'computation_time': self.computation_time
        }


class PlanSearcher:
    """Frontier search with duplicate suppression and lineage tracking."""

    def __init__(self, config: Optional[SearchConfig] = None,
                 observer: Optional[SearchObserver] = None):
        """Initialize the searcher.

        Args:
            config: Search configuration parameters
            observer: Receives exploration events; defaults to a LoggingObserver
        """
        self.config = config or SearchConfig()
        self.observer = observer if observer is not None else LoggingObserver()
        self.statistics = SearchStatistics()

        logger.debug(f"Plan searcher initialized with strategy={self.config.strategy}, "
                     f"max_nodes={self.config.max_nodes_expanded}, "
                     f"max_time={self.config.max_computation_time}")

    def search(self, initial_state: State) -> SearchResult:
        """Search the state space reachable from ``initial_state`` for a goal.

        Args:
            initial_state: Starting configuration

        Returns:
            SearchResult with the plan (on success) and statistics

        Raises:
            ModelContractError: If the model enumerates an action it rejects
            LineageError: If the lineage store is corrupted
        """
        start_time = time.perf_counter()
        self.statistics = SearchStatistics()
        strategy = self.config.strategy.lower()
        self.observer.on_search_started(initial_state, strategy)

        observed = DeduplicationSet()
        observed.insert(initial_state.fingerprint())
        history: LineageStore = LineageStore()
        root = history.create_root(initial_state)
        self.statistics.nodes_generated = 1
        # depth by lineage id
        depths = [0]

        frontier = create_frontier(strategy)
        frontier.push(root)

        deadline = None
        if self.config.max_computation_time is not None:
            deadline = start_time + self.config.max_computation_time

        termination_reason = "exhausted"
        plan = None

        while frontier:
            if deadline is not None and time.perf_counter() > deadline:
                termination_reason = "timeout"
                break

            current = frontier.pop()
            self.observer.on_node_popped(current)

            if current.state.is_goal():
                plan = history.backtrack(current)
                termination_reason = "goal_reached"
                self.observer.on_goal_reached(current, plan)
                break

            # Only expansions count against the budget.
            if (self.config.max_nodes_expanded is not None
                    and self.statistics.nodes_expanded >= self.config.max_nodes_expanded):
                termination_reason = "node_limit"
                break

            children = self._expand(current, observed, history)
            self.statistics.nodes_expanded += 1
            self.statistics.update_branching_factor(len(children))

            if not children:
                self.statistics.dead_ends += 1
                self.observer.on_dead_end(current)
                continue

            child_depth = depths[current.id] + 1
            self.statistics.max_depth_reached = max(self.statistics.max_depth_reached, child_depth)
            for child in children:
                depths.append(child_depth)
                frontier.push(child)

        result = SearchResult(
            success=plan is not None,
            plan=plan,
            termination_reason=termination_reason,
            strategy=strategy,
            nodes_expanded=self.statistics.nodes_expanded,
            nodes_generated=self.statistics.nodes_generated,
            duplicates_discarded=self.statistics.duplicates_discarded,
            dead_ends=self.statistics.dead_ends,
            max_depth_reached=self.statistics.max_depth_reached,
            computation_time=time.perf_counter() - start_time,
            statistics=self.statistics.to_dict()
        )
        self.observer.on_search_finished(result)
        return result

    def _expand(self, current: LineageEntry, observed: DeduplicationSet,
                history: LineageStore) -> List[LineageEntry]:
        """Expand a node into its not yet discovered children.

        Args:
            current: Entry to expand
            observed: Fingerprints discovered so far, updated in place
            history: Lineage store receiving the new children

        Returns:
            New lineage entries, in action enumeration order
        """
        state = current.state
        children = []
        for action in state.get_actions():
            # Enumeration and application are separate steps of the contract.
            if not action.is_applicable(state):
                raise ModelContractError(
                    f"{type(state).__name__}.get_actions() returned {action!r} "
                    f"which is not applicable to {state!r}"
                )

            new_state = action.apply(state)
            if not observed.insert(new_state.fingerprint()):
                self.statistics.duplicates_discarded += 1
                self.observer.on_child_discarded(current, action, new_state)
                continue

            child = history.create_entry(action, new_state, current)
            self.statistics.nodes_generated += 1
            self.observer.on_child_accepted(current, child)
            children.append(child)
        return children

    def get_search_stats(self) -> Dict[str, Any]:
        """Get statistics of the most recent search run."""
        return {
            **self.statistics.to_dict(),
            'config': {
                'strategy': self.config.strategy,
                'max_nodes_expanded': self.config.max_nodes_expanded,
                'max_computation_time': self.config.max_computation_time
            }
        }


def create_searcher(strategy: str = 'bfs',
                    max_nodes_expanded: Optional[int] = None,
                    max_computation_time: Optional[float] = None,
                    observer: Optional[SearchObserver] = None) -> PlanSearcher:
    """Factory function to create a plan searcher.

    Args:
        strategy: 'bfs' for breadth-first or 'dfs' for depth-first exploration
        max_nodes_expanded: Optional node expansion budget
        max_computation_time: Optional wall-clock budget in seconds
        observer: Optional search observer

    Returns:
        Configured PlanSearcher instance
    """
    config = SearchConfig(
        strategy=strategy,
        max_nodes_expanded=max_nodes_expanded,
        max_computation_time=max_computation_time
    )
    return PlanSearcher(config, observer=observer)


def search(initial_state: State, strategy: str = 'bfs',
           observer: Optional[SearchObserver] = None) -> Optional[List[PlanStep]]:
    """Search the state space for a plan.

    Args:
        initial_state: Starting configuration
        strategy: 'bfs' or 'dfs'
        observer: Optional search observer

    Returns:
        Plan steps from the initial state to a goal state, or None if no goal
        is reachable
    """
    result = create_searcher(strategy, observer=observer).search(initial_state)
    return result.plan
