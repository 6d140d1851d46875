"""Tests for the search driver."""

from dataclasses import dataclass
from typing import Dict, List, Tuple

import pytest

from toy_planning.core.contract import Action, State
from toy_planning.search import (
    PlanSearcher, SearchConfig, SearchObserver, CompositeObserver, LoggingObserver,
    ModelContractError, create_searcher, search
)
from toy_planning.problems import humans_and_zombies, wolf_goat_cabbage, bridge_and_torch


GRAPHS: Dict[str, Dict[str, List[str]]] = {
    # BFS finds a -> x -> f, DFS follows b first and finds a -> b -> c -> f
    'shortcut': {'a': ['x', 'b'], 'x': ['f'], 'b': ['c'], 'c': ['f'], 'f': []},
    # No goal reachable, with cycles back to the root
    'cycle': {'a': ['b'], 'b': ['a', 'c'], 'c': ['a']},
    'dead_end': {'a': ['b'], 'b': []},
}


@dataclass(frozen=True, order=True)
class Move(Action):
    target: str

    def is_applicable(self, state: 'Node') -> bool:
        return self.target in GRAPHS[state.graph][state.name]

    def apply(self, state: 'Node') -> 'Node':
        return Node(state.graph, self.target)


@dataclass(frozen=True, order=True)
class Node(State):
    graph: str
    name: str

    def is_goal(self) -> bool:
        return self.name == 'f'

    def get_actions(self) -> List[Move]:
        return [Move(target) for target in GRAPHS[self.graph][self.name]]

    def fingerprint(self) -> str:
        return self.name


@dataclass(frozen=True, order=True)
class Counter(State):
    """Unbounded state space without a goal."""
    value: int

    def is_goal(self) -> bool:
        return False

    def get_actions(self):
        return (Increment(step) for step in (1, 2))

    def fingerprint(self) -> int:
        return self.value


@dataclass(frozen=True)
class Increment(Action):
    step: int

    def is_applicable(self, state: Counter) -> bool:
        return True

    def apply(self, state: Counter) -> Counter:
        return Counter(state.value + self.step)


@dataclass(frozen=True, order=True)
class Lying(State):
    """Enumerates an action it does not accept itself."""

    def is_goal(self) -> bool:
        return False

    def get_actions(self):
        return [Refused()]

    def fingerprint(self) -> int:
        return 0


@dataclass(frozen=True)
class Refused(Action):
    def is_applicable(self, state) -> bool:
        return False

    def apply(self, state):
        return state


class RecordingObserver(SearchObserver):
    """Collects every notification."""

    def __init__(self):
        self.events: List[Tuple[str, object]] = []

    def on_search_started(self, initial_state, strategy):
        self.events.append(('started', strategy))

    def on_node_popped(self, entry):
        self.events.append(('popped', entry))

    def on_child_accepted(self, parent, child):
        self.events.append(('accepted', child))

    def on_child_discarded(self, parent, action, state):
        self.events.append(('discarded', state))

    def on_dead_end(self, entry):
        self.events.append(('dead_end', entry))

    def on_goal_reached(self, entry, plan):
        self.events.append(('goal', entry))

    def on_search_finished(self, result):
        self.events.append(('finished', result))

    def of(self, kind):
        return [payload for event, payload in self.events if event == kind]


def assert_sound(plan):
    """Every action applies to its predecessor and yields its successor."""
    assert plan[0].action is None
    for (_, previous), (action, state) in zip(plan, plan[1:]):
        assert action is not None
        assert action.is_applicable(previous)
        assert action.apply(previous) == state


def assert_goal_only_at_end(plan):
    assert plan[-1].state.is_goal()
    assert not any(step.state.is_goal() for step in plan[:-1])


class TestSearchConfig:
    """Test SearchConfig functionality."""

    def test_default_config(self):
        """Test default configuration values."""
        config = SearchConfig()

        assert config.strategy == 'bfs'
        assert config.max_nodes_expanded is None
        assert config.max_computation_time is None

    def test_invalid_values(self):
        """Test validation of configuration values."""
        with pytest.raises(ValueError):
            SearchConfig(strategy='best-first')
        with pytest.raises(ValueError):
            SearchConfig(max_nodes_expanded=0)
        with pytest.raises(ValueError):
            SearchConfig(max_computation_time=-1.0)

    def test_from_config(self):
        """Test building from a config mapping."""
        config = SearchConfig.from_config({
            'search': {'strategy': 'dfs', 'max_nodes_expanded': 10, 'max_computation_time': None}
        })

        assert config.strategy == 'dfs'
        assert config.max_nodes_expanded == 10
        assert config.max_computation_time is None

        assert SearchConfig.from_config(None) == SearchConfig()


class TestPlanSearcher:
    """Test the exploration loop on small hand-made graphs."""

    def test_initial_goal(self):
        """Test that a goal initial state yields a one-step plan."""
        result = create_searcher().search(Node('shortcut', 'f'))

        assert result.success
        assert result.plan == [(None, Node('shortcut', 'f'))]
        assert result.plan_length == 0
        assert result.nodes_expanded == 0
        assert result.termination_reason == "goal_reached"

    def test_breadth_first_finds_shortest_plan(self):
        """Test that the FIFO frontier yields the shortest plan."""
        result = create_searcher('bfs').search(Node('shortcut', 'a'))

        assert result.success
        assert [step.state.name for step in result.plan] == ['a', 'x', 'f']
        assert result.nodes_expanded == 3
        assert result.nodes_generated == 5
        assert result.duplicates_discarded == 0
        assert_sound(result.plan)

    def test_depth_first_follows_last_child(self):
        """Test that the LIFO frontier dives into the most recent child."""
        result = create_searcher('dfs').search(Node('shortcut', 'a'))

        assert result.success
        assert result.strategy == 'dfs'
        assert [step.state.name for step in result.plan] == ['a', 'b', 'c', 'f']
        assert_sound(result.plan)

    def test_cycles_terminate_without_solution(self):
        """Test that revisits are pruned and the search exhausts."""
        result = create_searcher().search(Node('cycle', 'a'))

        assert not result.success
        assert result.plan is None
        assert result.plan_length is None
        assert result.termination_reason == "exhausted"
        assert result.nodes_expanded == 3
        assert result.duplicates_discarded == 2

    def test_dead_end(self):
        """Test dead end accounting."""
        observer = RecordingObserver()
        result = create_searcher(observer=observer).search(Node('dead_end', 'a'))

        assert not result.success
        assert result.dead_ends == 1
        assert [entry.state.name for entry in observer.of('dead_end')] == ['b']

    def test_search_function_returns_none_without_solution(self):
        """Test the plain search() contract."""
        assert search(Node('cycle', 'a')) is None

        plan = search(Node('shortcut', 'a'))
        assert [step.state.name for step in plan] == ['a', 'x', 'f']

    def test_model_contract_violation_aborts(self):
        """Test that an enumerated but rejected action is a fatal error."""
        with pytest.raises(ModelContractError, match="not applicable"):
            create_searcher().search(Lying())

    def test_node_budget(self):
        """Test that the node budget stops an unbounded search."""
        result = create_searcher(max_nodes_expanded=25).search(Counter(0))

        assert not result.success
        assert result.termination_reason == "node_limit"
        assert result.nodes_expanded == 25

    def test_node_budget_does_not_hide_a_generated_goal(self):
        """Test that a goal waiting in the frontier is found with an exact budget."""
        initial_state = humans_and_zombies.build_initial_state()
        unbounded = create_searcher('bfs').search(initial_state)
        assert unbounded.success

        result = create_searcher(
            'bfs', max_nodes_expanded=unbounded.nodes_expanded
        ).search(initial_state)

        assert result.success
        assert result.termination_reason == "goal_reached"
        assert result.plan == unbounded.plan
        assert result.nodes_expanded == unbounded.nodes_expanded

    def test_node_budget_on_shortcut_graph(self):
        """Test the budget boundary on a hand-made graph."""
        # a, x and b are expanded before f is popped
        assert create_searcher(max_nodes_expanded=3).search(Node('shortcut', 'a')).success

        result = create_searcher(max_nodes_expanded=2).search(Node('shortcut', 'a'))
        assert result.termination_reason == "node_limit"
        assert result.nodes_expanded == 2

    def test_time_budget(self):
        """Test that the time budget stops an unbounded search."""
        result = create_searcher(max_computation_time=0.05).search(Counter(0))

        assert not result.success
        assert result.termination_reason == "timeout"
        assert result.nodes_expanded > 0

    def test_actions_may_be_any_iterable(self):
        """Test that generators are accepted as action sequences."""
        result = create_searcher(max_nodes_expanded=3).search(Counter(0))
        # 0 -> 1, 2; 1 -> 3 (2 is a duplicate); 2 -> 4 (3 is a duplicate)
        assert result.nodes_generated == 5
        assert result.duplicates_discarded == 2

    def test_observer_events(self):
        """Test the observer extension points."""
        observer = RecordingObserver()
        PlanSearcher(SearchConfig(), observer=observer).search(Node('shortcut', 'a'))

        kinds = [event for event, _ in observer.events]
        assert kinds[0] == 'started'
        assert kinds[-1] == 'finished'
        assert kinds.count('goal') == 1
        assert [entry.state.name for entry in observer.of('popped')] == ['a', 'x', 'b', 'f']
        assert [entry.id for entry in observer.of('accepted')] == [1, 2, 3, 4]

    def test_composite_observer(self):
        """Test fan-out to multiple observers."""
        first, second = RecordingObserver(), RecordingObserver()
        search(Node('shortcut', 'a'), observer=CompositeObserver([first, second]))

        assert first.events == second.events
        assert len(first.of('popped')) == 4

    def test_logging_observer(self, caplog):
        """Test that exploration traces go through logging."""
        with caplog.at_level('DEBUG', logger='toy_planning'):
            search(Node('cycle', 'a'), observer=LoggingObserver())

        assert "Exploring state 0" in caplog.text
        assert "already discovered" in caplog.text
        assert "Search finished: exhausted" in caplog.text

    def test_statistics(self):
        """Test statistics reporting."""
        searcher = create_searcher(max_nodes_expanded=100)
        result = searcher.search(Node('shortcut', 'a'))

        stats = searcher.get_search_stats()
        assert stats['nodes_expanded'] == result.nodes_expanded
        assert stats['max_depth_reached'] == 2
        assert stats['config']['max_nodes_expanded'] == 100

        report = result.to_dict(render=False)
        assert report['success'] is True
        assert report['plan_length'] == 2
        assert report['plan'][0]['action'] is None
        assert report['search_stats']['nodes_generated'] == 5


class TestSearchProperties:
    """Test engine properties on the bundled puzzles."""

    @pytest.mark.parametrize("strategy", ['bfs', 'dfs'])
    @pytest.mark.parametrize("initial_state", [
        humans_and_zombies.build_initial_state(),
        wolf_goat_cabbage.build_initial_state(),
        bridge_and_torch.build_initial_state(),
    ])
    def test_plans_are_sound_and_end_in_goal(self, initial_state, strategy):
        """Test soundness and goal correctness for both strategies."""
        plan = search(initial_state, strategy=strategy)

        assert plan is not None
        assert plan[0].state == initial_state
        assert_sound(plan)
        assert_goal_only_at_end(plan)

    @pytest.mark.parametrize("strategy", ['bfs', 'dfs'])
    def test_no_duplicate_expansion(self, strategy):
        """Test that no fingerprint is popped twice."""
        observer = RecordingObserver()
        create_searcher(strategy, observer=observer).search(
            humans_and_zombies.build_initial_state(humans=4, zombies=4, boat=3)
        )

        fingerprints = [entry.state.fingerprint() for entry in observer.of('popped')]
        assert len(fingerprints) == len(set(fingerprints))

    def test_breadth_first_optimality(self):
        """Test the known shortest plan lengths."""
        assert len(search(humans_and_zombies.build_initial_state())) - 1 == 11
        assert len(search(wolf_goat_cabbage.build_initial_state())) - 1 == 7
        assert len(search(bridge_and_torch.build_initial_state())) - 1 == 5

    def test_determinism(self):
        """Test that equal inputs give equal plans."""
        first = search(humans_and_zombies.build_initial_state())
        second = search(humans_and_zombies.build_initial_state())

        assert first == second
