"""State/Action contract every puzzle model implements.

The search engine only ever talks to a puzzle through these two abstract
base classes: a state enumerates its actions, tests the goal and produces a
fingerprint; an action checks its precondition and produces a new state.
"""

from abc import ABC, abstractmethod
from typing import Hashable, Iterable, NamedTuple, Optional


class State(ABC):
    """A complete snapshot of the world."""

    @abstractmethod
    def is_goal(self) -> bool:
        """Test whether this state is a goal state."""
        pass

    @abstractmethod
    def get_actions(self) -> Iterable['Action']:
        """Enumerate the actions applicable to this state, in a stable order.

        Returns:
            Ordered sequence of actions; empty if the state cannot be expanded
        """
        pass

    @abstractmethod
    def fingerprint(self) -> Hashable:
        """Deduplication key for this state.

        States that expand identically in the future must share a fingerprint.
        Attributes that do not influence future expansion may be left out.
        """
        pass

    def pretty_print(self) -> str:
        """Human-readable rendering of the state."""
        return str(self)


class Action(ABC):
    """A transition between two states."""

    @abstractmethod
    def is_applicable(self, state: State) -> bool:
        """Test whether the action can be performed in the given state."""
        pass

    @abstractmethod
    def apply(self, state: State) -> State:
        """Apply the action, returning the resulting state.

        The given state is left untouched.
        """
        pass

    def pretty_print(self, state: State) -> str:
        """Human-readable rendering of the action.

        Args:
            state: The state produced by this action
        """
        return str(self)


class PlanStep(NamedTuple):
    """One step of a plan: the action taken and the state it produced."""

    action: Optional[Action]
    state: State
