"""Bridge and torch.

People with different walking speeds must cross a bridge at night. The
bridge holds a limited number of people, a group walks at the pace of its
slowest member, and nobody crosses without the single torch, which only
burns for a limited time.
"""

from dataclasses import dataclass, replace
from enum import IntEnum
from itertools import combinations
from typing import Iterable, List, Tuple

from toy_planning.core.contract import Action, State


class RiverSide(IntEnum):
    LEFT = 0
    RIGHT = 1

    def switch(self) -> 'RiverSide':
        return RiverSide.RIGHT if self is RiverSide.LEFT else RiverSide.LEFT


@dataclass(frozen=True, order=True)
class Person:
    """A person, identified by the minutes it takes them to cross."""
    walking_time: int

    def __repr__(self) -> str:
        return f"<{self.walking_time}>"


@dataclass(frozen=True, order=True)
class Torch:
    side: RiverSide
    remaining_time: int  # minutes of fuel left


def _people(people: Iterable[Person]) -> Tuple[Person, ...]:
    return tuple(sorted(people))


@dataclass(frozen=True, order=True)
class RiverSideState:
    """The people on one side; kept sorted so equal groups compare equal."""
    people: Tuple[Person, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, 'people', _people(self.people))

    def is_empty(self) -> bool:
        return not self.people

    def contains(self, people: Iterable[Person]) -> bool:
        remaining = list(self.people)
        for person in people:
            if person not in remaining:
                return False
            remaining.remove(person)
        return True

    def without(self, people: Iterable[Person]) -> 'RiverSideState':
        remaining = list(self.people)
        for person in people:
            remaining.remove(person)
        return RiverSideState(tuple(remaining))

    def with_(self, people: Iterable[Person]) -> 'RiverSideState':
        return RiverSideState(self.people + tuple(people))

    def __repr__(self) -> str:
        return f"[{', '.join(repr(p) for p in self.people)}]"


@dataclass(frozen=True, order=True)
class WorldAction(Action):
    """Walk the given group of people across the bridge."""
    people: Tuple[Person, ...]

    def __post_init__(self) -> None:
        if not self.people:
            raise ValueError("At least one person must walk")
        object.__setattr__(self, 'people', _people(self.people))

    @property
    def walking_time(self) -> int:
        # The group walks at the pace of its slowest member.
        return max(person.walking_time for person in self.people)

    def is_applicable(self, state: 'WorldState') -> bool:
        if len(self.people) > state.bridge_capacity:
            return False
        if not state.torch_side().contains(self.people):
            return False
        # The torch must burn long enough for the crossing.
        return state.torch.remaining_time >= self.walking_time

    def apply(self, state: 'WorldState') -> 'WorldState':
        here, there = state.here_there()
        here, there = here.without(self.people), there.with_(self.people)
        if state.torch.side is RiverSide.LEFT:
            left, right = here, there
        else:
            left, right = there, here

        walking_time = self.walking_time
        return replace(
            state,
            time=state.time + walking_time,
            left=left,
            right=right,
            torch=Torch(state.torch.side.switch(), state.torch.remaining_time - walking_time)
        )

    def pretty_print(self, state: 'WorldState') -> str:
        minutes = _minutes(self.walking_time)
        group = repr(RiverSideState(self.people))
        # The torch in ``state`` already crossed.
        if state.torch.side is RiverSide.RIGHT:
            return f" → {group} cross forward, taking {minutes}"
        return f" ← {group} return{'s' if len(self.people) == 1 else ''}, taking {minutes}"

    def __repr__(self) -> str:
        return f"{{ {RiverSideState(self.people)!r} }}"


@dataclass(frozen=True, order=True)
class WorldState(State):
    time: int
    left: RiverSideState
    right: RiverSideState
    torch: Torch
    bridge_capacity: int

    @classmethod
    def default(cls) -> 'WorldState':
        return build_initial_state()

    def here_there(self) -> Tuple[RiverSideState, RiverSideState]:
        if self.torch.side is RiverSide.LEFT:
            return self.left, self.right
        return self.right, self.left

    def torch_side(self) -> RiverSideState:
        return self.here_there()[0]

    def is_goal(self) -> bool:
        return self.left.is_empty()

    def get_actions(self) -> List[WorldAction]:
        actions = []
        side = self.torch_side()

        # People with equal walking times are interchangeable, so only
        # distinct groups of walking times are produced.
        for size in range(1, self.bridge_capacity + 1):
            for group in dict.fromkeys(combinations(side.people, size)):
                action = WorldAction(group)
                if action.is_applicable(self):
                    actions.append(action)

        return actions

    def fingerprint(self) -> Tuple[Tuple[Person, ...], int, int]:
        # Elapsed time is implied by the remaining fuel, so it is left out.
        return (self.left.people, int(self.torch.side), self.torch.remaining_time)

    def pretty_print(self) -> str:
        left = repr(self.left) if not self.left.is_empty() else "nobody"
        right = repr(self.right) if not self.right.is_empty() else "nobody"
        return f"At {_minutes(self.time)}: {left} on the left, {right} on the right"

    def __repr__(self) -> str:
        return (f"{{ t={self.time}, left: {self.left!r}, right: {self.right!r}, "
                f"torch: {self.torch.side.name}/{self.torch.remaining_time} }}")


def _minutes(value: int) -> str:
    return f"{value} minute{'' if value == 1 else 's'}"


def build_initial_state(people: Iterable[int] = (1, 2, 5, 8), fuel: int = 15,
                        capacity: int = 2) -> WorldState:
    """Everybody starts on the left side, together with the torch.

    Args:
        people: Walking time of each person in minutes
        fuel: Minutes the torch can burn
        capacity: How many people the bridge holds at once
    """
    walkers = [Person(int(minutes)) for minutes in people]
    if any(person.walking_time <= 0 for person in walkers):
        raise ValueError("Walking times must be positive")
    if fuel < 0 or capacity < 0:
        raise ValueError("Fuel and capacity must not be negative")
    return WorldState(
        time=0,
        left=RiverSideState(tuple(walkers)),
        right=RiverSideState(),
        torch=Torch(RiverSide.LEFT, fuel),
        bridge_capacity=capacity
    )
