"""Humans and zombies river crossing.

Humans and zombies must cross a river in a boat of limited capacity. On
neither bank may the zombies outnumber the humans (unless there are no
humans on that bank), and humans on the boat must not be outnumbered either.
"""

from dataclasses import dataclass, replace
from enum import IntEnum
from typing import List, Tuple

from toy_planning.core.contract import Action, State


class RiverBank(IntEnum):
    """The two river banks."""
    LEFT = 0
    RIGHT = 1

    def switch(self) -> 'RiverBank':
        """Switches from the left bank to the right and vice versa."""
        return RiverBank.RIGHT if self is RiverBank.LEFT else RiverBank.LEFT


@dataclass(frozen=True, order=True)
class Boat:
    capacity: int
    bank: RiverBank

    def switch_bank(self) -> 'Boat':
        return Boat(self.capacity, self.bank.switch())


@dataclass(frozen=True, order=True)
class RiverBankState:
    """Number of humans and zombies on one river bank."""
    humans: int = 0
    zombies: int = 0

    def is_empty(self) -> bool:
        return self.humans == 0 and self.zombies == 0

    def is_safe(self) -> bool:
        """Zombies do not outnumber the humans on this bank."""
        return self.humans == 0 or self.zombies <= self.humans

    def __repr__(self) -> str:
        return f"{{ {self.humans}×H, {self.zombies}×Z }}"


@dataclass(frozen=True, order=True)
class WorldAction(Action):
    """Move the given number of humans and zombies across the river."""
    humans: int
    zombies: int

    def __post_init__(self) -> None:
        if self.humans < 0 or self.zombies < 0:
            raise ValueError(f"Cannot move a negative number of people: {self!r}")
        if self.humans + self.zombies == 0:
            raise ValueError("At least one person needs to be on the boat")

    def is_applicable(self, state: 'WorldState') -> bool:
        here, there = state.here_there()

        if self.humans + self.zombies > state.boat.capacity:
            return False

        # Zombies must not outnumber the humans on the boat.
        if self.humans > 0 and self.zombies > self.humans:
            return False

        if here.humans < self.humans or here.zombies < self.zombies:
            return False

        # Neither bank may be unsafe after the crossing.
        new_here = RiverBankState(here.humans - self.humans, here.zombies - self.zombies)
        new_there = RiverBankState(there.humans + self.humans, there.zombies + self.zombies)
        return new_here.is_safe() and new_there.is_safe()

    def apply(self, state: 'WorldState') -> 'WorldState':
        here, there = state.here_there()
        here = RiverBankState(here.humans - self.humans, here.zombies - self.zombies)
        there = RiverBankState(there.humans + self.humans, there.zombies + self.zombies)
        if state.boat.bank is RiverBank.LEFT:
            left, right = here, there
        else:
            left, right = there, here
        return replace(state, left=left, right=right, boat=state.boat.switch_bank())

    def pretty_print(self, state: 'WorldState') -> str:
        # ``state`` is the result of this action, so the boat already crossed.
        at_most = state.left.humans + state.right.humans
        cargo = " ".join(part for part in ("H" * self.humans, "Z" * self.zombies) if part)
        indent = " " * (at_most * 2 + 3)
        if state.boat.bank is RiverBank.LEFT:
            return f"{indent}← {cargo}"
        return f"{indent}{cargo} →"

    def __repr__(self) -> str:
        return f"{{ {self.humans}×H, {self.zombies}×Z }}"


@dataclass(frozen=True, order=True)
class WorldState(State):
    left: RiverBankState
    right: RiverBankState
    boat: Boat

    @classmethod
    def default(cls) -> 'WorldState':
        return build_initial_state()

    def here_there(self) -> Tuple[RiverBankState, RiverBankState]:
        """Returns (bank the boat is at, opposite bank)."""
        if self.boat.bank is RiverBank.LEFT:
            return self.left, self.right
        return self.right, self.left

    def boat_bank(self) -> RiverBankState:
        return self.here_there()[0]

    def is_safe(self) -> bool:
        return self.left.is_safe() and self.right.is_safe()

    def is_goal(self) -> bool:
        # Everybody reached the right bank.
        return self.left.is_empty()

    def get_actions(self) -> List[WorldAction]:
        actions = []
        bank = self.boat_bank()
        capacity = self.boat.capacity

        for zombies in range(min(bank.zombies, capacity) + 1):
            for humans in range(min(bank.humans, capacity) + 1):
                if humans + zombies == 0:
                    continue
                if humans + zombies > capacity:
                    break

                action = WorldAction(humans, zombies)
                if action.is_applicable(self):
                    actions.append(action)

        return actions

    def fingerprint(self) -> Tuple[int, int, int]:
        # Totals and boat capacity never change within one search.
        return (self.left.humans, self.left.zombies, int(self.boat.bank))

    def pretty_print(self) -> str:
        at_most = self.left.humans + self.right.humans

        left = " ".join(part for part in ("H" * self.left.humans, "Z" * self.left.zombies) if part)
        right = " ".join(part for part in ("H" * self.right.humans, "Z" * self.right.zombies) if part)
        river = " |B~~~| " if self.boat.bank is RiverBank.LEFT else " |~~~B| "

        return (left.rjust(2 * at_most + 1) + river + right).rstrip()

    def __repr__(self) -> str:
        return f"{{ left: {self.left!r}, right: {self.right!r}, boat: {self.boat.capacity}@{self.boat.bank.name} }}"


def build_initial_state(humans: int = 3, zombies: int = 3, boat: int = 2) -> WorldState:
    """Everybody starts on the left bank, together with the boat.

    Args:
        humans: Number of humans
        zombies: Number of zombies
        boat: Capacity of the boat
    """
    if humans < 0 or zombies < 0 or boat < 0:
        raise ValueError("Counts must not be negative")
    return WorldState(
        left=RiverBankState(humans, zombies),
        right=RiverBankState(0, 0),
        boat=Boat(boat, RiverBank.LEFT)
    )
