"""Wolf, goat and cabbage river crossing.

A farmer has to bring wolves, goats and cabbages across a river. Only a
farmer can steer the boat; wolves left with goats, or goats left with
cabbages, without a farmer around are not an option.
"""

from dataclasses import dataclass, replace
from enum import IntEnum
from typing import List, Tuple

from toy_planning.core.contract import Action, State


class RiverBank(IntEnum):
    LEFT = 0
    RIGHT = 1

    def switch(self) -> 'RiverBank':
        return RiverBank.RIGHT if self is RiverBank.LEFT else RiverBank.LEFT


@dataclass(frozen=True, order=True)
class Boat:
    capacity: int
    bank: RiverBank

    def switch_bank(self) -> 'Boat':
        return Boat(self.capacity, self.bank.switch())


@dataclass(frozen=True, order=True)
class RiverBankState:
    farmers: int = 0
    wolves: int = 0
    goats: int = 0
    cabbages: int = 0

    def is_empty(self) -> bool:
        return self.farmers + self.wolves + self.goats + self.cabbages == 0

    def is_safe(self) -> bool:
        """Nothing gets eaten on this bank."""
        if self.farmers > 0:
            return True
        if self.wolves > 0 and self.goats > 0:
            return False
        if self.goats > 0 and self.cabbages > 0:
            return False
        return True

    def __add__(self, other: 'RiverBankState') -> 'RiverBankState':
        return RiverBankState(
            self.farmers + other.farmers,
            self.wolves + other.wolves,
            self.goats + other.goats,
            self.cabbages + other.cabbages
        )

    def __sub__(self, other: 'RiverBankState') -> 'RiverBankState':
        return RiverBankState(
            self.farmers - other.farmers,
            self.wolves - other.wolves,
            self.goats - other.goats,
            self.cabbages - other.cabbages
        )

    def covers(self, other: 'RiverBankState') -> bool:
        """There is at least as much of everything here as in ``other``."""
        return (self.farmers >= other.farmers and self.wolves >= other.wolves
                and self.goats >= other.goats and self.cabbages >= other.cabbages)

    def __repr__(self) -> str:
        return f"{self.farmers}×F, {self.wolves}×W, {self.goats}×G, {self.cabbages}×C"


@dataclass(frozen=True, order=True)
class WorldAction(Action):
    """Move the given load across the river."""
    farmers: int = 0
    wolves: int = 0
    goats: int = 0
    cabbages: int = 0

    @property
    def load(self) -> RiverBankState:
        return RiverBankState(self.farmers, self.wolves, self.goats, self.cabbages)

    def __len__(self) -> int:
        return self.farmers + self.wolves + self.goats + self.cabbages

    def is_applicable(self, state: 'WorldState') -> bool:
        here, there = state.here_there()

        # Someone must be on the boat, but the boat capacity must not be exceeded.
        if len(self) == 0 or len(self) > state.boat.capacity:
            return False

        # A farmer steers the boat.
        if self.farmers == 0:
            return False

        if not here.covers(self.load):
            return False

        return (here - self.load).is_safe() and (there + self.load).is_safe()

    def apply(self, state: 'WorldState') -> 'WorldState':
        here, there = state.here_there()
        here, there = here - self.load, there + self.load
        if state.boat.bank is RiverBank.LEFT:
            left, right = here, there
        else:
            left, right = there, here
        return replace(
            state,
            plan_depth=state.plan_depth + 1,
            left=left,
            right=right,
            boat=state.boat.switch_bank()
        )

    def pretty_print(self, state: 'WorldState') -> str:
        # The boat in ``state`` already crossed.
        if state.boat.bank is RiverBank.RIGHT:
            return f" → {readable_list(self.load)} cross{'es' if len(self) == 1 else ''} forward"
        return f" ← {readable_list(self.load)} return{'s alone' if len(self) == 1 else ''}"

    def __repr__(self) -> str:
        return repr(self.load)


@dataclass(frozen=True, order=True)
class WorldState(State):
    plan_depth: int
    left: RiverBankState
    right: RiverBankState
    boat: Boat

    @classmethod
    def default(cls) -> 'WorldState':
        return build_initial_state()

    def here_there(self) -> Tuple[RiverBankState, RiverBankState]:
        if self.boat.bank is RiverBank.LEFT:
            return self.left, self.right
        return self.right, self.left

    def boat_bank(self) -> RiverBankState:
        return self.here_there()[0]

    def is_goal(self) -> bool:
        return self.left.is_empty()

    def get_actions(self) -> List[WorldAction]:
        actions = []
        bank = self.boat_bank()
        capacity = self.boat.capacity

        for f in range(min(bank.farmers, capacity) + 1):
            for w in range(min(bank.wolves, capacity) + 1):
                if f + w > capacity:
                    break
                for g in range(min(bank.goats, capacity) + 1):
                    if f + w + g > capacity:
                        break
                    for c in range(min(bank.cabbages, capacity) + 1):
                        if f + w + g + c > capacity:
                            break

                        action = WorldAction(f, w, g, c)
                        if action.is_applicable(self):
                            actions.append(action)

        return actions

    def fingerprint(self) -> Tuple[int, int, int, int, int]:
        # The plan depth does not influence future moves.
        return (self.left.farmers, self.left.wolves, self.left.goats, self.left.cabbages,
                int(self.boat.bank))

    def pretty_print(self) -> str:
        return (f"At t={self.plan_depth}; left bank: {readable_list(self.left)}; "
                f"right bank: {readable_list(self.right)}")

    def __repr__(self) -> str:
        return f"{{ left: {self.left!r}, right: {self.right!r}, boat: {self.boat.capacity}@{self.boat.bank.name} }}"


_NAMES = (
    ('farmers', 'farmer', 'farmers'),
    ('wolves', 'wolf', 'wolves'),
    ('goats', 'goat', 'goats'),
    ('cabbages', 'cabbage', 'cabbages'),
)


def readable_list(bank: RiverBankState) -> str:
    """Makes a human-readable list like "farmer, wolf and 2 goats"."""
    parts = []
    for attr, singular, plural in _NAMES:
        count = getattr(bank, attr)
        if count == 1:
            parts.append(singular)
        elif count > 1:
            parts.append(f"{count} {plural}")

    if not parts:
        return "empty"
    if len(parts) == 1:
        return parts[0]
    return ", ".join(parts[:-1]) + " and " + parts[-1]


def build_initial_state(farmers: int = 1, wolves: int = 1, goats: int = 1,
                        cabbages: int = 1, boat: int = 2) -> WorldState:
    """Everything starts on the left bank, together with the boat."""
    if min(farmers, wolves, goats, cabbages, boat) < 0:
        raise ValueError("Counts must not be negative")
    return WorldState(
        plan_depth=0,
        left=RiverBankState(farmers, wolves, goats, cabbages),
        right=RiverBankState(),
        boat=Boat(boat, RiverBank.LEFT)
    )
