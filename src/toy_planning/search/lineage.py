"""Append-only lineage store used to reconstruct plans.

Every discovered node is recorded once, together with the id of the node it
was expanded from. Walking these parent links back from a goal node yields
the plan without ever copying ancestor chains into the nodes themselves.
"""

import logging
from dataclasses import dataclass
from typing import Generic, Iterator, List, Optional, TypeVar

from toy_planning.core.contract import PlanStep
from .errors import LineageError

logger = logging.getLogger(__name__)

S = TypeVar('S')
A = TypeVar('A')


@dataclass(frozen=True)
class LineageEntry(Generic[S, A]):
    """A node of the search tree."""
    id: int
    parent_id: Optional[int]  # None only for the root
    action: Optional[A]  # action that produced this state, None for the root
    state: S

    @property
    def is_root(self) -> bool:
        return self.parent_id is None


class LineageStore(Generic[S, A]):
    """Tracks the history of discovered states for one search run."""

    def __init__(self):
        self._entries: List[LineageEntry[S, A]] = []

    def create_root(self, state: S) -> LineageEntry[S, A]:
        """Insert the root entry (id 0, no parent).

        Raises:
            LineageError: If the store already has a root
        """
        if self._entries:
            raise LineageError("Lineage store already has a root entry")
        entry = LineageEntry(id=0, parent_id=None, action=None, state=state)
        self._entries.append(entry)
        return entry

    def create_entry(self, action: A, state: S, parent: LineageEntry[S, A]) -> LineageEntry[S, A]:
        """Insert a new entry reached from ``parent`` by ``action``.

        Args:
            action: Action that produced ``state``
            state: The new state
            parent: Entry the action was applied to

        Returns:
            The appended entry
        """
        if not self._entries:
            raise LineageError("create_root() must be called before create_entry()")
        if self.get(parent.id) is not parent:
            raise LineageError(f"Parent entry {parent.id} does not belong to this store")

        entry = LineageEntry(id=len(self._entries), parent_id=parent.id, action=action, state=state)
        self._entries.append(entry)
        return entry

    def get(self, entry_id: int) -> LineageEntry[S, A]:
        """Look up an entry by id.

        Raises:
            LineageError: If no entry with that id was ever appended
        """
        if not 0 <= entry_id < len(self._entries):
            raise LineageError(f"Lineage entry {entry_id} not found")
        return self._entries[entry_id]

    def backtrack(self, entry: LineageEntry[S, A]) -> List[PlanStep]:
        """Reconstruct the path from the root to ``entry``.

        Returns:
            Plan steps in root-to-entry order; the first step has no action
        """
        path = []
        current = entry
        while True:
            path.append(PlanStep(current.action, current.state))
            if current.parent_id is None:
                break
            current = self.get(current.parent_id)

        path.reverse()
        logger.debug(f"Backtracked {len(path) - 1} actions from entry {entry.id}")
        return path

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[LineageEntry[S, A]]:
        return iter(self._entries)

    def __getitem__(self, entry_id: int) -> LineageEntry[S, A]:
        return self.get(entry_id)
