"""Frontier containers deciding the exploration order.

A LIFO frontier (stack) yields depth-first exploration, a FIFO frontier
(queue) yields breadth-first exploration.
"""

from abc import ABC, abstractmethod
from collections import deque
from typing import Deque, Generic, List, Optional, TypeVar

T = TypeVar('T')

_NOTHING = object()


class Frontier(ABC, Generic[T]):
    """Common interface of the frontier disciplines."""

    strategy: str = ''

    @abstractmethod
    def push(self, item: T) -> None:
        pass

    @abstractmethod
    def pop(self) -> Optional[T]:
        """Remove and return the next item, or None if the frontier is empty."""
        pass

    @abstractmethod
    def __len__(self) -> int:
        pass

    def __bool__(self) -> bool:
        return len(self) > 0

    def __repr__(self) -> str:
        return f"{type(self).__name__}(size={len(self)})"


class LifoFrontier(Frontier[T]):
    """Last in, first out: a stack."""

    strategy = 'dfs'

    def __init__(self, item=_NOTHING):
        self._items: List[T] = []
        if item is not _NOTHING:
            self.push(item)

    def push(self, item: T) -> None:
        self._items.append(item)

    def pop(self) -> Optional[T]:
        if not self._items:
            return None
        return self._items.pop()

    def __len__(self) -> int:
        return len(self._items)


class FifoFrontier(Frontier[T]):
    """First in, first out: a queue."""

    strategy = 'bfs'

    def __init__(self, item=_NOTHING):
        self._items: Deque[T] = deque()
        if item is not _NOTHING:
            self.push(item)

    def push(self, item: T) -> None:
        self._items.append(item)

    def pop(self) -> Optional[T]:
        if not self._items:
            return None
        return self._items.popleft()

    def __len__(self) -> int:
        return len(self._items)


FRONTIERS = {
    'bfs': FifoFrontier,
    'fifo': FifoFrontier,
    'dfs': LifoFrontier,
    'lifo': LifoFrontier,
}


def create_frontier(strategy: str = 'bfs') -> Frontier:
    """Create an empty frontier for the named exploration strategy.

    Args:
        strategy: 'bfs'/'fifo' for breadth-first, 'dfs'/'lifo' for depth-first

    Returns:
        Empty frontier

    Raises:
        ValueError: If the strategy is unknown
    """
    try:
        frontier_cls = FRONTIERS[strategy.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown search strategy '{strategy}', expected one of {sorted(FRONTIERS)}"
        ) from None
    return frontier_cls()
