"""Set of fingerprints of already discovered states."""

from typing import Hashable, Iterator, Set


class DeduplicationSet:
    """Visited-state set keyed by state fingerprints.

    The set only ever grows during a search run, so every fingerprint is
    expanded at most once.
    """

    def __init__(self):
        self._seen: Set[Hashable] = set()

    def insert(self, fingerprint: Hashable) -> bool:
        """Record a fingerprint.

        Returns:
            True if the fingerprint was new, False if it was already present
        """
        if fingerprint in self._seen:
            return False
        self._seen.add(fingerprint)
        return True

    def __contains__(self, fingerprint: Hashable) -> bool:
        return fingerprint in self._seen

    def __len__(self) -> int:
        return len(self._seen)

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self._seen)
