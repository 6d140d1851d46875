"""Exceptions raised by the search engine."""


class SearchError(Exception):
    """Base class for search engine errors."""
    pass


class InvariantViolation(SearchError):
    """An engine invariant was broken; the run must be aborted."""
    pass


class LineageError(InvariantViolation):
    """The lineage store was used inconsistently."""
    pass


class ModelContractError(InvariantViolation):
    """A puzzle model violated the State/Action contract."""
    pass
