"""Core abstractions shared by the search engine and the puzzle models."""

from .contract import State, Action, PlanStep

__all__ = [
    'State',
    'Action',
    'PlanStep'
]
