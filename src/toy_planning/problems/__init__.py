"""River-crossing puzzle models plugged into the search engine."""

from typing import Callable, Dict

from toy_planning.core.contract import State
from . import bridge_and_torch, humans_and_zombies, wolf_goat_cabbage

PUZZLES: Dict[str, Callable[..., State]] = {
    'humans-and-zombies': humans_and_zombies.build_initial_state,
    'wolf-goat-cabbage': wolf_goat_cabbage.build_initial_state,
    'bridge-and-torch': bridge_and_torch.build_initial_state,
}


def build_initial_state(puzzle: str, **params) -> State:
    """Build the initial state of a registered puzzle.

    Args:
        puzzle: Puzzle name, e.g. 'humans-and-zombies'
        **params: Puzzle specific parameters

    Raises:
        KeyError: If the puzzle is unknown
    """
    if puzzle not in PUZZLES:
        raise KeyError(f"Unknown puzzle '{puzzle}', expected one of {sorted(PUZZLES)}")
    return PUZZLES[puzzle](**params)


__all__ = [
    'PUZZLES',
    'build_initial_state',
    'bridge_and_torch',
    'humans_and_zombies',
    'wolf_goat_cabbage'
]
