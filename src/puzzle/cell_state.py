"""
Cell State Module - The possible states of a nonogram cell.
"""

from enum import IntEnum
from typing import FrozenSet


class CellState(IntEnum):
    """
    State of a single grid cell.

    Integer valued so a whole grid can be stored in a numpy array.
    For a black and white nonogram, black is COLOUR_1.

    States:
        UNKNOWN: Not yet determined (default)
        EMPTY: Known blank cell
        COLOUR_1..COLOUR_4: Known filled cell of the given colour
    """
    UNKNOWN = 0
    EMPTY = 1
    COLOUR_1 = 2
    COLOUR_2 = 3
    COLOUR_3 = 4
    COLOUR_4 = 5


FILLED_STATES: FrozenSet[CellState] = frozenset({
    CellState.COLOUR_1,
    CellState.COLOUR_2,
    CellState.COLOUR_3,
    CellState.COLOUR_4,
})

_SYMBOLS = {
    CellState.UNKNOWN: "?",
    CellState.EMPTY: ".",
    CellState.COLOUR_1: "1",
    CellState.COLOUR_2: "2",
    CellState.COLOUR_3: "3",
    CellState.COLOUR_4: "4",
}


def is_filled(state: CellState) -> bool:
    """True if the cell is known to hold a colour."""
    return state in FILLED_STATES


def can_be_empty(state: CellState) -> bool:
    """True if the cell may still be (or already is) blank."""
    return state == CellState.UNKNOWN or state == CellState.EMPTY


def parse_cell_state(name: str) -> CellState:
    """
    Convert a persisted variant name into a CellState.

    Args:
        name: Variant name, e.g. "COLOUR_1"

    Returns:
        Matching CellState

    Raises:
        ValueError: If the name is not a CellState variant
    """
    try:
        return CellState[name]
    except KeyError:
        available = ", ".join(state.name for state in CellState)
        raise ValueError(f"Unknown cell state: {name}. Available: {available}") from None


def state_symbol(state: CellState) -> str:
    """Single character form used in log output."""
    return _SYMBOLS[CellState(state)]
