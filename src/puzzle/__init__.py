"""
Puzzle Package - Nonogram puzzle model and loader.

Public API:
    - CellState: State of a single cell
    - BlockConstraint: One block of a row or column clue
    - PuzzleGrid: Mutable grid with constraints and undo history
    - InvalidCoordinateError: Raised for out-of-range cell access
    - load_puzzle(): Load a JSON puzzle file
    - save_moves() / load_moves(): Persist the current grid

Usage:
    from src.puzzle import load_puzzle, CellState

    puzzle = load_puzzle("puzzles/heart.json")
    puzzle.set_cell_state(0, 1, CellState.COLOUR_1)
    print(puzzle.is_solved())
"""

from .cell_state import (
    CellState,
    FILLED_STATES,
    is_filled,
    can_be_empty,
    parse_cell_state,
    state_symbol,
)
from .constraint import BlockConstraint, LineConstraints, line_blocks
from .grid import PuzzleGrid, GridSnapshot, InvalidCoordinateError
from .palette import (
    default_colour_map,
    parse_colour,
    parse_colour_map,
    format_colour,
)
from .loader import (
    load_puzzle,
    parse_puzzle,
    parse_constraints,
    save_moves,
    load_moves,
)

__all__ = [
    # Cell states
    "CellState",
    "FILLED_STATES",
    "is_filled",
    "can_be_empty",
    "parse_cell_state",
    "state_symbol",
    # Constraints
    "BlockConstraint",
    "LineConstraints",
    "line_blocks",
    # Grid
    "PuzzleGrid",
    "GridSnapshot",
    "InvalidCoordinateError",
    # Palette
    "default_colour_map",
    "parse_colour",
    "parse_colour_map",
    "format_colour",
    # Loading
    "load_puzzle",
    "parse_puzzle",
    "parse_constraints",
    "save_moves",
    "load_moves",
]
