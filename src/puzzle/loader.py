"""
Puzzle Loader Module - JSON puzzle files and saved move files.

Puzzle file format:
    {
      "name": "Heart",
      "rows":    [[{"count": 1}, {"count": 1}], [{"count": 5}], ...],
      "columns": [[{"count": 2, "color": "COLOUR_1"}], ...],
      "states":  {"COLOUR_1": "#000000", "EMPTY": "#FFFFFF"}
    }

"color" defaults to COLOUR_1 and "states" is optional (black and white
palette when missing).
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Union

from .cell_state import CellState, parse_cell_state
from .constraint import BlockConstraint, LineConstraints
from .grid import PuzzleGrid
from .palette import format_colour, parse_colour_map

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def parse_constraints(lines: List[List[Mapping[str, Any]]]) -> List[LineConstraints]:
    """
    Parse the "rows" or "columns" array of a puzzle file.

    Args:
        lines: One list of {"count", "color"?} objects per line

    Returns:
        One constraint tuple per line

    Raises:
        ValueError: If a block is malformed or names an unknown colour
    """
    constraints: List[LineConstraints] = []
    for index, line in enumerate(lines):
        blocks = []
        for block in line:
            if "count" not in block:
                raise ValueError(f"Block in line {index} has no 'count': {block!r}")
            count = block["count"]
            if isinstance(count, bool) or not isinstance(count, int):
                raise ValueError(f"Block in line {index} has a non-integer count: {count!r}")
            state = CellState.COLOUR_1
            if "color" in block:
                state = parse_cell_state(block["color"])
            blocks.append(BlockConstraint.create(count, state))
        constraints.append(tuple(blocks))
    return constraints


def parse_puzzle(data: Mapping[str, Any]) -> PuzzleGrid:
    """
    Build a puzzle from already-decoded JSON.

    Raises:
        ValueError: If required keys are missing or constraints are invalid
    """
    for key in ("name", "rows", "columns"):
        if key not in data:
            raise ValueError(f"Puzzle is missing required key '{key}'")

    row_constraints = parse_constraints(data["rows"])
    column_constraints = parse_constraints(data["columns"])

    colour_map = None
    if "states" in data:
        colour_map = parse_colour_map(data["states"])

    puzzle = PuzzleGrid(
        data["name"],
        row_constraints,
        column_constraints,
        len(row_constraints),
        len(column_constraints),
        colour_map=colour_map,
    )
    logger.info(f"Loaded puzzle '{puzzle.name}' ({puzzle.rows}x{puzzle.columns})")
    return puzzle


def load_puzzle(path: PathLike) -> PuzzleGrid:
    """
    Load a puzzle from a JSON file.

    Args:
        path: Puzzle file path

    Returns:
        Fresh all-UNKNOWN PuzzleGrid

    Raises:
        OSError: If the file cannot be read
        ValueError: If the file is not a valid puzzle (json.JSONDecodeError included)
    """
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)
    return parse_puzzle(data)


def save_moves(puzzle: PuzzleGrid, path: PathLike) -> None:
    """
    Save the current grid and palette to a JSON move file.

    Args:
        puzzle: Puzzle whose grid is saved
        path: Output file path
    """
    data: Dict[str, Any] = {
        "name": puzzle.name,
        "grid": [
            [{"state": state.name} for state in row]
            for row in puzzle.get_grid()
        ],
    }
    if puzzle.colour_map:
        data["states"] = {
            state.name: format_colour(rgb)
            for state, rgb in sorted(puzzle.colour_map.items())
        }

    with open(path, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=2)
    logger.info(f"Saved moves for '{puzzle.name}' to {path}")


def load_moves(puzzle: PuzzleGrid, path: PathLike) -> None:
    """
    Load a saved move file into a puzzle.

    The grid is replaced and the undo history cleared. Palette entries
    in the file are merged into the puzzle's colour map.

    Raises:
        ValueError: If the file belongs to a different puzzle or is malformed
    """
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)

    if data.get("name") != puzzle.name:
        raise ValueError("Saved moves don't match current puzzle")

    # The grid is only touched once the whole file has parsed
    states = None
    if "grid" in data:
        try:
            states = [
                [parse_cell_state(cell["state"]) for cell in row]
                for row in data["grid"]
            ]
        except (KeyError, TypeError) as e:
            raise ValueError(f"Malformed grid in move file: {e}") from e
        if len(states) != puzzle.rows or any(len(row) != puzzle.columns for row in states):
            raise ValueError(
                f"Saved grid does not match puzzle size {puzzle.rows}x{puzzle.columns}"
            )

    colours = parse_colour_map(data["states"]) if "states" in data else {}

    puzzle.reset_grid()
    puzzle.colour_map.update(colours)
    if states is not None:
        puzzle.load_grid(states)

    logger.info(f"Loaded moves for '{puzzle.name}' from {path}")
