"""
Puzzle Grid Module - Mutable nonogram grid with constraints and undo history.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np

from .cell_state import CellState, state_symbol
from .constraint import BlockConstraint, LineConstraints, line_blocks
from .palette import RGB, ColourMap, default_colour_map

logger = logging.getLogger(__name__)


class InvalidCoordinateError(IndexError):
    """Raised when a cell accessor is given an out-of-range row or column."""

    def __init__(self, row: Optional[int], column: Optional[int]):
        if column is None:
            message = f"Invalid row index: {row}"
        elif row is None:
            message = f"Invalid column index: {column}"
        else:
            message = f"Invalid cell coordinates: ({row}, {column})"
        super().__init__(message)
        self.row = row
        self.column = column


@dataclass(frozen=True)
class GridSnapshot:
    """
    Restore point for reversible search.

    Attributes:
        grid: Independent copy of the cell array
        history_depth: Undo history length when the snapshot was taken
    """
    grid: np.ndarray
    history_depth: int


def _freeze_constraints(constraints, kind: str) -> tuple:
    if constraints is None:
        raise ValueError(f"{kind} constraints cannot be None")
    frozen = []
    for index, line in enumerate(constraints):
        if line is None:
            raise ValueError(f"{kind} constraints for line {index} cannot be None")
        frozen.append(tuple(line))
    return tuple(frozen)


class PuzzleGrid:
    """
    A nonogram puzzle: clues, the current grid, and the move history.

    The grid is a numpy int8 array of CellState values and is only
    mutated through the bounds-checked setter (or snapshot restore).
    Every write that changes a cell first pushes an independent copy
    of the whole grid onto the history stack, so undo() steps back one
    cell change at a time.
    """

    def __init__(self, name: str,
                 row_constraints: Sequence[Sequence[BlockConstraint]],
                 column_constraints: Sequence[Sequence[BlockConstraint]],
                 rows: int, columns: int,
                 colour_map: Optional[ColourMap] = None):
        """
        Initialize an all-UNKNOWN puzzle.

        Args:
            name: Puzzle name (used to match saved move files)
            row_constraints: One constraint sequence per row
            column_constraints: One constraint sequence per column
            rows: Number of rows
            columns: Number of columns
            colour_map: Display colours per state (black and white default)

        Raises:
            ValueError: If constraints are missing or do not match the dimensions
        """
        self._name = name
        self._row_constraints = _freeze_constraints(row_constraints, "Row")
        self._column_constraints = _freeze_constraints(column_constraints, "Column")

        if rows != len(self._row_constraints):
            raise ValueError(
                f"Puzzle has {rows} rows but {len(self._row_constraints)} row constraints"
            )
        if columns != len(self._column_constraints):
            raise ValueError(
                f"Puzzle has {columns} columns but {len(self._column_constraints)} column constraints"
            )

        self._colour_map: ColourMap = (
            dict(colour_map) if colour_map is not None else default_colour_map()
        )
        self._grid = np.full((rows, columns), CellState.UNKNOWN, dtype=np.int8)
        self._history: List[np.ndarray] = []

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------
    @property
    def name(self) -> str:
        return self._name

    @property
    def rows(self) -> int:
        """Number of rows in the grid."""
        return self._grid.shape[0]

    @property
    def columns(self) -> int:
        """Number of columns in the grid."""
        return self._grid.shape[1]

    @property
    def row_constraints(self) -> tuple:
        return self._row_constraints

    @property
    def column_constraints(self) -> tuple:
        return self._column_constraints

    @property
    def colour_map(self) -> ColourMap:
        return self._colour_map

    @property
    def history_depth(self) -> int:
        """Number of moves that can be undone."""
        return len(self._history)

    def get_state_colour(self, state: CellState) -> Optional[RGB]:
        """Display colour for a state, or None if the palette lacks it."""
        return self._colour_map.get(CellState(state))

    # -------------------------------------------------------------------------
    # Grid lifecycle and history
    # -------------------------------------------------------------------------
    def initialise_grid(self) -> None:
        """Fill the grid with UNKNOWN."""
        self._grid.fill(CellState.UNKNOWN)

    def reset_grid(self) -> None:
        """Reset the grid to its loaded state and clear the undo history."""
        self.initialise_grid()
        self._history.clear()
        logger.debug(f"Grid '{self._name}' reset to UNKNOWN")

    def get_grid_copy(self) -> np.ndarray:
        """Independent copy of the cell array."""
        return self._grid.copy()

    def get_grid(self) -> List[List[CellState]]:
        """Independent copy of the grid as nested lists of CellState."""
        return [[CellState(int(value)) for value in row] for row in self._grid]

    def save_state(self) -> None:
        """Push a copy of the current grid onto the history stack."""
        self._history.append(self.get_grid_copy())

    def undo(self) -> bool:
        """
        Undo the last cell change.

        Returns:
            True if a move was undone, False if there was nothing to undo
        """
        if not self._history:
            return False
        self._grid = self._history.pop()
        return True

    def reset_moves(self) -> bool:
        """
        Undo every recorded move.

        Returns:
            True if moves were reset, False if the history was already empty
        """
        if not self._history:
            return False
        while self._history:
            self._grid = self._history.pop()
        return True

    def snapshot(self) -> GridSnapshot:
        """Capture the grid and history depth for a later restore()."""
        return GridSnapshot(grid=self.get_grid_copy(), history_depth=len(self._history))

    def restore(self, snapshot: GridSnapshot) -> None:
        """
        Return the grid exactly to a snapshot.

        History entries pushed after the snapshot are discarded so an
        abandoned search branch leaves nothing to undo.
        """
        if snapshot.grid.shape != self._grid.shape:
            raise ValueError(
                f"Snapshot shape {snapshot.grid.shape} does not match grid {self._grid.shape}"
            )
        self._grid = snapshot.grid.copy()
        del self._history[snapshot.history_depth:]

    def load_grid(self, states: Sequence[Sequence[CellState]]) -> None:
        """
        Replace the whole grid, e.g. from a saved move file.

        Clears the undo history.

        Raises:
            ValueError: If the shape does not match the puzzle
        """
        grid = np.array([[CellState(state) for state in row] for row in states], dtype=np.int8)
        if grid.shape != self._grid.shape:
            raise ValueError(f"Grid shape {grid.shape} does not match puzzle {self._grid.shape}")
        self._grid = grid
        self._history.clear()
        logger.debug(f"Grid '{self._name}' loaded, {self.count_unknown()} cells unknown")

    # -------------------------------------------------------------------------
    # Cell access
    # -------------------------------------------------------------------------
    def validate_coordinates(self, row: int, column: int) -> bool:
        """
        Check that a cell lies inside the grid.

        Raises:
            InvalidCoordinateError: If row or column is out of range
        """
        if row < 0 or row >= self.rows or column < 0 or column >= self.columns:
            raise InvalidCoordinateError(row, column)
        return True

    def get_cell_state(self, row: int, column: int) -> CellState:
        self.validate_coordinates(row, column)
        return CellState(int(self._grid[row, column]))

    def set_cell_state(self, row: int, column: int, state: CellState) -> None:
        """
        Set a cell, recording the previous grid only if the value changes.

        Raises:
            InvalidCoordinateError: If row or column is out of range
        """
        self.validate_coordinates(row, column)
        state = CellState(state)
        if self._grid[row, column] != state:
            self.save_state()
            self._grid[row, column] = state

    def get_row(self, row: int) -> List[CellState]:
        if row < 0 or row >= self.rows:
            raise InvalidCoordinateError(row, None)
        return [CellState(int(value)) for value in self._grid[row, :]]

    def get_column(self, column: int) -> List[CellState]:
        if column < 0 or column >= self.columns:
            raise InvalidCoordinateError(None, column)
        return [CellState(int(value)) for value in self._grid[:, column]]

    def set_row(self, row: int, states: Sequence[CellState]) -> None:
        for column, state in enumerate(states):
            self.set_cell_state(row, column, state)

    def set_column(self, column: int, states: Sequence[CellState]) -> None:
        for row, state in enumerate(states):
            self.set_cell_state(row, column, state)

    def count_unknown(self) -> int:
        """Number of cells still UNKNOWN."""
        return int(np.count_nonzero(self._grid == CellState.UNKNOWN))

    # -------------------------------------------------------------------------
    # Solved checks
    # -------------------------------------------------------------------------
    def is_solved(self) -> bool:
        """True if every row and column matches its constraints."""
        for i, constraints in enumerate(self._row_constraints):
            if not self.is_line_solved(self.get_row(i), constraints):
                return False
        for j, constraints in enumerate(self._column_constraints):
            if not self.is_line_solved(self.get_column(j), constraints):
                return False
        return True

    @staticmethod
    def is_line_solved(line: Sequence[CellState], constraints: LineConstraints) -> bool:
        """
        Check whether the known cells of a line reproduce its constraints.

        UNKNOWN cells break blocks like EMPTY ones, so a line with
        UNKNOWN cells is still solved when its known cells alone give
        the exact block sequence.
        """
        blocks = line_blocks(line)
        if len(blocks) != len(constraints):
            return False
        for actual, expected in zip(blocks, constraints):
            if actual.length != expected.length or actual.state != expected.state:
                return False
        return True

    def __str__(self) -> str:
        return "\n".join(
            "".join(state_symbol(int(value)) for value in row) for row in self._grid
        )

    def __repr__(self) -> str:
        return f"PuzzleGrid(name={self._name!r}, rows={self.rows}, columns={self.columns})"
