"""
Base Strategy Module - Abstract base class for solving strategies.
"""

import time
from abc import ABC, abstractmethod
from typing import Iterator, List, Optional, Sequence

from src.puzzle import CellState, LineConstraints, PuzzleGrid

from .context import SolveContext
from .line import LineRef
from .line_fill import Fill, generate_line_fills
from .solution import SolveMetrics, SolveResult


class SolverStrategy(ABC):
    """
    Abstract base class for all solving strategies.

    Subclasses must implement the solve() method and define
    name and description class attributes. Strategies work in place on
    the puzzle they are given.

    Attributes:
        name: Short identifier for the strategy
        description: Human-readable description for the CLI
    """
    name: str = "base"
    description: str = "Base strategy"

    def __init__(self, puzzle: PuzzleGrid,
                 context: Optional[SolveContext] = None,
                 metrics: Optional[SolveMetrics] = None):
        """
        Initialize strategy.

        Args:
            puzzle: Puzzle to solve in place
            context: Shared limits and guess budget (fresh one if None)
            metrics: Metrics to accumulate into (fresh one if None)
        """
        self.puzzle = puzzle
        self.context = context if context is not None else SolveContext()
        self.metrics = metrics if metrics is not None else SolveMetrics(strategy_name=self.name)

    @abstractmethod
    def solve(self) -> bool:
        """
        Solve the puzzle as far as this strategy can.

        Returns:
            True if the grid ends fully solved
        """
        pass

    def run(self) -> SolveResult:
        """
        Solve and package the outcome with timing metrics.

        Returns:
            SolveResult with the final grid
        """
        start_time = time.perf_counter()
        solved = self.solve()
        self.metrics.computation_time_ms = (time.perf_counter() - start_time) * 1000

        return SolveResult(
            solved=solved,
            grid=self.puzzle.get_grid(),
            metrics=self.metrics,
        )

    def all_lines(self) -> Iterator[LineRef]:
        """Every row, then every column."""
        for i in range(self.puzzle.rows):
            yield LineRef.row(i)
        for j in range(self.puzzle.columns):
            yield LineRef.column(j)

    def get_constraints(self, line: LineRef) -> LineConstraints:
        if line.is_row:
            return self.puzzle.row_constraints[line.index]
        return self.puzzle.column_constraints[line.index]

    def get_line(self, line: LineRef) -> List[CellState]:
        if line.is_row:
            return self.puzzle.get_row(line.index)
        return self.puzzle.get_column(line.index)

    def set_line(self, line: LineRef, states: Sequence[CellState]) -> int:
        """
        Write a line through the checked setter, touching only changed cells.

        Args:
            line: Row or column to write
            states: New cell states for the whole line

        Returns:
            Number of cells whose value changed
        """
        current = self.get_line(line)
        changed = 0
        for position, (old, new) in enumerate(zip(current, states)):
            if old == new:
                continue
            if line.is_row:
                self.puzzle.set_cell_state(line.index, position, new)
            else:
                self.puzzle.set_cell_state(position, line.index, new)
            changed += 1
        return changed

    def line_fills(self, line: LineRef) -> List[Fill]:
        """All fills of a line consistent with the current grid."""
        return generate_line_fills(self.get_constraints(line), self.get_line(line))
