"""
Deduction Strategy - Fixed-point line propagation without guessing.

Repeatedly intersects the valid fills of every row and column, fixing
each cell on which all fills agree, until a pass changes nothing, the
grid is solved, or the iteration cap is reached.
"""

import logging
from typing import List, Sequence

import numpy as np

from src.puzzle import CellState

from ..base import SolverStrategy
from ..factory import register_strategy
from ..line import LineRef
from ..line_fill import Fill

logger = logging.getLogger(__name__)


def merge_line_fills(fills: Sequence[Fill]) -> List[CellState]:
    """
    Merge the fills of a line into the most deducible line.

    A position takes a value when every fill agrees on it, or when
    exactly one non-UNKNOWN value appears there across all fills.
    Otherwise it stays UNKNOWN.

    Args:
        fills: Valid fills of one line (at least one)

    Returns:
        Merged line
    """
    if not fills:
        return []

    stacked = np.array(fills, dtype=np.int8)
    first = stacked[0]
    agreed = (stacked == first).all(axis=0)

    merged = [CellState.UNKNOWN] * stacked.shape[1]
    for position in range(stacked.shape[1]):
        if agreed[position]:
            merged[position] = CellState(int(first[position]))
            continue
        values = set(np.unique(stacked[:, position]).tolist())
        values.discard(int(CellState.UNKNOWN))
        if len(values) == 1:
            merged[position] = CellState(values.pop())
    return merged


@register_strategy
class Solver(SolverStrategy):
    """
    Deductive solver that never guesses an undetermined cell.

    A line that cannot be filled at all simply makes no progress; the
    failure only shows up in the final solved check.
    """
    name = "deduction"
    description = "Deduction only - line-by-line propagation, no guessing"

    def solve(self, allow_guessing: bool = False) -> bool:
        """
        Propagate deductions until a fixed point.

        Args:
            allow_guessing: Tells the caller whether a Guesser should take
                over on failure. Never triggers guessing here.

        Returns:
            True if the puzzle is solved
        """
        iterations = 0
        while iterations < self.context.max_iterations:
            iterations += 1
            self.metrics.passes += 1

            changed = 0
            for line in self.all_lines():
                changed += self._process_line(line)

            logger.debug(f"[Solver] Pass {iterations}: {changed} cells changed")

            if self.puzzle.is_solved():
                logger.debug(f"[Solver] Solved after {iterations} passes")
                return True
            if changed == 0:
                break

        solved = self.puzzle.is_solved()
        if not solved:
            logger.debug(
                f"[Solver] Stalled after {iterations} passes, "
                f"{self.puzzle.count_unknown()} cells unknown"
                f"{' (guessing allowed)' if allow_guessing else ''}"
            )
        return solved

    def _process_line(self, line: LineRef) -> int:
        """
        Apply deduction to one line.

        Args:
            line: Row or column to process

        Returns:
            Number of cells changed
        """
        current = self.get_line(line)
        constraints = self.get_constraints(line)

        # Already satisfied: whatever is still unknown must be blank
        if self.puzzle.is_line_solved(current, constraints):
            blanked = [
                CellState.EMPTY if cell == CellState.UNKNOWN else cell
                for cell in current
            ]
            return self._write(line, blanked)

        fills = self.line_fills(line)
        if not fills:
            logger.debug(f"[Solver] No valid fills for {line}")
            return 0

        return self._write(line, merge_line_fills(fills))

    def _write(self, line: LineRef, states: Sequence[CellState]) -> int:
        changed = self.set_line(line, states)
        self.metrics.cells_deduced += changed
        return changed

