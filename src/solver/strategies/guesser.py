"""
Guess Strategy - Deduction plus depth-first backtracking over whole lines.

When deduction stalls, picks the most constrained undetermined line
(fewest valid fills), tries each fill in turn, and runs deduction and a
further guess on top of it. Failed branches are rolled back from a
grid snapshot. The search is bounded by the guess budget shared through
the SolveContext, not by recursion depth.
"""

import logging
from typing import Optional

from src.puzzle import CellState

from ..base import SolverStrategy
from ..factory import register_strategy
from ..line import LineRef
from ..line_fill import Fill
from .deduction import Solver

logger = logging.getLogger(__name__)


def _known_cells(fill: Fill) -> int:
    return sum(1 for state in fill if state != CellState.UNKNOWN)


@register_strategy
class Guesser(SolverStrategy):
    """
    Backtracking solver built on the deduction Solver.

    Algorithm:
        1. Run deduction; stop if solved
        2. Select the line with unknown cells and the fewest valid fills
           (rows scanned before columns, first found wins ties)
        3. For each fill of that line, least committed first:
           - snapshot the grid
           - apply the fill to the selected row or column
           - run deduction, then one more recursive guess
           - on success keep the grid, else restore the snapshot
        4. Give up when every fill failed or the guess budget is spent
    """
    name = "guess"
    description = "Deduction + guessing - backtracking over most constrained lines"

    def __init__(self, puzzle, context=None, metrics=None):
        super().__init__(puzzle, context, metrics)
        self._solver = Solver(puzzle, context=self.context, metrics=self.metrics)

    def solve(self) -> bool:
        """
        Solve by deduction, falling back to guessing.

        Returns:
            True if the grid ends fully solved
        """
        if self._solver.solve(allow_guessing=False):
            logger.info("[Guesser] Solved by deduction alone")
            return True

        solved = self._guess_and_check()
        logger.info(
            f"[Guesser] {'Solved' if solved else 'Could not solve'} after "
            f"{self.metrics.guesses_made} guesses, {self.metrics.backtracks} backtracks"
        )
        return solved

    def _guess_and_check(self) -> bool:
        """
        Guess one line and recurse.

        Returns:
            True if some sequence of guesses led to a solved grid
        """
        if not self.context.register_guess():
            logger.debug("[Guesser] Guess budget exhausted")
            return False
        self.metrics.guesses_made += 1

        line = self.find_most_constrained_line()
        if line is None:
            # Nothing left to guess
            return self.puzzle.is_solved()

        fills = self.line_fills(line)
        if not fills:
            return False

        fills.sort(key=_known_cells)
        logger.debug(f"[Guesser] Guessing {line}: {len(fills)} candidate fills")

        for fill in fills:
            snapshot = self.puzzle.snapshot()
            self.set_line(line, fill)

            solved_by_deduction = self._solver.solve(allow_guessing=False)
            solved_by_guessing = self._guess_and_check()

            if solved_by_deduction or solved_by_guessing:
                return True

            self.puzzle.restore(snapshot)
            self.metrics.backtracks += 1

        return False

    def find_most_constrained_line(self) -> Optional[LineRef]:
        """
        Find the undetermined line with the fewest valid fills.

        Rows are scanned before columns; the first line found wins ties.

        Returns:
            The selected row or column, or None if no cell is UNKNOWN
        """
        best: Optional[LineRef] = None
        min_fills = None

        for line in self.all_lines():
            if CellState.UNKNOWN not in self.get_line(line):
                continue
            count = len(self.line_fills(line))
            if min_fills is None or count < min_fills:
                min_fills = count
                best = line

        return best
