"""
Solution Module - Result of running a solving strategy.
"""

from dataclasses import dataclass, field
from typing import List

from src.puzzle import CellState


@dataclass
class SolveMetrics:
    """
    Performance metrics for one solve.

    Attributes:
        computation_time_ms: Time taken in milliseconds
        passes: Deduction passes over all rows and columns
        cells_deduced: Cell writes made by deduction
        guesses_made: Guess-and-check calls
        backtracks: Guesses undone after failing
        strategy_name: Name of strategy that produced the result
    """
    computation_time_ms: float = 0.0
    passes: int = 0
    cells_deduced: int = 0
    guesses_made: int = 0
    backtracks: int = 0
    strategy_name: str = ""


@dataclass
class SolveResult:
    """
    Outcome of a strategy run.

    Attributes:
        solved: True if every row and column matches its constraints
        grid: Copy of the grid when the run finished
        metrics: Performance statistics
    """
    solved: bool = False
    grid: List[List[CellState]] = field(default_factory=list)
    metrics: SolveMetrics = field(default_factory=SolveMetrics)

    @property
    def unknown_cells(self) -> int:
        """Number of cells left UNKNOWN."""
        return sum(1 for row in self.grid for cell in row if cell == CellState.UNKNOWN)

    @property
    def is_complete(self) -> bool:
        """Solved with every cell determined."""
        return self.solved and self.unknown_cells == 0
