"""
Solve Context Module - Shared limits and guess budget for one solve.
"""

import time
from dataclasses import dataclass, field

# Deduction passes over all rows and columns before giving up
DEFAULT_MAX_ITERATIONS = 100

# Guesses allowed across the whole backtracking search
DEFAULT_MAX_GUESSES = 1000


@dataclass
class SolveContext:
    """
    Mutable state shared by every strategy taking part in one solve.

    Passed by reference from the Guesser to each recursive guess and to
    its deduction Solver, so the guess budget is counted once for the
    whole search.

    Attributes:
        max_iterations: Cap on deduction passes per Solver.solve() call
        max_guesses: Cap on guess-and-check calls across the search
        guess_count: Guess-and-check calls made so far
        start_time: When the solve started
    """
    max_iterations: int = DEFAULT_MAX_ITERATIONS
    max_guesses: int = DEFAULT_MAX_GUESSES
    guess_count: int = 0
    start_time: float = field(default_factory=time.time)

    def register_guess(self) -> bool:
        """
        Count one guess-and-check call against the budget.

        The bound is checked before counting, so the budget admits
        max_guesses + 1 calls.

        Returns:
            False if the budget was already exhausted
        """
        exhausted = self.guess_count > self.max_guesses
        self.guess_count += 1
        return not exhausted

    def guesses_remaining(self) -> int:
        """Calls left before the budget is exhausted (never negative)."""
        return max(0, self.max_guesses + 1 - self.guess_count)

    def elapsed_time(self) -> float:
        """
        Get seconds elapsed since the solve started.

        Returns:
            Elapsed time in seconds
        """
        return time.time() - self.start_time
