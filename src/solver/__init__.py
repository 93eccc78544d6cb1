"""
Solver Package - Line fill enumeration, deduction and guessing for nonograms.

This package provides a pluggable strategy framework for solving
nonogram puzzles. Strategies can be selected at runtime by name.

Public API:
    - generate_line_fills(): All valid fills of a single line
    - LineRef / Axis: Address of a row or column
    - SolveContext: Shared limits and guess budget
    - SolveResult / SolveMetrics: Outcome of a strategy run
    - SolverStrategy: Abstract base for strategies
    - Solver: Deduction-only strategy ("deduction")
    - Guesser: Deduction + backtracking strategy ("guess")
    - create_strategy(): Factory function
    - get_strategy_names(): List available strategies
    - get_strategy_info(): Get strategy metadata

Usage:
    from src.puzzle import load_puzzle
    from src.solver import create_strategy

    puzzle = load_puzzle("puzzles/heart.json")

    strategy = create_strategy("guess", puzzle)
    result = strategy.run()

    if result.solved:
        print(puzzle)
"""

# Core data structures
from .line import Axis, LineRef
from .line_fill import Fill, generate_line_fills, remaining_length
from .solution import SolveResult, SolveMetrics
from .context import SolveContext, DEFAULT_MAX_ITERATIONS, DEFAULT_MAX_GUESSES

# Strategy framework
from .base import SolverStrategy
from .factory import (
    create_strategy,
    get_strategy_names,
    get_strategy_info,
    get_default_strategy_name,
    register_strategy,
    resolve_strategy_name,
)

# Import strategies to register them
from . import strategies
from .strategies import Solver, Guesser, merge_line_fills

__all__ = [
    # Data structures
    "Axis",
    "LineRef",
    "Fill",
    "SolveResult",
    "SolveMetrics",
    "SolveContext",
    "DEFAULT_MAX_ITERATIONS",
    "DEFAULT_MAX_GUESSES",
    # Line fills
    "generate_line_fills",
    "remaining_length",
    "merge_line_fills",
    # Strategy framework
    "SolverStrategy",
    "create_strategy",
    "get_strategy_names",
    "get_strategy_info",
    "get_default_strategy_name",
    "register_strategy",
    "resolve_strategy_name",
    # Strategies
    "Solver",
    "Guesser",
]
