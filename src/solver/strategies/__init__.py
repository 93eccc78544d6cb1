"""
Strategies Package - Concrete strategy implementations.

Import this module to register all built-in strategies.
"""

from .deduction import Solver, merge_line_fills
from .guesser import Guesser

__all__ = [
    "Solver",
    "Guesser",
    "merge_line_fills",
]
