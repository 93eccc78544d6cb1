"""
Strategy Factory Module - Registry and factory for strategy instantiation.

Strategies register themselves by name when `src.solver.strategies` is
imported. Names come from the CLI (validated by argparse) or from the
settings file (which may name a strategy that no longer exists).
"""

import logging
from typing import Dict, List, Optional, Type

from src.puzzle import PuzzleGrid

from .base import SolverStrategy
from .context import SolveContext
from .solution import SolveMetrics

logger = logging.getLogger(__name__)

# Global registry of strategies
_STRATEGIES: Dict[str, Type[SolverStrategy]] = {}

DEFAULT_STRATEGY = "guess"


def register_strategy(cls: Type[SolverStrategy]) -> Type[SolverStrategy]:
    """
    Decorator to register a strategy class under its `name`.

    Usage:
        @register_strategy
        class Guesser(SolverStrategy):
            name = "guess"
            ...

    Raises:
        TypeError: If cls is not a SolverStrategy subclass
        ValueError: If another class already uses the same name
    """
    if not (isinstance(cls, type) and issubclass(cls, SolverStrategy)):
        raise TypeError(f"{cls} must be a subclass of SolverStrategy")

    existing = _STRATEGIES.get(cls.name)
    if existing is not None and existing is not cls:
        raise ValueError(
            f"Strategy name '{cls.name}' already registered by {existing.__name__}"
        )
    _STRATEGIES[cls.name] = cls
    return cls


def create_strategy(name: str, puzzle: PuzzleGrid,
                    context: Optional[SolveContext] = None,
                    metrics: Optional[SolveMetrics] = None) -> SolverStrategy:
    """
    Create a strategy bound to a puzzle.

    Args:
        name: Registered strategy name ("deduction" or "guess")
        puzzle: Puzzle the strategy solves in place
        context: Limits and guess budget (fresh defaults if None)
        metrics: Metrics to accumulate into (fresh if None)

    Returns:
        Strategy instance

    Raises:
        ValueError: If strategy name not found
    """
    if name not in _STRATEGIES:
        available = ", ".join(_STRATEGIES.keys())
        raise ValueError(f"Unknown strategy: {name}. Available: {available}")
    return _STRATEGIES[name](puzzle, context=context, metrics=metrics)


def resolve_strategy_name(name: Optional[str]) -> str:
    """
    Map a possibly stale strategy name onto a registered one.

    Unknown or missing names fall back to the default strategy with a
    warning.
    """
    if name in _STRATEGIES:
        return name
    default = get_default_strategy_name()
    if name:
        logger.warning(f"Unknown strategy '{name}', falling back to '{default}'")
    return default


def get_strategy_names() -> List[str]:
    return list(_STRATEGIES.keys())


def get_strategy_info() -> List[Dict[str, str]]:
    """
    Get name and description for all registered strategies.

    Returns:
        List of dicts with 'name' and 'description' keys, default first
    """
    default = get_default_strategy_name()
    info = [
        {"name": cls.name, "description": cls.description}
        for cls in _STRATEGIES.values()
    ]
    info.sort(key=lambda entry: entry["name"] != default)
    return info


def get_default_strategy_name() -> str:
    """
    Get the default strategy name.

    Returns:
        "guess" if registered, else the first registered name, else ""
    """
    if DEFAULT_STRATEGY in _STRATEGIES:
        return DEFAULT_STRATEGY
    return next(iter(_STRATEGIES), "")
