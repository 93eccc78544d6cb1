"""
Nonogram Solver - Entry Point

Loads a puzzle file, solves it with the selected strategy and reports
whether the puzzle could be completely solved.

Example:
    python main.py puzzles/heart.json
    python main.py puzzles/flag.json --strategy deduction
    python main.py puzzles/heart.json --save-moves heart_moves.json
"""

import sys
import logging
import argparse
from typing import Any, Dict, Optional

from src.puzzle import PuzzleGrid, load_puzzle, save_moves
from src.solver import (
    SolveContext,
    SolveResult,
    create_strategy,
    get_strategy_info,
    get_strategy_names,
    resolve_strategy_name,
)
from src.settings import load_settings, save_settings, validate_settings


logger = logging.getLogger(__name__)

EXIT_SOLVED = 0
EXIT_UNSOLVED = 1
EXIT_ERROR = 2


def configure_logging(debug: bool, log_file: str = "solver.log") -> None:
    """Configure logging - output to both console and file."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        handlers=[
            logging.StreamHandler(),  # Console output
            logging.FileHandler(log_file, mode='w', encoding='utf-8')  # File output
        ]
    )


def parse_args(argv: Optional[list] = None):
    """Parse command line arguments."""
    strategies = ", ".join(
        f"{info['name']} ({info['description']})" for info in get_strategy_info()
    )
    parser = argparse.ArgumentParser(
        description="Nonogram Solver - Solve picture logic puzzles by deduction and guessing",
        epilog=f"Strategies: {strategies}"
    )
    parser.add_argument(
        "puzzle",
        help="Path to a JSON puzzle file"
    )
    parser.add_argument(
        "--strategy", "-s",
        choices=get_strategy_names(),
        help="Solving strategy (default: from config.json, else guess)"
    )
    parser.add_argument(
        "--max-guesses",
        type=int,
        help="Guess budget for the backtracking search"
    )
    parser.add_argument(
        "--max-iterations",
        type=int,
        help="Deduction passes before giving up"
    )
    parser.add_argument(
        "--save-moves",
        metavar="PATH",
        help="Save the resulting grid to a JSON move file"
    )
    parser.add_argument(
        "--config",
        metavar="PATH",
        help="Settings file (default: config.json)"
    )
    parser.add_argument(
        "--remember",
        action="store_true",
        help="Store the effective strategy and limits in the settings file"
    )
    parser.add_argument(
        "--log-file",
        metavar="PATH",
        default="solver.log",
        help="Log file written alongside console output (default: solver.log)"
    )
    parser.add_argument(
        "--debug", "-d",
        action="store_true",
        help="Enable debug logging"
    )
    return parser.parse_args(argv)


def resolve_settings(args, settings: Dict[str, Any]) -> Dict[str, Any]:
    """Apply CLI overrides on top of saved settings."""
    effective = dict(settings)
    if args.strategy:
        effective["strategy_name"] = args.strategy
    if args.max_guesses is not None:
        effective["max_guesses"] = args.max_guesses
    if args.max_iterations is not None:
        effective["max_iterations"] = args.max_iterations
    if args.debug:
        effective["debug_enabled"] = True
    effective = validate_settings(effective)
    effective["strategy_name"] = resolve_strategy_name(effective["strategy_name"])
    return effective


def solve_puzzle(puzzle: PuzzleGrid, settings: Dict[str, Any]) -> SolveResult:
    """
    Run the configured strategy on a puzzle.

    Args:
        puzzle: Puzzle to solve in place
        settings: Effective settings

    Returns:
        SolveResult of the run
    """
    context = SolveContext(
        max_iterations=int(settings["max_iterations"]),
        max_guesses=int(settings["max_guesses"]),
    )
    strategy = create_strategy(settings["strategy_name"], puzzle, context=context)
    logger.info(f"Solving '{puzzle.name}' with strategy: {strategy.name}")
    return strategy.run()


def report(puzzle: PuzzleGrid, result: SolveResult) -> None:
    """Print the outcome of a solve."""
    if result.solved:
        print(f"Puzzle '{puzzle.name}' solved.")
    else:
        print(f"Could not completely solve the puzzle '{puzzle.name}'.")

    metrics = result.metrics
    print(
        f"  {metrics.computation_time_ms:.1f}ms, {metrics.passes} passes, "
        f"{metrics.cells_deduced} cells deduced, {metrics.guesses_made} guesses, "
        f"{metrics.backtracks} backtracks, {result.unknown_cells} cells unknown"
    )
    print(puzzle)


def main(argv: Optional[list] = None) -> int:
    """Load, solve and report a puzzle."""
    args = parse_args(argv)

    settings = load_settings(args.config)
    effective = resolve_settings(args, settings)
    configure_logging(bool(effective["debug_enabled"]), args.log_file)

    try:
        puzzle = load_puzzle(args.puzzle)
    except (OSError, TypeError, ValueError) as e:
        logger.error(f"Failed to load puzzle {args.puzzle}: {e}")
        return EXIT_ERROR

    try:
        result = solve_puzzle(puzzle, effective)
    except (TypeError, ValueError) as e:
        logger.error(f"Invalid settings: {e}")
        return EXIT_ERROR

    report(puzzle, result)

    if args.save_moves:
        try:
            save_moves(puzzle, args.save_moves)
        except OSError as e:
            logger.error(f"Failed to save moves: {e}")
            return EXIT_ERROR

    if args.remember:
        save_settings(effective, args.config)

    return EXIT_SOLVED if result.solved else EXIT_UNSOLVED


if __name__ == "__main__":
    sys.exit(main())
