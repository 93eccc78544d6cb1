"""
Test script for the puzzle model

Covers:
1. CellState and BlockConstraint values
2. PuzzleGrid cell access, undo and reset
3. Solved checks for lines and grids
4. Snapshot / restore
5. Puzzle loading and move persistence

Usage:
    python tests/test_puzzle.py
    pytest tests/
"""

import json
import sys
import tempfile
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.puzzle import (
    BlockConstraint,
    CellState,
    InvalidCoordinateError,
    PuzzleGrid,
    line_blocks,
    load_moves,
    load_puzzle,
    parse_cell_state,
    parse_puzzle,
    save_moves,
    state_symbol,
)

PUZZLE_DIR = Path(__file__).parent.parent / "puzzles"

U = CellState.UNKNOWN
E = CellState.EMPTY
C1 = CellState.COLOUR_1
C2 = CellState.COLOUR_2


def make_test_puzzle() -> PuzzleGrid:
    """2x2 colour puzzle that deduction solves on its own."""
    row_constraints = [
        [BlockConstraint(1, C2), BlockConstraint(1, C1)],
        [BlockConstraint(1, C1)],
    ]
    column_constraints = [
        [BlockConstraint(1, C2)],
        [BlockConstraint(2, C1)],
    ]
    return PuzzleGrid("Test Puzzle", row_constraints, column_constraints, 2, 2)


def solve_by_hand(puzzle: PuzzleGrid) -> None:
    """Play the three moves that solve the test puzzle."""
    puzzle.set_cell_state(1, 1, C1)
    puzzle.set_cell_state(0, 0, C2)
    puzzle.set_cell_state(0, 1, C1)


def test_cell_state_and_constraints():
    """Test CellState helpers and BlockConstraint validation."""
    print("\n" + "="*60)
    print("TEST: CellState / BlockConstraint")
    print("="*60)

    assert parse_cell_state("COLOUR_3") == CellState.COLOUR_3
    assert "".join(state_symbol(s) for s in CellState) == "?.1234"

    with pytest.raises(ValueError):
        parse_cell_state("PURPLE")
    with pytest.raises(ValueError):
        BlockConstraint(0, C1)
    with pytest.raises(ValueError):
        BlockConstraint(2, E)
    with pytest.raises(ValueError):
        BlockConstraint(True, C1)

    block = BlockConstraint.create(3)
    print(f"  Default block: {block}")
    assert block.state == C1

    blocks = line_blocks([C1, C1, U, C1, C2, E, C2])
    print(f"  Blocks of 11?12.2: {blocks}")
    assert blocks == [
        BlockConstraint(2, C1),
        BlockConstraint(1, C1),
        BlockConstraint(1, C2),
        BlockConstraint(1, C2),
    ]

    print("  [PASS] CellState / BlockConstraint tests")


def test_construction():
    """Test a fresh grid and constructor validation."""
    print("\n" + "="*60)
    print("TEST: PuzzleGrid construction")
    print("="*60)

    puzzle = make_test_puzzle()
    print(f"  Created {puzzle!r}")
    assert puzzle.get_grid() == [[U, U], [U, U]]
    assert puzzle.history_depth == 0
    assert puzzle.get_state_colour(C1) == (0, 0, 0)

    with pytest.raises(ValueError):
        PuzzleGrid("Bad", None, [[]], 1, 1)
    with pytest.raises(ValueError):
        PuzzleGrid("Bad", [None], [[]], 1, 1)
    with pytest.raises(ValueError):
        PuzzleGrid("Bad", [[], []], [[]], 1, 1)

    print("  [PASS] Construction tests")


def test_cell_access():
    """Test the bounds-checked getter and setter."""
    print("\n" + "="*60)
    print("TEST: Cell access")
    print("="*60)

    puzzle = make_test_puzzle()
    assert puzzle.get_cell_state(0, 0) == U
    assert puzzle.validate_coordinates(0, 1)

    puzzle.set_cell_state(1, 1, C1)
    assert puzzle.get_grid() == [[U, U], [U, C1]]
    assert puzzle.history_depth == 1

    # Writing the same value does not record a move
    puzzle.set_cell_state(1, 1, C1)
    assert puzzle.history_depth == 1

    for row, column in [(1, 2), (2, 0), (-1, 0), (0, -1)]:
        with pytest.raises(InvalidCoordinateError):
            puzzle.get_cell_state(row, column)
        with pytest.raises(IndexError):
            puzzle.set_cell_state(row, column, C1)
    print("  Out-of-range coordinates rejected")

    with pytest.raises(InvalidCoordinateError):
        puzzle.get_row(2)
    with pytest.raises(InvalidCoordinateError):
        puzzle.get_column(-1)

    # Whole-line access only checks its own axis
    no_columns = PuzzleGrid("No columns", [(), ()], [], 2, 0)
    assert no_columns.get_row(1) == []
    assert no_columns.is_solved()
    no_rows = PuzzleGrid("No rows", [], [(), (), ()], 0, 3)
    assert no_rows.get_column(2) == []
    assert no_rows.is_solved()

    print("  [PASS] Cell access tests")


def test_undo_and_reset():
    """Test undo, reset_moves and reset_grid."""
    print("\n" + "="*60)
    print("TEST: Undo / reset")
    print("="*60)

    puzzle = make_test_puzzle()
    assert puzzle.undo() is False
    assert puzzle.reset_moves() is False
    assert puzzle.get_grid() == [[U, U], [U, U]]

    solve_by_hand(puzzle)
    assert puzzle.get_grid() == [[C2, C1], [U, C1]]

    assert puzzle.undo() is True
    assert puzzle.get_grid() == [[C2, U], [U, C1]]
    assert puzzle.undo() is True
    assert puzzle.get_grid() == [[U, U], [U, C1]]
    assert puzzle.undo() is True
    assert puzzle.get_grid() == [[U, U], [U, U]]
    assert puzzle.undo() is False

    solve_by_hand(puzzle)
    assert puzzle.reset_moves() is True
    assert puzzle.get_grid() == [[U, U], [U, U]]
    assert puzzle.history_depth == 0

    solve_by_hand(puzzle)
    puzzle.reset_grid()
    assert puzzle.get_grid() == [[U, U], [U, U]]
    assert puzzle.undo() is False

    print("  [PASS] Undo / reset tests")


def test_history_is_independent():
    """Popped history entries never alias the live grid."""
    print("\n" + "="*60)
    print("TEST: History independence")
    print("="*60)

    puzzle = make_test_puzzle()
    puzzle.set_cell_state(0, 0, C2)
    puzzle.set_cell_state(0, 1, C1)

    copy = puzzle.get_grid_copy()
    copy[0, 0] = int(E)
    assert puzzle.get_cell_state(0, 0) == C2

    puzzle.undo()
    puzzle.set_cell_state(1, 0, E)
    puzzle.undo()
    assert puzzle.get_grid() == [[C2, U], [U, U]]

    print("  [PASS] History independence tests")


def test_line_solved():
    """Test is_line_solved with known and unknown cells."""
    print("\n" + "="*60)
    print("TEST: is_line_solved")
    print("="*60)

    two_colours = (BlockConstraint(1, C2), BlockConstraint(1, C1))
    one_block = (BlockConstraint(1, C1),)

    assert PuzzleGrid.is_line_solved([C2, C1], two_colours)
    assert PuzzleGrid.is_line_solved([U, C1], one_block)
    assert PuzzleGrid.is_line_solved([C2, U], (BlockConstraint(1, C2),))
    assert PuzzleGrid.is_line_solved([C1, C1], (BlockConstraint(2, C1),))
    assert not PuzzleGrid.is_line_solved([U, C1], two_colours)
    assert not PuzzleGrid.is_line_solved([C1, C1], one_block)
    assert not PuzzleGrid.is_line_solved([C2, E], one_block)
    assert PuzzleGrid.is_line_solved([E, E, U], ())

    print("  [PASS] is_line_solved tests")


def test_grid_solved():
    """A grid is solved when its known cells reproduce every clue."""
    print("\n" + "="*60)
    print("TEST: is_solved")
    print("="*60)

    puzzle = make_test_puzzle()
    assert not puzzle.is_solved()

    solve_by_hand(puzzle)
    print(f"  Grid:\n{puzzle}")
    assert puzzle.count_unknown() == 1
    assert puzzle.is_solved()

    print("  [PASS] is_solved tests")


def test_snapshot_restore():
    """Restore returns the grid cell-for-cell and drops later history."""
    print("\n" + "="*60)
    print("TEST: Snapshot / restore")
    print("="*60)

    puzzle = make_test_puzzle()
    puzzle.set_cell_state(1, 1, C1)
    snapshot = puzzle.snapshot()
    before = puzzle.get_grid()

    puzzle.set_row(0, [C2, C1])
    puzzle.set_column(0, [C2, E])
    assert puzzle.history_depth == 4

    puzzle.restore(snapshot)
    assert puzzle.get_grid() == before
    assert puzzle.history_depth == 1

    # Restoring twice from the same snapshot still works
    puzzle.set_cell_state(0, 0, C2)
    puzzle.restore(snapshot)
    assert puzzle.get_grid() == before

    print("  [PASS] Snapshot / restore tests")


def test_load_puzzle():
    """Test loading the example puzzle files."""
    print("\n" + "="*60)
    print("TEST: load_puzzle")
    print("="*60)

    heart = load_puzzle(PUZZLE_DIR / "heart.json")
    print(f"  Loaded {heart!r}")
    assert (heart.rows, heart.columns) == (5, 5)
    assert heart.row_constraints[0] == (BlockConstraint(1, C1), BlockConstraint(1, C1))
    assert heart.get_state_colour(E) == (255, 255, 255)

    flag = load_puzzle(PUZZLE_DIR / "flag.json")
    assert flag.column_constraints[2] == (BlockConstraint(3, C2),)
    assert flag.get_state_colour(C1) == (0xD6, 0x28, 0x28)

    with pytest.raises(ValueError):
        parse_puzzle({"name": "No columns", "rows": []})
    with pytest.raises(ValueError):
        parse_puzzle({"name": "Bad colour", "rows": [[{"count": 1, "color": "PINK"}]],
                      "columns": [[{"count": 1}]]})

    # Counts must be real integers, not floats or booleans
    for count in (2.5, True, "2"):
        with pytest.raises(ValueError):
            parse_puzzle({"name": "Bad count", "rows": [[{"count": count}]],
                          "columns": [[{"count": 1}]]})

    # Unknown palette entries are skipped, not fatal
    puzzle = parse_puzzle({
        "name": "Palette",
        "rows": [[{"count": 1}]],
        "columns": [[{"count": 1}]],
        "states": {"COLOUR_1": "#112233", "COLOUR_9": "#000000", "EMPTY": "not a colour"},
    })
    assert puzzle.colour_map == {C1: (0x11, 0x22, 0x33)}

    print("  [PASS] load_puzzle tests")


def test_save_and_load_moves():
    """Test move files round trip through a fresh puzzle."""
    print("\n" + "="*60)
    print("TEST: save_moves / load_moves")
    print("="*60)

    puzzle = make_test_puzzle()
    solve_by_hand(puzzle)

    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "moves.json"
        save_moves(puzzle, path)

        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        assert data["name"] == "Test Puzzle"
        assert data["grid"][0] == [{"state": "COLOUR_2"}, {"state": "COLOUR_1"}]
        assert data["states"]["COLOUR_1"] == "#000000"

        fresh = make_test_puzzle()
        load_moves(fresh, path)
        assert fresh.get_grid() == [[C2, C1], [U, C1]]
        assert fresh.history_depth == 0

        other = PuzzleGrid("Other", [[]], [[]], 1, 1)
        with pytest.raises(ValueError):
            load_moves(other, path)

        # A malformed move file leaves the current progress alone
        progress = make_test_puzzle()
        progress.set_cell_state(1, 1, C1)
        broken_files = [
            dict(data, grid=data["grid"][:1]),
            dict(data, grid=[[{"state": "COLOUR_2"}, {"state": "MAUVE"}], data["grid"][1]]),
            dict(data, grid=[[{"colour": "EMPTY"}, {"state": "EMPTY"}], data["grid"][1]]),
        ]
        for broken in broken_files:
            with open(path, 'w', encoding='utf-8') as f:
                json.dump(broken, f)
            with pytest.raises(ValueError):
                load_moves(progress, path)
            assert progress.get_grid() == [[U, U], [U, C1]]
            assert progress.history_depth == 1

    print("  [PASS] save_moves / load_moves tests")


def main():
    """Run all tests."""
    print("\n" + "#"*60)
    print("# PUZZLE MODEL TESTS")
    print("#"*60)

    tests = [
        ("CellState / BlockConstraint", test_cell_state_and_constraints),
        ("Construction", test_construction),
        ("Cell access", test_cell_access),
        ("Undo / reset", test_undo_and_reset),
        ("History independence", test_history_is_independent),
        ("is_line_solved", test_line_solved),
        ("is_solved", test_grid_solved),
        ("Snapshot / restore", test_snapshot_restore),
        ("load_puzzle", test_load_puzzle),
        ("Move files", test_save_and_load_moves),
    ]

    results = []
    for name, test in tests:
        try:
            test()
            results.append((name, True))
        except AssertionError as e:
            print(f"  [FAIL] {e}")
            results.append((name, False))

    print("\n" + "="*60)
    print("SUMMARY")
    print("="*60)

    all_passed = True
    for name, passed in results:
        status = "PASS" if passed else "FAIL"
        print(f"  {name}: [{status}]")
        if not passed:
            all_passed = False

    print()
    if all_passed:
        print("All tests PASSED!")
        return 0
    else:
        print("Some tests FAILED!")
        return 1


if __name__ == "__main__":
    sys.exit(main())
