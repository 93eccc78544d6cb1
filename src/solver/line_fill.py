"""
Line Fill Module - Enumerates every valid fill of a single line.

A fill is a complete assignment of EMPTY / COLOUR_x to every cell of a
row or column that places the line's blocks in order and agrees with
every cell already known.

Separator rule:
    A single EMPTY cell is mandatory after a block only when the next
    block has the same colour, or when the block ends exactly at the end
    of the line. Blocks of different colours may otherwise touch.
"""

from typing import List, Sequence, Tuple

from src.puzzle import BlockConstraint, CellState, can_be_empty

Fill = Tuple[CellState, ...]


def remaining_length(constraints: Sequence[BlockConstraint], start_index: int) -> int:
    """
    Minimum number of cells needed by the blocks from start_index onward.

    Sums the block lengths plus one separator for every adjacent pair of
    same-colour blocks.

    Args:
        constraints: Block constraints of the line
        start_index: First block to count

    Returns:
        Total cells required
    """
    total = 0
    for i in range(start_index, len(constraints)):
        total += constraints[i].length
        if i > start_index and constraints[i].state == constraints[i - 1].state:
            total += 1
    return total


def generate_line_fills(constraints: Sequence[BlockConstraint],
                        line: Sequence[CellState]) -> List[Fill]:
    """
    Generate every fill of a line consistent with its constraints and known cells.

    Args:
        constraints: Block constraints of the line, in placement order
        line: Current cell states of the line

    Returns:
        Fills in placement order (leftmost placements first). An empty
        list means the line cannot be satisfied from its current state.
    """
    length = len(line)
    if not constraints:
        return [tuple([CellState.EMPTY] * length)]

    fills: List[Fill] = []
    _place_block(fills, [], tuple(constraints), 0, 0, tuple(line))
    return fills


def _place_block(fills: List[Fill], so_far: List[CellState],
                 constraints: Tuple[BlockConstraint, ...], position: int,
                 block_index: int, line: Tuple[CellState, ...]) -> None:
    """
    Place constraints[block_index] at every legal start from position onward.

    Args:
        fills: Collected complete fills
        so_far: Cells fixed for line[0:position]
        constraints: Block constraints of the line
        position: First cell not yet fixed
        block_index: Block to place next
        line: Current cell states of the line
    """
    length = len(line)

    # All blocks placed: the rest of the line must be blank
    if block_index == len(constraints):
        for i in range(position, length):
            if not can_be_empty(line[i]):
                return
        fills.append(tuple(so_far) + (CellState.EMPTY,) * (length - position))
        return

    block = constraints[block_index]
    max_start = length - remaining_length(constraints, block_index)
    is_last = block_index == len(constraints) - 1

    for start in range(position, max_start + 1):
        # A filled cell in the gap rules out this start and every later one
        if start > position and not can_be_empty(line[start - 1]):
            return

        end = start + block.length
        if end > length:
            continue
        if any(line[i] != CellState.UNKNOWN and line[i] != block.state
               for i in range(start, end)):
            continue

        needs_separator = False
        if not is_last:
            next_block = constraints[block_index + 1]
            needs_separator = next_block.state == block.state or end >= length

        placed = list(so_far)
        placed.extend([CellState.EMPTY] * (start - position))
        placed.extend([block.state] * block.length)

        next_position = end
        if needs_separator and end < length:
            if not can_be_empty(line[end]):
                continue
            placed.append(CellState.EMPTY)
            next_position += 1

        _place_block(fills, placed, constraints, next_position, block_index + 1, line)
