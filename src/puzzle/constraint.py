"""
Block Constraint Module - One contiguous coloured run of a line clue.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .cell_state import CellState, FILLED_STATES


@dataclass(frozen=True)
class BlockConstraint:
    """
    A single block of a row or column clue.

    A line's constraint sequence is a tuple of BlockConstraint in
    placement order (left to right, top to bottom).

    Attributes:
        length: Number of consecutive cells in the block (>= 1)
        state: Colour of the block (one of the COLOUR_x states)
    """
    length: int
    state: CellState

    def __post_init__(self):
        if isinstance(self.length, bool) or not isinstance(self.length, int) or self.length < 1:
            raise ValueError(f"Block length must be a positive integer, got {self.length!r}")
        if self.state not in FILLED_STATES:
            raise ValueError(f"Block colour must be a filled state, got {self.state!r}")

    @classmethod
    def create(cls, length: int,
               state: CellState = CellState.COLOUR_1) -> 'BlockConstraint':
        """
        Create a block, defaulting to the single "filled" colour.

        Args:
            length: Block length
            state: Block colour (default COLOUR_1)

        Returns:
            BlockConstraint instance
        """
        return cls(length=length, state=CellState(state))


LineConstraints = Tuple[BlockConstraint, ...]


def line_blocks(line: Sequence[CellState]) -> List[BlockConstraint]:
    """
    Run-length encode the known filled cells of a line.

    Adjacent cells of the same colour form one block. EMPTY and
    UNKNOWN cells both end the current block.

    Args:
        line: Cell states of one row or column

    Returns:
        Blocks found in the line, in order
    """
    blocks: List[BlockConstraint] = []
    current: Optional[CellState] = None
    length = 0

    for cell in line:
        if cell in FILLED_STATES:
            if cell == current:
                length += 1
                continue
            if current is not None:
                blocks.append(BlockConstraint(length, current))
            current = CellState(cell)
            length = 1
        elif current is not None:
            blocks.append(BlockConstraint(length, current))
            current = None
            length = 0

    if current is not None:
        blocks.append(BlockConstraint(length, current))

    return blocks
