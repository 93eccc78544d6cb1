"""
Line Module - Addresses a single row or column of the grid.
"""

from dataclasses import dataclass
from enum import Enum, auto


class Axis(Enum):
    """Dimension a line runs along."""
    ROW = auto()
    COLUMN = auto()


@dataclass(frozen=True)
class LineRef:
    """
    A row or column of the puzzle.

    Attributes:
        axis: Axis.ROW or Axis.COLUMN
        index: Row or column index
    """
    axis: Axis
    index: int

    @classmethod
    def row(cls, index: int) -> 'LineRef':
        return cls(axis=Axis.ROW, index=index)

    @classmethod
    def column(cls, index: int) -> 'LineRef':
        return cls(axis=Axis.COLUMN, index=index)

    @property
    def is_row(self) -> bool:
        return self.axis is Axis.ROW

    def __str__(self) -> str:
        return f"{'row' if self.is_row else 'column'} {self.index}"
