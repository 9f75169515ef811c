"""
A square on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass

# Chess board is always 8x8 (rows, columns)
BOARD_DIMENSIONS = (8, 8)

FILE_NAMES = "abcdefgh"


@dataclass(frozen=True)
class Square:
    """
    Grid coordinate of a square.

    Row 0 is black's back rank, row 7 is white's back rank. Column 0 is the a-file.
    """

    row: int
    col: int

    @classmethod
    def from_algebraic(cls, sq: str) -> Square:
        """Square names: 'a8' is (0, 0), 'h1' is (7, 7)"""
        col = FILE_NAMES.index(sq[0].lower())
        row = BOARD_DIMENSIONS[0] - int(sq[1])
        return cls(row, col)

    def to_algebraic(self) -> str:
        return f"{FILE_NAMES[self.col]}{BOARD_DIMENSIONS[0] - self.row}"

    def is_within_bounds(self) -> bool:
        return (0 <= self.row < BOARD_DIMENSIONS[0]) and (
            0 <= self.col < BOARD_DIMENSIONS[1]
        )

    def offset(self, d_row: int, d_col: int) -> Square:
        """The square shifted by the given vector (may fall off the board)"""
        return Square(self.row + d_row, self.col + d_col)
