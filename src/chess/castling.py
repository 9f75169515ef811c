"""Helpers for implementing Castling rules. Need to be imported by multiple sources"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Self

from src.chess.square import BOARD_DIMENSIONS, Square


class CastlingDirection(Enum):
    """Values are the column of the rook the king castles with."""

    KING_SIDE = BOARD_DIMENSIONS[1] - 1
    QUEEN_SIDE = 0

    @property
    def step(self) -> int:
        """Column direction the king travels in"""
        return 1 if self == CastlingDirection.KING_SIDE else -1


@dataclass(frozen=True)
class CastlingSquares:
    """
    Store the squares where king/rook start from/end up in by castling.
    The king travels two columns towards the rook, the rook lands on the square the king passed through.
    """

    king_from: Square
    king_to: Square
    rook_from: Square
    rook_to: Square

    @classmethod
    def from_king_square(cls, king_square: Square, direction: CastlingDirection) -> Self:
        step = direction.step
        return cls(
            king_from=king_square,
            king_to=king_square.offset(0, 2 * step),
            rook_from=Square(king_square.row, direction.value),
            rook_to=king_square.offset(0, step),
        )

    def path(self) -> list[Square]:
        """Squares strictly between king and rook: all of them must be empty"""
        low, high = sorted((self.king_from.col, self.rook_from.col))
        return [Square(self.king_from.row, col) for col in range(low + 1, high)]

    def king_transit(self) -> list[Square]:
        """Squares the king passes through and lands on: none of them may be attacked"""
        return [self.rook_to, self.king_to]


def castling_direction_of(from_square: Square, to_square: Square) -> Optional[CastlingDirection]:
    """A king move spanning two columns on its own row is a castling move"""
    if from_square.row != to_square.row:
        return None
    difference_in_cols = to_square.col - from_square.col
    if difference_in_cols == 2:
        return CastlingDirection.KING_SIDE
    if difference_in_cols == -2:
        return CastlingDirection.QUEEN_SIDE
    return None
