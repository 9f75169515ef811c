"""Defines the types of chess pieces"""

from dataclasses import dataclass, replace
from enum import Enum, auto
from typing import Self


class PieceType(Enum):
    PAWN = auto()
    KNIGHT = auto()
    BISHOP = auto()
    ROOK = auto()
    QUEEN = auto()
    KING = auto()


class Color(Enum):
    WHITE = auto()
    BLACK = auto()

    @property
    def opponent(self) -> "Color":
        return Color.BLACK if self == Color.WHITE else Color.WHITE


# A pawn reaching the far rank may become one of these
PROMOTION_OPTIONS: list[PieceType] = [
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
]

BACK_RANK_ORDER: list[PieceType] = [
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
]


@dataclass
class Piece:
    type: PieceType
    color: Color
    has_moved: bool = False

    def snapshot(self) -> Self:
        """Independent copy, so later mutations (moving, promoting) do not leak into history records"""
        return replace(self)

    def mark_moved(self) -> None:
        self.has_moved = True

    def promote_to(self, new_type: PieceType) -> None:
        self.type = new_type
