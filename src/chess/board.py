"""The Game board: an 8x8 grid of (optional) pieces. Holds no rule knowledge."""

from __future__ import annotations

from contextlib import contextmanager
from copy import deepcopy
from dataclasses import dataclass, field
from typing import Iterator, Mapping, Optional, Self

from src.chess.pieces import BACK_RANK_ORDER, Color, Piece, PieceType
from src.chess.square import BOARD_DIMENSIONS, Square
from src.core.exceptions import InvalidSquareError

Grid = list[list[Optional[Piece]]]


def _empty_grid() -> Grid:
    return [[None] * BOARD_DIMENSIONS[1] for _ in range(BOARD_DIMENSIONS[0])]


@dataclass(frozen=True)
class BoardPatch:
    """
    A set of square contents to write onto the board.

    Applying a patch returns its inverse, so the pair (patch, inverse) forms a transaction that leaves the board
    exactly as it was.
    """

    changes: Mapping[Square, Optional[Piece]]


@dataclass
class Board:
    grid: Grid = field(default_factory=_empty_grid)

    @classmethod
    def empty(cls) -> Self:
        return cls()

    @classmethod
    def standard(cls) -> Self:
        """Standard starting position: black on rows 0/1, white on rows 6/7"""
        board = cls()
        for col, piece_type in enumerate(BACK_RANK_ORDER):
            board.place_piece(Piece(piece_type, Color.BLACK), Square(0, col))
            board.place_piece(Piece(PieceType.PAWN, Color.BLACK), Square(1, col))
            board.place_piece(Piece(PieceType.PAWN, Color.WHITE), Square(6, col))
            board.place_piece(Piece(piece_type, Color.WHITE), Square(7, col))
        return board

    # -- ACCESSORS ---
    @staticmethod
    def is_on_board(square: Square) -> bool:
        return square.is_within_bounds()

    def piece(self, square: Square) -> Optional[Piece]:
        self._assert_on_board(square)
        return self.grid[square.row][square.col]

    def place_piece(self, piece: Optional[Piece], square: Square) -> None:
        self._assert_on_board(square)
        self.grid[square.row][square.col] = piece

    def remove_piece(self, square: Square) -> Optional[Piece]:
        """Empty the square, handing back whatever stood there"""
        removed = self.piece(square)
        self.place_piece(None, square)
        return removed

    def is_empty(self, square: Square) -> bool:
        return self.piece(square) is None

    def is_any_occupied(self, squares: list[Square]) -> bool:
        return any(not self.is_empty(square) for square in squares)

    def squares(self) -> Iterator[Square]:
        for row in range(BOARD_DIMENSIONS[0]):
            for col in range(BOARD_DIMENSIONS[1]):
                yield Square(row, col)

    def locate_color(self, color: Color) -> list[Square]:
        return [
            square
            for square in self.squares()
            if (piece := self.piece(square)) is not None and piece.color == color
        ]

    def locate_pieces(self, piece_type: PieceType, color: Color) -> list[Square]:
        return [
            square
            for square in self.locate_color(color)
            if self.piece(square).type == piece_type
        ]

    def locate_king(self, color: Color) -> Optional[Square]:
        """None signals a modelling error (e.g. a hand-built test board), never a legal game state"""
        kings = self.locate_pieces(PieceType.KING, color)
        return kings[0] if kings else None

    def count_kings(self, color: Color) -> int:
        return len(self.locate_pieces(PieceType.KING, color))

    # -- MUTATION ---
    def move_piece(self, from_square: Square, to_square: Square) -> None:
        """Update the position on the board (whatever stood on the target square is overwritten)"""
        piece_that_moved = self.remove_piece(from_square)
        self.place_piece(piece_that_moved, to_square)

    def apply_patch(self, patch: BoardPatch) -> BoardPatch:
        """Write the patch and return the inverse patch that undoes it"""
        inverse = BoardPatch({square: self.piece(square) for square in patch.changes})
        for square, piece in patch.changes.items():
            self.place_piece(piece, square)
        return inverse

    @contextmanager
    def simulate(self, patch: BoardPatch) -> Iterator[Self]:
        """Temporarily apply the patch. On exit the board is restored exactly, also when an exception is raised."""
        inverse = self.apply_patch(patch)
        try:
            yield self
        finally:
            self.apply_patch(inverse)

    def copy(self) -> Self:
        """Deep copy: pieces are copied too, so later mutations of `has_moved` / promotions do not leak"""
        return deepcopy(self)

    def _assert_on_board(self, square: Square) -> None:
        if not square.is_within_bounds():
            raise InvalidSquareError(f"Square {square} is not on the board.")
