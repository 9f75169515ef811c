"""unit tests for src/chess/castling.py"""

from src.chess.castling import (
    CastlingDirection,
    CastlingSquares,
    Square,
    castling_direction_of,
)
from tests.helpers import sq


def test_king_side_castling_squares() -> None:
    squares = CastlingSquares.from_king_square(sq("e1"), CastlingDirection.KING_SIDE)
    assert squares.king_from == sq("e1")
    assert squares.king_to == sq("g1")
    assert squares.rook_from == sq("h1")
    assert squares.rook_to == sq("f1")
    assert squares.path() == [sq("f1"), sq("g1")]
    assert squares.king_transit() == [sq("f1"), sq("g1")]


def test_queen_side_castling_squares() -> None:
    """b-file square must be empty, but the king never crosses it"""
    squares = CastlingSquares.from_king_square(sq("e8"), CastlingDirection.QUEEN_SIDE)
    assert squares.king_to == sq("c8")
    assert squares.rook_from == sq("a8")
    assert squares.rook_to == sq("d8")
    assert squares.path() == [sq("b8"), sq("c8"), sq("d8")]
    assert squares.king_transit() == [sq("d8"), sq("c8")]


def test_castling_direction_of_king_moves() -> None:
    assert castling_direction_of(Square(7, 4), Square(7, 6)) == CastlingDirection.KING_SIDE
    assert castling_direction_of(Square(7, 4), Square(7, 2)) == CastlingDirection.QUEEN_SIDE
    assert castling_direction_of(Square(7, 4), Square(7, 5)) is None
    assert castling_direction_of(Square(7, 4), Square(5, 6)) is None
