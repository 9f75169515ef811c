"""Helpers to build positions for the tests (imported by conftest.py and the test modules)"""

from src.chess.board import Board
from src.chess.pieces import Color, Piece, PieceType
from src.chess.square import Square

PIECE_CODES: dict[str, PieceType] = {
    "P": PieceType.PAWN,
    "N": PieceType.KNIGHT,
    "B": PieceType.BISHOP,
    "R": PieceType.ROOK,
    "Q": PieceType.QUEEN,
    "K": PieceType.KING,
}


def build_board(layout: dict[str, str]) -> Board:
    """
    Place pieces on an empty board, e.g. {"e1": "wK", "e8": "bK"}.
    First character is the color (w/b), second one the piece type.
    """
    board = Board.empty()
    for square_name, code in layout.items():
        color = Color.WHITE if code[0] == "w" else Color.BLACK
        board.place_piece(Piece(PIECE_CODES[code[1]], color), Square.from_algebraic(square_name))
    return board


def sq(name: str) -> Square:
    """Shorthand for readable test cases"""
    return Square.from_algebraic(name)


def squares(*names: str) -> set[Square]:
    return {sq(name) for name in names}
