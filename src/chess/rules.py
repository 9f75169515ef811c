"""
Check detection and the legality filter.

A legal move is a pseudo-legal move (see moves.py) that does not leave the mover's own king in check.
We find out by playing the move on the board inside a reversible transaction and asking the check detector.
"""

from typing import Optional

from src.chess.board import Board, BoardPatch
from src.chess.castling import CastlingDirection, CastlingSquares, castling_direction_of
from src.chess.moves import (
    Move,
    en_passant_victim_square,
    pawn_attack_squares,
    pseudo_legal_moves,
)
from src.chess.pieces import Color, PieceType
from src.chess.square import Square


# --- CHECK DETECTOR ---
def is_square_attacked(
    board: Board, square: Square, by_color: Color, last_move: Optional[Move] = None
) -> bool:
    """
    Could a piece of `by_color` capture on the square?

    Pawns attack their two forward diagonals (occupied or not) and never the square they push to.
    Every other piece attacks the targets of its pseudo-legal moves.

    NOTE: Uses the movement rules directly (never the legality filter), otherwise the two would recurse into each other.
    """
    for attacker_square in board.locate_color(by_color):
        if board.piece(attacker_square).type == PieceType.PAWN:
            if square in pawn_attack_squares(attacker_square, by_color):
                return True
            continue

        moves = pseudo_legal_moves(attacker_square, board, last_move)
        if any(move.to_square == square for move in moves):
            return True
    return False


def is_in_check(board: Board, color: Color, last_move: Optional[Move] = None) -> bool:
    """
    Is the king of the given color attacked?

    A board without that king is treated as 'not in check'. It cannot happen in a real game,
    but must not crash the status evaluation either.
    """
    king_square = board.locate_king(color)
    if king_square is None:
        return False
    return is_square_attacked(board, king_square, color.opponent, last_move)


# --- LEGALITY FILTER ---
def move_patch(board: Board, move: Move) -> BoardPatch:
    """The squares a move changes (castling rook relocation is simulated separately, one king step at a time)"""
    changes = {
        move.from_square: None,
        move.to_square: board.piece(move.from_square),
    }
    if move.is_en_passant:
        changes[en_passant_victim_square(move)] = None
    return BoardPatch(changes)


def leaves_king_in_check(board: Board, move: Move) -> bool:
    """Play the move in a transaction and check if the mover's own king is attacked afterwards"""
    color = board.piece(move.from_square).color
    with board.simulate(move_patch(board, move)):
        return is_in_check(board, color, last_move=move)


def castling_moves(board: Board, king_square: Square, last_move: Optional[Move] = None) -> list[Move]:
    """
    Candidate castling moves for the king on the given square.
    ---

    **you are allowed to castle if**

    * Neither the king nor the rook of choice have moved before.
    * All squares in between the two pieces are empty.
    * You are not currently in check (you cannot castle out of check).
    * The king does not pass through or land on an attacked square.
    """
    king = board.piece(king_square)
    if king is None or king.type != PieceType.KING or king.has_moved:
        return []

    if is_in_check(board, king.color, last_move):
        return []

    moves: list[Move] = []
    for direction in CastlingDirection:
        squares = CastlingSquares.from_king_square(king_square, direction)
        if squares.king_to not in squares.path():
            # king is not standing far enough from the corner
            continue

        rook = board.piece(squares.rook_from)
        if rook is None or rook.type != PieceType.ROOK or rook.color != king.color:
            continue
        if rook.has_moved:
            continue

        if board.is_any_occupied(squares.path()):
            continue

        # walk the king one square at a time, every stop must be safe
        if any(
            leaves_king_in_check(board, Move(king_square, step))
            for step in squares.king_transit()
        ):
            continue

        moves.append(Move(king_square, squares.king_to, is_castling=True))
    return moves


def legal_moves(board: Board, square: Square, last_move: Optional[Move] = None) -> list[Move]:
    """
    List of legal moves for the piece on the square
    ----

    1. generate candidate moves, using the basic movement rules (incl. en passant)
    2. remove the ones that put (or leave) you in check
    3. a king additionally gets the castling moves that pass their own checks
    """
    piece = board.piece(square)
    if piece is None:
        return []

    moves = [
        move
        for move in pseudo_legal_moves(square, board, last_move)
        if not leaves_king_in_check(board, move)
    ]
    if piece.type == PieceType.KING:
        moves.extend(castling_moves(board, square, last_move))
    return moves


def has_any_legal_move(board: Board, color: Color, last_move: Optional[Move] = None) -> bool:
    return any(legal_moves(board, square, last_move) for square in board.locate_color(color))


def is_castling_move(board: Board, move: Move) -> bool:
    """Two-column king move"""
    piece = board.piece(move.from_square)
    if piece is None or piece.type != PieceType.KING:
        return False
    return castling_direction_of(move.from_square, move.to_square) is not None
