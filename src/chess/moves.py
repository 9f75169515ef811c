"""
Geometry/Base movement and capturing rules

Key idea: Use strategy pattern to define pseudo-legal move sets for each piece type.

Pseudo-legal = obeys the movement pattern and board occupancy, but ignores whether the mover's own king is left
in check. Legality is checked later in rules.py
"""

from dataclasses import dataclass
from typing import Callable, Optional, Protocol

from src.chess.pieces import Color, Piece, PieceType
from src.chess.square import BOARD_DIMENSIONS, Square


class Board(Protocol):
    """Just the parts the movement strategies need"""

    def piece(self, square: Square) -> Optional[Piece]: ...


Vector = tuple[int, int]


@dataclass(frozen=True)
class Move:
    """basic definition of a move to be made"""

    from_square: Square
    to_square: Square
    is_en_passant: bool = False
    is_castling: bool = False

    def describe(self) -> str:
        """Square names, e.g. 'e2-e4' (used in log lines)"""
        return f"{self.from_square.to_algebraic()}-{self.to_square.to_algebraic()}"


# -- DIRECTIONS ---
KNIGHT_DELTAS: list[Vector] = [
    (2, 1),
    (2, -1),
    (-2, 1),
    (-2, -1),
    (1, 2),
    (1, -2),
    (-1, 2),
    (-1, -2),
]
DIAGONALS: list[Vector] = [(1, 1), (-1, 1), (1, -1), (-1, -1)]
STRAIGHTS: list[Vector] = [(0, 1), (0, -1), (1, 0), (-1, 0)]
KING_DELTAS: list[Vector] = STRAIGHTS + DIAGONALS


# -- PAWN GEOMETRY ---
def pawn_direction(color: Color) -> int:
    """White pawns move UP the board (towards row 0), black pawns move DOWN (towards row 7)"""
    return -1 if color == Color.WHITE else 1


def pawn_start_row(color: Color) -> int:
    return BOARD_DIMENSIONS[0] - 2 if color == Color.WHITE else 1


def promotion_row(color: Color) -> int:
    """The opponent's back rank"""
    return 0 if color == Color.WHITE else BOARD_DIMENSIONS[0] - 1


def pawn_attack_squares(square: Square, color: Color) -> list[Square]:
    """The two diagonal squares in front of a pawn. A pawn attacks them whether or not anything stands there."""
    direction = pawn_direction(color)
    attacked: list[Square] = []
    for d_col in [-1, 1]:
        target_square = square.offset(direction, d_col)
        if target_square.is_within_bounds():
            attacked.append(target_square)
    return attacked


# --- MOVEMENT RULES ---
def raycasting_move(
    square: Square, board: Board, directions: list[Vector]
) -> list[Move]:
    """
    Raycasting algorithm
    -----

    The main trick we use to check the 'line of sight of a piece'.
    We define move directions and move along them until we hit another piece or
    the edge of the board.
    """
    player_color = board.piece(square).color

    moves: list[Move] = []
    for d_row, d_col in directions:
        target_square = square
        while True:
            target_square = target_square.offset(d_row, d_col)
            if not target_square.is_within_bounds():
                break

            piece_found = board.piece(target_square)
            if piece_found is not None:
                # only the first occupied square counts, and only if it is the opponent's: then it can be captured.
                if piece_found.color != player_color:
                    moves.append(Move(from_square=square, to_square=target_square))
                break

            moves.append(Move(from_square=square, to_square=target_square))
    return moves


def single_step_move(square: Square, board: Board, deltas: list[Vector]) -> list[Move]:
    """Raycasting is for sliding pieces. This is the equivalent for kings and knights that just jump a single step along a direction"""
    player_color = board.piece(square).color

    moves: list[Move] = []
    for d_row, d_col in deltas:
        target_square = square.offset(d_row, d_col)
        if not target_square.is_within_bounds():
            continue

        piece_found = board.piece(target_square)
        if piece_found is None or piece_found.color != player_color:
            moves.append(Move(from_square=square, to_square=target_square))

    return moves


def candidate_pawn_moves(square: Square, board: Board) -> list[Move]:
    """
    A pawn:
    - moves by a single square forward, onto an empty square.
    - It can move by two in their first move (so when on their starting row), if both squares are empty
    - takes diagonally

    NOTE: En passant depends on the previous move, see `en_passant_moves()`
    """
    color = board.piece(square).color
    direction = pawn_direction(color)
    moves: list[Move] = []

    # Pawn pushes
    one_step = square.offset(direction, 0)
    if one_step.is_within_bounds() and board.piece(one_step) is None:
        moves.append(Move(from_square=square, to_square=one_step))

        two_steps = square.offset(2 * direction, 0)
        if square.row == pawn_start_row(color) and board.piece(two_steps) is None:
            moves.append(Move(from_square=square, to_square=two_steps))

    # pawns take diagonally:
    for target_square in pawn_attack_squares(square, color):
        piece_found = board.piece(target_square)
        if piece_found is not None and piece_found.color != color:
            moves.append(Move(from_square=square, to_square=target_square))
    return moves


def candidate_knight_moves(square: Square, board: Board) -> list[Move]:
    """Knights always move such that |delta_row| + |delta_col| = 3"""
    return single_step_move(square, board, KNIGHT_DELTAS)


def candidate_bishop_moves(square: Square, board: Board) -> list[Move]:
    """Bishops move diagonally: |delta_row| = |delta_col|"""
    return raycasting_move(square, board, DIAGONALS)


def candidate_rook_moves(square: Square, board: Board) -> list[Move]:
    """Rooks move either horizontally or vertically"""
    return raycasting_move(square, board, STRAIGHTS)


def candidate_queen_moves(square: Square, board: Board) -> list[Move]:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    horizontal_and_vertical_moves = candidate_rook_moves(square, board)
    diagonal_moves = candidate_bishop_moves(square, board)
    return horizontal_and_vertical_moves + diagonal_moves


def candidate_king_moves(square: Square, board: Board) -> list[Move]:
    """
    The king can move by a single square at the time.

    Castling is modelled as a special king move (added by the legality filter, as it depends on check detection).
    """
    return single_step_move(square, board, KING_DELTAS)


# -- STRATEGY PATTERN: MOVEMENT RULES ---
CandidateMovesFn = Callable[[Square, Board], list[Move]]
MOVEMENT_RULES: dict[PieceType, CandidateMovesFn] = {
    PieceType.PAWN: candidate_pawn_moves,
    PieceType.KNIGHT: candidate_knight_moves,
    PieceType.BISHOP: candidate_bishop_moves,
    PieceType.ROOK: candidate_rook_moves,
    PieceType.QUEEN: candidate_queen_moves,
    PieceType.KING: candidate_king_moves,
}


# -- EN PASSANT MOVES ---
def is_double_pawn_step(move: Move, board: Board) -> bool:
    """Did the pawn now standing on the target square just advance two rows from its starting row?"""
    piece = board.piece(move.to_square)
    if piece is None or piece.type != PieceType.PAWN:
        return False
    rows_moved = abs(move.to_square.row - move.from_square.row)
    return (
        move.from_square.row == pawn_start_row(piece.color)
        and move.from_square.col == move.to_square.col
        and rows_moved == 2
    )


def en_passant_moves(square: Square, board: Board, last_move: Optional[Move]) -> list[Move]:
    """
    Only available immediately after the opponent's pawn advanced two squares and landed right next to our pawn
    (same row, adjacent column). We capture by moving diagonally onto the square it skipped.
    """
    if last_move is None:
        return []

    pawn = board.piece(square)
    if pawn is None or pawn.type != PieceType.PAWN:
        return []

    passed_square = last_move.to_square
    is_adjacent = passed_square.row == square.row and abs(passed_square.col - square.col) == 1
    if not is_adjacent or not is_double_pawn_step(last_move, board):
        return []

    if board.piece(passed_square).color == pawn.color:
        return []

    target_square = square.offset(pawn_direction(pawn.color), passed_square.col - square.col)
    if not target_square.is_within_bounds() or board.piece(target_square) is not None:
        return []
    return [Move(from_square=square, to_square=target_square, is_en_passant=True)]


def en_passant_victim_square(move: Move) -> Square:
    """The captured pawn stands next to the mover's starting square, not on the landing square"""
    return Square(move.from_square.row, move.to_square.col)


def pseudo_legal_moves(square: Square, board: Board, last_move: Optional[Move] = None) -> list[Move]:
    """All movement rules for the piece on the square combined (castling excluded)"""
    piece = board.piece(square)
    if piece is None:
        return []

    movement_rule: CandidateMovesFn = MOVEMENT_RULES[piece.type]
    moves = movement_rule(square, board)
    if piece.type == PieceType.PAWN:
        moves.extend(en_passant_moves(square, board, last_move))
    return moves


# -- PAWN PROMOTION ---
def is_pawn_push_to_promotion_square(move: Move, board: Board) -> bool:
    """check if the move is a pawn move that reaches the opponent's back rank"""
    moving_piece = board.piece(move.from_square)
    if moving_piece is None or moving_piece.type != PieceType.PAWN:
        return False
    return move.to_square.row == promotion_row(moving_piece.color)
