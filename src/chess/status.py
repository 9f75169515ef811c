"""Game status evaluation: what does the position mean for the side to move?"""

from enum import Enum, auto
from typing import Optional

from src.chess.board import Board
from src.chess.moves import Move
from src.chess.pieces import Color
from src.chess.rules import has_any_legal_move, is_in_check


class GameStatus(Enum):
    IN_PROGRESS = auto()
    CHECK = auto()
    CHECKMATE = auto()
    STALEMATE = auto()

    @property
    def is_terminal(self) -> bool:
        return self in (GameStatus.CHECKMATE, GameStatus.STALEMATE)


def evaluate_status(board: Board, color_to_move: Color, last_move: Optional[Move] = None) -> GameStatus:
    """
    | legal move available | in check | status      |
    |----------------------|----------|-------------|
    | no                   | yes      | CHECKMATE   |
    | no                   | no       | STALEMATE   |
    | yes                  | yes      | CHECK       |
    | yes                  | no       | IN_PROGRESS |
    """

    in_check = is_in_check(board, color_to_move, last_move)
    can_move = has_any_legal_move(board, color_to_move, last_move)

    if not can_move:
        return GameStatus.CHECKMATE if in_check else GameStatus.STALEMATE
    return GameStatus.CHECK if in_check else GameStatus.IN_PROGRESS
