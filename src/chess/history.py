"""Move history: an append-only log of full board snapshots, so undo restores a position exactly."""

from dataclasses import dataclass
from typing import Optional, Self

from src.chess.board import Board
from src.chess.moves import Move
from src.chess.pieces import Color, Piece
from src.chess.square import Square
from src.chess.status import GameStatus


@dataclass(frozen=True)
class MoveRecord:
    """
    Snapshot of everything needed to take a move back.

    NOTE: The whole board before the move is stored (instead of inverse-move logic): castling moves two pieces,
    en passant removes a piece off the target square and promotion changes the piece type.
    """

    from_square: Square
    to_square: Square
    player: Color
    moving_piece: Piece
    captured_piece: Optional[Piece]
    en_passant_capture: Optional[Piece]
    board_before: Board
    status_before: GameStatus

    @classmethod
    def before_move(
        cls,
        move: Move,
        board: Board,
        status: GameStatus,
        en_passant_capture: Optional[Piece] = None,
    ) -> Self:
        """Take the snapshots BEFORE the board gets updated"""
        moving_piece = board.piece(move.from_square)
        captured_piece = board.piece(move.to_square)
        return cls(
            from_square=move.from_square,
            to_square=move.to_square,
            player=moving_piece.color,
            moving_piece=moving_piece.snapshot(),
            captured_piece=captured_piece.snapshot() if captured_piece else None,
            en_passant_capture=en_passant_capture.snapshot() if en_passant_capture else None,
            board_before=board.copy(),
            status_before=status,
        )

    @property
    def move(self) -> Move:
        return Move(self.from_square, self.to_square)

    @property
    def captures_added(self) -> int:
        """How many entries this move appended to the mover's captured pieces"""
        return int(self.captured_piece is not None) + int(self.en_passant_capture is not None)

    def describe(self) -> str:
        """Move-list line, e.g. 'pawn e2-e4' or 'queen d1xd7'"""
        separator = "x" if self.captures_added else "-"
        return (
            f"{self.moving_piece.type.name.lower()} "
            f"{self.from_square.to_algebraic()}{separator}{self.to_square.to_algebraic()}"
        )


class MoveHistory:
    """History manager: commit appends, pop takes the last record back off."""

    def __init__(self) -> None:
        self._records: list[MoveRecord] = []

    def commit(self, record: MoveRecord) -> None:
        self._records.append(record)

    def pop(self) -> Optional[MoveRecord]:
        if not self._records:
            return None
        return self._records.pop()

    def last(self) -> Optional[MoveRecord]:
        return self._records[-1] if self._records else None

    def clear(self) -> None:
        self._records.clear()

    @property
    def records(self) -> tuple[MoveRecord, ...]:
        """Read-only view for the move-list display"""
        return tuple(self._records)

    def __len__(self) -> int:
        return len(self._records)
