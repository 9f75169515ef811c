"""
The ChessGame class is the entrypoint into the domain layer for the service layer.
It is responsible for orchestrating all the rules required to play a turn: which moves are legal, committing one,
promotion, undo and the game status afterwards.

NOTE: No exceptions for control flow here. A rejected move / undo / promotion is reported through the return value
and leaves the game untouched.
"""

from dataclasses import dataclass, field
from typing import Optional, Self

from loguru import logger

from src.chess.board import Board
from src.chess.castling import CastlingSquares, castling_direction_of
from src.chess.history import MoveHistory, MoveRecord
from src.chess.moves import Move, en_passant_victim_square, is_pawn_push_to_promotion_square
from src.chess.pieces import PROMOTION_OPTIONS, Color, Piece, PieceType
from src.chess.rules import is_castling_move, legal_moves
from src.chess.square import Square
from src.chess.status import GameStatus, evaluate_status


@dataclass(frozen=True)
class PendingPromotion:
    """A pawn on the far rank, waiting for the player to pick the piece type"""

    square: Square
    color: Color


@dataclass(frozen=True)
class MoveResult:
    """
    Outcome of a move attempt.

    NOTE: While `promotion_pending` is set, `status` is evaluated with the pawn still on the far rank. It may read
    CHECKMATE or STALEMATE, but the game only ends (and gets a winner) once `resolve_promotion` settles the piece type.
    """

    committed: bool
    status: GameStatus
    promotion_pending: Optional[PendingPromotion] = None


@dataclass(frozen=True)
class SelectionResult:
    """Outcome of clicking a square: what is selected now, where it may go, and the move made (if any)"""

    selected: Optional[Square]
    targets: tuple[Square, ...] = ()
    move_result: Optional[MoveResult] = None


def _no_captures() -> dict[Color, list[Piece]]:
    return {Color.WHITE: [], Color.BLACK: []}


@dataclass
class ChessGame:
    board: Board = field(default_factory=Board.standard)
    current_player: Color = Color.WHITE
    history: MoveHistory = field(default_factory=MoveHistory)
    # pieces captured BY the given color
    captured_pieces: dict[Color, list[Piece]] = field(default_factory=_no_captures)
    last_move: Optional[Move] = None
    status: GameStatus = GameStatus.IN_PROGRESS
    game_over: bool = False
    pending_promotion: Optional[PendingPromotion] = None
    selected_square: Optional[Square] = None
    log_moves: bool = True

    @classmethod
    def new_game(cls, log_moves: bool = True) -> Self:
        """Standard starting position, white to move"""
        return cls(log_moves=log_moves)

    @classmethod
    def from_board(cls, board: Board, color_to_move: Color = Color.WHITE, log_moves: bool = True) -> Self:
        """Start from a custom position. The status is evaluated right away (the position may already be decided)."""
        game = cls(board=board, current_player=color_to_move, log_moves=log_moves)
        game._update_game_status()
        return game

    # -- QUERIES ---
    @property
    def move_history(self) -> tuple[MoveRecord, ...]:
        return self.history.records

    @property
    def winner(self) -> Optional[Color]:
        """
        For now only works for checkmate.
        The player who is requested to move just got mated, so the opponent must be the winner
        """
        if not self.game_over or self.status != GameStatus.CHECKMATE:
            return None
        return self.current_player.opponent

    def legal_moves(self, square: Square) -> list[Square]:
        """Destination squares for the piece on the square (drives the highlights in a UI)"""
        if self.game_over or self.pending_promotion is not None:
            return []
        return [move.to_square for move in self._legal_moves_from(square)]

    # -- COMMANDS ---
    def execute_move(self, from_square: Square, to_square: Square) -> MoveResult:
        """
        Attempt to make a move
        -----

        1. snapshot the position into a MoveRecord
        2. en passant: remove the pawn that got passed
        3. capture whatever stands on the target square
        4. move the piece (NOTE: if castling, move the king and the rook)
        5. pawn on the far rank? hold the move until the promotion gets resolved
        6. update the history, the last move and the player to move
        7. update game status
        """
        move = self._find_legal_move(from_square, to_square)
        self.selected_square = None
        if move is None:
            logger.debug(
                f"chess.game.execute_move rejected from={from_square} to={to_square} status={self.status.name}"
            )
            return MoveResult(committed=False, status=self.status)

        piece = self.board.piece(from_square)
        castling = is_castling_move(self.board, move)
        promotes = is_pawn_push_to_promotion_square(move, self.board)
        en_passant_capture = self._en_passant_capture(move, piece)

        record = MoveRecord.before_move(
            move, self.board, self.status, en_passant_capture=en_passant_capture
        )

        if en_passant_capture is not None:
            self.board.remove_piece(en_passant_victim_square(move))
            self.captured_pieces[piece.color].append(en_passant_capture)

        captured_piece = self.board.piece(to_square)
        if captured_piece is not None:
            self.captured_pieces[piece.color].append(captured_piece)

        self.board.move_piece(from_square, to_square)
        piece.mark_moved()

        # castling is a single move: the rook travels along
        if castling:
            self._move_castling_rook(move)

        if promotes:
            self.pending_promotion = PendingPromotion(to_square, piece.color)

        self.history.commit(record)
        self.last_move = record.move
        self.current_player = self.current_player.opponent

        self._update_game_status()

        if self.log_moves:
            logger.debug(
                f"chess.game.execute_move move={record.describe()} status={self.status.name} "
                f"promotion_pending={self.pending_promotion is not None}"
            )
        return MoveResult(
            committed=True, status=self.status, promotion_pending=self.pending_promotion
        )

    def resolve_promotion(self, square: Square, piece_type: PieceType) -> bool:
        """Second half of a promotion move: turn the waiting pawn into the chosen piece type"""
        pending = self.pending_promotion
        if pending is None or pending.square != square:
            return False
        if piece_type not in PROMOTION_OPTIONS:
            return False

        self.board.piece(square).promote_to(piece_type)
        self.pending_promotion = None

        # the new piece may give check (or mate), so look at the position again
        self._update_game_status()
        logger.debug(
            f"chess.game.resolve_promotion square={square.to_algebraic()} "
            f"piece={piece_type.name.lower()} status={self.status.name}"
        )
        return True

    def undo(self) -> bool:
        """Take back the last move. Not possible once the game has ended."""
        if self.game_over:
            return False

        record = self.history.pop()
        if record is None:
            return False

        self.board = record.board_before.copy()

        # remove the entries that this move added to the captured pieces
        captured = self.captured_pieces[record.player]
        for _ in range(record.captures_added):
            captured.pop()

        self.current_player = record.player
        self.status = record.status_before
        previous = self.history.last()
        self.last_move = previous.move if previous else None
        self.pending_promotion = None
        self.selected_square = None

        logger.debug(f"chess.game.undo move={record.describe()} history={len(self.history)}")
        return True

    def reset(self) -> None:
        """Back to the standard starting position"""
        self.board = Board.standard()
        self.current_player = Color.WHITE
        self.history.clear()
        self.captured_pieces = _no_captures()
        self.last_move = None
        self.status = GameStatus.IN_PROGRESS
        self.game_over = False
        self.pending_promotion = None
        self.selected_square = None

    def select_square(self, square: Square) -> SelectionResult:
        """
        Click handling
        ---

        * nothing selected: select one of your own pieces (anything else is ignored)
        * piece selected, clicked one of its targets: make the move
        * piece selected, clicked another of your own pieces: select that one instead
        * otherwise: clear the selection
        """
        if self.game_over or self.pending_promotion is not None:
            return self._selection()

        if self.selected_square is not None:
            if square in self.legal_moves(self.selected_square):
                result = self.execute_move(self.selected_square, square)
                return SelectionResult(selected=None, move_result=result)

            if self._is_own_piece(square):
                self.selected_square = square
            else:
                self.selected_square = None
            return self._selection()

        if self._is_own_piece(square):
            self.selected_square = square
        return self._selection()

    # -- PRIVATE HELPERS ---
    def _legal_moves_from(self, square: Square) -> list[Move]:
        if not square.is_within_bounds():
            return []
        return legal_moves(self.board, square, self.last_move)

    def _find_legal_move(self, from_square: Square, to_square: Square) -> Optional[Move]:
        """The matching legal move, if it is the turn of the piece on `from_square`"""
        if self.game_over or self.pending_promotion is not None:
            return None
        if not self._is_own_piece(from_square):
            return None
        return next(
            (move for move in self._legal_moves_from(from_square) if move.to_square == to_square),
            None,
        )

    def _is_own_piece(self, square: Square) -> bool:
        if not square.is_within_bounds():
            return False
        piece = self.board.piece(square)
        return piece is not None and piece.color == self.current_player

    def _en_passant_capture(self, move: Move, piece: Piece) -> Optional[Piece]:
        """A diagonal pawn move onto an empty square can only be en passant"""
        is_diagonal = move.from_square.col != move.to_square.col
        if piece.type != PieceType.PAWN or not is_diagonal:
            return None
        if self.board.piece(move.to_square) is not None:
            return None
        return self.board.piece(en_passant_victim_square(move))

    def _move_castling_rook(self, king_move: Move) -> None:
        direction = castling_direction_of(king_move.from_square, king_move.to_square)
        squares = CastlingSquares.from_king_square(king_move.from_square, direction)
        self.board.move_piece(squares.rook_from, squares.rook_to)
        self.board.piece(squares.rook_to).mark_moved()

    def _update_game_status(self) -> None:
        """
        Looks at the position from the perspective of the player to move.

        NOTE: While a promotion is pending the piece on the far rank is still a pawn. The status gets reported, but the
        game only ends once the promotion is resolved (the chosen piece may change the verdict).
        """
        self.status = evaluate_status(self.board, self.current_player, self.last_move)
        self.game_over = self.status.is_terminal and self.pending_promotion is None
        if self.game_over:
            logger.info(
                f"chess.game.over status={self.status.name} "
                f"winner={self.winner.name.lower() if self.winner else None}"
            )

    def _selection(self) -> SelectionResult:
        if self.selected_square is None:
            return SelectionResult(selected=None)
        return SelectionResult(
            selected=self.selected_square,
            targets=tuple(self.legal_moves(self.selected_square)),
        )
