"""Orchestration of communication from the rendering layer to the rules engine and session storage (and the reverse direction)."""

from typing import Optional
from uuid import UUID

from loguru import logger

from src.api.models import (
    ActionResponse,
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    LegalMovesRequest,
    LegalMovesResponse,
    MoveModel,
    MoveRecordModel,
    MoveRequest,
    MoveResponse,
    PieceModel,
    PromotionModel,
    PromotionRequest,
    ResetRequest,
    SelectionResponse,
    SelectSquareRequest,
    UndoRequest,
)
from src.chess.game import ChessGame, MoveResult, PendingPromotion
from src.chess.history import MoveRecord
from src.chess.pieces import Color as DomainColor
from src.chess.pieces import Piece
from src.chess.pieces import PieceType as DomainPieceType
from src.chess.square import Square
from src.core.config import ChessSettings, settings
from src.core.exceptions import GameNotFoundError
from src.core.shared_types import Color, PieceType, Status
from src.storage.repository import GameRepository


class ChessService:
    """Orchestration of layers for chess game."""

    def __init__(self, repository: GameRepository, config: Optional[ChessSettings] = None) -> None:
        self.repo = repository
        self.config = config or settings

    # -- ROUTES LOGIC ---
    def create_game(self) -> GameResponse:
        """Start a new game in the standard starting position."""
        new_game = ChessGame.new_game(log_moves=self.config.log_moves)
        stored_game, game_id = self.repo.create_game(new_game)
        logger.info(f"chess.service.create_game game_id={game_id}")
        return self._create_game_response(game_id, stored_game)

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        """
        Retrieve current game state.
        ----
        Everything the rendering layer shows: board, player to move, captured pieces, move list, last move.
        """
        game = self._fetch_game(request.game_id)
        return self._create_game_response(request.game_id, game)

    def legal_moves(self, request: LegalMovesRequest) -> LegalMovesResponse:
        """retrieve the squares the piece on the requested square may move to."""
        game = self._fetch_game(request.game_id)
        targets = game.legal_moves(Square.from_algebraic(request.square))
        return LegalMovesResponse(
            game_id=request.game_id,
            square=request.square,
            legal_moves=[square.to_algebraic() for square in targets],
        )

    def make_move(self, request: MoveRequest) -> MoveResponse:
        """Make a move attempt. A refused move is reported (committed=False), not raised."""
        game = self._fetch_game(request.game_id)
        result = game.execute_move(
            Square.from_algebraic(request.from_square),
            Square.from_algebraic(request.to_square),
        )
        if not result.committed:
            logger.warning(
                f"chess.service.make_move refused game_id={request.game_id} "
                f"move={request.from_square}-{request.to_square}"
            )
        return self._create_move_response(request.game_id, game, result)

    def select_square(self, request: SelectSquareRequest) -> SelectionResponse:
        """A click on a square: select / move / deselect."""
        game = self._fetch_game(request.game_id)
        selection = game.select_square(Square.from_algebraic(request.square))
        move = (
            self._create_move_response(request.game_id, game, selection.move_result)
            if selection.move_result is not None
            else None
        )
        return SelectionResponse(
            selected=selection.selected.to_algebraic() if selection.selected else None,
            targets=[square.to_algebraic() for square in selection.targets],
            move=move,
        )

    def promote(self, request: PromotionRequest) -> ActionResponse:
        """Finish a pending promotion with the chosen piece type."""
        game = self._fetch_game(request.game_id)
        accepted = game.resolve_promotion(
            Square.from_algebraic(request.square),
            DomainPieceType[request.promote_to.name],
        )
        if not accepted:
            logger.warning(
                f"chess.service.promote refused game_id={request.game_id} square={request.square}"
            )
        return ActionResponse(
            accepted=accepted, game=self._create_game_response(request.game_id, game)
        )

    def undo(self, request: UndoRequest) -> ActionResponse:
        game = self._fetch_game(request.game_id)
        accepted = game.undo()
        if not accepted:
            logger.warning(f"chess.service.undo refused game_id={request.game_id}")
        return ActionResponse(
            accepted=accepted, game=self._create_game_response(request.game_id, game)
        )

    def reset(self, request: ResetRequest) -> GameResponse:
        game = self._fetch_game(request.game_id)
        game.reset()
        logger.info(f"chess.service.reset game_id={request.game_id}")
        return self._create_game_response(request.game_id, game)

    def list_games(self) -> list[UUID]:
        """Show all stored games."""
        return self.repo.game_ids()

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a game."""
        deleted = self.repo.delete_game(request.game_id)
        if deleted is None:
            raise GameNotFoundError(f"Game with {request.game_id=} not found.")
        logger.info(f"chess.service.delete_game game_id={request.game_id}")

    # -- Internal helpers --
    def _fetch_game(self, game_id: UUID) -> ChessGame:
        """Attempt to find the game in the repository and raise error if it fails."""
        game = self.repo.get_game(game_id)
        if game is None:
            raise GameNotFoundError(f"Game with {game_id=} not found.")
        return game

    def _create_move_response(
        self, game_id: UUID, game: ChessGame, result: MoveResult
    ) -> MoveResponse:
        return MoveResponse(
            committed=result.committed,
            status=Status[result.status.name],
            promotion_pending=_promotion_model(result.promotion_pending),
            game=self._create_game_response(game_id, game),
        )

    def _create_game_response(self, game_id: UUID, game: ChessGame) -> GameResponse:
        """Convert the domain state into a GameResponse (for game with given ID.)"""
        board = [
            [_piece_model(game.board.piece(Square(row, col))) for col in range(8)]
            for row in range(8)
        ]
        last_move = (
            MoveModel(
                from_square=game.last_move.from_square.to_algebraic(),
                to_square=game.last_move.to_square.to_algebraic(),
            )
            if game.last_move
            else None
        )
        return GameResponse(
            game_id=game_id,
            board=board,
            current_player=_color(game.current_player),
            status=Status[game.status.name],
            game_over=game.game_over,
            winner=_color(game.winner) if game.winner else None,
            last_move=last_move,
            captured_pieces={
                _color(color): [_piece_model(piece) for piece in pieces]
                for color, pieces in game.captured_pieces.items()
            },
            move_history=[_record_model(record) for record in game.move_history],
            pending_promotion=_promotion_model(game.pending_promotion),
            selected_square=(
                game.selected_square.to_algebraic() if game.selected_square else None
            ),
        )


# -- Domain -> boundary conversions (by enum member name) --
def _color(color: DomainColor) -> Color:
    return Color[color.name]


def _piece_model(piece: Optional[Piece]) -> Optional[PieceModel]:
    if piece is None:
        return None
    return PieceModel(
        type=PieceType[piece.type.name], color=_color(piece.color), has_moved=piece.has_moved
    )


def _record_model(record: MoveRecord) -> MoveRecordModel:
    captured = record.captured_piece or record.en_passant_capture
    return MoveRecordModel(
        from_square=record.from_square.to_algebraic(),
        to_square=record.to_square.to_algebraic(),
        piece=_piece_model(record.moving_piece),
        captured=_piece_model(captured),
        description=record.describe(),
    )


def _promotion_model(pending: Optional[PendingPromotion]) -> Optional[PromotionModel]:
    if pending is None:
        return None
    return PromotionModel(square=pending.square.to_algebraic(), color=_color(pending.color))
