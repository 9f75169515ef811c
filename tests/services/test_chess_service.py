"""Unit tests for src/services/chess_service.py"""

from typing import Generator
from uuid import UUID, uuid4

import pytest

from src.api.models import (
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    LegalMovesRequest,
    LegalMovesResponse,
    MoveRequest,
    MoveResponse,
    PromotionRequest,
    ResetRequest,
    SelectSquareRequest,
    UndoRequest,
)
from src.chess.game import ChessGame
from src.core.config import ChessSettings
from src.core.exceptions import ChessError, GameNotFoundError, RepositoryFullError
from src.core.shared_types import Color, PieceType, PromotionChoice, Status
from src.services.chess_service import ChessService
from src.storage.memory_repository import InMemoryGameRepository
from tests.helpers import build_board


@pytest.fixture
def repository() -> Generator[InMemoryGameRepository, None, None]:
    """Ensures to clear the repository between tests"""
    repo = InMemoryGameRepository(max_games=4)
    try:
        yield repo
    finally:
        repo.clear()


@pytest.fixture
def service(repository: InMemoryGameRepository) -> ChessService:
    return ChessService(repository, ChessSettings(log_moves=False, max_games=4))


def make_move(service: ChessService, game_id: UUID, from_square: str, to_square: str) -> MoveResponse:
    return service.make_move(
        MoveRequest(game_id=game_id, from_square=from_square, to_square=to_square)
    )


def store_position(
    repository: InMemoryGameRepository, layout: dict[str, str]
) -> UUID:
    """Put a game with a custom position in the repository (the service only creates standard games)"""
    game = ChessGame.from_board(build_board(layout), log_moves=False)
    _, game_id = repository.create_game(game)
    return game_id


# --- SERVICE - CREATE NEW GAME ----
def test_create_a_new_game(service: ChessService, repository: InMemoryGameRepository) -> None:
    """Check that new game is created, stored in repo, and return has the appropriate information."""
    response = service.create_game()

    # Check response structure
    assert isinstance(response, GameResponse)
    assert isinstance(response.game_id, UUID)

    # Check response data
    assert response.current_player == Color.WHITE
    assert response.status == Status.IN_PROGRESS
    assert not response.game_over
    assert response.winner is None
    assert response.last_move is None
    assert response.move_history == []
    assert response.captured_pieces == {Color.WHITE: [], Color.BLACK: []}

    # board is sent row by row, from black's back rank down
    assert len(response.board) == 8
    assert all(len(row) == 8 for row in response.board)
    assert response.board[0][4].type == PieceType.KING
    assert response.board[0][4].color == Color.BLACK
    assert response.board[7][3].type == PieceType.QUEEN
    assert response.board[7][3].color == Color.WHITE
    assert response.board[4] == [None] * 8

    # Check stored data
    assert repository.get_game(response.game_id) is not None


def test_create_game_respects_limit(service: ChessService) -> None:
    for _ in range(4):
        service.create_game()
    with pytest.raises(RepositoryFullError):
        service.create_game()


# --- SERVICE - GET GAME ----
def test_get_game_state(service: ChessService) -> None:
    game_id = service.create_game().game_id
    make_move(service, game_id, "e2", "e4")

    response = service.get_game_state(GetGameRequest(game_id=game_id))

    assert response.game_id == game_id
    assert response.current_player == Color.BLACK
    assert response.last_move.from_square == "e2"
    assert response.last_move.to_square == "e4"
    assert [record.description for record in response.move_history] == ["pawn e2-e4"]


def test_get_unknown_game(service: ChessService) -> None:
    with pytest.raises(GameNotFoundError):
        service.get_game_state(GetGameRequest(game_id=uuid4()))


# --- SERVICE - LEGAL MOVES ----
def test_legal_moves(service: ChessService) -> None:
    game_id = service.create_game().game_id
    response = service.legal_moves(LegalMovesRequest(game_id=game_id, square="g1"))

    assert isinstance(response, LegalMovesResponse)
    assert response.square == "g1"
    assert set(response.legal_moves) == {"f3", "h3"}


def test_legal_moves_empty_square(service: ChessService) -> None:
    game_id = service.create_game().game_id
    response = service.legal_moves(LegalMovesRequest(game_id=game_id, square="e4"))
    assert response.legal_moves == []


# --- SERVICE - MAKE MOVE ----
def test_make_move(service: ChessService) -> None:
    game_id = service.create_game().game_id
    response = make_move(service, game_id, "e2", "e4")

    assert response.committed
    assert response.status == Status.IN_PROGRESS
    assert response.promotion_pending is None
    assert response.game.current_player == Color.BLACK
    assert response.game.board[4][4].type == PieceType.PAWN
    assert response.game.board[4][4].has_moved


def test_refused_move(service: ChessService, captured_logs: list[str]) -> None:
    """Refusals are part of the response, nothing is raised"""
    game_id = service.create_game().game_id
    response = make_move(service, game_id, "e7", "e5")

    assert not response.committed
    assert response.game.current_player == Color.WHITE
    assert response.game.move_history == []
    assert any(
        message.startswith("WARNING") and "chess.service.make_move refused" in message
        for message in captured_logs
    )


def test_checkmate_through_service(service: ChessService) -> None:
    game_id = service.create_game().game_id
    for from_square, to_square in [("f2", "f3"), ("e7", "e5"), ("g2", "g4")]:
        make_move(service, game_id, from_square, to_square)

    response = make_move(service, game_id, "d8", "h4")

    assert response.status == Status.CHECKMATE
    assert response.game.game_over
    assert response.game.winner == Color.BLACK


def test_captured_pieces_in_response(service: ChessService) -> None:
    game_id = service.create_game().game_id
    for from_square, to_square in [("e2", "e4"), ("d7", "d5"), ("e4", "d5")]:
        response = make_move(service, game_id, from_square, to_square)

    captured = response.game.captured_pieces[Color.WHITE]
    assert [(piece.type, piece.color) for piece in captured] == [(PieceType.PAWN, Color.BLACK)]
    last_record = response.game.move_history[-1]
    assert last_record.captured.type == PieceType.PAWN
    assert last_record.description == "pawn e4xd5"


# --- SERVICE - PROMOTION ----
def test_promotion(service: ChessService, repository: InMemoryGameRepository) -> None:
    game_id = store_position(repository, {"a7": "wP", "e1": "wK", "e8": "bK"})

    move = make_move(service, game_id, "a7", "a8")
    assert move.committed
    assert move.promotion_pending.square == "a8"
    assert move.promotion_pending.color == Color.WHITE
    assert move.game.pending_promotion is not None

    response = service.promote(
        PromotionRequest(game_id=game_id, square="a8", promote_to=PromotionChoice.QUEEN)
    )
    assert response.accepted
    assert response.game.board[0][0].type == PieceType.QUEEN
    assert response.game.pending_promotion is None
    assert response.game.status == Status.CHECK


def test_promotion_without_pending_pawn(service: ChessService) -> None:
    game_id = service.create_game().game_id
    response = service.promote(
        PromotionRequest(game_id=game_id, square="a8", promote_to=PromotionChoice.ROOK)
    )
    assert not response.accepted


# --- SERVICE - SELECT SQUARE ----
def test_select_and_move(service: ChessService) -> None:
    game_id = service.create_game().game_id

    selection = service.select_square(SelectSquareRequest(game_id=game_id, square="e2"))
    assert selection.selected == "e2"
    assert selection.targets == ["e3", "e4"]
    assert selection.move is None
    assert service.get_game_state(GetGameRequest(game_id=game_id)).selected_square == "e2"

    selection = service.select_square(SelectSquareRequest(game_id=game_id, square="e4"))
    assert selection.selected is None
    assert selection.move.committed
    assert selection.move.game.current_player == Color.BLACK


# --- SERVICE - UNDO / RESET ----
def test_undo(service: ChessService) -> None:
    game_id = service.create_game().game_id
    make_move(service, game_id, "e2", "e4")

    response = service.undo(UndoRequest(game_id=game_id))

    assert response.accepted
    assert response.game.current_player == Color.WHITE
    assert response.game.move_history == []
    assert response.game.last_move is None
    assert response.game.board[6][4].type == PieceType.PAWN
    assert not response.game.board[6][4].has_moved


def test_undo_refused(service: ChessService) -> None:
    game_id = service.create_game().game_id
    assert not service.undo(UndoRequest(game_id=game_id)).accepted


def test_reset(service: ChessService) -> None:
    game_id = service.create_game().game_id
    fresh = service.get_game_state(GetGameRequest(game_id=game_id))
    make_move(service, game_id, "e2", "e4")

    response = service.reset(ResetRequest(game_id=game_id))

    assert response == fresh


# --- SERVICE - LIST / DELETE ----
def test_list_and_delete_games(service: ChessService) -> None:
    first = service.create_game().game_id
    second = service.create_game().game_id
    assert set(service.list_games()) == {first, second}

    service.delete_game(DeleteGameRequest(game_id=first))
    assert service.list_games() == [second]

    with pytest.raises(GameNotFoundError):
        service.get_game_state(GetGameRequest(game_id=first))


def test_delete_unknown_game(service: ChessService) -> None:
    """Test any top-level custom exception is raised (specific exception types are responsibility of other layers)"""
    with pytest.raises(ChessError):
        service.delete_game(DeleteGameRequest(game_id=uuid4()))
