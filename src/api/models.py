"""Requests and Response models exchanged with the rendering layer"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Color, PieceType, PromotionChoice, Status

SquareName = str


def _is_square_name(value: str) -> bool:
    """'a1' - 'h8'"""
    if len(value) != 2:
        return False

    file_character = value[0]
    rank_character = value[1]
    return file_character in "abcdefgh" and rank_character in "12345678"


def validate_square_name(value: str) -> str:
    value = value.strip().lower()
    if not _is_square_name(value):
        raise InvalidRequestError(f"Cannot interpret {value!r} as a valid square name.")
    return value


# --- REQUEST MODELS ---
class GetGameRequest(BaseModel):
    game_id: UUID


class LegalMovesRequest(BaseModel):
    game_id: UUID
    square: SquareName

    @field_validator("square")
    @classmethod
    def validate_square(cls, value: str) -> str:
        return validate_square_name(value)


class MoveRequest(BaseModel):
    game_id: UUID
    from_square: SquareName
    to_square: SquareName

    @field_validator(*["from_square", "to_square"])
    @classmethod
    def validate_square(cls, value: str) -> str:
        return validate_square_name(value)


class SelectSquareRequest(BaseModel):
    game_id: UUID
    square: SquareName

    @field_validator("square")
    @classmethod
    def validate_square(cls, value: str) -> str:
        return validate_square_name(value)


class PromotionRequest(BaseModel):
    game_id: UUID
    square: SquareName
    promote_to: PromotionChoice

    @field_validator("square")
    @classmethod
    def validate_square(cls, value: str) -> str:
        return validate_square_name(value)


class UndoRequest(BaseModel):
    game_id: UUID


class ResetRequest(BaseModel):
    game_id: UUID


class DeleteGameRequest(BaseModel):
    game_id: UUID


# --- RESPONSE MODELS ---
class PieceModel(BaseModel):
    type: PieceType
    color: Color
    has_moved: bool = False


class MoveModel(BaseModel):
    from_square: SquareName
    to_square: SquareName


class MoveRecordModel(BaseModel):
    """One line of the move list"""

    from_square: SquareName
    to_square: SquareName
    piece: PieceModel
    captured: Optional[PieceModel]
    description: str


class PromotionModel(BaseModel):
    square: SquareName
    color: Color


class GameResponse(BaseModel):
    game_id: UUID
    board: list[list[Optional[PieceModel]]]
    current_player: Color
    status: Status
    game_over: bool
    winner: Optional[Color]
    last_move: Optional[MoveModel]
    captured_pieces: dict[Color, list[PieceModel]]
    move_history: list[MoveRecordModel]
    pending_promotion: Optional[PromotionModel]
    selected_square: Optional[SquareName]


class LegalMovesResponse(BaseModel):
    game_id: UUID
    square: SquareName
    legal_moves: list[SquareName]


class MoveResponse(BaseModel):
    committed: bool
    status: Status
    promotion_pending: Optional[PromotionModel]
    game: GameResponse


class SelectionResponse(BaseModel):
    selected: Optional[SquareName]
    targets: list[SquareName]
    move: Optional[MoveResponse]


class ActionResponse(BaseModel):
    """Outcome of an action that may be refused (undo, promotion)"""

    accepted: bool
    game: GameResponse
