"""
Type definitions used across layers
"""

from enum import StrEnum

# --- These mirror the domain enums (src/chess/pieces.py, src/chess/status.py) by member NAME.
# --- NOTE The domain uses plain Enums, the boundary uses string values so they serialize as-is


class Status(StrEnum):
    IN_PROGRESS = "in progress"
    CHECK = "check"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"


class Color(StrEnum):
    WHITE = "white"
    BLACK = "black"


class PieceType(StrEnum):
    PAWN = "pawn"
    KNIGHT = "knight"
    BISHOP = "bishop"
    ROOK = "rook"
    QUEEN = "queen"
    KING = "king"


class PromotionChoice(StrEnum):
    QUEEN = "queen"
    ROOK = "rook"
    BISHOP = "bishop"
    KNIGHT = "knight"
