"""Protocol repository (sessions live in memory for now, see memory_repository.py)"""

from typing import Protocol
from uuid import UUID

from src.chess.game import ChessGame


class GameRepository(Protocol):
    """Session storage orchestration"""

    def get_game(self, game_id: UUID) -> ChessGame | None:
        """Get game by ID, if it exists."""
        ...

    def create_game(self, game: ChessGame) -> tuple[ChessGame, UUID]:
        """Store new game and return the stored game + newly created game ID."""
        ...

    def delete_game(self, game_id: UUID) -> ChessGame | None:
        """Remove a game."""
        ...

    def game_ids(self) -> list[UUID]:
        """IDs of all stored games."""
        ...
