"""Implementation of (Game)Repository keeping the live games in a dictionary"""

from typing import Optional
from uuid import UUID, uuid4

from loguru import logger

from src.chess.game import ChessGame
from src.core.config import settings
from src.core.exceptions import RepositoryFullError


class InMemoryGameRepository:
    """
    Games are stored as-is: the engine mutates the board in place, so there is no separate update step.
    Everything is gone when the process ends.
    """

    def __init__(self, max_games: Optional[int] = None) -> None:
        self.max_games = max_games or settings.max_games
        self._games: dict[UUID, ChessGame] = {}

    def get_game(self, game_id: UUID) -> ChessGame | None:
        """Get game by ID, if it exists."""
        return self._games.get(game_id)

    def create_game(self, game: ChessGame) -> tuple[ChessGame, UUID]:
        """Store new game and return the stored game + newly created game ID."""
        if len(self._games) >= self.max_games:
            raise RepositoryFullError(
                f"Cannot store more than {self.max_games} games. Delete a game first."
            )
        new_id = uuid4()
        self._games[new_id] = game
        logger.debug(f"chess.storage.create_game game_id={new_id} stored={len(self._games)}")
        return game, new_id

    def delete_game(self, game_id: UUID) -> ChessGame | None:
        """Remove a game."""
        return self._games.pop(game_id, None)

    def game_ids(self) -> list[UUID]:
        return list(self._games.keys())

    def clear(self) -> None:
        self._games.clear()
