"""Runtime configuration, read from environment variables prefixed with CHESS_"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ChessSettings(BaseSettings):
    log_level: str = "INFO"
    # emit a debug line for every committed move
    log_moves: bool = True
    # in-memory session repository refuses new games beyond this
    max_games: int = Field(default=64, ge=1)

    model_config = SettingsConfigDict(env_prefix="CHESS_")


settings = ChessSettings()
