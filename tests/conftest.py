"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures required for testing multiple layers.
"""

from typing import Callable, Generator

import pytest
from loguru import logger

from src.chess.game import ChessGame
from src.chess.pieces import Color
from tests.helpers import build_board

GameFactory = Callable[..., ChessGame]


@pytest.fixture
def new_game() -> ChessGame:
    """A game in the standard starting position (no log output per move)"""
    return ChessGame.new_game(log_moves=False)


@pytest.fixture
def game_factory() -> GameFactory:
    """Call the inner function with a layout (see tests/helpers.py) and the color to move"""

    def _create_game(layout: dict[str, str], color_to_move: Color = Color.WHITE) -> ChessGame:
        return ChessGame.from_board(build_board(layout), color_to_move, log_moves=False)

    return _create_game


@pytest.fixture
def captured_logs() -> Generator[list[str], None, None]:
    """Collect loguru messages emitted during the test"""
    messages: list[str] = []
    sink_id = logger.add(messages.append, level="DEBUG", format="{level} {message}")
    try:
        yield messages
    finally:
        logger.remove(sink_id)
