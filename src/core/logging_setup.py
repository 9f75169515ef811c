"""Logging setup. Modules simply `from loguru import logger`; this only decides where the lines go.

The host process (server, CLI) calls `configure_logging()` once at start-up.
"""

import sys
from typing import Optional

from loguru import logger

from src.core.config import ChessSettings, settings


def configure_logging(config: Optional[ChessSettings] = None) -> None:
    """Replace loguru's default sink by stderr at the configured level"""
    config = config or settings
    logger.remove()
    logger.add(sys.stderr, level=config.log_level.upper())
    logger.debug(f"chess.logging.configured level={config.log_level}")
