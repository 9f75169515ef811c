"""
Custom exceptions used across layers.

The rules engine itself reports rejected moves/undos through return values.
Exceptions are reserved for programming errors (e.g. indexing off the board) and for the boundary layers
(invalid requests, unknown sessions).
"""


class ChessError(Exception):
    """Top-level exception: catch this one to handle anything raised by this package."""


class InvalidSquareError(ChessError):
    """A square outside of the 8x8 grid was used to index the board."""


class InvalidRequestError(ChessError):
    """Request data that cannot be interpreted. Raised from the pydantic validators and passed through as-is."""


class RepositoryError(ChessError):
    """Something went wrong storing / retrieving a game session."""


class GameNotFoundError(RepositoryError):
    """No session stored under the requested ID."""


class RepositoryFullError(RepositoryError):
    """The repository refuses to store more sessions than configured."""
