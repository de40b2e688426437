"""Errors raised by the game services.

Every error carries the HTTP status the API layer answers with, so routes
can let them propagate to the blueprint's error handler.
"""
from typing import Optional


class GameError(Exception):
    status_code = 500

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.__class__.__name__)
        self.message = message or self.__class__.__name__


class InvalidRequest(GameError):
    status_code = 400


class GameNotFound(GameError):
    status_code = 404


class PlayerNotFound(GameNotFound):
    pass


class MoveOutOfRange(GameError):
    status_code = 400


class IllegalMove(GameError):
    status_code = 400


class CellOutOfRange(IllegalMove):
    pass


class CellOccupied(IllegalMove):
    pass


class NotYourTurn(GameError):
    status_code = 409


class InvalidRange(GameError):
    status_code = 400


class InternalError(GameError):
    status_code = 500


class StoreNotFound(KeyError):
    """Raised by the store when no game has the requested id."""

    def __str__(self):
        return str(self.args[0]) if self.args else 'game not found'
