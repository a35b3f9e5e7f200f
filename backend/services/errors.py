"""Error taxonomy for game commands. ``status_code`` is what goes on the wire."""

from __future__ import annotations


class GameError(Exception):
    status_code = 500


class ValidationError(GameError):
    """Request is missing a field the command needs."""

    status_code = 400


class GameFullError(GameError):
    """Game already has both participants."""

    status_code = 409


class StoreError(GameError):
    """Underlying game store failed."""

    status_code = 500


class GameNotFoundError(StoreError):
    def __init__(self, game_id: str) -> None:
        super().__init__(f"game {game_id} not found")
        self.game_id = game_id
