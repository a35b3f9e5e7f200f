"""Game store: keyed by game ID. In-memory implementation for a single process."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import replace
from typing import Protocol

from models.game import Game
from services.errors import GameNotFoundError, StoreError

logger = logging.getLogger(__name__)


class GameStore(Protocol):
    async def create(self, game_id: str, first_user_id: str) -> Game: ...

    async def find_by_id(self, game_id: str) -> Game: ...

    async def update(self, game: Game) -> Game: ...


class InMemoryGameStore:
    """
    Dict-backed GameStore.

    - Every call runs under one asyncio.Lock, so create/find/update are atomic.
    - Records are copied on the way in and out; callers must update() to persist.
    - There is no transaction across calls: concurrent updates are last-write-wins.
    """

    def __init__(self) -> None:
        self._lock = asyncio.Lock()
        self._games: dict[str, Game] = {}

    def __len__(self) -> int:
        return len(self._games)

    def clear(self) -> None:
        self._games.clear()

    async def create(self, game_id: str, first_user_id: str) -> Game:
        async with self._lock:
            if game_id in self._games:
                raise StoreError(f"game {game_id} already exists")
            game = Game(game_id=game_id, first_user_id=first_user_id)
            self._games[game_id] = game
            logger.debug("[store] Created game_id=%s", game_id)
            return replace(game)

    async def find_by_id(self, game_id: str) -> Game:
        async with self._lock:
            game = self._games.get(game_id)
            if game is None:
                raise GameNotFoundError(game_id)
            return replace(game)

    async def update(self, game: Game) -> Game:
        async with self._lock:
            if game.game_id not in self._games:
                raise GameNotFoundError(game.game_id)
            self._games[game.game_id] = replace(game)
            logger.debug("[store] Updated game_id=%s", game.game_id)
            return replace(game)
