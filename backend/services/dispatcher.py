"""Routes a decoded GameRequest to create / join / move against the game store."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, Callable

from app.models import Command, ErrorResponse, GameInfo, GameRequest, GameResponse
from models.game import Game
from services.errors import GameError, GameFullError, ValidationError
from services.store import GameStore

logger = logging.getLogger(__name__)


def _new_id() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True)
class Success:
    command: str
    code: int
    message: str
    game: Game | None = None

    def to_payload(self) -> dict[str, Any]:
        response = GameResponse(
            command=self.command,
            code=self.code,
            game_info=GameInfo.from_game(self.game) if self.game else None,
            message=self.message,
        )
        return response.model_dump(exclude_none=True)


@dataclass(frozen=True)
class Failure:
    code: int
    error: str

    def to_payload(self) -> dict[str, Any]:
        return ErrorResponse(code=self.code, error=self.error).model_dump()


CommandResult = Success | Failure


class CommandDispatcher:
    """
    Runs game commands against an injected GameStore.

    dispatch() never raises: every outcome is a Success or a Failure, so the
    connection loop has exactly one thing to encode per request.
    """

    def __init__(self, store: GameStore, *, id_factory: Callable[[], str] = _new_id) -> None:
        self._store = store
        self._new_id = id_factory

    @property
    def store(self) -> GameStore:
        return self._store

    async def dispatch(self, request: GameRequest) -> CommandResult:
        info = request.game_info
        try:
            if request.command == Command.GENERATE_NEW_GAME:
                game = await self.generate_new_game()
                return Success(
                    command=Command.GENERATE_NEW_GAME.value,
                    code=HTTPStatus.CREATED.value,
                    message=HTTPStatus.CREATED.phrase,
                    game=game,
                )
            if request.command == Command.JOIN_GAME:
                game = await self.join_game(info.game_id)
                return Success(
                    command=Command.JOIN_GAME.value,
                    code=HTTPStatus.OK.value,
                    message=HTTPStatus.OK.phrase,
                    game=game,
                )
            if request.command == Command.MAKE_MOVE:
                game = await self.make_move(info.game_id, info.state, info.last_move_user_id)
                return Success(
                    command=Command.MAKE_MOVE.value,
                    code=HTTPStatus.OK.value,
                    message=HTTPStatus.OK.phrase,
                    game=game,
                )
        except GameError as e:
            logger.warning("[dispatcher] %s failed: %s", request.command, e)
            return Failure(code=e.status_code, error=str(e))
        except Exception:
            logger.exception("[dispatcher] Unexpected error handling %s", request.command)
            return Failure(
                code=HTTPStatus.INTERNAL_SERVER_ERROR.value,
                error=HTTPStatus.INTERNAL_SERVER_ERROR.phrase,
            )

        # Unknown command: plain acknowledgement, used by clients as a ping.
        return Success(command="", code=HTTPStatus.OK.value, message=HTTPStatus.OK.phrase)

    async def generate_new_game(self) -> Game:
        user_id = self._new_id()
        game_id = self._new_id()
        logger.info("[dispatcher] Generating game_id=%s first_user_id=%s", game_id, user_id)
        return await self._store.create(game_id, user_id)

    async def join_game(self, game_id: str) -> Game:
        if not game_id:
            raise ValidationError("No game id provided")
        game = await self._store.find_by_id(game_id)
        if game.second_user_id:
            raise GameFullError(f"game {game_id} already has two players")
        game.second_user_id = self._new_id()
        logger.info("[dispatcher] Joining game_id=%s second_user_id=%s", game_id, game.second_user_id)
        return await self._store.update(game)

    async def make_move(self, game_id: str, state: str, last_move_user_id: str) -> Game:
        if not game_id:
            raise ValidationError("No game id provided")
        if not state:
            raise ValidationError("No game state provided")
        game = await self._store.find_by_id(game_id)
        game.state = state
        game.last_move_user_id = last_move_user_id
        logger.info("[dispatcher] Move on game_id=%s by user_id=%s", game_id, last_move_user_id)
        return await self._store.update(game)
