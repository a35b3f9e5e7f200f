from __future__ import annotations

from fastapi import APIRouter, WebSocket

from services.connection import GameConnection
from services.connection_registry import ConnectionRegistry
from services.dispatcher import CommandDispatcher


def build_router(
    dispatcher: CommandDispatcher,
    registry: ConnectionRegistry,
    *,
    idle_timeout_seconds: float = 0.0,
) -> APIRouter:
    router = APIRouter(tags=["game"])

    @router.websocket("/ws")
    async def ws_game(websocket: WebSocket) -> None:
        """
        Game channel. One JSON message in, one JSON message out.

        Request schema:
          {
            "command": "GENERATE_NEW_GAME" | "JOIN_GAME" | "MAKE_MOVE" | <other>,
            "game_info": {"game_id": str, "state": str, "last_move_user_id": str},
          }
        """
        connection = GameConnection(
            websocket,
            dispatcher,
            registry,
            idle_timeout_seconds=idle_timeout_seconds,
        )
        await connection.run()

    return router
