from __future__ import annotations

import asyncio
import logging
from typing import Any

import pydantic
from fastapi import WebSocket, WebSocketDisconnect
from starlette.websockets import WebSocketState

from app.models import ErrorResponse, GameRequest
from services.connection_registry import CLOSE_TRY_AGAIN_LATER, ConnectionRegistry
from services.dispatcher import CommandDispatcher

logger = logging.getLogger(__name__)


class GameConnection:
    """
    Owns one game socket for the lifetime of a client.

    Frames are handled strictly one at a time: receive, decode, dispatch, send.
    Bad frames and failed commands are answered with an error payload and the
    loop keeps going; only a disconnect, the idle timeout or server shutdown
    ends it.
    """

    def __init__(
        self,
        websocket: WebSocket,
        dispatcher: CommandDispatcher,
        registry: ConnectionRegistry,
        *,
        idle_timeout_seconds: float = 0.0,
    ) -> None:
        self._websocket = websocket
        self._dispatcher = dispatcher
        self._registry = registry
        self._idle_timeout = idle_timeout_seconds or None

    @property
    def _client(self) -> str:
        client = self._websocket.client
        return f"{client.host}:{client.port}" if client else "unknown"

    async def run(self) -> None:
        if not await self._registry.register(self._websocket):
            # Closing before accept() is an HTTP 403 on the handshake; accept
            # first so the client sees the 1013 close code.
            await self._websocket.accept()
            await self._websocket.close(code=CLOSE_TRY_AGAIN_LATER)
            return
        try:
            await self._websocket.accept()
            logger.info("[game_ws] Client connected: %s", self._client)
            await self._serve()
        except WebSocketDisconnect as e:
            logger.info("[game_ws] Client disconnected: %s code=%s", self._client, e.code)
        finally:
            await self._registry.unregister(self._websocket)

    async def _serve(self) -> None:
        while True:
            try:
                frame = await asyncio.wait_for(self._receive_frame(), timeout=self._idle_timeout)
            except asyncio.TimeoutError:
                logger.info("[game_ws] Idle for %ss, closing %s", self._idle_timeout, self._client)
                await self._websocket.close(code=1000)
                return
            logger.info("[game_ws] Received message: %.200r", frame)

            try:
                request = GameRequest.model_validate_json(frame)
            except pydantic.ValidationError as e:
                logger.warning("[game_ws] Could not decode message from %s: %s", self._client, e)
                error = ErrorResponse(code=400, error="Malformed message")
                if not await self._send(error.model_dump()):
                    return
                continue

            result = await self._dispatcher.dispatch(request)
            if not await self._send(result.to_payload()):
                return

    async def _receive_frame(self) -> str | bytes:
        message = await self._websocket.receive()
        if message["type"] == "websocket.disconnect":
            raise WebSocketDisconnect(message.get("code", 1000), message.get("reason"))
        if message.get("text") is not None:
            return message["text"]
        return message.get("bytes") or b""

    async def _send(self, payload: dict[str, Any]) -> bool:
        # Server shutdown may have closed the socket while a command was running.
        if self._websocket.application_state is WebSocketState.DISCONNECTED:
            return False
        logger.info("[game_ws] Sending message: %s", payload)
        await self._websocket.send_json(payload)
        return True
