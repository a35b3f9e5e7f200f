from __future__ import annotations

import asyncio
import logging

from fastapi import WebSocket

logger = logging.getLogger(__name__)

# "Try Again Later" close code, sent when the server is at capacity.
CLOSE_TRY_AGAIN_LATER = 1013
CLOSE_GOING_AWAY = 1001


class ConnectionRegistry:
    """
    Tracks open game sockets.

    - register() refuses new sockets past max_connections.
    - close_all() runs on server shutdown, before uvicorn drops its own
      connections with 1012, so game clients see 1001 (going away).
    """

    def __init__(self, max_connections: int) -> None:
        self._lock = asyncio.Lock()
        self._max = max_connections
        self._sockets: set[WebSocket] = set()

    @property
    def count(self) -> int:
        return len(self._sockets)

    async def register(self, websocket: WebSocket) -> bool:
        async with self._lock:
            if self._max and len(self._sockets) >= self._max:
                logger.warning("[connections] Refusing socket: %d/%d open", len(self._sockets), self._max)
                return False
            self._sockets.add(websocket)
            return True

    async def unregister(self, websocket: WebSocket) -> None:
        async with self._lock:
            self._sockets.discard(websocket)

    async def close_all(self, code: int = CLOSE_GOING_AWAY) -> None:
        async with self._lock:
            sockets = list(self._sockets)
            self._sockets.clear()
        if not sockets:
            return
        logger.info("[connections] Closing %d open game socket(s)", len(sockets))
        results = await asyncio.gather(*(ws.close(code=code) for ws in sockets), return_exceptions=True)
        for result in results:
            if isinstance(result, Exception):
                logger.warning("[connections] close() failed: %s", result)
