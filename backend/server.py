"""Process entry point: python server.py."""

import logging
import os
import socket

import uvicorn
from dotenv import load_dotenv

# Load .env from backend dir (where server.py runs)
load_dotenv(os.path.join(os.path.dirname(__file__), ".env"))

from app.config import Settings, load_settings  # noqa: E402
from app.main import create_app  # noqa: E402
from services.connection_registry import ConnectionRegistry  # noqa: E402
from services.store import GameStore  # noqa: E402


class GameServer(uvicorn.Server):
    """
    uvicorn server that closes game sockets with 1001 (going away) on shutdown.

    uvicorn closes every open WebSocket with 1012 before the app's lifespan
    shutdown runs, so the registry has to be drained here first.
    """

    def __init__(self, config: uvicorn.Config, registry: ConnectionRegistry) -> None:
        super().__init__(config)
        self.registry = registry

    async def shutdown(self, sockets: list[socket.socket] | None = None) -> None:
        await self.registry.close_all()
        await super().shutdown(sockets=sockets)


def build_server(settings: Settings, store: GameStore | None = None) -> GameServer:
    registry = ConnectionRegistry(settings.max_connections)
    app = create_app(store=store, settings=settings, registry=registry)
    config = uvicorn.Config(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
    return GameServer(config, registry)


def main() -> None:
    settings = load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    server = build_server(settings)
    logging.getLogger(__name__).info("Serving on %s:%d", settings.host, settings.port)
    server.run()


if __name__ == "__main__":
    main()
