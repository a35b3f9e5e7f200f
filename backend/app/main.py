import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import Settings, load_settings
from routes import game_ws, games
from services.connection_registry import ConnectionRegistry
from services.dispatcher import CommandDispatcher
from services.store import GameStore, InMemoryGameStore

logger = logging.getLogger(__name__)


def create_app(
    store: GameStore | None = None,
    settings: Settings | None = None,
    registry: ConnectionRegistry | None = None,
) -> FastAPI:
    """
    Wire the store into the dispatcher and routes. Tests pass their own store.

    server.py passes the registry too, so its uvicorn server can close game
    sockets before uvicorn tears connections down.
    """
    settings = settings or load_settings()
    store = store if store is not None else InMemoryGameStore()
    dispatcher = CommandDispatcher(store)
    registry = registry if registry is not None else ConnectionRegistry(settings.max_connections)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info("[app] Started; max_connections=%d idle_timeout=%ss", settings.max_connections, settings.idle_timeout_seconds)
        yield
        # No-op under server.GameServer, which has already closed them.
        await registry.close_all()
        logger.info("[app] Shut down")

    app = FastAPI(title="TicTac API", version="0.1.0", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    app.include_router(games.build_router(store), prefix="/api")
    app.include_router(
        game_ws.build_router(dispatcher, registry, idle_timeout_seconds=settings.idle_timeout_seconds)
    )
    return app


app = create_app()
