"""Read-only game REST API, for polling a game without holding a socket."""

import logging

from fastapi import APIRouter, HTTPException

from app.models import GameInfo, GameReadResponse
from services.errors import GameNotFoundError
from services.store import GameStore

logger = logging.getLogger(__name__)


def build_router(store: GameStore) -> APIRouter:
    router = APIRouter(tags=["games"])

    @router.get("/games/{game_id}", response_model=GameReadResponse, status_code=200)
    async def get_game(game_id: str) -> GameReadResponse:
        """Get the stored record and its derived status (created -> joined -> in_progress)."""
        logger.info("[games] GET /api/games/%s called", game_id)
        try:
            game = await store.find_by_id(game_id)
        except GameNotFoundError:
            raise HTTPException(status_code=404, detail="Game not found") from None
        return GameReadResponse(**GameInfo.from_game(game).model_dump(), status=game.status)

    return router
