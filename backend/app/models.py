from enum import StrEnum

from pydantic import BaseModel, Field

from models.game import Game, GameStatus


class Command(StrEnum):
    GENERATE_NEW_GAME = "GENERATE_NEW_GAME"
    JOIN_GAME = "JOIN_GAME"
    MAKE_MOVE = "MAKE_MOVE"


class GameInfo(BaseModel):
    game_id: str = ""
    first_user_id: str = ""
    second_user_id: str = ""
    state: str = ""
    last_move_user_id: str = ""

    @classmethod
    def from_game(cls, game: Game) -> "GameInfo":
        return cls(
            game_id=game.game_id,
            first_user_id=game.first_user_id,
            second_user_id=game.second_user_id,
            state=game.state,
            last_move_user_id=game.last_move_user_id,
        )


class GameRequest(BaseModel):
    command: str = ""
    game_info: GameInfo = Field(default_factory=GameInfo)


class GameResponse(BaseModel):
    command: str = ""
    code: int
    game_info: GameInfo | None = None
    message: str


class ErrorResponse(BaseModel):
    code: int
    error: str


class GameReadResponse(GameInfo):
    """Game record plus derived status. GET /api/games/{id}."""

    status: GameStatus
