from dataclasses import dataclass
from enum import Enum


class GameStatus(str, Enum):
    CREATED = "created"
    JOINED = "joined"
    IN_PROGRESS = "in_progress"


@dataclass
class Game:
    game_id: str                           # uuid4, primary key
    first_user_id: str                     # creator, set once
    second_user_id: str = ""               # joiner, empty until JOIN_GAME
    state: str = ""                        # opaque board blob from the client
    last_move_user_id: str = ""

    @property
    def status(self) -> GameStatus:
        # No FINISHED status: game over is read by clients from the state blob.
        if self.state or self.last_move_user_id:
            return GameStatus.IN_PROGRESS
        if self.second_user_id:
            return GameStatus.JOINED
        return GameStatus.CREATED
