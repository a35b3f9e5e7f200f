from .game import Game, GameStatus

__all__ = [
    "Game",
    "GameStatus",
]
