from .dispatcher import CommandDispatcher
from .store import GameStore, InMemoryGameStore

__all__ = ["CommandDispatcher", "GameStore", "InMemoryGameStore"]
