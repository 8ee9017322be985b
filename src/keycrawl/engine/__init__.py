from .events import GameEvent
from .game_state import GameState, MoveResult
from .session import GameSession

__all__ = ["GameEvent", "GameSession", "GameState", "MoveResult"]
