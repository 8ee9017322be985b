from enum import Enum, auto


class GameEvent(Enum):
    """Events emitted by GameState to notify UI or systems."""

    PLAYER_MOVED = auto()
    KEY_ACQUIRED = auto()
    MOVE_BLOCKED = auto()
    DUNGEON_COMPLETED = auto()
