from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, Optional

from ..dungeon.rooms import Direction


class InputAction(Enum):
    """Logical input actions used throughout the game.

    Front-ends (Arcade window, console loop) translate their raw input into
    these actions so the game logic never sees device specifics.
    """

    MOVE_UP = auto()
    MOVE_DOWN = auto()
    MOVE_LEFT = auto()
    MOVE_RIGHT = auto()
    TOGGLE_DEBUG = auto()
    NEW_DUNGEON = auto()
    QUIT = auto()

    @property
    def direction(self) -> Optional[Direction]:
        return ACTION_DIRECTIONS.get(self)


ACTION_DIRECTIONS: Dict[InputAction, Direction] = {
    InputAction.MOVE_UP: Direction.UP,
    InputAction.MOVE_DOWN: Direction.DOWN,
    InputAction.MOVE_LEFT: Direction.LEFT,
    InputAction.MOVE_RIGHT: Direction.RIGHT,
}


@dataclass(frozen=True)
class InputEvent:
    """Represents a press or release of a logical input action.

    Attributes:
        action: The logical action triggered.
        pressed: True if this is a key down event; False if up.
        source: Optional string describing the source (e.g., "keyboard", "console").
    """

    action: InputAction
    pressed: bool
    source: Optional[str] = None


__all__ = ["ACTION_DIRECTIONS", "InputAction", "InputEvent"]
