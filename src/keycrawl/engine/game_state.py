from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from ..dungeon.generator import Dungeon
from ..dungeon.rooms import Direction, Room, RoomState
from .events import GameEvent

logger = logging.getLogger(__name__)

WIN_MESSAGE = "Congrats! You made it to the end."

Listener = Callable[[GameEvent, "GameState"], None]


@dataclass
class MoveResult:
    """Outcome of a single move attempt.

    Attributes:
        moved: Whether the player changed rooms
        room: The room the player is in after the attempt
        acquired_key: Key id picked up by entering the room, if any
        blocked_by_lock: Lock id that stopped the move, if any
        won: True only on the move that first reached the end room
        message: A user-facing message describing the outcome, if any
    """

    moved: bool
    room: Room
    acquired_key: Optional[int] = None
    blocked_by_lock: Optional[int] = None
    won: bool = False
    message: Optional[str] = None


class GameState:
    """Holds the current run: dungeon, player room, collected keys and message log.

    Movement follows tree edges only. Stepping back to the parent is always
    allowed; stepping into a child requires its key when the child is locked.
    Keys are kept once collected and locks stay on their rooms.
    """

    def __init__(self, dungeon: Dungeon) -> None:
        self._listeners: List[Listener] = []
        self.dungeon = dungeon
        self.player_room: Room = dungeon.start
        self.keys: List[int] = []
        self.has_won: bool = False
        self.messages: List[str] = []
        self.moves: int = 0
        logger.info("Initialized GameState, player at room %d %s", self.player_room.id, self.player_room.position)

    def add_listener(self, listener: Listener) -> None:
        """Subscribe to game events (movement, keys, blocked moves, completion)."""
        self._listeners.append(listener)

    def _emit(self, event: GameEvent) -> None:
        for listener in list(self._listeners):
            try:
                listener(event, self)
            except Exception as ex:  # pragma: no cover - listeners shouldn't crash the game
                logger.exception("Listener errored on %s: %s", event, ex)

    def _log(self, message: str) -> None:
        self.messages.append(message)
        logger.info(message)

    @property
    def player_pos(self):
        return self.player_room.position

    def has_key(self, key_id: int) -> bool:
        return key_id in self.keys

    def target_room(self, direction: Direction) -> Optional[Room]:
        """Room connected to the player's room in ``direction``, if any."""
        row = self.player_room.row + direction.drow
        col = self.player_room.col + direction.dcol
        parent = self.player_room.parent
        if parent is not None and parent.row == row and parent.col == col:
            return parent
        return self.player_room.child_at(row, col)

    def move(self, direction: Direction) -> MoveResult:
        """Attempt to move the player one room in ``direction``.

        Returns a MoveResult; ``moved`` is False when nothing is connected that
        way or when a lock blocks the way.
        """
        current = self.player_room
        parent = current.parent
        target = self.target_room(direction)

        if target is None:
            logger.debug("No passage %s from room %d", direction.name, current.id)
            return MoveResult(moved=False, room=current)

        if target is parent:
            self.player_room = parent
            self.moves += 1
            logger.debug("Player moved back to room %d", parent.id)
            self._emit(GameEvent.PLAYER_MOVED)
            return MoveResult(moved=True, room=parent)

        if target.lock and not self.has_key(target.lock):
            message = f"You do not have the required key: {target.lock}"
            self._log(message)
            self._emit(GameEvent.MOVE_BLOCKED)
            return MoveResult(moved=False, room=current, blocked_by_lock=target.lock, message=message)

        result = MoveResult(moved=True, room=target)
        if target.state is RoomState.SEEN:
            target.state = RoomState.VISITED
            if target.key:
                key_id = target.key
                self.keys.append(key_id)
                target.key = None
                result.acquired_key = key_id
                result.message = f"Acquired key: {key_id}"
                self._log(result.message)
            for child in target.children:
                child.state = RoomState.SEEN

        self.player_room = target
        self.moves += 1
        logger.debug("Player moved to room %d %s", target.id, target.position)
        self._emit(GameEvent.PLAYER_MOVED)
        if result.acquired_key is not None:
            self._emit(GameEvent.KEY_ACQUIRED)

        if target is self.dungeon.end and not self.has_won:
            self.has_won = True
            result.won = True
            result.message = WIN_MESSAGE
            self._log(WIN_MESSAGE)
            self._emit(GameEvent.DUNGEON_COMPLETED)
        return result

    def status_line(self) -> str:
        keys = ",".join(str(k) for k in self.keys)
        return f"Keys: {keys}"
