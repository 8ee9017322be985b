from __future__ import annotations

import logging
from typing import Optional

from ..config import Settings
from ..dungeon.generator import DungeonGenerator
from ..dungeon.validation import check_dungeon
from ..input.actions import InputAction
from ..rng import RNGManager
from .game_state import GameState, MoveResult

logger = logging.getLogger(__name__)


class GameSession:
    """Front-end independent driver shared by the Arcade window and the console loop.

    Owns the RNG manager so that the n-th dungeon of a seeded session is always
    the same, dispatches logical input actions, and tracks whether the session
    should keep running.
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self.settings = settings or Settings()
        self.settings.dungeon.validate()
        self.rngm = RNGManager(self.settings.seed)
        self.debug: bool = self.settings.display.debug
        self.dungeon_index: int = -1
        self._running: bool = True
        self.state: GameState = self.new_dungeon()

    @property
    def running(self) -> bool:
        return self._running

    def new_dungeon(self) -> GameState:
        """Generate the next dungeon of the session and reset the player."""
        self.dungeon_index += 1
        rng = self.rngm.context_rng("dungeon", self.dungeon_index)
        dungeon = DungeonGenerator(self.settings.dungeon, rng).generate()
        if self.debug:
            check_dungeon(dungeon)
        self.state = GameState(dungeon)
        logger.info("Dungeon #%d ready (%d rooms)", self.dungeon_index, len(dungeon.rooms))
        return self.state

    def stop(self) -> None:
        if not self._running:
            return
        self._running = False
        logger.info("Session stopped after %d dungeon(s)", self.dungeon_index + 1)

    def handle(self, action: InputAction) -> Optional[MoveResult]:
        """Apply a logical action. Returns the MoveResult for move actions, else None."""
        if not self._running:
            logger.debug("Action %s ignored; session stopped", action)
            return None
        direction = action.direction
        if direction is not None:
            return self.state.move(direction)
        if action is InputAction.TOGGLE_DEBUG:
            self.debug = not self.debug
            logger.info("Debug view %s", "on" if self.debug else "off")
        elif action is InputAction.NEW_DUNGEON:
            self.new_dungeon()
        elif action is InputAction.QUIT:
            self.stop()
        return None
