from __future__ import annotations

import logging
from typing import Dict

import arcade

from ..engine.events import GameEvent
from ..engine.game_state import GameState
from ..engine.session import GameSession
from ..input.mapping import InputMapper
from .scene import DoorwayShape, PlayerMarker, RoomShape, TextLabel, build_scene

logger = logging.getLogger(__name__)

STATUS_HEIGHT = 56
STATUS_MARGIN = 10
STATUS_COLOR = (20, 20, 20)

# Arcade key codes and the canonical names bound by InputMapper.default()
ARCADE_KEY_NAMES: Dict[int, str] = {
    arcade.key.UP: "UP",
    arcade.key.DOWN: "DOWN",
    arcade.key.LEFT: "LEFT",
    arcade.key.RIGHT: "RIGHT",
    arcade.key.W: "W",
    arcade.key.A: "A",
    arcade.key.S: "S",
    arcade.key.D: "D",
    arcade.key.R: "R",
    arcade.key.Q: "Q",
    arcade.key.F1: "F1",
    arcade.key.ESCAPE: "ESCAPE",
}


class DungeonWindow(arcade.Window):
    """Arcade window drawing the dungeon scene with a status strip underneath.

    The scene is laid out in canvas coordinates (y down) by ``build_scene`` and
    flipped here into Arcade's y-up space.
    """

    def __init__(self, session: GameSession, mapper: InputMapper) -> None:
        display = session.settings.display
        super().__init__(display.width_px, display.height_px + STATUS_HEIGHT, title=display.title)
        self.session = session
        self.mapper = mapper
        for code, name in ARCADE_KEY_NAMES.items():
            self.mapper.set_alias(code, name)
        self.background_color = session.settings.colors.background
        self._watch(session.state)
        logger.info("Arcade window initialized (%dx%d)", self.width, self.height)

    def _watch(self, state: GameState) -> None:
        state.add_listener(self._on_event)
        self.set_caption(f"{self.session.settings.display.title} - dungeon {self.session.dungeon_index + 1}")

    def _on_event(self, event: GameEvent, state: GameState) -> None:
        if event is GameEvent.DUNGEON_COMPLETED:
            logger.info("Dungeon completed in %d moves", state.moves)

    # ---- Coordinate helpers ---------------------------------------------
    def _y(self, canvas_y: float) -> float:
        return STATUS_HEIGHT + self.session.settings.display.height_px - canvas_y

    # ---- Arcade callbacks -------------------------------------------------
    def on_draw(self) -> None:
        self.clear()
        display = self.session.settings.display
        colors = self.session.settings.colors
        scene = build_scene(
            self.session.state,
            display.width_px,
            display.height_px,
            colors,
            debug=self.session.debug,
        )
        for shape in scene.shapes:
            if isinstance(shape, RoomShape):
                left, right = shape.left, shape.left + shape.width
                top, bottom = self._y(shape.top), self._y(shape.top + shape.height)
                arcade.draw_lrbt_rectangle_filled(left, right, bottom, top, shape.fill)
                arcade.draw_lrbt_rectangle_outline(left, right, bottom, top, shape.outline, border_width=1)
            elif isinstance(shape, DoorwayShape):
                cy = self._y(shape.center_y)
                arcade.draw_lrbt_rectangle_filled(
                    shape.center_x - shape.half_width,
                    shape.center_x + shape.half_width,
                    cy - shape.half_height,
                    cy + shape.half_height,
                    shape.fill,
                )
            elif isinstance(shape, PlayerMarker):
                arcade.draw_circle_filled(shape.center_x, self._y(shape.center_y), shape.radius, shape.fill)
            elif isinstance(shape, TextLabel):
                arcade.draw_text(
                    shape.text,
                    shape.x,
                    self._y(shape.y),
                    shape.color,
                    display.font_size,
                    anchor_x="center",
                    anchor_y="center",
                )
        self._draw_status()

    def _draw_status(self) -> None:
        state = self.session.state
        arcade.draw_lrbt_rectangle_filled(0, self.width, 0, STATUS_HEIGHT, STATUS_COLOR)
        font_size = self.session.settings.display.font_size
        arcade.draw_text(state.status_line(), STATUS_MARGIN, STATUS_HEIGHT - 2 * STATUS_MARGIN, arcade.color.WHITE, font_size)
        if state.messages:
            arcade.draw_text(state.messages[-1], STATUS_MARGIN, STATUS_MARGIN, arcade.color.LIGHT_GRAY, font_size)

    def on_key_press(self, symbol: int, modifiers: int) -> None:
        event = self.mapper.on_key_event(symbol, pressed=True)
        if event is None:
            return
        previous = self.session.state
        self.session.handle(event.action)
        if self.session.state is not previous:
            self._watch(self.session.state)
        if not self.session.running:
            self.close()


def run_window(session: GameSession, mapper: InputMapper) -> None:
    window = DungeonWindow(session, mapper)
    try:
        arcade.run()
    finally:
        session.stop()
        logger.debug("Window %r closed", window)
