from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Union

from ..config import Color, ColorConfig
from ..dungeon.rooms import RoomState
from ..engine.game_state import GameState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RoomShape:
    """Filled, outlined rectangle; ``left``/``top`` in canvas pixels (y grows downward)."""

    room_id: int
    left: float
    top: float
    width: float
    height: float
    fill: Color
    outline: Color


@dataclass(frozen=True)
class DoorwayShape:
    """Small square on the edge between a room and one of its children."""

    center_x: float
    center_y: float
    half_width: float
    half_height: float
    fill: Color


@dataclass(frozen=True)
class PlayerMarker:
    center_x: float
    center_y: float
    radius: float
    fill: Color


@dataclass(frozen=True)
class TextLabel:
    text: str
    x: float
    y: float
    color: Color


Shape = Union[RoomShape, DoorwayShape, PlayerMarker, TextLabel]


@dataclass
class Scene:
    """Ordered draw list for one frame. Later shapes paint over earlier ones."""

    width_px: float
    height_px: float
    tile_width: float
    tile_height: float
    shapes: List[Shape] = field(default_factory=list)

    def of_type(self, kind: type) -> List[Shape]:
        return [s for s in self.shapes if isinstance(s, kind)]

    @property
    def player(self) -> Optional[PlayerMarker]:
        markers = self.of_type(PlayerMarker)
        return markers[0] if markers else None


def build_scene(
    state: GameState,
    width_px: float,
    height_px: float,
    colors: Optional[ColorConfig] = None,
    debug: bool = False,
) -> Scene:
    """Lay out the dungeon for drawing.

    Rooms are walked depth-first from the start room. Unseen rooms (and what lies
    beyond them) are skipped unless ``debug`` is set, in which case they are drawn
    in the hidden color together with their doorways and room ids.
    """
    colors = colors or ColorConfig()
    dungeon = state.dungeon
    tile_h = height_px / dungeon.height
    tile_w = width_px / dungeon.width
    off_h = tile_h / 5
    off_w = tile_w / 5

    scene = Scene(width_px=width_px, height_px=height_px, tile_width=tile_w, tile_height=tile_h)
    stack = [dungeon.start]
    while stack:
        node = stack.pop()
        if node.state is RoomState.VISITED:
            fill = colors.visited
        elif node.state is RoomState.SEEN:
            fill = colors.seen
        elif debug:
            fill = colors.hidden
        else:
            continue

        scene.shapes.append(
            RoomShape(
                room_id=node.id,
                left=node.col * tile_w + off_w,
                top=node.row * tile_h + off_h,
                width=tile_w - 2 * off_w,
                height=tile_h - 2 * off_h,
                fill=fill,
                outline=colors.outline,
            )
        )
        center_x = node.col * tile_w + tile_w / 2
        center_y = node.row * tile_h + tile_h / 2

        if node is state.player_room:
            scene.shapes.append(PlayerMarker(center_x, center_y, min(off_h, off_w), colors.player))

        if node.key:
            scene.shapes.append(TextLabel(str(node.key), center_x, center_y, colors.key_text))

        # Connections only show once a room has been visited
        if debug or node.state is RoomState.VISITED:
            for child in node.children:
                door_y = center_y + (tile_h / 2) * (child.row - node.row)
                door_x = center_x + (tile_w / 2) * (child.col - node.col)
                scene.shapes.append(DoorwayShape(door_x, door_y, off_w, off_h, colors.doorway))
                if child.lock:
                    scene.shapes.append(TextLabel(str(child.lock), door_x, door_y, colors.lock_text))

        if debug:
            scene.shapes.append(
                TextLabel(
                    str(node.id),
                    node.col * tile_w + off_w,
                    node.row * tile_h + 2 * off_h,
                    colors.room_id_text,
                )
            )
        stack.extend(node.children)

    logger.debug("Built scene with %d shapes (debug=%s)", len(scene.shapes), debug)
    return scene
