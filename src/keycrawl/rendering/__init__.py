"""
Rendering for Keycrawl.

``scene`` turns a GameState into engine-agnostic draw primitives and ``ascii``
into a text map; ``arcade_window`` (imported lazily, it needs a display) draws
the scene with Arcade.
"""
from .ascii import render_ascii
from .scene import DoorwayShape, PlayerMarker, RoomShape, Scene, TextLabel, build_scene

__all__ = [
    "DoorwayShape",
    "PlayerMarker",
    "RoomShape",
    "Scene",
    "TextLabel",
    "build_scene",
    "render_ascii",
]
