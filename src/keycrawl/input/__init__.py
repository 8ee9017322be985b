"""
Input abstraction layer for Keycrawl.

Exposes:
- InputAction: Logical input actions used by the game.
- InputEvent: A press/release event for a logical action.
- InputMapper: Rebindable mapping from physical keys to actions.
- ACTION_DIRECTIONS: Move actions mapped to dungeon directions.
"""
from .actions import ACTION_DIRECTIONS, InputAction, InputEvent
from .mapping import InputMapper

__all__ = [
    "ACTION_DIRECTIONS",
    "InputAction",
    "InputEvent",
    "InputMapper",
]
