"""
Keycrawl package root.

A turn-based grid dungeon crawler: a procedural maze generator with a single
critical path and key/lock placement, a small game state machine for moving
through revealed rooms, and Arcade/console front-ends. Engine specifics
(Arcade) stay out of the pure generation and game logic modules.
"""

__version__ = "0.3.0"

__all__ = [
    "__version__",
]
