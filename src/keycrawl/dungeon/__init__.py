"""
Dungeon systems for Keycrawl.

Contains the room tree model, the occupancy grid used while generating, the
random-walk generator with key/lock placement, and validation helpers that
check the tree is well formed and solvable.
"""
from .generator import Dungeon, DungeonGenerator, generate_dungeon
from .grid import OccupancyGrid
from .rooms import Direction, Room, RoomState
from .validation import check_dungeon, is_solvable, reachable_rooms

__all__ = [
    "Direction",
    "Dungeon",
    "DungeonGenerator",
    "OccupancyGrid",
    "Room",
    "RoomState",
    "check_dungeon",
    "generate_dungeon",
    "is_solvable",
    "reachable_rooms",
]
