from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional

from ..config import DungeonConfig
from ..exceptions import GenerationError, KeyPlacementError
from .grid import OccupancyGrid
from .rooms import Room, RoomState

logger = logging.getLogger(__name__)


@dataclass
class Dungeon:
    """A generated dungeon: a rooted tree of rooms laid out on a grid.

    ``rooms`` is indexed by room id. The first ``critical_path_length`` rooms form
    the critical path from ``start`` to ``end``; later rooms belong to bonus branches.
    """

    width: int
    height: int
    critical_path_length: int
    rooms: List[Room] = field(default_factory=list)
    key_count: int = 0

    @property
    def start(self) -> Room:
        return self.rooms[0]

    @property
    def end(self) -> Room:
        return self.rooms[self.critical_path_length - 1]

    def create_room(self, row: int, col: int, state: RoomState, parent: Optional[Room] = None) -> Room:
        room = Room(id=len(self.rooms), state=state, row=row, col=col, parent=parent)
        self.rooms.append(room)
        return room

    def add_key_and_lock(self, key_room: Room, lock_room: Room) -> int:
        """Place a fresh key in ``key_room`` and its matching lock on ``lock_room``.

        Returns the new key id. Key ids are handed out 1, 2, 3, ... in placement order.

        Raises:
            KeyPlacementError: if the key would come after the lock, or either room
                already carries a key/lock.
        """
        if key_room.id >= lock_room.id:
            raise KeyPlacementError(
                f"Key room {key_room.id} must come before lock room {lock_room.id}"
            )
        if key_room.key:
            raise KeyPlacementError(f"Room {key_room.id} already has a key")
        if lock_room.lock:
            raise KeyPlacementError(f"Room {lock_room.id} already has a lock")
        self.key_count += 1
        key_room.key = self.key_count
        lock_room.lock = self.key_count
        logger.debug("Key %d placed in room %d, lock on room %d", self.key_count, key_room.id, lock_room.id)
        return self.key_count

    def room_at(self, row: int, col: int) -> Optional[Room]:
        for room in self.rooms:
            if room.row == row and room.col == col:
                return room
        return None

    def critical_path(self) -> List[Room]:
        return self.rooms[: self.critical_path_length]

    def bonus_rooms(self) -> List[Room]:
        return self.rooms[self.critical_path_length :]

    def walk(self) -> Iterator[Room]:
        """Depth-first traversal from the start room (children visited last-first)."""
        stack = [self.start]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(node.children)

    def key_rooms(self) -> Dict[int, Room]:
        """Map of key id -> room currently holding it (collected keys are gone)."""
        return {room.key: room for room in self.rooms if room.key}

    def lock_rooms(self) -> Dict[int, Room]:
        return {room.lock: room for room in self.rooms if room.lock}


class DungeonGenerator:
    """
    Random-walk dungeon generator with backtracking and key/lock placement.

    Steps:
    - Critical path: a random walk of ``critical_path_length`` rooms. When the walk
      hits a dead end it backtracks up the parent chain and continues from the first
      ancestor with a free neighbour; the dead end gets a key and the next room the
      matching lock.
    - Bonus paths: every critical room but the end grows one branch until it stalls.
    - Bonus keys: extra keys on the critical path locking bonus rooms.
    """

    def __init__(self, config: Optional[DungeonConfig] = None, rng: Optional[random.Random] = None) -> None:
        self.config = config or DungeonConfig()
        self.config.validate()
        self.rng = rng or random.Random()

    def generate(self) -> Dungeon:
        cfg = self.config
        logger.info(
            "Generating dungeon %dx%d (critical path %d, bonus keys %d)",
            cfg.width,
            cfg.height,
            cfg.critical_path_length,
            cfg.num_bonus_keys,
        )
        dungeon = Dungeon(cfg.width, cfg.height, cfg.critical_path_length)
        grid = OccupancyGrid(cfg.width, cfg.height)

        start = dungeon.create_room(
            self.rng.randrange(cfg.height),
            self.rng.randrange(cfg.width),
            RoomState.VISITED,
        )
        grid.occupy(start.row, start.col)

        current = start
        for _ in range(1, cfg.critical_path_length):
            room = self._generate_room(dungeon, grid, current, backtrack=True)
            assert room is not None  # backtracking always yields a room or raises
            current = room

        if cfg.bonus_paths:
            self._grow_bonus_paths(dungeon, grid)

        if cfg.num_bonus_keys:
            self._place_bonus_keys(dungeon, cfg.num_bonus_keys)

        logger.info(
            "Generated %d rooms (%d bonus), %d keys; start=%s end=%s",
            len(dungeon.rooms),
            len(dungeon.bonus_rooms()),
            dungeon.key_count,
            dungeon.start.position,
            dungeon.end.position,
        )
        return dungeon

    def _generate_room(
        self,
        dungeon: Dungeon,
        grid: OccupancyGrid,
        parent: Room,
        backtrack: bool,
    ) -> Optional[Room]:
        key_room: Optional[Room] = None

        candidates = grid.free_adjacent_tiles(parent.row, parent.col)
        if not candidates:
            if not backtrack:
                return None
            key_room = parent
            while not candidates:
                if parent.parent is None:
                    raise GenerationError(
                        f"No free cell reachable from room {key_room.id}; grid is exhausted"
                    )
                parent = parent.parent
                candidates = grid.free_adjacent_tiles(parent.row, parent.col)
            logger.debug("Dead end at room %d; backtracked to room %d", key_room.id, parent.id)

        # Continuing straight ahead counts twice to keep corridors long
        if self.config.linearity_bias and parent.parent is not None:
            ahead = (2 * parent.row - parent.parent.row, 2 * parent.col - parent.parent.col)
            if grid.is_free(*ahead):
                candidates.append(ahead)

        row, col = candidates[self.rng.randrange(len(candidates))]
        state = RoomState.SEEN if parent is dungeon.start else RoomState.UNSEEN
        child = dungeon.create_room(row, col, state, parent)
        grid.occupy(row, col)

        if key_room is not None:
            dungeon.add_key_and_lock(key_room, child)
        return child

    def _grow_bonus_paths(self, dungeon: Dungeon, grid: OccupancyGrid) -> None:
        # Popping from the end processes the start room first
        stack: List[Optional[Room]] = list(reversed(dungeon.rooms[:-1]))
        while stack:
            room = stack.pop()
            if room is not None:
                stack.append(self._generate_room(dungeon, grid, room, backtrack=False))

    def _place_bonus_keys(self, dungeon: Dungeon, requested: int) -> None:
        cpl = dungeon.critical_path_length
        key_span = cpl - 2
        lock_span = len(dungeon.rooms) - cpl

        free_key_rooms = sum(1 for r in dungeon.rooms[1 : cpl - 1] if not r.key)
        free_lock_rooms = sum(1 for r in dungeon.bonus_rooms() if not r.lock)
        count = min(requested, free_key_rooms, free_lock_rooms)
        if count < requested:
            logger.warning(
                "Only %d of %d bonus keys fit (%d key rooms, %d lock rooms available)",
                count,
                requested,
                free_key_rooms,
                free_lock_rooms,
            )

        for _ in range(count):
            key_room = dungeon.rooms[1 + self.rng.randrange(key_span)]
            while key_room.key:
                key_room = dungeon.rooms[1 + self.rng.randrange(key_span)]
            lock_room = dungeon.rooms[cpl + self.rng.randrange(lock_span)]
            while lock_room.lock:
                lock_room = dungeon.rooms[cpl + self.rng.randrange(lock_span)]
            dungeon.add_key_and_lock(key_room, lock_room)


def generate_dungeon(config: Optional[DungeonConfig] = None, rng: Optional[random.Random] = None) -> Dungeon:
    """Generate a dungeon with the given settings (defaults: 10x10, critical path of 25)."""
    return DungeonGenerator(config, rng).generate()
