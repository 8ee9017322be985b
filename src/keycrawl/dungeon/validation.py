"""Structural and solvability checks for generated dungeons.

Used by tests and by the generator's callers when ``--debug`` is on. The
solvability check floods the room tree the way a player would: it walks any
edge, enters a locked room only when the key is held, and keeps going while
new keys turn up.
"""
from __future__ import annotations

import logging
from collections import deque
from typing import Iterable, List, Set

from ..exceptions import GenerationError
from .generator import Dungeon
from .rooms import Room

logger = logging.getLogger(__name__)


def _neighbours(room: Room) -> List[Room]:
    out = list(room.children)
    if room.parent is not None:
        out.append(room.parent)
    return out


def reachable_rooms(dungeon: Dungeon, keys: Iterable[int] = ()) -> Set[int]:
    """Return ids of rooms a player can reach from the start room.

    Keys lying in reached rooms are picked up; locked rooms whose key shows up
    later are retried until no further progress is possible.
    """
    held: Set[int] = set(keys)
    reached: Set[int] = set()
    blocked: List[Room] = []
    dq = deque([dungeon.start])

    while dq or blocked:
        if not dq:
            # Retry locked rooms with the keys gathered so far
            openable = [r for r in blocked if r.lock in held]
            if not openable:
                break
            blocked = [r for r in blocked if r.lock not in held]
            dq.extend(openable)
            continue
        room = dq.popleft()
        if room.id in reached:
            continue
        if room.lock and room.lock not in held:
            blocked.append(room)
            continue
        reached.add(room.id)
        if room.key:
            held.add(room.key)
        for nb in _neighbours(room):
            if nb.id not in reached:
                dq.append(nb)
    return reached


def is_solvable(dungeon: Dungeon) -> bool:
    return dungeon.end.id in reachable_rooms(dungeon)


def check_dungeon(dungeon: Dungeon) -> None:
    """Verify the structural invariants of a freshly generated dungeon.

    Raises:
        GenerationError: describing the first violated invariant.
    """
    if len(dungeon.rooms) < dungeon.critical_path_length:
        raise GenerationError(
            f"Expected at least {dungeon.critical_path_length} rooms, found {len(dungeon.rooms)}"
        )
    if not dungeon.start.is_root:
        raise GenerationError("Start room must be the root")

    cells = set()
    keys = {}
    locks = {}
    for index, room in enumerate(dungeon.rooms):
        if room.id != index:
            raise GenerationError(f"Room at index {index} has id {room.id}")
        if not (0 <= room.row < dungeon.height and 0 <= room.col < dungeon.width):
            raise GenerationError(f"Room {room.id} lies outside the grid at {room.position}")
        if room.position in cells:
            raise GenerationError(f"Two rooms share cell {room.position}")
        cells.add(room.position)
        if index > 0:
            if room.parent is None:
                raise GenerationError(f"Room {room.id} has no parent")
            if room.parent.id >= room.id:
                raise GenerationError(f"Room {room.id} was created before its parent {room.parent.id}")
            if not room.is_adjacent_to(room.parent):
                raise GenerationError(f"Room {room.id} is not adjacent to its parent {room.parent.id}")
        if room.key:
            if room.key in keys:
                raise GenerationError(f"Key {room.key} appears twice")
            keys[room.key] = room
        if room.lock:
            if room.lock in locks:
                raise GenerationError(f"Lock {room.lock} appears twice")
            locks[room.lock] = room

    if set(keys) != set(locks):
        raise GenerationError(f"Unmatched keys/locks: keys={sorted(keys)} locks={sorted(locks)}")
    for key_id, key_room in keys.items():
        if key_room.id >= locks[key_id].id:
            raise GenerationError(f"Key {key_id} lies behind its own lock")

    if not is_solvable(dungeon):
        raise GenerationError("End room is not reachable")
    logger.debug("Dungeon passed validation: %d rooms, %d keys", len(dungeon.rooms), len(keys))
