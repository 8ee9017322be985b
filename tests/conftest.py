import sys
from pathlib import Path

import pytest

# Ensure 'src' is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))

from keycrawl.config import DungeonConfig  # noqa: E402
from keycrawl.dungeon.generator import Dungeon, DungeonGenerator  # noqa: E402
from keycrawl.dungeon.rooms import RoomState  # noqa: E402
from keycrawl.rng import make_rng  # noqa: E402


@pytest.fixture
def src_path() -> Path:
    return src


@pytest.fixture
def generate():
    """Factory: generate a dungeon for a seed with optional DungeonConfig overrides."""

    def _generate(seed=1, **overrides) -> Dungeon:
        config = DungeonConfig(**overrides)
        return DungeonGenerator(config, make_rng(seed)).generate()

    return _generate


@pytest.fixture
def small_dungeon() -> Dungeon:
    """A hand-built 3x3 dungeon.

    Layout (row, col), critical path 0 -> 1 -> 2 (dead end, key 1) then 3 (end, lock 1):

        (0,0) #5 lock 2   (0,1) #3 end, lock 1
        (1,0) #0 start    (1,1) #1 key 2
        (2,0) #4          (2,1) #2 key 1
    """
    d = Dungeon(width=3, height=3, critical_path_length=4)
    r0 = d.create_room(1, 0, RoomState.VISITED)
    r1 = d.create_room(1, 1, RoomState.SEEN, r0)
    r2 = d.create_room(2, 1, RoomState.UNSEEN, r1)
    r3 = d.create_room(0, 1, RoomState.UNSEEN, r1)
    d.create_room(2, 0, RoomState.SEEN, r0)
    r5 = d.create_room(0, 0, RoomState.SEEN, r0)
    d.add_key_and_lock(r2, r3)
    d.add_key_and_lock(r1, r5)
    return d
