import pytest

from keycrawl.dungeon.generator import Dungeon
from keycrawl.dungeon.rooms import RoomState
from keycrawl.exceptions import GenerationError, KeyPlacementError


def _chain(length: int) -> Dungeon:
    d = Dungeon(width=length, height=1, critical_path_length=length)
    parent = d.create_room(0, 0, RoomState.VISITED)
    for col in range(1, length):
        parent = d.create_room(0, col, RoomState.UNSEEN, parent)
    return d


class TestKeyPlacement:
    def test_key_and_lock_get_the_same_fresh_id(self):
        d = _chain(4)
        first = d.add_key_and_lock(d.rooms[1], d.rooms[2])
        second = d.add_key_and_lock(d.rooms[2], d.rooms[3])

        assert (first, second) == (1, 2)
        assert d.rooms[1].key == 1 and d.rooms[2].lock == 1
        assert d.rooms[2].key == 2 and d.rooms[3].lock == 2
        assert d.key_count == 2

    def test_key_after_lock_rejected(self):
        d = _chain(4)
        with pytest.raises(KeyPlacementError):
            d.add_key_and_lock(d.rooms[3], d.rooms[1])
        with pytest.raises(KeyPlacementError):
            d.add_key_and_lock(d.rooms[2], d.rooms[2])
        assert d.key_count == 0

    def test_room_holds_at_most_one_key(self):
        d = _chain(4)
        d.add_key_and_lock(d.rooms[1], d.rooms[2])
        with pytest.raises(KeyPlacementError):
            d.add_key_and_lock(d.rooms[1], d.rooms[3])
        assert d.rooms[3].lock is None
        assert d.key_count == 1

    def test_room_holds_at_most_one_lock(self):
        d = _chain(4)
        d.add_key_and_lock(d.rooms[1], d.rooms[3])
        with pytest.raises(KeyPlacementError):
            d.add_key_and_lock(d.rooms[2], d.rooms[3])
        assert d.rooms[2].key is None

    def test_placement_error_is_a_generation_error(self):
        assert issubclass(KeyPlacementError, GenerationError)


class TestSmallDungeonLocks:
    def test_fixture_pairs(self, small_dungeon):
        assert small_dungeon.key_rooms() == {1: small_dungeon.rooms[2], 2: small_dungeon.rooms[1]}
        assert small_dungeon.lock_rooms() == {1: small_dungeon.rooms[3], 2: small_dungeon.rooms[5]}
