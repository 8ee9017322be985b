from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import List, Optional, Tuple


class RoomState(IntEnum):
    """Visibility of a room to the player.

    - UNSEEN: not yet revealed
    - SEEN: revealed (its parent was visited) but not entered
    - VISITED: entered by the player at least once
    """

    UNSEEN = 0
    SEEN = 1
    VISITED = 2


class Direction(Enum):
    """Axis-aligned moves as (row delta, column delta). Row 0 is the top of the grid."""

    UP = (-1, 0)
    LEFT = (0, -1)
    DOWN = (1, 0)
    RIGHT = (0, 1)

    @property
    def drow(self) -> int:
        return self.value[0]

    @property
    def dcol(self) -> int:
        return self.value[1]

    @property
    def opposite(self) -> "Direction":
        return Direction((-self.drow, -self.dcol))

    @classmethod
    def between(cls, src: Tuple[int, int], dst: Tuple[int, int]) -> Optional["Direction"]:
        """Return the direction leading from ``src`` to the adjacent cell ``dst``, else None."""
        delta = (dst[0] - src[0], dst[1] - src[1])
        for d in cls:
            if d.value == delta:
                return d
        return None


@dataclass(eq=False)
class Room:
    """A node of the dungeon tree.

    Rooms compare by identity; ``id`` is the creation index and is unique per dungeon.
    A room created with a parent registers itself in ``parent.children``.
    """

    id: int
    state: RoomState
    row: int
    col: int
    parent: Optional["Room"] = None
    children: List["Room"] = field(default_factory=list)
    key: Optional[int] = None
    lock: Optional[int] = None

    def __post_init__(self) -> None:
        if self.parent is not None:
            self.parent.children.append(self)

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        extra = ""
        if self.key:
            extra += f" key={self.key}"
        if self.lock:
            extra += f" lock={self.lock}"
        return f"<Room #{self.id} ({self.row},{self.col}) {self.state.name}{extra}>"

    @property
    def position(self) -> Tuple[int, int]:
        return self.row, self.col

    @property
    def is_root(self) -> bool:
        return self.parent is None

    @property
    def depth(self) -> int:
        d = 0
        node = self.parent
        while node is not None:
            d += 1
            node = node.parent
        return d

    def ancestors(self) -> List["Room"]:
        """Parent chain from the direct parent up to the root."""
        out: List[Room] = []
        node = self.parent
        while node is not None:
            out.append(node)
            node = node.parent
        return out

    def direction_to(self, other: "Room") -> Optional[Direction]:
        return Direction.between(self.position, other.position)

    def is_adjacent_to(self, other: "Room") -> bool:
        return self.direction_to(other) is not None

    def child_at(self, row: int, col: int) -> Optional["Room"]:
        for child in self.children:
            if child.row == row and child.col == col:
                return child
        return None
