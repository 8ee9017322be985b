"""Plain-text map for the headless console mode and for logs.

Each room is a four character cell: ``[  ]`` visited, ``(  )`` seen, ``{  }``
unseen (debug only). The player shows as ``@`` and a key still lying in a room
as its number. Visited rooms show their connections: ``-``/``|`` for open
passages and ``#`` for locked ones.
"""
from __future__ import annotations

from typing import List

from ..dungeon.rooms import Room, RoomState
from ..engine.game_state import GameState

CELL_WIDTH = 4
STRIDE = CELL_WIDTH + 1

_BRACKETS = {
    RoomState.VISITED: "[]",
    RoomState.SEEN: "()",
    RoomState.UNSEEN: "{}",
}


def _cell(room: Room, is_player: bool) -> str:
    if is_player:
        inner = "@ "
    elif room.key:
        inner = f"{room.key:>2}" if room.key < 100 else "**"
    else:
        inner = "  "
    left, right = _BRACKETS[room.state]
    return f"{left}{inner}{right}"


def render_ascii(state: GameState, debug: bool = False) -> str:
    dungeon = state.dungeon
    lines: List[List[str]] = [[" "] * (STRIDE * dungeon.width - 1) for _ in range(2 * dungeon.height - 1)]

    stack = [dungeon.start]
    while stack:
        node = stack.pop()
        if node.state is RoomState.UNSEEN and not debug:
            continue
        line = lines[2 * node.row]
        x = STRIDE * node.col
        line[x : x + CELL_WIDTH] = list(_cell(node, node is state.player_room))

        if debug or node.state is RoomState.VISITED:
            for child in node.children:
                locked = bool(child.lock)
                if child.row == node.row:
                    gap_x = STRIDE * min(child.col, node.col) + CELL_WIDTH
                    lines[2 * node.row][gap_x] = "#" if locked else "-"
                else:
                    gap_y = 2 * min(child.row, node.row) + 1
                    lines[gap_y][x + 1] = "#" if locked else "|"
        stack.extend(node.children)

    return "\n".join("".join(line).rstrip() for line in lines)
