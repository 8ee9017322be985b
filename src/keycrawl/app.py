from __future__ import annotations

import logging
from typing import Optional, TextIO

from .config import Settings
from .engine.session import GameSession
from .input.mapping import InputMapper
from .rendering.ascii import render_ascii

logger = logging.getLogger(__name__)

CONSOLE_HELP = "Move with w/a/s/d, r = new dungeon, f1 = debug view, q = quit."

# Single characters typed in the console and the key names they stand for
CONSOLE_KEYS = {"w": "W", "a": "A", "s": "S", "d": "D", "r": "R", "q": "Q"}


def build_mapper(settings: Settings) -> InputMapper:
    mapper = InputMapper.default()
    mapper.load_bindings(settings.input.mapping)
    return mapper


def run_gui(settings: Settings) -> int:
    """Run the game in an Arcade window.

    Returns:
        Process exit code (0 on success).
    """
    from .rendering.arcade_window import run_window

    session = GameSession(settings)
    try:
        logger.info("Launching Arcade window")
        run_window(session, build_mapper(settings))
        logger.info("Arcade loop finished")
        return 0
    except Exception:
        logger.exception("Unhandled exception in GUI loop; exiting with code 1")
        return 1


def _console_tokens(line: str):
    """Split a console line into key names: ``"f1"`` as a word, else one key per character."""
    for word in line.split():
        if word.lower() == "f1":
            yield "F1"
            continue
        for ch in word:
            yield CONSOLE_KEYS.get(ch.lower(), ch)


def run_headless(settings: Settings, stdin: TextIO, stdout: TextIO) -> int:
    """Play in the console: print the map, read commands line by line until quit or EOF."""
    session = GameSession(settings)
    mapper = build_mapper(settings)

    def show() -> None:
        print(render_ascii(session.state, debug=session.debug), file=stdout)
        print(session.state.status_line(), file=stdout)

    print("Keycrawl (headless)", file=stdout)
    print(CONSOLE_HELP, file=stdout)
    show()

    try:
        for line in stdin:
            for token in _console_tokens(line):
                action = mapper.translate_key(token)
                if action is None:
                    print(f"Unknown command: {token}", file=stdout)
                    continue
                previous = session.state
                seen = len(previous.messages)
                result = session.handle(action)
                if not session.running:
                    break
                if session.state is not previous:
                    print(f"New dungeon #{session.dungeon_index + 1}", file=stdout)
                for message in previous.messages[seen:]:
                    print(message, file=stdout)
                if result is not None and not result.moved and result.blocked_by_lock is None:
                    print("You cannot go that way.", file=stdout)
            if not session.running:
                break
            show()
    except KeyboardInterrupt:
        session.stop()
        print("Interrupted by user", file=stdout)
        return 130
    except Exception:
        logger.exception("Unhandled exception in headless loop")
        return 1

    session.stop()
    print("Goodbye.", file=stdout)
    return 0
