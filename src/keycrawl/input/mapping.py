from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional

from .actions import InputAction, InputEvent

logger = logging.getLogger(__name__)

# Browser KeyboardEvent.code names and the canonical key each stands for
BROWSER_CODE_ALIASES: Dict[str, str] = {
    "KeyW": "W",
    "KeyA": "A",
    "KeyS": "S",
    "KeyD": "D",
    "KeyR": "R",
    "KeyQ": "Q",
    "ArrowUp": "UP",
    "ArrowLeft": "LEFT",
    "ArrowDown": "DOWN",
    "ArrowRight": "RIGHT",
    "Escape": "ESCAPE",
}


class InputMapper:
    """Rebindable mapping from physical keys to logical actions.

    Keys are strings normalized to uppercase, so the mapper stays agnostic to the
    input backend. Backends with numeric key codes (Arcade/pyglet) register aliases
    from their codes to canonical names.

    Example usage:
        mapper = InputMapper.default()
        action = mapper.translate_key("w")   # -> InputAction.MOVE_UP
        evt = mapper.on_key_event("ArrowUp", pressed=True)
    """

    def __init__(self, bindings: Optional[Dict[str, InputAction]] = None) -> None:
        self._bindings: Dict[str, InputAction] = {}
        self._aliases: Dict[str, str] = {}
        if bindings:
            for key, action in bindings.items():
                self.bind(key, action)

    # ---------- Canonicalization ----------
    @staticmethod
    def _normalize(key: str | int) -> Optional[str]:
        """Normalize a key into a canonical uppercase string.

        Ints are converted to strings. Returns None for unsupported/empty inputs.
        """
        if key is None:
            return None
        if isinstance(key, int):
            return str(key)
        if not isinstance(key, str):
            return None
        k = key.strip()
        if not k:
            return None
        return k.upper()

    # ---------- Binding API ----------
    def bind(self, key: str | int, action: InputAction) -> None:
        """Bind a single key to an action."""
        nk = self._normalize(key)
        if nk is None:
            logger.warning("Attempted to bind invalid key: %r", key)
            return
        self._bindings[nk] = action

    def bind_many(self, keys: Iterable[str | int], action: InputAction) -> None:
        for k in keys:
            self.bind(k, action)

    def unbind(self, key: str | int) -> None:
        nk = self._normalize(key)
        if nk is not None:
            self._bindings.pop(nk, None)

    def set_alias(self, physical: str | int, canonical_name: str) -> None:
        """Register an alias from a backend-specific key to a canonical name.

        Example: set_alias(65362, "UP") or set_alias("ArrowUp", "UP").
        """
        nk = self._normalize(physical)
        cn = self._normalize(canonical_name)
        if nk and cn:
            self._aliases[nk] = cn

    def load_bindings(self, mapping: Dict[str, Iterable[str]]) -> None:
        """Apply bindings from settings: ``{"MOVE_UP": ["W", "UP"], ...}``.

        Unknown action names are logged and skipped.
        """
        for action_name, keys in mapping.items():
            try:
                action = InputAction[action_name.strip().upper()]
            except KeyError:
                logger.warning("Unknown input action in bindings: %r", action_name)
                continue
            self.bind_many(keys, action)

    # ---------- Translation ----------
    def translate_key(self, key: str | int) -> Optional[InputAction]:
        """Translate a physical key into a logical action or None."""
        nk = self._normalize(key)
        if nk is None:
            return None
        canonical = self._aliases.get(nk, nk)
        return self._bindings.get(canonical)

    def on_key_event(self, key: str | int, pressed: bool, source: str = "keyboard") -> Optional[InputEvent]:
        """Produce an InputEvent from a key press/release, or None if the key is unbound."""
        action = self.translate_key(key)
        if action is None:
            return None
        return InputEvent(action=action, pressed=pressed, source=source)

    # ---------- Defaults ----------
    @classmethod
    def default(cls) -> "InputMapper":
        """Create a default mapper.

        - Arrows and WASD map to MOVE actions (browser codes like "KeyW" are aliased).
        - F1 toggles the debug view, R builds a new dungeon.
        - Escape/Q quit.
        """
        mapper = cls()

        mapper.bind_many(["UP", "W"], InputAction.MOVE_UP)
        mapper.bind_many(["DOWN", "S"], InputAction.MOVE_DOWN)
        mapper.bind_many(["LEFT", "A"], InputAction.MOVE_LEFT)
        mapper.bind_many(["RIGHT", "D"], InputAction.MOVE_RIGHT)

        mapper.bind("F1", InputAction.TOGGLE_DEBUG)
        mapper.bind("R", InputAction.NEW_DUNGEON)
        mapper.bind_many(["ESCAPE", "ESC", "Q"], InputAction.QUIT)

        for code, canonical in BROWSER_CODE_ALIASES.items():
            mapper.set_alias(code, canonical)

        return mapper


__all__ = ["BROWSER_CODE_ALIASES", "InputMapper"]
