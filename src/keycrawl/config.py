from __future__ import annotations

import dataclasses
import logging
import os
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import yaml

from .exceptions import ConfigError

logger = logging.getLogger(__name__)

Color = Tuple[int, int, int]

ENV_SEED = "KEYCRAWL_SEED"
ENV_DEBUG = "KEYCRAWL_DEBUG"


@dataclass
class DungeonConfig:
    """Parameters of the maze generator.

    - critical_path_length: number of rooms from the start room to the end room (inclusive).
    - num_bonus_keys: extra key/lock pairs placed between the critical path and bonus branches.
    - bonus_paths: grow one dead-end branch off every critical room except the end.
    - linearity_bias: double the weight of continuing straight ahead.
    """

    width: int = 10
    height: int = 10
    critical_path_length: int = 25
    num_bonus_keys: int = 5
    bonus_paths: bool = True
    linearity_bias: bool = True

    def validate(self) -> None:
        for name in ("width", "height", "critical_path_length", "num_bonus_keys"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigError(f"dungeon.{name} must be an integer, got {value!r}")
        if self.width < 1 or self.height < 1:
            raise ConfigError(f"Dungeon must be at least 1x1, got {self.width}x{self.height}")
        if self.critical_path_length < 2:
            raise ConfigError("critical_path_length must be at least 2")
        if self.critical_path_length > self.width * self.height:
            raise ConfigError(
                f"critical_path_length {self.critical_path_length} does not fit a "
                f"{self.width}x{self.height} grid"
            )
        if self.num_bonus_keys < 0:
            raise ConfigError("num_bonus_keys must be non-negative")


@dataclass
class DisplayConfig:
    width_px: int = 600
    height_px: int = 600
    title: str = "Keycrawl"
    debug: bool = False
    font_size: int = 12

    def validate(self) -> None:
        for name in ("width_px", "height_px", "font_size"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise ConfigError(f"display.{name} must be a positive integer, got {value!r}")


@dataclass
class ColorConfig:
    """RGB colors used by the renderers."""

    visited: Color = (0, 128, 0)
    seen: Color = (255, 255, 0)
    hidden: Color = (255, 0, 0)
    player: Color = (0, 0, 255)
    outline: Color = (0, 0, 0)
    key_text: Color = (0, 0, 0)
    doorway: Color = (0, 0, 0)
    lock_text: Color = (255, 255, 255)
    room_id_text: Color = (0, 0, 0)
    background: Color = (255, 255, 255)


@dataclass
class InputSettings:
    """Extra key bindings, e.g. ``{"MOVE_UP": ["I"]}``, applied over the default keymap."""

    mapping: Dict[str, List[str]] = field(default_factory=dict)


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _parse_color(name: str, value: Any) -> Color:
    if (
        not isinstance(value, (list, tuple))
        or len(value) != 3
        or not all(isinstance(c, int) and not isinstance(c, bool) and 0 <= c <= 255 for c in value)
    ):
        raise ConfigError(f"colors.{name} must be three integers in 0..255, got {value!r}")
    return (value[0], value[1], value[2])


@dataclass
class Settings:
    dungeon: DungeonConfig = field(default_factory=DungeonConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    colors: ColorConfig = field(default_factory=ColorConfig)
    input: InputSettings = field(default_factory=InputSettings)
    seed: Optional[Union[int, str]] = None

    @staticmethod
    def _load_yaml(path: Path) -> dict:
        try:
            with path.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Settings file {path} is not valid YAML: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigError(f"Settings file {path} must contain a mapping at top level")
        return data

    @classmethod
    def _deep_merge(cls, base: dict, overlay: dict) -> dict:
        merged = dict(base)
        for k, v in (overlay or {}).items():
            if isinstance(v, dict) and isinstance(base.get(k), dict):
                merged[k] = cls._deep_merge(base[k], v)
            else:
                merged[k] = v
        return merged

    @classmethod
    def _from_dict(cls, data: Dict[str, Any]) -> "Settings":
        # An empty section in YAML ("input:") loads as None
        sections = {name: data.get(name) or {} for name in ("dungeon", "display", "colors", "input")}
        for name, section in sections.items():
            if not isinstance(section, dict):
                raise ConfigError(f"Settings section '{name}' must be a mapping, got {section!r}")
        try:
            dungeon = DungeonConfig(**sections["dungeon"])
            display = DisplayConfig(**sections["display"])
            colors = ColorConfig(**{k: _parse_color(k, v) for k, v in sections["colors"].items()})
            mapping = sections["input"].get("mapping") or {}
            if not isinstance(mapping, dict):
                raise ConfigError(f"input.mapping must be a mapping, got {mapping!r}")
            input_ = InputSettings(mapping={k: [v] if isinstance(v, str) else list(v) for k, v in mapping.items()})
        except TypeError as exc:
            # Unknown keys in a section surface as unexpected keyword arguments
            raise ConfigError(f"Invalid settings: {exc}") from exc
        seed = data.get("seed")
        if seed is not None and (isinstance(seed, bool) or not isinstance(seed, (int, str))):
            raise ConfigError(f"seed must be an integer or string, got {seed!r}")
        return Settings(dungeon=dungeon, display=display, colors=colors, input=input_, seed=seed)

    @staticmethod
    def default_data() -> dict:
        """Return the packaged default settings as a plain dict."""
        text = resources.files("keycrawl.data").joinpath("default_settings.yaml").read_text(encoding="utf-8")
        return yaml.safe_load(text) or {}

    @classmethod
    def load(cls, user_path: Optional[Path] = None, env: Optional[Dict[str, str]] = None) -> "Settings":
        """Load settings from built-in defaults and optional user override file.

        If user_path is provided and exists, overlay values onto defaults; a missing
        user file raises ConfigError. Environment overrides (KEYCRAWL_SEED,
        KEYCRAWL_DEBUG) are applied last.
        """
        data = cls.default_data()

        if user_path is not None:
            if not user_path.exists():
                raise ConfigError(f"Settings file not found: {user_path}")
            data = cls._deep_merge(data, cls._load_yaml(user_path))
            logger.info("Loaded user settings from %s", user_path)

        settings = cls._from_dict(data)
        settings.apply_env(os.environ if env is None else env)
        settings.dungeon.validate()
        settings.display.validate()
        logger.debug("Settings merged: %s", settings)
        return settings

    def apply_env(self, env: Dict[str, str]) -> None:
        seed = env.get(ENV_SEED)
        if seed:
            self.seed = seed
            logger.debug("Seed overridden from %s", ENV_SEED)
        debug = env.get(ENV_DEBUG)
        if debug is not None:
            self.display.debug = _parse_bool(debug)

    def to_dict(self) -> dict:
        return {
            "seed": self.seed,
            "dungeon": dataclasses.asdict(self.dungeon),
            "display": dataclasses.asdict(self.display),
            "colors": {k: list(v) for k, v in dataclasses.asdict(self.colors).items()},
            "input": {"mapping": {k: list(v) for k, v in self.input.mapping.items()}},
        }

    def save(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            yaml.safe_dump(self.to_dict(), f, sort_keys=False)
        logger.info("Saved settings to %s", path)
