from __future__ import annotations

import textwrap
from pathlib import Path

import pytest
import yaml

from keycrawl.config import ColorConfig, DisplayConfig, DungeonConfig, Settings
from keycrawl.exceptions import ConfigError


def test_packaged_defaults_match_dataclass_defaults():
    settings = Settings.load(env={})
    assert settings.dungeon == DungeonConfig()
    assert settings.display == DisplayConfig()
    assert settings.colors == ColorConfig()
    assert settings.input.mapping == {}
    assert settings.seed is None


def test_user_file_overlays_defaults(tmp_path: Path):
    user = tmp_path / "settings.yaml"
    user.write_text(
        textwrap.dedent(
            """
            seed: abc
            dungeon:
              critical_path_length: 12
              num_bonus_keys: 2
            colors:
              visited: [1, 2, 3]
            input:
              mapping:
                MOVE_UP: [I]
            """
        ),
        encoding="utf-8",
    )
    settings = Settings.load(user, env={})
    assert settings.seed == "abc"
    assert settings.dungeon.critical_path_length == 12
    assert settings.dungeon.num_bonus_keys == 2
    # Untouched keys keep their defaults
    assert settings.dungeon.width == 10
    assert settings.colors.visited == (1, 2, 3)
    assert settings.colors.seen == (255, 255, 0)
    assert settings.input.mapping == {"MOVE_UP": ["I"]}


def test_missing_user_file_raises(tmp_path: Path):
    with pytest.raises(ConfigError):
        Settings.load(tmp_path / "nope.yaml", env={})


def test_unknown_key_raises(tmp_path: Path):
    user = tmp_path / "bad.yaml"
    user.write_text("dungeon:\n  depth: 3\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        Settings.load(user, env={})


def test_non_mapping_file_raises(tmp_path: Path):
    user = tmp_path / "list.yaml"
    user.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        Settings.load(user, env={})


def test_invalid_dungeon_rejected(tmp_path: Path):
    user = tmp_path / "big.yaml"
    user.write_text("dungeon:\n  critical_path_length: 500\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        Settings.load(user, env={})


def test_env_overrides():
    settings = Settings.load(env={"KEYCRAWL_SEED": "1234", "KEYCRAWL_DEBUG": "yes"})
    assert settings.seed == "1234"
    assert settings.display.debug is True

    settings = Settings.load(env={"KEYCRAWL_DEBUG": "0"})
    assert settings.display.debug is False


def test_save_writes_loadable_yaml(tmp_path: Path):
    settings = Settings()
    settings.seed = 99
    settings.dungeon.num_bonus_keys = 1
    out = tmp_path / "nested" / "saved.yaml"
    settings.save(out)

    raw = yaml.safe_load(out.read_text(encoding="utf-8"))
    assert raw["seed"] == 99
    assert raw["colors"]["player"] == [0, 0, 255]

    reloaded = Settings.load(out, env={})
    assert reloaded.dungeon == settings.dungeon
    assert reloaded.colors == settings.colors


@pytest.mark.parametrize(
    "text",
    [
        "input: null\n",
        "dungeon:\n  width: ten\n",
        "dungeon:\n  num_bonus_keys: 2.5\n",
        "dungeon: [1, 2]\n",
        "display:\n  width_px: wide\n",
        "colors:\n  visited: [0, 300, 0]\n",
        "colors:\n  seen: green\n",
        "input:\n  mapping: [W]\n",
        "seed: [1, 2]\n",
        "dungeon: {width: 3\n",
    ],
)
def test_bad_values_raise_config_error(tmp_path: Path, text):
    user = tmp_path / "bad.yaml"
    user.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError):
        Settings.load(user, env={})


def test_empty_sections_fall_back_to_defaults(tmp_path: Path):
    user = tmp_path / "empty.yaml"
    user.write_text("dungeon:\ncolors:\ninput:\n  mapping:\n", encoding="utf-8")
    settings = Settings.load(user, env={})
    assert settings.dungeon == DungeonConfig()
    assert settings.colors == ColorConfig()
    assert settings.input.mapping == {}


def test_single_key_binding_is_accepted(tmp_path: Path):
    user = tmp_path / "keys.yaml"
    user.write_text("input:\n  mapping:\n    MOVE_UP: I\n", encoding="utf-8")
    assert Settings.load(user, env={}).input.mapping == {"MOVE_UP": ["I"]}
