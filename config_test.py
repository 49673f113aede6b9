"""
Configuration checks - keyboard layouts, environment loading and validation
"""
from pathlib import Path

import pytest

from config import ConfigurationError, DesktopConfiguration, STANDARD_LAYOUTS, get_keyboard_layout
from config.keyboard_layouts import validate_keyboard_layout
from core.data_models import GameMode, KeyboardLayout, LayoutOrientation

ENV_VARS = [
    "SETBOARD_SETTINGS_PATH",
    "SETBOARD_KEYBOARD_LAYOUT",
    "SETBOARD_VOLUME",
    "SETBOARD_GAME_MODE",
    "SETBOARD_BOARD_SIZE",
    "SETBOARD_LAYOUT_SOUND",
    "SETBOARD_LOG_LEVEL",
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.mark.parametrize("name", sorted(STANDARD_LAYOUTS))
def test_standard_layouts_cover_every_slot(name):
    layout = get_keyboard_layout(name)

    assert len(layout.vertical_layout) == 21
    assert len(layout.horizontal_layout) == 21
    assert len(set(layout.vertical_layout)) == 21
    assert layout.shortcuts_for(LayoutOrientation.PORTRAIT) == layout.vertical_layout
    assert layout.shortcuts_for(LayoutOrientation.LANDSCAPE) == layout.horizontal_layout


def test_unknown_layout_rejected():
    with pytest.raises(ConfigurationError):
        get_keyboard_layout("Workman")


@pytest.mark.parametrize(
    "layout",
    [
        KeyboardLayout("dup", "112", "abc", ";", "'"),
        KeyboardLayout("upper", "123", "aBc", ";", "'"),
        KeyboardLayout("same", "123", "abc", ";", ";"),
        KeyboardLayout("shadow", "123", "abc", "a", "'"),
    ],
)
def test_colliding_layout_rejected(layout):
    with pytest.raises(ConfigurationError):
        validate_keyboard_layout(layout)


def test_desktop_defaults(clean_env):
    config = DesktopConfiguration()
    config.validate()

    assert config.keyboard_layout_name == "QWERTY"
    assert config.sound_enabled is True
    assert config.game_mode is GameMode.NORMAL
    assert config.board_size == 12
    assert config.layout_sound_path is None
    assert config.settings_path.name == "settings.json"
    assert config.log_level == "INFO"


def test_desktop_reads_environment(clean_env, tmp_path):
    clean_env.setenv("SETBOARD_SETTINGS_PATH", str(tmp_path / "s.json"))
    clean_env.setenv("SETBOARD_KEYBOARD_LAYOUT", "Dvorak")
    clean_env.setenv("SETBOARD_VOLUME", "OFF")
    clean_env.setenv("SETBOARD_GAME_MODE", "setchain")
    clean_env.setenv("SETBOARD_BOARD_SIZE", "15")
    clean_env.setenv("SETBOARD_LAYOUT_SOUND", "/sounds/layout.wav")

    config = DesktopConfiguration()
    config.validate()

    assert config.settings_path == tmp_path / "s.json"
    assert config.keyboard_layout.name == "Dvorak"
    assert config.sound_enabled is False
    assert config.game_mode.is_chain
    assert config.board_size == 15
    assert config.layout_sound_path == Path("/sounds/layout.wav")


def test_env_file_loaded(clean_env, tmp_path):
    env_file = tmp_path / "board.env"
    env_file.write_text("SETBOARD_KEYBOARD_LAYOUT=AZERTY\n", encoding="utf-8")
    # Registers the variable with monkeypatch so the loaded value is undone
    clean_env.setenv("SETBOARD_KEYBOARD_LAYOUT", "")
    clean_env.delenv("SETBOARD_KEYBOARD_LAYOUT")

    config = DesktopConfiguration(env_file)
    assert config.keyboard_layout.orientation_change_key == "m"


@pytest.mark.parametrize(
    "name,value",
    [
        ("SETBOARD_VOLUME", "loud"),
        ("SETBOARD_BOARD_SIZE", "0"),
        ("SETBOARD_GAME_MODE", "speedrun"),
        ("SETBOARD_KEYBOARD_LAYOUT", "Workman"),
    ],
)
def test_invalid_values_fail_validation(clean_env, name, value):
    clean_env.setenv(name, value)
    with pytest.raises(ConfigurationError):
        DesktopConfiguration().validate()


def test_non_numeric_board_size_rejected(clean_env):
    clean_env.setenv("SETBOARD_BOARD_SIZE", "twelve")
    with pytest.raises(ConfigurationError):
        DesktopConfiguration()
