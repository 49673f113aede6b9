"""
Desktop configuration.

Reads settings from environment variables, loading a .env file first when
one is present.
"""
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .base import BaseConfiguration, ConfigurationError
from .keyboard_layouts import DEFAULT_LAYOUT

DEFAULT_SETTINGS_PATH = Path.home() / ".setboard" / "settings.json"


class DesktopConfiguration(BaseConfiguration):
    """Environment-backed configuration for the desktop app."""

    def __init__(self, env_file: Optional[Path] = None) -> None:
        load_dotenv(env_file)
        self._settings_path = Path(os.getenv("SETBOARD_SETTINGS_PATH", str(DEFAULT_SETTINGS_PATH)))
        self._keyboard_layout_name = os.getenv("SETBOARD_KEYBOARD_LAYOUT", DEFAULT_LAYOUT)
        self._volume = os.getenv("SETBOARD_VOLUME", "on").strip().lower()
        self._game_mode_name = os.getenv("SETBOARD_GAME_MODE", "normal").strip().lower()
        self._log_level = os.getenv("SETBOARD_LOG_LEVEL", "INFO").upper()

        sound = os.getenv("SETBOARD_LAYOUT_SOUND")
        self._layout_sound_path = Path(sound) if sound else None

        raw_size = os.getenv("SETBOARD_BOARD_SIZE", "12")
        try:
            self._board_size = int(raw_size)
        except ValueError as e:
            raise ConfigurationError(f"SETBOARD_BOARD_SIZE must be an integer, got {raw_size!r}") from e

    @property
    def settings_path(self) -> Optional[Path]:
        return self._settings_path

    @property
    def keyboard_layout_name(self) -> str:
        return self._keyboard_layout_name

    @property
    def volume(self) -> str:
        return self._volume

    @property
    def game_mode_name(self) -> str:
        return self._game_mode_name

    @property
    def board_size(self) -> int:
        return self._board_size

    @property
    def layout_sound_path(self) -> Optional[Path]:
        return self._layout_sound_path

    @property
    def log_level(self) -> str:
        return self._log_level
