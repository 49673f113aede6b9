"""
Abstract configuration interface.

Platform-specific configurations supply the raw values; validation and
keyboard layout resolution live here so every platform fails the same way.
"""
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional
import logging

from core.data_models import GameMode, KeyboardLayout

logger = logging.getLogger(__name__)

VOLUME_VALUES = ("on", "off")


class ConfigurationError(Exception):
    """Raised when configuration values are missing or invalid."""


class BaseConfiguration(ABC):
    """Settings every platform must provide."""

    @property
    @abstractmethod
    def settings_path(self) -> Optional[Path]:
        """File that persists orientation settings, None for memory only."""

    @property
    @abstractmethod
    def keyboard_layout_name(self) -> str:
        """Identifier of the shortcut layout, e.g. QWERTY."""

    @property
    @abstractmethod
    def volume(self) -> str:
        """'on' or 'off'."""

    @property
    @abstractmethod
    def game_mode_name(self) -> str:
        """Game mode used for the card universe."""

    @property
    @abstractmethod
    def board_size(self) -> int:
        """Number of cards dealt onto the board."""

    @property
    def layout_sound_path(self) -> Optional[Path]:
        """Optional sound played on orientation toggles."""
        return None

    @property
    def sound_enabled(self) -> bool:
        return self.volume == "on"

    @property
    def game_mode(self) -> GameMode:
        try:
            return GameMode(self.game_mode_name)
        except ValueError as e:
            raise ConfigurationError(f"Unknown game mode: {self.game_mode_name!r}") from e

    @property
    def keyboard_layout(self) -> KeyboardLayout:
        # keyboard_layouts imports ConfigurationError from this module
        from .keyboard_layouts import get_keyboard_layout
        return get_keyboard_layout(self.keyboard_layout_name)

    def validate(self) -> None:
        """
        Check every value.

        Raises:
            ConfigurationError: On the first invalid value
        """
        if self.volume not in VOLUME_VALUES:
            raise ConfigurationError(f"Volume must be one of {VOLUME_VALUES}, got {self.volume!r}")
        if self.board_size <= 0:
            raise ConfigurationError(f"Board size must be positive, got {self.board_size}")
        _ = self.game_mode
        _ = self.keyboard_layout
        logger.debug(
            "Configuration valid: layout=%s mode=%s board=%d",
            self.keyboard_layout_name, self.game_mode_name, self.board_size,
        )
