"""
Configuration package for platform-specific settings.

Provides abstract configuration interface, the keyboard shortcut tables and
platform-specific implementations.
"""
from .base import BaseConfiguration, ConfigurationError
from .desktop import DesktopConfiguration
from .keyboard_layouts import STANDARD_LAYOUTS, get_keyboard_layout

__all__ = [
    'BaseConfiguration',
    'ConfigurationError',
    'DesktopConfiguration',
    'STANDARD_LAYOUTS',
    'get_keyboard_layout',
]
