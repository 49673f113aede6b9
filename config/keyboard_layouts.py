"""
Shortcut tables for regional keyboards.

Each sequence assigns one key per board slot: the vertical sequence reads the
portrait board row by row, the horizontal one reads the landscape board
column by column. Toggle keys never appear in the sequences.
"""
from typing import Dict

from core.data_models import KeyboardLayout

from .base import ConfigurationError

DEFAULT_LAYOUT = "QWERTY"


def validate_keyboard_layout(layout: KeyboardLayout) -> KeyboardLayout:
    """
    Check a layout for collisions.

    Raises:
        ConfigurationError: If keys repeat, are not lower case, or a toggle
            key shadows a shortcut
    """
    for sequence in (layout.vertical_layout, layout.horizontal_layout):
        if len(set(sequence)) != len(sequence):
            raise ConfigurationError(f"{layout.name}: shortcut keys repeat in {sequence!r}")
        if sequence != sequence.lower():
            raise ConfigurationError(f"{layout.name}: shortcut keys must be lower case")

    toggles = (layout.orientation_change_key, layout.layout_change_key)
    if toggles[0] == toggles[1]:
        raise ConfigurationError(f"{layout.name}: toggle keys must differ")
    for key in toggles:
        if len(key) != 1 or key != key.lower():
            raise ConfigurationError(f"{layout.name}: toggle key {key!r} must be one lower-case character")
        if key in layout.vertical_layout or key in layout.horizontal_layout:
            raise ConfigurationError(f"{layout.name}: toggle key {key!r} is also a shortcut")
    return layout


STANDARD_LAYOUTS: Dict[str, KeyboardLayout] = {
    layout.name: validate_keyboard_layout(layout)
    for layout in (
        KeyboardLayout(
            name="QWERTY",
            vertical_layout="123qweasdzxcrtyfghvbn",
            horizontal_layout="qazwsxedcrfvtgbyhnujm",
            orientation_change_key=";",
            layout_change_key="'",
        ),
        KeyboardLayout(
            name="QWERTZ",
            vertical_layout="123qweasdyxcrtzfghvbn",
            horizontal_layout="qaywsxedcrfvtgbzhnujm",
            orientation_change_key="ö",
            layout_change_key="ä",
        ),
        KeyboardLayout(
            name="AZERTY",
            vertical_layout="&é\"azeqsdwxcrtyfghvbn",
            horizontal_layout="aqwzsxedcrfvtgbyhnuj,",
            orientation_change_key="m",
            layout_change_key="ù",
        ),
        KeyboardLayout(
            name="Dvorak",
            vertical_layout="123',.aoe;qjpyfuidkxb",
            horizontal_layout="'a;,oq.ejpukyixfdbghm",
            orientation_change_key="s",
            layout_change_key="n",
        ),
        KeyboardLayout(
            name="Colemak",
            vertical_layout="123qwfarszxcpgjtdhvbk",
            horizontal_layout="qazwrxfscptvgdbjhklnm",
            orientation_change_key="o",
            layout_change_key="'",
        ),
    )
}


def get_keyboard_layout(name: str) -> KeyboardLayout:
    """
    Look up a layout by identifier.

    Raises:
        ConfigurationError: If the identifier is not configured
    """
    try:
        return STANDARD_LAYOUTS[name]
    except KeyError:
        known = ", ".join(sorted(STANDARD_LAYOUTS))
        raise ConfigurationError(f"Unknown keyboard layout {name!r} (known: {known})") from None
