"""
Grid mathematics for the 3-lane adaptive card board.

Derive row/column counts and per-card pixel sizes from the number of
visible cards, the display orientation and the measured container width.
No UI framework dependencies - works for any renderer.
"""
from dataclasses import dataclass
from typing import Optional
import math

from ..data_models import DisplayConfig

GAME_PADDING = 8
CARD_ASPECT_RATIO = 1.6
LANES = 3
MIN_GROWTH_SLOTS = 4

# Used until the container reports its real width
DEFAULT_CONTAINER_WIDTH = 200


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up."""
    return math.floor(value + 0.5)


@dataclass(frozen=True, slots=True)
class GridGeometry:
    """Board dimensions in slots and pixels.

    ``card_width``/``card_height`` are the unrotated card dimensions; with
    horizontal cards the on-screen footprint swaps them.
    """
    rows: int
    cols: int
    card_width: int
    card_height: int
    container_width: int
    container_height: int
    line_spacing: int = 0
    padding: int = GAME_PADDING
    landscape: bool = False
    horizontal: bool = False

    @property
    def capacity(self) -> int:
        return self.rows * self.cols

    @property
    def slot_width(self) -> int:
        """Horizontal footprint of one slot on screen."""
        return self.card_height if self.horizontal else self.card_width

    @property
    def slot_height(self) -> int:
        """Vertical footprint of one slot on screen."""
        return self.card_width if self.horizontal else self.card_height

    @property
    def divider_offset(self) -> Optional[float]:
        """
        Position of the chain divider along the growth axis.

        Returns:
            Pixel offset from the container's leading edge, or None when no
            matched prefix is shown
        """
        if not self.line_spacing:
            return None
        principal = self.slot_width if self.landscape else self.slot_height
        return principal + self.padding + self.line_spacing / 2


def compute_grid(num_cards: int, config: DisplayConfig, has_prefix: bool = False) -> GridGeometry:
    """
    Calculate board geometry for the given number of visible cards.

    Args:
        num_cards: Slots to display, chain prefix included
        config: Orientation settings and measured container width
        has_prefix: True when a matched chain prefix precedes the board

    Returns:
        GridGeometry; identical inputs always give identical output
    """
    if num_cards < 0:
        raise ValueError(f"num_cards must be non-negative, got {num_cards}")

    width = config.container_width if config.container_width is not None else DEFAULT_CONTAINER_WIDTH
    landscape = config.is_landscape
    horizontal = config.is_horizontal
    line_spacing = 2 * GAME_PADDING if has_prefix else 0

    growth = max(math.ceil(num_cards / LANES), MIN_GROWTH_SLOTS)
    rows, cols = (LANES, growth) if landscape else (growth, LANES)

    # Landscape puts the divider between columns, so it eats into the width
    available = width - 2 * GAME_PADDING - (line_spacing if landscape else 0)
    # Containers narrower than the padding collapse to zero-sized cards
    across = max(0, available // cols)

    if not horizontal:
        card_width = across
        card_height = round_half_up(card_width / CARD_ASPECT_RATIO)
        principal = card_height
    else:
        card_height = across
        card_width = round_half_up(card_height * CARD_ASPECT_RATIO)
        principal = card_width

    container_height = principal * rows + 2 * GAME_PADDING
    if not landscape:
        container_height += line_spacing

    return GridGeometry(
        rows=rows,
        cols=cols,
        card_width=card_width,
        card_height=card_height,
        container_width=width,
        container_height=container_height,
        line_spacing=line_spacing,
        landscape=landscape,
        horizontal=horizontal,
    )
