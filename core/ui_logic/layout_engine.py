"""
Card placement for the adaptive board.

Assign every card in the universe a target position, opacity and highlight
flag. Board slots are filled from the grid geometry; cards waiting in the
deck sit past the trailing edge and retired cards past the leading edge.
Pure and side-effect free, so renderers can diff successive results.
"""
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, Sequence, Tuple
import logging

from ..data_models import BoardState, Card, CardVisualState, DisplayConfig
from .grid_sizer import GridGeometry, LANES, compute_grid

logger = logging.getLogger(__name__)


class BoardStateError(ValueError):
    """Raised when the board state does not partition the card universe."""


@dataclass(frozen=True)
class BoardLayout:
    """Result of one layout pass."""
    geometry: GridGeometry
    states: Dict[str, CardVisualState] = field(default_factory=dict)
    board: Tuple[Card, ...] = ()
    remaining_count: int = 0

    def state_for(self, card: Card) -> CardVisualState:
        return self.states[card.id]


def slot_coordinates(index: int, landscape: bool) -> Tuple[int, int]:
    """
    Map a board index to its (row, col) slot.

    Portrait fills rows of three; landscape fills columns of three.
    """
    if landscape:
        return index % LANES, index // LANES
    return index // LANES, index % LANES


def slot_position(index: int, geometry: GridGeometry) -> Tuple[float, float]:
    """
    Calculate the pixel position of the card occupying a board slot.

    Args:
        index: Zero-based board index, chain prefix included
        geometry: Geometry from compute_grid

    Returns:
        (x, y) of the card's unrotated top-left corner
    """
    row, col = slot_coordinates(index, geometry.landscape)
    pad = geometry.padding
    width, height = geometry.card_width, geometry.card_height

    if not geometry.horizontal:
        x = width * col + pad
        y = height * row + pad
    else:
        # Rotation pivots on the card centre; shift so the footprint fills the slot
        delta = (width - height) / 2
        x = height * col + pad - delta
        y = width * row + pad + delta

    # Divider gap between the matched prefix and the rest of the board
    if index >= LANES:
        if geometry.landscape:
            x += geometry.line_spacing
        else:
            y += geometry.line_spacing
    return x, y


def visual_bounds(state: CardVisualState, geometry: GridGeometry) -> Tuple[float, float, float, float]:
    """
    Calculate the on-screen footprint of a card.

    Returns:
        (left, top, right, bottom) after rotation about the card centre
    """
    width, height = geometry.card_width, geometry.card_height
    cx = state.x + width / 2
    cy = state.y + height / 2
    if state.rotation % 180:
        width, height = height, width
    return (cx - width / 2, cy - height / 2, cx + width / 2, cy + height / 2)


def _check_partition(universe: Sequence[Card], state: BoardState) -> None:
    known = set()
    for card in universe:
        if card.id in known:
            raise BoardStateError(f"Duplicate card in universe: {card.id}")
        known.add(card.id)

    placed = set()
    for card in state.prefix + state.deck:
        if card.id in placed:
            raise BoardStateError(f"Card {card.id} appears in more than one board partition")
        if card.id not in known:
            raise BoardStateError(f"Card {card.id} is not part of the card universe")
        placed.add(card.id)


def compute_layout(
    universe: Sequence[Card],
    state: BoardState,
    config: DisplayConfig,
    hinted: Iterable[str] = (),
) -> BoardLayout:
    """
    Compute the target visual state of every card.

    Args:
        universe: Every card of the current game mode
        state: Deck, board size and chain prefix
        config: Orientation settings and measured container width
        hinted: Ids of cards in the suggested answer

    Returns:
        BoardLayout with exactly one CardVisualState per universe card

    Raises:
        BoardStateError: If a card is placed twice or is unknown
    """
    _check_partition(universe, state)

    hint_ids: FrozenSet[str] = frozenset(hinted)
    board = state.board
    geometry = compute_grid(len(board), config, has_prefix=bool(state.prefix))
    rotation = config.card_orientation.rotation

    off_board_y = geometry.container_height / 2 - geometry.card_height / 2
    trailing_x = geometry.container_width + geometry.padding
    leading_x = -(geometry.card_width + geometry.padding)

    states: Dict[str, CardVisualState] = {}

    # Retired cards leave through the leading edge
    for card in universe:
        states[card.id] = CardVisualState(x=leading_x, y=off_board_y, rotation=rotation)

    # Undealt cards wait past the trailing edge
    for card in state.unplayed:
        states[card.id] = CardVisualState(x=trailing_x, y=off_board_y, rotation=rotation)

    for index, card in enumerate(board):
        x, y = slot_position(index, geometry)
        states[card.id] = CardVisualState(
            x=x,
            y=y,
            opacity=1.0,
            hinted=card.id in hint_ids,
            in_play=True,
            rotation=rotation,
        )

    logger.debug(
        "Layout computed: %d on board, %d unplayed, grid %dx%d",
        len(board), len(state.unplayed), geometry.rows, geometry.cols,
    )

    return BoardLayout(
        geometry=geometry,
        states=states,
        board=board,
        remaining_count=state.remaining_count,
    )
