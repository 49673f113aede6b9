"""Core data structures for the adaptive card board.

Contains the fundamental data models shared by the layout engines and the
different UI implementations. No UI framework dependencies.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Optional, Tuple


class LayoutOrientation(str, Enum):
    """Direction in which the board grows."""
    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"

    def toggled(self) -> "LayoutOrientation":
        if self is LayoutOrientation.PORTRAIT:
            return LayoutOrientation.LANDSCAPE
        return LayoutOrientation.PORTRAIT


class CardOrientation(str, Enum):
    """Whether cards are drawn upright or rotated by 90 degrees."""
    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"

    def toggled(self) -> "CardOrientation":
        if self is CardOrientation.VERTICAL:
            return CardOrientation.HORIZONTAL
        return CardOrientation.VERTICAL

    @property
    def rotation(self) -> float:
        """Rotation in degrees applied to every card."""
        return 90.0 if self is CardOrientation.HORIZONTAL else 0.0


class GameMode(str, Enum):
    NORMAL = "normal"
    JUNIOR = "junior"
    SETCHAIN = "setchain"
    ULTRASET = "ultraset"

    @property
    def is_chain(self) -> bool:
        return self is GameMode.SETCHAIN


@dataclass(frozen=True, eq=False)
class Card:
    """A single card instance.

    Equality is identity based: two cards sharing the same ``value`` are
    still different cards. ``id`` is the stable key used in every mapping.
    """
    id: str
    value: str

    def __repr__(self) -> str:
        return f"Card(id={self.id!r})"


@dataclass(frozen=True)
class BoardState:
    """Snapshot of the deck as owned by the game-state controller.

    ``deck`` holds every card still in the deck in deal order; the first
    ``board_size`` of them are on the board, the rest are waiting to be dealt.
    """
    deck: Tuple[Card, ...] = ()
    board_size: int = 0
    last_set: Tuple[Card, ...] = ()
    chain_mode: bool = False

    @property
    def in_play(self) -> Tuple[Card, ...]:
        return self.deck[:self.board_size]

    @property
    def unplayed(self) -> Tuple[Card, ...]:
        return self.deck[self.board_size:]

    @property
    def prefix(self) -> Tuple[Card, ...]:
        """Recently matched cards shown ahead of the board (chain mode only)."""
        return self.last_set if self.chain_mode else ()

    @property
    def board(self) -> Tuple[Card, ...]:
        """Every visible slot, chain prefix first."""
        return self.prefix + self.in_play

    @property
    def remaining_count(self) -> int:
        return len(self.unplayed)


@dataclass(frozen=True)
class SelectionState:
    """Selected and hinted card ids."""
    selected: FrozenSet[str] = frozenset()
    hinted: FrozenSet[str] = frozenset()


@dataclass(frozen=True)
class DisplayConfig:
    """Display settings that drive the board geometry.

    ``container_width`` is None until the container has been measured.
    """
    layout_orientation: LayoutOrientation = LayoutOrientation.PORTRAIT
    card_orientation: CardOrientation = CardOrientation.VERTICAL
    container_width: Optional[int] = None

    @property
    def is_landscape(self) -> bool:
        return self.layout_orientation is LayoutOrientation.LANDSCAPE

    @property
    def is_horizontal(self) -> bool:
        return self.card_orientation is CardOrientation.HORIZONTAL


@dataclass(frozen=True)
class KeyboardLayout:
    """Shortcut keys for one regional keyboard.

    ``vertical_layout`` is used in portrait (slots read row by row) and
    ``horizontal_layout`` in landscape (slots read column by column).
    """
    name: str
    vertical_layout: str
    horizontal_layout: str
    orientation_change_key: str
    layout_change_key: str

    def shortcuts_for(self, orientation: LayoutOrientation) -> str:
        if orientation is LayoutOrientation.LANDSCAPE:
            return self.horizontal_layout
        return self.vertical_layout


@dataclass(frozen=True, slots=True)
class CardVisualState:
    """Target position and visual flags for a single card."""
    x: float
    y: float
    opacity: float = 0.0
    hinted: bool = False
    in_play: bool = False
    rotation: float = 0.0


@dataclass
class Library:
    """The card universe for one game mode."""
    mode: GameMode
    cards: Tuple[Card, ...] = field(default_factory=tuple)

    @property
    def size(self) -> int:
        return len(self.cards)
