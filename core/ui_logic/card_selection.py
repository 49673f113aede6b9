"""
Selection state management for the card board.

Track the selected and hinted cards, handle selection change events and
produce immutable SelectionState snapshots. No UI framework dependencies.
"""
from typing import Callable, Iterable, List, Optional, Set
from dataclasses import dataclass
import logging

from ..data_models import Card, SelectionState

logger = logging.getLogger(__name__)


@dataclass
class SelectionEvent:
    """Represents a selection change event."""
    card_id: Optional[str]
    selection_type: str  # "add", "remove", "clear"
    selected_count: int

    def __str__(self) -> str:
        return f"SelectionEvent(card={self.card_id}, type={self.selection_type}, count={self.selected_count})"


# Type alias for selection event callbacks
SelectionCallback = Callable[[SelectionEvent], None]


class CardSelection:
    """
    Manages multi-card selection with event notification.

    Cards are tracked by id so that identical-looking cards stay distinct.
    """

    def __init__(self) -> None:
        self._selected: List[str] = []
        self._hinted: Set[str] = set()
        self._callbacks: List[SelectionCallback] = []

    def register_callback(self, callback: SelectionCallback) -> None:
        """
        Register callback for selection change events.

        Args:
            callback: Function to call when selection changes
        """
        if callback not in self._callbacks:
            self._callbacks.append(callback)

    def unregister_callback(self, callback: SelectionCallback) -> None:
        if callback in self._callbacks:
            self._callbacks.remove(callback)

    def toggle_card(self, card: Card, notify: bool = True) -> bool:
        """
        Toggle selection state of a card.

        Args:
            card: Card to toggle
            notify: If True, trigger selection change callbacks

        Returns:
            True if the card is selected afterwards
        """
        if card.id in self._selected:
            self._selected.remove(card.id)
            selection_type = "remove"
        else:
            self._selected.append(card.id)
            selection_type = "add"

        if notify:
            self._notify_selection_change(card.id, selection_type)
        return selection_type == "add"

    def clear_selection(self, notify: bool = True) -> bool:
        """
        Clear all selections.

        Returns:
            True if anything was selected before
        """
        if not self._selected:
            return False
        self._selected.clear()
        if notify:
            self._notify_selection_change(None, "clear")
        return True

    def discard(self, card_ids: Iterable[str]) -> None:
        """Forget cards that left the board without notifying."""
        gone = set(card_ids)
        self._selected = [card_id for card_id in self._selected if card_id not in gone]

    def set_hint(self, card_ids: Iterable[str]) -> None:
        self._hinted = set(card_ids)

    def is_selected(self, card_id: str) -> bool:
        return card_id in self._selected

    def get_selected_card_ids(self) -> List[str]:
        """Selected card ids in selection order."""
        return list(self._selected)

    def get_selection_count(self) -> int:
        return len(self._selected)

    def snapshot(self) -> SelectionState:
        """Immutable copy of the current selection and hint."""
        return SelectionState(selected=frozenset(self._selected), hinted=frozenset(self._hinted))

    def _notify_selection_change(self, card_id: Optional[str], selection_type: str) -> None:
        event = SelectionEvent(
            card_id=card_id,
            selection_type=selection_type,
            selected_count=len(self._selected),
        )

        for callback in self._callbacks:
            try:
                callback(event)
            except Exception as e:
                # Log error but don't let callback failures break selection
                logger.error("Selection callback error: %s", e)
