"""
Sandbox game-state owner for the desktop board.

Deals cards and retires any three selected cards so the board, the deck
and the chain prefix can be exercised by hand. No match rules are applied
when retiring; show_hint() flags the first valid set on the board.
"""
import logging
import random
from typing import Callable, List, Optional, Sequence, Tuple

from core.data_models import BoardState, Card
from core.deck import find_set
from core.ui_logic.card_selection import CardSelection
from core.ui_logic.input_dispatcher import BoardAction, ClearSelection, SelectCard

logger = logging.getLogger(__name__)

CARDS_PER_SET = 3


class SandboxGame:
    """Owns the deck and selection; publishes BoardState snapshots."""

    def __init__(
        self,
        cards: Sequence[Card],
        board_size: int = 12,
        chain_mode: bool = False,
        seed: Optional[int] = None,
    ) -> None:
        deck = list(cards)
        random.Random(seed).shuffle(deck)
        self._deck: List[Card] = deck
        self._board_size = board_size
        self._last_set: Tuple[Card, ...] = ()
        self.chain_mode = chain_mode
        self.selection = CardSelection()
        self._listeners: List[Callable[[BoardState], None]] = []

    def add_listener(self, listener: Callable[[BoardState], None]) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: Callable[[BoardState], None]) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    @property
    def board_state(self) -> BoardState:
        return BoardState(
            deck=tuple(self._deck),
            board_size=min(self._board_size, len(self._deck)),
            last_set=self._last_set,
            chain_mode=self.chain_mode,
        )

    def handle_action(self, action: BoardAction) -> None:
        """Apply a board action coming from keyboard or pointer."""
        if isinstance(action, ClearSelection):
            self.selection.clear_selection()
        elif isinstance(action, SelectCard):
            self.selection.toggle_card(action.card)
            if self.selection.get_selection_count() == CARDS_PER_SET:
                self._retire_selected()

    def _retire_selected(self) -> None:
        selected = set(self.selection.get_selected_card_ids())
        retired = tuple(card for card in self._deck if card.id in selected)
        if len(retired) != CARDS_PER_SET:
            # Chain prefix cards can be selected but never leave the deck again
            logger.debug("Selection includes cards outside the deck, clearing it")
            self.selection.clear_selection()
            return

        positions = [i for i, card in enumerate(self._deck[:self._board_size]) if card.id in selected]
        replacements = self._deck[self._board_size:self._board_size + len(positions)]
        rest = self._deck[self._board_size + len(replacements):]
        board = list(self._deck[:self._board_size])
        # Fresh cards take over the freed slots so the rest of the board stays put
        for position, card in zip(positions, replacements):
            board[position] = card
        board = [card for card in board if card.id not in selected]
        self._deck = board + rest
        self._last_set = retired

        self.selection.discard(selected)
        self.selection.set_hint(())
        logger.info("Retired %s; %d cards left in deck", [c.id for c in retired], len(rest))
        self._notify()

    def show_hint(self) -> Optional[Tuple[Card, ...]]:
        """
        Flag the first valid set among the in-play cards.

        Returns:
            The hinted cards, or None when the board holds no set
        """
        found = find_set(self.board_state.in_play)
        self.selection.set_hint(card.id for card in found or ())
        if found is None:
            logger.info("No set on the board")
        self._notify()
        return found

    def _notify(self) -> None:
        state = self.board_state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception as e:
                logger.error("Board listener error: %s", e)
