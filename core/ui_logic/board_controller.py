"""
Board coordination between game state, layout and animation.

Holds the latest game snapshot and display measurements, recomputes the
layout whenever either changes and feeds the animation driver. Orientation
toggles from the keyboard are written to the settings store here; card
selection actions are forwarded to the game-state owner.
"""
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Union
import logging

from ..data_models import (
    BoardState,
    Card,
    CardOrientation,
    DisplayConfig,
    GameMode,
    KeyboardLayout,
    LayoutOrientation,
    Library,
)
from ..deck import generate_cards
from ..settings_store import SettingsStore
from .animation_driver import AnimationDriver, RenderState, SpringConfig
from .grid_sizer import GridGeometry
from .input_dispatcher import (
    BoardAction,
    ClearSelection,
    DispatchContext,
    DispatcherConfig,
    InputDispatcher,
    SelectCard,
    ToggleCardOrientation,
    ToggleLayoutOrientation,
)
from .layout_engine import BoardLayout, compute_layout

logger = logging.getLogger(__name__)

LAYOUT_KEY = "layout"
ORIENTATION_KEY = "orientation"

LayoutCallback = Callable[[BoardLayout], None]
CardSource = Callable[[GameMode], Sequence[Card]]


class BoardController:
    """
    Composes the board engines for one board on screen.

    Game state is pushed in with update_game(); container measurements with
    resize(). Every change recomputes the layout and retargets the driver.
    """

    def __init__(
        self,
        settings: SettingsStore,
        keyboard_layout: KeyboardLayout,
        *,
        game_mode: Union[GameMode, str] = GameMode.NORMAL,
        sound_enabled: bool = False,
        play_feedback: Optional[Callable[[], None]] = None,
        card_source: CardSource = generate_cards,
        spring_config: Optional[SpringConfig] = None,
    ) -> None:
        """
        Initialize controller.

        Args:
            settings: Persistent store holding the orientation settings
            keyboard_layout: Shortcut layout for the dispatcher
            game_mode: Mode whose card universe is laid out
            sound_enabled: Whether toggles play a feedback sound
            play_feedback: Plays the toggle sound
            card_source: Builds the card universe for a mode
            spring_config: Animation constants
        """
        self.settings = settings
        self._card_source = card_source
        self._library = Library(mode=GameMode(game_mode))
        self._cards_by_id: Dict[str, Card] = {}
        self._board_state = BoardState(chain_mode=self._library.mode.is_chain)
        self._hinted: frozenset = frozenset()
        self._container_width: Optional[int] = None
        self._layout: Optional[BoardLayout] = None

        self._action_callbacks: List[Callable[[BoardAction], None]] = []
        self._layout_callbacks: List[LayoutCallback] = []

        self.driver = AnimationDriver(spring_config)
        self.dispatcher = InputDispatcher(
            DispatcherConfig(
                keyboard_layout=keyboard_layout,
                sound_enabled=sound_enabled,
                play_feedback=play_feedback,
            ),
            self._dispatch_context,
        )
        self.dispatcher.register_callback(self.handle_action)

        self._load_library(self._library.mode)
        self.recompute()

    # -----------------------------------------------------
    #   Callbacks
    # -----------------------------------------------------
    def register_action_callback(self, callback: Callable[[BoardAction], None]) -> None:
        """Receive SelectCard and ClearSelection actions."""
        if callback not in self._action_callbacks:
            self._action_callbacks.append(callback)

    def unregister_action_callback(self, callback: Callable[[BoardAction], None]) -> None:
        if callback in self._action_callbacks:
            self._action_callbacks.remove(callback)

    def register_layout_callback(self, callback: LayoutCallback) -> None:
        """Receive every recomputed layout."""
        if callback not in self._layout_callbacks:
            self._layout_callbacks.append(callback)

    def unregister_layout_callback(self, callback: LayoutCallback) -> None:
        if callback in self._layout_callbacks:
            self._layout_callbacks.remove(callback)

    # -----------------------------------------------------
    #   Inputs
    # -----------------------------------------------------
    def set_game_mode(self, mode: Union[GameMode, str]) -> None:
        """Switch card universe; the board is emptied until the next update_game()."""
        mode = GameMode(mode)
        if mode is self._library.mode and self._cards_by_id:
            return
        self._load_library(mode)
        self._board_state = BoardState(chain_mode=mode.is_chain)
        self._hinted = frozenset()
        self.recompute()

    def update_game(self, board_state: BoardState, hinted: Iterable[str] = ()) -> BoardLayout:
        """
        Accept a new game snapshot.

        Args:
            board_state: Deck, board size and last matched set
            hinted: Ids of hinted cards

        Returns:
            The recomputed layout
        """
        self._board_state = board_state
        self._hinted = frozenset(hinted)
        return self.recompute()

    def resize(self, width: int, height: Optional[int] = None) -> BoardLayout:
        """Container measurement arrived; only the width drives the geometry."""
        self._container_width = int(width)
        logger.debug("Container resized to %sx%s", width, height)
        return self.recompute()

    def handle_action(self, action: BoardAction) -> None:
        """
        Apply a dispatched action.

        Orientation toggles update the settings store; everything else is
        forwarded to the registered action callbacks.
        """
        if isinstance(action, ToggleCardOrientation):
            self.settings.set(ORIENTATION_KEY, self.card_orientation.toggled().value)
            self.recompute()
        elif isinstance(action, ToggleLayoutOrientation):
            self.settings.set(LAYOUT_KEY, self.layout_orientation.toggled().value)
            self.recompute()
        elif isinstance(action, (SelectCard, ClearSelection)):
            for callback in list(self._action_callbacks):
                try:
                    callback(action)
                except Exception as e:
                    logger.error("Board action callback error: %s", e)

    def select_card_by_id(self, card_id: str) -> None:
        """Pointer selection; ignored for cards that are not in play."""
        if self._layout is None:
            return
        state = self._layout.states.get(card_id)
        if state is None or not state.in_play:
            logger.debug("Ignoring click on card %s that is not in play", card_id)
            return
        self.handle_action(SelectCard(self._cards_by_id[card_id]))

    # -----------------------------------------------------
    #   Derived state
    # -----------------------------------------------------
    @property
    def layout_orientation(self) -> LayoutOrientation:
        value = self.settings.get(LAYOUT_KEY, LayoutOrientation.PORTRAIT.value)
        try:
            return LayoutOrientation(value)
        except ValueError:
            logger.warning("Invalid stored layout %r, using portrait", value)
            return LayoutOrientation.PORTRAIT

    @property
    def card_orientation(self) -> CardOrientation:
        value = self.settings.get(ORIENTATION_KEY, CardOrientation.VERTICAL.value)
        try:
            return CardOrientation(value)
        except ValueError:
            logger.warning("Invalid stored orientation %r, using vertical", value)
            return CardOrientation.VERTICAL

    @property
    def display_config(self) -> DisplayConfig:
        return DisplayConfig(
            layout_orientation=self.layout_orientation,
            card_orientation=self.card_orientation,
            container_width=self._container_width,
        )

    @property
    def library(self) -> Library:
        return self._library

    @property
    def board_state(self) -> BoardState:
        return self._board_state

    @property
    def layout(self) -> BoardLayout:
        if self._layout is None:
            raise RuntimeError("Board layout has not been computed")
        return self._layout

    @property
    def geometry(self) -> GridGeometry:
        return self.layout.geometry

    @property
    def remaining_count(self) -> int:
        return self._board_state.remaining_count

    def recompute(self) -> BoardLayout:
        """Run sizing and layout, then retarget the animations."""
        layout = compute_layout(
            self._library.cards,
            self._board_state,
            self.display_config,
            self._hinted,
        )
        self._layout = layout
        self.driver.set_targets(layout.states)

        for callback in list(self._layout_callbacks):
            try:
                callback(layout)
            except Exception as e:
                logger.error("Layout callback error: %s", e)
        return layout

    def tick(self, dt: float) -> Dict[str, RenderState]:
        """Advance animations by one frame."""
        return self.driver.tick(dt)

    def _load_library(self, mode: GameMode) -> None:
        cards = tuple(self._card_source(mode))
        self._library = Library(mode=mode, cards=cards)
        self._cards_by_id = {card.id: card for card in cards}
        logger.info("Loaded %d cards for mode %s", self._library.size, mode.value)

    def _dispatch_context(self) -> DispatchContext:
        return DispatchContext(
            board=self._board_state.board,
            layout_orientation=self.layout_orientation,
        )
