"""
Keyboard shortcuts for the card board.

Translate key-down events into board actions using a configurable shortcut
layout. One flat decision pass per key; no UI framework dependencies.
"""
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Protocol, Sequence, Union
import logging

from ..data_models import Card, KeyboardLayout, LayoutOrientation

logger = logging.getLogger(__name__)

CLEAR_KEYS = ("Escape", " ")


@dataclass
class KeyEvent:
    """A key-down event as delivered by the UI layer."""
    key: str
    shift: bool = False
    ctrl: bool = False
    alt: bool = False
    meta: bool = False
    default_prevented: bool = field(default=False, compare=False)

    @property
    def has_modifier(self) -> bool:
        return self.shift or self.ctrl or self.alt or self.meta

    def prevent_default(self) -> None:
        self.default_prevented = True


@dataclass(frozen=True)
class SelectCard:
    card: Card


@dataclass(frozen=True)
class ClearSelection:
    pass


@dataclass(frozen=True)
class ToggleCardOrientation:
    pass


@dataclass(frozen=True)
class ToggleLayoutOrientation:
    pass


BoardAction = Union[SelectCard, ClearSelection, ToggleCardOrientation, ToggleLayoutOrientation]
ActionCallback = Callable[[BoardAction], None]
KeyListener = Callable[[KeyEvent], None]


@dataclass(frozen=True)
class DispatchContext:
    """What the dispatcher needs to know about the board right now."""
    board: Sequence[Card]
    layout_orientation: LayoutOrientation


@dataclass
class DispatcherConfig:
    """Explicit settings for the dispatcher, replacing any global UI context."""
    keyboard_layout: KeyboardLayout
    sound_enabled: bool = False
    play_feedback: Optional[Callable[[], None]] = None


class KeyEventSource(Protocol):
    def add_listener(self, listener: KeyListener) -> None: ...

    def remove_listener(self, listener: KeyListener) -> None: ...


class InputDispatcher:
    """
    Maps physical keys to board actions.

    Emitted actions go to every registered callback. The dispatcher only
    listens while subscribed to a key event source.
    """

    def __init__(self, config: DispatcherConfig, context_provider: Callable[[], DispatchContext]) -> None:
        """
        Initialize dispatcher.

        Args:
            config: Keyboard layout and sound settings
            context_provider: Returns the current board and layout orientation
        """
        self.config = config
        self._context_provider = context_provider
        self._callbacks: List[ActionCallback] = []
        self._source: Optional[KeyEventSource] = None

    def register_callback(self, callback: ActionCallback) -> None:
        if callback not in self._callbacks:
            self._callbacks.append(callback)

    def unregister_callback(self, callback: ActionCallback) -> None:
        if callback in self._callbacks:
            self._callbacks.remove(callback)

    def subscribe(self, source: KeyEventSource) -> None:
        """
        Start listening to key events from a source.

        Raises:
            RuntimeError: If already subscribed
        """
        if self._source is not None:
            raise RuntimeError("InputDispatcher is already subscribed to a key source")
        source.add_listener(self.handle_key_down)
        self._source = source
        logger.debug("Keyboard dispatcher subscribed")

    def unsubscribe(self) -> None:
        """Stop listening; safe to call when not subscribed."""
        if self._source is None:
            return
        self._source.remove_listener(self.handle_key_down)
        self._source = None
        logger.debug("Keyboard dispatcher unsubscribed")

    @property
    def is_subscribed(self) -> bool:
        return self._source is not None

    def handle_key_down(self, event: KeyEvent) -> Optional[BoardAction]:
        """
        Resolve a key-down event into at most one action.

        Args:
            event: The key event; default is prevented for handled keys

        Returns:
            The emitted action, or None when the key was ignored
        """
        if event.has_modifier:
            return None

        key = event.key
        lowered = key.lower()
        layout = self.config.keyboard_layout
        context = self._context_provider()
        shortcuts = layout.shortcuts_for(context.layout_orientation)
        action: Optional[BoardAction] = None

        if key in CLEAR_KEYS:
            event.prevent_default()
            action = ClearSelection()
        elif len(key) == 1 and lowered in shortcuts:
            event.prevent_default()
            index = shortcuts.index(lowered)
            if index < len(context.board):
                action = SelectCard(context.board[index])
            else:
                logger.debug("Shortcut %r has no slot (index %d)", lowered, index)
        elif lowered == layout.orientation_change_key:
            event.prevent_default()
            self._play_feedback()
            action = ToggleCardOrientation()
        elif lowered == layout.layout_change_key:
            event.prevent_default()
            self._play_feedback()
            action = ToggleLayoutOrientation()

        if action is not None:
            self._emit(action)
        return action

    def _play_feedback(self) -> None:
        if self.config.sound_enabled and self.config.play_feedback is not None:
            self.config.play_feedback()

    def _emit(self, action: BoardAction) -> None:
        logger.debug("Dispatching %s", type(action).__name__)
        for callback in list(self._callbacks):
            try:
                callback(action)
            except Exception as e:
                logger.error("Action callback error: %s", e)
