"""
Qt bridge for the card board.

Connects the portable BoardController to QML: drives the animation frame
loop with a QTimer, forwards key presses and container resizes, and exposes
board geometry as Qt properties. Desktop-only module.
"""
import logging
from typing import Callable, List, Optional

from PySide6.QtCore import QElapsedTimer, QObject, Property, QTimer, QUrl, Qt, Signal, Slot
from PySide6.QtMultimedia import QSoundEffect

from config.base import BaseConfiguration
from core.settings_store import SettingsStore
from core.ui_logic.board_controller import BoardController
from core.ui_logic.card_selection import SelectionEvent
from core.ui_logic.input_dispatcher import KeyEvent
from core.ui_logic.layout_engine import BoardLayout
from .qt_models.card_model import CardModel
from .sandbox import SandboxGame

logger = logging.getLogger(__name__)

FRAME_INTERVAL_MS = 16

NAMED_KEYS = {
    Qt.Key.Key_Escape: "Escape",
    Qt.Key.Key_Space: " ",
}


def key_event_from_qt(key: int, text: str, modifiers: int) -> KeyEvent:
    """Translate a QML key press into a framework-free KeyEvent."""
    def held(flag: Qt.KeyboardModifier) -> bool:
        return bool(modifiers & flag.value)

    try:
        name = NAMED_KEYS.get(Qt.Key(key), text)
    except ValueError:
        name = text
    return KeyEvent(
        key=name,
        shift=held(Qt.KeyboardModifier.ShiftModifier),
        ctrl=held(Qt.KeyboardModifier.ControlModifier),
        alt=held(Qt.KeyboardModifier.AltModifier),
        meta=held(Qt.KeyboardModifier.MetaModifier),
    )


class BoardCoordinator(QObject):
    """
    Coordinates the board engines with the Qt UI.

    Acts as the key event source for the dispatcher; the dispatcher is
    subscribed on construction and unsubscribed in cleanup().
    """

    geometryChanged = Signal()
    selectionChanged = Signal()

    def __init__(self, config: BaseConfiguration, seed: Optional[int] = None) -> None:
        super().__init__()
        config.validate()
        self.config = config
        self._key_listeners: List[Callable[[KeyEvent], None]] = []

        self._sound: Optional[QSoundEffect] = None
        sound_path = config.layout_sound_path
        if sound_path is not None:
            if sound_path.exists():
                self._sound = QSoundEffect(self)
                self._sound.setSource(QUrl.fromLocalFile(str(sound_path)))
            else:
                logger.warning("Layout sound not found: %s", sound_path)

        self.controller = BoardController(
            SettingsStore(config.settings_path),
            config.keyboard_layout,
            game_mode=config.game_mode,
            sound_enabled=config.sound_enabled,
            play_feedback=self._play_layout_sound,
        )
        self.card_model = CardModel(list(self.controller.library.cards))

        self.game = SandboxGame(
            self.controller.library.cards,
            board_size=config.board_size,
            chain_mode=config.game_mode.is_chain,
            seed=seed,
        )

        self._clock = QElapsedTimer()
        self._frame_timer = QTimer(self)
        self._frame_timer.setInterval(FRAME_INTERVAL_MS)
        self._frame_timer.timeout.connect(self._on_frame)

        self._connect_callbacks()
        self.controller.dispatcher.subscribe(self)
        self.controller.update_game(self.game.board_state)
        self.card_model.update_states(self.controller.driver.render_states())

        logger.info("Board coordinator initialized (%s, %s)",
                    config.keyboard_layout_name, config.game_mode.value)

    def _connect_callbacks(self) -> None:
        self.controller.register_action_callback(self.game.handle_action)
        self.controller.register_layout_callback(self._on_layout)
        self.game.add_listener(self._on_game_changed)
        self.game.selection.register_callback(self._on_selection_changed)

    # -----------------------------------------------------
    #   Key event source
    # -----------------------------------------------------
    def add_listener(self, listener: Callable[[KeyEvent], None]) -> None:
        if listener not in self._key_listeners:
            self._key_listeners.append(listener)

    def remove_listener(self, listener: Callable[[KeyEvent], None]) -> None:
        if listener in self._key_listeners:
            self._key_listeners.remove(listener)

    @Slot(int, str, int, result=bool)
    def handleKey(self, key: int, text: str, modifiers: int) -> bool:
        """Feed a key press from QML; returns True when it was consumed."""
        event = key_event_from_qt(key, text, modifiers)
        for listener in list(self._key_listeners):
            listener(event)
        return event.default_prevented

    # -----------------------------------------------------
    #   Pointer and container
    # -----------------------------------------------------
    @Slot(str)
    def cardClicked(self, card_id: str) -> None:
        self.controller.select_card_by_id(card_id)

    @Slot()
    def showHint(self) -> None:
        self.game.show_hint()

    @Slot(float, float)
    def resizeBoard(self, width: float, height: float) -> None:
        self.controller.resize(int(width), int(height))

    # -----------------------------------------------------
    #   Engine callbacks
    # -----------------------------------------------------
    def _on_game_changed(self, state) -> None:
        snapshot = self.game.selection.snapshot()
        self.controller.update_game(state, snapshot.hinted)
        # Retired cards leave the selection without a selection event
        self.card_model.set_active(set(snapshot.selected))

    def _on_selection_changed(self, event: SelectionEvent) -> None:
        logger.debug("Selection changed: %s", event)
        self.card_model.set_active(set(self.game.selection.get_selected_card_ids()))
        self.selectionChanged.emit()

    def _on_layout(self, layout: BoardLayout) -> None:
        self.geometryChanged.emit()
        if not self._frame_timer.isActive():
            self._clock.start()
            self._frame_timer.start()

    def _on_frame(self) -> None:
        dt = self._clock.restart() / 1000.0
        self.card_model.update_states(self.controller.tick(dt))
        if self.controller.driver.is_settled:
            self._frame_timer.stop()

    def _play_layout_sound(self) -> None:
        if self._sound is not None:
            self._sound.play()

    # -----------------------------------------------------
    #   QML properties
    # -----------------------------------------------------
    @Property(int, notify=geometryChanged)
    def containerHeight(self) -> int:
        return self.controller.geometry.container_height

    @Property(int, notify=geometryChanged)
    def cardWidth(self) -> int:
        return self.controller.geometry.card_width

    @Property(int, notify=geometryChanged)
    def cardHeight(self) -> int:
        return self.controller.geometry.card_height

    @Property(bool, notify=geometryChanged)
    def landscape(self) -> bool:
        return self.controller.geometry.landscape

    @Property(float, notify=geometryChanged)
    def dividerOffset(self) -> float:
        """Divider position along the growth axis, -1 when hidden."""
        offset = self.controller.geometry.divider_offset
        return -1.0 if offset is None else offset

    @Property(int, notify=geometryChanged)
    def remainingCount(self) -> int:
        return self.controller.remaining_count

    def cleanup(self) -> None:
        """Detach listeners and stop the frame loop before shutdown."""
        logger.info("Cleaning up board coordinator")
        self._frame_timer.stop()
        self.controller.dispatcher.unsubscribe()
        self.game.remove_listener(self._on_game_changed)
        self.game.selection.unregister_callback(self._on_selection_changed)
        self.controller.unregister_layout_callback(self._on_layout)
        self.controller.unregister_action_callback(self.game.handle_action)
