"""
Board controller checks - recomputation, settings toggles and action routing
"""
import pytest

from config.keyboard_layouts import get_keyboard_layout
from core.data_models import BoardState, CardOrientation, GameMode, LayoutOrientation
from core.settings_store import SettingsStore
from core.ui_logic.board_controller import LAYOUT_KEY, ORIENTATION_KEY, BoardController
from core.ui_logic.input_dispatcher import ClearSelection, KeyEvent, SelectCard

QWERTY = get_keyboard_layout("QWERTY")


@pytest.fixture
def settings_path(tmp_path):
    return tmp_path / "settings.json"


@pytest.fixture
def controller(settings_path):
    return BoardController(SettingsStore(settings_path), QWERTY)


def deal(controller, board_size=12, retired=0):
    cards = controller.library.cards
    state = BoardState(deck=cards[retired:], board_size=board_size)
    controller.update_game(state)
    return state


def test_starts_with_every_card_off_board(controller):
    layout = controller.layout

    assert controller.library.size == 81
    assert len(layout.states) == 81
    assert not any(s.in_play for s in layout.states.values())
    assert len(controller.driver) == 81


def test_update_game_places_board(controller):
    state = deal(controller)

    assert controller.remaining_count == 81 - 12
    assert all(controller.layout.state_for(c).in_play for c in state.in_play)
    assert controller.geometry.container_width == 200


def test_resize_recomputes_geometry(controller):
    deal(controller)
    controller.resize(480, 300)

    assert controller.geometry.container_width == 480
    assert controller.geometry.card_width == (480 - 16) // 3


def test_orientation_toggle_persists(controller, settings_path):
    deal(controller)
    controller.dispatcher.handle_key_down(KeyEvent(QWERTY.orientation_change_key))

    assert controller.card_orientation is CardOrientation.HORIZONTAL
    assert controller.geometry.horizontal
    assert all(s.rotation == 90 for s in controller.layout.states.values())
    assert SettingsStore(settings_path).get(ORIENTATION_KEY) == "horizontal"

    controller.dispatcher.handle_key_down(KeyEvent(QWERTY.orientation_change_key))
    assert controller.card_orientation is CardOrientation.VERTICAL


def test_layout_toggle_changes_shortcut_table(controller, settings_path):
    state = deal(controller)
    controller.dispatcher.handle_key_down(KeyEvent(QWERTY.layout_change_key))

    assert controller.layout_orientation is LayoutOrientation.LANDSCAPE
    assert controller.geometry.landscape
    assert SettingsStore(settings_path).get(LAYOUT_KEY) == "landscape"

    received = []
    controller.register_action_callback(received.append)
    controller.dispatcher.handle_key_down(KeyEvent("a"))
    assert received == [SelectCard(state.in_play[1])]


def test_selection_actions_forwarded(controller):
    state = deal(controller)
    received = []
    controller.register_action_callback(received.append)

    controller.dispatcher.handle_key_down(KeyEvent("1"))
    controller.dispatcher.handle_key_down(KeyEvent("Escape"))
    assert received == [SelectCard(state.in_play[0]), ClearSelection()]

    controller.unregister_action_callback(received.append)
    controller.dispatcher.handle_key_down(KeyEvent("Escape"))
    assert len(received) == 2


def test_pointer_selection_ignores_cards_not_in_play(controller):
    state = deal(controller)
    received = []
    controller.register_action_callback(received.append)

    controller.select_card_by_id(state.unplayed[0].id)
    controller.select_card_by_id(state.in_play[4].id)
    assert received == [SelectCard(state.in_play[4])]


def test_chain_prefix_counts_as_visible_slots(settings_path):
    controller = BoardController(SettingsStore(settings_path), QWERTY, game_mode="setchain")
    cards = controller.library.cards
    state = BoardState(deck=cards[3:], board_size=12, last_set=cards[:3], chain_mode=True)
    controller.update_game(state)
    received = []
    controller.register_action_callback(received.append)

    controller.dispatcher.handle_key_down(KeyEvent("1"))
    assert received == [SelectCard(cards[0])]
    assert controller.geometry.divider_offset is not None


def test_game_mode_switch_reloads_universe(controller):
    deal(controller)
    controller.set_game_mode(GameMode.JUNIOR)

    assert controller.library.size == 27
    assert len(controller.driver) == 27
    assert controller.remaining_count == 0


def test_invalid_stored_values_fall_back(settings_path):
    store = SettingsStore(settings_path)
    store.set(LAYOUT_KEY, "diagonal")
    store.set(ORIENTATION_KEY, "upside-down")
    controller = BoardController(store, QWERTY)

    assert controller.layout_orientation is LayoutOrientation.PORTRAIT
    assert controller.card_orientation is CardOrientation.VERTICAL


def test_toggle_feedback_sound(settings_path):
    sounds = []
    controller = BoardController(
        SettingsStore(settings_path),
        QWERTY,
        sound_enabled=True,
        play_feedback=lambda: sounds.append(1),
    )
    controller.dispatcher.handle_key_down(KeyEvent(QWERTY.layout_change_key))
    assert sounds == [1]


def test_layout_callbacks_receive_each_recompute(controller):
    layouts = []
    controller.register_layout_callback(layouts.append)
    deal(controller)
    controller.resize(320)

    assert len(layouts) == 2
    assert layouts[-1] is controller.layout


def test_animation_follows_toggle(controller):
    deal(controller)
    controller.tick(1 / 60)
    controller.dispatcher.handle_key_down(KeyEvent(QWERTY.orientation_change_key))

    assert not controller.driver.is_settled
    for _ in range(240):
        states = controller.tick(1 / 60)
    assert controller.driver.is_settled
    target = controller.layout.states
    assert all(states[card_id].x == target[card_id].x for card_id in target)


def test_unsaved_toggle_leaves_board_consistent(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    controller = BoardController(SettingsStore(blocker / "settings.json"), QWERTY)
    state = deal(controller)
    received = []
    controller.register_action_callback(received.append)

    controller.dispatcher.handle_key_down(KeyEvent(QWERTY.layout_change_key))

    assert controller.layout_orientation is LayoutOrientation.PORTRAIT
    assert not controller.geometry.landscape
    # Shortcuts still follow the portrait table
    controller.dispatcher.handle_key_down(KeyEvent("q"))
    assert received == [SelectCard(state.in_play[3])]


def test_layout_before_compute_raises(controller):
    controller._layout = None
    with pytest.raises(RuntimeError):
        controller.layout
