"""
Sandbox game checks - selection, retiring sets and refilling slots
"""
from core.deck import generate_cards
from core.ui_logic.input_dispatcher import ClearSelection, SelectCard
from desktop_ui.sandbox import SandboxGame

CARDS = generate_cards("normal")


def make_game(chain_mode=False, board_size=12):
    game = SandboxGame(CARDS, board_size=board_size, chain_mode=chain_mode, seed=7)
    states = []
    game.add_listener(states.append)
    return game, states


def test_seeded_shuffle_is_repeatable():
    first = SandboxGame(CARDS, seed=3).board_state
    second = SandboxGame(CARDS, seed=3).board_state

    assert [c.id for c in first.deck] == [c.id for c in second.deck]
    assert len(first.in_play) == 12
    assert first.remaining_count == 69


def test_selection_toggles_and_clears():
    game, states = make_game()
    card = game.board_state.in_play[0]

    game.handle_action(SelectCard(card))
    assert game.selection.is_selected(card.id)
    game.handle_action(SelectCard(card))
    assert not game.selection.is_selected(card.id)

    game.handle_action(SelectCard(card))
    game.handle_action(ClearSelection())
    assert game.selection.get_selection_count() == 0
    assert states == []


def test_three_cards_retire_and_refill_in_place():
    game, states = make_game()
    board = game.board_state.in_play
    incoming = game.board_state.unplayed[:3]

    for index in (0, 4, 8):
        game.handle_action(SelectCard(board[index]))

    state = states[-1]
    assert state.last_set == (board[0], board[4], board[8])
    assert [state.in_play[i] for i in (0, 4, 8)] == list(incoming)
    assert [state.in_play[i] for i in (1, 2, 3)] == list(board[1:4])
    assert state.remaining_count == 66
    assert game.selection.get_selection_count() == 0


def test_chain_prefix_stays_out_of_the_deck():
    game, states = make_game(chain_mode=True)
    board = game.board_state.in_play
    for card in board[:3]:
        game.handle_action(SelectCard(card))

    state = states[-1]
    assert state.prefix == tuple(board[:3])
    assert not set(c.id for c in state.prefix) & set(c.id for c in state.deck)

    # A prefix card keeps the set from retiring and drops the selection
    game.handle_action(SelectCard(state.prefix[0]))
    game.handle_action(SelectCard(state.in_play[0]))
    game.handle_action(SelectCard(state.in_play[1]))
    assert len(states) == 1
    assert game.selection.get_selection_count() == 0

    # Later picks start from an empty selection again
    for card in state.in_play[:3]:
        game.handle_action(SelectCard(card))
    assert len(states) == 2


def test_empty_deck_shrinks_board():
    game, states = make_game(board_size=12)
    game._deck = list(game._deck[:12])

    board = game.board_state.in_play
    for card in board[:3]:
        game.handle_action(SelectCard(card))

    assert len(states[-1].in_play) == 9
    assert states[-1].remaining_count == 0


def by_values(*values):
    lookup = {card.value: card for card in CARDS}
    return [lookup[value] for value in values]


def test_hint_flags_first_set_on_board():
    game, states = make_game(board_size=4)
    game._deck = by_values("0000", "0011", "0001", "0002", "1111")

    found = game.show_hint()

    assert found == tuple(by_values("0000", "0001", "0002"))
    assert game.selection.snapshot().hinted == {"0000", "0001", "0002"}
    assert states[-1].in_play == tuple(by_values("0000", "0011", "0001", "0002"))


def test_hint_cleared_after_retiring():
    game, states = make_game(board_size=4)
    game._deck = by_values("0000", "0011", "0001", "0002", "1111")
    game.show_hint()

    for card in by_values("0000", "0001", "0002"):
        game.handle_action(SelectCard(card))
    assert game.selection.snapshot().hinted == frozenset()


def test_no_hint_without_a_set():
    game, states = make_game(board_size=2)

    assert game.show_hint() is None
    assert game.selection.snapshot().hinted == frozenset()
    assert len(states) == 1
