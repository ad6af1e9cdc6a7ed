import pytest

from game import GameStatus, InvalidTransition, TurnSequencer
from game.timer import as_utc


def test_next_step_is_pure():
    assert TurnSequencer.next_step(0, 3).next_index == 1
    assert TurnSequencer.next_step(1, 3).status == GameStatus.PLAYING
    last = TurnSequencer.next_step(2, 3)
    assert last.entered_discussion
    assert last.next_index == 2


@pytest.mark.parametrize("players", [3, 4, 7])
def test_every_player_gets_exactly_one_turn(manager, make_lobby, players):
    game = make_lobby(players=players)
    snapshot = manager.start_game(game.id)

    visited = [snapshot.current_player_index]
    for call in range(1, players):
        snapshot = manager.advance_turn(game.id)
        assert snapshot.status == GameStatus.PLAYING
        visited.append(snapshot.current_player_index)

    assert visited == list(range(players))

    snapshot = manager.advance_turn(game.id)
    assert snapshot.status == GameStatus.DISCUSSION


def test_advance_outside_playing_is_rejected(manager, make_lobby):
    game = make_lobby(players=3)

    with pytest.raises(InvalidTransition):
        manager.advance_turn(game.id)

    manager.start_game(game.id)
    for _ in range(3):
        manager.advance_turn(game.id)

    with pytest.raises(InvalidTransition) as excinfo:
        manager.advance_turn(game.id)
    assert excinfo.value.status == "discussion"
    assert manager.get_game(game.id).status == GameStatus.DISCUSSION


def test_discussion_gets_a_fresh_timer_anchor(manager, make_lobby, clock):
    game = make_lobby(players=3)
    manager.start_game(game.id)

    manager.advance_turn(game.id)
    manager.advance_turn(game.id)
    clock.advance(42)
    snapshot = manager.advance_turn(game.id)

    assert snapshot.status == GameStatus.DISCUSSION
    assert as_utc(manager.get_game(game.id).timer_anchor) == clock.now


def test_turn_anchor_is_not_reset_between_players(manager, make_lobby, clock):
    game = make_lobby(players=3)
    started = manager.start_game(game.id)

    clock.advance(10)
    snapshot = manager.advance_turn(game.id)

    assert as_utc(snapshot.timer_anchor) == as_utc(started.timer_anchor)


def test_discussion_without_timer_has_no_anchor(manager, make_lobby):
    game = make_lobby(players=3, timer_enabled=False)
    manager.start_game(game.id)

    for _ in range(3):
        snapshot = manager.advance_turn(game.id)

    assert snapshot.status == GameStatus.DISCUSSION
    assert snapshot.timer_anchor is None


def test_current_card_shows_word_or_hint(manager, make_lobby):
    game = make_lobby(players=4, number_of_imposters=1)
    started = manager.start_game(game.id)

    seen = []
    for seat in range(4):
        card = manager.current_card(game.id)
        assert card.player.index == seat
        assert card.is_imposter == (seat in started.imposter_indices)
        expected = started.hint_word if card.is_imposter else started.secret_word
        assert card.text == expected
        seen.append(card.is_imposter)
        manager.advance_turn(game.id)

    assert seen.count(True) == 1

    with pytest.raises(InvalidTransition):
        manager.current_card(game.id)
