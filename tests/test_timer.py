from datetime import datetime, timedelta, timezone

import pytest

from game import GameStatus, TimerCoordinator, remaining_seconds, is_expired
from utils.helpers import format_countdown


T0 = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


def test_remaining_time_is_derived_from_anchor():
    assert remaining_seconds(T0, 300, T0 + timedelta(seconds=120)) == 180
    assert remaining_seconds(T0, 300, T0 + timedelta(seconds=301)) == 0
    assert remaining_seconds(T0, 300, T0) == 300


def test_naive_anchor_is_read_as_utc():
    naive = T0.replace(tzinfo=None)

    assert remaining_seconds(naive, 60, T0 + timedelta(seconds=15)) == 45


def test_expiry():
    assert not is_expired(T0, 10, T0 + timedelta(seconds=9))
    assert is_expired(T0, 10, T0 + timedelta(seconds=10))


def test_only_the_playing_phase_is_forced_forward():
    timer = TimerCoordinator()
    later = T0 + timedelta(seconds=61)

    assert timer.should_auto_advance(GameStatus.PLAYING, True, T0, 60, later)
    assert not timer.should_auto_advance(GameStatus.DISCUSSION, True, T0, 60, later)
    assert not timer.should_auto_advance(GameStatus.PLAYING, False, T0, 60, later)
    assert not timer.should_auto_advance(GameStatus.PLAYING, True, None, 60, later)
    assert not timer.should_auto_advance(GameStatus.PLAYING, True, T0, 60, T0 + timedelta(seconds=30))


@pytest.mark.parametrize("seconds, expected", [
    (None, ""),
    (0, "0:00"),
    (59.9, "0:59"),
    (180, "3:00"),
    (305, "5:05"),
])
def test_format_countdown(seconds, expected):
    assert format_countdown(seconds) == expected


def test_timer_status_of_running_game(manager, make_lobby, clock):
    game = make_lobby(players=3, timer_duration=300)
    manager.start_game(game.id)

    clock.advance(120)
    status = manager.timer_status(game.id)

    assert status.enabled
    assert status.remaining == 180
    assert not status.expired
    assert status.to_dict()["display"] == "3:00"


def test_timer_status_when_disabled(manager, make_lobby):
    game = make_lobby(players=3, timer_enabled=False)
    manager.start_game(game.id)

    status = manager.timer_status(game.id)

    assert not status.enabled
    assert status.remaining is None


def test_tick_before_expiry_changes_nothing(manager, make_lobby, clock):
    game = make_lobby(players=3, timer_duration=60)
    manager.start_game(game.id)

    clock.advance(30)
    snapshot, status = manager.tick(game.id)

    assert snapshot.current_player_index == 0
    assert status.remaining == 30


def test_tick_after_expiry_advances_while_playing(manager, make_lobby, clock):
    game = make_lobby(players=3, timer_duration=60)
    manager.start_game(game.id)

    clock.advance(61)
    snapshot, status = manager.tick(game.id)
    assert snapshot.current_player_index == 1
    assert status.expired

    # The viewing phase shares one anchor: each further poll moves on one seat
    snapshot, _ = manager.tick(game.id)
    assert snapshot.current_player_index == 2
    snapshot, status = manager.tick(game.id)
    assert snapshot.status == GameStatus.DISCUSSION
    assert status.remaining == 60


def test_expired_discussion_is_advisory(manager, make_lobby, clock):
    game = make_lobby(players=3, timer_duration=60)
    manager.start_game(game.id)
    for _ in range(3):
        manager.advance_turn(game.id)

    clock.advance(600)
    snapshot, status = manager.tick(game.id)

    assert snapshot.status == GameStatus.DISCUSSION
    assert status.expired


def test_tick_in_lobby_is_harmless(manager, make_lobby):
    game = make_lobby(players=3)

    snapshot, status = manager.tick(game.id)

    assert snapshot.status == GameStatus.LOBBY
    assert status.remaining is None
