import random
from types import SimpleNamespace

import pytest

from game import GameStatus, InvalidStartConditions, InvalidTransition, RoundSetup
from game.round_setup import NO_CATEGORIES, EMPTY_WORD_POOL
from game.timer import as_utc
from utils.constants import DEFAULT_CATEGORIES


WORDS = [{"word": "Owl", "hint": "Night"}, {"word": "Snail", "hint": "Slow"}]


def _category(words):
    return SimpleNamespace(words=words)


@pytest.mark.parametrize("wanted, players, expected", [
    (1, 3, 1),
    (2, 3, 2),
    (3, 3, 2),
    (5, 4, 3),
    (1, 2, 1),
    (4, 10, 4),
])
def test_imposter_count_is_clamped(wanted, players, expected):
    assert RoundSetup.imposter_count(wanted, players) == expected


def test_imposter_indices_are_distinct_and_in_range():
    setup = RoundSetup(random.Random(3))

    for active_count in range(2, 12):
        for wanted in range(1, 8):
            count = RoundSetup.imposter_count(wanted, active_count)
            indices = setup.draw_imposter_indices(count, active_count)

            assert len(indices) == len(set(indices)) == min(wanted, active_count - 1)
            assert all(0 <= i < active_count for i in indices)
            assert len(indices) >= 1


def test_same_seed_gives_same_round():
    first = RoundSetup(random.Random(99)).prepare(5, ["Animals"], [_category(WORDS)], 2)
    second = RoundSetup(random.Random(99)).prepare(5, ["Animals"], [_category(WORDS)], 2)

    assert first == second


def test_word_is_drawn_from_the_pool():
    setup = RoundSetup(random.Random(5))
    pool = RoundSetup.build_word_pool([_category(WORDS[:1]), _category(WORDS[1:])])

    assert pool == WORDS
    for _ in range(20):
        assert setup.draw_word(pool) in {("Owl", "Night"), ("Snail", "Slow")}


def test_all_violations_are_reported_together():
    setup = RoundSetup(random.Random(1))

    with pytest.raises(InvalidStartConditions) as excinfo:
        setup.prepare(2, [], [], 1)

    violations = excinfo.value.violations
    assert len(violations) == 2
    assert NO_CATEGORIES in violations
    assert "at least 3 players" in violations[0]


def test_empty_pool_is_reported_when_categories_are_selected():
    setup = RoundSetup(random.Random(1))

    with pytest.raises(InvalidStartConditions) as excinfo:
        setup.prepare(3, ["Nothing"], [_category([])], 1)

    assert excinfo.value.violations == [EMPTY_WORD_POOL]


def test_start_with_two_players_fails(manager, make_lobby):
    game = make_lobby(players=2)

    with pytest.raises(InvalidStartConditions):
        manager.start_game(game.id)

    assert manager.get_game(game.id).status == GameStatus.LOBBY


def test_start_without_categories_fails(manager, make_lobby):
    game = make_lobby(players=3, categories=())

    with pytest.raises(InvalidStartConditions) as excinfo:
        manager.start_game(game.id)

    assert excinfo.value.violations == [NO_CATEGORIES]
    assert manager.get_game(game.id).status == GameStatus.LOBBY


def test_start_with_unknown_category_fails(manager, make_lobby):
    game = make_lobby(players=3, categories=("Does not exist",))

    with pytest.raises(InvalidStartConditions) as excinfo:
        manager.start_game(game.id)

    assert excinfo.value.violations == [EMPTY_WORD_POOL]


def test_start_assigns_word_and_imposters(manager, make_lobby, clock):
    game = make_lobby(players=5, number_of_imposters=2)

    started = manager.start_game(game.id)

    animals = next(c for c in DEFAULT_CATEGORIES if c["name"] == "Animals")
    assert {"word": started.secret_word, "hint": started.hint_word} in animals["words"]
    assert started.status == GameStatus.PLAYING
    assert started.current_player_index == 0
    assert len(started.imposter_indices) == 2
    assert as_utc(started.timer_anchor) == clock.now


def test_start_without_timer_leaves_anchor_empty(manager, make_lobby):
    game = make_lobby(players=3, timer_enabled=False)

    started = manager.start_game(game.id)

    assert started.timer_anchor is None


def test_imposters_never_outnumber_honest_players(manager, make_lobby):
    game = make_lobby(players=3, number_of_imposters=9)

    started = manager.start_game(game.id)

    assert len(started.imposter_indices) == 2
    assert set(started.imposter_indices) <= {0, 1, 2}


def test_start_twice_is_rejected(manager, make_lobby):
    game = make_lobby(players=3)
    manager.start_game(game.id)

    with pytest.raises(InvalidTransition):
        manager.start_game(game.id)
