import pytest

from game import (
    GameStatus, OutcomeBand, PlayerData, VoteManager,
    IncompleteVoteSet, InvalidVote, InvalidTransition
)


def _players(count):
    return [PlayerData(id=100 + i, game_id=1, name=f"P{i}", color="#fff", index=i) for i in range(count)]


@pytest.fixture
def votes():
    return VoteManager()


def test_tally_and_outcome_for_a_clean_catch(votes):
    players = _players(4)
    ballots = {100: 2, 101: 2, 102: 0, 103: 2}

    tally = votes.tally(players, ballots, [2])

    assert [(e.player.index, e.vote_count, e.is_imposter) for e in tally] == [
        (2, 3, True),
        (0, 1, False),
        (1, 0, False),
        (3, 0, False),
    ]

    outcome = votes.judge_outcome(tally, [2])
    assert outcome.accused_is_imposter
    assert outcome.all_imposters_caught
    assert outcome.success
    assert outcome.band == OutcomeBand.FULL_SUCCESS
    assert outcome.top_accused.index == 2


def test_ties_keep_roster_order(votes):
    players = _players(4)

    tally = votes.tally(players, {100: 3, 101: 1, 102: 3, 103: 1}, [0])

    assert [e.player.index for e in tally] == [1, 3, 0, 2]


def test_partial_success_when_an_imposter_gets_no_votes(votes):
    players = _players(5)
    tally = votes.tally(players, {100: 1, 101: 0, 102: 1, 103: 1, 104: 2}, [1, 3])

    outcome = votes.judge_outcome(tally, [1, 3])

    assert outcome.accused_is_imposter
    assert not outcome.all_imposters_caught
    assert not outcome.success
    assert outcome.band == OutcomeBand.PARTIAL_SUCCESS
    assert outcome.imposters_with_votes == 1


def test_imposter_victory_when_an_honest_player_is_accused(votes):
    players = _players(4)
    tally = votes.tally(players, {100: 1, 101: 0, 102: 1, 103: 3}, [3])

    outcome = votes.judge_outcome(tally, [3])

    assert not outcome.accused_is_imposter
    assert outcome.all_imposters_caught
    assert not outcome.success
    assert outcome.band == OutcomeBand.IMPOSTER_VICTORY


def test_no_votes_falls_back_to_first_seat(votes):
    players = _players(3)
    tally = votes.tally(players, {}, [1])

    outcome = votes.judge_outcome(tally, [1])

    assert outcome.top_accused.index == 0
    assert outcome.band == OutcomeBand.IMPOSTER_VICTORY


def test_submission_must_cover_every_player(votes):
    players = _players(3)

    with pytest.raises(IncompleteVoteSet) as excinfo:
        votes.validate_submission({100: 1, 101: 0}, players)
    assert excinfo.value.missing == [102]

    with pytest.raises(IncompleteVoteSet) as excinfo:
        votes.validate_submission({100: 1, 101: 0, 102: 0, 999: 0}, players)
    assert excinfo.value.unexpected == ["999"]


def test_submission_accepts_string_ids(votes):
    players = _players(3)

    normalized = votes.validate_submission({"100": 1, "101": 0, "102": 0}, players)

    assert normalized == {100: 1, 101: 0, 102: 0}


@pytest.mark.parametrize("ballots", [[0, 1, 2], None, "all"])
def test_submission_must_be_a_mapping(votes, ballots):
    with pytest.raises(InvalidVote):
        votes.validate_submission(ballots, _players(3))


@pytest.mark.parametrize("accused", [-1, 3, "1", None, True])
def test_accused_must_be_a_roster_index(votes, accused):
    players = _players(3)

    with pytest.raises(InvalidVote):
        votes.validate_submission({100: accused, 101: 0, 102: 0}, players)


def _discussion(manager, make_lobby, players=4, **settings):
    game = make_lobby(players=players, **settings)
    manager.start_game(game.id)
    for _ in range(players):
        manager.advance_turn(game.id)
    return manager.get_game(game.id)


def test_submit_votes_moves_to_results(manager, make_lobby):
    game = _discussion(manager, make_lobby)
    imposter = game.imposter_indices[0]
    ballots = {player.id: imposter for player in game.players}

    snapshot = manager.submit_votes(game.id, ballots)

    assert snapshot.status == GameStatus.RESULTS
    assert snapshot.votes == ballots

    report = manager.get_results(game.id)
    assert report.outcome.success
    assert report.tally[0].player.index == imposter
    assert report.tally[0].vote_count == 4
    assert [p.index for p in report.imposters] == [imposter]
    assert "all the imposters" in report.message


def test_incomplete_votes_leave_status_unchanged(manager, make_lobby):
    game = _discussion(manager, make_lobby)
    ballots = {player.id: 0 for player in game.players[:-1]}

    with pytest.raises(IncompleteVoteSet):
        manager.submit_votes(game.id, ballots)

    after = manager.get_game(game.id)
    assert after.status == GameStatus.DISCUSSION
    assert after.votes is None


def test_votes_can_be_submitted_while_still_playing(manager, make_lobby):
    game = make_lobby(players=3)
    started = manager.start_game(game.id)

    snapshot = manager.submit_votes(game.id, {p.id: 1 for p in started.players})

    assert snapshot.status == GameStatus.RESULTS


def test_votes_before_a_round_are_rejected(manager, make_lobby):
    game = make_lobby(players=3)

    with pytest.raises(InvalidTransition):
        manager.submit_votes(game.id, {p.id: 0 for p in game.players})

    assert manager.get_game(game.id).status == GameStatus.LOBBY


def test_resubmitted_votes_replace_the_earlier_set(manager, make_lobby):
    game = _discussion(manager, make_lobby, players=3)
    manager.submit_votes(game.id, {p.id: 0 for p in game.players})

    snapshot = manager.submit_votes(game.id, {p.id: 1 for p in game.players})

    assert snapshot.status == GameStatus.RESULTS
    assert snapshot.votes == {p.id: 1 for p in game.players}
    assert manager.get_results(game.id).tally[0].player.index == 1


def test_votes_accepted_after_ending_mid_round(manager, make_lobby):
    game = make_lobby(players=3)
    started = manager.start_game(game.id)
    manager.end_game(game.id)

    snapshot = manager.submit_votes(game.id, {p.id: 2 for p in started.players})

    assert snapshot.status == GameStatus.RESULTS
    assert manager.get_results(game.id).tally[0].vote_count == 3


def test_votes_after_reset_are_rejected(manager, make_lobby):
    game = make_lobby(players=3)
    manager.start_game(game.id)
    manager.end_game(game.id)
    manager.reset(game.id)

    with pytest.raises(InvalidTransition):
        manager.submit_votes(game.id, {p.id: 0 for p in game.players})

    assert manager.get_game(game.id).votes is None


def test_results_require_votes(manager, make_lobby):
    game = _discussion(manager, make_lobby, players=3)

    with pytest.raises(InvalidTransition):
        manager.get_results(game.id)
