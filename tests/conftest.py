import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SOCKETIO_ASYNC_MODE", "threading")

import random
from datetime import datetime, timedelta, timezone

import pytest

from database import init_database, drop_database
from game import GameManager


T0 = datetime(2024, 5, 1, 20, 0, 0, tzinfo=timezone.utc)


class FakeClock:
    """Manually advanced UTC clock."""

    def __init__(self, start=T0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now = self.now + timedelta(seconds=seconds)


@pytest.fixture
def database(tmp_path):
    init_database(f"sqlite:///{tmp_path / 'imposter.db'}")
    try:
        yield
    finally:
        drop_database()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def manager(database, clock):
    return GameManager(rng=random.Random(1234), clock=clock)


@pytest.fixture
def make_lobby(manager):
    """Create a game in the lobby with `players` seats and the given categories."""

    def _make(players=4, categories=("Animals",), **settings):
        game = manager.create_game(settings=settings or None)
        for position in range(players):
            manager.add_player(game.id, name=f"P{position}")
        if categories:
            manager.update_selected_categories(game.id, list(categories))
        return manager.get_game(game.id)

    return _make
