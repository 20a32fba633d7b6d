import random

import pytest
from fastapi.testclient import TestClient

from helpers import completed
from main import app
from tournament.models import Round
from tournament.repository import InMemoryTournamentRepository
from tournament.router import get_repository, get_rng


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def repository():
    return InMemoryTournamentRepository()


@pytest.fixture
def client(repository):
    app.dependency_overrides[get_repository] = lambda: repository
    app.dependency_overrides[get_rng] = lambda: random.Random(42)
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def eight_player_round_one():
    # A,B 21 > E,F 15 > G,H 6 > C,D 0
    return Round(round=1, matches=[
        completed("r1c1-a", 1, ["A", "B"], ["C", "D"], 21, 0),
        completed("r1c2-b", 2, ["E", "F"], ["G", "H"], 15, 6),
    ])
