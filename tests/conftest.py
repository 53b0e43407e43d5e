import pytest

from helpers import bye, game
from tallyboard.models import Player


@pytest.fixture
def four_players():
    return [
        Player(id="A", name="Alice", rating=1500, seed=1),
        Player(id="B", name="Bob", rating=1400, seed=2),
        Player(id="C", name="Cara", rating=1300, seed=3),
        Player(id="D", name="Dan", rating=1200, seed=4),
    ]


@pytest.fixture
def four_player_results():
    """Round 1: A beats B, C beats D. Round 2: C beats A, B and D idle.
    Round 3: A beats D, B gets a bye, C idle."""
    return [
        game(1, "A", "B", 450, 300),
        game(1, "C", "D", 400, 350),
        game(2, "A", "C", 380, 400),
        game(3, "A", "D", 420, 410),
        bye(3, "B"),
    ]
