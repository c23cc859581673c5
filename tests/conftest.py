import pytest

from envs.sokoban_puzzle.levels import parse_grid, parse_level
from envs.sokoban_puzzle.server.sokoban_environment import SokobanEnvironment


@pytest.fixture
def make_grid():
    """Build a validated grid from tile-character rows."""

    def _make(*rows):
        return parse_grid(list(rows))

    return _make


@pytest.fixture
def catalog():
    return [
        parse_level({"id": 1, "name": "Push Once", "grid": ["#####", "#@BT#", "#####"]}),
        parse_level({"id": 2, "name": "Long Walk", "grid": ["######", "#@   #", "# ## #", "#  BT#", "######"]}),
        parse_level({"id": 3, "name": "Last One", "grid": ["####", "#@ #", "####"]}),
    ]


@pytest.fixture
def env(catalog):
    return SokobanEnvironment(catalog)
