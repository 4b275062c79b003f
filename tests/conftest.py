from __future__ import annotations

import pytest

from hexlines.engine.models import Player
from hexlines.games.yavalath.board import HexBoard
from hexlines.games.yavalath.plugin import YavalathPlugin
from tests.builders import make_players


@pytest.fixture
def board() -> HexBoard:
    return HexBoard()


@pytest.fixture
def plugin() -> YavalathPlugin:
    return YavalathPlugin()


@pytest.fixture
def players() -> list[Player]:
    return make_players(2)


@pytest.fixture
def players3() -> list[Player]:
    return make_players(3)
