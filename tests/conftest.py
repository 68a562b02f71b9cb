from __future__ import annotations

import pytest

from hivecore.config import configure_logging
from hivecore.engine.models import Player
from hivecore.games.hive.board import Board
from hivecore.games.hive.game import Game
from hivecore.games.hive.plugin import HivePlugin
from hivecore.games.hive.types import Bug, Color, Coordinate, Piece


def c(x: int, y: int) -> Coordinate:
    return Coordinate(x=x, y=y)


def piece(bug: Bug, color: Color) -> Piece:
    return Piece(bug=bug, color=color)


@pytest.fixture(scope="session", autouse=True)
def _logging():
    configure_logging("DEBUG")


@pytest.fixture
def players() -> list[Player]:
    return [
        Player(player_id="p1", display_name="Alice", seat_index=0),
        Player(player_id="p2", display_name="Bob", seat_index=1),
    ]


@pytest.fixture
def plugin() -> HivePlugin:
    return HivePlugin()


@pytest.fixture
def game() -> Game:
    return Game()


@pytest.fixture
def surround_position() -> Game:
    """White to move; the white ant at (2,-1) can slide into (1,0), the last
    free neighbor of the black queen at (0,0)."""
    board = Board()
    board.put(piece(Bug.BEE, Color.BLACK), c(0, 0))
    board.put(piece(Bug.ANT, Color.BLACK), c(-1, 0))
    board.put(piece(Bug.SPIDER, Color.BLACK), c(-1, 1))
    board.put(piece(Bug.BEE, Color.WHITE), c(0, 1))
    board.put(piece(Bug.SPIDER, Color.WHITE), c(1, -1))
    board.put(piece(Bug.GRASSHOPPER, Color.BLACK), c(0, -1))
    board.put(piece(Bug.ANT, Color.WHITE), c(2, -1))
    return Game(
        [piece(Bug.ANT, Color.WHITE)],
        board=board,
        turn=Color.WHITE,
        turn_number=14,
    )
