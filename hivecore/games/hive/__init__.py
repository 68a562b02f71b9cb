"""Hive: board, movement rules and game state machine."""

from hivecore.games.hive.board import Board
from hivecore.games.hive.game import Game
from hivecore.games.hive.types import Bug, Color, Coordinate, Outcome, Piece

__all__ = ["Board", "Bug", "Color", "Coordinate", "Game", "Outcome", "Piece"]
