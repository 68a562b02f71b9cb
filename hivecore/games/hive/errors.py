"""Rule violations raised by the Hive game engine.

Each rejection is its own exception class so callers can catch exactly the
cases they care about; all of them derive from HiveError.
"""

from __future__ import annotations

from typing import ClassVar

from hivecore.engine.errors import (
    GameNotActiveError,
    InvalidActionError,
    NotYourTurnError,
)
from hivecore.games.hive.types import Outcome


class HiveError(InvalidActionError):
    """A placement or move that the rules reject. The game state is unchanged."""

    default_message: ClassVar[str] = "Action rejected"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)


class NotYourTurn(HiveError, NotYourTurnError):
    default_message = "It is not your turn"


class NoPieceAtLocation(HiveError):
    default_message = "There is no piece at that location"


class InvalidMove(HiveError):
    default_message = "That piece cannot move there"


class QueenMustBePlacedBeforeFifthTurn(HiveError):
    default_message = "The queen bee must be placed by your fourth turn"


class SpawnedInOpponentsHive(HiveError):
    default_message = "New pieces cannot touch an opponent's piece"


class SpawnedOnTopOfAnotherPiece(HiveError):
    default_message = "New pieces must be placed on an empty cell"


class SpawnedOutOfHive(HiveError):
    default_message = "New pieces must touch the hive"


class HiveDisconnected(HiveError):
    default_message = "The move would split the hive"


class PieceNotInPool(HiveError):
    default_message = "That piece is not in your pool"


class MustPlaceBeeBeforeMoving(HiveError):
    default_message = "Place your queen bee before moving pieces"


class GameFinished(HiveError, GameNotActiveError):
    default_message = "The game is over"

    def __init__(self, outcome: Outcome):
        self.outcome = outcome
        super().__init__(f"The game is over ({outcome})")
