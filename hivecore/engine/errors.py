from __future__ import annotations

from hivecore.engine.models import Action


class GameEngineError(Exception):
    """Base class for engine errors. ``message`` is safe to show to a player."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InvalidActionError(GameEngineError):
    """Action is not valid in current state."""

    def __init__(self, message: str, action: Action | None = None):
        self.action = action
        super().__init__(message)


class GameNotActiveError(GameEngineError):
    """Action submitted to a finished game."""


class NotYourTurnError(GameEngineError):
    """Player tried to act when it's not their turn."""


class InvalidPluginError(GameEngineError):
    """A plugin failed the sanity checks run at registration."""

    def __init__(self, game_id: str, problems: list[str]):
        self.game_id = game_id
        self.problems = problems
        super().__init__(f"Plugin '{game_id}' is invalid: {'; '.join(problems)}")
