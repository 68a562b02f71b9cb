from __future__ import annotations

from typing import ClassVar, Protocol, runtime_checkable

from hivecore.engine.models import (
    Action,
    Event,
    GameConfig,
    Phase,
    Player,
    PlayerId,
    TransitionResult,
)


@runtime_checkable
class GamePlugin(Protocol):
    """Interface that every game must implement.

    A plugin is stateless: everything about a running game lives in the
    ``game_data`` dict it hands back, which must stay JSON-compatible.
    """

    game_id: ClassVar[str]
    display_name: ClassVar[str]
    min_players: ClassVar[int]
    max_players: ClassVar[int]
    description: ClassVar[str]
    config_schema: ClassVar[dict]

    def create_initial_state(
        self,
        players: list[Player],
        config: GameConfig,
    ) -> tuple[dict, Phase, list[Event]]:
        """Set up a game. Must be deterministic for the same players and config."""
        ...

    def validate_config(self, options: dict) -> list[str]:
        """Problems with ``GameConfig.options`` (empty = OK)."""
        ...

    def get_valid_actions(
        self,
        game_data: dict,
        phase: Phase,
        player_id: PlayerId,
    ) -> list[dict]:
        """Legal action payloads for *player_id*, each with an ``action_type`` key."""
        ...

    def validate_action(
        self,
        game_data: dict,
        phase: Phase,
        action: Action,
    ) -> str | None:
        """Return an error message, or None if *action* may be applied.

        Must not modify *game_data*.
        """
        ...

    def apply_action(
        self,
        game_data: dict,
        phase: Phase,
        action: Action,
        players: list[Player],
    ) -> TransitionResult:
        ...

    def get_player_view(
        self,
        game_data: dict,
        phase: Phase,
        player_id: PlayerId | None,
        players: list[Player],
    ) -> dict:
        """What *player_id* may see; None is a spectator."""
        ...
