"""Tests for plugin registry and plugin validation."""

from typing import ClassVar

import pytest

from hivecore.engine.errors import InvalidPluginError
from hivecore.engine.models import (
    Action,
    Event,
    ExpectedAction,
    GameConfig,
    Phase,
    Player,
    PlayerId,
    TransitionResult,
)
from hivecore.engine.protocol import GamePlugin
from hivecore.engine.registry import PluginRegistry
from hivecore.engine.validation import validate_plugin
from hivecore.games import build_registry
from hivecore.games.hive.plugin import HivePlugin


class MockPlugin:
    """Mock game plugin for testing."""

    game_id: ClassVar[str] = "mock-game"
    display_name: ClassVar[str] = "Mock Game"
    min_players: ClassVar[int] = 2
    max_players: ClassVar[int] = 4
    description: ClassVar[str] = "A mock game for testing"
    config_schema: ClassVar[dict] = {}

    def create_initial_state(
        self,
        players: list[Player],
        config: GameConfig,
    ) -> tuple[dict, Phase, list[Event]]:
        """Create initial game state."""
        game_data = {"turn": 0}
        phase = Phase(
            name="play",
            expected_actions=[
                ExpectedAction(player_id=players[0].player_id, action_type="draw"),
            ],
        )
        return game_data, phase, [Event(event_type="game_started")]

    def validate_config(self, options: dict) -> list[str]:
        return []

    def get_valid_actions(
        self,
        game_data: dict,
        phase: Phase,
        player_id: PlayerId,
    ) -> list[dict]:
        return [{"type": "draw"}]

    def validate_action(
        self,
        game_data: dict,
        phase: Phase,
        action: Action,
    ) -> str | None:
        return None

    def apply_action(
        self,
        game_data: dict,
        phase: Phase,
        action: Action,
        players: list[Player],
    ) -> TransitionResult:
        new_data = dict(game_data, turn=game_data.get("turn", 0) + 1)
        return TransitionResult(
            game_data=new_data,
            events=[Event(event_type="action_applied")],
            next_phase=phase,
        )

    def get_player_view(
        self,
        game_data: dict,
        phase: Phase,
        player_id: PlayerId | None,
        players: list[Player],
    ) -> dict:
        return {"turn": game_data["turn"]}


class TestPluginRegistry:
    """Tests for PluginRegistry."""

    def test_register_plugin(self):
        registry = PluginRegistry()
        plugin = MockPlugin()

        registry.register(plugin)

        assert registry.get("mock-game") == plugin

    def test_register_duplicate_raises_error(self):
        registry = PluginRegistry()
        registry.register(MockPlugin())

        with pytest.raises(ValueError, match="already registered"):
            registry.register(MockPlugin())

    def test_get_nonexistent_plugin_raises_error(self):
        registry = PluginRegistry()

        with pytest.raises(KeyError, match="Unknown game"):
            registry.get("nonexistent-game")

    def test_contains(self):
        registry = PluginRegistry()
        registry.register(MockPlugin())

        assert "mock-game" in registry
        assert "hive" not in registry

    def test_invalid_plugin_rejected(self):
        class Inverted(MockPlugin):
            game_id: ClassVar[str] = "inverted"
            min_players: ClassVar[int] = 3
            max_players: ClassVar[int] = 2

        registry = PluginRegistry()

        with pytest.raises(InvalidPluginError) as exc_info:
            registry.register(Inverted())

        assert exc_info.value.game_id == "inverted"
        assert "min_players is greater than max_players" in exc_info.value.problems
        assert "inverted" not in registry

    def test_validation_can_be_skipped(self):
        class Bare:
            game_id = "bare"

        registry = PluginRegistry()
        registry.register(Bare(), validate=False)

        assert "bare" in registry

    def test_list_games_empty(self):
        assert PluginRegistry().list_games() == []

    def test_list_games(self):
        registry = PluginRegistry()
        registry.register(MockPlugin())
        registry.register(HivePlugin())

        games = registry.list_games()

        assert [g["game_id"] for g in games] == ["mock-game", "hive"]
        hive = games[1]
        assert hive["min_players"] == 2
        assert hive["max_players"] == 2

    def test_build_registry(self):
        registry = build_registry()
        assert isinstance(registry.get("hive"), HivePlugin)


class TestValidatePlugin:
    """Tests for validate_plugin."""

    def test_plugins_satisfy_protocol(self):
        assert isinstance(MockPlugin(), GamePlugin)
        assert isinstance(HivePlugin(), GamePlugin)

    def test_mock_plugin_passes(self):
        assert validate_plugin(MockPlugin()) == []

    def test_hive_plugin_passes(self):
        assert validate_plugin(HivePlugin()) == []

    def test_missing_attributes_reported(self):
        class Bare:
            game_id = "bare"

        errors = validate_plugin(Bare())

        assert "Missing attribute: display_name" in errors
        assert "Missing attribute: min_players" in errors
        assert "Missing attribute: game_id" not in errors

    def test_inverted_player_counts_reported(self):
        class Inverted(MockPlugin):
            min_players: ClassVar[int] = 3
            max_players: ClassVar[int] = 2

        assert "min_players is greater than max_players" in validate_plugin(Inverted())

    def test_mutating_validation_reported(self):
        class Mutating(MockPlugin):
            def validate_action(self, game_data, phase, action):
                game_data["turn"] = 99
                return None

        assert "validate_action modified game_data" in validate_plugin(Mutating())

    def test_rejected_first_action_reported(self):
        class Picky(MockPlugin):
            def validate_action(self, game_data, phase, action):
                return f"no {action.action_type}"

        assert "First valid action rejected: no draw" in validate_plugin(Picky())

    def test_crashing_setup_reported(self):
        class Broken(MockPlugin):
            def create_initial_state(self, players, config):
                raise RuntimeError("boom")

        errors = validate_plugin(Broken())

        assert errors == ["create_initial_state failed: boom"]
