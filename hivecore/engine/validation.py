from __future__ import annotations

import copy

from hivecore.engine.models import Action, GameConfig, Phase, Player, PlayerId
from hivecore.engine.protocol import GamePlugin


def validate_plugin(plugin: GamePlugin) -> list[str]:
    """Run sanity checks on a plugin. Returns list of errors (empty = OK)."""
    errors: list[str] = []

    # Check required attributes
    for attr in ("game_id", "display_name", "min_players", "max_players"):
        if not hasattr(plugin, attr):
            errors.append(f"Missing attribute: {attr}")

    if errors:
        return errors  # Can't proceed without metadata

    if plugin.min_players > plugin.max_players:
        errors.append("min_players is greater than max_players")

    try:
        default_config_errors = plugin.validate_config({})
        if default_config_errors:
            errors.append(f"Default config rejected: {default_config_errors}")

        players = [
            Player(
                player_id=PlayerId(f"test-{i}"),
                display_name=f"Test {i}",
                seat_index=i,
            )
            for i in range(plugin.min_players)
        ]
        config = GameConfig()
        game_data, phase, _events = plugin.create_initial_state(players, config)

        if not isinstance(game_data, dict):
            errors.append("create_initial_state must return dict as game_data")

        if not isinstance(phase, Phase):
            errors.append("create_initial_state must return Phase as second element")
        elif not phase.expected_actions:
            errors.append("First phase has no expected_actions")

        # The first player must have something to do, and it must be accepted
        first_player = players[0].player_id
        valid = plugin.get_valid_actions(game_data, phase, first_player)
        if not valid:
            errors.append("First player has no valid actions")
        else:
            payload = dict(valid[0])
            action_type = payload.pop("action_type", None) or phase.expected_actions[0].action_type
            action = Action(action_type=action_type, player_id=first_player, payload=payload)
            snapshot = copy.deepcopy(game_data)
            error = plugin.validate_action(game_data, phase, action)
            if error:
                errors.append(f"First valid action rejected: {error}")
            if game_data != snapshot:
                errors.append("validate_action modified game_data")

        # Verify get_player_view doesn't crash
        for p in players:
            plugin.get_player_view(game_data, phase, p.player_id, players)

        # Verify determinism
        game_data2, _phase2, _events2 = plugin.create_initial_state(players, config)
        if game_data != game_data2:
            errors.append("create_initial_state is not deterministic")

    except Exception as e:
        errors.append(f"create_initial_state failed: {e}")

    return errors
