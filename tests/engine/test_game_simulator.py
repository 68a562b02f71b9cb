"""Tests for the synchronous game simulator."""

import pytest

from hivecore.engine.errors import (
    GameNotActiveError,
    InvalidActionError,
    NotYourTurnError,
)
from hivecore.engine.game_simulator import (
    SimulationState,
    clone_state,
    start_simulation,
    submit_action,
)
from hivecore.engine.models import Action, ExpectedAction, GameConfig, Phase, PlayerId
from hivecore.games.hive.game import Game
from hivecore.games.hive.plugin import HivePlugin


def _place(player: str, bug: str, x: int, y: int) -> Action:
    return Action(
        action_type="place_piece",
        player_id=PlayerId(player),
        payload={"bug": bug, "x": x, "y": y},
    )


def _move(player: str, from_: tuple[int, int], to: tuple[int, int]) -> Action:
    return Action(
        action_type="move_piece",
        player_id=PlayerId(player),
        payload={"from_x": from_[0], "from_y": from_[1], "to_x": to[0], "to_y": to[1]},
    )


def test_start_simulation(plugin, players):
    state, events = start_simulation(plugin, players, GameConfig())

    assert state.action_number == 0
    assert state.game_over is None
    assert state.phase.name == "play_turn"
    assert state.phase.expected_actions[0].player_id == "p1"
    assert [e.event_type for e in events] == ["game_started"]


def test_turns_alternate(plugin, players):
    state, _ = start_simulation(plugin, players, GameConfig())

    submit_action(plugin, state, _place("p1", "bee", 0, 0))
    assert state.phase.expected_actions[0].player_id == "p2"

    events = submit_action(plugin, state, _place("p2", "bee", 1, 0))
    assert events[0].event_type == "piece_placed"
    assert state.phase.expected_actions[0].player_id == "p1"
    assert state.phase.metadata == {"turn_number": 3, "color": "black"}
    assert state.action_number == 2


def test_wrong_player_rejected(plugin, players):
    state, _ = start_simulation(plugin, players, GameConfig())

    with pytest.raises(NotYourTurnError):
        submit_action(plugin, state, _place("p2", "bee", 0, 0))
    assert state.action_number == 0


def test_illegal_action_rejected_without_changes(plugin, players):
    state, _ = start_simulation(plugin, players, GameConfig())
    submit_action(plugin, state, _place("p1", "bee", 0, 0))
    before = clone_state(state)

    with pytest.raises(InvalidActionError, match="must touch the hive"):
        submit_action(plugin, state, _place("p2", "ant", 5, 5))

    assert state.game_data == before.game_data
    assert state.action_number == before.action_number


def test_finished_game_rejects_actions(plugin, surround_position):
    players_by_color = {"p1": "black", "p2": "white"}
    state = SimulationState(
        game_data={"game": surround_position.to_dict(), "colors": players_by_color},
        phase=Phase(
            name="play_turn",
            expected_actions=[
                ExpectedAction(player_id=PlayerId("p2"), action_type="move_piece"),
            ],
        ),
        players=[],
    )

    events = submit_action(plugin, state, _move("p2", (2, -1), (1, 0)))

    assert [e.event_type for e in events] == ["piece_moved", "game_ended"]
    assert state.game_over is not None
    assert state.game_over.winners == ["p2"]
    assert state.game_over.reason == "queen_surrounded"
    assert state.phase.name == "game_over"

    with pytest.raises(GameNotActiveError):
        submit_action(plugin, state, _move("p1", (0, -1), (1, -2)))


def test_clone_state_independence(plugin, players):
    state, _ = start_simulation(plugin, players, GameConfig())
    cloned = clone_state(state)

    submit_action(plugin, cloned, _place("p1", "ant", 0, 0))

    assert state.action_number == 0
    assert state.game_data["game"]["board"] == {}
    assert cloned.game_data["game"]["board"] != {}
    assert cloned.players is state.players


def test_first_action_playthrough_keeps_hive_intact(players):
    """Always play the first legal action and check the hive after every turn."""
    plugin = HivePlugin()
    state, _ = start_simulation(plugin, players, GameConfig())

    for _ in range(80):
        if state.game_over is not None:
            break
        player_id = state.phase.expected_actions[0].player_id
        actions = plugin.get_valid_actions(state.game_data, state.phase, player_id)
        if not actions:
            break
        payload = dict(actions[0])
        action_type = payload.pop("action_type")
        submit_action(
            plugin,
            state,
            Action(action_type=action_type, player_id=player_id, payload=payload),
        )

        game = Game.from_dict(state.game_data["game"])
        board = game.board
        assert board.is_connected()
        assert board.piece_count() + len(game.get_pool()) == 22

    assert state.action_number > 8
