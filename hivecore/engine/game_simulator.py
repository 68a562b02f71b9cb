"""Synchronous game simulator: drives a plugin through a sequence of actions.

Performs the same envelope checks a live session would (game still active,
correct player to act) and then lets the plugin validate and apply the action.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass

from hivecore.engine.errors import (
    GameNotActiveError,
    InvalidActionError,
    NotYourTurnError,
)
from hivecore.engine.models import Action, Event, GameConfig, GameResult, Phase, Player
from hivecore.engine.protocol import GamePlugin


@dataclass
class SimulationState:
    """Mutable game state for synchronous simulation."""

    game_data: dict
    phase: Phase
    players: list[Player]
    game_over: GameResult | None = None
    action_number: int = 0


def start_simulation(
    plugin: GamePlugin,
    players: list[Player],
    config: GameConfig,
) -> tuple[SimulationState, list[Event]]:
    """Create the initial state for *players* and return it with the start events."""
    game_data, phase, events = plugin.create_initial_state(players, config)
    return SimulationState(game_data=game_data, phase=phase, players=players), events


def submit_action(
    plugin: GamePlugin,
    state: SimulationState,
    action: Action,
) -> list[Event]:
    """Validate and apply an action, mutating *state* in place.

    Raises GameNotActiveError, NotYourTurnError or InvalidActionError; the state
    is left untouched when any of them is raised.
    """
    _validate_envelope(state, action)

    error = plugin.validate_action(state.game_data, state.phase, action)
    if error:
        raise InvalidActionError(error, action)

    result = plugin.apply_action(
        state.game_data, state.phase, action, state.players
    )
    state.game_data = result.game_data
    state.phase = result.next_phase
    state.game_over = result.game_over
    state.action_number += 1
    return result.events


def clone_state(state: SimulationState) -> SimulationState:
    """Deep-copy a simulation state.

    ``players`` is shared (immutable during a game).
    """
    return SimulationState(
        game_data=copy.deepcopy(state.game_data),
        phase=state.phase.model_copy(deep=True),
        players=state.players,  # shared, never mutated
        game_over=state.game_over,
        action_number=state.action_number,
    )


def _validate_envelope(state: SimulationState, action: Action) -> None:
    """Check the game is active and it's the right player's turn."""
    if state.game_over is not None:
        raise GameNotActiveError("Game is finished")

    phase = state.phase
    if phase.expected_actions:
        expected = phase.expected_actions[0]
        if expected.player_id and action.player_id != expected.player_id:
            raise NotYourTurnError(
                f"Expected {expected.player_id}, got {action.player_id}"
            )
