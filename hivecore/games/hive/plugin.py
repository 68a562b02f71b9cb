"""HivePlugin: implements the GamePlugin protocol for Hive."""

from __future__ import annotations

from typing import ClassVar

from hivecore.engine.errors import InvalidActionError
from hivecore.engine.models import (
    Action,
    Event,
    ExpectedAction,
    GameConfig,
    GameResult,
    Phase,
    Player,
    PlayerId,
    TransitionResult,
)
from hivecore.games.hive.errors import HiveError, NotYourTurn
from hivecore.games.hive.game import Game
from hivecore.games.hive.pool import default_counts, default_pool, parse_counts, validate_counts
from hivecore.games.hive.types import Bug, Color, Coordinate, Piece

PLAY_PHASE = "play_turn"
PLACE_PIECE = "place_piece"
MOVE_PIECE = "move_piece"

# Seat index -> color; seat 0 moves first
SEAT_COLORS = (Color.BLACK, Color.WHITE)


class HivePlugin:
    """Hive: a two-player abstract strategy game played with stackable bug tiles."""

    game_id: ClassVar[str] = "hive"
    display_name: ClassVar[str] = "Hive"
    min_players: ClassVar[int] = 2
    max_players: ClassVar[int] = 2
    description: ClassVar[str] = (
        "Place and move bugs to surround the opposing queen bee. "
        "A 2-player abstract strategy game."
    )
    config_schema: ClassVar[dict] = {
        "type": "object",
        "properties": {
            "pool": {
                "type": "object",
                "properties": {
                    bug.value: {"type": "integer", "minimum": 0} for bug in Bug
                },
            },
        },
    }

    # ── Lifecycle ──

    def create_initial_state(
        self,
        players: list[Player],
        config: GameConfig,
    ) -> tuple[dict, Phase, list[Event]]:
        if len(players) != 2:
            raise ValueError(f"Hive needs exactly 2 players, got {len(players)}")

        counts = parse_counts(config.options.get("pool", {}))
        game = Game(default_pool(counts))
        seats = sorted(players, key=lambda p: p.seat_index)
        game_data: dict = {
            "game": game.to_dict(),
            "colors": {
                p.player_id: color.value for p, color in zip(seats, SEAT_COLORS)
            },
        }

        events = [
            Event(event_type="game_started", payload={
                "players": [p.player_id for p in seats],
                "colors": game_data["colors"],
            }),
        ]

        return game_data, self._play_phase(game_data, game), events

    def validate_config(self, options: dict) -> list[str]:
        pool = options.get("pool", {})
        if not isinstance(pool, dict):
            return ["pool must be an object"]
        try:
            counts = parse_counts(pool)
        except ValueError as e:
            return [str(e)]
        merged = default_counts()
        merged.update(counts)
        return validate_counts(merged)

    # ── Core game loop ──

    def get_valid_actions(
        self,
        game_data: dict,
        phase: Phase,
        player_id: PlayerId,
    ) -> list[dict]:
        if phase.name != PLAY_PHASE:
            return []

        game = Game.from_dict(game_data["game"])
        if game.is_finished or game_data["colors"].get(player_id) != game.turn.value:
            return []

        actions: list[dict] = [
            {"action_type": PLACE_PIECE, "bug": piece.bug.value, "x": c.x, "y": c.y}
            for piece, c in game.valid_placements()
        ]
        actions.extend(
            {
                "action_type": MOVE_PIECE,
                "from_x": from_.x,
                "from_y": from_.y,
                "to_x": to.x,
                "to_y": to.y,
            }
            for from_, to in game.valid_moves()
        )
        return actions

    def validate_action(
        self,
        game_data: dict,
        phase: Phase,
        action: Action,
    ) -> str | None:
        if phase.name != PLAY_PHASE:
            return f"Unknown phase: {phase.name}"
        if action.action_type not in (PLACE_PIECE, MOVE_PIECE):
            return f"Unknown action type: {action.action_type}"

        color = game_data["colors"].get(action.player_id)
        if color is None:
            return f"{action.player_id} is not playing this game"

        error = _payload_error(action)
        if error:
            return error

        # Dry run on a throwaway copy
        game = Game.from_dict(game_data["game"])
        try:
            self._perform(game, Color(color), action)
        except HiveError as e:
            return e.message
        return None

    def apply_action(
        self,
        game_data: dict,
        phase: Phase,
        action: Action,
        players: list[Player],
    ) -> TransitionResult:
        if phase.name != PLAY_PHASE:
            raise InvalidActionError(f"Unknown phase: {phase.name}", action)

        color = Color(game_data["colors"][action.player_id])
        game = Game.from_dict(game_data["game"])
        event = self._perform(game, color, action)
        game_data["game"] = game.to_dict()

        events = [event]
        if game.outcome is None:
            return TransitionResult(
                game_data=game_data,
                events=events,
                next_phase=self._play_phase(game_data, game),
            )
        return self._end_game(game_data, game, events)

    # ── View filtering ──

    def get_player_view(
        self,
        game_data: dict,
        phase: Phase,
        player_id: PlayerId | None,
        players: list[Player],
    ) -> dict:
        # No hidden info, return everything
        game = game_data["game"]
        return {
            "board": game["board"],
            "pool": game["pool"],
            "turn": game["turn"],
            "turn_number": game["turn_number"],
            "outcome": game["outcome"],
            "colors": game_data["colors"],
        }

    # ── Private handlers ──

    def _perform(self, game: Game, color: Color, action: Action) -> Event:
        """Play *action* for *color* on *game* and describe it as an event."""
        # A player may only act for their own color, whatever piece they name
        if game.turn != color and not game.is_finished:
            raise NotYourTurn()

        payload = action.payload
        if action.action_type == PLACE_PIECE:
            piece = Piece(bug=Bug(payload["bug"]), color=color)
            at = Coordinate(x=payload["x"], y=payload["y"])
            game.put(piece, at)
            return Event(
                event_type="piece_placed",
                player_id=action.player_id,
                payload={"bug": piece.bug.value, "x": at.x, "y": at.y},
            )

        from_ = Coordinate(x=payload["from_x"], y=payload["from_y"])
        to = Coordinate(x=payload["to_x"], y=payload["to_y"])
        game.move_top(from_, to)
        moved = game.get_top_piece(to)
        return Event(
            event_type="piece_moved",
            player_id=action.player_id,
            payload={
                "bug": moved.bug.value if moved else None,
                "from_x": from_.x,
                "from_y": from_.y,
                "to_x": to.x,
                "to_y": to.y,
            },
        )

    def _play_phase(self, game_data: dict, game: Game) -> Phase:
        player_id = _player_for(game_data, game.turn)
        return Phase(
            name=PLAY_PHASE,
            expected_actions=[
                ExpectedAction(player_id=player_id, action_type=PLACE_PIECE),
                ExpectedAction(player_id=player_id, action_type=MOVE_PIECE),
            ],
            metadata={"turn_number": game.turn_number, "color": game.turn.value},
        )

    def _end_game(
        self,
        game_data: dict,
        game: Game,
        events: list[Event],
    ) -> TransitionResult:
        outcome = game.outcome
        assert outcome is not None
        winners = [] if outcome.is_draw else [_player_for(game_data, outcome.winner)]
        reason = "draw" if outcome.is_draw else "queen_surrounded"

        events.append(Event(
            event_type="game_ended",
            payload={"winners": winners, "reason": reason},
        ))

        return TransitionResult(
            game_data=game_data,
            events=events,
            next_phase=Phase(name="game_over"),
            game_over=GameResult(
                winners=winners,
                reason=reason,
                details={"turn_number": game.turn_number - 1},
            ),
        )


def _player_for(game_data: dict, color: Color) -> PlayerId:
    for player_id, c in game_data["colors"].items():
        if c == color.value:
            return PlayerId(player_id)
    raise KeyError(f"No player is playing {color.value}")


def _payload_error(action: Action) -> str | None:
    payload = action.payload
    if action.action_type == PLACE_PIECE:
        fields = ("bug", "x", "y")
    else:
        fields = ("from_x", "from_y", "to_x", "to_y")
    missing = [f for f in fields if payload.get(f) is None]
    if missing:
        return f"Missing {', '.join(missing)} in payload"
    for f in fields:
        if f != "bug" and (not isinstance(payload[f], int) or isinstance(payload[f], bool)):
            return f"{f} must be an integer"
    if action.action_type == PLACE_PIECE:
        try:
            Bug(payload["bug"])
        except ValueError:
            return f"Unknown bug: {payload['bug']}"
    return None
