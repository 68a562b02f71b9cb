"""Hive game state machine: turns, placement, movement and the win condition.

Every public mutation validates first and commits last, so a rejected call
(raised as a HiveError) leaves the game exactly as it was. Moves are checked
for hive connectivity on a candidate copy of the board, which only replaces
the live board once the move is known to be legal.

Turn counting assumes two players alternating, black first: black plays the
odd turns and white the even ones, so turns 7 and 8 are each color's fourth.
"""

from __future__ import annotations

import logging

from hivecore.games.hive.board import Board
from hivecore.games.hive.errors import (
    GameFinished,
    HiveDisconnected,
    HiveError,
    InvalidMove,
    MustPlaceBeeBeforeMoving,
    NoPieceAtLocation,
    NotYourTurn,
    PieceNotInPool,
    QueenMustBePlacedBeforeFifthTurn,
    SpawnedInOpponentsHive,
    SpawnedOnTopOfAnotherPiece,
    SpawnedOutOfHive,
)
from hivecore.games.hive.moves import possible_destinations
from hivecore.games.hive.pool import default_pool
from hivecore.games.hive.types import ORIGIN, Bug, Color, Coordinate, Outcome, Piece

logger = logging.getLogger(__name__)

# Global turn numbers on which each color plays its fourth turn
QUEEN_DEADLINE_TURNS = (7, 8)


def _queen(color: Color) -> Piece:
    return Piece(bug=Bug.BEE, color=color)


class Game:
    def __init__(
        self,
        pool: list[Piece] | None = None,
        *,
        board: Board | None = None,
        turn: Color = Color.BLACK,
        turn_number: int = 1,
        outcome: Outcome | None = None,
    ) -> None:
        pieces = default_pool() if pool is None else pool
        self._pools: dict[Color, list[Piece]] = {
            color: [p for p in pieces if p.color == color] for color in Color
        }
        self._board = board.copy() if board is not None else Board()
        self._turn = turn
        self._turn_number = turn_number
        self._outcome = outcome

    # ── State accessors ──

    @property
    def turn(self) -> Color:
        return self._turn

    @property
    def turn_number(self) -> int:
        return self._turn_number

    @property
    def outcome(self) -> Outcome | None:
        return self._outcome

    @property
    def is_finished(self) -> bool:
        return self._outcome is not None

    @property
    def board(self) -> Board:
        """A copy of the board; mutating it does not affect the game."""
        return self._board.copy()

    def get_top_piece(self, c: Coordinate) -> Piece | None:
        return self._board.get_top(c)

    def get_pool(self) -> list[Piece]:
        """Remaining pieces, black's first, in pool order."""
        return [p for color in Color for p in self._pools[color]]

    def hive(self) -> set[Coordinate]:
        return self._board.hive()

    def possible_moves(self, from_: Coordinate) -> set[Coordinate]:
        """Destinations the top piece at *from_* could move to.

        Ignores whose turn it is and whether the move would split the hive;
        ``move_top`` checks those.
        """
        if self._board.get_top(from_) is None:
            raise NoPieceAtLocation()
        return possible_destinations(self._board, from_)

    # ── Actions ──

    def put(self, piece: Piece, c: Coordinate) -> None:
        """Place *piece* from its owner's pool onto the empty cell *c*."""
        self._check_put(piece, c)
        self._pools[piece.color].remove(piece)
        self._board.put(piece, c)
        logger.debug(f"Turn {self._turn_number}: {piece} placed at {c.to_key()}")
        self._end_turn()

    def move_top(self, from_: Coordinate, to: Coordinate) -> None:
        """Move the top piece at *from_* to *to*."""
        candidate = self._prepare_move(from_, to)
        piece = self._board.get_top(from_)
        self._board = candidate
        logger.debug(
            f"Turn {self._turn_number}: {piece} moved {from_.to_key()} -> {to.to_key()}"
        )
        self._end_turn()

    # ── Legal action enumeration ──

    def valid_placements(self) -> list[tuple[Piece, Coordinate]]:
        """Every (piece, coordinate) the current player may place."""
        if self.is_finished:
            return []
        if self._board.is_empty():
            candidates = [ORIGIN]
        else:
            candidates = sorted(self._board.border(), key=Coordinate.as_tuple)
        distinct: list[Piece] = []
        for p in self._pools[self._turn]:
            if p not in distinct:
                distinct.append(p)

        placements: list[tuple[Piece, Coordinate]] = []
        for piece in distinct:
            for c in candidates:
                try:
                    self._check_put(piece, c)
                except HiveError:
                    continue
                placements.append((piece, c))
        return placements

    def valid_moves(self) -> list[tuple[Coordinate, Coordinate]]:
        """Every (from, to) move the current player may make."""
        if self.is_finished or _queen(self._turn) in self._pools[self._turn]:
            return []
        moves: list[tuple[Coordinate, Coordinate]] = []
        origins = self._board.find(lambda p: p.color == self._turn)
        for from_ in sorted(origins, key=Coordinate.as_tuple):
            destinations = possible_destinations(self._board, from_)
            for to in sorted(destinations, key=Coordinate.as_tuple):
                try:
                    self._prepare_move(from_, to, destinations)
                except HiveError:
                    continue
                moves.append((from_, to))
        return moves

    # ── Serialization ──

    def to_dict(self) -> dict:
        return {
            "board": self._board.to_dict(),
            "pool": [p.model_dump(mode="json") for p in self.get_pool()],
            "turn": self._turn.value,
            "turn_number": self._turn_number,
            "outcome": self._outcome.model_dump(mode="json") if self._outcome else None,
        }

    @staticmethod
    def from_dict(data: dict) -> Game:
        outcome = data.get("outcome")
        return Game(
            [Piece.model_validate(p) for p in data["pool"]],
            board=Board.from_dict(data["board"]),
            turn=Color(data["turn"]),
            turn_number=data["turn_number"],
            outcome=Outcome.model_validate(outcome) if outcome is not None else None,
        )

    # ── Internals ──

    def _check_put(self, piece: Piece, c: Coordinate) -> None:
        if self._outcome is not None:
            raise GameFinished(self._outcome)
        if piece.color != self._turn:
            raise NotYourTurn()
        if self._board.get_top(c) is not None:
            raise SpawnedOnTopOfAnotherPiece()

        neighbors = self._board.neighbor_pieces(c)
        if not self._board.is_empty() and not neighbors:
            raise SpawnedOutOfHive()
        # The second piece of the game necessarily touches the first
        if self._board.piece_count() > 1 and any(n.color != piece.color for n in neighbors):
            raise SpawnedInOpponentsHive()

        if (
            self._turn_number in QUEEN_DEADLINE_TURNS
            and piece.bug != Bug.BEE
            and _queen(piece.color) in self._pools[piece.color]
        ):
            raise QueenMustBePlacedBeforeFifthTurn()
        if piece not in self._pools[piece.color]:
            raise PieceNotInPool()

    def _prepare_move(
        self,
        from_: Coordinate,
        to: Coordinate,
        destinations: set[Coordinate] | None = None,
    ) -> Board:
        """Validate a move and return the board it would produce.

        *destinations* is the already computed destination set of *from_*, if
        the caller has one.
        """
        if from_ == to:
            raise InvalidMove()
        if self._outcome is not None:
            raise GameFinished(self._outcome)
        if _queen(self._turn) in self._pools[self._turn]:
            raise MustPlaceBeeBeforeMoving()

        piece = self._board.get_top(from_)
        if piece is None:
            raise NoPieceAtLocation()
        if piece.color != self._turn:
            raise NotYourTurn()
        if destinations is None:
            destinations = possible_destinations(self._board, from_)
        if to not in destinations:
            raise InvalidMove()

        candidate = self._board.copy()
        candidate.move_top(from_, to)
        if candidate.connected_from(to) != candidate.hive():
            logger.debug(f"Rejected {piece} {from_.to_key()} -> {to.to_key()}: hive split")
            raise HiveDisconnected()
        return candidate

    def _queen_surrounded(self, color: Color) -> bool:
        queen = _queen(color)
        return any(
            len(self._board.neighbor_pieces(c)) == 6
            for c in self._board.find(lambda p: p == queen)
        )

    def _end_turn(self) -> None:
        surrounded = [color for color in Color if self._queen_surrounded(color)]
        if len(surrounded) == 2:
            self._outcome = Outcome.draw()
        elif len(surrounded) == 1:
            self._outcome = Outcome.win(surrounded[0].opponent)
        if self._outcome is not None:
            logger.info(f"Game finished on turn {self._turn_number}: {self._outcome}")

        self._turn = self._turn.opponent
        self._turn_number += 1
