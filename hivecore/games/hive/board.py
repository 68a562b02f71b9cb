"""Stacking hex board for Hive.

The board is a sparse mapping from coordinate to a stack of pieces. It knows
nothing about turns or legality; it only answers occupancy questions and moves
pieces around. A stack is never left empty: popping the last piece of a cell
removes the cell.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Callable, Iterable

from hivecore.games.hive.coordinates import neighbor_coordinates
from hivecore.games.hive.types import Coordinate, Piece


class Board:
    def __init__(self, cells: dict[Coordinate, list[Piece]] | None = None) -> None:
        self._cells: dict[Coordinate, list[Piece]] = {}
        for c, stack in (cells or {}).items():
            if stack:
                self._cells[c] = list(stack)

    def copy(self) -> Board:
        return Board(self._cells)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Board):
            return self._cells == other._cells
        return NotImplemented

    # ── Queries ──

    def get_cell(self, c: Coordinate) -> tuple[Piece, ...]:
        """The stack at *c*, bottom first. Empty tuple if nothing is there."""
        return tuple(self._cells.get(c, ()))

    def get_top(self, c: Coordinate) -> Piece | None:
        stack = self._cells.get(c)
        return stack[-1] if stack else None

    def is_empty(self) -> bool:
        return not self._cells

    def piece_count(self) -> int:
        return sum(len(stack) for stack in self._cells.values())

    def pieces(self) -> list[Piece]:
        """Every piece on the board, including covered ones."""
        return [p for stack in self._cells.values() for p in stack]

    def neighbor_pieces(self, c: Coordinate) -> list[Piece]:
        """Top pieces of the occupied neighbors of *c*."""
        tops = (self.get_top(n) for n in neighbor_coordinates(c))
        return [p for p in tops if p is not None]

    def find(self, predicate: Callable[[Piece], bool]) -> list[Coordinate]:
        """Coordinates whose top piece satisfies *predicate*."""
        return [c for c, stack in self._cells.items() if predicate(stack[-1])]

    # ── Hive sets ──

    def hive(self) -> set[Coordinate]:
        return set(self._cells)

    def hive_without(self, c: Coordinate) -> set[Coordinate]:
        """The hive as it would be with the top piece at *c* lifted off.

        Does not touch the board. A cell whose stack holds more than one piece
        stays occupied after its top is lifted.
        """
        hive = self.hive()
        if len(self._cells.get(c, ())) <= 1:
            hive.discard(c)
        return hive

    def border(self) -> set[Coordinate]:
        """Empty cells touching the hive."""
        return _empty_border(self._cells)

    def walkable_without(self, c: Coordinate) -> set[Coordinate]:
        """Empty cells touching ``hive_without(c)``."""
        hive = self.hive_without(c)
        return _empty_border(hive)

    def hive_and_walkable_without(self, c: Coordinate) -> set[Coordinate]:
        hive = self.hive_without(c)
        return hive | _empty_border(hive)

    def connected_from(self, start: Coordinate) -> set[Coordinate]:
        """Occupied cells reachable from *start* through occupied neighbors (BFS)."""
        hive = self.hive()
        if start not in hive:
            return set()
        visited = {start}
        queue = deque([start])
        while queue:
            current = queue.popleft()
            for n in neighbor_coordinates(current):
                if n in hive and n not in visited:
                    visited.add(n)
                    queue.append(n)
        return visited

    def is_connected(self) -> bool:
        """True if the hive forms one group (an empty board counts as connected)."""
        if len(self._cells) <= 1:
            return True
        start = next(iter(self._cells))
        return len(self.connected_from(start)) == len(self._cells)

    # ── Mutations ──

    def put(self, piece: Piece, c: Coordinate) -> None:
        self._cells.setdefault(c, []).append(piece)

    def move_top(self, from_: Coordinate, to: Coordinate) -> Piece:
        """Pop the top piece of *from_* and push it onto *to*. Returns the piece.

        Raises LookupError if *from_* holds no piece.
        """
        stack = self._cells.get(from_)
        if not stack:
            raise LookupError(f"No piece at {from_!r}")
        piece = stack.pop()
        if not stack:
            del self._cells[from_]
        self.put(piece, to)
        return piece

    # ── Serialization ──

    def to_dict(self) -> dict[str, list[dict]]:
        """``{"x,y": [piece, ...]}`` with pieces bottom first."""
        return {
            c.to_key(): [p.model_dump(mode="json") for p in stack]
            for c, stack in sorted(self._cells.items(), key=lambda item: item[0].as_tuple())
        }

    @staticmethod
    def from_dict(data: dict[str, list[dict]]) -> Board:
        return Board({
            Coordinate.from_key(key): [Piece.model_validate(p) for p in stack]
            for key, stack in data.items()
        })


def _empty_border(hive: Iterable[Coordinate]) -> set[Coordinate]:
    hive = set(hive)
    border: set[Coordinate] = set()
    for c in hive:
        for n in neighbor_coordinates(c):
            if n not in hive:
                border.add(n)
    return border
