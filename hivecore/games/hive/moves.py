"""Per-bug movement rules.

Every generator sees the board as if the moving piece had already been lifted
off its origin (``hive_without`` / ``walkable_without``), so the piece never
blocks or supports itself.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Callable

from hivecore.games.hive.board import Board
from hivecore.games.hive.coordinates import can_slide, neighbor_coordinates
from hivecore.games.hive.types import DIRECTIONS, Bug, Coordinate

SPIDER_STEPS = 3


def bee_moves(board: Board, origin: Coordinate) -> set[Coordinate]:
    """One sliding step onto an empty cell that stays in contact with the hive."""
    hive = board.hive_without(origin)
    walkable = board.walkable_without(origin)
    return {
        n for n in neighbor_coordinates(origin)
        if n in walkable and can_slide(origin, n, hive)
    }


def beetle_moves(board: Board, origin: Coordinate) -> set[Coordinate]:
    """One step onto any neighbor, occupied or walkable. Beetles climb, so no slide check."""
    reachable = board.hive_and_walkable_without(origin)
    return {n for n in neighbor_coordinates(origin) if n in reachable}


def grasshopper_moves(board: Board, origin: Coordinate) -> set[Coordinate]:
    """Straight-line jumps over at least one piece, landing on the first gap."""
    hive = board.hive_without(origin)
    destinations: set[Coordinate] = set()
    for d in DIRECTIONS:
        current = origin + d
        if current not in hive:
            continue
        while current in hive:
            current = current + d
        destinations.add(current)
    return destinations


def spider_moves(board: Board, origin: Coordinate) -> set[Coordinate]:
    """Exactly three sliding steps without revisiting a cell.

    The hive is frozen at its pre-move shape for the whole search.
    """
    hive = board.hive_without(origin)
    walkable = board.walkable_without(origin)
    destinations: set[Coordinate] = set()
    path: list[Coordinate] = [origin]

    def dfs(current: Coordinate, remaining: int) -> None:
        if remaining == 0:
            destinations.add(current)
            return
        for nxt in neighbor_coordinates(current):
            if nxt not in walkable or nxt in path:
                continue
            if not can_slide(current, nxt, hive):
                continue
            path.append(nxt)
            dfs(nxt, remaining - 1)
            path.pop()

    dfs(origin, SPIDER_STEPS)
    return destinations


def ant_moves(board: Board, origin: Coordinate) -> set[Coordinate]:
    """Any walkable cell reachable by a chain of slides."""
    hive = board.hive()
    walkable = board.walkable_without(origin)
    visited = {origin}
    queue = deque([origin])
    while queue:
        current = queue.popleft()
        for n in neighbor_coordinates(current):
            if n in visited or n not in walkable:
                continue
            if not can_slide(current, n, hive):
                continue
            visited.add(n)
            queue.append(n)
    visited.discard(origin)
    return visited


MOVE_GENERATORS: dict[Bug, Callable[[Board, Coordinate], set[Coordinate]]] = {
    Bug.BEE: bee_moves,
    Bug.BEETLE: beetle_moves,
    Bug.GRASSHOPPER: grasshopper_moves,
    Bug.SPIDER: spider_moves,
    Bug.ANT: ant_moves,
}


def possible_destinations(board: Board, origin: Coordinate) -> set[Coordinate]:
    """Legal destinations for the top piece at *origin*.

    Raises LookupError if *origin* holds no piece.
    """
    piece = board.get_top(origin)
    if piece is None:
        raise LookupError(f"No piece at {origin!r}")
    return MOVE_GENERATORS[piece.bug](board, origin)
