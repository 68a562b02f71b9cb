"""Hex geometry: neighbors and the freedom-to-move test."""

from __future__ import annotations

from collections.abc import Collection

from hivecore.games.hive.types import DIRECTIONS, Coordinate


def neighbor_coordinates(c: Coordinate) -> list[Coordinate]:
    """Return the 6 neighbors of *c*, in the clockwise order of DIRECTIONS."""
    return [c + d for d in DIRECTIONS]


def direction_index(from_: Coordinate, to: Coordinate) -> int:
    """Index into DIRECTIONS of the step from *from_* to the adjacent *to*.

    Raises ValueError if the two coordinates are not neighbors.
    """
    delta = to - from_
    try:
        return DIRECTIONS.index(delta)
    except ValueError:
        raise ValueError(f"{to!r} is not adjacent to {from_!r}") from None


def can_slide(from_: Coordinate, to: Coordinate, occupied: Collection[Coordinate]) -> bool:
    """Check whether a piece can slide from *from_* into the adjacent *to*.

    The move is blocked only when both cells flanking the direction of travel
    (one step clockwise and one step counter-clockwise) are in *occupied*.
    """
    i = direction_index(from_, to)
    right = from_ + DIRECTIONS[(i + 1) % 6]
    left = from_ + DIRECTIONS[(i + 5) % 6]
    return left not in occupied or right not in occupied
