"""Piece pools: the reserve of pieces each color has yet to place."""

from __future__ import annotations

from hivecore.config import settings
from hivecore.games.hive.types import Bug, Color, Piece

# Pool order within a color
BUG_ORDER: tuple[Bug, ...] = (Bug.BEE, Bug.BEETLE, Bug.GRASSHOPPER, Bug.SPIDER, Bug.ANT)

# Settings field names, keyed by bug
_SETTINGS_FIELDS: dict[Bug, str] = {
    Bug.BEE: "bees",
    Bug.BEETLE: "beetles",
    Bug.GRASSHOPPER: "grasshoppers",
    Bug.SPIDER: "spiders",
    Bug.ANT: "ants",
}


def default_counts() -> dict[Bug, int]:
    """Per-color piece counts from settings."""
    return {bug: getattr(settings, field) for bug, field in _SETTINGS_FIELDS.items()}


def validate_counts(counts: dict[Bug, int]) -> list[str]:
    """Return a list of problems with *counts* (empty = OK)."""
    errors: list[str] = []
    for bug, n in counts.items():
        if not isinstance(n, int) or isinstance(n, bool) or n < 0:
            errors.append(f"Count for {bug.value} must be a non-negative integer")
    if counts.get(Bug.BEE) != 1:
        errors.append("Each color must have exactly one bee")
    return errors


def default_pool(counts: dict[Bug, int] | None = None) -> list[Piece]:
    """Build both colors' pools, black first, each in BUG_ORDER.

    *counts* overrides the settings for the bugs it names.
    Raises ValueError for negative counts or a bee count other than one.
    """
    merged = default_counts()
    if counts:
        merged.update(counts)
    errors = validate_counts(merged)
    if errors:
        raise ValueError("; ".join(errors))
    return [
        Piece(bug=bug, color=color)
        for color in (Color.BLACK, Color.WHITE)
        for bug in BUG_ORDER
        for _ in range(merged[bug])
    ]


def parse_counts(options: dict) -> dict[Bug, int]:
    """Turn ``{"ant": 2, ...}`` into ``{Bug.ANT: 2, ...}``.

    Raises ValueError on an unknown bug name.
    """
    counts: dict[Bug, int] = {}
    for name, n in options.items():
        try:
            bug = Bug(name)
        except ValueError:
            raise ValueError(f"Unknown bug: {name}") from None
        counts[bug] = n
    return counts
