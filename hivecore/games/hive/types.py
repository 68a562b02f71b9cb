"""Domain models for Hive."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class Color(str, Enum):
    BLACK = "black"
    WHITE = "white"

    @property
    def opponent(self) -> Color:
        return Color.WHITE if self is Color.BLACK else Color.BLACK


class Bug(str, Enum):
    BEE = "bee"
    BEETLE = "beetle"
    GRASSHOPPER = "grasshopper"
    SPIDER = "spider"
    ANT = "ant"


class Coordinate(BaseModel):
    """Axial hex coordinate (flat top, x axis horizontal, y axis up-right)."""

    model_config = ConfigDict(frozen=True)

    x: int
    y: int

    # Sums of validated coordinates, built without re-validation
    def __add__(self, other: Coordinate) -> Coordinate:
        return Coordinate.model_construct(x=self.x + other.x, y=self.y + other.y)

    def __sub__(self, other: Coordinate) -> Coordinate:
        return Coordinate.model_construct(x=self.x - other.x, y=self.y - other.y)

    def __repr__(self) -> str:
        return f"Coordinate({self.x}, {self.y})"

    def as_tuple(self) -> tuple[int, int]:
        return self.x, self.y

    def to_key(self) -> str:
        return f"{self.x},{self.y}"

    @staticmethod
    def from_key(key: str) -> Coordinate:
        x, y = key.split(",")
        return Coordinate(x=int(x), y=int(y))

    @staticmethod
    def from_tuple(xy: tuple[int, int]) -> Coordinate:
        return Coordinate(x=xy[0], y=xy[1])


ORIGIN = Coordinate(x=0, y=0)

# Relative neighbors, starting from the left and going clockwise:
#
#        -1,1     0,1
#   -1,0      0,0      1,0
#         0,-1     1,-1
DIRECTIONS: tuple[Coordinate, ...] = tuple(
    Coordinate(x=dx, y=dy)
    for dx, dy in [(-1, 0), (-1, 1), (0, 1), (1, 0), (1, -1), (0, -1)]
)


class Piece(BaseModel):
    """A bug of a given color. Pieces compare by value."""

    model_config = ConfigDict(frozen=True)

    bug: Bug
    color: Color

    def __str__(self) -> str:
        return f"{self.color.value} {self.bug.value}"


class Outcome(BaseModel):
    """Final result of a game: a win for ``winner``, or a draw when it is None."""

    model_config = ConfigDict(frozen=True)

    winner: Color | None = None

    @property
    def is_draw(self) -> bool:
        return self.winner is None

    @staticmethod
    def win(color: Color) -> Outcome:
        return Outcome(winner=color)

    @staticmethod
    def draw() -> Outcome:
        return Outcome()

    def __str__(self) -> str:
        return "draw" if self.winner is None else f"{self.winner.value} wins"
