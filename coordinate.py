# coordinate.py — grid positions and 8-way movement
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Tuple


class Direction(Enum):
    # value is (dx, dy); north decreases y
    NORTH = (0, -1)
    NORTH_EAST = (1, -1)
    EAST = (1, 0)
    SOUTH_EAST = (1, 1)
    SOUTH = (0, 1)
    SOUTH_WEST = (-1, 1)
    WEST = (-1, 0)
    NORTH_WEST = (-1, -1)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @property
    def is_north_or_south(self) -> bool:
        return self in (Direction.NORTH, Direction.SOUTH)

    @property
    def is_east_or_west(self) -> bool:
        return self in (Direction.EAST, Direction.WEST)


ALL_DIRECTIONS: Tuple[Direction, ...] = tuple(Direction)
CARDINAL: Tuple[Direction, ...] = (Direction.NORTH, Direction.EAST, Direction.SOUTH, Direction.WEST)


def _sign(v: int) -> int:
    return (v > 0) - (v < 0)


@dataclass(frozen=True, order=True)
class Coordinate:
    x: int
    y: int

    @classmethod
    def at(cls, row: int, col: int) -> "Coordinate":
        return cls(x=col, y=row)

    @property
    def row(self) -> int:
        return self.y

    @property
    def col(self) -> int:
        return self.x

    def __str__(self) -> str:
        return f"{self.x},{self.y}"

    # ---- distance / movement ----

    def manhattan_distance(self, other: "Coordinate") -> int:
        return abs(self.x - other.x) + abs(self.y - other.y)

    def moved(self, direction: Direction, amount: int) -> "Coordinate":
        return Coordinate(self.x + direction.dx * amount, self.y + direction.dy * amount)

    def line(self, to: "Coordinate") -> List["Coordinate"]:
        """Points from ``self`` toward ``to``, one step per point, end excluded.

        Steps move by the sign of each axis delta, so only horizontal, vertical
        and 45° lines are exact.
        """

        dx = _sign(to.x - self.x)
        dy = _sign(to.y - self.y)
        steps = max(abs(self.x - to.x), abs(self.y - to.y))
        return [Coordinate(self.x + dx * i, self.y + dy * i) for i in range(steps)]

    # ---- neighbours ----

    def is_adjacent(self, other: "Coordinate") -> bool:
        return abs(self.x - other.x) <= 1 and abs(self.y - other.y) <= 1

    def neighbor(self, direction: Direction) -> "Coordinate":
        return Coordinate(self.x + direction.dx, self.y + direction.dy)

    def neighbors(self, directions: Iterable[Direction] = ALL_DIRECTIONS) -> List["Coordinate"]:
        return [self.neighbor(d) for d in directions]


__all__ = ["Coordinate", "Direction", "ALL_DIRECTIONS", "CARDINAL"]
