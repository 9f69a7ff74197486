"""
Squares and wall anchors on the board

(placed in its own module as every other module needs to import it)

Orientation convention used everywhere in this package:
* x runs from the a-column (0) to the i-column (8), y from the 1st row (0) to the 9th row (8).
* NORTH increases y, SOUTH decreases y, EAST increases x, WEST decreases x.
* White starts on row 0 and moves NORTH, black starts on row 8 and moves SOUTH.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from src.core.exceptions import OutOfRangeError

# Quoridor is played on 9x9 squares. Walls sit in between, so there are 8x8 positions for the centre of a wall.
BOARD_SIZE = 9
WALL_GRID_SIZE = BOARD_SIZE - 1


class Direction(Enum):
    """The value is the (dx, dy) step on the board."""

    NORTH = (0, 1)
    EAST = (1, 0)
    SOUTH = (0, -1)
    WEST = (-1, 0)

    @property
    def opposite(self) -> Direction:
        dx, dy = self.value
        return Direction((-dx, -dy))


class Orientation(Enum):
    """Value is the marker used in wall notation"""

    HORIZONTAL = "h"
    VERTICAL = "v"


def perpendicular_directions(direction: Direction) -> tuple[Direction, Direction]:
    """The two directions orthogonal to the given one. Needed for diagonal jumps."""
    if direction in (Direction.NORTH, Direction.SOUTH):
        return (Direction.EAST, Direction.WEST)
    return (Direction.NORTH, Direction.SOUTH)


def _in_range(value: int, size: int) -> bool:
    return 0 <= value < size


@dataclass(frozen=True)
class Coordinate:
    """One of the 81 squares a pawn can stand on."""

    x: int
    y: int

    def __post_init__(self) -> None:
        if not (_in_range(self.x, BOARD_SIZE) and _in_range(self.y, BOARD_SIZE)):
            raise OutOfRangeError(
                f"Square ({self.x}, {self.y}) is off the board. Both axes must be in 0..{BOARD_SIZE - 1}."
            )

    @classmethod
    def from_index(cls, index: int) -> Coordinate:
        """Squares are numbered row by row, starting at a1 = 0 and ending at i9 = 80"""
        if not _in_range(index, BOARD_SIZE * BOARD_SIZE):
            raise OutOfRangeError(
                f"Square index {index} is off the board. Must be in 0..{BOARD_SIZE * BOARD_SIZE - 1}."
            )
        return cls(index % BOARD_SIZE, index // BOARD_SIZE)

    def to_index(self) -> int:
        return self.y * BOARD_SIZE + self.x

    @classmethod
    def from_axes(cls, x: int, y: int) -> Coordinate:
        return cls(x, y)

    def to_axes(self) -> tuple[int, int]:
        return (self.x, self.y)

    def step(self, direction: Direction) -> Optional[Coordinate]:
        """The neighbouring square in the given direction, or None when that would leave the board."""
        dx, dy = direction.value
        new_x = self.x + dx
        new_y = self.y + dy
        if not (_in_range(new_x, BOARD_SIZE) and _in_range(new_y, BOARD_SIZE)):
            return None
        return Coordinate(new_x, new_y)


@dataclass(frozen=True)
class WallAnchor:
    """
    One of the 64 positions for the centre of a wall.

    The anchor is named after the square that has the centre of the wall on its north-east (top right) corner.
    So a horizontal wall on anchor (0, 0) lies between rows 0 and 1, covering columns 0 and 1.
    """

    x: int
    y: int

    def __post_init__(self) -> None:
        if not (_in_range(self.x, WALL_GRID_SIZE) and _in_range(self.y, WALL_GRID_SIZE)):
            raise OutOfRangeError(
                f"Wall anchor ({self.x}, {self.y}) is off the board. Both axes must be in 0..{WALL_GRID_SIZE - 1}."
            )

    @classmethod
    def from_index(cls, index: int) -> WallAnchor:
        """Uses the numbering of the squares (so 0..70), the squares on the i-column can never be an anchor."""
        if not _in_range(index, BOARD_SIZE * WALL_GRID_SIZE):
            raise OutOfRangeError(f"Wall anchor index {index} is off the board.")
        return cls(index % BOARD_SIZE, index // BOARD_SIZE)

    def to_index(self) -> int:
        return self.y * BOARD_SIZE + self.x

    def to_axes(self) -> tuple[int, int]:
        return (self.x, self.y)

    @classmethod
    def maybe(cls, x: int, y: int) -> Optional[WallAnchor]:
        """Convenience constructor for neighbour lookups: None instead of an error when off the board."""
        if _in_range(x, WALL_GRID_SIZE) and _in_range(y, WALL_GRID_SIZE):
            return cls(x, y)
        return None


def all_squares() -> list[Coordinate]:
    return [Coordinate.from_index(index) for index in range(BOARD_SIZE * BOARD_SIZE)]


def all_anchors() -> list[WallAnchor]:
    return [
        WallAnchor(x, y) for y in range(WALL_GRID_SIZE) for x in range(WALL_GRID_SIZE)
    ]
