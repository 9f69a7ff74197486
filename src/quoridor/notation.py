"""
Human readable notation for squares and walls.

* A square is a column letter + a row number: 'a1' - 'i9' get converted to (0, 0) - (8, 8)
* A wall is the square of its anchor + an orientation marker: 'e3h' is a horizontal wall on anchor (4, 2).
  Anchors only run up to the h-column and the 8th row.

Reading is case-insensitive ('E3H' == 'e3h'), writing always produces lower case.
"""

from string import ascii_lowercase, digits

from src.core.exceptions import InvalidNotationError
from src.quoridor.coordinate import (
    BOARD_SIZE,
    WALL_GRID_SIZE,
    Coordinate,
    Orientation,
    WallAnchor,
)

PAWN_NOTATION_LENGTH = 2
WALL_NOTATION_LENGTH = 3
ORIENTATION_MARKERS: dict[str, Orientation] = {
    orientation.value: orientation for orientation in Orientation
}


def is_valid_square(notation: str, size: int = BOARD_SIZE) -> bool:
    """Valid square should be a letter for the column + a (single digit) number for the row"""
    if len(notation) != PAWN_NOTATION_LENGTH:
        return False

    column_char, row_char = notation[0].lower(), notation[1]
    if column_char not in ascii_lowercase[:size]:
        return False

    if row_char not in digits:
        return False

    return 1 <= int(row_char) <= size


def is_valid_pawn_notation(notation: str) -> bool:
    return is_valid_square(notation, BOARD_SIZE)


def is_valid_wall_notation(notation: str) -> bool:
    if len(notation) != WALL_NOTATION_LENGTH:
        return False
    if notation[2].lower() not in ORIENTATION_MARKERS:
        return False
    return is_valid_square(notation[:2], WALL_GRID_SIZE)


def _axes_from_square(notation: str) -> tuple[int, int]:
    """NOTE: only call after validation"""
    x = ascii_lowercase.index(notation[0].lower())
    y = int(notation[1]) - 1
    return x, y


def _square_from_axes(x: int, y: int) -> str:
    return f"{ascii_lowercase[x]}{y + 1}"


def coordinate_from_notation(notation: str) -> Coordinate:
    if not is_valid_pawn_notation(notation):
        raise InvalidNotationError(
            f"Cannot interpret {notation!r} as a square. Expected a letter a-i followed by a number 1-9."
        )
    return Coordinate(*_axes_from_square(notation))


def coordinate_to_notation(coordinate: Coordinate) -> str:
    return _square_from_axes(coordinate.x, coordinate.y)


def wall_from_notation(notation: str) -> tuple[WallAnchor, Orientation]:
    if not is_valid_wall_notation(notation):
        raise InvalidNotationError(
            f"Cannot interpret {notation!r} as a wall. Expected a letter a-h, a number 1-8 and 'h' or 'v'."
        )
    anchor = WallAnchor(*_axes_from_square(notation))
    orientation = ORIENTATION_MARKERS[notation[2].lower()]
    return anchor, orientation


def wall_to_notation(anchor: WallAnchor, orientation: Orientation) -> str:
    return f"{_square_from_axes(anchor.x, anchor.y)}{orientation.value}"
