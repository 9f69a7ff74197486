"""
The two kinds of actions a player can take during their turn: move the pawn, or place a wall.

Actions are plain request values. They do not know about the board. Legality is checked by BoardState.
"""

from dataclasses import dataclass
from typing import Self

from src.core.exceptions import InvalidNotationError
from src.quoridor.coordinate import Coordinate, Orientation, WallAnchor
from src.quoridor.notation import (
    PAWN_NOTATION_LENGTH,
    WALL_NOTATION_LENGTH,
    coordinate_from_notation,
    coordinate_to_notation,
    wall_from_notation,
    wall_to_notation,
)


@dataclass(frozen=True)
class PawnMove:
    destination: Coordinate

    @classmethod
    def from_notation(cls, notation: str) -> Self:
        """ex) 'e2': move the pawn to the e-column, 2nd row"""
        return cls(coordinate_from_notation(notation))

    def to_notation(self) -> str:
        return coordinate_to_notation(self.destination)


@dataclass(frozen=True)
class WallPlacement:
    anchor: WallAnchor
    orientation: Orientation

    @classmethod
    def from_notation(cls, notation: str) -> Self:
        """ex) 'e3v': vertical wall with its centre on the north-east corner of e3"""
        anchor, orientation = wall_from_notation(notation)
        return cls(anchor, orientation)

    def to_notation(self) -> str:
        return wall_to_notation(self.anchor, self.orientation)


Action = PawnMove | WallPlacement


def parse_action(notation: str) -> Action:
    """Length decides the kind of action: 2 characters for a pawn move, 3 for a wall"""
    notation = notation.strip()
    if len(notation) == PAWN_NOTATION_LENGTH:
        return PawnMove.from_notation(notation)
    if len(notation) == WALL_NOTATION_LENGTH:
        return WallPlacement.from_notation(notation)
    raise InvalidNotationError(
        f"An action should have {PAWN_NOTATION_LENGTH} or {WALL_NOTATION_LENGTH} characters, got {notation!r}"
    )


def format_action(action: Action) -> str:
    return action.to_notation()
