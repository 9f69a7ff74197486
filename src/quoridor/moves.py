"""
Pawn movement rules

Key idea: every one of the four directions falls in exactly one case of a small decision table.
Each case has its own rule (strategy pattern) that produces the destinations for that direction.

| primary step open? | opponent on it? | straight jump open? | case          |
|--------------------|-----------------|---------------------|---------------|
| no (wall or edge)  | -               | -                   | BLOCKED       |
| yes                | no              | -                   | STEP          |
| yes                | yes             | yes                 | STRAIGHT_JUMP |
| yes                | yes             | no (wall or edge)   | DIAGONAL_JUMP |

Legality of the submitted move is checked later by BoardState.
"""

from enum import Enum, auto
from typing import Callable, Optional, Protocol

from src.quoridor.coordinate import Coordinate, Direction, perpendicular_directions


class Walls(Protocol):
    """Just the part of the wall layout the movement rules need"""

    def severs_edge(self, origin: Coordinate, direction: Direction) -> bool: ...


class Board(Protocol):
    """Just the parts of the board state the movement rules need"""

    @property
    def active_pawn(self) -> Coordinate: ...
    @property
    def opponent_pawn(self) -> Coordinate: ...
    @property
    def walls(self) -> Walls: ...


class JumpCase(Enum):
    BLOCKED = auto()
    STEP = auto()
    STRAIGHT_JUMP = auto()
    DIAGONAL_JUMP = auto()


def open_step(
    origin: Coordinate, direction: Direction, walls: Walls
) -> Optional[Coordinate]:
    """Square reached by a single step, or None if a wall or the board edge is in the way."""
    if walls.severs_edge(origin, direction):
        return None
    return origin.step(direction)


def classify_direction(
    origin: Coordinate, direction: Direction, opponent: Coordinate, walls: Walls
) -> JumpCase:
    """Look up the row of the decision table that applies to this direction"""
    first_step = open_step(origin, direction, walls)
    if first_step is None:
        return JumpCase.BLOCKED
    if first_step != opponent:
        return JumpCase.STEP
    if open_step(opponent, direction, walls) is not None:
        return JumpCase.STRAIGHT_JUMP
    return JumpCase.DIAGONAL_JUMP


# --- RULES PER CASE ---
def blocked_destinations(
    origin: Coordinate, direction: Direction, opponent: Coordinate, walls: Walls
) -> set[Coordinate]:
    return set()


def step_destinations(
    origin: Coordinate, direction: Direction, opponent: Coordinate, walls: Walls
) -> set[Coordinate]:
    """Plain move to the neighbouring square"""
    destination = origin.step(direction)
    # for the typechecker: classification already made sure the step stays on the board
    assert destination is not None
    return {destination}


def straight_jump_destinations(
    origin: Coordinate, direction: Direction, opponent: Coordinate, walls: Walls
) -> set[Coordinate]:
    """Hop over the opponent, landing directly behind it. Diagonals are not offered in this case."""
    landing = open_step(opponent, direction, walls)
    assert landing is not None
    return {landing}


def diagonal_jump_destinations(
    origin: Coordinate, direction: Direction, opponent: Coordinate, walls: Walls
) -> set[Coordinate]:
    """
    The square behind the opponent is blocked (wall or board edge) --> move next to the opponent instead.

    Checked from the opponent's square: a wall on the side of the opponent blocks that diagonal.
    """
    destinations: set[Coordinate] = set()
    for side in perpendicular_directions(direction):
        landing = open_step(opponent, side, walls)
        if landing is not None:
            destinations.add(landing)
    return destinations


# -- STRATEGY PATTERN: JUMP RULES ---
DestinationsFn = Callable[[Coordinate, Direction, Coordinate, Walls], set[Coordinate]]
JUMP_RULES: dict[JumpCase, DestinationsFn] = {
    JumpCase.BLOCKED: blocked_destinations,
    JumpCase.STEP: step_destinations,
    JumpCase.STRAIGHT_JUMP: straight_jump_destinations,
    JumpCase.DIAGONAL_JUMP: diagonal_jump_destinations,
}


def destinations_in_direction(
    origin: Coordinate, direction: Direction, opponent: Coordinate, walls: Walls
) -> set[Coordinate]:
    case = classify_direction(origin, direction, opponent, walls)
    rule = JUMP_RULES[case]
    return rule(origin, direction, opponent, walls)


def legal_pawn_destinations(board: Board) -> set[Coordinate]:
    """
    All squares the active pawn may move to.
    ----

    Computed from scratch on every call. Each direction is evaluated on its own and the results are accumulated.
    Between 0 and 5 destinations: only a single direction can run into the opponent.
    """
    origin = board.active_pawn
    opponent = board.opponent_pawn
    destinations: set[Coordinate] = set()
    for direction in Direction:
        destinations |= destinations_in_direction(
            origin, direction, opponent, board.walls
        )
    return destinations
