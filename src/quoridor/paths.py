"""
Reachability of the goal rows.

A wall may never take away the last path of a player to their goal row. Only the walls matter for this check:
the pawns are ignored, as a path only has to exist, not be walkable right now.
"""

from collections import deque
from typing import Protocol

from src.core.shared_types import Player
from src.quoridor.coordinate import Coordinate, Direction, Orientation, WallAnchor
from src.quoridor.walls import WallLayout


class Board(Protocol):
    """Just the parts of the board state the path search needs"""

    @property
    def walls(self) -> WallLayout: ...
    def pawn(self, player: Player) -> Coordinate: ...
    def goal_row(self, player: Player) -> int: ...


def path_exists(walls: WallLayout, start: Coordinate, goal_row: int) -> bool:
    """
    Breadth-first search over the 9x9 grid. Two neighbouring squares are connected unless a wall severs the edge in between.
    Visits every square at most once, so at most 81 iterations.
    """
    visited: set[Coordinate] = {start}
    queue: deque[Coordinate] = deque([start])
    while queue:
        square = queue.popleft()
        if square.y == goal_row:
            return True
        for direction in Direction:
            if walls.severs_edge(square, direction):
                continue
            neighbour = square.step(direction)
            if neighbour is None or neighbour in visited:
                continue
            visited.add(neighbour)
            queue.append(neighbour)
    return False


def has_path(board: Board, player: Player) -> bool:
    return path_exists(board.walls, board.pawn(player), board.goal_row(player))


def placement_keeps_paths(
    board: Board, anchor: WallAnchor, orientation: Orientation
) -> bool:
    """
    Try the wall on a scratch copy of the layout: both players must still be able to reach their goal row.

    NOTE the board's own wall layout is never touched here.
    """
    scratch = board.walls.copy()
    scratch.insert(anchor, orientation)
    return all(
        path_exists(scratch, board.pawn(player), board.goal_row(player))
        for player in Player
    )
