"""
Bookkeeping of the walls placed on the board.

Only the anchor -> orientation mapping is stored. Whether a pawn-movement edge is severed is derived on demand:
every edge can only be cut by (at most) two anchors, so that lookup is cheap.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

from src.core.exceptions import AnchorOccupiedError, OverlapsError
from src.quoridor.coordinate import Coordinate, Direction, Orientation, WallAnchor


@dataclass
class WallLayout:
    walls: dict[WallAnchor, Orientation] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.walls)

    def __iter__(self) -> Iterator[tuple[WallAnchor, Orientation]]:
        return iter(self.walls.items())

    def __contains__(self, anchor: WallAnchor) -> bool:
        return anchor in self.walls

    def orientation_at(self, anchor: WallAnchor) -> Orientation | None:
        return self.walls.get(anchor)

    def copy(self) -> WallLayout:
        """Scratch copy to try out a wall without touching this layout."""
        return WallLayout(dict(self.walls))

    # --- MOVEMENT QUERIES ---
    def severs_edge(self, origin: Coordinate, direction: Direction) -> bool:
        """
        Is stepping from `origin` in `direction` blocked by a wall?
        ----

        A horizontal wall on anchor (ax, ay) cuts the edges between rows ay and ay+1, for columns ax and ax+1.
        A vertical wall on anchor (ax, ay) cuts the edges between columns ax and ax+1, for rows ay and ay+1.

        Turning that around: the north/south edge of a square is cut by a horizontal wall on one of two anchors
        (the one directly below the edge on the same column, or the one to its west). Same for vertical walls.

        NOTE: Edges that lead off the board are never reported as severed. Checking the board edge is `Coordinate.step()`'s job.
        """
        x, y = origin.x, origin.y
        if direction == Direction.NORTH:
            candidates = [(x, y), (x - 1, y)]
            orientation = Orientation.HORIZONTAL
        elif direction == Direction.SOUTH:
            candidates = [(x, y - 1), (x - 1, y - 1)]
            orientation = Orientation.HORIZONTAL
        elif direction == Direction.EAST:
            candidates = [(x, y), (x, y - 1)]
            orientation = Orientation.VERTICAL
        else:
            candidates = [(x - 1, y), (x - 1, y - 1)]
            orientation = Orientation.VERTICAL

        for ax, ay in candidates:
            anchor = WallAnchor.maybe(ax, ay)
            if anchor is not None and self.walls.get(anchor) == orientation:
                return True
        return False

    # --- PLACEMENT RULES ---
    def validate_placement(self, anchor: WallAnchor, orientation: Orientation) -> None:
        """
        Raise if the wall cannot go on this anchor.
        ----

        1. One wall per anchor. A wall of the other orientation on the same anchor would cross it --> AnchorOccupiedError
        2. A wall of the same orientation on the neighbouring anchor along the wall's own axis would share an edge with it --> OverlapsError

        Walls of different orientation on different anchors are fine (they might touch, but never cut the same edge).
        """
        if anchor in self.walls:
            raise AnchorOccupiedError(
                f"Anchor {anchor.to_axes()} already holds a {self.walls[anchor].name.lower()} wall."
            )

        for neighbour in _overlapping_anchors(anchor, orientation):
            if self.walls.get(neighbour) == orientation:
                raise OverlapsError(
                    f"A {orientation.name.lower()} wall on {anchor.to_axes()} overlaps with the wall on {neighbour.to_axes()}."
                )

    def can_place(self, anchor: WallAnchor, orientation: Orientation) -> bool:
        """Boolean version of `validate_placement()`"""
        try:
            self.validate_placement(anchor, orientation)
        except (AnchorOccupiedError, OverlapsError):
            return False
        return True

    def insert(self, anchor: WallAnchor, orientation: Orientation) -> None:
        """Only mutator of the layout. Callers validate first."""
        self.walls[anchor] = orientation


def _overlapping_anchors(
    anchor: WallAnchor, orientation: Orientation
) -> list[WallAnchor]:
    """A horizontal wall spans 2 columns, so the anchors left and right of it share an edge. Vertical: above and below."""
    x, y = anchor.x, anchor.y
    if orientation == Orientation.HORIZONTAL:
        neighbours = [WallAnchor.maybe(x - 1, y), WallAnchor.maybe(x + 1, y)]
    else:
        neighbours = [WallAnchor.maybe(x, y - 1), WallAnchor.maybe(x, y + 1)]
    return [neighbour for neighbour in neighbours if neighbour is not None]
