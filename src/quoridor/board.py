"""
The BoardState owns everything that changes during a game of Quoridor (pawns, walls, whose turn it is)
and is the only place where actions get applied. All rule checks are delegated:

* pawn moves --> src/quoridor/moves.py
* wall overlaps --> src/quoridor/walls.py
* "never seal off a player" --> src/quoridor/paths.py

Rejected actions raise an ActionError and leave the state untouched.
"""

import logging
from copy import deepcopy
from dataclasses import dataclass, field
from typing import Iterable, Optional, Self

from src.core.exceptions import (
    ActionError,
    GameFinishedError,
    IllegalDestinationError,
    InvalidPositionError,
    NoWallsRemainingError,
    WallBlocksPathError,
)
from src.core.shared_types import Player, VictoryReason, opponent
from src.quoridor.actions import Action, PawnMove, WallPlacement
from src.quoridor.coordinate import (
    BOARD_SIZE,
    Coordinate,
    Orientation,
    WallAnchor,
    all_anchors,
)
from src.quoridor.moves import legal_pawn_destinations
from src.quoridor.paths import has_path, placement_keeps_paths
from src.quoridor.walls import WallLayout

logger = logging.getLogger(__name__)

WALLS_PER_PLAYER = 10

# Pawns start in the middle of their own back row and race to the opposite one.
START_SQUARES: dict[Player, Coordinate] = {
    Player.WHITE: Coordinate(BOARD_SIZE // 2, 0),
    Player.BLACK: Coordinate(BOARD_SIZE // 2, BOARD_SIZE - 1),
}
GOAL_ROWS: dict[Player, int] = {
    Player.WHITE: BOARD_SIZE - 1,
    Player.BLACK: 0,
}


def goal_row(player: Player) -> int:
    """Single source of truth for the goal rows (win check, path search and rendering all ask here)"""
    return GOAL_ROWS[player]


@dataclass(frozen=True)
class GameStatus:
    """Either in progress (no winner), or finished with a winner and the reason they won."""

    winner: Optional[Player] = None
    reason: Optional[VictoryReason] = None

    @classmethod
    def in_progress(cls) -> Self:
        return cls()

    @classmethod
    def finished(cls, winner: Player, reason: VictoryReason) -> Self:
        return cls(winner, reason)

    @property
    def is_finished(self) -> bool:
        return self.winner is not None


@dataclass
class BoardState:
    active_player: Player
    pawns: dict[Player, Coordinate]
    walls_left: dict[Player, int]
    walls: WallLayout = field(default_factory=WallLayout)
    status: GameStatus = field(default_factory=GameStatus.in_progress)

    # --- CONSTRUCTION ---
    @classmethod
    def new(cls) -> Self:
        """Canonical starting position: pawns on e1 / e9, 10 walls each, white to move."""
        return cls(
            active_player=Player.WHITE,
            pawns=dict(START_SQUARES),
            walls_left={player: WALLS_PER_PLAYER for player in Player},
        )

    @classmethod
    def start_from(
        cls,
        white_pawn: Coordinate,
        black_pawn: Coordinate,
        walls: Iterable[tuple[WallAnchor, Orientation]],
        active_player: Optional[Player] = None,
        walls_left: Optional[dict[Player, int]] = None,
    ) -> Self:
        """
        Set up an arbitrary position (puzzles, tests).
        ----

        Every wall gets checked with the same placement rule used during a game.
        The first invalid wall raises an InvalidPositionError that names the wall and carries the original error as its cause.

        NOTE: the walls placed here do not count against the players' wall supply. Pass `walls_left` explicitly if they should.
        """
        if white_pawn == black_pawn:
            raise InvalidPositionError(
                f"Both pawns cannot stand on the same square {white_pawn.to_axes()}."
            )

        layout = WallLayout()
        for position, (anchor, orientation) in enumerate(walls):
            try:
                layout.validate_placement(anchor, orientation)
            except ActionError as error:
                raise InvalidPositionError(
                    f"Wall #{position} ({orientation.name.lower()} on {anchor.to_axes()}) cannot be placed: {error}"
                ) from error
            layout.insert(anchor, orientation)

        remaining = (
            dict(walls_left)
            if walls_left is not None
            else {player: WALLS_PER_PLAYER for player in Player}
        )
        if any(count < 0 for count in remaining.values()):
            raise InvalidPositionError(f"Wall counts cannot be negative: {remaining}")

        return cls(
            active_player=active_player or Player.WHITE,
            pawns={Player.WHITE: white_pawn, Player.BLACK: black_pawn},
            walls_left=remaining,
            walls=layout,
        )

    def clone(self) -> Self:
        """Independent copy: try an action on it and throw it away afterwards."""
        return deepcopy(self)

    # --- QUERIES ---
    def pawn(self, player: Player) -> Coordinate:
        return self.pawns[player]

    def goal_row(self, player: Player) -> int:
        return goal_row(player)

    @property
    def active_pawn(self) -> Coordinate:
        return self.pawns[self.active_player]

    @property
    def opponent_pawn(self) -> Coordinate:
        return self.pawns[opponent(self.active_player)]

    def walls_remaining(self, player: Player) -> int:
        return self.walls_left[player]

    def placed_walls(self) -> dict[WallAnchor, Orientation]:
        return dict(self.walls.walls)

    @property
    def is_finished(self) -> bool:
        return self.status.is_finished

    def legal_pawn_destinations(self) -> set[Coordinate]:
        if self.is_finished:
            return set()
        return legal_pawn_destinations(self)

    def legal_wall_placements(self) -> list[WallPlacement]:
        """
        Every wall the active player could place right now (none once the game is won).

        Up to 128 candidates (64 anchors x 2 orientations), each costing two path searches at most.
        """
        if self.is_finished or self.walls_left[self.active_player] == 0:
            return []
        return [
            WallPlacement(anchor, orientation)
            for anchor in all_anchors()
            for orientation in Orientation
            if self.walls.can_place(anchor, orientation)
            and placement_keeps_paths(self, anchor, orientation)
        ]

    def has_path(self, player: Player) -> bool:
        return has_path(self, player)

    # --- MUTATION ---
    def apply_action(self, action: Action) -> GameStatus:
        """
        Only way to change the board.
        ----

        1. Finished boards accept no more actions
        2. Validate the pawn move / wall placement (raises ActionError, nothing changed yet)
        3. Commit
        4. Swap the active player. This also happens after a winning move, so every successful action hands over the turn.
        """
        if self.is_finished:
            raise GameFinishedError(
                f"Game already won by {self.status.winner}. No more actions allowed."
            )

        if isinstance(action, PawnMove):
            status = self._move_pawn(action.destination)
        else:
            status = self._place_wall(action.anchor, action.orientation)

        self.status = status
        self._swap_active_player()
        return status

    # -- PRIVATE HELPERS ---
    def _move_pawn(self, destination: Coordinate) -> GameStatus:
        if destination not in self.legal_pawn_destinations():
            raise IllegalDestinationError(
                f"{self.active_player} cannot move from {self.active_pawn.to_axes()} to {destination.to_axes()}."
            )

        player = self.active_player
        self.pawns[player] = destination
        logger.debug("%s pawn moved to %s", player, destination.to_axes())

        if destination.y == goal_row(player):
            logger.debug("%s reached its goal row", player)
            return GameStatus.finished(player, VictoryReason.REACHED_GOAL_ROW)
        return GameStatus.in_progress()

    def _place_wall(self, anchor: WallAnchor, orientation: Orientation) -> GameStatus:
        player = self.active_player
        if self.walls_left[player] == 0:
            raise NoWallsRemainingError(f"{player} has no walls left to place.")

        # raises AnchorOccupiedError / OverlapsError
        self.walls.validate_placement(anchor, orientation)

        if not placement_keeps_paths(self, anchor, orientation):
            raise WallBlocksPathError(
                f"A {orientation.name.lower()} wall on {anchor.to_axes()} would cut off a player from their goal row."
            )

        self.walls.insert(anchor, orientation)
        self.walls_left[player] -= 1
        logger.debug(
            "%s placed a %s wall on %s (%d left)",
            player,
            orientation.name.lower(),
            anchor.to_axes(),
            self.walls_left[player],
        )
        return GameStatus.in_progress()

    def _swap_active_player(self) -> None:
        self.active_player = opponent(self.active_player)
