"""
The Game class will be the entrypoint into the domain layer for the service layer.
It wraps a BoardState with everything around the rules: who is playing which side, the list of actions played so far,
the clocks and the result of the game. The service passes the information onwards to the API layer.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, Self

from src.core.exceptions import (
    ActionError,
    GameError,
    GameStateError,
    NotYourTurnError,
)
from src.core.models import GameModel
from src.core.shared_types import Player, Status, VictoryReason, opponent
from src.quoridor.actions import parse_action
from src.quoridor.board import BoardState
from src.quoridor.notation import coordinate_to_notation

logger = logging.getLogger(__name__)

CORRESPONDENCE = "correspondence"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class TimeControl:
    """
    Time budget per player.
    ----

    * `seconds`: starting time on the clock. None means correspondence: no clock at all.
    * `increment`: seconds added to the clock for every action played (Fischer increment)

    Notation: "300+5" (5 minutes, 5 second increment), "600" (no increment) or "correspondence".
    """

    seconds: Optional[int] = None
    increment: int = 0

    @classmethod
    def from_notation(cls, notation: str) -> Self:
        notation = notation.strip().lower()
        if notation == CORRESPONDENCE:
            return cls()

        seconds_str, plus, increment_str = notation.partition("+")
        if not seconds_str.isdigit() or (plus and not increment_str.isdigit()):
            raise GameStateError(
                f"Cannot interpret {notation!r} as a time control. Use '<seconds>+<increment>' or '{CORRESPONDENCE}'."
            )
        seconds = int(seconds_str)
        if seconds == 0:
            raise GameStateError("A timed game needs more than 0 seconds on the clock.")
        return cls(seconds, int(increment_str or 0))

    def to_notation(self) -> str:
        if self.is_correspondence:
            return CORRESPONDENCE
        return f"{self.seconds}+{self.increment}"

    @property
    def is_correspondence(self) -> bool:
        return self.seconds is None


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    board: BoardState
    actions: list[str]  # notation of every action played, in order
    players: dict[Player, str]
    status: Status
    time_control: TimeControl = field(default_factory=TimeControl)
    time_used: dict[Player, float] = field(
        default_factory=lambda: {player: 0.0 for player in Player}
    )
    turn_started_at: Optional[datetime] = None
    winner: Optional[Player] = None
    victory_reason: Optional[VictoryReason] = None

    @classmethod
    def new_game(
        cls, player: str, color: str, time_control: Optional[TimeControl] = None
    ) -> Self:
        """To start a new game with the player using the pawn of the indicated color."""
        if color.lower() not in {p.value for p in Player}:
            raise GameStateError(
                f"Cannot create new game. Color {color} not in {','.join(p.value for p in Player)}."
            )
        logger.info("New game created by %s playing %s", player, color.lower())
        return cls(
            board=BoardState.new(),
            actions=[],
            players={Player(color.lower()): player},
            status=Status.WAITING_FOR_PLAYERS,
            time_control=time_control or TimeControl(),
        )

    @classmethod
    def from_model(cls, model: GameModel) -> Self:
        """
        Define how to construct a Game from the information the Service layer actually has.

        The board is not part of the model: replay all recorded actions on a fresh board.
        """
        try:
            status = Status(model.status)
        except ValueError as error:
            raise GameStateError(
                f"Invalid status code: {model.status!r}. \nPick one from {','.join(status.value for status in Status)}"
            ) from error

        board = BoardState.new()
        for notation in model.actions:
            try:
                board.apply_action(parse_action(notation))
            except GameError as error:
                raise GameStateError(
                    f"Stored action {notation!r} cannot be replayed: {error}"
                ) from error

        players = {
            color: model.registered_players[color.value]
            for color in Player
            if color.value in model.registered_players
        }
        time_used = {
            color: float(model.time_used.get(color.value, 0.0)) for color in Player
        }
        turn_started_at = (
            datetime.fromisoformat(model.turn_started_at)
            if model.turn_started_at
            else None
        )
        return cls(
            board=board,
            actions=list(model.actions),
            players=players,
            status=status,
            time_control=TimeControl.from_notation(model.time_control),
            time_used=time_used,
            turn_started_at=turn_started_at,
            winner=Player(model.winner) if model.winner else None,
            victory_reason=VictoryReason(model.victory_reason)
            if model.victory_reason
            else None,
        )

    def to_model(self) -> GameModel:
        """Encode back into a format the Service layer uses"""
        return GameModel(
            actions=list(self.actions),
            registered_players={
                color.value: name for color, name in self.players.items()
            },
            status=self.status.value,
            time_control=self.time_control.to_notation(),
            time_used={color.value: used for color, used in self.time_used.items()},
            turn_started_at=self.turn_started_at.isoformat()
            if self.turn_started_at
            else None,
            winner=self.winner.value if self.winner else None,
            victory_reason=self.victory_reason.value if self.victory_reason else None,
        )

    @property
    def winner_name(self) -> Optional[str]:
        if self.winner is None:
            return None
        return self.players[self.winner]

    def register_player(self, player: str, now: Optional[datetime] = None) -> None:
        """Registering the 2nd player to an open game. The clock of the first player to move starts now."""
        if self.status != Status.WAITING_FOR_PLAYERS:
            raise GameStateError(
                f"Cannot join this game. Game is not accepting new players. status: {self.status}"
            )
        if player in self.players.values():
            raise GameStateError(f"Player {player} already registered for this game.")

        registered_color = next(iter(self.players))
        self.players[opponent(registered_color)] = player
        self.status = Status.IN_PROGRESS
        self.turn_started_at = now or utc_now()
        logger.info("%s joined the game, game in progress", player)

    def legal_pawn_moves(self, player: str) -> list[str]:
        """
        Squares the player's pawn can move to (in notation).
        ----

        Used by clients to highlight moves before sending one. Only available on your own turn.
        """
        self._assert_in_progress()
        self._assert_your_turn(player)
        return sorted(
            coordinate_to_notation(destination)
            for destination in self.board.legal_pawn_destinations()
        )

    def legal_wall_placements(self, player: str) -> list[str]:
        """Walls the player could place right now (in notation). Empty if the player ran out of walls."""
        self._assert_in_progress()
        self._assert_your_turn(player)
        return sorted(wall.to_notation() for wall in self.board.legal_wall_placements())

    def make_action(
        self, notation: str, player: str, now: Optional[datetime] = None
    ) -> Status:
        """
        Attempt to play an action
        -----

        1. Game must be in progress and it must be your turn
        2. Parse the notation (pawn move 'e2' or wall 'e3h')
        3. Check the clock: if you ran out of time, you lose and the action is NOT played
        4. Apply to the board (rule violations raise and change nothing)
        5. Record the action, charge the time spent, check for a winner
        """
        self._assert_in_progress()
        self._assert_your_turn(player)
        action = parse_action(notation)

        now = now or utc_now()
        if self.check_time(now):
            return self.status

        color = self._get_player_color(player)
        try:
            board_status = self.board.apply_action(action)
        except ActionError as error:
            logger.debug("Rejected %s from %s: %s", notation, player, error)
            raise

        self.actions.append(action.to_notation())
        self._charge_clock(color, now)

        if board_status.is_finished:
            # for the typechecker: a finished status always has a winner and a reason
            assert board_status.winner is not None and board_status.reason is not None
            self._finish(board_status.winner, board_status.reason)
        return self.status

    def resign(self, player: str) -> None:
        """Give up: the opponent wins."""
        self._assert_in_progress()
        color = self._get_player_color(player)
        self._finish(opponent(color), VictoryReason.RESIGNED)

    def abandon(self, player: str) -> None:
        """The player left the game without resigning (ex. lost connection for good). The opponent wins."""
        self._assert_in_progress()
        color = self._get_player_color(player)
        self._finish(opponent(color), VictoryReason.ABANDONED)

    def time_remaining(
        self, color: Player, now: Optional[datetime] = None
    ) -> Optional[float]:
        """
        Seconds left on the player's clock (None for correspondence games).
        The time of the turn in progress is included for the player to move.
        """
        if self.time_control.is_correspondence:
            return None
        # for the typechecker
        assert self.time_control.seconds is not None

        remaining = (
            self.time_control.seconds
            + self.time_control.increment * self._actions_played_by(color)
            - self.time_used[color]
        )
        if self.status == Status.IN_PROGRESS and color == self.board.active_player:
            remaining -= self._elapsed(now or utc_now())
        return remaining

    def check_time(self, now: Optional[datetime] = None) -> bool:
        """Flag the player to move if their clock ran out. Returns True if the game was ended because of it."""
        if self.status != Status.IN_PROGRESS or self.time_control.is_correspondence:
            return False

        to_move = self.board.active_player
        remaining = self.time_remaining(to_move, now)
        if remaining is not None and remaining < 0:
            self._finish(opponent(to_move), VictoryReason.OUT_OF_TIME)
            return True
        return False

    # -- PRIVATE HELPERS ---
    def _get_turn_player(self) -> str:
        return self.players[self.board.active_player]

    def _get_player_color(self, player: str) -> Player:
        for color, name in self.players.items():
            if name == player:
                return color
        raise GameStateError(f"Player {player} is not registered for this game.")

    def _assert_in_progress(self) -> None:
        if self.status != Status.IN_PROGRESS:
            raise GameStateError(f"Game is not in progress. status: {self.status}")

    def _assert_your_turn(self, player: str) -> None:
        """You must wait for your turn before calculating legal moves / making a move."""
        self._get_player_color(player)
        player_to_move = self._get_turn_player()
        if player != player_to_move:
            raise NotYourTurnError(
                f"It is not your turn. Waiting for player {player_to_move} to make a move first."
            )

    def _actions_played_by(self, color: Player) -> int:
        """White always opens, so white played the even entries of the action list."""
        white_actions = (len(self.actions) + 1) // 2
        if color == Player.WHITE:
            return white_actions
        return len(self.actions) - white_actions

    def _elapsed(self, now: datetime) -> float:
        if self.turn_started_at is None:
            return 0.0
        return max(0.0, (now - self.turn_started_at).total_seconds())

    def _charge_clock(self, color: Player, now: datetime) -> None:
        self.time_used[color] += self._elapsed(now)
        self.turn_started_at = now

    def _finish(self, winner: Player, reason: VictoryReason) -> None:
        self.status = Status.FINISHED
        self.winner = winner
        self.victory_reason = reason
        logger.info("Game finished: %s wins (%s)", self.players.get(winner, winner), reason)
