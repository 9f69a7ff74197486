"""Orchestration of communication from API router to business logic and storage layers (and the reverse direction)."""

import logging
import threading
from collections import defaultdict
from contextlib import contextmanager
from typing import Iterator, Optional
from uuid import UUID

from src.api.models import (
    AbandonGameRequest,
    ActionRequest,
    CreateGameRequest,
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    JoinGameRequest,
    LegalActionsRequest,
    LegalActionsResponse,
    ResignRequest,
)
from src.core.config import Settings, load_settings
from src.core.exceptions import GameError, RepositoryError
from src.core.models import GameModel
from src.core.shared_types import Player, Status
from src.db.repository import GameRepository
from src.quoridor.game import Game, TimeControl
from src.quoridor.notation import coordinate_to_notation, wall_to_notation
from src.quoridor.render import render_board

logger = logging.getLogger(__name__)


class QuoridorService:
    """
    Orchestration of layers for Quoridor games.

    Every request that changes a game runs load -> change -> store while holding that game's lock,
    so concurrent requests for the same game are handled one after the other. Different games do not block each other.
    """

    def __init__(
        self, repository: GameRepository, settings: Optional[Settings] = None
    ) -> None:
        self.repo = repository
        self.settings = settings or load_settings()
        self._game_locks: defaultdict[UUID, threading.Lock] = defaultdict(
            threading.Lock
        )
        self._registry_lock = threading.Lock()

    # -- API routes logic ---
    def create_new_game(self, request: CreateGameRequest) -> GameResponse:
        """First player requested to create a new game."""
        time_control = TimeControl.from_notation(
            request.time_control or self.settings.default_time_control
        )
        new_game = Game.new_game(
            player=request.player_name,
            color=request.color.value,
            time_control=time_control,
        )
        stored_game, game_id = self.repo.create_game(new_game.to_model())
        logger.info("Created game %s", game_id)
        return self._create_game_response(game_id, Game.from_model(stored_game))

    def join_game(self, request: JoinGameRequest) -> GameResponse:
        """Second player requested to join a game."""
        with self._locked(request.game_id):
            game = Game.from_model(self._fetch_game(request.game_id))
            game.register_player(request.player_name)
            self._store(request.game_id, game)
        return self._create_game_response(request.game_id, game)

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        """
        Retrieve current game state.
        ----
        Used in "polling" loop by frontend to check when it is the player's turn for instance.
        Also the moment a player that ran out of time gets flagged if nobody acted since.
        """
        with self._locked(request.game_id):
            game = Game.from_model(self._fetch_game(request.game_id))
            if game.check_time():
                self._store(request.game_id, game)
        return self._create_game_response(request.game_id, game)

    def legal_actions(self, request: LegalActionsRequest) -> LegalActionsResponse:
        """retrieve set of legal pawn moves (and walls, if requested)."""
        game = Game.from_model(self._fetch_game(request.game_id))
        pawn_moves = game.legal_pawn_moves(request.player_name)
        wall_placements = (
            game.legal_wall_placements(request.player_name)
            if request.include_walls
            else []
        )
        return LegalActionsResponse(
            game_id=request.game_id,
            player_name=request.player_name,
            color=next(
                color
                for color, name in game.players.items()
                if name == request.player_name
            ),
            pawn_moves=pawn_moves,
            wall_placements=wall_placements,
        )

    def make_action(self, request: ActionRequest) -> GameResponse:
        """Play a pawn move or place a wall."""
        with self._locked(request.game_id):
            game = Game.from_model(self._fetch_game(request.game_id))
            try:
                game.make_action(request.action, request.player_name)
            except GameError as error:
                logger.info(
                    "Game %s: action %s by %s rejected: %s",
                    request.game_id,
                    request.action,
                    request.player_name,
                    error,
                )
                raise
            # store even when the player got flagged instead of playing the action
            self._store(request.game_id, game)
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug(
                    "Game %s after %s:\n%s",
                    request.game_id,
                    request.action,
                    render_board(game.board),
                )
        return self._create_game_response(request.game_id, game)

    def resign(self, request: ResignRequest) -> GameResponse:
        with self._locked(request.game_id):
            game = Game.from_model(self._fetch_game(request.game_id))
            game.resign(request.player_name)
            self._store(request.game_id, game)
        return self._create_game_response(request.game_id, game)

    def abandon_game(self, request: AbandonGameRequest) -> GameResponse:
        """Reported by the client when a player left for good."""
        with self._locked(request.game_id):
            game = Game.from_model(self._fetch_game(request.game_id))
            game.abandon(request.player_name)
            self._store(request.game_id, game)
        return self._create_game_response(request.game_id, game)

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a Game record."""
        with self._locked(request.game_id):
            self.repo.delete_game(request.game_id)

    # -- Internal helpers --
    @contextmanager
    def _locked(self, game_id: UUID) -> Iterator[None]:
        """One owner per game at a time"""
        with self._registry_lock:
            lock = self._game_locks[game_id]
        try:
            with lock:
                yield
        finally:
            self._release_lock(game_id)

    def _release_lock(self, game_id: UUID) -> None:
        """Unknown, deleted and finished games never change again: their lock can go."""
        game_model = self.repo.get_game(game_id)
        if game_model is None or game_model.status == Status.FINISHED.value:
            with self._registry_lock:
                self._game_locks.pop(game_id, None)

    def _store(self, game_id: UUID, game: Game) -> None:
        if self.repo.update_game(game_id, game.to_model()) is None:
            raise RepositoryError(f"Game with {game_id=} could not be updated.")

    def _create_game_response(self, game_id: UUID, game: Game) -> GameResponse:
        """Convert info in Game to a GameResponse (for game with given ID.)"""
        board = game.board
        return GameResponse(
            game_id=game_id,
            players={color.value: name for color, name in game.players.items()},
            status=game.status.value,
            active_player=board.active_player.value,
            pawns={
                color.value: coordinate_to_notation(board.pawn(color))
                for color in Player
            },
            walls_remaining={
                color.value: board.walls_remaining(color) for color in Player
            },
            walls=[
                wall_to_notation(anchor, orientation)
                for anchor, orientation in board.walls
            ],
            action_history=list(game.actions),
            time_control=game.time_control.to_notation(),
            time_remaining={
                color.value: game.time_remaining(color) for color in Player
            },
            winner=game.winner_name,
            victory_reason=game.victory_reason.value if game.victory_reason else None,
        )

    def _fetch_game(self, game_id: UUID) -> GameModel:
        """Attempt to find the game in the repository and raise error if it fails."""
        game_model = self.repo.get_game(game_id)
        if game_model is None:
            raise RepositoryError(f"Game with {game_id=} not found.")
        return game_model
