"""Implementation of (Game)Repository that keeps the games in a dictionary for the lifetime of the process"""

import logging
import threading
from copy import deepcopy
from uuid import UUID, uuid4

from src.core.models import GameModel

logger = logging.getLogger(__name__)


class InMemoryGameRepository:
    """
    Games stored in a dictionary keyed by game ID.

    Copies go in and out, so a caller can never change a stored game without calling `update_game()`.
    The lock only protects the dictionary itself. Serializing whole read-modify-write cycles per game is the service's job.
    """

    def __init__(self) -> None:
        self._games: dict[UUID, GameModel] = {}
        self._lock = threading.Lock()

    def get_game(self, game_id: UUID) -> GameModel | None:
        """Get game by ID, if record exists."""
        with self._lock:
            game = self._games.get(game_id)
            return deepcopy(game) if game is not None else None

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Store new game and return the stored data + newly created game ID."""
        new_id = uuid4()
        with self._lock:
            self._games[new_id] = deepcopy(game)
        logger.debug("Stored new game %s", new_id)
        return deepcopy(game), new_id

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        """Add new info to existing record."""
        with self._lock:
            if game_id not in self._games:
                return None
            self._games[game_id] = deepcopy(game)
        return deepcopy(game)

    def delete_game(self, game_id: UUID) -> GameModel | None:
        """Remove a game's record."""
        with self._lock:
            game = self._games.pop(game_id, None)
        if game is not None:
            logger.debug("Deleted game %s", game_id)
        return game

    def __len__(self) -> int:
        with self._lock:
            return len(self._games)
