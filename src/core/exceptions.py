"""
Exceptions raised across layers.

Everything derives from `GameError`, so the service (and whatever sits on top of it) can catch a single type.
The rule violations reported by the board are grouped under `ActionError`: they are all recoverable
and leave the board exactly as it was before the rejected action.
"""


class GameError(Exception):
    """Base class of all errors raised by this package."""


# --- RULE VIOLATIONS (raised by the board / wall layout) ---
class ActionError(GameError):
    """An action was rejected by the rules. The board state is unchanged."""


class OutOfRangeError(ActionError):
    """A coordinate or wall anchor outside of its valid domain."""


class IllegalDestinationError(ActionError):
    """The requested pawn move is not in the current set of legal destinations."""


class AnchorOccupiedError(ActionError):
    """A wall already sits on the requested anchor (in either orientation)."""


class OverlapsError(ActionError):
    """The wall would overlap with a wall of the same orientation on a neighbouring anchor."""


class NoWallsRemainingError(ActionError):
    """The active player has no walls left to place."""


class WallBlocksPathError(ActionError):
    """The wall would cut off the last path of one of the players to their goal row."""


class GameFinishedError(ActionError):
    """The board reached a finished state. No more actions are accepted."""


# --- SETUP / PARSING ---
class InvalidNotationError(GameError):
    """Text could not be interpreted as pawn or wall notation."""


class InvalidPositionError(GameError):
    """A custom starting position could not be set up."""


# --- GAME / SERVICE LEVEL ---
class GameStateError(GameError):
    """The game is in a state that does not allow the request (not started, already finished, full, ...)."""


class NotYourTurnError(GameError):
    """A player attempted to act while it is the opponent's turn."""


class InvalidRequestError(GameError):
    """A request model failed validation."""


class RepositoryError(GameError):
    """Requested game could not be found / stored."""
