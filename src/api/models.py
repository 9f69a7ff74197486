"""Requests and Response models"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.core.exceptions import GameStateError, InvalidRequestError
from src.core.shared_types import Player
from src.quoridor.game import TimeControl
from src.quoridor.notation import is_valid_pawn_notation, is_valid_wall_notation

PlayerColor = str
PlayerName = str


# --- REQUEST MODELS ---
class CreateGameRequest(BaseModel):
    player_name: str
    color: Player
    time_control: Optional[str] = None

    @field_validator("player_name")
    @classmethod
    def validate_player_name(cls, value: str) -> str:
        if not value.strip():
            raise InvalidRequestError("Player name cannot be empty.")
        return value

    @field_validator("time_control")
    @classmethod
    def validate_time_control(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        try:
            TimeControl.from_notation(value)
        except GameStateError as error:
            raise InvalidRequestError(
                f"Cannot interpret time_control: {value!r}."
            ) from error
        return value


class JoinGameRequest(BaseModel):
    game_id: UUID
    player_name: str


class LegalActionsRequest(BaseModel):
    game_id: UUID
    player_name: str
    include_walls: bool = False


class ActionRequest(BaseModel):
    """An action is a pawn move ('e2') or a wall placement ('e3h')."""

    game_id: UUID
    player_name: str
    action: str

    @field_validator("action")
    @classmethod
    def validate_action(cls, value: str) -> str:
        value = value.strip()
        if not (is_valid_pawn_notation(value) or is_valid_wall_notation(value)):
            raise InvalidRequestError(
                f"Cannot interpret action: {value!r} as a pawn move (ex. 'e2') or a wall (ex. 'e3h')."
            )
        return value


class ResignRequest(BaseModel):
    game_id: UUID
    player_name: str


class AbandonGameRequest(BaseModel):
    game_id: UUID
    player_name: str


class GetGameRequest(BaseModel):
    game_id: UUID


class DeleteGameRequest(BaseModel):
    game_id: UUID


# --- RESPONSE MODELS ---
class GameResponse(BaseModel):
    game_id: UUID
    players: dict[PlayerColor, PlayerName]
    status: str
    active_player: PlayerColor
    pawns: dict[PlayerColor, str]
    walls_remaining: dict[PlayerColor, int]
    walls: list[str]
    action_history: list[str]
    time_control: str
    time_remaining: dict[PlayerColor, Optional[float]]
    winner: Optional[PlayerName] = None
    victory_reason: Optional[str] = None


class LegalActionsResponse(BaseModel):
    game_id: UUID
    player_name: str
    color: Player
    pawn_moves: list[str]
    wall_placements: list[str]
