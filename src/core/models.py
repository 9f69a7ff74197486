"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and the domain/repository layers (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the repository, API layer, or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass, field
from typing import Optional

# Type aliases to make GameModel easier to read
PlayerColor = str
PlayerName = str


@dataclass
class GameModel:
    """Transport-safe representation of a Quoridor game used between API, Service, repository, and Game layers.

    The board itself is not stored: it is rebuilt by replaying `actions` (in notation) from the starting position.
    """

    actions: list[str]
    registered_players: dict[PlayerColor, PlayerName]
    status: str
    time_control: str = "correspondence"
    time_used: dict[PlayerColor, float] = field(default_factory=dict)
    turn_started_at: Optional[str] = None
    winner: Optional[PlayerColor] = None
    victory_reason: Optional[str] = None
