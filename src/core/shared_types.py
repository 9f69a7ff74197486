"""
Type definitions used across layers
"""

from enum import StrEnum


class Status(StrEnum):
    WAITING_FOR_PLAYERS = "waiting for players"
    IN_PROGRESS = "in progress"
    FINISHED = "finished"


# --- Historically the two sides are called white and black. White moves first and starts on the 1st row.
class Player(StrEnum):
    WHITE = "white"
    BLACK = "black"


class VictoryReason(StrEnum):
    REACHED_GOAL_ROW = "reached goal row"
    RESIGNED = "resigned"
    OUT_OF_TIME = "out of time"
    ABANDONED = "abandoned"


def opponent(player: Player) -> Player:
    return Player.BLACK if player == Player.WHITE else Player.WHITE
