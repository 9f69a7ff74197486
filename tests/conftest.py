"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures required for testing multiple layers.
"""

from typing import Callable, Iterator, Optional

import pytest

from src.core.shared_types import Player
from src.db.memory_repository import InMemoryGameRepository
from src.quoridor.board import BoardState
from src.quoridor.notation import coordinate_from_notation, wall_from_notation

BoardFactory = Callable[..., BoardState]


@pytest.fixture
def make_board() -> BoardFactory:
    """
    Build a position from notation, ex. make_board("e5", "e6", ["e6h"], active=Player.BLACK)
    Walls are given as wall notation and do not count against the players' wall supply.
    """

    def _make_board(
        white: str,
        black: str,
        walls: Optional[list[str]] = None,
        active: Player = Player.WHITE,
        walls_left: Optional[dict[Player, int]] = None,
    ) -> BoardState:
        return BoardState.start_from(
            coordinate_from_notation(white),
            coordinate_from_notation(black),
            [wall_from_notation(wall) for wall in walls or []],
            active_player=active,
            walls_left=walls_left,
        )

    return _make_board


@pytest.fixture
def memory_repository() -> Iterator[InMemoryGameRepository]:
    """Fresh repository for every test"""
    repo = InMemoryGameRepository()
    yield repo
