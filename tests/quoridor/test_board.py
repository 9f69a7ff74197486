"""Unit tests for /src/quoridor/board.py"""

from copy import deepcopy

import pytest

from src.core.exceptions import (
    AnchorOccupiedError,
    GameFinishedError,
    IllegalDestinationError,
    InvalidPositionError,
    NoWallsRemainingError,
    OverlapsError,
    WallBlocksPathError,
)
from src.core.shared_types import Player, VictoryReason
from src.quoridor.actions import PawnMove, WallPlacement, parse_action
from src.quoridor.board import (
    GOAL_ROWS,
    WALLS_PER_PLAYER,
    BoardState,
    GameStatus,
    goal_row,
)
from src.quoridor.coordinate import Coordinate, Orientation, WallAnchor
from src.quoridor.notation import coordinate_from_notation


def snapshot(board: BoardState) -> tuple:
    """Everything a rejected action must leave untouched"""
    return (
        board.active_player,
        dict(board.pawns),
        dict(board.walls_left),
        board.placed_walls(),
        board.status,
    )


# -- CREATION LOGIC --
def test_new_board() -> None:
    board = BoardState.new()
    assert board.active_player == Player.WHITE
    assert board.pawn(Player.WHITE) == coordinate_from_notation("e1")
    assert board.pawn(Player.BLACK) == coordinate_from_notation("e9")
    assert board.walls_remaining(Player.WHITE) == WALLS_PER_PLAYER
    assert board.walls_remaining(Player.BLACK) == WALLS_PER_PLAYER
    assert board.placed_walls() == {}
    assert not board.is_finished


def test_goal_rows_are_opposite_of_start() -> None:
    board = BoardState.new()
    for player in Player:
        assert board.goal_row(player) == goal_row(player) == GOAL_ROWS[player]
        assert board.pawn(player).y != goal_row(player)


def test_start_from(make_board) -> None:
    board = make_board("c3", "g7", ["e5h", "a1v"], active=Player.BLACK)
    assert board.active_player == Player.BLACK
    assert board.pawn(Player.WHITE) == Coordinate(2, 2)
    assert board.pawn(Player.BLACK) == Coordinate(6, 6)
    assert board.placed_walls() == {
        WallAnchor(4, 4): Orientation.HORIZONTAL,
        WallAnchor(0, 0): Orientation.VERTICAL,
    }


@pytest.mark.parametrize(
    "walls, cause",
    [
        (["e5h", "e5v"], AnchorOccupiedError),
        (["e5h", "e5h"], AnchorOccupiedError),
        (["e5h", "f5h"], OverlapsError),
        (["e5v", "e6v"], OverlapsError),
    ],
)
def test_start_from_invalid_wall(make_board, walls: list[str], cause: type) -> None:
    """First invalid wall is reported, with the original rule violation as the cause"""
    with pytest.raises(InvalidPositionError) as exc_info:
        make_board("e1", "e9", walls)
    assert isinstance(exc_info.value.__cause__, cause)
    assert "#1" in str(exc_info.value)


def test_start_from_same_square(make_board) -> None:
    with pytest.raises(InvalidPositionError):
        make_board("e5", "e5")


def test_start_from_negative_wall_count(make_board) -> None:
    with pytest.raises(InvalidPositionError):
        make_board("e1", "e9", walls_left={Player.WHITE: -1, Player.BLACK: 10})


def test_clone_is_independent() -> None:
    board = BoardState.new()
    clone = board.clone()
    clone.apply_action(parse_action("e5h"))
    clone.apply_action(parse_action("e8"))
    assert board.placed_walls() == {}
    assert board.walls_remaining(Player.WHITE) == WALLS_PER_PLAYER
    assert board.pawn(Player.BLACK) == coordinate_from_notation("e9")
    assert board.active_player == Player.WHITE


# -- PAWN MOVES --
def test_pawn_move_swaps_turn() -> None:
    board = BoardState.new()
    status = board.apply_action(PawnMove(coordinate_from_notation("e2")))
    assert status == GameStatus.in_progress()
    assert board.pawn(Player.WHITE) == coordinate_from_notation("e2")
    assert board.active_player == Player.BLACK

    board.apply_action(PawnMove(coordinate_from_notation("e8")))
    assert board.pawn(Player.BLACK) == coordinate_from_notation("e8")
    assert board.active_player == Player.WHITE


@pytest.mark.parametrize("destination", ["e3", "d2", "e1", "e9", "a5"])
def test_illegal_destination(destination: str) -> None:
    board = BoardState.new()
    before = snapshot(board)
    with pytest.raises(IllegalDestinationError):
        board.apply_action(parse_action(destination))
    assert snapshot(board) == before


def test_jump_is_applied(make_board) -> None:
    board = make_board("e5", "e6")
    board.apply_action(parse_action("e7"))
    assert board.pawn(Player.WHITE) == coordinate_from_notation("e7")


# -- WINNING --
def test_white_wins(make_board) -> None:
    board = make_board("e8", "a1")
    status = board.apply_action(parse_action("e9"))
    assert status.is_finished
    assert status.winner == Player.WHITE
    assert status.reason == VictoryReason.REACHED_GOAL_ROW
    assert board.is_finished
    # turn still changes hands after the winning move
    assert board.active_player == Player.BLACK


def test_black_wins_on_any_square_of_row_one(make_board) -> None:
    board = make_board("i9", "a2", active=Player.BLACK)
    status = board.apply_action(parse_action("a1"))
    assert status == GameStatus.finished(Player.BLACK, VictoryReason.REACHED_GOAL_ROW)


def test_win_by_jumping(make_board) -> None:
    board = make_board("e7", "e8")
    status = board.apply_action(parse_action("e9"))
    assert status.winner == Player.WHITE


def test_finished_board_rejects_actions(make_board) -> None:
    board = make_board("e8", "a1")
    board.apply_action(parse_action("e9"))
    before = snapshot(board)
    with pytest.raises(GameFinishedError):
        board.apply_action(parse_action("a2"))
    with pytest.raises(GameFinishedError):
        board.apply_action(parse_action("e5h"))
    assert snapshot(board) == before


# -- WALLS --
def test_wall_placement() -> None:
    board = BoardState.new()
    status = board.apply_action(WallPlacement(WallAnchor(4, 4), Orientation.HORIZONTAL))
    assert status == GameStatus.in_progress()
    assert board.placed_walls() == {WallAnchor(4, 4): Orientation.HORIZONTAL}
    assert board.walls_remaining(Player.WHITE) == WALLS_PER_PLAYER - 1
    assert board.walls_remaining(Player.BLACK) == WALLS_PER_PLAYER
    assert board.active_player == Player.BLACK


def test_wall_overlap_and_crossing() -> None:
    """Same orientation on the neighbouring anchor overlaps. The other orientation on a different anchor is fine."""
    board = BoardState.new()
    board.apply_action(parse_action("e5h"))

    before = snapshot(board)
    with pytest.raises(OverlapsError):
        board.apply_action(parse_action("f5h"))
    with pytest.raises(AnchorOccupiedError):
        board.apply_action(parse_action("e5v"))
    assert snapshot(board) == before

    board.apply_action(parse_action("f5v"))
    assert board.placed_walls()[WallAnchor(5, 4)] == Orientation.VERTICAL


def test_wall_blocks_path(make_board) -> None:
    """Closing the last gap of the barrier in front of white is rejected, nothing changes"""
    board = make_board("e1", "e9", ["a1h", "c1h", "e1h", "g1h"])
    before = deepcopy(board)
    with pytest.raises(WallBlocksPathError):
        board.apply_action(parse_action("h1v"))
    assert board == before


def test_no_walls_remaining(make_board) -> None:
    board = make_board("e1", "e9", walls_left={Player.WHITE: 0, Player.BLACK: 3})
    before = snapshot(board)
    with pytest.raises(NoWallsRemainingError):
        board.apply_action(parse_action("e5h"))
    assert snapshot(board) == before
    assert board.legal_wall_placements() == []


def test_all_walls_used() -> None:
    """Both players place their 10 walls. The 11th wall of white is refused."""
    board = BoardState.new()
    walls = [f"{column}{row}h" for row in (2, 4, 6, 8) for column in "aceg"]
    walls += [f"{column}5v" for column in "bdfh"]
    assert len(walls) == 2 * WALLS_PER_PLAYER
    for notation in walls:
        board.apply_action(parse_action(notation))
    assert board.walls_remaining(Player.WHITE) == 0
    assert board.walls_remaining(Player.BLACK) == 0
    with pytest.raises(NoWallsRemainingError):
        board.apply_action(parse_action("a7v"))


def test_legal_wall_placements_start() -> None:
    """An empty board: every anchor in both orientations"""
    assert len(BoardState.new().legal_wall_placements()) == 128


def test_legal_wall_placements_after_wall() -> None:
    """e5h takes its own anchor (both orientations) plus the overlapping horizontal neighbours"""
    board = BoardState.new()
    board.apply_action(parse_action("e5h"))
    placements = board.legal_wall_placements()
    assert len(placements) == 124
    assert WallPlacement(WallAnchor(5, 4), Orientation.HORIZONTAL) not in placements
    assert WallPlacement(WallAnchor(5, 4), Orientation.VERTICAL) in placements


def test_legal_wall_placements_skip_blocking_walls(make_board) -> None:
    board = make_board("e1", "e9", ["a1h", "c1h", "e1h", "g1h"])
    placements = board.legal_wall_placements()
    assert WallPlacement(WallAnchor(7, 0), Orientation.VERTICAL) not in placements


# -- INVARIANTS OVER A WHOLE GAME --
def test_invariants_during_scripted_game() -> None:
    """
    Alternate walls and pawn moves until someone wins.
    After every action: both players keep a path, wall counts only go down for the player who placed the wall.
    """
    board = BoardState.new()
    for turn in range(200):
        if board.is_finished:
            break
        player = board.active_player
        counts_before = dict(board.walls_left)
        placements = board.legal_wall_placements()

        destinations = board.legal_pawn_destinations()
        if not destinations and not placements:
            break

        if placements and (turn % 3 == 0 or not destinations):
            board.apply_action(placements[len(placements) // 2])
            expected = dict(counts_before)
            expected[player] -= 1
            assert board.walls_left == expected
        else:
            # greedy: move toward the goal row, ties broken by index
            target = goal_row(player)
            best = min(
                destinations,
                key=lambda square: (abs(square.y - target), square.to_index()),
            )
            board.apply_action(PawnMove(best))
            assert board.walls_left == counts_before

        assert all(count >= 0 for count in board.walls_left.values())
        assert board.has_path(Player.WHITE)
        assert board.has_path(Player.BLACK)


def test_finished_board_lists_no_actions(make_board) -> None:
    """Nothing can be played after a win, so nothing is offered either"""
    board = make_board("e8", "a1")
    assert board.legal_pawn_destinations()
    assert board.legal_wall_placements()
    board.apply_action(parse_action("e9"))
    assert board.legal_pawn_destinations() == set()
    assert board.legal_wall_placements() == []
