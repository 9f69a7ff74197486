"""
Plain text picture of a board. Handy for logs, debugging and terminal clients.

Row 9 is printed at the top and the column letters at the bottom, like a board seen from white's side.
O is the white pawn, X the black one. '#' marks a wall segment.
"""

from string import ascii_lowercase

from src.core.shared_types import Player
from src.quoridor.board import BoardState
from src.quoridor.coordinate import BOARD_SIZE, Coordinate, Direction

PAWN_SYMBOLS: dict[Player, str] = {Player.WHITE: "O", Player.BLACK: "X"}


def render_board(board: BoardState) -> str:
    lines = [f"Active player: {board.active_player}"]
    lines.append(_outer_border())
    for y in range(BOARD_SIZE - 1, -1, -1):
        lines.append(_rank_line(board, y))
        if y > 0:
            lines.append(_horizontal_wall_line(board, y))
    lines.append(_outer_border())
    lines.append("     " + "   ".join(ascii_lowercase[:BOARD_SIZE]))
    lines.append(
        f"White walls: {board.walls_remaining(Player.WHITE)}    Black walls: {board.walls_remaining(Player.BLACK)}"
    )
    return "\n".join(lines)


def _outer_border() -> str:
    return "   +" + "---+" * BOARD_SIZE


def _pawn_symbol(board: BoardState, square: Coordinate) -> str:
    for player, symbol in PAWN_SYMBOLS.items():
        if board.pawn(player) == square:
            return symbol
    return " "


def _rank_line(board: BoardState, y: int) -> str:
    """Squares of one row, separated by '|' or '#' (vertical wall)"""
    cells: list[str] = []
    for x in range(BOARD_SIZE):
        square = Coordinate(x, y)
        cells.append(f" {_pawn_symbol(board, square)} ")
        if x < BOARD_SIZE - 1:
            cells.append("#" if board.walls.severs_edge(square, Direction.EAST) else " ")
    return f"{y + 1:>2} |" + "".join(cells) + "|"


def _horizontal_wall_line(board: BoardState, y: int) -> str:
    """The line between row y and row y-1"""
    segments: list[str] = []
    for x in range(BOARD_SIZE):
        square = Coordinate(x, y)
        blocked = board.walls.severs_edge(square, Direction.SOUTH)
        segments.append("###" if blocked else "---")
    return "   +" + "+".join(segments) + "+"
