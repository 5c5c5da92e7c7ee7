"""
win_detector.py - Terminal state detection for gravity-flip Connect Four

`check_win` inspects the eight rays leaving one cell and reports a win for
that cell's colour, a tie on a full board, or None while the game goes on.
Both functions only read the board.
"""

from typing import Optional

from gravity4.game.board import Board
from gravity4.utils import CONNECT_N, HEIGHT, Column, Direction, Winner, row_offset

# (column step, row step, axis) for each of the eight rays
RAYS = (
    (-1, 1, Direction.DIAGONAL_DOWN.value),
    (0, 1, Direction.VERTICAL.value),
    (1, 1, Direction.DIAGONAL_UP.value),
    (-1, 0, Direction.HORIZONTAL.value),
    (1, 0, Direction.HORIZONTAL.value),
    (-1, -1, Direction.DIAGONAL_UP.value),
    (0, -1, Direction.VERTICAL.value),
    (1, -1, Direction.DIAGONAL_DOWN.value),
)


def check_win(board: Board, column: Column, row: int) -> Optional[Winner]:
    """
    Classify the position around the piece at (column, row).

    Each axis starts counting at 1 for the piece itself. Rays are walked
    outward one depth at a time; a ray stops for good at the board edge or
    at the first cell that does not hold the same colour.

    Args:
        board: The board to inspect
        column: Column of the piece to check
        row: Row of the piece to check

    Returns:
        The winner if the piece completes a line, Winner.TIE if no line is
        completed and the board is full, otherwise None. An empty cell
        always gives None.
    """
    colour = board.piece_at(column, row)
    if colour is None:
        return None

    counts = [1, 1, 1, 1]
    stopped = [False] * len(RAYS)

    for depth in range(1, CONNECT_N + 1):
        for i, (dx, dy, axis) in enumerate(RAYS):
            if stopped[i]:
                continue

            check_column = column.offset(dx * depth)
            check_row = row_offset(row, dy * depth)
            if check_column is None or check_row is None:
                stopped[i] = True
            elif board.piece_at(check_column, check_row) != colour:
                stopped[i] = True
            else:
                counts[axis] += 1

    if max(counts) >= CONNECT_N:
        return Winner.from_colour(colour)

    if board.is_full():
        return Winner.TIE

    return None


def check_win_all(board: Board) -> Optional[Winner]:
    """
    Run `check_win` on every cell, columns then rows in ascending order.

    Used after a gravity flip, which can line pieces up anywhere on the
    board. The first non-None result is returned.
    """
    for column in Column.all():
        for row in range(HEIGHT):
            winner = check_win(board, column, row)
            if winner is not None:
                return winner

    return None
