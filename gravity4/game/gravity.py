"""
gravity.py - Gravity inversion for gravity-flip Connect Four

Flipping moves every column's stack flush against the opposite end of the
column and reverses the board's orientation. Piece counts never change.
"""

import numpy as np

from gravity4.debug import debug, DebugLevel
from gravity4.game.board import Board
from gravity4.utils import HEIGHT, Column


def _shift_up(segment: np.ndarray, amount: int) -> None:
    """Move bits toward the high end in place, clearing the vacated low end."""
    if amount == 0:
        return
    segment[amount:] = segment[:-amount].copy()
    segment[:amount] = False


def _shift_down(segment: np.ndarray, amount: int) -> None:
    """Move bits toward the low end in place, clearing the vacated high end."""
    if amount == 0:
        return
    segment[:-amount] = segment[amount:].copy()
    segment[-amount:] = False


def flip(board: Board) -> None:
    """
    Invert gravity on `board` in place.

    Each non-empty column's run is moved by HEIGHT minus its height, toward
    the high end when gravity currently points down and toward the low end
    otherwise. The order of the pieces within the column's bits is kept.
    """
    shift = _shift_up if board.gravity_down else _shift_down

    for column in Column.all():
        height = board.column_height(column)
        if height == 0:
            continue

        start = Board.index_of(column, 0)
        amount = HEIGHT - height
        # slices are views, so the shift writes straight into the board
        shift(board.present[start:start + HEIGHT], amount)
        shift(board.tiles[start:start + HEIGHT], amount)

    board.gravity_down = not board.gravity_down
    if debug.enabled(DebugLevel.DEBUG, "gravity"):
        debug.debug(f"Gravity flipped, now {'down' if board.gravity_down else 'up'}", "gravity")
