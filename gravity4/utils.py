"""
utils.py - Constants, enumerations and helpers for the gravity-flip engine

This module provides the board geometry, the colour/winner/column primitives
shared by every other module, and the plain-text board renderer.
"""

from enum import Enum, IntEnum
from typing import Optional, Tuple

# Game constants
WIDTH = 7
HEIGHT = 6
CONNECT_N = 4  # Number of pieces in a row to win


class Colour(Enum):
    """The two piece colours. RED is stored as a set tile bit."""
    RED = "red"
    YELLOW = "yellow"

    def invert(self) -> "Colour":
        """Get the other colour."""
        if self is Colour.RED:
            return Colour.YELLOW
        return Colour.RED

    def to_bool(self) -> bool:
        return self is Colour.RED

    @staticmethod
    def from_bool(value: bool) -> "Colour":
        return Colour.RED if value else Colour.YELLOW

    def __str__(self):
        return "R" if self is Colour.RED else "Y"


class Winner(Enum):
    """Enumeration representing a finished game's outcome."""
    RED = "red"
    YELLOW = "yellow"
    TIE = "tie"

    @staticmethod
    def from_colour(colour: Colour) -> "Winner":
        return Winner.RED if colour is Colour.RED else Winner.YELLOW

    def to_colour(self) -> Optional[Colour]:
        """The winning colour, or None for a tie."""
        if self is Winner.RED:
            return Colour.RED
        if self is Winner.YELLOW:
            return Colour.YELLOW
        return None


class Column(IntEnum):
    """Bounded column index, A is the leftmost column."""
    A = 0
    B = 1
    C = 2
    D = 3
    E = 4
    F = 5
    G = 6

    def offset(self, delta: int) -> Optional["Column"]:
        """
        Move sideways by `delta` columns.

        Returns:
            The resulting column, or None if it would leave the board
        """
        value = int(self) + delta
        if value < 0 or value >= WIDTH:
            return None
        return _COLUMNS[value]

    @staticmethod
    def all() -> Tuple["Column", ...]:
        """Every column in ascending order."""
        return _COLUMNS

    @staticmethod
    def parse(text: str) -> "Column":
        """
        Parse a column from user input.

        Accepts a column letter (case-insensitive) or a 0-based index.

        Raises:
            ValueError: if the text names no column
        """
        text = text.strip()
        if text.isdigit():
            return Column(int(text))
        try:
            return Column[text.upper()]
        except KeyError:
            raise ValueError(f"Unknown column: {text!r}") from None

    def __str__(self):
        return self.name


_COLUMNS: Tuple[Column, ...] = tuple(Column)
assert len(_COLUMNS) == WIDTH


class Direction(Enum):
    """The four axes a line of pieces can run along. Values index axis counters."""
    DIAGONAL_DOWN = 0  # Diagonal from top-left to bottom-right
    VERTICAL = 1
    DIAGONAL_UP = 2  # Diagonal from bottom-left to top-right
    HORIZONTAL = 3


class Fitness(IntEnum):
    """Outcome of a position from one player's point of view, ordered for search."""
    LOSS = 0
    TIE = 1
    WIN = 2


def row_offset(row: int, delta: int) -> Optional[int]:
    """Move vertically by `delta` rows, or None if that leaves the board."""
    value = row + delta
    if value < 0 or value >= HEIGHT:
        return None
    return value


def render_board_ascii(board) -> str:
    """
    Render a board as ASCII art.

    Works with anything exposing `piece_at(column, row)`. Row HEIGHT-1 is
    printed first, whatever the current gravity orientation is.

    Args:
        board: The board to render

    Returns:
        ASCII representation of the board
    """
    result = ["|" + "-" * (WIDTH * 2 - 1) + "|"]

    for row in range(HEIGHT - 1, -1, -1):
        cells = []
        for column in Column.all():
            piece = board.piece_at(column, row)
            cells.append(" " if piece is None else str(piece))
        result.append("|" + " ".join(cells) + "|")

    result.append("|" + "-" * (WIDTH * 2 - 1) + "|")
    result.append("|" + " ".join(str(column) for column in Column.all()) + "|")

    return "\n".join(result)
