"""
board.py - Board representation for gravity-flip Connect Four

This module implements the Board class: two packed bitsets (which cells hold
a piece, and the colour of each piece), a per-column height counter and the
current gravity orientation. Win checking and gravity inversion live in
their own modules and operate on this class.
"""

from typing import Iterator, Optional

import numpy as np

from gravity4.utils import WIDTH, HEIGHT, Colour, Column, render_board_ascii


class AllowedColumns:
    """
    Snapshot of the columns that can still take a piece.

    Iterating yields columns in ascending order. The snapshot can be iterated
    any number of times; it does not follow later changes to the board.
    """

    __slots__ = ("_allowed",)

    def __init__(self, allowed: np.ndarray):
        self._allowed = allowed

    @classmethod
    def from_board(cls, board: "Board") -> "AllowedColumns":
        return cls(board.heights < HEIGHT)

    @classmethod
    def empty(cls) -> "AllowedColumns":
        return cls(np.zeros(WIDTH, dtype=bool))

    def __iter__(self) -> Iterator[Column]:
        for idx in np.flatnonzero(self._allowed):
            yield Column(int(idx))

    def __len__(self) -> int:
        return int(np.count_nonzero(self._allowed))

    def __bool__(self) -> bool:
        return bool(self._allowed.any())

    def __contains__(self, column) -> bool:
        if not isinstance(column, (int, np.integer)):
            return False
        return 0 <= column < WIDTH and bool(self._allowed[int(column)])

    def __repr__(self):
        return f"AllowedColumns({[str(c) for c in self]})"


class Board:
    """
    A WIDTH x HEIGHT grid mapping (column, row) to an optional colour.

    Cell (column, row) lives at bit `column * HEIGHT + row` of both bitsets.
    With `gravity_down` set, pieces stack upward from row 0; otherwise they
    stack downward from row HEIGHT-1. Occupied cells of a column always form
    one contiguous run starting at the current floor.
    """

    __slots__ = ("heights", "present", "tiles", "gravity_down")

    def __init__(self):
        """Initialize an empty board with gravity pointing down."""
        self.heights = np.zeros(WIDTH, dtype=np.uint8)
        self.present = np.zeros(WIDTH * HEIGHT, dtype=bool)
        self.tiles = np.zeros(WIDTH * HEIGHT, dtype=bool)
        self.gravity_down = True

    def copy(self) -> "Board":
        """
        Create an independent copy of the board.

        Returns:
            A new Board instance with the same state
        """
        new_board = Board.__new__(Board)
        new_board.heights = self.heights.copy()
        new_board.present = self.present.copy()
        new_board.tiles = self.tiles.copy()
        new_board.gravity_down = self.gravity_down
        return new_board

    @staticmethod
    def index_of(column: Column, row: int) -> int:
        return int(column) * HEIGHT + row

    def column_height(self, column: Column) -> int:
        return int(self.heights[column])

    def column_full(self, column: Column) -> bool:
        return bool(self.heights[column] >= HEIGHT)

    def is_full(self) -> bool:
        """True when no column can take another piece."""
        return bool(np.all(self.heights >= HEIGHT))

    def piece_count(self) -> int:
        return int(self.heights.sum())

    def top_row(self, column: Column) -> int:
        """
        Row of the piece stacked most recently in `column`.

        The column must not be empty.
        """
        height = self.column_height(column)
        if self.gravity_down:
            return height - 1
        return HEIGHT - height

    def place(self, column: Column, colour: Colour) -> None:
        """
        Stack a piece of `colour` on `column`.

        The caller checks `column_full` first; placing on a full column is a
        programming error.
        """
        height = self.column_height(column)
        row = height if self.gravity_down else HEIGHT - height - 1

        idx = Board.index_of(column, row)
        self.tiles[idx] = colour.to_bool()
        self.present[idx] = True
        self.heights[column] += 1

    def piece_at(self, column: Column, row: int) -> Optional[Colour]:
        idx = Board.index_of(column, row)
        if self.present[idx]:
            return Colour.from_bool(bool(self.tiles[idx]))
        return None

    def allowed_columns(self) -> AllowedColumns:
        """Columns that are not full, ascending."""
        return AllowedColumns.from_board(self)

    def __eq__(self, other):
        if not isinstance(other, Board):
            return NotImplemented
        return (self.gravity_down == other.gravity_down
                and np.array_equal(self.heights, other.heights)
                and np.array_equal(self.present, other.present)
                and np.array_equal(self.tiles & self.present, other.tiles & other.present))

    __hash__ = None

    def render(self) -> str:
        """
        Render the board as a string.

        Returns:
            String representation of the board
        """
        return render_board_ascii(self)

    def __str__(self) -> str:
        return self.render()
