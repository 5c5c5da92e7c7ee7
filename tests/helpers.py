from gravity4.game.rules import Game
from gravity4.utils import Colour, Column


def play(game: Game, moves: str) -> Game:
    """Play a string of column letters, e.g. 'ABAB'."""
    for letter in moves:
        game.make_move(Column[letter])
    return game


def fill_board(board, stacks):
    """Stack pieces per column: {'A': 'RY', ...} lists colours bottom to top."""
    colours = {'R': Colour.RED, 'Y': Colour.YELLOW}
    for letter, stack in stacks.items():
        for piece in stack:
            board.place(Column[letter], colours[piece])
    return board


# Full board with no four-in-a-row: pairs of columns alternate colour by row.
# Columns are filled bottom to top by playing these moves in order.
TIE_MOVES = "ACCA" * 3 + "BDDB" * 3 + "EGGE" * 3 + "F" * 6
