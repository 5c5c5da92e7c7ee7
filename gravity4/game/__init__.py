"""
gravity4.game - Core game mechanics for gravity-flip Connect Four

This package contains the board representation, win detection, gravity
inversion, the game state machine and its Gymnasium environment.
"""

from gravity4.game.board import AllowedColumns, Board
from gravity4.game.rules import ColumnFullError, Game, GameOverError, GravityFourEnv, MoveError

__all__ = ['AllowedColumns', 'Board', 'ColumnFullError', 'Game', 'GameOverError',
           'GravityFourEnv', 'MoveError']
