"""
rules.py - Game state machine and Gymnasium environment for gravity-flip Connect Four

This module provides:
1. The Game class, which owns a board, whose turn it is and the outcome,
   and which an adversarial search can drive through `actions`/`execute`
2. The move errors raised by Game.make_move
3. A gymnasium-compatible environment wrapping Game
"""

from typing import Any, Dict, List, Optional, Tuple, Union

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from gravity4.debug import debug, DebugLevel
from gravity4.game.board import AllowedColumns, Board
from gravity4.game.gravity import flip
from gravity4.game.win_detector import check_win, check_win_all
from gravity4.utils import HEIGHT, WIDTH, Colour, Column, Fitness, Winner


class MoveError(ValueError):
    """Base class for rejected moves. A rejected move changes nothing."""


class GameOverError(MoveError):
    def __init__(self):
        super().__init__("The game is already over")


class ColumnFullError(MoveError):
    def __init__(self, column: Column):
        super().__init__(f"Column {column} is full")
        self.column = column


class Game:
    """
    Turn state machine for gravity-flip Connect Four.

    A game is in progress while `winner` is None and decided once it is set;
    a decided game never changes again. With `flipping` enabled, gravity is
    inverted after every second move that does not end the game.

    Game also satisfies the contract an external adversarial search needs
    (see gravity4.ai.search.SearchableGame).
    """

    __slots__ = ("board", "current_colour", "winner", "flipping", "round")

    def __init__(self, starting_colour: Colour = Colour.RED, flipping: bool = False):
        """
        Initialize a new game.

        Args:
            starting_colour: Colour that moves first
            flipping: Whether gravity inverts every two moves
        """
        debug.debug(f"Initializing Game (first: {starting_colour.name}, flipping: {flipping})", "game")
        self.board = Board()
        self.current_colour = starting_colour
        self.winner: Optional[Winner] = None
        self.flipping = flipping
        self.round = 0

    def copy(self) -> "Game":
        new_game = Game.__new__(Game)
        new_game.board = self.board.copy()
        new_game.current_colour = self.current_colour
        new_game.winner = self.winner
        new_game.flipping = self.flipping
        new_game.round = self.round
        return new_game

    def make_move(self, column: Union[Column, int]) -> None:
        """
        Drop the current colour's piece into `column`.

        Args:
            column: Column to play, as a Column or a 0-based index

        Raises:
            GameOverError: if the game is already decided
            ColumnFullError: if the column has no room left
            ValueError: if an integer column is out of range
        """
        column = Column(column)

        if self.is_game_over():
            raise GameOverError()

        if self.board.column_full(column):
            raise ColumnFullError(column)

        colour = self.current_colour
        self.board.place(column, colour)
        self.current_colour = colour.invert()

        winner = check_win(self.board, column, self.board.top_row(column))
        if winner is not None:
            self._finish(winner)
            return

        self.round += 1

        if self.flipping and self.round == 2:
            self.round = 0
            flip(self.board)

            # a flip can line up pieces anywhere, not just around the last move
            winner = self.check_win_all()
            if winner is not None:
                self._finish(winner)

    def _finish(self, winner: Winner) -> None:
        self.winner = winner
        if debug.enabled(DebugLevel.DEBUG, "game"):
            debug.debug(f"Game decided: {winner.name}", "game")

    def check_win_all(self) -> Optional[Winner]:
        """Scan every cell for a finished line or a full board."""
        return check_win_all(self.board)

    def is_game_over(self) -> bool:
        return self.winner is not None

    def get_winner(self) -> Optional[Winner]:
        return self.winner

    def get_current_colour(self) -> Colour:
        return self.current_colour

    def get_valid_moves(self) -> AllowedColumns:
        """Columns that can be played; empty once the game is decided."""
        if self.is_game_over():
            return AllowedColumns.empty()
        return self.board.allowed_columns()

    # Search contract

    def actions(self, player: Colour) -> Tuple[bool, AllowedColumns]:
        """
        Moves available to the search.

        Returns:
            (whether it is `player`'s turn, the playable columns)
        """
        return player == self.current_colour, self.get_valid_moves()

    def execute(self, action: Column, player: Colour) -> Fitness:
        """
        Play `action` and score the result from `player`'s point of view.

        `action` must come from the current `actions()`; a MoveError here
        means the caller broke that contract and is not caught.
        """
        self.make_move(action)

        winning_colour = self.winner.to_colour() if self.winner is not None else None
        if winning_colour is None:
            return Fitness.TIE
        if winning_colour == player:
            return Fitness.WIN
        return Fitness.LOSS

    def is_upper_bound(self, fitness: Fitness, player: Optional[Colour] = None) -> bool:
        return fitness == Fitness.WIN

    def is_lower_bound(self, fitness: Fitness, player: Optional[Colour] = None) -> bool:
        return fitness == Fitness.LOSS

    def render(self) -> str:
        """
        Render the game as a string.

        Returns:
            String representation of the board
        """
        return self.board.render()

    def __repr__(self):
        return (f"Game(current={self.current_colour.name}, winner={self.winner}, "
                f"flipping={self.flipping}, round={self.round})")


class GravityFourEnv(gym.Env):
    """
    Gravity-flip Connect Four environment following the Gymnasium interface.

    Both colours are played through `step`; rewards are given from RED's
    point of view.
    """

    metadata = {'render_modes': ['ascii', 'human'], 'render_fps': 4}

    def __init__(self, render_mode: Optional[str] = None, flipping: bool = False,
                 starting_colour: Colour = Colour.RED):
        """
        Initialize the environment.

        Args:
            render_mode: Mode for rendering the environment
            flipping: Whether gravity inverts every two moves
            starting_colour: Colour that moves first after each reset
        """
        debug.debug("Initializing GravityFourEnv", "env")

        self.action_space = spaces.Discrete(WIDTH)

        # Observation: HEIGHT x WIDTH board, top row first, values 0/1/2
        self.observation_space = spaces.Box(
            low=0, high=2, shape=(HEIGHT, WIDTH), dtype=np.int8
        )

        self.render_mode = render_mode
        self.flipping = flipping
        self.starting_colour = starting_colour
        self.game = Game(starting_colour, flipping)

        self.reward_win = 1.0
        self.reward_lose = -1.0
        self.reward_draw = 0.1
        self.reward_invalid_move = -0.5
        self.reward_step = -0.01

    def reset(self, seed: Optional[int] = None,
              options: Optional[Dict[str, Any]] = None) -> Tuple[np.ndarray, Dict]:
        """
        Reset the environment to a new game.

        Args:
            seed: Random seed for reproducibility
            options: May override `flipping` and `starting_colour`

        Returns:
            Initial observation and info dictionary
        """
        super().reset(seed=seed)

        options = options or {}
        self.flipping = options.get('flipping', self.flipping)
        self.starting_colour = options.get('starting_colour', self.starting_colour)
        self.game = Game(self.starting_colour, self.flipping)

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict]:
        """
        Play one move for the colour whose turn it is.

        Args:
            action: Column to play (0-indexed)

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        try:
            self.game.make_move(int(action))
        except ValueError as e:
            debug.warning(f"Invalid action {action}: {e}", "env")
            info = self._get_info()
            info['invalid_move'] = True
            return self._get_observation(), self.reward_invalid_move, False, True, info

        reward = self.reward_step
        terminated = self.game.is_game_over()
        if self.game.winner == Winner.RED:
            reward = self.reward_win
        elif self.game.winner == Winner.YELLOW:
            reward = self.reward_lose
        elif self.game.winner == Winner.TIE:
            reward = self.reward_draw

        if terminated:
            debug.info(f"Game over: {self.game.winner.name}", "env")

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), reward, terminated, False, self._get_info()

    def render(self) -> Optional[str]:
        if self.render_mode == "ascii":
            return self.game.render()

        if self.render_mode == "human":
            print(self.game.render())

        return None

    def _get_observation(self) -> np.ndarray:
        observation = np.zeros((HEIGHT, WIDTH), dtype=np.int8)
        board = self.game.board
        for column in Column.all():
            for row in range(HEIGHT):
                piece = board.piece_at(column, row)
                if piece is not None:
                    observation[HEIGHT - 1 - row, column] = 1 if piece is Colour.RED else 2
        return observation

    def _get_info(self) -> Dict[str, Any]:
        valid_moves: List[int] = [int(c) for c in self.game.get_valid_moves()]
        return {
            'valid_moves': valid_moves,
            'num_valid_moves': len(valid_moves),
            'current_colour': self.game.current_colour.name,
            'winner': self.game.winner.name if self.game.winner is not None else None,
            'round': self.game.round,
            'gravity_down': self.game.board.gravity_down,
            'pieces': self.game.board.piece_count(),
        }
