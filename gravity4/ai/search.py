"""
search.py - Time-bounded alpha-beta search over the game's search contract

The Bot class picks moves for one colour. It only talks to the game through
`actions`, `execute`, `is_upper_bound`, `is_lower_bound` and `copy`, so it
can drive anything implementing SearchableGame.

Positions are scored with the three-valued Fitness returned by `execute`:
a line that reaches the depth limit without ending the game counts as a tie.
"""

import time
from typing import Iterable, Optional, Protocol, Tuple

from gravity4.debug import debug
from gravity4.utils import Colour, Column, Fitness


class SearchableGame(Protocol):
    """What a game must offer to be searched."""

    def actions(self, player: Colour) -> Tuple[bool, Iterable[Column]]:
        ...

    def execute(self, action: Column, player: Colour) -> Fitness:
        ...

    def is_upper_bound(self, fitness: Fitness, player: Colour) -> bool:
        ...

    def is_lower_bound(self, fitness: Fitness, player: Colour) -> bool:
        ...

    def copy(self) -> "SearchableGame":
        ...


class SearchTimeout(Exception):
    """Raised inside the search when the think time is used up."""


class Bot:
    """
    A player that searches the game tree with iterative deepening and
    alpha-beta pruning.

    Each iteration searches one ply deeper than the last. When time runs out
    the move from the deepest finished iteration is played.
    """

    def __init__(self, player: Colour):
        """
        Initialize the bot.

        Args:
            player: The colour this bot plays
        """
        self.player = player
        self.nodes_evaluated = 0  # For performance tracking
        self.last_depth = 0
        self._deadline = 0.0
        self._exhausted = True

    def select(self, game: SearchableGame, think_time: float,
               max_depth: Optional[int] = None) -> Optional[Column]:
        """
        Choose a move for `self.player`.

        Args:
            game: The position to search from (not modified)
            think_time: Seconds the search may run
            max_depth: Deepest iteration to run (None for no limit)

        Returns:
            The chosen column, or None if it is not this bot's turn or
            there is nothing to play
        """
        is_turn, actions = game.actions(self.player)
        actions = list(actions)
        if not is_turn or not actions:
            return None

        self.nodes_evaluated = 0
        self.last_depth = 0
        self._deadline = time.monotonic() + think_time

        best_action = actions[0]
        depth = 1

        while max_depth is None or depth <= max_depth:
            try:
                # moves tried on copied games are not worth logging
                with debug.muted("game", "gravity"):
                    action, fitness, exhausted = self._search_root(game, actions, depth)
            except SearchTimeout:
                debug.debug(f"Search timed out during depth {depth}", "search")
                break

            best_action = action
            self.last_depth = depth
            debug.trace(f"Depth {depth}: best {action} ({fitness.name})", "search")

            # A proven win cannot be improved and a full-depth tree will not grow
            if game.is_upper_bound(fitness, self.player) or exhausted:
                break
            depth += 1

        debug.debug(
            f"{self.player.name} chose {best_action} at depth {self.last_depth} "
            f"({self.nodes_evaluated} nodes)",
            "search"
        )
        return best_action

    def _search_root(self, game: SearchableGame, actions, depth: int):
        best_action = actions[0]
        best_fitness = None
        alpha = Fitness.LOSS
        self._exhausted = True

        for action in actions:
            child = game.copy()
            fitness = child.execute(action, self.player)
            value = self._alpha_beta(child, depth - 1, alpha, Fitness.WIN, fitness)

            if best_fitness is None or value > best_fitness:
                best_fitness = value
                best_action = action

            if game.is_upper_bound(best_fitness, self.player):
                break
            alpha = max(alpha, best_fitness)

        return best_action, best_fitness, self._exhausted

    def _alpha_beta(self, game: SearchableGame, depth: int,
                    alpha: Fitness, beta: Fitness, fitness: Fitness) -> Fitness:
        """
        Alpha-beta search below one executed move.

        Args:
            game: Position after the move
            depth: Remaining plies
            alpha: Best outcome the bot can already force
            beta: Best outcome the opponent can already hold the bot to
            fitness: What `execute` reported for the move leading here

        Returns:
            The value of this position for the bot
        """
        if time.monotonic() > self._deadline:
            raise SearchTimeout()

        self.nodes_evaluated += 1

        active, actions = game.actions(self.player)
        actions = list(actions)
        if not actions:
            return fitness

        if depth == 0:
            self._exhausted = False
            return fitness

        if active:
            best = Fitness.LOSS
            for action in actions:
                child = game.copy()
                value = self._alpha_beta(child, depth - 1, alpha, beta,
                                         child.execute(action, self.player))
                best = max(best, value)
                alpha = max(alpha, best)
                if game.is_upper_bound(best, self.player) or alpha >= beta:
                    break
            return best

        best = Fitness.WIN
        for action in actions:
            child = game.copy()
            value = self._alpha_beta(child, depth - 1, alpha, beta,
                                     child.execute(action, self.player))
            best = min(best, value)
            beta = min(beta, best)
            if game.is_lower_bound(best, self.player) or alpha >= beta:
                break
        return best
