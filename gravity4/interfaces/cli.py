"""
cli.py - Command-line interface for gravity-flip Connect Four

This module lets a human play against the search bot (or watch two bots
play each other) and benchmarks raw move throughput with random self-play.
"""

import argparse
import random
import sys
import time
from typing import Dict, List, Optional

from gravity4.ai.search import Bot
from gravity4.debug import debug, DebugLevel
from gravity4.game.rules import Game, MoveError
from gravity4.utils import Colour, Column

COLOURS = {'red': Colour.RED, 'yellow': Colour.YELLOW}


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for all subcommands."""
    parser = argparse.ArgumentParser(description='Gravity-flip Connect Four')
    parser.add_argument('--debug', action='store_true', help='Enable debug logging')
    parser.add_argument('--debug-level', default='warning',
                        choices=[level.name.lower() for level in DebugLevel],
                        help='Logging level when --debug is not given')
    parser.add_argument('--log-file', default=None, help='Also write log output to this file')

    subparsers = parser.add_subparsers(dest='command', help='Command to run')

    play_parser = subparsers.add_parser('play', help='Play a game interactively')
    play_parser.add_argument('--play-as', choices=['red', 'yellow', 'none'], default='red',
                             help="Colour the human plays ('none' for bot against bot)")
    play_parser.add_argument('--first', choices=['red', 'yellow'], default='red',
                             help='Colour that moves first')
    play_parser.add_argument('--think-time', type=float, default=5.0,
                             help='Seconds the bot may think per move')
    play_parser.add_argument('--flipping', action='store_true',
                             help='Invert gravity every two moves')

    benchmark_parser = subparsers.add_parser('benchmark', help='Benchmark move throughput')
    benchmark_parser.add_argument('--games', type=int, default=1000,
                                  help='Number of random games to play')
    benchmark_parser.add_argument('--flipping', action='store_true',
                                  help='Invert gravity every two moves')
    benchmark_parser.add_argument('--seed', type=int, default=None,
                                  help='Random seed for reproducible games')

    return parser


class SimpleCLI:
    """Command-line driver around Game and Bot."""

    def __init__(self, args: Optional[argparse.Namespace] = None):
        self.args = args

    def parse_args(self, argv: Optional[List[str]] = None) -> argparse.Namespace:
        """Parse command-line arguments and configure logging."""
        self.args = build_parser().parse_args(argv)

        if self.args.debug:
            debug.configure(level=DebugLevel.DEBUG)
        else:
            debug.set_from_string(self.args.debug_level)

        if self.args.log_file:
            debug.configure(log_file=self.args.log_file)

        return self.args

    def run(self) -> int:
        """Run the command selected on the command line."""
        if not self.args:
            self.parse_args()

        if self.args.command == 'play':
            self.play_game()
        elif self.args.command == 'benchmark':
            self.benchmark()
        else:
            print("Please specify a command. Use --help for options.")
            return 1
        return 0

    def play_game(self) -> None:
        """Play one game, human against bot or bot against bot."""
        human = COLOURS.get(self.args.play_as)
        game = Game(COLOURS[self.args.first], self.args.flipping)
        bots: Dict[Colour, Bot] = {colour: Bot(colour) for colour in Colour if colour != human}

        print("Starting a new game!")
        if self.args.flipping:
            print("Gravity flips every two moves.")

        while not game.is_game_over():
            print(game.render())
            colour = game.get_current_colour()

            if colour == human:
                column = self.get_human_move(game)
                if column is None:
                    print("Quitting game.")
                    return
            else:
                print(f"{colour.name.title()} bot is thinking...")
                column = bots[colour].select(game, self.args.think_time)
                print(f"{colour.name.title()} bot plays column {column}")

            try:
                game.make_move(column)
            except MoveError as e:
                # only reachable from human input, the bot picks legal columns
                print(f"Invalid move: {e}")

        print(game.render())
        print(f"Game over! Result: {game.get_winner().name}")

    def get_human_move(self, game: Game) -> Optional[Column]:
        """
        Read a column from the player.

        Returns:
            The chosen column, or None if the player quits
        """
        allowed = game.get_valid_moves()
        choices = " ".join(str(column) for column in allowed)

        while True:
            try:
                user_input = input(f"Your move ({choices}, q to quit): ").strip()
            except EOFError:
                return None

            if user_input.lower() == 'q':
                return None

            try:
                column = Column.parse(user_input)
            except ValueError as e:
                print(f"Invalid input: {e}")
                continue

            if column not in allowed:
                print(f"Column {column} is full.")
                continue

            return column

    def benchmark(self) -> None:
        """Play random games and report how many moves per second the engine makes."""
        rng = random.Random(self.args.seed)
        moves = 0
        results: Dict[str, int] = {}

        print(f"Playing {self.args.games} random games...")
        debug.start_timer("benchmark")
        start = time.perf_counter()

        for _ in range(self.args.games):
            game = Game(rng.choice(list(Colour)), self.args.flipping)
            while not game.is_game_over():
                game.make_move(rng.choice(list(game.get_valid_moves())))
                moves += 1
            name = game.get_winner().name
            results[name] = results.get(name, 0) + 1

        elapsed = time.perf_counter() - start
        debug.end_timer("benchmark", "cli")

        print(f"Moves: {moves} in {elapsed:.3f} seconds ({moves / max(elapsed, 1e-9):.0f} moves/s)")
        for name in sorted(results):
            print(f"  {name}: {results[name]}")


def main(argv: Optional[List[str]] = None) -> int:
    cli = SimpleCLI()
    cli.parse_args(argv)
    return cli.run()


if __name__ == "__main__":
    sys.exit(main())
