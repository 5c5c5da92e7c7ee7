import pytest

from gravity4.game.rules import ColumnFullError, Game, GameOverError, MoveError
from gravity4.utils import HEIGHT, Colour, Column, Fitness, Winner

from tests.helpers import TIE_MOVES, fill_board, play


def test_new_game():
    game = Game(Colour.YELLOW, flipping=True)
    assert game.get_current_colour() is Colour.YELLOW
    assert game.get_winner() is None
    assert not game.is_game_over()
    assert game.round == 0
    assert list(game.get_valid_moves()) == list(Column.all())


def test_turns_alternate():
    game = Game(Colour.RED)
    game.make_move(Column.A)
    assert game.current_colour is Colour.YELLOW
    assert game.board.piece_at(Column.A, 0) is Colour.RED
    game.make_move(Column.A)
    assert game.current_colour is Colour.RED
    assert game.board.piece_at(Column.A, 1) is Colour.YELLOW


def test_make_move_accepts_integer_index():
    game = Game()
    game.make_move(3)
    assert game.board.column_height(Column.D) == 1
    with pytest.raises(ValueError):
        game.make_move(7)


def test_red_wins_vertically():
    game = play(Game(Colour.RED), "ABABAB")
    assert game.winner is None
    game.make_move(Column.A)
    assert game.winner is Winner.RED
    assert game.is_game_over()


def test_yellow_wins_horizontally():
    game = play(Game(Colour.RED), "GAGBFCF")
    assert game.winner is None
    game.make_move(Column.D)
    assert game.winner is Winner.YELLOW


def test_move_after_game_over_is_rejected():
    game = play(Game(), "ABABABA")
    before = game.board.copy()

    with pytest.raises(GameOverError):
        game.make_move(Column.C)

    assert game.board == before
    assert game.current_colour is Colour.YELLOW


def test_full_column_is_rejected_without_changes():
    game = play(Game(), "AAAAAA")
    before = game.board.copy()

    with pytest.raises(ColumnFullError) as excinfo:
        game.make_move(Column.A)

    assert excinfo.value.column is Column.A
    assert isinstance(excinfo.value, MoveError)
    assert game.board == before
    assert game.board.column_height(Column.A) == HEIGHT
    assert game.current_colour is Colour.RED


def test_tie_only_when_board_is_full():
    game = play(Game(Colour.RED), TIE_MOVES[:-1])
    assert game.winner is None
    game.make_move(Column[TIE_MOVES[-1]])
    assert game.winner is Winner.TIE
    assert game.board.is_full()


def test_round_counts_without_flipping():
    game = play(Game(flipping=False), "ABC")
    assert game.round == 3
    assert game.board.gravity_down


def test_flip_after_two_moves():
    game = Game(Colour.RED, flipping=True)
    game.make_move(Column.A)
    assert game.round == 1
    assert game.board.gravity_down

    game.make_move(Column.A)
    assert game.round == 0
    assert not game.board.gravity_down
    assert game.board.piece_at(Column.A, HEIGHT - 2) is Colour.RED
    assert game.board.piece_at(Column.A, HEIGHT - 1) is Colour.YELLOW


def test_column_keeps_height_through_flip():
    game = play(Game(Colour.RED, flipping=True), "AAA")
    assert not game.board.gravity_down
    assert game.board.column_height(Column.A) == 3

    game.make_move(Column.B)

    assert game.board.gravity_down
    assert game.board.column_height(Column.A) == 3
    assert [game.board.piece_at(Column.A, row) for row in range(HEIGHT)] == [
        Colour.RED, Colour.RED, Colour.YELLOW, None, None, None]
    assert game.board.piece_at(Column.B, 0) is Colour.YELLOW


def test_win_detected_while_gravity_is_up():
    game = play(Game(Colour.RED, flipping=True), "ABABAB")
    assert not game.board.gravity_down
    assert game.winner is None

    game.make_move(Column.A)
    assert game.winner is Winner.RED
    assert all(game.board.piece_at(Column.A, row) is Colour.RED for row in range(2, HEIGHT))


def _aligned_by_flip(flipping):
    game = Game(Colour.RED, flipping=flipping)
    # tops of A, B and C sit on rows 0, 1 and 2 and line up on row 5 after a flip
    fill_board(game.board, {'A': 'R', 'B': 'YR', 'C': 'YYR'})
    game.round = 1
    game.make_move(Column.D)
    return game


def test_flip_can_create_a_win():
    game = _aligned_by_flip(flipping=True)
    assert not game.board.gravity_down
    assert game.winner is Winner.RED


def test_same_position_without_flip_continues():
    game = _aligned_by_flip(flipping=False)
    assert game.winner is None


def test_check_win_all_scans_whole_board():
    game = Game()
    assert game.check_win_all() is None
    fill_board(game.board, {'C': 'R', 'D': 'R', 'E': 'R', 'F': 'R'})
    assert game.check_win_all() is Winner.RED


def test_rescan_runs_only_after_flip(monkeypatch):
    calls = []
    original = Game.check_win_all

    def counting(self):
        calls.append(self.board.gravity_down)
        return original(self)

    monkeypatch.setattr(Game, "check_win_all", counting)

    play(Game(flipping=False), "ABCD")
    assert calls == []

    play(Game(flipping=True), "ABCD")
    assert calls == [False, True]


def test_copy_is_independent():
    game = play(Game(flipping=True), "A")
    clone = game.copy()
    clone.make_move(Column.B)

    assert game.round == 1
    assert game.board.gravity_down
    assert game.current_colour is Colour.YELLOW
    assert clone.round == 0


# Search contract

def test_actions_report_turn_and_columns():
    game = play(Game(Colour.RED), "AAAAAA")
    is_turn, actions = game.actions(Colour.RED)
    assert is_turn
    assert list(actions) == [c for c in Column.all() if c is not Column.A]

    is_turn, _ = game.actions(Colour.YELLOW)
    assert not is_turn


def test_actions_empty_once_decided():
    game = play(Game(), "ABABABA")
    for colour in Colour:
        _, actions = game.actions(colour)
        assert list(actions) == []


def test_execute_scores_from_players_view():
    game = play(Game(Colour.RED), "ABABAB")
    assert game.copy().execute(Column.C, Colour.RED) is Fitness.TIE
    assert game.copy().execute(Column.A, Colour.RED) is Fitness.WIN
    assert game.copy().execute(Column.A, Colour.YELLOW) is Fitness.LOSS


def test_execute_on_tie_scores_tie():
    game = play(Game(Colour.RED), TIE_MOVES[:-1])
    assert game.execute(Column[TIE_MOVES[-1]], Colour.YELLOW) is Fitness.TIE
    assert game.winner is Winner.TIE


def test_execute_with_illegal_action_raises():
    game = play(Game(), "AAAAAA")
    with pytest.raises(ColumnFullError):
        game.execute(Column.A, Colour.RED)


def test_bounds():
    game = Game()
    assert game.is_upper_bound(Fitness.WIN, Colour.RED)
    assert not game.is_upper_bound(Fitness.TIE, Colour.RED)
    assert game.is_lower_bound(Fitness.LOSS, Colour.YELLOW)
    assert not game.is_lower_bound(Fitness.TIE)
