"""
Tests for the TicTacToe game engine.
Covers the full lifecycle: setup, play, win, tie, restart and reset.
"""

import random
import threading

import pytest

from logic.config import GameConfig
from logic.game_engine import GameEngine
from logic.game_state import GameState, Mark, Phase, Player, PlayerSlot


@pytest.fixture
def engine():
    return GameEngine(GameConfig(verbose=False))


@pytest.fixture
def started(engine):
    engine.set_player_name(PlayerSlot.ONE, "Amy")
    engine.set_player_name(PlayerSlot.TWO, "Bob")
    assert engine.start_game()
    return engine


def play(engine, moves):
    for index in moves:
        assert engine.make_move(index), f"move {index} was rejected"


# ==================== SETUP ====================

def test_new_engine_is_in_setup(engine):
    assert engine.state == GameState()
    assert engine.state.phase == Phase.SETUP


def test_set_player_name(engine):
    engine.set_player_name(PlayerSlot.ONE, "Amy")
    engine.set_player_name(PlayerSlot.TWO, "x")  # not checked yet
    assert engine.state.player_one == Player("Amy", Mark.X)
    assert engine.state.player_two == Player("x", Mark.O)
    assert not engine.state.name_error


def test_set_player_one_mark_keeps_marks_complementary(engine):
    engine.set_player_one_mark(Mark.O)
    assert engine.state.player_one.mark == Mark.O
    assert engine.state.player_two.mark == Mark.X

    engine.set_player_one_mark(Mark.X)
    assert engine.state.player_one.mark == Mark.X
    assert engine.state.player_two.mark == Mark.O

    engine.set_player_one_mark(Mark.X)
    assert engine.state.player_one.mark != engine.state.player_two.mark


def test_start_with_short_name_sets_error(engine):
    engine.set_player_name(PlayerSlot.ONE, "Al")
    engine.set_player_name(PlayerSlot.TWO, "Bob")

    assert not engine.start_game()
    assert engine.state.name_error
    assert engine.state.phase == Phase.SETUP


def test_start_with_long_name_sets_error(engine):
    engine.set_player_name(PlayerSlot.ONE, "Amy")
    engine.set_player_name(PlayerSlot.TWO, "B" * 21)

    assert not engine.start_game()
    assert engine.state.name_error


def test_start_with_valid_names(engine):
    engine.set_player_name(PlayerSlot.ONE, "Al")
    engine.set_player_name(PlayerSlot.TWO, "Bob")
    engine.start_game()

    engine.set_player_name(PlayerSlot.ONE, "Amy")
    assert engine.start_game()
    assert engine.state.phase == Phase.IN_PROGRESS
    assert not engine.state.name_error


def test_name_length_limits_are_inclusive(engine):
    engine.set_player_name(PlayerSlot.ONE, "Amy")
    engine.set_player_name(PlayerSlot.TWO, "B" * 20)
    assert engine.start_game()


def test_x_moves_first_even_for_player_two(engine):
    engine.set_player_name(PlayerSlot.ONE, "Amy")
    engine.set_player_name(PlayerSlot.TWO, "Bob")
    engine.set_player_one_mark(Mark.O)
    engine.start_game()

    assert engine.state.active_mark == Mark.X
    assert engine.active_player().name == "Bob"


def test_start_only_from_setup(started):
    before = started.state
    assert not started.start_game()
    assert started.state is before


# ==================== MOVES ====================

def test_move_writes_active_mark_and_flips_turn(started):
    assert started.make_move(4)
    assert started.state.board[4] == Mark.X
    assert started.state.active_mark == Mark.O
    assert started.active_player().name == "Bob"

    assert started.make_move(0)
    assert started.state.board[0] == Mark.O
    assert started.state.active_mark == Mark.X


def test_move_on_occupied_cell_changes_nothing(started):
    started.make_move(4)
    before = started.state

    assert not started.make_move(4)
    assert started.state is before


def test_move_out_of_range_changes_nothing(started):
    before = started.state
    for index in (-1, 9, 42):
        assert not started.make_move(index)
    assert started.state is before


def test_move_before_start_changes_nothing(engine):
    before = engine.state
    assert not engine.make_move(0)
    assert engine.state is before


def test_move_after_finish_changes_nothing(started):
    play(started, [0, 3, 1, 4, 2])
    before = started.state

    for index in range(9):
        assert not started.make_move(index)
    assert started.state is before


def test_exactly_one_cell_changes_per_move(started):
    before = started.state.board
    started.make_move(7)
    after = started.state.board

    changed = [i for i in range(9) if before[i] != after[i]]
    assert changed == [7]


def test_moves_are_recorded(started):
    play(started, [4, 0, 8])
    moves = started.state.moves
    assert [m.index for m in moves] == [4, 0, 8]
    assert [m.mark for m in moves] == [Mark.X, Mark.O, Mark.X]
    assert [m.move_number for m in moves] == [0, 1, 2]


def test_alternation_invariant_random_games(started):
    rng = random.Random(1234)

    for _ in range(50):
        started.restart_game()
        while started.state.phase == Phase.IN_PROGRESS:
            started.make_move(rng.choice(started.get_valid_moves()))

            x = started.state.count(Mark.X)
            o = started.state.count(Mark.O)
            assert x == o or x == o + 1


# ==================== RESULT ====================

def test_top_row_win(started):
    play(started, [0, 3, 1, 4, 2])

    state = started.state
    assert state.phase == Phase.FINISHED
    assert state.winner == Player("Amy", Mark.X)
    assert started.winner_label() == "Amy won!"
    assert started.winning_line() == (0, 1, 2)


def test_win_goes_to_player_holding_the_mark(engine):
    engine.set_player_name(PlayerSlot.ONE, "Amy")
    engine.set_player_name(PlayerSlot.TWO, "Bob")
    engine.set_player_one_mark(Mark.O)
    engine.start_game()

    play(engine, [0, 3, 1, 4, 2])
    assert engine.state.winner == Player("Bob", Mark.X)


def test_o_can_win(started):
    play(started, [0, 2, 1, 4, 8, 6])

    assert started.state.phase == Phase.FINISHED
    assert started.state.winner == Player("Bob", Mark.O)
    assert started.winning_line() == (2, 4, 6)


def test_winning_move_keeps_active_mark(started):
    play(started, [0, 3, 1, 4, 2])
    assert started.state.active_mark == Mark.X


def test_full_board_without_line_is_a_tie(started):
    # X: 0, 1, 5, 6, 8  O: 2, 3, 4, 7
    play(started, [0, 2, 1, 3, 5, 4, 6, 7, 8])

    state = started.state
    assert state.phase == Phase.FINISHED
    assert state.winner is None
    assert state.is_board_full()
    assert started.winner_label() == "It's a tie!"
    assert started.winning_line() is None


def test_win_on_last_cell_is_not_a_tie(started):
    # X completes the 0-4-8 diagonal with the ninth move
    play(started, [0, 1, 2, 5, 3, 6, 4, 7, 8])

    assert started.state.is_board_full()
    assert started.state.winner == Player("Amy", Mark.X)


def test_winner_label_empty_while_playing(started):
    assert started.winner_label() == ""
    started.make_move(0)
    assert started.winner_label() == ""


# ==================== RESTART / RESET ====================

def test_restart_keeps_players(started):
    started.set_player_one_mark(Mark.O)
    play(started, [0, 3, 1, 4, 2])

    assert started.restart_game()
    state = started.state
    assert state.player_one == Player("Amy", Mark.O)
    assert state.player_two == Player("Bob", Mark.X)
    assert state.board == (None,) * 9
    assert state.winner is None
    assert state.active_mark == Mark.X
    assert state.phase == Phase.IN_PROGRESS
    assert state.moves == ()


def test_restart_mid_game(started):
    play(started, [0, 4])
    assert started.restart_game()
    assert started.state.board == (None,) * 9
    assert started.state.active_mark == Mark.X


def test_restart_not_allowed_in_setup(engine):
    before = engine.state
    assert not engine.restart_game()
    assert engine.state is before


def test_reset_restores_defaults(started):
    started.set_player_one_mark(Mark.O)
    play(started, [0, 3, 1])

    started.reset_game()
    assert started.state == GameState()
    assert started.state.phase == Phase.SETUP
    assert started.state.player_one == Player("", Mark.X)
    assert started.state.player_two == Player("", Mark.O)


def test_reset_clears_name_error(engine):
    engine.start_game()
    assert engine.state.name_error

    engine.reset_game()
    assert not engine.state.name_error


def test_mark_swap_during_game(started):
    started.make_move(0)  # Amy plays X, Bob is next with O
    started.set_player_one_mark(Mark.O)

    state = started.state
    assert state.board[0] == Mark.X
    assert state.active_mark == Mark.O
    assert started.active_player().name == "Amy"


# ==================== SUBSCRIBERS ====================

def test_subscribe_gets_current_state(engine):
    seen = []
    engine.subscribe(seen.append)
    assert seen == [engine.state]


def test_subscriber_notified_once_per_change(started):
    seen = []
    started.subscribe(seen.append)
    seen.clear()

    started.make_move(4)
    started.make_move(4)  # rejected
    started.make_move(9)  # rejected
    started.make_move(0)

    assert len(seen) == 2
    assert seen[-1] is started.state
    assert seen[0].board[4] == Mark.X


def test_no_notification_for_unchanged_state(engine):
    seen = []
    engine.subscribe(seen.append)
    seen.clear()

    engine.set_player_one_mark(Mark.X)
    engine.set_player_name(PlayerSlot.ONE, "")
    engine.reset_game()
    assert seen == []


def test_unsubscribe(engine):
    seen = []
    unsubscribe = engine.subscribe(seen.append)
    unsubscribe()
    seen.clear()

    engine.set_player_name(PlayerSlot.ONE, "Amy")
    assert seen == []

    unsubscribe()  # second call is harmless


def test_subscriber_only_sees_finished_states_after_win(started):
    play(started, [0, 3, 1, 4])
    seen = []
    started.subscribe(seen.append)
    seen.clear()

    started.make_move(2)
    assert len(seen) == 1
    assert seen[0].phase == Phase.FINISHED
    assert seen[0].board[2] == Mark.X


def test_subscriber_may_call_engine(started):
    def auto_reply(state):
        if state.phase == Phase.IN_PROGRESS and state.active_mark == Mark.O:
            started.make_move(state.get_empty_cells()[0])

    started.subscribe(auto_reply)
    started.make_move(4)

    assert started.state.board[0] == Mark.O
    assert started.state.active_mark == Mark.X


def test_concurrent_moves_are_serialized(started):
    barrier = threading.Barrier(9)
    results = []

    def worker(index):
        barrier.wait()
        results.append(started.make_move(index))

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(9)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    state = started.state
    placed = len(state.moves)
    assert results.count(True) == placed
    x = state.count(Mark.X)
    o = state.count(Mark.O)
    assert x == o or x == o + 1


def test_every_subscriber_ends_on_latest_snapshot(started):
    def auto_reply(state):
        if state.phase == Phase.IN_PROGRESS and state.active_mark == Mark.O:
            started.make_move(state.get_empty_cells()[0])

    seen = []
    started.subscribe(auto_reply)
    started.subscribe(seen.append)
    seen.clear()

    started.make_move(4)

    assert seen[-1] is started.state
    assert len(seen[-1].moves) == 2
    assert [len(s.moves) for s in seen] == [2]


def test_winning_line_of_given_snapshot(started):
    play(started, [0, 3, 1, 4, 2])
    finished = started.state

    started.restart_game()
    assert started.winning_line() is None
    assert started.winning_line(finished) == (0, 1, 2)
