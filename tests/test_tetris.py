import random
import threading

import numpy as np
import pytest

from blockfall.config import GameConfig
from blockfall.game.tetris import Command, GameStatus, TetrisGame
from blockfall.game.validity import is_valid


def test_new_game_is_running_at_level_one(make_game):
    game = make_game()
    assert game.status is GameStatus.RUNNING
    assert (game.score, game.level, game.lines) == (0, 1, 0)
    assert game.grid.is_empty()
    assert (game.piece.x, game.piece.y) == (4, 0)
    assert game.clock.descent.armed
    assert game.clock.descent.period_ms == 1000


def test_descent_tick_moves_piece_down(make_game):
    game = make_game()
    game.tick(999)
    assert game.piece.y == 0
    game.tick(1)
    assert game.piece.y == 1
    game.tick(3000)
    assert game.piece.y == 4


def test_move_left_example_clamps_at_zero(make_game):
    game = make_game()
    for _ in range(5):
        game.dispatch(Command.MOVE_LEFT)
    assert game.piece.x == 0
    assert game.dispatch(Command.MOVE_LEFT) is False
    assert game.piece.x == 0


def test_pause_suspends_everything(make_game):
    game = make_game()
    assert game.dispatch(Command.PAUSE)
    assert game.status is GameStatus.PAUSED
    assert not game.clock.running

    game.tick(10_000)
    assert game.piece.y == 0
    for command in (Command.MOVE_LEFT, Command.ROTATE, Command.SOFT_DROP, Command.HARD_DROP):
        assert game.dispatch(command) is False
    assert (game.piece.x, game.piece.y) == (4, 0)
    assert game.dispatch(Command.PAUSE) is False


def test_resume_keeps_descent_progress(make_game):
    game = make_game()
    game.tick(900)
    game.dispatch(Command.PAUSE)
    game.tick(5000)
    assert game.dispatch(Command.RESUME)
    assert game.status is GameStatus.RUNNING
    assert game.clock.descent.period_ms == 1000

    game.tick(100)
    assert game.piece.y == 1
    assert game.dispatch(Command.RESUME) is False


def test_pausing_before_each_descent_does_not_stall_gravity(make_game):
    game = make_game()
    for _ in range(10):
        game.tick(900)
        game.dispatch(Command.TOGGLE_PAUSE)
        game.dispatch(Command.TOGGLE_PAUSE)
    assert game.piece.y == 9


def test_toggle_pause(make_game):
    game = make_game()
    game.dispatch(Command.TOGGLE_PAUSE)
    assert game.status is GameStatus.PAUSED
    game.dispatch(Command.TOGGLE_PAUSE)
    assert game.status is GameStatus.RUNNING


def _top_out(game):
    game.grid.set_cell(2, 4, 2)
    game.dispatch(Command.SOFT_DROP)


def test_top_out_ends_the_game(make_game):
    game = make_game()
    _top_out(game)
    assert game.status is GameStatus.OVER
    assert game.game_over
    assert not game.clock.running


def test_commands_after_game_over_are_ignored(make_game):
    game = make_game()
    _top_out(game)
    board = game.grid.get_grid()
    score = game.score

    for command in Command:
        if command is not Command.RESET:
            assert game.dispatch(command) is False
    game.tick(60_000)

    np.testing.assert_array_equal(game.grid.grid, board)
    assert game.score == score
    assert game.status is GameStatus.OVER


def test_reset_restores_a_fresh_game(make_game, fill_row):
    game = make_game()
    fill_row(game.grid, 19, except_cols=(4, 5))
    game.dispatch(Command.HARD_DROP)
    assert game.score == 100
    _top_out(game)

    assert game.dispatch(Command.RESET)

    assert game.status is GameStatus.RUNNING
    assert (game.score, game.level, game.lines) == (0, 1, 0)
    assert game.grid.is_empty()
    assert game.clock.descent.armed
    assert game.clock.descent.period_ms == 1000


def test_reset_while_paused(make_game):
    game = make_game()
    game.dispatch(Command.PAUSE)
    assert game.dispatch(Command.RESET)
    assert game.status is GameStatus.RUNNING
    assert game.clock.running


def test_repeated_resets_never_stack_timers(make_game):
    game = make_game()
    for _ in range(5):
        game.dispatch(Command.RESET)
    game.tick(1000)
    assert game.piece.y == 1


def test_line_clear_example(make_game, fill_row):
    game = make_game()
    fill_row(game.grid, 19, except_cols=(4, 5))
    game.grid.set_cell(10, 0, 3)
    game.scores.score = 200

    game.dispatch(Command.HARD_DROP)

    assert game.score == 300
    assert game.lines == 1
    assert game.grid.cell_at(11, 0) == 3
    assert list(game.grid.grid[19]) == [0, 0, 0, 0, 1, 1, 0, 0, 0, 0]


def test_level_up_speeds_up_descent(make_game, fill_row):
    game = make_game()
    game.scores.score = 900
    fill_row(game.grid, 19, except_cols=(4, 5))

    game.dispatch(Command.HARD_DROP)

    assert game.score == 1000
    assert game.level == 2
    assert game.clock.descent.period_ms == 900


def test_level_rises_once_when_several_thresholds_are_crossed(make_game, fill_row):
    game = make_game(points_per_line=1000)
    game.scores.score = 900
    fill_row(game.grid, 18, except_cols=(4, 5))
    fill_row(game.grid, 19, except_cols=(4, 5))

    game.dispatch(Command.HARD_DROP)

    assert game.score == 2900
    assert game.level == 2
    assert game.clock.descent.period_ms == 900


def test_render_ticks_publish_snapshots(make_game):
    snapshots = []
    game = make_game(on_render=snapshots.append, fps=10)
    assert len(snapshots) == 1  # the reset itself

    for _ in range(10):
        game.tick(100)

    assert len(snapshots) == 11
    assert snapshots[-1].piece.y == 1
    assert all(s.status is GameStatus.RUNNING for s in snapshots)


def test_long_host_frame_publishes_a_single_snapshot(make_game):
    snapshots = []
    game = make_game(on_render=snapshots.append, fps=60)
    game.tick(5000)
    assert len(snapshots) == 2
    assert snapshots[-1].piece.y == 5


def test_render_tick_leaves_game_state_untouched(make_game, fill_row):
    snapshots = []
    game = make_game(on_render=snapshots.append, fps=10)
    fill_row(game.grid, 19, except_cols=(4, 5))
    game.dispatch(Command.MOVE_LEFT)
    before = game.snapshot()

    game.tick(100)

    after = game.snapshot()
    assert len(snapshots) == 2
    for snap in (snapshots[-1], after):
        np.testing.assert_array_equal(snap.grid, before.grid)
        assert (snap.piece.x, snap.piece.y) == (before.piece.x, before.piece.y)
        assert (snap.score, snap.level, snap.lines) == (before.score, before.level, before.lines)
        assert snap.ghost_y == before.ghost_y
        assert snap.status is before.status


def test_paused_game_publishes_once_then_stays_silent(make_game):
    snapshots = []
    game = make_game(on_render=snapshots.append, fps=10)
    game.dispatch(Command.PAUSE)
    count = len(snapshots)
    assert snapshots[-1].status is GameStatus.PAUSED

    game.tick(5000)
    assert len(snapshots) == count


def test_game_over_is_published(make_game):
    snapshots = []
    game = make_game(on_render=snapshots.append)
    _top_out(game)
    assert snapshots[-1].status is GameStatus.OVER
    assert snapshots[-1].ghost_y is None


def test_snapshot_is_a_detached_copy(make_game):
    game = make_game()
    snap = game.snapshot()
    snap.grid[19, 0] = 5
    assert game.grid.cell_at(19, 0) == 0
    assert snap.ghost_y == 18


def test_snapshot_board_with_piece(make_game):
    game = make_game(color=4)
    board = game.snapshot().board_with_piece()
    assert board[0, 4] == board[0, 5] == board[1, 4] == board[1, 5] == 4
    assert int(board.sum()) == 16


def test_board_too_narrow_for_first_piece_is_over_at_once(make_game):
    game = make_game("I", cols=3, rows=5)
    assert game.status is GameStatus.OVER
    assert not game.clock.running


@pytest.mark.parametrize("seed", [0, 1, 2])
def test_invariants_hold_through_random_play(seed):
    game = TetrisGame(GameConfig(seed=seed))
    player = random.Random(seed)
    commands = [Command.MOVE_LEFT, Command.MOVE_RIGHT, Command.ROTATE,
                Command.SOFT_DROP, Command.HARD_DROP]
    last_score, last_level = game.score, game.level

    for _ in range(2000):
        if game.game_over:
            game.dispatch(Command.RESET)
            last_score, last_level = 0, 1
        game.dispatch(player.choice(commands))
        game.tick(player.randint(0, 400))

        assert game.grid.grid.shape == (20, 10)
        assert game.score >= last_score
        assert last_level <= game.level <= last_level + 1
        assert game.score % 100 == 0
        last_score, last_level = game.score, game.level


def test_concurrent_hosts_keep_the_game_consistent():
    game = TetrisGame(GameConfig(seed=3))
    commands = [Command.MOVE_LEFT, Command.MOVE_RIGHT, Command.ROTATE,
                Command.SOFT_DROP, Command.HARD_DROP]
    errors = []

    def player(seed):
        rng = random.Random(seed)
        try:
            for _ in range(500):
                game.dispatch(rng.choice(commands))
        except Exception as exc:
            errors.append(exc)

    def ticker():
        try:
            for _ in range(500):
                game.tick(50)
        except Exception as exc:
            errors.append(exc)

    threads = [threading.Thread(target=player, args=(s,)) for s in range(3)]
    threads.append(threading.Thread(target=ticker))
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    snap = game.snapshot()
    assert snap.score == snap.lines * 100
    assert not any(game.grid.is_row_full(row) for row in range(game.grid.rows))
    if snap.status is not GameStatus.OVER:
        assert is_valid(snap.piece, game.grid)
