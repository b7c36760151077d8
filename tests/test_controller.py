import numpy as np
import pytest

from reversi.config import GameConfig
from reversi.core import (
    Cell,
    TurnPhase,
    Winner,
    candidate_cells,
    initialize_board,
    piece_counts,
)
from reversi.game import ReversiGame
from reversi.players import SearchPolicy

A = Cell.PLAYER_A
B = Cell.PLAYER_B


def hot_seat(**overrides) -> GameConfig:
    return GameConfig(ai_players=(), **overrides)


class Recorder:
    def __init__(self) -> None:
        self.outcomes = []
        self.frames = []

    def on_game_over(self, winner, score_a, score_b) -> None:
        self.outcomes.append((winner, score_a, score_b))

    def on_board_changed(self, board) -> None:
        self.frames.append(board)


def game_from_board(board: np.ndarray, to_move: Cell, recorder: Recorder, **overrides) -> ReversiGame:
    game = ReversiGame(
        hot_seat(board_size=board.shape[0], **overrides),
        on_game_over=recorder.on_game_over,
        on_board_changed=recorder.on_board_changed,
        autostart=False,
    )
    game.load_position(board, to_move)
    return game


def test_new_game_awaits_first_player() -> None:
    game = ReversiGame(hot_seat())
    assert game.current_player == A
    assert game.phase == TurnPhase.AWAITING_HUMAN_MOVE
    assert game.state.legal_move_count == 4
    assert candidate_cells(game.snapshot()) == [(2, 3), (3, 2), (4, 5), (5, 4)]


def test_opening_move_scenario() -> None:
    game = ReversiGame(hot_seat())
    assert game.attempt_move(2, 3)
    board = game.snapshot()
    assert board[2, 3] == A
    assert board[3, 3] == A
    assert piece_counts(board) == (4, 1)
    assert game.current_player == B
    assert game.state.legal_move_count == 3
    assert candidate_cells(board) == [(2, 2), (2, 4), (4, 2)]


def test_occupied_cell_rejected_without_change() -> None:
    game = ReversiGame(hot_seat())
    before = game.snapshot().copy()
    assert not game.attempt_move(3, 4)
    assert not game.attempt_move(0, 0)
    assert not game.attempt_move(8, 8)
    assert np.array_equal(game.snapshot(), before)
    assert game.current_player == A


def test_candidate_count_matches_accepted_moves() -> None:
    accepted = 0
    for row in range(8):
        for col in range(8):
            game = ReversiGame(hot_seat())
            if game.attempt_move(row, col):
                accepted += 1
    assert accepted == ReversiGame(hot_seat()).state.legal_move_count


def test_snapshot_is_read_only_copy() -> None:
    game = ReversiGame(hot_seat())
    snap = game.snapshot()
    with pytest.raises(ValueError):
        snap[0, 0] = A
    assert not np.shares_memory(snap, game.state.board)


def test_ai_replies_automatically() -> None:
    config = GameConfig(ai_players=(B,), depth_b=1, evaluator_b="weak")
    game = ReversiGame(config)
    assert game.attempt_move(2, 3)
    board = game.snapshot()
    # All three replies tie on piece count; the first in row-major order is kept.
    assert board[2, 2] == B
    assert piece_counts(board) == (3, 3)
    assert game.current_player == A
    assert game.phase == TurnPhase.AWAITING_HUMAN_MOVE
    assert game.state.ply_count == 2


def test_human_move_rejected_on_ai_turn() -> None:
    holder = []
    results = []

    def on_board_changed(board) -> None:
        if holder and holder[0].phase == TurnPhase.AWAITING_AI_MOVE:
            game = holder[0]
            # Candidates for the AI are still marked on the live board.
            row, column = candidate_cells(game.state.board)[0]
            results.append(game.attempt_move(row, column))

    config = GameConfig(ai_players=(B,), depth_b=1)
    game = ReversiGame(config, on_board_changed=on_board_changed)
    holder.append(game)
    assert game.attempt_move(2, 3)

    assert results == [False]
    assert game.current_player == A
    assert game.phase == TurnPhase.AWAITING_HUMAN_MOVE
    assert game.state.ply_count == 2
    assert sum(piece_counts(game.snapshot())) == 6


def test_pass_skips_player_without_moves() -> None:
    board = np.zeros((4, 4), dtype=np.int8)
    board[0, 0] = A
    board[0, 1] = B
    recorder = Recorder()
    game = game_from_board(board, B, recorder, max_games=1)

    assert game.current_player == A
    assert game.state.pass_count == 1
    assert game.state.legal_move_count == 1
    assert candidate_cells(game.snapshot()) == [(0, 2)]
    assert len(recorder.frames) == 1

    assert game.attempt_move(0, 2)
    assert recorder.outcomes == [(Winner.PLAYER_A, 3, 0)]
    assert game.is_over
    assert not game.attempt_move(0, 3)


def test_full_board_tie() -> None:
    board = np.zeros((4, 4), dtype=np.int8)
    board[:2, :] = A
    board[2:, :] = B
    recorder = Recorder()
    game = game_from_board(board, A, recorder, max_games=1)
    assert recorder.outcomes == [(Winner.TIE, 8, 8)]
    assert game.outcomes[-1].winner == Winner.TIE
    assert game.phase == TurnPhase.GAME_OVER


def test_finished_game_ignores_further_turns() -> None:
    board = np.zeros((4, 4), dtype=np.int8)
    board[:2, :] = A
    board[2:, :] = B
    recorder = Recorder()
    game = game_from_board(board, A, recorder, max_games=1)
    game._finish_turn()
    game._finish_turn()
    assert recorder.outcomes == [(Winner.TIE, 8, 8)]
    assert game.games_completed == 1
    assert len(game.outcomes) == 1
    assert game.phase == TurnPhase.GAME_OVER
    assert not game.attempt_move(0, 0)


def test_load_position_rejects_mismatched_board() -> None:
    game = ReversiGame(hot_seat())
    with pytest.raises(ValueError):
        game.load_position(initialize_board(6), A)
    with pytest.raises(ValueError):
        game.load_position(initialize_board(8), Cell.EMPTY)



def test_terminal_resets_to_fresh_game() -> None:
    board = np.zeros((4, 4), dtype=np.int8)
    board[:, :] = B
    board[0, 0] = A
    recorder = Recorder()
    game = game_from_board(board, B, recorder)
    assert recorder.outcomes == [(Winner.PLAYER_B, 1, 15)]
    assert game.games_completed == 1
    assert game.phase == TurnPhase.AWAITING_HUMAN_MOVE
    assert game.current_player == A
    fresh = initialize_board(4)
    assert piece_counts(game.snapshot()) == piece_counts(fresh)


def test_self_play_runs_to_completion() -> None:
    recorder = Recorder()
    config = GameConfig(board_size=6, ai_players=(A, B), depth_a=1, depth_b=2, evaluator_a="weak")
    game = ReversiGame(config, on_game_over=recorder.on_game_over, on_board_changed=recorder.on_board_changed)
    assert game.is_over
    assert game.games_completed == 1
    assert len(recorder.outcomes) == 1
    winner, score_a, score_b = recorder.outcomes[0]
    assert score_a + score_b <= 36
    assert game.outcomes[0].plies <= 36 - 4
    for frame in recorder.frames:
        assert not candidate_cells(frame)
        total = sum(int(np.count_nonzero(frame == c)) for c in Cell)
        assert total == 36


def test_self_play_multiple_games() -> None:
    config = GameConfig(board_size=4, ai_players=(A, B), depth_a=1, depth_b=1, max_games=3)
    game = ReversiGame(config)
    assert game.games_completed == 3
    assert len(game.outcomes) == 3


def test_custom_agents_take_seats() -> None:
    agent = SearchPolicy.from_settings(1, "weak")
    game = ReversiGame(hot_seat(), agents={B: agent})
    assert game.is_ai(B)
    assert not game.is_ai(A)
    assert game.attempt_move(2, 3)
    assert game.current_player == A
