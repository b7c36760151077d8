import json
from pathlib import Path

import pytest

from reversi import GameConfig, ReversiGame
from reversi.core import Cell

from scripts.play_vs_ai import MoveRecorder, replay_logged_game


def create_sample_log(path: Path) -> None:
    moves = [
        {"move_index": 0, "player": "PLAYER_A", "row": 2, "column": 3},
        {"move_index": 1, "player": "PLAYER_B", "row": 2, "column": 2},
    ]
    log = {"metadata": {"board_size": 8}, "moves": moves}
    path.write_text(json.dumps(log))


def test_replay_logged_game(tmp_path):
    log_path = tmp_path / "game.json"
    create_sample_log(log_path)
    summary = replay_logged_game(log_path, verbose=False)
    assert summary["moves"] == 2
    assert summary["result"] == "ongoing"
    board = summary["board"]
    assert board[2][3] == 1
    assert board[2][2] == 2
    assert board[3][3] == 2


def test_replay_rejects_illegal_move(tmp_path):
    log_path = tmp_path / "bad.json"
    log_path.write_text(json.dumps({"moves": [{"player": "PLAYER_A", "row": 0, "column": 0}]}))
    with pytest.raises(ValueError):
        replay_logged_game(log_path, verbose=False)


def test_recorder_log_replays_self_play_game(tmp_path):
    recorder = MoveRecorder()
    config = GameConfig(board_size=6, ai_players=(Cell.PLAYER_A, Cell.PLAYER_B), depth_a=1, depth_b=1)
    game = ReversiGame(config, on_board_changed=recorder, on_game_over=lambda *args: recorder.finish_game())
    assert len(recorder.games) == 1
    moves = recorder.games[0]
    assert len(moves) == game.outcomes[0].plies

    log_path = tmp_path / "self_play.json"
    log_path.write_text(json.dumps({"metadata": {"board_size": 6}, "moves": moves}))
    summary = replay_logged_game(log_path, verbose=False)
    assert summary["result"] == game.outcomes[0].winner.value
