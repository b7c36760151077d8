#!/usr/bin/env python3
"""Play Reversi against the minimax AI via the console, with optional logging & replay."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Dict, List

from reversi import GameConfig, ReversiGame, load_config
from reversi.config import parse_seats
from reversi.core import (
    Cell,
    Winner,
    advance_turn,
    apply_move,
    candidate_cells,
    format_board,
    initialize_game_state,
    is_legal_move,
    legal_moves,
)


class MoveRecorder:
    """Collects every placement by diffing consecutive snapshots."""

    def __init__(self) -> None:
        self.moves: List[Dict] = []
        self.games: List[List[Dict]] = []
        self._previous = None

    def __call__(self, board) -> None:
        if self._previous is not None and board.shape == self._previous.shape:
            placed = (self._previous != Cell.PLAYER_A) & (self._previous != Cell.PLAYER_B)
            placed &= (board == Cell.PLAYER_A) | (board == Cell.PLAYER_B)
            for r, c in zip(*placed.nonzero()):
                self.moves.append(
                    {
                        "move_index": len(self.moves),
                        "player": Cell(int(board[r, c])).name,
                        "row": int(r),
                        "column": int(c),
                    }
                )
        self._previous = board.copy()

    def finish_game(self) -> None:
        self.games.append(self.moves)
        self.moves = []
        self._previous = None


def prompt_human_move(game: ReversiGame) -> None:
    board = game.snapshot()
    moves = candidate_cells(board)
    print("Legal moves: " + ", ".join(f"{r},{c}" for r, c in moves))
    while True:
        raw = input(f"{game.current_player.name} move as row,col (q to quit): ").strip()
        if raw.lower() in {"q", "quit", "exit"}:
            print("Leaving the game.")
            sys.exit(0)
        try:
            row, col = (int(part) for part in raw.replace(" ", ",").split(",") if part)
        except ValueError:
            print("Enter two numbers, e.g. 2,3.")
            continue
        if game.attempt_move(row, col):
            return
        print("Not a legal move. Try again.")


def save_log(log: Dict, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(log, ensure_ascii=False, indent=2))
    print(f"Saved move log to {path}.")


def replay_logged_game(log_path: Path, *, verbose: bool = True) -> Dict[str, object]:
    data = json.loads(log_path.read_text())
    metadata = data.get("metadata", {})
    moves = data.get("moves", [])
    state = initialize_game_state(metadata.get("board_size", 8))
    legal_moves(state.board, state.current_player)
    if verbose:
        print("Replaying logged game.")
        print(format_board(state.board))
    outcome = None
    for entry in moves:
        player = Cell[entry["player"]]
        row, col = entry["row"], entry["column"]
        if player != state.current_player or not is_legal_move(state.board, player, row, col):
            raise ValueError(f"Logged move {entry} is not legal in the replayed position.")
        apply_move(state.board, player, row, col)
        state.ply_count += 1
        outcome = advance_turn(state)
        if verbose:
            print(f"{player.name} plays ({row},{col})")
            print(format_board(state.board))
    summary = {
        "result": outcome.winner.value if outcome is not None else "ongoing",
        "moves": len(moves),
        "board": state.board.tolist(),
    }
    if verbose:
        print("Replay finished.")
        print(f"Result: {summary['result']}")
    return summary


def announce(winner: Winner, score_a: int, score_b: int) -> None:
    if winner == Winner.TIE:
        print(f"Tie game: {score_a} to {score_b}.")
    elif winner == Winner.PLAYER_A:
        print(f"PLAYER_A wins: {score_a} to {score_b}.")
    else:
        print(f"PLAYER_B wins: {score_b} to {score_a}.")


def build_config(args: argparse.Namespace) -> GameConfig:
    config = load_config(args.config, profile=args.profile)
    overrides = {
        "board_size": args.board_size,
        "depth_a": args.depth_a,
        "depth_b": args.depth_b,
        "evaluator_preset": args.preset,
        "log_level": args.log_level,
        "max_games": args.games,
    }
    if args.self_play:
        overrides["ai_players"] = (Cell.PLAYER_A, Cell.PLAYER_B)
    elif args.ai_seats is not None:
        overrides["ai_players"] = parse_seats(args.ai_seats)
    return config.with_overrides(**overrides)


def play_interactive(args: argparse.Namespace) -> None:
    config = build_config(args)
    logging.basicConfig(level=config.log_level.upper(), format="[%(asctime)s] %(name)s: %(message)s", datefmt="%H:%M:%S")
    recorder = MoveRecorder()
    results: List[Dict] = []

    def on_game_over(winner: Winner, score_a: int, score_b: int) -> None:
        announce(winner, score_a, score_b)
        recorder.finish_game()
        results.append({"winner": winner.value, "score_a": score_a, "score_b": score_b})

    def on_board_changed(board) -> None:
        recorder(board)
        if config.self_play and not args.verbose_board:
            return
        print()
        print(format_board(board, coordinates=True))

    # Human games are limited to one unless --games says otherwise.
    if config.max_games is None:
        config = config.with_overrides(max_games=1)

    game = ReversiGame(config, on_game_over=on_game_over, on_board_changed=on_board_changed)
    while not game.is_over:
        prompt_human_move(game)

    print("\nFinal board:")
    print(format_board(game.snapshot(), coordinates=True))

    if args.log_file:
        metadata = {
            "board_size": config.board_size,
            "depth_a": config.depth_a,
            "depth_b": config.depth_b,
            "ai_players": [seat.name for seat in config.ai_players],
            "evaluator_a": config.preset_for(Cell.PLAYER_A).value,
            "evaluator_b": config.preset_for(Cell.PLAYER_B).value,
            "results": results,
        }
        first_game = recorder.games[0] if recorder.games else recorder.moves
        save_log({"metadata": metadata, "moves": first_game, "games": recorder.games}, Path(args.log_file))


def main() -> None:
    parser = argparse.ArgumentParser(description="Play Reversi in the console against the AI.")
    parser.add_argument("--config", type=str, default="configs/default.yaml")
    parser.add_argument("--profile", type=str, help="Profile name inside the config file")
    parser.add_argument("--board-size", type=int)
    parser.add_argument("--depth-a", type=int)
    parser.add_argument("--depth-b", type=int)
    parser.add_argument("--preset", choices=["strong", "balanced", "weak"])
    parser.add_argument("--ai-seats", nargs="*", help="Seats played by the AI, e.g. b or a b")
    parser.add_argument("--self-play", action="store_true")
    parser.add_argument("--games", type=int)
    parser.add_argument("--verbose-board", action="store_true", help="Print every frame in self-play")
    parser.add_argument("--log-level", type=str)
    parser.add_argument("--log-file", type=str)
    parser.add_argument("--replay-log", type=str, help="Replay a logged game and exit")
    parser.add_argument("--replay-quiet", action="store_true")
    args = parser.parse_args()

    if args.replay_log:
        replay_logged_game(Path(args.replay_log), verbose=not args.replay_quiet)
        return

    play_interactive(args)


if __name__ == "__main__":
    main()
