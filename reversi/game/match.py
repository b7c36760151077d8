from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from reversi.config import GameConfig
from reversi.core import Cell, GameOutcome, Winner
from reversi.players import Policy

from .controller import ReversiGame


@dataclass
class EvaluationResult:
    games_played: int
    player_a_wins: int
    player_b_wins: int
    ties: int
    average_length: float
    average_margin: float = 0.0

    def winrate_player_a(self) -> float:
        return self.player_a_wins / max(1, self.games_played)

    def winrate_player_b(self) -> float:
        return self.player_b_wins / max(1, self.games_played)

    def as_dict(self) -> dict:
        return {
            "games": self.games_played,
            "player_a_wins": self.player_a_wins,
            "player_b_wins": self.player_b_wins,
            "ties": self.ties,
            "average_length": self.average_length,
            "average_margin": self.average_margin,
            "player_a_winrate": self.winrate_player_a(),
            "player_b_winrate": self.winrate_player_b(),
        }


def play_match(policy_a: Policy, policy_b: Policy, *, board_size: int = 8) -> GameOutcome:
    """Play one game between two policies and return its outcome."""
    config = GameConfig(board_size=board_size, ai_players=(Cell.PLAYER_A, Cell.PLAYER_B), max_games=1)
    game = ReversiGame(config, agents={Cell.PLAYER_A: policy_a, Cell.PLAYER_B: policy_b})
    return game.outcomes[-1]


def evaluate_policies(
    policy_a: Policy,
    policy_b: Policy,
    *,
    episodes: int,
    board_size: int = 8,
    progress: Optional[Callable[[Iterable[int]], Iterable[int]]] = None,
) -> EvaluationResult:
    a_wins = 0
    b_wins = 0
    ties = 0
    total_ply = 0
    total_margin = 0

    iterator = progress(range(episodes)) if progress is not None else range(episodes)
    for _ in iterator:
        outcome = play_match(policy_a, policy_b, board_size=board_size)
        total_ply += outcome.plies
        total_margin += outcome.score_a - outcome.score_b
        if outcome.winner == Winner.PLAYER_A:
            a_wins += 1
        elif outcome.winner == Winner.PLAYER_B:
            b_wins += 1
        else:
            ties += 1

    return EvaluationResult(
        games_played=episodes,
        player_a_wins=a_wins,
        player_b_wins=b_wins,
        ties=ties,
        average_length=total_ply / max(1, episodes),
        average_margin=total_margin / max(1, episodes),
    )
