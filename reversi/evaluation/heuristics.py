from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Union

import numpy as np

from reversi.core import BoardArray, Cell, InvalidConfiguration, count_legal_moves

EvaluationFn = Callable[[BoardArray, Cell], int]


class EvaluatorPreset(Enum):
    STRONG = "strong"
    BALANCED = "balanced"
    WEAK = "weak"


@dataclass(frozen=True)
class HeuristicWeights:
    corners: int = 0
    mobility: int = 0
    pieces: int = 1


PRESET_WEIGHTS: Dict[EvaluatorPreset, HeuristicWeights] = {
    EvaluatorPreset.STRONG: HeuristicWeights(corners=25, mobility=5, pieces=1),
    EvaluatorPreset.BALANCED: HeuristicWeights(corners=10, mobility=2, pieces=1),
    EvaluatorPreset.WEAK: HeuristicWeights(corners=0, mobility=0, pieces=1),
}


def piece_difference(board: BoardArray, player: Cell) -> int:
    own = np.count_nonzero(board == int(player))
    other = np.count_nonzero(board == int(player.opponent))
    return int(own - other)


def corner_score(board: BoardArray, player: Cell) -> int:
    last = board.shape[0] - 1
    score = 0
    for r, c in ((0, 0), (0, last), (last, 0), (last, last)):
        occupant = int(board[r, c])
        if occupant == player:
            score += 1
        elif occupant == player.opponent:
            score -= 1
    return score


def mobility_score(board: BoardArray, player: Cell) -> int:
    # Both counts are taken on the same position; no look-ahead.
    return count_legal_moves(board, player) - count_legal_moves(board, player.opponent)


class WeightedEvaluator:
    """Linear combination of corner, mobility and piece-difference terms."""

    def __init__(self, weights: HeuristicWeights = HeuristicWeights()) -> None:
        self.weights = weights

    def __call__(self, board: BoardArray, player: Cell) -> int:
        w = self.weights
        score = 0
        if w.corners:
            score += w.corners * corner_score(board, player)
        if w.mobility:
            score += w.mobility * mobility_score(board, player)
        if w.pieces:
            score += w.pieces * piece_difference(board, player)
        return int(score)

    def __repr__(self) -> str:
        return f"WeightedEvaluator({self.weights})"


def resolve_preset(preset: Union[EvaluatorPreset, str]) -> EvaluatorPreset:
    if isinstance(preset, EvaluatorPreset):
        return preset
    try:
        return EvaluatorPreset(str(preset).lower())
    except ValueError as exc:
        choices = ", ".join(p.value for p in EvaluatorPreset)
        raise InvalidConfiguration(f"Unknown evaluator preset {preset!r}; expected one of {choices}.") from exc


def make_evaluator(preset: Union[EvaluatorPreset, str] = EvaluatorPreset.STRONG) -> WeightedEvaluator:
    return WeightedEvaluator(PRESET_WEIGHTS[resolve_preset(preset)])
