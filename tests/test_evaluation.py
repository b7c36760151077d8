import numpy as np
import pytest

from reversi.core import Cell, InvalidConfiguration, apply_move, initialize_board, legal_moves
from reversi.evaluation import (
    PRESET_WEIGHTS,
    EvaluatorPreset,
    HeuristicWeights,
    WeightedEvaluator,
    corner_score,
    make_evaluator,
    mobility_score,
    piece_difference,
)

A = Cell.PLAYER_A
B = Cell.PLAYER_B


def test_opening_position_is_balanced() -> None:
    board = initialize_board()
    assert piece_difference(board, A) == 0
    assert corner_score(board, A) == 0
    assert mobility_score(board, A) == 0
    for preset in EvaluatorPreset:
        assert make_evaluator(preset)(board, A) == 0


def test_terms_after_opening_move() -> None:
    board = initialize_board()
    apply_move(board, A, 2, 3)
    assert piece_difference(board, A) == 3
    assert piece_difference(board, B) == -3
    assert mobility_score(board, A) == 0
    assert make_evaluator(EvaluatorPreset.STRONG)(board, A) == 3
    assert make_evaluator(EvaluatorPreset.WEAK)(board, B) == -3


def test_corner_score_counts_each_corner() -> None:
    board = np.zeros((6, 6), dtype=np.int8)
    board[0, 0] = A
    board[0, 5] = A
    board[5, 5] = B
    board[5, 0] = Cell.CANDIDATE
    assert corner_score(board, A) == 1
    assert corner_score(board, B) == -1


def test_mobility_ignores_existing_candidates() -> None:
    board = initialize_board()
    apply_move(board, A, 2, 3)
    plain = mobility_score(board, B)
    legal_moves(board, B)
    assert mobility_score(board, B) == plain


def test_weighted_combination() -> None:
    board = np.zeros((4, 4), dtype=np.int8)
    board[0, 0] = A
    board[0, 1] = B
    board[1, 1] = B
    weights = HeuristicWeights(corners=10, mobility=2, pieces=1)
    expected = (
        10 * corner_score(board, A)
        + 2 * mobility_score(board, A)
        + piece_difference(board, A)
    )
    assert WeightedEvaluator(weights)(board, A) == expected


def test_presets() -> None:
    strong = PRESET_WEIGHTS[EvaluatorPreset.STRONG]
    weak = PRESET_WEIGHTS[EvaluatorPreset.WEAK]
    assert strong.corners > strong.pieces
    assert strong.mobility > strong.pieces
    assert (weak.corners, weak.mobility, weak.pieces) == (0, 0, 1)
    assert make_evaluator("Strong").weights == strong


def test_unknown_preset_rejected() -> None:
    with pytest.raises(InvalidConfiguration):
        make_evaluator("grandmaster")
