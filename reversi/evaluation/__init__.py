"""Static evaluation heuristics."""

from .heuristics import (
    PRESET_WEIGHTS,
    EvaluationFn,
    EvaluatorPreset,
    HeuristicWeights,
    WeightedEvaluator,
    corner_score,
    make_evaluator,
    mobility_score,
    piece_difference,
    resolve_preset,
)

__all__ = [
    "PRESET_WEIGHTS",
    "EvaluationFn",
    "EvaluatorPreset",
    "HeuristicWeights",
    "WeightedEvaluator",
    "corner_score",
    "make_evaluator",
    "mobility_score",
    "piece_difference",
    "resolve_preset",
]
