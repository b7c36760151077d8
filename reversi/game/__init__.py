"""Game controller wiring rules, search and player seats together."""

from .controller import ReversiGame
from .match import EvaluationResult, evaluate_policies, play_match

__all__ = ["ReversiGame", "EvaluationResult", "evaluate_policies", "play_match"]
