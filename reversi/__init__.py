"""Reversi engine with minimax/alpha-beta AI."""

from . import core, evaluation, search, players, game, env
from .config import GameConfig, load_config
from .core import (
    Cell,
    GameOutcome,
    GameState,
    InvalidBoardSize,
    InvalidCellSelection,
    Move,
    TurnPhase,
    Winner,
)
from .env import ReversiEnv
from .evaluation import EvaluatorPreset, HeuristicWeights, WeightedEvaluator, make_evaluator
from .game import EvaluationResult, ReversiGame, evaluate_policies, play_match
from .players import Policy, RandomPolicy, SearchPolicy
from .search import SearchConfig, SearchEngine

__all__ = [
    "core",
    "evaluation",
    "search",
    "players",
    "game",
    "env",
    "GameConfig",
    "load_config",
    "Cell",
    "GameOutcome",
    "GameState",
    "InvalidBoardSize",
    "InvalidCellSelection",
    "Move",
    "TurnPhase",
    "Winner",
    "ReversiEnv",
    "EvaluatorPreset",
    "HeuristicWeights",
    "WeightedEvaluator",
    "make_evaluator",
    "EvaluationResult",
    "ReversiGame",
    "evaluate_policies",
    "play_match",
    "Policy",
    "RandomPolicy",
    "SearchPolicy",
    "SearchConfig",
    "SearchEngine",
]
