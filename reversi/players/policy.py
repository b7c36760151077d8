from __future__ import annotations

import logging
from typing import Optional, Union

import numpy as np

from reversi.core import BoardArray, Cell, Move, candidate_cells, legal_moves
from reversi.evaluation.heuristics import EvaluatorPreset, make_evaluator
from reversi.search import SearchConfig, SearchEngine

logger = logging.getLogger(__name__)


class Policy:
    """Chooses a placement for ``player`` on a board."""

    name = "policy"

    def select_move(self, board: BoardArray, player: Cell) -> Optional[Move]:
        raise NotImplementedError

    def _candidates(self, board: BoardArray, player: Cell):
        scratch = board.copy()
        legal_moves(scratch, player)
        return candidate_cells(scratch)


class RandomPolicy(Policy):
    name = "random"

    def __init__(self, rng: Optional[np.random.Generator] = None) -> None:
        self.rng = rng or np.random.default_rng()

    def select_move(self, board: BoardArray, player: Cell) -> Optional[Move]:
        candidates = self._candidates(board, player)
        if not candidates:
            return None
        row, col = candidates[int(self.rng.integers(len(candidates)))]
        return Move(row, col)

    def __repr__(self) -> str:
        return "RandomPolicy()"


class SearchPolicy(Policy):
    """Plays the move returned by a :class:`SearchEngine`.

    A depth-0 engine only scores the current board, so the first candidate in
    row-major order is played instead of the sentinel.
    """

    name = "search"

    def __init__(self, engine: SearchEngine) -> None:
        self.engine = engine

    @classmethod
    def from_settings(
        cls,
        depth: int,
        preset: Union[EvaluatorPreset, str] = EvaluatorPreset.STRONG,
        *,
        use_pruning: bool = True,
    ) -> "SearchPolicy":
        engine = SearchEngine(make_evaluator(preset), SearchConfig(depth=depth, use_pruning=use_pruning))
        return cls(engine)

    def select_move(self, board: BoardArray, player: Cell) -> Optional[Move]:
        move = self.engine.best_move(board, player)
        if not move.is_sentinel:
            return move
        candidates = self._candidates(board, player)
        if not candidates:
            return None
        logger.debug("search returned no placement for %s; playing first candidate", player.name)
        row, col = candidates[0]
        return Move(row, col, score=move.score)

    def __repr__(self) -> str:
        return f"SearchPolicy(depth={self.engine.max_depth}, evaluator={self.engine.evaluator!r})"
