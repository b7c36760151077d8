from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import List, Optional

from reversi.core import (
    NO_MOVE,
    BoardArray,
    Cell,
    InvalidConfiguration,
    Move,
    apply_move,
    candidate_cells,
    legal_moves,
)
from reversi.evaluation.heuristics import EvaluationFn, make_evaluator

logger = logging.getLogger(__name__)

INF = 10**9


@dataclass
class SearchConfig:
    depth: int = 3
    use_pruning: bool = True

    def __post_init__(self) -> None:
        if isinstance(self.depth, bool) or not isinstance(self.depth, int) or self.depth < 0:
            raise InvalidConfiguration(f"Search depth must be a non-negative integer, got {self.depth!r}.")


@dataclass
class SearchStats:
    nodes: int = 0
    leaves: int = 0
    cutoffs: int = 0
    elapsed: float = 0.0


def expand_children(board: BoardArray, mover: Cell) -> List[Move]:
    """One child per CANDIDATE cell of ``board``, in row-major order.

    Each child owns a fresh copy with the move applied and candidates marked
    for the opponent of ``mover``.
    """
    children: List[Move] = []
    for row, col in candidate_cells(board):
        child = board.copy()
        apply_move(child, mover, row, col)
        legal_moves(child, mover.opponent)
        children.append(Move(row, col, board=child))
    return children


class SearchEngine:
    """Depth-limited minimax with alpha-beta pruning.

    Scores are always taken from the root player's perspective: maximising on
    that player's plies, minimising on the opponent's.
    """

    def __init__(
        self,
        evaluator: Optional[EvaluationFn] = None,
        config: Optional[SearchConfig] = None,
    ) -> None:
        self.evaluator = evaluator or make_evaluator()
        self.config = config or SearchConfig()
        self.stats = SearchStats()

    @property
    def max_depth(self) -> int:
        return self.config.depth

    # ------------------------------------------------------------------
    def best_move(
        self,
        board: BoardArray,
        player: Cell,
        depth: int = 0,
        alpha: int = -INF,
        beta: int = INF,
        *,
        is_max: bool = True,
    ) -> Move:
        """Search from ``board`` with ``player`` as the root perspective.

        The caller's board is never modified. When ``depth`` already equals the
        configured depth the static score is returned with a sentinel position.
        """
        self.stats = SearchStats()
        start = time.perf_counter()
        root = board.copy()
        legal_moves(root, player if is_max else player.opponent)
        result = self._search(root, player, depth, alpha, beta, is_max)
        self.stats.elapsed = time.perf_counter() - start
        logger.debug(
            "search %s depth=%d -> (%d,%d) score=%d nodes=%d leaves=%d cutoffs=%d %.3fs",
            player.name,
            self.max_depth,
            result.row,
            result.column,
            result.score,
            self.stats.nodes,
            self.stats.leaves,
            self.stats.cutoffs,
            self.stats.elapsed,
        )
        return result

    def _search(
        self,
        board: BoardArray,
        player: Cell,
        depth: int,
        alpha: int,
        beta: int,
        is_max: bool,
    ) -> Move:
        self.stats.nodes += 1
        if depth >= self.max_depth:
            return self._leaf(board, player)

        mover = player if is_max else player.opponent
        children = expand_children(board, mover)
        if not children:
            # Passes are not modelled inside the tree.
            return self._leaf(board, player)

        best = Move(NO_MOVE.row, NO_MOVE.column, score=-INF if is_max else INF)
        for child in children:
            reply = self._search(child.board, player, depth + 1, alpha, beta, not is_max)
            if is_max:
                if reply.score > best.score:
                    best = Move(child.row, child.column, score=reply.score)
                alpha = max(alpha, best.score)
            else:
                if reply.score < best.score:
                    best = Move(child.row, child.column, score=reply.score)
                beta = min(beta, best.score)
            if self.config.use_pruning and beta <= alpha:
                self.stats.cutoffs += 1
                break
        return best

    def _leaf(self, board: BoardArray, player: Cell) -> Move:
        self.stats.leaves += 1
        return Move(NO_MOVE.row, NO_MOVE.column, score=int(self.evaluator(board, player)))
