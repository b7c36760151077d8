from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Optional, Tuple

import numpy as np
from numpy.typing import NDArray

BoardArray = NDArray[np.int8]


class Cell(IntEnum):
    EMPTY = 0
    PLAYER_A = 1
    PLAYER_B = 2
    CANDIDATE = 3

    @property
    def opponent(self) -> "Cell":
        if self == Cell.PLAYER_A:
            return Cell.PLAYER_B
        if self == Cell.PLAYER_B:
            return Cell.PLAYER_A
        raise ValueError(f"{self.name} is not a player.")

    @property
    def is_player(self) -> bool:
        return self in (Cell.PLAYER_A, Cell.PLAYER_B)


PLAYERS: Tuple[Cell, Cell] = (Cell.PLAYER_A, Cell.PLAYER_B)


class Winner(Enum):
    PLAYER_A = "player_a"
    PLAYER_B = "player_b"
    TIE = "tie"


class TurnPhase(Enum):
    AWAITING_HUMAN_MOVE = "awaiting_human_move"
    AWAITING_AI_MOVE = "awaiting_ai_move"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class Move:
    """A placement. Search results carry the score that ranked them."""

    row: int
    column: int
    score: int = 0
    board: Optional[BoardArray] = field(default=None, compare=False, repr=False)

    @property
    def is_sentinel(self) -> bool:
        return self.row < 0 or self.column < 0

    def as_tuple(self) -> Tuple[int, int]:
        return (self.row, self.column)


NO_MOVE = Move(-1, -1)


@dataclass(frozen=True)
class GameOutcome:
    winner: Winner
    score_a: int
    score_b: int
    plies: int = 0


@dataclass
class GameState:
    board: BoardArray  # shape (N, N), dtype=np.int8, values are Cell
    current_player: Cell = Cell.PLAYER_A
    legal_move_count: int = 0
    ply_count: int = 0
    pass_count: int = 0
    phase: TurnPhase = TurnPhase.AWAITING_HUMAN_MOVE

    @property
    def size(self) -> int:
        return int(self.board.shape[0])

    def __repr__(self) -> str:
        return (
            f"GameState(current={self.current_player.name}, phase={self.phase.value}, "
            f"ply={self.ply_count})\n{format_board(self.board)}"
        )


_SYMBOLS = {
    Cell.EMPTY: ".",
    Cell.PLAYER_A: "B",
    Cell.PLAYER_B: "W",
    Cell.CANDIDATE: "*",
}


def format_board(board: BoardArray, *, coordinates: bool = False) -> str:
    rows = []
    for r in range(board.shape[0]):
        line = "".join(_SYMBOLS[Cell(int(cell))] for cell in board[r])
        rows.append(f"{r} {line}" if coordinates else line)
    if coordinates:
        header = "  " + "".join(str(c % 10) for c in range(board.shape[1]))
        rows.insert(0, header)
    return "\n".join(rows)


# Convenient tuple alias used across modules
Position = Tuple[int, int]
