from __future__ import annotations

from typing import List, Optional, Tuple

import numpy as np

from .errors import InvalidBoardSize, OutOfBoundsScan
from .state import BoardArray, Cell, GameOutcome, GameState, Position, TurnPhase, Winner

DEFAULT_BOARD_SIZE = 8
MIN_BOARD_SIZE = 4
DIRECTIONS: Tuple[Tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, 1),
    (1, 1),
    (1, 0),
    (1, -1),
    (0, -1),
)


def validate_board_size(size: int) -> int:
    if isinstance(size, bool) or not isinstance(size, (int, np.integer)):
        raise InvalidBoardSize(f"Board size must be an integer, got {size!r}.")
    if size < MIN_BOARD_SIZE or size % 2 != 0:
        raise InvalidBoardSize(f"Board size must be an even integer >= {MIN_BOARD_SIZE}, got {size}.")
    return int(size)


def initialize_board(size: int = DEFAULT_BOARD_SIZE) -> BoardArray:
    size = validate_board_size(size)
    board = np.zeros((size, size), dtype=np.int8)
    mid = size // 2
    board[mid - 1, mid - 1] = Cell.PLAYER_B
    board[mid - 1, mid] = Cell.PLAYER_A
    board[mid, mid - 1] = Cell.PLAYER_A
    board[mid, mid] = Cell.PLAYER_B
    return board


def initialize_game_state(size: int = DEFAULT_BOARD_SIZE) -> GameState:
    return GameState(board=initialize_board(size), current_player=Cell.PLAYER_A)


def check_direction(
    board: BoardArray,
    player: Cell,
    row: int,
    col: int,
    d_row: int,
    d_col: int,
    test_only: bool = True,
) -> bool:
    """Scan from ``(row, col)`` along one direction for a bracketed opponent run.

    The first stepped-to cell must be an opponent piece; the run is valid once
    one of ``player``'s pieces closes it. With ``test_only`` false a valid run
    is flipped and the placement cell claimed.
    """
    size = board.shape[0]
    opponent = int(player.opponent)
    r, c = row + d_row, col + d_col
    crossed = 0
    # A run can cross at most size - 2 cells before the anchor.
    for _ in range(size):
        if not (0 <= r < size and 0 <= c < size):
            return False
        occupant = int(board[r, c])
        if occupant == opponent:
            crossed += 1
        elif occupant == int(player) and crossed > 0:
            if not test_only:
                apply_flip(board, player, row, col, d_row, d_col)
            return True
        else:
            return False
        r += d_row
        c += d_col
    raise OutOfBoundsScan(f"Scan from ({row},{col}) along ({d_row},{d_col}) did not terminate.")


def apply_flip(board: BoardArray, player: Cell, row: int, col: int, d_row: int, d_col: int) -> int:
    """Flip the opponent run starting next to ``(row, col)``; returns the flip count."""
    size = board.shape[0]
    opponent = int(player.opponent)
    r, c = row + d_row, col + d_col
    flipped = 0
    while True:
        if not (0 <= r < size and 0 <= c < size):
            raise OutOfBoundsScan(f"Flip from ({row},{col}) along ({d_row},{d_col}) left the board.")
        if board[r, c] != opponent:
            break
        board[r, c] = player
        flipped += 1
        r += d_row
        c += d_col
    board[row, col] = player
    return flipped


def is_legal_move(board: BoardArray, player: Cell, row: int, col: int) -> bool:
    if not in_bounds(board, row, col):
        return False
    if int(board[row, col]) not in (Cell.EMPTY, Cell.CANDIDATE):
        return False
    return any(check_direction(board, player, row, col, dr, dc, test_only=True) for dr, dc in DIRECTIONS)


def flips_for_move(board: BoardArray, player: Cell, row: int, col: int) -> List[Position]:
    if not is_legal_move(board, player, row, col):
        return []
    scratch = board.copy()
    apply_move(scratch, player, row, col)
    changed = np.argwhere((scratch != board) & (board == int(player.opponent)))
    return [(int(r), int(c)) for r, c in changed]


def apply_move(board: BoardArray, player: Cell, row: int, col: int) -> int:
    """Place ``player`` at ``(row, col)`` in place, flipping every valid direction.

    Returns the number of discs flipped. Zero means the move was illegal and the
    board was left untouched.
    """
    if not in_bounds(board, row, col):
        return 0
    if int(board[row, col]) not in (Cell.EMPTY, Cell.CANDIDATE):
        return 0
    valid = [(dr, dc) for dr, dc in DIRECTIONS if check_direction(board, player, row, col, dr, dc, test_only=True)]
    flipped = 0
    for dr, dc in valid:
        flipped += apply_flip(board, player, row, col, dr, dc)
    return flipped


def clear_candidates(board: BoardArray) -> BoardArray:
    board[board == Cell.CANDIDATE] = Cell.EMPTY
    return board


def legal_moves(board: BoardArray, player: Cell) -> Tuple[int, BoardArray]:
    """Mark every legal placement for ``player`` as CANDIDATE, in place."""
    clear_candidates(board)
    count = 0
    for r, c in np.argwhere(board == Cell.EMPTY):
        r, c = int(r), int(c)
        if any(check_direction(board, player, r, c, dr, dc, test_only=True) for dr, dc in DIRECTIONS):
            board[r, c] = Cell.CANDIDATE
            count += 1
    return count, board


def count_legal_moves(board: BoardArray, player: Cell) -> int:
    count, _ = legal_moves(board.copy(), player)
    return count


def candidate_cells(board: BoardArray) -> List[Position]:
    return [(int(r), int(c)) for r, c in np.argwhere(board == Cell.CANDIDATE)]


def piece_counts(board: BoardArray) -> Tuple[int, int]:
    return (
        int(np.count_nonzero(board == Cell.PLAYER_A)),
        int(np.count_nonzero(board == Cell.PLAYER_B)),
    )


def is_terminal(board: BoardArray) -> bool:
    return count_legal_moves(board, Cell.PLAYER_A) == 0 and count_legal_moves(board, Cell.PLAYER_B) == 0


def evaluate_outcome(board: BoardArray, plies: int = 0) -> GameOutcome:
    score_a, score_b = piece_counts(board)
    if score_a > score_b:
        winner = Winner.PLAYER_A
    elif score_b > score_a:
        winner = Winner.PLAYER_B
    else:
        winner = Winner.TIE
    return GameOutcome(winner=winner, score_a=score_a, score_b=score_b, plies=plies)


def advance_turn(state: GameState) -> Optional[GameOutcome]:
    """Hand the turn to the next player able to move, skipping passes.

    Leaves candidates marked for the new current player. Returns the outcome and
    sets the phase to GAME_OVER when neither player can move.
    """
    for _ in range(2):
        state.current_player = state.current_player.opponent
        count, _ = legal_moves(state.board, state.current_player)
        state.legal_move_count = count
        if count > 0:
            return None
        state.pass_count += 1
    state.phase = TurnPhase.GAME_OVER
    return evaluate_outcome(state.board, state.ply_count)


def in_bounds(board: BoardArray, row: int, col: int) -> bool:
    size = board.shape[0]
    return 0 <= row < size and 0 <= col < size
