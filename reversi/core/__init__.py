"""Core game logic: board representation, rules and move generation."""

from .errors import (
    InvalidBoardSize,
    InvalidCellSelection,
    InvalidConfiguration,
    OutOfBoundsScan,
    ReversiError,
)
from .state import (
    NO_MOVE,
    PLAYERS,
    BoardArray,
    Cell,
    GameOutcome,
    GameState,
    Move,
    TurnPhase,
    Winner,
    format_board,
)
from .rules import (
    DEFAULT_BOARD_SIZE,
    DIRECTIONS,
    advance_turn,
    apply_flip,
    apply_move,
    candidate_cells,
    check_direction,
    clear_candidates,
    count_legal_moves,
    evaluate_outcome,
    flips_for_move,
    initialize_board,
    initialize_game_state,
    is_legal_move,
    is_terminal,
    legal_moves,
    piece_counts,
    validate_board_size,
)

__all__ = [
    "ReversiError",
    "InvalidBoardSize",
    "InvalidCellSelection",
    "InvalidConfiguration",
    "OutOfBoundsScan",
    "NO_MOVE",
    "PLAYERS",
    "BoardArray",
    "Cell",
    "GameOutcome",
    "GameState",
    "Move",
    "TurnPhase",
    "Winner",
    "format_board",
    "DEFAULT_BOARD_SIZE",
    "DIRECTIONS",
    "advance_turn",
    "apply_flip",
    "apply_move",
    "candidate_cells",
    "check_direction",
    "clear_candidates",
    "count_legal_moves",
    "evaluate_outcome",
    "flips_for_move",
    "initialize_board",
    "initialize_game_state",
    "is_legal_move",
    "is_terminal",
    "legal_moves",
    "piece_counts",
    "validate_board_size",
]
