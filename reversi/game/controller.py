from __future__ import annotations

import logging
from typing import Callable, Dict, List, Mapping, Optional

import numpy as np

from reversi.config import GameConfig
from reversi.core import (
    PLAYERS,
    BoardArray,
    Cell,
    GameOutcome,
    GameState,
    InvalidCellSelection,
    Move,
    TurnPhase,
    Winner,
    apply_move,
    clear_candidates,
    count_legal_moves,
    evaluate_outcome,
    initialize_game_state,
    is_legal_move,
    legal_moves,
)
from reversi.players import Policy, SearchPolicy

logger = logging.getLogger(__name__)

GameOverCallback = Callable[[Winner, int, int], None]
BoardListener = Callable[[BoardArray], None]


class ReversiGame:
    """Turn machine for one table: human and AI seats, passes and restarts.

    Renderers interact through :meth:`attempt_move`, :meth:`snapshot` and the
    ``on_game_over`` / ``on_board_changed`` callbacks.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        *,
        agents: Optional[Mapping[Cell, Policy]] = None,
        on_game_over: Optional[GameOverCallback] = None,
        on_board_changed: Optional[BoardListener] = None,
        autostart: bool = True,
    ) -> None:
        self.config = config or GameConfig()
        self.on_game_over = on_game_over
        self.on_board_changed = on_board_changed
        self.agents: Dict[Cell, Policy] = {}
        for player in PLAYERS:
            if agents is not None and player in agents:
                self.agents[player] = agents[player]
            elif self.config.is_ai(player):
                self.agents[player] = SearchPolicy.from_settings(
                    self.config.depth_for(player),
                    self.config.preset_for(player),
                    use_pruning=self.config.use_pruning,
                )
        # Self-play with no limit would restart forever.
        self.max_games = self.config.max_games
        if self.max_games is None and len(self.agents) == len(PLAYERS):
            self.max_games = 1
        self.games_completed = 0
        self.outcomes: List[GameOutcome] = []
        self.state = initialize_game_state(self.config.board_size)
        if autostart:
            self.new_game()

    # ------------------------------------------------------------------
    # Collaborator contract
    # ------------------------------------------------------------------
    def attempt_move(self, row: int, column: int) -> bool:
        """Submit a human placement. Returns False and changes nothing if rejected."""
        try:
            self.play(row, column)
        except InvalidCellSelection as exc:
            logger.debug("%s", exc)
            return False
        return True

    def snapshot(self) -> BoardArray:
        board = self.state.board.copy()
        if self.state.phase != TurnPhase.AWAITING_HUMAN_MOVE:
            clear_candidates(board)
        board.flags.writeable = False
        return board

    # ------------------------------------------------------------------
    @property
    def current_player(self) -> Cell:
        return self.state.current_player

    @property
    def phase(self) -> TurnPhase:
        return self.state.phase

    @property
    def is_over(self) -> bool:
        return self.state.phase == TurnPhase.GAME_OVER

    def is_ai(self, player: Cell) -> bool:
        return player in self.agents

    def new_game(self) -> None:
        logger.info("Starting new game on a %dx%d board", self.config.board_size, self.config.board_size)
        self.state = initialize_game_state(self.config.board_size)
        self._run_turns()

    def load_position(self, board: BoardArray, current_player: Cell) -> None:
        """Resume play from ``board`` with ``current_player`` to move.

        Passes and terminal detection apply immediately, as after any move.
        """
        size = self.config.board_size
        if board.shape != (size, size):
            raise ValueError(f"Board shape {board.shape} does not match the configured {size}x{size} board.")
        if not current_player.is_player:
            raise ValueError(f"{current_player.name} is not a player.")
        position = clear_candidates(np.array(board, dtype=np.int8))
        self.state = GameState(board=position, current_player=current_player)
        self._run_turns()

    def play(self, row: int, column: int) -> None:
        """Strict variant of :meth:`attempt_move` raising :class:`InvalidCellSelection`."""
        state = self.state
        if state.phase != TurnPhase.AWAITING_HUMAN_MOVE:
            raise InvalidCellSelection(row, column, f"not awaiting a human move ({state.phase.value})")
        size = state.size
        if not (0 <= row < size and 0 <= column < size):
            raise InvalidCellSelection(row, column, "outside the board")
        if state.board[row, column] != Cell.CANDIDATE:
            raise InvalidCellSelection(row, column, "cell is not a candidate")
        if not is_legal_move(state.board, state.current_player, row, column):
            raise InvalidCellSelection(row, column, "no direction brackets an opponent run")
        self._place(Move(row, column))
        self._finish_turn()

    # ------------------------------------------------------------------
    # Turn machine
    # ------------------------------------------------------------------
    def _finish_turn(self) -> None:
        if self.state.phase == TurnPhase.GAME_OVER:
            return
        self.state.current_player = self.state.current_player.opponent
        self._run_turns()

    def _run_turns(self) -> None:
        while True:
            state = self.state
            count, _ = legal_moves(state.board, state.current_player)
            state.legal_move_count = count
            if count == 0:
                opponent = state.current_player.opponent
                if count_legal_moves(state.board, opponent) == 0:
                    if self._finish_game():
                        return
                    continue
                logger.info("%s has no legal move and passes", state.current_player.name)
                state.pass_count += 1
                state.current_player = opponent
                continue

            if not self.is_ai(state.current_player):
                state.phase = TurnPhase.AWAITING_HUMAN_MOVE
                self._notify()
                return

            state.phase = TurnPhase.AWAITING_AI_MOVE
            self._notify()
            move = self.agents[state.current_player].select_move(state.board, state.current_player)
            if move is None or not is_legal_move(state.board, state.current_player, move.row, move.column):
                raise RuntimeError(f"Agent for {state.current_player.name} returned an illegal move {move}.")
            self._place(move)
            state.current_player = state.current_player.opponent

    def _place(self, move: Move) -> None:
        state = self.state
        flipped = apply_move(state.board, state.current_player, move.row, move.column)
        state.ply_count += 1
        logger.debug(
            "%s plays (%d,%d) flipping %d",
            state.current_player.name,
            move.row,
            move.column,
            flipped,
        )

    def _finish_game(self) -> bool:
        """Record the outcome. Returns True when no further game should start."""
        state = self.state
        clear_candidates(state.board)
        outcome = evaluate_outcome(state.board, state.ply_count)
        self.outcomes.append(outcome)
        self.games_completed += 1
        state.phase = TurnPhase.GAME_OVER
        state.legal_move_count = 0
        logger.info(
            "Game over: %s (A=%d, B=%d) after %d plies",
            outcome.winner.value,
            outcome.score_a,
            outcome.score_b,
            outcome.plies,
        )
        self._notify()
        if self.on_game_over is not None:
            self.on_game_over(outcome.winner, outcome.score_a, outcome.score_b)
        if self.max_games is not None and self.games_completed >= self.max_games:
            return True
        logger.info("Starting new game on a %dx%d board", self.config.board_size, self.config.board_size)
        self.state = initialize_game_state(self.config.board_size)
        return False

    def _notify(self) -> None:
        if self.on_board_changed is not None:
            self.on_board_changed(self.snapshot())

    def __repr__(self) -> str:
        seats = ", ".join(
            f"{p.name}={'ai' if self.is_ai(p) else 'human'}" for p in PLAYERS
        )
        return f"ReversiGame({seats}, games={self.games_completed})\n{self.state!r}"
