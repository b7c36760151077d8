from __future__ import annotations

from typing import Dict, Optional

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from reversi.core import (
    Cell,
    GameOutcome,
    TurnPhase,
    Winner,
    advance_turn,
    apply_move,
    format_board,
    initialize_game_state,
    is_legal_move,
    legal_moves,
    validate_board_size,
)


class ReversiEnv(gym.Env):
    """Single-table environment; actions index cells as ``row * size + col``.

    Passes are applied automatically, so every observation belongs to a player
    with at least one legal move (or to a finished game).
    """

    metadata = {"render_modes": ["ansi"], "render_fps": 4}

    def __init__(
        self,
        *,
        board_size: int = 8,
        enforce_legal_actions: bool = True,
        render_mode: Optional[str] = None,
    ) -> None:
        super().__init__()
        self.board_size = validate_board_size(board_size)
        self._enforce_legal = enforce_legal_actions
        self.render_mode = render_mode

        board_shape = (2, self.board_size, self.board_size)
        self.observation_space = spaces.Box(low=0.0, high=1.0, shape=board_shape, dtype=np.float32)
        self.action_space = spaces.Discrete(self.board_size * self.board_size)

        self._state = initialize_game_state(self.board_size)
        self._outcome: Optional[GameOutcome] = None

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict] = None):
        super().reset(seed=seed)
        self._state = initialize_game_state(self.board_size)
        self._outcome = None
        count, _ = legal_moves(self._state.board, self._state.current_player)
        self._state.legal_move_count = count
        return self._build_observation(), self._build_info()

    def step(self, action_index: int):
        if not self.action_space.contains(action_index):
            raise ValueError(f"Action index {action_index} out of bounds.")
        if self._state.phase == TurnPhase.GAME_OVER:
            raise ValueError("Cannot step a finished game; call reset().")

        row, col = divmod(int(action_index), self.board_size)
        player = self._state.current_player
        if not is_legal_move(self._state.board, player, row, col):
            if self._enforce_legal:
                raise ValueError("Illegal action provided and enforce_legal_actions=True.")
            return self._build_observation(), 0.0, False, False, self._build_info()

        apply_move(self._state.board, player, row, col)
        self._state.ply_count += 1
        self._outcome = advance_turn(self._state)

        terminated = self._outcome is not None
        reward = self._compute_reward(self._outcome)
        return self._build_observation(), reward, terminated, False, self._build_info()

    def legal_action_mask(self) -> np.ndarray:
        board = self._state.board.copy()
        if self._state.phase != TurnPhase.GAME_OVER:
            legal_moves(board, self._state.current_player)
        return (board.reshape(-1) == Cell.CANDIDATE).astype(np.int8)

    def render(self):
        if self.render_mode != "ansi":
            raise NotImplementedError("Only 'ansi' render mode is supported.")
        return format_board(self._state.board)

    @property
    def outcome(self) -> Optional[GameOutcome]:
        return self._outcome

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _build_observation(self) -> np.ndarray:
        board = self._state.board
        player = self._state.current_player
        own = (board == int(player)).astype(np.float32)
        other = (board == int(player.opponent)).astype(np.float32)
        return np.stack([own, other])

    def _build_info(self) -> Dict[str, object]:
        return {
            "legal_action_mask": self.legal_action_mask(),
            "current_player": self._state.current_player,
        }

    def _compute_reward(self, outcome: Optional[GameOutcome]) -> float:
        if outcome is None:
            return 0.0
        if outcome.winner == Winner.PLAYER_A:
            return 1.0
        if outcome.winner == Winner.PLAYER_B:
            return -1.0
        return 0.0
