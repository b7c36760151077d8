from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Tuple, Union

import yaml

from reversi.core import Cell, InvalidConfiguration, validate_board_size
from reversi.evaluation.heuristics import EvaluatorPreset, resolve_preset

# Default AI strengths per seat: the first mover plays shallow, the second deep.
DEFAULT_DEPTH_A = 1
DEFAULT_DEPTH_B = 5

_SEAT_NAMES = {
    "a": Cell.PLAYER_A,
    "player_a": Cell.PLAYER_A,
    "black": Cell.PLAYER_A,
    "b": Cell.PLAYER_B,
    "player_b": Cell.PLAYER_B,
    "white": Cell.PLAYER_B,
}


def parse_seat(value: Union[Cell, str, int]) -> Cell:
    if isinstance(value, Cell):
        seat = value
    elif isinstance(value, str):
        try:
            seat = _SEAT_NAMES[value.strip().lower()]
        except KeyError as exc:
            raise InvalidConfiguration(f"Unknown player seat {value!r}.") from exc
    else:
        try:
            seat = Cell(int(value))
        except ValueError as exc:
            raise InvalidConfiguration(f"Unknown player seat {value!r}.") from exc
    if not seat.is_player:
        raise InvalidConfiguration(f"{seat.name} is not a player seat.")
    return seat


def parse_seats(values: Iterable[Union[Cell, str, int]]) -> Tuple[Cell, ...]:
    seats = []
    for value in values:
        seat = parse_seat(value)
        if seat not in seats:
            seats.append(seat)
    return tuple(sorted(seats))


@dataclass
class GameConfig:
    board_size: int = 8
    depth_a: int = DEFAULT_DEPTH_A
    depth_b: int = DEFAULT_DEPTH_B
    evaluator_preset: EvaluatorPreset = EvaluatorPreset.STRONG
    evaluator_a: Optional[EvaluatorPreset] = None
    evaluator_b: Optional[EvaluatorPreset] = None
    ai_players: Tuple[Cell, ...] = (Cell.PLAYER_B,)
    max_games: Optional[int] = None
    use_pruning: bool = True
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        self.board_size = validate_board_size(self.board_size)
        for name in ("depth_a", "depth_b"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise InvalidConfiguration(f"{name} must be a non-negative integer, got {value!r}.")
        self.evaluator_preset = resolve_preset(self.evaluator_preset)
        if self.evaluator_a is not None:
            self.evaluator_a = resolve_preset(self.evaluator_a)
        if self.evaluator_b is not None:
            self.evaluator_b = resolve_preset(self.evaluator_b)
        self.ai_players = parse_seats(self.ai_players)
        if self.max_games is not None and self.max_games < 1:
            raise InvalidConfiguration(f"max_games must be positive, got {self.max_games}.")

    def depth_for(self, player: Cell) -> int:
        return self.depth_a if player == Cell.PLAYER_A else self.depth_b

    def preset_for(self, player: Cell) -> EvaluatorPreset:
        override = self.evaluator_a if player == Cell.PLAYER_A else self.evaluator_b
        return override or self.evaluator_preset

    def is_ai(self, player: Cell) -> bool:
        return player in self.ai_players

    @property
    def self_play(self) -> bool:
        return len(self.ai_players) == 2

    def with_overrides(self, **overrides: Any) -> "GameConfig":
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "GameConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(raw) - known)
        if unknown:
            raise InvalidConfiguration(f"Unknown configuration keys: {', '.join(unknown)}")
        return cls(**raw)


def load_config(path: Optional[Union[str, Path]] = None, *, profile: Optional[str] = None) -> GameConfig:
    """Load a :class:`GameConfig` from YAML.

    Files may hold the settings at top level or under ``profiles:``; with a
    profile name the named section is merged over the top-level ``game:`` block.
    A missing path yields defaults.
    """
    if path is None:
        return GameConfig()
    cfg_path = Path(path)
    if not cfg_path.exists():
        return GameConfig()
    raw = yaml.safe_load(cfg_path.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict):
        raise InvalidConfiguration(f"{cfg_path} must contain a mapping.")
    base = dict(raw.get("game", {}))
    if profile is not None:
        profiles = raw.get("profiles", {})
        if profile not in profiles:
            raise InvalidConfiguration(f"Profile {profile!r} not found in {cfg_path}.")
        base.update(profiles[profile] or {})
    elif "game" not in raw and "profiles" not in raw:
        base = raw
    return GameConfig.from_dict(base)
