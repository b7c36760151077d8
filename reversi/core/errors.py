from __future__ import annotations


class ReversiError(Exception):
    """Base class for errors raised by the Reversi engine."""


class InvalidBoardSize(ReversiError, ValueError):
    pass


class InvalidConfiguration(ReversiError, ValueError):
    pass


class InvalidCellSelection(ReversiError):
    """A placement was requested on a cell that is not a legal candidate."""

    def __init__(self, row: int, column: int, reason: str) -> None:
        super().__init__(f"Cannot place at ({row},{column}): {reason}")
        self.row = row
        self.column = column
        self.reason = reason


class OutOfBoundsScan(ReversiError, RuntimeError):
    """Direction scan stepped outside the grid. Indicates a bug, never recovered."""
