"""
Exceptions raised by the minesweeper engine.
"""


class SweeperError(Exception):
    """Base class for all engine errors."""


class ConfigError(SweeperError, ValueError):
    """Board dimensions or mine count are invalid."""


class CellOutOfBoundsError(SweeperError, IndexError):
    """Coordinates fall outside the board."""

    def __init__(self, row: int, col: int, rows: int, cols: int) -> None:
        super().__init__(
            f"Cell ({row}, {col}) is out of bounds for a {rows}x{cols} board"
        )
        self.row = row
        self.col = col
