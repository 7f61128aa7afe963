"""
Minesweeper board engine.

Provides cell and board state, deferred mine placement, flood and chord
reveals, and a gymnasium environment around the board.
"""
from .errors import SweeperError, ConfigError, CellOutOfBoundsError
from .cell import Cell, CellKind, CellState
from .board import (
    Board,
    BoardConfig,
    GameState,
    GameResult,
    BEGINNER,
    INTERMEDIATE,
    EXPERT,
)
from .environment import MinesweeperEnv

__all__ = [
    "SweeperError",
    "ConfigError",
    "CellOutOfBoundsError",
    "Cell",
    "CellKind",
    "CellState",
    "Board",
    "BoardConfig",
    "GameState",
    "GameResult",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "MinesweeperEnv",
]
