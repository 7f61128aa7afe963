"""
Gymnasium environment wrapper for the minesweeper engine.

Exposes open and flag moves as a discrete action space so agents and
scripts can drive a Board through the standard gymnasium interface.
"""
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import Board, BoardConfig
from .cell import CellKind, CellState


# ============================================================================
# Constants
# ============================================================================

WIN_REWARD = 10.0
LOSS_REWARD = -10.0
OPEN_REWARD = 1.0
FLAG_REWARD = 0.0
NO_EFFECT_REWARD = -0.1


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for minesweeper.

    Observation:
        2D array where:
        - -1 = closed cell
        - -2 = flagged cell
        - 0-8 = opened cell with adjacent mine count
        - 9 = opened mine

    Actions:
        Discrete action space of size 2 * rows * cols.
        Action i < rows * cols opens cell (i // cols, i % cols).
        Action i >= rows * cols toggles the flag on cell
        ((i - rows * cols) // cols, (i - rows * cols) % cols).

    Rewards:
        - +10 for winning the game
        - -10 for opening a mine
        - +1 for an open that revealed at least one cell
        - 0 for toggling a flag
        - -0.1 for an action with no effect
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        render_mode: Optional[str] = None,
        seed: Optional[int] = None,
    ) -> None:
        """
        Initialize the minesweeper environment.

        Args:
            config: Board configuration (default: 9x9 with 10 mines).
            render_mode: How to render the environment.
            seed: Seed for the board's mine placement.
        """
        super().__init__()

        self.config = config or BoardConfig()
        self.board = Board(self.config, seed=seed)
        self.render_mode = render_mode

        self.observation_space = spaces.Box(
            low=-2,
            high=9,
            shape=(self.config.rows, self.config.cols),
            dtype=np.int8,
        )

        self._cell_count = self.config.rows * self.config.cols
        self.action_space = spaces.Discrete(2 * self._cell_count)

        self._steps = 0

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Reset the environment for a new episode.

        Args:
            seed: Random seed for reproducibility.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        board_seed = None
        if seed is not None:
            board_seed = int(self.np_random.integers(2**31))
        self.board.reset(seed=board_seed)
        self._steps = 0

        return self.board.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Encoded open or flag action.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        if not self.action_space.contains(action):
            raise ValueError(f"Invalid action {action!r}")

        is_flag, row, col = self.decode_action(int(action))
        self._steps += 1

        if is_flag:
            reward = self._apply_flag(row, col)
        else:
            reward = self._apply_open(row, col)

        observation = self.board.get_observation()
        terminated = self.board.is_finished
        truncated = False

        if self.render_mode == "human":
            self.render()

        return observation, reward, terminated, truncated, self._get_info()

    def decode_action(self, action: int) -> Tuple[bool, int, int]:
        """Convert flat action index to (is_flag, row, col)."""
        is_flag = action >= self._cell_count
        row, col = divmod(action % self._cell_count, self.config.cols)
        return is_flag, row, col

    def encode_action(self, row: int, col: int, flag: bool = False) -> int:
        """Convert a position and move type to a flat action index."""
        action = row * self.config.cols + col
        if flag:
            action += self._cell_count
        return action

    def _apply_open(self, row: int, col: int) -> float:
        """Open a cell and score the outcome."""
        if self.board.is_finished:
            return NO_EFFECT_REWARD
        closed_before = self.board.closed_cell_count
        self.board.open_unchecked(row, col)

        if self.board.is_won:
            return WIN_REWARD
        if self.board.is_lost:
            return LOSS_REWARD
        if self.board.closed_cell_count < closed_before:
            return OPEN_REWARD
        return NO_EFFECT_REWARD

    def _apply_flag(self, row: int, col: int) -> float:
        cell = self.board.get_cell(row, col)
        if cell.is_opened or self.board.is_finished:
            return NO_EFFECT_REWARD
        self.board.flag_unchecked(row, col)
        return FLAG_REWARD

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        return {
            "steps": self._steps,
            "opened": self._cell_count - self.board.closed_cell_count,
            "total_safe": self._cell_count - self.config.mine_count,
            "mines_remaining": self.board.mines_remaining,
            "game_state": self.board.state.name,
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return self._render_ansi()
        if self.render_mode == "human":
            print(self._render_ansi())
        return None

    def _render_ansi(self) -> str:
        """Render board as ASCII string. Mines are shown after a loss."""
        lines = []
        show_mines = self.board.is_lost

        for row, grid_row in enumerate(self.board.cells):
            symbols = []
            for col, cell in enumerate(grid_row):
                if cell.state == CellState.FLAGGED:
                    symbols.append("F")
                elif cell.kind == CellKind.MINE and (cell.is_opened or show_mines):
                    symbols.append("*")
                elif cell.state == CellState.CLOSED:
                    symbols.append(".")
                else:
                    count = self.board.count_adjacent_mines(row, col)
                    symbols.append(str(count) if count else " ")
            lines.append(" ".join(symbols))

        return "\n".join(lines)

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of actions that can change the board.

        Returns:
            Boolean array where True = valid action. Opens are valid on
            closed cells, flags on closed or flagged cells.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        if self.board.is_finished:
            return mask
        for row, grid_row in enumerate(self.board.cells):
            for col, cell in enumerate(grid_row):
                if cell.is_closed:
                    mask[self.encode_action(row, col)] = True
                if not cell.is_opened:
                    mask[self.encode_action(row, col, flag=True)] = True
        return mask
