"""
Board module for the minesweeper engine.

Implements the grid with deferred mine placement, flood and chord
reveals, flag tracking, and the game state machine.
"""
import logging
import random
from collections import deque
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Deque, Iterator, List, Optional, Tuple

import numpy as np

from .cell import Cell, CellKind, CellState
from .errors import CellOutOfBoundsError, ConfigError

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

MIN_SIDE = 9
SAFE_ZONE_SIZE = 9


class GameResult(Enum):
    """Outcome of a finished game."""

    WIN = auto()
    LOST = auto()


class GameState(Enum):
    """
    Lifecycle of a board.

    Moves forward only: UNINITIALIZED -> PLAYING -> WON or LOST.
    """

    UNINITIALIZED = auto()
    PLAYING = auto()
    WON = auto()
    LOST = auto()

    @property
    def is_finished(self) -> bool:
        return self in (GameState.WON, GameState.LOST)

    @property
    def result(self) -> Optional[GameResult]:
        """Result of the game, or None while it is not finished."""
        if self is GameState.WON:
            return GameResult.WIN
        if self is GameState.LOST:
            return GameResult.LOST
        return None


@dataclass
class BoardConfig:
    """
    Configuration for a minesweeper board.

    Attributes:
        rows: Number of rows (at least 9).
        cols: Number of columns (at least 9).
        mine_count: Total mines to place.
    """

    rows: int = 9
    cols: int = 9
    mine_count: int = 10

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.rows < MIN_SIDE or self.cols < MIN_SIDE:
            raise ConfigError(
                f"Board dimensions must be at least {MIN_SIDE}x{MIN_SIDE}, "
                f"got {self.rows}x{self.cols}"
            )
        if self.mine_count < 0:
            raise ConfigError("Number of mines cannot be negative")
        # The first opened cell and its neighbors never hold a mine.
        max_mines = self.rows * self.cols - SAFE_ZONE_SIZE
        if self.mine_count > max_mines:
            raise ConfigError(f"Too many mines (max {max_mines})")


# Preset difficulty levels
BEGINNER = BoardConfig(9, 9, 10)
INTERMEDIATE = BoardConfig(16, 16, 40)
EXPERT = BoardConfig(24, 24, 99)


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Minesweeper game board.

    Mines are placed on the first open, away from the opened cell and its
    neighbors. Every later mutation goes through open() and flag().

    Attributes:
        config: Board dimensions and mine count.
        seed: Optional seed for the mine placement RNG.
    """

    config: BoardConfig = field(default_factory=lambda: BoardConfig())
    seed: Optional[int] = None
    _grid: List[List[Cell]] = field(default_factory=list, init=False, repr=False)
    _state: GameState = field(default=GameState.UNINITIALIZED, init=False)
    _closed_cell_count: int = field(default=0, init=False)
    _rng: random.Random = field(default_factory=random.Random, init=False, repr=False)

    def __post_init__(self) -> None:
        """Initialize the grid after dataclass creation."""
        self._rng.seed(self.seed)
        self._init_grid()

    @classmethod
    def from_dimensions(
        cls, rows: int, cols: int, mine_count: int, seed: Optional[int] = None
    ) -> "Board":
        """
        Create a board from raw dimensions.

        Raises:
            ConfigError: If the dimensions or mine count are invalid.
        """
        return cls(BoardConfig(rows, cols, mine_count), seed=seed)

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def _init_grid(self) -> None:
        """Create a grid of closed, uninitialized cells."""
        self._grid = [
            [Cell() for _ in range(self.config.cols)]
            for _ in range(self.config.rows)
        ]
        self._state = GameState.UNINITIALIZED
        self._closed_cell_count = self.config.rows * self.config.cols

    def _initialize(self, row: int, col: int) -> None:
        """
        Place mines, keeping (row, col) and its neighbors free.

        Mines are placed by rejection sampling: random cells are drawn
        until enough uninitialized ones have been turned into mines.
        """
        self._grid[row][col].kind = CellKind.FREE
        for neighbor_row, neighbor_col in self.neighbors(row, col):
            self._grid[neighbor_row][neighbor_col].kind = CellKind.FREE

        placed = 0
        while placed < self.config.mine_count:
            cell = self._grid[self._rng.randrange(self.config.rows)][
                self._rng.randrange(self.config.cols)
            ]
            if cell.kind == CellKind.UNINITIALIZED:
                cell.kind = CellKind.MINE
                placed += 1

        for cell in self._iter_cells():
            if cell.kind == CellKind.UNINITIALIZED:
                cell.kind = CellKind.FREE

        self._state = GameState.PLAYING
        logger.debug(
            "Placed %d mines on %dx%d board, first open at (%d, %d)",
            placed, self.config.rows, self.config.cols, row, col,
        )

    def _iter_cells(self) -> Iterator[Cell]:
        for grid_row in self._grid:
            yield from grid_row

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def neighbors(self, row: int, col: int) -> List[Tuple[int, int]]:
        """
        Get valid neighboring cell positions.

        Args:
            row: Row index of center cell.
            col: Column index of center cell.

        Returns:
            List of (row, col) tuples in row-major order, clipped to the
            board and excluding the center.
        """
        neighbors = []
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                if delta_row == 0 and delta_col == 0:
                    continue
                new_row = row + delta_row
                new_col = col + delta_col
                if self._is_valid_position(new_row, new_col):
                    neighbors.append((new_row, new_col))
        return neighbors

    def _is_valid_position(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.config.rows and 0 <= col < self.config.cols

    def _check_position(self, row: int, col: int) -> None:
        if not self._is_valid_position(row, col):
            raise CellOutOfBoundsError(
                row, col, self.config.rows, self.config.cols
            )

    # ========================================================================
    # Derived Queries
    # ========================================================================

    def count_adjacent_mines(self, row: int, col: int) -> int:
        """
        Count mines adjacent to a cell.

        Raises:
            CellOutOfBoundsError: If the position is off the board.
        """
        self._check_position(row, col)
        return self._adjacent_mines(row, col)

    def count_surrounding_flags(self, row: int, col: int) -> int:
        """
        Count flagged cells adjacent to a cell.

        Raises:
            CellOutOfBoundsError: If the position is off the board.
        """
        self._check_position(row, col)
        return self._surrounding_flags(row, col)

    def _adjacent_mines(self, row: int, col: int) -> int:
        cell = self._grid[row][col]
        if cell.adjacent_mines is not None:
            return cell.adjacent_mines
        count = 0
        for neighbor_row, neighbor_col in self.neighbors(row, col):
            if self._grid[neighbor_row][neighbor_col].kind == CellKind.MINE:
                count += 1
        # Mine layout is fixed once placed, so the count never goes stale.
        if self._state != GameState.UNINITIALIZED:
            cell.adjacent_mines = count
        return count

    def _surrounding_flags(self, row: int, col: int) -> int:
        count = 0
        for neighbor_row, neighbor_col in self.neighbors(row, col):
            if self._grid[neighbor_row][neighbor_col].is_flagged:
                count += 1
        return count

    # ========================================================================
    # Game Actions (Mid-level)
    # ========================================================================

    def open(self, row: int, col: int) -> CellKind:
        """
        Open the cell at the given position.

        On the first open, mines are placed away from this cell and its
        neighbors. A closed cell with no adjacent mines floods outward to
        its whole zero region and the numbered cells bordering it. Opening
        an already opened numbered cell whose flag count matches its mine
        count opens all of its closed neighbors (chord). Flagged cells are
        never opened.

        Args:
            row: Row index to open.
            col: Column index to open.

        Returns:
            The kind of the cell at (row, col).

        Raises:
            CellOutOfBoundsError: If the position is off the board.
        """
        self._check_position(row, col)
        return self.open_unchecked(row, col)

    def open_unchecked(self, row: int, col: int) -> CellKind:
        """Same as open() for callers that have already validated indices."""
        if self._state.is_finished:
            return self._grid[row][col].kind

        if self._state == GameState.UNINITIALIZED:
            self._initialize(row, col)

        cell = self._grid[row][col]
        if cell.state == CellState.CLOSED:
            self._reveal(row, col)
        elif cell.state == CellState.OPENED:
            self._chord(row, col)

        self._check_win_condition()
        return cell.kind

    def _open_cell(self, row: int, col: int) -> CellKind:
        """Open a single closed cell and update bookkeeping."""
        kind = self._grid[row][col].open_state()
        self._closed_cell_count -= 1
        if kind == CellKind.MINE:
            self._finish(GameState.LOST)
        return kind

    def _reveal(self, row: int, col: int) -> None:
        """
        Open a closed cell and flood through its zero region.

        Already opened cells act as visited markers, so each cell is
        enqueued at most once.
        """
        if self._open_cell(row, col) == CellKind.MINE:
            return
        if self._adjacent_mines(row, col) > 0:
            return

        queue: Deque[Tuple[int, int]] = deque([(row, col)])
        while queue:
            current_row, current_col = queue.popleft()
            for neighbor_row, neighbor_col in self.neighbors(
                current_row, current_col
            ):
                if not self._grid[neighbor_row][neighbor_col].is_closed:
                    continue
                # Neighbors of a zero cell are never mines.
                self._open_cell(neighbor_row, neighbor_col)
                if self._adjacent_mines(neighbor_row, neighbor_col) == 0:
                    queue.append((neighbor_row, neighbor_col))

    def _chord(self, row: int, col: int) -> None:
        """Open closed neighbors of a satisfied numbered cell."""
        mines = self._adjacent_mines(row, col)
        if mines == 0 or self._surrounding_flags(row, col) != mines:
            return

        logger.debug("Chord at (%d, %d)", row, col)
        for neighbor_row, neighbor_col in self.neighbors(row, col):
            if self._state != GameState.PLAYING:
                break
            if self._grid[neighbor_row][neighbor_col].is_closed:
                self._reveal(neighbor_row, neighbor_col)

    def _check_win_condition(self) -> None:
        """Win once only mine cells remain closed."""
        if (
            self._state == GameState.PLAYING
            and self._closed_cell_count == self.config.mine_count
        ):
            self._finish(GameState.WON)

    def _finish(self, state: GameState) -> None:
        self._state = state
        logger.info(
            "Game finished: %s (%d closed cells left)",
            state.name, self._closed_cell_count,
        )

    def flag(self, row: int, col: int) -> CellState:
        """
        Toggle flag on a cell.

        Args:
            row: Row index.
            col: Column index.

        Returns:
            The resulting state of the cell.

        Raises:
            CellOutOfBoundsError: If the position is off the board.
        """
        self._check_position(row, col)
        return self.flag_unchecked(row, col)

    def flag_unchecked(self, row: int, col: int) -> CellState:
        """Same as flag() for callers that have already validated indices."""
        cell = self._grid[row][col]
        if self._state.is_finished:
            return cell.state
        return cell.toggle_flag()

    def reset(self, seed: Optional[int] = None) -> None:
        """
        Reset board to a fresh game with the same configuration.

        Args:
            seed: Reseed the mine placement RNG before the next game.
        """
        if seed is not None:
            self.seed = seed
            self._rng.seed(seed)
        self._init_grid()
        logger.debug("Board reset")

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def state(self) -> GameState:
        """Get current game state."""
        return self._state

    @property
    def result(self) -> Optional[GameResult]:
        return self._state.result

    @property
    def is_playing(self) -> bool:
        """Check if mines are placed and the game is in progress."""
        return self._state == GameState.PLAYING

    @property
    def is_finished(self) -> bool:
        return self._state.is_finished

    @property
    def is_won(self) -> bool:
        """Check if game was won."""
        return self._state == GameState.WON

    @property
    def is_lost(self) -> bool:
        """Check if game was lost."""
        return self._state == GameState.LOST

    @property
    def rows(self) -> int:
        return self.config.rows

    @property
    def cols(self) -> int:
        return self.config.cols

    @property
    def mine_count(self) -> int:
        return self.config.mine_count

    @property
    def closed_cell_count(self) -> int:
        """Number of cells that are not opened (flagged cells included)."""
        return self._closed_cell_count

    @property
    def cells(self) -> Tuple[Tuple[Cell, ...], ...]:
        """
        View of the grid, row by row.

        The tuples are read-only but the Cell objects are shared with the
        board, so callers must treat them as read-only too.
        """
        return tuple(tuple(grid_row) for grid_row in self._grid)

    @property
    def flag_count(self) -> int:
        return sum(1 for cell in self._iter_cells() if cell.is_flagged)

    @property
    def mines_remaining(self) -> int:
        """Mine count minus placed flags, as shown on a mine counter."""
        return self.config.mine_count - self.flag_count

    def get_cell(self, row: int, col: int) -> Optional[Cell]:
        """Get cell at position, or None if invalid."""
        if not self._is_valid_position(row, col):
            return None
        return self._grid[row][col]

    def get_observation(self) -> np.ndarray:
        """
        Get visible board state as a numpy array.

        Returns:
            2D numpy array where:
                -1 = closed
                -2 = flagged
                0-8 = opened with adjacent count
                9 = opened mine
        """
        obs = np.zeros((self.config.rows, self.config.cols), dtype=np.int8)
        for row in range(self.config.rows):
            for col in range(self.config.cols):
                obs[row, col] = self._grid[row][col].to_observation()
        return obs

    def get_valid_actions(self) -> List[Tuple[int, int]]:
        """
        Get list of cells that can still be opened.

        Returns:
            List of closed (row, col) positions.
        """
        actions = []
        for row in range(self.config.rows):
            for col in range(self.config.cols):
                if self._grid[row][col].state == CellState.CLOSED:
                    actions.append((row, col))
        return actions
