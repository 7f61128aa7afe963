"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path
from typing import Callable, Iterable, Tuple

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sweeper import Board, BoardConfig, Cell, CellKind, CellState, GameState


Position = Tuple[int, int]


def plant_mines(board: Board, mines: Iterable[Position]) -> Board:
    """
    Lay out mines by hand and start the game without random placement.

    Reaches into the board on purpose: it rewrites the shared Cell objects
    behind the read-only cells view and sets the private game state.
    """
    mines = set(mines)
    for row, grid_row in enumerate(board.cells):
        for col, cell in enumerate(grid_row):
            cell.kind = CellKind.MINE if (row, col) in mines else CellKind.FREE
    board._state = GameState.PLAYING
    return board


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def default_board() -> Board:
    """Create a default 9x9 board with 10 mines."""
    return Board(seed=1234)


@pytest.fixture
def mine_planter() -> Callable[..., Board]:
    """Expose plant_mines to tests that build their own board."""
    return plant_mines


@pytest.fixture
def planted_board() -> Callable[..., Board]:
    """
    Factory for a board with a fixed mine layout.

    Usage: planted_board([(0, 0), (2, 2)], rows=9, cols=9)
    """
    def factory(mines: Iterable[Position], rows: int = 9, cols: int = 9) -> Board:
        mines = list(mines)
        return plant_mines(Board(BoardConfig(rows, cols, len(mines))), mines)

    return factory


@pytest.fixture
def wall_board(planted_board: Callable[..., Board]) -> Board:
    """9x9 board with a full column of mines at col 4."""
    return planted_board([(row, 4) for row in range(9)])


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def closed_cell() -> Cell:
    """Create a closed free cell."""
    return Cell(kind=CellKind.FREE)


@pytest.fixture
def mine_cell() -> Cell:
    """Create a closed cell containing a mine."""
    return Cell(kind=CellKind.MINE)


@pytest.fixture
def flagged_cell() -> Cell:
    return Cell(kind=CellKind.FREE, state=CellState.FLAGGED)


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_config() -> BoardConfig:
    """Create a valid board configuration."""
    return BoardConfig(9, 9, 10)
