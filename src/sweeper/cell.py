"""
Cell module for the minesweeper engine.

A cell holds what it contains (mine or free ground) and what the player
can see of it (closed, flagged or opened).
"""
from enum import Enum, auto
from dataclasses import dataclass
from typing import Optional


# ============================================================================
# Constants
# ============================================================================

class CellKind(Enum):
    """What a cell contains."""

    UNINITIALIZED = auto()
    FREE = auto()
    MINE = auto()


class CellState(Enum):
    """Visibility of a cell."""

    CLOSED = auto()
    FLAGGED = auto()
    OPENED = auto()


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    Represents a single cell in the minesweeper grid.

    Attributes:
        kind: Content of the cell. Uninitialized until the first open.
        state: Current visibility state.
        adjacent_mines: Cached count of neighboring mines, or None if the
            board has not computed it yet.
    """

    kind: CellKind = CellKind.UNINITIALIZED
    state: CellState = CellState.CLOSED
    adjacent_mines: Optional[int] = None

    def open_state(self) -> CellKind:
        """
        Open this cell if it is closed.

        Flagged and opened cells are left as they are.

        Returns:
            The kind of this cell.
        """
        if self.state == CellState.CLOSED:
            self.state = CellState.OPENED
        return self.kind

    def toggle_flag(self) -> CellState:
        """
        Toggle flag on this cell. Opened cells are not affected.

        Returns:
            The resulting state.
        """
        if self.state == CellState.CLOSED:
            self.state = CellState.FLAGGED
        elif self.state == CellState.FLAGGED:
            self.state = CellState.CLOSED
        return self.state

    @property
    def is_closed(self) -> bool:
        """Check if cell is closed."""
        return self.state == CellState.CLOSED

    @property
    def is_opened(self) -> bool:
        """Check if cell is opened."""
        return self.state == CellState.OPENED

    @property
    def is_flagged(self) -> bool:
        """Check if cell is flagged."""
        return self.state == CellState.FLAGGED

    @property
    def is_mine(self) -> bool:
        return self.kind == CellKind.MINE

    def to_observation(self) -> int:
        """
        Convert cell to its visible value.

        Returns:
            -1: Closed cell
            -2: Flagged cell
            0-8: Opened free cell with adjacent mine count
            9: Opened mine
        """
        if self.state == CellState.CLOSED:
            return -1
        if self.state == CellState.FLAGGED:
            return -2
        if self.kind == CellKind.MINE:
            return 9
        return self.adjacent_mines or 0
