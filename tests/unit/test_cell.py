"""
Unit tests for Cell class.

Tests cell state transitions and observation conversion.
"""
import pytest
from sweeper import Cell, CellKind, CellState


# ============================================================================
# Cell Initialization Tests
# ============================================================================

class TestCellInitialization:
    """Test cell creation and default values."""

    def test_default_cell_is_uninitialized(self) -> None:
        """New cell has no content until the board places mines."""
        cell = Cell()
        assert cell.kind == CellKind.UNINITIALIZED
        assert cell.is_mine is False

    def test_default_cell_is_closed(self) -> None:
        """New cell should be closed by default."""
        cell = Cell()
        assert cell.state == CellState.CLOSED
        assert cell.is_closed is True

    def test_default_cell_has_no_cached_count(self) -> None:
        cell = Cell()
        assert cell.adjacent_mines is None


# ============================================================================
# Cell Open Tests
# ============================================================================

class TestCellOpen:
    """Test cell open behavior."""

    def test_open_closed_cell_opens_it(self, closed_cell: Cell) -> None:
        """Opening a closed cell should change its state."""
        closed_cell.open_state()
        assert closed_cell.state == CellState.OPENED
        assert closed_cell.is_opened is True

    def test_open_returns_kind(self, closed_cell: Cell, mine_cell: Cell) -> None:
        """Opening a cell reports what it contains."""
        assert closed_cell.open_state() == CellKind.FREE
        assert mine_cell.open_state() == CellKind.MINE

    def test_open_flagged_cell_is_noop(self, flagged_cell: Cell) -> None:
        """Flagged cells stay flagged."""
        result = flagged_cell.open_state()
        assert result == CellKind.FREE
        assert flagged_cell.state == CellState.FLAGGED

    def test_open_opened_cell_is_noop(self, closed_cell: Cell) -> None:
        """Opening twice leaves the cell opened."""
        closed_cell.open_state()
        closed_cell.open_state()
        assert closed_cell.state == CellState.OPENED


# ============================================================================
# Cell Flag Tests
# ============================================================================

class TestCellFlag:
    """Test cell flagging behavior."""

    @pytest.mark.parametrize(
        "start, expected",
        [
            (CellState.CLOSED, CellState.FLAGGED),
            (CellState.FLAGGED, CellState.CLOSED),
            (CellState.OPENED, CellState.OPENED),
        ],
    )
    def test_toggle_flag_transitions(
        self, start: CellState, expected: CellState
    ) -> None:
        """Flag toggles between closed and flagged, opened is unaffected."""
        cell = Cell(kind=CellKind.FREE, state=start)
        assert cell.toggle_flag() == expected
        assert cell.state == expected

    def test_flag_twice_returns_to_closed(self, closed_cell: Cell) -> None:
        """Unflagging a cell should return it to closed."""
        closed_cell.toggle_flag()
        assert closed_cell.is_flagged is True
        closed_cell.toggle_flag()
        assert closed_cell.is_closed is True


# ============================================================================
# Cell Observation Tests
# ============================================================================

class TestCellObservation:
    """Test visible cell values."""

    def test_closed_cell_observation_is_negative_one(
        self, closed_cell: Cell
    ) -> None:
        assert closed_cell.to_observation() == -1

    def test_flagged_cell_observation_is_negative_two(
        self, flagged_cell: Cell
    ) -> None:
        assert flagged_cell.to_observation() == -2

    @pytest.mark.parametrize("count", range(0, 9))
    def test_opened_cell_observation_matches_adjacent_count(
        self, count: int
    ) -> None:
        """Opened free cell returns its cached adjacent mine count."""
        cell = Cell(kind=CellKind.FREE, adjacent_mines=count)
        cell.open_state()
        assert cell.to_observation() == count

    def test_opened_mine_observation_is_nine(self, mine_cell: Cell) -> None:
        mine_cell.open_state()
        assert mine_cell.to_observation() == 9
