"""
Unit tests for Cell class.

Tests cell state management, reveal/flag behavior, and observation codes.
"""
import pytest
from minefield import Cell, CellState


# ============================================================================
# Cell Initialization Tests
# ============================================================================

class TestCellInitialization:
    """Test cell creation and default values."""

    def test_default_cell_is_hidden_safe_and_zero(self) -> None:
        """New cell is a hidden, safe cell with no adjacent mines."""
        cell = Cell()
        assert cell.is_mine is False
        assert cell.state == CellState.HIDDEN
        assert cell.adjacent_mines == 0
        assert cell.exploded is False

    def test_mine_cell_creation(self, mine_cell: Cell) -> None:
        assert mine_cell.is_mine is True


# ============================================================================
# Cell Reveal Tests
# ============================================================================

class TestCellReveal:
    """Test cell reveal behavior."""

    def test_reveal_hidden_cell(self, hidden_cell: Cell) -> None:
        """Revealing a hidden cell succeeds and changes its state."""
        assert hidden_cell.reveal() is True
        assert hidden_cell.is_revealed is True

    def test_reveal_twice_returns_false(self, hidden_cell: Cell) -> None:
        hidden_cell.reveal()
        assert hidden_cell.reveal() is False
        assert hidden_cell.is_revealed is True

    def test_reveal_flagged_cell_returns_false(self, hidden_cell: Cell) -> None:
        """Cannot reveal a flagged cell."""
        hidden_cell.toggle_flag()
        assert hidden_cell.reveal() is False
        assert hidden_cell.is_flagged is True


# ============================================================================
# Cell Flag Tests
# ============================================================================

class TestCellFlag:
    """Test cell flagging behavior."""

    def test_flag_then_unflag(self, hidden_cell: Cell) -> None:
        """Toggling twice returns the cell to hidden."""
        assert hidden_cell.toggle_flag() is True
        assert hidden_cell.state == CellState.FLAGGED
        assert hidden_cell.toggle_flag() is True
        assert hidden_cell.state == CellState.HIDDEN

    def test_flag_revealed_cell_returns_false(self, hidden_cell: Cell) -> None:
        """Revealed is terminal for a cell."""
        hidden_cell.reveal()
        assert hidden_cell.toggle_flag() is False
        assert hidden_cell.is_revealed is True


# ============================================================================
# Cell Observation Tests
# ============================================================================

class TestCellObservation:
    """Test observation codes."""

    def test_hidden_is_negative_one(self, hidden_cell: Cell) -> None:
        assert hidden_cell.to_observation() == -1

    def test_flagged_is_negative_two(self, hidden_cell: Cell) -> None:
        hidden_cell.toggle_flag()
        assert hidden_cell.to_observation() == -2

    @pytest.mark.parametrize("count", range(0, 9))
    def test_revealed_cell_shows_adjacent_count(self, count: int) -> None:
        cell = Cell(adjacent_mines=count)
        cell.reveal()
        assert cell.to_observation() == count

    def test_revealed_mine_is_nine(self, mine_cell: Cell) -> None:
        mine_cell.reveal()
        assert mine_cell.to_observation() == 9

    def test_exploded_mine_is_ten(self, mine_cell: Cell) -> None:
        mine_cell.exploded = True
        mine_cell.reveal()
        assert mine_cell.to_observation() == 10
