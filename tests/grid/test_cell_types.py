# File: tests/grid/test_cell_types.py
"""Unit tests for grid cell types."""

import pytest
from src.curtain_wall.grid.cell_types import (
    Cell,
    GridSummary,
    PanelKind,
    ToolMode,
    make_cell_id,
    parse_cell_id,
)


class TestCellIds:
    """Tests for cell identifier helpers."""

    def test_make_cell_id(self):
        assert make_cell_id(2, 3) == "2-3"

    def test_parse_cell_id(self):
        assert parse_cell_id("2-3") == (2, 3)

    @pytest.mark.parametrize("cell_id", ["23", "a-b", "1-2-3", ""])
    def test_parse_malformed_id_raises(self, cell_id):
        """Test that malformed ids raise ValueError."""
        with pytest.raises(ValueError):
            parse_cell_id(cell_id)


class TestToolMode:
    """Tests for ToolMode enum."""

    def test_structure_is_select_tool(self):
        assert not ToolMode.STRUCTURE.is_painting

    def test_painting_tools(self):
        assert ToolMode.WINDOW.is_painting
        assert ToolMode.DOOR.is_painting
        assert ToolMode.WINDOW.panel_kind == PanelKind.WINDOW
        assert ToolMode.DOOR.panel_kind == PanelKind.DOOR

    def test_from_string(self):
        assert ToolMode("door") == ToolMode.DOOR


class TestCell:
    """Tests for Cell dataclass."""

    def test_creation(self):
        """Test basic creation."""
        cell = Cell(row=1, col=2)
        assert cell.id == "1-2"
        assert cell.kind == PanelKind.STRUCTURE
        assert cell.is_visible
        assert not cell.is_anchor

    def test_kind_string_conversion(self):
        """Test that string kind is converted to enum."""
        cell = Cell(row=0, col=0, kind="window")
        assert cell.kind == PanelKind.WINDOW

    def test_is_anchor(self):
        cell = Cell(row=0, col=0, col_span=2, merged=True)
        assert cell.is_anchor
        cell.is_spanned = True
        assert not cell.is_anchor

    def test_reset(self):
        cell = Cell(row=0, col=0, kind=PanelKind.DOOR, selected=True,
                    col_span=2, row_span=3, merged=True)
        cell.reset()
        assert cell == Cell(row=0, col=0)

    def test_dict_round_trip(self):
        cell = Cell(row=1, col=0, kind=PanelKind.WINDOW, col_span=2, merged=True)
        data = cell.to_dict()
        assert data["id"] == "1-0"
        assert data["kind"] == "window"
        assert Cell.from_dict(data) == cell


class TestGridSummary:
    def test_to_dict(self):
        summary = GridSummary(total=5, structure=3, window=1, door=1)
        assert summary.to_dict() == {"total": 5, "structure": 3, "window": 1, "door": 1}
