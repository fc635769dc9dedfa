# File: tests/grid/test_session.py
"""Unit tests for design sessions."""

import pytest
from src.curtain_wall.grid.cell_types import FrameMaterial, GlazingType, PanelKind, ToolMode
from src.curtain_wall.grid.errors import (
    InsufficientSelection,
    InvalidDimension,
    InvalidSetting,
    NotSplittable,
)
from src.curtain_wall.grid.grid_config import GridConfig
from src.curtain_wall.grid.history import (
    ACTION_COLOR,
    ACTION_GLASS_TYPE,
    ACTION_MATERIAL,
    ACTION_MERGE,
    ACTION_TYPE_CHANGE,
)
from src.curtain_wall.grid.session import DesignSession


class TestSessionCreation:
    """Tests for session setup."""

    def test_defaults(self, session):
        assert session.grid.cols == 4
        assert session.grid.rows == 3
        assert session.grid.width == 4.0
        assert session.id
        assert not session.history.can_undo

    def test_custom_config(self):
        session = DesignSession(config=GridConfig(default_columns=2, default_rows=2))
        assert session.grid.cols == 2

    def test_invalid_config_raises(self):
        with pytest.raises(ValueError):
            DesignSession(config=GridConfig(history_limit=0))

    def test_sessions_are_independent(self):
        first = DesignSession()
        second = DesignSession()
        first.toggle_select(0, 0)
        assert second.grid.selection == []
        assert first.id != second.id


class TestApplyGrid:
    def test_apply_grid_clears_history(self, session):
        session.set_col_ratio(0, 2.0)
        session.apply_grid(6, 2, width=6.0)
        assert (session.grid.cols, session.grid.rows) == (6, 2)
        assert session.grid.width == 6.0
        assert session.grid.height == 3.0
        assert not session.history.can_undo

    def test_apply_grid_keeps_tool(self, session):
        session.set_tool(ToolMode.DOOR)
        session.apply_grid(2, 2)
        assert session.grid.tool == ToolMode.DOOR

    def test_apply_grid_over_maximum_raises(self, session):
        """Test that the configured column maximum is enforced."""
        with pytest.raises(InvalidDimension):
            session.apply_grid(11, 3)
        assert session.grid.cols == 4

    def test_apply_grid_invalid_count(self, session):
        with pytest.raises(InvalidDimension):
            session.apply_grid(0, 3)


class TestSessionActions:
    """Tests for recorded actions."""

    def test_click_routes_by_tool(self, session):
        session.set_tool(ToolMode.WINDOW)
        cell = session.click(0, 1)
        assert cell.kind == PanelKind.WINDOW
        assert session.history.entries()[-1].action == ACTION_TYPE_CHANGE

        session.set_tool(ToolMode.STRUCTURE)
        session.click(1, 1)
        assert session.grid.selection == ["1-1"]

    def test_selection_is_not_recorded(self, session):
        session.toggle_select(0, 0)
        session.clear_selection()
        assert not session.history.can_undo

    def test_unchanged_paint_is_not_recorded(self, session):
        session.set_tool(ToolMode.WINDOW)
        session.click(0, 0)
        session.click(0, 0)
        assert len(session.history.entries()) == 1

    def test_merge_and_undo(self, session):
        """Test merge then undo restores the unmerged grid."""
        session.toggle_select(0, 0)
        session.toggle_select(1, 1)
        anchor = session.merge()
        assert (anchor.col_span, anchor.row_span) == (2, 2)
        assert session.history.entries()[-1].action == ACTION_MERGE

        session.undo()
        # The snapshot was taken with both cells still selected
        assert session.grid.selection == ["0-0", "1-1"]
        assert len(list(session.grid.visible_cells())) == 12

    def test_failed_merge_records_nothing(self, session):
        """Test that a rejected merge leaves grid and history unchanged."""
        session.toggle_select(0, 0)
        with pytest.raises(InsufficientSelection):
            session.merge()
        assert not session.history.can_undo

    def test_failed_split_records_nothing(self, session):
        with pytest.raises(NotSplittable):
            session.split()
        assert not session.history.can_undo

    def test_split_after_merge(self, session):
        session.merge(["0-0", "2-1"])
        restored = session.split("0-0")
        assert restored == 6
        assert len(session.history.entries()) == 2

    def test_ratios_recorded(self, session):
        assert session.set_col_ratio(0, 3.0) == 3.0
        assert session.set_row_ratio(0, -1) == 1.0
        session.reset_ratios()
        assert len(session.history.entries()) == 3
        session.undo()
        assert session.grid.col_ratios[0] == 3.0

    def test_redo(self, session):
        session.set_col_ratio(0, 3.0)
        session.undo()
        assert session.grid.col_ratios[0] == 1.0
        session.redo()
        assert session.grid.col_ratios[0] == 3.0

    def test_undo_last_merge(self, session):
        session.merge(["0-0", "0-1"])
        session.set_col_ratio(2, 2.0)
        snapshot = session.undo_last_merge()
        assert snapshot.action == ACTION_MERGE
        assert session.grid.col_ratios == [1.0] * 4
        assert len(list(session.grid.visible_cells())) == 12

    def test_set_dimensions_recorded(self, session):
        session.set_dimensions(8.0, 6.0)
        assert session.compute_cell_dimensions(0, 0) == pytest.approx((2.0, 2.0))
        session.undo()
        assert session.grid.width == 4.0

    def test_apply_preset_by_name(self, session):
        preset = session.apply_preset("retail front")
        assert preset.name == "Retail Front"
        assert (session.grid.cols, session.grid.rows) == (6, 2)
        assert session.summarize().window == 4
        session.undo()
        assert (session.grid.cols, session.grid.rows) == (4, 3)

    def test_apply_unknown_preset(self, session):
        with pytest.raises(KeyError):
            session.apply_preset("Skyscraper")
        assert not session.history.can_undo


class TestMaterialSettings:
    """Tests for recorded material, glass and color changes."""

    def test_changes_are_recorded(self, session):
        session.set_material("steel")
        session.set_glass_type("laminated")
        session.set_frame_color("#102030")
        assert [e.action for e in session.history.entries()] == [
            ACTION_MATERIAL, ACTION_GLASS_TYPE, ACTION_COLOR,
        ]
        assert session.history.entries()[0].description == "Changed frame material to steel"

    def test_undo_redo_restores_settings(self, session):
        session.set_material("composite")
        session.set_frame_color("#102030")

        assert session.undo().action == ACTION_COLOR
        assert session.grid.frame_color == "#606060"
        assert session.undo().action == ACTION_MATERIAL
        assert session.grid.material == FrameMaterial.ALUMINUM

        session.redo()
        assert session.grid.material == FrameMaterial.COMPOSITE

    def test_unchanged_setting_is_not_recorded(self, session):
        assert session.set_glass_type(GlazingType.DOUBLE) is False
        assert not session.history.can_undo

    def test_invalid_setting_records_nothing(self, session):
        with pytest.raises(InvalidSetting):
            session.set_frame_color("blue")
        assert not session.history.can_undo

    def test_undo_merge_rolls_back_later_settings(self, session):
        session.merge(["0-0", "1-1"])
        session.set_material("steel")
        session.undo_last_merge()
        assert session.grid.material == FrameMaterial.ALUMINUM

    def test_apply_grid_keeps_settings(self, session):
        session.set_glass_type("triple")
        session.apply_grid(2, 2)
        assert session.grid.glass_type == GlazingType.TRIPLE

    def test_metrics_use_settings(self, session):
        session.set_material("steel")
        data = session.metrics()
        assert data.material_breakdown["steel"] == pytest.approx(14.0 * 65.0)
        assert data.total_cost == pytest.approx(14.0 * 65.0 * 1.15)


class TestSessionViews:
    def test_metrics(self, session):
        session.set_tool(ToolMode.WINDOW)
        session.click(0, 0)
        data = session.metrics()
        assert data.window_count == 1
        assert data.glass_area == pytest.approx(1.0)

    def test_to_dict(self, session):
        session.merge(["0-0", "0-1"])
        data = session.to_dict()
        assert data["session_id"] == session.id
        assert data["summary"]["total"] == 11
        assert data["can_undo"] is True
        assert data["can_undo_merge"] is True
        assert data["can_redo"] is False
        assert data["history"][0]["action"] == ACTION_MERGE
        assert "state" not in data["history"][0]
