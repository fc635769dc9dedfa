# File: src/curtain_wall/grid/session.py
"""
Design session owned by a hosting view.

A session wraps exactly one panel grid together with its undo history.
Every mutating action snapshots the grid first and only commits the
snapshot once the grid operation succeeds, so a rejected merge or split
leaves both the grid and the history untouched.

Example:
    >>> session = DesignSession()
    >>> _ = session.toggle_select(0, 0)
    >>> _ = session.toggle_select(0, 1)
    >>> _ = session.merge()
    >>> session.undo() is not None
    True
"""

import uuid
from datetime import datetime
from typing import List, Optional, Sequence, Tuple, Union

from .cell_types import (
    Cell,
    FrameMaterial,
    GlazingType,
    GridSummary,
    PanelKind,
    ToolMode,
)
from .design_metrics import DesignData, compute_design_data
from .errors import InvalidDimension
from .grid_config import GridConfig
from .history import (
    ACTION_COLOR,
    ACTION_COLUMN_SIZE,
    ACTION_DIMENSIONS,
    ACTION_GLASS_TYPE,
    ACTION_MATERIAL,
    ACTION_MERGE,
    ACTION_PRESET,
    ACTION_RESET_SIZES,
    ACTION_ROW_SIZE,
    ACTION_SPLIT,
    ACTION_TYPE_CHANGE,
    DesignHistory,
    DesignSnapshot,
)
from .panel_grid import CellRef, PanelGrid
from .presets import DesignPreset, apply_preset, get_preset
from ..utils.logging_config import get_logger

logger = get_logger(__name__)


class DesignSession:
    """One curtain-wall design being edited.

    Args:
        config: Defaults for the initial grid and history depth
        grid: Existing grid to adopt instead of creating one
        session_id: Explicit id (a UUID is generated otherwise)
    """

    def __init__(
        self,
        config: Optional[GridConfig] = None,
        grid: Optional[PanelGrid] = None,
        session_id: Optional[str] = None,
    ) -> None:
        self.config = config or GridConfig()
        self.config.validate()
        self.id = session_id or str(uuid.uuid4())
        self.grid = grid or PanelGrid(
            cols=self.config.default_columns,
            rows=self.config.default_rows,
            width=self.config.default_width,
            height=self.config.default_height,
        )
        self.history = DesignHistory(limit=self.config.history_limit)
        self.created_at = datetime.now()
        self.updated_at = self.created_at

    def _touch(self) -> None:
        self.updated_at = datetime.now()

    # ------------------------------------------------------------------
    # Grid lifecycle
    # ------------------------------------------------------------------

    def apply_grid(
        self,
        cols: int,
        rows: int,
        width: Optional[float] = None,
        height: Optional[float] = None,
    ) -> PanelGrid:
        """Re-derive the grid, discarding cells, ratios and history.

        The tool and the material settings carry over.

        Raises:
            InvalidDimension: If a size is not positive or exceeds the
                configured column/row maximum
        """
        for value, limit, name in (
            (cols, self.config.max_columns, "cols"),
            (rows, self.config.max_rows, "rows"),
        ):
            if limit is not None and isinstance(value, int) and value > limit:
                raise InvalidDimension(
                    f"{name} cannot exceed {limit}, got {value}",
                    extra={"field": name, "value": value, "max": limit},
                )
        grid = PanelGrid(
            cols=cols,
            rows=rows,
            width=self.grid.width if width is None else width,
            height=self.grid.height if height is None else height,
            tool=self.grid.tool,
            material=self.grid.material,
            glass_type=self.grid.glass_type,
            frame_color=self.grid.frame_color,
        )
        self.grid = grid
        self.history.clear()
        self._touch()
        logger.info(f"Session {self.id}: applied {cols}x{rows} grid")
        return grid

    def set_dimensions(self, width: float, height: float) -> None:
        """Change the wall size while keeping the layout."""
        state = self.grid.to_dict()
        self.grid.set_dimensions(width, height)
        self.history.record(ACTION_DIMENSIONS, f"Set wall size to {width}m x {height}m", state)
        self._touch()

    def apply_preset(self, preset: Union[DesignPreset, str]) -> DesignPreset:
        if isinstance(preset, str):
            preset = get_preset(preset)
        state = self.grid.to_dict()
        apply_preset(self.grid, preset)
        self.history.record(ACTION_PRESET, f"Applied preset: {preset.name}", state)
        self._touch()
        logger.info(f"Session {self.id}: applied preset {preset.name}")
        return preset

    # ------------------------------------------------------------------
    # Cell interaction
    # ------------------------------------------------------------------

    def set_tool(self, tool: Union[ToolMode, str]) -> ToolMode:
        return self.grid.set_tool(tool)

    def set_cell_type(self, row: int, col: int, kind: Union[PanelKind, str]) -> bool:
        state = self.grid.to_dict()
        changed = self.grid.set_cell_type(row, col, kind)
        if changed:
            self.history.record(
                ACTION_TYPE_CHANGE,
                f"Changed panel {row}-{col} to {PanelKind(kind).value}",
                state,
            )
            self._touch()
        return changed

    def toggle_select(self, row: int, col: int) -> List[str]:
        selection = self.grid.toggle_select(row, col)
        self._touch()
        return selection

    def click(self, row: int, col: int) -> Cell:
        if self.grid.tool.is_painting:
            self.set_cell_type(row, col, self.grid.tool.panel_kind)
        else:
            self.toggle_select(row, col)
        return self.grid.cell(row, col)

    def clear_selection(self) -> None:
        self.grid.clear_selection()

    def merge(self, selection: Optional[Sequence[CellRef]] = None) -> Cell:
        state = self.grid.to_dict()
        count = len(self.grid.selection if selection is None else selection)
        anchor = self.grid.merge(selection)
        self.history.record(
            ACTION_MERGE,
            f"Merged {count} panels into {anchor.col_span}x{anchor.row_span} group",
            state,
        )
        self._touch()
        return anchor

    def split(self, cell_id: Optional[CellRef] = None) -> int:
        state = self.grid.to_dict()
        restored = self.grid.split(cell_id)
        self.history.record(ACTION_SPLIT, f"Split merged panel into {restored} panels", state)
        self._touch()
        return restored

    # ------------------------------------------------------------------
    # Ratios
    # ------------------------------------------------------------------

    def set_col_ratio(self, index: int, value: float) -> float:
        state = self.grid.to_dict()
        ratio = self.grid.set_col_ratio(index, value)
        self.history.record(ACTION_COLUMN_SIZE, f"Updated column {index + 1} ratio to {ratio}", state)
        self._touch()
        return ratio

    def set_row_ratio(self, index: int, value: float) -> float:
        state = self.grid.to_dict()
        ratio = self.grid.set_row_ratio(index, value)
        self.history.record(ACTION_ROW_SIZE, f"Updated row {index + 1} ratio to {ratio}", state)
        self._touch()
        return ratio

    def reset_ratios(self) -> None:
        state = self.grid.to_dict()
        self.grid.reset_ratios()
        self.history.record(ACTION_RESET_SIZES, "Reset to equal column and row sizes", state)
        self._touch()

    # ------------------------------------------------------------------
    # Material settings
    # ------------------------------------------------------------------

    def set_material(self, material: Union[FrameMaterial, str]) -> bool:
        """Change the frame material. Unchanged values are not recorded."""
        state = self.grid.to_dict()
        changed = self.grid.set_material(material)
        if changed:
            self.history.record(
                ACTION_MATERIAL,
                f"Changed frame material to {self.grid.material.value}",
                state,
            )
            self._touch()
        return changed

    def set_glass_type(self, glass_type: Union[GlazingType, str]) -> bool:
        state = self.grid.to_dict()
        changed = self.grid.set_glass_type(glass_type)
        if changed:
            self.history.record(
                ACTION_GLASS_TYPE,
                f"Changed glass type to {self.grid.glass_type.value}",
                state,
            )
            self._touch()
        return changed

    def set_frame_color(self, color: str) -> bool:
        state = self.grid.to_dict()
        changed = self.grid.set_frame_color(color)
        if changed:
            self.history.record(
                ACTION_COLOR,
                f"Changed frame color to {self.grid.frame_color}",
                state,
            )
            self._touch()
        return changed

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    def undo(self) -> Optional[DesignSnapshot]:
        snapshot = self.history.undo(self.grid)
        if snapshot:
            self._touch()
        return snapshot

    def redo(self) -> Optional[DesignSnapshot]:
        snapshot = self.history.redo(self.grid)
        if snapshot:
            self._touch()
        return snapshot

    def undo_last_merge(self) -> Optional[DesignSnapshot]:
        snapshot = self.history.undo_last_merge(self.grid)
        if snapshot:
            self._touch()
        return snapshot

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    def compute_cell_dimensions(self, row: int, col: int) -> Tuple[float, float]:
        return self.grid.compute_cell_dimensions(row, col)

    def summarize(self) -> GridSummary:
        return self.grid.summarize()

    def metrics(self) -> DesignData:
        return compute_design_data(self.grid)

    def to_dict(self) -> dict:
        return {
            "session_id": self.id,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
            "grid": self.grid.to_dict(),
            "summary": self.summarize().to_dict(),
            "can_undo": self.history.can_undo,
            "can_redo": self.history.can_redo,
            "can_undo_merge": self.history.can_undo_merge,
            "history": [entry.to_dict() for entry in self.history.entries()],
        }
