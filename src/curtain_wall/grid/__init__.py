# File: src/curtain_wall/grid/__init__.py
"""
Curtain-wall panel grid module.

This module provides the panel grid designer:
- Cell, tool and material types, grid errors and configuration
- The panel grid model (selection, merge/split, ratio-weighted sizes)
- Design sessions with undo/redo history and presets
- Design aggregates, material estimate and JSON serialization for
  pricing/export

Example:
    >>> from src.curtain_wall.grid import DesignSession, ToolMode
    >>> session = DesignSession()
    >>> _ = session.set_tool(ToolMode.WINDOW)
    >>> _ = session.click(0, 1)
    >>> session.summarize().window
    1
"""

from .cell_types import (
    DEFAULT_FRAME_COLOR,
    Cell,
    FrameMaterial,
    GlazingType,
    GridSummary,
    PanelKind,
    ToolMode,
    make_cell_id,
    parse_cell_id,
)

from .errors import (
    GridError,
    InvalidDimension,
    InvalidSetting,
    InsufficientSelection,
    NotSplittable,
    CellOutOfRange,
)

from .grid_config import GridConfig

from .panel_grid import PanelGrid

from .design_metrics import (
    DesignData,
    PanelRecord,
    compute_design_data,
    corner_count,
    estimate_cost,
    frame_meters,
    panel_records,
)

from .history import DesignHistory, DesignSnapshot

from .presets import (
    DesignPreset,
    PRESETS,
    apply_preset,
    get_preset,
    list_presets,
)

from .session import DesignSession

from .serialization import (
    grid_to_dict,
    grid_from_dict,
    serialize_grid,
    deserialize_grid,
    serialize_design_data,
)

__all__ = [
    # Types
    "Cell",
    "DEFAULT_FRAME_COLOR",
    "FrameMaterial",
    "GlazingType",
    "GridSummary",
    "PanelKind",
    "ToolMode",
    "make_cell_id",
    "parse_cell_id",
    # Errors
    "GridError",
    "InvalidDimension",
    "InvalidSetting",
    "InsufficientSelection",
    "NotSplittable",
    "CellOutOfRange",
    # Configuration
    "GridConfig",
    # Model
    "PanelGrid",
    # Metrics
    "DesignData",
    "PanelRecord",
    "compute_design_data",
    "corner_count",
    "estimate_cost",
    "frame_meters",
    "panel_records",
    # History and sessions
    "DesignHistory",
    "DesignSnapshot",
    "DesignSession",
    # Presets
    "DesignPreset",
    "PRESETS",
    "apply_preset",
    "get_preset",
    "list_presets",
    # Serialization
    "grid_to_dict",
    "grid_from_dict",
    "serialize_grid",
    "deserialize_grid",
    "serialize_design_data",
]
