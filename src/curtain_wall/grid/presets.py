# File: src/curtain_wall/grid/presets.py
"""
Named starter layouts for the curtain-wall designer.

Applying a preset re-derives the grid to the preset's size and paints the
layout directly, independent of the active tool.
"""

from dataclasses import dataclass
from typing import List, Tuple

from .cell_types import PanelKind
from .panel_grid import PanelGrid


@dataclass(frozen=True)
class DesignPreset:
    """A named grid layout.

    Attributes:
        name: Display name, also the lookup key
        description: One-line description for the host UI
        columns: Column count
        rows: Row count
        layout: Panel kind per cell, row-major
    """
    name: str
    description: str
    columns: int
    rows: int
    layout: Tuple[Tuple[str, ...], ...]

    def __post_init__(self):
        """Validate the layout against the declared size."""
        if len(self.layout) != self.rows or any(len(r) != self.columns for r in self.layout):
            raise ValueError(
                f"Preset '{self.name}' layout does not match {self.columns}x{self.rows}"
            )
        for row in self.layout:
            for kind in row:
                PanelKind(kind)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "columns": self.columns,
            "rows": self.rows,
            "layout": [list(row) for row in self.layout],
        }


PRESETS: Tuple[DesignPreset, ...] = (
    DesignPreset(
        name="Standard Office",
        description="4x3 grid with mixed windows and structure",
        columns=4,
        rows=3,
        layout=(
            ("structure", "window", "window", "structure"),
            ("structure", "window", "window", "structure"),
            ("structure", "structure", "structure", "structure"),
        ),
    ),
    DesignPreset(
        name="Retail Front",
        description="Wide windows with minimal structure",
        columns=6,
        rows=2,
        layout=(
            ("structure", "window", "window", "window", "window", "structure"),
            ("structure", "structure", "structure", "structure", "structure", "structure"),
        ),
    ),
    DesignPreset(
        name="Residential",
        description="Balanced mix for homes",
        columns=3,
        rows=4,
        layout=(
            ("structure", "window", "structure"),
            ("structure", "window", "structure"),
            ("structure", "door", "structure"),
            ("structure", "structure", "structure"),
        ),
    ),
)


def list_presets() -> List[DesignPreset]:
    return list(PRESETS)


def get_preset(name: str) -> DesignPreset:
    """Look up a preset by name (case-insensitive).

    Raises:
        KeyError: If no preset has that name
    """
    for preset in PRESETS:
        if preset.name.lower() == name.strip().lower():
            return preset
    raise KeyError(f"Unknown design preset '{name}'")


def apply_preset(grid: PanelGrid, preset: DesignPreset) -> None:
    """Re-derive the grid to the preset size and paint its layout."""
    grid.initialize(preset.columns, preset.rows)
    for r, row in enumerate(preset.layout):
        for c, kind in enumerate(row):
            grid.cells[r][c].kind = PanelKind(kind)
