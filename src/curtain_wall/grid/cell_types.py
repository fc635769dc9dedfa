# File: src/curtain_wall/grid/cell_types.py

"""Data models for the curtain-wall panel grid.

Defines the core types used by the grid model, the design session and the
metrics/export helpers. All physical measurements are in meters.

Key Types:
    PanelKind: What a visible cell represents (structure, window, door)
    ToolMode: The active edit tool supplied by the host before each click
    FrameMaterial, GlazingType: Wall-wide material settings used by the
        cost estimate
    Cell: One grid position, either a unit cell or a span anchor
    GridSummary: Per-kind counts over visible cells
"""

from dataclasses import dataclass
from typing import Tuple
from enum import Enum


# =============================================================================
# Enumerations
# =============================================================================


class PanelKind(Enum):
    """Type assigned to a visible cell."""

    STRUCTURE = "structure"
    """Opaque structural infill (default for every new cell)."""

    WINDOW = "window"
    """Glazed window panel."""

    DOOR = "door"
    """Glazed door panel."""


class ToolMode(Enum):
    """Active edit tool of the designer.

    STRUCTURE doubles as the select tool: clicks toggle selection instead
    of painting a type.
    """

    STRUCTURE = "structure"
    WINDOW = "window"
    DOOR = "door"

    @property
    def is_painting(self) -> bool:
        """True for the tools that paint a panel kind onto a cell."""
        return self is not ToolMode.STRUCTURE

    @property
    def panel_kind(self) -> PanelKind:
        """Panel kind painted by this tool."""
        return PanelKind(self.value)


class FrameMaterial(Enum):
    """Frame material of the whole wall."""

    ALUMINUM = "aluminum"
    STEEL = "steel"
    COMPOSITE = "composite"


class GlazingType(Enum):
    """Glass fitted to every window and door panel."""

    SINGLE = "single"
    DOUBLE = "double"
    TRIPLE = "triple"
    LAMINATED = "laminated"


DEFAULT_FRAME_COLOR = "#606060"


# =============================================================================
# Cell identifiers
# =============================================================================


def make_cell_id(row: int, col: int) -> str:
    """Build the identifier of the cell at (row, col), e.g. ``"1-2"``."""
    return f"{row}-{col}"


def parse_cell_id(cell_id: str) -> Tuple[int, int]:
    """Split a cell identifier back into (row, col).

    Raises:
        ValueError: If the identifier is not of the form ``"row-col"``
    """
    parts = str(cell_id).split("-")
    if len(parts) != 2:
        raise ValueError(f"Malformed cell id '{cell_id}'")
    return int(parts[0]), int(parts[1])


# =============================================================================
# Data Classes
# =============================================================================


@dataclass
class Cell:
    """One grid position.

    Attributes:
        row: Row index (0 = top)
        col: Column index (0 = left)
        kind: Panel kind; ignored while the cell is spanned
        selected: Transient selection flag
        col_span: Columns covered; > 1 only on a span anchor
        row_span: Rows covered; > 1 only on a span anchor
        is_spanned: True when covered by another cell's span
        merged: True only on anchors created by a merge
    """
    row: int
    col: int
    kind: PanelKind = PanelKind.STRUCTURE
    selected: bool = False
    col_span: int = 1
    row_span: int = 1
    is_spanned: bool = False
    merged: bool = False

    def __post_init__(self):
        """Convert kind string to enum if needed."""
        if isinstance(self.kind, str):
            self.kind = PanelKind(self.kind)

    @property
    def id(self) -> str:
        return make_cell_id(self.row, self.col)

    @property
    def is_visible(self) -> bool:
        """Visible cells are unit cells or span anchors."""
        return not self.is_spanned

    @property
    def is_anchor(self) -> bool:
        """True for a merged anchor that can be split."""
        return self.merged and not self.is_spanned and (
            self.col_span > 1 or self.row_span > 1
        )

    def reset(self) -> None:
        """Return the cell to a fresh unit structure cell."""
        self.kind = PanelKind.STRUCTURE
        self.selected = False
        self.col_span = 1
        self.row_span = 1
        self.is_spanned = False
        self.merged = False

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "row": self.row,
            "col": self.col,
            "kind": self.kind.value,
            "selected": self.selected,
            "col_span": self.col_span,
            "row_span": self.row_span,
            "is_spanned": self.is_spanned,
            "merged": self.merged,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Cell":
        return cls(
            row=int(data["row"]),
            col=int(data["col"]),
            kind=PanelKind(data.get("kind", "structure")),
            selected=bool(data.get("selected", False)),
            col_span=int(data.get("col_span", 1)),
            row_span=int(data.get("row_span", 1)),
            is_spanned=bool(data.get("is_spanned", False)),
            merged=bool(data.get("merged", False)),
        )


@dataclass(frozen=True)
class GridSummary:
    """Counts over visible cells.

    Attributes:
        total: Visible (non-spanned) cells
        structure: Visible structure cells
        window: Visible window cells
        door: Visible door cells
    """
    total: int
    structure: int
    window: int
    door: int

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "structure": self.structure,
            "window": self.window,
            "door": self.door,
        }
