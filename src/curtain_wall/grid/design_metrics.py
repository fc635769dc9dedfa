# File: src/curtain_wall/grid/design_metrics.py
"""
Design aggregates handed from the grid to the pricing calculator.

The pricing side expects the wall size, frame and window lengths, glass
area, corner count and a flat list of visible panels. Only visible cells
(unit cells and span anchors) contribute; spanned cells have no size of
their own.

The aggregates also carry a quick material estimate for the designer:

    frame    = frame meters x material rate
    glass    = glass area x glass rate
    hardware = (frame + glass) x HARDWARE_SHARE

The estimate is informational; quotes are priced from the aluminium
profile by :mod:`src.curtain_wall.pricing.pricing_calculator`.

Example:
    >>> grid = PanelGrid(cols=2, rows=1, width=2.0, height=1.0)
    >>> _ = grid.set_tool(ToolMode.WINDOW)
    >>> _ = grid.click(0, 0)
    >>> data = compute_design_data(grid)
    >>> data.glass_area
    1.0
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from .cell_types import DEFAULT_FRAME_COLOR, FrameMaterial, GlazingType, PanelKind
from .panel_grid import PanelGrid

GLAZED_KINDS = (PanelKind.WINDOW, PanelKind.DOOR)

# Per meter of frame
MATERIAL_RATES: Dict[FrameMaterial, float] = {
    FrameMaterial.ALUMINUM: 45.0,
    FrameMaterial.STEEL: 65.0,
    FrameMaterial.COMPOSITE: 55.0,
}

# Per square meter of glass
GLASS_RATES: Dict[GlazingType, float] = {
    GlazingType.SINGLE: 80.0,
    GlazingType.DOUBLE: 120.0,
    GlazingType.TRIPLE: 180.0,
    GlazingType.LAMINATED: 150.0,
}

HARDWARE_SHARE = 0.15


@dataclass
class PanelRecord:
    """One visible panel of a finished design (meters)."""
    kind: PanelKind
    row: int
    col: int
    row_span: int
    col_span: int
    width_meters: float
    height_meters: float
    left: float
    top: float

    @property
    def area(self) -> float:
        return self.width_meters * self.height_meters

    @property
    def perimeter(self) -> float:
        return 2 * (self.width_meters + self.height_meters)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.kind.value,
            "row": self.row,
            "col": self.col,
            "rowSpan": self.row_span,
            "colSpan": self.col_span,
            "widthMeters": self.width_meters,
            "heightMeters": self.height_meters,
            "left": self.left,
            "top": self.top,
        }


@dataclass
class DesignData:
    """Aggregates of a curtain-wall design.

    Attributes:
        wall_width: Overall wall width (m)
        wall_height: Overall wall height (m)
        frame_meters: External frame perimeter (m)
        window_meters: Summed perimeter of window and door panels (m)
        glass_area: Summed area of window and door panels (m2)
        corner_count: Perimeter corners plus internal grid intersections
        columns: Column count
        rows: Row count
        column_sizes: Width of each column (m)
        row_sizes: Height of each row (m)
        panels: Visible panels
        material: Frame material
        glass_type: Glass type of window and door panels
        frame_color: Frame color (#rrggbb)
        total_cost: Material estimate (frame + glass + hardware)
        material_breakdown: Estimate per material, glass and hardware;
            materials not in use report 0
    """
    wall_width: float
    wall_height: float
    frame_meters: float
    window_meters: float
    glass_area: float
    corner_count: int
    columns: int
    rows: int
    column_sizes: List[float] = field(default_factory=list)
    row_sizes: List[float] = field(default_factory=list)
    panels: List[PanelRecord] = field(default_factory=list)
    material: FrameMaterial = FrameMaterial.ALUMINUM
    glass_type: GlazingType = GlazingType.DOUBLE
    frame_color: str = DEFAULT_FRAME_COLOR
    total_cost: float = 0.0
    material_breakdown: Dict[str, float] = field(default_factory=dict)

    @property
    def window_count(self) -> int:
        return sum(1 for p in self.panels if p.kind == PanelKind.WINDOW)

    @property
    def door_count(self) -> int:
        return sum(1 for p in self.panels if p.kind == PanelKind.DOOR)

    def to_dict(self) -> Dict[str, Any]:
        """Plain dictionary using the quote item's ``designData`` keys."""
        return {
            "wallWidth": self.wall_width,
            "wallHeight": self.wall_height,
            "frameMeters": self.frame_meters,
            "windowMeters": self.window_meters,
            "glassArea": self.glass_area,
            "cornerCount": self.corner_count,
            "columns": self.columns,
            "rows": self.rows,
            "columnSizes": list(self.column_sizes),
            "rowSizes": list(self.row_sizes),
            "panels": [panel.to_dict() for panel in self.panels],
            "material": self.material.value,
            "glassType": self.glass_type.value,
            "frameColor": self.frame_color,
            "totalCost": self.total_cost,
            "materialBreakdown": dict(self.material_breakdown),
        }


def frame_meters(grid: PanelGrid) -> float:
    """External frame length around the whole wall."""
    return 2 * (grid.width + grid.height)


def corner_count(grid: PanelGrid) -> int:
    """Four perimeter corners plus one per internal grid intersection."""
    return 4 + max(0, (grid.cols - 1) * (grid.rows - 1))


def panel_records(grid: PanelGrid) -> List[PanelRecord]:
    """Serializable list of visible panels with their physical size."""
    records = []
    for cell in grid.visible_cells():
        width, height = grid.compute_cell_dimensions(cell.row, cell.col)
        left, top = grid.cell_offset(cell.row, cell.col)
        records.append(PanelRecord(
            kind=cell.kind,
            row=cell.row,
            col=cell.col,
            row_span=cell.row_span,
            col_span=cell.col_span,
            width_meters=width,
            height_meters=height,
            left=left,
            top=top,
        ))
    return records


def estimate_cost(
    frame_length: float,
    glass_area: float,
    material: FrameMaterial,
    glass_type: GlazingType,
) -> Tuple[float, Dict[str, float]]:
    """Material estimate of a design.

    Returns:
        (total cost, breakdown keyed by every material plus glass and hardware)
    """
    breakdown = {m.value: 0.0 for m in FrameMaterial}
    frame_cost = frame_length * MATERIAL_RATES[material]
    glass_cost = glass_area * GLASS_RATES[glass_type]
    hardware_cost = (frame_cost + glass_cost) * HARDWARE_SHARE

    breakdown[material.value] = frame_cost
    breakdown["glass"] = glass_cost
    breakdown["hardware"] = hardware_cost
    return frame_cost + glass_cost + hardware_cost, breakdown


def compute_design_data(grid: PanelGrid) -> DesignData:
    """Collect the aggregates of the current grid for pricing/export."""
    panels = panel_records(grid)
    glazed = [p for p in panels if p.kind in GLAZED_KINDS]
    frame = frame_meters(grid)
    glass = sum(p.area for p in glazed)
    total_cost, breakdown = estimate_cost(frame, glass, grid.material, grid.glass_type)

    return DesignData(
        wall_width=grid.width,
        wall_height=grid.height,
        frame_meters=frame,
        window_meters=sum(p.perimeter for p in glazed),
        glass_area=glass,
        corner_count=corner_count(grid),
        columns=grid.cols,
        rows=grid.rows,
        column_sizes=grid.column_sizes(),
        row_sizes=grid.row_sizes(),
        panels=panels,
        material=grid.material,
        glass_type=grid.glass_type,
        frame_color=grid.frame_color,
        total_cost=total_cost,
        material_breakdown=breakdown,
    )
