from enum import Enum
from pydantic import BaseModel, Field, field_validator
from typing import List, Optional, Literal

from src.curtain_wall.grid.cell_types import parse_cell_id

PanelKindName = Literal["structure", "window", "door"]
MaterialName = Literal["aluminum", "steel", "composite"]
GlassTypeName = Literal["single", "double", "triple", "laminated"]


class DesignCreate(BaseModel):
    """Input for a new design session."""
    columns: int = Field(default=4, description="Number of grid columns", ge=1, le=10)
    rows: int = Field(default=3, description="Number of grid rows", ge=1, le=10)
    width: float = Field(default=4.0, description="Wall width in meters", gt=0)
    height: float = Field(default=3.0, description="Wall height in meters", gt=0)
    preset: Optional[str] = Field(
        default=None, description="Preset name to start from (overrides columns/rows)"
    )


class GridApply(BaseModel):
    """Re-derive the grid. Clears cells, ratios and history."""
    columns: int = Field(description="Number of grid columns", ge=1, le=10)
    rows: int = Field(description="Number of grid rows", ge=1, le=10)
    width: Optional[float] = Field(default=None, description="Wall width in meters", gt=0)
    height: Optional[float] = Field(default=None, description="Wall height in meters", gt=0)


class DimensionsUpdate(BaseModel):
    width: float = Field(description="Wall width in meters", gt=0)
    height: float = Field(description="Wall height in meters", gt=0)


class PresetApply(BaseModel):
    name: str = Field(description="Preset name (case-insensitive)", min_length=1)


class ToolUpdate(BaseModel):
    tool: PanelKindName = Field(
        description="Active tool: 'structure' selects, 'window'/'door' paint"
    )


class CellTypeUpdate(BaseModel):
    type: PanelKindName = Field(description="Panel kind to paint")


class MaterialUpdate(BaseModel):
    material: MaterialName = Field(description="Frame material")


class GlassTypeUpdate(BaseModel):
    glass_type: GlassTypeName = Field(description="Glass fitted to window and door panels")


class ColorUpdate(BaseModel):
    color: str = Field(description="Frame color as '#rrggbb'")


class MergeRequest(BaseModel):
    """Merge request. Without cell_ids the current selection is merged."""
    cell_ids: Optional[List[str]] = Field(
        default=None, description="Cell ids ('row-col') to merge"
    )

    @field_validator('cell_ids')
    @classmethod
    def validate_cell_ids(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        """Validate that every id has the 'row-col' form."""
        if v is None:
            return v
        for cell_id in v:
            parse_cell_id(cell_id)
        return v


class SplitRequest(BaseModel):
    """Split request. Without cell_id the single selected cell is split."""
    cell_id: Optional[str] = Field(default=None, description="Anchor cell id ('row-col')")

    @field_validator('cell_id')
    @classmethod
    def validate_cell_id(cls, v: Optional[str]) -> Optional[str]:
        if v is not None:
            parse_cell_id(v)
        return v


class RatioAxis(str, Enum):
    COLUMNS = "columns"
    ROWS = "rows"


class RatioUpdate(BaseModel):
    value: float = Field(description="Relative weight; non-positive values become 1")


class CellModel(BaseModel):
    id: str
    row: int
    col: int
    kind: PanelKindName
    selected: bool
    col_span: int
    row_span: int
    is_spanned: bool
    merged: bool


class GridStateModel(BaseModel):
    cols: int
    rows: int
    width: float
    height: float
    tool: PanelKindName
    material: MaterialName
    glass_type: GlassTypeName
    frame_color: str
    col_ratios: List[float]
    row_ratios: List[float]
    selection: List[str]
    cells: List[List[CellModel]]


class SummaryModel(BaseModel):
    total: int
    structure: int
    window: int
    door: int


class HistoryEntryModel(BaseModel):
    action: str
    description: str
    timestamp: float


class DesignSessionModel(BaseModel):
    """Full state of a design session."""
    session_id: str = Field(description="Unique session identifier")
    created_at: str
    updated_at: str
    grid: GridStateModel
    summary: SummaryModel
    can_undo: bool
    can_redo: bool
    can_undo_merge: bool
    history: List[HistoryEntryModel] = Field(default=[])


class DesignListItem(BaseModel):
    session_id: str
    updated_at: str
    columns: int
    rows: int
    summary: SummaryModel


class CellDimensionsModel(BaseModel):
    row: int
    col: int
    width: float = Field(description="Cell width in meters (2 decimals)")
    height: float = Field(description="Cell height in meters (2 decimals)")


class HistoryActionResponse(BaseModel):
    """Result of undo/redo. applied is False when there was nothing to revert."""
    applied: bool
    action: Optional[str] = None
    description: Optional[str] = None
    design: DesignSessionModel


class PresetModel(BaseModel):
    name: str
    description: str
    columns: int
    rows: int
    layout: List[List[PanelKindName]]

