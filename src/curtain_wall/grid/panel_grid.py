# File: src/curtain_wall/grid/panel_grid.py
"""
Panel grid model for the curtain-wall designer.

Owns a rectangular grid of cells, each either a unit cell or the top-left
anchor of a merged rectangular span, and derives each visible cell's
physical size from column/row weight ratios and the overall wall size.

Operations:
1. Initialize / re-derive the grid (discards all cell state)
2. Paint panel kinds with the window/door tools
3. Toggle selection with the structure (select) tool
4. Merge a selection's bounding rectangle into one span, split it back
5. Edit column/row ratios and compute ratio-weighted dimensions
6. Set the wall-wide frame material, glass type and frame color

Example:
    >>> grid = PanelGrid(cols=4, rows=3, width=4.0, height=3.0)
    >>> grid.toggle_select(0, 0)
    ['0-0']
    >>> grid.toggle_select(1, 1)
    ['0-0', '1-1']
    >>> anchor = grid.merge()
    >>> (anchor.col_span, anchor.row_span)
    (2, 2)
"""

import re
from typing import Dict, Iterator, List, Optional, Sequence, Tuple, Union

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
    CellOutOfRange,
    InsufficientSelection,
    InvalidDimension,
    InvalidSetting,
    NotSplittable,
)
from ..utils.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_RATIO = 1.0

COLOR_PATTERN = re.compile(r"#[0-9a-fA-F]{6}")

CellRef = Union[str, Tuple[int, int]]
Rect = Tuple[int, int, int, int]  # (min_row, max_row, min_col, max_col), inclusive


def _check_count(value, name: str) -> int:
    """Validate a column/row count."""
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidDimension(
            f"{name} must be a positive integer, got {value!r}",
            extra={"field": name, "value": value},
        )
    return value


def _check_length(value, name: str) -> float:
    """Validate a physical wall measurement in meters."""
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not value > 0:
        raise InvalidDimension(
            f"{name} must be a positive number, got {value!r}",
            extra={"field": name, "value": value},
        )
    return float(value)


def _check_material(value) -> FrameMaterial:
    try:
        return FrameMaterial(value)
    except ValueError:
        raise InvalidSetting(
            f"Unknown frame material {value!r}",
            extra={"field": "material", "value": value},
        )


def _check_glass_type(value) -> GlazingType:
    try:
        return GlazingType(value)
    except ValueError:
        raise InvalidSetting(
            f"Unknown glass type {value!r}",
            extra={"field": "glass_type", "value": value},
        )


def _check_color(value) -> str:
    """Validate a ``#rrggbb`` frame color and lower-case it."""
    if not isinstance(value, str) or not COLOR_PATTERN.fullmatch(value):
        raise InvalidSetting(
            f"Frame color must look like '#rrggbb', got {value!r}",
            extra={"field": "frame_color", "value": value},
        )
    return value.lower()


def _check_spans(cells: List[List[Cell]], rows: int, cols: int) -> None:
    """Validate that spans tile the grid.

    Every span must lie inside the grid, and every spanned cell must be
    covered by exactly one visible anchor (and nothing else).

    Raises:
        InvalidDimension: If a span leaves the grid or the cover is broken
    """
    covered_by: Dict[Tuple[int, int], str] = {}
    for row_cells in cells:
        for cell in row_cells:
            if cell.is_spanned:
                continue
            if cell.col_span < 1 or cell.row_span < 1:
                raise InvalidDimension(
                    f"Cell {cell.id} has a non-positive span",
                    extra={"cell_id": cell.id},
                )
            if cell.row + cell.row_span > rows or cell.col + cell.col_span > cols:
                raise InvalidDimension(
                    f"Span of {cell.id} ({cell.col_span}x{cell.row_span}) leaves the "
                    f"{cols}x{rows} grid",
                    extra={"cell_id": cell.id, "col_span": cell.col_span, "row_span": cell.row_span},
                )
            for r in range(cell.row, cell.row + cell.row_span):
                for c in range(cell.col, cell.col + cell.col_span):
                    if (r, c) == (cell.row, cell.col):
                        continue
                    if (r, c) in covered_by or not cells[r][c].is_spanned:
                        raise InvalidDimension(
                            f"Cell {make_cell_id(r, c)} overlaps the span of {cell.id}",
                            extra={"cell_id": make_cell_id(r, c), "anchor": cell.id},
                        )
                    covered_by[(r, c)] = cell.id

    for row_cells in cells:
        for cell in row_cells:
            if cell.is_spanned and (cell.row, cell.col) not in covered_by:
                raise InvalidDimension(
                    f"Spanned cell {cell.id} has no anchor",
                    extra={"cell_id": cell.id},
                )


class PanelGrid:
    """Curtain-wall panel grid.

    Args:
        cols: Number of columns
        rows: Number of rows
        width: Wall width in meters
        height: Wall height in meters
        tool: Initial active tool (defaults to the select tool)
        material: Frame material
        glass_type: Glass fitted to window and door panels
        frame_color: Frame color as '#rrggbb'

    Raises:
        InvalidDimension: If any dimension is not positive
        InvalidSetting: If a material setting is not recognized
    """

    def __init__(
        self,
        cols: int = 4,
        rows: int = 3,
        width: float = 4.0,
        height: float = 3.0,
        tool: ToolMode = ToolMode.STRUCTURE,
        material: FrameMaterial = FrameMaterial.ALUMINUM,
        glass_type: GlazingType = GlazingType.DOUBLE,
        frame_color: str = DEFAULT_FRAME_COLOR,
    ) -> None:
        self._width = _check_length(width, "width")
        self._height = _check_length(height, "height")
        self._tool = ToolMode(tool)
        self._material = _check_material(material)
        self._glass_type = _check_glass_type(glass_type)
        self._frame_color = _check_color(frame_color)
        self._cells: List[List[Cell]] = []
        self._col_ratios: List[float] = []
        self._row_ratios: List[float] = []
        self._selection: List[str] = []
        self.initialize(cols, rows)

    # ------------------------------------------------------------------
    # State accessors
    # ------------------------------------------------------------------

    @property
    def cols(self) -> int:
        return len(self._col_ratios)

    @property
    def rows(self) -> int:
        return len(self._row_ratios)

    @property
    def width(self) -> float:
        return self._width

    @property
    def height(self) -> float:
        return self._height

    @property
    def tool(self) -> ToolMode:
        return self._tool

    @property
    def material(self) -> FrameMaterial:
        return self._material

    @property
    def glass_type(self) -> GlazingType:
        return self._glass_type

    @property
    def frame_color(self) -> str:
        return self._frame_color

    @property
    def col_ratios(self) -> List[float]:
        return list(self._col_ratios)

    @property
    def row_ratios(self) -> List[float]:
        return list(self._row_ratios)

    @property
    def selection(self) -> List[str]:
        """Selected cell ids in selection order."""
        return list(self._selection)

    @property
    def cells(self) -> List[List[Cell]]:
        """Cell matrix indexed ``[row][col]``."""
        return self._cells

    def cell(self, row: int, col: int) -> Cell:
        """Get the cell at (row, col).

        Raises:
            CellOutOfRange: If the position is outside the grid
        """
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise CellOutOfRange(
                f"Cell ({row}, {col}) is outside the {self.rows}x{self.cols} grid",
                extra={"row": row, "col": col},
            )
        return self._cells[row][col]

    def visible_cells(self) -> Iterator[Cell]:
        """Iterate over unit cells and span anchors in row-major order."""
        for row in self._cells:
            for cell in row:
                if not cell.is_spanned:
                    yield cell

    def anchor_of(self, row: int, col: int) -> Optional[Cell]:
        """Return the visible cell covering (row, col).

        For a visible cell this is the cell itself; for a spanned cell it is
        the anchor whose span contains it.
        """
        cell = self.cell(row, col)
        if not cell.is_spanned:
            return cell
        for r in range(row, -1, -1):
            for c in range(col, -1, -1):
                candidate = self._cells[r][c]
                if candidate.is_spanned:
                    continue
                if r + candidate.row_span > row and c + candidate.col_span > col:
                    return candidate
        return None

    # ------------------------------------------------------------------
    # Grid lifecycle
    # ------------------------------------------------------------------

    def initialize(self, cols: int, rows: int) -> None:
        """Replace the grid with ``rows x cols`` unit structure cells.

        Resets every ratio to 1 and clears the selection.

        Raises:
            InvalidDimension: If cols or rows is not a positive integer
        """
        _check_count(cols, "cols")
        _check_count(rows, "rows")

        self._cells = [[Cell(row=r, col=c) for c in range(cols)] for r in range(rows)]
        self._col_ratios = [DEFAULT_RATIO] * cols
        self._row_ratios = [DEFAULT_RATIO] * rows
        self._selection = []
        logger.debug(f"Initialized {cols}x{rows} grid")

    def set_dimensions(self, width: float, height: float) -> None:
        """Set the physical wall size without touching cell state.

        Raises:
            InvalidDimension: If width or height is not positive
        """
        width = _check_length(width, "width")
        height = _check_length(height, "height")
        self._width = width
        self._height = height
        logger.debug(f"Wall dimensions set to {width}m x {height}m")

    def set_tool(self, tool: Union[ToolMode, str]) -> ToolMode:
        """Change the active tool. Selection is kept."""
        self._tool = ToolMode(tool)
        return self._tool

    # ------------------------------------------------------------------
    # Material settings
    # ------------------------------------------------------------------

    def set_material(self, material: Union[FrameMaterial, str]) -> bool:
        """Change the frame material.

        Returns:
            True if the material changed

        Raises:
            InvalidSetting: If the material is not recognized
        """
        material = _check_material(material)
        if material == self._material:
            return False
        self._material = material
        logger.debug(f"Frame material set to {material.value}")
        return True

    def set_glass_type(self, glass_type: Union[GlazingType, str]) -> bool:
        """Change the glass type. See :meth:`set_material`."""
        glass_type = _check_glass_type(glass_type)
        if glass_type == self._glass_type:
            return False
        self._glass_type = glass_type
        logger.debug(f"Glass type set to {glass_type.value}")
        return True

    def set_frame_color(self, color: str) -> bool:
        """Change the frame color (``#rrggbb``, stored lower-case)."""
        color = _check_color(color)
        if color == self._frame_color:
            return False
        self._frame_color = color
        return True

    # ------------------------------------------------------------------
    # Cell interaction
    # ------------------------------------------------------------------

    def set_cell_type(self, row: int, col: int, kind: Union[PanelKind, str]) -> bool:
        """Paint a panel kind onto a cell.

        Only applies while a painting tool (window/door) is active, and is a
        no-op on spanned cells. Selection is never touched.

        Returns:
            True if the cell's kind changed
        """
        cell = self.cell(row, col)
        kind = PanelKind(kind)

        if not self._tool.is_painting:
            logger.debug(f"Ignoring type change on {cell.id}: select tool active")
            return False
        if cell.is_spanned:
            return False
        if cell.kind == kind:
            return False

        cell.kind = kind
        logger.debug(f"Cell {cell.id} set to {kind.value}")
        return True

    def toggle_select(self, row: int, col: int) -> List[str]:
        """Flip the selection state of a cell.

        Only applies while the select tool is active, and is a no-op on
        spanned cells.

        Returns:
            The updated selection
        """
        cell = self.cell(row, col)

        if self._tool.is_painting or cell.is_spanned:
            return self.selection

        cell.selected = not cell.selected
        if cell.selected:
            if cell.id not in self._selection:
                self._selection.append(cell.id)
        elif cell.id in self._selection:
            self._selection.remove(cell.id)
        return self.selection

    def click(self, row: int, col: int) -> Cell:
        """Route a cell click according to the active tool."""
        if self._tool.is_painting:
            self.set_cell_type(row, col, self._tool.panel_kind)
        else:
            self.toggle_select(row, col)
        return self.cell(row, col)

    def clear_selection(self) -> None:
        for row in self._cells:
            for cell in row:
                cell.selected = False
        self._selection = []

    # ------------------------------------------------------------------
    # Merge / split
    # ------------------------------------------------------------------

    def _resolve(self, ref: CellRef) -> Tuple[int, int]:
        if isinstance(ref, str):
            try:
                row, col = parse_cell_id(ref)
            except ValueError as e:
                raise CellOutOfRange(str(e), extra={"cell_id": ref})
        else:
            row, col = int(ref[0]), int(ref[1])
        self.cell(row, col)
        return row, col

    def _spans(self) -> Iterator[Tuple[Cell, Rect]]:
        for cell in self.visible_cells():
            if cell.col_span > 1 or cell.row_span > 1:
                yield cell, (
                    cell.row,
                    cell.row + cell.row_span - 1,
                    cell.col,
                    cell.col + cell.col_span - 1,
                )

    def _grow_to_cover_spans(self, rect: Rect) -> Rect:
        """Grow a rectangle until every span it touches lies fully inside it."""
        min_row, max_row, min_col, max_col = rect
        changed = True
        while changed:
            changed = False
            for _, (r0, r1, c0, c1) in self._spans():
                intersects = r0 <= max_row and min_row <= r1 and c0 <= max_col and min_col <= c1
                contained = min_row <= r0 and r1 <= max_row and min_col <= c0 and c1 <= max_col
                if intersects and not contained:
                    logger.trace(f"Span at {r0}-{c0} widens merge rectangle")
                    min_row, max_row = min(min_row, r0), max(max_row, r1)
                    min_col, max_col = min(min_col, c0), max(max_col, c1)
                    changed = True
        return min_row, max_row, min_col, max_col

    def merge(self, selection: Optional[Sequence[CellRef]] = None) -> Cell:
        """Collapse the bounding rectangle of a selection into one span.

        The selection need not form a perfect rectangle. Existing spans
        inside the rectangle are flattened; a span that only partly overlaps
        it widens the rectangle so it is absorbed whole.

        Args:
            selection: Cell ids or (row, col) pairs; defaults to the current
                selection

        Returns:
            The new anchor cell

        Raises:
            InsufficientSelection: If fewer than 2 cells are selected
            CellOutOfRange: If a selected cell is outside the grid
        """
        refs = self.selection if selection is None else list(selection)
        coords: List[Tuple[int, int]] = []
        for ref in refs:
            position = self._resolve(ref)
            if position not in coords:
                coords.append(position)

        if len(coords) < 2:
            raise InsufficientSelection(len(coords))

        rect = (
            min(r for r, _ in coords),
            max(r for r, _ in coords),
            min(c for _, c in coords),
            max(c for _, c in coords),
        )
        min_row, max_row, min_col, max_col = self._grow_to_cover_spans(rect)

        for r in range(min_row, max_row + 1):
            for c in range(min_col, max_col + 1):
                cell = self._cells[r][c]
                cell.col_span = 1
                cell.row_span = 1
                cell.merged = False
                cell.is_spanned = (r, c) != (min_row, min_col)

        anchor = self._cells[min_row][min_col]
        anchor.col_span = max_col - min_col + 1
        anchor.row_span = max_row - min_row + 1
        anchor.merged = True

        self.clear_selection()
        logger.debug(
            f"Merged {len(coords)} cells into {anchor.col_span}x{anchor.row_span} "
            f"span anchored at {anchor.id}"
        )
        return anchor

    def split(self, cell_id: Optional[CellRef] = None) -> int:
        """Restore a merged span to unit structure cells.

        Args:
            cell_id: Anchor to split; defaults to the single selected cell.
                While cells are selected it must be the one selected cell.

        Returns:
            Number of unit cells restored

        Raises:
            NotSplittable: If the selection is not exactly one cell, or the
                cell is not a merged anchor
        """
        if cell_id is None:
            if len(self._selection) != 1:
                raise NotSplittable(
                    f"Split requires exactly one selected cell, got {len(self._selection)}",
                    extra={"selected_count": len(self._selection)},
                )
            cell_id = self._selection[0]

        row, col = self._resolve(cell_id)
        if self._selection and self._selection != [make_cell_id(row, col)]:
            raise NotSplittable(
                f"Split of {make_cell_id(row, col)} conflicts with selection {self._selection}",
                extra={"cell_id": make_cell_id(row, col), "selected_count": len(self._selection)},
            )
        anchor = self._cells[row][col]
        if not anchor.is_anchor:
            raise NotSplittable(
                f"Cell {anchor.id} is not a merged anchor",
                extra={"cell_id": anchor.id},
            )

        row_span, col_span = anchor.row_span, anchor.col_span
        for r in range(row, row + row_span):
            for c in range(col, col + col_span):
                self._cells[r][c].reset()

        self.clear_selection()
        restored = row_span * col_span
        logger.debug(f"Split {anchor.id} into {restored} unit cells")
        return restored

    # ------------------------------------------------------------------
    # Ratios and dimensions
    # ------------------------------------------------------------------

    @staticmethod
    def _coerce_ratio(value, axis: str, index: int) -> float:
        try:
            ratio = float(value)
        except (TypeError, ValueError):
            ratio = 0.0
        if not ratio > 0:
            logger.warning(
                f"Non-positive {axis} ratio {value!r} at index {index}; using {DEFAULT_RATIO}"
            )
            return DEFAULT_RATIO
        return ratio

    def set_col_ratio(self, index: int, value: float) -> float:
        """Replace the weight of one column.

        Non-positive values fall back to the default weight of 1.

        Returns:
            The ratio actually stored

        Raises:
            CellOutOfRange: If index is not a valid column
        """
        if not 0 <= index < self.cols:
            raise CellOutOfRange(
                f"Column index {index} out of range (0..{self.cols - 1})",
                extra={"axis": "col", "index": index},
            )
        ratio = self._coerce_ratio(value, "column", index)
        self._col_ratios[index] = ratio
        return ratio

    def set_row_ratio(self, index: int, value: float) -> float:
        """Replace the weight of one row. See :meth:`set_col_ratio`."""
        if not 0 <= index < self.rows:
            raise CellOutOfRange(
                f"Row index {index} out of range (0..{self.rows - 1})",
                extra={"axis": "row", "index": index},
            )
        ratio = self._coerce_ratio(value, "row", index)
        self._row_ratios[index] = ratio
        return ratio

    def reset_ratios(self) -> None:
        """Give every column and row equal weight again."""
        self._col_ratios = [DEFAULT_RATIO] * self.cols
        self._row_ratios = [DEFAULT_RATIO] * self.rows

    def column_sizes(self) -> List[float]:
        """Physical width of each column in meters."""
        total = sum(self._col_ratios)
        return [ratio / total * self._width for ratio in self._col_ratios]

    def row_sizes(self) -> List[float]:
        """Physical height of each row in meters."""
        total = sum(self._row_ratios)
        return [ratio / total * self._height for ratio in self._row_ratios]

    def cell_offset(self, row: int, col: int) -> Tuple[float, float]:
        """Distance in meters from the wall's top-left corner to a cell."""
        self.cell(row, col)
        left = sum(self._col_ratios[:col]) / sum(self._col_ratios) * self._width
        top = sum(self._row_ratios[:row]) / sum(self._row_ratios) * self._height
        return left, top

    def compute_cell_dimensions(self, row: int, col: int) -> Tuple[float, float]:
        """Physical (width, height) of the cell at (row, col).

        Spanned cells are not rendered on their own and report (0, 0).
        """
        cell = self.cell(row, col)
        if cell.is_spanned:
            return 0.0, 0.0

        col_weight = sum(self._col_ratios[col:col + cell.col_span])
        row_weight = sum(self._row_ratios[row:row + cell.row_span])
        width = col_weight / sum(self._col_ratios) * self._width
        height = row_weight / sum(self._row_ratios) * self._height
        return width, height

    # ------------------------------------------------------------------
    # Summary
    # ------------------------------------------------------------------

    def summarize(self) -> GridSummary:
        """Count visible cells by kind."""
        counts: Dict[PanelKind, int] = {kind: 0 for kind in PanelKind}
        for cell in self.visible_cells():
            counts[cell.kind] += 1
        return GridSummary(
            total=sum(counts.values()),
            structure=counts[PanelKind.STRUCTURE],
            window=counts[PanelKind.WINDOW],
            door=counts[PanelKind.DOOR],
        )

    # ------------------------------------------------------------------
    # State snapshots
    # ------------------------------------------------------------------

    def to_dict(self) -> dict:
        """Full grid state as plain data."""
        return {
            "cols": self.cols,
            "rows": self.rows,
            "width": self._width,
            "height": self._height,
            "tool": self._tool.value,
            "material": self._material.value,
            "glass_type": self._glass_type.value,
            "frame_color": self._frame_color,
            "col_ratios": list(self._col_ratios),
            "row_ratios": list(self._row_ratios),
            "selection": list(self._selection),
            "cells": [[cell.to_dict() for cell in row] for row in self._cells],
        }

    def load_state(self, data: dict) -> None:
        """Replace this grid's state with a snapshot from :meth:`to_dict`.

        Snapshots without material settings get the defaults.

        Raises:
            InvalidDimension: If the snapshot is inconsistent
            InvalidSetting: If a material setting is not recognized
        """
        cols = _check_count(data.get("cols"), "cols")
        rows = _check_count(data.get("rows"), "rows")
        width = _check_length(data.get("width"), "width")
        height = _check_length(data.get("height"), "height")
        material = _check_material(data.get("material", FrameMaterial.ALUMINUM.value))
        glass_type = _check_glass_type(data.get("glass_type", GlazingType.DOUBLE.value))
        frame_color = _check_color(data.get("frame_color", DEFAULT_FRAME_COLOR))

        col_ratios = [float(r) for r in data.get("col_ratios", [DEFAULT_RATIO] * cols)]
        row_ratios = [float(r) for r in data.get("row_ratios", [DEFAULT_RATIO] * rows)]
        if len(col_ratios) != cols or len(row_ratios) != rows:
            raise InvalidDimension(
                "Ratio count does not match grid size",
                extra={"cols": cols, "rows": rows},
            )
        if any(r <= 0 for r in col_ratios + row_ratios):
            raise InvalidDimension("All ratios must be positive")

        raw_cells = data.get("cells")
        if raw_cells is None:
            cells = [[Cell(row=r, col=c) for c in range(cols)] for r in range(rows)]
        else:
            if len(raw_cells) != rows or any(len(row) != cols for row in raw_cells):
                raise InvalidDimension(
                    "Cell matrix does not match grid size",
                    extra={"cols": cols, "rows": rows},
                )
            cells = []
            for r, raw_row in enumerate(raw_cells):
                row_cells = []
                for c, item in enumerate(raw_row):
                    cell = Cell.from_dict({**item, "row": r, "col": c})
                    row_cells.append(cell)
                cells.append(row_cells)
            _check_spans(cells, rows, cols)

        selection = []
        for cell_id in data.get("selection", []):
            r, c = parse_cell_id(cell_id)
            normalized = make_cell_id(r, c)
            if 0 <= r < rows and 0 <= c < cols and cells[r][c].selected:
                if normalized not in selection:
                    selection.append(normalized)
        for row_cells in cells:
            for cell in row_cells:
                cell.selected = cell.id in selection

        self._cells = cells
        self._col_ratios = col_ratios
        self._row_ratios = row_ratios
        self._width = width
        self._height = height
        self._tool = ToolMode(data.get("tool", ToolMode.STRUCTURE.value))
        self._material = material
        self._glass_type = glass_type
        self._frame_color = frame_color
        self._selection = selection

    @classmethod
    def from_dict(cls, data: dict) -> "PanelGrid":
        """Create a grid from a snapshot produced by :meth:`to_dict`."""
        grid = cls(
            cols=data.get("cols", 4),
            rows=data.get("rows", 3),
            width=data.get("width", 4.0),
            height=data.get("height", 3.0),
        )
        grid.load_state(data)
        return grid
