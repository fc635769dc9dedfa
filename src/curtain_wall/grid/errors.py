# File: src/curtain_wall/grid/errors.py

"""Errors raised by the panel grid model.

All grid errors are local and recoverable: the operation that raised
leaves the grid exactly as it was. Each error carries a stable ``code``
so the API layer can map it without inspecting messages.
"""

from typing import Any, Dict, Optional


class GridError(Exception):
    """Base class for panel grid errors."""

    code = "grid_error"

    def __init__(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self.message = message
        self.extra = extra or {}
        super().__init__(message)


class InvalidDimension(GridError, ValueError):
    """Non-positive column/row count or physical wall size."""

    code = "invalid_dimension"


class InsufficientSelection(GridError):
    """Merge attempted with fewer than two selected cells."""

    code = "insufficient_selection"

    def __init__(self, selected_count: int):
        super().__init__(
            f"Merge requires at least 2 selected cells, got {selected_count}",
            extra={"selected_count": selected_count},
        )


class NotSplittable(GridError):
    """Split attempted on a multi-selection or a cell that is not a merged anchor."""

    code = "not_splittable"


class CellOutOfRange(GridError, IndexError):
    """Row, column or ratio index outside the current grid."""

    code = "cell_out_of_range"


class InvalidSetting(GridError, ValueError):
    """Unknown frame material or glass type, or a malformed frame color."""

    code = "invalid_setting"
