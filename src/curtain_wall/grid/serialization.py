# File: src/curtain_wall/grid/serialization.py
"""
JSON serialization of grids and design aggregates.

Grids round-trip through their full state (cells, ratios, tool,
selection and material settings). Design data is one-way: it is what
the pricing/export side consumes and is never loaded back into a grid.

Usage:
    from src.curtain_wall.grid.serialization import (
        serialize_grid, deserialize_grid, serialize_design_data
    )

    json_str = serialize_grid(grid)
    restored = deserialize_grid(json_str)
"""

import json
from typing import Any, Dict, Optional

from .design_metrics import compute_design_data
from .errors import InvalidDimension
from .panel_grid import PanelGrid


def grid_to_dict(grid: PanelGrid) -> Dict[str, Any]:
    return grid.to_dict()


def grid_from_dict(data: Dict[str, Any]) -> PanelGrid:
    """Rebuild a grid from :func:`grid_to_dict` output.

    Raises:
        InvalidDimension: If sizes, ratios or the cell matrix are inconsistent
    """
    if not isinstance(data, dict):
        raise InvalidDimension("Grid data must be a JSON object")
    return PanelGrid.from_dict(data)


def serialize_grid(grid: PanelGrid, indent: Optional[int] = None) -> str:
    return json.dumps(grid_to_dict(grid), indent=indent)


def deserialize_grid(json_str: str) -> PanelGrid:
    """Parse a JSON string produced by :func:`serialize_grid`.

    Raises:
        ValueError: On malformed JSON or inconsistent grid data
    """
    try:
        data = json.loads(json_str)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid grid JSON: {e}") from e
    return grid_from_dict(data)


def serialize_design_data(grid: PanelGrid, indent: Optional[int] = None) -> str:
    """Design aggregates of ``grid`` as a JSON string for the pricing side."""
    return json.dumps(compute_design_data(grid).to_dict(), indent=indent)
