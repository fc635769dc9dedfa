# File: src/curtain_wall/grid/grid_config.py
"""
Grid configuration for the curtain-wall designer.

This module defines the defaults a new design session starts from and the
limits the designer applies: history depth and the column/row maximum
enforced when a session re-derives its grid.

Example:
    >>> config = GridConfig(default_columns=6, default_rows=2)
    >>> config.validate()
    []
"""

from dataclasses import dataclass
from typing import List, Optional


@dataclass
class GridConfig:
    """Configuration for curtain-wall grid sessions.

    Attributes:
        default_columns: Columns of a freshly created grid
        default_rows: Rows of a freshly created grid
        default_width: Wall width in meters
        default_height: Wall height in meters
        history_limit: Maximum number of undo snapshots kept per session
        max_columns: Largest column count a session accepts (None = no limit)
        max_rows: Largest row count a session accepts (None = no limit)
    """
    default_columns: int = 4
    default_rows: int = 3
    default_width: float = 4.0   # meters
    default_height: float = 3.0  # meters
    history_limit: int = 50
    max_columns: Optional[int] = 10
    max_rows: Optional[int] = 10

    def validate(self) -> List[str]:
        """Validate configuration parameters.

        Returns:
            List of validation error messages (empty if valid)

        Raises:
            ValueError: If any validation fails
        """
        errors = []

        if self.default_columns <= 0:
            errors.append("default_columns must be positive")
        if self.default_rows <= 0:
            errors.append("default_rows must be positive")
        if self.default_width <= 0:
            errors.append("default_width must be positive")
        if self.default_height <= 0:
            errors.append("default_height must be positive")
        if self.history_limit < 1:
            errors.append("history_limit must be at least 1")

        if self.max_columns is not None and self.default_columns > self.max_columns:
            errors.append(
                f"default_columns ({self.default_columns}) cannot exceed "
                f"max_columns ({self.max_columns})"
            )
        if self.max_rows is not None and self.default_rows > self.max_rows:
            errors.append(
                f"default_rows ({self.default_rows}) cannot exceed "
                f"max_rows ({self.max_rows})"
            )

        if errors:
            raise ValueError("GridConfig validation failed:\n" + "\n".join(errors))

        return errors

    def to_dict(self) -> dict:
        """Convert config to dictionary for JSON serialization."""
        return {
            "default_columns": self.default_columns,
            "default_rows": self.default_rows,
            "default_width": self.default_width,
            "default_height": self.default_height,
            "history_limit": self.history_limit,
            "max_columns": self.max_columns,
            "max_rows": self.max_rows,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "GridConfig":
        """Create config from dictionary.

        Args:
            data: Dictionary with config parameters

        Returns:
            GridConfig instance
        """
        return cls(
            default_columns=data.get("default_columns", 4),
            default_rows=data.get("default_rows", 3),
            default_width=data.get("default_width", 4.0),
            default_height=data.get("default_height", 3.0),
            history_limit=data.get("history_limit", 50),
            max_columns=data.get("max_columns", 10),
            max_rows=data.get("max_rows", 10),
        )
