"""
Module: engine.config

Purpose:
    Configuration for the layout engine.
    Defines gap, paper and canvas limits, and placeholder names.

Key Classes:
    - EngineConfig: Immutable engine configuration

Dependencies:
    - dataclasses (std)

Used By:
    - engine.planner / engine.row_fit: Fit calculations
    - engine.initiator: Gap and placeholder names
    - engine.placer / engine.controller: Run configuration
"""

from __future__ import annotations

from dataclasses import dataclass

from printgrid.core.models import POINTS_PER_INCH


# Production sheet limits in inches
DEFAULT_GAP_IN = 0.1
DEFAULT_PAPER_MAX_SIZE_IN = 63.25
DEFAULT_CANVAS_MAX_HEIGHT_IN = 207.0


@dataclass(frozen=True)
class EngineConfig:
    """
    Configuration for a layout run (immutable).

    Attributes:
        gap: Spacing between adjacent units in inches
        paper_max_size: Usable roll width in inches (row length limit)
        canvas_max_height: Maximum canvas height in inches
        points_per_inch: Host geometry resolution
        size_label_name: Name of the text placeholder that receives the size
        front_name: Name of the front artwork in the source container
        back_name: Name of the back artwork in the source container
        accessory_name: Name of the accessory artwork (PANT mode)

    Example:
        >>> config = EngineConfig()
        >>> config.gap_points
        7.2
    """

    # Spacing and limits
    gap: float = DEFAULT_GAP_IN
    paper_max_size: float = DEFAULT_PAPER_MAX_SIZE_IN
    canvas_max_height: float = DEFAULT_CANVAS_MAX_HEIGHT_IN
    points_per_inch: float = POINTS_PER_INCH

    # Placeholder names
    size_label_name: str = "SIZE_TKN"
    front_name: str = "FRONT"
    back_name: str = "BACK"
    accessory_name: str = "PANT"

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.gap < 0:
            raise ValueError(f"gap must be non-negative: {self.gap}")
        if self.paper_max_size <= 0:
            raise ValueError(f"paper_max_size must be positive: {self.paper_max_size}")
        if self.points_per_inch <= 0:
            raise ValueError(f"points_per_inch must be positive: {self.points_per_inch}")

    @property
    def gap_points(self) -> float:
        """Gap converted to host points."""
        return self.gap * self.points_per_inch

    @property
    def paper_max_points(self) -> float:
        """Row length limit in host points."""
        return self.paper_max_size * self.points_per_inch


DEFAULT_CONFIG = EngineConfig()
