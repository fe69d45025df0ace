"""
Module: plans

Purpose:
    Immutable planner outputs. LayoutPlan is derived from the target
    Dimension; RowFitResult from the realized bounding box of one tile.

Key Classes:
    - LayoutPlan: Orientation decision and per-orientation fit counts
    - RowFitResult: Rotation decision and multi-canvas row distribution

Dependencies:
    - dataclasses (std)
    - .geometry: Dimension
    - .enums: GridMode, Orientation

Used By:
    - engine.planner: Creates LayoutPlan
    - engine.row_fit: Creates RowFitResult
    - engine.placer: Consumes both
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from .enums import GridMode, Orientation
from .geometry import Dimension


@dataclass(frozen=True)
class LayoutPlan:
    """
    Orientation decision for a run (immutable).

    Attributes:
        dimension: Effective tile dimension used for planning (inches)
        mode: Tile content mode
        quantity: Requested number of units
        items_per_row: Fit count per orientation
        rows_needed: Row count per orientation
        l_shape_feasible: Whether an interlocking L tile fits the canvas
        recommended_orientation: Chosen orientation

    Example:
        >>> plan = plan_layout(Dimension(20.5, 30), GridMode.B, 8, config)
        >>> plan.recommended_orientation
        <Orientation.HORIZONTAL: 'H'>
        >>> plan.rows
        3
    """

    dimension: Dimension
    mode: GridMode
    quantity: int
    items_per_row: Dict[Orientation, int] = field(default_factory=dict)
    rows_needed: Dict[Orientation, int] = field(default_factory=dict)
    l_shape_feasible: bool = False
    recommended_orientation: Orientation = Orientation.VERTICAL

    def __post_init__(self) -> None:
        """Validate plan on construction."""
        if self.quantity < 1:
            raise ValueError(f"quantity must be >= 1: {self.quantity}")

    @property
    def is_l_shape(self) -> bool:
        return self.recommended_orientation is Orientation.LSHAPE

    @property
    def per_row(self) -> int:
        """Fit count for the recommended orientation."""
        return self.items_per_row[self.recommended_orientation]

    @property
    def rows(self) -> int:
        """Row count for the recommended orientation."""
        return self.rows_needed[self.recommended_orientation]

    @property
    def l_shape_quantity_odd(self) -> bool:
        """True when an L run needs one extra unit to keep pairs even."""
        return self.is_l_shape and self.quantity % 2 == 1

    @property
    def working_quantity(self) -> int:
        """Quantity the placer works towards (odd L quantities bumped by one)."""
        return self.quantity + 1 if self.l_shape_quantity_odd else self.quantity

    @property
    def sequence_step(self) -> int:
        """Sequence increment per placed tile (an L tile carries two units)."""
        return 2 if self.is_l_shape else 1

    @property
    def tiles_needed(self) -> int:
        """Number of tiles to place to reach the working quantity."""
        return self.working_quantity // self.sequence_step

    @property
    def sequence_label(self) -> str:
        """Name prefix for placed tiles."""
        return "FB-L" if self.is_l_shape else self.mode.value


@dataclass(frozen=True)
class RowFitResult:
    """
    Row fitting and canvas distribution for one tile size (immutable).

    Attributes:
        quantity: Number of tiles to fit
        fit_per_row: Tiles per row in the chosen orientation
        rows_needed: Total rows across all canvases
        remainder: Tiles in the last, partial row (0 when rows are full)
        canvases_needed: Number of canvases
        rows_per_canvas: Row budget of one canvas
        rotate_recommended: Whether the tile should be turned 90°
        row_extent: Height of one row in inches (chosen orientation)
        total_height: Stacked height of all rows in inches, gaps included

    Example:
        >>> result.canvas_row_counts()
        (5, 5)
    """

    quantity: int
    fit_per_row: int
    rows_needed: int
    remainder: int
    canvases_needed: int
    rows_per_canvas: int
    rotate_recommended: bool
    row_extent: float
    total_height: float

    def canvas_row_counts(self) -> tuple[int, ...]:
        """
        Rows assigned to each canvas.

        Rows are spread so canvases differ by at most one row, fuller
        canvases first. No canvas exceeds rows_per_canvas.
        """
        base, extra = divmod(self.rows_needed, self.canvases_needed)
        return tuple(
            base + (1 if i < extra else 0)
            for i in range(self.canvases_needed)
        )

    def rows_on_canvas(self, index: int) -> int:
        """Rows assigned to canvas `index` (0-based)."""
        return self.canvas_row_counts()[index]
