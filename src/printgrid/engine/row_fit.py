"""
Module: engine.row_fit

Purpose:
    Row fitting from the realized bounds of one tile. Decides whether the
    tile should be turned 90° to minimise stacked height, and how rows
    are spread over canvases when one canvas is not tall enough.

Key Functions:
    - plan_row_fit(): Build a RowFitResult

Dependencies:
    - math (std)

Used By:
    - engine.controller: Sizing before placement
    - engine.placer: Consumes RowFitResult

Distribution:
    Rows are balanced across canvases (they differ by at most one row)
    instead of filling each canvas to its limit, which would leave a
    near-empty final canvas.
"""

from __future__ import annotations

import logging
import math

from printgrid.core.errors import CapacityExceeded
from printgrid.core.models import BoundingBox, RowFitResult

from .config import DEFAULT_CONFIG, EngineConfig

logger = logging.getLogger(__name__)


def _stack_height(count: int, extent: float, gap: float) -> float:
    """Height of `count` rows of `extent` separated by `gap`."""
    return count * extent + (count - 1) * gap


def plan_row_fit(
    unit_bounds: BoundingBox,
    quantity: int,
    canvas_max_height: float | None = None,
    config: EngineConfig = DEFAULT_CONFIG,
) -> RowFitResult:
    """
    Fit `quantity` tiles into rows and canvases.

    Args:
        unit_bounds: Realized bounds of one tile in points
        quantity: Tiles to place
        canvas_max_height: Canvas height limit in inches
            (defaults to config.canvas_max_height)
        config: Gap, paper width and resolution

    Returns:
        Immutable RowFitResult

    Raises:
        ValueError: If quantity < 1
        CapacityExceeded: If the tile has no size, the canvas height is
            not positive, or a single row is taller than a canvas

    Example:
        >>> result = plan_row_fit(BoundingBox.from_size(1476, 2160), 1)
        >>> (result.rows_needed, result.canvases_needed)
        (1, 1)
    """
    if quantity < 1:
        raise ValueError(f"quantity must be >= 1: {quantity}")

    max_height = config.canvas_max_height if canvas_max_height is None else canvas_max_height
    if max_height <= 0:
        raise CapacityExceeded(f"Canvas height must be positive: {max_height}", subject=max_height)

    ppi = config.points_per_inch
    width = unit_bounds.width / ppi
    height = unit_bounds.height / ppi
    if width <= 0 or height <= 0:
        raise CapacityExceeded("Tile has no size", subject=unit_bounds)

    gap = config.gap
    max_width = config.paper_max_size

    fit0 = max(1, math.floor(max_width / (width + gap)))
    fit90 = max(1, math.floor(max_width / (height + gap)))
    rows0 = math.ceil(quantity / fit0)
    rows90 = math.ceil(quantity / fit90)

    if quantity <= 2 and (fit0 < 2 or fit90 < 2):
        # Single stack of `quantity` tiles in each orientation
        total0 = _stack_height(quantity, height, gap)
        total90 = _stack_height(quantity, width, gap)
    else:
        total0 = _stack_height(rows0, height, gap)
        total90 = _stack_height(rows90, width, gap)

    rotate = total90 <= total0
    if rotate:
        fit, rows, extent, total = fit90, rows90, width, total90
    else:
        fit, rows, extent, total = fit0, rows0, height, total0

    if extent > max_height:
        raise CapacityExceeded(
            f"Row height {extent:.2f} in exceeds canvas height {max_height:.2f} in",
            subject=unit_bounds,
        )

    canvases = min(rows, max(1, math.ceil(total / max_height)))

    # Row budget per canvas, computed in points to avoid inch rounding
    total_pts = total * ppi
    pitch_pts = (extent + gap) * ppi
    rows_per_canvas = math.ceil(math.ceil(total_pts / canvases) / pitch_pts)
    rows_per_canvas = max(rows_per_canvas, math.ceil(rows / canvases))
    rows_per_canvas = min(max(1, rows_per_canvas), rows)

    result = RowFitResult(
        quantity=quantity,
        fit_per_row=fit,
        rows_needed=rows,
        remainder=quantity % fit,
        canvases_needed=canvases,
        rows_per_canvas=rows_per_canvas,
        rotate_recommended=rotate,
        row_extent=extent,
        total_height=total,
    )
    logger.info(
        f"Row fit for {quantity} tile(s): {fit}/row, {rows} row(s), "
        f"{canvases} canvas(es), rotate={'yes' if rotate else 'no'}"
    )
    return result
