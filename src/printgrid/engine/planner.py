"""
Module: engine.planner

Purpose:
    Orientation planning from the target Dimension alone. Computes fit
    counts per orientation, L-shape feasibility, the recommended
    orientation and the implied row counts.

Key Functions:
    - plan_layout(): Build a LayoutPlan
    - items_per_row(): Fit count along one tiling axis

Dependencies:
    - math (std)

Used By:
    - engine.controller: Orientation decision before tile construction

Note:
    This is a greedy heuristic, not an optimal packing search.
"""

from __future__ import annotations

import logging
import math

from printgrid.core.models import Dimension, GridMode, LayoutPlan, Orientation

from .config import DEFAULT_CONFIG, EngineConfig

logger = logging.getLogger(__name__)

# Below this many units per row plain tiling wastes material
POOR_FIT_THRESHOLD = 3


def items_per_row(axis_length: float, gap: float, max_size: float) -> int:
    """
    Units of `axis_length` that fit along `max_size`, at least 1.

    Example:
        >>> items_per_row(20.5, 0.1, 63.25)
        3
    """
    if max_size <= 0:
        return 1
    return max(1, math.floor(max_size / (axis_length + gap)))


def plan_layout(
    dimension: Dimension,
    mode: GridMode,
    quantity: int,
    config: EngineConfig = DEFAULT_CONFIG,
) -> LayoutPlan:
    """
    Decide the tile orientation for a run.

    Args:
        dimension: Target size of one front/back unit in inches
        mode: Tile content mode (FB doubles the planning height)
        quantity: Units requested
        config: Gap and paper limits

    Returns:
        Immutable LayoutPlan

    Raises:
        ValueError: If quantity < 1
    """
    mode = GridMode(mode)
    if quantity < 1:
        raise ValueError(f"quantity must be >= 1: {quantity}")

    effective = dimension.doubled_height() if mode is GridMode.FB else dimension
    gap = config.gap
    max_size = config.paper_max_size

    per_row = {
        Orientation.VERTICAL: items_per_row(effective.height, gap, max_size),
        Orientation.HORIZONTAL: items_per_row(effective.width, gap, max_size),
        Orientation.LSHAPE: items_per_row(effective.width + effective.height + gap, gap, max_size),
    }
    vertical = per_row[Orientation.VERTICAL]
    horizontal = per_row[Orientation.HORIZONTAL]

    l_feasible = (
        mode is not GridMode.PANT
        and (vertical < POOR_FIT_THRESHOLD or horizontal < POOR_FIT_THRESHOLD)
        and effective.width + effective.height + gap < max_size
    )

    recommended = Orientation.HORIZONTAL if horizontal > vertical else Orientation.VERTICAL
    if l_feasible and vertical < POOR_FIT_THRESHOLD and horizontal < POOR_FIT_THRESHOLD:
        recommended = Orientation.LSHAPE

    pairs = math.ceil(quantity / 2)
    rows = {
        Orientation.VERTICAL: math.ceil(quantity / vertical),
        Orientation.HORIZONTAL: math.ceil(quantity / horizontal),
        Orientation.LSHAPE: math.ceil(pairs / per_row[Orientation.LSHAPE]),
    }

    plan = LayoutPlan(
        dimension=effective,
        mode=mode,
        quantity=quantity,
        items_per_row=per_row,
        rows_needed=rows,
        l_shape_feasible=l_feasible,
        recommended_orientation=recommended,
    )
    logger.info(
        f"Plan for {quantity}x {effective.width:g}x{effective.height:g} in ({mode}): "
        f"V={vertical}, H={horizontal}, L={'yes' if l_feasible else 'no'} "
        f"-> {recommended} ({plan.rows} rows)"
    )
    return plan
