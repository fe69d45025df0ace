"""
Module: engine.controller

Purpose:
    Orchestrate a complete layout run.
    Find artwork → Plan → Build tile → Row fit → Place

Key Functions:
    - run_layout(): Main entry point for a layout run

Key Classes:
    - LayoutRequest: Parameters of one run
    - LayoutRunResult: Plans and filled canvases of one run

Dependencies:
    - engine.initiator: Artwork lookup and tile construction
    - engine.planner / engine.row_fit: Sizing decisions
    - engine.placer: Replication

Used By:
    - engine.organizer: One run per size
    - Host integrations (document plug-ins, batch scripts)
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple

from printgrid.core.models import (
    AlignPosition,
    CanvasPlacement,
    Dimension,
    GridMode,
    LayoutPlan,
    RowFitResult,
)
from printgrid.host.provider import CanvasHost

from .config import DEFAULT_CONFIG, EngineConfig
from .initiator import build_initial_unit, find_accessory_item, find_body_items
from .personalize import check_records
from .placer import place_grid
from .planner import plan_layout
from .row_fit import plan_row_fit
from .sizes import DEFAULT_CONTAINER, SizeChart
from .transform import align_to_rect, bounds_of

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LayoutRequest:
    """
    Parameters of one layout run (immutable).

    Attributes:
        mode: Tile content mode
        quantity: Units to produce
        dimension: Target size of one front/back unit in inches
            (ignored in PANT mode, where the artwork keeps its size)
        size_label: Text stamped into the size placeholders
        include_front_canvas: Mode B only; emit a canvas carrying the
            front artwork before the grid canvases
        data: One record per unit, written into named text frames
        fill_last_row: Mode B only; copy the front into the free slots
            of the last row
        start_index: Canvases already emitted in this job (title numbering)

    Example:
        >>> request = LayoutRequest(GridMode.B, 8, Dimension(20.5, 30), "L")
    """

    mode: GridMode
    quantity: int
    dimension: Optional[Dimension] = None
    size_label: str = ""
    include_front_canvas: bool = False
    data: Optional[Tuple[Mapping[str, str], ...]] = None
    fill_last_row: bool = False
    start_index: int = 0

    def __post_init__(self) -> None:
        """Validate request on construction."""
        mode = GridMode(self.mode)
        if self.quantity < 1:
            raise ValueError(f"quantity must be >= 1: {self.quantity}")
        if mode is not GridMode.PANT and self.dimension is None:
            raise ValueError(f"dimension is required for mode {self.mode}")
        if self.fill_last_row and mode is not GridMode.B:
            raise ValueError(f"fill_last_row needs mode B, got {self.mode}")
        if self.start_index < 0:
            raise ValueError(f"start_index must be non-negative: {self.start_index}")
        if self.data is not None:
            object.__setattr__(self, "data", tuple(self.data))
        check_records(self.data, self.quantity)

    @classmethod
    def for_size(
        cls,
        chart: SizeChart,
        mode: GridMode,
        quantity: int,
        size_label: str,
        container: str = DEFAULT_CONTAINER,
        **options: Any,
    ) -> LayoutRequest:
        """
        Build a request whose dimension comes from a size chart.

        Extra keyword options are passed to the constructor.

        Raises:
            KeyError: If the size label is not in the chart
        """
        return cls(
            mode=mode,
            quantity=quantity,
            dimension=chart.dimension_for(size_label, container),
            size_label=size_label,
            **options,
        )


@dataclass(frozen=True)
class LayoutRunResult:
    """
    Result of a layout run (immutable).

    Attributes:
        plan: Orientation plan
        row_fit: Row fit of the realized tile
        canvases: Filled grid canvases in order
        front_canvas: Front-only canvas (mode B with include_front_canvas)
        total_placed: Units placed across all grid canvases
        elapsed: Wall-clock seconds for the run
        next_start_index: start_index for the next run of the same job
    """

    plan: LayoutPlan
    row_fit: RowFitResult
    canvases: tuple[CanvasPlacement, ...]
    front_canvas: Optional[CanvasPlacement] = None
    total_placed: int = 0
    elapsed: float = 0.0
    next_start_index: int = 0

    @property
    def canvas_count(self) -> int:
        return len(self.canvases)


def run_layout(
    host: CanvasHost,
    source: Any,
    request: LayoutRequest,
    config: EngineConfig = DEFAULT_CONFIG,
) -> LayoutRunResult:
    """
    Lay out `request.quantity` units from the artwork in `source`.

    The source artwork is left untouched: the tile is built from
    duplicates, and the tile template is removed on every exit path.

    Args:
        host: Canvas host
        source: Container holding FRONT/BACK (or the PANT accessory)
        request: Run parameters
        config: Engine configuration

    Returns:
        LayoutRunResult with plans and filled canvases

    Raises:
        LayoutEngineError: Any engine failure, propagated unchanged
    """
    start_time = time.perf_counter()
    mode = GridMode(request.mode)
    logger.info(f"Starting {mode} layout for {request.quantity} unit(s)")

    # 1. Find artwork
    if mode is GridMode.PANT:
        accessory = host.duplicate_shape(find_accessory_item(host, source, config))
        front, back = accessory, None
        dimension = bounds_of(host, accessory).to_dimension(config.points_per_inch)
        text_fit_ratio = 1.0
    else:
        source_front, source_back = find_body_items(host, source, config)
        front = host.duplicate_shape(source_front)
        back = host.duplicate_shape(source_back)
        dimension = request.dimension
        source_width = bounds_of(host, source_back).to_dimension(config.points_per_inch).width
        text_fit_ratio = dimension.width / source_width

    # 2. Plan and build the tile
    try:
        plan = plan_layout(dimension, mode, request.quantity, config)
        template = build_initial_unit(
            host,
            front,
            back,
            mode,
            plan.recommended_orientation,
            dimension,
            request.size_label,
            config,
        )
    except Exception:
        for shape in (front, back):
            if shape is not None and host.parent_of(shape) is not None:
                host.remove_shape(shape)
        raise

    front_canvas = None
    filler = None
    start_index = request.start_index
    try:
        # 3. Single-side runs tile the back only
        if mode is GridMode.B and not plan.is_l_shape:
            if request.include_front_canvas:
                front_canvas = _emit_front_canvas(host, front, request, config)
                start_index += 1
            if request.fill_last_row:
                filler = host.duplicate_shape(front)
                host.move_into_container(filler, source)
            host.remove_shape(front)

        # 4. Row fit from the realized tile
        row_fit = plan_row_fit(
            bounds_of(host, template),
            plan.tiles_needed,
            config.canvas_max_height,
            config,
        )

        # 5. Place
        canvases = tuple(
            place_grid(
                host,
                template,
                plan,
                row_fit,
                request.quantity,
                mode,
                config,
                size_label=request.size_label,
                start_index=start_index,
                data=request.data,
                text_fit_ratio=text_fit_ratio,
                filler=filler,
            )
        )
    finally:
        host.remove_shape(template)
        if filler is not None:
            host.remove_shape(filler)

    total = sum(c.placed_count for c in canvases)
    elapsed = time.perf_counter() - start_time
    logger.info(
        f"Layout complete: {total} unit(s) on {len(canvases)} canvas(es) in {elapsed:.2f}s"
    )
    if total != request.quantity:
        logger.warning(f"Placed {total} unit(s), requested {request.quantity}")

    return LayoutRunResult(
        plan=plan,
        row_fit=row_fit,
        canvases=canvases,
        front_canvas=front_canvas,
        total_placed=total,
        elapsed=elapsed,
        next_start_index=start_index + len(canvases),
    )


def _emit_front_canvas(
    host: CanvasHost,
    front: Any,
    request: LayoutRequest,
    config: EngineConfig,
) -> CanvasPlacement:
    """Place one front copy, centered, on its own canvas."""
    box = bounds_of(host, front)
    size = box.to_dimension(config.points_per_inch)
    title = f"{request.start_index + 1:02d}-F"
    if request.size_label:
        title += f"-{request.size_label}"
    title += f"-{request.quantity} PCS"
    canvas = host.create_canvas(size, title=title)
    copy = host.duplicate_shape(front)
    host.move_into_container(copy, canvas.container)
    host.set_name(copy, "F-01")
    align_to_rect(host, copy, canvas.rect, AlignPosition.CENTER)
    logger.info(f"Front canvas created for size {request.size_label!r}")
    return CanvasPlacement(canvas=canvas, index=0, placed_count=1, shapes=(copy,))
