"""
Module: engine.placer

Purpose:
    Grid replication driver. Duplicates the tile template across rows on
    as many canvases as the row fit requires, names every placed tile
    with its sequence index, writes per-unit data, trims the odd L-shape
    leftover, fills the free slots of the last row and re-centers each
    canvas.

Key Functions:
    - place_grid(): Lazy generator of CanvasPlacement, one per canvas

Dependencies:
    - engine.transform: Alignment, adjacency, rotation
    - engine.personalize: Per-unit data records

Used By:
    - engine.controller: Placement phase

Per-canvas states:
    Filling -> Full -> (next canvas) Filling ... -> Done
    The running sequence index is plain loop state threaded through the
    generator, so independent runs never share counters.
"""

from __future__ import annotations

import logging
from typing import Any, Iterator, List, Mapping, Optional, Sequence

from printgrid.core.models import (
    AlignPosition,
    CanvasHandle,
    CanvasPlacement,
    Dimension,
    GridMode,
    LayoutPlan,
    Orientation,
    RowFitResult,
    Side,
)
from printgrid.host.provider import CanvasHost

from .config import DEFAULT_CONFIG, EngineConfig
from .personalize import UnitDataWriter, check_records
from .transform import align, align_to_rect, move_adjacent, rotate_about_center

logger = logging.getLogger(__name__)


def _canvas_size(
    row_fit: RowFitResult,
    rows: int,
    config: EngineConfig,
) -> Dimension:
    """Usable canvas size for `rows` rows (paper width x stacked rows)."""
    height = rows * row_fit.row_extent + (rows - 1) * config.gap
    return Dimension(width=config.paper_max_size, height=height)


def place_grid(
    host: CanvasHost,
    template: Any,
    plan: LayoutPlan,
    row_fit: RowFitResult,
    quantity: int,
    mode: GridMode,
    config: EngineConfig = DEFAULT_CONFIG,
    size_label: str = "",
    start_index: int = 0,
    data: Optional[Sequence[Mapping[str, str]]] = None,
    text_fit_ratio: float = 1.0,
    filler: Optional[Any] = None,
) -> Iterator[CanvasPlacement]:
    """
    Replicate `template` into rows across new canvases.

    The template itself is never moved or removed; each canvas gets its
    own duplicate as the reference tile.

    Args:
        host: Canvas host
        template: Tile built by build_initial_unit()
        plan: Orientation plan (sequence step, labels, L parity)
        row_fit: Row fit computed from the template bounds
        quantity: Units requested (must match plan.quantity)
        mode: Tile content mode
        config: Engine configuration
        size_label: Size appended to canvas titles (not for PANT)
        start_index: Canvases already emitted in this job; titles
            continue from start_index + 1
        data: One record per unit, written into named text frames
        text_fit_ratio: Artwork scale used to fit grown text
        filler: Shape copied into the empty slots of the last row

    Yields:
        CanvasPlacement for each filled canvas, as soon as it is finalized

    Raises:
        ValueError: If quantity differs from the plan, or data holds
            fewer records than units
    """
    mode = GridMode(mode)
    if quantity != plan.quantity:
        raise ValueError(f"quantity {quantity} does not match planned quantity {plan.quantity}")
    if start_index < 0:
        raise ValueError(f"start_index must be non-negative: {start_index}")
    check_records(data, quantity)

    step = plan.sequence_step
    target = plan.working_quantity
    label = plan.sequence_label
    gap = config.gap_points
    row_counts = row_fit.canvas_row_counts()
    per_row = row_fit.fit_per_row
    writer = UnitDataWriter(host, data, text_fit_ratio) if data is not None else None

    index = 0
    for canvas_index, rows in enumerate(row_counts):
        if index >= target:
            break

        canvas = host.create_canvas(
            _canvas_size(row_fit, rows, config),
            title=_canvas_title(start_index + canvas_index + 1, label, size_label, mode),
        )
        reference = _prepare_reference(host, template, canvas, row_fit)

        placed: List[Any] = []
        previous = None
        line_start = None
        line_count = 0
        try:
            for line in range(rows):
                line_count = 0
                for position in range(per_row):
                    if index >= target:
                        break
                    index += step
                    # Duplicates land on the reference, which marks the line start
                    unit = host.duplicate_shape(reference)
                    host.move_into_container(unit, canvas.container)
                    host.set_name(unit, f"{label}-{index:02d}")
                    if position == 0:
                        line_start = unit
                    else:
                        move_adjacent(host, previous, unit, Side.RIGHT, gap)
                    if writer is not None:
                        writer.write(unit, l_shape=plan.is_l_shape)
                    placed.append(unit)
                    previous = unit
                    line_count += 1

                if index >= target or line == rows - 1:
                    break
                # Next line starts under the first tile of this one
                align(host, line_start, reference, AlignPosition.LEFT)
                move_adjacent(host, line_start, reference, Side.BOTTOM, gap)
        finally:
            host.remove_shape(reference)

        count = len(placed) * step
        is_last = index >= target or canvas_index == len(row_counts) - 1
        if is_last and plan.l_shape_quantity_odd and placed:
            if _trim_pair_half(host, placed[-1]):
                count -= 1

        fillers: List[Any] = []
        if is_last and filler is not None and placed and line_count < per_row:
            fillers = _fill_row(
                host, filler, canvas, row_fit, line_start, previous,
                per_row - line_count, index, gap,
            )

        _finalize_canvas(host, canvas, placed, fillers, plan, mode)

        logger.info(f"Canvas {canvas_index + 1}/{len(row_counts)}: placed {count} unit(s)")
        yield CanvasPlacement(
            canvas=canvas,
            index=canvas_index,
            placed_count=count,
            shapes=tuple(placed),
            fillers=tuple(fillers),
        )

    if index < target:
        logger.warning(f"Placement stopped at {index} of {target} unit(s)")
    if writer is not None and writer.remaining:
        logger.info(f"{writer.remaining} data record(s) left unused")


def _canvas_title(number: int, label: str, size_label: str, mode: GridMode) -> str:
    """Canvas title: file number, sequence label and size (e.g. "03-FB-L-XL")."""
    title = f"{number:02d}-{label}"
    if size_label and mode is not GridMode.PANT:
        title += f"-{size_label}"
    return title


def _fill_row(
    host: CanvasHost,
    filler: Any,
    canvas: CanvasHandle,
    row_fit: RowFitResult,
    line_start: Any,
    previous: Any,
    slots: int,
    index: int,
    gap: float,
) -> List[Any]:
    """Copy `filler` into the `slots` free positions after `previous`."""
    reference = _prepare_reference(host, filler, canvas, row_fit)
    fillers: List[Any] = []
    try:
        for offset in range(1, slots + 1):
            piece = host.duplicate_shape(reference)
            host.move_into_container(piece, canvas.container)
            host.set_name(piece, f"F-{index + offset:02d}")
            move_adjacent(host, previous, piece, Side.RIGHT, gap)
            align(host, line_start, piece, AlignPosition.BOTTOM)
            fillers.append(piece)
            previous = piece
    finally:
        host.remove_shape(reference)
    logger.debug(f"Filled {len(fillers)} free slot(s) on {canvas.title!r}")
    return fillers


def _prepare_reference(
    host: CanvasHost,
    template: Any,
    canvas: CanvasHandle,
    row_fit: RowFitResult,
) -> Any:
    """Duplicate the template onto `canvas` and park it at the top-left."""
    reference = host.duplicate_shape(template)
    host.move_into_container(reference, canvas.container)
    if row_fit.rotate_recommended:
        rotate_about_center(host, reference, 90)
    align_to_rect(host, reference, canvas.rect, AlignPosition.LEFT)
    align_to_rect(host, reference, canvas.rect, AlignPosition.TOP)
    return reference


def _trim_pair_half(host: CanvasHost, tile: Any) -> bool:
    """Remove the first pair of an L tile, leaving one unit."""
    pairs = host.children_of(tile)
    if len(pairs) < 2:
        logger.warning(f"Cannot trim {host.name_of(tile)!r}: expected two pairs, found {len(pairs)}")
        return False
    host.remove_shape(pairs[0])
    logger.info(f"Trimmed one pair from {host.name_of(tile)!r} to restore odd quantity")
    return True


def _finalize_canvas(
    host: CanvasHost,
    canvas: CanvasHandle,
    placed: List[Any],
    fillers: List[Any],
    plan: LayoutPlan,
    mode: GridMode,
) -> None:
    """Back-to-back flip for single-side horizontal runs, then re-center."""
    if not placed:
        return
    if mode is GridMode.B and plan.recommended_orientation is Orientation.HORIZONTAL:
        rotate_about_center(host, placed[1::2], 180)
    shapes = placed + fillers
    align_to_rect(host, shapes, canvas.rect, AlignPosition.CENTER)
    logger.debug(f"Re-centered {len(shapes)} shape(s) on {canvas.title!r}")
