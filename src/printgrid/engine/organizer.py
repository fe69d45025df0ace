"""
Module: engine.organizer

Purpose:
    Order-list workflow. Runs one layout per size from a data list keyed by
    size label: the quantity is the number of records for that size, each
    placed unit receives its record, and canvas numbering continues across
    sizes. Single-side runs fill the free slots of the last row with the
    front piece.

Key Functions:
    - organize(): Lay out every size of an order list

Dependencies:
    - engine.controller: One run_layout() per size
    - engine.sizes: Dimension per size label

Used By:
    - Host integrations processing order lists

Data Format:
    {
        "L": [{"NAME": "ANA", "NUMBER": "7"}, {"NAME": "LEE", "NUMBER": "10"}],
        "XL": [...]
    }
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, List, Mapping, Sequence

from printgrid.core.models import GridMode
from printgrid.host.provider import CanvasHost

from .config import DEFAULT_CONFIG, EngineConfig
from .controller import LayoutRequest, LayoutRunResult, run_layout
from .sizes import DEFAULT_CONTAINER, SizeChart

logger = logging.getLogger(__name__)

# Smallest order list worth a layout run
MIN_RECORDS_PER_SIZE = 2


def organize(
    host: CanvasHost,
    source: Any,
    orders: Mapping[str, Sequence[Mapping[str, str]]],
    mode: GridMode,
    chart: SizeChart,
    container: str = DEFAULT_CONTAINER,
    start_index: int = 0,
    config: EngineConfig = DEFAULT_CONFIG,
) -> List[LayoutRunResult]:
    """
    Lay out every size of an order list, one run per size.

    All requests are built before any run starts, so an invalid size or
    a short list fails without touching the host.

    Args:
        host: Canvas host
        source: Container holding the artwork
        orders: size label -> records, in run order
        mode: Tile content mode for every size
        chart: Size chart resolving each label
        container: Size container in the chart
        start_index: Canvases already emitted before this job
        config: Engine configuration

    Returns:
        One LayoutRunResult per size, in order

    Raises:
        ValueError: If a size has fewer than MIN_RECORDS_PER_SIZE records
        KeyError: If a size label is not in the chart
    """
    mode = GridMode(mode)
    requests = [
        _request_for(size_label, records, mode, chart, container)
        for size_label, records in orders.items()
    ]

    results: List[LayoutRunResult] = []
    next_index = start_index
    for request in requests:
        request = replace(request, start_index=next_index)
        result = run_layout(host, source, request, config)
        next_index = result.next_start_index
        results.append(result)
        logger.info(
            f"Size {request.size_label!r}: {result.total_placed} unit(s) "
            f"on {result.canvas_count} canvas(es)"
        )
    return results


def _request_for(
    size_label: str,
    records: Sequence[Mapping[str, str]],
    mode: GridMode,
    chart: SizeChart,
    container: str,
) -> LayoutRequest:
    if len(records) < MIN_RECORDS_PER_SIZE:
        raise ValueError(
            f"Size {size_label!r} needs at least {MIN_RECORDS_PER_SIZE} records, got {len(records)}"
        )
    options = {
        "data": tuple(records),
        "fill_last_row": mode is GridMode.B,
    }
    if mode is GridMode.PANT:
        return LayoutRequest(mode, len(records), size_label=size_label, **options)
    return LayoutRequest.for_size(chart, mode, len(records), size_label, container, **options)

