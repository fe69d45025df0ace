"""
Module: canvas

Purpose:
    Value types describing canvases handed out by the host and the
    per-canvas results produced by the placement driver.

Key Classes:
    - CanvasHandle: Opaque host container plus its usable rectangle
    - CanvasPlacement: One filled canvas yielded by place_grid()

Used By:
    - host.provider: create_canvas() return type
    - engine.placer: Yields CanvasPlacement
    - engine.controller: Collects results
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .geometry import BoundingBox


@dataclass(frozen=True)
class CanvasHandle:
    """
    Canvas created by the host.

    Attributes:
        container: Opaque host container that owns placed shapes
        rect: Usable rectangle (artboard) in points
        title: Optional host-side name
    """

    container: Any
    rect: BoundingBox
    title: str = ""


@dataclass(frozen=True)
class CanvasPlacement:
    """
    Result for one filled canvas.

    Attributes:
        canvas: The canvas that was filled
        index: Canvas number within the run (0-indexed)
        placed_count: Units placed (an L tile counts as two)
        shapes: Placed tile handles in placement order
        fillers: Front copies filling the free slots of the last row

    Example:
        >>> placement.placed_count
        6
    """

    canvas: CanvasHandle
    index: int
    placed_count: int
    shapes: tuple = field(default_factory=tuple)
    fillers: tuple = field(default_factory=tuple)

    @property
    def tile_count(self) -> int:
        """Number of tile shapes on the canvas."""
        return len(self.shapes)
