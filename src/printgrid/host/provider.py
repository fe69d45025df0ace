"""
Module: host.provider

Purpose:
    Abstract capability surface the layout engine requires from a
    canvas/shape host. Any concrete host (document API bridge, headless
    geometry engine, test double) implements this interface.

Key Classes:
    - CanvasHost: Abstract base class for host access

Dependencies:
    - printgrid.core.models: BoundingBox, Dimension, CanvasHandle, Placement

Used By:
    - engine.transform: Geometry primitives
    - engine.grouping: Container moves
    - engine.initiator / engine.placer: Duplication, naming, canvases
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, List, Optional

from printgrid.core.models import BoundingBox, CanvasHandle, Dimension, Placement

# Host handles are opaque to the engine.
Shape = Any
Container = Any


class CanvasHost(ABC):
    """
    Abstract interface for a canvas/shape host.

    All calls are blocking and non-reentrant: the engine waits for each
    call to complete and only one canvas is active for placement at a time.
    Geometry is reported in points (72 per inch).
    """

    # ─────────────────────────────────────────────────────────────────────────
    # Canvases and containers
    # ─────────────────────────────────────────────────────────────────────────

    @abstractmethod
    def create_canvas(self, usable_size: Dimension, title: str = "") -> CanvasHandle:
        """
        Create a new canvas.

        Args:
            usable_size: Size of the usable rectangle in inches
            title: Optional canvas name

        Returns:
            CanvasHandle with the new container and its rectangle
        """

    @abstractmethod
    def create_group(self, container: Container, anchor: Optional[Shape] = None) -> Shape:
        """
        Create an empty group.

        The group is inserted immediately after `anchor` when given,
        otherwise appended to `container`.
        """

    @abstractmethod
    def parent_of(self, shape: Shape) -> Container:
        """Container that currently owns `shape`."""

    @abstractmethod
    def children_of(self, container: Container) -> List[Shape]:
        """Ordered children of a canvas or group (empty for leaf shapes)."""

    @abstractmethod
    def move_into_container(
        self,
        shape: Shape,
        container: Container,
        anchor: Optional[Shape] = None,
        placement: Placement = Placement.INSIDE,
    ) -> None:
        """
        Move `shape` to a new position in the container tree.

        BEFORE/AFTER insert relative to `anchor` inside the anchor's
        container; INSIDE appends to `container`.
        """

    # ─────────────────────────────────────────────────────────────────────────
    # Shape lifecycle
    # ─────────────────────────────────────────────────────────────────────────

    @abstractmethod
    def duplicate_shape(self, shape: Shape) -> Shape:
        """Independent copy placed right after the original in the same container."""

    @abstractmethod
    def remove_shape(self, shape: Shape) -> None:
        """Remove `shape` (and any children) from the host."""

    # ─────────────────────────────────────────────────────────────────────────
    # Transforms
    # ─────────────────────────────────────────────────────────────────────────

    @abstractmethod
    def translate(self, shape: Shape, dx: float, dy: float) -> None:
        """Move `shape` by (dx, dy) points."""

    @abstractmethod
    def rotate(self, shape: Shape, degrees: float) -> None:
        """
        Rotate `shape` counter-clockwise by `degrees`.

        The pivot is implementation-defined; callers needing a fixed
        center must re-center afterwards.
        """

    @abstractmethod
    def resize(self, shape: Shape, scale_x_percent: float, scale_y_percent: float) -> None:
        """Scale `shape` about its own center by percentages per axis."""

    # ─────────────────────────────────────────────────────────────────────────
    # Geometry and structure queries
    # ─────────────────────────────────────────────────────────────────────────

    @abstractmethod
    def bounding_box(self, shape: Shape) -> BoundingBox:
        """Geometric bounds of `shape` as reported by the host."""

    @abstractmethod
    def is_group(self, shape: Shape) -> bool:
        """Whether `shape` is a group with children."""

    @abstractmethod
    def is_clipped(self, shape: Shape) -> bool:
        """Whether `shape` is a group clipped by one of its children."""

    @abstractmethod
    def is_clip_path(self, shape: Shape) -> bool:
        """Whether `shape` is the clip boundary of its group."""

    # ─────────────────────────────────────────────────────────────────────────
    # Naming and text
    # ─────────────────────────────────────────────────────────────────────────

    @abstractmethod
    def name_of(self, shape: Shape) -> str:
        """Current name of `shape`."""

    @abstractmethod
    def set_name(self, shape: Shape, name: str) -> None:
        """Rename `shape`."""

    @abstractmethod
    def find_child_by_name(self, container: Container, name: str) -> Optional[Shape]:
        """First direct child of `container` named `name`, or None."""

    @abstractmethod
    def set_text(self, shape: Shape, text: str) -> None:
        """Replace the text contents of a text shape."""
