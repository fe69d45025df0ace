"""
Module: host.memory

Purpose:
    Headless in-memory CanvasHost. Shapes are plain tree nodes carrying
    absolute bounding boxes in points. Used for tests, debug previews and
    as the reference behaviour of the host capability contract.

Key Classes:
    - MemoryShape: Tree node (canvas, group, path or text)
    - MemoryCanvasHost: CanvasHost implementation over MemoryShape trees

Dependencies:
    - itertools (std): Shape ids
    - host.provider: CanvasHost interface

Used By:
    - tests: All engine tests run against this host
    - utils.visualizer: Preview rendering walks MemoryShape trees

Geometry:
    Rotation pivots on the shape's top-left corner (as many document hosts
    do), so callers that need a fixed center must re-center. Only quarter
    turns are supported. Resizing scales about the shape's own center.
    Text frames keep their per-character advance: new contents stretch or
    shrink the frame along its reading axis from the leading edge.
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from printgrid.core.models import (
    POINTS_PER_INCH,
    BoundingBox,
    CanvasHandle,
    Dimension,
    Placement,
)

from .provider import CanvasHost

logger = logging.getLogger(__name__)

_ids = itertools.count(1)

# (cos, sin) per counter-clockwise quarter turn
_QUARTER_TURNS = {0: (1, 0), 90: (0, 1), 180: (-1, 0), 270: (0, -1)}


@dataclass(eq=False)
class MemoryShape:
    """
    Node in an in-memory shape tree.

    Attributes:
        kind: "canvas", "group", "path" or "text"
        name: Mutable display name
        box: Absolute bounds for leaf shapes (None for containers)
        children: Ordered children (canvas/group only)
        parent: Owning container, None for canvases and removed shapes
        text: Text contents (text shapes only)
        clipped: Group is clipped by one of its children
        clip_path: Shape is the clip boundary of its group
        rotation: Accumulated rotation applied directly to this shape
    """

    kind: str
    name: str = ""
    box: Optional[BoundingBox] = None
    children: List["MemoryShape"] = field(default_factory=list)
    parent: Optional["MemoryShape"] = field(default=None, repr=False)
    text: Optional[str] = None
    clipped: bool = False
    clip_path: bool = False
    rotation: float = 0.0
    uid: int = field(default_factory=lambda: next(_ids))

    @property
    def is_container(self) -> bool:
        return self.kind in ("canvas", "group")

    def __repr__(self) -> str:
        return f"MemoryShape({self.kind}#{self.uid} {self.name!r})"


class MemoryCanvasHost(CanvasHost):
    """
    In-memory canvas host.

    Besides the CanvasHost contract it offers builder helpers
    (add_path, add_text, add_group, mark_clip_path) for assembling
    source artwork.

    Example:
        >>> host = MemoryCanvasHost()
        >>> doc = host.create_canvas(Dimension(40, 40)).container
        >>> front = host.add_group(doc, name="FRONT")
        >>> host.add_path(front, BoundingBox.from_size(144, 216))
    """

    def __init__(self, points_per_inch: float = POINTS_PER_INCH) -> None:
        self.points_per_inch = points_per_inch
        self.canvases: List[MemoryShape] = []
        self._canvas_rects: dict[int, BoundingBox] = {}

    # ─────────────────────────────────────────────────────────────────────────
    # Builder helpers
    # ─────────────────────────────────────────────────────────────────────────

    def add_path(
        self,
        container: MemoryShape,
        box: BoundingBox,
        name: str = "",
    ) -> MemoryShape:
        """Append a leaf path shape with the given bounds."""
        return self._append(container, MemoryShape(kind="path", name=name, box=box))

    def add_text(
        self,
        container: MemoryShape,
        box: BoundingBox,
        name: str = "",
        text: str = "",
    ) -> MemoryShape:
        """Append a text shape."""
        return self._append(container, MemoryShape(kind="text", name=name, box=box, text=text))

    def add_group(
        self,
        container: MemoryShape,
        name: str = "",
        clipped: bool = False,
    ) -> MemoryShape:
        """Append an empty group."""
        return self._append(container, MemoryShape(kind="group", name=name, clipped=clipped))

    def mark_clip_path(self, shape: MemoryShape) -> None:
        """Flag `shape` as its group's clip boundary (clips the group)."""
        shape.clip_path = True
        if shape.parent is not None and shape.parent.kind == "group":
            shape.parent.clipped = True

    def canvas_rect(self, canvas: MemoryShape) -> BoundingBox:
        """Usable rectangle of a canvas created by this host."""
        return self._canvas_rects[canvas.uid]

    def iter_leaves(self, shape: MemoryShape) -> Iterator[MemoryShape]:
        """Yield every leaf under `shape` (the shape itself when it is a leaf)."""
        if not shape.is_container:
            yield shape
            return
        for child in shape.children:
            yield from self.iter_leaves(child)

    # ─────────────────────────────────────────────────────────────────────────
    # Canvases and containers
    # ─────────────────────────────────────────────────────────────────────────

    def create_canvas(self, usable_size: Dimension, title: str = "") -> CanvasHandle:
        width, height = usable_size.to_points(self.points_per_inch)
        canvas = MemoryShape(kind="canvas", name=title)
        rect = BoundingBox.from_size(width, height)
        self.canvases.append(canvas)
        self._canvas_rects[canvas.uid] = rect
        logger.debug(f"Created canvas {title!r}: {usable_size.width:.2f}x{usable_size.height:.2f} in")
        return CanvasHandle(container=canvas, rect=rect, title=title)

    def create_group(
        self,
        container: MemoryShape,
        anchor: Optional[MemoryShape] = None,
    ) -> MemoryShape:
        group = MemoryShape(kind="group")
        if anchor is not None:
            self._insert_relative(group, anchor, offset=1)
        else:
            self._append(container, group)
        return group

    def parent_of(self, shape: MemoryShape) -> Optional[MemoryShape]:
        return shape.parent

    def children_of(self, container: MemoryShape) -> List[MemoryShape]:
        return list(container.children)

    def move_into_container(
        self,
        shape: MemoryShape,
        container: MemoryShape,
        anchor: Optional[MemoryShape] = None,
        placement: Placement = Placement.INSIDE,
    ) -> None:
        placement = Placement(placement)
        target = anchor.parent if placement is not Placement.INSIDE and anchor is not None else container
        if target is None:
            raise ValueError(f"Anchor {anchor!r} has no container")
        if self._is_ancestor(shape, target):
            raise ValueError(f"Cannot move {shape!r} into its own descendant {target!r}")
        if placement is Placement.INSIDE or anchor is None:
            self._detach(shape)
            self._append(container, shape)
            return
        if anchor is shape:
            return
        self._detach(shape)
        self._insert_relative(shape, anchor, offset=1 if placement is Placement.AFTER else 0)

    # ─────────────────────────────────────────────────────────────────────────
    # Shape lifecycle
    # ─────────────────────────────────────────────────────────────────────────

    def duplicate_shape(self, shape: MemoryShape) -> MemoryShape:
        clone = self._clone(shape)
        if shape.parent is not None:
            self._insert_relative(clone, shape, offset=1)
        return clone

    def remove_shape(self, shape: MemoryShape) -> None:
        self._detach(shape)
        if shape.kind == "canvas" and shape in self.canvases:
            self.canvases.remove(shape)

    # ─────────────────────────────────────────────────────────────────────────
    # Transforms
    # ─────────────────────────────────────────────────────────────────────────

    def translate(self, shape: MemoryShape, dx: float, dy: float) -> None:
        for leaf in self.iter_leaves(shape):
            leaf.box = leaf.box.translated(dx, dy)

    def rotate(self, shape: MemoryShape, degrees: float) -> None:
        turn = degrees % 360
        if turn not in _QUARTER_TURNS:
            raise ValueError(f"Only quarter turns are supported: {degrees}")
        shape.rotation = (shape.rotation + degrees) % 360
        if turn == 0:
            return
        leaves = list(self.iter_leaves(shape))
        if not leaves:
            return
        pivot = self.bounding_box(shape)
        cos, sin = _QUARTER_TURNS[turn]
        for leaf in leaves:
            corners = [
                _rotate_point(x, y, pivot.left, pivot.top, cos, sin)
                for x, y in ((leaf.box.left, leaf.box.top), (leaf.box.right, leaf.box.bottom))
            ]
            xs = [c[0] for c in corners]
            ys = [c[1] for c in corners]
            leaf.box = BoundingBox(left=min(xs), top=min(ys), right=max(xs), bottom=max(ys))

    def resize(self, shape: MemoryShape, scale_x_percent: float, scale_y_percent: float) -> None:
        if scale_x_percent <= 0 or scale_y_percent <= 0:
            raise ValueError(f"Scale must be positive: {scale_x_percent}, {scale_y_percent}")
        leaves = list(self.iter_leaves(shape))
        if not leaves:
            return
        cx, cy = self.bounding_box(shape).center
        sx = scale_x_percent / 100.0
        sy = scale_y_percent / 100.0
        for leaf in leaves:
            box = leaf.box
            leaf.box = BoundingBox(
                left=cx + (box.left - cx) * sx,
                top=cy + (box.top - cy) * sy,
                right=cx + (box.right - cx) * sx,
                bottom=cy + (box.bottom - cy) * sy,
            )

    # ─────────────────────────────────────────────────────────────────────────
    # Geometry and structure queries
    # ─────────────────────────────────────────────────────────────────────────

    def bounding_box(self, shape: MemoryShape) -> BoundingBox:
        if shape.kind == "canvas":
            return self.canvas_rect(shape)
        if not shape.is_container:
            return shape.box
        boxes = [leaf.box for leaf in self.iter_leaves(shape)]
        if not boxes:
            raise ValueError(f"Group has no geometry: {shape!r}")
        result = boxes[0]
        for box in boxes[1:]:
            result = result.union(box)
        return result

    def is_group(self, shape: MemoryShape) -> bool:
        return shape.kind == "group"

    def is_clipped(self, shape: MemoryShape) -> bool:
        return shape.kind == "group" and shape.clipped

    def is_clip_path(self, shape: MemoryShape) -> bool:
        return shape.clip_path

    # ─────────────────────────────────────────────────────────────────────────
    # Naming and text
    # ─────────────────────────────────────────────────────────────────────────

    def name_of(self, shape: MemoryShape) -> str:
        return shape.name

    def set_name(self, shape: MemoryShape, name: str) -> None:
        shape.name = name

    def find_child_by_name(self, container: MemoryShape, name: str) -> Optional[MemoryShape]:
        for child in container.children:
            if child.name == name:
                return child
        return None

    def set_text(self, shape: MemoryShape, text: str) -> None:
        if shape.kind != "text":
            raise ValueError(f"Not a text shape: {shape!r}")
        old = shape.text or ""
        if old and text and len(text) != len(old):
            # Frames keep their per-character advance along the reading axis
            shape.box = _reflow(shape.box, len(text) / len(old), self._reads_vertically(shape))
        shape.text = text

    # ─────────────────────────────────────────────────────────────────────────
    # Internals
    # ─────────────────────────────────────────────────────────────────────────

    def _append(self, container: MemoryShape, shape: MemoryShape) -> MemoryShape:
        if not container.is_container:
            raise ValueError(f"Not a container: {container!r}")
        container.children.append(shape)
        shape.parent = container
        return shape

    def _insert_relative(self, shape: MemoryShape, anchor: MemoryShape, offset: int) -> None:
        parent = anchor.parent
        if parent is None:
            raise ValueError(f"Anchor {anchor!r} has no container")
        index = parent.children.index(anchor) + offset
        parent.children.insert(index, shape)
        shape.parent = parent

    def _detach(self, shape: MemoryShape) -> None:
        if shape.parent is not None:
            shape.parent.children.remove(shape)
            shape.parent = None

    def _clone(self, shape: MemoryShape) -> MemoryShape:
        clone = MemoryShape(
            kind=shape.kind,
            name=shape.name,
            box=shape.box,
            text=shape.text,
            clipped=shape.clipped,
            clip_path=shape.clip_path,
            rotation=shape.rotation,
        )
        for child in shape.children:
            child_clone = self._clone(child)
            child_clone.parent = clone
            clone.children.append(child_clone)
        return clone

    @staticmethod
    def _reads_vertically(shape: MemoryShape) -> bool:
        """Whether the accumulated rotation of `shape` and its ancestors is a side turn."""
        total = 0.0
        node: Optional[MemoryShape] = shape
        while node is not None:
            total += node.rotation
            node = node.parent
        return total % 180 == 90

    @staticmethod
    def _is_ancestor(shape: MemoryShape, node: Optional[MemoryShape]) -> bool:
        while node is not None:
            if node is shape:
                return True
            node = node.parent
        return False


def _rotate_point(
    x: float,
    y: float,
    px: float,
    py: float,
    cos: int,
    sin: int,
) -> tuple[float, float]:
    """Rotate (x, y) counter-clockwise on screen (y down) about (px, py)."""
    dx = x - px
    dy = y - py
    return (px + dx * cos + dy * sin, py - dx * sin + dy * cos)


def _reflow(box: BoundingBox, factor: float, vertical: bool) -> BoundingBox:
    """Stretch `box` along its reading axis, keeping the leading edge."""
    if vertical:
        return BoundingBox(box.left, box.top, box.right, box.top + box.height * factor)
    return BoundingBox(box.left, box.top, box.left + box.width * factor, box.bottom)
