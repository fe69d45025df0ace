"""
Module: engine.transform

Purpose:
    Bounding-box transform kernel. Stateless geometric operations on host
    shapes: aggregate bounds, alignment, gap-separated adjacency, rotation
    about the bounding-box center and resizing to physical targets.

Key Functions:
    - bounds_of(): Aggregate bounding box (clip-aware)
    - align(): Align one item (or set) to another
    - align_to_rect(): Align an item set to a fixed rectangle
    - move_adjacent(): Place an item flush against another with a gap
    - rotate_about_center(): Rotate while preserving the visual center
    - resize_to_target(): Scale to target inches per axis

Dependencies:
    - host.provider: CanvasHost
    - engine.grouping: Scoped composite units for multi-shape resize

Used By:
    - engine.initiator: Tile construction
    - engine.placer: Grid replication and re-centering

Items:
    Every `items` argument accepts either a single shape handle or a
    list/tuple of handles. A list is treated as one set for bounds,
    alignment and adjacency; rotation applies to each item separately.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Sequence, Union

from printgrid.core.errors import (
    BoundsUnavailable,
    EmptyBounds,
    InvalidPosition,
    LayoutEngineError,
)
from printgrid.core.models import POINTS_PER_INCH, AlignPosition, BoundingBox, Side
from printgrid.host.provider import CanvasHost

from .grouping import composite_unit

logger = logging.getLogger(__name__)

Items = Union[Any, Sequence[Any]]

ROTATION_ANGLES = frozenset({0, 90, -90, 180, -180})


def _as_list(items: Items) -> List[Any]:
    if isinstance(items, (list, tuple)):
        return list(items)
    return [items]


# ─────────────────────────────────────────────────────────────────────────────
# Bounds
# ─────────────────────────────────────────────────────────────────────────────


def bounds_of(host: CanvasHost, items: Items) -> BoundingBox:
    """
    Aggregate bounding box of one or more shapes.

    Groups are recursed into. A clipped group contributes only its clip
    path child (nothing when it has none).

    Raises:
        EmptyBounds: If no geometry contributes
        BoundsUnavailable: If the host fails to report geometry
    """
    boxes: List[BoundingBox] = []
    for item in _as_list(items):
        boxes.extend(_collect_boxes(host, item))

    if not boxes:
        raise EmptyBounds("No geometry contributes to bounds", subject=items)

    result = boxes[0]
    for box in boxes[1:]:
        result = result.union(box)
    return result


def _collect_boxes(host: CanvasHost, shape: Any) -> List[BoundingBox]:
    try:
        if not host.is_group(shape):
            return [host.bounding_box(shape)]

        children = host.children_of(shape)
        if host.is_clipped(shape):
            clip = next((c for c in children if host.is_clip_path(c)), None)
            return _collect_boxes(host, clip) if clip is not None else []

        boxes: List[BoundingBox] = []
        for child in children:
            boxes.extend(_collect_boxes(host, child))
        return boxes
    except LayoutEngineError:
        raise
    except Exception as e:
        raise BoundsUnavailable(f"Host failed to report geometry: {e}", subject=shape) from e


def translate_items(host: CanvasHost, items: Items, dx: float, dy: float) -> None:
    """Translate every item by the same offset."""
    if dx == 0 and dy == 0:
        return
    for item in _as_list(items):
        host.translate(item, dx, dy)


# ─────────────────────────────────────────────────────────────────────────────
# Alignment
# ─────────────────────────────────────────────────────────────────────────────


def _parse_position(position: Union[AlignPosition, str]) -> AlignPosition:
    try:
        return AlignPosition(position)
    except ValueError:
        raise InvalidPosition(f"Unsupported alignment position: {position!r}", subject=position) from None


def _parse_side(side: Union[Side, str]) -> Side:
    try:
        return Side(side)
    except ValueError:
        raise InvalidPosition(f"Unsupported side: {side!r}", subject=side) from None


def _alignment_delta(
    base: BoundingBox,
    moving: BoundingBox,
    position: AlignPosition,
) -> tuple[float, float]:
    """Offset that makes `moving` satisfy `position` relative to `base`."""
    center_dx = base.center_x - moving.center_x
    center_dy = base.center_y - moving.center_y

    if position is AlignPosition.LEFT:
        return (base.left - moving.left, 0.0)
    if position is AlignPosition.RIGHT:
        return (base.right - moving.right, 0.0)
    if position is AlignPosition.TOP:
        return (0.0, base.top - moving.top)
    if position is AlignPosition.BOTTOM:
        return (0.0, base.bottom - moving.bottom)
    if position is AlignPosition.LEFT_CENTER:
        return (base.left - moving.left, center_dy)
    if position is AlignPosition.RIGHT_CENTER:
        return (base.right - moving.right, center_dy)
    if position is AlignPosition.TOP_CENTER:
        return (center_dx, base.top - moving.top)
    if position is AlignPosition.BOTTOM_CENTER:
        return (center_dx, base.bottom - moving.bottom)
    if position is AlignPosition.CENTER:
        return (center_dx, center_dy)
    if position is AlignPosition.CENTER_X:
        return (center_dx, 0.0)
    return (0.0, center_dy)


def align(
    host: CanvasHost,
    base: Items,
    moving: Items,
    position: Union[AlignPosition, str],
) -> None:
    """
    Translate `moving` so its edge/center matches `base`.

    Args:
        host: Canvas host
        base: Reference item(s), not moved
        moving: Item(s) moved together as one set
        position: AlignPosition or its token ("L", "TC", "C", ...)

    Raises:
        InvalidPosition: If position is not a known token
    """
    pos = _parse_position(position)
    dx, dy = _alignment_delta(bounds_of(host, base), bounds_of(host, moving), pos)
    translate_items(host, moving, dx, dy)


def align_to_rect(
    host: CanvasHost,
    items: Items,
    rect: BoundingBox,
    position: Union[AlignPosition, str],
) -> None:
    """Translate `items` (as one set) to align with a fixed rectangle."""
    pos = _parse_position(position)
    dx, dy = _alignment_delta(rect, bounds_of(host, items), pos)
    translate_items(host, items, dx, dy)


def move_adjacent(
    host: CanvasHost,
    base: Items,
    moving: Items,
    side: Union[Side, str],
    gap: float = 0.0,
) -> None:
    """
    Place `moving` flush against `base` on `side`, offset outward by `gap`.

    Only the axis perpendicular to `side` changes.

    Example:
        >>> # base.right == 100, moving.left == -10
        >>> move_adjacent(host, base, moving, Side.RIGHT, gap=7.2)
        >>> bounds_of(host, moving).left
        107.2
    """
    where = _parse_side(side)
    b = bounds_of(host, base)
    m = bounds_of(host, moving)

    if where is Side.RIGHT:
        dx, dy = b.right + gap - m.left, 0.0
    elif where is Side.LEFT:
        dx, dy = b.left - gap - m.right, 0.0
    elif where is Side.TOP:
        dx, dy = 0.0, b.top - gap - m.bottom
    else:
        dx, dy = 0.0, b.bottom + gap - m.top

    translate_items(host, moving, dx, dy)


# ─────────────────────────────────────────────────────────────────────────────
# Rotation and scaling
# ─────────────────────────────────────────────────────────────────────────────


def rotate_about_center(host: CanvasHost, items: Items, degrees: float) -> None:
    """
    Rotate each item about its own bounding-box center.

    The host rotates about an arbitrary pivot, so each rotation is followed
    by a compensating translation restoring the pre-rotation center.

    Raises:
        ValueError: If degrees is not one of 0, ±90, ±180
    """
    if degrees not in ROTATION_ANGLES:
        raise ValueError(f"degrees must be one of 0, ±90, ±180: {degrees}")
    if degrees == 0:
        return

    for item in _as_list(items):
        before = bounds_of(host, item)
        host.rotate(item, degrees)
        after = bounds_of(host, item)
        host.translate(item, before.center_x - after.center_x, before.center_y - after.center_y)


def resize_to_target(
    host: CanvasHost,
    items: Items,
    target_width: Optional[float] = None,
    target_height: Optional[float] = None,
    points_per_inch: float = POINTS_PER_INCH,
) -> None:
    """
    Scale item(s) so their combined bounds hit the target size in inches.

    An omitted target keeps that axis unchanged. Several items are resized
    as one scoped composite unit, preserving their relative layout.

    Raises:
        EmptyBounds: If the items have no geometry or a zero-size axis
    """
    shapes = _as_list(items)
    if not shapes:
        raise EmptyBounds("Nothing to resize", subject=items)
    if target_width is None and target_height is None:
        return

    if len(shapes) == 1:
        _resize_one(host, shapes[0], target_width, target_height, points_per_inch)
        return

    with composite_unit(host, shapes, anchor=_previous_sibling(host, shapes[0])) as unit:
        _resize_one(host, unit, target_width, target_height, points_per_inch)


def _resize_one(
    host: CanvasHost,
    shape: Any,
    target_width: Optional[float],
    target_height: Optional[float],
    points_per_inch: float,
) -> None:
    box = bounds_of(host, shape)
    scale_x = _scale_percent(box.width, target_width, points_per_inch, shape)
    scale_y = _scale_percent(box.height, target_height, points_per_inch, shape)
    logger.debug(f"Resizing {shape!r} by {scale_x:.3f}% x {scale_y:.3f}%")
    host.resize(shape, scale_x, scale_y)


def _scale_percent(
    current: float,
    target: Optional[float],
    points_per_inch: float,
    shape: Any,
) -> float:
    if target is None:
        return 100.0
    if current <= 0:
        raise EmptyBounds("Cannot resize a zero-size axis", subject=shape)
    return target * points_per_inch / current * 100.0


def _previous_sibling(host: CanvasHost, shape: Any) -> Optional[Any]:
    siblings = host.children_of(host.parent_of(shape))
    index = next(i for i, s in enumerate(siblings) if s is shape)
    return siblings[index - 1] if index > 0 else None
