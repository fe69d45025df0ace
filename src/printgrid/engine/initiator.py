"""
Module: engine.initiator

Purpose:
    Builds the initial repeatable tile from the front/back artwork pair
    (or the single accessory shape in PANT mode), in one of three
    arrangements: stacked vertical, side-by-side horizontal or the
    interlocking L.

Key Functions:
    - build_initial_unit(): Main entry point, returns the tile group
    - stamp_size_label(): Write the size into a shape's label placeholder
    - find_body_items(): Locate FRONT/BACK in a source container
    - find_accessory_item(): Locate the PANT accessory

Dependencies:
    - engine.transform: Kernel operations
    - engine.grouping: Composite units

Used By:
    - engine.controller: Template construction

Tile Structure:
    V / H:  tile -> [front, back]
    L:      tile -> [pair(front, back), pair(dup_back, dup_front)]
    PANT:   tile -> [accessory]
    The L tile keeps its two pairs as separate groups so one pair-half
    can be trimmed from the last placed tile when the quantity is odd.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Tuple

from printgrid.core.errors import MissingRequiredShape, SizeLabelMissing
from printgrid.core.models import AlignPosition, Dimension, GridMode, Orientation, Side
from printgrid.host.provider import CanvasHost

from .config import DEFAULT_CONFIG, EngineConfig
from .grouping import CompositeUnitManager
from .transform import align, move_adjacent, resize_to_target, rotate_about_center

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────────────────────
# Source lookup and validation
# ─────────────────────────────────────────────────────────────────────────────


def find_body_items(
    host: CanvasHost,
    container: Any,
    config: EngineConfig = DEFAULT_CONFIG,
) -> Tuple[Any, Any]:
    """
    Find the FRONT and BACK artwork in a source container.

    Raises:
        MissingRequiredShape: If either is absent
    """
    front = host.find_child_by_name(container, config.front_name)
    back = host.find_child_by_name(container, config.back_name)
    if front is None:
        raise MissingRequiredShape(f"'{config.front_name}' not found", subject=config.front_name)
    if back is None:
        raise MissingRequiredShape(f"'{config.back_name}' not found", subject=config.back_name)
    return front, back


def find_accessory_item(
    host: CanvasHost,
    container: Any,
    config: EngineConfig = DEFAULT_CONFIG,
) -> Any:
    """Find the accessory artwork used in PANT mode."""
    item = host.find_child_by_name(container, config.accessory_name)
    if item is None:
        raise MissingRequiredShape(
            f"'{config.accessory_name}' not found", subject=config.accessory_name
        )
    return item


def _find_named(host: CanvasHost, container: Any, name: str) -> Optional[Any]:
    """Depth-first search for a named shape below `container`."""
    found = host.find_child_by_name(container, name)
    if found is not None:
        return found
    for child in host.children_of(container):
        if host.is_group(child):
            found = _find_named(host, child, name)
            if found is not None:
                return found
    return None


def stamp_size_label(
    host: CanvasHost,
    shape: Any,
    size_label: str,
    config: EngineConfig = DEFAULT_CONFIG,
) -> None:
    """
    Set the text of the size label placeholder inside `shape`.

    Raises:
        SizeLabelMissing: If `shape` has no placeholder named
            `config.size_label_name`
    """
    placeholder = _find_named(host, shape, config.size_label_name)
    if placeholder is None:
        raise SizeLabelMissing(
            f"Size label '{config.size_label_name}' not found in {host.name_of(shape)!r}",
            subject=shape,
        )
    host.set_text(placeholder, size_label)


# ─────────────────────────────────────────────────────────────────────────────
# Tile construction
# ─────────────────────────────────────────────────────────────────────────────


def build_initial_unit(
    host: CanvasHost,
    front: Any,
    back: Optional[Any],
    mode: GridMode,
    orientation: Orientation,
    dimension: Dimension,
    size_label: str,
    config: EngineConfig = DEFAULT_CONFIG,
) -> Any:
    """
    Arrange the artwork into one repeatable tile.

    Args:
        host: Canvas host
        front: Front artwork (the accessory in PANT mode)
        back: Back artwork (ignored in PANT mode)
        mode: Tile content mode
        orientation: Arrangement to build
        dimension: Target size of the front/back pair in inches
        size_label: Text stamped into both size placeholders
        config: Engine configuration

    Returns:
        Host group holding the tile (structure in module docstring)

    Raises:
        MissingRequiredShape: If front (or back outside PANT) is None
        SizeLabelMissing: If a size placeholder is absent
    """
    mode = GridMode(mode)
    orientation = Orientation(orientation)

    if front is None:
        raise MissingRequiredShape("Front artwork is required", subject="front")
    if mode is not GridMode.PANT and back is None:
        raise MissingRequiredShape("Back artwork is required", subject="back")

    managers: List[CompositeUnitManager] = []
    try:
        if mode is GridMode.PANT:
            tile = _initiate_accessory(host, front, orientation, managers)
        else:
            _prepare_pair(host, front, back, dimension, size_label, config)
            gap = config.gap_points
            if orientation is Orientation.VERTICAL:
                tile = _initiate_vertical(host, front, back, mode, gap, managers)
            elif orientation is Orientation.HORIZONTAL:
                tile = _initiate_horizontal(host, front, back, mode, gap, managers)
            else:
                tile = _initiate_l_shape(host, front, back, gap, managers)
    except Exception:
        for manager in reversed(managers):
            manager.release()
        raise

    for manager in managers:
        manager.detach()

    logger.info(f"Built {mode} tile in orientation {orientation}")
    return tile


def _prepare_pair(
    host: CanvasHost,
    front: Any,
    back: Any,
    dimension: Dimension,
    size_label: str,
    config: EngineConfig,
) -> None:
    """Stamp the size, center back on front and resize the pair together."""
    stamp_size_label(host, front, size_label, config)
    stamp_size_label(host, back, size_label, config)
    align(host, front, back, AlignPosition.CENTER)
    resize_to_target(
        host,
        [front, back],
        target_width=dimension.width,
        target_height=dimension.height,
        points_per_inch=config.points_per_inch,
    )


def _group(host: CanvasHost, members: List[Any], managers: List[CompositeUnitManager]) -> Any:
    manager = CompositeUnitManager(host, members)
    managers.append(manager)
    return manager.group()


def _initiate_accessory(
    host: CanvasHost,
    item: Any,
    orientation: Orientation,
    managers: List[CompositeUnitManager],
) -> Any:
    if orientation is Orientation.HORIZONTAL:
        rotate_about_center(host, item, -90)
    return _group(host, [item], managers)


def _initiate_vertical(
    host: CanvasHost,
    front: Any,
    back: Any,
    mode: GridMode,
    gap: float,
    managers: List[CompositeUnitManager],
) -> Any:
    if mode is GridMode.FB:
        move_adjacent(host, front, back, Side.BOTTOM, gap)
    return _group(host, [front, back], managers)


def _initiate_horizontal(
    host: CanvasHost,
    front: Any,
    back: Any,
    mode: GridMode,
    gap: float,
    managers: List[CompositeUnitManager],
) -> Any:
    rotate_about_center(host, [front, back], -90)
    if mode is GridMode.FB:
        move_adjacent(host, front, back, Side.RIGHT, gap)
        rotate_about_center(host, back, 180)
    return _group(host, [front, back], managers)


def _initiate_l_shape(
    host: CanvasHost,
    front: Any,
    back: Any,
    gap: float,
    managers: List[CompositeUnitManager],
) -> Any:
    # First L: back turned on its side, standing right of front.
    rotate_about_center(host, back, 90)
    align(host, front, back, AlignPosition.BOTTOM)
    move_adjacent(host, front, back, Side.RIGHT, gap)

    # Mirrored L on top, completing the pinwheel.
    dup_front = host.duplicate_shape(front)
    dup_back = host.duplicate_shape(back)
    try:
        rotate_about_center(host, [dup_front, dup_back], 180)

        move_adjacent(host, front, dup_back, Side.TOP, gap)
        align(host, front, dup_back, AlignPosition.LEFT)
        move_adjacent(host, back, dup_front, Side.TOP, gap)
        align(host, back, dup_front, AlignPosition.RIGHT)

        first_pair = _group(host, [front, back], managers)
        second_pair = _group(host, [dup_back, dup_front], managers)
        return _group(host, [first_pair, second_pair], managers)
    except Exception:
        # Managers only release grouped members; drop the copies made here
        for shape in (dup_front, dup_back):
            if host.parent_of(shape) is not None:
                host.remove_shape(shape)
        raise
