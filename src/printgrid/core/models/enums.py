"""
Module: enums

Purpose:
    Enumerations shared by the planners, the transform kernel and the
    placement driver.

Key Classes:
    - GridMode: Which artwork a tile carries (B / FB / PANT)
    - Orientation: How the tile is arranged (V / H / L)
    - AlignPosition: Edge/center alignment tokens
    - Side: Adjacent-move direction
    - Placement: Where a shape lands when moved into a container

Used By:
    - engine.transform: AlignPosition, Side
    - engine.grouping: Placement
    - engine.planner / engine.placer / engine.initiator: GridMode, Orientation
"""

from __future__ import annotations

from enum import Enum


class GridMode(str, Enum):
    """
    Tile content mode.

    Attributes:
        B: Single side - only the back is tiled (front gets its own canvas)
        FB: Front and back stacked together, doubling the tile height
        PANT: Non-body accessory, a single shape used as-is
    """

    B = "B"
    FB = "FB"
    PANT = "PANT"

    def __str__(self) -> str:
        return self.value


class Orientation(str, Enum):
    """Tile arrangement produced by the initiator."""

    VERTICAL = "V"
    HORIZONTAL = "H"
    LSHAPE = "L"

    def __str__(self) -> str:
        return self.value


class AlignPosition(str, Enum):
    """
    Alignment tokens understood by the transform kernel.

    Single edges move one axis; the *C variants also center the other axis.
    CENTER_X and CENTER_Y center a single axis.
    """

    LEFT = "L"
    RIGHT = "R"
    TOP = "T"
    BOTTOM = "B"
    LEFT_CENTER = "LC"
    RIGHT_CENTER = "RC"
    TOP_CENTER = "TC"
    BOTTOM_CENTER = "BC"
    CENTER = "C"
    CENTER_X = "CX"
    CENTER_Y = "CY"

    def __str__(self) -> str:
        return self.value


class Side(str, Enum):
    """Side of the base item that a moving item is placed against."""

    LEFT = "L"
    RIGHT = "R"
    TOP = "T"
    BOTTOM = "B"

    def __str__(self) -> str:
        return self.value


class Placement(str, Enum):
    """
    Where a shape lands when moved into a container.

    Attributes:
        BEFORE: Immediately before the anchor, in the anchor's container
        AFTER: Immediately after the anchor, in the anchor's container
        INSIDE: Appended at the end of the target container
    """

    BEFORE = "before"
    AFTER = "after"
    INSIDE = "inside"
