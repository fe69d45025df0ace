"""
Module: geometry

Purpose:
    Provides the Dimension and BoundingBox dataclasses - the two geometric
    value types the layout engine reasons about. Dimensions are physical
    sizes in inches; bounding boxes are host coordinates in points.

Key Classes:
    - Dimension: Physical {width, height} in inches
    - BoundingBox: {left, top, right, bottom} in points

Dependencies:
    - dataclasses (std)

Used By:
    - engine.transform: All kernel operations
    - engine.planner / engine.row_fit: Fit calculations
    - host.memory: Shape geometry

Coordinate Convention:
    Screen convention: x grows to the right, y grows downward.
    So top <= bottom and left <= right for every valid box.
"""

from __future__ import annotations

from dataclasses import dataclass

POINTS_PER_INCH = 72.0


@dataclass(frozen=True, slots=True)
class Dimension:
    """
    Physical size in inches (immutable).

    Attributes:
        width: Width in inches
        height: Height in inches

    Invariants:
        - width > 0
        - height > 0

    Example:
        >>> dim = Dimension(width=20.5, height=30)
        >>> dim.rotated()
        Dimension(width=30, height=20.5)
    """

    width: float
    height: float

    def __post_init__(self) -> None:
        """Validate dimension on construction."""
        if not self.width > 0:
            raise ValueError(f"width must be positive: {self.width}")
        if not self.height > 0:
            raise ValueError(f"height must be positive: {self.height}")

    def rotated(self) -> Dimension:
        """Dimension after a quarter turn (width and height swapped)."""
        return Dimension(width=self.height, height=self.width)

    def doubled_height(self) -> Dimension:
        """Dimension of a front+back stack (height doubled)."""
        return Dimension(width=self.width, height=self.height * 2)

    def to_points(self, points_per_inch: float = POINTS_PER_INCH) -> tuple[float, float]:
        """Get (width, height) in points."""
        return (self.width * points_per_inch, self.height * points_per_inch)

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {"width": self.width, "height": self.height}

    @classmethod
    def from_dict(cls, data: dict) -> Dimension:
        """Deserialize from dictionary with width and height keys."""
        return cls(width=float(data["width"]), height=float(data["height"]))


@dataclass(frozen=True, slots=True)
class BoundingBox:
    """
    Axis-aligned host rectangle in points (immutable).

    Always derived from the host after a transform, never edited by hand.

    Attributes:
        left: X-coordinate of left edge
        top: Y-coordinate of top edge
        right: X-coordinate of right edge
        bottom: Y-coordinate of bottom edge

    Invariants:
        - right >= left
        - bottom >= top

    Example:
        >>> box = BoundingBox(left=0, top=0, right=144, bottom=72)
        >>> box.to_dimension()
        Dimension(width=2.0, height=1.0)
    """

    left: float
    top: float
    right: float
    bottom: float

    def __post_init__(self) -> None:
        """Validate bounds on construction."""
        if self.right < self.left:
            raise ValueError(f"right must be >= left: {self.right} < {self.left}")
        if self.bottom < self.top:
            raise ValueError(f"bottom must be >= top: {self.bottom} < {self.top}")

    # ─────────────────────────────────────────────────────────────────────────
    # Properties
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def width(self) -> float:
        """Width in points."""
        return self.right - self.left

    @property
    def height(self) -> float:
        """Height in points."""
        return self.bottom - self.top

    @property
    def center_x(self) -> float:
        return (self.left + self.right) / 2

    @property
    def center_y(self) -> float:
        return (self.top + self.bottom) / 2

    @property
    def center(self) -> tuple[float, float]:
        """(x, y) center of the box."""
        return (self.center_x, self.center_y)

    # ─────────────────────────────────────────────────────────────────────────
    # Derived Boxes
    # ─────────────────────────────────────────────────────────────────────────

    def translated(self, dx: float, dy: float) -> BoundingBox:
        """Box moved by (dx, dy)."""
        return BoundingBox(
            left=self.left + dx,
            top=self.top + dy,
            right=self.right + dx,
            bottom=self.bottom + dy,
        )

    def union(self, other: BoundingBox) -> BoundingBox:
        """Smallest box containing both boxes."""
        return BoundingBox(
            left=min(self.left, other.left),
            top=min(self.top, other.top),
            right=max(self.right, other.right),
            bottom=max(self.bottom, other.bottom),
        )

    def overlaps(self, other: BoundingBox) -> bool:
        """
        Check if this box overlaps another.

        Boxes that only touch along an edge do NOT overlap.
        """
        return not (
            self.right <= other.left
            or other.right <= self.left
            or self.bottom <= other.top
            or other.bottom <= self.top
        )

    def to_dimension(self, points_per_inch: float = POINTS_PER_INCH) -> Dimension:
        """
        Physical size of this box in inches.

        Raises:
            ValueError: If the box is degenerate (zero width or height)
        """
        return Dimension(
            width=self.width / points_per_inch,
            height=self.height / points_per_inch,
        )

    # ─────────────────────────────────────────────────────────────────────────
    # Serialization
    # ─────────────────────────────────────────────────────────────────────────

    def as_tuple(self) -> tuple[float, float, float, float]:
        """Get as (left, top, right, bottom) tuple."""
        return (self.left, self.top, self.right, self.bottom)

    def to_dict(self) -> dict:
        return {
            "left": self.left,
            "top": self.top,
            "right": self.right,
            "bottom": self.bottom,
        }

    @classmethod
    def from_dict(cls, data: dict) -> BoundingBox:
        return cls(
            left=data["left"],
            top=data["top"],
            right=data["right"],
            bottom=data["bottom"],
        )

    @classmethod
    def from_size(
        cls,
        width: float,
        height: float,
        left: float = 0.0,
        top: float = 0.0,
    ) -> BoundingBox:
        """Build a box from its top-left corner and size in points."""
        return cls(left=left, top=top, right=left + width, bottom=top + height)
