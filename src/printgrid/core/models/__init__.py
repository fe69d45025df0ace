"""
Core Models Package

Immutable, validated value types shared by every engine module.

**DESIGN RATIONALE:**

All models in this package are frozen dataclasses. This ensures:
1. Planner results can be cached or recomputed freely
2. No accidental mutation while the placer loops over canvases
3. Geometry values can be compared directly in tests

Host shapes are NOT modelled here: they are opaque handles owned by
the host (see printgrid.host).
"""

from .enums import AlignPosition, GridMode, Orientation, Placement, Side
from .geometry import POINTS_PER_INCH, BoundingBox, Dimension
from .plans import LayoutPlan, RowFitResult
from .canvas import CanvasHandle, CanvasPlacement

__all__ = [
    "AlignPosition",
    "GridMode",
    "Orientation",
    "Placement",
    "Side",
    "POINTS_PER_INCH",
    "BoundingBox",
    "Dimension",
    "LayoutPlan",
    "RowFitResult",
    "CanvasHandle",
    "CanvasPlacement",
]
