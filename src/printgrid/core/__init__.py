"""
Core package: models and error kinds shared by the engine and hosts.
"""

from .errors import (
    LayoutEngineError,
    InvalidPosition,
    EmptyBounds,
    SizeLabelMissing,
    MissingRequiredShape,
    BoundsUnavailable,
    CapacityExceeded,
)

__all__ = [
    "LayoutEngineError",
    "InvalidPosition",
    "EmptyBounds",
    "SizeLabelMissing",
    "MissingRequiredShape",
    "BoundsUnavailable",
    "CapacityExceeded",
]
