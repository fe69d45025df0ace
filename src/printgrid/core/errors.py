"""
Module: core.errors

Purpose:
    Error kinds raised by the layout engine. Every error names the
    offending shape or parameter in `subject` so callers can report a
    single terminal failure with its origin.

Key Classes:
    - LayoutEngineError: Base class
    - InvalidPosition: Unsupported alignment/move token
    - EmptyBounds: No geometry contributed to a bounding box
    - SizeLabelMissing: Size label placeholder absent
    - MissingRequiredShape: Front/back (or named sub-shape) not found
    - BoundsUnavailable: Host failed to report geometry
    - CapacityExceeded: Quantity cannot fit in any number of canvases

Used By:
    - engine.*: Raised, never caught internally
"""

from __future__ import annotations

from typing import Any, Optional


class LayoutEngineError(Exception):
    """Base error for layout engine failures."""

    def __init__(self, message: str, subject: Optional[Any] = None) -> None:
        super().__init__(message)
        self.subject = subject


class InvalidPosition(LayoutEngineError):
    """Unsupported alignment or move token."""
    pass


class EmptyBounds(LayoutEngineError):
    """Bounding-box computation found no contributing geometry."""
    pass


class SizeLabelMissing(LayoutEngineError):
    """Expected size label placeholder absent when stamping size."""
    pass


class MissingRequiredShape(LayoutEngineError):
    """Front/back or another named sub-shape not found where required."""
    pass


class BoundsUnavailable(LayoutEngineError):
    """Host collaborator failed to report geometry for a shape."""
    pass


class CapacityExceeded(LayoutEngineError):
    """Requested quantity cannot be satisfied within any number of canvases."""
    pass
