"""
Module: host

Purpose:
    Canvas host capability interface and the bundled in-memory host.

Key Classes:
    - CanvasHost: Abstract host interface consumed by the engine
    - MemoryCanvasHost: Headless in-memory implementation
    - MemoryShape: Shape node used by MemoryCanvasHost

Used By:
    - printgrid.engine: All host access goes through CanvasHost
"""

from .provider import CanvasHost
from .memory import MemoryCanvasHost, MemoryShape

__all__ = [
    "CanvasHost",
    "MemoryCanvasHost",
    "MemoryShape",
]
