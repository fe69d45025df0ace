"""
Module: engine

Purpose:
    Grid and row packing layout engine.
    Plans orientation, builds the repeatable tile, fits rows across
    canvases and replicates the tile onto them.

Key Functions:
    - run_layout(): Main entry point for a complete run
    - plan_layout(): Orientation plan from a Dimension
    - plan_row_fit(): Row and canvas fit from realized tile bounds
    - build_initial_unit(): Tile construction
    - place_grid(): Lazy per-canvas replication
    - organize(): One run per size of an order list

Key Classes:
    - EngineConfig: Engine configuration
    - CompositeUnitManager: Scoped, reversible grouping
    - SizeChart: Size label lookup
    - UnitDataWriter: Per-unit data records
    - LayoutRequest / LayoutRunResult: Controller input and output

Dependencies:
    - printgrid.core: Models and errors
    - printgrid.host: CanvasHost

Used By:
    - Host integrations and scripts
"""

from .config import EngineConfig, DEFAULT_CONFIG
from .transform import (
    bounds_of,
    align,
    align_to_rect,
    move_adjacent,
    rotate_about_center,
    resize_to_target,
)
from .grouping import CompositeUnitManager, composite_unit
from .initiator import build_initial_unit, find_body_items, find_accessory_item, stamp_size_label
from .planner import plan_layout
from .row_fit import plan_row_fit
from .placer import place_grid
from .sizes import SizeChart
from .personalize import UnitDataWriter
from .controller import LayoutRequest, LayoutRunResult, run_layout
from .organizer import organize

__all__ = [
    # Config
    "EngineConfig",
    "DEFAULT_CONFIG",
    # Kernel
    "bounds_of",
    "align",
    "align_to_rect",
    "move_adjacent",
    "rotate_about_center",
    "resize_to_target",
    # Grouping
    "CompositeUnitManager",
    "composite_unit",
    # Tile construction
    "build_initial_unit",
    "find_body_items",
    "find_accessory_item",
    "stamp_size_label",
    # Planning
    "plan_layout",
    "plan_row_fit",
    # Placement
    "place_grid",
    # Sizes
    "SizeChart",
    # Personalization
    "UnitDataWriter",
    # Orchestration
    "LayoutRequest",
    "LayoutRunResult",
    "run_layout",
    "organize",
]
