"""
Module: engine.grouping

Purpose:
    Scoped, reversible grouping of shapes. A composite unit lets several
    shapes be transformed as one rectangle, then returns every member to
    its original container in its original order.

Key Classes:
    - CompositeUnitManager: group()/release() lifecycle for one unit

Key Functions:
    - composite_unit(): Context manager guaranteeing release

Dependencies:
    - host.provider: CanvasHost

Used By:
    - engine.transform: Multi-shape resize
    - engine.initiator: Tile construction
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterable, Iterator, List, Optional

from printgrid.core.models import Placement
from printgrid.host.provider import CanvasHost

logger = logging.getLogger(__name__)


class CompositeUnitManager:
    """
    Lifecycle of one composite unit: created -> active -> released.

    Members must share one container. `group()` wraps them in a new host
    group; `release()` moves them back and removes the group. Releasing is
    idempotent, so it is safe to call from any error path.

    Example:
        >>> with CompositeUnitManager(host, [front, back]) as unit:
        ...     rotate_about_center(host, unit, 90)
        >>> host.parent_of(front) is original_container
        True
    """

    def __init__(self, host: CanvasHost, members: Iterable[Any]) -> None:
        self.host = host
        self.members: List[Any] = list(members)
        if not self.members:
            raise ValueError("CompositeUnitManager requires at least one member")

        self.container = host.parent_of(self.members[0])
        for member in self.members[1:]:
            if host.parent_of(member) is not self.container:
                raise ValueError(f"Members must share one container: {member!r}")

        self._unit: Optional[Any] = None

    # ─────────────────────────────────────────────────────────────────────────
    # Properties
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def unit(self) -> Optional[Any]:
        """The active unit, or None before grouping / after release."""
        return self._unit

    @property
    def is_active(self) -> bool:
        return self._unit is not None

    # ─────────────────────────────────────────────────────────────────────────
    # Lifecycle
    # ─────────────────────────────────────────────────────────────────────────

    def group(self, anchor: Optional[Any] = None) -> Any:
        """
        Wrap the members in a new unit.

        Args:
            anchor: Sibling the unit is inserted after; appended when None

        Returns:
            The host group acting as the unit
        """
        if self._unit is not None:
            raise RuntimeError("Composite unit is already active")

        self._unit = self.host.create_group(self.container, anchor)
        try:
            for member in self.members:
                self.host.move_into_container(member, self._unit, placement=Placement.INSIDE)
        except Exception:
            self.release()
            raise

        logger.debug(f"Grouped {len(self.members)} shape(s) into {self._unit!r}")
        return self._unit

    def release(self, anchor: Optional[Any] = None) -> None:
        """
        Return members to the original container and remove the unit.

        Members are re-inserted in reverse, each immediately after the same
        reference, which restores their forward order. The reference is
        `anchor` when it lives in the original container, else the unit.
        No-op when the unit is not active.
        """
        unit = self._unit
        if unit is None:
            return

        if anchor is not None and self.host.parent_of(anchor) is self.container:
            reference = anchor
        elif self.host.parent_of(unit) is self.container:
            reference = unit
        else:
            reference = None

        for member in reversed(self.members):
            if self.host.parent_of(member) is not unit:
                continue
            if reference is None:
                self.host.move_into_container(member, self.container, placement=Placement.INSIDE)
            else:
                self.host.move_into_container(
                    member, self.container, anchor=reference, placement=Placement.AFTER
                )

        if reference is None:
            # Appended in reverse; restore forward order at the end.
            for member in self.members:
                if self.host.parent_of(member) is self.container:
                    self.host.move_into_container(member, self.container, placement=Placement.INSIDE)

        self._unit = None
        self.host.remove_shape(unit)
        logger.debug(f"Released {len(self.members)} shape(s) from {unit!r}")

    def detach(self) -> Any:
        """
        Hand the active unit over to the caller as a permanent group.

        The manager forgets the unit; later release() calls are no-ops.
        """
        if self._unit is None:
            raise RuntimeError("No active composite unit to detach")
        unit, self._unit = self._unit, None
        return unit

    def __enter__(self) -> Any:
        return self.group()

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.release()
        return False


@contextmanager
def composite_unit(
    host: CanvasHost,
    members: Iterable[Any],
    anchor: Optional[Any] = None,
) -> Iterator[Any]:
    """
    Group `members` for the duration of a with-block.

    Example:
        >>> with composite_unit(host, shapes) as unit:
        ...     host.resize(unit, 50, 50)
    """
    manager = CompositeUnitManager(host, members)
    unit = manager.group(anchor)
    try:
        yield unit
    finally:
        manager.release()
