"""
Module: engine.personalize

Purpose:
    Per-unit data writing. Each placed unit receives one data record
    (one person): every text frame whose name is a key of the record gets
    that value. A frame that grows past its fit width is shrunk along its
    reading axis only.

Key Classes:
    - UnitDataWriter: Consumes records in placement order

Dependencies:
    - engine.transform: Clip-aware bounds

Used By:
    - engine.placer: Writes each unit as it is placed
    - engine.controller: Record count validation

Record format:
    {"NAME": "JONATHAN", "NUMBER": "23"}
    An L tile holds two units: its second pair is written first, then the
    first pair when records remain (the first pair is the half trimmed
    from an odd run).
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Any, Iterator, List, Mapping, Optional, Sequence

from printgrid.host.provider import CanvasHost

from .transform import bounds_of

logger = logging.getLogger(__name__)

# Growth allowed past the resized frame before text is squeezed
TEXT_FIT_SLACK = 1.15


class UnitDataWriter:
    """
    Writes data records into placed units, one record per unit.

    Attributes:
        host: Canvas host
        text_fit_ratio: Target width over source artwork width; scales the
            fit width the same way the artwork was scaled

    Example:
        >>> writer = UnitDataWriter(host, [{"NAME": "ANA"}, {"NAME": "LEE"}])
        >>> writer.write(tile)
        1
    """

    def __init__(
        self,
        host: CanvasHost,
        records: Sequence[Mapping[str, str]],
        text_fit_ratio: float = 1.0,
    ) -> None:
        if text_fit_ratio <= 0:
            raise ValueError(f"text_fit_ratio must be positive: {text_fit_ratio}")
        self.host = host
        self.text_fit_ratio = text_fit_ratio
        self._records = deque(records)
        self._written = 0

    @property
    def remaining(self) -> int:
        """Records not yet written."""
        return len(self._records)

    @property
    def written(self) -> int:
        """Records written so far."""
        return self._written

    def write(self, tile: Any, l_shape: bool = False) -> int:
        """
        Write the next record(s) into `tile`.

        Args:
            tile: Placed tile
            l_shape: Tile holds two units as two pair groups

        Returns:
            Number of records consumed (0 once records run out)
        """
        consumed = 0
        for unit in self._units_of(tile, l_shape):
            if not self._records:
                break
            record = self._records.popleft()
            frames = self.apply(unit, record)
            logger.debug(f"Wrote {frames} frame(s) into {self.host.name_of(tile)!r}")
            consumed += 1
        self._written += consumed
        return consumed

    def apply(self, unit: Any, record: Mapping[str, str]) -> int:
        """Fill the frames of one unit from `record`; returns frames written."""
        frames = 0
        for frame in _iter_named_leaves(self.host, unit, record):
            self._write_frame(frame, record[self.host.name_of(frame)])
            frames += 1
        return frames

    def _units_of(self, tile: Any, l_shape: bool) -> List[Any]:
        if not l_shape:
            return [tile]
        pairs = self.host.children_of(tile)
        return list(reversed(pairs))

    def _write_frame(self, frame: Any, text: str) -> None:
        before = bounds_of(self.host, frame)
        self.host.set_text(frame, text)
        after = bounds_of(self.host, frame)

        # The reading axis is the one the new contents grew along
        if after.width > before.width:
            grown, initial, wide = after.width, before.width, True
        elif after.height > before.height:
            grown, initial, wide = after.height, before.height, False
        else:
            return

        fit = initial * self.text_fit_ratio * TEXT_FIT_SLACK
        if grown <= fit:
            return
        scale = fit / grown * 100
        if wide:
            self.host.resize(frame, scale, 100)
        else:
            self.host.resize(frame, 100, scale)
        logger.debug(f"Squeezed {self.host.name_of(frame)!r} to {scale:.1f}% for {text!r}")


def _iter_named_leaves(
    host: CanvasHost,
    container: Any,
    names: Mapping[str, str],
) -> Iterator[Any]:
    """Yield every non-group shape below `container` whose name is a key of `names`."""
    for child in host.children_of(container):
        if host.is_group(child):
            yield from _iter_named_leaves(host, child, names)
        elif host.name_of(child) in names:
            yield child


def check_records(records: Optional[Sequence[Mapping[str, str]]], units: int) -> None:
    """
    Validate that `records` covers `units` placed units.

    Raises:
        ValueError: If fewer records than units are given
    """
    if records is not None and len(records) < units:
        raise ValueError(f"data has {len(records)} record(s) for {units} unit(s)")
