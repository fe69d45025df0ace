"""
Module: engine.sizes

Purpose:
    Size chart lookup. Maps a garment size label (e.g. "L", "2T") to the
    target print Dimension, per size container and category.

Key Classes:
    - SizeChart: In-memory chart built from a nested dictionary

Used By:
    - engine.controller: LayoutRequest.for_size()

Data Format:
    {
        "JFT": {
            "MENS": {"L": {"width": 20.5, "height": 30}, ...},
            "BABY": {"2T": {"width": 10, "height": 12}, ...}
        }
    }
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List

from printgrid.core.models import Dimension

logger = logging.getLogger(__name__)

DEFAULT_CONTAINER = "JFT"
CATEGORIES = ("MENS", "BABY")


@dataclass(frozen=True)
class SizeChart:
    """
    Size label to Dimension lookup (immutable).

    Attributes:
        containers: container -> category -> label -> Dimension
        size_increment: Inches added to both axes of every lookup

    Example:
        >>> chart = SizeChart.from_dict({"JFT": {"MENS": {"L": {"width": 20.5, "height": 30}}}})
        >>> chart.dimension_for("L")
        Dimension(width=20.5, height=30.0)
    """

    containers: Dict[str, Dict[str, Dict[str, Dimension]]] = field(default_factory=dict)
    size_increment: float = 0.0

    def __post_init__(self) -> None:
        """Validate chart on construction."""
        if self.size_increment < 0:
            raise ValueError(f"size_increment must be non-negative: {self.size_increment}")

    @classmethod
    def from_dict(cls, data: dict, size_increment: float = 0.0) -> SizeChart:
        """Build a chart from the nested dictionary format."""
        containers: Dict[str, Dict[str, Dict[str, Dimension]]] = {}
        for container, categories in data.items():
            containers[container] = {
                category: {
                    label: Dimension.from_dict(size)
                    for label, size in sizes.items()
                }
                for category, sizes in categories.items()
            }
        return cls(containers=containers, size_increment=size_increment)

    def to_dict(self) -> dict:
        """Serialize back to the nested dictionary format."""
        return {
            container: {
                category: {label: dim.to_dict() for label, dim in sizes.items()}
                for category, sizes in categories.items()
            }
            for container, categories in self.containers.items()
        }

    def labels(self, container: str = DEFAULT_CONTAINER) -> List[str]:
        """All size labels in a container, categories in chart order."""
        categories = self.containers.get(container, {})
        return [label for sizes in categories.values() for label in sizes]

    def dimension_for(self, label: str, container: str = DEFAULT_CONTAINER) -> Dimension:
        """
        Target dimension for a size label.

        Categories are searched in CATEGORIES order, then any others.

        Raises:
            KeyError: If the container or label is unknown
        """
        if container not in self.containers:
            raise KeyError(f"Unknown size container: {container}")

        categories = self.containers[container]
        ordered = [c for c in CATEGORIES if c in categories]
        ordered += [c for c in categories if c not in CATEGORIES]

        for category in ordered:
            dim = categories[category].get(label)
            if dim is not None:
                if self.size_increment:
                    dim = Dimension(
                        width=dim.width + self.size_increment,
                        height=dim.height + self.size_increment,
                    )
                logger.debug(f"Size {label!r} ({container}/{category}): {dim.width}x{dim.height} in")
                return dim

        raise KeyError(f"Unknown size label: {label}")
