"""
Tests for row fitting and canvas distribution.
"""

import math

import pytest

from printgrid.core.errors import CapacityExceeded
from printgrid.core.models import BoundingBox
from printgrid.engine.config import EngineConfig
from printgrid.engine.row_fit import plan_row_fit


def _inches(width: float, height: float) -> BoundingBox:
    return BoundingBox.from_size(width * 72, height * 72)


class TestSmallQuantities:
    """Tests for single- and two-item runs."""

    def test_plan_row_fit_when_single_item_then_one_row_one_canvas(self):
        # Act
        result = plan_row_fit(_inches(20.5, 30), 1)

        # Assert
        assert result.rows_needed == 1
        assert result.canvases_needed == 1
        assert result.rows_per_canvas == 1
        assert result.fit_per_row >= 1

    def test_plan_row_fit_when_single_item_then_shorter_orientation_chosen(self):
        result = plan_row_fit(_inches(20.5, 30), 1)

        assert result.rotate_recommended
        assert result.row_extent == pytest.approx(20.5)
        assert result.total_height == pytest.approx(20.5)

    def test_plan_row_fit_when_two_and_one_per_row_then_single_stack(self):
        """Neither orientation fits two per row: both heights are a stack of two."""
        result = plan_row_fit(_inches(50, 40), 2)

        assert not result.rotate_recommended
        assert result.fit_per_row == 1
        assert result.rows_needed == 2
        assert result.total_height == pytest.approx(80.1)
        assert result.canvases_needed == 1
        assert result.rows_per_canvas == 2

    def test_plan_row_fit_when_two_and_rotated_fits_one_then_stacked_rotated(self):
        result = plan_row_fit(_inches(20, 45), 2)

        assert result.rotate_recommended
        assert result.fit_per_row == 1
        assert result.rows_needed == 2
        assert result.total_height == pytest.approx(40.1)


class TestRotation:
    """Tests for the rotation decision."""

    def test_plan_row_fit_when_unrotated_shorter_then_keeps_orientation(self):
        # Arrange: 3 rows of 10 in beat 2 rows of 20 in
        bounds = _inches(20, 10)

        # Act
        result = plan_row_fit(bounds, 8)

        # Assert
        assert not result.rotate_recommended
        assert result.fit_per_row == 3
        assert result.rows_needed == 3
        assert result.remainder == 2
        assert result.row_extent == pytest.approx(10)
        assert result.total_height == pytest.approx(30.2)

    @pytest.mark.parametrize("quantity", [1, 3, 4, 9, 25, 60, 200])
    def test_plan_row_fit_when_any_quantity_then_rows_are_ceiling(self, quantity):
        result = plan_row_fit(_inches(14, 9), quantity)

        assert result.fit_per_row >= 1
        assert result.rows_needed == math.ceil(quantity / result.fit_per_row)


class TestCanvasDistribution:
    """Tests for multi-canvas balancing."""

    def test_plan_row_fit_when_two_canvases_even_then_equal_split(self):
        # Act
        result = plan_row_fit(_inches(20, 10), 120, canvas_max_height=207)

        # Assert
        assert result.rotate_recommended
        assert result.rows_needed == 20
        assert result.canvases_needed == 2
        assert result.rows_per_canvas == 10
        assert result.canvas_row_counts() == (10, 10)

    def test_plan_row_fit_when_two_canvases_odd_then_balanced_within_one(self):
        """Rows are balanced, not first-canvas-maxed-then-overflow."""
        # Act
        result = plan_row_fit(_inches(20, 10), 114, canvas_max_height=207)

        # Assert
        counts = result.canvas_row_counts()
        assert result.canvases_needed == 2
        assert counts == (10, 9)
        assert max(counts) - min(counts) <= 1

    @pytest.mark.parametrize("quantity", [50, 133, 400, 999])
    def test_plan_row_fit_when_many_canvases_then_no_rows_lost(self, quantity):
        result = plan_row_fit(_inches(20.5, 30), quantity, canvas_max_height=100)

        counts = result.canvas_row_counts()
        assert sum(counts) == result.rows_needed
        assert max(counts) - min(counts) <= 1
        assert max(counts) <= result.rows_per_canvas
        assert len(counts) == result.canvases_needed

    def test_plan_row_fit_when_height_omitted_then_config_default(self):
        config = EngineConfig(canvas_max_height=50)

        result = plan_row_fit(_inches(20, 10), 120, config=config)

        assert result.canvases_needed == math.ceil(result.total_height / 50)


class TestErrors:
    """Tests for validation and capacity errors."""

    def test_plan_row_fit_when_quantity_zero_then_raises(self):
        with pytest.raises(ValueError, match="quantity must be >= 1"):
            plan_row_fit(_inches(10, 10), 0)

    def test_plan_row_fit_when_row_taller_than_canvas_then_capacity_exceeded(self):
        with pytest.raises(CapacityExceeded, match="exceeds canvas height"):
            plan_row_fit(_inches(20, 10), 1, canvas_max_height=5)

    def test_plan_row_fit_when_canvas_height_not_positive_then_capacity_exceeded(self):
        with pytest.raises(CapacityExceeded) as exc_info:
            plan_row_fit(_inches(20, 10), 1, canvas_max_height=0)

        assert exc_info.value.subject == 0

    def test_plan_row_fit_when_tile_has_no_width_then_capacity_exceeded(self):
        with pytest.raises(CapacityExceeded, match="no size"):
            plan_row_fit(BoundingBox(0, 0, 0, 100), 3)
