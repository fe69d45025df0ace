"""
Tests for orientation planning.
"""

import math

import pytest

from printgrid.core.models import Dimension, GridMode, Orientation
from printgrid.engine.config import EngineConfig
from printgrid.engine.planner import items_per_row, plan_layout


class TestItemsPerRow:
    """Tests for items_per_row()."""

    def test_items_per_row_when_fits_then_floor(self):
        assert items_per_row(20.5, 0.1, 63.25) == 3
        assert items_per_row(30, 0.1, 63.25) == 2

    @pytest.mark.parametrize("axis,gap,max_size", [
        (100, 0.1, 63.25),
        (63.25, 0, 63.25 - 1e-9),
        (0.5, 0, 0),
        (10, 5, 1),
    ])
    def test_items_per_row_when_too_large_then_at_least_one(self, axis, gap, max_size):
        assert items_per_row(axis, gap, max_size) >= 1


class TestPlanLayout:
    """Tests for plan_layout()."""

    def test_plan_when_reference_scenario_then_horizontal_three_rows(self):
        """20.5x30, gap 0.1, max 63.25, quantity 8, mode B."""
        # Act
        plan = plan_layout(Dimension(20.5, 30), GridMode.B, 8, EngineConfig())

        # Assert
        assert plan.items_per_row[Orientation.VERTICAL] == 2
        assert plan.items_per_row[Orientation.HORIZONTAL] == 3
        assert plan.recommended_orientation is Orientation.HORIZONTAL
        assert plan.rows_needed[Orientation.HORIZONTAL] == 3
        assert plan.rows == 3
        assert plan.l_shape_feasible
        assert plan.sequence_label == "B"

    def test_plan_when_fb_then_height_doubled(self):
        plan = plan_layout(Dimension(10, 15), GridMode.FB, 4)

        assert plan.dimension == Dimension(10, 30)
        assert plan.items_per_row[Orientation.VERTICAL] == 2
        assert plan.items_per_row[Orientation.HORIZONTAL] == 6
        assert plan.recommended_orientation is Orientation.HORIZONTAL

    def test_plan_when_both_counts_poor_and_l_fits_then_l_shape(self):
        # Arrange: V = 1, H = 2, w + h + gap = 60.1 < 63.25
        dim = Dimension(25, 35)

        # Act
        plan = plan_layout(dim, GridMode.B, 5)

        # Assert
        assert plan.recommended_orientation is Orientation.LSHAPE
        assert plan.items_per_row[Orientation.LSHAPE] == 1
        assert plan.rows_needed[Orientation.LSHAPE] == 3
        assert plan.working_quantity == 6
        assert plan.tiles_needed == 3
        assert plan.sequence_step == 2
        assert plan.sequence_label == "FB-L"

    def test_plan_when_pant_then_never_l_shape(self):
        plan = plan_layout(Dimension(25, 35), GridMode.PANT, 5)

        assert not plan.l_shape_feasible
        assert plan.recommended_orientation is Orientation.HORIZONTAL

    def test_plan_when_l_pair_too_wide_then_not_feasible(self):
        plan = plan_layout(Dimension(30, 40), GridMode.B, 4)

        assert not plan.l_shape_feasible
        assert plan.recommended_orientation is Orientation.HORIZONTAL

    def test_plan_when_tie_then_vertical(self):
        plan = plan_layout(Dimension(10, 10), GridMode.B, 12)

        assert plan.items_per_row[Orientation.VERTICAL] == plan.items_per_row[Orientation.HORIZONTAL]
        assert plan.recommended_orientation is Orientation.VERTICAL

    def test_plan_when_quantity_zero_then_raises(self):
        with pytest.raises(ValueError, match="quantity must be >= 1"):
            plan_layout(Dimension(10, 10), GridMode.B, 0)

    def test_plan_when_mode_token_then_accepted(self):
        assert plan_layout(Dimension(10, 10), "FB", 1).mode is GridMode.FB

    @pytest.mark.parametrize("quantity", [1, 2, 3, 7, 8, 50, 101])
    @pytest.mark.parametrize("dim", [Dimension(20.5, 30), Dimension(5, 70), Dimension(12, 9)])
    def test_plan_when_any_quantity_then_rows_are_ceiling(self, quantity, dim):
        plan = plan_layout(dim, GridMode.B, quantity)

        for orientation in (Orientation.VERTICAL, Orientation.HORIZONTAL):
            per_row = plan.items_per_row[orientation]
            assert per_row >= 1
            assert plan.rows_needed[orientation] == math.ceil(quantity / per_row)

    def test_plan_when_custom_paper_then_counts_follow(self):
        config = EngineConfig(gap=0, paper_max_size=100)

        plan = plan_layout(Dimension(20, 25), GridMode.B, 10, config)

        assert plan.items_per_row[Orientation.HORIZONTAL] == 5
        assert plan.items_per_row[Orientation.VERTICAL] == 4
