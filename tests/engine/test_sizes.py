"""
Tests for size chart lookup.
"""

import pytest

from printgrid.core.models import Dimension, GridMode
from printgrid.engine.controller import LayoutRequest
from printgrid.engine.sizes import SizeChart

CHART_DATA = {
    "JFT": {
        "MENS": {
            "M": {"width": 19, "height": 28},
            "L": {"width": 20.5, "height": 30},
        },
        "BABY": {
            "2T": {"width": 10, "height": 12},
            "L": {"width": 9, "height": 11},
        },
        "YOUTH": {"YL": {"width": 16, "height": 22}},
    },
    "HOOD": {"MENS": {"L": {"width": 18, "height": 26}}},
}


@pytest.fixture
def chart():
    return SizeChart.from_dict(CHART_DATA)


class TestSizeChart:
    """Tests for SizeChart lookups."""

    def test_dimension_for_when_mens_label_then_dimension(self, chart):
        assert chart.dimension_for("L") == Dimension(20.5, 30)

    def test_dimension_for_when_label_in_both_categories_then_mens_wins(self, chart):
        assert chart.dimension_for("L") != Dimension(9, 11)

    def test_dimension_for_when_baby_label_then_found(self, chart):
        assert chart.dimension_for("2T") == Dimension(10, 12)

    def test_dimension_for_when_other_category_then_searched_last(self, chart):
        assert chart.dimension_for("YL") == Dimension(16, 22)

    def test_dimension_for_when_container_given_then_used(self, chart):
        assert chart.dimension_for("L", container="HOOD") == Dimension(18, 26)

    def test_dimension_for_when_unknown_label_then_key_error(self, chart):
        with pytest.raises(KeyError, match="XXXL"):
            chart.dimension_for("XXXL")

    def test_dimension_for_when_unknown_container_then_key_error(self, chart):
        with pytest.raises(KeyError, match="Unknown size container"):
            chart.dimension_for("L", container="CAP")

    def test_dimension_for_when_increment_then_added_to_both_axes(self):
        chart = SizeChart.from_dict(CHART_DATA, size_increment=0.5)

        assert chart.dimension_for("M") == Dimension(19.5, 28.5)

    def test_init_when_negative_increment_then_raises(self):
        with pytest.raises(ValueError, match="size_increment"):
            SizeChart(size_increment=-1)

    def test_labels_when_called_then_chart_order(self, chart):
        assert chart.labels() == ["M", "L", "2T", "L", "YL"]
        assert chart.labels("CAP") == []

    def test_to_dict_when_round_trip_then_same_lookup(self, chart):
        restored = SizeChart.from_dict(chart.to_dict())

        assert restored.dimension_for("2T") == chart.dimension_for("2T")


class TestRequestForSize:
    """Tests for LayoutRequest.for_size()."""

    def test_for_size_when_known_label_then_dimension_and_label_set(self, chart):
        # Act
        request = LayoutRequest.for_size(chart, GridMode.B, 8, "L")

        # Assert
        assert request.dimension == Dimension(20.5, 30)
        assert request.size_label == "L"
        assert request.quantity == 8

    def test_for_size_when_unknown_label_then_key_error(self, chart):
        with pytest.raises(KeyError):
            LayoutRequest.for_size(chart, GridMode.FB, 2, "5XL")
