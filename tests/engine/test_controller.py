"""
End-to-end tests for run_layout() on the in-memory host.
"""

import pytest

from printgrid.core.errors import BoundsUnavailable, MissingRequiredShape, SizeLabelMissing
from printgrid.core.models import Dimension, GridMode, Orientation
from printgrid.engine.controller import LayoutRequest, LayoutRunResult, run_layout
from printgrid.engine.transform import bounds_of


def _texts(host, shape):
    return [leaf.text for leaf in host.iter_leaves(shape) if leaf.kind == "text"]


class TestLayoutRequest:
    """Tests for LayoutRequest validation."""

    def test_request_when_quantity_zero_then_raises(self):
        with pytest.raises(ValueError, match="quantity must be >= 1"):
            LayoutRequest(GridMode.B, 0, Dimension(10, 10))

    def test_request_when_dimension_missing_then_raises(self):
        with pytest.raises(ValueError, match="dimension is required"):
            LayoutRequest(GridMode.FB, 3)

    def test_request_when_pant_without_dimension_then_accepted(self):
        request = LayoutRequest(GridMode.PANT, 3)

        assert request.dimension is None

    def test_request_when_fill_last_row_outside_b_then_raises(self):
        with pytest.raises(ValueError, match="fill_last_row needs mode B"):
            LayoutRequest(GridMode.FB, 3, Dimension(10, 15), fill_last_row=True)

    def test_request_when_start_index_negative_then_raises(self):
        with pytest.raises(ValueError, match="start_index must be non-negative"):
            LayoutRequest(GridMode.B, 3, Dimension(10, 15), start_index=-1)

    def test_request_when_data_short_then_raises(self):
        with pytest.raises(ValueError, match=r"data has 2 record\(s\) for 3 unit\(s\)"):
            LayoutRequest(GridMode.B, 3, Dimension(10, 15), data=[{"NAME": "A"}, {"NAME": "B"}])

    def test_request_when_data_list_then_stored_as_tuple(self):
        request = LayoutRequest(GridMode.B, 1, Dimension(10, 15), data=[{"NAME": "A"}])

        assert request.data == ({"NAME": "A"},)


class TestBackOnly:
    """Tests for mode B runs."""

    def test_run_when_reference_scenario_then_eight_backs_on_one_canvas(self, host, source, body_pair):
        # Arrange
        request = LayoutRequest(GridMode.B, 8, Dimension(20.5, 30), "L")

        # Act
        result = run_layout(host, source, request)

        # Assert
        assert isinstance(result, LayoutRunResult)
        assert result.plan.recommended_orientation is Orientation.HORIZONTAL
        assert result.total_placed == 8
        assert result.canvas_count == 1
        assert not result.row_fit.rotate_recommended
        assert result.row_fit.fit_per_row == 2
        assert result.row_fit.rows_needed == 4
        names = [host.name_of(s) for s in result.canvases[0].shapes]
        assert names == [f"B-{i:02d}" for i in range(1, 9)]

    def test_run_when_b_then_each_tile_holds_back_only(self, host, source, body_pair):
        result = run_layout(host, source, LayoutRequest(GridMode.B, 3, Dimension(20.5, 30), "L"))

        for tile in result.canvases[0].shapes:
            assert [host.name_of(c) for c in host.children_of(tile)] == ["BACK"]

    def test_run_when_finished_then_source_untouched(self, host, source, body_pair):
        # Arrange
        front, back = body_pair
        before = [bounds_of(host, front), bounds_of(host, back)]

        # Act
        run_layout(host, source, LayoutRequest(GridMode.B, 4, Dimension(20.5, 30), "XL"))

        # Assert
        assert host.children_of(source) == [front, back]
        assert [bounds_of(host, front), bounds_of(host, back)] == before
        assert front.rotation == 0
        assert _texts(host, front) == [""]

    def test_run_when_size_given_then_copies_stamped(self, host, source, body_pair):
        result = run_layout(host, source, LayoutRequest(GridMode.B, 2, Dimension(20.5, 30), "XL"))

        for tile in result.canvases[0].shapes:
            assert _texts(host, tile) == ["XL"]

    def test_run_when_front_canvas_requested_then_emitted_first(self, host, source, body_pair):
        # Arrange
        request = LayoutRequest(
            GridMode.B, 4, Dimension(20.5, 30), "L", include_front_canvas=True
        )

        # Act
        result = run_layout(host, source, request)

        # Assert
        front_canvas = result.front_canvas
        assert front_canvas is not None
        assert front_canvas.canvas.title == "01-F-L-4 PCS"
        assert result.canvases[0].canvas.title == "02-B-L"
        assert result.next_start_index == 2
        assert [host.name_of(s) for s in front_canvas.shapes] == ["F-01"]
        assert host.canvases.index(front_canvas.canvas.container) < host.canvases.index(
            result.canvases[0].canvas.container
        )
        box = bounds_of(host, front_canvas.shapes[0])
        assert box.center == pytest.approx(front_canvas.canvas.rect.center)

    def test_run_when_front_canvas_not_requested_then_none(self, host, source, body_pair):
        result = run_layout(host, source, LayoutRequest(GridMode.B, 4, Dimension(20.5, 30), "L"))

        assert result.front_canvas is None


class TestOtherModes:
    """Tests for FB, PANT and L-shape runs."""

    def test_run_when_fb_then_pairs_placed_horizontally(self, host, source, body_pair):
        result = run_layout(host, source, LayoutRequest(GridMode.FB, 4, Dimension(10, 15), "S"))

        assert result.plan.recommended_orientation is Orientation.HORIZONTAL
        assert result.total_placed == 4
        shapes = result.canvases[0].shapes
        assert [host.name_of(s) for s in shapes] == ["FB-01", "FB-02", "FB-03", "FB-04"]
        assert all(len(host.children_of(s)) == 2 for s in shapes)

    def test_run_when_pant_then_accessory_keeps_its_size(self, host, source, artwork_factory):
        # Arrange
        artwork_factory(source, "PANT", width=8, height=40, with_label=False)

        # Act
        result = run_layout(host, source, LayoutRequest(GridMode.PANT, 3))

        # Assert
        assert result.plan.dimension == Dimension(8, 40)
        assert result.total_placed == 3
        names = [host.name_of(s) for p in result.canvases for s in p.shapes]
        assert names == ["PANT-01", "PANT-02", "PANT-03"]

    def test_run_when_l_shape_odd_then_exact_quantity(self, host, source, body_pair):
        result = run_layout(host, source, LayoutRequest(GridMode.B, 5, Dimension(25, 35), "M"))

        assert result.plan.is_l_shape
        assert result.total_placed == 5
        assert result.canvas_count == 1


class TestFailures:
    """Tests for error propagation and cleanup."""

    def test_run_when_back_missing_then_raises_without_canvases(self, host, source, artwork_factory):
        # Arrange
        front = artwork_factory(source, "FRONT")
        canvases_before = len(host.canvases)

        # Act
        with pytest.raises(MissingRequiredShape):
            run_layout(host, source, LayoutRequest(GridMode.B, 4, Dimension(20.5, 30), "L"))

        # Assert
        assert len(host.canvases) == canvases_before
        assert host.children_of(source) == [front]

    def test_run_when_label_missing_then_copies_cleaned_up(self, host, source, artwork_factory):
        # Arrange
        front = artwork_factory(source, "FRONT")
        back = artwork_factory(source, "BACK", with_label=False)

        # Act
        with pytest.raises(SizeLabelMissing):
            run_layout(host, source, LayoutRequest(GridMode.FB, 4, Dimension(10, 15), "L"))

        # Assert
        assert host.children_of(source) == [front, back]


class TestJobOptions:
    """Tests for data records, last-row filling and canvas numbering."""

    @pytest.fixture
    def named_pair(self, host, body_pair, name_frame_factory):
        front, back = body_pair
        name_frame_factory(back, left=1000, top=200)
        return front, back

    def test_run_when_data_then_each_back_gets_its_record(self, host, source, named_pair):
        # Arrange
        data = ({"NAME": "ANA"}, {"NAME": "LEE"}, {"NAME": "SAM"})
        request = LayoutRequest(GridMode.B, 3, Dimension(20.5, 30), "L", data=data)

        # Act
        result = run_layout(host, source, request)

        # Assert
        written = [
            [leaf.text for leaf in host.iter_leaves(tile) if leaf.name == "NAME"]
            for placement in result.canvases
            for tile in placement.shapes
        ]
        assert written == [["ANA"], ["LEE"], ["SAM"]]
        _, back = named_pair
        assert [leaf.text for leaf in host.iter_leaves(back) if leaf.name == "NAME"] == ["NAME"]

    def test_run_when_fill_last_row_then_front_copy_in_free_slot(self, host, source, body_pair):
        # Arrange: two per row, seven backs
        request = LayoutRequest(GridMode.B, 7, Dimension(20.5, 30), "L", fill_last_row=True)

        # Act
        result = run_layout(host, source, request)

        # Assert
        assert result.total_placed == 7
        last = result.canvases[-1]
        assert [host.name_of(s) for s in last.fillers] == ["F-08"]
        assert _texts(host, last.fillers[0]) == ["L"]
        assert host.children_of(source) == list(body_pair)

    def test_run_when_start_index_then_titles_continue(self, host, source, body_pair):
        request = LayoutRequest(GridMode.B, 4, Dimension(20.5, 30), "XL", start_index=5)

        result = run_layout(host, source, request)

        assert [p.canvas.title for p in result.canvases] == ["06-B-XL"]
        assert result.next_start_index == 6


class TestLShapeCleanup:
    """Tests for cleanup when an L tile fails part way."""

    @pytest.fixture
    def host(self, flaky_host_factory):
        # Two artwork copies, then the two mirrored copies of the L
        return flaky_host_factory(fail_after_duplicates=4)

    def test_run_when_l_build_fails_then_source_has_only_artwork(self, host, source, body_pair):
        # Arrange
        front, back = body_pair

        # Act
        with pytest.raises(BoundsUnavailable):
            run_layout(host, source, LayoutRequest(GridMode.B, 3, Dimension(25, 35), "L"))

        # Assert
        assert host.duplicates == 4
        assert host.children_of(source) == [front, back]
        assert [host.name_of(s) for s in host.children_of(source)] == ["FRONT", "BACK"]
