"""Tests for rib layout and rib solids."""

import pytest

from box_generator.components.ribs import (
    RibSegment,
    rib_band_heights,
    rib_layout,
    rib_solids,
    split_band,
)
from box_generator.components.sides import make_sides
from box_generator.dimensions import resolve_config
from box_generator.geometry.clipping import MiterPlaneSet


def _layout(**kwargs):
    params, dims = resolve_config(kwargs)
    sides = make_sides(params, dims)
    return params, dims, sides, rib_layout(sides, dims)


class TestBandHeights:
    def test_one_band(self):
        assert rib_band_heights(220, 200) == [110]

    def test_short_wall_has_none(self):
        assert rib_band_heights(150, 200) == []

    def test_two_bands(self):
        assert rib_band_heights(420, 200) == pytest.approx([140, 280])

    def test_exact_multiple(self):
        assert rib_band_heights(400, 200) == pytest.approx([400 / 3, 800 / 3])


class TestSplitBand:
    def test_two_equal_pieces(self):
        assert split_band(200, 120) == [(-100, 40), (60, 40)]

    def test_zone_too_wide(self):
        assert split_band(100, 100) == []
        assert split_band(100, 140) == []


class TestRibSegment:
    def test_end(self):
        assert RibSegment("front", 110, -100, 200).end == 100


class TestRibLayout:
    def test_default_box_single_band(self):
        _, _, _, segments = _layout()
        assert [s.side for s in segments] == ["front", "back", "left", "right"]
        assert all(s.z == pytest.approx(110) for s in segments)
        assert all(s.width == 200 for s in segments)

    def test_bolt_on_splits_crossing_band(self):
        _, _, _, segments = _layout(height=400, enable_handles=True)
        assert len(segments) == 10
        upper = [s for s in segments if s.z == pytest.approx(280)]
        left = [s for s in upper if s.side == "left"]
        assert [s.start for s in left] == pytest.approx([-100, 60])
        assert [s.width for s in left] == pytest.approx([40, 40])

    def test_lower_band_not_split(self):
        _, _, _, segments = _layout(height=400, enable_handles=True)
        lower = [s for s in segments if s.z == pytest.approx(140)]
        assert len(lower) == 4

    def test_integrated_pieces(self):
        _, _, _, segments = _layout(height=400)
        pieces = [s for s in segments if s.side == "right" and s.z == pytest.approx(280)]
        assert [s.width for s in pieces] == pytest.approx([48, 48])

    def test_band_grazing_zone_is_split(self):
        # Band centre at 380 sits 19mm below the handle centre at 399, outside
        # the 35mm zone, but the 16mm band still reaches into it
        _, dims, _, segments = _layout(height=550)
        assert dims.handle_center_z == pytest.approx(399)
        pieces = [s for s in segments if s.side == "left" and s.z == pytest.approx(380)]
        assert [s.width for s in pieces] == pytest.approx([48, 48])

    def test_plain_sides_never_split(self):
        _, _, _, segments = _layout(height=400, enable_handles=True)
        front = [s for s in segments if s.side == "front"]
        assert [s.width for s in front] == [200, 200]

    def test_short_box_empty(self):
        _, _, _, segments = _layout(height=100)
        assert segments == []


class TestRibSolids:
    def test_none_for_empty_layout(self, default_params, default_dims):
        sides = make_sides(default_params, default_dims)
        miters = MiterPlaneSet(default_dims.length, default_dims.width)
        assert rib_solids([], sides, default_dims, miters, "steel") is None

    def test_named_and_trimmed(self):
        params, dims, sides, segments = _layout(height=400, enable_handles=True)
        miters = MiterPlaneSet(dims.length, dims.width)
        ribs = rib_solids(segments, sides, dims, miters, params.material)
        assert ribs.name == "ribs"
        assert len(ribs) == 10
        assert ribs.names()[0] == "rib_front_0"
        for solid in ribs.solids():
            assert len(solid.trims) == 2

    def test_corner_pieces_extended(self):
        params, dims, sides, segments = _layout()
        miters = MiterPlaneSet(dims.length, dims.width)
        ribs = rib_solids(segments, sides, dims, miters, params.material)
        margin = dims.rib_depth + dims.thickness
        depth = ribs["rib_front_0"].manifold.bounding_box()[5]
        assert depth == pytest.approx(200 + 2 * margin)

    def test_split_pieces_extended_at_corner_only(self):
        params, dims, sides, segments = _layout(height=400, enable_handles=True)
        miters = MiterPlaneSet(dims.length, dims.width)
        ribs = rib_solids(segments, sides, dims, miters, params.material)
        left_pieces = [s for p, s, _ in ribs.iter_solids() if s.name.startswith("rib_left")]
        lengths = sorted(s.manifold.bounding_box()[5] for s in left_pieces)
        margin = dims.rib_depth + dims.thickness
        assert lengths == pytest.approx([40 + margin, 40 + margin, 200 + 2 * margin])

    def test_ribs_stand_proud_of_walls(self):
        params, dims, sides, segments = _layout()
        miters = MiterPlaneSet(dims.length, dims.width)
        ribs = rib_solids(segments, sides, dims, miters, params.material)
        boxes = {p.path: p.manifold.bounding_box() for p in ribs.flatten()}
        front = boxes["ribs/rib_front_0"]
        assert front[1] == pytest.approx(100, abs=1e-6)
        assert front[4] == pytest.approx(104, abs=1e-6)
        assert front[2] == pytest.approx(102, abs=1e-6)
        assert front[5] == pytest.approx(118, abs=1e-6)
