"""Tests for clipping half-spaces and mitre planes."""

import math

import pytest

from box_generator.errors import GeometryError
from box_generator.geometry.clipping import SIDE_NAMES, ClippingHalfSpace, MiterPlaneSet
from box_generator.geometry.primitives import box


class TestClippingHalfSpace:
    def test_non_unit_normal_raises(self):
        with pytest.raises(GeometryError):
            ClippingHalfSpace("bad", (1.0, 1.0, 0.0))

    def test_signed_distance(self):
        h = ClippingHalfSpace("x", (1.0, 0.0, 0.0), 2.0)
        assert h.signed_distance((5.0, 0.0, 0.0)) == 3.0
        assert h.signed_distance((1.0, 9.0)) == -1.0

    def test_contains_boundary(self):
        h = ClippingHalfSpace("x", (1.0, 0.0, 0.0), 2.0)
        assert h.contains((2.0, 0.0, 0.0))
        assert not h.contains((1.9, 0.0, 0.0))

    def test_trim_halves_centred_box(self):
        h = ClippingHalfSpace("diag", (math.sqrt(0.5), math.sqrt(0.5), 0.0))
        trimmed = h.trim(box(10, 10, 10))
        assert trimmed.volume() == pytest.approx(500.0, rel=1e-6)

    def test_trim_keeps_positive_side(self):
        h = ClippingHalfSpace("x", (1.0, 0.0, 0.0))
        trimmed = h.trim(box(10, 10, 10))
        assert trimmed.bounding_box()[0] == pytest.approx(0.0)
        assert trimmed.bounding_box()[3] == pytest.approx(5.0)

    def test_as_tuple_rounds(self):
        h = ClippingHalfSpace("x", (1.0, 0.0, 0.0), 0.1 + 0.2)
        assert h.as_tuple() == ("x", (1.0, 0.0, 0.0), 0.3)


class TestMiterPlaneSet:
    def test_square_theta(self):
        assert MiterPlaneSet(200, 200).theta == pytest.approx(math.pi / 4)
        assert MiterPlaneSet(200, 200).phi == pytest.approx(math.pi / 4)

    def test_rectangle_theta(self):
        assert MiterPlaneSet(300, 200).theta == pytest.approx(math.atan2(200, 300))

    def test_non_positive_outline_raises(self):
        with pytest.raises(GeometryError):
            MiterPlaneSet(0, 200)

    def test_four_unit_vertical_normals(self):
        planes = MiterPlaneSet(300, 200).half_spaces
        assert [h.name for h in planes] == ["h1", "h2", "h3", "h4"]
        for h in planes:
            assert h.normal[2] == 0.0

    def test_opposite_orientations(self):
        h1, h2, h3, h4 = MiterPlaneSet(300, 200).half_spaces
        assert h3.normal[:2] == pytest.approx((-h1.normal[0], -h1.normal[1]))
        assert h4.normal[:2] == pytest.approx((-h2.normal[0], -h2.normal[1]))

    @pytest.mark.parametrize("length,width", [(200, 200), (300, 200), (200, 450)])
    @pytest.mark.parametrize("side", SIDE_NAMES)
    def test_containing_matches_assignment(self, length, width, side):
        planes = MiterPlaneSet(length, width)
        assert planes.containing(side) == planes.for_side(side)

    @pytest.mark.parametrize("side", SIDE_NAMES)
    def test_side_keeps_its_own_midpoint(self, side):
        planes = MiterPlaneSet(300, 200)
        a, b = planes.corner_vertices(side)
        mid = ((a[0] + b[0]) / 2, (a[1] + b[1]) / 2)
        assert all(h.contains(mid) for h in planes.for_side(side))

    def test_adjacent_sides_share_one_plane(self):
        planes = MiterPlaneSet(300, 200)
        order = ["front", "left", "back", "right"]
        for a, b in zip(order, order[1:] + order[:1]):
            shared = set(planes.for_side(a)) & set(planes.for_side(b))
            assert len(shared) == 1

    def test_opposite_sides_share_none(self):
        planes = MiterPlaneSet(300, 200)
        assert not set(planes.for_side("front")) & set(planes.for_side("back"))
        assert not set(planes.for_side("left")) & set(planes.for_side("right"))

    def test_epsilon_moves_planes_outward(self):
        planes = MiterPlaneSet(200, 200, epsilon=0.01)
        for h in planes.half_spaces:
            assert h.offset == -0.01
            assert h.contains((0.0, 0.0), tolerance=0.0)

    def test_unknown_side_raises(self):
        with pytest.raises(GeometryError):
            MiterPlaneSet(200, 200).for_side("top")
        with pytest.raises(GeometryError):
            MiterPlaneSet(200, 200).corner_vertices("top")
