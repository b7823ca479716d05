"""Tests for castor wheels."""

import pytest

from box_generator.components.wheel import (
    MOUNT_ROTATION,
    castor_wheel,
    compose_wheels,
    plate_top,
)
from box_generator.dimensions import resolve_config


class TestCastorWheel:
    def test_parts_and_materials(self, default_dims):
        castor = castor_wheel("castor", default_dims, "aluminium")
        assert castor.names() == [
            "core", "tire", "spokes", "hub", "prong_left", "prong_right", "plate",
        ]
        materials = {s.name: s.material for s in castor.solids()}
        assert materials["tire"] == "wheelRubber"
        assert materials["core"] == "fibreglass"
        assert materials["spokes"] == "fibreglass"
        assert materials["hub"] == "steel"
        assert materials["plate"] == "aluminium"

    def test_axle_along_x(self, default_dims):
        bb = castor_wheel("castor", default_dims, "steel")["tire"].manifold.bounding_box()
        assert bb[3] - bb[0] == pytest.approx(default_dims.wheel_thickness)
        assert bb[2] == pytest.approx(-21, abs=0.01)

    def test_plate_top(self, default_dims):
        assert plate_top(default_dims) == 26
        bb = castor_wheel("castor", default_dims, "steel")["plate"].manifold.bounding_box()
        assert bb[5] == pytest.approx(26)

    def test_spokes_inside_core(self, default_dims):
        castor = castor_wheel("castor", default_dims, "steel")
        spokes = castor["spokes"].manifold.bounding_box()
        assert max(abs(v) for v in (spokes[1], spokes[2], spokes[4], spokes[5])) <= 16 + 1e-6


class TestComposeWheels:
    def test_four_castors(self, default_params, default_dims):
        wheels = compose_wheels(default_params, default_dims)
        assert wheels.names() == ["castor_0", "castor_1", "castor_2", "castor_3"]

    def test_positions(self, default_params, default_dims):
        wheels = compose_wheels(default_params, default_dims)
        positions = [n.transform.position for n in wheels.nodes]
        assert positions[0] == (70.0, 70.0, -28.0)
        assert positions[3] == (-70.0, -70.0, -28.0)
        assert all(n.transform.rotation == (0.0, 0.0, MOUNT_ROTATION) for n in wheels.nodes)

    def test_plate_meets_base_underside(self, default_params, default_dims):
        boxes = {p.path: p.manifold.bounding_box() for p in compose_wheels(default_params, default_dims).flatten()}
        assert boxes["wheels/castor_0/plate"][5] == pytest.approx(-2, abs=1e-6)
        assert boxes["wheels/castor_0/tire"][2] == pytest.approx(-49, abs=0.01)

    def test_rectangular_box(self):
        params, dims = resolve_config({"length": 400, "width": 200, "enable_wheels": True})
        positions = [n.transform.position for n in compose_wheels(params, dims).nodes]
        assert positions[0][:2] == (170.0, 70.0)
