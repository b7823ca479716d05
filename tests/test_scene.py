"""Tests for the scene graph."""

import pytest
from manifold3d import Manifold

from box_generator.errors import GeometryError
from box_generator.geometry.clipping import ClippingHalfSpace
from box_generator.geometry.primitives import box
from box_generator.geometry.transforms import Transform
from box_generator.scene import Assembly, Node, Solid, place


def _cube(name="cube", size=10):
    return Solid(name, box(size, size, size), "steel")


class TestSolid:
    def test_empty_raises(self):
        with pytest.raises(GeometryError):
            Solid("nothing", Manifold(), "steel")

    def test_signature_includes_material(self):
        a = Solid("a", box(1, 1, 1), "steel")
        b = Solid("a", box(1, 1, 1), "aluminium")
        assert a.signature() != b.signature()


class TestAssembly:
    def test_same_child_twice_raises(self):
        cube = _cube()
        with pytest.raises(GeometryError, match="exactly one parent"):
            Assembly("group", (Node(cube), Node(cube, Transform.at(20))))

    def test_duplicate_name_raises(self):
        with pytest.raises(GeometryError, match="two children"):
            Assembly("group", (Node(_cube()), Node(_cube())))

    def test_lookup(self):
        group = Assembly("group", (Node(_cube("a")), Node(_cube("b"))))
        assert group.names() == ["a", "b"]
        assert "a" in group
        assert "c" not in group
        assert group["b"].name == "b"
        assert group.find("c") is None
        with pytest.raises(KeyError):
            group.node("c")

    def test_node_count(self):
        inner = Assembly("inner", (Node(_cube("a")), Node(_cube("b"))))
        root = Assembly("root", (Node(inner), Node(_cube("c"))))
        assert root.node_count() == 4
        assert len(root) == 2

    def test_is_tree(self):
        inner = Assembly("inner", (Node(_cube("a")),))
        assert Assembly("root", (Node(inner),)).is_tree()

    def test_shared_solid_is_not_tree(self):
        cube = _cube("a")
        left = Assembly("left", (Node(cube),))
        right = Assembly("right", (Node(cube),))
        assert not Assembly("root", (Node(left), Node(right))).is_tree()

    def test_paths(self):
        inner = Assembly("inner", (Node(_cube("a")),))
        root = Assembly("root", (Node(inner), Node(_cube("b"))))
        assert [p for p, _, _ in root.iter_solids()] == ["root/inner/a", "root/b"]


class TestFlatten:
    def test_nested_transforms_compose(self):
        inner = Assembly("inner", (place(_cube(), x=5),))
        root = Assembly("root", (place(inner, z=100),))
        (part,) = root.flatten()
        bb = part.manifold.bounding_box()
        assert bb == pytest.approx((0, -5, 100, 10, 5, 110))

    def test_rotation_then_translation(self):
        solid = Solid("bar", box(20, 2, 2), "steel")
        root = Assembly("root", (place(solid, x=100, rotation=(0, 0, 90)),))
        bb = root.flatten()[0].manifold.bounding_box()
        assert bb[0] == pytest.approx(99)
        assert bb[4] == pytest.approx(10)

    def test_trims_applied_in_root_frame(self):
        h = ClippingHalfSpace("x", (1.0, 0.0, 0.0), 100.0)
        solid = Solid("cube", box(10, 10, 10), "steel", trims=(h,))
        root = Assembly("root", (place(solid, x=100),))
        (part,) = root.flatten()
        assert part.manifold.volume() == pytest.approx(500)
        assert solid.manifold.volume() == pytest.approx(1000)

    def test_fully_trimmed_part_dropped(self):
        h = ClippingHalfSpace("x", (1.0, 0.0, 0.0), 50.0)
        root = Assembly("root", (Node(Solid("cube", box(10, 10, 10), "steel", trims=(h,))),))
        assert root.flatten() == []

    def test_part_keeps_solid_and_path(self):
        cube = _cube()
        (part,) = Assembly("root", (Node(cube),)).flatten()
        assert part.solid is cube
        assert part.path == "root/cube"


class TestSignature:
    def test_equal_for_equal_trees(self):
        a = Assembly("root", (place(_cube(), x=1),))
        b = Assembly("root", (place(_cube(), x=1),))
        assert a.signature() == b.signature()

    def test_differs_on_transform(self):
        a = Assembly("root", (place(_cube(), x=1),))
        b = Assembly("root", (place(_cube(), x=2),))
        assert a.signature() != b.signature()
