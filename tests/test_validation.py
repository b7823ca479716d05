"""Tests for structural and mesh validation."""

import pytest

from box_generator.assembly.box import base_plate
from box_generator.errors import ValidationError
from box_generator.scene import Assembly, Node
from box_generator.validation.checks import (
    check_structure,
    structure_report,
    validate_part,
    validate_scene,
)


class TestStructure:
    def test_default_box_report(self, default_result):
        report = structure_report(default_result.assembly)
        assert report == {
            "base_count": 1,
            "panel_count": 4,
            "edge_count": 4,
            "is_tree": True,
        }

    def test_missing_walls_and_edges(self, default_params, default_dims):
        root = Assembly("box", (Node(base_plate(default_params, default_dims)),))
        with pytest.raises(ValidationError, match="0 wall panels"):
            check_structure(root)

    def test_missing_base(self, default_result):
        nodes = tuple(n for n in default_result.assembly.nodes if n.child.name != "base")
        with pytest.raises(ValidationError, match="missing base"):
            check_structure(Assembly("box", nodes))


class TestValidateScene:
    def test_default_box_passes(self, default_result):
        report = validate_scene(default_result.assembly, default_result.parts, 500_000)
        assert report["pass"] is True
        assert report["triangle_count"] == default_result.triangle_count
        assert set(report["parts"]) == {p.path for p in default_result.parts}

    def test_budget_fails(self, default_result):
        report = validate_scene(default_result.assembly, default_result.parts, 10)
        assert report["triangle_count_ok"] is False
        assert report["pass"] is False

    def test_base_is_watertight(self, default_result):
        base = next(p for p in default_result.parts if p.path == "box/base")
        result = validate_part(base)
        assert result["is_watertight"]
        assert result["volume"] == pytest.approx(200 * 200 * 2)
        assert result["triangle_count"] == 12
