"""Tests for parameter models, settings and the materials catalogue."""

import pytest
from pydantic import ValidationError

from box_generator.config import (
    BoxParams,
    ErrorResponse,
    GenerateResponse,
    HandleStyle,
    TopStyle,
    WallFinish,
)
from box_generator.errors import (
    InvalidDimensionError,
    InvalidParamsError,
    UnknownMaterialError,
)
from box_generator.materials import (
    MATERIALS,
    SELECTABLE_MATERIALS,
    list_materials,
    resolve_material,
    rubber_material_name,
)
from box_generator.settings import Settings


class TestBoxParams:
    def test_defaults(self):
        p = BoxParams()
        assert (p.length, p.width, p.height, p.thickness) == (200.0, 200.0, 200.0, 2.0)
        assert p.step_height == 5.0
        assert p.step_inset == 5.0
        assert p.enable_straight_top is True
        assert p.enable_lid is True
        assert p.enable_lock is True
        assert p.enable_handles is False
        assert p.enable_perforation is False
        assert p.enable_wheels is False
        assert p.enable_ribs is False
        assert p.enable_rubber_lining is False
        assert p.material == "steel"
        assert p.rubber_color == "blue"

    def test_frozen(self):
        p = BoxParams()
        with pytest.raises(ValidationError):
            p.length = 300.0

    @pytest.mark.parametrize("field", ["length", "width", "height", "thickness"])
    def test_zero_dimension_raises(self, field):
        with pytest.raises(InvalidDimensionError, match=field):
            BoxParams(**{field: 0})

    @pytest.mark.parametrize("field", ["length", "width", "height", "thickness"])
    def test_negative_dimension_raises(self, field):
        with pytest.raises(InvalidDimensionError):
            BoxParams(**{field: -5})

    def test_dimension_error_is_invalid_params(self):
        with pytest.raises(InvalidParamsError):
            BoxParams(width=-1)

    def test_wrong_type_is_pydantic_error(self):
        with pytest.raises(ValidationError):
            BoxParams(length="long")

    def test_negative_step_raises(self):
        with pytest.raises(InvalidDimensionError):
            BoxParams(step_height=-1)

    def test_stepped_top_needs_room_for_fold(self):
        with pytest.raises(InvalidDimensionError, match="thickness"):
            BoxParams(enable_straight_top=False, step_inset=2.0)

    def test_straight_top_allows_small_steps(self):
        p = BoxParams(enable_straight_top=True, step_inset=2.0)
        assert p.step_inset == 2.0

    @pytest.mark.parametrize("material", ["steel", "mildSteel", "darkSteel", "aluminium"])
    def test_known_materials(self, material):
        assert BoxParams(material=material).material == material

    def test_unknown_material_raises(self):
        with pytest.raises(UnknownMaterialError, match="gold"):
            BoxParams(material="gold")

    def test_internal_material_not_selectable(self):
        with pytest.raises(UnknownMaterialError):
            BoxParams(material="rubber")

    def test_unknown_rubber_color_raises(self):
        with pytest.raises(InvalidParamsError):
            BoxParams(rubber_color="pink")

    def test_lining_height_must_exceed_thickness(self):
        with pytest.raises(InvalidDimensionError):
            BoxParams(enable_rubber_lining=True, rubber_thickness=3, rubber_height=3)

    def test_lining_sizes_ignored_when_disabled(self):
        p = BoxParams(enable_rubber_lining=False, rubber_thickness=3, rubber_height=3)
        assert p.rubber_height == 3

    def test_negative_overhang_raises(self):
        with pytest.raises(InvalidDimensionError):
            BoxParams(enable_rubber_lining=True, rubber_overhang=-1)

    def test_negative_epsilon_raises(self):
        with pytest.raises(InvalidDimensionError):
            BoxParams(alignment_epsilon=-0.1)


class TestVariantTags:
    def test_top_style(self):
        assert BoxParams().top_style is TopStyle.STRAIGHT
        assert BoxParams(enable_straight_top=False).top_style is TopStyle.STEPPED

    def test_wall_finish(self):
        assert BoxParams().wall_finish is WallFinish.SOLID
        assert BoxParams(enable_perforation=True).wall_finish is WallFinish.PERFORATED

    def test_handle_style(self):
        assert BoxParams().handle_style is HandleStyle.INTEGRATED
        assert BoxParams(enable_handles=True).handle_style is HandleStyle.BOLT_ON

    def test_lock_needs_lid(self):
        assert BoxParams().lock_enabled is True
        assert BoxParams(enable_lid=False).lock_enabled is False
        assert BoxParams(enable_lock=False).lock_enabled is False

    def test_straps_need_lid(self):
        assert BoxParams(enable_straps=True).straps_enabled is True
        assert BoxParams(enable_straps=True, enable_lid=False).straps_enabled is False


class TestResponseModels:
    def test_error_response(self):
        e = ErrorResponse(error_type="InvalidDimensionError", message="bad")
        assert e.model_dump()["detail"] is None

    def test_generate_response(self):
        g = GenerateResponse(
            solid_count=9,
            triangle_count=100,
            bounding_box=(0, 0, 0, 1, 1, 1),
            variants={"top_style": "straight"},
        )
        assert g.warnings == []


class TestSettings:
    def test_defaults(self, settings):
        assert settings.port == 8000
        assert settings.max_triangles == 500_000

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("BOX_MAX_TRIANGLES", "1234")
        assert Settings().max_triangles == 1234


class TestMaterials:
    def test_selectable(self):
        assert set(SELECTABLE_MATERIALS) == {"steel", "mildSteel", "darkSteel", "aluminium"}

    def test_list_materials(self):
        names = [m["name"] for m in list_materials()]
        assert names == list(SELECTABLE_MATERIALS)
        assert list_materials()[0]["color"] == "#FFFFFF"

    def test_resolve_internal(self):
        assert resolve_material("wheelRubber") is MATERIALS["wheelRubber"]

    def test_resolve_rubber_color(self):
        spec = resolve_material(rubber_material_name("blue"))
        assert spec.color == 0x0047AB
        assert spec.rgba == (0x00, 0x47, 0xAB, 255)

    def test_resolve_unknown(self):
        with pytest.raises(UnknownMaterialError):
            resolve_material("unobtainium")

    def test_resolve_unknown_rubber_color(self):
        with pytest.raises(UnknownMaterialError):
            resolve_material("rubber:pink")

    def test_rubber_material_name(self):
        assert rubber_material_name("black") == "rubber:black"
        with pytest.raises(InvalidParamsError):
            rubber_material_name("pink")
