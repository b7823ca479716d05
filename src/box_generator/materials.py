"""Logical material catalogue.

Solids only carry a material *name*. Renderers and exporters resolve the
name to the hints below; nothing in the synthesizer depends on them.
"""

from __future__ import annotations

from dataclasses import dataclass

from box_generator.errors import InvalidParamsError, UnknownMaterialError


@dataclass(frozen=True)
class MaterialSpec:
    """Render hints for a logical material."""

    name: str
    color: int  # 0xRRGGBB
    metalness: float
    roughness: float
    selectable: bool = False

    @property
    def rgba(self) -> tuple[int, int, int, int]:
        """Colour as an 8-bit RGBA tuple."""
        return (
            (self.color >> 16) & 0xFF,
            (self.color >> 8) & 0xFF,
            self.color & 0xFF,
            255,
        )


MATERIALS: dict[str, MaterialSpec] = {
    "steel": MaterialSpec("steel", 0xFFFFFF, 0.9, 0.6, selectable=True),
    "mildSteel": MaterialSpec("mildSteel", 0x6E6E6E, 1.0, 0.4, selectable=True),
    "darkSteel": MaterialSpec("darkSteel", 0xEEEEEE, 0.85, 0.35, selectable=True),
    "aluminium": MaterialSpec("aluminium", 0xF5F5F5, 0.6, 0.3, selectable=True),
    "rubber": MaterialSpec("rubber", 0x222222, 0.0, 0.9),
    "wheelRubber": MaterialSpec("wheelRubber", 0x101010, 0.0, 0.9),
    "fibreglass": MaterialSpec("fibreglass", 0xE0E0E0, 0.2, 0.8),
}

SELECTABLE_MATERIALS: tuple[str, ...] = tuple(
    name for name, spec in MATERIALS.items() if spec.selectable
)

RUBBER_COLORS: dict[str, int] = {
    "black": 0x111111,
    "blue": 0x0047AB,  # cobalt
    "steel": 0xC0C0C0,
}

RUBBER_PREFIX = "rubber:"


def rubber_material_name(color: str) -> str:
    """Logical material name for a coloured rubber part (e.g. 'rubber:blue')."""
    if color not in RUBBER_COLORS:
        raise InvalidParamsError(
            f"rubber_color must be one of {sorted(RUBBER_COLORS)}, got '{color}'"
        )
    return f"{RUBBER_PREFIX}{color}"


def resolve_material(name: str) -> MaterialSpec:
    """Look up the render hints for a logical material name.

    Coloured rubber names ('rubber:<colour>') resolve to the rubber
    hints with the colour swapped in.
    """
    if name.startswith(RUBBER_PREFIX):
        color = name[len(RUBBER_PREFIX):]
        if color not in RUBBER_COLORS:
            raise UnknownMaterialError(f"Unknown rubber colour in material '{name}'")
        base = MATERIALS["rubber"]
        return MaterialSpec(name, RUBBER_COLORS[color], base.metalness, 0.95)
    if name not in MATERIALS:
        raise UnknownMaterialError(
            f"Unknown material '{name}'. Available: {', '.join(sorted(MATERIALS))}"
        )
    return MATERIALS[name]


def list_materials() -> list[dict]:
    """List selectable materials with their render hints."""
    return [
        {
            "name": spec.name,
            "color": f"#{spec.color:06X}",
            "metalness": spec.metalness,
            "roughness": spec.roughness,
        }
        for spec in MATERIALS.values()
        if spec.selectable
    ]
