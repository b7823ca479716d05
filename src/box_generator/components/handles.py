"""Handle styles for the handle-bearing walls.

Each HandleStyle has one registered HandleFeature. The panel composer asks
the feature for cutouts in the wall silhouette, for extra solids that
belong to the panel, and for the exclusion zone that perforation and rib
layout must keep clear. Bolt-on handles also build external hardware.

All coordinates here are in the panel frame: x across the wall (centred),
y up from the floor, z outward from the outer face.
"""

from __future__ import annotations

import abc
import math
from dataclasses import dataclass
from enum import Enum

from box_generator.components.sides import Side
from box_generator.config import HandleStyle
from box_generator.dimensions import DerivedDimensions
from box_generator.geometry.extrusion import extrude
from box_generator.geometry.primitives import axle, box
from box_generator.geometry.profiles import Loop, handle_rim_profile, pill_profile
from box_generator.geometry.transforms import translate
from box_generator.scene import Assembly, Node, Solid, place

# Bolt heads (mm)
BOLT_RADIUS = 4.0
BOLT_SEGMENTS = 6


class ZoneShape(str, Enum):
    RECT = "rect"
    PILL = "pill"


@dataclass(frozen=True)
class ExclusionZone:
    """Region of a wall that holes and ribs must avoid."""

    center_x: float
    center_y: float
    width: float
    height: float
    shape: ZoneShape = ZoneShape.RECT

    def overlaps_band(self, y: float, band_width: float) -> bool:
        """True if a horizontal band centred at y, band_width tall, crosses the zone."""
        return abs(y - self.center_y) < (self.height + band_width) / 2

    def overlaps_circle(self, x: float, y: float, radius: float) -> bool:
        """True if a circle touches or overlaps the zone."""
        dx = abs(x - self.center_x)
        dy = abs(y - self.center_y)
        if self.shape == ZoneShape.PILL:
            r = self.height / 2
            core = max(self.width / 2 - r, 0.0)
            return math.hypot(max(dx - core, 0.0), dy) <= r + radius
        ex = max(dx - self.width / 2, 0.0)
        ey = max(dy - self.height / 2, 0.0)
        return math.hypot(ex, ey) <= radius


# Global handle registry
HANDLE_REGISTRY: dict[HandleStyle, HandleFeature] = {}


def register_handle(cls: type[HandleFeature]) -> type[HandleFeature]:
    """Decorator to register a handle feature in HANDLE_REGISTRY."""
    instance = cls()
    HANDLE_REGISTRY[instance.style] = instance
    return cls


def handle_feature(style: HandleStyle) -> HandleFeature:
    return HANDLE_REGISTRY[style]


class HandleFeature(abc.ABC):
    """Abstract base class for handle treatments."""

    @property
    @abc.abstractmethod
    def style(self) -> HandleStyle:
        """Variant tag this feature implements."""

    def exclusion_zone(self, dims: DerivedDimensions) -> ExclusionZone | None:
        return None

    def cutouts(self, dims: DerivedDimensions) -> list[Loop]:
        """Hole loops subtracted from the wall silhouette."""
        return []

    def panel_parts(self, dims: DerivedDimensions, material: str) -> list[Node]:
        """Extra solids placed in the panel frame."""
        return []

    def hardware(self, side: Side, dims: DerivedDimensions, material: str, rubber: str) -> Assembly | None:
        """External hardware mounted on the outer face, in the panel frame."""
        return None

    def fit_problem(self, dims: DerivedDimensions) -> str | None:
        """Why this handle cannot go on the handle panel, or None if it fits."""
        return None


@register_handle
class NoHandle(HandleFeature):
    """Plain wall."""

    @property
    def style(self) -> HandleStyle:
        return HandleStyle.NONE


@register_handle
class IntegratedHandle(HandleFeature):
    """Stamped pill-shaped opening with a reinforcing rim behind it."""

    @property
    def style(self) -> HandleStyle:
        return HandleStyle.INTEGRATED

    def exclusion_zone(self, dims: DerivedDimensions) -> ExclusionZone:
        # The rim footprint: the cutout grown by the rim on every side
        return ExclusionZone(
            0.0,
            dims.handle_center_z,
            dims.integrated_width + 2 * dims.rim_thickness,
            dims.integrated_height + 2 * dims.rim_thickness,
            shape=ZoneShape.PILL,
        )

    def cutouts(self, dims: DerivedDimensions) -> list[Loop]:
        cutout = pill_profile(dims.integrated_width, dims.integrated_height)
        return [cutout.translated(0.0, dims.handle_center_z).points]

    def panel_parts(self, dims: DerivedDimensions, material: str) -> list[Node]:
        profile = handle_rim_profile(
            dims.integrated_width, dims.integrated_height, dims.rim_thickness
        ).translated(0.0, dims.handle_center_z)
        rim = extrude(profile, dims.rim_depth, material=material, name="handle_rim")
        # Recessed behind the sheet, on the inside of the wall
        return [place(rim, z=-dims.thickness - dims.rim_depth)]

    def fit_problem(self, dims: DerivedDimensions) -> str | None:
        zone = self.exclusion_zone(dims)
        if zone.width >= dims.handle_panel_width:
            return f"integrated handle is {zone.width:.1f}mm wide, panel only {dims.handle_panel_width:g}mm"
        if zone.center_y - zone.height / 2 <= 0 or zone.center_y + zone.height / 2 >= dims.panel_height:
            return f"integrated handle is {zone.height:.1f}mm tall, panel only {dims.panel_height:g}mm"
        return None


@register_handle
class BoltOnHandle(HandleFeature):
    """Base plate, two vertical tubes, a rubber-sleeved grip and four bolts."""

    @property
    def style(self) -> HandleStyle:
        return HandleStyle.BOLT_ON

    def exclusion_zone(self, dims: DerivedDimensions) -> ExclusionZone:
        return ExclusionZone(
            0.0, dims.handle_center_z, dims.base_plate_width, dims.base_plate_height
        )

    def fit_problem(self, dims: DerivedDimensions) -> str | None:
        r = dims.handle_tube_radius
        if dims.handle_width - 4 * r <= 0:
            return f"grip {dims.handle_width:.1f}mm leaves no room for its sleeve between {r:.1f}mm tubes"
        cy = dims.handle_center_z
        top = max(
            cy + dims.base_plate_height / 2,
            cy + dims.handle_height / 2 + r + dims.rubber_grip_thickness,
        )
        if cy - dims.base_plate_height / 2 < 0 or top > dims.panel_height:
            return f"bolt-on handle does not fit a {dims.panel_height:g}mm tall panel"
        return None

    def hardware(self, side: Side, dims: DerivedDimensions, material: str, rubber: str) -> Assembly:
        cy = dims.handle_center_z
        pt = dims.base_plate_thickness
        r = dims.handle_tube_radius
        hw, hh = dims.handle_width, dims.handle_height
        # Tubes stand off the plate by the plate depth
        tube_z = pt + dims.base_plate_depth

        plate = Solid(
            "base_plate",
            translate(box(dims.base_plate_width, dims.base_plate_height, pt), y=cy),
            material,
        )
        parts = [plate]
        for label, x in (("left", -hw / 2), ("right", hw / 2)):
            tube = axle(r, hh, axis="y")
            parts.append(Solid(f"tube_{label}", translate(tube, x=x, y=cy, z=tube_z), material))

        grip_y = cy + hh / 2
        grip = axle(r, hw - 2 * r, axis="x")
        parts.append(Solid("grip", translate(grip, y=grip_y, z=tube_z), material))
        sleeve = axle(r + dims.rubber_grip_thickness, hw - 4 * r, axis="x")
        parts.append(Solid("grip_sleeve", translate(sleeve, y=grip_y, z=tube_z), rubber))

        bx = dims.base_plate_width / 3
        by = dims.base_plate_height / 3
        # Heads sit on top of the plate
        for i, (x, y) in enumerate([(-bx, by), (bx, by), (-bx, -by), (bx, -by)]):
            bolt = axle(BOLT_RADIUS, pt, axis="z", segments=BOLT_SEGMENTS)
            parts.append(Solid(f"bolt_{i}", translate(bolt, x=x, y=cy + y, z=1.5 * pt), material))

        return Assembly(f"handle_{side.name}", tuple(Node(p) for p in parts))
