"""The four sides of the box and their local frames.

Each side is described by the angle of its outward normal in the XY
plane. Front is +Y (90), back -Y (270), left -X (180), right +X (0).
Positions along a side are measured by `u`, running along the side's
tangent, with u=0 at the middle of the wall.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from box_generator.config import BoxParams, HandleStyle
from box_generator.dimensions import DerivedDimensions

Vec2 = tuple[float, float]

# Outward normal angle (degrees) and whether the side carries a handle
SIDE_LAYOUT = {
    "front": (90.0, False),
    "back": (270.0, False),
    "left": (180.0, True),
    "right": (0.0, True),
}


@dataclass(frozen=True)
class Side:
    """One wall of the box."""

    name: str
    angle: float
    span: float  # wall length along the tangent
    offset: float  # distance of the outer face from the box centre
    handle_style: HandleStyle = HandleStyle.NONE

    @property
    def handle_bearing(self) -> bool:
        return self.handle_style is not HandleStyle.NONE

    @property
    def normal(self) -> Vec2:
        a = math.radians(self.angle)
        return (round(math.cos(a), 12), round(math.sin(a), 12))

    @property
    def tangent(self) -> Vec2:
        nx, ny = self.normal
        return (-ny, nx)

    def point(self, u: float, inset: float = 0.0) -> Vec2:
        """XY point at tangent position u, `inset` mm inside the outer face."""
        nx, ny = self.normal
        tx, ty = self.tangent
        d = self.offset - inset
        return (nx * d + tx * u, ny * d + ty * u)

    def corners(self) -> tuple[Vec2, Vec2]:
        """Outline corners at the start and end of the side."""
        half = self.span / 2
        return (self.point(-half), self.point(half))

    # Frame rotations (Euler degrees). All of them extrude along the tangent
    # except the panel frame, which extrudes outward.

    @property
    def panel_rotation(self) -> tuple[float, float, float]:
        """Local x -> tangent, y -> up, z -> outward."""
        return (90.0, 0.0, self.angle + 90.0)

    @property
    def edge_rotation(self) -> tuple[float, float, float]:
        """Local x -> inward, y -> up, z -> tangent."""
        return (90.0, 0.0, self.angle + 180.0)

    @property
    def rib_rotation(self) -> tuple[float, float, float]:
        """Local x -> outward, y -> down, z -> tangent."""
        return (-90.0, 0.0, self.angle)


def make_sides(
    params: BoxParams,
    dims: DerivedDimensions,
    handle_style: HandleStyle | None = None,
) -> tuple[Side, ...]:
    """Front, back, left and right walls, in that order.

    `handle_style` overrides the style picked by the params, e.g. when the
    builder has dropped a handle that does not fit.
    """
    if handle_style is None:
        handle_style = params.handle_style
    sides = []
    for name, (angle, handle_bearing) in SIDE_LAYOUT.items():
        along_x = name in ("front", "back")
        sides.append(Side(
            name=name,
            angle=angle,
            span=dims.length if along_x else dims.width,
            offset=dims.width / 2 if along_x else dims.length / 2,
            handle_style=handle_style if handle_bearing else HandleStyle.NONE,
        ))
    return tuple(sides)
