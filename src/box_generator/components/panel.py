"""Wall panels: silhouette, perforation and handle treatment.

A panel is an Assembly in the panel frame of its side (x across the
wall, y up, z outward). The sheet occupies z in [-thickness, 0] so its
outer face lies on the box outline.
"""

from __future__ import annotations

import logging

from box_generator.components.handles import ExclusionZone, handle_feature
from box_generator.components.sides import Side
from box_generator.config import BoxParams, WallFinish
from box_generator.dimensions import DerivedDimensions
from box_generator.geometry.extrusion import extrude
from box_generator.geometry.profiles import Loop, circle_loop, panel_profile
from box_generator.scene import Assembly, Node, place

logger = logging.getLogger(__name__)

PERFORATION_PITCH = 12.0
PERFORATION_MARGIN = PERFORATION_PITCH
PERFORATION_RADIUS = 1.5


def perforation_pattern(
    width: float,
    height: float,
    zone: ExclusionZone | None = None,
    pitch: float = PERFORATION_PITCH,
    margin: float = PERFORATION_MARGIN,
    radius: float = PERFORATION_RADIUS,
) -> list[Loop]:
    """Grid of circular hole loops inside the panel margins.

    Rows are counted from the top of the panel. Holes touching the
    exclusion zone are skipped.
    """
    rows = int((height - 2 * margin) // pitch)
    cols = int((width - 2 * margin) // pitch)
    holes = []
    for i in range(max(rows, 0)):
        y = height - (margin + i * pitch + pitch / 2)
        for j in range(max(cols, 0)):
            x = -width / 2 + margin + j * pitch + pitch / 2
            if zone is not None and zone.overlaps_circle(x, y, radius):
                continue
            holes.append(circle_loop(x, y, radius))
    return holes


def _solid_finish(width: float, height: float, zone: ExclusionZone | None) -> list[Loop]:
    return []


WALL_FINISHES = {
    WallFinish.SOLID: _solid_finish,
    WallFinish.PERFORATED: perforation_pattern,
}


def compose_panel(side: Side, params: BoxParams, dims: DerivedDimensions) -> Assembly:
    """Build the panel assembly for one side."""
    feature = handle_feature(side.handle_style)
    zone = feature.exclusion_zone(dims)
    holes = WALL_FINISHES[params.wall_finish](side.span, dims.panel_height, zone)
    holes += feature.cutouts(dims)

    sheet = extrude(
        panel_profile(side.span, dims.panel_height, holes),
        dims.thickness,
        material=params.material,
        name="sheet",
    )
    nodes = [place(sheet, z=-dims.thickness)]
    nodes += feature.panel_parts(dims, params.material)

    logger.debug(
        "Panel %s: %s/%s, %d holes",
        side.name, params.wall_finish.value, side.handle_style.value, len(holes),
    )
    return Assembly(f"panel_{side.name}", tuple(nodes))


def compose_walls(sides: tuple[Side, ...], params: BoxParams, dims: DerivedDimensions) -> Assembly:
    """All four panels, each placed in its side's panel frame."""
    nodes = []
    for side in sides:
        x, y = side.point(0.0)
        nodes.append(place(compose_panel(side, params, dims), x, y, 0.0, side.panel_rotation))
    return Assembly("walls", tuple(nodes))


def compose_handles(sides: tuple[Side, ...], params: BoxParams, dims: DerivedDimensions) -> Assembly | None:
    """External handle hardware, or None when no side carries any."""
    nodes: list[Node] = []
    for side in sides:
        hardware = handle_feature(side.handle_style).hardware(side, dims, params.material, "rubber")
        if hardware is not None:
            x, y = side.point(0.0)
            nodes.append(place(hardware, x, y, 0.0, side.panel_rotation))
    if not nodes:
        return None
    return Assembly("handles", tuple(nodes))
