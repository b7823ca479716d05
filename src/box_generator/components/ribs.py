"""Horizontal stiffening ribs.

Bands are evenly spaced up the wall. On handle-bearing sides a band that
crosses the handle's exclusion zone is split into two segments flanking
it. Rib ends that reach a corner are extended and trimmed by the mitre
planes so ribs on neighbouring walls meet along the corner diagonal.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from box_generator.components.handles import handle_feature
from box_generator.components.sides import Side
from box_generator.dimensions import RIB_INTERVAL, DerivedDimensions
from box_generator.geometry.clipping import MiterPlaneSet
from box_generator.geometry.extrusion import extrude
from box_generator.geometry.profiles import rib_profile
from box_generator.scene import Assembly, place

logger = logging.getLogger(__name__)

# Tolerance for deciding that a segment end sits on a corner
_CORNER_TOL = 1e-9


@dataclass(frozen=True)
class RibSegment:
    """One straight run of rib on one side.

    `start` is the tangent position of its first end (u, see sides.Side).
    """

    side: str
    z: float
    start: float
    width: float

    @property
    def end(self) -> float:
        return self.start + self.width


def rib_band_heights(total_height: float, interval: float = RIB_INTERVAL) -> list[float]:
    """Heights of the rib bands; empty when the wall is shorter than one interval."""
    count = math.floor(total_height / interval)
    if count == 0:
        return []
    spacing = total_height / (count + 1)
    return [spacing * i for i in range(1, count + 1)]


def split_band(band_width: float, exclusion_width: float) -> list[tuple[float, float]]:
    """(start, width) pairs of a centred band split around a centred zone.

    Both pieces are (band_width - exclusion_width) / 2 wide. No piece is
    returned when the zone is at least as wide as the band.
    """
    if exclusion_width >= band_width:
        return []
    piece = (band_width - exclusion_width) / 2
    return [(-band_width / 2, piece), (exclusion_width / 2, piece)]


def rib_layout(sides: tuple[Side, ...], dims: DerivedDimensions) -> list[RibSegment]:
    """Every rib segment on every side, bottom band first."""
    segments = []
    for z in rib_band_heights(dims.total_height, dims.rib_interval):
        for side in sides:
            zone = handle_feature(side.handle_style).exclusion_zone(dims)
            if zone is not None and zone.overlaps_band(z, dims.rib_width):
                pieces = split_band(side.span, zone.width)
            else:
                pieces = [(-side.span / 2, side.span)]
            segments += [RibSegment(side.name, z, start, width) for start, width in pieces]
    return segments


def rib_solids(
    segments: list[RibSegment],
    sides: tuple[Side, ...],
    dims: DerivedDimensions,
    miters: MiterPlaneSet,
    material: str,
) -> Assembly | None:
    """Extrude the layout into rib solids; None for an empty layout."""
    if not segments:
        return None

    by_name = {side.name: side for side in sides}
    profile = rib_profile(dims.rib_depth, dims.rib_width)
    ratio = max(dims.length / dims.width, dims.width / dims.length)
    margin = dims.rib_depth * ratio + dims.thickness

    nodes = []
    for i, seg in enumerate(segments):
        side = by_name[seg.side]
        half = side.span / 2
        start, end = seg.start, seg.end
        if abs(start + half) < _CORNER_TOL:
            start -= margin
        if abs(end - half) < _CORNER_TOL:
            end += margin
        rib = extrude(
            profile,
            end - start,
            material=material,
            name=f"rib_{seg.side}_{i}",
            trims=miters.for_side(seg.side),
        )
        x, y = side.point(start)
        nodes.append(place(rib, x, y, seg.z, side.rib_rotation))

    logger.debug("Placed %d rib segments", len(nodes))
    return Assembly("ribs", tuple(nodes))
