"""Mitred top edges and the rubber lining that caps them.

Both are strips swept along each side in the edge frame (x inward, y up,
z along the side). Strips are lengthened past the corners far enough for
their outermost point to reach the corner diagonal, then carry that
side's two mitre half-spaces.
"""

from __future__ import annotations

from typing import NamedTuple

from box_generator.components.sides import Side
from box_generator.config import BoxParams, TopStyle
from box_generator.dimensions import DerivedDimensions
from box_generator.geometry.clipping import MiterPlaneSet
from box_generator.geometry.extrusion import extrude
from box_generator.geometry.profiles import (
    HEM_BEND_RADIUS,
    Profile,
    rubber_lining_profile,
    stepped_edge_profile,
    straight_edge_profile,
)
from box_generator.materials import rubber_material_name
from box_generator.scene import Assembly, Node, place


def _stepped(params: BoxParams, dims: DerivedDimensions) -> Profile:
    return stepped_edge_profile(
        dims.thickness, dims.step_inset, dims.step_height, hem=params.enable_hem
    )


def _straight(params: BoxParams, dims: DerivedDimensions) -> Profile:
    return straight_edge_profile(dims.thickness, dims.rim_height, hem=params.enable_hem)


EDGE_PROFILES = {
    TopStyle.STEPPED: _stepped,
    TopStyle.STRAIGHT: _straight,
}


def edge_profile(params: BoxParams, dims: DerivedDimensions) -> Profile:
    """Cross-section of the top edge for the configured top style."""
    return EDGE_PROFILES[params.top_style](params, dims)


def _corner_margin(side: Side, profile: Profile, inset: float, dims: DerivedDimensions) -> float:
    """How far past each corner a strip must run before trimming."""
    outward = max(-(profile.bounds[0] + inset), 0.0)
    if side.name in ("front", "back"):
        ratio = dims.length / dims.width
    else:
        ratio = dims.width / dims.length
    return outward * ratio + dims.thickness


def mitred_strip(
    side: Side,
    profile: Profile,
    *,
    inset: float,
    z: float,
    material: str,
    name: str,
    dims: DerivedDimensions,
    miters: MiterPlaneSet,
) -> Node:
    """Sweep a profile along a whole side and attach its mitre trims.

    `inset` moves the profile's x=0 line that far inside the outer face.
    """
    margin = _corner_margin(side, profile, inset, dims)
    solid = extrude(
        profile,
        side.span + 2 * margin,
        material=material,
        name=name,
        trims=miters.for_side(side.name),
    )
    x, y = side.point(-side.span / 2 - margin, inset=inset)
    return place(solid, x, y, z, side.edge_rotation)


def compose_edges(
    sides: tuple[Side, ...],
    params: BoxParams,
    dims: DerivedDimensions,
    miters: MiterPlaneSet,
) -> Assembly:
    """Four mitred edge solids, one per side, sitting on the wall tops."""
    profile = edge_profile(params, dims)
    z = dims.panel_height
    nodes = [
        mitred_strip(
            side, profile,
            inset=0.0, z=z, material=params.material, name=f"edge_{side.name}",
            dims=dims, miters=miters,
        )
        for side in sides
    ]
    return Assembly("edges", tuple(nodes))


def compose_lining(
    sides: tuple[Side, ...],
    params: BoxParams,
    dims: DerivedDimensions,
    miters: MiterPlaneSet,
) -> Assembly:
    """Rubber caps clipped over the top of every wall."""
    seat = lining_seat(params, dims)
    profile = lining_profile(dims, seat)
    material = rubber_material_name(params.rubber_color)
    nodes = [
        mitred_strip(
            side, profile,
            inset=seat.inset, z=seat.z, material=material,
            name=f"lining_{side.name}", dims=dims, miters=miters,
        )
        for side in sides
    ]
    return Assembly("rubber_lining", tuple(nodes))


class LiningSeat(NamedTuple):
    """What the lining clips onto, in the edge frame."""

    width: float  # gripped between the two legs
    inset: float  # centre of the gripped width, inside the outer face
    z: float  # top of the gripped width


def lining_seat(params: BoxParams, dims: DerivedDimensions) -> LiningSeat:
    """The sheet top, or the crown of the hem when the edge is hemmed."""
    t = dims.thickness
    if params.enable_hem:
        r = HEM_BEND_RADIUS
        # The crown spans x in [-2r - t, t] and peaks r + t above the sheet top
        return LiningSeat(2 * (r + t), -r, dims.lining_z + r + t)
    return LiningSeat(t, t / 2, dims.lining_z)


def lining_profile(dims: DerivedDimensions, seat: LiningSeat) -> Profile:
    return rubber_lining_profile(
        dims.lining_thickness, dims.lining_height, dims.lining_overhang, seat.width
    )


class RimEnvelope(NamedTuple):
    """How far the top edge and its lining reach around a wall top."""

    inward: float  # past the outer face, into the box
    outward: float  # out beyond the outer face
    top: float  # highest Z
    skirt: float  # lowest Z hanging outside the outer face


def rim_envelope(params: BoxParams, dims: DerivedDimensions) -> RimEnvelope:
    """Envelope of the edge profile plus, when enabled, the lining.

    Parts fitted around the rim (lid, catches, straps) stay outside it.
    """
    placed = [(edge_profile(params, dims), 0.0, dims.panel_height)]
    if params.enable_rubber_lining:
        seat = lining_seat(params, dims)
        placed.append((lining_profile(dims, seat), seat.inset, seat.z))
    points = [(inset + x, z + y) for profile, inset, z in placed for x, y in profile.points]
    outside = [z for x, z in points if x < 0]
    return RimEnvelope(
        inward=max(x for x, _ in points),
        outward=max(-min(x for x, _ in points), 0.0),
        top=max(z for _, z in points),
        skirt=min(outside, default=dims.rim_top_z),
    )
