"""Hinged lid, lock catches/tabs and lid support straps.

The lid body is modelled in its hinge frame: the back edge of the lid
lies on the X axis and runs towards +Y, the flanges stand on z=0 and the
top panel sits on the flanges. The pivot node puts that frame on the top
of the rim, just behind the back wall, and swings it open about X.
"""

from __future__ import annotations

from box_generator.components.edges import rim_envelope
from box_generator.config import BoxParams
from box_generator.dimensions import DerivedDimensions
from box_generator.geometry.extrusion import extrude
from box_generator.geometry.profiles import (
    lock_catch_size,
    lock_part_profile,
    lock_tab_size,
    rectangle_profile,
    strap_profile,
)
from box_generator.geometry.transforms import Transform
from box_generator.materials import rubber_material_name
from box_generator.scene import Assembly, Node, place

LID_OVERHANG = 2.0  # beyond whatever the rim reaches outward
LID_THICKNESS = 2.0
FLANGE_HEIGHT = 5.0
FLANGE_THICKNESS = 2.0
LID_OPEN_ANGLE = 45.0  # degrees about X, lifting the front edge

LOCK_X_FRACTION = 0.3

STRAP_THICKNESS = 2.0
STRAP_SIDE_GAP = 10.0  # from the inside of the side rims
STRAP_BACK_GAP = 3.0  # from the inside of the back rim
STRAP_DROP = 40.0  # foot of the strap below the rim top

# Local x -> X, y -> up, extrusion z -> -Y
_FACING_FRONT = (90.0, 0.0, 0.0)
# Local x -> +Y, y -> up, extrusion z -> +X
_FACING_SIDE = (90.0, 0.0, 90.0)


def lid_panel_size(dims: DerivedDimensions, outward: float = 0.0) -> tuple[float, float]:
    """(length, width) of the top panel, overhanging the rim on every side."""
    margin = outward + LID_OVERHANG
    return (dims.length + 2 * margin, dims.width + 2 * margin)


def lock_x_offsets(dims: DerivedDimensions) -> tuple[float, float]:
    return (dims.length * LOCK_X_FRACTION, -dims.length * LOCK_X_FRACTION)


def lid_body(params: BoxParams, dims: DerivedDimensions) -> Assembly:
    """Top panel, four flanges under its edges and (with the lock) two tabs."""
    tl, tw = lid_panel_size(dims, rim_envelope(params, dims).outward)
    material = params.material

    panel = extrude(rectangle_profile(tl, tw, "lid_panel"), LID_THICKNESS, material=material)
    nodes = [place(panel, -tl / 2, 0.0, FLANGE_HEIGHT)]

    long_flange = rectangle_profile(tl, FLANGE_HEIGHT, "flange")
    short_flange = rectangle_profile(tw, FLANGE_HEIGHT, "flange")
    flanges = [
        ("flange_front", long_flange, (-tl / 2, tw, 0.0), _FACING_FRONT),
        ("flange_back", long_flange, (-tl / 2, FLANGE_THICKNESS, 0.0), _FACING_FRONT),
        ("flange_left", short_flange, (-tl / 2, 0.0, 0.0), _FACING_SIDE),
        ("flange_right", short_flange, (tl / 2 - FLANGE_THICKNESS, 0.0, 0.0), _FACING_SIDE),
    ]
    for name, profile, (x, y, z), rotation in flanges:
        flange = extrude(profile, FLANGE_THICKNESS, material=material, name=name)
        nodes.append(place(flange, x, y, z, rotation))

    if params.lock_enabled:
        size = lock_tab_size(dims.length, dims.total_height, dims.width)
        profile = lock_part_profile(size, "lock_tab")
        for i, x in enumerate(lock_x_offsets(dims)):
            tab = extrude(profile, size.depth, material=material, name=f"lock_tab_{i}")
            # Hangs from the panel underside, proud of the front edge
            z = FLANGE_HEIGHT - size.height / 2
            nodes.append(place(tab, x, tw + size.depth, z, _FACING_FRONT))

    return Assembly("lid_body", tuple(nodes))


def lid_pivot_transform(params: BoxParams, dims: DerivedDimensions) -> Transform:
    """Hinge on the rim top behind the back wall, opened to its resting angle.

    The lid stays above the rim top and the rim stays below it.
    """
    envelope = rim_envelope(params, dims)
    return Transform.at(
        0.0,
        -dims.width / 2 - envelope.outward - LID_OVERHANG,
        envelope.top,
        rotation=(LID_OPEN_ANGLE, 0.0, 0.0),
    )


def compose_lid(params: BoxParams, dims: DerivedDimensions) -> Node:
    """The pivot assembly, already placed on the box."""
    pivot = Assembly("lid", (Node(lid_body(params, dims)),))
    return Node(pivot, lid_pivot_transform(params, dims))


def compose_lock_catches(params: BoxParams, dims: DerivedDimensions) -> Assembly:
    """Two catches on the front wall, just below the rim and anything hanging off it."""
    size = lock_catch_size(dims.length, dims.total_height, dims.width)
    profile = lock_part_profile(size, "lock_catch")
    face_y = dims.width / 2 + dims.alignment_epsilon
    z = min(dims.rim_top_z, rim_envelope(params, dims).skirt) - size.height
    nodes = []
    for i, x in enumerate(lock_x_offsets(dims)):
        catch = extrude(profile, size.depth, material=params.material, name=f"lock_catch_{i}")
        nodes.append(place(catch, x, face_y + size.depth, z, _FACING_FRONT))
    return Assembly("lock_catches", tuple(nodes))


def compose_straps(params: BoxParams, dims: DerivedDimensions) -> Assembly | None:
    """Rubber lid-support straps standing inside the two back corners.

    Each strap runs front-to-back against the inside of the rim and kicks
    up above it. None when the box is too small to hold them.
    """
    envelope = rim_envelope(params, dims)
    profile = strap_profile()
    _, _, reach, _ = profile.bounds
    foot_z = envelope.top - STRAP_DROP
    y = -dims.width / 2 + envelope.inward + STRAP_BACK_GAP
    left_x = -dims.length / 2 + envelope.inward + STRAP_SIDE_GAP
    right_x = dims.length / 2 - envelope.inward - STRAP_SIDE_GAP - STRAP_THICKNESS
    if foot_z < 0 or y + reach > dims.width / 2 - envelope.inward or left_x + STRAP_THICKNESS > right_x:
        return None

    material = rubber_material_name(params.rubber_color)
    nodes = []
    for name, x in (("strap_left", left_x), ("strap_right", right_x)):
        strap = extrude(profile, STRAP_THICKNESS, material=material, name=name)
        nodes.append(place(strap, x, y, foot_z, _FACING_SIDE))
    return Assembly("straps", tuple(nodes))
