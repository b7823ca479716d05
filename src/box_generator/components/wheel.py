"""Fixed castor wheels.

A castor is modelled around its axle, which runs along local X through
the origin. The fork prongs rise from the axle to a square mounting plate
whose top face is screwed to the underside of the base.
"""

from __future__ import annotations

from box_generator.config import BoxParams
from box_generator.dimensions import DerivedDimensions
from box_generator.geometry.booleans import union_all
from box_generator.geometry.primitives import axle, box
from box_generator.geometry.transforms import rotate_x, translate
from box_generator.scene import Assembly, Node, Solid, place

CORE_INSET = 5.0  # tire rubber thickness
SPOKE_COUNT = 6
SPOKE_WIDTH = 4.0
HUB_RADIUS = 8.0
HUB_OVERHANG = 1.0  # hub sticks out of the wheel by this on each side
PRONG_THICKNESS = 3.0
PRONG_WIDTH = 8.0
PLATE_SIZE = 40.0
PLATE_THICKNESS = 3.0
PLATE_CLEARANCE = 2.0  # between tire top and plate underside
MOUNT_ROTATION = 45.0


def plate_top(dims: DerivedDimensions) -> float:
    """Height of the mounting plate's top face above the axle."""
    return dims.wheel_diameter / 2 + PLATE_CLEARANCE + PLATE_THICKNESS


def castor_wheel(name: str, dims: DerivedDimensions, material: str) -> Assembly:
    """Core, tire, spokes, hub, two fork prongs and the top plate."""
    radius = dims.wheel_diameter / 2
    core_radius = radius - CORE_INSET
    thickness = dims.wheel_thickness

    spokes = []
    for i in range(SPOKE_COUNT):
        # Radial bar from the axle to the core rim, slightly proud of the core faces
        spoke = box(thickness + 1.0, SPOKE_WIDTH, core_radius)
        spokes.append(rotate_x(spoke, 360.0 * i / SPOKE_COUNT))

    prong_x = thickness / 2 + HUB_OVERHANG + PRONG_THICKNESS / 2
    prong_height = radius + PLATE_CLEARANCE
    parts = [
        Solid("core", axle(core_radius, thickness, axis="x"), "fibreglass"),
        Solid("tire", axle(radius, thickness, axis="x"), "wheelRubber"),
        Solid("spokes", union_all(spokes), "fibreglass"),
        Solid("hub", axle(HUB_RADIUS, thickness + 2 * HUB_OVERHANG, axis="x"), "steel"),
        Solid("prong_left", translate(box(PRONG_THICKNESS, PRONG_WIDTH, prong_height), x=-prong_x), "steel"),
        Solid("prong_right", translate(box(PRONG_THICKNESS, PRONG_WIDTH, prong_height), x=prong_x), "steel"),
        Solid("plate", translate(box(PLATE_SIZE, PLATE_SIZE, PLATE_THICKNESS), z=prong_height), material),
    ]
    return Assembly(name, tuple(Node(p) for p in parts))


def compose_wheels(params: BoxParams, dims: DerivedDimensions) -> Assembly:
    """Four castors under the base, inset from each edge and turned 45 degrees."""
    x = dims.length / 2 - dims.wheel_offset
    y = dims.width / 2 - dims.wheel_offset
    z = -dims.thickness - plate_top(dims)
    corners = [(x, y), (-x, y), (x, -y), (-x, -y)]
    nodes = [
        place(castor_wheel(f"castor_{i}", dims, params.material), cx, cy, z, (0.0, 0.0, MOUNT_ROTATION))
        for i, (cx, cy) in enumerate(corners)
    ]
    return Assembly("wheels", tuple(nodes))
