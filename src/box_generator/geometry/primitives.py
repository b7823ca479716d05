"""Geometry primitives with dimension guards.

All primitives validate inputs and raise GeometryError on invalid dimensions.
"""

from manifold3d import Manifold

from box_generator.errors import GeometryError


def _check_positive(value: float, name: str) -> None:
    """Raise GeometryError if value is not positive."""
    if value <= 0:
        raise GeometryError(f"{name} must be positive, got {value}")


def box(width: float, depth: float, height: float) -> Manifold:
    """Create a box centered on X/Y with base at Z=0.

    Args:
        width: Size along X axis (mm).
        depth: Size along Y axis (mm).
        height: Size along Z axis (mm).
    """
    _check_positive(width, "width")
    _check_positive(depth, "depth")
    _check_positive(height, "height")
    return Manifold.cube([width, depth, height]).translate(
        [-width / 2, -depth / 2, 0]
    )


def cylinder(
    radius: float, height: float, segments: int | None = None
) -> Manifold:
    """Create a cylinder centered on X/Y with base at Z=0.

    Args:
        radius: Cylinder radius (mm).
        height: Cylinder height (mm).
        segments: Number of segments. None uses the global default.
    """
    _check_positive(radius, "radius")
    _check_positive(height, "height")
    if segments is not None:
        return Manifold.cylinder(height, radius, circular_segments=segments)
    return Manifold.cylinder(height, radius)


def axle(
    radius: float,
    length: float,
    axis: str = "x",
    segments: int | None = None,
) -> Manifold:
    """Create a cylinder centered on the origin, lying along the given axis.

    Used for tubes, hubs and wheels, which are modelled around their
    own centre rather than standing on Z=0.
    """
    solid = cylinder(radius, length, segments=segments).translate([0, 0, -length / 2])
    if axis == "x":
        return solid.rotate([0, 90, 0])
    if axis == "y":
        return solid.rotate([-90, 0, 0])
    if axis == "z":
        return solid
    raise GeometryError(f"axis must be 'x', 'y' or 'z', got {axis!r}")
