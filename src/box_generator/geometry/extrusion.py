"""Linear extrusion of 2D profiles into solids.

Profiles are swept along local +Z. Trimming half-spaces are attached to
the resulting Solid unchanged: they are a clipping contract for whoever
flattens or renders the scene, not a boolean cut.
"""

from __future__ import annotations

from manifold3d import CrossSection, FillRule, Manifold

from box_generator.errors import GeometryError, InvalidProfileError
from box_generator.geometry.clipping import ClippingHalfSpace
from box_generator.geometry.profiles import Profile
from box_generator.scene import Solid


def profile_cross_section(profile: Profile) -> CrossSection:
    """Build a CrossSection from a profile and its hole loops.

    Even-odd filling makes hole orientation irrelevant.
    """
    if profile.distinct_point_count() < 3:
        raise InvalidProfileError(
            f"Profile '{profile.name}' needs at least 3 distinct points, "
            f"got {profile.distinct_point_count()}"
        )
    return CrossSection(profile.contours(), FillRule.EvenOdd)


def extrude(
    profile: Profile,
    depth: float,
    *,
    material: str,
    name: str | None = None,
    trims: tuple[ClippingHalfSpace, ...] | list[ClippingHalfSpace] = (),
) -> Solid:
    """Sweep a profile `depth` mm along +Z and wrap it as a Solid.

    Raises InvalidProfileError for degenerate profiles or depths and
    GeometryError if the sweep produces nothing.
    """
    if depth <= 0:
        raise InvalidProfileError(
            f"Extrusion depth for '{profile.name}' must be positive, got {depth}"
        )
    cs = profile_cross_section(profile)
    result = Manifold.extrude(cs, depth)
    if result.is_empty():
        raise GeometryError(
            f"Extruding '{profile.name}' produced an empty manifold (degenerate polygon?)"
        )
    return Solid(
        name=name or profile.name,
        manifold=result,
        material=material,
        trims=tuple(trims),
        profile=profile,
    )
