"""Clipping half-spaces and the corner mitre plane set.

A ClippingHalfSpace keeps every point p with dot(normal, p) >= offset.
Half-spaces are carried by solids and only applied when a consumer
flattens the scene (see scene.Assembly.flatten); stored geometry is never
cut.

The mitre set works like a picture frame: the two diagonals of the box
outline, each taken with both orientations, give four vertical
half-spaces. Each top edge keeps the wedge between the two diagonals on
its own side, so neighbouring edges meet flush along the diagonal through
their shared corner.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from manifold3d import Manifold

from box_generator.errors import GeometryError

# Tolerance for point-in-half-space tests (mm)
CONTAINMENT_TOLERANCE = 1e-6

SIDE_NAMES = ("front", "left", "back", "right")


@dataclass(frozen=True)
class ClippingHalfSpace:
    """Plane (unit normal + offset) whose positive side is kept."""

    name: str
    normal: tuple[float, float, float]
    offset: float = 0.0

    def __post_init__(self) -> None:
        length = math.sqrt(sum(c * c for c in self.normal))
        if abs(length - 1.0) > 1e-9:
            raise GeometryError(
                f"Half-space '{self.name}' normal must be unit length, got {length:.6f}"
            )

    def signed_distance(self, point: tuple[float, ...]) -> float:
        """Distance of a point from the plane; positive on the kept side."""
        x, y, z = (tuple(point) + (0.0, 0.0, 0.0))[:3]
        nx, ny, nz = self.normal
        return nx * x + ny * y + nz * z - self.offset

    def contains(self, point: tuple[float, ...], tolerance: float = CONTAINMENT_TOLERANCE) -> bool:
        return self.signed_distance(point) >= -tolerance

    def trim(self, solid: Manifold) -> Manifold:
        """Cut away the part of a manifold outside this half-space."""
        return solid.trim_by_plane(self.normal, self.offset)

    def as_tuple(self, ndigits: int = 9) -> tuple:
        return (
            self.name,
            tuple(round(c, ndigits) for c in self.normal),
            round(self.offset, ndigits),
        )


@dataclass(frozen=True)
class MiterPlaneSet:
    """Four vertical half-spaces bisecting the corners of a length x width box.

    Lengths run along X, widths along Y, and the box is centred on the
    origin. `epsilon` moves every plane outward by that distance so
    neighbouring pieces overlap slightly instead of meeting exactly.
    """

    length: float
    width: float
    epsilon: float = 0.0

    def __post_init__(self) -> None:
        if self.length <= 0 or self.width <= 0:
            raise GeometryError(
                f"Mitre planes need a positive outline, got {self.length} x {self.width}"
            )

    @property
    def theta(self) -> float:
        """Diagonal angle atan2(width, length) in radians."""
        return math.atan2(self.width, self.length)

    @property
    def phi(self) -> float:
        """Complement of the diagonal angle."""
        return math.pi / 2 - self.theta

    @property
    def half_spaces(self) -> tuple[ClippingHalfSpace, ...]:
        """h1..h4.

        h1/h3 are the two sides of the diagonal through the back-left and
        front-right corners; h2/h4 the two sides of the other diagonal.
        """
        c, s = math.cos(self.phi), math.sin(self.phi)
        off = -self.epsilon
        return (
            ClippingHalfSpace("h1", (c, -s, 0.0), off),
            ClippingHalfSpace("h2", (c, s, 0.0), off),
            ClippingHalfSpace("h3", (-c, s, 0.0), off),
            ClippingHalfSpace("h4", (-c, -s, 0.0), off),
        )

    def for_side(self, side: str) -> tuple[ClippingHalfSpace, ClippingHalfSpace]:
        """The two half-spaces that bound the edge on the given side."""
        h1, h2, h3, h4 = self.half_spaces
        assignment = {
            "front": (h2, h3),
            "left": (h3, h4),
            "back": (h4, h1),
            "right": (h1, h2),
        }
        if side not in assignment:
            raise GeometryError(f"Unknown side '{side}'. Valid: {list(SIDE_NAMES)}")
        return assignment[side]

    def corner_vertices(self, side: str) -> tuple[tuple[float, float], tuple[float, float]]:
        """The two outline corners at the ends of a side."""
        hl, hw = self.length / 2, self.width / 2
        corners = {
            "front": ((hl, hw), (-hl, hw)),
            "left": ((-hl, hw), (-hl, -hw)),
            "back": ((-hl, -hw), (hl, -hw)),
            "right": ((hl, -hw), (hl, hw)),
        }
        if side not in corners:
            raise GeometryError(f"Unknown side '{side}'. Valid: {list(SIDE_NAMES)}")
        return corners[side]

    def containing(self, side: str) -> tuple[ClippingHalfSpace, ...]:
        """Half-spaces that contain both corner vertices of a side."""
        a, b = self.corner_vertices(side)
        return tuple(h for h in self.half_spaces if h.contains(a) and h.contains(b))
