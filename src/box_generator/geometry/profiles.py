"""2D cross-section profiles.

Every builder here is pure: scalar inputs in, an immutable Profile out.
Profiles are later swept by the extrusion engine. Coordinates follow the
convention of the consumer: for edge and lining profiles X points into the
box from the outer wall face and Y points up; for panel silhouettes X runs
across the panel (centred) and Y runs up from the panel bottom.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import NamedTuple

from box_generator.errors import InvalidProfileError

Point = tuple[float, float]
Loop = tuple[Point, ...]

HEM_BEND_RADIUS = 2.0  # mm, inner radius of the hem U-turn
HEM_LENGTH = 6.0  # mm, how far the hem folds back down
BEZIER_SEGMENTS = 6  # per quarter turn
ARC_SEGMENTS = 12  # per half circle
HOLE_SEGMENTS = 12  # per perforation hole
MIN_RIB_SEGMENTS = 30


@dataclass(frozen=True)
class Profile:
    """Ordered 2D polyline, optionally with hole loops.

    Closed profiles (and every hole loop) repeat their first point at the
    end. Open profiles are closed by their chord when extruded.
    """

    name: str
    points: Loop
    closed: bool = True
    holes: tuple[Loop, ...] = ()

    def __post_init__(self) -> None:
        if self.closed and len(self.points) > 1 and self.points[0] != self.points[-1]:
            raise InvalidProfileError(
                f"Closed profile '{self.name}' must end where it starts"
            )
        for hole in self.holes:
            if len(hole) > 1 and hole[0] != hole[-1]:
                raise InvalidProfileError(
                    f"Hole loop of profile '{self.name}' must end where it starts"
                )

    def contour(self) -> list[Point]:
        """Outline vertices without the repeated closing point."""
        if self.closed and len(self.points) > 1:
            return list(self.points[:-1])
        return list(self.points)

    def contours(self) -> list[list[Point]]:
        """Outline followed by every hole, each without its closing point."""
        return [self.contour()] + [list(h[:-1]) for h in self.holes]

    def distinct_point_count(self) -> int:
        return len(set(self.contour()))

    @property
    def bounds(self) -> tuple[float, float, float, float]:
        """(min_x, min_y, max_x, max_y) of the outline."""
        xs = [p[0] for p in self.points]
        ys = [p[1] for p in self.points]
        return (min(xs), min(ys), max(xs), max(ys))

    def translated(self, dx: float = 0.0, dy: float = 0.0) -> Profile:
        def move(loop: Loop) -> Loop:
            return tuple((x + dx, y + dy) for x, y in loop)

        return Profile(
            self.name,
            move(self.points),
            self.closed,
            tuple(move(h) for h in self.holes),
        )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _check_positive(value: float, name: str) -> None:
    if value <= 0:
        raise InvalidProfileError(f"{name} must be positive, got {value}")


def _dedupe(points: list[Point]) -> list[Point]:
    """Drop consecutive duplicate points."""
    result: list[Point] = []
    for p in points:
        if not result or p != result[-1]:
            result.append(p)
    return result


def _close(points: list[Point]) -> Loop:
    pts = _dedupe(points)
    if pts[0] != pts[-1]:
        pts.append(pts[0])
    return tuple(pts)


def _quad_bezier(p0: Point, ctrl: Point, p1: Point, segments: int = BEZIER_SEGMENTS) -> list[Point]:
    """Sample a quadratic Bezier curve, excluding its start point."""
    pts = []
    for i in range(1, segments + 1):
        t = i / segments
        a, b, c = (1 - t) ** 2, 2 * (1 - t) * t, t ** 2
        pts.append((
            a * p0[0] + b * ctrl[0] + c * p1[0],
            a * p0[1] + b * ctrl[1] + c * p1[1],
        ))
    return pts


def _arc(cx: float, cy: float, radius: float, start_deg: float, end_deg: float, segments: int) -> list[Point]:
    """Sample a circular arc, both ends included."""
    pts = []
    for i in range(segments + 1):
        a = math.radians(start_deg + (end_deg - start_deg) * i / segments)
        pts.append((cx + radius * math.cos(a), cy + radius * math.sin(a)))
    return pts


def offset_polyline(points: list[Point], distance: float) -> list[Point]:
    """Offset an open polyline to the right of its direction of travel.

    Interior vertices use mitre joins, so parallel runs stay exactly
    `distance` apart.
    """
    if len(points) < 2:
        raise InvalidProfileError("Polyline offset needs at least 2 points")

    normals = []
    for (x0, y0), (x1, y1) in zip(points, points[1:]):
        length = math.hypot(x1 - x0, y1 - y0)
        if length == 0:
            raise InvalidProfileError("Polyline has a zero-length segment")
        normals.append(((y1 - y0) / length, -(x1 - x0) / length))

    result = [(points[0][0] + normals[0][0] * distance, points[0][1] + normals[0][1] * distance)]
    for i in range(1, len(points) - 1):
        n0, n1 = normals[i - 1], normals[i]
        mx, my = n0[0] + n1[0], n0[1] + n1[1]
        m_len = math.hypot(mx, my)
        if m_len < 1e-9:
            raise InvalidProfileError("Polyline doubles back on itself")
        mx, my = mx / m_len, my / m_len
        scale = distance / (mx * n1[0] + my * n1[1])
        result.append((points[i][0] + mx * scale, points[i][1] + my * scale))
    result.append((points[-1][0] + normals[-1][0] * distance, points[-1][1] + normals[-1][1] * distance))
    return result


def _hem_loop(top: float, thickness: float, radius: float, length: float) -> list[Point]:
    """U-turn folding outward (towards -X) from the sheet top at y=top.

    Starts after the outer-face point (0, top) and ends on the inner-face
    point (thickness, top).
    """
    t, r = thickness, radius
    pts = []
    pts += _quad_bezier((0.0, top), (0.0, top + r), (-r, top + r))
    pts += _quad_bezier((-r, top + r), (-2 * r, top + r), (-2 * r, top))
    pts += [(-2 * r, top - length), (-2 * r - t, top - length), (-2 * r - t, top)]
    pts += _quad_bezier((-2 * r - t, top), (-2 * r - t, top + r + t), (-r, top + r + t))
    pts += _quad_bezier((-r, top + r + t), (t, top + r + t), (t, top))
    return pts


def _sheet_profile(
    name: str,
    outer: list[Point],
    thickness: float,
    hem: bool,
    hem_radius: float,
    hem_length: float,
) -> Profile:
    inner = offset_polyline(outer, thickness)
    top = outer[-1][1]
    pts = list(outer)
    if hem:
        if hem_length >= top:
            raise InvalidProfileError(
                f"hem_length ({hem_length}) must be shorter than the profile ({top})"
            )
        pts += _hem_loop(top, thickness, hem_radius, hem_length)
    pts += list(reversed(inner))
    return Profile(name, _close(pts))


# ---------------------------------------------------------------------------
# Edge profiles
# ---------------------------------------------------------------------------

def stepped_edge_profile(
    thickness: float,
    step_inset: float,
    step_height: float,
    hem: bool = False,
    hem_radius: float = HEM_BEND_RADIUS,
    hem_length: float = HEM_LENGTH,
) -> Profile:
    """Zig-zag stepped top edge: two parallel folds one sheet thickness apart.

    The outer path rises 0 -> t -> s+t -> s+h -> 2s+h -> 2(s+h) while
    stepping in by s and back out; the inner path is its offset by t.
    """
    t, s, h = thickness, step_inset, step_height
    _check_positive(t, "thickness")
    _check_positive(s, "step_inset")
    _check_positive(h, "step_height")
    if s <= t or h <= t:
        raise InvalidProfileError(
            f"step_inset ({s}) and step_height ({h}) must exceed thickness ({t})"
        )
    outer = [
        (0.0, 0.0),
        (0.0, t),
        (s, s + t),
        (s, s + h),
        (0.0, 2 * s + h),
        (0.0, 2 * (s + h)),
    ]
    return _sheet_profile("stepped_edge", outer, t, hem, hem_radius, hem_length)


def straight_edge_profile(
    thickness: float,
    rim_height: float,
    hem: bool = False,
    hem_radius: float = HEM_BEND_RADIUS,
    hem_length: float = HEM_LENGTH,
) -> Profile:
    """Straight top edge: a vertical strip one sheet thick."""
    _check_positive(thickness, "thickness")
    _check_positive(rim_height, "rim_height")
    outer = [(0.0, 0.0), (0.0, rim_height)]
    return _sheet_profile("straight_edge", outer, thickness, hem, hem_radius, hem_length)


# ---------------------------------------------------------------------------
# Ribs, linings, straps
# ---------------------------------------------------------------------------

def rib_profile(depth: float, width: float, segments: int = MIN_RIB_SEGMENTS) -> Profile:
    """Half-sine bump: X is the outward bulge, Y runs across the rib.

    Open polyline; the chord along X=0 closes it.
    """
    _check_positive(depth, "rib depth")
    _check_positive(width, "rib width")
    if segments < MIN_RIB_SEGMENTS:
        raise InvalidProfileError(
            f"Rib profile needs at least {MIN_RIB_SEGMENTS} segments, got {segments}"
        )
    pts = []
    for i in range(segments + 1):
        t = i / segments
        bulge = round(math.sin(t * math.pi) * depth, 12)
        pts.append((bulge, (t - 0.5) * width))
    return Profile("rib", tuple(pts), closed=False)


def rubber_lining_profile(
    thickness: float,
    height: float,
    overhang: float,
    wall_thickness: float,
) -> Profile:
    """Rubber cap gripping the top edge of a wall.

    Symmetric about X=0, which is the mid-plane of the sheet it clips
    onto; Y=0 is the sheet's top edge. Two legs of the given thickness
    hang down either side, joined by a top bar that overhangs each leg by
    `overhang`.
    """
    _check_positive(thickness, "lining thickness")
    _check_positive(wall_thickness, "wall thickness")
    if height <= thickness:
        raise InvalidProfileError(
            f"lining height ({height}) must exceed its thickness ({thickness})"
        )
    if overhang < 0:
        raise InvalidProfileError(f"overhang must be non-negative, got {overhang}")
    a = wall_thickness / 2
    b = a + thickness
    c = b + overhang
    leg = height - thickness
    pts = [
        (-b, -leg), (-a, -leg), (-a, 0.0), (a, 0.0), (a, -leg), (b, -leg),
        (b, 0.0), (c, 0.0), (c, thickness), (-c, thickness), (-c, 0.0), (-b, 0.0),
    ]
    return Profile("rubber_lining", _close(pts))


def strap_profile(
    strap_width: float = 8.0,
    segment_length: float = 40.0,
    diagonal_x: float = 15.0,
    diagonal_y: float = 14.0,
) -> Profile:
    """Dog-leg lid support strap: a straight run then an angled kick."""
    _check_positive(strap_width, "strap_width")
    _check_positive(segment_length, "segment_length")
    pts = [
        (0.0, 0.0),
        (strap_width, 0.0),
        (strap_width, segment_length),
        (strap_width + diagonal_x, segment_length + diagonal_y),
        (diagonal_x, segment_length + diagonal_y),
        (0.0, segment_length),
    ]
    return Profile("strap", _close(pts))


# ---------------------------------------------------------------------------
# Rounded outlines
# ---------------------------------------------------------------------------

def rounded_rect_profile(width: float, height: float, radius: float, name: str = "rounded_rect") -> Profile:
    """Rectangle centred on the origin with quadratic-Bezier rounded corners."""
    _check_positive(width, "width")
    _check_positive(height, "height")
    if radius < 0:
        raise InvalidProfileError(f"radius must be non-negative, got {radius}")
    r = min(radius, width / 2, height / 2)
    x, y = -width / 2, -height / 2
    pts: list[Point] = [(x + r, y), (x + width - r, y)]
    pts += _quad_bezier((x + width - r, y), (x + width, y), (x + width, y + r))
    pts.append((x + width, y + height - r))
    pts += _quad_bezier((x + width, y + height - r), (x + width, y + height), (x + width - r, y + height))
    pts.append((x + r, y + height))
    pts += _quad_bezier((x + r, y + height), (x, y + height), (x, y + height - r))
    pts.append((x, y + r))
    pts += _quad_bezier((x, y + r), (x, y), (x + r, y))
    return Profile(name, _close(pts))


class LockPartSize(NamedTuple):
    width: float  # along the box length
    height: float
    depth: float  # how far it stands off the face it is mounted on


LOCK_FILLET_RADIUS = 2.0


def lock_catch_size(length: float, height: float, width: float) -> LockPartSize:
    """Box-mounted catch: 6% of length, 8% of height, 2.5% of width."""
    return LockPartSize(length * 0.06, height * 0.08, width * 0.025)


def lock_tab_size(length: float, height: float, width: float) -> LockPartSize:
    """Lid-mounted tab: 5% of length, 9% of height, about 2.33% of width."""
    return LockPartSize(length * 0.05, height * 0.09, width * 0.0233)


def lock_part_profile(size: LockPartSize, name: str, radius: float = LOCK_FILLET_RADIUS) -> Profile:
    return rounded_rect_profile(size.width, size.height, radius, name=name)


def pill_loop(width: float, height: float, cx: float = 0.0, cy: float = 0.0, segments: int = ARC_SEGMENTS) -> Loop:
    """Closed rounded-pill (stadium) loop: straight sides, semicircular ends."""
    _check_positive(width, "pill width")
    _check_positive(height, "pill height")
    if width < height:
        raise InvalidProfileError(
            f"pill width ({width}) must be at least its height ({height})"
        )
    r = height / 2
    half = width / 2 - r
    pts = _arc(cx + half, cy, r, -90.0, 90.0, segments)
    pts += _arc(cx - half, cy, r, 90.0, 270.0, segments)
    return _close(pts)


def pill_profile(width: float, height: float, name: str = "pill") -> Profile:
    return Profile(name, pill_loop(width, height))


def handle_rim_profile(cutout_width: float, cutout_height: float, rim_thickness: float) -> Profile:
    """Pill outline grown by the rim thickness, with the cutout as its hole."""
    _check_positive(rim_thickness, "rim_thickness")
    outer = pill_profile(cutout_width + 2 * rim_thickness, cutout_height + 2 * rim_thickness, name="handle_rim")
    hole = pill_loop(cutout_width, cutout_height)
    return Profile(outer.name, outer.points, holes=(hole,))


def circle_loop(cx: float, cy: float, radius: float, segments: int = HOLE_SEGMENTS) -> Loop:
    _check_positive(radius, "radius")
    pts = _arc(cx, cy, radius, 0.0, 360.0, segments)[:-1]
    return _close(pts)


# ---------------------------------------------------------------------------
# Rectangles and panel silhouettes
# ---------------------------------------------------------------------------

def rectangle_profile(width: float, height: float, name: str = "rectangle") -> Profile:
    """Rectangle with its lower-left corner at the origin."""
    _check_positive(width, "width")
    _check_positive(height, "height")
    pts = [(0.0, 0.0), (width, 0.0), (width, height), (0.0, height)]
    return Profile(name, _close(pts))


def panel_profile(width: float, height: float, holes: list[Loop] | None = None) -> Profile:
    """Wall silhouette centred across X, from Y=0 up to `height`, with cutouts."""
    _check_positive(width, "panel width")
    _check_positive(height, "panel height")
    half = width / 2
    pts = [(-half, 0.0), (half, 0.0), (half, height), (-half, height)]
    return Profile("panel", _close(pts), holes=tuple(holes or ()))
