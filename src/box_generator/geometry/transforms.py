"""Rigid transforms for scene-graph nodes.

Rotations are Euler angles in degrees applied about X, then Y, then Z,
the same order Manifold.rotate uses, followed by the translation.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np
from manifold3d import Manifold

Vec3 = tuple[float, float, float]


def euler_matrix(rx: float, ry: float, rz: float) -> np.ndarray:
    """3x3 rotation matrix for X-then-Y-then-Z Euler angles in degrees."""
    ax, ay, az = (math.radians(a) for a in (rx, ry, rz))
    cx, sx = math.cos(ax), math.sin(ax)
    cy, sy = math.cos(ay), math.sin(ay)
    cz, sz = math.cos(az), math.sin(az)
    rot_x = np.array([[1, 0, 0], [0, cx, -sx], [0, sx, cx]])
    rot_y = np.array([[cy, 0, sy], [0, 1, 0], [-sy, 0, cy]])
    rot_z = np.array([[cz, -sz, 0], [sz, cz, 0], [0, 0, 1]])
    return rot_z @ rot_y @ rot_x


@dataclass(frozen=True)
class Transform:
    """Position plus Euler rotation (degrees) applied to a node."""

    position: Vec3 = (0.0, 0.0, 0.0)
    rotation: Vec3 = (0.0, 0.0, 0.0)

    @classmethod
    def at(cls, x: float = 0, y: float = 0, z: float = 0, rotation: Vec3 = (0.0, 0.0, 0.0)) -> Transform:
        """Shorthand for a transform at (x, y, z)."""
        return cls((float(x), float(y), float(z)), tuple(float(a) for a in rotation))

    def matrix(self) -> np.ndarray:
        """4x4 homogeneous matrix."""
        m = np.eye(4)
        m[:3, :3] = euler_matrix(*self.rotation)
        m[:3, 3] = self.position
        return m

    def as_tuple(self, ndigits: int = 6) -> tuple:
        """Rounded (position, rotation) pair, for structural comparisons."""
        return (
            tuple(round(v, ndigits) for v in self.position),
            tuple(round(v, ndigits) for v in self.rotation),
        )


def apply_matrix(solid: Manifold, matrix: np.ndarray) -> Manifold:
    """Apply a 4x4 homogeneous matrix to a manifold."""
    return solid.transform(np.ascontiguousarray(matrix[:3, :4], dtype=np.float64))


def translate(solid: Manifold, x: float = 0, y: float = 0, z: float = 0) -> Manifold:
    """Translate a manifold by (x, y, z)."""
    return solid.translate([x, y, z])


def rotate_x(solid: Manifold, degrees: float) -> Manifold:
    """Rotate a manifold around the X axis."""
    return solid.rotate([degrees, 0, 0])

