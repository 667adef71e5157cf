"""Vector and 4x4 matrix helpers shared by the renderer and the simulation."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np

PI = math.pi
EPS = 1e-6
GRAVITY = 1.0

IDENTITY = np.identity(4)
IDENTITY.setflags(write=False)


def _vec3(v) -> np.ndarray:
    array = np.asarray(v, dtype=float)
    if array.shape != (3,):
        raise ValueError(f"expected a 3-vector, got shape {array.shape}")
    return array


def _normalized(v: np.ndarray) -> np.ndarray:
    return v / np.linalg.norm(v)


@dataclass
class Ray:
    """A half-line starting at ``origin`` and running along ``direction``."""

    origin: np.ndarray = field(default_factory=lambda: np.zeros(3))
    direction: np.ndarray = field(default_factory=lambda: np.zeros(3))

    def __post_init__(self) -> None:
        self.origin = _vec3(self.origin)
        self.direction = _vec3(self.direction)


def translation_matrix(v) -> np.ndarray:
    """Return the matrix that moves points by ``v``."""
    m = np.identity(4)
    m[:3, 3] = _vec3(v)
    return m


def direction_matrix(direction, up) -> np.ndarray:
    """Return the rotation taking x to ``direction`` and z to ``up``."""
    direction = _vec3(direction)
    up = _vec3(up)
    side = _normalized(np.cross(up, direction))
    m = np.identity(4)
    m[:3, 0] = direction
    m[:3, 1] = side
    m[:3, 2] = up
    return m


def normal_matrix(m) -> np.ndarray:
    """Return the matrix that transforms normals under ``m``.

    The upper 3x3 block is the inverse transpose of ``m``'s; the whole matrix,
    including its last diagonal element, is divided by the determinant.
    """
    rows = np.asarray(m, dtype=float)[:3, :3]
    r0, r1, r2 = rows
    cofactors = np.array([np.cross(r1, r2), np.cross(r2, r0), np.cross(r0, r1)])
    det = float(r0 @ cofactors[0])
    if det == 0.0:
        raise ValueError("matrix is singular and has no normal matrix")
    out = np.identity(4)
    out[:3, :3] = cofactors
    return out / det


def scaling_matrix(scaling) -> np.ndarray:
    """Return the matrix that scales each axis by the matching component."""
    m = np.identity(4)
    m[:3, :3] = np.diag(_vec3(scaling))
    return m


def transform_point(m, v) -> np.ndarray:
    """Apply ``m`` to a 3-vector (as an affine point) or a 4-vector."""
    m = np.asarray(m, dtype=float)
    v = np.asarray(v, dtype=float)
    if v.shape == (3,):
        return m[:3, :3] @ v + m[:3, 3]
    if v.shape == (4,):
        return m @ v
    raise ValueError(f"expected a 3- or 4-vector, got shape {v.shape}")


def res_to_screen(x, y, xres, yres) -> tuple[float, float]:
    """Map pixel coordinates to normalised device coordinates."""
    return 2.0 * x / xres - 1.0, -(2.0 * y / yres - 1.0)


def calc_normal(a, b, c) -> np.ndarray:
    """Return the unit normal of the triangle ``a``, ``b``, ``c``."""
    a, b, c = _vec3(a), _vec3(b), _vec3(c)
    return _normalized(np.cross(c - b, a - b))


def deg(angle) -> float:
    """Convert an angle in degrees to radians."""
    return PI * angle / 180.0