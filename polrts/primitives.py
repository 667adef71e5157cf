"""Vertex and index data for simple solids, and models built from them."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np

from polrts.mathutils import calc_normal
from polrts.mesh import Mesh, Model, Vertex

Geometry = tuple[list[Vertex], list[int]]


@dataclass
class _Lambertian:
    kd: np.ndarray = field(default_factory=lambda: np.array([0.0, 0.8, 0.1]))


def _normalized(v: np.ndarray) -> np.ndarray:
    return v / np.linalg.norm(v)


def _ring(radius: float, n: int) -> list[np.ndarray]:
    return [
        np.array([0.0, math.cos(i * 2 * math.pi / n) * radius, math.sin(i * 2 * math.pi / n) * radius])
        for i in range(n)
    ]


def build_cylinder(length: float, radius: float, n: int) -> Geometry:
    """Return a closed cylinder along x from 0 to 1 with ``n`` sides.

    The cylinder is one unit long; it is stretched with the model's size.
    """
    bottom = _ring(radius, n)
    top = [p + np.array([1.0, 0.0, 0.0]) for p in bottom]

    vertices = [Vertex(p, [0.0, p[1], p[2]]) for p in (*bottom, *top)]
    vertices += [Vertex(p, [-1.0, 0.0, 0.0]) for p in bottom]
    vertices += [Vertex(p, [1.0, 0.0, 0.0]) for p in top]

    indices: list[int] = []
    for i in range(n):
        j = (i + 1) % n
        indices += [i, j, n + i, n + i, j, n + j]
    for i in range(n):
        j = (i + 1) % n
        indices += [2 * n, 2 * n + i, 2 * n + j, 3 * n, 3 * n + j, 3 * n + i]
    return vertices, indices


def build_cone(length: float, radius: float, n: int) -> Geometry:
    """Return a cone with its base ring at x = 0 and its apex at x = ``length``."""
    ring = _ring(radius, n)
    apex = np.array([float(length), 0.0, 0.0])

    normals = []
    for p in ring:
        a = p - apex
        normals.append(_normalized(np.cross(np.cross(a, p), a)))

    vertices = [Vertex(p, normal) for p, normal in zip(ring, normals)]
    vertices += [Vertex(apex, normal) for normal in normals]
    vertices += [Vertex(p, [-1.0, 0.0, 0.0]) for p in ring]

    indices: list[int] = []
    for i in range(n):
        indices += [i, (i + 1) % n, n + i]
    for i in range(n):
        indices += [2 * n, 2 * n + i, 2 * n + (i + 1) % n]
    return vertices, indices


def _subdivide(a: int, b: int, c: int, radius: float,
               points: list[np.ndarray], indices: list[int], depth: int) -> None:
    depth -= 1
    if depth < 1:
        indices += [a, b, c]
        return
    d = len(points)
    e, f = d + 1, d + 2
    points.append(_normalized((points[a] + points[b]) / 2) * radius)
    points.append(_normalized((points[b] + points[c]) / 2) * radius)
    points.append(_normalized((points[c] + points[a]) / 2) * radius)
    _subdivide(e, b, d, radius, points, indices, depth)
    _subdivide(f, d, a, radius, points, indices, depth)
    _subdivide(e, f, c, radius, points, indices, depth)
    _subdivide(e, d, f, radius, points, indices, depth)


def build_sphere(radius: float, n: int) -> Geometry:
    """Return a sphere made by subdividing a tetrahedron ``n - 1`` times."""
    u = 2 * math.sqrt(2.0) / 3
    v = math.sqrt(2.0) / math.sqrt(3.0)
    w = math.sqrt(2.0) / 3
    t = 1 / 3
    corners = [(u, 0.0, t), (-w, v, t), (-w, -v, t), (0.0, 0.0, -1.0)]
    points = [np.array(c) * radius for c in corners]
    indices: list[int] = []

    for face in ((0, 1, 2), (0, 2, 3), (3, 2, 1), (0, 3, 1)):
        _subdivide(*face, radius, points, indices, n)

    vertices = [Vertex(p, _normalized(p)) for p in points]
    return vertices, indices


_BOX_FACES = (
    (0, 1, 2, 3),
    (1, 5, 6, 2),
    (4, 7, 6, 5),
    (0, 3, 7, 4),
    (2, 6, 7, 3),
    (0, 4, 5, 1),
)


def build_box(length: float, width: float, height: float) -> Geometry:
    """Return a box centred on the origin with flat-shaded faces."""
    hl, hw, hh = length / 2, width / 2, height / 2
    corners = [
        np.array(c)
        for c in (
            (-hl, -hw, -hh), (hl, -hw, -hh), (hl, -hw, hh), (-hl, -hw, hh),
            (-hl, hw, -hh), (hl, hw, -hh), (hl, hw, hh), (-hl, hw, hh),
        )
    ]
    vertices: list[Vertex] = []
    indices: list[int] = []
    for face in _BOX_FACES:
        j = len(vertices)
        normal = calc_normal(corners[face[0]], corners[face[1]], corners[face[2]])
        vertices += [Vertex(corners[k], normal) for k in face]
        indices += [j, j + 1, j + 2, j, j + 2, j + 3]
    return vertices, indices


def _model(geometry: Geometry) -> Model:
    vertices, indices = geometry
    return Model([Mesh(vertices, indices, _Lambertian())])


def create_cylinder_model(length: float, radius: float, n: int) -> Model:
    return _model(build_cylinder(length, radius, n))


def create_cone_model(length: float, radius: float, n: int) -> Model:
    return _model(build_cone(length, radius, n))


def create_sphere_model(radius: float, n: int) -> Model:
    return _model(build_sphere(radius, n))


def create_box_model(length: float, width: float, height: float) -> Model:
    return _model(build_box(length, width, height))