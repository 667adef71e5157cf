"""Triangle meshes, models made of meshes, and a registry of model templates."""

from __future__ import annotations

import copy
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from polrts.mathutils import (
    direction_matrix,
    normal_matrix,
    scaling_matrix,
    transform_point,
    translation_matrix,
)

_UNIT_TOLERANCE = 0.01


def _array(v, size: int) -> np.ndarray:
    array = np.array(v, dtype=float)
    if array.shape != (size,):
        raise ValueError(f"expected a {size}-vector, got shape {array.shape}")
    return array


@dataclass(eq=False)
class Vertex:
    """A mesh vertex: position, normal and texture coordinate."""

    position: np.ndarray
    normal: np.ndarray = field(default_factory=lambda: np.zeros(3))
    texcoord: np.ndarray = field(default_factory=lambda: np.zeros(2))

    def __post_init__(self) -> None:
        self.position = _array(self.position, 3)
        self.normal = _array(self.normal, 3)
        self.texcoord = _array(self.texcoord, 2)

    def copy(self) -> Vertex:
        return Vertex(self.position.copy(), self.normal.copy(), self.texcoord.copy())


class Mesh:
    """Indexed triangles sharing one material, with a cached placement matrix."""

    def __init__(self, vertices: Iterable[Vertex], triangles: Iterable[int], material: Any) -> None:
        self.vertices: list[Vertex] = list(vertices)
        self.triangles: list[int] = [int(i) for i in triangles]
        self.material = material
        self.position = np.zeros(3)
        self.direction = np.array([1.0, 0.0, 0.0])
        self.up = np.array([0.0, 0.0, 1.0])
        self.size = np.ones(3)
        self._matrix: np.ndarray | None = None

    @property
    def n_triangles(self) -> int:
        """Number of triangle indices, as handed to the draw call."""
        return len(self.triangles)

    def set_direction(self, direction, up) -> None:
        self.direction = _array(direction, 3)
        self.up = _array(up, 3)
        self._matrix = None

    def set_position(self, position) -> None:
        self.position = _array(position, 3)
        self._matrix = None

    def set_size(self, size) -> None:
        self.size = _array(size, 3)
        self._matrix = None

    def transformation_matrix(self) -> np.ndarray:
        """Return translation, rotation and scaling combined, cached until changed."""
        if self._matrix is None:
            self._matrix = (
                translation_matrix(self.position)
                @ direction_matrix(self.direction, self.up)
                @ scaling_matrix(self.size)
            )
        return self._matrix.copy()

    def transform(self, matrix) -> None:
        """Bake ``matrix`` into the vertex positions and normals."""
        matrix = np.asarray(matrix, dtype=float)
        normals = normal_matrix(matrix)
        for vertex in self.vertices:
            vertex.position = transform_point(matrix, vertex.position)
            vertex.normal = transform_point(normals, vertex.normal)

    def copy(self) -> Mesh:
        """Return an independent mesh with the same geometry and a copied material.

        The copy starts at the default placement.
        """
        material = None if self.material is None else copy.copy(self.material)
        return Mesh((v.copy() for v in self.vertices), self.triangles, material)


class Model:
    """A group of meshes placed together in the world."""

    def __init__(self, meshes: Iterable[Mesh] = ()) -> None:
        self.meshes: list[Mesh] = list(meshes)
        self.position = np.zeros(3)
        self.direction = np.array([1.0, 0.0, 0.0])
        self.up = np.array([0.0, 0.0, 1.0])
        self.size = np.ones(3)
        self.cloned = False

    def add_mesh(self, mesh: Mesh) -> None:
        self.meshes.append(mesh)

    def set_position(self, position) -> None:
        self.position = _array(position, 3)
        for mesh in self.meshes:
            mesh.set_position(self.position)

    def set_direction(self, direction, up) -> None:
        """Orient the model; both vectors must be of unit length."""
        direction = _array(direction, 3)
        up = _array(up, 3)
        for name, v in (("direction", direction), ("up", up)):
            if abs(np.linalg.norm(v) - 1) >= _UNIT_TOLERANCE:
                raise ValueError(f"{name} must be a unit vector")
        self.direction = direction
        self.up = up
        for mesh in self.meshes:
            mesh.set_direction(direction, up)

    def set_size(self, size) -> None:
        self.size = _array(size, 3)
        for mesh in self.meshes:
            mesh.set_size(self.size)

    def transformation_matrix(self) -> np.ndarray:
        return (
            translation_matrix(self.position)
            @ direction_matrix(self.direction, self.up)
            @ scaling_matrix(self.size)
        )

    def transform(self, matrix) -> None:
        for mesh in self.meshes:
            mesh.transform(matrix)

    def copy(self) -> Model:
        """Return a model with copied meshes and the same placement."""
        clone = Model(mesh.copy() for mesh in self.meshes)
        clone.position = self.position.copy()
        clone.direction = self.direction.copy()
        clone.up = self.up.copy()
        clone.size = self.size.copy()
        clone.cloned = True
        return clone


class ModelManager:
    """Named model templates from which instances are copied."""

    def __init__(self) -> None:
        self._templates: dict[str, Model] = {}

    def has_model(self, name: str) -> bool:
        return name in self._templates

    def add_model(self, name: str, model: Model) -> Model:
        if name in self._templates:
            raise ValueError(f"model {name!r} is already registered")
        self._templates[name] = model
        return model

    def get_model(self, name: str) -> Model:
        try:
            return self._templates[name]
        except KeyError:
            raise KeyError(f"no model named {name!r}") from None

    def instantiate_model(self, name: str) -> Model:
        """Return a fresh copy of the template registered as ``name``."""
        return self.get_model(name).copy()