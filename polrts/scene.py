"""The world: entities with ids, point lights and particles, with deferred removal."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any

import numpy as np


def _vec(v) -> np.ndarray:
    array = np.array(v, dtype=float)
    if array.shape != (3,):
        raise ValueError(f"expected a 3-vector, got shape {array.shape}")
    return array


@dataclass(eq=False)
class PointLight:
    """A moving point light created at time ``start``."""

    start: float
    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    velocity: np.ndarray = field(default_factory=lambda: np.zeros(3))
    color: np.ndarray = field(default_factory=lambda: np.zeros(3))

    def __post_init__(self) -> None:
        self.position = _vec(self.position)
        self.velocity = _vec(self.velocity)
        self.color = _vec(self.color)


class Scene:
    """Owns entities, lights and particles.

    Removals are deferred: removed entities stay in ``entities`` until
    ``update_entities`` runs, and an entity borrowed by another thread (for
    instance the path-finding worker) is only released once it is returned.
    """

    def __init__(self, camera: Any = None, terrain: Any = None) -> None:
        self.camera = camera
        self.terrain = terrain
        self._entities: list[Any] = []
        self._dead: dict[int, Any] = {}
        self._entity_map: dict[int, Any] = {}
        self._borrowed: dict[int, int] = {}
        self._next_id = 1
        self._borrow_lock = threading.Lock()
        self._lights: list[PointLight] = []
        self._dead_lights: set[int] = set()
        self._particles: list[Any] = []

    @property
    def entities(self) -> tuple:
        return tuple(self._entities)

    @property
    def lights(self) -> tuple:
        return tuple(self._lights)

    @property
    def particles(self) -> tuple:
        return tuple(self._particles)

    def add_entity(self, entity: Any) -> int:
        """Add ``entity``, give it the next id and point it at this scene."""
        entity_id = self._next_id
        self._next_id += 1
        self._entities.append(entity)
        entity.id = entity_id
        self._entity_map[entity_id] = entity
        entity.scene = self
        return entity_id

    def remove_entity(self, entity: Any) -> None:
        """Mark ``entity`` for removal; it can no longer be looked up by id."""
        self._dead[id(entity)] = entity
        self._entity_map.pop(getattr(entity, "id", None), None)

    def update_entities(self) -> list:
        """Drop removed entities; return those released that nobody borrows."""
        with self._borrow_lock:
            self._entities = [e for e in self._entities if id(e) not in self._dead]
            released = []
            still_dead: dict[int, Any] = {}
            for key, entity in self._dead.items():
                if self._borrowed.get(key, 0):
                    still_dead[key] = entity
                else:
                    self._borrowed.pop(key, None)
                    released.append(entity)
            self._dead = still_dead
            return released

    def get_entity(self, entity_id: int) -> Any | None:
        return self._entity_map.get(entity_id)

    def borrow(self, entity: Any) -> None:
        with self._borrow_lock:
            self._borrowed[id(entity)] = self._borrowed.get(id(entity), 0) + 1

    def unborrow(self, entity: Any) -> None:
        with self._borrow_lock:
            self._borrowed[id(entity)] = self._borrowed.get(id(entity), 0) - 1

    def add_light(self, light: PointLight) -> None:
        self._lights.append(light)

    def remove_light(self, light: PointLight) -> None:
        """Mark ``light`` for removal at the next ``update_lights``."""
        self._dead_lights.add(id(light))

    def update_lights(self) -> None:
        self._lights = [light for light in self._lights if id(light) not in self._dead_lights]
        self._dead_lights.clear()

    def add_particle(self, particle: Any) -> None:
        self._particles.append(particle)

    def update_particles(self) -> None:
        """Drop particles whose life time has run out."""
        self._particles = [p for p in self._particles if p.is_alive()]