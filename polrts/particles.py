"""Short-lived visual particles: gun fire, explosions, hits and construction beams."""

from __future__ import annotations

import math
import random
import struct
from dataclasses import dataclass, field
from enum import Enum

import numpy as np

_UP = np.array([0.0, 0.0, 1.0])
_Y = np.array([0.0, 1.0, 0.0])
_XY = np.array([1.0, 1.0, 0.0])

_PACKED = struct.Struct("<8f")


def _vec(v, size: int = 3) -> np.ndarray:
    array = np.array(v, dtype=float)
    if array.shape != (size,):
        raise ValueError(f"expected a {size}-vector, got shape {array.shape}")
    return array


def _normalized(v: np.ndarray) -> np.ndarray:
    return v / np.linalg.norm(v)


def _fade(time: float, start: float, life_time: float) -> np.ndarray:
    """Colour of a bright flash that dims from white-yellow as it ages."""
    age = time - start
    return np.array([1.0 - age * 1.5, 1.0 - age * 1.5, 0.7 - age * 1.5, 1.0 - age / life_time])


@dataclass
class SerializedParticle:
    """What the renderer needs of one particle: position, size and RGBA colour."""

    position: np.ndarray
    size: float
    color: np.ndarray

    def __post_init__(self) -> None:
        self.position = _vec(self.position, 3)
        self.size = float(self.size)
        self.color = _vec(self.color, 4)

    def to_bytes(self) -> bytes:
        """Pack as eight little-endian 32-bit floats, as uploaded to the GPU."""
        return _PACKED.pack(*self.position, self.size, *self.color)


@dataclass(eq=False)
class Particle:
    """A point moving with constant velocity once its start delay has passed."""

    position: np.ndarray
    color: np.ndarray = field(default_factory=lambda: np.zeros(3))
    velocity: np.ndarray = field(default_factory=lambda: np.zeros(3))
    start: float = 0.0
    life_time: float = 0.0
    size: float = 0.05
    start_color: np.ndarray = field(default_factory=lambda: np.array([1.0, 1.0, 1.0, 1.0]))
    time: float = 0.0

    def __post_init__(self) -> None:
        self.position = _vec(self.position)
        self.color = _vec(self.color)
        self.velocity = _vec(self.velocity)
        self.start_color = _vec(self.start_color, 4)
        self.start_velocity = self.velocity.copy()
        self.initial_velocity = np.zeros(3)

    def update(self, dt: float) -> None:
        """Advance the particle by ``dt`` seconds."""
        self.time += dt
        if self.time > self.start:
            self.position = self.position + self.velocity * dt

    def is_alive(self) -> bool:
        return self.time < self.start + self.life_time

    def is_visible(self) -> bool:
        return self.time > self.start

    def serialize(self) -> SerializedParticle:
        return SerializedParticle(self.position, self.size, self.start_color)


class GunFireParticle(Particle):
    """Muzzle flash or smoke leaving a gun barrel."""

    def __init__(self, position, direction, initial_velocity, rng: random.Random | None = None) -> None:
        rng = rng or random.Random()
        direction = _vec(direction)
        super().__init__(position, direction)
        right = _normalized(np.cross(direction, _UP))
        up = np.cross(direction, right)
        theta = rng.uniform(0.0, 2 * math.pi)
        self.start = rng.uniform(0.0, 0.15)
        self.initial_velocity = _vec(initial_velocity)
        self.smoke = rng.uniform(0.0, 1.0) > 0.5
        swirl = right * math.sin(theta) + up * math.cos(theta)

        if not self.smoke:
            self.life_time = 0.15
            self.velocity = self.initial_velocity + 5.0 * (
                direction * rng.uniform(0.8, 1.0) + rng.uniform(0.0, 0.1) * swirl
            )
        else:
            darkness = rng.uniform(0.37, 0.5)
            self.start_color = np.array([darkness, darkness, darkness, 1.0])
            self.start = rng.uniform(0.0, 0.05)
            self.life_time = 1.0
            self.velocity = self.initial_velocity + rng.uniform(0.4, 1.38) * (
                direction * rng.uniform(1.3, 2.5) + rng.uniform(0.5, 0.7) * swirl
            )
        self.start_velocity = self.velocity.copy()

    def update(self, dt: float) -> None:
        self.time += dt
        if self.time > self.start:
            self.position = self.position + self.velocity * dt
        else:
            self.position = self.position + self.initial_velocity * dt
        if self.smoke and self.time > self.start:
            self.velocity = self.start_velocity * max(math.exp(self.start - self.time), 0.0)

    def serialize(self) -> SerializedParticle:
        if not self.smoke:
            return SerializedParticle(
                self.position, 0.03 + self.time * 0.2, _fade(self.time, self.start, self.life_time)
            )
        color = self.start_color.copy()
        color[3] = 1.0 - (self.time - self.start) / self.life_time
        return SerializedParticle(self.position, 0.02 + self.time * 0.35, color)


class ExplosionKind(Enum):
    EXPLOSION = "explosion"
    DUST = "dust"
    DEBRIS = "debris"


class GroundExplosionParticle(Particle):
    """Flash, dust or debris thrown up where a shell hits the ground."""

    def __init__(self, position, normal, rng: random.Random | None = None) -> None:
        rng = rng or random.Random()
        normal = _vec(normal)
        super().__init__(position, normal)
        self.normal = normal
        right = _normalized(np.cross(normal, _Y))
        forward = np.cross(normal, right)
        theta = rng.uniform(0.0, 2 * math.pi)
        swirl = right * math.sin(theta) + forward * math.cos(theta)

        roll = rng.uniform(0.0, 1.0)
        if roll < 0.33:
            self.kind = ExplosionKind.EXPLOSION
        elif roll < 0.66:
            self.kind = ExplosionKind.DUST
        else:
            self.kind = ExplosionKind.DEBRIS

        if self.kind is ExplosionKind.EXPLOSION:
            self.life_time = 0.15
            self.velocity = 3.0 * (normal * rng.uniform(0.8, 1.0) + rng.uniform(0.4, 0.8) * swirl)
            self.start = rng.uniform(0.0, 0.02)
        elif self.kind is ExplosionKind.DUST:
            darkness = rng.uniform(0.17, 0.3)
            self.start_color = np.array([darkness, darkness / 1.5, 0.0, 1.0])
            self.start = rng.uniform(0.0, 0.02)
            self.life_time = 0.7
            self.velocity = rng.uniform(0.8, 1.78) * (
                normal * rng.uniform(1.3, 4.5) + rng.uniform(0.5, 1.3) * swirl
            )
        else:
            darkness = rng.uniform(0.10, 0.15)
            self.start_color = np.array([darkness, darkness / 1.5, 0.0, 1.0])
            self.start = rng.uniform(0.0, 0.02)
            self.life_time = 0.7
            self.size = rng.uniform(0.02, 0.05)
            self.velocity = rng.uniform(0.8, 1.78) * (
                normal * rng.uniform(1.3, 4.5) + rng.uniform(1.5, 2.3) * swirl
            )
        self.start_velocity = self.velocity.copy()

    def update(self, dt: float) -> None:
        self.time += dt
        if self.time > self.start:
            self.position = self.position + self.velocity * dt
        if self.kind is ExplosionKind.DUST and self.time > self.start:
            self.velocity = self.start_velocity * max(math.exp((self.start - self.time) * 3), 0.0)
        elif self.kind is ExplosionKind.DEBRIS and self.time > self.start:
            damped = self.start_velocity * max(math.exp((self.start - self.time) * 2), 0.0)
            self.velocity = damped + np.array([0.0, 0.0, -5.0]) * self.time

    def serialize(self) -> SerializedParticle:
        if self.kind is ExplosionKind.EXPLOSION:
            return SerializedParticle(
                self.position, 0.03 + self.time * 0.2, _fade(self.time, self.start, self.life_time)
            )
        if self.kind is ExplosionKind.DUST:
            color = self.start_color.copy()
            color[3] = 1.0 - (self.time - self.start) / self.life_time
            return SerializedParticle(self.position, 0.02 + (self.time - self.start) * 0.65, color)
        return SerializedParticle(self.position, self.size, self.start_color)


class UnitHitParticle(Particle):
    """A spark where a shell strikes a unit."""

    def __init__(self, position, normal, rng: random.Random | None = None) -> None:
        rng = rng or random.Random()
        normal = _vec(normal)
        super().__init__(position, normal)
        self.normal = normal
        right = np.cross(normal, _Y)
        if not right.any():
            right = np.cross(normal, _XY)
        right = _normalized(right)
        forward = np.cross(normal, right)
        theta = rng.uniform(0.0, 2 * math.pi)
        self.start = rng.uniform(0.0, 0.05)
        self.smoke = rng.uniform(0.0, 1.0) > 0.5
        self.life_time = 0.15
        self.velocity = 3.0 * (
            normal * rng.uniform(0.8, 1.0)
            + rng.uniform(0.8, 1.0) * (right * math.sin(theta) + forward * math.cos(theta))
        )
        self.start_velocity = self.velocity.copy()

    def serialize(self) -> SerializedParticle:
        return SerializedParticle(self.position, 0.01, _fade(self.time, self.start, self.life_time))


class ConstructionParticle(Particle):
    """A beam particle between a builder's nozzle and a random point of the target's box.

    With ``inbound`` set it flies from the target to the nozzle, otherwise from
    the nozzle to the target. It arrives after 0.4 seconds.
    """

    def __init__(self, nozzle, target_position, target_direction, target_up,
                 box_min, box_max, inbound, rng: random.Random | None = None) -> None:
        rng = rng or random.Random()
        super().__init__(np.zeros(3), np.zeros(3))
        nozzle = _vec(nozzle)
        direction = _vec(target_direction)
        up = _vec(target_up)
        extent = _vec(box_max) - _vec(box_min)
        right = np.cross(direction, up)

        a = direction * extent[0] * rng.uniform(-0.5, 0.5)
        b = right * extent[1] * rng.uniform(-0.5, 0.5)
        c = up * extent[2] * rng.uniform(-0.5, 0.5)
        point = _vec(target_position) + a + b + c

        source, dest = (point, nozzle) if inbound else (nozzle, point)
        self.start = 0.0
        self.position = source.copy()
        self.life_time = 0.4
        self.velocity = (dest - source) / 0.4
        self.start_velocity = self.velocity.copy()

    def serialize(self) -> SerializedParticle:
        return SerializedParticle(self.position, 0.05, np.array([0.0, 0.95, 0.0, 0.6]))