"""Vec3 value type and vector utilities for CPU ray tracing.

This module provides the 3-D vector used for points, directions and colors
throughout the renderer, plus the cosine-weighted hemisphere sampler used by
the ambient occlusion estimator.

Vectors are immutable values: every operation returns a new Vec3.

Example:
    >>> from aotracer.core.vector import Vec3
    >>> a = Vec3(1.0, 2.0, 2.0)
    >>> a.length()
    3.0
    >>> Vec3(0.0, -1.0, 0.0).reflect(Vec3(0.0, 1.0, 0.0))
    Vec3(0.0, 1.0, 0.0)
"""

from __future__ import annotations

import math
from collections.abc import Iterator, Sequence
from typing import Protocol

# Tolerance on |dot(normal, Z)| above which Z is considered parallel to the normal
BASIS_PARALLEL_TOLERANCE = 1e-6


class RandomSource(Protocol):
    """Anything producing uniform floats in [0, 1) (numpy Generator, random.Random)."""

    def random(self) -> float: ...


class Vec3:
    """An immutable triple of floats.

    Attributes:
        x: First component.
        y: Second component.
        z: Third component.
    """

    __slots__ = ("x", "y", "z")

    def __init__(self, x: float, y: float, z: float) -> None:
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)

    @classmethod
    def from_sequence(cls, values: Sequence[float]) -> Vec3:
        """Build a vector from any 3-element sequence (list, tuple, array).

        Raises:
            ValueError: If the sequence does not have exactly 3 elements.
        """
        if len(values) != 3:
            raise ValueError(f"Expected 3 components, got {len(values)}")
        return cls(values[0], values[1], values[2])

    def __add__(self, other: Vec3) -> Vec3:
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> Vec3:
        return Vec3(self.x * scalar, self.y * scalar, self.z * scalar)

    def __rmul__(self, scalar: float) -> Vec3:
        return self.__mul__(scalar)

    def __truediv__(self, scalar: float) -> Vec3:
        return Vec3(self.x / scalar, self.y / scalar, self.z / scalar)

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vec3):
            return NotImplemented
        return self.x == other.x and self.y == other.y and self.z == other.z

    def __hash__(self) -> int:
        return hash((self.x, self.y, self.z))

    def __repr__(self) -> str:
        return f"Vec3({self.x}, {self.y}, {self.z})"

    def dot(self, other: Vec3) -> float:
        """Compute the dot product self . other."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vec3) -> Vec3:
        """Compute the cross product self x other."""
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def squared_length(self) -> float:
        """Squared Euclidean length; avoids the square root when only comparing."""
        return self.x * self.x + self.y * self.y + self.z * self.z

    def length(self) -> float:
        """Euclidean length of the vector."""
        return math.sqrt(self.squared_length())

    def normalized(self) -> Vec3:
        """Return the unit vector in the same direction.

        The vector must have non-zero length. A zero vector produces NaN
        components (or raises ZeroDivisionError); callers guarantee length > 0.
        """
        length = self.length()
        return Vec3(self.x / length, self.y / length, self.z / length)

    def reflect(self, normal: Vec3) -> Vec3:
        """Reflect this (incident) direction about a unit normal.

        Computes ``incident - 2 * dot(incident, normal) * normal``.
        """
        return self - normal * (2.0 * self.dot(normal))

    def to_tuple(self) -> tuple[float, float, float]:
        """Return the components as a plain tuple (for serialization)."""
        return (self.x, self.y, self.z)


WORLD_Y = Vec3(0.0, 1.0, 0.0)
WORLD_Z = Vec3(0.0, 0.0, 1.0)


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    """Clamp a scalar into [low, high]."""
    return max(low, min(high, value))


def build_onb_from_normal(normal: Vec3) -> tuple[Vec3, Vec3, Vec3]:
    """Build an orthonormal basis (u, v, normal) around a unit normal.

    The first tangent comes from crossing the normal with world Z. When the
    normal is (nearly) parallel to Z that cross product degenerates to zero
    length, so world Y is used instead.

    Args:
        normal: The unit surface normal.

    Returns:
        A tuple (u, v, normal) of mutually orthogonal unit vectors.
    """
    reference = WORLD_Z
    if abs(normal.dot(WORLD_Z)) > 1.0 - BASIS_PARALLEL_TOLERANCE:
        reference = WORLD_Y
    u = normal.cross(reference).normalized()
    v = normal.cross(u)
    return u, v, normal


def cosine_weighted_random_direction(normal: Vec3, rng: RandomSource) -> Vec3:
    """Sample a direction on the hemisphere around ``normal`` with pdf cos(theta)/pi.

    A uniform point on the unit disk (r = sqrt(u1), phi = 2 pi u2) is lifted
    onto the hemisphere at height sqrt(1 - r^2) (Malley's method) and mapped
    into world space through the basis from build_onb_from_normal().

    Args:
        normal: The unit normal defining the hemisphere.
        rng: Source of uniform random floats, owned by the calling thread.

    Returns:
        A unit direction with non-negative dot product against ``normal``.
    """
    r = math.sqrt(rng.random())
    phi = 2.0 * math.pi * rng.random()
    height = math.sqrt(max(0.0, 1.0 - r * r))
    u, v, n = build_onb_from_normal(normal)
    return u * (math.cos(phi) * r) + v * (math.sin(phi) * r) + n * height
