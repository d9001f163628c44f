"""Primitive interface and hit record shared by all shapes.

Every shape exposes the same two-method contract:

    hit(origin, direction) -> HitRecord | None
    material -> Material

A hit test never fails: rays that miss, run parallel to a surface or only
meet it behind their origin simply return None.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from aotracer.core.vector import Vec3
from aotracer.materials.phong import Material


@dataclass(frozen=True)
class HitRecord:
    """Result of a single ray/primitive intersection query.

    Attributes:
        distance: Ray parameter of the hit (>= 0, in front of the origin).
            Equals the travelled distance for unit-length ray directions.
        normal: Unit surface normal at the hit point.
        primitive: The primitive that was hit, used to look up its material.
    """

    distance: float
    normal: Vec3
    primitive: Primitive


class Primitive(ABC):
    """Abstract base for objects that can be hit by a ray."""

    def __init__(self, material: Material) -> None:
        self._material = material

    @property
    def material(self) -> Material:
        """The material owned by this primitive."""
        return self._material

    @abstractmethod
    def hit(self, origin: Vec3, direction: Vec3) -> HitRecord | None:
        """Intersect the ray ``origin + t * direction`` (t >= 0) with this shape.

        Args:
            origin: The ray origin.
            direction: The unit ray direction.

        Returns:
            The nearest hit in front of the origin, or None.
        """

    @abstractmethod
    def to_dict(self) -> dict[str, Any]:
        """Export the primitive to a JSON-friendly dictionary."""
