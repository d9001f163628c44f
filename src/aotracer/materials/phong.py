"""Phong-style surface material.

A material combines a diffuse albedo with a mirror reflectance and the two
Phong highlight parameters. The shading model in aotracer.core.tracer uses
it as follows:

    local = color * ao * (diffuse + ambient) + light_color * specular
    specular = clamp(dot(reflect(d, n), light_dir)) ** specular_exponent
               * specular_strength
    result = local * (1 - reflectance) + reflected * reflectance

Example:
    >>> from aotracer.core.vector import Vec3
    >>> from aotracer.materials.phong import Material
    >>> chrome = Material(Vec3(0.9, 0.9, 0.9), reflectance=0.8,
    ...                   specular_strength=1.0, specular_exponent=50.0)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from aotracer.core.vector import RandomSource, Vec3


@dataclass(frozen=True)
class Material:
    """Immutable surface material owned by exactly one primitive.

    Attributes:
        color: Diffuse albedo (RGB). Channels are conventionally in [0, 1]
            but this is not enforced.
        reflectance: Fraction of the outgoing color taken from the mirror
            reflected ray, in [0, 1]. 0 disables the reflected ray.
        specular_strength: Scale of the Phong highlight (>= 0).
        specular_exponent: Phong shininess exponent (>= 0).
    """

    color: Vec3
    reflectance: float = 0.0
    specular_strength: float = 0.0
    specular_exponent: float = 1.0

    def __post_init__(self) -> None:
        if not 0.0 <= self.reflectance <= 1.0:
            raise ValueError(f"Reflectance {self.reflectance} is outside [0, 1]")
        if self.specular_strength < 0.0:
            raise ValueError(
                f"Specular strength must be non-negative, got {self.specular_strength}"
            )
        if self.specular_exponent < 0.0:
            raise ValueError(
                f"Specular exponent must be non-negative, got {self.specular_exponent}"
            )

    @classmethod
    def random(cls, rng: RandomSource) -> Material:
        """Create a material with a random color and random reflectance.

        Args:
            rng: Generator used for scene population.

        Returns:
            A new Material with color channels and reflectance in [0, 1).
        """
        color = Vec3(rng.random(), rng.random(), rng.random())
        return cls(color=color, reflectance=rng.random())

    def to_dict(self) -> dict[str, Any]:
        """Export the material to a JSON-friendly dictionary."""
        return {
            "color": list(self.color.to_tuple()),
            "reflectance": self.reflectance,
            "specular_strength": self.specular_strength,
            "specular_exponent": self.specular_exponent,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Material:
        """Load a material from a dictionary produced by to_dict().

        Missing keys fall back to a mid-grey diffuse material.

        Raises:
            ValueError: If any parameter is out of range.
        """
        return cls(
            color=Vec3.from_sequence(data.get("color", [0.5, 0.5, 0.5])),
            reflectance=float(data.get("reflectance", 0.0)),
            specular_strength=float(data.get("specular_strength", 0.0)),
            specular_exponent=float(data.get("specular_exponent", 1.0)),
        )
