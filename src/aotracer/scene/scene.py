"""Immutable, ordered scene of primitives.

A Scene is built once before rendering and then shared read-only by every
render thread. Scene order matters: trace_ray() resolves equal distances in
favour of the primitive that comes first.

Scenes can be exported to and loaded from plain dictionaries (and JSON
files). Meshes are stored by reference to their OBJ file:

    {
        "primitives": [
            {"type": "sphere", "center": [0, 0, 500], "radius": 100,
             "material": {"color": [1, 1, 1]}},
            {"type": "plane", "point": [0, -200, 0], "normal": [0, -1, 0],
             "material": {"color": [0.1, 0.5, 0.1]}},
            {"type": "mesh", "path": "bunny.obj",
             "scale": [10000, -10000, -10000], "translate": [0, 500, 1500],
             "material": {"color": [0.8, 0.8, 0.8]}}
        ]
    }
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Any

from aotracer.core.vector import Vec3
from aotracer.geometry.mesh import Triangle, TriangleMesh
from aotracer.geometry.plane import Plane
from aotracer.geometry.primitive import Primitive
from aotracer.geometry.sphere import Sphere
from aotracer.materials.phong import Material


class Scene:
    """An ordered, immutable collection of primitives.

    Example:
        >>> scene = Scene([sphere, plane])
        >>> len(scene)
        2
        >>> data = scene.to_dict()
        >>> restored = Scene.from_dict(data)
    """

    def __init__(self, primitives: Iterable[Primitive]) -> None:
        self._primitives: tuple[Primitive, ...] = tuple(primitives)

    @property
    def primitives(self) -> tuple[Primitive, ...]:
        return self._primitives

    def __iter__(self) -> Iterator[Primitive]:
        return iter(self._primitives)

    def __len__(self) -> int:
        return len(self._primitives)

    def __getitem__(self, index: int) -> Primitive:
        return self._primitives[index]

    def __repr__(self) -> str:
        return f"Scene({len(self._primitives)} primitives)"

    # =========================================================================
    # Scene Serialization
    # =========================================================================

    def to_dict(self) -> dict[str, Any]:
        """Export the scene to a dictionary (for JSON serialization)."""
        return {"primitives": [primitive.to_dict() for primitive in self._primitives]}

    @classmethod
    def from_dict(cls, data: dict[str, Any], base_dir: str | Path | None = None) -> Scene:
        """Load a scene from a dictionary.

        Args:
            data: Dictionary with a 'primitives' list.
            base_dir: Directory against which relative mesh paths resolve.

        Returns:
            The loaded scene.

        Raises:
            ValueError: If a primitive type is unknown or a parameter is invalid.
            ObjParseError: If a referenced mesh file is malformed.
            OSError: If a referenced mesh file cannot be read.
        """
        primitives = [
            _primitive_from_dict(entry, base_dir) for entry in data.get("primitives", [])
        ]
        return cls(primitives)

    @classmethod
    def from_json(cls, path: str | Path) -> Scene:
        """Load a scene from a JSON file; mesh paths are relative to the file."""
        path = Path(path)
        with path.open(encoding="utf-8") as f:
            data = json.load(f)
        return cls.from_dict(data, base_dir=path.parent)

    def save_json(self, path: str | Path) -> None:
        """Write the scene to a JSON file."""
        with Path(path).open("w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)


def _primitive_from_dict(entry: dict[str, Any], base_dir: str | Path | None) -> Primitive:
    primitive_type = entry.get("type", "").lower()
    material = Material.from_dict(entry.get("material", {}))

    if primitive_type == "sphere":
        return Sphere(
            center=Vec3.from_sequence(entry.get("center", [0, 0, 0])),
            radius=float(entry.get("radius", 1.0)),
            material=material,
        )
    if primitive_type == "plane":
        return Plane(
            point=Vec3.from_sequence(entry.get("point", [0, 0, 0])),
            normal=Vec3.from_sequence(entry.get("normal", [0, 1, 0])).normalized(),
            material=material,
        )
    if primitive_type == "mesh":
        if "triangles" in entry:
            triangles = [
                Triangle(*(Vec3.from_sequence(vertex) for vertex in triangle))
                for triangle in entry["triangles"]
            ]
            return TriangleMesh(triangles, material)
        if "path" not in entry:
            raise ValueError("Mesh entry needs either 'path' or 'triangles'")
        path = Path(entry["path"])
        if base_dir is not None and not path.is_absolute():
            path = Path(base_dir) / path
        return TriangleMesh.from_obj(
            path,
            material,
            scale=Vec3.from_sequence(entry.get("scale", [1, 1, 1])),
            translate=Vec3.from_sequence(entry.get("translate", [0, 0, 0])),
        )
    raise ValueError(f"Unknown primitive type: {primitive_type}")
