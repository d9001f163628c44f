"""Triangle mesh primitive using the Moller-Trumbore intersection test.

A TriangleMesh is a read-only list of triangles sharing one material. A ray is
tested against every triangle and the nearest valid hit wins; there is no
acceleration structure.

Normals follow the authored winding: for a triangle (v1, v2, v3) with edges
e1 = v2 - v1 and e2 = v3 - v1 the reported normal is normalize(e2 x e1),
independent of which side the ray arrives from.
"""

from __future__ import annotations

import sys
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from aotracer.core.vector import Vec3
from aotracer.geometry.primitive import HitRecord, Primitive
from aotracer.materials.phong import Material

# Rejection threshold for the determinant and for hits at the ray origin
EPSILON = sys.float_info.epsilon


class Triangle:
    """A triangle given by three world-space vertices.

    The edge vectors are computed once at construction since meshes are
    immutable after loading.
    """

    __slots__ = ("v1", "v2", "v3", "e1", "e2")

    def __init__(self, v1: Vec3, v2: Vec3, v3: Vec3) -> None:
        self.v1 = v1
        self.v2 = v2
        self.v3 = v3
        self.e1 = v2 - v1
        self.e2 = v3 - v1

    def intersect(self, origin: Vec3, direction: Vec3) -> float | None:
        """Return the ray parameter t of the hit, or None.

        Rejects rays parallel to the triangle plane (|det| < EPSILON),
        barycentric coordinates outside the triangle, and hits with
        t <= EPSILON (behind or at the origin).
        """
        ray_cross_e2 = direction.cross(self.e2)
        det = self.e1.dot(ray_cross_e2)
        if -EPSILON < det < EPSILON:
            return None

        inv_det = 1.0 / det
        s = origin - self.v1
        u = inv_det * s.dot(ray_cross_e2)
        if u < 0.0 or u > 1.0:
            return None

        s_cross_e1 = s.cross(self.e1)
        v = inv_det * direction.dot(s_cross_e1)
        if v < 0.0 or u + v > 1.0:
            return None

        t = inv_det * self.e2.dot(s_cross_e1)
        if t <= EPSILON:
            return None
        return t

    def normal(self) -> Vec3:
        """Unit normal from the authored winding, normalize(e2 x e1)."""
        return self.e2.cross(self.e1).normalized()

    def vertices(self) -> tuple[Vec3, Vec3, Vec3]:
        return (self.v1, self.v2, self.v3)

    def __repr__(self) -> str:
        return f"Triangle({self.v1!r}, {self.v2!r}, {self.v3!r})"


class TriangleMesh(Primitive):
    """A collection of triangles sharing one material.

    Attributes:
        triangles: The mesh triangles in world space (treated as read-only).
        source: Optional description of the OBJ file the mesh came from,
            kept so the mesh can be serialized by reference.
    """

    def __init__(
        self,
        triangles: Iterable[Triangle],
        material: Material,
        source: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(material)
        self.triangles = tuple(triangles)
        self.source = source

    @classmethod
    def from_obj(
        cls,
        path: str | Path,
        material: Material,
        scale: Vec3 = Vec3(1.0, 1.0, 1.0),
        translate: Vec3 = Vec3(0.0, 0.0, 0.0),
    ) -> TriangleMesh:
        """Load a mesh from a Wavefront OBJ file.

        Args:
            path: Path to the OBJ file (vertices and triangular faces only).
            material: The material shared by all triangles.
            scale: Per-axis scale applied to each vertex.
            translate: Offset added after scaling.

        Raises:
            ObjParseError: If the file is malformed.
            OSError: If the file cannot be read.
        """
        # Imported here to avoid a circular import with the scene package
        from aotracer.scene.obj_loader import load_obj

        triangles = load_obj(path, scale=scale, translate=translate)
        source = {
            "path": str(path),
            "scale": list(scale.to_tuple()),
            "translate": list(translate.to_tuple()),
        }
        return cls(triangles, material, source=source)

    def hit(self, origin: Vec3, direction: Vec3) -> HitRecord | None:
        """Return the nearest triangle hit, or None if every triangle misses."""
        best_t: float | None = None
        best_triangle: Triangle | None = None
        for triangle in self.triangles:
            t = triangle.intersect(origin, direction)
            if t is not None and (best_t is None or t < best_t):
                best_t = t
                best_triangle = triangle

        if best_triangle is None:
            return None
        return HitRecord(distance=best_t, normal=best_triangle.normal(), primitive=self)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": "mesh", "material": self.material.to_dict()}
        if self.source is not None:
            data.update(self.source)
        else:
            data["triangles"] = [
                [list(vertex.to_tuple()) for vertex in triangle.vertices()]
                for triangle in self.triangles
            ]
        return data

    def __len__(self) -> int:
        return len(self.triangles)

    def __repr__(self) -> str:
        return f"TriangleMesh(triangles={len(self.triangles)})"
