"""Geometry module for shape primitives.

Components:
    primitive: Primitive base class and HitRecord
    sphere: Sphere with analytic quadratic intersection
    plane: Infinite plane
    mesh: Triangle mesh with Moller-Trumbore intersection

Every primitive answers the same query:
    record = primitive.hit(origin, direction)   # HitRecord or None

There is no spatial acceleration structure; scenes are tested linearly.
"""

from .mesh import Triangle, TriangleMesh
from .plane import Plane
from .primitive import HitRecord, Primitive
from .sphere import Sphere

__all__ = [
    "HitRecord",
    "Primitive",
    "Sphere",
    "Plane",
    "Triangle",
    "TriangleMesh",
]
