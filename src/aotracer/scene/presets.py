"""Ready-made scenes.

create_default_scene() builds the reference "face" scene: two grey eye
spheres with dark pupils in front of a large yellow sphere, above a green
plane, optionally with a triangle mesh and extra random spheres.

Scene population randomness always comes from an explicit generator. When
none is given a generator seeded with SCENE_SEED is used, so the same call
always produces the same scene.
"""

from __future__ import annotations

from pathlib import Path

import numpy as np

from aotracer.core.vector import Vec3
from aotracer.geometry.mesh import TriangleMesh
from aotracer.geometry.plane import Plane
from aotracer.geometry.primitive import Primitive
from aotracer.geometry.sphere import Sphere
from aotracer.materials.phong import Material
from aotracer.scene.scene import Scene

SCENE_SEED = 42

# Placement of the reference mesh: OBJ units are tiny and y/z point the other way
MESH_SCALE = Vec3(10000.0, -10000.0, -10000.0)
MESH_TRANSLATE = Vec3(0.0, 500.0, 1500.0)

EYE_MATERIAL = Material(
    Vec3(0.8, 0.8, 0.8), reflectance=0.3, specular_strength=1.0, specular_exponent=40.0
)
PUPIL_MATERIAL = Material(
    Vec3(0.1, 0.1, 0.1), reflectance=0.0, specular_strength=0.8, specular_exponent=60.0
)
HEAD_MATERIAL = Material(
    Vec3(0.8, 0.8, 0.0), reflectance=0.1, specular_strength=0.4, specular_exponent=20.0
)
FLOOR_MATERIAL = Material(Vec3(0.1, 0.5, 0.1), reflectance=0.4)
MESH_MATERIAL = Material(
    Vec3(0.7, 0.7, 0.75), reflectance=0.0, specular_strength=0.3, specular_exponent=10.0
)


def default_primitives() -> list[Primitive]:
    """The fixed primitives of the reference scene, in scene order."""
    return [
        Sphere(Vec3(-100.0, -80.0, 400.0), 40.0, EYE_MATERIAL),
        Sphere(Vec3(100.0, -80.0, 400.0), 40.0, EYE_MATERIAL),
        Sphere(Vec3(0.0, 0.0, 700.0), 350.0, HEAD_MATERIAL),
        Sphere(Vec3(100.0, -80.0, 370.0), 20.0, PUPIL_MATERIAL),
        Sphere(Vec3(-100.0, -80.0, 370.0), 20.0, PUPIL_MATERIAL),
        Plane(Vec3(0.0, -200.0, 0.0), Vec3(0.0, -1.0, 0.0), FLOOR_MATERIAL),
    ]


def populate_random_spheres(
    rng: np.random.Generator,
    count: int,
    *,
    x_range: tuple[float, float] = (-400.0, 400.0),
    y_range: tuple[float, float] = (-180.0, 150.0),
    z_range: tuple[float, float] = (300.0, 1200.0),
    radius_range: tuple[float, float] = (10.0, 40.0),
) -> list[Sphere]:
    """Create randomly placed spheres with random materials.

    Args:
        rng: Generator used for every random draw.
        count: Number of spheres (>= 0).
        x_range: Range of center x coordinates.
        y_range: Range of center y coordinates.
        z_range: Range of center z coordinates (depth in front of the eye).
        radius_range: Range of radii.

    Returns:
        The new spheres.

    Raises:
        ValueError: If count is negative.
    """
    if count < 0:
        raise ValueError(f"Sphere count must be non-negative, got {count}")

    spheres = []
    for _ in range(count):
        center = Vec3(
            rng.uniform(*x_range),
            rng.uniform(*y_range),
            rng.uniform(*z_range),
        )
        radius = rng.uniform(*radius_range)
        spheres.append(Sphere(center, radius, Material.random(rng)))
    return spheres


def create_default_scene(
    mesh_path: str | Path | None = None,
    random_spheres: int = 0,
    rng: np.random.Generator | None = None,
) -> Scene:
    """Create the reference scene.

    Args:
        mesh_path: Optional OBJ file placed with MESH_SCALE / MESH_TRANSLATE.
        random_spheres: Number of extra random spheres.
        rng: Generator for the random spheres (default: seeded with SCENE_SEED).

    Returns:
        The assembled scene.

    Raises:
        ObjParseError: If the mesh file is malformed.
        OSError: If the mesh file cannot be read.
    """
    primitives = default_primitives()
    if mesh_path is not None:
        primitives.append(
            TriangleMesh.from_obj(
                mesh_path, MESH_MATERIAL, scale=MESH_SCALE, translate=MESH_TRANSLATE
            )
        )
    if random_spheres:
        if rng is None:
            rng = np.random.default_rng(SCENE_SEED)
        primitives.extend(populate_random_spheres(rng, random_spheres))
    return Scene(primitives)
