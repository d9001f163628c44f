"""Multithreaded CPU ray tracer with ambient occlusion.

This package renders a still image of a scene of spheres, planes and triangle
meshes by casting one primary ray per pixel from a fixed eye point, with:
- Phong diffuse and specular shading from one directional light
- Recursive mirror reflection with a fixed depth cutoff
- Monte Carlo ambient occlusion with cosine-weighted sampling
- Row-parallel rendering on a pool of worker threads

Subpackages:
    core: Vectors, configuration, framebuffer, tracer and render scheduler
    geometry: Sphere, plane and triangle mesh primitives
    materials: The Phong material
    scene: Scene container, OBJ loading and ready-made scenes
    camera: Pinhole camera for primary rays
    preview: PNG export and Matplotlib preview
"""

__version__ = "0.1.0"
