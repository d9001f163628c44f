"""Materials module.

Components:
    phong: Diffuse + Phong highlight + mirror reflectance material

Each primitive owns exactly one Material; materials are immutable once
constructed so they can be read from every render thread without locking.
"""

from .phong import Material

__all__ = [
    "Material",
]
