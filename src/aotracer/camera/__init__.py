"""Camera module for primary ray generation.

Components:
    pinhole: Fixed-eye pinhole camera looking down +Z

Camera responsibilities:
    - Map pixel (column, row) to a unit primary ray direction
    - Provide the shared eye point used as every primary ray origin
"""

from .pinhole import PinholeCamera

__all__ = [
    "PinholeCamera",
]
