"""Minimal Wavefront OBJ loader for triangle meshes.

Only the subset needed to place a static triangle mesh is supported:

    # comment
    v <x> <y> <z>      vertex position
    f <i> <j> <k>      triangle, 1-based vertex indices

Anything else (texture coordinates, normals, polygons with more than three
vertices, ``i/j/k`` face syntax, groups, materials) is rejected. A malformed
file is fatal to scene construction and raises ObjParseError.

Example:
    >>> from aotracer.core.vector import Vec3
    >>> from aotracer.scene.obj_loader import load_obj
    >>> triangles = load_obj("bunny.obj", scale=Vec3(10000, -10000, -10000),
    ...                      translate=Vec3(0, 500, 1500))
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from aotracer.core.vector import Vec3
from aotracer.geometry.mesh import Triangle

logger = logging.getLogger(__name__)


class ObjParseError(ValueError):
    """Raised when an OBJ file cannot be turned into triangles."""

    def __init__(self, source: str, line_number: int, message: str) -> None:
        super().__init__(f"{source}:{line_number}: {message}")
        self.source = source
        self.line_number = line_number


def _parse_floats(tokens: list[str], source: str, line_number: int) -> Vec3:
    if len(tokens) != 3:
        raise ObjParseError(
            source, line_number, f"Vertex needs 3 coordinates, got {len(tokens)}"
        )
    try:
        return Vec3(float(tokens[0]), float(tokens[1]), float(tokens[2]))
    except ValueError as e:
        raise ObjParseError(source, line_number, f"Invalid vertex coordinate: {e}") from e


def _parse_face(tokens: list[str], source: str, line_number: int) -> tuple[int, int, int]:
    if len(tokens) != 3:
        raise ObjParseError(
            source, line_number, f"Face needs exactly 3 indices, got {len(tokens)}"
        )
    try:
        i, j, k = (int(token) for token in tokens)
    except ValueError as e:
        raise ObjParseError(source, line_number, f"Invalid face index: {e}") from e
    return i, j, k


def parse_obj_lines(
    lines: Iterable[str],
    source: str = "<obj>",
) -> list[tuple[Vec3, Vec3, Vec3]]:
    """Parse OBJ text into raw (untransformed) vertex triples.

    Args:
        lines: The lines of the OBJ file.
        source: Name used in error messages.

    Returns:
        One (v1, v2, v3) tuple per face, in file order.

    Raises:
        ObjParseError: On unknown elements, wrong token counts, non-numeric
            values or vertex indices outside 1..len(vertices).
    """
    vertices: list[Vec3] = []
    faces: list[tuple[int, int, int, int]] = []

    for line_number, raw_line in enumerate(lines, start=1):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue

        indicator, *tokens = line.split()
        if indicator == "v":
            vertices.append(_parse_floats(tokens, source, line_number))
        elif indicator == "f":
            faces.append((*_parse_face(tokens, source, line_number), line_number))
        else:
            raise ObjParseError(source, line_number, f"Unexpected element {indicator!r}")

    triangles = []
    for i, j, k, line_number in faces:
        for index in (i, j, k):
            if index < 1 or index > len(vertices):
                raise ObjParseError(
                    source,
                    line_number,
                    f"Vertex index {index} out of range 1..{len(vertices)}",
                )
        triangles.append((vertices[i - 1], vertices[j - 1], vertices[k - 1]))
    return triangles


def _transform(vertex: Vec3, scale: Vec3, translate: Vec3) -> Vec3:
    return Vec3(
        vertex.x * scale.x + translate.x,
        vertex.y * scale.y + translate.y,
        vertex.z * scale.z + translate.z,
    )


def load_obj(
    path: str | Path,
    scale: Vec3 = Vec3(1.0, 1.0, 1.0),
    translate: Vec3 = Vec3(0.0, 0.0, 0.0),
) -> list[Triangle]:
    """Load triangles from an OBJ file into world space.

    Each vertex is scaled per axis, then translated.

    Args:
        path: Path to the OBJ file.
        scale: Per-axis scale factors.
        translate: Offset applied after scaling.

    Returns:
        The world-space triangles in file order.

    Raises:
        ObjParseError: If the file is malformed.
        OSError: If the file cannot be read.
    """
    path = Path(path)
    with path.open(encoding="utf-8") as f:
        raw = parse_obj_lines(f, source=str(path))

    triangles = [
        Triangle(
            _transform(v1, scale, translate),
            _transform(v2, scale, translate),
            _transform(v3, scale, translate),
        )
        for v1, v2, v3 in raw
    ]
    logger.info("Loaded %d triangles from %s", len(triangles), path)
    return triangles
