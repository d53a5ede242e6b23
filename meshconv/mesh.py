"""
Mesh container and the queries that run over its fan triangulation.

A Mesh is filled once by a reader (see ``meshconv.formats``), may have a
transform applied to its vertex positions, and is read-only afterwards.
Polygons are split into triangles (c0, ci, ci+1) anchored at their first
corner. That is only correct for convex planar faces; concave faces are
triangulated wrongly and are not repaired.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Iterator, List, NamedTuple, Optional, Tuple

import numpy as np

from .errors import MeshIndexError
from .geometry import compute_normal, ray_intersects_triangle, signed_tetrahedron_volume, triangle_area
from .primitives import Face, FaceCorner, Normal, Point, TextureCoordinate, Vec3
from .transform import AffineTransform

if TYPE_CHECKING:
    from .formats.base import FileType, PathLike

logger = logging.getLogger(__name__)

# Direction of the containment ray.
_RAY_X = Point(1.0, 0.0, 0.0, 0.0)


class Triangle(NamedTuple):
    face_index: int
    corners: Tuple[FaceCorner, FaceCorner, FaceCorner]
    a: Point
    b: Point
    c: Point


@dataclass
class Mesh:
    vertices: List[Point] = field(default_factory=list)
    texture_coords: List[TextureCoordinate] = field(default_factory=list)
    normals: List[Normal] = field(default_factory=list)
    faces: List[Face] = field(default_factory=list)
    name: str = "mesh"
    source_format: Optional["FileType"] = None

    # ---- I/O ----
    @classmethod
    def read(cls, path: "PathLike", *, file_type: Optional["FileType"] = None, strict: bool = False) -> "Mesh":
        from . import formats
        return formats.read(path, file_type=file_type, strict=strict)

    def write(self, path: "PathLike", *, file_type: Optional["FileType"] = None) -> None:
        from . import formats
        formats.write(self, path, file_type=file_type)

    # ---- indexing ----
    def vertex(self, index: int, face_index: int = -1) -> Point:
        """1-based vertex lookup; raises MeshIndexError when out of range."""
        if 0 < index <= len(self.vertices):
            return self.vertices[index - 1]
        raise MeshIndexError(face_index, "vertex", index, len(self.vertices))

    def normal(self, index: int, face_index: int = -1) -> Normal:
        if 0 < index <= len(self.normals):
            return self.normals[index - 1]
        raise MeshIndexError(face_index, "normal", index, len(self.normals))

    def iter_triangles(self) -> Iterator[Triangle]:
        for face_index, face in enumerate(self.faces):
            for corners in face.fan():
                c0, c1, c2 = corners
                yield Triangle(
                    face_index,
                    corners,
                    self.vertex(c0.vertex, face_index),
                    self.vertex(c1.vertex, face_index),
                    self.vertex(c2.vertex, face_index),
                )

    def facet_normal(self, tri: Triangle) -> Vec3:
        """Stored normal of the first corner if it has one, else computed from the vertices."""
        first = tri.corners[0]
        if first.normal > 0:
            return self.normal(first.normal, tri.face_index).ijk
        return compute_normal(tri.a, tri.b, tri.c).xyz

    def triangle_count(self) -> int:
        return sum(len(face) - 2 for face in self.faces)

    # ---- transforms ----
    def apply_transform(self, transform: AffineTransform) -> "Mesh":
        """Replace every vertex v with transform * v. Normals and texture coordinates are kept as is."""
        if self.vertices:
            coords = np.array([(v.x, v.y, v.z, v.w) for v in self.vertices], dtype=np.float64)
            moved = transform.transform_points(coords)
            self.vertices = [Point(*(float(c) for c in row)) for row in moved]
        logger.debug(f"Applied transform to {len(self.vertices)} vertices of {self.name}")
        return self

    # ---- analysis ----
    def is_point_inside(self, point: Point) -> bool:
        """
        Even/odd ray casting along +X.

        Triangles lying entirely at x below the point are skipped, and a face
        is counted at most once. Undefined for points on the surface and for
        open meshes.
        """
        hits = 0
        for face_index, face in enumerate(self.faces):
            for c0, c1, c2 in face.fan():
                a = self.vertex(c0.vertex, face_index)
                b = self.vertex(c1.vertex, face_index)
                c = self.vertex(c2.vertex, face_index)
                if max(a.x, b.x, c.x) < point.x:
                    continue
                if ray_intersects_triangle(point, _RAY_X, a, b, c):
                    hits += 1
                    break
        return hits % 2 == 1

    def calculate_surface_area(self) -> float:
        return sum((triangle_area(t.a, t.b, t.c) for t in self.iter_triangles()), 0.0)

    def calculate_volume(self) -> float:
        """Enclosed volume; needs a closed, consistently wound mesh."""
        total = sum((signed_tetrahedron_volume(t.a, t.b, t.c) for t in self.iter_triangles()), 0.0)
        return abs(total)

    def bounds(self) -> Tuple[Vec3, Vec3]:
        if not self.vertices:
            raise ValueError(f"mesh {self.name!r} has no vertices")
        xs = [v.x for v in self.vertices]
        ys = [v.y for v in self.vertices]
        zs = [v.z for v in self.vertices]
        return (min(xs), min(ys), min(zs)), (max(xs), max(ys), max(zs))

    def summary(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "vertices": len(self.vertices),
            "texture_coords": len(self.texture_coords),
            "normals": len(self.normals),
            "faces": len(self.faces),
            "triangles": self.triangle_count(),
            "surface_area": self.calculate_surface_area(),
            "volume": self.calculate_volume(),
        }
