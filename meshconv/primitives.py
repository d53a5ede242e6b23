"""
Value types shared by the parser, the geometry kernel and the writers.

Indices stored in a FaceCorner are 1-based, exactly as they appear in the
text format; 0 means "absent" for the texture and normal slots.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

Vec3 = Tuple[float, float, float]


@dataclass(frozen=True)
class Point:
    """Homogeneous 3-D point. Directions use w=0."""

    x: float
    y: float
    z: float
    w: float = 1.0

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y, self.z - other.z, self.w - other.w)

    def cross(self, other: "Point") -> "Point":
        return Point(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
            0.0,
        )

    def dot(self, other: "Point") -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def length(self) -> float:
        return math.sqrt(self.dot(self))

    @property
    def xyz(self) -> Vec3:
        return (self.x, self.y, self.z)


@dataclass(frozen=True)
class TextureCoordinate:
    u: float
    v: float
    w: float = 0.0


@dataclass(frozen=True)
class Normal:
    i: float
    j: float
    k: float

    @property
    def ijk(self) -> Vec3:
        return (self.i, self.j, self.k)


@dataclass(frozen=True)
class FaceCorner:
    vertex: int
    texture: int = 0
    normal: int = 0


@dataclass(frozen=True)
class Face:
    """Polygon given by >= 3 corners in winding order (CCW => normal toward viewer)."""

    corners: Tuple[FaceCorner, ...]

    def __post_init__(self) -> None:
        if len(self.corners) < 3:
            raise ValueError(f"a face needs at least 3 corners, got {len(self.corners)}")

    def __len__(self) -> int:
        return len(self.corners)

    def fan(self):
        """Yield corner triples (c0, ci, ci+1) for i = 1..n-2."""
        c0 = self.corners[0]
        for i in range(1, len(self.corners) - 1):
            yield c0, self.corners[i], self.corners[i + 1]
