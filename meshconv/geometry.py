"""
Geometry kernel: normals, ray/triangle intersection, area and volume terms.

Everything here works on plain Point values and knows nothing about file
formats or the Mesh container.
"""
from __future__ import annotations

import numpy as np

from .primitives import Point

# Tolerances follow single-precision arithmetic.
FLOAT32_EPSILON = float(np.finfo(np.float32).eps)

ZERO = Point(0.0, 0.0, 0.0, 0.0)


def normalize(v: Point) -> Point:
    l = v.length()
    if l == 0.0:
        return ZERO
    return Point(v.x / l, v.y / l, v.z / l, 0.0)


def compute_normal(a: Point, b: Point, c: Point) -> Point:
    """Unit normal of triangle abc; zero vector for collinear points."""
    return normalize((b - a).cross(c - a))


def ray_intersects_triangle(origin: Point, direction: Point, a: Point, b: Point, c: Point) -> bool:
    """
    Moller-Trumbore ray/triangle test.

    Misses when the ray is parallel to the triangle plane, when the
    barycentric coordinates fall outside the triangle, or when the hit lies
    at or behind the origin.
    """
    edge1 = b - a
    edge2 = c - a
    h = direction.cross(edge2)
    det = edge1.dot(h)

    if -FLOAT32_EPSILON < det < FLOAT32_EPSILON:
        return False

    inv_det = 1.0 / det
    s = origin - a
    u = inv_det * s.dot(h)
    if u < 0.0 or u > 1.0:
        return False

    q = s.cross(edge1)
    v = inv_det * direction.dot(q)
    if v < 0.0 or u + v > 1.0:
        return False

    t = inv_det * edge2.dot(q)
    return t > FLOAT32_EPSILON


def triangle_area(a: Point, b: Point, c: Point) -> float:
    return 0.5 * (b - a).cross(c - a).length()


def signed_tetrahedron_volume(a: Point, b: Point, c: Point) -> float:
    """
    Signed volume of the tetrahedron (origin, a, b, c).

    Summed over a closed, consistently wound surface the terms telescope to
    the enclosed volume.
    """
    return a.dot(b.cross(c)) / 6.0
