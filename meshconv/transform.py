"""
4x4 affine transforms in homogeneous coordinates.

Composition reads right to left: in ``T * Rz * Ry * Rx * S`` the scaling is
applied to a point first.
"""
from __future__ import annotations

import math
from typing import Tuple, Union

import numpy as np

from .primitives import Point


class AffineTransform:
    __slots__ = ("_m",)

    def __init__(self, matrix=None) -> None:
        if matrix is None:
            m = np.zeros((4, 4), dtype=np.float64)
            m[3, 3] = 1.0
        else:
            m = np.array(matrix, dtype=np.float64)
            if m.shape != (4, 4):
                raise ValueError(f"expected a 4x4 matrix, got shape {m.shape}")
        m.setflags(write=False)
        self._m = m

    # ---- builders ----
    @classmethod
    def identity(cls) -> "AffineTransform":
        return cls(np.identity(4))

    @classmethod
    def translation(cls, tx: float, ty: float, tz: float) -> "AffineTransform":
        m = np.identity(4)
        m[0, 3], m[1, 3], m[2, 3] = tx, ty, tz
        return cls(m)

    @classmethod
    def scaling(cls, sx: float, sy: float, sz: float) -> "AffineTransform":
        m = np.identity(4)
        m[0, 0], m[1, 1], m[2, 2] = sx, sy, sz
        return cls(m)

    @classmethod
    def rotation_x(cls, angle: float) -> "AffineTransform":
        c, s = _cos_sin(angle)
        return cls([
            [1, 0, 0, 0],
            [0, c, -s, 0],
            [0, s, c, 0],
            [0, 0, 0, 1],
        ])

    @classmethod
    def rotation_y(cls, angle: float) -> "AffineTransform":
        c, s = _cos_sin(angle)
        return cls([
            [c, 0, s, 0],
            [0, 1, 0, 0],
            [-s, 0, c, 0],
            [0, 0, 0, 1],
        ])

    @classmethod
    def rotation_z(cls, angle: float) -> "AffineTransform":
        c, s = _cos_sin(angle)
        return cls([
            [c, -s, 0, 0],
            [s, c, 0, 0],
            [0, 0, 1, 0],
            [0, 0, 0, 1],
        ])

    @classmethod
    def from_trs(
        cls,
        translate: Tuple[float, float, float] = (0.0, 0.0, 0.0),
        rotate: Tuple[float, float, float] = (0.0, 0.0, 0.0),
        scale: Tuple[float, float, float] = (1.0, 1.0, 1.0),
    ) -> "AffineTransform":
        """T * Rz * Ry * Rx * S: scale, then rotate about x, y, z (degrees), then translate."""
        rx, ry, rz = rotate
        return (
            cls.translation(*translate)
            * cls.rotation_z(rz)
            * cls.rotation_y(ry)
            * cls.rotation_x(rx)
            * cls.scaling(*scale)
        )

    # ---- access ----
    @property
    def matrix(self) -> np.ndarray:
        return self._m.copy()

    def __getitem__(self, key):
        return self._m[key]

    def allclose(self, other: "AffineTransform", atol: float = 1e-9) -> bool:
        return bool(np.allclose(self._m, other._m, atol=atol))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AffineTransform):
            return NotImplemented
        return bool(np.array_equal(self._m, other._m))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        rows = ", ".join("[" + ", ".join(f"{x:g}" for x in row) + "]" for row in self._m)
        return f"AffineTransform([{rows}])"

    # ---- application ----
    def __mul__(self, other: Union["AffineTransform", Point]):
        if isinstance(other, AffineTransform):
            return AffineTransform(self._m @ other._m)
        if isinstance(other, Point):
            x, y, z, w = self._m @ np.array([other.x, other.y, other.z, other.w])
            return Point(float(x), float(y), float(z), float(w))
        return NotImplemented

    __matmul__ = __mul__

    def transform_points(self, points: np.ndarray) -> np.ndarray:
        """Apply to an (N, 4) array of homogeneous rows; returns a new array."""
        points = np.asarray(points, dtype=np.float64)
        return points @ self._m.T


def _cos_sin(angle_degrees: float):
    rad = math.radians(angle_degrees)
    return math.cos(rad), math.sin(rad)
