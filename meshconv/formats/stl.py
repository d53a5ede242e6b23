"""
STL exporters (binary and ASCII) and a binary STL reader.

Binary layout, little endian:
    80-byte header (all zero on write)
    uint32 triangle count
    per triangle: 3 float32 normal, 3 x 3 float32 vertices, uint16 attribute (0)
"""
from __future__ import annotations

import logging
import struct
from pathlib import Path
from typing import List, Sequence

import numpy as np

from ..errors import ParseError
from ..mesh import Mesh
from ..primitives import Face, FaceCorner, Normal, Point
from .base import FileType, PathLike, open_mesh_file

logger = logging.getLogger(__name__)

HEADER_SIZE = 80
_COUNT = struct.Struct("<I")
_RECORD = struct.Struct("<12fH")  # 50 bytes


def _to_float32(values: Sequence[float]) -> List[float]:
    """Round to float32; magnitudes beyond its range saturate to +-inf."""
    with np.errstate(over="ignore"):
        return np.asarray(values, dtype=np.float32).tolist()


def _triangle_records(mesh: Mesh):
    for tri in mesh.iter_triangles():
        yield mesh.facet_normal(tri), tri


def write_stl(mesh: Mesh, path: PathLike) -> None:
    """Write a binary STL, one record per fan triangle."""
    # Records are built before the file is opened so an index error leaves no partial file.
    body = bytearray()
    count = 0
    saturated = 0
    for n, tri in _triangle_records(mesh):
        values = _to_float32((*n, *tri.a.xyz, *tri.b.xyz, *tri.c.xyz))
        if not all(np.isfinite(values)):
            saturated += 1
        body += _RECORD.pack(*values, 0)
        count += 1
    if saturated:
        logger.warning(f"{saturated} triangle(s) of {mesh.name} have coordinates that are not finite in float32")
    with open_mesh_file(path, "wb") as f:
        f.write(bytes(HEADER_SIZE))
        f.write(_COUNT.pack(count))
        f.write(body)
    logger.info(f"Wrote {count} triangles to {path}")


def write_stl_ascii(mesh: Mesh, path: PathLike) -> None:
    name = mesh.name or "mesh"
    lines: List[str] = [f"solid {name}"]
    count = 0
    for n, tri in _triangle_records(mesh):
        count += 1
        lines.append(f"  facet normal {n[0]:e} {n[1]:e} {n[2]:e}")
        lines.append("    outer loop")
        for p in (tri.a, tri.b, tri.c):
            lines.append(f"      vertex {p.x:e} {p.y:e} {p.z:e}")
        lines.append("    endloop")
        lines.append("  endfacet")
    lines.append(f"endsolid {name}")
    with open_mesh_file(path, "w") as f:
        f.write("\n".join(lines) + "\n")
    logger.info(f"Wrote {count} triangles to {path} (ascii)")


def read_stl(path: PathLike, *, strict: bool = False) -> Mesh:
    """
    Read a binary STL back into a Mesh.

    Every triangle gets three fresh vertices and one stored normal referenced
    from all its corners, so writing the mesh again reproduces the records.
    A count that disagrees with the file size is a ParseError when strict;
    otherwise only the complete records are read.
    """
    with open_mesh_file(path, "rb") as f:
        data = f.read()

    if len(data) < HEADER_SIZE + _COUNT.size:
        raise ParseError(f"{path}: file too short for a binary STL header ({len(data)} bytes)")

    (declared,) = _COUNT.unpack_from(data, HEADER_SIZE)
    start = HEADER_SIZE + _COUNT.size
    available = (len(data) - start) // _RECORD.size
    count = declared
    if declared != available:
        if strict:
            raise ParseError(
                f"{path}: header declares {declared} triangles, file holds {available}",
                field="triangle count",
                token=str(declared),
            )
        logger.warning(f"{path}: header declares {declared} triangles, file holds {available}")
        count = min(declared, available)

    mesh = Mesh(name=Path(path).stem, source_format=FileType.STL)
    end = start + count * _RECORD.size
    for record in _RECORD.iter_unpack(data[start:end]):
        nx, ny, nz = record[0:3]
        base = len(mesh.vertices)
        for k in range(3):
            x, y, z = record[3 + 3 * k:6 + 3 * k]
            mesh.vertices.append(Point(x, y, z))
        mesh.normals.append(Normal(nx, ny, nz))
        ni = len(mesh.normals)
        mesh.faces.append(Face(tuple(FaceCorner(base + k, 0, ni) for k in (1, 2, 3))))
    logger.debug(f"Read {len(mesh.faces)} triangles from {path}")
    return mesh
