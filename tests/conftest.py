"""Shared fixtures: OBJ files under tests/data and generated boxes."""

from pathlib import Path
from typing import List

import pytest

from meshconv import Mesh, parse_obj

DATA_DIR = Path(__file__).parent / "data"

# Outward (counter-clockwise seen from outside) quads of a box whose corners
# are numbered 1..8: bottom, top, front (-y), back (+y), left (-x), right (+x).
BOX_FACES = [
    (1, 4, 3, 2),
    (5, 6, 7, 8),
    (1, 2, 6, 5),
    (4, 8, 7, 3),
    (1, 5, 8, 4),
    (2, 3, 7, 6),
]


def box_obj_lines(side: float = 1.0, center=(0.0, 0.0, 0.0), inverted: bool = False, offset: int = 0) -> List[str]:
    """OBJ lines for an axis-aligned box made of six quads."""
    h = side / 2.0
    cx, cy, cz = center
    lines = []
    for z in (-h, h):
        for x, y in ((-h, -h), (h, -h), (h, h), (-h, h)):
            lines.append(f"v {cx + x} {cy + y} {cz + z}")
    for face in BOX_FACES:
        idx = [i + offset for i in face]
        if inverted:
            idx.reverse()
        lines.append("f " + " ".join(str(i) for i in idx))
    return lines


@pytest.fixture
def data_dir():
    return DATA_DIR


@pytest.fixture
def cube_mesh():
    """Side 0.9 cube centred at the origin, with stored normals."""
    return Mesh.read(DATA_DIR / "cube.obj")


@pytest.fixture
def cucube_mesh():
    """Side 1.0 cube around an inverted side 0.6 cube."""
    return Mesh.read(DATA_DIR / "cucube.obj")


@pytest.fixture
def unit_cube():
    return parse_obj(box_obj_lines(1.0), name="unit_cube").mesh
