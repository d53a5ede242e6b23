"""
Format capability table.

Readers turn a file into a Mesh, writers turn a Mesh into a file, and
SUPPORTED_CONVERSIONS lists the (input, output) pairs that are allowed.
A new format is added by registering its functions here; the geometry code
does not change.
"""
from __future__ import annotations

import logging
from typing import Callable, Dict, FrozenSet, Optional, Tuple

from ..errors import UnsupportedConversionError
from ..mesh import Mesh
from .base import FileType, PathLike, file_type_from_path, open_mesh_file
from .obj import ParseIssue, ParseResult, load_obj, parse_obj, read_obj
from .stl import read_stl, write_stl, write_stl_ascii

logger = logging.getLogger(__name__)

Reader = Callable[..., Mesh]
Writer = Callable[[Mesh, PathLike], None]

READERS: Dict[FileType, Reader] = {
    FileType.OBJ: load_obj,
    FileType.STL: read_stl,
}

WRITERS: Dict[FileType, Writer] = {
    FileType.STL: write_stl,
    FileType.STL_ASCII: write_stl_ascii,
}

SUPPORTED_CONVERSIONS: FrozenSet[Tuple[FileType, FileType]] = frozenset({
    (FileType.OBJ, FileType.STL),
    (FileType.OBJ, FileType.STL_ASCII),
    (FileType.STL, FileType.STL),
    (FileType.STL, FileType.STL_ASCII),
})


def check_conversion(source: Optional[FileType], target: FileType) -> None:
    """Reject a pair missing from the table. Meshes built in code (source None) may go to any writer."""
    if target not in WRITERS:
        raise UnsupportedConversionError(f"writing {target.value} is not supported")
    if source is not None and (source, target) not in SUPPORTED_CONVERSIONS:
        raise UnsupportedConversionError(
            f"conversion {source.value} -> {target.value} is not supported"
        )


def read(path: PathLike, *, file_type: Optional[FileType] = None, strict: bool = False) -> Mesh:
    file_type = file_type or file_type_from_path(path)
    reader = READERS.get(file_type)
    if reader is None:
        raise UnsupportedConversionError(f"reading {file_type.value} is not supported")
    logger.debug(f"Reading {path} as {file_type.value}")
    return reader(path, strict=strict)


def write(mesh: Mesh, path: PathLike, *, file_type: Optional[FileType] = None) -> None:
    file_type = file_type or file_type_from_path(path)
    check_conversion(mesh.source_format, file_type)
    WRITERS[file_type](mesh, path)


__all__ = [
    "FileType",
    "ParseIssue",
    "ParseResult",
    "READERS",
    "SUPPORTED_CONVERSIONS",
    "WRITERS",
    "check_conversion",
    "file_type_from_path",
    "load_obj",
    "open_mesh_file",
    "parse_obj",
    "read",
    "read_obj",
    "read_stl",
    "write",
    "write_stl",
    "write_stl_ascii",
]
