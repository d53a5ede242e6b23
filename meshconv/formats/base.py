from __future__ import annotations

import logging
import os
from enum import Enum
from pathlib import Path
from typing import IO, Union

from ..errors import MeshIOError, UnsupportedConversionError

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


class FileType(Enum):
    OBJ = "obj"
    STL = "stl"
    STL_ASCII = "stl-ascii"


# Suffix lookup only covers unambiguous extensions; STL_ASCII must be asked for.
_SUFFIXES = {
    ".obj": FileType.OBJ,
    ".stl": FileType.STL,
}


def file_type_from_path(path: PathLike) -> FileType:
    suffix = Path(path).suffix.lower()
    try:
        return _SUFFIXES[suffix]
    except KeyError:
        raise UnsupportedConversionError(
            f"cannot infer mesh format from suffix {suffix!r} ({path})"
        ) from None


def open_mesh_file(path: PathLike, mode: str) -> IO:
    """open() that reports failures as MeshIOError."""
    try:
        if "b" in mode:
            return open(path, mode)
        return open(path, mode, encoding="utf-8", errors="replace")
    except OSError as exc:
        action = "write" if ("w" in mode or "a" in mode) else "read"
        logger.error(f"Could not open {path} for {action}: {exc}")
        raise MeshIOError(os.fspath(path), f"could not open file for {action}") from exc
