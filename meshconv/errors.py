"""Exceptions raised by meshconv."""
from __future__ import annotations

from typing import Optional


class MeshError(Exception):
    """Base class for every error raised by this package."""


class MeshIOError(MeshError, OSError):
    """A mesh file could not be opened for reading or writing."""

    def __init__(self, path: str, message: str) -> None:
        super().__init__(f"{message}: {path}")
        self.path = path


class ParseError(MeshError, ValueError):
    """Malformed input. Numeric fields only raise this under strict parsing."""

    def __init__(
        self,
        message: str,
        *,
        line_no: Optional[int] = None,
        field: Optional[str] = None,
        token: Optional[str] = None,
    ) -> None:
        if line_no is not None:
            message = f"line {line_no}: {message}"
        super().__init__(message)
        self.line_no = line_no
        self.field = field
        self.token = token


class MeshIndexError(MeshError, IndexError):
    """A face refers to a vertex or normal that does not exist."""

    def __init__(self, face_index: int, kind: str, index: int, size: int) -> None:
        super().__init__(
            f"face {face_index}: {kind} index {index} out of range (1..{size})"
        )
        self.face_index = face_index
        self.kind = kind
        self.index = index
        self.size = size


class UnsupportedConversionError(MeshError, ValueError):
    """The requested input/output format pair is not in the capability table."""
