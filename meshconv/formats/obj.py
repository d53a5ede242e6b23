"""
Wavefront OBJ reader.

Only ``v``, ``vt``, ``vn`` and ``f`` statements are read; every other line is
ignored. Parsing is permissive by default: a numeric field that is missing or
malformed becomes 0 and is reported in ``ParseResult.issues``. Pass
``strict=True`` to get a ParseError on the first such field instead.

Negative (relative) indices are resolved as ``count - value`` where ``count``
is the number of elements of that kind read so far, so ``-1`` after three
vertices resolves to 4. This keeps compatibility with meshes produced for the
legacy converter; it is not the back-reference rule of the OBJ format.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence, TypeVar

from ..errors import ParseError
from ..mesh import Mesh
from ..primitives import Face, FaceCorner, Normal, Point, TextureCoordinate
from .base import FileType, PathLike, open_mesh_file

logger = logging.getLogger(__name__)

N = TypeVar("N", int, float)


@dataclass(frozen=True)
class ParseIssue:
    line_no: int
    kind: str             # statement prefix: v, vt, vn, f
    field: str
    token: Optional[str]  # None when the field was missing
    action: str = "defaulted"

    def __str__(self) -> str:
        got = "missing" if self.token is None else repr(self.token)
        return f"line {self.line_no}: {self.kind} {self.field} {got} ({self.action})"


@dataclass
class ParseResult:
    mesh: Mesh
    issues: List[ParseIssue] = field(default_factory=list)

    @property
    def clean(self) -> bool:
        """True when every field was read as written."""
        return not self.issues

    @property
    def defaulted_count(self) -> int:
        return sum(1 for i in self.issues if i.action == "defaulted")

    @property
    def skipped_count(self) -> int:
        return sum(1 for i in self.issues if i.action == "skipped")


class _ObjParser:
    def __init__(self, name: str, strict: bool) -> None:
        self.mesh = Mesh(name=name, source_format=FileType.OBJ)
        self.strict = strict
        self.issues: List[ParseIssue] = []
        self.line_no = 0

    # ---- field helpers ----
    def _issue(self, kind: str, field_name: str, token: Optional[str], action: str = "defaulted") -> None:
        if self.strict:
            got = "missing" if token is None else f"got {token!r}"
            raise ParseError(
                f"invalid {kind} {field_name} ({got})",
                line_no=self.line_no,
                field=field_name,
                token=token,
            )
        self.issues.append(ParseIssue(self.line_no, kind, field_name, token, action))

    def _number(self, kind: str, field_name: str, token: Optional[str], convert: Callable[[str], N],
                default: Optional[N] = None) -> N:
        """Convert token; a missing optional field takes ``default`` silently."""
        if token is None:
            if default is not None:
                return default
            self._issue(kind, field_name, None)
            return convert("0")
        try:
            return convert(token)
        except ValueError:
            self._issue(kind, field_name, token)
            return convert("0")

    @staticmethod
    def _at(args: Sequence[str], i: int) -> Optional[str]:
        return args[i] if i < len(args) else None

    # ---- statements ----
    def vertex(self, args: Sequence[str]) -> None:
        x, y, z = (self._number("v", name, self._at(args, i), float) for i, name in enumerate("xyz"))
        w = self._number("v", "w", self._at(args, 3), float, default=1.0)
        self.mesh.vertices.append(Point(x, y, z, w))

    def texture(self, args: Sequence[str]) -> None:
        u = self._number("vt", "u", self._at(args, 0), float)
        v = self._number("vt", "v", self._at(args, 1), float)
        w = self._number("vt", "w", self._at(args, 2), float, default=0.0)
        self.mesh.texture_coords.append(TextureCoordinate(u, v, w))

    def normal(self, args: Sequence[str]) -> None:
        i, j, k = (self._number("vn", name, self._at(args, n), float) for n, name in enumerate("ijk"))
        self.mesh.normals.append(Normal(i, j, k))

    def face(self, args: Sequence[str]) -> None:
        if len(args) < 3:
            self._issue("f", "corners", " ".join(args) or None, action="skipped")
            return
        self.mesh.faces.append(Face(tuple(self._corner(token) for token in args)))

    def _corner(self, token: str) -> FaceCorner:
        # Positional: "1//3" is vertex 1, normal 3. The legacy converter collapsed
        # the slashes and would have read texture 3 instead.
        parts = token.split("/")
        vertex = self._index("vertex index", self._at(parts, 0), len(self.mesh.vertices), required=True)
        texture = self._index("texture index", self._at(parts, 1), len(self.mesh.texture_coords))
        normal = self._index("normal index", self._at(parts, 2), len(self.mesh.normals))
        return FaceCorner(vertex, texture, normal)

    def _index(self, field_name: str, part: Optional[str], count: int, required: bool = False) -> int:
        if not part:
            if required:
                self._issue("f", field_name, part)
            return 0
        value = self._number("f", field_name, part, int)
        if value < 0:
            value = count - value
        return value

    def feed(self, lines: Iterable[str]) -> None:
        handlers = {
            "v": self.vertex,
            "vt": self.texture,
            "vn": self.normal,
            "f": self.face,
        }
        for line_no, line in enumerate(lines, start=1):
            self.line_no = line_no
            tokens = line.split()
            if not tokens:
                continue
            handler = handlers.get(tokens[0])
            if handler is not None:
                handler(tokens[1:])


def parse_obj(lines: Iterable[str], *, strict: bool = False, name: str = "mesh") -> ParseResult:
    """Parse OBJ text lines into a new Mesh."""
    parser = _ObjParser(name, strict)
    parser.feed(lines)
    mesh = parser.mesh
    logger.debug(
        f"Parsed {name}: {len(mesh.vertices)} v, {len(mesh.texture_coords)} vt, "
        f"{len(mesh.normals)} vn, {len(mesh.faces)} f"
    )
    result = ParseResult(mesh, parser.issues)
    if not result.clean:
        logger.warning(
            f"{name}: {result.defaulted_count} field(s) defaulted to 0, "
            f"{result.skipped_count} face(s) skipped; first: {result.issues[0]}"
        )
    return result


def read_obj(path: PathLike, *, strict: bool = False) -> ParseResult:
    with open_mesh_file(path, "r") as f:
        return parse_obj(f, strict=strict, name=Path(path).stem)


def load_obj(path: PathLike, *, strict: bool = False) -> Mesh:
    """Reader entry for the format table: the mesh without the issue report."""
    return read_obj(path, strict=strict).mesh
