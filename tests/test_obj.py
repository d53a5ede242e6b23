"""
Tests for the OBJ reader: statements, defaults, index resolution and the
lenient/strict parsing modes.
"""

import logging

import pytest

from meshconv import FileType, MeshIOError, ParseError, parse_obj, read_obj
from meshconv.primitives import FaceCorner, Point, TextureCoordinate


def _parse(text: str, **kwargs):
    return parse_obj(text.strip().splitlines(), **kwargs)


# ============== Statement Tests ==============

class TestStatements:
    """Recognised and ignored line kinds."""

    def test_vertex_defaults_w_to_one(self):
        mesh = _parse("v 1 2 3").mesh
        assert mesh.vertices == [Point(1.0, 2.0, 3.0, 1.0)]

    def test_vertex_with_w(self):
        mesh = _parse("v 1 2 3 0.5").mesh
        assert mesh.vertices[0].w == 0.5

    def test_texture_coordinate_defaults_w_to_zero(self):
        mesh = _parse("vt 0.25 0.75\nvt 0.1 0.2 0.3").mesh
        assert mesh.texture_coords == [TextureCoordinate(0.25, 0.75, 0.0), TextureCoordinate(0.1, 0.2, 0.3)]

    def test_normal_is_not_normalised(self):
        mesh = _parse("vn 0 0 2").mesh
        assert mesh.normals[0].ijk == (0.0, 0.0, 2.0)

    def test_unknown_prefixes_and_comments_ignored(self):
        result = _parse("""
# comment
o thing
g group
usemtl steel
s off

v 0 0 0
""")
        assert len(result.mesh.vertices) == 1
        assert result.clean

    def test_prefix_must_be_whole_token(self):
        mesh = _parse("vx 1 2 3\nvertex 1 2 3").mesh
        assert mesh.vertices == []

    def test_source_format_recorded(self):
        assert _parse("v 0 0 0").mesh.source_format is FileType.OBJ


# ============== Face Tests ==============

class TestFaces:
    """Face corner tokens."""

    SQUARE = "v 0 0 0\nv 1 0 0\nv 1 1 0\nv 0 1 0\nvt 0 0\nvn 0 0 1\n"

    def test_plain_indices(self):
        mesh = _parse(self.SQUARE + "f 1 2 3 4").mesh
        assert mesh.faces[0].corners == tuple(FaceCorner(i) for i in (1, 2, 3, 4))

    def test_full_triplets(self):
        mesh = _parse(self.SQUARE + "f 1/1/1 2/1/1 3/1/1").mesh
        assert mesh.faces[0].corners[0] == FaceCorner(1, 1, 1)

    def test_vertex_and_texture(self):
        mesh = _parse(self.SQUARE + "f 1/1 2/1 3/1").mesh
        assert mesh.faces[0].corners[1] == FaceCorner(2, 1, 0)

    def test_vertex_and_normal_only(self):
        mesh = _parse(self.SQUARE + "f 1//1 2//1 3//1").mesh
        assert mesh.faces[0].corners[2] == FaceCorner(3, 0, 1)

    def test_short_face_skipped(self):
        result = _parse(self.SQUARE + "f 1 2")
        assert result.mesh.faces == []
        assert result.skipped_count == 1
        assert not result.clean

    def test_short_face_strict(self):
        with pytest.raises(ParseError):
            _parse(self.SQUARE + "f 1 2", strict=True)


# ============== Negative Index Tests ==============

class TestNegativeIndices:
    """Relative indices resolve as count - value."""

    def test_vertex_index_resolves_to_count_plus_k(self):
        mesh = _parse("v 0 0 0\nv 1 0 0\nv 0 1 0\nf -1 -2 -3").mesh
        # 3 vertices read so far: -k -> 3 + k
        assert [c.vertex for c in mesh.faces[0].corners] == [4, 5, 6]

    def test_not_the_back_reference_rule(self):
        mesh = _parse("v 0 0 0\nv 1 0 0\nv 0 1 0\nf -3 -2 -1").mesh
        assert [c.vertex for c in mesh.faces[0].corners] != [1, 2, 3]

    def test_uses_count_at_parse_time(self):
        text = "v 0 0 0\nv 1 0 0\nv 0 1 0\nf 1 2 -1\nv 0 0 1\nv 1 1 1\nf 1 2 -1"
        mesh = _parse(text).mesh
        assert mesh.faces[0].corners[2].vertex == 4
        assert mesh.faces[1].corners[2].vertex == 6

    def test_each_kind_uses_its_own_count(self):
        text = "v 0 0 0\nv 1 0 0\nv 0 1 0\nvt 0 0\nvn 0 0 1\nvn 0 0 -1\nf -1/-1/-1 2/1/1 3/1/1"
        corner = _parse(text).mesh.faces[0].corners[0]
        assert corner == FaceCorner(4, 2, 3)


# ============== Lenient / Strict Tests ==============

class TestPermissiveParsing:
    """Malformed numbers read as 0 and are reported."""

    def test_malformed_coordinate_defaults_to_zero(self):
        result = _parse("v 1 abc 3")
        assert result.mesh.vertices[0] == Point(1.0, 0.0, 3.0)
        assert result.defaulted_count == 1
        issue = result.issues[0]
        assert (issue.line_no, issue.kind, issue.field, issue.token) == (1, "v", "y", "abc")

    def test_missing_coordinate_defaults_to_zero(self):
        result = _parse("v 1 2")
        assert result.mesh.vertices[0] == Point(1.0, 2.0, 0.0)
        assert result.issues[0].token is None

    def test_malformed_index_defaults_to_zero(self):
        result = _parse("v 0 0 0\nv 1 0 0\nv 0 1 0\nf 1 x 3")
        assert result.mesh.faces[0].corners[1].vertex == 0
        assert result.issues[0].line_no == 4

    def test_float_index_is_malformed(self):
        result = _parse("v 0 0 0\nv 1 0 0\nv 0 1 0\nf 1 2.0 3")
        assert result.defaulted_count == 1

    def test_clean_parse(self, data_dir):
        result = read_obj(data_dir / "cube.obj")
        assert result.clean
        assert result.defaulted_count == 0

    def test_warning_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="meshconv"):
            _parse("v 1 abc 3")
        assert "defaulted" in caplog.text

    def test_strict_raises_with_line_and_field(self):
        with pytest.raises(ParseError) as exc_info:
            _parse("v 0 0 0\nvn 0 zero 1", strict=True)
        err = exc_info.value
        assert err.line_no == 2
        assert err.field == "j"
        assert err.token == "zero"
        assert "line 2" in str(err)

    def test_strict_accepts_optional_fields(self):
        result = _parse("v 1 2 3\nvt 0.5 0.5\nf 1 1 1", strict=True)
        assert result.clean


# ============== File Tests ==============

class TestReadObj:
    """Reading from disk."""

    def test_cube_counts(self, data_dir):
        mesh = read_obj(data_dir / "cube.obj").mesh
        assert len(mesh.vertices) == 8
        assert len(mesh.texture_coords) == 4
        assert len(mesh.normals) == 6
        assert len(mesh.faces) == 6
        assert mesh.name == "cube"

    def test_missing_file(self, tmp_path):
        with pytest.raises(MeshIOError) as exc_info:
            read_obj(tmp_path / "nope.obj")
        assert isinstance(exc_info.value, OSError)
        assert exc_info.value.path.endswith("nope.obj")

    def test_each_parse_builds_a_new_mesh(self, data_dir):
        first = read_obj(data_dir / "cube.obj").mesh
        second = read_obj(data_dir / "cube.obj").mesh
        assert first is not second
        assert len(second.vertices) == 8
