"""
meshconv: read polygon meshes from Wavefront OBJ, triangulate them and write
binary STL, with a few geometric queries on the way (affine transforms,
surface area, volume, point containment).

    from meshconv import Mesh, AffineTransform, Point

    mesh = Mesh.read("model.obj")
    mesh.apply_transform(AffineTransform.translation(10, 5, 3) * AffineTransform.rotation_z(45))
    print(mesh.calculate_surface_area(), mesh.calculate_volume())
    print(mesh.is_point_inside(Point(0.0, 0.0, 0.0)))
    mesh.write("model.stl")
"""
from .errors import MeshError, MeshIndexError, MeshIOError, ParseError, UnsupportedConversionError
from .primitives import Face, FaceCorner, Normal, Point, TextureCoordinate
from .transform import AffineTransform
from .mesh import Mesh, Triangle
from .formats import FileType, ParseIssue, ParseResult, SUPPORTED_CONVERSIONS, parse_obj, read, read_obj, write
from .config import ConverterConfig
from .logging_config import setup_logging

__version__ = "0.1.0"

__all__ = [
    "AffineTransform",
    "ConverterConfig",
    "Face",
    "FaceCorner",
    "FileType",
    "Mesh",
    "MeshError",
    "MeshIOError",
    "MeshIndexError",
    "Normal",
    "ParseError",
    "ParseIssue",
    "ParseResult",
    "Point",
    "SUPPORTED_CONVERSIONS",
    "TextureCoordinate",
    "Triangle",
    "UnsupportedConversionError",
    "parse_obj",
    "read",
    "read_obj",
    "setup_logging",
    "write",
]
