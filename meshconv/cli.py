"""Command line driver: read a mesh, optionally transform it, write it out."""
from __future__ import annotations

import argparse
import logging
from typing import List, Optional

from .config import ConverterConfig
from .errors import MeshError
from .formats import FileType, read, write
from .logging_config import setup_logging
from .primitives import Point
from .transform import AffineTransform

logger = logging.getLogger(__name__)

_DEF_HELP = """
Examples:
  meshconv model.obj model.stl
  meshconv model.obj model.stl --scale 2 2 2 --rotate-z 45 --translate 10 5 3
  meshconv model.obj model.txt --output-format stl-ascii
  meshconv model.obj model.stl --report --inside 0.1 0.2 -0.05
  python -m meshconv model.obj model.stl --strict -v
"""


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="meshconv", description="meshconv: OBJ to STL mesh converter",
                                epilog=_DEF_HELP, formatter_class=argparse.RawTextHelpFormatter)
    p.add_argument("input", help="Input mesh (.obj or binary .stl)")
    p.add_argument("output", help="Output path (.stl). Use --output-format stl-ascii for text STL.")
    formats = [t.value for t in FileType]
    p.add_argument("--input-format", choices=formats, help="Override the input format guessed from the suffix")
    p.add_argument("--output-format", choices=formats, help="Override the output format guessed from the suffix")
    p.add_argument("--strict", action="store_true", help="Fail on malformed numbers instead of reading them as 0")
    # Transform, applied as T * Rz * Ry * Rx * S
    p.add_argument("--translate", type=float, nargs=3, metavar=("TX", "TY", "TZ"), default=[0.0, 0.0, 0.0])
    p.add_argument("--scale", type=float, nargs=3, metavar=("SX", "SY", "SZ"), default=[1.0, 1.0, 1.0])
    p.add_argument("--rotate-x", type=float, default=0.0, metavar="DEG")
    p.add_argument("--rotate-y", type=float, default=0.0, metavar="DEG")
    p.add_argument("--rotate-z", type=float, default=0.0, metavar="DEG")
    # Queries
    p.add_argument("--report", action="store_true", help="Print counts, surface area and volume")
    p.add_argument("--inside", type=float, nargs=3, metavar=("X", "Y", "Z"),
                   help="Print whether the point lies inside the (transformed) mesh")
    p.add_argument("-v", "--verbose", action="store_true")
    p.add_argument("--log-file")
    return p


def run(config: ConverterConfig, input_path: str, output_path: str,
        report: bool = False, inside: Optional[List[float]] = None) -> int:
    mesh = read(input_path, file_type=config.input_type, strict=config.strict)
    if config.has_transform:
        mesh.apply_transform(AffineTransform.from_trs(config.translate, config.rotate, config.scale))
    write(mesh, output_path, file_type=config.output_type)

    if report:
        for key, value in mesh.summary().items():
            if isinstance(value, float):
                print(f"{key}: {value:.6g}")
            else:
                print(f"{key}: {value}")
    if inside is not None:
        point = Point(*inside)
        print("inside" if mesh.is_point_inside(point) else "outside")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config = ConverterConfig.from_args(args)
    setup_logging(config.log_level, args.log_file)
    try:
        return run(config, args.input, args.output, report=args.report, inside=args.inside)
    except MeshError as exc:
        logger.error(str(exc))
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
