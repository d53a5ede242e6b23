"""
Run configuration for a conversion.

Nothing is read from the environment or from disk; the CLI builds a
ConverterConfig from its arguments and library callers can build one
directly or from a plain dict.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from .formats.base import FileType

Vec3 = Tuple[float, float, float]


@dataclass
class ConverterConfig:
    """
    strict: raise ParseError on malformed numeric fields instead of
        defaulting them to 0.
    input_type / output_type: explicit formats; None means "from the suffix".
    translate / rotate / scale: applied as T * Rz * Ry * Rx * S before writing.
    """
    strict: bool = False
    input_type: Optional[FileType] = None
    output_type: Optional[FileType] = None
    translate: Vec3 = (0.0, 0.0, 0.0)
    rotate: Vec3 = (0.0, 0.0, 0.0)
    scale: Vec3 = (1.0, 1.0, 1.0)
    log_level: str = "INFO"

    @property
    def has_transform(self) -> bool:
        return (
            self.translate != (0.0, 0.0, 0.0)
            or self.rotate != (0.0, 0.0, 0.0)
            or self.scale != (1.0, 1.0, 1.0)
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "strict": self.strict,
            "input_type": self.input_type.value if self.input_type else None,
            "output_type": self.output_type.value if self.output_type else None,
            "translate": list(self.translate),
            "rotate": list(self.rotate),
            "scale": list(self.scale),
            "log_level": self.log_level,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ConverterConfig":
        data = dict(data)
        for key in ("input_type", "output_type"):
            if data.get(key) is not None:
                data[key] = FileType(data[key])
        for key in ("translate", "rotate", "scale"):
            if key in data:
                data[key] = tuple(float(x) for x in data[key])
        return cls(**data)

    @classmethod
    def from_args(cls, args) -> "ConverterConfig":
        return cls(
            strict=args.strict,
            input_type=FileType(args.input_format) if args.input_format else None,
            output_type=FileType(args.output_format) if args.output_format else None,
            translate=tuple(args.translate),
            rotate=(args.rotate_x, args.rotate_y, args.rotate_z),
            scale=tuple(args.scale),
            log_level="DEBUG" if args.verbose else "INFO",
        )
