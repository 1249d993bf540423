"""Codec options for reading and writing OBJ freeform geometry.

Options can be built directly, from a mapping, or loaded from a YAML file::

    schema_version: "1.0"
    dim: 3
    precision: 12
    max_tokens_per_line: 16

Loaded files are validated against the fields of :class:`CodecOptions`.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

__all__ = [
    "CodecOptions",
    "DEFAULT_OPTIONS",
    "load_options",
    "resolve_options",
]

CONTINUATION_MARKER = "\\"


@dataclass(frozen=True)
class CodecOptions:
    """Settings shared by the OBJ readers and writers.

    Attributes
    ----------
    dim : int
        Number of coordinates kept per control point (1, 2 or 3).
    precision : int or None
        Significant digits for written floats. ``None`` writes the shortest
        representation that reads back to the same float.
    continuation : str
        Line-continuation marker recognised on read and emitted on write.
    max_tokens_per_line : int or None
        Wrap written records after this many tokens. ``None`` never wraps.
    blank_line_terminates : bool
        Stop reading at the first blank line instead of skipping it.
    """

    dim: int = 3
    precision: Optional[int] = None
    continuation: str = CONTINUATION_MARKER
    max_tokens_per_line: Optional[int] = None
    blank_line_terminates: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.dim, bool) or not isinstance(self.dim, int) or not 1 <= self.dim <= 3:
            raise ValueError(f"dim must be 1, 2 or 3, got {self.dim!r}")
        if self.precision is not None:
            if isinstance(self.precision, bool) or not isinstance(self.precision, int) or self.precision < 1:
                raise ValueError(f"precision must be a positive integer, got {self.precision!r}")
        if not isinstance(self.continuation, str) or not self.continuation or any(
                c.isspace() for c in self.continuation):
            raise ValueError(f"continuation must be a non-empty token, got {self.continuation!r}")
        if self.max_tokens_per_line is not None:
            value = self.max_tokens_per_line
            if isinstance(value, bool) or not isinstance(value, int) or value < 2:
                raise ValueError(f"max_tokens_per_line must be an integer >= 2, got {value!r}")
        if not isinstance(self.blank_line_terminates, bool):
            raise ValueError("blank_line_terminates must be a boolean")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "CodecOptions":
        """Build options from a parsed mapping, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known - {"schema_version"})
        if unknown:
            raise ValueError(f"Unknown codec option(s): {', '.join(unknown)}")
        kwargs: Dict[str, Any] = {k: v for k, v in data.items() if k in known}
        return cls(**kwargs)

    def with_dim(self, dim: Optional[int]) -> "CodecOptions":
        if dim is None or dim == self.dim:
            return self
        return replace(self, dim=dim)


DEFAULT_OPTIONS = CodecOptions()


def load_options(path: Union[str, Path]) -> CodecOptions:
    """Load and validate codec options from a YAML file."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Codec options file not found: {path}")
    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f)

    if data is None:
        return DEFAULT_OPTIONS
    if not isinstance(data, dict):
        raise ValueError(f"Invalid options format in {path}: expected dict at root")

    schema_version = str(data.get("schema_version", "1.0"))
    if not schema_version.startswith("1."):
        raise ValueError(
            f"Unsupported schema version '{schema_version}' in {path}. "
            f"Expected version 1.x"
        )
    return CodecOptions.from_mapping(data)


def resolve_options(options: Optional[CodecOptions], dim: Optional[int] = None) -> CodecOptions:
    base = options if options is not None else DEFAULT_OPTIONS
    return base.with_dim(dim)
