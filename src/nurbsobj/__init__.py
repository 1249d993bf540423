# -*- coding: utf-8 -*-
"""Wavefront OBJ freeform codec for NURBS curves and surfaces."""

from importlib.metadata import PackageNotFoundError, version

from nurbsobj.array2 import Array2
from nurbsobj.config import CodecOptions, load_options
from nurbsobj.errors import (
    CorruptDataError,
    MissingSectionError,
    ObjError,
    ObjParseError,
)
from nurbsobj.geometry import Curve, Surface
from nurbsobj.io import read_curve_obj, read_surface_obj, write_curve_obj, write_surface_obj

try:
    __version__ = version("nurbsobj")
except PackageNotFoundError:  # pragma: no cover - handled when package not installed
    __version__ = "unknown"

__all__ = [
    'Array2',
    'CodecOptions',
    'load_options',
    'Curve',
    'Surface',
    'ObjError',
    'ObjParseError',
    'MissingSectionError',
    'CorruptDataError',
    'read_curve_obj',
    'read_surface_obj',
    'write_curve_obj',
    'write_surface_obj',
]
