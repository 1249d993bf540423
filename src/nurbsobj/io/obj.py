"""Wavefront OBJ freeform import and export for NURBS curves and surfaces.

Files follow the freeform-geometry extension of OBJ::

    v 0.0 0.0 0.0 1.0
    ...
    cstype rat bspline
    deg 2
    curv 0.0 1.0 1 2 3 4
    parm u 0.0 0.0 0.0 0.5 1.0 1.0 1.0
    end

Every reader and writer takes either a filesystem path or an open text
stream. Streams passed in are left open.
"""

from __future__ import annotations

import logging
import os
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

from nurbsobj.array2 import Array2
from nurbsobj.config import CodecOptions, resolve_options
from nurbsobj.geometry import Curve, Surface
from nurbsobj.io.build import build_curve, build_surface
from nurbsobj.io.records import END_KEYWORD, iter_records
from nurbsobj.io.sections import CURVE, SURFACE, accumulate

logger = logging.getLogger(__name__)


def _stream_name(stream) -> Optional[str]:
    name = getattr(stream, 'name', None)
    return name if isinstance(name, str) else None


def _read_accumulated(kind: str, path_or_file, opts: CodecOptions):
    def scan(lines: Iterable[str], name: Optional[str]):
        records = iter_records(
            lines,
            continuation=opts.continuation,
            blank_line_terminates=opts.blank_line_terminates,
            filename=name,
        )
        return accumulate(kind, records, filename=name)

    if hasattr(path_or_file, 'read'):
        return scan(path_or_file, _stream_name(path_or_file))

    name = os.fspath(path_or_file)
    with open(name, 'r', encoding='utf-8', errors='replace') as f:
        return scan(f, name)


def _write_text(text: str, path_or_file) -> None:
    if hasattr(path_or_file, 'write'):
        path_or_file.write(text)
        return
    with open(path_or_file, 'w', encoding='utf-8') as f:
        f.write(text)


# ---------------------------------------------------------------------------
# OBJ Import
# ---------------------------------------------------------------------------


def read_curve_obj(path_or_file,
                   *,
                   rational: Optional[bool] = None,
                   dim: Optional[int] = None,
                   options: Optional[CodecOptions] = None) -> Curve:
    """Read a B-spline curve from an OBJ file.

    Parameters
    ----------
    path_or_file : str or path-like or file-like
        Path to the OBJ file, or an open text stream.
    rational : bool, optional
        ``None`` (default) follows the file's ``cstype`` line. ``True``
        always keeps the vertex weights, ``False`` always drops them.
    dim : int, optional
        Coordinates kept per control point; overrides ``options.dim``.
    options : CodecOptions, optional
        Codec settings; defaults apply when omitted.

    Returns
    -------
    Curve
        A new curve; its ``weights`` is ``None`` when non-rational.

    Raises
    ------
    FileNotFoundError
        If ``path_or_file`` names a missing file.
    MissingSectionError
        If ``cstype``, ``deg``, ``curv`` or ``parm`` is absent.
    ObjParseError
        If a numeric field is malformed or a record is incomplete.
    CorruptDataError
        If the index list does not resolve against the vertices.
    """
    opts = resolve_options(options, dim)
    acc = _read_accumulated(CURVE, path_or_file, opts)
    curve = build_curve(acc, dim=opts.dim, rational=rational)
    logger.debug(
        "read curve: %d vertices, degree %d, %d control points, rational=%s",
        len(acc.points), curve.degree, len(curve), curve.rational,
    )
    return curve


def read_surface_obj(path_or_file,
                     *,
                     rational: Optional[bool] = None,
                     dim: Optional[int] = None,
                     options: Optional[CodecOptions] = None) -> Surface:
    """Read a B-spline surface from an OBJ file.

    Arguments and errors are those of :func:`read_curve_obj`, with ``surf``
    and both ``parm u`` and ``parm v`` required. Control points fill the
    grid with ``u`` varying fastest.
    """
    opts = resolve_options(options, dim)
    acc = _read_accumulated(SURFACE, path_or_file, opts)
    surface = build_surface(acc, dim=opts.dim, rational=rational)
    logger.debug(
        "read surface: %d vertices, degrees (%d, %d), %dx%d control grid, rational=%s",
        len(acc.points), surface.degree_u, surface.degree_v,
        surface.control_points.rows(), surface.control_points.cols(), surface.rational,
    )
    return surface


# ---------------------------------------------------------------------------
# OBJ Export
# ---------------------------------------------------------------------------


def _format_number(value: float, precision: Optional[int]) -> str:
    value = float(value)
    if precision is None:
        return repr(value)
    return f"{value:.{precision}g}"


def _record_lines(head: Sequence[str], tokens: Sequence[str], opts: CodecOptions) -> List[str]:
    """Lay out one record, wrapping with the continuation marker if needed."""
    limit = opts.max_tokens_per_line
    if limit is None or len(tokens) <= limit:
        return [" ".join(list(head) + list(tokens))]
    chunks = [tokens[i:i + limit] for i in range(0, len(tokens), limit)]
    lines = []
    for idx, chunk in enumerate(chunks):
        parts = list(head) + list(chunk) if idx == 0 else list(chunk)
        if idx < len(chunks) - 1:
            parts.append(opts.continuation)
        lines.append(" ".join(parts))
    return lines


def _vertex_line(pt: Sequence[float], weight: float, precision: Optional[int]) -> str:
    coords = [float(c) for c in pt]
    if len(coords) > 3:
        raise ValueError(f"control points must have at most 3 coordinates, got {len(coords)}")
    coords += [0.0] * (3 - len(coords))
    fields = [_format_number(c, precision) for c in coords]
    fields.append(_format_number(weight, precision))
    return "v " + " ".join(fields)


def _domain_bounds(knots: Sequence[float], degree: int, axis: str) -> Tuple[float, float]:
    """Knot values at ``degree`` and ``len(knots) - degree - 1``."""
    last = len(knots) - degree - 1
    if last < 0 or degree >= len(knots):
        raise ValueError(
            f"knot vector along {axis} has {len(knots)} values, too few for degree {degree}")
    return knots[degree], knots[last]


def _cstype_line(rational: bool) -> str:
    return "cstype rat bspline" if rational else "cstype bspline"


def format_curve(curve: Curve, options: Optional[CodecOptions] = None) -> str:
    """Return the OBJ text for ``curve``."""
    opts = resolve_options(options)
    precision = opts.precision
    ctrl = np.asarray(curve.control_points, dtype=float)
    if ctrl.ndim != 2:
        raise ValueError(f"curve control points must be a sequence of vectors, got shape {ctrl.shape}")
    count = ctrl.shape[0]
    weights = np.asarray(curve.effective_weights, dtype=float)
    if weights.shape != (count,):
        raise ValueError(f"curve has {count} control points but weights of shape {weights.shape}")
    lo, hi = _domain_bounds(curve.knots, curve.degree, "u")

    lines = [_vertex_line(ctrl[i], weights[i], precision) for i in range(count)]
    lines.append(_cstype_line(curve.rational))
    lines.append(f"deg {curve.degree}")
    body = [_format_number(lo, precision), _format_number(hi, precision)]
    body += [str(i + 1) for i in range(count)]
    lines += _record_lines(["curv"], body, opts)
    lines += _record_lines(["parm", "u"], [_format_number(k, precision) for k in curve.knots], opts)
    lines.append(END_KEYWORD)
    return "\n".join(lines) + "\n"


def format_surface(surface: Surface, options: Optional[CodecOptions] = None) -> str:
    """Return the OBJ text for ``surface``; empty for an empty control grid."""
    opts = resolve_options(options)
    precision = opts.precision
    ctrl = surface.control_points
    if not isinstance(ctrl, Array2):
        ctrl = Array2.from_array(ctrl)
    n_u, n_v = ctrl.rows(), ctrl.cols()
    if n_u == 0 or n_v == 0:
        return ""
    weights = surface.weights
    if weights is None:
        weights = Array2(n_u, n_v, fill=1.0)
    elif not isinstance(weights, Array2):
        weights = Array2.from_array(weights)
    if weights.shape != (n_u, n_v):
        raise ValueError(
            f"surface has a {n_u}x{n_v} control grid but a "
            f"{weights.rows()}x{weights.cols()} weight grid")
    u_lo, u_hi = _domain_bounds(surface.knots_u, surface.degree_u, "u")
    v_lo, v_hi = _domain_bounds(surface.knots_v, surface.degree_v, "v")

    lines = []
    for j in range(n_v):
        for i in range(n_u):
            lines.append(_vertex_line(ctrl[i, j], weights[i, j], precision))
    lines.append(_cstype_line(surface.rational))
    lines.append(f"deg {surface.degree_u} {surface.degree_v}")
    body = [_format_number(b, precision) for b in (u_lo, u_hi, v_lo, v_hi)]
    body += [str(i + 1) for i in range(n_u * n_v)]
    lines += _record_lines(["surf"], body, opts)
    lines += _record_lines(["parm", "u"], [_format_number(k, precision) for k in surface.knots_u], opts)
    lines += _record_lines(["parm", "v"], [_format_number(k, precision) for k in surface.knots_v], opts)
    lines.append(END_KEYWORD)
    return "\n".join(lines) + "\n"


def write_curve_obj(curve: Curve, path_or_file, *, options: Optional[CodecOptions] = None) -> None:
    """Write ``curve`` to OBJ.

    ``path_or_file`` can be a filesystem path or an open text stream. The
    whole file is formatted before anything is written, so a rejected curve
    leaves no file behind.
    """
    text = format_curve(curve, options)
    _write_text(text, path_or_file)
    logger.debug("wrote curve: degree %d, %d control points, rational=%s",
                 curve.degree, len(curve), curve.rational)


def write_surface_obj(surface: Surface, path_or_file, *, options: Optional[CodecOptions] = None) -> None:
    """Write ``surface`` to OBJ.

    An empty control grid writes an empty file.
    """
    text = format_surface(surface, options)
    _write_text(text, path_or_file)
    logger.debug("wrote surface: degrees (%d, %d), %dx%d control grid, rational=%s",
                 surface.degree_u, surface.degree_v,
                 surface.control_points.rows(), surface.control_points.cols(), surface.rational)


__all__ = [
    'read_curve_obj',
    'read_surface_obj',
    'write_curve_obj',
    'write_surface_obj',
    'format_curve',
    'format_surface',
]
