"""Build curve and surface values from accumulated OBJ records."""

from __future__ import annotations

from typing import List, Optional

import numpy as np

from nurbsobj.array2 import Array2
from nurbsobj.errors import (
    error_bad_knot_count,
    error_index_count,
    error_index_out_of_range,
)
from nurbsobj.geometry import Curve, Surface
from nurbsobj.io.sections import CURVE, SURFACE, SectionAccumulator


def control_point_count(acc: SectionAccumulator, axis: str, degree: int) -> int:
    """Number of control points along ``axis``: ``len(knots) - degree - 1``."""
    knots = acc.knots[axis]
    count = len(knots) - degree - 1
    if count < 0:
        raise error_bad_knot_count(axis, len(knots), degree, acc.location(f"parm {axis}"))
    return count


def _resolve(acc: SectionAccumulator, expected: int, detail: str) -> List[int]:
    """Check the index list and return 0-based vertex positions."""
    body = acc.body_keyword
    if len(acc.indices) != expected:
        raise error_index_count(len(acc.indices), expected, detail, acc.location(body))
    pool_size = len(acc.points)
    resolved = []
    for index in acc.indices:
        if not 1 <= index <= pool_size:
            raise error_index_out_of_range(index, pool_size, acc.location(body))
        resolved.append(index - 1)
    return resolved


def _keep_weights(acc: SectionAccumulator, rational: Optional[bool]) -> bool:
    return acc.rational if rational is None else bool(rational)


def build_curve(acc: SectionAccumulator, *, dim: int = 3, rational: Optional[bool] = None) -> Curve:
    """Populate a :class:`Curve` from a curve accumulator.

    The first ``dim`` coordinates of each referenced vertex are copied in
    index-list order. Weights are kept when the file declares a rational
    curve, unless ``rational`` overrides that.
    """
    if acc.kind != CURVE:
        raise ValueError(f"expected curve records, got {acc.kind}")
    degree = acc.degrees[0]
    count = control_point_count(acc, "u", degree)
    order = _resolve(acc, count, f"{count} control points")

    points = np.asarray(acc.points, dtype=float).reshape(-1, 3)
    pool_weights = np.asarray(acc.point_weights, dtype=float)
    ctrl = points[order, :dim] if order else np.zeros((0, dim), dtype=float)
    weights = pool_weights[order] if order else np.zeros(0, dtype=float)

    return Curve(
        degree=degree,
        knots=acc.knot_vector("u"),
        control_points=ctrl,
        weights=weights if _keep_weights(acc, rational) else None,
    )


def build_surface(acc: SectionAccumulator, *, dim: int = 3, rational: Optional[bool] = None) -> Surface:
    """Populate a :class:`Surface` from a surface accumulator.

    The index list fills an ``nU x nV`` grid with ``u`` varying fastest
    within each fixed ``v``.
    """
    if acc.kind != SURFACE:
        raise ValueError(f"expected surface records, got {acc.kind}")
    degree_u, degree_v = acc.degrees
    n_u = control_point_count(acc, "u", degree_u)
    n_v = control_point_count(acc, "v", degree_v)
    order = _resolve(acc, n_u * n_v, f"a {n_u}x{n_v} control grid")

    ctrl = Array2(n_u, n_v, item_size=dim)
    weights = Array2(n_u, n_v, fill=1.0)
    num = 0
    for j in range(n_v):
        for i in range(n_u):
            src = order[num]
            ctrl[i, j] = acc.points[src][:dim]
            weights[i, j] = acc.point_weights[src]
            num += 1

    return Surface(
        degree_u=degree_u,
        degree_v=degree_v,
        knots_u=acc.knot_vector("u"),
        knots_v=acc.knot_vector("v"),
        control_points=ctrl,
        weights=weights if _keep_weights(acc, rational) else None,
    )


__all__ = ['build_curve', 'build_surface', 'control_point_count']
