"""NURBS curve and surface value types.

Both types hold plain data only: degree, knots, control points and an
optional weight container. A value is rational exactly when its
``weights`` attribute is not ``None``; non-rational values behave as if
every weight were 1.0 (see ``effective_weights``).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

import numpy as np

from nurbsobj.array2 import Array2


def _float_list(values: Sequence[float]) -> List[float]:
    return [float(v) for v in values]


def _points_array(points) -> np.ndarray:
    arr = np.array(points, dtype=float)
    if arr.ndim == 2:
        return arr
    if arr.size == 0:
        return np.zeros((0, 3), dtype=float)
    raise ValueError(f"control points must be a sequence of vectors, got shape {arr.shape}")


@dataclass
class Curve:
    """A B-spline curve, rational when ``weights`` is set.

    ``control_points`` is an ``(n, dim)`` array and ``weights`` an ``(n,)``
    array. For a well-formed curve ``len(knots) == n + degree + 1``.
    """

    degree: int
    knots: List[float]
    control_points: np.ndarray
    weights: Optional[np.ndarray] = None

    def __post_init__(self) -> None:
        self.degree = int(self.degree)
        if self.degree < 0:
            raise ValueError(f"degree must be non-negative, got {self.degree}")
        self.knots = _float_list(self.knots)
        self.control_points = _points_array(self.control_points)
        if self.weights is not None:
            self.weights = np.array(self.weights, dtype=float).reshape(-1)

    @property
    def rational(self) -> bool:
        return self.weights is not None

    @property
    def dim(self) -> int:
        return self.control_points.shape[1]

    def __len__(self) -> int:
        return self.control_points.shape[0]

    @property
    def effective_weights(self) -> np.ndarray:
        """Weights of the curve, all 1.0 for non-rational curves."""
        if self.weights is None:
            return np.ones(len(self), dtype=float)
        return self.weights

    def without_weights(self) -> "Curve":
        return Curve(self.degree, list(self.knots), self.control_points.copy())


@dataclass
class Surface:
    """A tensor-product B-spline surface, rational when ``weights`` is set.

    ``control_points`` is an :class:`Array2` of ``dim``-vectors with
    ``rows() == nU`` and ``cols() == nV``; ``weights`` is a scalar
    :class:`Array2` of the same shape.
    """

    degree_u: int
    degree_v: int
    knots_u: List[float]
    knots_v: List[float]
    control_points: Array2 = field(default_factory=lambda: Array2(item_size=3))
    weights: Optional[Array2] = None

    def __post_init__(self) -> None:
        self.degree_u = int(self.degree_u)
        self.degree_v = int(self.degree_v)
        if self.degree_u < 0 or self.degree_v < 0:
            raise ValueError(
                f"degrees must be non-negative, got ({self.degree_u}, {self.degree_v})")
        self.knots_u = _float_list(self.knots_u)
        self.knots_v = _float_list(self.knots_v)
        if not isinstance(self.control_points, Array2):
            self.control_points = Array2.from_array(self.control_points)
        if self.control_points.item_size is None:
            raise ValueError("surface control points must be a grid of vectors")
        if self.weights is not None and not isinstance(self.weights, Array2):
            self.weights = Array2.from_array(self.weights)

    @property
    def rational(self) -> bool:
        return self.weights is not None

    @property
    def dim(self) -> int:
        return self.control_points.item_size

    @property
    def shape(self):
        return self.control_points.shape

    @property
    def effective_weights(self) -> Array2:
        """Weight grid of the surface, all 1.0 for non-rational surfaces."""
        if self.weights is None:
            return Array2(self.control_points.rows(), self.control_points.cols(), fill=1.0)
        return self.weights

    def without_weights(self) -> "Surface":
        return Surface(self.degree_u, self.degree_v, list(self.knots_u), list(self.knots_v),
                       self.control_points.copy())


__all__ = ['Curve', 'Surface']
