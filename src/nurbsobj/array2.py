"""Two-dimensional grid container for surface control data."""

from __future__ import annotations

from typing import Any, Iterator, Optional, Tuple

import numpy as np


class Array2:
    """Row/column addressable grid backed by a numpy array.

    Each cell holds either a scalar (``item_size=None``) or a fixed-length
    vector of ``item_size`` floats. Cells are addressed ``grid[i, j]`` with
    ``i`` the row and ``j`` the column.
    """

    def __init__(self, rows: int = 0, cols: int = 0, fill: Any = 0.0, item_size: Optional[int] = None):
        self._item_shape: Tuple[int, ...] = () if item_size is None else (int(item_size),)
        self._fill = fill
        self._data = np.empty((0, 0) + self._item_shape, dtype=float)
        self.resize(rows, cols)

    @classmethod
    def from_array(cls, data) -> "Array2":
        arr = np.array(data, dtype=float)
        if arr.ndim not in (2, 3):
            raise ValueError(f"expected a 2D grid of scalars or vectors, got shape {arr.shape}")
        item_size = arr.shape[2] if arr.ndim == 3 else None
        grid = cls(0, 0, item_size=item_size)
        grid._data = arr
        return grid

    def resize(self, rows: int, cols: int, fill: Any = None) -> None:
        """Resize to ``rows x cols``; every cell is reset to the fill value."""
        if rows < 0 or cols < 0:
            raise ValueError(f"grid extents must be non-negative, got {rows}x{cols}")
        value = self._fill if fill is None else fill
        self._data = np.empty((rows, cols) + self._item_shape, dtype=float)
        self._data[...] = value

    def rows(self) -> int:
        return self._data.shape[0]

    def cols(self) -> int:
        return self._data.shape[1]

    @property
    def shape(self) -> Tuple[int, int]:
        return self._data.shape[0], self._data.shape[1]

    @property
    def item_size(self) -> Optional[int]:
        return self._item_shape[0] if self._item_shape else None

    def _check(self, key) -> Tuple[int, int]:
        if not isinstance(key, tuple) or len(key) != 2:
            raise TypeError("Array2 is indexed as grid[i, j]")
        i, j = key
        if not (0 <= i < self.rows() and 0 <= j < self.cols()):
            raise IndexError(f"index ({i}, {j}) outside {self.rows()}x{self.cols()} grid")
        return i, j

    def __getitem__(self, key):
        i, j = self._check(key)
        value = self._data[i, j]
        if self._item_shape:
            return value.copy()
        return float(value)

    def __setitem__(self, key, value) -> None:
        i, j = self._check(key)
        self._data[i, j] = value

    def __iter__(self) -> Iterator:
        """Iterate cells with ``i`` varying fastest within each column ``j``."""
        for j in range(self.cols()):
            for i in range(self.rows()):
                yield self[i, j]

    def __len__(self) -> int:
        return self.rows() * self.cols()

    def __eq__(self, other) -> bool:
        if not isinstance(other, Array2):
            return NotImplemented
        return self._data.shape == other._data.shape and bool(np.array_equal(self._data, other._data))

    def copy(self) -> "Array2":
        return Array2.from_array(self._data.copy())

    def __repr__(self) -> str:
        return f"Array2(rows={self.rows()}, cols={self.cols()}, item_size={self.item_size})"


__all__ = ['Array2']
