"""
This module defines a shape for multi-dimensional
observations, and the mapping of coordinates
to offsets in flat buffers.
"""

from typing import Tuple

import numpy as np


class TensorShape:
    """
    An immutable shape, e.g. (channels, height, width).

    Axes can be addressed from the last one with negative indices,
    i.e. for a shape (c, h, w), `shape[-1]` is `w` and `shape[-3]` is `c`.
    """

    def __init__(self, *dims: int):
        for dim in dims:
            if not isinstance(dim, int) or isinstance(dim, bool) or dim < 0:
                raise ValueError(f"Dimensions must be non-negative ints: {dims}")
        self._dims: Tuple[int, ...] = tuple(dims)

    @property
    def dims(self) -> Tuple[int, ...]:
        return self._dims

    @property
    def rank(self) -> int:
        return len(self._dims)

    @property
    def length(self) -> int:
        """
        Number of elements in a tensor of this shape.
        """
        return int(np.prod(self._dims, dtype=np.int64))

    def __getitem__(self, axis: int) -> int:
        if not -self.rank <= axis < self.rank:
            raise IndexError(f"Axis {axis} out of range for rank {self.rank}")
        return self._dims[axis]

    def __len__(self) -> int:
        return self.rank

    def __iter__(self):
        return iter(self._dims)

    def ravel_index(self, *coords: int) -> int:
        """
        Maps coordinates to an offset in a flat, row-major buffer.

        Coordinates are aligned to the trailing axes. Extra leading
        coordinates, e.g. a batch index, must be zero.
        Missing leading coordinates are taken as zero.

        Example:
            shape: (2, 3, 4)
            ravel_index(1, 2, 3) = (1 * 3 + 2) * 4 + 3 = 23
            ravel_index(0, 1, 2, 3) = 23
            ravel_index(2, 3) = 11
        """
        extra = len(coords) - self.rank
        if extra > 0:
            if any(coord != 0 for coord in coords[:extra]):
                raise IndexError(
                    f"Leading coordinates beyond rank {self.rank} must be zero: {coords}"
                )
            coords = coords[extra:]
        padded: Tuple[int, ...] = (0,) * (self.rank - len(coords)) + tuple(coords)
        for axis, (coord, dim) in enumerate(zip(padded, self._dims)):
            if not 0 <= coord < dim:
                raise IndexError(
                    f"Coordinate {coord} out of bounds for axis {axis} with size {dim}"
                )
        if self.rank == 0:
            return 0
        return int(np.ravel_multi_index(padded, self._dims))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TensorShape):
            return NotImplemented
        return self._dims == other._dims

    def __hash__(self) -> int:
        return hash(self._dims)

    def __repr__(self) -> str:
        return f"{type(self).__name__}{self._dims}"
