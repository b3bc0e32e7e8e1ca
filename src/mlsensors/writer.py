"""
Writes sensor observations into flat buffers.
"""

from typing import Optional, Sequence, Tuple, Union

import numpy as np

from mlsensors.core import ObservationSpec
from mlsensors.shapes import TensorShape

Index = Union[int, Tuple[int, ...]]


class ObservationWriter:
    """
    Writes observations to a region of a flat buffer,
    starting at an offset.

    For rank 3 specs, values are addressed as `writer[c, h, w]`
    and stored in row-major (channel, height, width) order.
    """

    def __init__(self):
        self._buffer: Optional[np.ndarray] = None
        self._shape: Optional[TensorShape] = None
        self._offset: int = 0

    def set_target(
        self, buffer: np.ndarray, spec: ObservationSpec, offset: int
    ) -> None:
        """
        Binds the writer to a buffer. The buffer isn't modified,
        and its capacity is only checked when values are written.

        Args:
            buffer: a flat array to write to.
            spec: the spec of the observations that will be written.
            offset: position in the buffer of the first value.
        """
        if offset < 0:
            raise ValueError(f"Offset must be non-negative: {offset}")
        if np.ndim(buffer) != 1:
            raise ValueError(f"Buffer must be flat, got shape {np.shape(buffer)}")
        self._buffer = buffer
        self._shape = spec.tensor_shape
        self._offset = offset

    def __setitem__(self, index: Index, value: float) -> None:
        buffer, shape = self._target()
        coords = index if isinstance(index, tuple) else (index,)
        if len(coords) != shape.rank:
            raise IndexError(
                f"Expected {shape.rank} coordinates for shape {shape}, got {len(coords)}"
            )
        position = self._offset + shape.ravel_index(*coords)
        if position >= len(buffer):
            raise IndexError(
                f"Position {position} out of bounds for buffer of size {len(buffer)}"
            )
        buffer[position] = value

    def add_list(self, values: Sequence[float], write_offset: int = 0) -> int:
        """
        Writes consecutive values, starting at `write_offset`
        relative to the writer's offset.

        Returns:
            The number of values written.
        """
        buffer, shape = self._target()
        values = np.asarray(values, dtype=buffer.dtype).ravel()
        if write_offset < 0 or write_offset + len(values) > shape.length:
            raise IndexError(
                f"Can't write {len(values)} values at {write_offset} for shape {shape}"
            )
        start = self._offset + write_offset
        if start + len(values) > len(buffer):
            raise IndexError(
                f"Buffer of size {len(buffer)} can't hold {len(values)} values at {start}"
            )
        buffer[start : start + len(values)] = values
        return len(values)

    def _target(self) -> Tuple[np.ndarray, TensorShape]:
        if self._buffer is None or self._shape is None:
            raise RuntimeError(
                f"{type(self).__name__} has no target. Call the `set_target` method."
            )
        return self._buffer, self._shape
