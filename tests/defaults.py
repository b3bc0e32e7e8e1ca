"""
Sensors and functions for tests.
"""

from typing import Any, Callable, Sequence

import numpy as np

from mlsensors import core
from mlsensors.writer import ObservationWriter


class ArraySensor(core.Sensor):
    """
    Writes a fixed array, in flat (row-major) order.
    """

    def __init__(self, values: Any, spec: core.ObservationSpec = None):
        super().__init__()
        self.values = np.asarray(values, dtype=np.float32)
        self.spec = (
            spec if spec is not None else core.ObservationSpec(self.values.shape)
        )
        self.writes = 0

    def get_observation_spec(self) -> core.ObservationSpec:
        return self.spec

    def write(self, writer: ObservationWriter) -> int:
        self.writes += 1
        return writer.add_list(self.values.ravel())


class VisualSensor(core.Sensor):
    """
    Writes a (channel, height, width) array one element at a time,
    through the writer's 3D indexing.
    """

    def __init__(self, values: Any):
        super().__init__()
        self.values = np.asarray(values, dtype=np.float32)
        channels, height, width = self.values.shape
        self.spec = core.ObservationSpec.visual(channels, height, width)

    def get_observation_spec(self) -> core.ObservationSpec:
        return self.spec

    def write(self, writer: ObservationWriter) -> int:
        channels, height, width = self.values.shape
        for channel in range(channels):
            for row in range(height):
                for col in range(width):
                    writer[channel, row, col] = self.values[channel, row, col]
        return self.values.size


class NoOpSensor(core.Sensor):
    """
    A sensor that never writes.
    """

    def __init__(self, size: int):
        super().__init__()
        self.spec = core.ObservationSpec.vector(size)

    def get_observation_spec(self) -> core.ObservationSpec:
        return self.spec

    def write(self, writer: ObservationWriter) -> int:
        del writer
        return 0


class CallbackSensor(core.Sensor):
    """
    Delegates `write` to a callable.
    """

    def __init__(
        self, spec: core.ObservationSpec, write_fn: Callable[[ObservationWriter], int]
    ):
        super().__init__()
        self.spec = spec
        self._write_fn = write_fn

    def get_observation_spec(self) -> core.ObservationSpec:
        return self.spec

    def write(self, writer: ObservationWriter) -> int:
        return self._write_fn(writer)


def batch(*args: Any) -> np.ndarray:
    """
    Collects a sequence of values into a float32 np.ndarray.
    """
    return np.array(args, dtype=np.float32)


def chw(values: Sequence[Sequence[Sequence[float]]]) -> np.ndarray:
    """
    Creates a (channel, height, width) float32 array.
    """
    array = np.array(values, dtype=np.float32)
    assert array.ndim == 3, f"Expected 3 dimensions, got {array.shape}"
    return array
