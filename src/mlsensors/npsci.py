"""
Numpy utilities.
"""

from typing import Any

from mlsensors import constants


def render(value: Any) -> str:
    """
    Formats a buffer value as the sensor wrote it,
    i.e. with the shortest repr of its single-precision float,
    so `np.float32(0.1)` renders as `0.1`.
    """
    return str(constants.DEFAULT_DTYPE(value))
