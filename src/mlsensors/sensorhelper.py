"""
Utilities to check the observations written by sensors.

These are meant to simplify unit tests of `Sensor` implementations,
and shouldn't generally be used in production code.
"""

import logging
from typing import Any, Optional, Tuple

import numpy as np

from mlsensors import constants, npsci
from mlsensors.core import ComparisonResult, ErrorKind, Sensor
from mlsensors.shapes import TensorShape
from mlsensors.writer import ObservationWriter


def compare_observation(sensor: Sensor, expected: Any) -> ComparisonResult:
    """
    Generates the observation of `sensor` and compares it with
    a flat sequence of expected values, using exact equality.

    Args:
        sensor: the sensor to check.
        expected: a flat sequence of floats.
    Returns:
        A `ComparisonResult`. On failure, the message
        has the first position that differs.
    """
    expected = np.asarray(expected, dtype=constants.DEFAULT_DTYPE)
    if expected.ndim != 1:
        raise ValueError(f"Expected values must be flat, got shape {expected.shape}")

    output, failure = _write_observation(sensor, num_expected=len(expected))
    if failure is not None:
        return failure

    for idx in range(len(output)):
        if expected[idx] != output[idx]:
            return _mismatch(idx, expected[idx], output[idx])
    return ComparisonResult.ok()


def compare_observation_3d(sensor: Sensor, expected: Any) -> ComparisonResult:
    """
    Generates the observation of `sensor` and compares it with
    a 3D array of expected values, addressed as (channel, height, width).

    Positions are traversed height first, then width and channel,
    and are reported as [h, w, c] in failure messages.
    """
    expected = np.asarray(expected, dtype=constants.DEFAULT_DTYPE)
    if expected.ndim != 3:
        raise ValueError(f"Expected values must be 3D, got shape {expected.shape}")

    shape = TensorShape(*expected.shape)
    output, failure = _write_observation(sensor, num_expected=shape.length)
    if failure is not None:
        return failure

    for height in range(shape[-2]):
        for width in range(shape[-1]):
            for channel in range(shape[-3]):
                idx = shape.ravel_index(0, channel, height, width)
                if expected[channel, height, width] != output[idx]:
                    return _mismatch(
                        f"[{height}, {width}, {channel}]",
                        expected[channel, height, width],
                        output[idx],
                    )
    return ComparisonResult.ok()


def compare(sensor: Sensor, expected: Any) -> ComparisonResult:
    """
    Compares the observation of `sensor` with flat or 3D expected values.
    """
    ndim = np.ndim(expected)
    if ndim == 1:
        return compare_observation(sensor, expected)
    if ndim == 3:
        return compare_observation_3d(sensor, expected)
    raise ValueError(f"Expected values must be flat or 3D, got {ndim} dimensions")


def assert_observation(sensor: Sensor, expected: Any) -> None:
    """
    Raises an `AssertionError` if the observation of `sensor`
    differs from `expected`.
    """
    result = compare(sensor, expected)
    if not result.success:
        raise AssertionError(result.message)


def _write_observation(
    sensor: Sensor, num_expected: int
) -> Tuple[np.ndarray, Optional[ComparisonResult]]:
    """
    Fills a new buffer with the sentinel value and has the sensor write to it.
    The buffer is checked before and after binding a writer to it.
    """
    output = np.full(
        num_expected, fill_value=constants.FILL_VALUE, dtype=constants.DEFAULT_DTYPE
    )
    if num_expected > 0 and output[0] != constants.FILL_VALUE:
        return output, _failure(
            ErrorKind.BUFFER_INIT_FAILURE, constants.MSG_BUFFER_INIT_FAILURE
        )

    writer = ObservationWriter()
    writer.set_target(output, sensor.get_observation_spec(), 0)

    # the writer shouldn't touch the buffer until the sensor writes
    if num_expected > 0 and output[0] != constants.FILL_VALUE:
        return output, _failure(
            ErrorKind.WRITER_SIDE_EFFECT_FAILURE,
            constants.MSG_WRITER_SIDE_EFFECT_FAILURE,
        )

    sensor.write(writer)
    return output, None


def _mismatch(position: Any, expected: Any, actual: Any) -> ComparisonResult:
    return _failure(
        ErrorKind.VALUE_MISMATCH,
        constants.MSG_VALUE_MISMATCH.format(
            position=position,
            expected=npsci.render(expected),
            actual=npsci.render(actual),
        ),
    )


def _failure(kind: ErrorKind, message: str) -> ComparisonResult:
    logging.debug("Observation comparison failed (%s): %s", kind.value, message)
    return ComparisonResult.failure(kind, message)
