"""
This module defines core abstractions.
"""

import abc
import dataclasses
import enum
from typing import Any, Optional, Tuple

import numpy as np
from gymnasium import spaces

from mlsensors import constants
from mlsensors.shapes import TensorShape


class ObservationType(enum.Enum):
    """
    How an observation is used by the agent.
    """

    DEFAULT = 0
    GOAL_SIGNAL = 1


@dataclasses.dataclass(frozen=True)
class ObservationSpec:
    """
    Describes the shape and type of a sensor's output.
    """

    shape: Tuple[int, ...]
    observation_type: ObservationType = ObservationType.DEFAULT

    def __post_init__(self):
        shape = tuple(self.shape)
        if any(not isinstance(dim, (int, np.integer)) or dim < 1 for dim in shape):
            raise ValueError(f"Shape must contain positive sizes: {shape}")
        object.__setattr__(self, "shape", tuple(int(dim) for dim in shape))

    @property
    def rank(self) -> int:
        return len(self.shape)

    @property
    def tensor_shape(self) -> TensorShape:
        return TensorShape(*self.shape)

    @property
    def length(self) -> int:
        return self.tensor_shape.length

    @classmethod
    def vector(
        cls,
        size: int,
        observation_type: ObservationType = ObservationType.DEFAULT,
    ) -> "ObservationSpec":
        """
        Spec for a flat vector of `size` floats.
        """
        return cls(shape=(size,), observation_type=observation_type)

    @classmethod
    def visual(
        cls,
        channels: int,
        height: int,
        width: int,
        observation_type: ObservationType = ObservationType.DEFAULT,
    ) -> "ObservationSpec":
        """
        Spec for a (channels, height, width) observation, e.g. an image.
        """
        return cls(shape=(channels, height, width), observation_type=observation_type)

    @classmethod
    def from_space(
        cls,
        space: spaces.Box,
        observation_type: ObservationType = ObservationType.DEFAULT,
    ) -> "ObservationSpec":
        """
        Creates a spec from a `gymnasium` Box space.
        """
        if not isinstance(space, spaces.Box):
            raise ValueError(f"Unsupported space: {space}")
        return cls(shape=space.shape, observation_type=observation_type)

    def to_space(self) -> spaces.Box:
        """
        Returns an unbounded `gymnasium` Box space with this spec's shape.
        """
        return spaces.Box(
            low=-np.inf, high=np.inf, shape=self.shape, dtype=constants.DEFAULT_DTYPE
        )


class Sensor(abc.ABC):
    """
    This class defines an API for sensors, which generate
    observations for an agent.
    """

    @abc.abstractmethod
    def get_observation_spec(self) -> ObservationSpec:
        """
        Returns the spec of the observations this sensor writes.
        """

    @abc.abstractmethod
    def write(self, writer: Any) -> int:
        """
        Writes the observation through an `ObservationWriter`.

        Returns:
            The number of floats written.
        """

    def get_name(self) -> str:
        return type(self).__name__

    def update(self) -> None:
        """
        Called once per step, before `write`.
        """

    def reset(self) -> None:
        """
        Called at the end of an episode.
        """


class ErrorKind(enum.Enum):
    """
    Reasons a comparison can fail.
    """

    BUFFER_INIT_FAILURE = "buffer-init-failure"
    WRITER_SIDE_EFFECT_FAILURE = "writer-side-effect-failure"
    VALUE_MISMATCH = "value-mismatch"


@dataclasses.dataclass(frozen=True)
class ComparisonResult:
    """
    Outcome of comparing a sensor's observation with expected values.
    `message` and `kind` are only set on failure.
    """

    success: bool
    message: Optional[str] = None
    kind: Optional[ErrorKind] = None

    @classmethod
    def ok(cls) -> "ComparisonResult":
        return cls(success=True)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str) -> "ComparisonResult":
        return cls(success=False, message=message, kind=kind)

    def __bool__(self) -> bool:
        return self.success
