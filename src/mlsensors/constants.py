import numpy as np

# Written to every slot of an output buffer before a sensor writes to it.
FILL_VALUE = -1337.0
DEFAULT_DTYPE = np.float32

MSG_BUFFER_INIT_FAILURE = "Error setting output buffer."
MSG_WRITER_SIDE_EFFECT_FAILURE = (
    "ObservationWriter.set_target modified a buffer it shouldn't have."
)
MSG_VALUE_MISMATCH = (
    "Expected and actual differed in position {position}. "
    "Expected: {expected}  Actual: {actual} "
)
