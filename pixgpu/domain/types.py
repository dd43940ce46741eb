from typing import Any, Protocol
import numpy as np
import numpy.typing as npt

PixelBuffer = npt.NDArray[np.uint8]

PIXEL_DTYPE = np.uint8
MAX_PIXEL_VALUE = 255
TABLE_SIZE = 256

# Launch limits
MAX_THREADS_PER_BLOCK = 256

# numba DeviceNDArray, or FakeCUDAArray under the simulator
DeviceArray = Any


class SizedImage(Protocol):
    """
    Anything with dimensions and an emptiness check (host or device image).
    """

    @property
    def width(self) -> int: ...

    @property
    def height(self) -> int: ...

    def empty(self) -> bool: ...
