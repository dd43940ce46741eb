from typing import Any, Optional
from numba import cuda
from pixgpu.domain.types import PIXEL_DTYPE, DeviceArray
from pixgpu.domain.errors import AllocationError, InvalidArgumentError, TransferError
from pixgpu.infrastructure.gpu.device import GPUDevice
from pixgpu.kernel.system.logging import get_logger

logger = get_logger(__name__)


def _allocate(size: int) -> DeviceArray:
    """
    Raw device allocation. Any runtime failure surfaces as AllocationError.
    """
    if not GPUDevice.get().is_available:
        raise AllocationError(f"Cannot allocate {size} bytes: no CUDA device available")
    try:
        return cuda.device_array(size, dtype=PIXEL_DTYPE)
    except Exception as e:
        logger.error(f"Device allocation of {size} bytes failed: {e}")
        raise AllocationError(f"Device allocation of {size} bytes failed") from e


class DeviceImage:
    """
    Single-channel 8-bit image living in device memory.
    Rows are packed: row size always equals width.
    Sole owner of its buffer; copies are deep, move() hands the buffer over.
    """

    def __init__(self, width: int = 0, height: int = 0):
        if width < 0 or height < 0:
            raise InvalidArgumentError(f"Invalid image size {width}x{height}")
        self._width = 0
        self._height = 0
        self._data: Optional[DeviceArray] = None
        self.assign(width, height)

    def assign(self, width: int, height: int) -> None:
        """
        Re-allocates for new dimensions. Zero in either dimension
        leaves the image empty with no buffer.
        """
        if width < 0 or height < 0:
            raise InvalidArgumentError(f"Invalid image size {width}x{height}")

        data = None
        if width > 0 and height > 0:
            data = _allocate(width * height)
            logger.debug(f"DeviceImage: allocated {width}x{height}")

        self.release()
        self._width = width if data is not None else 0
        self._height = height if data is not None else 0
        self._data = data

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def row_size(self) -> int:
        return self._width

    @property
    def size(self) -> int:
        return self._width * self._height

    @property
    def data(self) -> Optional[DeviceArray]:
        return self._data

    def empty(self) -> bool:
        return self._data is None

    def release(self) -> None:
        """Drops the device buffer. Idempotent."""
        if self._data is not None:
            logger.debug(f"DeviceImage: released {self._width}x{self._height}")
        self._data = None
        self._width = 0
        self._height = 0

    def copy(self) -> "DeviceImage":
        """Deep copy into a fresh device allocation."""
        clone = DeviceImage(self._width, self._height)
        if self._data is not None:
            try:
                clone._data.copy_to_device(self._data)
            except Exception as e:
                logger.error(f"Device-to-device copy of {self!r} failed: {e}")
                raise TransferError(f"Device-to-device copy of {self!r} failed") from e
        return clone

    def move(self) -> "DeviceImage":
        """
        Returns a new handle owning this buffer. This handle becomes empty.
        """
        target = DeviceImage()
        target._width, target._height, target._data = self._width, self._height, self._data
        self._data = None
        self._width = 0
        self._height = 0
        return target

    def swap(self, other: "DeviceImage") -> None:
        self._width, other._width = other._width, self._width
        self._height, other._height = other._height, self._height
        self._data, other._data = other._data, self._data

    def __copy__(self) -> "DeviceImage":
        return self.copy()

    def __deepcopy__(self, memo: Any) -> "DeviceImage":
        return self.copy()

    def __enter__(self) -> "DeviceImage":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.release()

    def __repr__(self) -> str:
        return f"DeviceImage({self._width}x{self._height})"
