import numpy as np
from typing import Optional
from pixgpu.domain.types import PIXEL_DTYPE, PixelBuffer
from pixgpu.domain.errors import InvalidArgumentError


class HostImage:
    """
    Single-channel 8-bit image in main memory.
    Rows may be padded: row_size >= width, rounded up to `alignment`.
    """

    def __init__(self, width: int = 0, height: int = 0, alignment: int = 1):
        if width < 0 or height < 0:
            raise InvalidArgumentError(f"Invalid image size {width}x{height}")
        if alignment < 1:
            raise InvalidArgumentError(f"Row alignment must be >= 1, got {alignment}")

        self._alignment = alignment
        self._width = 0
        self._height = 0
        self._row_size = 0
        self._data: Optional[PixelBuffer] = None

        if width > 0 and height > 0:
            self._width = width
            self._height = height
            self._row_size = ((width + alignment - 1) // alignment) * alignment
            self._data = np.zeros(self._row_size * height, dtype=PIXEL_DTYPE)

    @classmethod
    def from_array(cls, pixels: np.ndarray, alignment: int = 1) -> "HostImage":
        """
        Builds a (possibly padded) image from a 2-D uint8 array.
        """
        if pixels.ndim != 2:
            raise InvalidArgumentError(f"Expected a 2-D array, got shape {pixels.shape}")
        if pixels.dtype != PIXEL_DTYPE:
            raise InvalidArgumentError(f"Expected uint8 pixels, got {pixels.dtype}")

        height, width = pixels.shape
        img = cls(width, height, alignment)
        if not img.empty():
            img.view()[:, :] = pixels
        return img

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def row_size(self) -> int:
        return self._row_size

    @property
    def alignment(self) -> int:
        return self._alignment

    @property
    def data(self) -> Optional[PixelBuffer]:
        """Flat buffer of row_size * height bytes, padding included."""
        return self._data

    def empty(self) -> bool:
        return self._data is None

    def row(self, y: int) -> PixelBuffer:
        """Contiguous view on the `width` pixels of row y."""
        if self._data is None or not 0 <= y < self._height:
            raise IndexError(f"Row {y} out of range for {self._width}x{self._height} image")
        start = y * self._row_size
        return self._data[start : start + self._width]

    def view(self) -> PixelBuffer:
        """(height, width) view that skips row padding."""
        if self._data is None:
            return np.empty((0, 0), dtype=PIXEL_DTYPE)
        return self._data.reshape(self._height, self._row_size)[:, : self._width]

    def to_array(self) -> PixelBuffer:
        """Packed (height, width) copy."""
        return np.ascontiguousarray(self.view())

    def fill(self, value: int) -> None:
        if self._data is not None:
            self.view()[:, :] = value

    def __repr__(self) -> str:
        return f"HostImage({self._width}x{self._height}, row_size={self._row_size})"
