import numpy as np
import cv2
from typing import Callable, Dict
from pixgpu.domain.types import PixelBuffer, PIXEL_DTYPE, TABLE_SIZE, MAX_PIXEL_VALUE
from pixgpu.domain.errors import DimensionMismatchError, EmptyImageError
from pixgpu.kernel.image.validation import ensure_non_negative
from pixgpu.features.arithmetic.models import Operation


def _check(*arrays: np.ndarray) -> None:
    for arr in arrays:
        if arr.size == 0:
            raise EmptyImageError("Reference input is empty")
    shape = arrays[0].shape
    for arr in arrays[1:]:
        if arr.shape != shape:
            raise DimensionMismatchError(f"Shape {arr.shape} does not match {shape}")


def build_gamma_table(a: float, gamma: float) -> PixelBuffer:
    """
    Host twin of the device gamma table.
    """
    ensure_non_negative(a=a, gamma=gamma)
    values = np.arange(TABLE_SIZE, dtype=np.float64)
    corrected = a * np.power(values / 255.0, gamma) * 255.0 + 0.5
    return np.floor(np.minimum(corrected, MAX_PIXEL_VALUE)).astype(PIXEL_DTYPE)


def absolute_difference(in1: PixelBuffer, in2: PixelBuffer) -> PixelBuffer:
    _check(in1, in2)
    return cv2.absdiff(in1, in2)


def bitwise_and(in1: PixelBuffer, in2: PixelBuffer) -> PixelBuffer:
    _check(in1, in2)
    return cv2.bitwise_and(in1, in2)


def bitwise_or(in1: PixelBuffer, in2: PixelBuffer) -> PixelBuffer:
    _check(in1, in2)
    return cv2.bitwise_or(in1, in2)


def bitwise_xor(in1: PixelBuffer, in2: PixelBuffer) -> PixelBuffer:
    _check(in1, in2)
    return cv2.bitwise_xor(in1, in2)


def gamma_correction(image: PixelBuffer, a: float, gamma: float) -> PixelBuffer:
    _check(image)
    table = build_gamma_table(a, gamma)
    return cv2.LUT(image, table)


def invert(image: PixelBuffer) -> PixelBuffer:
    _check(image)
    return cv2.bitwise_not(image)


def maximum(in1: PixelBuffer, in2: PixelBuffer) -> PixelBuffer:
    _check(in1, in2)
    return cv2.max(in1, in2)


def minimum(in1: PixelBuffer, in2: PixelBuffer) -> PixelBuffer:
    _check(in1, in2)
    return cv2.min(in1, in2)


def subtract(in1: PixelBuffer, in2: PixelBuffer) -> PixelBuffer:
    """cv2.subtract saturates uint8 at zero."""
    _check(in1, in2)
    return cv2.subtract(in1, in2)


REFERENCE_OPERATIONS: Dict[Operation, Callable[..., PixelBuffer]] = {
    Operation.ABSOLUTE_DIFFERENCE: absolute_difference,
    Operation.BITWISE_AND: bitwise_and,
    Operation.BITWISE_OR: bitwise_or,
    Operation.BITWISE_XOR: bitwise_xor,
    Operation.GAMMA_CORRECTION: gamma_correction,
    Operation.INVERT: invert,
    Operation.MAXIMUM: maximum,
    Operation.MINIMUM: minimum,
    Operation.SUBTRACT: subtract,
}
