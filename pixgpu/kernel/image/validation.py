import math
from typing import Any
from pixgpu.domain.types import SizedImage
from pixgpu.domain.errors import (
    EmptyImageError,
    DimensionMismatchError,
    InvalidArgumentError,
)


def ensure_not_empty(*images: SizedImage) -> None:
    """
    Rejects the first empty participant.
    """
    for idx, img in enumerate(images):
        if img.empty():
            raise EmptyImageError(f"Image #{idx} is empty ({img.width}x{img.height})")


def ensure_same_size(*images: SizedImage) -> None:
    """
    All participants must share width and height with the first one.
    """
    if not images:
        return
    ref = images[0]
    for idx, img in enumerate(images[1:], start=1):
        if img.width != ref.width or img.height != ref.height:
            raise DimensionMismatchError(f"Image #{idx} is {img.width}x{img.height}, expected {ref.width}x{ref.height}")


def ensure_valid(*images: SizedImage) -> None:
    ensure_not_empty(*images)
    ensure_same_size(*images)


def ensure_non_negative(**values: Any) -> None:
    """
    Scalar parameters (gamma coefficients, scales) must be finite and >= 0.
    """
    for name, value in values.items():
        if not math.isfinite(value) or value < 0:
            raise InvalidArgumentError(f"{name} must be finite and non-negative, got {value}")
