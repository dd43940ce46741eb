import unittest
from pixgpu.domain.errors import (
    DimensionMismatchError,
    EmptyImageError,
    InvalidArgumentError,
    ValidationError,
)
from pixgpu.infrastructure.host.image import HostImage
from pixgpu.kernel.image.validation import (
    ensure_non_negative,
    ensure_not_empty,
    ensure_same_size,
    ensure_valid,
)


class TestValidation(unittest.TestCase):
    def test_empty_rejected(self):
        with self.assertRaises(EmptyImageError):
            ensure_not_empty(HostImage(4, 4), HostImage(0, 4))

    def test_size_mismatch_rejected(self):
        with self.assertRaises(DimensionMismatchError):
            ensure_same_size(HostImage(4, 4), HostImage(4, 4), HostImage(4, 5))
        with self.assertRaises(DimensionMismatchError):
            ensure_same_size(HostImage(3, 4), HostImage(4, 4))

    def test_stride_does_not_matter(self):
        """Only width/height are compared, not the row layout."""
        ensure_valid(HostImage(5, 3, alignment=1), HostImage(5, 3, alignment=8))

    def test_empty_checked_first(self):
        with self.assertRaises(EmptyImageError):
            ensure_valid(HostImage(4, 4), HostImage(0, 0))

    def test_negative_scalars(self):
        ensure_non_negative(a=0.0, gamma=2.2)
        with self.assertRaises(InvalidArgumentError):
            ensure_non_negative(a=-0.1, gamma=1.0)
        with self.assertRaises(InvalidArgumentError):
            ensure_non_negative(gamma=float("nan"))
        with self.assertRaises(InvalidArgumentError):
            ensure_non_negative(a=float("inf"), gamma=1.0)
        with self.assertRaises(InvalidArgumentError):
            ensure_non_negative(a=1.0, gamma=float("-inf"))

    def test_hierarchy(self):
        """Validation failures are also plain ValueErrors."""
        self.assertTrue(issubclass(EmptyImageError, ValidationError))
        self.assertTrue(issubclass(DimensionMismatchError, ValueError))


if __name__ == "__main__":
    unittest.main()
