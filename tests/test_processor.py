import unittest
from unittest.mock import patch
import numpy as np
from pixgpu.domain.errors import DimensionMismatchError, InvalidArgumentError
from pixgpu.features.arithmetic.models import Operation
from pixgpu.infrastructure.host.image import HostImage
from pixgpu.services.processing import processor as processor_module
from pixgpu.services.processing.processor import ImageProcessor
from helpers import random_pixels


class TestImageProcessor(unittest.TestCase):
    def setUp(self):
        self.pa = random_pixels(6, 10, seed=20)
        self.pb = random_pixels(6, 10, seed=21)
        self.a = HostImage.from_array(self.pa, alignment=4)
        self.b = HostImage.from_array(self.pb)

    def test_backend(self):
        self.assertIn(ImageProcessor().backend_name, ("CUDA", "CUDA-SIM"))

    def test_run_binary(self):
        res = ImageProcessor().run(Operation.ABSOLUTE_DIFFERENCE, self.a, self.b)
        expected = np.abs(self.pa.astype(np.int16) - self.pb.astype(np.int16)).astype(np.uint8)
        np.testing.assert_array_equal(res.to_array(), expected)

    def test_run_into_padded_output(self):
        out = HostImage(10, 6, alignment=16)
        res = ImageProcessor().run("invert", self.a, out=out)
        self.assertIs(res, out)
        np.testing.assert_array_equal(out.to_array(), 255 - self.pa)

    def test_run_gamma(self):
        res = ImageProcessor().run(Operation.GAMMA_CORRECTION, self.a, a=1.0, gamma=1.0)
        np.testing.assert_array_equal(res.to_array(), self.pa)

    def test_host_validation_before_upload(self):
        proc = ImageProcessor()
        with patch.object(processor_module, "to_device") as upload:
            with self.assertRaises(DimensionMismatchError):
                proc.run(Operation.MAXIMUM, self.a, HostImage(10, 5))
            with self.assertRaises(InvalidArgumentError):
                proc.run(Operation.GAMMA_CORRECTION, self.a, a=-1.0, gamma=1.0)
            with self.assertRaises(InvalidArgumentError):
                proc.run(Operation.MAXIMUM, self.a)
            upload.assert_not_called()

    def test_cpu_fallback(self):
        proc = ImageProcessor(allow_cpu=True)
        with patch.object(proc.gpu, "is_available", False):
            self.assertEqual(proc.backend_name, "CPU")
            res = proc.run(Operation.MINIMUM, self.a, self.b)
        np.testing.assert_array_equal(res.to_array(), np.minimum(self.pa, self.pb))


if __name__ == "__main__":
    unittest.main()
