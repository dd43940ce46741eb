import importlib
import logging
import unittest
from unittest.mock import patch
from pixgpu.infrastructure.gpu.device import GPUDevice
from pixgpu.kernel.system import config as config_module
from pixgpu.kernel.system.logging import get_logger, setup_logging


class TestConfig(unittest.TestCase):
    def test_env_flag(self):
        with patch.dict("os.environ", {"PIXGPU_BULK_TRANSFER": "0"}):
            self.assertFalse(config_module._env_flag("PIXGPU_BULK_TRANSFER", True))
        with patch.dict("os.environ", {"PIXGPU_BULK_TRANSFER": "yes"}):
            self.assertTrue(config_module._env_flag("PIXGPU_BULK_TRANSFER", False))
        with patch.dict("os.environ", {}, clear=True):
            self.assertTrue(config_module._env_flag("PIXGPU_BULK_TRANSFER", True))

    def test_defaults(self):
        self.assertGreaterEqual(config_module.APP_CONFIG.device_id, 0)

    def test_row_copies_by_default(self):
        try:
            with patch.dict("os.environ", {}, clear=True):
                importlib.reload(config_module)
                self.assertFalse(config_module.APP_CONFIG.bulk_contiguous_transfer)
        finally:
            importlib.reload(config_module)


class TestLogging(unittest.TestCase):
    def test_logger_namespace(self):
        self.assertEqual(get_logger("pixgpu.features").name, "pixgpu.features")
        self.assertEqual(get_logger("tests").name, "pixgpu.tests")

    def test_setup_is_idempotent(self):
        setup_logging("DEBUG")
        setup_logging("WARNING")
        root = logging.getLogger("pixgpu")
        self.assertEqual(root.level, logging.WARNING)
        self.assertEqual(len(root.handlers), 1)


class TestDevice(unittest.TestCase):
    def test_singleton(self):
        self.assertIs(GPUDevice.get(), GPUDevice.get())

    def test_unavailable_driver(self):
        with patch("pixgpu.infrastructure.gpu.device.cuda") as fake_cuda:
            fake_cuda.is_available.return_value = False
            dev = GPUDevice(0)
        self.assertFalse(dev.is_available)
        self.assertIsNone(dev.name)


if __name__ == "__main__":
    unittest.main()
