import numpy as np
from pixgpu.infrastructure.gpu.resources import DeviceImage
from pixgpu.infrastructure.gpu.transfer import to_device, to_host
from pixgpu.infrastructure.host.image import HostImage


def upload(pixels, alignment: int = 1) -> DeviceImage:
    return to_device(HostImage.from_array(np.asarray(pixels, dtype=np.uint8), alignment))


def download(image: DeviceImage) -> np.ndarray:
    return to_host(image).to_array()


def random_pixels(height: int, width: int, seed: int = 0) -> np.ndarray:
    rng = np.random.default_rng(seed)
    return rng.integers(0, 256, size=(height, width), dtype=np.uint8)


def all_values() -> np.ndarray:
    """16x16 image holding every sample value once."""
    return np.arange(256, dtype=np.uint8).reshape(16, 16)
