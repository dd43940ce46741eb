import os
import pytest

# Run kernels on numba's CUDA simulator unless a real device is requested.
# Must be set before numba is first imported.
if os.environ.get("PIXGPU_TEST_REAL_GPU") != "1":
    os.environ["NUMBA_ENABLE_CUDASIM"] = "1"


@pytest.fixture(scope="session", autouse=True)
def gpu_device():
    from pixgpu.infrastructure.gpu.device import GPUDevice

    gpu = GPUDevice.get()
    if not gpu.is_available:
        pytest.skip("No CUDA device or simulator available")
    yield gpu
