from typing import List, Optional
from pixgpu.features.arithmetic.logic import apply
from pixgpu.features.arithmetic.models import Operation, OPERATION_SPECS
from pixgpu.features.arithmetic.reference import REFERENCE_OPERATIONS
from pixgpu.domain.errors import InvalidArgumentError
from pixgpu.infrastructure.gpu.device import GPUDevice
from pixgpu.infrastructure.gpu.resources import DeviceImage
from pixgpu.infrastructure.gpu.transfer import to_device, to_host
from pixgpu.infrastructure.host.image import HostImage
from pixgpu.kernel.image.validation import ensure_valid, ensure_non_negative
from pixgpu.kernel.system.logging import get_logger

logger = get_logger(__name__)


class ImageProcessor:
    """
    Runs pixel operations on host images.
    Uploads inputs, runs the kernel, downloads the result. Falls back to the
    OpenCV reference when no device is available and `allow_cpu` is set.
    """

    def __init__(self, allow_cpu: bool = False) -> None:
        self.gpu = GPUDevice.get()
        self.allow_cpu = allow_cpu
        if not self.gpu.is_available:
            if allow_cpu:
                logger.warning("ImageProcessor: GPU unavailable, using CPU fallback")
            else:
                logger.warning("ImageProcessor: GPU unavailable, device operations will fail")

    @property
    def backend_name(self) -> str:
        if self.gpu.is_available:
            return "CUDA-SIM" if self.gpu.is_simulator else "CUDA"
        return "CPU" if self.allow_cpu else "NONE"

    def run(
        self,
        op: Operation,
        *images: HostImage,
        out: Optional[HostImage] = None,
        **params: float,
    ) -> HostImage:
        """
        Executes `op` and returns the result as a host image. With `out`,
        the result is written into it (padding preserved).
        """
        try:
            op = Operation(op)
        except ValueError as e:
            raise InvalidArgumentError(f"Unknown operation: {op}") from e
        spec = OPERATION_SPECS[op]
        if len(images) != spec.arity:
            raise InvalidArgumentError(f"{op} takes {spec.arity} image(s), got {len(images)}")
        if set(params) != set(spec.params):
            raise InvalidArgumentError(f"{op} expects parameters {spec.params}, got {tuple(params)}")

        # fail on the host before anything touches the device
        if params:
            ensure_non_negative(**params)
        if out is None:
            ensure_valid(*images)
        else:
            ensure_valid(*images, out)

        if not self.gpu.is_available and self.allow_cpu:
            return self._run_cpu(op, list(images), out, **params)

        uploaded: List[DeviceImage] = []
        try:
            for img in images:
                uploaded.append(to_device(img))
            result = apply(op, *uploaded, **params)
            try:
                return to_host(result, out)
            finally:
                result.release()
        finally:
            for dev in uploaded:
                dev.release()

    def _run_cpu(self, op: Operation, images: List[HostImage], out: Optional[HostImage], **params: float) -> HostImage:
        res = REFERENCE_OPERATIONS[op](*[img.to_array() for img in images], **params)
        if out is None:
            return HostImage.from_array(res)
        out.view()[:, :] = res
        return out
