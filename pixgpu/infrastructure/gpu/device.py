from typing import Optional
from numba import config as numba_config
from numba import cuda
from pixgpu.kernel.system.config import APP_CONFIG
from pixgpu.kernel.system.logging import get_logger

logger = get_logger(__name__)


class GPUDevice:
    """
    Process-wide handle on the selected CUDA device (or numba's simulator).
    """

    _instance: Optional["GPUDevice"] = None

    def __init__(self, device_id: int = 0) -> None:
        self.device_id = device_id
        self.is_simulator = bool(numba_config.ENABLE_CUDASIM)
        self.is_available = False
        self.name: Optional[str] = None
        self._initialize()

    @classmethod
    def get(cls) -> "GPUDevice":
        if cls._instance is None:
            cls._instance = cls(APP_CONFIG.device_id)
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        cls._instance = None

    def _initialize(self) -> None:
        try:
            if not cuda.is_available():
                logger.warning("GPUDevice: CUDA driver or device not found")
                return
            cuda.select_device(self.device_id)
        except Exception as e:
            logger.error(f"GPUDevice: Failed to select device {self.device_id}: {e}")
            return

        self.is_available = True
        self.name = self._query_name()
        backend = "simulator" if self.is_simulator else "CUDA"
        logger.info(f"GPUDevice: Using {self.name} ({backend}, id={self.device_id})")

    def _query_name(self) -> str:
        try:
            name = getattr(cuda.get_current_device(), "name", None)
        except Exception:
            name = None
        if isinstance(name, bytes):
            return name.decode()
        return str(name) if name else "unknown"

    def synchronize(self) -> None:
        """Blocks until all queued device work has finished."""
        if self.is_available:
            cuda.synchronize()
