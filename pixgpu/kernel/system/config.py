import os
from dataclasses import dataclass


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() not in ("0", "false", "no", "off", "")


@dataclass(frozen=True)
class AppConfig:
    """
    Process-wide settings, read once from the environment.
    """

    device_id: int
    log_level: str
    bulk_contiguous_transfer: bool


APP_CONFIG = AppConfig(
    device_id=int(os.getenv("PIXGPU_DEVICE_ID", "0")),
    log_level=os.getenv("PIXGPU_LOG_LEVEL", "INFO"),
    bulk_contiguous_transfer=_env_flag("PIXGPU_BULK_TRANSFER", False),
)
