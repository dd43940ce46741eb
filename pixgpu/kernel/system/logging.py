import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
ROOT_LOGGER_NAME = "pixgpu"

_configured = False


def setup_logging(level: Optional[str] = None) -> None:
    """
    Attaches a stderr handler to the package root logger.
    Safe to call more than once.
    """
    global _configured
    from pixgpu.kernel.system.config import APP_CONFIG

    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel((level or APP_CONFIG.log_level).upper())

    if _configured:
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    root.propagate = False
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """
    Module logger under the package root.
    """
    if not name.startswith(ROOT_LOGGER_NAME):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)
