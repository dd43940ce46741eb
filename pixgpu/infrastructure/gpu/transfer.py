from typing import Callable, Optional, cast
from pixgpu.domain.types import DeviceArray, PixelBuffer
from pixgpu.domain.errors import TransferError
from pixgpu.infrastructure.gpu.resources import DeviceImage
from pixgpu.infrastructure.host.image import HostImage
from pixgpu.kernel.image.validation import ensure_valid
from pixgpu.kernel.system.config import APP_CONFIG
from pixgpu.kernel.system.logging import get_logger

logger = get_logger(__name__)


def _copy_rows(host: HostImage, device: DeviceImage, copy_row: Callable[[int, int, int], None], direction: str) -> None:
    """
    Runs copy_row(y, host_offset, device_offset) for every row, or once for the
    whole image when both sides are packed and bulk copies are enabled.
    Stops at the first failing row; rows already copied stay as they are.
    """
    width, height = device.width, device.height

    if APP_CONFIG.bulk_contiguous_transfer and host.row_size == width:
        try:
            copy_row(-1, 0, 0)
        except Exception as e:
            logger.error(f"Transfer {direction} failed for {width}x{height} image: {e}")
            raise TransferError(f"Transfer {direction} failed for {width}x{height} image") from e
        return

    for y in range(height):
        try:
            copy_row(y, y * host.row_size, y * width)
        except Exception as e:
            logger.error(f"Transfer {direction} failed at row {y}/{height}: {e}")
            raise TransferError(f"Transfer {direction} failed at row {y} of {height}") from e


def to_device(host: HostImage, device: Optional[DeviceImage] = None) -> DeviceImage:
    """
    Host -> device. Allocates a packed device image unless one is supplied.
    Copies row by row; on failure, rows before the failing one are already
    on the device. With bulk transfers enabled a packed image is copied in one
    call instead, and a failure leaves the device contents unspecified.
    """
    if device is None:
        ensure_valid(host)
        device = DeviceImage(host.width, host.height)
    else:
        ensure_valid(host, device)

    src = cast(PixelBuffer, host.data)
    dst = cast(DeviceArray, device.data)
    width = device.width

    def copy_row(y: int, host_offset: int, device_offset: int) -> None:
        if y < 0:
            dst.copy_to_device(src[: device.size])
        else:
            dst[device_offset : device_offset + width].copy_to_device(src[host_offset : host_offset + width])

    _copy_rows(host, device, copy_row, "host->device")
    logger.debug(f"Uploaded {host!r} to {device!r}")
    return device


def to_host(device: DeviceImage, host: Optional[HostImage] = None) -> HostImage:
    """
    Device -> host. Allocates a packed host image unless one is supplied.
    Blocks until device work writing `device` has completed. Failure
    granularity is the same as for to_device().
    """
    if host is None:
        ensure_valid(device)
        host = HostImage(device.width, device.height)
    else:
        ensure_valid(device, host)

    src = cast(DeviceArray, device.data)
    dst = cast(PixelBuffer, host.data)
    width = device.width

    def copy_row(y: int, host_offset: int, device_offset: int) -> None:
        if y < 0:
            src.copy_to_host(dst[: device.size])
        else:
            src[device_offset : device_offset + width].copy_to_host(dst[host_offset : host_offset + width])

    _copy_rows(host, device, copy_row, "device->host")
    logger.debug(f"Downloaded {device!r} to {host!r}")
    return host
