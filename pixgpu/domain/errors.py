class PixGPUError(Exception):
    """
    Base for every failure reported by pixgpu.
    """


class ValidationError(PixGPUError, ValueError):
    """
    Host-side precondition failure. Raised before any device work.
    """


class EmptyImageError(ValidationError):
    pass


class DimensionMismatchError(ValidationError):
    pass


class InvalidArgumentError(ValidationError):
    pass


class DeviceError(PixGPUError, RuntimeError):
    """
    Failure reported by the CUDA runtime.
    """


class AllocationError(DeviceError):
    pass


class KernelLaunchError(DeviceError):
    pass


class TransferError(DeviceError):
    pass
