from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional
from pixgpu.domain.errors import InvalidArgumentError, KernelLaunchError
from pixgpu.infrastructure.gpu.launch import get_launch_config
from pixgpu.infrastructure.gpu.resources import DeviceImage
from pixgpu.kernel.image.validation import ensure_valid, ensure_non_negative
from pixgpu.kernel.system.logging import get_logger
from pixgpu.features.arithmetic.models import Operation, OPERATION_SPECS
from pixgpu.features.arithmetic.kernels import (
    absolute_difference_kernel,
    bitwise_and_kernel,
    bitwise_or_kernel,
    bitwise_xor_kernel,
    gamma_correction_kernel,
    invert_kernel,
    maximum_kernel,
    minimum_kernel,
    subtract_kernel,
)

logger = get_logger(__name__)


def _launch(name: str, kernel: Any, out: DeviceImage, *args: Any) -> None:
    """
    Launches over out.size elements. Any launch-time fault becomes
    KernelLaunchError; `out` contents are then unspecified.
    """
    config = get_launch_config(out.size)
    blocks, threads = config.as_launch()
    logger.debug(f"{name}: launching {blocks}x{threads} for {out.size} px")
    try:
        kernel[blocks, threads](*args)
    except Exception as e:
        logger.error(f"{name}: kernel launch failed: {e}")
        raise KernelLaunchError(f"{name}: kernel launch failed") from e


def _unary_into(name: str, kernel: Any, image: DeviceImage, out: DeviceImage) -> None:
    ensure_valid(image, out)
    _launch(name, kernel, out, image.data, out.data, out.size)


def _binary_into(name: str, kernel: Any, in1: DeviceImage, in2: DeviceImage, out: DeviceImage) -> None:
    ensure_valid(in1, in2, out)
    _launch(name, kernel, out, in1.data, in2.data, out.data, out.size)


def _unary(name: str, kernel: Any, image: DeviceImage) -> DeviceImage:
    ensure_valid(image)
    out = DeviceImage(image.width, image.height)
    _unary_into(name, kernel, image, out)
    return out


def _binary(name: str, kernel: Any, in1: DeviceImage, in2: DeviceImage) -> DeviceImage:
    ensure_valid(in1, in2)
    out = DeviceImage(in1.width, in1.height)
    _binary_into(name, kernel, in1, in2, out)
    return out


def absolute_difference(in1: DeviceImage, in2: DeviceImage) -> DeviceImage:
    """|in1 - in2| per pixel."""
    return _binary("absolute_difference", absolute_difference_kernel, in1, in2)


def absolute_difference_into(in1: DeviceImage, in2: DeviceImage, out: DeviceImage) -> None:
    _binary_into("absolute_difference", absolute_difference_kernel, in1, in2, out)


def bitwise_and(in1: DeviceImage, in2: DeviceImage) -> DeviceImage:
    return _binary("bitwise_and", bitwise_and_kernel, in1, in2)


def bitwise_and_into(in1: DeviceImage, in2: DeviceImage, out: DeviceImage) -> None:
    _binary_into("bitwise_and", bitwise_and_kernel, in1, in2, out)


def bitwise_or(in1: DeviceImage, in2: DeviceImage) -> DeviceImage:
    return _binary("bitwise_or", bitwise_or_kernel, in1, in2)


def bitwise_or_into(in1: DeviceImage, in2: DeviceImage, out: DeviceImage) -> None:
    _binary_into("bitwise_or", bitwise_or_kernel, in1, in2, out)


def bitwise_xor(in1: DeviceImage, in2: DeviceImage) -> DeviceImage:
    return _binary("bitwise_xor", bitwise_xor_kernel, in1, in2)


def bitwise_xor_into(in1: DeviceImage, in2: DeviceImage, out: DeviceImage) -> None:
    _binary_into("bitwise_xor", bitwise_xor_kernel, in1, in2, out)


def gamma_correction(image: DeviceImage, a: float, gamma: float) -> DeviceImage:
    """
    out = a * (in / 255) ** gamma * 255, rounded and clamped to [0, 255].
    Both coefficients must be non-negative.
    """
    ensure_non_negative(a=a, gamma=gamma)
    ensure_valid(image)
    out = DeviceImage(image.width, image.height)
    gamma_correction_into(image, out, a, gamma)
    return out


def gamma_correction_into(image: DeviceImage, out: DeviceImage, a: float, gamma: float) -> None:
    ensure_non_negative(a=a, gamma=gamma)
    ensure_valid(image, out)
    _launch("gamma_correction", gamma_correction_kernel, out, image.data, out.data, out.size, float(a), float(gamma))


def invert(image: DeviceImage) -> DeviceImage:
    """Bitwise complement (255 - v)."""
    return _unary("invert", invert_kernel, image)


def invert_into(image: DeviceImage, out: DeviceImage) -> None:
    _unary_into("invert", invert_kernel, image, out)


def maximum(in1: DeviceImage, in2: DeviceImage) -> DeviceImage:
    return _binary("maximum", maximum_kernel, in1, in2)


def maximum_into(in1: DeviceImage, in2: DeviceImage, out: DeviceImage) -> None:
    _binary_into("maximum", maximum_kernel, in1, in2, out)


def minimum(in1: DeviceImage, in2: DeviceImage) -> DeviceImage:
    return _binary("minimum", minimum_kernel, in1, in2)


def minimum_into(in1: DeviceImage, in2: DeviceImage, out: DeviceImage) -> None:
    _binary_into("minimum", minimum_kernel, in1, in2, out)


def subtract(in1: DeviceImage, in2: DeviceImage) -> DeviceImage:
    """Saturating in1 - in2: 0 wherever in1 <= in2."""
    return _binary("subtract", subtract_kernel, in1, in2)


def subtract_into(in1: DeviceImage, in2: DeviceImage, out: DeviceImage) -> None:
    _binary_into("subtract", subtract_kernel, in1, in2, out)


@dataclass(frozen=True)
class OperationBinding:
    allocating: Callable[..., DeviceImage]
    in_place: Callable[..., None]


OPERATIONS: Dict[Operation, OperationBinding] = {
    Operation.ABSOLUTE_DIFFERENCE: OperationBinding(absolute_difference, absolute_difference_into),
    Operation.BITWISE_AND: OperationBinding(bitwise_and, bitwise_and_into),
    Operation.BITWISE_OR: OperationBinding(bitwise_or, bitwise_or_into),
    Operation.BITWISE_XOR: OperationBinding(bitwise_xor, bitwise_xor_into),
    Operation.GAMMA_CORRECTION: OperationBinding(gamma_correction, gamma_correction_into),
    Operation.INVERT: OperationBinding(invert, invert_into),
    Operation.MAXIMUM: OperationBinding(maximum, maximum_into),
    Operation.MINIMUM: OperationBinding(minimum, minimum_into),
    Operation.SUBTRACT: OperationBinding(subtract, subtract_into),
}


def apply(op: Operation, *images: DeviceImage, out: Optional[DeviceImage] = None, **params: float) -> DeviceImage:
    """
    Dispatches by operation name. With `out`, writes in place and returns it.
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

    binding = OPERATIONS[op]
    if out is None:
        return binding.allocating(*images, **params)
    binding.in_place(*images, out, **params)
    return out
