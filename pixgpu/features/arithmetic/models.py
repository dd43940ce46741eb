from dataclasses import dataclass
from enum import StrEnum
from typing import Tuple


class Operation(StrEnum):
    ABSOLUTE_DIFFERENCE = "absolute_difference"
    BITWISE_AND = "bitwise_and"
    BITWISE_OR = "bitwise_or"
    BITWISE_XOR = "bitwise_xor"
    GAMMA_CORRECTION = "gamma_correction"
    INVERT = "invert"
    MAXIMUM = "maximum"
    MINIMUM = "minimum"
    SUBTRACT = "subtract"


@dataclass(frozen=True)
class OperationSpec:
    """
    Static shape of an operation: how many input images, which scalars.
    """

    arity: int
    params: Tuple[str, ...] = ()


OPERATION_SPECS = {
    Operation.ABSOLUTE_DIFFERENCE: OperationSpec(arity=2),
    Operation.BITWISE_AND: OperationSpec(arity=2),
    Operation.BITWISE_OR: OperationSpec(arity=2),
    Operation.BITWISE_XOR: OperationSpec(arity=2),
    Operation.GAMMA_CORRECTION: OperationSpec(arity=1, params=("a", "gamma")),
    Operation.INVERT: OperationSpec(arity=1),
    Operation.MAXIMUM: OperationSpec(arity=2),
    Operation.MINIMUM: OperationSpec(arity=2),
    Operation.SUBTRACT: OperationSpec(arity=2),
}
