import math
from typing import Any, Callable
from numba import cuda, uint8  # type: ignore
from pixgpu.domain.types import TABLE_SIZE

# Every kernel maps one thread to one pixel and must guard idx < size:
# the launch grid is rounded up to whole blocks.


@cuda.jit
def absolute_difference_kernel(in1, in2, out, size):
    idx = cuda.grid(1)
    if idx < size:
        a = in1[idx]
        b = in2[idx]
        out[idx] = a - b if a > b else b - a


@cuda.jit
def bitwise_and_kernel(in1, in2, out, size):
    idx = cuda.grid(1)
    if idx < size:
        out[idx] = in1[idx] & in2[idx]


@cuda.jit
def bitwise_or_kernel(in1, in2, out, size):
    idx = cuda.grid(1)
    if idx < size:
        out[idx] = in1[idx] | in2[idx]


@cuda.jit
def bitwise_xor_kernel(in1, in2, out, size):
    idx = cuda.grid(1)
    if idx < size:
        out[idx] = in1[idx] ^ in2[idx]


@cuda.jit
def invert_kernel(in1, out, size):
    idx = cuda.grid(1)
    if idx < size:
        out[idx] = ~in1[idx]


@cuda.jit
def maximum_kernel(in1, in2, out, size):
    idx = cuda.grid(1)
    if idx < size:
        a = in1[idx]
        b = in2[idx]
        out[idx] = a if a > b else b


@cuda.jit
def minimum_kernel(in1, in2, out, size):
    idx = cuda.grid(1)
    if idx < size:
        a = in1[idx]
        b = in2[idx]
        out[idx] = a if a < b else b


@cuda.jit
def subtract_kernel(in1, in2, out, size):
    """
    Saturating: never wraps below zero.
    """
    idx = cuda.grid(1)
    if idx < size:
        a = in1[idx]
        b = in2[idx]
        out[idx] = a - b if a > b else 0


def make_table_kernel(build_entry: Callable[..., Any]) -> Any:
    """
    Builds a table-driven per-pixel kernel.

    `build_entry(value, p1, p2)` is a device function returning the output
    for input sample `value`. Thread 0 of each block fills a 256-entry table
    in shared memory, the block synchronises, then every thread looks its
    pixel up. The barrier sits before the bounds check so that all threads
    of the block reach it.
    """

    @cuda.jit
    def table_kernel(in1, out, size, p1, p2):
        table = cuda.shared.array(TABLE_SIZE, dtype=uint8)

        if cuda.threadIdx.x == 0:
            for value in range(TABLE_SIZE):
                table[value] = build_entry(value, p1, p2)

        cuda.syncthreads()

        idx = cuda.grid(1)
        if idx < size:
            out[idx] = table[in1[idx]]

    return table_kernel


@cuda.jit(device=True)
def gamma_entry(value, a, gamma):
    """
    a * (v / 255) ** gamma, rescaled to [0, 255] and rounded.
    """
    corrected = a * math.pow(value / 255.0, gamma) * 255.0 + 0.5
    if corrected >= 255.0:
        return 255
    return int(corrected)


gamma_correction_kernel = make_table_kernel(gamma_entry)
