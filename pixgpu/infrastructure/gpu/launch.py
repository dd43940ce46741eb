from dataclasses import dataclass
from typing import Tuple
from pixgpu.domain.types import MAX_THREADS_PER_BLOCK
from pixgpu.domain.errors import InvalidArgumentError


@dataclass(frozen=True)
class LaunchConfig:
    """
    1-D launch geometry. The grid may overshoot the element count,
    so every kernel guards its own index.
    """

    threads_per_block: int
    blocks_per_grid: int

    @property
    def total_threads(self) -> int:
        return self.threads_per_block * self.blocks_per_grid

    def as_launch(self) -> Tuple[int, int]:
        """(blocks, threads), the order numba's kernel[...] subscript expects."""
        return self.blocks_per_grid, self.threads_per_block


def get_launch_config(size: int) -> LaunchConfig:
    """
    Small images get one block sized to the image, larger ones
    get full blocks rounded up to cover every element.
    """
    if size < 0:
        raise InvalidArgumentError(f"Element count must be non-negative, got {size}")

    if size < MAX_THREADS_PER_BLOCK:
        return LaunchConfig(threads_per_block=size, blocks_per_grid=1)

    blocks = (size + MAX_THREADS_PER_BLOCK - 1) // MAX_THREADS_PER_BLOCK
    return LaunchConfig(threads_per_block=MAX_THREADS_PER_BLOCK, blocks_per_grid=blocks)
