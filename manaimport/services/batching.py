from collections.abc import Iterator, Sequence
from typing import TypeVar

T = TypeVar("T")

DEFAULT_BATCH_SIZE = 75


def iter_batches(items: Sequence[T], size: int = DEFAULT_BATCH_SIZE) -> Iterator[list[T]]:
    """
    Split items into contiguous batches of `size`, preserving order.

    The last batch may be shorter. Each call starts again from the
    beginning of `items`.

    Raises:
        ValueError: If size is less than 1
    """
    if size < 1:
        raise ValueError(f"Batch size must be at least 1, got {size}")

    for start in range(0, len(items), size):
        yield list(items[start : start + size])
