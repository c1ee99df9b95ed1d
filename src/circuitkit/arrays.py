"""
Fixed-Size Array Helpers

Circuit arrays have a length known up front, so these helpers never grow
an array implicitly: reading or padding past the requested size raises
OutOfBoundsError.
"""

from __future__ import annotations
from typing import List, Sequence, Tuple, TypeVar

from .errors import OutOfBoundsError

T = TypeVar('T')


def subarray(items: Sequence[T], start: int, length: int) -> List[T]:
    """items[start:start+length]; the whole window must lie inside items."""
    if start < 0 or length < 0 or start + length > len(items):
        raise OutOfBoundsError(
            f"Window [{start}, {start + length}) outside array of length {len(items)}"
        )
    return list(items[start:start + length])


def concat(first: Sequence[T], second: Sequence[T]) -> List[T]:
    return list(first) + list(second)


def _padding(items: Sequence[T], size: int) -> int:
    missing = size - len(items)
    if missing < 0:
        raise OutOfBoundsError(
            f"Array of length {len(items)} does not fit in size {size}"
        )
    return missing


def pad_end(items: Sequence[T], size: int, fill: T = 0) -> List[T]:
    """Append fill until the array has size elements."""
    return list(items) + [fill] * _padding(items, size)


def pad_start(items: Sequence[T], size: int, fill: T = 0) -> List[T]:
    """Prepend fill until the array has size elements."""
    return [fill] * _padding(items, size) + list(items)


def enumerate_array(items: Sequence[T]) -> List[Tuple[int, T]]:
    return list(enumerate(items))
