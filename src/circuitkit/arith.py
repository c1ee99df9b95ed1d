"""Integer helpers: square root, clamping, ceiling division."""

from __future__ import annotations
import math


def isqrt(n: int) -> int:
    """Floor of the square root of n."""
    if n < 0:
        raise ValueError(f"isqrt of negative number {n}")
    return math.isqrt(n)


def clamp(value: int, low: int, high: int) -> int:
    """Restrict value to [low, high]."""
    if low > high:
        raise ValueError(f"Empty range [{low}, {high}]")
    return max(low, min(value, high))


def ceil_div(a: int, b: int) -> int:
    """ceil(a / b) for a >= 0 and b > 0, without floats."""
    if b <= 0:
        raise ValueError("Divisor must be positive")
    if a < 0:
        raise ValueError("Dividend must be non-negative")
    return -(-a // b)
