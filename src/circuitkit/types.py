"""
Validatable Carrier Types

Values that arrive at an entry routine from outside the circuit. None of
these validate on construction: a caller can hand over any storage, and the
invariants are only established when the guard runs validate().

- BoundedVec: fixed-capacity storage plus a logical length; every slot at
  or past the length must be zero
- BoundedBytes: a BoundedVec whose slots are bytes
- UIntN: an unsigned integer declared to fit in N bits
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Sequence, Tuple

from .errors import OutOfBoundsError
from .guard import Validatable, ValidationResult, ensure


@dataclass(frozen=True)
class BoundedVec(Validatable):
    """Fixed-capacity vector with an explicit logical length."""

    storage: Tuple[int, ...]
    length: int

    def __post_init__(self):
        object.__setattr__(self, 'storage', tuple(self.storage))

    @classmethod
    def from_items(cls, items: Iterable[int], capacity: int) -> BoundedVec:
        """Build a well-formed vector: items followed by zero slots."""
        items = list(items)
        if len(items) > capacity:
            raise OutOfBoundsError(
                f"{len(items)} items exceed capacity {capacity}"
            )
        return cls(tuple(items) + (0,) * (capacity - len(items)), len(items))

    @property
    def capacity(self) -> int:
        return len(self.storage)

    @property
    def items(self) -> Tuple[int, ...]:
        """The logical contents, storage[:length]."""
        return self.storage[:self.length]

    def __len__(self) -> int:
        return self.length

    def validate(self) -> ValidationResult:
        if not 0 <= self.length <= self.capacity:
            return ValidationResult.failed(
                f"length {self.length} outside capacity {self.capacity}"
            )
        for index in range(self.length, self.capacity):
            if self.storage[index] != 0:
                return ValidationResult.failed(
                    f"slot {index} past length {self.length} is not zero"
                )
        return ValidationResult.passed()


@dataclass(frozen=True)
class BoundedBytes(BoundedVec):
    """BoundedVec whose slots are bytes."""

    @classmethod
    def from_bytes(cls, data: Sequence[int], capacity: int) -> BoundedBytes:
        return cls.from_items(data, capacity)

    def to_bytes(self) -> bytes:
        return bytes(self.items)

    def validate(self) -> ValidationResult:
        result = super().validate()
        if not result:
            return result
        for index, byte in enumerate(self.items):
            if not 0 <= byte <= 0xFF:
                return ValidationResult.failed(f"slot {index} is not a byte: {byte}")
        return result


@dataclass(frozen=True)
class UIntN(Validatable):
    """Unsigned integer declared to fit in bits bits."""

    value: int
    bits: int

    def validate(self) -> ValidationResult:
        return ensure(
            0 <= self.value < (1 << self.bits),
            f"{self.value} does not fit in u{self.bits}",
        )

    def __int__(self) -> int:
        return self.value
