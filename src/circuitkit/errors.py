"""
Error Hierarchy for circuitkit

Two error kinds belong to the core:
- PackingPreconditionError: the packing ratio does not fit the modulus
  (configuration time, never caused by caller data)
- ValidationFailure: a guarded entry rejected one of its arguments

The remaining errors cover the helper set. Each one also derives from the
builtin exception callers would naturally catch.
"""

from __future__ import annotations
from typing import Optional


class CircuitKitError(Exception):
    """Base class for every error raised by circuitkit."""


# =============================================================================
# CORE ERRORS
# =============================================================================

class PackingPreconditionError(CircuitKitError):
    """Raised when a field configuration cannot hold its packing ratio."""

    def __init__(self, field_name: str, bit_length: int, ratio: int):
        self.field_name = field_name
        self.bit_length = bit_length
        self.ratio = ratio
        super().__init__(
            f"{field_name}: {ratio} bytes per element does not fit strictly "
            f"below a {bit_length}-bit modulus"
        )


class ValidationFailure(CircuitKitError):
    """
    Raised by a guarded entry when an argument fails its predicate.

    Attributes:
        position: Declared index of the rejected parameter
        reason: Reason reported by the predicate, verbatim
        parameter: Parameter name, when known
        entry: Qualified name of the entry routine, when known
    """

    def __init__(
        self,
        position: int,
        reason: str,
        parameter: Optional[str] = None,
        entry: Optional[str] = None
    ):
        self.position = position
        self.reason = reason
        self.parameter = parameter
        self.entry = entry

        where = f"argument at position {position}"
        if parameter is not None:
            where += f" ({parameter})"
        prefix = f"{entry}: " if entry else ""
        super().__init__(f"{prefix}validation failed for {where}: {reason}")


# =============================================================================
# CONFIGURATION AND HELPER ERRORS
# =============================================================================

class UnknownFieldError(CircuitKitError, KeyError):
    """Raised when a field preset name is not registered."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown field preset: {name!r}")

    def __str__(self) -> str:
        return self.args[0]


class InvalidDigitError(CircuitKitError, ValueError):
    """Raised when a decimal string contains something other than digits."""

    def __init__(self, text: str, index: Optional[int] = None):
        self.text = text
        self.index = index
        if index is None:
            message = "Cannot parse an empty string as an integer"
        else:
            message = f"Invalid decimal digit {text[index]!r} at index {index}"
        super().__init__(message)


class OutOfBoundsError(CircuitKitError, IndexError):
    """Raised when an array helper would read or write past its bounds."""


class EncodingOverflowError(CircuitKitError, ValueError):
    """Raised when a value does not fit the requested encoded width."""

    def __init__(self, value: int, width: int):
        self.value = value
        self.width = width
        super().__init__(f"Value {value} does not fit in {width} bytes")
