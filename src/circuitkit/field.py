"""
Prime Field Parameters and Elements

Every circuit value lives in F_M for a fixed large prime M. The only property
of M the rest of the library needs is its bit length B, from which the
packing ratio is derived:

    K = floor((B - 1) / 8)

K whole bytes always compose to an integer below 2^(B-1) <= M, so a packed
group can never wrap around the modulus. For the canonical BN254 scalar
field (B = 254) this gives K = 31.

The active field is configuration: presets live in FIELD_PRESETS and the
process default is chosen by the CIRCUITKIT_FIELD environment variable.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Optional, Union
import logging
import os

from .errors import PackingPreconditionError, UnknownFieldError

logger = logging.getLogger(__name__)

# Environment variable naming the default preset
FIELD_ENV_VAR = 'CIRCUITKIT_FIELD'

BITS_PER_BYTE = 8


@dataclass(frozen=True)
class FieldParams:
    """
    Parameters of one prime field.

    The packing ratio is derived from the modulus unless bytes_per_element
    is given explicitly, in which case it is checked against the modulus
    when the parameters are built.
    """

    name: str
    modulus: int
    bytes_per_element: Optional[int] = None

    def __post_init__(self):
        if self.modulus < 2:
            raise ValueError(f"{self.name}: modulus must be at least 2")
        ratio = self.packing_ratio
        if ratio < 1 or ratio * BITS_PER_BYTE >= self.bit_length:
            raise PackingPreconditionError(self.name, self.bit_length, ratio)

    @property
    def bit_length(self) -> int:
        """Bit length B of the modulus."""
        return self.modulus.bit_length()

    @property
    def packing_ratio(self) -> int:
        """Whole bytes K that fit in one element strictly below the modulus."""
        if self.bytes_per_element is not None:
            return self.bytes_per_element
        return (self.bit_length - 1) // BITS_PER_BYTE

    @property
    def byte_length(self) -> int:
        """Bytes needed to hold any element (canonical encoding width)."""
        return (self.bit_length + BITS_PER_BYTE - 1) // BITS_PER_BYTE

    def element(self, value: int) -> FieldElement:
        """Build an element of this field."""
        return FieldElement(value, self)


# =============================================================================
# Presets
# =============================================================================

# Scalar field of BN254 (alt_bn128), the canonical circuit field
BN254 = FieldParams(
    name='bn254',
    modulus=21888242871839275222246405745257275088548364400416034343698204186575808495617,
)

# Scalar field of BLS12-381
BLS12_381 = FieldParams(
    name='bls12_381',
    modulus=0x73eda753299d7d483339d80809a1d80553bda402fffe5bfeffffffff00000001,
)

# Goldilocks: p = 2^64 - 2^32 + 1
GOLDILOCKS = FieldParams(
    name='goldilocks',
    modulus=(1 << 64) - (1 << 32) + 1,
)

FIELD_PRESETS: Dict[str, FieldParams] = {
    params.name: params for params in (BN254, BLS12_381, GOLDILOCKS)
}

DEFAULT_FIELD = BN254.name


def get_field(name: str) -> FieldParams:
    """Look up a preset by name (case-insensitive)."""
    try:
        return FIELD_PRESETS[name.strip().lower()]
    except KeyError:
        raise UnknownFieldError(name) from None


def default_params() -> FieldParams:
    """
    Field parameters used when a caller does not pass any.

    Reads CIRCUITKIT_FIELD on every call; unset or empty means BN254.
    """
    name = os.environ.get(FIELD_ENV_VAR) or DEFAULT_FIELD
    params = get_field(name)
    logger.debug("Using field preset %s (%d-bit, K=%d)",
                 params.name, params.bit_length, params.packing_ratio)
    return params


def resolve_params(params: Optional[FieldParams]) -> FieldParams:
    """Return params, or the process default when params is None."""
    return params if params is not None else default_params()


# =============================================================================
# Field Elements
# =============================================================================

class FieldElement:
    """
    Element of a prime field.

    Values are reduced on construction, so every element satisfies
    0 <= value < modulus. Elements are immutable.
    """

    __slots__ = ('value', 'params')

    def __init__(self, value: int, params: Optional[FieldParams] = None):
        params = resolve_params(params)
        object.__setattr__(self, 'params', params)
        object.__setattr__(self, 'value', value % params.modulus)

    def __setattr__(self, name, value):
        raise AttributeError("FieldElement is immutable")

    @property
    def modulus(self) -> int:
        return self.params.modulus

    def _coerce(self, other: Union[FieldElement, int]) -> int:
        if isinstance(other, FieldElement):
            if other.params.modulus != self.params.modulus:
                raise ValueError(
                    f"Cannot mix elements of {self.params.name} and {other.params.name}"
                )
            return other.value
        return other

    # =========================================================================
    # Arithmetic Operations
    # =========================================================================

    def __add__(self, other: Union[FieldElement, int]) -> FieldElement:
        return FieldElement(self.value + self._coerce(other), self.params)

    __radd__ = __add__

    def __sub__(self, other: Union[FieldElement, int]) -> FieldElement:
        return FieldElement(self.value - self._coerce(other), self.params)

    def __rsub__(self, other: int) -> FieldElement:
        return FieldElement(other - self.value, self.params)

    def __mul__(self, other: Union[FieldElement, int]) -> FieldElement:
        return FieldElement(self.value * self._coerce(other), self.params)

    __rmul__ = __mul__

    def __neg__(self) -> FieldElement:
        return FieldElement(-self.value, self.params)

    def __truediv__(self, other: Union[FieldElement, int]) -> FieldElement:
        """Division in F_M (multiplication by inverse)."""
        return self * FieldElement(self._coerce(other), self.params).inverse()

    def __pow__(self, exp: int) -> FieldElement:
        if exp < 0:
            return self.inverse() ** (-exp)
        return FieldElement(pow(self.value, exp, self.modulus), self.params)

    def inverse(self) -> FieldElement:
        """
        Multiplicative inverse using Fermat's little theorem.

        a^-1 = a^(M-2) mod M
        """
        if self.value == 0:
            raise ZeroDivisionError("Cannot invert zero")
        return FieldElement(pow(self.value, self.modulus - 2, self.modulus), self.params)

    # =========================================================================
    # Comparison Operations
    # =========================================================================

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FieldElement):
            return self.modulus == other.modulus and self.value == other.value
        # Ints compare by exact value so that equal objects hash alike
        if isinstance(other, int):
            return self.value == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.value)

    def __int__(self) -> int:
        return self.value

    def __repr__(self) -> str:
        return f"FieldElement({self.value}, {self.params.name})"

    def __str__(self) -> str:
        return str(self.value)

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_bytes(self) -> bytes:
        """Serialize to byte_length bytes (big-endian)."""
        return self.value.to_bytes(self.params.byte_length, 'big')

    @classmethod
    def from_bytes(cls, data: bytes, params: Optional[FieldParams] = None) -> FieldElement:
        """Deserialize from big-endian bytes, reducing mod M."""
        return cls(int.from_bytes(data, 'big'), params)

    def to_int(self) -> int:
        return self.value

    def is_zero(self) -> bool:
        return self.value == 0

    @classmethod
    def zero(cls, params: Optional[FieldParams] = None) -> FieldElement:
        """Additive identity."""
        return cls(0, params)

    @classmethod
    def one(cls, params: Optional[FieldParams] = None) -> FieldElement:
        """Multiplicative identity."""
        return cls(1, params)
