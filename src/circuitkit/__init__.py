"""
circuitkit: Helpers for Constrained-Arithmetic Circuit Programs

Two core pieces:
- Field packing: regroup byte data into as few field elements as the
  modulus allows, so hashing bytes inside a circuit stays cheap
- Input guards: force every argument of an entry routine to pass its
  type's validate() before the routine body runs

Plus the usual small helpers (integer sqrt, clamp, ceil-div, array
slicing and padding, decimal parsing, hex formatting, hash wrappers,
function selectors).

Usage:
    from circuitkit import pack_bytes, entry_point, UIntN

    elements = pack_bytes(b"hello world")   # one BN254 element

    @entry_point
    def transfer(amount: UIntN) -> int:
        return amount.value

    transfer(UIntN(5, 64))        # -> 5
    transfer(UIntN(-1, 64))       # raises ValidationFailure
"""

# Errors
from .errors import (
    CircuitKitError,
    PackingPreconditionError,
    ValidationFailure,
    UnknownFieldError,
    InvalidDigitError,
    OutOfBoundsError,
    EncodingOverflowError,
)

# Field
from .field import (
    FieldParams,
    FieldElement,
    BN254,
    BLS12_381,
    GOLDILOCKS,
    FIELD_PRESETS,
    FIELD_ENV_VAR,
    get_field,
    default_params,
)

# Packing
from .packing import (
    FieldPacker,
    pack_bytes,
    pack_str,
    pack_bounded,
    packed_length,
)

# Guards
from .guard import (
    Validatable,
    ValidationResult,
    ArgumentCheck,
    ensure,
    validate_all,
    guard,
    entry_point,
    entry_checks,
)

# Carrier types
from .types import BoundedVec, BoundedBytes, UIntN

# Helpers
from .arith import isqrt, clamp, ceil_div
from .arrays import subarray, concat, pad_start, pad_end, enumerate_array
from .strings import str_to_int, char_code, char_from_code, to_hex
from .hashing import FieldHasher, sha256, blake2s, sha256_field_hash, hash_bytes
from .selector import compute_selector, encode_selector

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Errors
    "CircuitKitError",
    "PackingPreconditionError",
    "ValidationFailure",
    "UnknownFieldError",
    "InvalidDigitError",
    "OutOfBoundsError",
    "EncodingOverflowError",
    # Field
    "FieldParams",
    "FieldElement",
    "BN254",
    "BLS12_381",
    "GOLDILOCKS",
    "FIELD_PRESETS",
    "FIELD_ENV_VAR",
    "get_field",
    "default_params",
    # Packing
    "FieldPacker",
    "pack_bytes",
    "pack_str",
    "pack_bounded",
    "packed_length",
    # Guards
    "Validatable",
    "ValidationResult",
    "ArgumentCheck",
    "ensure",
    "validate_all",
    "guard",
    "entry_point",
    "entry_checks",
    # Carrier types
    "BoundedVec",
    "BoundedBytes",
    "UIntN",
    # Helpers
    "isqrt",
    "clamp",
    "ceil_div",
    "subarray",
    "concat",
    "pad_start",
    "pad_end",
    "enumerate_array",
    "str_to_int",
    "char_code",
    "char_from_code",
    "to_hex",
    "FieldHasher",
    "sha256",
    "blake2s",
    "sha256_field_hash",
    "hash_bytes",
    "compute_selector",
    "encode_selector",
]
