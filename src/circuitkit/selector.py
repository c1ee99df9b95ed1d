"""
Function Selectors

A selector identifies an entry routine by a 32-bit value derived from its
signature, e.g. "transfer(Field,u64)". The signature is packed, hashed with
a field hasher and truncated to its low 32 bits.
"""

from __future__ import annotations
from typing import Optional
import re

from .errors import EncodingOverflowError
from .field import FieldParams, resolve_params
from .hashing import FieldHasher, hash_bytes

SELECTOR_SIZE = 4

_SIGNATURE = re.compile(r'^[A-Za-z_][A-Za-z0-9_]*\((?:[^(),\s]+(?:,[^(),\s]+)*)?\)$')


def compute_selector(
    signature: str,
    hasher: Optional[FieldHasher] = None,
    params: Optional[FieldParams] = None
) -> int:
    """Selector of a signature of the form name(type,type,...)."""
    if not _SIGNATURE.match(signature):
        raise ValueError(f"Malformed function signature: {signature!r}")
    params = resolve_params(params)
    digest = hash_bytes(signature.encode('utf-8'), hasher, params)
    return int(digest) & 0xFFFFFFFF


def encode_selector(selector: int) -> bytes:
    """4-byte big-endian encoding of a selector."""
    if not 0 <= selector < 1 << (8 * SELECTOR_SIZE):
        raise EncodingOverflowError(selector, SELECTOR_SIZE)
    return selector.to_bytes(SELECTOR_SIZE, 'big')
