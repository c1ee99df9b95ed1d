"""
Hash Wrappers

Thin wrappers around hashlib for byte data, and the glue that feeds packed
byte data to a field-element hash. The field hash itself is supplied by the
caller (any FieldHasher); sha256_field_hash is a reference hasher for
hosts without an algebraic hash.
"""

from __future__ import annotations
from typing import Callable, Optional, Sequence
import hashlib

from .field import FieldElement, FieldParams, resolve_params
from .packing import ByteSequence, pack_bytes

FieldHasher = Callable[[Sequence[FieldElement]], FieldElement]


def sha256(data: ByteSequence) -> bytes:
    return hashlib.sha256(bytes(data)).digest()


def blake2s(data: ByteSequence) -> bytes:
    return hashlib.blake2s(bytes(data)).digest()


def sha256_field_hash(
    elements: Sequence[FieldElement],
    params: Optional[FieldParams] = None
) -> FieldElement:
    """
    SHA-256 over the canonical encodings of elements, reduced mod M.

    Each element is encoded as byte_length big-endian bytes. The element
    count is prefixed so sequences of different lengths never share input.
    """
    params = resolve_params(params)
    h = hashlib.sha256()
    h.update(len(elements).to_bytes(8, 'big'))
    for element in elements:
        h.update(FieldElement(int(element), params).to_bytes())
    return FieldElement.from_bytes(h.digest(), params)


def hash_bytes(
    data: ByteSequence,
    hasher: Optional[FieldHasher] = None,
    params: Optional[FieldParams] = None
) -> FieldElement:
    """Pack data, then hash the packed elements with hasher."""
    params = resolve_params(params)
    packed = pack_bytes(data, params)
    if hasher is None:
        return sha256_field_hash(packed, params)
    return hasher(packed)
