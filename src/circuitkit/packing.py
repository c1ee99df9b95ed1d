"""
Field Packing for Byte Data

Hash primitives that work on field elements cost roughly one permutation
per few elements, while a byte sequence fed element-by-element costs one
element per byte. Packing first regroups the bytes so that each element
carries K = floor((B - 1) / 8) of them, shrinking the hash input by a
factor of K.

Layout:
- bytes are split into consecutive groups of K; the last group may be short
- group i becomes element i
- within a group, byte 0 is the most significant byte
- when the input spans several groups, a short final group is zero-padded
  at the low-order end, so its first byte is still the most significant
  byte of a K-byte group
- an input of at most K bytes is a single group read as is, so
  pack_bytes([0x01]) == [1]

The packed form carries no length and has no inverse. Inputs that differ
only by trailing zero bytes inside the final group pack identically. It
exists to feed a one-way hash and its values are pinned: changing the
layout changes every hash computed over packed data.
"""

from __future__ import annotations
from typing import Iterable, List, Optional, Sequence, Union

from .field import FieldElement, FieldParams, resolve_params
from .types import BoundedVec

ByteSequence = Union[bytes, bytearray, memoryview, Sequence[int]]


def _as_bytes(data: ByteSequence) -> bytes:
    if isinstance(data, int):
        raise TypeError("Expected a byte sequence, got int")
    # bytes() rejects ints outside 0..255 with ValueError
    return bytes(data)


def packed_length(num_bytes: int, params: Optional[FieldParams] = None) -> int:
    """Number of elements pack_bytes returns for num_bytes bytes: ceil(n / K)."""
    if num_bytes < 0:
        raise ValueError("num_bytes must be non-negative")
    ratio = resolve_params(params).packing_ratio
    return -(-num_bytes // ratio)


def _pack(data: bytes, params: FieldParams) -> List[FieldElement]:
    ratio = params.packing_ratio
    if len(data) <= ratio:
        return [FieldElement(int.from_bytes(data, 'big'), params)] if data else []
    return [
        FieldElement(int.from_bytes(data[start:start + ratio].ljust(ratio, b'\x00'), 'big'), params)
        for start in range(0, len(data), ratio)
    ]


def pack_bytes(data: ByteSequence, params: Optional[FieldParams] = None) -> List[FieldElement]:
    """
    Pack a byte sequence into ceil(len(data) / K) field elements.

    Total over every byte sequence; the empty sequence packs to [].
    """
    return _pack(_as_bytes(data), resolve_params(params))


def pack_str(text: str, params: Optional[FieldParams] = None) -> List[FieldElement]:
    """Pack the UTF-8 encoding of text."""
    return _pack(text.encode('utf-8'), resolve_params(params))


def pack_bounded(vec: BoundedVec, params: Optional[FieldParams] = None) -> List[FieldElement]:
    """
    Pack a bounded byte vector over its full capacity.

    Slots at or past the logical length are taken as zero whatever the
    storage holds, so the result always has ceil(capacity / K) elements
    and depends only on the logical contents.
    """
    length = max(0, min(vec.length, vec.capacity))
    data = _as_bytes(vec.storage[:length]) + bytes(vec.capacity - length)
    return _pack(data, resolve_params(params))


class FieldPacker:
    """
    Packer bound to one field.

    Usage:
        packer = FieldPacker(BN254)
        elements = packer.pack(b"hello world")
    """

    def __init__(self, params: Optional[FieldParams] = None):
        self.params = resolve_params(params)

    @property
    def ratio(self) -> int:
        """Bytes per element (K)."""
        return self.params.packing_ratio

    def pack(self, data: ByteSequence) -> List[FieldElement]:
        return pack_bytes(data, self.params)

    def pack_str(self, text: str) -> List[FieldElement]:
        return pack_str(text, self.params)

    def pack_bounded(self, vec: BoundedVec) -> List[FieldElement]:
        return pack_bounded(vec, self.params)

    def pack_many(self, chunks: Iterable[ByteSequence]) -> List[List[FieldElement]]:
        """Pack each chunk independently."""
        return [self.pack(chunk) for chunk in chunks]

    def packed_length(self, num_bytes: int) -> int:
        return packed_length(num_bytes, self.params)

    def __repr__(self) -> str:
        return f"FieldPacker({self.params.name}, K={self.ratio})"
