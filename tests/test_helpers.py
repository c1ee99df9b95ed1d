"""
Tests for the Helper Set

Integer helpers, fixed-size arrays, ASCII text, hash wrappers and
function selectors.
"""

import math

import pytest
from hypothesis import given, strategies as st

from circuitkit.arith import ceil_div, clamp, isqrt
from circuitkit.arrays import concat, enumerate_array, pad_end, pad_start, subarray
from circuitkit.errors import (
    EncodingOverflowError,
    InvalidDigitError,
    OutOfBoundsError,
)
from circuitkit.field import BN254, GOLDILOCKS, FieldElement
from circuitkit.hashing import blake2s, hash_bytes, sha256, sha256_field_hash
from circuitkit.selector import compute_selector, encode_selector
from circuitkit.strings import char_code, char_from_code, str_to_int, to_hex


# =============================================================================
# INTEGERS
# =============================================================================

class TestArith:

    @given(n=st.integers(min_value=0, max_value=1 << 300))
    def test_isqrt_floor(self, n):
        r = isqrt(n)
        assert r * r <= n < (r + 1) * (r + 1)

    def test_isqrt_negative(self):
        with pytest.raises(ValueError):
            isqrt(-1)

    def test_clamp(self):
        assert clamp(5, 0, 3) == 3
        assert clamp(-5, 0, 3) == 0
        assert clamp(2, 0, 3) == 2
        with pytest.raises(ValueError):
            clamp(1, 3, 0)

    @given(a=st.integers(min_value=0, max_value=10 ** 40),
           b=st.integers(min_value=1, max_value=10 ** 6))
    def test_ceil_div(self, a, b):
        q = ceil_div(a, b)
        assert (q - 1) * b < a <= q * b or (a == 0 and q == 0)

    def test_ceil_div_examples(self):
        assert ceil_div(32, 31) == 2
        assert ceil_div(31, 31) == 1
        assert ceil_div(0, 31) == 0
        with pytest.raises(ValueError):
            ceil_div(1, 0)
        with pytest.raises(ValueError):
            ceil_div(-1, 3)


# =============================================================================
# ARRAYS
# =============================================================================

class TestArrays:

    def test_subarray(self):
        assert subarray([1, 2, 3, 4], 1, 2) == [2, 3]
        assert subarray(b'abc', 0, 3) == [97, 98, 99]
        assert subarray([1], 1, 0) == []

    @pytest.mark.parametrize("start,length", [(3, 2), (-1, 1), (0, -1), (5, 0)])
    def test_subarray_out_of_bounds(self, start, length):
        with pytest.raises(OutOfBoundsError):
            subarray([1, 2, 3, 4], start, length)

    def test_out_of_bounds_is_index_error(self):
        with pytest.raises(IndexError):
            subarray([], 0, 1)

    def test_concat(self):
        assert concat([1, 2], (3,)) == [1, 2, 3]

    def test_padding(self):
        assert pad_end([1, 2], 4) == [1, 2, 0, 0]
        assert pad_start([1, 2], 4, fill=9) == [9, 9, 1, 2]
        assert pad_end([1, 2], 2) == [1, 2]
        with pytest.raises(OutOfBoundsError):
            pad_start([1, 2, 3], 2)

    def test_enumerate(self):
        assert enumerate_array('ab') == [(0, 'a'), (1, 'b')]


# =============================================================================
# STRINGS
# =============================================================================

class TestStrings:

    def test_str_to_int(self):
        assert str_to_int('12345') == 12345
        assert str_to_int(b'007') == 7
        assert str_to_int('0') == 0

    @given(n=st.integers(min_value=0))
    def test_str_to_int_matches_int(self, n):
        assert str_to_int(str(n)) == n

    @pytest.mark.parametrize("text,index", [('12a', 2), ('-1', 0), (' 1', 0), ('1.0', 1)])
    def test_str_to_int_rejects(self, text, index):
        with pytest.raises(InvalidDigitError) as exc_info:
            str_to_int(text)
        assert exc_info.value.index == index

    def test_str_to_int_empty(self):
        with pytest.raises(ValueError):
            str_to_int('')

    def test_char_codes(self):
        assert char_code('A') == 65
        assert char_from_code(97) == 'a'
        for bad in ('é', 'ab', ''):
            with pytest.raises(ValueError):
                char_code(bad)
        with pytest.raises(ValueError):
            char_from_code(128)

    def test_to_hex(self):
        assert to_hex(255) == '0xff'
        assert to_hex(0) == '0x00'
        assert to_hex(256) == '0x0100'
        assert to_hex(1, width=4) == '0x00000001'
        assert to_hex(0xABC, prefix=False) == '0abc'
        assert to_hex(FieldElement(16, BN254)) == '0x10'

    def test_to_hex_overflow(self):
        with pytest.raises(EncodingOverflowError):
            to_hex(256, width=1)
        with pytest.raises(ValueError):
            to_hex(-1)

    @pytest.mark.parametrize("width", [0, -1])
    def test_to_hex_width_must_be_positive(self, width):
        """A zero or negative width never yields a bare prefix."""
        with pytest.raises(ValueError):
            to_hex(0, width=width)

    @given(n=st.integers(min_value=0, max_value=1 << 256))
    def test_to_hex_matches_format(self, n):
        assert int(to_hex(n), 16) == n
        assert to_hex(n, width=33) == '0x' + format(n, '066x')


# =============================================================================
# HASHING
# =============================================================================

class TestHashing:

    def test_sha256_vector(self):
        assert sha256(b'abc').hex() == (
            'ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad'
        )

    def test_blake2s_length(self):
        assert len(blake2s(b'abc')) == 32
        assert blake2s(b'abc') != blake2s(b'abd')

    def test_field_hash_range_and_determinism(self):
        elements = [FieldElement(1, BN254), FieldElement(2, BN254)]
        digest = sha256_field_hash(elements, BN254)
        assert digest.value < BN254.modulus
        assert digest == sha256_field_hash(list(elements), BN254)

    def test_field_hash_length_prefixed(self):
        assert sha256_field_hash([], BN254) != sha256_field_hash([FieldElement(0, BN254)], BN254)

    def test_hash_bytes_feeds_packed_elements(self):
        seen = []

        def hasher(elements):
            seen.append(list(elements))
            return sum(elements, FieldElement.zero(BN254))

        result = hash_bytes(b'\x01\x02' + bytes(31), hasher, BN254)
        assert seen == [[int.from_bytes(b'\x01\x02' + bytes(29), 'big'), 0]]
        assert result == seen[0][0]

    def test_hash_bytes_default_hasher(self):
        assert hash_bytes(b'abc', params=GOLDILOCKS).params is GOLDILOCKS
        assert hash_bytes(b'abc', params=BN254) == hash_bytes(bytearray(b'abc'), params=BN254)


class TestSelectors:

    def test_selector_range_and_determinism(self):
        selector = compute_selector('transfer(Field,u64)', params=BN254)
        assert 0 <= selector < 1 << 32
        assert selector == compute_selector('transfer(Field,u64)', params=BN254)
        assert selector != compute_selector('transfer(Field,u32)', params=BN254)

    def test_selector_truncates_hash(self):
        def hasher(elements):
            return FieldElement(0x1_2345_6789, BN254)

        assert compute_selector('f()', hasher, BN254) == 0x23456789

    @pytest.mark.parametrize("signature", ['transfer', 'f(a, b)', '1f()', 'f(a,)', 'f((a))'])
    def test_malformed_signature(self, signature):
        with pytest.raises(ValueError):
            compute_selector(signature, params=BN254)

    def test_encode_selector(self):
        assert encode_selector(0x23456789) == b'\x23\x45\x67\x89'
        assert encode_selector(0) == bytes(4)
        with pytest.raises(EncodingOverflowError):
            encode_selector(1 << 32)
