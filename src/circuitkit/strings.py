"""
String and Text Encoding Helpers

Circuits see text as ASCII byte arrays, so these helpers work on ASCII
codes: decimal parsing, character-code lookup and hex formatting.
"""

from __future__ import annotations
from typing import Optional, Union

from .errors import EncodingOverflowError, InvalidDigitError

ASCII_ZERO = 0x30
ASCII_MAX = 0x7F
HEX_DIGITS = '0123456789abcdef'


def str_to_int(text: Union[str, bytes]) -> int:
    """
    Parse an unsigned decimal number.

    Only ASCII digits are accepted: no sign, no whitespace, no separators.
    """
    if isinstance(text, (bytes, bytearray)):
        text = text.decode('ascii', errors='replace')
    if not text:
        raise InvalidDigitError(text)

    result = 0
    for index, ch in enumerate(text):
        digit = ord(ch) - ASCII_ZERO
        if not 0 <= digit <= 9:
            raise InvalidDigitError(text, index)
        result = result * 10 + digit
    return result


def char_code(ch: str) -> int:
    """ASCII code of a single character."""
    if len(ch) != 1:
        raise ValueError(f"Expected a single character, got {ch!r}")
    code = ord(ch)
    if code > ASCII_MAX:
        raise ValueError(f"Not an ASCII character: {ch!r}")
    return code


def char_from_code(code: int) -> str:
    """Character for an ASCII code."""
    if not 0 <= code <= ASCII_MAX:
        raise ValueError(f"Not an ASCII code: {code}")
    return chr(code)


def to_hex(value: int, width: Optional[int] = None, prefix: bool = True) -> str:
    """
    Lowercase hex encoding of a non-negative integer.

    With width, the output is zero-padded to exactly width bytes (2 * width
    digits) and values that need more raise EncodingOverflowError. Without
    it, the shortest even-length encoding is used ("00" for zero).
    """
    value = int(value)
    if value < 0:
        raise ValueError("to_hex expects a non-negative integer")

    needed = max(1, (value.bit_length() + 7) // 8)
    if width is None:
        width = needed
    elif width < 1:
        raise ValueError(f"width must be at least 1 byte, got {width}")
    elif needed > width:
        raise EncodingOverflowError(value, width)

    digits = []
    for _ in range(2 * width):
        digits.append(HEX_DIGITS[value & 0xF])
        value >>= 4
    encoded = ''.join(reversed(digits))
    return '0x' + encoded if prefix else encoded
