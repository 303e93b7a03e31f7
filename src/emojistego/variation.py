"""Byte <-> variation selector mapping.

Every byte value is carried by one invisible variation selector:

* bytes 0-15 map to VS1-VS16, U+FE00..U+FE0F;
* bytes 16-255 map to VS17-VS256, U+E0100..U+E01EF.

The two ranges are disjoint and together hold exactly 256 code points, so the
mapping is a total bijection.  The layout is fixed for wire compatibility with
other implementations of the same scheme.
"""

from __future__ import annotations

from typing import Union

from .utils import InvalidByteError, require_single_scalar

# VS1-VS16
SELECTOR_START = 0xFE00
SELECTOR_END = 0xFE0F

# VS17-VS256
SUPPLEMENT_START = 0xE0100
SUPPLEMENT_END = 0xE01EF

# Number of bytes carried by the first range
_BMP_SPAN = SELECTOR_END - SELECTOR_START + 1  # 16

CodePoint = Union[int, str]


def _as_int(codepoint: CodePoint) -> int:
    if isinstance(codepoint, str):
        return ord(codepoint) if len(codepoint) == 1 else -1
    return codepoint


def byte_to_selector(byte: int) -> str:
    """Convert a byte value to its variation selector character.

    Args:
        byte: Integer in 0..255.

    Returns:
        A one-character string holding the selector.

    Raises:
        InvalidByteError: If *byte* is not an integer in 0..255.
    """
    if isinstance(byte, bool) or not isinstance(byte, int) or byte < 0 or byte > 255:
        raise InvalidByteError(byte)
    if byte < _BMP_SPAN:
        return chr(SELECTOR_START + byte)
    return chr(SUPPLEMENT_START + byte - _BMP_SPAN)


def selector_to_byte(codepoint: CodePoint) -> int | None:
    """Convert a variation selector back to the byte it carries.

    Accepts either an integer code point or a one-character string.  Anything
    outside the two selector ranges returns ``None``; that is the normal
    "not hidden data" case, not an error.
    """
    cp = _as_int(codepoint)
    if SELECTOR_START <= cp <= SELECTOR_END:
        return cp - SELECTOR_START
    if SUPPLEMENT_START <= cp <= SUPPLEMENT_END:
        return cp - SUPPLEMENT_START + _BMP_SPAN
    return None


def is_selector(codepoint: CodePoint) -> bool:
    """Return ``True`` if *codepoint* lies in either selector range."""
    cp = _as_int(codepoint)
    return SELECTOR_START <= cp <= SELECTOR_END or SUPPLEMENT_START <= cp <= SUPPLEMENT_END


def get_codepoint(char: str) -> int:
    """Return the code point of a string holding exactly one Unicode scalar.

    Raises:
        InvalidArgumentError: If *char* is empty or longer than one scalar.
    """
    return require_single_scalar(char, "Character")
