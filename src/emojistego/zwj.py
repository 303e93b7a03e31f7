"""Copy/paste-resistant alternative encoding built from zero-width joiners.

Instead of one code point per byte, this scheme spells out every payload bit
as a pair ``ZWJ + mark`` between explicit delimiters::

    carrier · ZWJ U+2063 · (ZWJ bit)×8n · ZWJ U+2061

where ``bit`` is U+200C (ZWNJ) for 1 and U+2060 (word joiner) for 0, most
significant bit first.  The output is eight times longer than the variation
selector form but only uses characters that text pipelines tend to keep.

Decoding is best effort and never raises: anything unreadable yields ``""``.
"""

from __future__ import annotations

import logging

from .encoder import validate_carrier
from .utils import bits_to_bytes, bytes_to_bits, to_utf8

logger = logging.getLogger(__name__)

ZWJ = "\u200d"  # ZERO WIDTH JOINER
BIT_ONE = "\u200c"  # ZERO WIDTH NON-JOINER
BIT_ZERO = "\u2060"  # WORD JOINER
INVISIBLE_SEPARATOR = "\u2063"
FUNCTION_APPLICATION = "\u2061"

START_MARKER = ZWJ + INVISIBLE_SEPARATOR
END_MARKER = ZWJ + FUNCTION_APPLICATION

# Every scalar this scheme may emit, plus the rest of the U+2060 block
_ALPHABET = frozenset({ZWJ, BIT_ONE} | {chr(cp) for cp in range(0x2060, 0x206A)})


def encode_with_zwj(carrier: str, message: str) -> str:
    """Hide *message* behind *carrier* as delimited ZWJ bit pairs.

    Raises:
        InvalidArgumentError: If the carrier or the message is invalid.
    """
    validate_carrier(carrier)
    payload = to_utf8(message)

    parts = [carrier, START_MARKER]
    for bit in bytes_to_bits(payload):
        parts.append(ZWJ)
        parts.append(BIT_ONE if bit else BIT_ZERO)
    parts.append(END_MARKER)
    return "".join(parts)


def decode_zwj(text: str) -> str:
    """Decode the first ZWJ-encoded message in *text*.

    The payload lies between the first start marker and the first end marker
    after it.  Scalars are read two at a time; pairs that are not
    ``ZWJ + bit`` are skipped, and a trailing partial byte is dropped.

    Returns:
        The hidden message, or ``""`` when there is no complete sequence or
        the bits do not form valid UTF-8.
    """
    start = text.find(START_MARKER)
    if start == -1:
        return ""
    start += len(START_MARKER)

    end = text.find(END_MARKER, start)
    if end == -1:
        return ""

    bits: list[int] = []
    for i in range(start, end, 2):
        if i + 1 >= end or text[i] != ZWJ:
            continue
        mark = text[i + 1]
        if mark == BIT_ONE:
            bits.append(1)
        elif mark == BIT_ZERO:
            bits.append(0)

    try:
        return bits_to_bytes(bits).decode("utf-8")
    except UnicodeDecodeError as exc:
        logger.debug("ZWJ payload is not valid UTF-8: %s", exc)
        return ""


def has_zwj_encoded_data(text: str) -> bool:
    """Return ``True`` if *text* contains a ZWJ start marker."""
    return START_MARKER in text


def get_zwj_visible_text(text: str) -> str:
    """Strip ZWJ-encoded sequences from *text*, keeping what a reader sees.

    Each block from a start marker through its end marker is removed whole;
    stray alphabet characters outside such blocks are dropped too.  A start
    marker with no end marker is dropped on its own, so the visible text
    after a truncated block survives.
    """
    out: list[str] = []
    i = 0
    n = len(text)
    while i < n:
        if text.startswith(START_MARKER, i):
            end = text.find(END_MARKER, i + len(START_MARKER))
            if end == -1:
                i += len(START_MARKER)
                continue
            i = end + len(END_MARKER)
            continue
        ch = text[i]
        if ch not in _ALPHABET:
            out.append(ch)
        i += 1
    return "".join(out)
