"""Decoding logic: scan text for selector runs and turn them back into messages.

The scanner walks the scalars of a string and splits it into *segments*: each
non-selector scalar opens a segment and the run of selectors right after it is
that segment's payload.  :func:`decode` reads only the first run,
:func:`decode_all` reads every segment and silently drops the ones that fail.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from .compression import decompress
from .encoder import MARKER_COMPRESSED, MARKER_UNCOMPRESSED
from .utils import (
    CompressionError,
    DecodedMessage,
    DecodingError,
    TextStats,
)
from .variation import is_selector, selector_to_byte

logger = logging.getLogger(__name__)


def unframe(payload: bytes) -> str:
    """Apply the marker rule to a non-empty selector run and return its text.

    * first byte ``0``: the rest is gzip-compressed UTF-8;
    * first byte ``1``: the rest is raw UTF-8;
    * anything else: legacy data written before markers existed, so the
      *whole* run, first byte included, is raw UTF-8.

    Legacy data whose first byte happens to be ``0`` or ``1`` is therefore
    misread as framed.  That ambiguity is kept as is: changing the rule would
    break strings that are already out in the wild.

    Raises:
        DecodingError: If inflating fails or the bytes are not valid UTF-8.
    """
    if not payload:
        return ""

    marker = payload[0]
    if marker == MARKER_COMPRESSED:
        try:
            raw = decompress(payload[1:])
        except CompressionError as exc:
            raise DecodingError(f"Failed to decode message: {exc}") from exc
    elif marker == MARKER_UNCOMPRESSED:
        raw = payload[1:]
    else:
        raw = payload

    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise DecodingError(f"Failed to decode message: {exc}") from exc


def iter_segments(text: str) -> Iterator[tuple[str | None, bytes]]:
    """Split *text* into ``(carrier, payload)`` segments.

    A selector run before any visible scalar is yielded with carrier ``None``.
    Carriers without selectors are yielded with an empty payload.
    """
    carrier: str | None = None
    current = bytearray()
    opened = False

    for ch in text:
        byte = selector_to_byte(ch)
        if byte is not None:
            current.append(byte)
            opened = True
            continue
        if opened:
            yield carrier, bytes(current)
        carrier = ch
        current = bytearray()
        opened = True

    if opened:
        yield carrier, bytes(current)


def decode(text: str) -> str:
    """Decode the first hidden message in *text*.

    Leading visible text is skipped; collection starts at the first selector
    and stops for good at the next non-selector scalar, even if more selectors
    follow later.

    Returns:
        The hidden message, or ``""`` if *text* holds no selectors.

    Raises:
        DecodingError: If the first run cannot be inflated or is not UTF-8.
    """
    if not text:
        return ""

    collected = bytearray()
    for ch in text:
        byte = selector_to_byte(ch)
        if byte is not None:
            collected.append(byte)
        elif collected:
            break

    if not collected:
        return ""
    return unframe(bytes(collected))


def decode_all(text: str) -> list[DecodedMessage]:
    """Decode every hidden message in *text*, in order of appearance.

    Segments without selectors are not messages.  A segment that fails to
    decode is dropped and scanning carries on, so one corrupted message never
    hides the others.
    """
    messages: list[DecodedMessage] = []
    for index, (carrier, payload) in enumerate(iter_segments(text)):
        if carrier is None or not payload:
            continue
        try:
            messages.append(DecodedMessage(carrier, unframe(payload)))
        except DecodingError as exc:
            logger.debug("skipping segment %d (%r): %s", index, carrier, exc)
    return messages


def get_visible_text(text: str) -> str:
    """Return *text* with every variation selector removed."""
    return "".join(ch for ch in text if not is_selector(ch))


def contains_encoded_data(text: str) -> bool:
    """Return ``True`` if *text* holds any variation selector."""
    return any(is_selector(ch) for ch in text)


def get_encoded_text_stats(text: str) -> TextStats:
    """Summarise *text*: scalar counts plus the number of recoverable messages."""
    total = 0
    hidden = 0
    for ch in text:
        total += 1
        if is_selector(ch):
            hidden += 1

    return TextStats(
        total_length=total,
        visible_length=total - hidden,
        hidden_bytes=hidden,
        message_count=len(decode_all(text)),
    )
