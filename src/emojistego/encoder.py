"""Encoding logic: append one variation selector per payload byte to a carrier.

Every encoded segment looks like::

    carrier · VS(marker) · VS(b0) · VS(b1) · ...

where the marker byte says whether the following bytes are gzip-compressed
(``0``) or raw UTF-8 (``1``).
"""

from __future__ import annotations

from collections.abc import Mapping

from .compression import compress as _compress, should_compress
from .utils import InvalidArgumentError, require_single_scalar, to_utf8
from .variation import byte_to_selector, is_selector

# Framing markers (first byte of every payload written by this encoder)
MARKER_COMPRESSED = 0
MARKER_UNCOMPRESSED = 1

# Carrier used when the caller does not pick one
DEFAULT_CARRIER = "\U0001F60A"  # 😊


def validate_carrier(carrier: str) -> str:
    """Check that *carrier* is a single scalar usable as a segment boundary.

    Raises:
        InvalidArgumentError: If *carrier* is empty, longer than one scalar,
            or itself a variation selector.
    """
    cp = require_single_scalar(carrier)
    if is_selector(cp):
        raise InvalidArgumentError(
            f"Base character U+{cp:04X} is a variation selector and cannot carry data"
        )
    return carrier


def frame(message: str, compress: bool = False) -> bytes:
    """Return the marker-prefixed payload bytes for *message*.

    Args:
        message: Non-empty text to hide.
        compress: Compress the payload when :func:`should_compress` agrees.

    Returns:
        ``[0] + gzip(utf8)`` or ``[1] + utf8``.
    """
    raw = to_utf8(message)
    if compress and should_compress(message):
        return bytes([MARKER_COMPRESSED]) + _compress(raw)
    return bytes([MARKER_UNCOMPRESSED]) + raw


def encode(carrier: str, message: str, compress: bool = False) -> str:
    """Hide *message* behind *carrier* using variation selectors.

    Args:
        carrier: Exactly one visible Unicode scalar (emoji, letter, ...).
        message: Non-empty text to hide.
        compress: Compress the payload if that makes it smaller.

    Returns:
        The carrier followed by the invisible selector run.

    Raises:
        InvalidArgumentError: If the carrier is empty, holds more than one
            scalar, or is itself a variation selector (it would merge into its
            own payload run), or if the message is empty or not UTF-8
            encodable.
        CompressionError: If compression was chosen but failed.

    Example::

        >>> encoded = encode("😊", "hello")
        >>> encoded[0]
        '😊'
        >>> len(encoded)  # carrier + marker + 5 bytes
        7
    """
    validate_carrier(carrier)
    payload = frame(message, compress=compress)
    return carrier + "".join(byte_to_selector(b) for b in payload)


def encode_multiple(messages: Mapping[str, str], compress: bool = False) -> str:
    """Encode several messages, each behind its own carrier, into one string.

    Segments are written in the mapping's iteration order.  Two messages
    under the same visible character need two :func:`encode` calls joined
    by the caller.

    Raises:
        InvalidArgumentError: If *messages* is empty or any entry is invalid.
    """
    if not messages:
        raise InvalidArgumentError("Messages map cannot be empty")
    return "".join(encode(carrier, message, compress=compress) for carrier, message in messages.items())


def encode_with_default(message: str, carrier: str | None = None, compress: bool = False) -> str:
    """Encode *message* behind *carrier*, or behind :data:`DEFAULT_CARRIER`."""
    return encode(carrier if carrier is not None else DEFAULT_CARRIER, message, compress=compress)


def get_visual_length(text: str) -> int:
    """Count the scalars of *text* that are not variation selectors."""
    return sum(1 for ch in text if not is_selector(ch))


def has_encoded_data(text: str) -> bool:
    """Return ``True`` if *text* holds at least one variation selector."""
    return any(is_selector(ch) for ch in text)
