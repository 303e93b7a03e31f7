"""Utility functions: exceptions, scalar validation, bit helpers, result types."""

from __future__ import annotations

from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Library-specific exceptions
# ---------------------------------------------------------------------------


class StegoError(Exception):
    """Base exception for emojistego."""


class InvalidByteError(StegoError, ValueError):
    """Raised when a value outside 0-255 is mapped to a selector."""

    def __init__(self, value: object) -> None:
        super().__init__(f"Byte value {value!r} is out of range (0-255)")
        self.value = value


class InvalidArgumentError(StegoError, ValueError):
    """Raised for an empty message, a bad carrier or an empty message set."""


class CompressionError(StegoError):
    """Raised when compressing or inflating a payload fails."""


class DecodingError(StegoError):
    """Raised when a hidden payload cannot be turned back into text."""


class ClipboardError(StegoError):
    """Raised when the system clipboard cannot be read or written."""


# ---------------------------------------------------------------------------
# Scalar helpers
# ---------------------------------------------------------------------------


def require_single_scalar(value: str, what: str = "Base character") -> int:
    """Return the code point of a string holding exactly one Unicode scalar.

    Args:
        value: The candidate carrier string.
        what: Name used in error messages.

    Returns:
        The code point of the single scalar.

    Raises:
        InvalidArgumentError: If *value* is empty or holds more than one scalar
            (combined glyphs, emoji ZWJ sequences, flags, ...).
    """
    if not isinstance(value, str):
        raise InvalidArgumentError(f"{what} must be a string, got {type(value).__name__}")
    if not value:
        raise InvalidArgumentError(f"{what} cannot be empty")
    if len(value) != 1:
        raise InvalidArgumentError(
            f"{what} must be exactly one Unicode character, got {len(value)}"
        )
    return ord(value)


def to_utf8(message: str) -> bytes:
    """Encode *message* as UTF-8, rejecting text that has no UTF-8 form.

    Raises:
        InvalidArgumentError: If *message* is empty or contains lone surrogates.
    """
    if not isinstance(message, str):
        raise InvalidArgumentError(f"Message must be a string, got {type(message).__name__}")
    if not message:
        raise InvalidArgumentError("Message cannot be empty")
    try:
        return message.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise InvalidArgumentError(f"Message is not UTF-8 encodable: {exc}") from exc


# ---------------------------------------------------------------------------
# Bit-stream helpers
# ---------------------------------------------------------------------------


def bytes_to_bits(data: bytes) -> list[int]:
    """Convert bytes to a list of bits (MSB first per byte).

    Args:
        data: Input bytes.

    Returns:
        List of 0/1 integers.
    """
    bits: list[int] = []
    for byte in data:
        for i in range(7, -1, -1):
            bits.append((byte >> i) & 1)
    return bits


def bits_to_bytes(bits: list[int]) -> bytes:
    """Convert a list of bits back to bytes (MSB first per byte).

    A trailing group of fewer than 8 bits is discarded, not padded.

    Args:
        bits: List of 0/1 integers.

    Returns:
        Reconstructed bytes.
    """
    result = bytearray()
    for i in range(0, len(bits) - 7, 8):
        byte = 0
        for j in range(8):
            byte = (byte << 1) | bits[i + j]
        result.append(byte)
    return bytes(result)


# ---------------------------------------------------------------------------
# Result dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DecodedMessage:
    """A hidden message together with the visible character that carried it.

    Attributes:
        base_character: The carrier scalar.
        message: The decoded hidden text.
    """

    base_character: str
    message: str


@dataclass(frozen=True)
class TextStats:
    """Structure of a piece of text as seen by the variation-selector scanner.

    Attributes:
        total_length: Number of scalars, selectors included.
        visible_length: Number of non-selector scalars.
        hidden_bytes: Number of selector scalars (one hidden byte each).
        message_count: Number of messages ``decode_all`` recovers.
    """

    total_length: int
    visible_length: int
    hidden_bytes: int
    message_count: int


@dataclass(frozen=True)
class CompressionStats:
    """Diagnostics returned by ``compression.get_compression_stats``.

    Attributes:
        original_size: UTF-8 size of the input in bytes.
        compressed_size: Size after compression, ``-1`` if compression failed.
        compression_ratio: ``compressed_size / original_size``.
        space_saved: ``original_size - compressed_size``.
        beneficial: Whether the encoder would choose compression.
    """

    original_size: int
    compressed_size: int
    compression_ratio: float
    space_saved: int
    beneficial: bool
