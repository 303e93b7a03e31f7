"""Compression adapter: gzip-framed deflate plus the "is it worth it" heuristic.

Payloads are compressed with :mod:`zlib` in its gzip container (``wbits=31``)
so compressed messages stay byte-compatible with other implementations of
the scheme that use plain gzip.
"""

from __future__ import annotations

import logging
import zlib

from .utils import CompressionError, CompressionStats

logger = logging.getLogger(__name__)

# zlib window setting selecting the gzip header/trailer
GZIP_WBITS = 16 + zlib.MAX_WBITS

# Inputs shorter than this (in characters) are never compressed
MIN_COMPRESS_LENGTH = 10

# Compressed output must be below this fraction of the original to be used
COMPRESSION_THRESHOLD = 0.95


def compress(data: bytes) -> bytes:
    """Deflate *data* into a gzip stream.

    Empty input yields empty output.

    Raises:
        CompressionError: If the compressor fails.
    """
    if not data:
        return b""
    try:
        compressor = zlib.compressobj(zlib.Z_DEFAULT_COMPRESSION, zlib.DEFLATED, GZIP_WBITS)
        return compressor.compress(data) + compressor.flush()
    except (zlib.error, TypeError) as exc:
        raise CompressionError(f"Failed to compress data: {exc}") from exc


def decompress(data: bytes) -> bytes:
    """Inflate a gzip stream produced by :func:`compress`.

    Empty input yields empty output.

    Raises:
        CompressionError: If *data* is not a complete gzip/deflate stream.
    """
    if not data:
        return b""
    try:
        return zlib.decompress(data, GZIP_WBITS)
    except (zlib.error, TypeError) as exc:
        raise CompressionError(f"Failed to decompress data: {exc}") from exc


def compress_string(text: str) -> bytes:
    """UTF-8 encode *text* and compress it."""
    if not text:
        return b""
    try:
        raw = text.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise CompressionError(f"Failed to compress string: {exc}") from exc
    return compress(raw)


def decompress_string(data: bytes) -> str:
    """Inflate *data* and decode the result as UTF-8.

    Raises:
        CompressionError: If inflating fails or the output is not UTF-8.
    """
    raw = decompress(data)
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise CompressionError(f"Decompressed data is not valid UTF-8: {exc}") from exc


def should_compress(text: str) -> bool:
    """Decide whether compressing *text* is worth the framing overhead.

    Short inputs never are.  Otherwise the text is compressed and kept only
    if the result is at least 5% smaller than the UTF-8 original.  A failed
    probe answers ``False`` instead of raising.
    """
    if not text or len(text) < MIN_COMPRESS_LENGTH:
        return False
    try:
        original_size = len(text.encode("utf-8"))
        compressed_size = len(compress_string(text))
    except (CompressionError, UnicodeEncodeError) as exc:
        logger.debug("compression probe failed: %s", exc)
        return False
    return compressed_size < original_size * COMPRESSION_THRESHOLD


def get_compression_stats(text: str) -> CompressionStats:
    """Report how well *text* compresses.

    Args:
        text: The candidate message.

    Returns:
        A :class:`~emojistego.utils.CompressionStats`.  Sizes are ``-1`` when
        compression itself failed.
    """
    if not text:
        return CompressionStats(
            original_size=0,
            compressed_size=0,
            compression_ratio=0.0,
            space_saved=0,
            beneficial=False,
        )

    original_size = len(text.encode("utf-8", errors="surrogatepass"))
    try:
        compressed_size = len(compress_string(text))
    except CompressionError as exc:
        logger.debug("compression stats unavailable: %s", exc)
        return CompressionStats(
            original_size=original_size,
            compressed_size=-1,
            compression_ratio=-1.0,
            space_saved=-1,
            beneficial=False,
        )

    return CompressionStats(
        original_size=original_size,
        compressed_size=compressed_size,
        compression_ratio=compressed_size / original_size,
        space_saved=original_size - compressed_size,
        beneficial=should_compress(text),
    )
