"""Codec classes: the public entry points for hiding text in Unicode characters.

Two independent schemes are available and the caller always picks one
explicitly; text is never sniffed to guess which scheme wrote it.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol, runtime_checkable

from . import decoder as _decoder, encoder as _encoder, zwj as _zwj
from .config import SCHEME_REGISTRY, get_scheme_info
from .encoder import DEFAULT_CARRIER
from .utils import DecodedMessage, InvalidArgumentError, TextStats


@runtime_checkable
class Codec(Protocol):
    """What every carrier scheme can do."""

    def encode(self, carrier: str, message: str) -> str: ...

    def decode(self, text: str) -> str: ...

    def has_hidden_data(self, text: str) -> bool: ...

    def get_visible_text(self, text: str) -> str: ...


class VariationSelectorCodec:
    """Hide text behind a carrier with one variation selector per byte.

    Example::

        codec = VariationSelectorCodec(compress=True)
        hidden = codec.encode("😊", "secret")
        assert codec.decode(hidden) == "secret"
        assert codec.get_visible_text(hidden) == "😊"

    Args:
        compress: Compress payloads when that makes them smaller.
        default_carrier: Carrier used by :meth:`encode_with_default`.
    """

    name = "vs"

    def __init__(self, compress: bool = False, default_carrier: str = DEFAULT_CARRIER) -> None:
        _encoder.validate_carrier(default_carrier)
        self._compress = compress
        self._default_carrier = default_carrier

    @property
    def compress(self) -> bool:
        return self._compress

    @property
    def default_carrier(self) -> str:
        return self._default_carrier

    # ------------------------------------------------------------------
    # Core API
    # ------------------------------------------------------------------

    def encode(self, carrier: str, message: str) -> str:
        """Hide *message* behind *carrier*.

        Raises:
            InvalidArgumentError: If the carrier or the message is invalid.
        """
        return _encoder.encode(carrier, message, compress=self._compress)

    def decode(self, text: str) -> str:
        """Return the first hidden message in *text* (``""`` if none).

        Raises:
            DecodingError: If that message is corrupted.
        """
        return _decoder.decode(text)

    def decode_all(self, text: str) -> list[DecodedMessage]:
        """Return every recoverable message in *text*, skipping corrupted ones."""
        return _decoder.decode_all(text)

    def has_hidden_data(self, text: str) -> bool:
        return _decoder.contains_encoded_data(text)

    def get_visible_text(self, text: str) -> str:
        return _decoder.get_visible_text(text)

    # ------------------------------------------------------------------
    # Convenience helpers
    # ------------------------------------------------------------------

    def encode_multiple(self, messages: Mapping[str, str]) -> str:
        """Encode ``{carrier: message}`` pairs into one string, in order."""
        return _encoder.encode_multiple(messages, compress=self._compress)

    def encode_with_default(self, message: str, carrier: str | None = None) -> str:
        """Encode *message* behind *carrier* or the codec's default carrier."""
        return self.encode(carrier if carrier is not None else self._default_carrier, message)

    def visual_length(self, text: str) -> int:
        return _encoder.get_visual_length(text)

    def stats(self, text: str) -> TextStats:
        """Return scalar counts and the message count for *text*."""
        return _decoder.get_encoded_text_stats(text)


class ZWJCodec:
    """Hide text behind a carrier as delimited zero-width-joiner bit pairs.

    Larger than :class:`VariationSelectorCodec` output but built from
    characters that survive more copy/paste paths.  Decoding never raises.
    """

    name = "zwj"

    def __init__(self, default_carrier: str = DEFAULT_CARRIER) -> None:
        _encoder.validate_carrier(default_carrier)
        self._default_carrier = default_carrier

    @property
    def default_carrier(self) -> str:
        return self._default_carrier

    def encode(self, carrier: str, message: str) -> str:
        return _zwj.encode_with_zwj(carrier, message)

    def decode(self, text: str) -> str:
        return _zwj.decode_zwj(text)

    def has_hidden_data(self, text: str) -> bool:
        return _zwj.has_zwj_encoded_data(text)

    def get_visible_text(self, text: str) -> str:
        return _zwj.get_zwj_visible_text(text)

    def encode_with_default(self, message: str, carrier: str | None = None) -> str:
        return self.encode(carrier if carrier is not None else self._default_carrier, message)


def make_codec(
    scheme: str = "vs",
    compress: bool = False,
    carrier: str = DEFAULT_CARRIER,
) -> VariationSelectorCodec | ZWJCodec:
    """Build the codec registered under *scheme*.

    Raises:
        InvalidArgumentError: If *scheme* is unknown, or compression is
            requested for a scheme that does not support it.
    """
    info = get_scheme_info(scheme)
    if info is None:
        known = ", ".join(i.name for i in SCHEME_REGISTRY)
        raise InvalidArgumentError(f"Unknown scheme {scheme!r} (expected one of: {known})")
    if info.name == "zwj":
        if compress:
            raise InvalidArgumentError("The zwj scheme does not support compression")
        return ZWJCodec(default_carrier=carrier)
    return VariationSelectorCodec(compress=compress, default_carrier=carrier)
