"""Clipboard access and clipboard-backed encode/decode helpers.

The codec itself never touches the clipboard; this module adapts
:mod:`pyperclip` to a two-method :class:`Clipboard` interface and layers
"encode into / decode from the clipboard" helpers on top.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Protocol, runtime_checkable

import pyperclip

from .codec import VariationSelectorCodec, ZWJCodec
from .utils import ClipboardError, DecodedMessage, TextStats

logger = logging.getLogger(__name__)


@runtime_checkable
class Clipboard(Protocol):
    """Anything that can read and replace the clipboard's text."""

    def read(self) -> str: ...

    def write(self, text: str) -> None: ...


# ---------------------------------------------------------------------------
# Implementations
# ---------------------------------------------------------------------------


class SystemClipboard:
    """The operating system clipboard, through :mod:`pyperclip`.

    Args:
        backend: Force one pyperclip mechanism by name (``pbcopy``,
            ``wl-clipboard``, ``xclip``, ``xsel``, ``windows``, ...).
            ``None`` lets pyperclip pick.  The choice is applied on first
            use and is process-wide, as pyperclip keeps it globally.
    """

    def __init__(self, backend: str | None = None) -> None:
        self._backend = backend
        self._configured = backend is None

    def _ensure_backend(self) -> None:
        if self._configured:
            return
        try:
            pyperclip.set_clipboard(self._backend)
        except ValueError as exc:
            raise ClipboardError(f"Unknown clipboard backend {self._backend!r}: {exc}") from exc
        logger.debug("using clipboard backend %s", self._backend)
        self._configured = True

    def read(self) -> str:
        """Return the clipboard text.

        Raises:
            ClipboardError: If no clipboard mechanism is available.
        """
        self._ensure_backend()
        try:
            text = pyperclip.paste()
        except pyperclip.PyperclipException as exc:
            raise ClipboardError(f"Failed to read from clipboard: {exc}") from exc
        return text or ""

    def write(self, text: str) -> None:
        """Replace the clipboard text.

        Raises:
            ClipboardError: If no clipboard mechanism is available.
        """
        self._ensure_backend()
        try:
            pyperclip.copy(text)
        except pyperclip.PyperclipException as exc:
            raise ClipboardError(f"Failed to write to clipboard: {exc}") from exc


class MemoryClipboard:
    """A process-local clipboard, handy for tests and headless use."""

    def __init__(self, text: str = "") -> None:
        self._text = text

    def read(self) -> str:
        return self._text

    def write(self, text: str) -> None:
        self._text = text


# ---------------------------------------------------------------------------
# Clipboard + codec
# ---------------------------------------------------------------------------


class ClipboardTranscoder:
    """Encode into and decode out of a clipboard.

    Clipboard failures surface as :class:`~emojistego.utils.ClipboardError`;
    codec errors (bad carrier, corrupted payload) propagate unchanged.

    Args:
        clipboard: Where text is read from and written to.  Defaults to
            :class:`SystemClipboard`.
        codec: Variation-selector codec used by the plain operations.
        safe_codec: ZWJ codec used by the ``*_safe`` operations.
    """

    def __init__(
        self,
        clipboard: Clipboard | None = None,
        codec: VariationSelectorCodec | None = None,
        safe_codec: ZWJCodec | None = None,
    ) -> None:
        self._clipboard = clipboard if clipboard is not None else SystemClipboard()
        self._codec = codec if codec is not None else VariationSelectorCodec()
        self._safe_codec = safe_codec if safe_codec is not None else ZWJCodec()

    @property
    def clipboard(self) -> Clipboard:
        return self._clipboard

    def _read(self) -> str:
        try:
            return self._clipboard.read()
        except OSError as exc:
            raise ClipboardError(f"Failed to read from clipboard: {exc}") from exc

    def _write(self, text: str) -> None:
        try:
            self._clipboard.write(text)
        except OSError as exc:
            raise ClipboardError(f"Failed to write to clipboard: {exc}") from exc

    # -- reading ---------------------------------------------------------

    def read_and_decode(self) -> str:
        """Return the first hidden message on the clipboard, or ``""``."""
        text = self._read()
        if not text or not self._codec.has_hidden_data(text):
            return ""
        return self._codec.decode(text)

    def read_and_decode_all(self) -> list[DecodedMessage]:
        """Return every hidden message on the clipboard."""
        text = self._read()
        if not text or not self._codec.has_hidden_data(text):
            return []
        return self._codec.decode_all(text)

    def read_and_decode_safe(self) -> str:
        """Return the ZWJ-encoded message on the clipboard, or ``""``."""
        text = self._read()
        if not text or not self._safe_codec.has_hidden_data(text):
            return ""
        return self._safe_codec.decode(text)

    def get_raw_text(self) -> str:
        return self._read()

    def has_hidden_data(self) -> bool:
        return self._codec.has_hidden_data(self._read())

    def has_safe_hidden_data(self) -> bool:
        return self._safe_codec.has_hidden_data(self._read())

    def get_stats(self) -> TextStats:
        return self._codec.stats(self._read())

    def get_visible_text(self) -> str:
        """Return the clipboard text as a reader would see it."""
        return self._codec.get_visible_text(self._read())

    # -- writing ---------------------------------------------------------

    def encode_and_write(self, carrier: str, message: str) -> str:
        """Encode *message* behind *carrier* and put the result on the clipboard.

        Returns:
            The text written.
        """
        encoded = self._codec.encode(carrier, message)
        self._write(encoded)
        return encoded

    def encode_multiple_and_write(self, messages: Mapping[str, str]) -> str:
        encoded = self._codec.encode_multiple(messages)
        self._write(encoded)
        return encoded

    def encode_safe_and_write(self, carrier: str, message: str) -> str:
        """Like :meth:`encode_and_write` but with the ZWJ scheme."""
        encoded = self._safe_codec.encode(carrier, message)
        self._write(encoded)
        return encoded

    def set_raw_text(self, text: str) -> None:
        self._write(text)
