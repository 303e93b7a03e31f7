"""emojistego — Hide text inside emoji and other characters with invisible code points.

Each byte of a message becomes one Unicode variation selector appended to a
visible carrier character, so the result renders as just the carrier.  A
zero-width-joiner scheme is available for text that has to survive more
aggressive copy/paste handling.

Example::

    from emojistego import VariationSelectorCodec

    codec = VariationSelectorCodec()
    hidden = codec.encode("😊", "secret message")
    assert codec.decode(hidden) == "secret message"
    assert codec.get_visible_text(hidden) == "😊"
"""

from .clipboard import Clipboard, ClipboardTranscoder, MemoryClipboard, SystemClipboard
from .codec import Codec, VariationSelectorCodec, ZWJCodec, make_codec
from .compression import get_compression_stats, should_compress
from .config import SchemeInfo, Settings, get_scheme_info, list_schemes, load_settings
from .decoder import decode, decode_all, get_encoded_text_stats, get_visible_text
from .encoder import DEFAULT_CARRIER, encode, encode_multiple, get_visual_length, has_encoded_data
from .utils import (
    ClipboardError,
    CompressionError,
    CompressionStats,
    DecodedMessage,
    DecodingError,
    InvalidArgumentError,
    InvalidByteError,
    StegoError,
    TextStats,
)
from .variation import byte_to_selector, is_selector, selector_to_byte
from .zwj import decode_zwj, encode_with_zwj, get_zwj_visible_text, has_zwj_encoded_data

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_CARRIER",
    "Clipboard",
    "ClipboardError",
    "ClipboardTranscoder",
    "Codec",
    "CompressionError",
    "CompressionStats",
    "DecodedMessage",
    "DecodingError",
    "InvalidArgumentError",
    "InvalidByteError",
    "MemoryClipboard",
    "SchemeInfo",
    "Settings",
    "StegoError",
    "SystemClipboard",
    "TextStats",
    "VariationSelectorCodec",
    "ZWJCodec",
    "byte_to_selector",
    "decode",
    "decode_all",
    "decode_zwj",
    "encode",
    "encode_multiple",
    "encode_with_zwj",
    "get_compression_stats",
    "get_encoded_text_stats",
    "get_scheme_info",
    "get_visible_text",
    "get_visual_length",
    "get_zwj_visible_text",
    "has_encoded_data",
    "has_zwj_encoded_data",
    "is_selector",
    "list_schemes",
    "load_settings",
    "make_codec",
    "selector_to_byte",
    "should_compress",
]
