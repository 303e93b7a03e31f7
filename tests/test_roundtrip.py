"""Round-trip encode → decode tests for emojistego."""

from __future__ import annotations

import pytest

from emojistego import VariationSelectorCodec, ZWJCodec
from emojistego.decoder import iter_segments
from emojistego.encoder import MARKER_COMPRESSED, MARKER_UNCOMPRESSED
from emojistego.variation import byte_to_selector


class TestRoundTrip:
    """Verify that messages survive an encode → decode cycle."""

    @pytest.mark.parametrize(
        "message",
        [
            "hello",
            "x",
            "The quick brown fox jumps over the lazy dog.",
            "héllo wörld",
            "你好，世界",
            "emoji inside 🎉🔥 too",
            "line one\nline two\ttabbed",
            "\x00 control \x7f",
        ],
    )
    def test_message(self, codec: VariationSelectorCodec, message: str) -> None:
        hidden = codec.encode("😊", message)
        assert codec.decode(hidden) == message

    @pytest.mark.parametrize("carrier", ["A", "€", "😊", "🔑", "中"])
    def test_carriers(self, codec: VariationSelectorCodec, carrier: str) -> None:
        hidden = codec.encode(carrier, "secret")
        assert hidden[0] == carrier
        assert codec.get_visible_text(hidden) == carrier
        assert codec.decode(hidden) == "secret"

    def test_long_message(self, codec: VariationSelectorCodec) -> None:
        message = "steganography " * 500
        assert codec.decode(codec.encode("😊", message)) == message

    def test_compressed_long_message(self, compressing_codec: VariationSelectorCodec) -> None:
        message = "steganography " * 500
        hidden = compressing_codec.encode("😊", message)
        assert compressing_codec.decode(hidden) == message

    def test_determinism(self, codec: VariationSelectorCodec) -> None:
        """Encoding the same input twice should produce identical output."""
        assert codec.encode("😊", "same") == codec.encode("😊", "same")

    def test_decode_all_roundtrip(self, codec: VariationSelectorCodec) -> None:
        messages = {"🔑": "key", "🌟": "star", "🎯": "target"}
        packed = codec.encode_multiple(messages)
        decoded = codec.decode_all(packed)
        assert [(m.base_character, m.message) for m in decoded] == list(messages.items())


class TestLayout:
    """Shape of the encoded string."""

    def test_length_uncompressed(self, codec: VariationSelectorCodec) -> None:
        """carrier + marker + one selector per UTF-8 byte."""
        hidden = codec.encode("😊", "hello")
        assert len(hidden) == 7
        assert codec.visual_length(hidden) == 1

    def test_multibyte_length(self, codec: VariationSelectorCodec) -> None:
        hidden = codec.encode("A", "é")  # two UTF-8 bytes
        assert len(hidden) == 4

    def test_uncompressed_marker(self, codec: VariationSelectorCodec) -> None:
        hidden = codec.encode("😊", "a" * 200)
        assert hidden[1] == byte_to_selector(MARKER_UNCOMPRESSED)

    def test_short_message_not_compressed(self, compressing_codec: VariationSelectorCodec) -> None:
        hidden = compressing_codec.encode("😊", "hi")
        assert hidden[1] == byte_to_selector(MARKER_UNCOMPRESSED)
        assert len(hidden) == 4

    def test_repetitive_message_compressed(self, compressing_codec: VariationSelectorCodec) -> None:
        message = "a" * 200
        hidden = compressing_codec.encode("😊", message)
        assert hidden[1] == byte_to_selector(MARKER_COMPRESSED)
        assert len(hidden) < len(message)

    def test_incompressible_message_stays_raw(self, compressing_codec: VariationSelectorCodec) -> None:
        """Gzip overhead makes short varied text bigger, so it is sent raw."""
        hidden = compressing_codec.encode("😊", "abcdefghijkl")
        assert hidden[1] == byte_to_selector(MARKER_UNCOMPRESSED)


class TestScanningProperties:
    """Whole-string behaviour of the scanner."""

    def test_decode_stops_decode_all_continues(self, codec: VariationSelectorCodec) -> None:
        text = codec.encode("😊", "hello") + "STOP" + codec.encode("🌟", "world")
        assert codec.decode(text) == "hello"
        assert [m.message for m in codec.decode_all(text)] == ["hello", "world"]

    def test_bare_carriers_hide_nothing(self, codec: VariationSelectorCodec) -> None:
        assert not codec.has_hidden_data("😊🌟🎯")
        assert codec.decode_all("😊🌟🎯") == []

    def test_compression_never_grows_output(
        self, codec: VariationSelectorCodec, compressing_codec: VariationSelectorCodec
    ) -> None:
        for message in ("a" * 50, "to be or not to be " * 8, "abcdefghijkl", "short"):
            assert len(compressing_codec.encode("😊", message)) <= len(codec.encode("😊", message))


class TestByteBoundaries:
    """Single payload bytes at the edges of the selector ranges."""

    @pytest.mark.parametrize("value", [0, 15, 16, 128, 255])
    def test_selector_run(self, value: int) -> None:
        assert list(iter_segments("A" + byte_to_selector(value))) == [("A", bytes([value]))]

    @pytest.mark.parametrize("char", ["\x00", "\x0f", "\x10", "\x7f"])
    def test_single_byte_message(self, codec: VariationSelectorCodec, zwj_codec: ZWJCodec, char: str) -> None:
        assert codec.decode(codec.encode("A", char)) == char
        assert zwj_codec.decode(zwj_codec.encode("A", char)) == char

    @pytest.mark.parametrize("char", ["\x80", "\xff"])
    def test_high_code_points(self, codec: VariationSelectorCodec, zwj_codec: ZWJCodec, char: str) -> None:
        """U+0080 and U+00FF carry the 0xC2/0xC3 lead bytes plus 0x80/0xBF continuation bytes."""
        assert codec.decode(codec.encode("A", char)) == char
        assert zwj_codec.decode(zwj_codec.encode("A", char)) == char
