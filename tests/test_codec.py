"""API-level tests for the codec classes, the scheme registry and settings."""

from __future__ import annotations

from pathlib import Path

import pytest

from emojistego import (
    DEFAULT_CARRIER,
    Codec,
    DecodedMessage,
    InvalidArgumentError,
    StegoError,
    TextStats,
    VariationSelectorCodec,
    ZWJCodec,
    get_scheme_info,
    list_schemes,
    load_settings,
    make_codec,
)


class TestCodecAPI:
    """Test the public VariationSelectorCodec interface."""

    def test_encode_returns_string(self, codec: VariationSelectorCodec) -> None:
        result = codec.encode("😊", "test")
        assert isinstance(result, str)
        assert len(result) > 1

    def test_decode_all_returns_messages(self, codec: VariationSelectorCodec) -> None:
        result = codec.decode_all(codec.encode("😊", "test"))
        assert result == [DecodedMessage("😊", "test")]

    def test_stats(self, codec: VariationSelectorCodec) -> None:
        stats = codec.stats(codec.encode("😊", "abc"))
        assert isinstance(stats, TextStats)
        assert stats.hidden_bytes == 4

    def test_has_hidden_data(self, codec: VariationSelectorCodec) -> None:
        assert codec.has_hidden_data(codec.encode("A", "x"))
        assert not codec.has_hidden_data("plain text")

    def test_encode_with_default(self, codec: VariationSelectorCodec) -> None:
        hidden = codec.encode_with_default("hello")
        assert hidden[0] == DEFAULT_CARRIER
        assert codec.decode(hidden) == "hello"

    def test_encode_with_explicit_carrier(self, codec: VariationSelectorCodec) -> None:
        assert codec.encode_with_default("hello", carrier="🔑")[0] == "🔑"

    def test_custom_default_carrier(self) -> None:
        codec = VariationSelectorCodec(default_carrier="★")
        assert codec.default_carrier == "★"
        assert codec.encode_with_default("x")[0] == "★"

    def test_compress_property(self, codec: VariationSelectorCodec, compressing_codec: VariationSelectorCodec) -> None:
        assert codec.compress is False
        assert compressing_codec.compress is True

    def test_compressed_and_plain_decode_alike(
        self, codec: VariationSelectorCodec, compressing_codec: VariationSelectorCodec
    ) -> None:
        """Either codec reads what the other wrote."""
        message = "repeat " * 40
        assert codec.decode(compressing_codec.encode("😊", message)) == message
        assert compressing_codec.decode(codec.encode("😊", message)) == message


class TestValidation:
    """Argument checking on encode."""

    @pytest.mark.parametrize(
        "carrier",
        [
            "",
            "AB",
            "\U0001f468\u200d\U0001f469\u200d\U0001f467",  # family ZWJ sequence
            "\U0001f1fa\U0001f1f8",  # flag
            "\ufe0f",
            "\U000e0100",
        ],
    )
    def test_bad_carrier(self, codec: VariationSelectorCodec, carrier: str) -> None:
        with pytest.raises(InvalidArgumentError):
            codec.encode(carrier, "message")

    def test_empty_message(self, codec: VariationSelectorCodec) -> None:
        with pytest.raises(InvalidArgumentError, match="Message cannot be empty"):
            codec.encode("😊", "")

    def test_lone_surrogate(self, codec: VariationSelectorCodec) -> None:
        with pytest.raises(InvalidArgumentError, match="UTF-8"):
            codec.encode("😊", "bad \ud800")

    def test_empty_messages_map(self, codec: VariationSelectorCodec) -> None:
        with pytest.raises(InvalidArgumentError, match="Messages map cannot be empty"):
            codec.encode_multiple({})

    def test_bad_entry_in_map(self, codec: VariationSelectorCodec) -> None:
        with pytest.raises(InvalidArgumentError):
            codec.encode_multiple({"A": "ok", "BC": "bad"})

    def test_bad_default_carrier(self) -> None:
        with pytest.raises(InvalidArgumentError):
            VariationSelectorCodec(default_carrier="")

    def test_errors_share_base(self, codec: VariationSelectorCodec) -> None:
        with pytest.raises(StegoError):
            codec.encode("", "x")


class TestProtocol:
    def test_both_schemes_are_codecs(self, codec: VariationSelectorCodec, zwj_codec: ZWJCodec) -> None:
        assert isinstance(codec, Codec)
        assert isinstance(zwj_codec, Codec)

    def test_schemes_do_not_mix(self, codec: VariationSelectorCodec, zwj_codec: ZWJCodec) -> None:
        assert codec.decode(zwj_codec.encode("A", "hi")) == ""
        assert zwj_codec.decode(codec.encode("A", "hi")) == ""

    def test_zwj_encode_with_default(self, zwj_codec: ZWJCodec) -> None:
        hidden = zwj_codec.encode_with_default("hi")
        assert hidden[0] == DEFAULT_CARRIER
        assert zwj_codec.decode(hidden) == "hi"
        assert zwj_codec.get_visible_text(hidden) == DEFAULT_CARRIER


class TestMakeCodec:
    """Building codecs by scheme name."""

    def test_default(self) -> None:
        assert isinstance(make_codec(), VariationSelectorCodec)

    def test_vs_with_compression(self) -> None:
        codec = make_codec("vs", compress=True, carrier="★")
        assert isinstance(codec, VariationSelectorCodec)
        assert codec.compress is True
        assert codec.default_carrier == "★"

    def test_zwj(self) -> None:
        assert isinstance(make_codec("zwj"), ZWJCodec)

    def test_zwj_rejects_compression(self) -> None:
        with pytest.raises(InvalidArgumentError, match="does not support compression"):
            make_codec("zwj", compress=True)

    def test_unknown(self) -> None:
        with pytest.raises(InvalidArgumentError, match="Unknown scheme"):
            make_codec("base64")


class TestSchemeRegistry:
    def test_list(self) -> None:
        assert [info.name for info in list_schemes()] == ["vs", "zwj"]

    def test_info(self) -> None:
        vs = get_scheme_info("vs")
        zwj = get_scheme_info("zwj")
        assert vs is not None and vs.supports_compression
        assert zwj is not None and zwj.survives_copy_paste
        assert not zwj.supports_compression

    def test_unknown(self) -> None:
        assert get_scheme_info("nope") is None


class TestSettings:
    """EMOJISTEGO_* environment variables and .env files."""

    def test_defaults(self) -> None:
        settings = load_settings(use_dotenv=False)
        assert settings.carrier == DEFAULT_CARRIER
        assert settings.compress is False
        assert settings.scheme == "vs"
        assert settings.clipboard_backend is None

    def test_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("EMOJISTEGO_CARRIER", "🔑")
        monkeypatch.setenv("EMOJISTEGO_COMPRESS", "yes")
        monkeypatch.setenv("EMOJISTEGO_SCHEME", "ZWJ")
        monkeypatch.setenv("EMOJISTEGO_CLIPBOARD", "xclip")
        settings = load_settings(use_dotenv=False)
        assert settings.carrier == "🔑"
        assert settings.compress is True
        assert settings.scheme == "zwj"
        assert settings.clipboard_backend == "xclip"

    def test_bad_bool(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("EMOJISTEGO_COMPRESS", "maybe")
        with pytest.raises(InvalidArgumentError, match="EMOJISTEGO_COMPRESS"):
            load_settings(use_dotenv=False)

    def test_bad_scheme(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("EMOJISTEGO_SCHEME", "rot13")
        with pytest.raises(InvalidArgumentError, match="Unknown scheme"):
            load_settings(use_dotenv=False)

    def test_dotenv_file(self, tmp_path: Path) -> None:
        (tmp_path / ".env").write_text("EMOJISTEGO_COMPRESS=1\nEMOJISTEGO_CARRIER=A\n", encoding="utf-8")
        settings = load_settings()
        assert settings.compress is True
        assert settings.carrier == "A"

    def test_environment_beats_dotenv(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / ".env").write_text("EMOJISTEGO_CARRIER=A\n", encoding="utf-8")
        monkeypatch.setenv("EMOJISTEGO_CARRIER", "B")
        assert load_settings().carrier == "B"
