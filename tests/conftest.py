"""Shared pytest fixtures for emojistego tests."""

from __future__ import annotations

import os

import pytest

from emojistego import MemoryClipboard, VariationSelectorCodec, ZWJCodec


@pytest.fixture(scope="session")
def codec() -> VariationSelectorCodec:
    """Session-scoped codec without compression."""
    return VariationSelectorCodec()


@pytest.fixture(scope="session")
def compressing_codec() -> VariationSelectorCodec:
    """Codec that compresses payloads when that makes them smaller."""
    return VariationSelectorCodec(compress=True)


@pytest.fixture(scope="session")
def zwj_codec() -> ZWJCodec:
    return ZWJCodec()


@pytest.fixture
def memory_clipboard() -> MemoryClipboard:
    """Fresh in-process clipboard for each test."""
    return MemoryClipboard()


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Keep EMOJISTEGO_* settings and stray .env files out of the tests."""
    for name in [k for k in os.environ if k.startswith("EMOJISTEGO_")]:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
