"""Scheme registry and runtime settings."""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import find_dotenv, load_dotenv

from .encoder import DEFAULT_CARRIER
from .utils import InvalidArgumentError

DEFAULT_SCHEME = "vs"

_TRUTHY = frozenset({"1", "true", "yes", "on"})
_FALSY = frozenset({"0", "false", "no", "off", ""})


# ---------------------------------------------------------------------------
# Scheme registry
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SchemeInfo:
    """Metadata for an encoding scheme."""

    name: str
    description: str
    survives_copy_paste: bool
    supports_compression: bool


SCHEME_REGISTRY: tuple[SchemeInfo, ...] = (
    SchemeInfo(
        name="vs",
        description="One variation selector per byte (compact, default)",
        survives_copy_paste=False,
        supports_compression=True,
    ),
    SchemeInfo(
        name="zwj",
        description="Zero-width joiner bit pairs with start/end markers",
        survives_copy_paste=True,
        supports_compression=False,
    ),
)


def list_schemes() -> tuple[SchemeInfo, ...]:
    """Return all available schemes."""
    return SCHEME_REGISTRY


def get_scheme_info(name: str) -> SchemeInfo | None:
    """Look up a scheme by name. Returns ``None`` if it is not registered."""
    for info in SCHEME_REGISTRY:
        if info.name == name:
            return info
    return None


# ---------------------------------------------------------------------------
# Environment settings
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Settings:
    """Defaults picked up from the environment (and a ``.env`` file).

    Attributes:
        carrier: ``EMOJISTEGO_CARRIER``; carrier used when none is given.
        compress: ``EMOJISTEGO_COMPRESS``; compress payloads when worthwhile.
        scheme: ``EMOJISTEGO_SCHEME``; ``vs`` or ``zwj``.
        clipboard_backend: ``EMOJISTEGO_CLIPBOARD``; force a pyperclip backend.
    """

    carrier: str = DEFAULT_CARRIER
    compress: bool = False
    scheme: str = DEFAULT_SCHEME
    clipboard_backend: str | None = None


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise InvalidArgumentError(f"{name} must be a boolean (1/0, true/false), got {raw!r}")


def load_settings(use_dotenv: bool = True) -> Settings:
    """Build :class:`Settings` from ``EMOJISTEGO_*`` environment variables.

    Args:
        use_dotenv: Load the nearest ``.env`` file, searching up from the
            working directory, first (existing variables win).

    Raises:
        InvalidArgumentError: If a variable holds an unusable value.
    """
    if use_dotenv:
        load_dotenv(find_dotenv(usecwd=True))

    carrier = os.environ.get("EMOJISTEGO_CARRIER") or DEFAULT_CARRIER
    compress = _parse_bool("EMOJISTEGO_COMPRESS", os.environ.get("EMOJISTEGO_COMPRESS", ""))
    scheme = (os.environ.get("EMOJISTEGO_SCHEME") or DEFAULT_SCHEME).strip().lower()
    if get_scheme_info(scheme) is None:
        known = ", ".join(info.name for info in SCHEME_REGISTRY)
        raise InvalidArgumentError(f"Unknown scheme {scheme!r} (expected one of: {known})")
    backend = os.environ.get("EMOJISTEGO_CLIPBOARD") or None

    return Settings(
        carrier=carrier,
        compress=compress,
        scheme=scheme,
        clipboard_backend=backend,
    )
