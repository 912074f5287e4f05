"""Conversions between bytes and strings, and metadata copying."""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping


def slice_byte_to_string(b: bytes) -> str:
    """Decode bytes as UTF-8 losslessly."""
    return bytes(b).decode("utf-8", errors="surrogateescape")


def string_to_slice_byte(s: str) -> bytes:
    """Encode a string as UTF-8, the inverse of :func:`slice_byte_to_string`."""
    return s.encode("utf-8", errors="surrogateescape")


def copy_meta(src: Mapping[str, str] | None, dst: MutableMapping[str, str] | None) -> None:
    """Copy ``src`` into ``dst`` unless ``dst`` is None."""
    if dst is not None:
        dst.update(src or {})