"""Versioned armoring for arbitrary byte sequences.

The armored form contains no whitespace, is safe to embed in URLs (apart from
its length) and can be passed unescaped in a POSIX shell.
"""

from __future__ import annotations

import base64
import binascii
import re

__all__ = ["ArmorError", "wrap", "unwrap"]

MAGIC_PREFIX = "saltybox"
V1_MAGIC = "saltybox1:"

_URLSAFE_ALPHABET = re.compile(r"[A-Za-z0-9_-]*")


class ArmorError(ValueError):
    """Raised when an armored string cannot be unwrapped."""


def wrap(body: bytes) -> str:
    """Armor ``body`` and return the resulting string."""
    encoded = base64.urlsafe_b64encode(bytes(body)).rstrip(b"=").decode("ascii")
    return f"{V1_MAGIC}{encoded}"


def _decode_raw_urlsafe(text: str) -> bytes:
    """Decode unpadded URL-safe base64, rejecting anything outside the alphabet."""
    match = _URLSAFE_ALPHABET.fullmatch(text)
    if match is None:
        bad_index = next(
            pos for pos, char in enumerate(text) if not _URLSAFE_ALPHABET.fullmatch(char)
        )
        raise ArmorError(
            f"base64 decoding failed: illegal base64 data at input byte {bad_index}"
        )
    if len(text) % 4 == 1:
        raise ArmorError(
            f"base64 decoding failed: illegal base64 data at input byte {len(text) - 1}"
        )
    padded = text + "=" * (-len(text) % 4)
    try:
        return base64.urlsafe_b64decode(padded.encode("ascii"))
    except (binascii.Error, ValueError) as exc:
        raise ArmorError(f"base64 decoding failed: {exc}") from exc


def unwrap(armored: str) -> bytes:
    """Remove the armor from a string produced by :func:`wrap`.

    Raises :class:`ArmorError` if the input is truncated, fails base64
    decoding, claims an unsupported version, or is not armored data at all.
    """
    if len(armored) < len(V1_MAGIC):
        raise ArmorError("input size smaller than magic marker; likely truncated")

    if armored.startswith(V1_MAGIC):
        return _decode_raw_urlsafe(armored[len(V1_MAGIC):])
    if armored.startswith(MAGIC_PREFIX):
        raise ArmorError("input claims to be saltybox, but not a version we support")
    raise ArmorError("input unrecognized as saltybox data")