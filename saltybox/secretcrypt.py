"""Passphrase based encryption and decryption.

The format is fixed: an 8-byte salt, a 24-byte nonce, a big-endian signed
64-bit length, then a NaCl secretbox sealed with a key derived from the
passphrase by scrypt (N=32768, r=8, p=1).
"""

from __future__ import annotations

import hashlib
import os
import struct

import nacl.exceptions
import nacl.secret

__all__ = ["DecryptionError", "encrypt", "decrypt"]

SALT_LEN = 8
SCRYPT_N = 32768
SCRYPT_R = 8
SCRYPT_P = 1
KEY_LEN = 32
NONCE_LEN = 24

_LENGTH = struct.Struct(">q")
_SCRYPT_MAXMEM = 64 * 1024 * 1024


class DecryptionError(ValueError):
    """Raised when encrypted data cannot be decrypted.

    A bad passphrase cannot be told apart from corrupt input.
    """


def _passphrase_bytes(passphrase: str) -> bytes:
    return passphrase.encode("utf-8", "surrogateescape")


def _derive_key(passphrase: str, salt: bytes) -> bytes:
    return hashlib.scrypt(
        _passphrase_bytes(passphrase),
        salt=salt,
        n=SCRYPT_N,
        r=SCRYPT_R,
        p=SCRYPT_P,
        maxmem=_SCRYPT_MAXMEM,
        dklen=KEY_LEN,
    )


def encrypt(passphrase: str, plaintext: bytes) -> bytes:
    """Encrypt ``plaintext`` with a key derived from ``passphrase``."""
    salt = os.urandom(SALT_LEN)
    key = _derive_key(passphrase, salt)
    nonce = os.urandom(NONCE_LEN)
    sealed = nacl.secret.SecretBox(key).encrypt(bytes(plaintext), nonce).ciphertext
    return b"".join((salt, nonce, _LENGTH.pack(len(sealed)), sealed))


def _take(data: memoryview, offset: int, size: int, what: str) -> bytes:
    chunk = data[offset:offset + size]
    if len(chunk) < size:
        reason = "EOF" if len(chunk) == 0 else "unexpected EOF"
        raise DecryptionError(f"input likely truncated while reading {what}: {reason}")
    return bytes(chunk)


def decrypt(passphrase: str, crypttext: bytes) -> bytes:
    """Decrypt data produced by :func:`encrypt`.

    Raises :class:`DecryptionError` if the input is truncated, corrupt, or
    the passphrase does not match.
    """
    data = memoryview(bytes(crypttext))

    salt = _take(data, 0, SALT_LEN, "salt")
    nonce = _take(data, SALT_LEN, NONCE_LEN, "nonce")
    length_offset = SALT_LEN + NONCE_LEN
    (sealed_len,) = _LENGTH.unpack(_take(data, length_offset, _LENGTH.size, "sealed box"))

    if sealed_len < 0:
        raise DecryptionError("negative sealed box length")
    if sealed_len > len(data):
        raise DecryptionError(
            "truncated or corrupt input; claimed length greater than available input"
        )

    box_offset = length_offset + _LENGTH.size
    sealed = bytes(data[box_offset:box_offset + sealed_len])
    if len(sealed) != sealed_len:
        raise DecryptionError("truncated or corrupt input (while reading sealed box)")

    key = _derive_key(passphrase, salt)
    try:
        return nacl.secret.SecretBox(key).decrypt(sealed, nonce)
    except nacl.exceptions.CryptoError as exc:
        raise DecryptionError("corrupt input, tampered-with data, or bad passphrase") from exc