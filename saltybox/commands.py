"""File level encrypt, decrypt and update operations."""

from __future__ import annotations

import contextlib
import os
import tempfile

from saltybox import secretcrypt, varmor
from saltybox.preader import CachingPassphraseReader, PassphraseReader

__all__ = ["CommandError", "encrypt", "decrypt", "update"]

_TEMP_PREFIX = "saltybox-update-tmp"


class CommandError(Exception):
    """Raised when a file operation fails."""


def _describe(exc: OSError) -> str:
    return exc.strerror or str(exc)


def _read_file(path: str) -> bytes:
    try:
        with open(path, "rb") as handle:
            return handle.read()
    except OSError as exc:
        raise CommandError(f"failed to read from {path}: {_describe(exc)}") from exc


def _write_file(path: str, data: bytes) -> None:
    """Write ``data`` to ``path``, creating it with mode 0600 if it is new."""
    flags = os.O_WRONLY | os.O_CREAT | os.O_TRUNC | getattr(os, "O_BINARY", 0)
    try:
        fd = os.open(path, flags, 0o600)
        with os.fdopen(fd, "wb") as handle:
            handle.write(data)
    except OSError as exc:
        raise CommandError(f"failed to write to {path}: {_describe(exc)}") from exc


def _encrypt_bytes(passphrase: str, plaintext: bytes) -> bytes:
    try:
        sealed = secretcrypt.encrypt(passphrase, plaintext)
    except ValueError as exc:
        raise CommandError(f"encryption failed: {exc}") from exc
    return varmor.wrap(sealed).encode("ascii")


def _decrypt_text(passphrase: str, armored: bytes) -> bytes:
    text = armored.decode("utf-8", "surrogateescape")
    try:
        sealed = varmor.unwrap(text)
    except varmor.ArmorError as exc:
        raise CommandError(f"failed to unarmor: {exc}") from exc
    try:
        return secretcrypt.decrypt(passphrase, sealed)
    except secretcrypt.DecryptionError as exc:
        raise CommandError(f"failed to decrypt: {exc}") from exc


def encrypt(inpath: str, outpath: str, reader: PassphraseReader) -> None:
    """Encrypt the contents of ``inpath`` into ``outpath``."""
    plaintext = _read_file(inpath)
    passphrase = reader.read_passphrase()
    try:
        armored = _encrypt_bytes(passphrase, plaintext)
    except CommandError as exc:
        raise CommandError(f"encryption failed: {exc}") from exc
    _write_file(outpath, armored)


def decrypt(inpath: str, outpath: str, reader: PassphraseReader) -> None:
    """Decrypt the armored contents of ``inpath`` into ``outpath``."""
    armored = _read_file(inpath)
    passphrase = reader.read_passphrase()
    try:
        plaintext = _decrypt_text(passphrase, armored)
    except CommandError as exc:
        raise CommandError(f"failed to decrypt: {exc}") from exc
    _write_file(outpath, plaintext)


def update(plainfile: str, cryptfile: str, reader: PassphraseReader) -> None:
    """Replace the encrypted ``cryptfile`` with an encryption of ``plainfile``.

    The passphrase must unlock the existing file, so that it cannot be changed
    by accident. The replacement is atomic: the new content goes to a
    temporary file next to the target, is synced, and is renamed over it.
    """
    armored = _read_file(cryptfile)

    caching = CachingPassphraseReader(reader)
    passphrase = caching.read_passphrase()
    try:
        _decrypt_text(passphrase, armored)
    except CommandError as exc:
        raise CommandError(f"failed to decrypt: {exc}") from exc

    directory = os.path.dirname(cryptfile) or os.curdir
    try:
        fd, tmpname = tempfile.mkstemp(prefix=_TEMP_PREFIX, dir=directory)
    except OSError as exc:
        raise CommandError(f"failed to create tempfile: {_describe(exc)}") from exc
    os.close(fd)

    try:
        try:
            encrypt(plainfile, tmpname, caching)
        except CommandError as exc:
            raise CommandError(f"failed to encrypt: {exc}") from exc

        try:
            with open(tmpname, "r+b") as handle:
                os.fsync(handle.fileno())
        except OSError as exc:
            raise CommandError(
                f"failed to sync file prior to rename: {_describe(exc)}"
            ) from exc

        try:
            os.replace(tmpname, cryptfile)
        except OSError as exc:
            raise CommandError(
                f"failed to rename to target file: {_describe(exc)}"
            ) from exc
    finally:
        with contextlib.suppress(FileNotFoundError):
            os.remove(tmpname)