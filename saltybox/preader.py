"""Sources of passphrases: constant, terminal, stream and caching wrappers."""

from __future__ import annotations

import getpass
import sys
from abc import ABC, abstractmethod
from typing import IO, AnyStr

__all__ = [
    "PassphraseError",
    "PassphraseReader",
    "ConstantPassphraseReader",
    "TerminalPassphraseReader",
    "CachingPassphraseReader",
    "StreamPassphraseReader",
]

PROMPT = "Passphrase (saltybox): "


class PassphraseError(Exception):
    """Raised when a passphrase cannot be obtained."""


class PassphraseReader(ABC):
    """Something that can supply a passphrase."""

    @abstractmethod
    def read_passphrase(self) -> str:
        """Return the passphrase or raise :class:`PassphraseError`."""


class ConstantPassphraseReader(PassphraseReader):
    """Always returns the passphrase it was created with."""

    def __init__(self, passphrase: str) -> None:
        self._passphrase = passphrase

    def read_passphrase(self) -> str:
        return self._passphrase


class TerminalPassphraseReader(PassphraseReader):
    """Prompts for the passphrase on the terminal without echoing it."""

    def read_passphrase(self) -> str:
        stdin = sys.stdin
        if stdin is None or not stdin.isatty():
            raise PassphraseError(
                "cannot read passphrase from terminal - stdin is not a terminal"
            )
        try:
            return getpass.getpass(prompt=PROMPT, stream=sys.stderr)
        except (OSError, EOFError) as exc:
            raise PassphraseError(f"failure reading passphrase: {exc}") from exc


class CachingPassphraseReader(PassphraseReader):
    """Asks its upstream reader at most once, lazily, and remembers the answer.

    A failed upstream read is not remembered; the next call asks again.
    """

    def __init__(self, upstream: PassphraseReader) -> None:
        self.upstream = upstream
        self._passphrase: str | None = None
        self._cached = False

    def read_passphrase(self) -> str:
        if not self._cached:
            self._passphrase = self.upstream.read_passphrase()
            self._cached = True
        assert self._passphrase is not None
        return self._passphrase


class StreamPassphraseReader(PassphraseReader):
    """Reads the whole of a text or binary stream and uses it as the passphrase.

    Nothing is stripped, including any trailing newline. Bytes that are not
    valid UTF-8 are kept via surrogate escapes so they survive unchanged.
    """

    def __init__(self, stream: IO[AnyStr]) -> None:
        self._stream = stream

    def read_passphrase(self) -> str:
        try:
            data = self._stream.read()
        except (OSError, ValueError) as exc:
            raise PassphraseError(f"error reading passphrase: {exc}") from exc
        if isinstance(data, (bytes, bytearray)):
            return bytes(data).decode("utf-8", "surrogateescape")
        return data