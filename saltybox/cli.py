"""Command line interface."""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from typing import Callable, Sequence

from saltybox import commands
from saltybox.commands import CommandError
from saltybox.preader import (
    PassphraseError,
    PassphraseReader,
    StreamPassphraseReader,
    TerminalPassphraseReader,
)

__all__ = ["build_parser", "main"]

_PROG = "saltybox"


@dataclass(frozen=True)
class _Subcommand:
    name: str
    alias: str
    usage: str
    description: str
    input_help: str
    output_help: str
    handler: Callable[[str, str, PassphraseReader], None]


_SUBCOMMANDS = (
    _Subcommand(
        name="encrypt",
        alias="e",
        usage="Encrypt a file",
        description=(
            'Encrypts the contents of a file (the "input", specified with -i) and '
            'writes the encrypted output\nto another file (the "output", specified '
            "with -o).\n\nIf the output file does not exist, it will be created. If "
            "it does exist, it will be truncated and then written to."
        ),
        input_help="Path to the file whose contents is to be encrypted",
        output_help="Path to the file to write the encrypted text to",
        handler=commands.encrypt,
    ),
    _Subcommand(
        name="decrypt",
        alias="d",
        usage="Decrypt a file",
        description=(
            'Decrypts the contents of a file (the "input", specified with -i) and '
            'writes the plain text output\nto another file (the "output", specified '
            "with -o).\n\nIf the output file does not exist, it will be created. If "
            "it does exist, it will be truncated and then written to."
        ),
        input_help="Path to the file whose contents is to be decrypted",
        output_help="Path to the file to write the unencrypted text to",
        handler=commands.decrypt,
    ),
    _Subcommand(
        name="update",
        alias="u",
        usage="Update an encrypted file with new content",
        description=(
            'Update an existing encrypted file (the "output", specified with -o) to '
            "contain the encrypted copy\nof the input (specified with -i).\n\n"
            "If the output file does not already exist, or if it does not appear to "
            "be a valid saltybox file, the operation will fail.\n\n"
            "If the passphrase provided by the user does not unlock the existing "
            "file, the operation will fail. By using the update command,\nthe user "
            "thereby avoids accidentally changing the passphrase as would be "
            "possible if using the encrypt command and separately\nreplacing the "
            "target file."
        ),
        input_help="Path to the file whose contents is to be encrypted",
        output_help="Path to the existing saltybox file to replace with encrypted text",
        handler=commands.update,
    ),
)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the command line."""
    parser = argparse.ArgumentParser(prog=_PROG, description="an encryption tool")
    parser.add_argument(
        "--passphrase-stdin",
        action="store_true",
        help="Read passphrase from stdin instead of from terminal",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    for spec in _SUBCOMMANDS:
        sub = subparsers.add_parser(
            spec.name,
            aliases=[spec.alias],
            help=spec.usage,
            description=spec.description,
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        sub.add_argument("-i", "--input", required=True, help=spec.input_help)
        sub.add_argument("-o", "--output", required=True, help=spec.output_help)
        sub.set_defaults(handler=spec.handler)

    subparsers.add_parser(
        "help", aliases=["h"], help="Shows a list of commands"
    ).set_defaults(handler=None)

    return parser


def _passphrase_reader(from_stdin: bool) -> PassphraseReader:
    if from_stdin:
        return StreamPassphraseReader(getattr(sys.stdin, "buffer", sys.stdin))
    return TerminalPassphraseReader()


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line and return the process exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        print(
            f"{_PROG}: command is required; use help to see list of commands",
            file=sys.stderr,
        )
        return 1
    if args.handler is None:
        parser.print_help()
        return 0

    try:
        args.handler(args.input, args.output, _passphrase_reader(args.passphrase_stdin))
    except (CommandError, PassphraseError) as exc:
        print(f"{_PROG}: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())