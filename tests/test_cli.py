import io
from pathlib import Path

import pytest

from saltybox.cli import build_parser, main

BACKWARDS_COMPAT = (
    b"saltybox1:RF0qX8mpCMXVBq6zxHfamdiT64s6Pwvb99Qj9gV61sMAAAAAAAAAFE6RVTWMhBCMJGL0MmgdDUBHoJaW"
)


def _stdin(monkeypatch, text):
    monkeypatch.setattr("sys.stdin", io.StringIO(text))


def test_parser_accepts_aliases():
    parser = build_parser()
    args = parser.parse_args(["--passphrase-stdin", "e", "-i", "in.txt", "-o", "out.txt"])
    assert args.passphrase_stdin is True
    assert args.input == "in.txt"
    assert args.output == "out.txt"


def test_parser_long_options():
    args = build_parser().parse_args(["decrypt", "--input", "a", "--output", "b"])
    assert (args.input, args.output, args.passphrase_stdin) == ("a", "b", False)


def test_parser_requires_input_and_output():
    with pytest.raises(SystemExit) as info:
        build_parser().parse_args(["encrypt", "-i", "a"])
    assert info.value.code == 2


def test_no_command_is_an_error(capsys):
    assert main([]) == 1
    assert "command is required; use help to see list of commands" in capsys.readouterr().err


def test_help_command(capsys):
    assert main(["help"]) == 0
    out = capsys.readouterr().out
    assert "encrypt" in out and "decrypt" in out and "update" in out


def test_encrypt_then_decrypt_via_stdin(tmp_path: Path, monkeypatch):
    plain = tmp_path / "plain"
    plain.write_bytes(b"super secret")
    encrypted = tmp_path / "encrypted"
    restored = tmp_path / "restored"

    _stdin(monkeypatch, "test")
    assert main(["--passphrase-stdin", "encrypt", "-i", str(plain), "-o", str(encrypted)]) == 0
    assert encrypted.read_bytes().startswith(b"saltybox1:")

    _stdin(monkeypatch, "test")
    assert main(["--passphrase-stdin", "d", "-i", str(encrypted), "-o", str(restored)]) == 0
    assert restored.read_bytes() == b"super secret"


def test_decrypt_known_file(tmp_path: Path, monkeypatch):
    encrypted = tmp_path / "encrypted"
    encrypted.write_bytes(BACKWARDS_COMPAT)
    restored = tmp_path / "restored"

    _stdin(monkeypatch, "test")
    assert main(["--passphrase-stdin", "decrypt", "-i", str(encrypted), "-o", str(restored)]) == 0
    assert restored.read_bytes() == b"test"


def test_update_with_wrong_passphrase_fails(tmp_path: Path, monkeypatch, capsys):
    encrypted = tmp_path / "encrypted"
    encrypted.write_bytes(BACKWARDS_COMPAT)
    plain = tmp_path / "plain"
    plain.write_bytes(b"new")

    _stdin(monkeypatch, "wrong")
    assert main(["--passphrase-stdin", "u", "-i", str(plain), "-o", str(encrypted)]) == 1
    assert "bad passphrase" in capsys.readouterr().err
    assert encrypted.read_bytes() == BACKWARDS_COMPAT


def test_update_with_right_passphrase(tmp_path: Path, monkeypatch):
    encrypted = tmp_path / "encrypted"
    encrypted.write_bytes(BACKWARDS_COMPAT)
    plain = tmp_path / "plain"
    plain.write_bytes(b"updated super secret")
    restored = tmp_path / "restored"

    _stdin(monkeypatch, "test")
    assert main(["--passphrase-stdin", "update", "-i", str(plain), "-o", str(encrypted)]) == 0

    _stdin(monkeypatch, "test")
    assert main(["--passphrase-stdin", "decrypt", "-i", str(encrypted), "-o", str(restored)]) == 0
    assert restored.read_bytes() == b"updated super secret"


def test_terminal_reader_requires_tty(tmp_path: Path, monkeypatch, capsys):
    plain = tmp_path / "plain"
    plain.write_bytes(b"data")
    _stdin(monkeypatch, "test")

    assert main(["encrypt", "-i", str(plain), "-o", str(tmp_path / "out")]) == 1
    assert "cannot read passphrase from terminal - stdin is not a terminal" in capsys.readouterr().err
    assert not (tmp_path / "out").exists()


def test_missing_input_file_reported(tmp_path: Path, monkeypatch, capsys):
    _stdin(monkeypatch, "test")
    missing = tmp_path / "missing"
    assert main(["--passphrase-stdin", "encrypt", "-i", str(missing), "-o", str(tmp_path / "out")]) == 1
    assert f"failed to read from {missing}" in capsys.readouterr().err