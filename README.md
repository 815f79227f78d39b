# saltybox

saltybox encrypts files with a passphrase. The encrypted output is a single
line of text. It contains no whitespace, is safe to embed in URLs and can be
passed unescaped in a POSIX shell.

The passphrase is stretched with scrypt (N=32768, r=8, p=1) using a random
8-byte salt. The data is sealed with NaCl secretbox using a random 24-byte
nonce. The result is armored with unpadded URL-safe base64 behind the
`saltybox1:` marker. The format is fixed, so files written now stay readable.

Key stretching uses `hashlib.scrypt`, so the Python build must link an OpenSSL
that provides scrypt. Sealing uses PyNaCl.

## Installation

```
pip install .
```

Python 3.10 or later is required.

## Command line

The passphrase is read from the terminal without echo, after the prompt
`Passphrase (saltybox): ` on standard error. If standard input is not a
terminal, the command fails. Pass `--passphrase-stdin` before the command to
read the passphrase from standard input instead. All of standard input is used
as the passphrase, trailing newline included.

Encrypt a file:

```
saltybox encrypt -i notes.txt -o notes.txt.salty
```

Decrypt it:

```
saltybox decrypt -i notes.txt.salty -o notes.txt
```

Replace the contents of an existing encrypted file:

```
saltybox update -i notes.txt -o notes.txt.salty
```

Read the passphrase from standard input:

```
saltybox --passphrase-stdin decrypt -i notes.txt.salty -o notes.txt < passphrase.txt
```

`update` first decrypts the existing file. This checks that the passphrase you
give is the one already in use. If it is not, or if the file is missing or not
valid saltybox data, the file is left as it was. This stops you from changing
the passphrase by mistake. The new content is written to a temporary file in
the same directory, synced to disk and then renamed over the target. You end
up with either the old file or the new one, never a partly written file.

The commands can be shortened to `e`, `d` and `u`. `saltybox help` lists the
commands. Running `saltybox` with no command prints an error. The output file
of `encrypt` and `decrypt` is created with mode 0600 if it does not exist, and
truncated if it does.

On failure the error goes to standard error as `saltybox: <message>`, and the
exit status is 1.

## Library use

```python
from saltybox import commands, secretcrypt, varmor
from saltybox.preader import ConstantPassphraseReader

passphrase = "secret"

sealed = secretcrypt.encrypt(passphrase, b"hello")
assert secretcrypt.decrypt(passphrase, sealed) == b"hello"

armored = varmor.wrap(sealed)          # "saltybox1:..."
assert varmor.unwrap(armored) == sealed

reader = ConstantPassphraseReader(passphrase)
commands.encrypt("plain.txt", "plain.txt.salty", reader)
commands.decrypt("plain.txt.salty", "plain-again.txt", reader)
commands.update("plain.txt", "plain.txt.salty", reader)
```

The module `saltybox.preader` offers these passphrase readers. Each has a
`read_passphrase()` method:

- `ConstantPassphraseReader(passphrase)` always returns the given passphrase.
- `TerminalPassphraseReader()` prompts on the terminal.
- `StreamPassphraseReader(stream)` reads a whole text or binary stream.
  Nothing is stripped.
- `CachingPassphraseReader(upstream)` asks `upstream` once, on first use, and
  returns the same answer afterwards. A failed read is not cached.

Subclass `PassphraseReader` to provide your own.

Errors are raised as exceptions:

- `secretcrypt.DecryptionError` for truncated or corrupt input, or a wrong
  passphrase. The error does not say which of these happened.
- `varmor.ArmorError` for a string that is too short, has an unsupported
  version, is not saltybox data, or fails base64 decoding.
- `preader.PassphraseError` when a passphrase cannot be read.
- `commands.CommandError` when reading, decrypting, encrypting or writing a
  file fails.

`saltybox.cli.main(argv=None)` runs the command line and returns the exit
status. `saltybox.cli.build_parser()` returns its `argparse` parser.

## Tests

```
pip install .[test]
pytest
```