"""Passphrase-based file encryption with a versioned, shell-safe armored format."""

__version__ = "0.1.0"
__all__ = ["cli", "commands", "preader", "secretcrypt", "varmor"]