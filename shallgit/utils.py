"""File and hashing helpers shared by the repository code."""

from __future__ import annotations

import hashlib
import os
from collections.abc import Iterable
from pathlib import Path

PathLike = str | os.PathLike


def read_text(path: PathLike) -> str:
    """Return the text of ``path``, or an empty string if it cannot be read."""
    try:
        with open(path, encoding="utf-8", newline="") as handle:
            return handle.read()
    except OSError:
        return ""


def read_bytes(path: PathLike) -> bytes:
    """Return the raw contents of ``path``; raises ``OSError`` on failure."""
    return Path(path).read_bytes()


def write_bytes(path: PathLike, data: bytes) -> None:
    """Write ``data`` to ``path``, replacing any previous contents."""
    Path(path).write_bytes(bytes(data))


def write_text(path: PathLike, text: str, overwrite: bool) -> None:
    """Write ``text`` to ``path``, replacing it when ``overwrite`` is true, else appending."""
    mode = "w" if overwrite else "a"
    with open(path, mode, encoding="utf-8", newline="") as handle:
        handle.write(text)


def sha1_hex(data: bytes) -> str:
    """Return the lower-case hexadecimal SHA-1 digest of ``data``."""
    return hashlib.sha1(bytes(data)).hexdigest()


def join(first: PathLike, others: Iterable[PathLike]) -> Path:
    """Join ``first`` with every component in ``others``."""
    return Path(first).joinpath(*others)