"""
Basic source validation.

Goal: fast, side-effect-free checks that a source path can be opened for
reading before we build the ring, plus magic-byte sniffing for
`--decompress auto`.

We DO NOT inspect the payload beyond the first few bytes; the scanner
treats every source as an opaque byte stream.
"""

from __future__ import annotations

import os
import stat
from typing import Final

from ..dto import Compressor

# --- Magic numbers (as they appear on disk) ---
MAGIC_GZIP: Final[bytes] = bytes.fromhex("1f8b")
MAGIC_ZSTD: Final[bytes] = bytes.fromhex("28b52ffd")


class SourceOpenError(OSError):
    """Raised when a source path cannot be opened for reading."""


def _read_head(path: str, n: int) -> bytes:
    with open(path, "rb") as f:
        return f.read(n)


def _looks_like_gzip(head: bytes) -> bool:
    return len(head) >= 2 and head[:2] == MAGIC_GZIP


def _looks_like_zstd(head: bytes) -> bool:
    return len(head) >= 4 and head[:4] == MAGIC_ZSTD


def validate_source(path: str) -> None:
    """
    Check that `path` names something we can read sequentially.

    Accepts regular files, block/character devices and FIFOs; "-" (stdin)
    is always accepted. Raises SourceOpenError otherwise.
    """
    if path == "-":
        return
    try:
        st = os.stat(path)
    except FileNotFoundError as e:
        raise SourceOpenError(f"{path}: no such file or device") from e
    except OSError as e:
        raise SourceOpenError(f"{path}: {e.strerror or e}") from e

    if stat.S_ISDIR(st.st_mode):
        raise SourceOpenError(f"{path}: is a directory")

    if not os.access(path, os.R_OK):
        raise SourceOpenError(f"{path}: permission denied")


def sniff_compressor(path: str) -> Compressor:
    """
    Infer the compressor from magic bytes. Only regular files are sniffed;
    devices, pipes and stdin are scanned raw since reading ahead would
    consume bytes we cannot give back.
    """
    if path == "-":
        return "none"
    try:
        if not stat.S_ISREG(os.stat(path).st_mode):
            return "none"
        head = _read_head(path, 4)
    except OSError as e:
        raise SourceOpenError(f"{path}: {e.strerror or e}") from e

    if _looks_like_gzip(head):
        return "gzip"
    if _looks_like_zstd(head):
        return "zstd"
    return "none"
