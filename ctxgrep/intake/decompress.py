"""
Source stream opener.

Provides a single entry point `open_source_stream(handle)` that returns a
binary file-like object for reading the source's bytes, regardless of
whether the underlying file is raw, gzip-compressed, or zstd-compressed.

This module does not scan anything; it only handles opening and
decompression.
"""

from __future__ import annotations

import gzip
import sys
from contextlib import contextmanager
from typing import IO, Generator

import zstandard  # type: ignore

from ..dto import SourceHandle
from .validator import SourceOpenError


def _open_raw(handle: SourceHandle) -> IO[bytes]:
    if handle.is_stdin:
        return sys.stdin.buffer
    try:
        # Unbuffered: reads already happen in chunk_size units.
        return open(handle.path, "rb", buffering=0)
    except OSError as e:
        raise SourceOpenError(f"{handle.path}: {e.strerror or e}") from e


@contextmanager
def open_source_stream(handle: SourceHandle) -> Generator[IO[bytes], None, None]:
    """
    Context manager yielding a readable binary stream for the given source.

    - handle.compressor == "none": raw file / device / stdin
    - handle.compressor == "gzip": gzip.GzipFile over the raw stream
    - handle.compressor == "zstd": zstd stream reader over the raw stream

    stdin is never closed here; everything else is.
    """
    raw = _open_raw(handle)
    stream: IO[bytes] = raw
    try:
        if handle.compressor == "gzip":
            stream = gzip.GzipFile(fileobj=raw, mode="rb")
        elif handle.compressor == "zstd":
            dctx = zstandard.ZstdDecompressor()
            stream = dctx.stream_reader(raw, read_across_frames=True, closefd=False)
        yield stream
    finally:
        try:
            if stream is not raw:
                stream.close()
        finally:
            if not handle.is_stdin:
                raw.close()
