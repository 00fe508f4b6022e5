"""
Stream-backed ByteSource adapters.

`StreamByteSource` wraps any binary file-like object (file, block device,
pipe, decompressor) and implements ByteSourcePort:
- read(max_bytes) keeps reading until max_bytes are collected or the
  underlying stream is exhausted, so short reads from pipes do not split
  chunks unevenly.
- bytes_consumed_total() is tracked here rather than via tell(), which
  pipes and decompressors do not support reliably.
- A read or decompression error mid-stream is logged and reported as
  end of stream.

`open_byte_source(handle)` validates, opens and wraps a SourceHandle.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import IO, Generator

import zstandard  # type: ignore

from ..dto import SourceHandle
from ..ports import ByteSourcePort
from .decompress import open_source_stream
from .validator import validate_source

logger = logging.getLogger(__name__)


class StreamByteSource(ByteSourcePort):
    """
    Sequential ByteSourcePort over a binary stream.

    Parameters
    ----------
    stream : IO[bytes]
        Readable binary stream. Not closed by this adapter.
    name : str
        Label used in log messages.
    """

    def __init__(self, stream: IO[bytes], *, name: str = "<stream>") -> None:
        self._stream = stream
        self._name = name
        self._consumed = 0
        self._exhausted = False

    def read(self, max_bytes: int) -> bytes:
        if self._exhausted or max_bytes <= 0:
            return b""

        parts: list[bytes] = []
        want = max_bytes
        while want > 0:
            try:
                data = self._stream.read(want)
            except (OSError, EOFError, zstandard.ZstdError) as e:
                # No retries: a failed read ends the scan like EOF would.
                # Truncated gzip raises EOFError, corrupt zstd ZstdError.
                logger.warning("read error on %s after %d bytes: %s", self._name, self._consumed, e)
                self._exhausted = True
                break
            if not data:
                self._exhausted = True
                break
            parts.append(data)
            want -= len(data)

        out = parts[0] if len(parts) == 1 else b"".join(parts)
        self._consumed += len(out)
        return out

    def bytes_consumed_total(self) -> int:
        return self._consumed


@contextmanager
def open_byte_source(handle: SourceHandle) -> Generator[StreamByteSource, None, None]:
    """
    Validate and open `handle`, yielding a StreamByteSource.

    Raises SourceOpenError if the path cannot be opened for reading.
    """
    validate_source(handle.path)
    name = "<stdin>" if handle.is_stdin else handle.path
    with open_source_stream(handle) as stream:
        yield StreamByteSource(stream, name=name)
