"""
Sink adapters (synchronous, minimal).

Purpose
-------
Receive flushed window bytes from the engine and hand them to the
downstream consumer. Output is the raw concatenation of windows in the
order they were flushed: no separators, headers or match metadata.

- `StreamSink(stream)` -> writes to a binary stream (file, stdout.buffer)
- `MemorySink()`       -> accumulates in memory (tests, embedding)

Both implement ByteSinkPort.
"""

from __future__ import annotations

from typing import IO

from ..ports import ByteSinkPort


class StreamSink(ByteSinkPort):
    """
    Write window bytes to a binary stream.

    Parameters
    ----------
    stream : IO[bytes]
        Destination; must be writable from this thread. Not closed here.
    """

    def __init__(self, stream: IO[bytes]) -> None:
        self._stream = stream

    def accept(self, data: bytes) -> None:
        self._stream.write(data)

    def close(self) -> None:
        """Flush the stream; the caller owns closing it."""
        self._stream.flush()


class MemorySink(ByteSinkPort):
    """Collect window bytes in memory, one entry per accepted chunk."""

    def __init__(self) -> None:
        self.chunks: list[bytes] = []

    def accept(self, data: bytes) -> None:
        self.chunks.append(data)

    def getvalue(self) -> bytes:
        return b"".join(self.chunks)

    def close(self) -> None:
        return
