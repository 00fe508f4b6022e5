"""
Data Transfer Objects (DTOs) used across the scanner.

These are intentionally small, immutable, and independent
of any I/O or decompression libraries.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

Compressor = Literal["none", "gzip", "zstd"]


# === Intake ===
@dataclass(frozen=True)
class SourceHandle:
    """Identifies one byte source to scan."""
    path: str                # filesystem path, block device, or "-" for stdin
    compressor: Compressor = "none"

    @property
    def is_stdin(self) -> bool:
        return self.path == "-"


# === Engine events ===
@dataclass(frozen=True)
class MatchEvent:
    """Emitted once when a window opens on a matching chunk."""
    slot: int                # ring index holding the match chunk
    chunk_index: int         # 0-based ordinal of the read that matched
    chunk_offset: int        # stream offset of the first byte of that chunk
    bytes_consumed: int      # source total at detection time
    target: bytes            # first target (insertion order) found in the chunk


@dataclass(frozen=True)
class WindowFlush:
    """Emitted after a window has been handed to the sink."""
    start: int               # ring index the flush walk began at
    slots_emitted: int
    bytes_emitted: int
    at_end_of_stream: bool   # True if post-context may be truncated


# === Run summary ===
@dataclass(frozen=True)
class ScanSummary:
    bytes_scanned: int
    chunks_read: int
    matches: int             # windows opened
    windows_flushed: int
    partial_windows: int     # windows flushed at end of stream
    bytes_emitted: int
