"""
Sliding context-window engine.

A fixed ring of `ring_capacity` chunk slots, each `chunk_size` bytes, plus
one `pending` tag per slot. Every call to `step()` reads exactly one chunk
into the next slot, checks it against the PatternSet, and decides whether
the open window (if any) is complete and must be flushed to the sink.

Window lifecycle
----------------
- A window opens when a chunk matches and no window is open. The match
  slot is remembered; matches seen while a window is open are ignored
  (no queueing, no nesting).
- The window flushes once half a ring of chunks has been read after the
  match chunk was written, i.e. just before the post-match reads would
  start overwriting pre-match context.
- At end of stream an open window is flushed as-is: full pre-context,
  whatever post-context was read.

Flushing walks the whole ring once, starting half a ring ahead of the
match slot (the oldest surviving chunk), and emits only slots still
tagged pending. Emitted slots are untagged, so bytes are never emitted
twice and slots never written are never emitted at all.

Memory is fixed at construction: ring_capacity * chunk_size bytes.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from ..dto import MatchEvent, ScanSummary, WindowFlush
from ..ports import ByteSinkPort, ByteSourcePort, ScanObserverPort
from .patterns import PatternSet
from .windowing import advance, check_geometry, walk, window_start

if TYPE_CHECKING:
    from ..config import ScanConfig

logger = logging.getLogger(__name__)


class ContextWindowEngine:
    """
    Owns the ring and all window state for one scan.

    Parameters
    ----------
    patterns : PatternSet
        Targets to look for; an empty set never opens a window.
    ring_capacity : int
        Number of slots; must be positive and even.
    chunk_size : int
        Bytes per slot / per read; must be positive.
    observer : ScanObserverPort, optional
        Receives on_match / on_flush notifications.

    Raises
    ------
    ValueError
        If the ring geometry is invalid.
    """

    def __init__(
        self,
        patterns: PatternSet,
        *,
        ring_capacity: int = 16,
        chunk_size: int = 4096,
        observer: Optional[ScanObserverPort] = None,
    ) -> None:
        check_geometry(ring_capacity, chunk_size)
        self._patterns = patterns
        self._capacity = int(ring_capacity)
        self._chunk_size = int(chunk_size)
        self._observer = observer

        # Struct-of-arrays: slot buffers, bytes held, pending tags.
        self._slots = [bytearray(self._chunk_size) for _ in range(self._capacity)]
        self._lengths = [0] * self._capacity
        self._pending = [False] * self._capacity

        self._next_slot = 0
        self._match_slot: Optional[int] = None
        self._finished = False

        # Counters for summary()
        self._bytes_scanned = 0
        self._chunks_read = 0
        self._matches = 0
        self._windows_flushed = 0
        self._partial_windows = 0
        self._bytes_emitted = 0

    @classmethod
    def from_config(
        cls,
        patterns: PatternSet,
        config: "ScanConfig",
        observer: Optional[ScanObserverPort] = None,
    ) -> "ContextWindowEngine":
        return cls(
            patterns,
            ring_capacity=config.ring_capacity,
            chunk_size=config.chunk_size,
            observer=observer,
        )

    # --- driving ---

    def step(self, source: ByteSourcePort, sink: ByteSinkPort) -> bool:
        """
        Read one chunk and advance the window state.

        Returns False once the source is exhausted (after flushing any open
        window); True otherwise.
        """
        if self._finished:
            return False

        slot = self._next_slot
        self._next_slot = advance(slot, self._capacity)

        data = source.read(self._chunk_size)
        n = len(data)
        if n > self._chunk_size:
            raise ValueError(f"source returned {n} bytes for a {self._chunk_size}-byte read")

        if n == 0:
            # Nothing was written, so whatever the slot held stays unemittable.
            self._pending[slot] = False
            self._lengths[slot] = 0
            self._finished = True
            if self._match_slot is not None:
                self._close_window(sink, at_end_of_stream=True)
            return False

        self._slots[slot][:n] = data
        self._lengths[slot] = n
        self._pending[slot] = True
        self._chunks_read += 1
        self._bytes_scanned += n

        if self._match_slot is None:
            target = self._patterns.first_match(self._slots[slot], n)
            if target is not None:
                self._open_window(slot, target, n, source)

        if self._match_slot is not None:
            if self._next_slot == window_start(self._match_slot, self._capacity):
                self._close_window(sink, at_end_of_stream=False)

        return True

    def flush(self, start: int, sink: ByteSinkPort) -> int:
        """
        Emit every pending slot, walking the ring once from `start`, and
        clear their tags. Returns the number of slots emitted.
        """
        emitted = 0
        for i in walk(start, self._capacity):
            if not self._pending[i]:
                continue
            length = self._lengths[i]
            sink.accept(bytes(self._slots[i][:length]))
            self._pending[i] = False
            self._bytes_emitted += length
            emitted += 1
        return emitted

    # --- window lifecycle ---

    def _open_window(self, slot: int, target: bytes, n: int, source: ByteSourcePort) -> None:
        self._match_slot = slot
        self._matches += 1
        event = MatchEvent(
            slot=slot,
            chunk_index=self._chunks_read - 1,
            chunk_offset=self._bytes_scanned - n,
            bytes_consumed=source.bytes_consumed_total(),
            target=target,
        )
        logger.debug("window opened: %s", event)
        if self._observer is not None:
            self._observer.on_match(event)

    def _close_window(self, sink: ByteSinkPort, *, at_end_of_stream: bool) -> None:
        assert self._match_slot is not None
        start = window_start(self._match_slot, self._capacity)
        before = self._bytes_emitted
        slots = self.flush(start, sink)
        self._match_slot = None

        self._windows_flushed += 1
        if at_end_of_stream:
            self._partial_windows += 1
        event = WindowFlush(
            start=start,
            slots_emitted=slots,
            bytes_emitted=self._bytes_emitted - before,
            at_end_of_stream=at_end_of_stream,
        )
        if self._observer is not None:
            self._observer.on_flush(event)

    # --- introspection ---

    @property
    def ring_capacity(self) -> int:
        return self._capacity

    @property
    def chunk_size(self) -> int:
        return self._chunk_size

    @property
    def next_slot(self) -> int:
        return self._next_slot

    @property
    def pending_match_slot(self) -> Optional[int]:
        return self._match_slot

    @property
    def window_open(self) -> bool:
        return self._match_slot is not None

    @property
    def finished(self) -> bool:
        return self._finished

    def pending_slots(self) -> tuple[bool, ...]:
        return tuple(self._pending)

    def summary(self) -> ScanSummary:
        return ScanSummary(
            bytes_scanned=self._bytes_scanned,
            chunks_read=self._chunks_read,
            matches=self._matches,
            windows_flushed=self._windows_flushed,
            partial_windows=self._partial_windows,
            bytes_emitted=self._bytes_emitted,
        )
