"""
Progress and match reporting (ScanObserverPort implementation).

Purely observational: writes to the diagnostic stream via logging, and
optionally drives a tqdm byte counter. Window bytes never pass through here.
"""

from __future__ import annotations

import logging
from typing import Optional

from tqdm import tqdm

from ..config import GIB
from ..dto import MatchEvent, WindowFlush
from ..ports import ScanObserverPort


class ProgressReporter(ScanObserverPort):
    """
    Parameters
    ----------
    logger : logging.Logger
        Destination for progress / match lines.
    interval_bytes : int
        Log one progress line per crossed multiple of this many bytes.
    bar : tqdm, optional
        Byte-unit progress bar to advance alongside the log lines.
    """

    def __init__(
        self,
        logger: logging.Logger,
        *,
        interval_bytes: int = GIB,
        bar: Optional[tqdm] = None,
    ) -> None:
        if interval_bytes <= 0:
            raise ValueError("interval_bytes must be > 0")
        self.logger = logger
        self._interval = int(interval_bytes)
        self._bar = bar
        self._last_mark = 0
        self._last_total = 0

    @classmethod
    def with_bar(cls, logger: logging.Logger, *, interval_bytes: int = GIB, total: Optional[int] = None) -> "ProgressReporter":
        bar = tqdm(total=total, unit="B", unit_scale=True, unit_divisor=1024, desc="scanned", leave=False)
        return cls(logger, interval_bytes=interval_bytes, bar=bar)

    def on_progress(self, bytes_consumed: int) -> None:
        if self._bar is not None and bytes_consumed > self._last_total:
            self._bar.update(bytes_consumed - self._last_total)
        self._last_total = max(self._last_total, bytes_consumed)

        mark = bytes_consumed // self._interval
        while self._last_mark < mark:
            self._last_mark += 1
            if self._interval == GIB:
                self.logger.info("%d GiB scanned", self._last_mark)
            else:
                self.logger.info("%d bytes scanned", self._last_mark * self._interval)

    def on_match(self, event: MatchEvent) -> None:
        self.logger.info(
            "match at %d bytes consumed (chunk %d, offset %d, target %r)",
            event.bytes_consumed,
            event.chunk_index,
            event.chunk_offset,
            event.target,
        )

    def on_flush(self, event: WindowFlush) -> None:
        self.logger.debug(
            "window flushed from slot %d: %d slots, %d bytes%s",
            event.start,
            event.slots_emitted,
            event.bytes_emitted,
            " (end of stream)" if event.at_end_of_stream else "",
        )

    def close(self) -> None:
        if self._bar is not None:
            self._bar.close()
