"""
Scan orchestration: the driver loop around ContextWindowEngine.

`run_scan` drives an already-open source; `scan_path` resolves a path
into a SourceHandle (including decompressor selection), opens it, and
runs the scan.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..config import ScanConfig
from ..dto import ScanSummary, SourceHandle
from ..intake.source_fs import open_byte_source
from ..intake.validator import sniff_compressor, validate_source
from ..pipeline.engine import ContextWindowEngine
from ..pipeline.patterns import PatternSet
from ..ports import ByteSinkPort, ByteSourcePort, ScanObserverPort

logger = logging.getLogger(__name__)


def run_scan(
    source: ByteSourcePort,
    sink: ByteSinkPort,
    patterns: PatternSet,
    config: Optional[ScanConfig] = None,
    observer: Optional[ScanObserverPort] = None,
) -> ScanSummary:
    """
    Step the engine until the source is exhausted and return the run summary.
    """
    cfg = config or ScanConfig()
    if len(patterns) == 0:
        logger.warning("no targets configured; nothing will be emitted")

    engine = ContextWindowEngine.from_config(patterns, cfg, observer=observer)
    while engine.step(source, sink):
        if observer is not None:
            observer.on_progress(source.bytes_consumed_total())
    if observer is not None:
        observer.on_progress(source.bytes_consumed_total())

    summary = engine.summary()
    logger.info(
        "scan finished: %d bytes, %d matches, %d windows (%d partial), %d bytes emitted",
        summary.bytes_scanned,
        summary.matches,
        summary.windows_flushed,
        summary.partial_windows,
        summary.bytes_emitted,
    )
    return summary


def resolve_source(path: str, config: ScanConfig) -> SourceHandle:
    """Build a SourceHandle, sniffing the compressor when config.decompress is 'auto'."""
    validate_source(path)
    if config.decompress == "auto":
        compressor = sniff_compressor(path)
        logger.debug("%s: detected compressor %s", path, compressor)
    else:
        compressor = config.decompress
    return SourceHandle(path=path, compressor=compressor)


def scan_path(
    path: str,
    patterns: PatternSet,
    sink: ByteSinkPort,
    config: Optional[ScanConfig] = None,
    observer: Optional[ScanObserverPort] = None,
) -> ScanSummary:
    """
    Open `path` and scan it.

    Raises SourceOpenError if the path cannot be opened for reading.
    """
    cfg = config or ScanConfig()
    handle = resolve_source(path, cfg)
    logger.info(
        "scanning %s (%s) with %d target(s), ring %d x %d bytes",
        handle.path,
        handle.compressor,
        len(patterns),
        cfg.ring_capacity,
        cfg.chunk_size,
    )
    with open_byte_source(handle) as source:
        return run_scan(source, sink, patterns, cfg, observer)
