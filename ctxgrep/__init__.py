"""
ctxgrep: scan raw byte streams for fixed targets and dump the surrounding chunks.

Public API (stable):
- ScanConfig               (configuration)
- run_scan, scan_path      (drive one scan)
- ContextWindowEngine      (the ring / window core)
- PatternSet               (targets)
- ByteSourcePort           (input adapter interface)
- ByteSinkPort             (output adapter interface)
- ScanObserverPort         (progress / match callbacks)
- StreamByteSource, open_byte_source, StreamSink, MemorySink (adapters)
- DTOs: SourceHandle, MatchEvent, WindowFlush, ScanSummary

This package intentionally exposes a small surface area so callers can
wire sources/sinks without depending on internals.
"""

from __future__ import annotations

# Configuration
from .config import ScanConfig

# Orchestration
from .orchestration.runner import run_scan, scan_path

# Core
from .pipeline.engine import ContextWindowEngine
from .pipeline.patterns import PatternSet

# Ports
from .ports import ByteSinkPort, ByteSourcePort, ScanObserverPort

# Adapters
from .intake.source_fs import StreamByteSource, open_byte_source
from .intake.validator import SourceOpenError
from .pipeline.emitter import MemorySink, StreamSink

# DTOs
from .dto import MatchEvent, ScanSummary, SourceHandle, WindowFlush

__all__ = [
    "ScanConfig",
    "run_scan",
    "scan_path",
    "ContextWindowEngine",
    "PatternSet",
    "ByteSinkPort",
    "ByteSourcePort",
    "ScanObserverPort",
    "StreamByteSource",
    "open_byte_source",
    "SourceOpenError",
    "MemorySink",
    "StreamSink",
    "MatchEvent",
    "ScanSummary",
    "SourceHandle",
    "WindowFlush",
]
