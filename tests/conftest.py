"""Shared fixtures for ctxgrep tests."""

from __future__ import annotations

import io
import logging

import pytest

from ctxgrep.intake.source_fs import StreamByteSource
from ctxgrep.pipeline.emitter import MemorySink
from ctxgrep.pipeline.engine import ContextWindowEngine
from ctxgrep.pipeline.patterns import PatternSet


class RecordingObserver:
    """Collects every observer callback for assertions."""

    def __init__(self):
        self.matches = []
        self.flushes = []
        self.progress = []

    def on_match(self, event):
        self.matches.append(event)

    def on_flush(self, event):
        self.flushes.append(event)

    def on_progress(self, bytes_consumed):
        self.progress.append(bytes_consumed)


@pytest.fixture
def observer():
    return RecordingObserver()


@pytest.fixture
def scan_bytes():
    """Run a full scan over in-memory bytes and return (output, engine)."""

    def _scan(data: bytes, targets=(b"ab",), ring_capacity=4, chunk_size=4, observer=None):
        engine = ContextWindowEngine(
            PatternSet(targets),
            ring_capacity=ring_capacity,
            chunk_size=chunk_size,
            observer=observer,
        )
        source = StreamByteSource(io.BytesIO(data))
        sink = MemorySink()
        while engine.step(source, sink):
            pass
        return sink.getvalue(), engine

    return _scan


@pytest.fixture(autouse=True)
def reset_package_logger():
    """init_logging() detaches the package logger from root; undo that between tests."""
    yield
    logger = logging.getLogger("ctxgrep")
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
