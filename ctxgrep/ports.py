"""
Hexagonal interfaces (Ports) for the scanner.

These define the boundary between the windowing core and I/O adapters.
Keep them small and implementation-agnostic so they're easy to fake in tests.
"""

from __future__ import annotations

from typing import Protocol

from .dto import MatchEvent, WindowFlush


class ByteSourcePort(Protocol):
    """
    Sequential reader. No seeking: every call continues where the last stopped.
    """

    def read(self, max_bytes: int) -> bytes:
        """
        Return up to max_bytes bytes. An empty result means the source is
        exhausted (or failed); the core treats both the same way.
        """
        ...

    def bytes_consumed_total(self) -> int:
        """Monotonic count of bytes returned so far."""
        ...


class ByteSinkPort(Protocol):
    """Sequential byte consumer; receives window bytes in order."""

    def accept(self, data: bytes) -> None:
        ...


class ScanObserverPort(Protocol):
    """
    Receives observational callbacks from the engine and the driver.
    Nothing here may influence what gets emitted.
    """

    def on_match(self, event: MatchEvent) -> None:
        """A window opened on a matching chunk."""
        ...

    def on_flush(self, event: WindowFlush) -> None:
        """A window was emitted to the sink."""
        ...

    def on_progress(self, bytes_consumed: int) -> None:
        """Called by the driver after every step with the source total."""
        ...
