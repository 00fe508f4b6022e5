"""
Ring index arithmetic.

The ring holds `capacity` slots; half of them carry pre-match context and
half post-match context. These helpers keep the modular arithmetic in one
place. All indices are 0-based.
"""

from __future__ import annotations

from typing import Iterator


def check_geometry(capacity: int, chunk_size: int) -> None:
    """Raise ValueError unless capacity is positive and even and chunk_size positive."""
    if capacity <= 0:
        raise ValueError(f"ring capacity must be > 0, got {capacity}")
    if capacity % 2:
        raise ValueError(f"ring capacity must be even, got {capacity}")
    if chunk_size <= 0:
        raise ValueError(f"chunk size must be > 0, got {chunk_size}")


def advance(slot: int, capacity: int) -> int:
    """Index of the slot after `slot`, wrapping."""
    return (slot + 1) % capacity


def window_start(match_slot: int, capacity: int) -> int:
    """
    Slot the flush walk begins at for a match in `match_slot`.

    Half a ring ahead of the match chunk is the oldest chunk that still
    belongs to the window; walking forward from there reproduces read order.
    """
    return (match_slot + capacity // 2) % capacity


def walk(start: int, capacity: int) -> Iterator[int]:
    """
    Yield every slot index exactly once: start, start+1, ..., start-1 (mod capacity).
    """
    for i in range(capacity):
        yield (start + i) % capacity
