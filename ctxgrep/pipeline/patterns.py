"""
Target set: the fixed byte strings a chunk is checked against.

Matching is a plain substring test per target, confined to one chunk.
A target whose bytes straddle two consecutive chunks is NOT found; the
ring only ever looks at one chunk at a time.
"""

from __future__ import annotations

import os
from typing import Iterable, Iterator, Optional, Sequence


class PatternSet:
    """
    Ordered, append-only collection of non-empty byte-string targets.

    Usage:
        patterns = PatternSet([b"ab"])
        patterns.add(b"\\x7fELF")
        patterns.matches(chunk, n)
    """

    def __init__(self, targets: Iterable[bytes] = ()) -> None:
        self._targets: list[bytes] = []
        for t in targets:
            self.add(t)

    @classmethod
    def from_strings(cls, values: Sequence[str], *, as_hex: bool = False) -> "PatternSet":
        """
        Build targets from command-line strings.

        Plain strings go through os.fsencode so undecodable argv bytes
        round-trip unchanged; with as_hex=True each value is parsed by
        bytes.fromhex (whitespace allowed).
        """
        if as_hex:
            return cls(bytes.fromhex(v) for v in values)
        return cls(os.fsencode(v) for v in values)

    def add(self, target: bytes) -> None:
        if isinstance(target, str):
            raise TypeError("targets must be bytes; encode str targets first")
        target = bytes(target)
        if not target:
            raise ValueError("empty target")
        self._targets.append(target)

    # --- matching ---

    def first_match(self, chunk: bytes | bytearray, length: Optional[int] = None) -> Optional[bytes]:
        """
        Return the first target (insertion order) found in chunk[:length],
        or None. No side effects.
        """
        end = len(chunk) if length is None else length
        if end <= 0:
            return None
        for target in self._targets:
            if chunk.find(target, 0, end) != -1:
                return target
        return None

    def matches(self, chunk: bytes | bytearray, length: Optional[int] = None) -> bool:
        """True iff any target occurs within chunk[:length]."""
        return self.first_match(chunk, length) is not None

    # --- introspection ---

    def __len__(self) -> int:
        return len(self._targets)

    def __iter__(self) -> Iterator[bytes]:
        return iter(self._targets)

    def __repr__(self) -> str:
        return f"PatternSet({self._targets!r})"
