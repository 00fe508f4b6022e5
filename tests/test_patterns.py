"""Tests for PatternSet."""

from __future__ import annotations

import pytest

from ctxgrep.pipeline.patterns import PatternSet


class TestMatching:
    def test_substring_match(self):
        patterns = PatternSet([b"ab"])
        assert patterns.matches(b"aaab")
        assert not patterns.matches(b"aaaa")

    def test_length_limits_search(self):
        patterns = PatternSet([b"ab"])
        buf = bytearray(b"00ab")
        assert patterns.matches(buf, 4)
        assert not patterns.matches(buf, 3)
        assert not patterns.matches(buf, 0)

    def test_first_match_follows_insertion_order(self):
        patterns = PatternSet([b"zz", b"cd", b"ab"])
        assert patterns.first_match(b"abcd") == b"cd"
        assert patterns.first_match(b"xxxx") is None

    def test_empty_set_never_matches(self):
        patterns = PatternSet()
        assert len(patterns) == 0
        assert not patterns.matches(b"anything")

    def test_binary_targets(self):
        patterns = PatternSet([b"\x00\xff"])
        assert patterns.matches(b"\x01\x00\xff\x02")


class TestConstruction:
    def test_empty_target_rejected(self):
        with pytest.raises(ValueError):
            PatternSet([b""])

    def test_str_target_rejected(self):
        with pytest.raises(TypeError):
            PatternSet(["ab"])

    def test_add_appends(self):
        patterns = PatternSet([b"a"])
        patterns.add(b"bcd")
        assert list(patterns) == [b"a", b"bcd"]

    def test_from_strings(self):
        patterns = PatternSet.from_strings(["ab", "é"])
        assert list(patterns) == [b"ab", "é".encode()]

    def test_from_hex_strings(self):
        patterns = PatternSet.from_strings(["7f454c46", "de ad"], as_hex=True)
        assert list(patterns) == [b"\x7fELF", b"\xde\xad"]

    def test_bad_hex_raises(self):
        with pytest.raises(ValueError):
            PatternSet.from_strings(["xyz"], as_hex=True)
