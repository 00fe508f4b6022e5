"""Tests for source validation, decompression and the stream byte source."""

from __future__ import annotations

import gzip
import io

import pytest
import zstandard

from ctxgrep.dto import SourceHandle
from ctxgrep.intake.source_fs import StreamByteSource, open_byte_source
from ctxgrep.intake.validator import SourceOpenError, sniff_compressor, validate_source


class TrickleStream(io.RawIOBase):
    """Returns at most one byte per read, like a slow pipe."""

    def __init__(self, data):
        self._data = data
        self._pos = 0

    def readable(self):
        return True

    def read(self, n=-1):
        chunk = self._data[self._pos:self._pos + 1]
        self._pos += len(chunk)
        return chunk


class FailingStream(io.RawIOBase):
    """Yields one good read, then raises."""

    def __init__(self):
        self._calls = 0

    def readable(self):
        return True

    def read(self, n=-1):
        self._calls += 1
        if self._calls == 1:
            return b"ok"
        raise OSError(5, "Input/output error")


class TestStreamByteSource:
    def test_reads_full_chunks_from_short_reads(self):
        source = StreamByteSource(TrickleStream(b"abcdefghij"))
        assert source.read(4) == b"abcd"
        assert source.read(4) == b"efgh"
        assert source.read(4) == b"ij"
        assert source.read(4) == b""
        assert source.bytes_consumed_total() == 10

    def test_read_error_ends_stream(self, caplog):
        source = StreamByteSource(FailingStream(), name="disk")
        with caplog.at_level("WARNING", logger="ctxgrep.intake.source_fs"):
            assert source.read(8) == b"ok"
            assert source.read(8) == b""
        assert source.bytes_consumed_total() == 2
        assert "read error on disk" in caplog.text

    def test_zero_request(self):
        source = StreamByteSource(io.BytesIO(b"abc"))
        assert source.read(0) == b""
        assert source.read(3) == b"abc"


class TestValidation:
    def test_missing_path(self, tmp_path):
        with pytest.raises(SourceOpenError):
            validate_source(str(tmp_path / "nope.img"))

    def test_directory(self, tmp_path):
        with pytest.raises(SourceOpenError):
            validate_source(str(tmp_path))

    def test_regular_file_and_stdin(self, tmp_path):
        p = tmp_path / "disk.img"
        p.write_bytes(b"data")
        validate_source(str(p))
        validate_source("-")

    def test_source_open_error_is_oserror(self):
        assert issubclass(SourceOpenError, OSError)


class TestSniffCompressor:
    def test_gzip(self, tmp_path):
        p = tmp_path / "a.gz"
        p.write_bytes(gzip.compress(b"payload"))
        assert sniff_compressor(str(p)) == "gzip"

    def test_zstd(self, tmp_path):
        p = tmp_path / "a.zst"
        p.write_bytes(zstandard.ZstdCompressor().compress(b"payload"))
        assert sniff_compressor(str(p)) == "zstd"

    def test_raw_and_short_files(self, tmp_path):
        p = tmp_path / "raw.bin"
        p.write_bytes(b"\x1f")
        assert sniff_compressor(str(p)) == "none"
        assert sniff_compressor("-") == "none"


class TestOpenByteSource:
    @pytest.mark.parametrize(
        "compressor,encode",
        [
            ("none", lambda b: b),
            ("gzip", gzip.compress),
            ("zstd", lambda b: zstandard.ZstdCompressor().compress(b)),
        ],
    )
    def test_decompresses(self, tmp_path, compressor, encode):
        payload = b"0123456789" * 100
        p = tmp_path / "src.bin"
        p.write_bytes(encode(payload))
        with open_byte_source(SourceHandle(path=str(p), compressor=compressor)) as source:
            parts = []
            while True:
                data = source.read(64)
                if not data:
                    break
                parts.append(data)
        assert b"".join(parts) == payload
        assert source.bytes_consumed_total() == len(payload)

    def test_missing_file(self, tmp_path):
        with pytest.raises(SourceOpenError):
            with open_byte_source(SourceHandle(path=str(tmp_path / "missing"))):
                pass


class TestDamagedCompressedSources:
    """Truncated or corrupt compressed images end the stream instead of raising."""

    PAYLOAD = bytes(range(256)) * 512

    def _drain(self, source):
        parts = []
        while True:
            data = source.read(4096)
            if not data:
                break
            parts.append(data)
        return b"".join(parts)

    def test_truncated_gzip(self, tmp_path, caplog):
        blob = gzip.compress(self.PAYLOAD)
        p = tmp_path / "cut.img.gz"
        p.write_bytes(blob[: len(blob) // 2])
        with caplog.at_level("WARNING", logger="ctxgrep.intake.source_fs"):
            with open_byte_source(SourceHandle(path=str(p), compressor="gzip")) as source:
                data = self._drain(source)
                assert source.read(4096) == b""
        assert len(data) < len(self.PAYLOAD)
        assert self.PAYLOAD.startswith(data)
        assert source.bytes_consumed_total() == len(data)
        assert "read error" in caplog.text

    def test_corrupt_zstd_frame(self, tmp_path, caplog):
        # A valid frame followed by a frame whose header is garbage.
        bad_frame = b"\x28\xb5\x2f\xfd" + b"\xff" * 64
        p = tmp_path / "bad.img.zst"
        p.write_bytes(zstandard.ZstdCompressor().compress(self.PAYLOAD) + bad_frame)
        with caplog.at_level("WARNING", logger="ctxgrep.intake.source_fs"):
            with open_byte_source(SourceHandle(path=str(p), compressor="zstd")) as source:
                data = self._drain(source)
        assert self.PAYLOAD.startswith(data)
        assert "read error" in caplog.text

    def test_corrupt_zstd_header(self, tmp_path):
        p = tmp_path / "bad.zst"
        p.write_bytes(b"\x28\xb5\x2f\xfd" + b"\xff" * 64)
        with open_byte_source(SourceHandle(path=str(p), compressor="zstd")) as source:
            assert self._drain(source) == b""
