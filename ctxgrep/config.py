"""
Configuration schema for the context-window scanner.

Keep this lean and opinionated: only the knobs needed by the
ring geometry, source decompression, progress cadence and logging.
Values can come from defaults, CTXGREP_* environment variables,
or explicit overrides (CLI flags), in increasing priority.
"""

from __future__ import annotations

import os
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

GIB = 1024 * 1024 * 1024

Decompress = Literal["none", "gzip", "zstd", "auto"]

# env var -> field name
_ENV_FIELDS = {
    "CTXGREP_RING_CAPACITY": "ring_capacity",
    "CTXGREP_CHUNK_SIZE": "chunk_size",
    "CTXGREP_PROGRESS_INTERVAL": "progress_interval_bytes",
    "CTXGREP_DECOMPRESS": "decompress",
    "CTXGREP_LOG_LEVEL": "log_level",
    "CTXGREP_LOG_FILE": "log_file",
}


class ScanConfig(BaseModel):
    """
    Centralized, validated configuration for one scan.
    Sizes are in bytes unless noted otherwise.
    """

    model_config = ConfigDict(frozen=True)

    # === Ring geometry ===
    ring_capacity: int = Field(
        default=16,
        gt=0,
        description="Number of chunk slots in the ring; half pre-match, half post-match.",
    )
    chunk_size: int = Field(
        default=4096,
        gt=0,
        description="Bytes requested from the source per step.",
    )

    # === Intake ===
    decompress: Decompress = Field(
        default="none",
        description="Decompressor applied to the source; 'auto' sniffs magic bytes.",
    )

    # === Progress / logging ===
    progress_interval_bytes: int = Field(
        default=GIB,
        gt=0,
        description="Log a progress line each time this many more bytes are consumed.",
    )
    log_level: str = Field(
        default="INFO",
        description="Level name for the ctxgrep logger.",
    )
    log_file: Optional[str] = Field(
        default=None,
        description="Optional rotating log file in addition to stderr.",
    )

    @field_validator("ring_capacity")
    @classmethod
    def _ring_capacity_even(cls, v: int) -> int:
        if v % 2:
            raise ValueError("ring_capacity must be even")
        return v

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"unknown log level: {v}")
        return level

    @property
    def context_bytes(self) -> int:
        """Bytes of context kept on each side of the match chunk."""
        return self.ring_capacity // 2 * self.chunk_size

    @classmethod
    def from_env(cls, **overrides: Any) -> "ScanConfig":
        """
        Build a config from CTXGREP_* environment variables.
        Keyword overrides that are not None take precedence.
        """
        values: dict[str, Any] = {}
        for env_name, field in _ENV_FIELDS.items():
            raw = os.getenv(env_name)
            if raw is not None and raw != "":
                values[field] = raw
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
