"""Collector settings and tunable vendor heuristics."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

DEFAULT_FALLBACK_STORAGE_INDICES = [1, 2, 3, 4, 5]


class MikroTikHeuristics(BaseModel):
    """Firmware-observed MikroTik quirks.

    Derived from a limited set of RouterOS devices; adjust here rather than in
    the normalizer when new hardware disagrees.
    """

    scale_255_branches: list[str] = Field(default_factory=lambda: ["1.3.6.1.4.1.14988.1.1.3.14"])
    centipercent_branches: list[str] = Field(default_factory=lambda: ["1.3.6.1.2.1.25.3.3.1.2"])
    free_memory_branches: list[str] = Field(default_factory=lambda: ["1.3.6.1.4.1.14988.1.1.1.1"])
    small_total_threshold: int = 1024
    small_total_multiplier: int = 1024 * 1024


class CollectorSettings(BaseModel):
    """Per-process configuration for usage collection."""

    port: int = 161
    get_timeout: float = 8.0
    discovery_timeout: float = 2.0
    retries: int = 0
    fallback_storage_indices: list[int] = Field(default_factory=lambda: list(DEFAULT_FALLBACK_STORAGE_INDICES))
    config_dir: Path | None = None
    mikrotik: MikroTikHeuristics = Field(default_factory=MikroTikHeuristics)
