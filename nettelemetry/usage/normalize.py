"""Scale/unit corrections turning raw counters into 0-100 percentages."""

from __future__ import annotations

import math

from loguru import logger

from nettelemetry.usage.models import VendorTag
from nettelemetry.usage.settings import MikroTikHeuristics


def clamp_percent(value: float) -> float:
    return min(100, max(0, value))


def _round_half_up(value: float, digits: int = 0) -> float:
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def in_branch(oid: str, branches: list[str]) -> bool:
    """True if ``oid`` equals or lies below one of the dotted ``branches``."""
    oid = oid.lstrip(".")
    for branch in branches:
        branch = branch.lstrip(".")
        if oid == branch or oid.startswith(branch + "."):
            return True
    return False


def normalize_cpu(
    raw: int,
    oid: str,
    vendor: VendorTag | str,
    heuristics: MikroTikHeuristics | None = None,
) -> int:
    """Return a whole CPU percentage for a raw reading from ``oid``."""
    vendor = VendorTag.coerce(vendor)
    if vendor is VendorTag.MIKROTIK:
        heuristics = heuristics or MikroTikHeuristics()
        if in_branch(oid, heuristics.scale_255_branches):
            value = _round_half_up(raw * 100 / 255)
            logger.debug(f"MikroTik CPU from 0-255 scale: {raw} -> {value}%")
            return int(clamp_percent(value))
        if in_branch(oid, heuristics.centipercent_branches) and raw > 100:
            value = raw // 100
            logger.debug(f"MikroTik CPU from centipercent: {raw} -> {value}%")
            return int(clamp_percent(value))

    return int(clamp_percent(_round_half_up(raw)))


def normalize_ram(
    total: int,
    used: int,
    used_oid: str,
    vendor: VendorTag | str,
    heuristics: MikroTikHeuristics | None = None,
) -> float | None:
    """Return RAM usage in percent (2 decimals), or None if ``total`` is unusable."""
    vendor = VendorTag.coerce(vendor)
    if vendor is VendorTag.MIKROTIK:
        heuristics = heuristics or MikroTikHeuristics()
        if in_branch(used_oid, heuristics.free_memory_branches):
            used = total - used
        if total < heuristics.small_total_threshold:
            total *= heuristics.small_total_multiplier
            used *= heuristics.small_total_multiplier

    if total <= 0:
        return None
    return float(clamp_percent(_round_half_up(used / total * 100, 2)))
