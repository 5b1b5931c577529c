"""Runtime discovery of HOST-RESOURCES-MIB storage table indices."""

from __future__ import annotations

from loguru import logger

from nettelemetry.usage.exceptions import ConnectivityError
from nettelemetry.usage.models import DeviceTarget
from nettelemetry.usage.settings import DEFAULT_FALLBACK_STORAGE_INDICES
from nettelemetry.usage.snmp import (
    OID_HR_STORAGE_SIZE,
    OID_HR_STORAGE_TYPE,
    OID_HR_STORAGE_USED,
    SessionFactory,
    SnmpSession,
)


async def discover_storage_indices(
    target: DeviceTarget,
    *,
    timeout: float = 2.0,
    port: int = 161,
    fallback: list[int] | None = None,
    session_factory: SessionFactory = SnmpSession,
) -> list[int]:
    """Walk hrStorageType and return the storage indices present on the device.

    Walk errors and empty walks yield ``fallback`` (default ``[1, 2, 3, 4, 5]``);
    discovery never raises for SNMP failures.
    """
    fallback_indices = list(fallback if fallback is not None else DEFAULT_FALLBACK_STORAGE_INDICES)

    try:
        async with session_factory(target, timeout=timeout, retries=0, port=port) as session:
            var_binds = await session.walk(OID_HR_STORAGE_TYPE)
    except ConnectivityError as e:
        logger.warning(f"Storage discovery failed for {target.address}: {e}")
        return fallback_indices

    indices: list[int] = []
    for vb in var_binds:
        last = vb.oid.rsplit(".", 1)[-1]
        if last.isdigit():
            indices.append(int(last))

    if not indices:
        logger.info(f"Storage discovery for {target.address} found no indices, using {fallback_indices}")
        return fallback_indices
    return indices


def storage_oids(indices: list[int]) -> tuple[list[str], list[str]]:
    """Build (hrStorageSize, hrStorageUsed) OID candidates for the given indices."""
    totals = [f"{OID_HR_STORAGE_SIZE}.{idx}" for idx in indices]
    used = [f"{OID_HR_STORAGE_USED}.{idx}" for idx in indices]
    return totals, used
