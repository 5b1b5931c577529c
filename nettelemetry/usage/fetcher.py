"""Batched CPU/RAM GETs against a device's candidate OIDs.

Session failures propagate as ``ConnectivityError``; "no usable value" is
reported as ``None``.
"""

from __future__ import annotations

from loguru import logger

from nettelemetry.usage.discovery import discover_storage_indices, storage_oids
from nettelemetry.usage.models import DeviceTarget, OidCatalog, VendorTag
from nettelemetry.usage.normalize import normalize_cpu, normalize_ram
from nettelemetry.usage.settings import CollectorSettings
from nettelemetry.usage.snmp import SessionFactory, SnmpSession
from nettelemetry.usage.vendor import classify


def _dedupe(oids: list[str]) -> list[str]:
    return list(dict.fromkeys(oids))


async def fetch_cpu(
    target: DeviceTarget,
    catalog: OidCatalog,
    vendor: VendorTag | str | None = None,
    *,
    settings: CollectorSettings | None = None,
    session_factory: SessionFactory = SnmpSession,
) -> int | None:
    """Return CPU usage in percent from the first CPU OID that answers."""
    settings = settings or CollectorSettings()
    vendor = VendorTag.coerce(vendor) if vendor else classify(target.vendor_hint)
    cpu_oids = _dedupe(catalog.cpu)
    if not cpu_oids:
        return None

    logger.info(f"Batch testing {len(cpu_oids)} CPU OIDs for {target.address} (vendor: {vendor.value})")
    async with session_factory(
        target, timeout=settings.get_timeout, retries=settings.retries, port=settings.port
    ) as session:
        var_binds = await session.get(cpu_oids)

    for vb in var_binds:
        if vb.value is None:
            continue
        cpu = normalize_cpu(vb.value, vb.oid, vendor, settings.mikrotik)
        logger.info(f"CPU OID {vb.oid} answered for {target.address}: {cpu}%")
        return cpu

    logger.error(f"All CPU OIDs failed for {target.address} (vendor: {vendor.value})")
    return None


async def fetch_ram(
    target: DeviceTarget,
    catalog: OidCatalog,
    vendor: VendorTag | str | None = None,
    *,
    settings: CollectorSettings | None = None,
    session_factory: SessionFactory = SnmpSession,
) -> float | None:
    """Return RAM usage in percent from the first complete total/used OID pair."""
    settings = settings or CollectorSettings()
    vendor = VendorTag.coerce(vendor) if vendor else classify(target.vendor_hint)
    if catalog.is_empty:
        return None

    total_oids = list(catalog.ram_total)
    used_oids = list(catalog.ram_used)

    if vendor is VendorTag.GENERIC:
        indices = await discover_storage_indices(
            target,
            timeout=settings.discovery_timeout,
            port=settings.port,
            fallback=settings.fallback_storage_indices,
            session_factory=session_factory,
        )
        dynamic_totals, dynamic_used = storage_oids(indices)
        total_oids = _dedupe(total_oids + dynamic_totals)
        used_oids = _dedupe(used_oids + dynamic_used)

    if not total_oids or not used_oids:
        return None

    all_oids = _dedupe(total_oids + used_oids)
    logger.info(f"Batch testing {len(all_oids)} RAM OIDs for {target.address} (vendor: {vendor.value})")
    async with session_factory(
        target, timeout=settings.get_timeout, retries=settings.retries, port=settings.port
    ) as session:
        var_binds = await session.get(all_oids)

    values = {vb.oid: vb.value for vb in var_binds if vb.value is not None}
    if not values:
        logger.error(f"No valid RAM OIDs returned for {target.address}")
        return None

    for total_oid in total_oids:
        if total_oid not in values:
            continue
        for used_oid in used_oids:
            if used_oid not in values:
                continue
            ram = normalize_ram(values[total_oid], values[used_oid], used_oid, vendor, settings.mikrotik)
            if ram is not None:
                logger.info(f"RAM OIDs total={total_oid} used={used_oid} answered for {target.address}: {ram}%")
                return ram

    logger.error(f"Could not find a working RAM OID pair for {target.address}")
    return None
