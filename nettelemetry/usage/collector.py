"""Usage orchestrator: CPU then RAM per device, failures absorbed into None."""

from __future__ import annotations

import asyncio

from loguru import logger

from nettelemetry.usage.catalog import resolve_catalog, validate_catalogs
from nettelemetry.usage.exceptions import ConnectivityError
from nettelemetry.usage.fetcher import fetch_cpu, fetch_ram
from nettelemetry.usage.models import CatalogStatus, DeviceTarget, UsageResult
from nettelemetry.usage.settings import CollectorSettings
from nettelemetry.usage.snmp import SessionFactory, SnmpSession
from nettelemetry.usage.vendor import classify


async def collect_usage(
    target: DeviceTarget,
    *,
    settings: CollectorSettings | None = None,
    session_factory: SessionFactory = SnmpSession,
) -> UsageResult:
    """Collect CPU and RAM usage for one device. Never raises.

    RAM is only queried after CPU has finished, so a device never sees both
    batches at once. A failure of one metric leaves the other unaffected.
    """
    settings = settings or CollectorSettings()
    vendor = classify(target.vendor_hint)
    catalog = resolve_catalog(vendor, settings.config_dir)
    logger.info(f"Starting usage collection for {target.address} (vendor: {vendor.value})")

    cpu: float | None = None
    try:
        cpu = await fetch_cpu(target, catalog, vendor, settings=settings, session_factory=session_factory)
    except ConnectivityError as e:
        logger.warning(f"CPU collection failed for {target.address}: {e}")
    except Exception:
        logger.exception(f"Unexpected error collecting CPU for {target.address}")

    ram: float | None = None
    try:
        ram = await fetch_ram(target, catalog, vendor, settings=settings, session_factory=session_factory)
    except ConnectivityError as e:
        logger.warning(f"RAM collection failed for {target.address}: {e}")
    except Exception:
        logger.exception(f"Unexpected error collecting RAM for {target.address}")

    logger.info(f"Completed usage collection for {target.address} (vendor: {vendor.value}) - CPU: {cpu}%, RAM: {ram}%")
    return UsageResult(cpu_percent=cpu, ram_percent=ram)


class UsageCollector:
    """Synchronous front-end for usage collection.

    The OID catalogs are checked once on construction; each ``collect`` call
    still classifies and resolves from scratch.
    """

    def __init__(
        self,
        settings: CollectorSettings | None = None,
        session_factory: SessionFactory = SnmpSession,
    ) -> None:
        self.settings = settings or CollectorSettings()
        self.session_factory = session_factory
        self.catalog_status: list[CatalogStatus] = validate_catalogs(self.settings.config_dir)

    def collect(self, target: DeviceTarget) -> UsageResult:
        """Synchronous entry point; wraps the async implementation."""
        return asyncio.run(collect_usage(target, settings=self.settings, session_factory=self.session_factory))

    async def _collect_all(self, targets: list[DeviceTarget]) -> list[UsageResult]:
        tasks = [collect_usage(t, settings=self.settings, session_factory=self.session_factory) for t in targets]
        return list(await asyncio.gather(*tasks))

    def collect_many(self, targets: list[DeviceTarget]) -> list[UsageResult]:
        """Poll several devices concurrently; results follow the order of ``targets``."""
        return asyncio.run(self._collect_all(targets))
