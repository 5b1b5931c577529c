"""CLI entry point for device usage collection, standalone-capable."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path

from loguru import logger
from tabulate import tabulate

from nettelemetry.probe.connectivity import probe_connectivity
from nettelemetry.usage.collector import UsageCollector
from nettelemetry.usage.models import CatalogStatus, DeviceTarget, UsageResult
from nettelemetry.usage.settings import CollectorSettings
from nettelemetry.usage.vendor import classify


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Build argparse parser for usage collection."""
    parser = argparse.ArgumentParser(
        description="Poll CPU/RAM utilization of network devices via SNMPv2c.",
    )
    parser.add_argument(
        "devices",
        nargs="*",
        help="Devices as HOST[:COMMUNITY] or [IPv6]:COMMUNITY (default community: public)",
    )
    parser.add_argument(
        "--os",
        dest="vendor_hint",
        default="",
        help="OS/platform string used for vendor detection, e.g. 'RouterOS 7.12'",
    )
    parser.add_argument(
        "--detect",
        action="store_true",
        help="Read sysDescr from devices to use as vendor hint when --os is not given",
    )
    parser.add_argument(
        "--format",
        choices=["table", "json"],
        default="table",
        help="Output format (default: table)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=161,
        help="SNMP UDP port (default: 161)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=8.0,
        help="Timeout in seconds for metric GETs (default: 8)",
    )
    parser.add_argument(
        "--discovery-timeout",
        type=float,
        default=2.0,
        help="Timeout in seconds for storage index discovery (default: 2)",
    )
    parser.add_argument(
        "--config-dir",
        help="Directory holding <vendor>/oids.json catalogs (default: bundled catalogs)",
    )
    parser.add_argument(
        "--list-catalogs",
        action="store_true",
        help="Show which catalog serves each vendor and exit",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose logging",
    )
    return parser.parse_args(args)


def _parse_devices(devices: list[str], vendor_hint: str = "") -> list[DeviceTarget]:
    """Parse HOST[:COMMUNITY] arguments into device targets.

    IPv6 addresses take a community only in bracket form, ``[fe80::1]:public``;
    an unbracketed IPv6 address is used as-is with the default community.
    """
    targets: list[DeviceTarget] = []
    for part in devices:
        part = part.strip()
        if not part:
            continue
        if part.startswith("["):
            # [IPv6]:COMMUNITY
            host, _, rest = part[1:].partition("]")
            community = rest[1:] if rest.startswith(":") else ""
        elif part.count(":") == 1:
            host, community = part.split(":", 1)
        else:
            # bare IPv6 address, no community
            host, community = part, ""
        targets.append(DeviceTarget(address=host, community=community or "public", vendor_hint=vendor_hint))
    return targets


async def _detect_hints(targets: list[DeviceTarget], port: int) -> list[DeviceTarget]:
    """Fill empty vendor hints from sysDescr."""
    pending = [t for t in targets if not t.vendor_hint]
    reports = await asyncio.gather(*[probe_connectivity(t, port=port) for t in pending])
    hints = {t.address: r.sys_descr for t, r in zip(pending, reports) if r.sys_descr}

    return [t.model_copy(update={"vendor_hint": hints[t.address]}) if t.address in hints else t for t in targets]


def format_results(targets: list[DeviceTarget], results: list[UsageResult], fmt: str = "table") -> str:
    """Render usage results as a table or a JSON list."""
    if fmt == "json":
        rows = [
            {"address": t.address, "vendor": classify(t.vendor_hint).value, **r.model_dump(by_alias=True)}
            for t, r in zip(targets, results)
        ]
        return json.dumps(rows, indent=2)

    table = [
        [
            t.address,
            classify(t.vendor_hint).value,
            "-" if r.cpu_percent is None else f"{r.cpu_percent:g}%",
            "-" if r.ram_percent is None else f"{r.ram_percent:.2f}%",
        ]
        for t, r in zip(targets, results)
    ]
    return tabulate(table, headers=["Device", "Vendor", "CPU", "RAM"], tablefmt="simple")


def format_catalogs(statuses: list[CatalogStatus]) -> str:
    rows = [[s.vendor.value, s.directory, s.source or "(empty)", "yes" if s.fallback else ""] for s in statuses]
    return tabulate(rows, headers=["Vendor", "Catalog", "Loaded", "Fallback"], tablefmt="simple")


def main(args: list[str] | None = None) -> None:
    """Main entry point for usage CLI."""
    parsed = parse_args(args)

    if not parsed.verbose:
        logger.remove()
        logger.add(sys.stderr, level="INFO")

    settings = CollectorSettings(
        port=parsed.port,
        get_timeout=parsed.timeout,
        discovery_timeout=parsed.discovery_timeout,
        config_dir=Path(parsed.config_dir) if parsed.config_dir else None,
    )
    collector = UsageCollector(settings)

    if parsed.list_catalogs:
        print(format_catalogs(collector.catalog_status))
        return

    targets = _parse_devices(parsed.devices, parsed.vendor_hint)
    if not targets:
        logger.error("No devices given")
        sys.exit(1)

    if parsed.detect:
        targets = asyncio.run(_detect_hints(targets, parsed.port))

    results = collector.collect_many(targets)
    print(format_results(targets, results, parsed.format))
