"""CLI entry point for the SNMP connectivity probe."""

from __future__ import annotations

import argparse
import asyncio
import sys

from loguru import logger
from tabulate import tabulate

from nettelemetry.probe.connectivity import ConnectivityReport, probe_connectivity
from nettelemetry.usage.models import DeviceTarget


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Build argparse parser for the connectivity probe."""
    parser = argparse.ArgumentParser(
        description="Check SNMPv1/v2c reachability of a device via sysDescr.",
    )
    parser.add_argument("host", help="Device IP address or hostname")
    parser.add_argument(
        "-c",
        "--community",
        default="public",
        help="SNMP community string (default: public)",
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
        default=3.0,
        help="Timeout in seconds per version (default: 3)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the report as JSON",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose logging",
    )
    return parser.parse_args(args)


def format_report(host: str, report: ConnectivityReport) -> str:
    rows = [
        ["host", host],
        ["connectivity", "yes" if report.connectivity else "no"],
        ["versions", ", ".join(report.supported_versions) or "-"],
        ["sysDescr", report.sys_descr or "-"],
    ]
    if report.error:
        rows.append(["error", report.error])
    return tabulate(rows, tablefmt="simple")


def main(args: list[str] | None = None) -> None:
    """Main entry point for probe CLI."""
    parsed = parse_args(args)

    if not parsed.verbose:
        logger.remove()
        logger.add(sys.stderr, level="INFO")

    target = DeviceTarget(address=parsed.host, community=parsed.community)
    report = asyncio.run(probe_connectivity(target, timeout=parsed.timeout, port=parsed.port))

    if parsed.json:
        print(report.model_dump_json(indent=2))
    else:
        print(format_report(parsed.host, report))

    if not report.connectivity:
        sys.exit(2)
