"""Orchestrator CLI: dispatches to sub-CLIs.

Sub-commands:
  usage   CPU/RAM utilization polling via SNMPv2c
  probe   SNMPv1/v2c reachability check (sysDescr)

Examples:
  nettelemetry usage 192.168.88.1:public --os "RouterOS 7.12"

  nettelemetry usage 10.0.0.1 10.0.0.2:monitoring --detect --format json

  nettelemetry probe 10.0.0.1 -c public
"""

from __future__ import annotations

import os
import sys

from tabulate import tabulate

from nettelemetry import __version__, configure_logging
from nettelemetry import glogger
from nettelemetry.usage.catalog import DEFAULT_CONFIG_DIR
from nettelemetry.usage.models import VendorTag

COMMANDS = {
    "usage": ("nettelemetry.usage.cli", "CPU/RAM utilization polling"),
    "probe": ("nettelemetry.probe.cli", "SNMP connectivity probe"),
}

EXAMPLES = [
    "nettelemetry usage 192.168.88.1:public --os \"RouterOS 7.12\"",
    "nettelemetry usage 10.0.0.1 [fe80::1]:monitoring --detect --format json",
    "nettelemetry usage --list-catalogs",
    "nettelemetry probe 10.0.0.1 -c public",
]


def _print_usage() -> None:
    print("usage: nettelemetry <command> [options]\n")
    print("Vendor-aware CPU/RAM telemetry for network devices via SNMP.\n")
    print("Available commands:")
    for cmd, (_, desc) in COMMANDS.items():
        print(f"  {cmd:14s}  {desc}")
    print("\nExamples:")
    for example in EXAMPLES:
        print(f"  {example}")
    print("\nRun 'nettelemetry <command> --help' for command-specific options.")


def _print_startup_banner() -> None:
    startup_rows = [
        ["version", __version__],
        ["commands", ", ".join(COMMANDS)],
        ["vendors", ", ".join(tag.value for tag in VendorTag)],
        ["catalogs", str(DEFAULT_CONFIG_DIR)],
        ["LOGURU_LEVEL", os.getenv("LOGURU_LEVEL", "DEBUG")],
    ]

    for var in ("GITHUB_REF", "GITHUB_SHA", "BUILDTIME"):
        val = os.environ.get(var)
        if val and not val.endswith("_is_undefined"):
            startup_rows.append([var, val])

    table_str = tabulate(startup_rows, tablefmt="mixed_grid")
    lines = table_str.split("\n")
    table_width = len(lines[0])
    title = "nettelemetry starting up"
    title_border = "┍" + "━" * (table_width - 2) + "┑"
    title_row = "│ " + title.center(table_width - 4) + " │"
    separator = lines[0].replace("┍", "┝").replace("┑", "┥").replace("┯", "┿")

    glogger.opt(raw=True).info(
        "\n{}\n", title_border + "\n" + title_row + "\n" + separator + "\n" + "\n".join(lines[1:])
    )


def main() -> None:
    """Main entry point, dispatch to sub-CLI."""
    configure_logging()
    _print_startup_banner()

    if len(sys.argv) < 2 or sys.argv[1] in ("-h", "--help"):
        _print_usage()
        sys.exit(0 if len(sys.argv) >= 2 else 1)

    command = sys.argv[1]
    if command not in COMMANDS:
        print(f"nettelemetry: unknown command '{command}'\n", file=sys.stderr)
        _print_usage()
        sys.exit(1)

    module_path, _ = COMMANDS[command]

    from importlib import import_module

    module = import_module(module_path)
    module.main(sys.argv[2:])


if __name__ == "__main__":
    main()
