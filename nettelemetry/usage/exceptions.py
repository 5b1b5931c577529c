"""Exception hierarchy for telemetry collection."""

from __future__ import annotations

from pathlib import Path


class TelemetryError(Exception):
    """Base exception for all telemetry collection errors."""


class ConnectivityError(TelemetryError):
    """SNMP session could not complete (timeout, unreachable host, transport failure)."""

    def __init__(self, host: str, message: str):
        self.host = host
        super().__init__(f"SNMP session error for {host}: {message}")


class CatalogError(TelemetryError):
    """OID catalog document is missing or malformed."""

    def __init__(self, path: Path, message: str):
        self.path = path
        super().__init__(f"{path}: {message}")
