"""Device usage collection: vendor-aware CPU/RAM polling via SNMPv2c."""

from nettelemetry.usage.catalog import CATALOG_DIRECTORIES, resolve_catalog, validate_catalogs
from nettelemetry.usage.collector import UsageCollector, collect_usage
from nettelemetry.usage.discovery import discover_storage_indices, storage_oids
from nettelemetry.usage.exceptions import CatalogError, ConnectivityError, TelemetryError
from nettelemetry.usage.fetcher import fetch_cpu, fetch_ram
from nettelemetry.usage.models import CatalogStatus, DeviceTarget, OidCatalog, UsageResult, VarBind, VendorTag
from nettelemetry.usage.normalize import normalize_cpu, normalize_ram
from nettelemetry.usage.settings import CollectorSettings, MikroTikHeuristics
from nettelemetry.usage.vendor import classify

__all__ = [
    "CATALOG_DIRECTORIES",
    "resolve_catalog",
    "validate_catalogs",
    "UsageCollector",
    "collect_usage",
    "discover_storage_indices",
    "storage_oids",
    "fetch_cpu",
    "fetch_ram",
    "normalize_cpu",
    "normalize_ram",
    "classify",
    "CollectorSettings",
    "MikroTikHeuristics",
    "CatalogStatus",
    "DeviceTarget",
    "OidCatalog",
    "UsageResult",
    "VarBind",
    "VendorTag",
    "TelemetryError",
    "ConnectivityError",
    "CatalogError",
]
