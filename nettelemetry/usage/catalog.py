"""Per-vendor OID catalogs loaded from ``config/<dir>/oids.json``.

Document shape::

    {
      "cpu": "<oid>" | ["<oid>", ...],
      "ram": {"total": "<oid>" | [...], "used": "<oid>" | [...]}
    }

A missing or malformed vendor document falls back to ``generic``; if that is
unusable too the empty catalog is returned. Resolution never raises.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from loguru import logger
from pydantic import ValidationError

from nettelemetry.usage.exceptions import CatalogError
from nettelemetry.usage.models import CatalogStatus, OidCatalog, VendorTag

DEFAULT_CONFIG_DIR = Path(__file__).parent / "config"
CATALOG_FILENAME = "oids.json"
GENERIC_DIRECTORY = "generic"

CATALOG_DIRECTORIES: dict[VendorTag, str] = {
    VendorTag.MIKROTIK: "routeros",
    VendorTag.JUNIPER: "junos",
    VendorTag.HUAWEI: "vrp",
    VendorTag.CISCO: GENERIC_DIRECTORY,
    VendorTag.HP: GENERIC_DIRECTORY,
    VendorTag.GENERIC: GENERIC_DIRECTORY,
}


def _as_oid_list(value: Any) -> list[str]:
    """Promote a single OID to a list; None becomes an empty list."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return list(value)


def load_catalog_document(path: Path) -> OidCatalog:
    """Parse one ``oids.json`` document.

    Raises:
        CatalogError: If the file is missing, not JSON or has the wrong shape.
    """
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise CatalogError(path, "catalog document not found") from None
    except (OSError, ValueError) as e:
        raise CatalogError(path, f"unreadable catalog document: {e}") from e

    if not isinstance(raw, dict):
        raise CatalogError(path, "catalog document must be a JSON object")
    ram = raw.get("ram") or {}
    if not isinstance(ram, dict):
        raise CatalogError(path, "'ram' must be an object with 'total' and 'used'")

    try:
        return OidCatalog(
            cpu=_as_oid_list(raw.get("cpu")),
            ram_total=_as_oid_list(ram.get("total")),
            ram_used=_as_oid_list(ram.get("used")),
        )
    except (TypeError, ValidationError) as e:
        raise CatalogError(path, f"invalid OID list: {e}") from e


def _resolve_with_source(vendor: VendorTag | str, config_dir: Path) -> tuple[OidCatalog, str | None]:
    vendor = VendorTag.coerce(vendor)
    directory = CATALOG_DIRECTORIES.get(vendor, GENERIC_DIRECTORY)
    candidates = [directory] if directory == GENERIC_DIRECTORY else [directory, GENERIC_DIRECTORY]

    for candidate in candidates:
        try:
            return load_catalog_document(config_dir / candidate / CATALOG_FILENAME), candidate
        except CatalogError as e:
            logger.debug(f"Catalog for {vendor.value} not usable: {e}")

    return OidCatalog(), None


def resolve_catalog(vendor: VendorTag | str, config_dir: Path | None = None) -> OidCatalog:
    """Return the OID catalog for a vendor, falling back to generic, then empty.

    Unknown vendor values resolve like ``generic``. Never raises.
    """
    catalog, _ = _resolve_with_source(vendor, config_dir or DEFAULT_CONFIG_DIR)
    return catalog


def validate_catalogs(config_dir: Path | None = None) -> list[CatalogStatus]:
    """Check that every vendor tag resolves to a catalog; warn about fallbacks.

    Meant to run once at process start so missing vendor documents show up
    before the first polling cycle.
    """
    base = config_dir or DEFAULT_CONFIG_DIR
    statuses: list[CatalogStatus] = []
    for vendor in VendorTag:
        directory = CATALOG_DIRECTORIES[vendor]
        _, source = _resolve_with_source(vendor, base)
        status = CatalogStatus(
            vendor=vendor,
            directory=directory,
            source=source,
            fallback=source != directory,
        )
        if source is None:
            logger.warning(f"No OID catalog for {vendor.value} in {base}: usage collection will return no data")
        elif status.fallback:
            logger.warning(f"OID catalog '{directory}' missing for {vendor.value}, using '{source}'")
        statuses.append(status)
    return statuses
