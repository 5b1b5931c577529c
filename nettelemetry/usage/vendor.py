"""Vendor classification from free-text OS/platform strings."""

from __future__ import annotations

from nettelemetry.usage.models import VendorTag

# Evaluated in order; the first group with a matching keyword wins.
_VENDOR_KEYWORDS: list[tuple[VendorTag, list[str]]] = [
    (VendorTag.MIKROTIK, ["mikrotik", "routeros", "router os", "mt"]),
    (VendorTag.JUNIPER, ["junos", "juniper", "srx", "ex", "mx"]),
    (VendorTag.HUAWEI, ["huawei", "vrp", "versatile routing platform", "cloudengine", "ce"]),
    (VendorTag.CISCO, ["cisco", "ios", "nexus", "catalyst"]),
    (VendorTag.HP, ["hp ", "hpe", "procurve", "aruba"]),
]


def classify(os_string: str | None) -> VendorTag:
    """Map an OS/platform string to a vendor tag.

    Matching is a case-insensitive substring test; anything unrecognised
    (including an empty string) is ``VendorTag.GENERIC``.
    """
    if not os_string:
        return VendorTag.GENERIC

    lower = os_string.lower()
    for vendor, keywords in _VENDOR_KEYWORDS:
        if any(keyword in lower for keyword in keywords):
            return vendor
    return VendorTag.GENERIC
