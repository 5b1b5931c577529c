"""Pydantic models and enums for device usage collection."""

from __future__ import annotations

from enum import Enum

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class VendorTag(str, Enum):
    MIKROTIK = "mikrotik"
    JUNIPER = "juniper"
    HUAWEI = "huawei"
    CISCO = "cisco"
    HP = "hp"
    GENERIC = "generic"

    @classmethod
    def coerce(cls, value: VendorTag | str | None) -> VendorTag:
        """Return the tag for ``value`` (case-insensitive); anything unknown is GENERIC."""
        if isinstance(value, str):
            value = value.strip().lower()
        try:
            return cls(value)
        except ValueError:
            return cls.GENERIC


class DeviceTarget(BaseModel):
    """A device to poll: address, SNMPv2c community and raw OS string."""

    model_config = ConfigDict(frozen=True)

    address: str
    community: str = "public"
    vendor_hint: str = Field(default="", validation_alias=AliasChoices("vendor_hint", "vendorHint"))


class OidCatalog(BaseModel):
    """Candidate OIDs for CPU and RAM, in probing order."""

    model_config = ConfigDict(frozen=True)

    cpu: list[str] = Field(default_factory=list)
    ram_total: list[str] = Field(default_factory=list)
    ram_used: list[str] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.cpu or self.ram_total or self.ram_used)


class VarBind(BaseModel):
    """One variable binding from a GET or walk.

    ``value`` is None when the agent answered with an error indicator
    (noSuchObject, noSuchInstance, endOfMibView) or a non-integer value.
    """

    oid: str
    value: int | None = None


class UsageResult(BaseModel):
    """CPU/RAM utilization in percent; None means no valid reading."""

    cpu_percent: float | None = Field(default=None, serialization_alias="cpuPercent")
    ram_percent: float | None = Field(default=None, serialization_alias="ramPercent")


class CatalogStatus(BaseModel):
    """Which catalog document serves a vendor after fallback."""

    vendor: VendorTag
    directory: str
    source: str | None = None  # directory actually loaded, None for the empty catalog
    fallback: bool = False
