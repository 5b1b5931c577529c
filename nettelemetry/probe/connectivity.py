"""Basic SNMP reachability check via sysDescr over SNMPv1 and SNMPv2c."""

from __future__ import annotations

from loguru import logger
from pydantic import BaseModel, Field

from nettelemetry.usage.exceptions import ConnectivityError
from nettelemetry.usage.models import DeviceTarget
from nettelemetry.usage.snmp import OID_SYS_DESCR, SNMP_V1, SNMP_V2C, SessionFactory, SnmpSession

NO_CONNECTIVITY_MESSAGE = "No SNMP connectivity detected with either v1 or v2c"

_VERSIONS: list[tuple[str, int]] = [("SNMPv1", SNMP_V1), ("SNMPv2c", SNMP_V2C)]


class ConnectivityReport(BaseModel):
    connectivity: bool = False
    supported_versions: list[str] = Field(default_factory=list)
    sys_descr: str | None = None
    error: str | None = None


async def _read_sys_descr(session: SnmpSession) -> str:
    """GET sysDescr.0 as text; raises ConnectivityError on an empty answer."""
    values = await session.get_raw([OID_SYS_DESCR])
    value = values[0] if values else None
    text = str(value) if value is not None else ""
    if not text:
        raise ConnectivityError(session.host, "no response")
    return text


async def probe_connectivity(
    target: DeviceTarget,
    *,
    timeout: float = 3.0,
    port: int = 161,
    session_factory: SessionFactory = SnmpSession,
) -> ConnectivityReport:
    """Try sysDescr with each SNMP version in its own session. Never raises."""
    logger.info(f"Testing basic SNMP connectivity for {target.address}")
    report = ConnectivityReport()

    for name, version in _VERSIONS:
        try:
            async with session_factory(target, timeout=timeout, retries=0, port=port, version=version) as session:
                sys_descr = await _read_sys_descr(session)
        except ConnectivityError as e:
            logger.info(f"{name} failed for {target.address}: {e}")
            continue

        logger.info(f"{name} works for {target.address}: {sys_descr}")
        report.supported_versions.append(name)
        report.connectivity = True
        if report.sys_descr is None:
            report.sys_descr = sys_descr

    if not report.connectivity:
        report.error = NO_CONNECTIVITY_MESSAGE
    return report
