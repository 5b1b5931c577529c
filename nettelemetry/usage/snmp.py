"""OID constants and an async SNMPv2c session wrapper around pysnmp."""

from __future__ import annotations

from types import TracebackType
from typing import Any, Callable, Self

from loguru import logger
from pysnmp.error import PySnmpError
from pysnmp.hlapi.asyncio import (
    CommunityData,
    ContextData,
    ObjectIdentity,
    ObjectType,
    SnmpEngine,
    Udp6TransportTarget,
    UdpTransportTarget,
    bulk_walk_cmd,
    get_cmd,
)
from pysnmp.proto.rfc1905 import EndOfMibView, NoSuchInstance, NoSuchObject

from nettelemetry.usage.exceptions import ConnectivityError
from nettelemetry.usage.models import DeviceTarget, VarBind

# ── OID constants ──────────────────────────────────────────────────────
OID_SYS_DESCR = "1.3.6.1.2.1.1.1.0"
OID_HR_STORAGE_TYPE = "1.3.6.1.2.1.25.2.3.1.2"  # HOST-RESOURCES-MIB
OID_HR_STORAGE_SIZE = "1.3.6.1.2.1.25.2.3.1.5"  # HOST-RESOURCES-MIB
OID_HR_STORAGE_USED = "1.3.6.1.2.1.25.2.3.1.6"  # HOST-RESOURCES-MIB

SNMP_V1 = 0
SNMP_V2C = 1

_VARBIND_ERRORS = (NoSuchObject, NoSuchInstance, EndOfMibView)


def varbind_int(value: Any) -> int | None:
    """Convert an SNMP value to int, None for error indicators or non-numeric values."""
    if value is None or isinstance(value, _VARBIND_ERRORS):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        pass
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return None


class SnmpSession:
    """One SNMP session against a device.

    Use as ``async with``; the engine dispatcher is closed on every exit path.
    Request failures (timeouts, PDU error status) raise ``ConnectivityError``.
    """

    def __init__(
        self,
        target: DeviceTarget,
        *,
        timeout: float = 8.0,
        retries: int = 0,
        port: int = 161,
        version: int = SNMP_V2C,
    ) -> None:
        self.target = target
        self.timeout = timeout
        self.retries = retries
        self.port = port
        self.version = version
        self._engine: Any = None
        self._transport: Any = None
        self._auth: Any = None

    @property
    def host(self) -> str:
        return self.target.address

    async def open(self) -> None:
        self._engine = SnmpEngine()
        self._auth = CommunityData(self.target.community, mpModel=self.version)
        try:
            transport_cls = Udp6TransportTarget if ":" in self.host else UdpTransportTarget
            self._transport = await transport_cls.create(
                (self.host, self.port), timeout=self.timeout, retries=self.retries
            )
        except (PySnmpError, OSError) as e:
            self.close()
            raise ConnectivityError(self.host, str(e)) from e

    def close(self) -> None:
        if self._engine is not None:
            self._engine.close_dispatcher()
            self._engine = None

    async def __aenter__(self) -> Self:
        await self.open()
        return self

    async def __aexit__(
        self, exc_type: type[BaseException] | None, exc_val: BaseException | None, exc_tb: TracebackType | None
    ) -> None:
        self.close()

    async def get(self, oids: list[str]) -> list[VarBind]:
        """Batched GET; returns one VarBind per requested OID, in request order."""
        values = await self.get_raw(oids)
        return [VarBind(oid=oid, value=varbind_int(val)) for oid, val in zip(oids, values)]

    async def get_raw(self, oids: list[str]) -> list[Any]:
        """Batched GET returning the raw pysnmp values; error indicators become None."""
        try:
            error_indication, error_status, error_index, var_binds = await get_cmd(
                self._engine,
                self._auth,
                self._transport,
                ContextData(),
                *[ObjectType(ObjectIdentity(oid)) for oid in oids],
                lookupMib=False,
            )
        except PySnmpError as e:
            raise ConnectivityError(self.host, str(e)) from e
        if error_indication:
            raise ConnectivityError(self.host, str(error_indication))
        if error_status:
            raise ConnectivityError(self.host, f"{error_status.prettyPrint()} at index {error_index}")

        return [None if isinstance(val, _VARBIND_ERRORS) else val for _, val in var_binds]

    async def walk(self, oid: str) -> list[VarBind]:
        """Bulk-walk an OID subtree; any error aborts the walk."""
        results: list[VarBind] = []
        try:
            async for error_indication, error_status, error_index, var_binds in bulk_walk_cmd(
                self._engine,
                self._auth,
                self._transport,
                ContextData(),
                0,
                25,  # nonRepeaters, maxRepetitions
                ObjectType(ObjectIdentity(oid)),
                lexicographicMode=False,
                lookupMib=False,
            ):
                if error_indication:
                    raise ConnectivityError(self.host, f"walk of {oid}: {error_indication}")
                if error_status:
                    raise ConnectivityError(self.host, f"walk of {oid}: {error_status.prettyPrint()}")
                for var_bind_oid, val in var_binds:
                    results.append(VarBind(oid=str(var_bind_oid), value=varbind_int(val)))
        except PySnmpError as e:
            raise ConnectivityError(self.host, str(e)) from e
        logger.debug(f"Walked {oid} on {self.host}: {len(results)} bindings")
        return results


SessionFactory = Callable[..., SnmpSession]
