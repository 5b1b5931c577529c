"""Shared fixtures for the nettelemetry test suite."""

from __future__ import annotations

from typing import Any

import pytest

from nettelemetry.usage.exceptions import ConnectivityError
from nettelemetry.usage.models import DeviceTarget, VarBind

# ── fake SNMP sessions ────────────────────────────────────────────────


class FakeSession:
    """Stand-in for SnmpSession driven by a FakeSnmp agent."""

    def __init__(self, agent: "FakeSnmp", target: DeviceTarget, **options: Any) -> None:
        self.agent = agent
        self.target = target
        self.options = options
        self.closed = False

    @property
    def host(self) -> str:
        return self.target.address

    async def __aenter__(self) -> "FakeSession":
        if self.agent.open_error is not None:
            self.closed = True
            raise self.agent.open_error
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        self.closed = True

    def _check_failure(self, oids: list[str]) -> None:
        if self.agent.fail_all_gets or any(oid in self.agent.fail_oids for oid in oids):
            raise ConnectivityError(self.host, "Request timed out")

    async def get(self, oids: list[str]) -> list[VarBind]:
        self.agent.get_calls.append(list(oids))
        self._check_failure(oids)
        return [VarBind(oid=oid, value=self.agent.values.get(oid)) for oid in oids]

    async def get_raw(self, oids: list[str]) -> list[Any]:
        self.agent.get_calls.append(list(oids))
        self._check_failure(oids)
        version = self.options.get("version")
        if version in self.agent.failing_versions:
            raise ConnectivityError(self.host, "Request timed out")
        return [self.agent.raw_values.get(oid) for oid in oids]

    async def walk(self, oid: str) -> list[VarBind]:
        self.agent.walk_calls.append(oid)
        if self.agent.walk_error is not None:
            raise self.agent.walk_error
        return [VarBind(oid=f"{oid}.{idx}", value=None) for idx in self.agent.walk_indices]


class FakeSnmp:
    """Configurable fake agent; call it like a session factory."""

    def __init__(self) -> None:
        self.values: dict[str, int] = {}
        self.raw_values: dict[str, Any] = {}
        self.walk_indices: list[int] = []
        self.walk_error: Exception | None = None
        self.open_error: Exception | None = None
        self.construct_error: Exception | None = None
        self.fail_all_gets = False
        self.fail_oids: set[str] = set()
        self.failing_versions: set[int] = set()
        self.sessions: list[FakeSession] = []
        self.get_calls: list[list[str]] = []
        self.walk_calls: list[str] = []

    def __call__(self, target: DeviceTarget, **options: Any) -> FakeSession:
        if self.construct_error is not None:
            raise self.construct_error
        session = FakeSession(self, target, **options)
        self.sessions.append(session)
        return session


@pytest.fixture()
def fake_snmp():
    """Fresh FakeSnmp agent usable as ``session_factory``."""
    return FakeSnmp()


# ── device fixtures ───────────────────────────────────────────────────


@pytest.fixture()
def make_target():
    """Factory fixture returning a DeviceTarget with customizable fields."""

    def _make(**kwargs):
        defaults = {
            "address": "192.168.88.1",
            "community": "public",
            "vendor_hint": "",
        }
        defaults.update(kwargs)
        return DeviceTarget(**defaults)

    return _make


@pytest.fixture()
def write_catalog(tmp_path):
    """Write ``<tmp>/<directory>/oids.json`` and return the config dir."""

    def _write(directory: str, content: str):
        path = tmp_path / directory
        path.mkdir(parents=True, exist_ok=True)
        (path / "oids.json").write_text(content, encoding="utf-8")
        return tmp_path

    return _write
