"""Tests for nettelemetry.probe (connectivity report and CLI)."""

from __future__ import annotations

import asyncio
from unittest.mock import patch

import pytest

from nettelemetry.probe.cli import format_report, main, parse_args
from nettelemetry.probe.connectivity import NO_CONNECTIVITY_MESSAGE, ConnectivityReport, probe_connectivity
from nettelemetry.usage.exceptions import ConnectivityError
from nettelemetry.usage.snmp import OID_SYS_DESCR, SNMP_V1, SNMP_V2C


class TestProbeConnectivity:
    """Test probe_connectivity."""

    def test_both_versions_answer(self, fake_snmp, make_target):
        """v1 and v2c answering -> both listed, sysDescr from the first."""
        fake_snmp.raw_values = {OID_SYS_DESCR: "RouterOS RB4011iGS+"}
        report = asyncio.run(probe_connectivity(make_target(), session_factory=fake_snmp))

        assert report.connectivity is True
        assert report.supported_versions == ["SNMPv1", "SNMPv2c"]
        assert report.sys_descr == "RouterOS RB4011iGS+"
        assert report.error is None

    def test_one_session_per_version(self, fake_snmp, make_target):
        """Each version gets its own 3 s session, closed afterwards."""
        fake_snmp.raw_values = {OID_SYS_DESCR: "Linux"}
        asyncio.run(probe_connectivity(make_target(), session_factory=fake_snmp))

        assert [s.options["version"] for s in fake_snmp.sessions] == [SNMP_V1, SNMP_V2C]
        assert all(s.options["timeout"] == 3.0 for s in fake_snmp.sessions)
        assert all(s.closed for s in fake_snmp.sessions)

    def test_only_v2c(self, fake_snmp, make_target):
        """v1 failing still reports v2c."""
        fake_snmp.raw_values = {OID_SYS_DESCR: "Linux"}
        fake_snmp.failing_versions = {SNMP_V1}
        report = asyncio.run(probe_connectivity(make_target(), session_factory=fake_snmp))

        assert report.supported_versions == ["SNMPv2c"]
        assert report.connectivity is True

    def test_no_answer(self, fake_snmp, make_target):
        """Nothing answers -> error message, never raises."""
        fake_snmp.open_error = ConnectivityError("192.168.88.1", "unreachable")
        report = asyncio.run(probe_connectivity(make_target(), session_factory=fake_snmp))

        assert report.connectivity is False
        assert report.supported_versions == []
        assert report.error == NO_CONNECTIVITY_MESSAGE

    def test_empty_sys_descr_is_failure(self, fake_snmp, make_target):
        """A missing sysDescr value counts as no response."""
        report = asyncio.run(probe_connectivity(make_target(), session_factory=fake_snmp))
        assert report.connectivity is False


class TestProbeCli:
    """Test the probe CLI."""

    def test_parse_defaults(self):
        args = parse_args(["10.0.0.1"])
        assert args.host == "10.0.0.1"
        assert args.community == "public"
        assert args.timeout == 3.0
        assert args.json is False

    def test_format_report(self):
        report = ConnectivityReport(connectivity=True, supported_versions=["SNMPv2c"], sys_descr="JUNOS")
        output = format_report("10.0.0.1", report)
        assert "SNMPv2c" in output
        assert "JUNOS" in output

    def test_main_exits_nonzero_without_connectivity(self, capsys):
        """No connectivity -> exit code 2 after printing the report."""
        report = ConnectivityReport(error=NO_CONNECTIVITY_MESSAGE)
        with patch("nettelemetry.probe.cli.probe_connectivity", return_value=report):
            with pytest.raises(SystemExit) as exc_info:
                main(["10.0.0.1", "--json"])
        assert exc_info.value.code == 2
        assert NO_CONNECTIVITY_MESSAGE in capsys.readouterr().out

    def test_main_prints_table(self, capsys):
        report = ConnectivityReport(connectivity=True, supported_versions=["SNMPv1"], sys_descr="Cisco IOS")
        with patch("nettelemetry.probe.cli.probe_connectivity", return_value=report):
            main(["10.0.0.1", "-c", "private"])
        assert "Cisco IOS" in capsys.readouterr().out
