"""SNMP connectivity probe: sysDescr over SNMPv1 and SNMPv2c."""

from nettelemetry.probe.connectivity import ConnectivityReport, probe_connectivity

__all__ = [
    "ConnectivityReport",
    "probe_connectivity",
]
