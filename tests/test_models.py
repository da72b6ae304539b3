"""Tests for nodewatcher.models — Snapshot and collector results."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from nodewatcher.models import (
    Geo,
    HostMetrics,
    Interface,
    LinkInventory,
    ReachableNeighbourCount,
    RoutingNeighbour,
    RoutingTable,
    Snapshot,
    SystemData,
)


# ── Snapshot ──────────────────────────────────────────

class TestSnapshot:
    def test_defaults(self):
        s = Snapshot()
        assert s.system_data == SystemData()
        assert s.interfaces == []
        assert s.babel_neighbours == []
        assert s.clients == []
        assert s.client_count == 0
        assert s.batman_adv_interfaces == ""

    def test_frozen(self):
        s = Snapshot()
        with pytest.raises(ValidationError):
            s.client_count = 3

    def test_copy_with_update_leaves_original(self):
        s = Snapshot(system_data=SystemData(status="online"))
        t = s.model_copy(update={"system_data": s.system_data.model_copy(update={"hostname": "n1"})})
        assert t.system_data.hostname == "n1"
        assert t.system_data.status == "online"
        assert s.system_data.hostname == ""

    def test_negative_counts_rejected(self):
        with pytest.raises(ValidationError):
            Snapshot(client_count=-1)
        with pytest.raises(ValidationError):
            ReachableNeighbourCount(interface="eth0", count=-1)


# ── SystemData ────────────────────────────────────────

class TestSystemData:
    def test_unfilled_schema_fields_default_empty(self):
        sd = SystemData()
        assert sd.chipset == ""
        assert sd.cpu == []
        assert sd.vpn_active == 0
        assert sd.geo == Geo(lat=0.0, lng=0.0)

    def test_memory_is_non_negative(self):
        with pytest.raises(ValidationError):
            SystemData(memory_free=-1)


# ── Interface / neighbours ────────────────────────────

class TestInterface:
    def test_fields(self):
        i = Interface(name="eth0", mtu=1500, mac_addr="02:00:00:00:00:01", traffic_rx=1, traffic_tx=2)
        assert i.name == "eth0"
        assert i.traffic_rx == 1

    def test_counters_non_negative(self):
        with pytest.raises(ValidationError):
            Interface(name="eth0", mtu=1500, traffic_rx=-5)


class TestRoutingTable:
    def test_defaults_to_unreachable_and_empty(self):
        t = RoutingTable()
        assert t.reachable is False
        assert t.neighbours == []

    def test_zero_neighbours_distinct_from_unreachable(self):
        assert RoutingTable(reachable=True) != RoutingTable(reachable=False)

    def test_holds_neighbours(self):
        n = RoutingNeighbour(mac_addr="fe80::1", outgoing_interface="eth0")
        assert RoutingTable(reachable=True, neighbours=[n]).neighbours == [n]


class TestCollectorResults:
    def test_host_metrics_defaults(self):
        m = HostMetrics()
        assert m.kernel_version == ""
        assert m.memory_total == 0

    def test_link_inventory_defaults(self):
        inv = LinkInventory()
        assert inv.interfaces == []
        assert inv.client_count == 0
