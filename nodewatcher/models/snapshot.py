from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Interface(BaseModel):
    """Observed state of one network interface."""

    model_config = ConfigDict(frozen=True)

    name: str
    mtu: int
    mac_addr: str = ""
    traffic_rx: int = Field(default=0, ge=0)
    traffic_tx: int = Field(default=0, ge=0)


class ReachableNeighbourCount(BaseModel):
    """Distinct hardware addresses seen REACHABLE on one interface."""

    model_config = ConfigDict(frozen=True)

    interface: str
    count: int = Field(default=0, ge=0)


class RoutingNeighbour(BaseModel):
    """A neighbour as reported by the routing daemon's dump."""

    model_config = ConfigDict(frozen=True)

    mac_addr: str
    outgoing_interface: str


class Geo(BaseModel):
    model_config = ConfigDict(frozen=True)

    lat: float = 0.0
    lng: float = 0.0


class SystemData(BaseModel):
    """The ``system_data`` section of a report.

    Fields the crawler never fills (chipset, batman, openwrt revisions, ...)
    stay at their empty defaults; the collector schema still expects them.
    """

    model_config = ConfigDict(frozen=True)

    status: str = ""
    hostname: str = ""
    description: str = ""
    geo: Geo = Field(default_factory=Geo)
    position_comment: str = ""
    contact: str = ""
    hood: str = ""
    hoodid: str = ""
    distname: str = ""
    distversion: str = ""
    chipset: str = ""
    cpu: list[str] = Field(default_factory=list)
    model: str = ""
    memory_total: int = Field(default=0, ge=0)
    memory_free: int = Field(default=0, ge=0)
    memory_buffering: int = Field(default=0, ge=0)
    memory_caching: int = Field(default=0, ge=0)
    loadavg: float = 0.0
    processes: str = ""
    uptime: int = 0
    idletime: float = 0.0
    local_time: int = 0
    batman_advanced_version: str = ""
    kernel_version: str = ""
    nodewatcher_version: str = ""
    firmware_version: str = ""
    firmware_revision: str = ""
    openwrt_core_revision: str = ""
    openwrt_feeds_packages_revision: str = ""
    vpn_active: int = 0


class Snapshot(BaseModel):
    """Point-in-time report produced by one crawl."""

    model_config = ConfigDict(frozen=True)

    system_data: SystemData = Field(default_factory=SystemData)
    interfaces: list[Interface] = Field(default_factory=list)
    batman_adv_interfaces: str = ""
    batman_adv_originators: str = ""
    batman_adv_gateway_mode: str = ""
    batman_adv_gateway_list: str = ""
    babel_neighbours: list[RoutingNeighbour] = Field(default_factory=list)
    client_count: int = Field(default=0, ge=0)
    clients: list[ReachableNeighbourCount] = Field(default_factory=list)
