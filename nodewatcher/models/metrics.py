from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from nodewatcher.models.snapshot import Interface, ReachableNeighbourCount, RoutingNeighbour


class HostMetrics(BaseModel):
    """Process and kernel counters read from the local host."""

    model_config = ConfigDict(frozen=True)

    idle_time: float = 0.0  # seconds idle since boot, summed over CPUs
    load15: float = 0.0
    runnable_processes: int = 0
    total_processes: int = 0
    uptime: int = 0
    memory_total: int = Field(default=0, ge=0)  # kB
    memory_free: int = Field(default=0, ge=0)
    memory_buffering: int = Field(default=0, ge=0)
    memory_caching: int = Field(default=0, ge=0)
    kernel_version: str = ""


class LinkInventory(BaseModel):
    """Interfaces and their reachable neighbour counts, in enumeration order."""

    model_config = ConfigDict(frozen=True)

    interfaces: list[Interface] = Field(default_factory=list)
    clients: list[ReachableNeighbourCount] = Field(default_factory=list)
    client_count: int = 0


class RoutingTable(BaseModel):
    """Neighbours dumped by the routing daemon.

    ``reachable`` is False when the daemon could not be reached or the
    session failed, which tells that case apart from a daemon with no
    neighbours.
    """

    model_config = ConfigDict(frozen=True)

    reachable: bool = False
    neighbours: list[RoutingNeighbour] = Field(default_factory=list)
