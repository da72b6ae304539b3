from .snapshot import Geo, Interface, ReachableNeighbourCount, RoutingNeighbour, Snapshot, SystemData
from .metrics import HostMetrics, LinkInventory, RoutingTable

__all__ = [
    "Geo",
    "Interface",
    "ReachableNeighbourCount",
    "RoutingNeighbour",
    "Snapshot",
    "SystemData",
    "HostMetrics",
    "LinkInventory",
    "RoutingTable",
]
