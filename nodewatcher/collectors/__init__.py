from .base import BaseCollector, CollectorError
from .babel_collector import BabelCollector
from .babel_dump import BABEL_NEIGHBOUR_V1, DumpLineParser, DumpSchema
from .host_collector import HostCollector
from .link_collector import LinkCollector

__all__ = [
    "BaseCollector",
    "CollectorError",
    "BabelCollector",
    "BABEL_NEIGHBOUR_V1",
    "DumpLineParser",
    "DumpSchema",
    "HostCollector",
    "LinkCollector",
]
