"""Line parser for the routing daemon's ``dump`` output.

babeld answers a ``dump`` with one record per line, e.g.::

    add neighbour 5c4f0e8 address fe80::1 if eth0 reach ffff ureach 0000 rxcost 96 txcost 96 rtt 0.000 rttcost 0 cost 96

Records are positional. Field positions are kept in a ``DumpSchema`` so a
change in the daemon's format only touches the schema.
"""

from __future__ import annotations

from typing import Final

from pydantic import BaseModel, ConfigDict, Field

from nodewatcher.models.snapshot import RoutingNeighbour

READY_LINE: Final = "ok"
END_TOKEN: Final = "ok"


class DumpSchema(BaseModel):
    model_config = ConfigDict(frozen=True)

    version: str
    kind: str
    kind_field: int
    min_fields: int
    positions: dict[str, int] = Field(default_factory=dict)


BABEL_NEIGHBOUR_V1: Final = DumpSchema(
    version="babeld-1",
    kind="neighbour",
    kind_field=1,
    min_fields=21,
    positions={"mac_addr": 4, "outgoing_interface": 6},
)


class DumpLineParser:
    """Turns dump lines into ``RoutingNeighbour`` records."""

    def __init__(self, schema: DumpSchema = BABEL_NEIGHBOUR_V1) -> None:
        self.schema = schema

    @staticmethod
    def is_ready(line: str) -> bool:
        return line.rstrip("\r\n") == READY_LINE

    @staticmethod
    def is_end(line: str) -> bool:
        return line.split() == [END_TOKEN]

    def extract(self, line: str) -> dict[str, str] | None:
        """Named fields of a matching record, or None for any other line."""
        parts = line.split()
        if len(parts) < self.schema.min_fields:
            return None
        if parts[self.schema.kind_field] != self.schema.kind:
            return None
        return {name: parts[index] for name, index in self.schema.positions.items()}

    def parse(self, line: str) -> RoutingNeighbour | None:
        values = self.extract(line)
        if values is None:
            return None
        return RoutingNeighbour(**values)
