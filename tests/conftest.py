"""Fakes shared by the collector and assembler tests."""

from __future__ import annotations

import asyncio
from collections import namedtuple
from unittest.mock import patch

import psutil
import pytest

from nodewatcher.collectors.link_collector import LinkCollector

snicaddr = namedtuple("snicaddr", ["family", "address", "netmask", "broadcast", "ptp"])
snicstats = namedtuple("snicstats", ["isup", "duplex", "speed", "mtu", "flags"])
snetio = namedtuple(
    "snetio",
    ["bytes_sent", "bytes_recv", "packets_sent", "packets_recv", "errin", "errout", "dropin", "dropout"],
)

# babeld-style neighbour record with 21 fields
NEIGHBOUR_LINE = (
    "add neighbour 5c4f0e8 address {addr} if {iface} reach ffff ureach 0000 "
    "rxcost 96 txcost 96 rtt 0.000 rttcost 0 cost 96"
)


def link_addr(mac: str) -> snicaddr:
    return snicaddr(psutil.AF_LINK, mac, None, "ff:ff:ff:ff:ff:ff", None)


def fake_links(spec: dict[str, tuple[int, str, int, int]]):
    """psutil return values for ``{name: (mtu, mac, rx, tx)}`` in the given order."""
    addrs = {name: [link_addr(mac)] for name, (_, mac, _, _) in spec.items()}
    stats = {name: snicstats(True, 2, 1000, mtu, "up") for name, (mtu, _, _, _) in spec.items()}
    counters = {
        name: snetio(tx, rx, 0, 0, 0, 0, 0, 0) for name, (_, _, rx, tx) in spec.items()
    }
    return addrs, stats, counters


@pytest.fixture
def link_env():
    """Patch psutil and the neighbour table for the link collector.

    Call with ``{name: (mtu, mac, rx, tx)}`` and ``{name: [neigh entries]}``.
    """
    patches = []

    def install(links, neighbour_tables):
        addrs, stats, counters = fake_links(links)

        async def read_table(self, interface):
            return neighbour_tables.get(interface, [])

        for p in (
            patch("nodewatcher.collectors.link_collector.psutil.net_if_addrs", return_value=addrs),
            patch("nodewatcher.collectors.link_collector.psutil.net_if_stats", return_value=stats),
            patch("nodewatcher.collectors.link_collector.psutil.net_io_counters", return_value=counters),
            patch.object(LinkCollector, "_read_neighbour_table", read_table),
        ):
            p.start()
            patches.append(p)

    yield install

    for p in reversed(patches):
        p.stop()


@pytest.fixture
async def babel_daemon():
    """Start fake routing daemons on an ephemeral loopback port.

    ``start(lines, hold=False)`` returns ``(port, commands)``: the daemon
    sends ``lines``, records the command it receives and then either
    closes the session or, with ``hold``, keeps it open until the client
    hangs up.
    """
    servers: list[asyncio.Server] = []

    async def start(lines: list[str | bytes], hold: bool = False):
        commands: list[bytes] = []

        async def handle(reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
            try:
                for line in lines:
                    writer.write((line if isinstance(line, bytes) else line.encode()) + b"\n")
                await writer.drain()
                commands.append(await reader.readline())
                if hold:
                    await reader.read()
            except ConnectionError:
                pass
            finally:
                writer.close()

        server = await asyncio.start_server(handle, "127.0.0.1", 0)
        servers.append(server)
        return server.sockets[0].getsockname()[1], commands

    yield start

    for server in servers:
        server.close()
        await server.wait_closed()
