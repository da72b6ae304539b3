from __future__ import annotations

import asyncio
import json
import logging

import psutil

from nodewatcher.collectors.base import BaseCollector, CollectorError
from nodewatcher.config import LOOPBACK_INTERFACE
from nodewatcher.models.metrics import LinkInventory
from nodewatcher.models.snapshot import Interface, ReachableNeighbourCount

logger = logging.getLogger(__name__)

REACHABLE_STATE = "REACHABLE"


class LinkCollector(BaseCollector[LinkInventory]):
    """Inventories network interfaces and counts their reachable neighbours.

    Interfaces are visited in enumeration order, loopback excluded. A
    neighbour counts once per interface however many address families it
    shows up in. Any failure aborts the whole scan.
    """

    name = "link_collector"

    def __init__(self, ip_command: str = "ip") -> None:
        self.ip_command = ip_command

    async def collect(self) -> LinkInventory:
        try:
            addrs = psutil.net_if_addrs()
            stats = psutil.net_if_stats()
            counters = psutil.net_io_counters(pernic=True)
        except (OSError, psutil.Error) as exc:
            raise CollectorError(f"cannot enumerate interfaces: {exc}") from exc

        interfaces: list[Interface] = []
        clients: list[ReachableNeighbourCount] = []
        client_count = 0

        # stats lists links only; addrs also carries IPv4 alias labels like eth0:1
        for name, link in stats.items():
            if name == LOOPBACK_INTERFACE:
                continue

            if name not in counters:
                raise CollectorError(f"no link statistics for interface {name}")

            mac_addr = next(
                (a.address for a in addrs.get(name, []) if a.family == psutil.AF_LINK),
                "",
            )
            interfaces.append(
                Interface(
                    name=name,
                    mtu=link.mtu,
                    mac_addr=mac_addr,
                    traffic_rx=counters[name].bytes_recv,
                    traffic_tx=counters[name].bytes_sent,
                )
            )

            reachable = await self.reachable_neighbours(name)
            count = len(reachable)
            client_count += count
            clients.append(ReachableNeighbourCount(interface=name, count=count))
            logger.debug("Interface %s: %d reachable neighbours", name, count)

        return LinkInventory(
            interfaces=interfaces, clients=clients, client_count=client_count
        )

    async def reachable_neighbours(self, interface: str) -> set[str]:
        """Hardware addresses of REACHABLE entries in the interface's neighbour table."""
        reachable: set[str] = set()
        for entry in await self._read_neighbour_table(interface):
            lladdr = entry.get("lladdr")
            if lladdr and REACHABLE_STATE in entry.get("state", []):
                reachable.add(lladdr.lower())
        return reachable

    async def _read_neighbour_table(self, interface: str) -> list[dict]:
        """Dump the neighbour table of ``interface`` for all address families."""
        cmd = [self.ip_command, "-json", "neigh", "show", "dev", interface]
        try:
            proc = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
            stdout, stderr = await proc.communicate()
        except OSError as exc:
            raise CollectorError(f"cannot run {cmd[0]}: {exc}") from exc

        if proc.returncode != 0:
            raise CollectorError(
                f"neighbour table lookup for {interface} failed "
                f"(exit {proc.returncode}): {stderr.decode(errors='replace').strip()}"
            )

        text = stdout.decode(errors="replace").strip()
        if not text:
            return []
        try:
            entries = json.loads(text)
        except json.JSONDecodeError as exc:
            raise CollectorError(
                f"unparsable neighbour table for {interface}: {exc}"
            ) from exc
        if not isinstance(entries, list):
            raise CollectorError(f"unexpected neighbour table for {interface}")
        return entries
