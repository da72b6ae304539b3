from __future__ import annotations

import logging
import time
from typing import Callable

from nodewatcher.collectors.babel_collector import BabelCollector
from nodewatcher.collectors.host_collector import HostCollector
from nodewatcher.collectors.link_collector import LinkCollector
from nodewatcher.config import FIRMWARE_VERSION, NODEWATCHER_VERSION, Settings
from nodewatcher.models.snapshot import Geo, Snapshot, SystemData

logger = logging.getLogger(__name__)

STATUS_ONLINE = "online"


class SnapshotAssembler:
    """Runs the crawl's collectors in order and merges them into a Snapshot.

    Host metrics and the link inventory are required: their errors
    propagate and no snapshot is produced. The routing daemon is
    best-effort and never fails the crawl.
    """

    def __init__(
        self,
        host: HostCollector | None = None,
        links: LinkCollector | None = None,
        babel: BabelCollector | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.host = host or HostCollector()
        self.links = links or LinkCollector()
        self.babel = babel or BabelCollector()
        self._clock = clock

    @classmethod
    def from_settings(cls, settings: Settings) -> SnapshotAssembler:
        return cls(
            links=LinkCollector(ip_command=settings.ip_command),
            babel=BabelCollector(
                host=settings.babel_host,
                port=settings.babel_port,
                timeout=settings.babel_timeout,
            ),
        )

    async def assemble(self) -> Snapshot:
        metrics = await self.host.run()
        inventory = await self.links.run()
        routing = await self.babel.run()

        system_data = SystemData(
            status=STATUS_ONLINE,
            idletime=metrics.idle_time,
            loadavg=metrics.load15,
            local_time=int(self._clock()),
            memory_buffering=metrics.memory_buffering,
            memory_caching=metrics.memory_caching,
            memory_free=metrics.memory_free,
            memory_total=metrics.memory_total,
            processes=f"{metrics.runnable_processes}/{metrics.total_processes}",
            uptime=metrics.uptime,
            kernel_version=metrics.kernel_version,
        )
        snapshot = Snapshot(
            system_data=system_data,
            interfaces=inventory.interfaces,
            clients=inventory.clients,
            client_count=inventory.client_count,
            babel_neighbours=routing.neighbours,
        )
        logger.info(
            "Snapshot assembled: %d interfaces, %d clients, %d routing neighbours%s",
            len(snapshot.interfaces),
            snapshot.client_count,
            len(snapshot.babel_neighbours),
            "" if routing.reachable else " (routing daemon unavailable)",
        )
        return snapshot


def apply_identity(snapshot: Snapshot, settings: Settings) -> Snapshot:
    """Return a copy of ``snapshot`` carrying the node's configured identity."""
    system_data = snapshot.system_data.model_copy(
        update={
            "hostname": settings.hostname,
            "description": settings.description,
            "hood": settings.hood,
            "contact": settings.contact,
            "distname": settings.distname,
            "distversion": settings.distversion,
            "firmware_version": FIRMWARE_VERSION,
            "geo": Geo(lat=settings.lat, lng=settings.lng),
            "nodewatcher_version": NODEWATCHER_VERSION,
        }
    )
    return snapshot.model_copy(update={"system_data": system_data})
