from __future__ import annotations

import asyncio
import logging

from nodewatcher.collectors.babel_dump import DumpLineParser
from nodewatcher.collectors.base import BaseCollector
from nodewatcher.models.metrics import RoutingTable
from nodewatcher.models.snapshot import RoutingNeighbour

logger = logging.getLogger(__name__)

DUMP_COMMAND = b"dump\n"


class IncompleteDump(Exception):
    """The session ended before the end-of-dump marker."""


class BabelCollector(BaseCollector[RoutingTable]):
    """Dumps the routing daemon's neighbour table over its local control socket.

    The daemon is optional: connection failures, read errors, timeouts and
    truncated dumps all yield an empty table with ``reachable=False``
    instead of raising.
    """

    name = "babel_collector"

    def __init__(
        self,
        host: str = "::1",
        port: int = 33123,
        timeout: float = 5.0,
        parser: DumpLineParser | None = None,
    ) -> None:
        self.host = host
        self.port = port
        self.timeout = timeout
        self.parser = parser or DumpLineParser()

    async def collect(self) -> RoutingTable:
        try:
            reader, writer = await asyncio.wait_for(
                asyncio.open_connection(self.host, self.port), timeout=self.timeout
            )
        except (OSError, asyncio.TimeoutError) as exc:
            logger.warning(
                "Routing daemon at [%s]:%d unreachable: %s", self.host, self.port, exc
            )
            return RoutingTable()

        # The daemon may start talking before the command is flushed, so the
        # write must not hold up the read loop.
        send_task = asyncio.create_task(self._send_dump(writer))
        send_task.add_done_callback(_log_send_failure)
        try:
            neighbours = await asyncio.wait_for(
                self._read_dump(reader), timeout=self.timeout
            )
        except (OSError, asyncio.TimeoutError, ValueError, IncompleteDump) as exc:
            logger.warning("Routing daemon dump failed: %r", exc)
            return RoutingTable()
        finally:
            if not send_task.done():
                send_task.cancel()
            writer.close()
            try:
                await writer.wait_closed()
            except OSError:
                logger.debug("Error closing routing daemon session", exc_info=True)

        logger.debug("Routing daemon reported %d neighbours", len(neighbours))
        return RoutingTable(reachable=True, neighbours=neighbours)

    @staticmethod
    async def _send_dump(writer: asyncio.StreamWriter) -> None:
        writer.write(DUMP_COMMAND)
        await writer.drain()

    async def _read_dump(self, reader: asyncio.StreamReader) -> list[RoutingNeighbour]:
        # startup acknowledgement
        while True:
            line = await self._readline(reader)
            if self.parser.is_ready(line):
                break

        neighbours: list[RoutingNeighbour] = []
        while True:
            line = await self._readline(reader)
            if self.parser.is_end(line):
                return neighbours
            neighbour = self.parser.parse(line)
            if neighbour is not None:
                neighbours.append(neighbour)

    @staticmethod
    async def _readline(reader: asyncio.StreamReader) -> str:
        raw = await reader.readline()
        if not raw:
            raise IncompleteDump("connection closed before end of dump")
        # UnicodeDecodeError is a ValueError
        return raw.decode("utf-8")


def _log_send_failure(task: asyncio.Task) -> None:
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.debug("Sending dump command failed: %r", exc)
