from __future__ import annotations

import platform
import time
from pathlib import Path

import psutil

from nodewatcher.collectors.base import BaseCollector, CollectorError
from nodewatcher.models.metrics import HostMetrics

LOADAVG_PATH = Path("/proc/loadavg")
MEMINFO_PATH = Path("/proc/meminfo")


class HostCollector(BaseCollector[HostMetrics]):
    """Reads CPU idle time, load, memory, uptime and kernel release.

    Any failing read fails the whole collection; partial metrics are
    never returned.
    """

    name = "host_collector"

    def __init__(
        self,
        loadavg_path: str | Path = LOADAVG_PATH,
        meminfo_path: str | Path = MEMINFO_PATH,
    ) -> None:
        self._loadavg_path = Path(loadavg_path)
        self._meminfo_path = Path(meminfo_path)

    async def collect(self) -> HostMetrics:
        try:
            cpu = psutil.cpu_times()
            mem = psutil.virtual_memory()
            boot_time = psutil.boot_time()
            load15, runnable, total = self._read_loadavg()
            cached = self._read_meminfo_field("Cached")
            kernel = platform.release()
        except (OSError, psutil.Error) as exc:
            raise CollectorError(f"cannot read host metrics: {exc}") from exc

        return HostMetrics(
            idle_time=cpu.idle,
            load15=load15,
            runnable_processes=runnable,
            total_processes=total,
            uptime=int(time.time() - boot_time),
            memory_total=mem.total // 1024,
            memory_free=mem.free // 1024,
            memory_buffering=getattr(mem, "buffers", 0) // 1024,
            memory_caching=cached,
            kernel_version=kernel,
        )

    def _read_loadavg(self) -> tuple[float, int, int]:
        """Return (15-minute load, runnable processes, total processes).

        The file reads like ``0.20 0.18 0.12 1/80 11206``.
        """
        fields = self._loadavg_path.read_text().split()
        try:
            load15 = float(fields[2])
            runnable, total = fields[3].split("/")
            return load15, int(runnable), int(total)
        except (IndexError, ValueError) as exc:
            raise CollectorError(
                f"unexpected format in {self._loadavg_path}: {' '.join(fields)!r}"
            ) from exc

    def _read_meminfo_field(self, key: str) -> int:
        """Value in kB of one ``Key:  1234 kB`` line of meminfo.

        psutil's ``cached`` adds SReclaimable, so the plain field is read here.
        """
        for line in self._meminfo_path.read_text().splitlines():
            label, _, rest = line.partition(":")
            if label != key:
                continue
            try:
                return int(rest.split()[0])
            except (IndexError, ValueError) as exc:
                raise CollectorError(
                    f"unexpected format in {self._meminfo_path}: {line!r}"
                ) from exc
        raise CollectorError(f"no {key} entry in {self._meminfo_path}")
