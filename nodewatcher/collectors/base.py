from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CollectorError(OSError):
    """A data source the snapshot cannot do without could not be read."""


class BaseCollector(ABC, Generic[T]):
    """Abstract base for the crawl's data sources.

    Subclasses implement ``collect()`` which returns the source's result.
    ``run()`` wraps a single collection with timing and logging; a crawl
    calls it exactly once per collector.
    """

    name: str = "base"

    # ── abstract method ─────────────────────────────────

    @abstractmethod
    async def collect(self) -> T:
        """Read the data source and return its result."""
        ...

    # ── entry point ─────────────────────────────────────

    async def run(self) -> T:
        started = time.monotonic()
        logger.debug("Collector [%s] started", self.name)
        try:
            result = await self.collect()
        except CollectorError:
            logger.error("Collector [%s] failed", self.name)
            raise
        logger.debug(
            "Collector [%s] finished in %.3fs", self.name, time.monotonic() - started
        )
        return result
