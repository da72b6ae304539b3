from __future__ import annotations

import logging

import pytest

from nodewatcher.collectors.base import BaseCollector, CollectorError


class StubCollector(BaseCollector[int]):
    """Collector that counts its calls."""

    name = "stub"

    def __init__(self) -> None:
        self.collect_count = 0

    async def collect(self) -> int:
        self.collect_count += 1
        return 42


class ErrorCollector(BaseCollector[int]):
    """Collector that raises on every collect call."""

    name = "error"

    async def collect(self) -> int:
        raise CollectorError("collect failed")


# ── run() ───────────────────────────────────────────────


@pytest.mark.asyncio
async def test_run_returns_collect_result():
    collector = StubCollector()
    assert await collector.run() == 42
    assert collector.collect_count == 1


@pytest.mark.asyncio
async def test_run_propagates_collector_error(caplog):
    collector = ErrorCollector()
    with caplog.at_level(logging.ERROR, logger="nodewatcher.collectors.base"):
        with pytest.raises(CollectorError, match="collect failed"):
            await collector.run()
    assert "Collector [error] failed" in caplog.text


def test_collector_error_is_oserror():
    assert issubclass(CollectorError, OSError)


def test_base_is_abstract():
    with pytest.raises(TypeError):
        BaseCollector()  # type: ignore[abstract]
