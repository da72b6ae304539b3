from __future__ import annotations

import logging

import httpx

from nodewatcher.report.errors import ReportError

logger = logging.getLogger(__name__)

CONTENT_TYPE = "application/json; charset=UTF-8"


async def deliver(
    envelope: str,
    url: str,
    timeout: float = 10.0,
    transport: httpx.AsyncBaseTransport | None = None,
) -> str:
    """POST the report envelope to the collector and return the response body."""
    async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
        try:
            resp = await client.post(
                url,
                content=envelope.encode("utf-8"),
                headers={"Content-Type": CONTENT_TYPE},
            )
            resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise ReportError(
                f"collector rejected report: HTTP {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise ReportError(f"cannot deliver report to {url}: {exc}") from exc

    logger.info("Report delivered to %s (HTTP %d)", url, resp.status_code)
    return resp.text
