"""HTTP transport for the telemetry documents."""

from __future__ import annotations

import asyncio
import logging
from typing import Protocol

import aiohttp

from pyfleetmap._constants import USER_AGENT
from pyfleetmap.exceptions import FleetMapTransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by the client.

    Having a protocol here makes it easy to pass test doubles while keeping
    the production implementation (`DocumentTransport`) concrete.
    """

    async def get_text(self, url: str, *, timeout: float) -> str:
        ...


class DocumentTransport:
    """Fetches JSON documents over HTTP and returns their body text."""

    def __init__(self, http_session: aiohttp.ClientSession) -> None:
        self._http = http_session

    async def get_text(self, url: str, *, timeout: float) -> str:
        """GET *url* and return the response body.

        Raises
        ------
        FleetMapTransportError
            On network failure, timeout, or a non-200 status.
        """
        headers = {
            "accept": "application/json",
            "user-agent": USER_AGENT,
        }

        _logger.debug("GET %s (timeout %.0fs)", url, timeout)

        try:
            async with self._http.get(url, headers=headers, timeout=aiohttp.ClientTimeout(total=timeout)) as resp:
                if resp.status != 200:
                    raise FleetMapTransportError(
                        f"HTTP {resp.status} {resp.reason or ''} from {url}".rstrip(),
                        status_code=resp.status,
                        url=url,
                    )
                content_type = resp.headers.get("content-type", "")
                if content_type and "application/json" not in content_type:
                    _logger.warning("Unexpected content type %r from %s", content_type, url)
                text = await resp.text()
        except FleetMapTransportError:
            raise
        except asyncio.TimeoutError as exc:
            raise FleetMapTransportError(
                f"Request to {url} timed out after {timeout:.0f}s",
                url=url,
            ) from exc
        except aiohttp.ClientError as exc:
            raise FleetMapTransportError(
                f"Request to {url} failed: {exc}",
                url=url,
            ) from exc

        _logger.debug("Received %d characters from %s", len(text), url)
        return text
