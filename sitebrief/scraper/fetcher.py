"""Bounded HTTP fetcher: one GET, a hard deadline and a hard byte cap.

Every failure mode (non-2xx status, transport error, timeout) collapses to
``None`` so callers can treat the page as simply unavailable.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

import httpx

from sitebrief.config import ExtractionConfig

logger = logging.getLogger(__name__)


def new_client(config: ExtractionConfig, **kwargs) -> httpx.AsyncClient:
    """Return an :class:`httpx.AsyncClient` configured for page fetching.

    Extra keyword arguments (e.g. ``transport``) are passed through to httpx.
    """
    return httpx.AsyncClient(
        headers={"User-Agent": config.user_agent},
        timeout=config.request_timeout,
        follow_redirects=True,
        **kwargs,
    )


async def _read_capped(
    client: httpx.AsyncClient, url: str, max_bytes: int
) -> Optional[bytes]:
    """Stream *url* into memory, stopping as soon as *max_bytes* is exceeded."""
    async with client.stream("GET", url) as response:
        if not response.is_success:
            logger.info("Skipping %s due to status %s", url, response.status_code)
            return None

        buf = bytearray()
        async for chunk in response.aiter_bytes():
            buf.extend(chunk)
            if len(buf) > max_bytes:
                del buf[max_bytes:]
                logger.debug("Truncated %s at %d bytes", url, max_bytes)
                break
        return bytes(buf)


async def fetch_text(
    url: str, client: httpx.AsyncClient, config: ExtractionConfig
) -> Optional[str]:
    """Fetch *url* and return its body as text, or ``None`` on any failure.

    The whole request (connect, redirects, body) must finish within
    ``config.request_timeout`` seconds; otherwise the transfer is cancelled.
    Bodies larger than ``config.max_bytes`` are truncated, not rejected.
    Decoding is lenient UTF-8, applied once to the assembled buffer.
    """
    try:
        body = await asyncio.wait_for(
            _read_capped(client, url, config.max_bytes),
            timeout=config.request_timeout,
        )
    except asyncio.TimeoutError:
        logger.info("Timed out after %.1fs fetching %s", config.request_timeout, url)
        return None
    except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
        # idna.IDNAError (unencodable host) is a ValueError
        logger.info("Failed to fetch %s: %s", url, exc)
        return None

    if body is None:
        return None
    return body.decode("utf-8-sig", errors="replace")
