"""Tests for the bounded fetcher.

Mocking strategy:
- ``respx`` patches ``httpx`` at the transport layer so no real network calls
  are made.
- The timeout test uses an ``httpx.MockTransport`` whose handler never
  returns in time, together with a tiny configured timeout.
"""

from __future__ import annotations

import asyncio
import time

import httpx
import pytest
import respx

from sitebrief.config import ExtractionConfig
from sitebrief.scraper.fetcher import fetch_text, new_client

_CONFIG = ExtractionConfig()


async def _fetch(url: str, config: ExtractionConfig = _CONFIG) -> str | None:
    async with new_client(config) as client:
        return await fetch_text(url, client, config)


class TestFetchText:
    async def test_success_returns_text(self) -> None:
        with respx.mock:
            respx.get("https://example.com/").mock(
                return_value=httpx.Response(200, text="<p>hello</p>")
            )
            assert await _fetch("https://example.com/") == "<p>hello</p>"

    async def test_sends_user_agent(self) -> None:
        with respx.mock:
            route = respx.get("https://example.com/").mock(
                return_value=httpx.Response(200, text="ok")
            )
            await _fetch("https://example.com/")
        assert route.calls.last.request.headers["User-Agent"] == _CONFIG.user_agent

    @pytest.mark.parametrize("status", [204, 299])
    async def test_any_2xx_is_success(self, status: int) -> None:
        with respx.mock:
            respx.get("https://example.com/").mock(
                return_value=httpx.Response(status, text="")
            )
            assert await _fetch("https://example.com/") == ""

    @pytest.mark.parametrize("status", [404, 500, 503])
    async def test_non_2xx_returns_none(self, status: int) -> None:
        with respx.mock:
            respx.get("https://example.com/").mock(
                return_value=httpx.Response(status, text="error page")
            )
            assert await _fetch("https://example.com/") is None

    @pytest.mark.parametrize(
        "exc", [httpx.ConnectError, httpx.ConnectTimeout, httpx.ReadError]
    )
    async def test_transport_error_returns_none(self, exc: type[Exception]) -> None:
        with respx.mock:
            respx.get("https://down.example.com/").mock(side_effect=exc)
            assert await _fetch("https://down.example.com/") is None

    async def test_follows_redirects(self) -> None:
        with respx.mock:
            respx.get("https://example.com/old").mock(
                return_value=httpx.Response(
                    301, headers={"Location": "https://example.com/new"}
                )
            )
            respx.get("https://example.com/new").mock(
                return_value=httpx.Response(200, text="moved here")
            )
            assert await _fetch("https://example.com/old") == "moved here"

    async def test_body_over_cap_is_truncated_not_failed(self) -> None:
        body = b"a" * (_CONFIG.max_bytes + 200_000)
        with respx.mock:
            respx.get("https://big.example.com/").mock(
                return_value=httpx.Response(200, content=body)
            )
            text = await _fetch("https://big.example.com/")
        assert text is not None
        assert len(text) == _CONFIG.max_bytes

    async def test_truncated_multibyte_char_decodes_leniently(self) -> None:
        config = ExtractionConfig(max_bytes=5)
        with respx.mock:
            respx.get("https://example.com/").mock(
                return_value=httpx.Response(200, content="ééé".encode("utf-8"))
            )
            text = await _fetch("https://example.com/", config)
        assert text == "éé�"

    async def test_invalid_utf8_is_replaced(self) -> None:
        with respx.mock:
            respx.get("https://example.com/").mock(
                return_value=httpx.Response(200, content=b"ok\xff\xfeok")
            )
            text = await _fetch("https://example.com/")
        assert text is not None
        assert text.startswith("ok") and text.endswith("ok")
        assert "�" in text

    async def test_leading_bom_dropped(self) -> None:
        with respx.mock:
            respx.get("https://example.com/").mock(
                return_value=httpx.Response(200, content=b"\xef\xbb\xbf<p>x</p>")
            )
            assert await _fetch("https://example.com/") == "<p>x</p>"


class TestFetchTimeout:
    async def test_unresponsive_server_returns_none(self) -> None:
        async def never_responds(request: httpx.Request) -> httpx.Response:
            await asyncio.sleep(30)
            return httpx.Response(200, text="too late")

        config = ExtractionConfig(request_timeout=0.05)
        transport = httpx.MockTransport(never_responds)

        started = time.monotonic()
        async with new_client(config, transport=transport) as client:
            result = await fetch_text("https://slow.example.com/", client, config)

        assert result is None
        assert time.monotonic() - started < 5

    async def test_timeout_does_not_affect_sibling_fetch(self) -> None:
        async def handler(request: httpx.Request) -> httpx.Response:
            if request.url.host == "slow.example.com":
                await asyncio.sleep(30)
            return httpx.Response(200, text="fast")

        config = ExtractionConfig(request_timeout=0.1)
        async with new_client(config, transport=httpx.MockTransport(handler)) as client:
            slow, fast = await asyncio.gather(
                fetch_text("https://slow.example.com/", client, config),
                fetch_text("https://fast.example.com/", client, config),
            )

        assert slow is None
        assert fast == "fast"


class TestFetchUnencodableHost:
    async def test_invalid_idna_host_returns_none(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="unreachable")

        async with new_client(_CONFIG, transport=httpx.MockTransport(handler)) as client:
            assert await fetch_text("http://xn--zz.com/x.css", client, _CONFIG) is None
