"""Extraction endpoint.

Routes
------
POST /extract    Body: {"urls": ["https://...", ...]}    → run_batch

Responses are always JSON and never cacheable:

    200  {"sites": [{url, title, metaDesc, html, css, textSample}, ...]}
    400  {"error": "No URLs provided" | "Invalid URLs"}
    502  {"error": "Failed to fetch all URLs"}
"""

from __future__ import annotations

import json
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from sitebrief.scraper import ExtractionError, run_batch

router = APIRouter()

_NO_CACHE = {"Cache-Control": "no-cache"}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

async def _read_urls(request: Request) -> Any:
    """Return the ``urls`` field of the JSON body, or ``[]`` if unreadable."""
    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return []
    if not isinstance(payload, dict):
        return []
    return payload.get("urls", [])


# ---------------------------------------------------------------------------
# Endpoint
# ---------------------------------------------------------------------------

@router.post("")
async def extract(request: Request) -> JSONResponse:
    """Fetch up to three pages and return their structured content.

    Failed pages are left out of ``sites``; the request only fails when the
    input is unusable or when every page failed.
    """
    urls = await _read_urls(request)
    try:
        sites = await run_batch(urls, request.app.state.config)
    except ExtractionError as exc:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.message},
            headers=_NO_CACHE,
        )
    return JSONResponse(
        content={"sites": [site.to_dict() for site in sites]},
        headers=_NO_CACHE,
    )
