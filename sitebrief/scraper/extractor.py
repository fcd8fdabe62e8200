"""Per-site extraction: fetch, sanitize, parse, then pull structured fields."""

from __future__ import annotations

import asyncio
import logging
import re
from typing import List, Optional
from urllib.parse import urljoin, urlsplit

import httpx

from sitebrief.config import ExtractionConfig
from sitebrief.scraper.fetcher import fetch_text, new_client
from sitebrief.scraper.models import SiteExtraction
from sitebrief.scraper.parser import (
    DocumentTree,
    body_text,
    find_by_attribute,
    find_by_tag_name,
    parse_html,
    text_content,
)
from sitebrief.scraper.sanitizer import sanitize_html

logger = logging.getLogger(__name__)

STYLESHEET_SEPARATOR = "\n\n/* --- next stylesheet --- */\n\n"

_WHITESPACE_RE = re.compile(r"\s+")


# Special schemes tolerate any run of slashes/backslashes after the colon,
# so "http:example.com" and "http:///example.com" are absolute URLs.
_HTTP_PREFIX_RE = re.compile(r"^(https?):[/\\]*", re.IGNORECASE)


# ---------------------------------------------------------------------------
# URL helpers
# ---------------------------------------------------------------------------

def normalize_url(candidate: object) -> Optional[str]:
    """Return *candidate* as a ``scheme://host...`` http(s) URL, or ``None``.

    Surrounding whitespace is dropped and the scheme lower-cased. Anything
    that is not a string, not http(s), or has no host yields ``None``.
    """
    if not isinstance(candidate, str):
        return None
    candidate = candidate.strip()
    match = _HTTP_PREFIX_RE.match(candidate)
    if match is None:
        return None
    url = f"{match.group(1).lower()}://{candidate[match.end():]}"
    try:
        host = urlsplit(url).hostname
    except ValueError:
        return None
    return url if host else None


def is_valid_url(candidate: object) -> bool:
    """Return ``True`` if *candidate* is an absolute ``http``/``https`` URL string."""
    return normalize_url(candidate) is not None


def _resolve(href: str, base: str) -> Optional[str]:
    try:
        absolute = urljoin(base, href.strip())
    except ValueError:
        return None
    return normalize_url(absolute)


# ---------------------------------------------------------------------------
# Field extraction
# ---------------------------------------------------------------------------

def _extract_title(tree: DocumentTree) -> str:
    titles = find_by_tag_name(tree, "title")
    return text_content(titles[0]).strip() if titles else ""


def _extract_meta_description(tree: DocumentTree) -> str:
    metas = find_by_attribute(tree, "name", "description", tag_name="meta")
    if not metas:
        return ""
    return metas[0].get("content") or ""


def _stylesheet_hrefs(tree: DocumentTree, limit: int) -> List[str]:
    """Return non-empty stylesheet hrefs in document order, at most *limit*."""
    links = find_by_attribute(tree, "rel", "stylesheet", tag_name="link")
    hrefs = [link.get("href") for link in links]
    return [h for h in hrefs if h][:limit]


def _text_sample(tree: DocumentTree, limit: int) -> str:
    return _WHITESPACE_RE.sub(" ", body_text(tree)).strip()[:limit]


async def _fetch_stylesheet(
    href: str, base: str, client: httpx.AsyncClient, config: ExtractionConfig
) -> Optional[str]:
    url = _resolve(href, base)
    if url is None:
        logger.debug("Skipping stylesheet %r: not an http(s) URL", href)
        return None
    css = await fetch_text(url, client, config)
    if not css:
        logger.debug("Skipping stylesheet %s: fetch failed or empty", url)
        return None
    return css[: config.stylesheet_chars]


async def _collect_css(
    hrefs: List[str], base: str, client: httpx.AsyncClient, config: ExtractionConfig
) -> str:
    """Fetch stylesheets concurrently and join them in link order."""
    results = await asyncio.gather(
        *(_fetch_stylesheet(href, base, client, config) for href in hrefs),
        return_exceptions=True,
    )
    sheets = []
    for href, result in zip(hrefs, results):
        if isinstance(result, BaseException):
            logger.warning("Skipping stylesheet %r: %s", href, result)
        elif result:
            sheets.append(result)
    return STYLESHEET_SEPARATOR.join(sheets)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

async def extract_site(
    url: str,
    config: ExtractionConfig,
    client: Optional[httpx.AsyncClient] = None,
) -> Optional[SiteExtraction]:
    """Extract a :class:`SiteExtraction` from *url*.

    Returns ``None`` only when the page itself cannot be fetched (or comes
    back empty). Missing fields and failed stylesheets degrade to empty
    strings instead.

    Args:
        url: Absolute ``http``/``https`` URL, already validated.
        config: Limits for this run.
        client: Optional client to fetch with. When omitted a private client
            is opened for this site and closed before returning.
    """
    if client is None:
        async with new_client(config) as own_client:
            return await extract_site(url, config, own_client)

    base = url
    raw_html = await fetch_text(url, client, config)
    if not raw_html:
        return None

    html = sanitize_html(raw_html, config.max_bytes)
    tree = parse_html(html)

    hrefs = _stylesheet_hrefs(tree, config.max_stylesheets)
    css = await _collect_css(hrefs, base, client, config) if hrefs else ""

    site = SiteExtraction(
        url=url,
        title=_extract_title(tree),
        meta_description=_extract_meta_description(tree),
        html=html,
        css=css,
        text_sample=_text_sample(tree, config.text_sample_chars),
    )
    logger.info(
        "Extracted %s: title=%r, %d stylesheet(s) linked, %d chars of CSS",
        url,
        site.title,
        len(hrefs),
        len(site.css),
    )
    return site
