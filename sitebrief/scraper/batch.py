"""Batch orchestration: validate a URL list, extract concurrently, aggregate.

``run_batch`` is the single operation this package offers to callers. It
either returns at least one :class:`SiteExtraction` or raises an
:class:`~sitebrief.scraper.errors.ExtractionError`.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, List, Optional

from sitebrief.config import ExtractionConfig
from sitebrief.scraper.errors import InvalidInputError, UpstreamFailureError
from sitebrief.scraper.extractor import extract_site, normalize_url
from sitebrief.scraper.models import SiteExtraction

logger = logging.getLogger(__name__)


def validate_urls(candidate_urls: Any, limit: int) -> List[str]:
    """Return the first *limit* valid ``http``/``https`` URLs, in input order.

    Raises:
        InvalidInputError: If *candidate_urls* is not a non-empty list, or if
            none of its entries is a usable URL.
    """
    if not isinstance(candidate_urls, (list, tuple)) or not candidate_urls:
        raise InvalidInputError("No URLs provided")

    normalized = (normalize_url(u) for u in candidate_urls)
    valid = [u for u in normalized if u is not None][:limit]
    if not valid:
        raise InvalidInputError("Invalid URLs")
    return valid


async def run_batch(
    candidate_urls: Any,
    config: Optional[ExtractionConfig] = None,
) -> List[SiteExtraction]:
    """Extract every valid URL in *candidate_urls* concurrently.

    At most ``config.max_urls`` URLs are fetched. Each runs as its own task;
    one failing never cancels the others. Failed URLs are dropped from the
    result, which keeps the validated input order.

    Raises:
        InvalidInputError: Bad or empty URL list.
        UpstreamFailureError: Every URL failed.
    """
    config = config or ExtractionConfig()
    urls = validate_urls(candidate_urls, config.max_urls)
    logger.info("Extracting %d URL(s): %s", len(urls), urls)

    results = await asyncio.gather(
        *(extract_site(url, config) for url in urls),
        return_exceptions=True,
    )

    sites: List[SiteExtraction] = []
    for url, result in zip(urls, results):
        if isinstance(result, BaseException):
            logger.warning(
                "Extraction crashed for %s", url,
                exc_info=(type(result), result, result.__traceback__),
            )
        elif result is not None:
            sites.append(result)

    if not sites:
        raise UpstreamFailureError("Failed to fetch all URLs")

    logger.info("Extracted %d of %d URL(s)", len(sites), len(urls))
    return sites


def extract_sites(
    candidate_urls: Any,
    config: Optional[ExtractionConfig] = None,
) -> List[SiteExtraction]:
    """Blocking wrapper around :func:`run_batch` for synchronous callers."""
    return asyncio.run(run_batch(candidate_urls, config))
