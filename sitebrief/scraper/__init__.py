"""Scraper package — bounded fetch, sanitization, parsing and site extraction."""

from sitebrief.scraper.batch import extract_sites, run_batch
from sitebrief.scraper.errors import (
    ExtractionError,
    InvalidInputError,
    UpstreamFailureError,
)
from sitebrief.scraper.extractor import extract_site
from sitebrief.scraper.fetcher import fetch_text
from sitebrief.scraper.models import SiteExtraction
from sitebrief.scraper.sanitizer import sanitize_html

__all__ = [
    "run_batch",
    "extract_sites",
    "extract_site",
    "fetch_text",
    "sanitize_html",
    "SiteExtraction",
    "ExtractionError",
    "InvalidInputError",
    "UpstreamFailureError",
]
