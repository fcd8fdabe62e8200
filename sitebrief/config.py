"""Centralised settings for the SiteBrief extraction service.

Values can be overridden via environment variables or a `.env` file in the
project root (loaded automatically when this module is imported).

The pipeline itself never reads ``settings`` directly: callers turn it into
an immutable :class:`ExtractionConfig` and pass that down explicitly.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (one level up from this package)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (compatible; SiteBrief-Bot/1.0; +https://github.com/sitebrief)"
)


@dataclass(frozen=True)
class ExtractionConfig:
    """Immutable limits shared by every stage of one extraction run."""

    max_bytes: int = 800_000
    request_timeout: float = 15.0
    max_stylesheets: int = 6
    max_urls: int = 3
    text_sample_chars: int = 5000
    user_agent: str = DEFAULT_USER_AGENT

    @property
    def stylesheet_chars(self) -> int:
        """Per-stylesheet slice length kept in the ``css`` field."""
        return self.max_bytes // 3


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Fetch limits
    # ------------------------------------------------------------------
    max_bytes: int = field(
        default_factory=lambda: int(os.environ.get("SITEBRIEF_MAX_BYTES", "800000"))
    )
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("SITEBRIEF_REQUEST_TIMEOUT", "15.0"))
    )
    user_agent: str = field(
        default_factory=lambda: os.environ.get("SITEBRIEF_USER_AGENT", DEFAULT_USER_AGENT)
    )

    # ------------------------------------------------------------------
    # Extraction limits
    # ------------------------------------------------------------------
    max_stylesheets: int = field(
        default_factory=lambda: int(os.environ.get("SITEBRIEF_MAX_STYLESHEETS", "6"))
    )
    max_urls: int = field(
        default_factory=lambda: int(os.environ.get("SITEBRIEF_MAX_URLS", "3"))
    )
    text_sample_chars: int = field(
        default_factory=lambda: int(os.environ.get("SITEBRIEF_TEXT_SAMPLE_CHARS", "5000"))
    )

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    log_level: str = field(
        default_factory=lambda: os.environ.get("SITEBRIEF_LOG_LEVEL", "INFO")
    )

    def extraction_config(self) -> ExtractionConfig:
        """Snapshot the current values into an :class:`ExtractionConfig`."""
        return ExtractionConfig(
            max_bytes=self.max_bytes,
            request_timeout=self.request_timeout,
            max_stylesheets=self.max_stylesheets,
            max_urls=self.max_urls,
            text_sample_chars=self.text_sample_chars,
            user_agent=self.user_agent,
        )


# Module-level singleton for process entry points (CLI, API factory):
#   from sitebrief.config import settings
settings = Settings()
