"""Request-level errors raised by the batch orchestrator.

Per-URL and per-stylesheet failures never surface as exceptions; only
these two outcomes reach the caller.
"""

from __future__ import annotations


class ExtractionError(Exception):
    """Base class for errors that reject a whole extraction request."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidInputError(ExtractionError):
    """The URL list was empty, not a list, or held no usable http(s) URL."""

    status_code = 400


class UpstreamFailureError(ExtractionError):
    """Every candidate URL failed to fetch."""

    status_code = 502
