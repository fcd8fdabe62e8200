"""Data models for the extraction pipeline."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class SiteExtraction:
    """Structured content extracted from one successfully fetched page.

    Every field is a string; missing information is an empty string rather
    than ``None``.
    """

    url: str
    title: str = ""
    meta_description: str = ""
    html: str = ""
    css: str = ""
    text_sample: str = ""

    def to_dict(self) -> dict[str, str]:
        """Return the record keyed by its wire names."""
        return {
            "url": self.url,
            "title": self.title,
            "metaDesc": self.meta_description,
            "html": self.html,
            "css": self.css,
            "textSample": self.text_sample,
        }
