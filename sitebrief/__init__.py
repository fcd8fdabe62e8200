"""SiteBrief — bounded, fail-soft extraction of structured content from web pages."""

__version__ = "0.1.0"
