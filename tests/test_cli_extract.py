"""Tests for the ``extract`` CLI command."""

from __future__ import annotations

import json
import logging
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from cli.main import app
from sitebrief.scraper.errors import InvalidInputError, UpstreamFailureError
from sitebrief.scraper.models import SiteExtraction

runner = CliRunner()


@pytest.fixture(autouse=True)
def no_logging_setup(monkeypatch):
    """Keep the command from rebinding root handlers to the runner's streams."""
    monkeypatch.setattr("cli.main.configure_logging", lambda level=None: logging.INFO)


def test_extract_prints_json_payload():
    site = SiteExtraction(url="https://example.com/", title="Example", text_sample="hi")
    with patch("cli.main.extract_sites", return_value=[site]) as mock_extract:
        result = runner.invoke(app, ["extract", "https://example.com/", "--compact"])

    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["sites"][0]["title"] == "Example"
    assert payload["sites"][0]["metaDesc"] == ""
    assert mock_extract.call_args.args[0] == ["https://example.com/"]


def test_extract_timeout_option_overrides_config():
    with patch("cli.main.extract_sites", return_value=[SiteExtraction(url="https://a.com/")]) as mock_extract:
        result = runner.invoke(app, ["extract", "https://a.com/", "--timeout", "2.5"])

    assert result.exit_code == 0
    config = mock_extract.call_args.args[1]
    assert config.request_timeout == 2.5


def test_extract_invalid_input_exit_code():
    with patch("cli.main.extract_sites", side_effect=InvalidInputError("Invalid URLs")):
        result = runner.invoke(app, ["extract", "ftp://x"])

    assert result.exit_code == 1
    assert "Invalid URLs" in result.output


def test_extract_upstream_failure_exit_code():
    with patch(
        "cli.main.extract_sites",
        side_effect=UpstreamFailureError("Failed to fetch all URLs"),
    ):
        result = runner.invoke(app, ["extract", "https://a.com/"])

    assert result.exit_code == 2
    assert "Failed to fetch all URLs" in result.output
