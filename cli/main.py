"""SiteBrief CLI — entry-point for extraction and the HTTP server.

Usage:
    python cli/main.py --help

Commands:
    extract   → run a batch extraction and print the JSON payload
    serve     → run the FastAPI app under uvicorn
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from sitebrief.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any working
# directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import dataclasses
import json
from typing import List, Optional

import typer

from sitebrief.config import settings
from sitebrief.logging_setup import configure_logging
from sitebrief.scraper import InvalidInputError, UpstreamFailureError, extract_sites

app = typer.Typer(
    name="sitebrief",
    help="SiteBrief extraction CLI.",
    no_args_is_help=True,
)

EXIT_INVALID_INPUT = 1
EXIT_UPSTREAM_FAILURE = 2


@app.command("extract")
def extract(
    urls: List[str] = typer.Argument(..., help="Page URLs (only the first 3 valid ones are fetched)."),
    timeout: Optional[float] = typer.Option(None, help="Per-request timeout in seconds."),
    pretty: bool = typer.Option(True, "--pretty/--compact", help="Indent the JSON output."),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Override SITEBRIEF_LOG_LEVEL."),
) -> None:
    """Extract title, meta description, CSS and text from each URL as JSON."""
    configure_logging(log_level or settings.log_level)

    config = settings.extraction_config()
    if timeout is not None:
        config = dataclasses.replace(config, request_timeout=timeout)

    try:
        sites = extract_sites(urls, config)
    except InvalidInputError as exc:
        typer.echo(json.dumps({"error": exc.message}), err=True)
        raise typer.Exit(EXIT_INVALID_INPUT)
    except UpstreamFailureError as exc:
        typer.echo(json.dumps({"error": exc.message}), err=True)
        raise typer.Exit(EXIT_UPSTREAM_FAILURE)

    payload = {"sites": [site.to_dict() for site in sites]}
    typer.echo(json.dumps(payload, indent=2 if pretty else None, ensure_ascii=False))


@app.command("serve")
def serve(
    host: str = typer.Option("127.0.0.1", help="Interface to bind."),
    port: int = typer.Option(8000, help="Port to listen on."),
    reload: bool = typer.Option(False, help="Reload on code changes."),
) -> None:
    """Run the extraction API with uvicorn."""
    import uvicorn

    configure_logging(settings.log_level)
    typer.echo(f"[serve] SiteBrief API on http://{host}:{port}")
    uvicorn.run("sitebrief.api.app:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    app()
