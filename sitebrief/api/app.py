"""FastAPI application factory.

Lifespan
--------
On startup the app snapshots the process settings into an immutable
``ExtractionConfig`` stored on ``app.state.config``. Every request reads
its limits from there; nothing in the pipeline reads global settings.

Routers
-------
    /extract   — batch extraction of up to three URLs
    /health    — liveness probe
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sitebrief import __version__
from sitebrief.api.routers import extract as extract_router
from sitebrief.config import ExtractionConfig, settings


def create_app(config: Optional[ExtractionConfig] = None) -> FastAPI:
    """Return a fully-configured FastAPI application instance.

    Args:
        config: Extraction limits for this app. Defaults to a snapshot of
            ``settings`` taken at startup.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        app.state.config = config or settings.extraction_config()
        yield

    app = FastAPI(
        title="SiteBrief API",
        description=(
            "Extracts title, meta description, stylesheets and visible text "
            "from a handful of public web pages under strict size and time "
            "limits."
        ),
        version=__version__,
        lifespan=lifespan,
    )

    # Allow browser frontends on any origin (tighten for production).
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(extract_router.router, prefix="/extract", tags=["extract"])

    @app.get("/health", tags=["health"])
    def health() -> dict[str, str]:
        return {"status": "ok"}

    return app


# Module-level instance used by uvicorn:
#   uvicorn sitebrief.api.app:app --reload
app = create_app()
