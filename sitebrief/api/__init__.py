"""FastAPI HTTP layer package.

Public re-export so callers can write::

    from sitebrief.api import app

    uvicorn sitebrief.api:app --reload
"""

from sitebrief.api.app import app, create_app

__all__ = ["app", "create_app"]
