"""FastAPI HTTP layer package.

Public re-export so callers can write::

    from pagewise.api import app

    uvicorn pagewise.api:app --reload
"""

from pagewise.api.app import app

__all__ = ["app"]
