"""FastAPI application factory.

Routes
------
    GET  /home      — liveness check
    POST /initial   — first page of a chapter (layout unknown)
    POST /scrape    — subsequent single-image pages

Every extraction opens and closes its own browser, so the app keeps no
state between requests.
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pagewise import __version__
from pagewise.api.routers import content as content_router
from pagewise.config import configure_logging, settings
from pagewise.scraper.pager import resolve_strategy

_CORS_HEADERS = [
    "Content-Type",
    "Content-Length",
    "Accept-Encoding",
    "X-CSRF-Token",
    "Authorization",
    "accept",
    "origin",
    "Cache-Control",
    "X-Requested-With",
]


def create_app() -> FastAPI:
    """Return a fully-configured FastAPI application instance.

    Raises:
        ValueError: ``PAGER_DEDUP`` names an unknown dedup strategy.
    """
    configure_logging()
    resolve_strategy(settings.pager_dedup)

    app = FastAPI(
        title="Pagewise API",
        description=(
            "Extracts images and chapter/page pagination from reader pages "
            "by rendering them in a headless browser."
        ),
        version=__version__,
    )

    # Reader frontends are served from arbitrary origins.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["POST", "OPTIONS", "GET", "PUT"],
        allow_headers=_CORS_HEADERS,
    )

    app.include_router(content_router.router, tags=["content"])

    return app


# Module-level instance used by uvicorn:
#   uvicorn pagewise.api.app:app --reload
app = create_app()
