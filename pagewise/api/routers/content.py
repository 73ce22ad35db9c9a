"""Content extraction endpoints.

Routes
------
GET  /home       → liveness check
POST /initial    Body: {"url": "https://..."}    → extract_initial
POST /scrape     Body: {"url": "https://..."}    → extract_scrape
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from pagewise.scraper import (
    ContentDescriptor,
    ExtractionError,
    ExtractionTimeout,
    extract_initial,
    extract_scrape,
)
from pagewise.scraper.models import ReaderUrl

logger = logging.getLogger(__name__)

router = APIRouter()


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------

class ContentRequest(BaseModel):
    url: ReaderUrl


class PagerEntryOut(BaseModel):
    Number: str
    Url: str


class ContentResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    image_url: list[str]
    chapter_pager: list[PagerEntryOut] = Field(alias="chapterPager")
    page_pager: list[PagerEntryOut] = Field(alias="pagePager")
    long_page: bool = Field(alias="longPage")
    current_page: str = Field(alias="currentPage")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

async def _run(
    extract: Callable[[str], Awaitable[ContentDescriptor]], body: ContentRequest
) -> dict[str, Any]:
    url = str(body.url)
    try:
        descriptor = await extract(url)
    except ExtractionTimeout as exc:
        logger.warning("extraction timed out: %s", exc)
        raise HTTPException(status_code=504, detail=str(exc)) from exc
    except ExtractionError as exc:
        logger.exception("extraction failed for %s", url)
        raise HTTPException(
            status_code=500, detail=f"Extraction failed: {exc}"
        ) from exc
    return descriptor.to_dict()


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.get("/home")
def home() -> dict[str, str]:
    """Liveness check."""
    return {"status": "ok"}


@router.post("/initial", response_model=ContentResponse, response_model_by_alias=True)
async def initial_endpoint(body: ContentRequest) -> dict[str, Any]:
    """Classify the page layout, then return its images and pagers.

    Long pages return all stacked images and the chapter pager only; single
    pages return one image, both pagers and the current page.
    """
    return await _run(extract_initial, body)


@router.post("/scrape", response_model=ContentResponse, response_model_by_alias=True)
async def scrape_endpoint(body: ContentRequest) -> dict[str, Any]:
    """Return the image and both pagers of a single-image page."""
    return await _run(extract_scrape, body)
