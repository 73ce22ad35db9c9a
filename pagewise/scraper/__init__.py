"""Scraper package — browser-driven reader page extraction."""

from pagewise.scraper.errors import (
    BrowserError,
    ExtractionError,
    ExtractionTimeout,
    PagerInconsistencyError,
)
from pagewise.scraper.extractor import (
    extract_initial,
    extract_scrape,
    run_initial,
    run_scrape,
)
from pagewise.scraper.models import ContentDescriptor, PagerEntry

__all__ = [
    "extract_initial",
    "extract_scrape",
    "run_initial",
    "run_scrape",
    "ContentDescriptor",
    "PagerEntry",
    "ExtractionError",
    "BrowserError",
    "ExtractionTimeout",
    "PagerInconsistencyError",
]
