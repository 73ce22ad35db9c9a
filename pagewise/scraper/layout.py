"""Layout classification: long (stacked) pages vs. single-image pages."""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from pagewise.scraper.errors import WaitTimeout
from pagewise.scraper.session import BrowserSession

logger = logging.getLogger(__name__)

LONG_PAGE_SELECTOR = ".load-src"
SINGLE_IMAGE_SELECTOR = "#cp_image"

# Seconds; the probe only has to rule the container out.
LONG_PAGE_PROBE_TIMEOUT = 1.0


async def detect_long_page(session: BrowserSession, url: str) -> Tuple[List[str], bool]:
    """Navigate to *url* and collect the stacked images of a long page.

    Returns ``(images, found)``.  When the long-page selector does not become
    visible within :data:`LONG_PAGE_PROBE_TIMEOUT` the page is not a long page
    and ``([], False)`` is returned.  Otherwise every matching node's ``src``
    is returned in document order; a missing ``src`` is kept as ``""`` so
    positions line up with the DOM.
    """
    await session.navigate(url)
    try:
        await session.wait_visible(LONG_PAGE_SELECTOR, timeout=LONG_PAGE_PROBE_TIMEOUT)
    except WaitTimeout:
        logger.debug("not a long page: %s", url)
        return [], False

    images: List[str] = []
    for node in await session.query_all(LONG_PAGE_SELECTOR):
        src = await session.read_attribute(node, "src")
        if src is None:
            logger.warning("long page image without src on %s", url)
        images.append(src or "")

    logger.debug("long page with %d image(s): %s", len(images), url)
    return images, True


async def detect_single_page(
    session: BrowserSession, url: str
) -> Tuple[Optional[str], bool]:
    """Navigate to *url* and read the primary image of a single page.

    Returns ``(image, found)``; ``(None, False)`` when the image element never
    becomes visible or carries no ``src``.
    """
    await session.navigate(url)
    try:
        await session.wait_visible(SINGLE_IMAGE_SELECTOR)
    except WaitTimeout:
        logger.info("images not found: %s", url)
        return None, False

    nodes = await session.query_all(SINGLE_IMAGE_SELECTOR)
    src = await session.read_attribute(nodes[0], "src") if nodes else None
    if not src:
        logger.info("image element without src: %s", url)
        return None, False
    return src, True
