"""Extraction workflows: turn a reader URL into a :class:`ContentDescriptor`.

Two workflows exist:

``initial``
    Used for the first page of a chapter, when the layout is unknown.  Probes
    for a long page first and falls back to the single-image layout.

``scrape``
    Used when the caller already expects a single-image page.  Skips the
    long-page probe and always resolves both pagers.

``run_initial`` / ``run_scrape`` operate on a session the caller owns.
``extract_initial`` / ``extract_scrape`` open their own session, enforce the
per-extraction deadline and release the browser on every exit path.
"""

from __future__ import annotations

import asyncio
import logging
from typing import AsyncContextManager, Awaitable, Callable, Optional

from pagewise.config import settings
from pagewise.scraper.errors import ExtractionTimeout
from pagewise.scraper.layout import detect_long_page, detect_single_page
from pagewise.scraper.models import ContentDescriptor
from pagewise.scraper.pager import (
    resolve_chapter_pager,
    resolve_page_pager,
    resolve_strategy,
)
from pagewise.scraper.session import BrowserSession, open_session

logger = logging.getLogger(__name__)

SessionFactory = Callable[[], AsyncContextManager[BrowserSession]]
Workflow = Callable[[BrowserSession, str, Optional[str]], Awaitable[ContentDescriptor]]


# ---------------------------------------------------------------------------
# Workflows over an open session
# ---------------------------------------------------------------------------

async def _fill_single_page(
    session: BrowserSession, url: str, strategy: Optional[str]
) -> ContentDescriptor:
    descriptor = ContentDescriptor()
    image, found = await detect_single_page(session, url)
    if found and image:
        descriptor.images.append(image)
    descriptor.chapter_pager = await resolve_chapter_pager(session, strategy)
    descriptor.page_pager, descriptor.current_page = await resolve_page_pager(
        session, strategy
    )
    return descriptor


async def run_initial(
    session: BrowserSession, url: str, strategy: Optional[str] = None
) -> ContentDescriptor:
    """Classify the page at *url* and extract its content and pagers."""
    strategy = resolve_strategy(strategy)
    images, _ = await detect_long_page(session, url)
    if not images:
        return await _fill_single_page(session, url, strategy)

    return ContentDescriptor(
        images=images,
        chapter_pager=await resolve_chapter_pager(session, strategy),
        is_long_page=True,
    )


async def run_scrape(
    session: BrowserSession, url: str, strategy: Optional[str] = None
) -> ContentDescriptor:
    """Extract a single-image page at *url* together with both pagers."""
    return await _fill_single_page(session, url, resolve_strategy(strategy))


# ---------------------------------------------------------------------------
# Session-scoped entry points
# ---------------------------------------------------------------------------

async def _extract(
    workflow: Workflow,
    url: str,
    strategy: Optional[str],
    session_factory: Optional[SessionFactory],
    timeout: Optional[float],
) -> ContentDescriptor:
    strategy = resolve_strategy(strategy)
    factory = session_factory or open_session
    deadline = settings.extraction_timeout if timeout is None else timeout

    async def _run() -> ContentDescriptor:
        async with factory() as session:
            return await workflow(session, url, strategy)

    try:
        descriptor = await asyncio.wait_for(_run(), timeout=deadline)
    except asyncio.TimeoutError as exc:
        raise ExtractionTimeout(
            f"extraction of {url} exceeded {deadline:g}s"
        ) from exc

    logger.info(
        "%s: %d image(s), long=%s, %d chapter / %d page link(s)",
        url,
        len(descriptor.images),
        descriptor.is_long_page,
        len(descriptor.chapter_pager),
        len(descriptor.page_pager),
    )
    return descriptor


async def extract_initial(
    url: str,
    strategy: Optional[str] = None,
    session_factory: Optional[SessionFactory] = None,
    timeout: Optional[float] = None,
) -> ContentDescriptor:
    """Run the ``initial`` workflow against *url* in a fresh browser session.

    Args:
        url: Absolute reader-page URL.
        strategy: Pager dedup strategy (``halve`` or ``identity``); defaults
            to ``settings.pager_dedup``.
        session_factory: Zero-argument callable returning an async context
            manager that yields a session.  Defaults to :func:`open_session`.
        timeout: Deadline in seconds for the whole extraction; defaults to
            ``settings.extraction_timeout``.

    Raises:
        ExtractionError: On any fatal browser failure, pager inconsistency,
            or deadline overrun.
    """
    return await _extract(run_initial, url, strategy, session_factory, timeout)


async def extract_scrape(
    url: str,
    strategy: Optional[str] = None,
    session_factory: Optional[SessionFactory] = None,
    timeout: Optional[float] = None,
) -> ContentDescriptor:
    """Run the ``scrape`` workflow against *url*; see :func:`extract_initial`."""
    return await _extract(run_scrape, url, strategy, session_factory, timeout)
