"""Chapter and page pager resolution.

Reader pages render every pager twice (once per responsive layout), so the
raw node lists hold each control two times.  Two dedup strategies exist:

``halve``
    Keep the first half of the matches by position and drop the rest.  This
    is the default and assumes an exact 2x duplication.

``identity``
    Keep the first occurrence of each distinct ``(label, target)`` pair in
    document order.  It does not depend on the duplication factor.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Iterable, List, Optional, Sequence, Tuple, TypeVar

from pagewise.config import settings
from pagewise.scraper.errors import PagerInconsistencyError
from pagewise.scraper.models import PagerEntry
from pagewise.scraper.session import BrowserSession

logger = logging.getLogger(__name__)

CHAPTER_PAGER_SELECTOR = ".view-paging>div>a"
PAGE_PAGER_SELECTOR = "#chapterpager>a"
CURRENT_PAGE_SELECTOR = ".current"

HALVE = "halve"
IDENTITY = "identity"
DEDUP_STRATEGIES = (HALVE, IDENTITY)

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Dedup helpers
# ---------------------------------------------------------------------------

def resolve_strategy(strategy: Optional[str] = None) -> str:
    """Return *strategy*, or the configured default, after validating it."""
    name = (strategy or settings.pager_dedup).strip().lower()
    if name not in DEDUP_STRATEGIES:
        raise ValueError(
            f"unknown pager dedup strategy {name!r}; expected one of {DEDUP_STRATEGIES}"
        )
    return name


def canonical_half(items: Sequence[T]) -> List[T]:
    """Return the first half of *items*; an odd trailing item is dropped."""
    return list(items[: len(items) // 2])


def unique_entries(entries: Iterable[PagerEntry]) -> List[PagerEntry]:
    """Drop repeated entries, keeping the first occurrence of each."""
    seen: set[PagerEntry] = set()
    unique: List[PagerEntry] = []
    for entry in entries:
        if entry not in seen:
            seen.add(entry)
            unique.append(entry)
    return unique


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

async def resolve_chapter_pager(
    session: BrowserSession, strategy: Optional[str] = None
) -> List[PagerEntry]:
    """Return the previous/next chapter links of the current page.

    Only in-site paths (hrefs starting with ``/``) are kept; absolute,
    anchor-only and missing hrefs are skipped.  Entries have an empty label.
    """
    strategy = resolve_strategy(strategy)
    nodes = await session.query_all(CHAPTER_PAGER_SELECTOR)
    candidates = canonical_half(nodes) if strategy == HALVE else nodes

    entries: List[PagerEntry] = []
    for node in candidates:
        href = await session.read_attribute(node, "href")
        if href and href.startswith("/"):
            entries.append(PagerEntry(label="", target=href))

    if strategy == IDENTITY:
        entries = unique_entries(entries)

    logger.debug("chapter pager: %d of %d anchor(s) kept", len(entries), len(nodes))
    return entries


async def resolve_page_pager(
    session: BrowserSession, strategy: Optional[str] = None
) -> Tuple[List[PagerEntry], str]:
    """Return ``(entries, current_page)`` for the in-chapter page pager.

    Anchors and their labels are read through two separate DOM queries and
    paired by index.  Both channels must agree in length after dedup,
    otherwise :class:`PagerInconsistencyError` is raised.  ``current_page``
    is the text of the ``.current`` marker, or ``""`` if there is none.
    """
    strategy = resolve_strategy(strategy)
    reads = [
        asyncio.ensure_future(session.query_all(PAGE_PAGER_SELECTOR)),
        asyncio.ensure_future(session.collect_inner_html(PAGE_PAGER_SELECTOR)),
        asyncio.ensure_future(session.inner_html(CURRENT_PAGE_SELECTOR)),
    ]
    try:
        nodes, labels, current_page = await asyncio.gather(*reads)
    except BaseException:
        # Stop the remaining reads before the session closes.
        for read in reads:
            read.cancel()
        await asyncio.gather(*reads, return_exceptions=True)
        raise

    if strategy == HALVE:
        nodes, labels = canonical_half(nodes), canonical_half(labels)
    if len(nodes) != len(labels):
        raise PagerInconsistencyError(len(nodes), len(labels))

    entries: List[PagerEntry] = []
    for node, label in zip(nodes, labels):
        href = await session.read_attribute(node, "href")
        if not href:
            logger.warning("page pager entry %r has no href; skipped", label)
            continue
        entries.append(PagerEntry(label=label, target=href))

    if strategy == IDENTITY:
        entries = unique_entries(entries)

    logger.debug("page pager: %d entries, current=%r", len(entries), current_page)
    return entries, current_page
