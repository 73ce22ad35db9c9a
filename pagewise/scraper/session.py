"""Browser session: the only place that talks to Playwright.

A :class:`BrowserSession` wraps one Playwright page and exposes the handful of
DOM capabilities the extraction pipeline needs.  Playwright failures are
re-raised as :class:`~pagewise.scraper.errors.BrowserError`; a visibility wait
that runs out raises :class:`~pagewise.scraper.errors.WaitTimeout` instead so
callers can treat it as a signal.

Sessions are scoped to a single extraction via :func:`open_session`, which
launches a fresh headless Chromium and always closes it on exit.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Awaitable, List, Optional, TypeVar

from playwright.async_api import (
    ElementHandle,
    Error as PlaywrightError,
    Page,
    TimeoutError as PlaywrightTimeoutError,
    async_playwright,
)

from pagewise.config import settings
from pagewise.scraper.errors import BrowserError, WaitTimeout

logger = logging.getLogger(__name__)

T = TypeVar("T")

_COLLECT_INNER_HTML = (
    "(selector) => Array.from(document.querySelectorAll(selector), el => el.innerHTML)"
)
_READ_INNER_HTML = (
    "(selector) => { const el = document.querySelector(selector);"
    " return el ? el.innerHTML : ''; }"
)


class BrowserSession:
    """DOM access for one navigated page."""

    def __init__(self, page: Page, default_timeout: float) -> None:
        self._page = page
        self.default_timeout = default_timeout

    async def _guard(self, action: str, pending: Awaitable[T]) -> T:
        try:
            return await pending
        except PlaywrightError as exc:
            raise BrowserError(f"{action} failed: {exc}") from exc

    async def navigate(self, url: str) -> None:
        logger.debug("navigating to %s", url)
        await self._guard(f"navigate to {url}", self._page.goto(url))

    async def wait_visible(self, selector: str, timeout: Optional[float] = None) -> None:
        """Block until *selector* is visible.

        Args:
            selector: CSS selector to wait for.
            timeout: Seconds to wait; ``None`` uses the session default.

        Raises:
            WaitTimeout: The element did not become visible in time.
            BrowserError: The page could not be queried at all.
        """
        seconds = self.default_timeout if timeout is None else timeout
        try:
            await self._page.wait_for_selector(
                selector, state="visible", timeout=seconds * 1000
            )
        except PlaywrightTimeoutError as exc:
            raise WaitTimeout(selector, seconds) from exc
        except PlaywrightError as exc:
            raise BrowserError(f"wait for {selector!r} failed: {exc}") from exc

    async def query_all(self, selector: str) -> List[ElementHandle]:
        """Return every node matching *selector* in document order."""
        return await self._guard(
            f"query {selector!r}", self._page.query_selector_all(selector)
        )

    async def read_attribute(self, node: Any, name: str) -> Optional[str]:
        """Return attribute *name* of *node*, or ``None`` when it is absent."""
        return await self._guard(f"read attribute {name!r}", node.get_attribute(name))

    async def collect_inner_html(self, selector: str) -> List[str]:
        """Return the innerHTML of every node matching *selector*."""
        values = await self._guard(
            f"collect labels for {selector!r}",
            self._page.evaluate(_COLLECT_INNER_HTML, selector),
        )
        return [str(v) for v in values or []]

    async def inner_html(self, selector: str) -> str:
        """Return the innerHTML of the first node matching *selector*, or ``""``."""
        value = await self._guard(
            f"read {selector!r}", self._page.evaluate(_READ_INNER_HTML, selector)
        )
        return str(value or "")


@asynccontextmanager
async def open_session(
    headless: Optional[bool] = None,
    timeout: Optional[float] = None,
) -> AsyncIterator[BrowserSession]:
    """Launch a headless Chromium and yield a :class:`BrowserSession` on a new page.

    The browser is closed when the block exits, whether it finished, raised,
    or was cancelled by a deadline.
    """
    headless = settings.headless if headless is None else headless
    timeout = settings.browser_timeout if timeout is None else timeout

    async with async_playwright() as pw:
        try:
            browser = await pw.chromium.launch(headless=headless)
        except PlaywrightError as exc:
            raise BrowserError(f"browser launch failed: {exc}") from exc
        try:
            try:
                page = await browser.new_page()
            except PlaywrightError as exc:
                raise BrowserError(f"opening a page failed: {exc}") from exc
            page.set_default_timeout(timeout * 1000)
            yield BrowserSession(page, default_timeout=timeout)
        finally:
            await browser.close()
            logger.debug("browser session closed")
