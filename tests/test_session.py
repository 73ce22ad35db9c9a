"""Tests for the Playwright-backed ``BrowserSession``.

Playwright is *not* launched: pages and the ``async_playwright`` entry point
are replaced with ``AsyncMock`` / ``MagicMock`` objects.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from pagewise.scraper.errors import BrowserError, WaitTimeout
from pagewise.scraper.session import BrowserSession, open_session


def _page() -> MagicMock:
    page = MagicMock()
    page.goto = AsyncMock()
    page.wait_for_selector = AsyncMock()
    page.query_selector_all = AsyncMock(return_value=[])
    page.evaluate = AsyncMock()
    return page


class TestBrowserSession:
    async def test_navigate(self) -> None:
        page = _page()
        await BrowserSession(page, 30.0).navigate("https://reader.example/1")
        page.goto.assert_awaited_once_with("https://reader.example/1")

    async def test_navigate_failure_wrapped(self) -> None:
        page = _page()
        page.goto.side_effect = PlaywrightError("net::ERR_CONNECTION_REFUSED")

        with pytest.raises(BrowserError, match="ERR_CONNECTION_REFUSED"):
            await BrowserSession(page, 30.0).navigate("https://reader.example/1")

    async def test_wait_visible_uses_milliseconds(self) -> None:
        page = _page()
        await BrowserSession(page, 30.0).wait_visible(".load-src", timeout=1.0)
        page.wait_for_selector.assert_awaited_once_with(
            ".load-src", state="visible", timeout=1000.0
        )

    async def test_wait_visible_defaults_to_session_timeout(self) -> None:
        page = _page()
        await BrowserSession(page, 12.0).wait_visible("#cp_image")
        assert page.wait_for_selector.await_args.kwargs["timeout"] == 12000.0

    async def test_wait_timeout_is_a_signal(self) -> None:
        page = _page()
        page.wait_for_selector.side_effect = PlaywrightTimeoutError("Timeout 1000ms exceeded")

        with pytest.raises(WaitTimeout) as excinfo:
            await BrowserSession(page, 30.0).wait_visible(".load-src", timeout=1.0)
        assert excinfo.value.selector == ".load-src"

    async def test_wait_other_failure_is_fatal(self) -> None:
        page = _page()
        page.wait_for_selector.side_effect = PlaywrightError("Target closed")

        with pytest.raises(BrowserError):
            await BrowserSession(page, 30.0).wait_visible(".load-src")

    async def test_query_all_and_read_attribute(self) -> None:
        node = MagicMock()
        node.get_attribute = AsyncMock(return_value="/next")
        page = _page()
        page.query_selector_all.return_value = [node]
        session = BrowserSession(page, 30.0)

        nodes = await session.query_all("a")
        assert nodes == [node]
        assert await session.read_attribute(node, "href") == "/next"
        node.get_attribute.assert_awaited_once_with("href")

    async def test_collect_inner_html(self) -> None:
        page = _page()
        page.evaluate.return_value = ["1", "2"]

        labels = await BrowserSession(page, 30.0).collect_inner_html("#chapterpager>a")

        assert labels == ["1", "2"]
        assert page.evaluate.await_args.args[1] == "#chapterpager>a"

    async def test_inner_html_absent_is_empty(self) -> None:
        page = _page()
        page.evaluate.return_value = None
        assert await BrowserSession(page, 30.0).inner_html(".current") == ""

    async def test_evaluate_failure_wrapped(self) -> None:
        page = _page()
        page.evaluate.side_effect = PlaywrightError("Execution context was destroyed")

        with pytest.raises(BrowserError):
            await BrowserSession(page, 30.0).inner_html(".current")


class TestOpenSession:
    @staticmethod
    def _playwright(browser: MagicMock) -> MagicMock:
        pw = MagicMock()
        pw.chromium.launch = AsyncMock(return_value=browser)
        manager = MagicMock()
        manager.__aenter__ = AsyncMock(return_value=pw)
        manager.__aexit__ = AsyncMock(return_value=False)
        return manager

    @staticmethod
    def _browser(page: MagicMock) -> MagicMock:
        browser = MagicMock()
        browser.new_page = AsyncMock(return_value=page)
        browser.close = AsyncMock()
        return browser

    async def test_yields_session_and_closes_browser(self) -> None:
        page = _page()
        browser = self._browser(page)
        manager = self._playwright(browser)

        with patch("pagewise.scraper.session.async_playwright", return_value=manager):
            async with open_session(headless=True, timeout=5.0) as session:
                assert isinstance(session, BrowserSession)
                assert session.default_timeout == 5.0

        page.set_default_timeout.assert_called_once_with(5000.0)
        browser.close.assert_awaited_once()

    async def test_browser_closed_when_body_raises(self) -> None:
        browser = self._browser(_page())
        manager = self._playwright(browser)

        with patch("pagewise.scraper.session.async_playwright", return_value=manager):
            with pytest.raises(BrowserError):
                async with open_session(headless=True, timeout=5.0):
                    raise BrowserError("boom")

        browser.close.assert_awaited_once()

    async def test_launch_failure_wrapped(self) -> None:
        manager = self._playwright(MagicMock())
        pw = manager.__aenter__.return_value
        pw.chromium.launch.side_effect = PlaywrightError("Executable doesn't exist")

        with patch("pagewise.scraper.session.async_playwright", return_value=manager):
            with pytest.raises(BrowserError, match="launch"):
                async with open_session(headless=True):
                    pass
