"""Tests for layout classification (long page vs. single page).

All DOM access goes through ``FakeSession``; no browser is launched.
"""

from __future__ import annotations

import pytest

from fakes import FakeSession, image, long_page_dom, single_page_dom
from pagewise.scraper.errors import BrowserError
from pagewise.scraper.layout import (
    LONG_PAGE_PROBE_TIMEOUT,
    LONG_PAGE_SELECTOR,
    SINGLE_IMAGE_SELECTOR,
    detect_long_page,
    detect_single_page,
)

URL = "https://reader.example/chapter/12/1"


class TestDetectLongPage:
    async def test_collects_all_images_in_document_order(self) -> None:
        session = FakeSession(long_page_dom(3))
        images, found = await detect_long_page(session, URL)

        assert found is True
        assert images == [
            "http://x/long-1.png",
            "http://x/long-2.png",
            "http://x/long-3.png",
        ]
        assert session.navigated == [URL]

    async def test_absent_container_is_not_an_error(self) -> None:
        session = FakeSession(single_page_dom())
        images, found = await detect_long_page(session, URL)

        assert (images, found) == ([], False)

    async def test_probe_uses_short_timeout(self) -> None:
        session = FakeSession()
        await detect_long_page(session, URL)

        assert session.waits == [(LONG_PAGE_SELECTOR, LONG_PAGE_PROBE_TIMEOUT)]

    async def test_missing_src_kept_as_empty_string(self) -> None:
        session = FakeSession({LONG_PAGE_SELECTOR: [image("a.png"), image(None), image("c.png")]})
        images, found = await detect_long_page(session, URL)

        assert found is True
        assert images == ["a.png", "", "c.png"]

    async def test_navigation_failure_propagates(self) -> None:
        session = FakeSession(long_page_dom(), fail_navigate=True)
        with pytest.raises(BrowserError):
            await detect_long_page(session, URL)


class TestDetectSinglePage:
    async def test_returns_image_src(self) -> None:
        session = FakeSession(single_page_dom())
        image_src, found = await detect_single_page(session, URL)

        assert (image_src, found) == ("http://x/img.png", True)

    async def test_waits_with_session_default_timeout(self) -> None:
        session = FakeSession(single_page_dom())
        await detect_single_page(session, URL)

        assert session.waits == [(SINGLE_IMAGE_SELECTOR, None)]

    async def test_missing_element(self) -> None:
        session = FakeSession()
        assert await detect_single_page(session, URL) == (None, False)

    async def test_missing_src(self) -> None:
        session = FakeSession({SINGLE_IMAGE_SELECTOR: [image(None)]})
        assert await detect_single_page(session, URL) == (None, False)

    async def test_empty_src(self) -> None:
        session = FakeSession({SINGLE_IMAGE_SELECTOR: [image("")]})
        assert await detect_single_page(session, URL) == (None, False)

    async def test_navigation_failure_propagates(self) -> None:
        session = FakeSession(single_page_dom(), fail_navigate=True)
        with pytest.raises(BrowserError):
            await detect_single_page(session, URL)
