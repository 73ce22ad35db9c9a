"""Exceptions raised by the extraction pipeline.

Everything deriving from :class:`ExtractionError` is fatal: the extraction is
abandoned and no descriptor is returned.  :class:`WaitTimeout` is not fatal;
it only tells the caller that a selector did not become visible in time.
"""

from __future__ import annotations


class ExtractionError(Exception):
    """Base class for fatal extraction failures."""


class BrowserError(ExtractionError):
    """The browser failed to launch, navigate, query or evaluate."""


class PagerInconsistencyError(ExtractionError):
    """Page pager anchors and labels disagree in length after dedup."""

    def __init__(self, nodes: int, labels: int) -> None:
        super().__init__(
            f"page pager mismatch: {nodes} anchor(s) but {labels} label(s)"
        )
        self.nodes = nodes
        self.labels = labels


class ExtractionTimeout(ExtractionError):
    """The per-extraction deadline expired before the workflow finished."""


class WaitTimeout(Exception):
    """A selector did not become visible within the wait window."""

    def __init__(self, selector: str, timeout: float) -> None:
        super().__init__(f"{selector!r} not visible after {timeout:g}s")
        self.selector = selector
        self.timeout = timeout
