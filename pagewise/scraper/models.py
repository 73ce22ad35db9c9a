"""Data models for the extraction pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Annotated, Any, List
from urllib.parse import urlsplit

from pydantic import BeforeValidator, HttpUrl, TypeAdapter


def _require_host(value: Any) -> Any:
    # The URL parser turns "http:///path" into "http://path/"; reject it here.
    if isinstance(value, str) and not urlsplit(value.strip()).netloc:
        raise ValueError("URL has no host")
    return value


ReaderUrl = Annotated[HttpUrl, BeforeValidator(_require_host)]

_reader_url = TypeAdapter(ReaderUrl)


def validate_reader_url(value: str) -> str:
    """Return *value* if it is an absolute http(s) URL with a host.

    Raises:
        pydantic.ValidationError: The URL is missing, relative or unparseable.
    """
    _reader_url.validate_python(value)
    return value


@dataclass(frozen=True)
class PagerEntry:
    """One navigable pagination control.

    ``label`` is the visible page number (empty for chapter entries) and
    ``target`` the href the control points at.
    """

    label: str
    target: str

    def to_dict(self) -> dict[str, str]:
        return {"Number": self.label, "Url": self.target}


@dataclass
class ContentDescriptor:
    """Everything extracted from a single reader page."""

    images: List[str] = field(default_factory=list)
    chapter_pager: List[PagerEntry] = field(default_factory=list)
    page_pager: List[PagerEntry] = field(default_factory=list)
    is_long_page: bool = False
    current_page: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON shape served by the HTTP API and the CLI."""
        return {
            "image_url": list(self.images),
            "chapterPager": [e.to_dict() for e in self.chapter_pager],
            "pagePager": [e.to_dict() for e in self.page_pager],
            "longPage": self.is_long_page,
            "currentPage": self.current_page,
        }
