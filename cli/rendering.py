"""Utilities for rendering extraction results in the CLI."""

from __future__ import annotations

import json
from typing import List

from pagewise.scraper.models import ContentDescriptor, PagerEntry


def render_json(descriptor: ContentDescriptor) -> str:
    """Return the descriptor in its wire shape, indented."""
    return json.dumps(descriptor.to_dict(), indent=4)


def _render_pager(entries: List[PagerEntry], current: str = "") -> str:
    if not entries:
        return "(none)"
    parts = []
    for entry in entries:
        label = entry.label or "·"
        if current and entry.label == current:
            label = f"[{label}]"
        parts.append(f"{label} → {entry.target}")
    return ", ".join(parts)


def render_summary(descriptor: ContentDescriptor) -> str:
    """Render a short human-readable summary of *descriptor*.

    The current page, if any, is bracketed in the page pager line.
    """
    layout = "long page" if descriptor.is_long_page else "single page"
    lines = [f"Layout   : {layout}", f"Images   : {len(descriptor.images)}"]
    lines += [f"  {src or '(missing src)'}" for src in descriptor.images]
    lines.append(f"Chapters : {_render_pager(descriptor.chapter_pager)}")
    if not descriptor.is_long_page:
        lines.append(
            f"Pages    : {_render_pager(descriptor.page_pager, descriptor.current_page)}"
        )
        lines.append(f"Current  : {descriptor.current_page or '(unknown)'}")
    return "\n".join(lines)
