"""Extraction commands: run a workflow against one reader URL."""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Optional

import typer
from pydantic import ValidationError

from pagewise.scraper import (
    ContentDescriptor,
    ExtractionError,
    extract_initial,
    extract_scrape,
)
from pagewise.scraper.models import validate_reader_url
from pagewise.scraper.pager import DEDUP_STRATEGIES

from cli.rendering import render_json, render_summary

Extract = Callable[..., Awaitable[ContentDescriptor]]


def _check_strategy(value: Optional[str]) -> Optional[str]:
    if value is not None and value not in DEDUP_STRATEGIES:
        raise typer.BadParameter(f"use one of: {' | '.join(DEDUP_STRATEGIES)}")
    return value


def _check_url(value: str) -> str:
    try:
        return validate_reader_url(value)
    except ValidationError as exc:
        raise typer.BadParameter("expected an absolute http(s) URL") from exc


def _run(extract: Extract, url: str, dedup: Optional[str], summary: bool) -> None:
    try:
        descriptor = asyncio.run(extract(url, strategy=dedup))
    except ExtractionError as exc:
        typer.echo(f"❌ Error: {exc}", err=True)
        raise typer.Exit(code=1)

    typer.echo(render_summary(descriptor) if summary else render_json(descriptor))


def initial(
    url: str = typer.Argument(..., callback=_check_url, help="Reader page URL."),
    dedup: Optional[str] = typer.Option(
        None, "--dedup", callback=_check_strategy, help="Pager dedup: halve | identity."
    ),
    summary: bool = typer.Option(False, "--summary", help="Print a summary instead of JSON."),
) -> None:
    """Detect the layout of the first chapter page and extract it."""
    _run(extract_initial, url, dedup, summary)


def scrape(
    url: str = typer.Argument(..., callback=_check_url, help="Reader page URL."),
    dedup: Optional[str] = typer.Option(
        None, "--dedup", callback=_check_strategy, help="Pager dedup: halve | identity."
    ),
    summary: bool = typer.Option(False, "--summary", help="Print a summary instead of JSON."),
) -> None:
    """Extract a single-image page and both of its pagers."""
    _run(extract_scrape, url, dedup, summary)
