"""Pagewise CLI — entry-point for extraction and the HTTP server.

Usage:
    pagewise --help

Commands:
    initial URL   → first page of a chapter (layout detection)
    scrape URL    → single-image page
    serve         → run the HTTP API
"""

from __future__ import annotations

from typing import Optional

import typer

from pagewise.config import configure_logging, settings
from pagewise.scraper.pager import resolve_strategy

from cli.commands import extract

app = typer.Typer(
    name="pagewise",
    help="Reader page extraction CLI.",
    no_args_is_help=True,
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    configure_logging("DEBUG" if verbose else None)
    try:
        resolve_strategy(settings.pager_dedup)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="PAGER_DEDUP") from exc


app.command("initial")(extract.initial)
app.command("scrape")(extract.scrape)


@app.command("serve")
def serve(
    host: Optional[str] = typer.Option(None, help="Bind address."),
    port: Optional[int] = typer.Option(None, help="Bind port."),
    reload: bool = typer.Option(False, help="Reload on code changes."),
) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    host = host or settings.host
    port = port or settings.port
    typer.echo(f"[serve] Listening on http://{host}:{port}")
    uvicorn.run("pagewise.api.app:app", host=host, port=port, reload=reload)


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
