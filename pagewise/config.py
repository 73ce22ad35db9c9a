"""Centralised settings for the Pagewise service.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).

The CSS selectors and the long-page probe timeout are part of the extraction
policy and live next to the code that uses them, not here.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (one level up from this package)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)


def _env_bool(name: str, default: str) -> bool:
    return os.environ.get(name, default).strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Browser
    # ------------------------------------------------------------------
    headless: bool = field(
        default_factory=lambda: _env_bool("BROWSER_HEADLESS", "true")
    )
    browser_timeout: float = field(
        default_factory=lambda: float(os.environ.get("BROWSER_TIMEOUT", "30.0"))
    )

    # ------------------------------------------------------------------
    # Extraction
    # ------------------------------------------------------------------
    extraction_timeout: float = field(
        default_factory=lambda: float(os.environ.get("EXTRACTION_TIMEOUT", "60.0"))
    )
    pager_dedup: str = field(
        default_factory=lambda: os.environ.get("PAGER_DEDUP", "halve")
    )

    # ------------------------------------------------------------------
    # HTTP server
    # ------------------------------------------------------------------
    host: str = field(
        default_factory=lambda: os.environ.get("PAGEWISE_HOST", "localhost")
    )
    port: int = field(
        default_factory=lambda: int(os.environ.get("PAGEWISE_PORT", "8080"))
    )

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    log_level: str = field(
        default_factory=lambda: os.environ.get("LOG_LEVEL", "INFO")
    )


def configure_logging(level: str | None = None) -> None:
    """Install a root handler for the ``pagewise`` loggers.

    ``logging.basicConfig`` is a no-op when handlers already exist, so calling
    this from both the CLI and the app factory is safe.
    """
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# Module-level singleton; import this everywhere:
#   from pagewise.config import settings
settings = Settings()
