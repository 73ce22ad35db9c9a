"""Pagewise — reader-page content and pagination extraction."""

__version__ = "0.1.0"
