"""Service layer entry points for Carbon14."""

from __future__ import annotations

from .analyzer import PageAnalyzer, analyze_page  # noqa: F401
from .fetcher import MetadataFetcher, fetch_page  # noqa: F401

__all__ = ["MetadataFetcher", "PageAnalyzer", "analyze_page", "fetch_page"]
