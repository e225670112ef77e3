"""Extraction of the page title and image references from HTML markup."""

from __future__ import annotations

from typing import Iterator

from bs4 import BeautifulSoup

__all__ = ["DATA_URI_PREFIX", "discover_images", "extract_title"]

DATA_URI_PREFIX = "data:"


def _parse(markup: str) -> BeautifulSoup:
    return BeautifulSoup(markup, "lxml")


def extract_title(markup: str) -> str | None:
    """Return the inner markup of the first ``<title>`` element, as written."""

    soup = _parse(markup)
    return soup.title.decode_contents() if soup.title else None


def discover_images(markup: str) -> Iterator[str]:
    """Yield raw image references in discovery order.

    ``<img src>`` values come first, followed by ``og:image`` meta contents,
    each in document order. Embedded ``data:`` images are skipped. Values are
    yielded as written in the markup, without resolution or deduplication.
    """

    soup = _parse(markup)

    for image in soup.find_all("img"):
        address = image.get("src")
        if address is None or address.startswith(DATA_URI_PREFIX):
            continue
        yield address

    for meta in soup.find_all("meta", attrs={"property": "og:image"}):
        address = meta.get("content")
        if address is None or address.startswith(DATA_URI_PREFIX):
            continue
        yield address
