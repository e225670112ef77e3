"""HTTP access for the analysed page and the metadata of its images."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from email.utils import parsedate_to_datetime
from typing import Mapping, Sequence, Tuple

import requests
from urllib3.exceptions import LocationParseError

from carbon14.models import Headers, PageContext, header_value

__all__ = ["MetadataFetcher", "extract_timestamp", "fetch_page", "header_pairs"]

logger = logging.getLogger(__name__)

LAST_MODIFIED = "Last-Modified"


def header_pairs(response: requests.Response) -> Headers:
    """Return the response headers as ordered ``(name, value)`` pairs.

    The raw urllib3 headers are preferred because they keep repeated header
    names as separate entries.
    """

    raw_headers = getattr(getattr(response, "raw", None), "headers", None)
    source = raw_headers if raw_headers is not None else response.headers
    return [(str(name), str(value)) for name, value in source.items()]


def fetch_page(
    session: requests.Session,
    url: str,
    *,
    author: str | None = None,
    timeout: float = 60.0,
    headers: Mapping[str, str] | None = None,
) -> PageContext:
    """Download ``url`` and capture its markup, headers and timing.

    Error statuses are kept: a 404 page is analysed like any other. Only
    transport failures raise :class:`requests.RequestException`.
    """

    logger.info("Fetching page %s", url)
    start = datetime.now(UTC)
    try:
        response = session.get(url, headers=headers, timeout=timeout)
    except LocationParseError as exc:
        raise requests.exceptions.InvalidURL(f"Cannot fetch page {url}: {exc}") from exc
    markup = response.text
    end = datetime.now(UTC)

    return PageContext(
        url=url,
        author=author,
        markup=markup,
        headers=header_pairs(response),
        start=start,
        end=end,
    )


def extract_timestamp(headers: Sequence[Tuple[str, str]]) -> datetime | None:
    """Parse the ``Last-Modified`` header into a UTC datetime."""

    value = header_value(headers, LAST_MODIFIED)
    if value is None:
        return None

    try:
        parsed = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


class MetadataFetcher:
    """Retrieve response headers for image URLs without reading the body."""

    def __init__(
        self,
        session: requests.Session,
        timeout: float = 15.0,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        self._session = session
        self._timeout = timeout
        self._headers = headers

    def __call__(self, url: str) -> Headers | None:
        try:
            with self._session.get(
                url, headers=self._headers, timeout=self._timeout, stream=True
            ) as response:
                response.raise_for_status()
                return header_pairs(response)
        except (requests.RequestException, LocationParseError) as exc:
            logger.warning("Cannot fetch metadata for %s: %s", url, exc)
            return None
