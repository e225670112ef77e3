"""Image dating pipeline turning a fetched page into an :class:`Analysis`."""

from __future__ import annotations

import logging
from typing import Callable, Iterable, List, Optional, Set

import requests

from carbon14.config import AnalyzerConfig
from carbon14.models import Analysis, Headers, ImageResult, PageContext
from carbon14.services.discovery import discover_images, extract_title
from carbon14.services.fetcher import MetadataFetcher, extract_timestamp, fetch_page
from carbon14.urls import InvalidURLError, is_internal, resolve_url, validate_page_url

__all__ = [
    "MetadataFetch",
    "PageAnalyzer",
    "SeenReferences",
    "analyze_page",
    "collect_images",
    "order_results",
]

logger = logging.getLogger(__name__)

MetadataFetch = Callable[[str], Optional[Headers]]


class SeenReferences:
    """Track the raw image references already handled during one run."""

    def __init__(self) -> None:
        self._seen: Set[str] = set()

    def should_process(self, reference: str) -> bool:
        """Return ``True`` the first time a non-empty ``reference`` is offered."""

        if not reference or reference in self._seen:
            return False
        self._seen.add(reference)
        return True


def order_results(results: Iterable[ImageResult]) -> List[ImageResult]:
    """Sort results by timestamp, oldest first, keeping discovery order on ties."""

    return sorted(results, key=lambda result: result.timestamp)


def _date_image(base_url: str, reference: str, fetch_metadata: MetadataFetch) -> ImageResult | None:
    logger.info("Working on image %s", reference)

    try:
        absolute = resolve_url(base_url, reference)
    except InvalidURLError:
        logger.debug("Skipping unresolvable image reference %r", reference)
        return None

    headers = fetch_metadata(absolute)
    if headers is None:
        return None

    timestamp = extract_timestamp(headers)
    if timestamp is None:
        logger.debug("No usable Last-Modified header for %s", absolute)
        return None

    return ImageResult(url=absolute, timestamp=timestamp, internal=is_internal(base_url, absolute))


def collect_images(markup: str, base_url: str, fetch_metadata: MetadataFetch) -> List[ImageResult]:
    """Date every distinct image reference in ``markup``.

    References that cannot be resolved, fetched or dated are left out.
    """

    seen = SeenReferences()
    dated = (
        _date_image(base_url, reference, fetch_metadata)
        for reference in discover_images(markup)
        if seen.should_process(reference)
    )
    return order_results(result for result in dated if result is not None)


def analyze_page(context: PageContext, fetch_metadata: MetadataFetch) -> Analysis:
    """Build the :class:`Analysis` of an already fetched page."""

    images = collect_images(context.markup, context.url, fetch_metadata)
    logger.debug("Dated %d image(s) on %s", len(images), context.url)

    return Analysis(
        url=context.url,
        author=context.author,
        title=extract_title(context.markup),
        headers=context.headers,
        start=context.start,
        end=context.end,
        images=images,
    )


class PageAnalyzer:
    """Fetch a page over HTTP and date the images it references."""

    def __init__(
        self,
        config: AnalyzerConfig | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.config = config or AnalyzerConfig()
        self._session = session or requests.Session()

    def run(self, url: str, author: str | None = None) -> Analysis:
        """Analyse ``url``.

        Raises :class:`~carbon14.urls.InvalidURLError` for a malformed URL and
        :class:`requests.RequestException` when the page cannot be fetched.
        """

        validate_page_url(url)
        headers = self.config.request_headers
        context = fetch_page(
            self._session,
            url,
            author=author,
            timeout=self.config.page_timeout,
            headers=headers,
        )
        fetcher = MetadataFetcher(self._session, timeout=self.config.timeout, headers=headers)
        return analyze_page(context, fetcher)
