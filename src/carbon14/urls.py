"""URL resolution and host comparison helpers."""

from __future__ import annotations

from urllib.parse import urljoin, urlsplit

__all__ = ["InvalidURLError", "host_of", "is_internal", "resolve_url", "validate_page_url"]


class InvalidURLError(ValueError):
    """Raised when a URL is not absolute or cannot be resolved."""


def _is_absolute(url: str) -> bool:
    try:
        parts = urlsplit(url)
    except ValueError:
        return False
    return bool(parts.scheme and parts.netloc)


def validate_page_url(url: str) -> str:
    """Return ``url`` unchanged when it is an absolute HTTP(S) URL."""

    try:
        parts = urlsplit(url)
    except ValueError as exc:
        raise InvalidURLError(f"Invalid page URL: {url!r}") from exc

    if parts.scheme.lower() not in {"http", "https"} or not parts.hostname:
        raise InvalidURLError(f"Invalid page URL: {url!r}")
    return url


def resolve_url(base: str, reference: str) -> str:
    """Resolve ``reference`` against the absolute URL ``base``.

    Scheme-relative, path-relative, query and fragment references follow the
    usual :func:`urllib.parse.urljoin` rules. :class:`InvalidURLError` is
    raised when ``base`` is not absolute or when the joined result is not an
    absolute URL.
    """

    if not _is_absolute(base):
        raise InvalidURLError(f"Base URL is not absolute: {base!r}")

    try:
        absolute = urljoin(base, reference.strip())
    except ValueError as exc:
        raise InvalidURLError(f"Cannot resolve {reference!r} against {base!r}") from exc

    if not _is_absolute(absolute):
        raise InvalidURLError(f"Cannot resolve {reference!r} against {base!r}")
    return absolute


def host_of(url: str) -> str | None:
    """Return the host component of ``url`` or ``None`` when it has none."""

    try:
        return urlsplit(url).hostname
    except ValueError:
        return None


def is_internal(base_url: str, resource_url: str) -> bool:
    """Return ``True`` when both URLs share exactly the same host.

    Ports, schemes and subdomains are not taken into account. An
    undeterminable host on either side counts as external.
    """

    base_host = host_of(base_url)
    resource_host = host_of(resource_url)
    if base_host is None or resource_host is None:
        return False
    return base_host == resource_host
