from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

from carbon14.models import Analysis, ImageResult
from carbon14.report import render_report


def _analysis(**overrides) -> Analysis:
    values = dict(
        url="https://example.com/a",
        author="Jane Doe",
        title="Old news",
        headers=[("Content-Type", "text/html"), ("Set-Cookie", "a=1"), ("Set-Cookie", "b=2")],
        start=datetime(2024, 5, 1, 10, 0, 0, tzinfo=UTC),
        end=datetime(2024, 5, 1, 10, 0, 5, tzinfo=UTC),
        images=[
            ImageResult(
                url="https://cdn.other.com/x.jpg",
                timestamp=datetime(1990, 1, 1, tzinfo=UTC),
                internal=False,
            ),
            ImageResult(
                url="https://example.com/logo.png",
                timestamp=datetime(1994, 11, 15, 8, 12, 31, tzinfo=UTC),
                internal=True,
            ),
        ],
    )
    values.update(overrides)
    return Analysis(**values)


def _section(report: str, title: str) -> str:
    body = report.split(f"## {title}\n", 1)[1]
    return body.split("\n## ", 1)[0]


def test_report_front_matter_and_general_information() -> None:
    report = render_report(_analysis(), color=False, local_zone=UTC)

    assert report.startswith(
        "---\ntitle: Carbon14 web page analysis\nauthor: Jane Doe\ndate: 2024-05-01\n---"
    )
    general = _section(report, "General information")
    assert "- **Page URL:** <https://example.com/a>" in general
    assert "- **Page title:** Old news" in general
    assert "- **Estimated date (UTC):** 1990-01-01 00:00:00" in general
    assert "- **Analysis started:** 2024-05-01 10:00:00 (UTC)" in general
    assert "- **Analysis ended:** 2024-05-01 10:00:05 (UTC)" in general


def test_report_lists_every_header_pair() -> None:
    report = render_report(_analysis(), color=False, local_zone=UTC)

    headers = _section(report, "HTTP headers")
    assert "    Content-Type: text/html" in headers
    assert "    Set-Cookie: a=1" in headers
    assert "    Set-Cookie: b=2" in headers


def test_report_splits_images_by_origin() -> None:
    zone = timezone(timedelta(hours=2))
    report = render_report(_analysis(), color=False, local_zone=zone)

    internal = _section(report, "Internal images")
    external = _section(report, "External images")
    everything = _section(report, "All images")

    logo_row = f"{'1994-11-15 08:12:31':20} {'1994-11-15 10:12:31':20} <https://example.com/logo.png>"
    cdn_row = f"{'1990-01-01 00:00:00':20} {'1990-01-01 02:00:00':20} <https://cdn.other.com/x.jpg>"
    assert logo_row in internal and cdn_row not in internal
    assert cdn_row in external and logo_row not in external
    assert everything.index(cdn_row) < everything.index(logo_row)
    assert "Date (UTC)           Date (Local)         URL" in everything


def test_report_without_images_or_optional_fields() -> None:
    report = render_report(
        _analysis(author=None, title=None, images=[]), color=False, local_zone=UTC
    )

    assert "author:" not in report
    assert "- **Page title:** N/A" in report
    assert "- **Estimated date (UTC):** N/A" in report
    for title in ("Internal images", "External images", "All images"):
        assert _section(report, title).strip() == "Nothing found."


def test_report_colour_is_optional() -> None:
    assert "\x1b[" in render_report(_analysis(), color=True, local_zone=UTC)
    assert "\x1b[" not in render_report(_analysis(), color=False, local_zone=UTC)
