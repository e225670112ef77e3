"""Plain text rendering of an :class:`~carbon14.models.Analysis`."""

from __future__ import annotations

from datetime import datetime, tzinfo
from typing import Callable, List, Sequence

import click
import tzlocal

from carbon14.models import Analysis, ImageResult

__all__ = ["REPORT_TITLE", "render_report"]

REPORT_TITLE = "Carbon14 web page analysis"
RULE_WIDTH = 80
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def readable_date(value: datetime) -> str:
    return value.strftime(DATE_FORMAT)


class _Writer:
    """Collect report lines, styling them only when colour is enabled."""

    def __init__(self, color: bool) -> None:
        self.color = color
        self.lines: List[str] = []

    def style(self, text: str, **styles) -> str:
        return click.style(text, **styles) if self.color else text

    def line(self, text: str = "") -> None:
        self.lines.append(text)

    def heading(self, title: str) -> None:
        self.line()
        self.line(f"{self.style('#', fg='red')}# {title}")
        self.line()

    def rule(self) -> None:
        self.line(self.style("-" * RULE_WIDTH, dim=True))


def _image_section(
    writer: _Writer,
    title: str,
    images: Sequence[ImageResult],
    selector: Callable[[ImageResult], bool],
    zone: tzinfo,
) -> None:
    writer.heading(title)
    selected = [image for image in images if selector(image)]
    if not selected:
        writer.line("Nothing found.")
        return

    writer.rule()
    writer.line(writer.style(f"{'Date (UTC)':20} {'Date (Local)':20} URL", bold=True))
    writer.line(writer.style(f"{'-' * 20} {'-' * 20} {'-' * 38}", dim=True))
    for image in selected:
        utc = readable_date(image.timestamp)
        local = readable_date(image.timestamp.astimezone(zone))
        writer.line(f"{utc:20} {local:20} <{image.url}>")
    writer.rule()


def render_report(analysis: Analysis, *, color: bool = True, local_zone: tzinfo | None = None) -> str:
    """Return the human readable report for ``analysis``.

    Local times use ``local_zone``, defaulting to the zone of the machine.
    """

    zone = local_zone or tzlocal.get_localzone()
    writer = _Writer(color)

    writer.line("---")
    writer.line(writer.style(f"title: {REPORT_TITLE}", fg="magenta"))
    if analysis.author:
        writer.line(writer.style(f"author: {analysis.author}", fg="magenta"))
    writer.line(writer.style(f"date: {analysis.start.strftime('%Y-%m-%d')}", fg="magenta"))
    writer.line("---")

    writer.heading("General information")
    estimated = analysis.estimated_date
    started = analysis.start.astimezone(zone)
    ended = analysis.end.astimezone(zone)
    metadata = [
        ("Page URL", f"<{analysis.url}>"),
        ("Page title", analysis.title if analysis.title is not None else "N/A"),
        ("Estimated date (UTC)", readable_date(estimated) if estimated else "N/A"),
        ("Analysis started", f"{readable_date(started)} ({zone})"),
        ("Analysis ended", f"{readable_date(ended)} ({zone})"),
    ]
    for label, value in metadata:
        writer.line(f"- {writer.style(f'**{label}:**', fg='cyan', bold=True)} {value}")

    writer.heading("HTTP headers")
    for name, value in analysis.headers:
        writer.line(f"    {name}: {value}")

    _image_section(writer, "Internal images", analysis.images, lambda image: image.internal, zone)
    _image_section(writer, "External images", analysis.images, lambda image: not image.internal, zone)
    _image_section(writer, "All images", analysis.images, lambda image: True, zone)

    return "\n".join(writer.lines)
