"""Command-line entry point for Carbon14."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
import requests

from carbon14.config import AnalyzerConfig
from carbon14.report import render_report
from carbon14.services.analyzer import PageAnalyzer
from carbon14.urls import InvalidURLError

logger = logging.getLogger("carbon14.cli")


def _build_config(
    config_path: Path | None, timeout: float | None, user_agent: str | None
) -> AnalyzerConfig:
    config = AnalyzerConfig.load(config_path)
    overrides = {}
    if timeout is not None:
        overrides["timeout"] = timeout
        overrides["page_timeout"] = timeout
    if user_agent:
        overrides["user_agent"] = user_agent
    if not overrides:
        return config
    return AnalyzerConfig.model_validate({**config.model_dump(), **overrides})


@click.command()
@click.version_option(version="0.1.0")
@click.argument("url")
@click.option("-a", "--author", help="Author to be included in the report")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="JSON file with analyzer settings",
)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    help="Request timeout in seconds for the page and every image",
)
@click.option("--user-agent", help="User-Agent header to send")
@click.option("--json", "as_json", is_flag=True, help="Print the analysis as JSON")
@click.option("--no-color", is_flag=True, help="Disable coloured output")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def main(
    url: str,
    author: str | None,
    config_path: Path | None,
    timeout: float | None,
    user_agent: str | None,
    as_json: bool,
    no_color: bool,
    verbose: bool,
) -> None:
    """Estimate the age of the web page at URL from the dates of its images."""

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    try:
        config = _build_config(config_path, timeout, user_agent)
    except (FileNotFoundError, ValueError) as exc:
        logger.error("Could not load analyzer configuration: %s", exc)
        sys.exit(1)

    analyzer = PageAnalyzer(config)
    try:
        analysis = analyzer.run(url, author=author)
    except InvalidURLError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)
    except requests.RequestException as exc:
        click.echo(f"Error fetching page {url}: {exc}", err=True)
        sys.exit(1)

    if as_json:
        click.echo(analysis.model_dump_json(indent=2))
        return

    click.echo(render_report(analysis, color=not no_color))


if __name__ == "__main__":
    main()
