"""CLI command: csscomplexity analyze -- analyze stylesheets and print a report."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import click

from csscomplexity.analyzer import analyze_directory, format_report_as_json
from csscomplexity.config import ConfigError, resolve_config
from csscomplexity.formatter import format_report


@click.command()
@click.argument("path", default=".", type=click.Path())
@click.option("-i", "--include", multiple=True, help="Glob pattern to include (repeatable).")
@click.option("-e", "--exclude", multiple=True, help="Glob pattern to exclude (repeatable).")
@click.option(
    "-f",
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    show_default=True,
    help="Output format.",
)
@click.option("-o", "--out", type=click.Path(dir_okay=False), help="Write report to file.")
@click.option("-s", "--silent", is_flag=True, help="Suppress console output.")
@click.option("--config/--no-config", "use_config", default=True, help="Use config files.")
def analyze(
    path: str,
    include: tuple[str, ...],
    exclude: tuple[str, ...],
    output_format: str,
    out: str | None,
    silent: bool,
    use_config: bool,
) -> None:
    """Analyze CSS files under PATH and generate a complexity report."""
    target = Path(path).resolve()
    overrides: dict[str, Any] = {}
    if include:
        overrides["include"] = list(include)
    if exclude:
        overrides["exclude"] = list(exclude)

    try:
        config = resolve_config(target, use_config, overrides)
        report = analyze_directory(target, config)
        if output_format == "json":
            output = format_report_as_json(report)
        else:
            output = format_report(report, silent=silent and not out)

        if out:
            Path(out).write_text(output, encoding="utf-8")
            if not silent:
                click.echo(f"Report written to {out}")
        elif not silent:
            click.echo(output)
    except (ConfigError, OSError) as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)
