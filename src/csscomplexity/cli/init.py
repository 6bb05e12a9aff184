"""CLI command: csscomplexity init -- write a default config file."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from csscomplexity.config import write_config_file


@click.command()
@click.argument("path", default=".", type=click.Path(file_okay=False))
def init(path: str) -> None:
    """Generate a .csscomplexityrc.json config file in PATH."""
    try:
        config_path = write_config_file(Path(path).resolve())
    except OSError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)
    click.echo(f"Created config file: {config_path}")
