"""csscomplexity CLI entry point: Click group with subcommands."""

import logging

import click

from csscomplexity import __version__


@click.group()
@click.version_option(version=__version__, prog_name="csscomplexity")
@click.option("--verbose", is_flag=True, help="Log debug output to stderr.")
def cli(verbose: bool) -> None:
    """Analyze CSS complexity: specificity, cascade, duplication, and layout risk."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


# Import and register subcommands
from csscomplexity.cli.analyze import analyze  # noqa: E402
from csscomplexity.cli.check import check  # noqa: E402
from csscomplexity.cli.init import init  # noqa: E402

cli.add_command(analyze)
cli.add_command(check)
cli.add_command(init)
