"""FigScript CLI entry point: Click group with subcommands."""

import logging

import click

from figscript import __version__


@click.group()
@click.version_option(version=__version__, prog_name="figscript")
@click.option("--verbose", "-v", is_flag=True, help="Log parser activity to stderr.")
def cli(verbose: bool) -> None:
    """FigScript - translate design-tool styling strings into Tailwind classes."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s"
        )


# Import and register subcommands
from figscript.cli.parse import parse  # noqa: E402
from figscript.cli.check import check  # noqa: E402

cli.add_command(parse)
cli.add_command(check)
