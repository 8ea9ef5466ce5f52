"""inlinestyle CLI entry point: Click group with subcommands."""

import logging

import click

from inlinestyle import __version__


@click.group()
@click.version_option(version=__version__, prog_name="inlinestyle")
@click.option("-v", "--verbose", is_flag=True, help="Log pipeline progress to stderr.")
def cli(verbose: bool) -> None:
    """inlinestyle - inline CSS rules into HTML style attributes."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s"
        )


# Import and register subcommands
from inlinestyle.cli.inline import inline  # noqa: E402
from inlinestyle.cli.rules import rules  # noqa: E402

cli.add_command(inline)
cli.add_command(rules)
