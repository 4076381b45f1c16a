"""Command-line interface for nnuepack using Click command groups."""

from __future__ import annotations

from typing import NoReturn
import logging

import click

from nnuepack import __version__


@click.group()
@click.version_option(version=__version__)
@click.option("verbose", "-v", "--verbose", count=True, help="Increase log verbosity (-v info, -vv debug)")
def cli(verbose: int) -> None:
    """nnuepack: oracle-search arithmetic coding for quantized network weights."""

    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


# Register subcommands
from nnuepack.commands.compress import compress  # noqa: E402
from nnuepack.commands.decompress import decompress  # noqa: E402
from nnuepack.commands.estimate import estimate  # noqa: E402

cli.add_command(compress)
cli.add_command(decompress)
cli.add_command(estimate)


def main() -> NoReturn:
    """Entry point for the CLI."""
    cli()
