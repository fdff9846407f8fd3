"""nestlint CLI entry point: Click group with subcommands."""

import click

from nestlint import __version__


@click.group()
@click.version_option(version=__version__, prog_name="nestlint")
def cli() -> None:
    """nestlint - limit how deeply rules and at-rules nest in stylesheets."""


# Import and register subcommands
from nestlint.cli.lint import lint  # noqa: E402
from nestlint.cli.inspect import inspect  # noqa: E402

cli.add_command(lint)
cli.add_command(inspect)
