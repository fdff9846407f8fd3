"""CLI command: nestlint lint -- check stylesheets for deep nesting."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from nestlint.cli.options import merge_setting, rule_options
from nestlint.config import ConfigError, LintConfig
from nestlint.linter import lint as run_lint
from nestlint.model.diagnostic import Diagnostic
from nestlint.options import RULE_NAME
from nestlint.parser import ParseError


@click.command()
@click.argument(
    "files", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False)
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="JSON config file with a top-level \"rules\" object",
)
@rule_options
@click.option("--verbose", is_flag=True, help="Enable debug logging")
def lint(
    files: tuple[str, ...],
    config_path: str | None,
    max_depth: int | None,
    ignore: tuple[str, ...],
    ignore_at_rule: tuple[str, ...],
    ignore_pseudo: tuple[str, ...],
    verbose: bool,
) -> None:
    """Lint stylesheet FILES for rules nested too deeply.

    Prints one line per problem and exits with code 1 if any error was
    found, any file failed to parse, or the rule options are invalid.
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        config = LintConfig.load(Path(config_path)) if config_path else LintConfig()
    except ConfigError as exc:
        click.echo(f"Config error: {exc}", err=True)
        sys.exit(1)

    setting = merge_setting(
        config.rules.get(RULE_NAME), max_depth, ignore, ignore_at_rule, ignore_pseudo
    )
    if setting is None:
        raise click.UsageError(
            f"Set --max-depth or configure \"{RULE_NAME}\" in a --config file."
        )
    config = config.with_rule(RULE_NAME, setting)

    failed = False
    errors: list[Diagnostic] = []
    warnings: list[Diagnostic] = []
    for filename in files:
        path = Path(filename)
        try:
            source = path.read_text(encoding="utf-8")
            result = run_lint(source, config, source_name=str(path))
        except ParseError as exc:
            click.echo(f"{path}: Parse error: {exc}", err=True)
            failed = True
            continue
        except ConfigError as exc:
            click.echo(f"Config error: {exc}", err=True)
            sys.exit(1)

        if result.invalid_option_warnings:
            for warning in result.invalid_option_warnings:
                click.echo(f"Invalid option: {warning}", err=True)
            sys.exit(1)

        for diag in result.diagnostics:
            click.echo(str(diag))
        errors.extend(result.errors)
        warnings.extend(result.warnings)
        failed = failed or result.errored

    if errors or warnings:
        click.echo()
    click.echo(
        f"Summary: {len(errors)} error(s), {len(warnings)} warning(s) "
        f"in {len(files)} file(s)"
    )

    sys.exit(1 if failed else 0)
