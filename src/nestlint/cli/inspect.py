"""CLI command: nestlint inspect -- show the nesting depth of every block."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from nestlint.cli.options import merge_setting, rule_options
from nestlint.options import InvalidOptionError, NestingDepthOptions
from nestlint.parser import ParseError, parse_stylesheet
from nestlint.rules.max_nesting_depth import is_checked, statement_depth


@click.command()
@click.argument("stylesheet", type=click.Path(exists=True, dir_okay=False))
@rule_options
def inspect(
    stylesheet: str,
    max_depth: int | None,
    ignore: tuple[str, ...],
    ignore_at_rule: tuple[str, ...],
    ignore_pseudo: tuple[str, ...],
) -> None:
    """Parse a stylesheet and display each block with its nesting depth.

    Blocks the rule does not check are shown as skipped.  With
    --max-depth, blocks over the limit are marked.
    """
    path = Path(stylesheet)

    try:
        source = path.read_text(encoding="utf-8")
        document = parse_stylesheet(source, source_name=str(path))
    except ParseError as exc:
        click.echo(f"Parse error: {exc}", err=True)
        sys.exit(1)

    setting = merge_setting(
        None, max_depth if max_depth is not None else 0,
        ignore, ignore_at_rule, ignore_pseudo,
    )
    try:
        options = NestingDepthOptions.from_config(setting.primary, setting.secondary)  # type: ignore[union-attr]
    except InvalidOptionError as exc:
        click.echo(f"Invalid option: {exc}", err=True)
        sys.exit(1)

    click.echo(f"Stylesheet: {path.name}")
    click.echo(f"Nodes: {len(document) - 1}")
    click.echo()

    over = 0
    for node in document.walk():
        if node.is_declaration:
            continue
        indent = "  " * (document.tree_depth(node) + 1)
        parts = [f"{indent}{node.label}", f"line={node.position.line}"]
        if is_checked(node, options):
            depth = statement_depth(document, node, options)
            parts.append(f"depth={depth}")
            if max_depth is not None and depth > max_depth:
                parts.append("!")
                over += 1
        else:
            parts.append("skipped")
        click.echo("  ".join(parts))

    if max_depth is not None:
        click.echo()
        click.echo(f"Over limit ({max_depth}): {over}")
