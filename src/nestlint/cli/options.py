"""Shared click options for the max-nesting-depth rule."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

import click

from nestlint.config import RuleSetting
from nestlint.options import canonical_option_name

IGNORE_CHOICES = ["blockless-at-rules", "pseudo"]


def rule_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Decorate a command with --max-depth and the ignore options."""
    decorators = [
        click.option(
            "--max-depth",
            type=click.IntRange(min=0),
            default=None,
            help="Maximum allowed nesting depth",
        ),
        click.option(
            "--ignore",
            multiple=True,
            type=click.Choice(IGNORE_CHOICES),
            help="Construct whose own level is not counted (repeatable)",
        ),
        click.option(
            "--ignore-at-rule",
            multiple=True,
            help="At-rule name (or /regex/) to ignore entirely (repeatable)",
        ),
        click.option(
            "--ignore-pseudo",
            multiple=True,
            help="Pseudo-class (or /regex/) whose &:rules are not counted (repeatable)",
        ),
    ]
    for decorator in reversed(decorators):
        func = decorator(func)
    return func


def _override(secondary: dict[str, Any], name: str, values: tuple[str, ...]) -> None:
    for key in [k for k in secondary if canonical_option_name(k) == name]:
        del secondary[key]
    secondary[name] = list(values)


def merge_setting(
    base: RuleSetting | None,
    max_depth: int | None,
    ignore: tuple[str, ...],
    ignore_at_rule: tuple[str, ...],
    ignore_pseudo: tuple[str, ...],
) -> RuleSetting | None:
    """Overlay command-line values on a configured rule setting.

    Each command-line list replaces the configured one, whichever alias
    the config spells it with.  Returns None when neither the config nor
    the command line sets a maximum depth.
    """
    if base is None and max_depth is None:
        return None
    primary = max_depth if max_depth is not None else base.primary  # type: ignore[union-attr]
    if base is not None and base.secondary is not None:
        if not isinstance(base.secondary, Mapping):
            # Left for option validation to report.
            return RuleSetting(primary, base.secondary)
        secondary: dict[str, Any] = dict(base.secondary)
    else:
        secondary = {}
    for name, values in (
        ("ignore", ignore),
        ("ignoreAtRules", ignore_at_rule),
        ("ignorePseudo", ignore_pseudo),
    ):
        if values:
            _override(secondary, name, values)
    return RuleSetting(primary, secondary or None)
