"""Linter: parse a stylesheet and run the configured rules against it."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from nestlint.config import ConfigError, LintConfig
from nestlint.model.diagnostic import Diagnostic
from nestlint.model.document import Document
from nestlint.options import InvalidOptionError
from nestlint.parser import parse_stylesheet
from nestlint.rules import RuleRegistry, default_registry

logger = logging.getLogger(__name__)


@dataclass
class LintResult:
    """Outcome of linting one source.

    ``invalid_option_warnings`` holds option problems for rules that were
    skipped because their configuration did not validate.
    """

    source_name: str | None = None
    diagnostics: list[Diagnostic] = field(default_factory=list)
    invalid_option_warnings: list[str] = field(default_factory=list)

    @property
    def errored(self) -> bool:
        return bool(self.invalid_option_warnings) or any(
            d.is_error for d in self.diagnostics
        )

    @property
    def errors(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.is_error]

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.is_warning]


def lint_document(
    document: Document,
    config: LintConfig,
    registry: RuleRegistry | None = None,
) -> LintResult:
    """Run every rule named in *config* against an already parsed *document*.

    Raises :class:`ConfigError` for a rule name the registry does not know.
    """
    registry = registry or default_registry()
    result = LintResult(source_name=document.source_name)

    for name, setting in config.rules.items():
        rule = registry.get(name)
        if rule is None:
            raise ConfigError(f'Unknown rule "{name}"')
        try:
            options = rule.options(setting.primary, setting.secondary)
        except InvalidOptionError as exc:
            for problem in exc.problems:
                logger.warning("%s", problem)
            result.invalid_option_warnings.extend(exc.problems)
            continue

        logger.debug("Running %s on %s", name, document.source_name or "<input>")
        found = rule.check(document, options)
        logger.debug("%s reported %d problem(s)", name, len(found))
        result.diagnostics.extend(found)

    return result


def lint(
    source: str,
    config: LintConfig,
    registry: RuleRegistry | None = None,
    source_name: str | None = None,
) -> LintResult:
    """Parse *source* and lint it.

    Raises :class:`~nestlint.parser.ParseError` when the source does not parse.
    """
    document = parse_stylesheet(source, source_name=source_name)
    return lint_document(document, config, registry=registry)
