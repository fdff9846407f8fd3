"""Rule options: literal-or-pattern matchers and the max-nesting-depth record.

Raw options arrive in the stylelint shape::

    2
    [2, {"ignore": ["pseudo"], "ignoreAtRules": ["media", "/^supports/i"]}]

and are validated and shaped once per run into an immutable
:class:`NestingDepthOptions`.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from nestlint.model.diagnostic import Severity

RULE_NAME = "max-nesting-depth"

# "/body/flags" strings are treated as regular expressions.
_PATTERN_STRING_RE = re.compile(r"^/(?P<body>.+)/(?P<flags>[gimsuy]*)$", re.DOTALL)

_REGEX_FLAGS = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
}


class InvalidOptionError(Exception):
    """Raised when a rule's primary or secondary options are invalid."""

    def __init__(self, rule: str, problems: list[str]) -> None:
        self.rule = rule
        self.problems = problems
        super().__init__("; ".join(problems))


# ---------------------------------------------------------------------------
# Matchers
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Literal:
    """Matches text that is exactly equal to ``value``."""

    value: str

    def matches(self, text: str) -> bool:
        return text == self.value

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Pattern:
    """Matches text in which ``regex`` finds a match anywhere."""

    regex: re.Pattern[str]

    def matches(self, text: str) -> bool:
        return self.regex.search(text) is not None

    def __str__(self) -> str:
        return f"/{self.regex.pattern}/"


Matcher = Union[Literal, Pattern]


def parse_matcher(raw: str | re.Pattern[str]) -> Matcher:
    """Build a matcher from a string, a ``/regex/flags`` string or a compiled pattern.

    Raises ValueError for anything else or for an invalid regular expression.
    """
    if isinstance(raw, re.Pattern):
        return Pattern(raw)
    if not isinstance(raw, str):
        raise ValueError(f"expected a string or pattern, got {type(raw).__name__}")
    match = _PATTERN_STRING_RE.match(raw)
    if match is None:
        return Literal(raw)
    flags = 0
    for flag in match.group("flags"):
        flags |= _REGEX_FLAGS.get(flag, 0)
    try:
        return Pattern(re.compile(match.group("body"), flags))
    except re.error as exc:
        raise ValueError(f"invalid regular expression {raw!r}: {exc}") from exc


def matches_any(text: str, matchers: Iterable[Matcher]) -> bool:
    """Return True if at least one matcher accepts *text*."""
    return any(m.matches(text) for m in matchers)


# ---------------------------------------------------------------------------
# max-nesting-depth options
# ---------------------------------------------------------------------------


class IgnoreKind(Enum):
    """Constructs whose own nesting level can be left out of the count."""

    BLOCKLESS_AT_RULES = "blockless-at-rules"
    PSEUDO = "pseudo"


_IGNORE_ALIASES = {
    "blockless-at-rules": IgnoreKind.BLOCKLESS_AT_RULES,
    "blockless-conditionals": IgnoreKind.BLOCKLESS_AT_RULES,
    "pseudo": IgnoreKind.PSEUDO,
    "pseudo-only": IgnoreKind.PSEUDO,
}

# Accepted secondary option names, mapped to their canonical name.
_SECONDARY_NAMES = {
    "ignore": "ignore",
    "ignoreAtRules": "ignoreAtRules",
    "ignoredConditionalNames": "ignoreAtRules",
    "ignorePseudo": "ignorePseudo",
    "ignoredPseudoClasses": "ignorePseudo",
    "severity": "severity",
}


def canonical_option_name(name: str) -> str | None:
    """Return the canonical spelling of a secondary option name, or None."""
    return _SECONDARY_NAMES.get(name)


def _as_list(value: Any) -> list[Any]:
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def _invalid_value(value: object, name: str | None = None) -> str:
    where = f' for "{name}"' if name else ""
    return f'Invalid option value "{value}"{where} for rule "{RULE_NAME}"'


@dataclass(frozen=True)
class NestingDepthOptions:
    """Validated, immutable options for the max-nesting-depth rule."""

    max_depth: int
    ignore: frozenset[IgnoreKind] = frozenset()
    ignore_at_rules: tuple[Matcher, ...] = ()
    ignore_pseudo_classes: tuple[Matcher, ...] = ()
    severity: Severity = Severity.ERROR

    def __post_init__(self) -> None:
        if self.max_depth < 0:
            raise ValueError("max_depth must be non-negative")

    def ignores(self, kind: IgnoreKind) -> bool:
        return kind in self.ignore

    @classmethod
    def from_config(
        cls, primary: Any, secondary: Mapping[str, Any] | None = None
    ) -> NestingDepthOptions:
        """Validate raw stylelint-style options and build the record.

        Every problem found is collected; :class:`InvalidOptionError` is
        raised with all of them if there is at least one.
        """
        problems: list[str] = []

        max_depth = 0
        if isinstance(primary, bool) or not isinstance(primary, int) or primary < 0:
            problems.append(_invalid_value(primary))
        else:
            max_depth = primary

        ignore: set[IgnoreKind] = set()
        at_rules: list[Matcher] = []
        pseudo: list[Matcher] = []
        severity = Severity.ERROR

        if secondary is not None and not isinstance(secondary, Mapping):
            problems.append(_invalid_value(secondary))
            secondary = None

        for raw_name, value in (secondary or {}).items():
            name = canonical_option_name(raw_name)
            if name is None:
                problems.append(f'Invalid option name "{raw_name}" for rule "{RULE_NAME}"')
                continue

            if name == "ignore":
                for item in _as_list(value):
                    kind = _IGNORE_ALIASES.get(item) if isinstance(item, str) else None
                    if kind is None:
                        problems.append(_invalid_value(item, raw_name))
                    else:
                        ignore.add(kind)

            elif name == "severity":
                try:
                    severity = Severity(value)
                except ValueError:
                    problems.append(_invalid_value(value, raw_name))

            else:
                target = at_rules if name == "ignoreAtRules" else pseudo
                for item in _as_list(value):
                    try:
                        target.append(parse_matcher(item))
                    except ValueError:
                        problems.append(_invalid_value(item, raw_name))

        if problems:
            raise InvalidOptionError(RULE_NAME, problems)

        return cls(
            max_depth=max_depth,
            ignore=frozenset(ignore),
            ignore_at_rules=tuple(at_rules),
            ignore_pseudo_classes=tuple(pseudo),
            severity=severity,
        )
