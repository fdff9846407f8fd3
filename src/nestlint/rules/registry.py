"""Rule registry: definitions, registration, and lookup."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from nestlint.model.diagnostic import Diagnostic
from nestlint.model.document import Document

# (document, options) -> diagnostics
RuleCheck = Callable[[Document, Any], list[Diagnostic]]
# (primary, secondary) -> validated options; raises InvalidOptionError
OptionsFactory = Callable[..., Any]


@dataclass(frozen=True)
class RegisteredRule:
    """A lint rule paired with the factory that validates its options."""

    name: str
    check: RuleCheck
    options: OptionsFactory
    description: str = ""


class RuleRegistry:
    """Registry of lint rules available to the linter.

    Latest-wins on name collision. Insertion-order stable.
    """

    def __init__(self) -> None:
        self._rules: dict[str, RegisteredRule] = {}

    def register(
        self,
        name: str,
        check: RuleCheck,
        options: OptionsFactory,
        description: str = "",
    ) -> None:
        """Register a rule. Overwrites any existing rule with the same name."""
        self._rules[name] = RegisteredRule(
            name=name, check=check, options=options, description=description
        )

    def unregister(self, name: str) -> None:
        """Remove a rule by name. No-op if not found."""
        self._rules.pop(name, None)

    def get(self, name: str) -> RegisteredRule | None:
        """Look up a registered rule by name."""
        return self._rules.get(name)

    def names(self) -> list[str]:
        """Return all registered rule names in registration order."""
        return list(self._rules.keys())

    def __contains__(self, name: object) -> bool:
        return name in self._rules
