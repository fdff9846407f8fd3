"""Lint configuration: which rules run, with which raw options."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


class ConfigError(Exception):
    """Raised when a configuration file cannot be read or has the wrong shape."""


@dataclass(frozen=True)
class RuleSetting:
    """Raw (primary, secondary) options for one rule, as found in a config."""

    primary: Any
    secondary: Mapping[str, Any] | None = None

    @classmethod
    def from_raw(cls, raw: Any) -> RuleSetting:
        """Accept ``primary`` or ``[primary]`` or ``[primary, secondary]``."""
        if isinstance(raw, list):
            if len(raw) == 1:
                return cls(raw[0])
            if len(raw) == 2:
                return cls(raw[0], raw[1])
            raise ConfigError(f"Expected [primary, secondary], got a list of {len(raw)}")
        return cls(raw)


@dataclass(frozen=True)
class LintConfig:
    """Rule settings keyed by rule name, in configuration order."""

    rules: dict[str, RuleSetting] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> LintConfig:
        """Build a config from ``{"rules": {name: options}}``.

        A rule set to ``null`` is disabled and left out.
        """
        raw_rules = data.get("rules", {})
        if not isinstance(raw_rules, Mapping):
            raise ConfigError('"rules" must be an object mapping rule names to options')
        rules = {
            name: RuleSetting.from_raw(raw)
            for name, raw in raw_rules.items()
            if raw is not None
        }
        return cls(rules=rules)

    @classmethod
    def load(cls, path: Path) -> LintConfig:
        """Load a JSON configuration file."""
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise ConfigError(f"Cannot read config {path}: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Invalid JSON in config {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigError(f"Config {path} must contain a JSON object")
        return cls.from_dict(data)

    def with_rule(self, name: str, setting: RuleSetting) -> LintConfig:
        """Return a copy with *name* set to *setting*."""
        rules = dict(self.rules)
        rules[name] = setting
        return LintConfig(rules=rules)
