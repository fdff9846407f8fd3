from nestlint.rules import max_nesting_depth
from nestlint.rules.registry import RegisteredRule, RuleRegistry


def default_registry() -> RuleRegistry:
    """Build a registry holding every built-in rule."""
    registry = RuleRegistry()
    max_nesting_depth.register(registry)
    return registry


__all__ = ["RegisteredRule", "RuleRegistry", "default_registry"]
