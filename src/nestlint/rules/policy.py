"""Ignore policies for the nesting-depth count."""

from __future__ import annotations

from nestlint.model.document import Document, Node
from nestlint.options import IgnoreKind, NestingDepthOptions, matches_any
from nestlint.selectors import is_pseudo_only, matches_ignored_pseudo, split_selector


def is_ignored_at_rule(node: Node, options: NestingDepthOptions) -> bool:
    """True if *node* is an at-rule whose name is listed in ``ignore_at_rules``."""
    return node.is_at_rule and matches_any(node.name, options.ignore_at_rules)


def is_blockless_at_rule(document: Document, node: Node) -> bool:
    """True if *node* is an at-rule without direct declaration children."""
    return node.is_at_rule and not any(
        child.is_declaration for child in document.children_of(node)
    )


def _has_ignored_pseudo_classes_only(node: Node, options: NestingDepthOptions) -> bool:
    if not options.ignore_pseudo_classes:
        return False
    components = split_selector(node.selector)
    return bool(components) and all(
        matches_ignored_pseudo(c, options.ignore_pseudo_classes) for c in components
    )


def suppresses_own_level(
    document: Document, node: Node, options: NestingDepthOptions
) -> bool:
    """Return True if *node* should not add a level to the nesting depth.

    The node is still climbed through; only its own level is not counted.
    """
    if options.ignores(IgnoreKind.BLOCKLESS_AT_RULES) and is_blockless_at_rule(
        document, node
    ):
        return True
    if not node.is_rule:
        return False
    if options.ignores(IgnoreKind.PSEUDO) and is_pseudo_only(node.selector):
        return True
    return _has_ignored_pseudo_classes_only(node, options)
