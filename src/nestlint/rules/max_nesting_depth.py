"""The max-nesting-depth rule.

Reports every rule and at-rule block nested deeper than the configured
maximum::

    a { b { c { } } }   /* c is at depth 2 */
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from nestlint.model.diagnostic import Diagnostic
from nestlint.model.document import Document, Node
from nestlint.options import RULE_NAME, NestingDepthOptions
from nestlint.rules.depth import MalformedDocumentError, OrphanedNode, compute_depth
from nestlint.rules.policy import is_ignored_at_rule
from nestlint.rules.registry import RuleRegistry
from nestlint.selectors import is_standard_syntax_rule

logger = logging.getLogger(__name__)


def expected_message(max_depth: int) -> str:
    return f"Expected nesting depth to be no more than {max_depth}"


def _candidates(document: Document) -> Iterator[Node]:
    # All rules first, then all at-rules, each in document order.
    yield from document.walk_rules()
    yield from document.walk_at_rules()


def is_checked(node: Node, options: NestingDepthOptions) -> bool:
    """Return False for statements the rule leaves alone."""
    if is_ignored_at_rule(node, options):
        return False
    if not node.has_block:
        return False
    if node.is_rule and not is_standard_syntax_rule(node):
        return False
    return True


def statement_depth(document: Document, node: Node, options: NestingDepthOptions) -> int:
    """Return the nesting depth of *node*.

    Raises :class:`MalformedDocumentError` if the ascent finds a node
    without a parent.
    """
    result = compute_depth(document, node, options)
    if isinstance(result, OrphanedNode):
        raise MalformedDocumentError(result)
    return result


def check_max_nesting_depth(
    document: Document, options: NestingDepthOptions
) -> list[Diagnostic]:
    """Report blocks nested deeper than ``options.max_depth``."""
    diagnostics: list[Diagnostic] = []
    for node in _candidates(document):
        if not is_checked(node, options):
            logger.debug("Skipping %s at line %d", node.label, node.position.line)
            continue
        depth = statement_depth(document, node, options)
        if depth > options.max_depth:
            diagnostics.append(
                Diagnostic(
                    rule=RULE_NAME,
                    severity=options.severity,
                    message=expected_message(options.max_depth),
                    line=node.position.line,
                    column=node.position.column,
                    source_name=document.source_name,
                )
            )
    return diagnostics


def register(registry: RuleRegistry) -> None:
    """Add the max-nesting-depth rule to *registry*."""
    registry.register(
        RULE_NAME,
        check_max_nesting_depth,
        options=NestingDepthOptions.from_config,
        description="Limit the depth of nesting of rules and at-rules.",
    )
