"""Nesting-depth computation: an iterative ascent over parent links."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from nestlint.model.document import Document, Node
from nestlint.options import NestingDepthOptions
from nestlint.rules.policy import is_ignored_at_rule, suppresses_own_level


@dataclass(frozen=True)
class OrphanedNode:
    """Result of an ascent that reached a non-root node without a parent."""

    index: int

    @property
    def message(self) -> str:
        return f"Node {self.index} has no parent; the document tree is malformed"


DepthResult = Union[int, OrphanedNode]


def compute_depth(
    document: Document, node: Node, options: NestingDepthOptions
) -> DepthResult:
    """Count the blocks enclosing *node*, applying the ignore policies.

    Climbing stops without counting the top-level block: a node directly
    under the root, or directly under a top-level at-rule, sits at the
    current level.  An ancestor matching ``ignore_at_rules`` resets the
    whole chain to 0, discarding levels already counted below it.
    """
    level = 0
    current = node
    while True:
        parent = document.parent_of(current)
        if parent is None:
            return OrphanedNode(current.index)

        if is_ignored_at_rule(parent, options):
            return 0

        if parent.is_root:
            return level
        if parent.is_at_rule:
            grandparent = document.parent_of(parent)
            if grandparent is not None and grandparent.is_root:
                return level

        if not suppresses_own_level(document, current, options):
            level += 1
        current = parent


class MalformedDocumentError(Exception):
    """Raised when the nesting-depth ascent finds a broken document tree."""

    def __init__(self, orphan: OrphanedNode) -> None:
        self.node_index = orphan.index
        super().__init__(orphan.message)
