"""Document model: an arena-backed stylesheet tree.

Every node lives in ``Document.nodes`` and refers to its parent by index.
Children are tracked per parent in insertion order.  A node can only be
added under a parent that already exists, so the tree is acyclic by
construction.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum


class NodeKind(Enum):
    """The variants a stylesheet node can take."""

    ROOT = "root"
    AT_RULE = "atrule"
    RULE = "rule"
    DECLARATION = "decl"


@dataclass(frozen=True)
class Position:
    """1-based source location of a statement."""

    line: int = 1
    column: int = 1


@dataclass(frozen=True)
class Node:
    """A single node in the stylesheet tree.

    Only the fields relevant to ``kind`` are populated: ``name`` and
    ``params`` for at-rules, ``selector`` for rules, ``prop``, ``value``
    and ``important`` for declarations.
    """

    index: int
    kind: NodeKind
    parent: int | None = None
    position: Position = field(default_factory=Position)
    name: str = ""
    params: str = ""
    selector: str = ""
    prop: str = ""
    value: str = ""
    important: bool = False
    has_block: bool = False

    def __post_init__(self) -> None:
        if self.kind is NodeKind.ROOT and self.parent is not None:
            raise ValueError("The root node cannot have a parent")

    @property
    def is_root(self) -> bool:
        return self.kind is NodeKind.ROOT

    @property
    def is_at_rule(self) -> bool:
        return self.kind is NodeKind.AT_RULE

    @property
    def is_rule(self) -> bool:
        return self.kind is NodeKind.RULE

    @property
    def is_declaration(self) -> bool:
        return self.kind is NodeKind.DECLARATION

    @property
    def label(self) -> str:
        """Return a short human-readable description of the node."""
        if self.is_at_rule:
            return f"@{self.name} {self.params}".rstrip()
        if self.is_rule:
            return self.selector
        if self.is_declaration:
            return f"{self.prop}: {self.value}"
        return "<root>"


@dataclass
class Document:
    """A parsed stylesheet: the node arena plus child lists."""

    source_name: str | None = None
    nodes: list[Node] = field(default_factory=list)
    _children: dict[int, list[int]] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        if not self.nodes:
            self.nodes.append(Node(index=0, kind=NodeKind.ROOT))
            self._children[0] = []

    @property
    def root(self) -> Node:
        return self.nodes[0]

    def add_node(self, kind: NodeKind, parent: Node, **attrs: object) -> Node:
        """Append a node of *kind* as the last child of *parent*."""
        if kind is NodeKind.ROOT:
            raise ValueError("A document has exactly one root node")
        if parent.index >= len(self.nodes) or self.nodes[parent.index] is not parent:
            raise ValueError(f"Parent node {parent.index} does not belong to this document")
        if parent.is_declaration:
            raise ValueError("Declarations cannot contain other nodes")
        node = Node(index=len(self.nodes), kind=kind, parent=parent.index, **attrs)  # type: ignore[arg-type]
        self.nodes.append(node)
        self._children[node.index] = []
        self._children[parent.index].append(node.index)
        return node

    def parent_of(self, node: Node) -> Node | None:
        """Return the parent of *node*, or None for the root."""
        if node.parent is None:
            return None
        return self.nodes[node.parent]

    def children_of(self, node: Node) -> list[Node]:
        """Return the direct children of *node* in insertion order."""
        return [self.nodes[i] for i in self._children.get(node.index, [])]

    def walk(self) -> Iterator[Node]:
        """Yield every non-root node in document (pre-)order."""
        stack = list(reversed(self._children[0]))
        while stack:
            index = stack.pop()
            yield self.nodes[index]
            stack.extend(reversed(self._children[index]))

    def walk_rules(self) -> Iterator[Node]:
        """Yield style rules in document order."""
        return (n for n in self.walk() if n.is_rule)

    def walk_at_rules(self) -> Iterator[Node]:
        """Yield at-rules in document order."""
        return (n for n in self.walk() if n.is_at_rule)

    def tree_depth(self, node: Node) -> int:
        """Return the raw number of ancestors of *node*, root excluded."""
        depth = 0
        current = self.parent_of(node)
        while current is not None and not current.is_root:
            depth += 1
            current = self.parent_of(current)
        return depth

    def __len__(self) -> int:
        return len(self.nodes)
