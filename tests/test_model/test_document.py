"""Tests for the arena-backed document model and diagnostics."""

import pytest

from nestlint.model import Diagnostic, Document, Node, NodeKind, Position, Severity


def _small_document() -> Document:
    """a { color: red; b { } }  @media print { c { } }"""
    doc = Document(source_name="small.css")
    a = doc.add_node(NodeKind.RULE, doc.root, selector="a", has_block=True)
    doc.add_node(NodeKind.DECLARATION, a, prop="color", value="red")
    doc.add_node(NodeKind.RULE, a, selector="b", has_block=True)
    media = doc.add_node(
        NodeKind.AT_RULE, doc.root, name="media", params="print", has_block=True
    )
    doc.add_node(NodeKind.RULE, media, selector="c", has_block=True)
    return doc


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


class TestConstruction:
    def test_new_document_has_only_root(self):
        doc = Document()
        assert len(doc) == 1
        assert doc.root.is_root
        assert doc.root.parent is None

    def test_add_node_links_parent_and_child(self):
        doc = Document()
        rule = doc.add_node(NodeKind.RULE, doc.root, selector="a", has_block=True)
        assert rule.index == 1
        assert rule.parent == 0
        assert doc.parent_of(rule) is doc.root
        assert doc.children_of(doc.root) == [rule]

    def test_children_keep_insertion_order(self):
        doc = _small_document()
        a = doc.children_of(doc.root)[0]
        assert [c.label for c in doc.children_of(a)] == ["color: red", "b"]

    def test_cannot_add_second_root(self):
        doc = Document()
        with pytest.raises(ValueError, match="exactly one root"):
            doc.add_node(NodeKind.ROOT, doc.root)

    def test_cannot_nest_under_declaration(self):
        doc = Document()
        rule = doc.add_node(NodeKind.RULE, doc.root, selector="a", has_block=True)
        decl = doc.add_node(NodeKind.DECLARATION, rule, prop="color", value="red")
        with pytest.raises(ValueError, match="Declarations"):
            doc.add_node(NodeKind.RULE, decl, selector="b")

    def test_parent_must_belong_to_document(self):
        doc = Document()
        other = Document()
        foreign = other.add_node(NodeKind.RULE, other.root, selector="x")
        foreign_b = other.add_node(NodeKind.RULE, foreign, selector="y")
        with pytest.raises(ValueError, match="does not belong"):
            doc.add_node(NodeKind.RULE, foreign_b, selector="z")

    def test_root_with_parent_rejected(self):
        with pytest.raises(ValueError):
            Node(index=0, kind=NodeKind.ROOT, parent=3)


# ---------------------------------------------------------------------------
# Traversal
# ---------------------------------------------------------------------------


class TestTraversal:
    def test_walk_is_pre_order(self):
        doc = _small_document()
        labels = [n.label for n in doc.walk()]
        assert labels == ["a", "color: red", "b", "@media print", "c"]

    def test_walk_skips_root(self):
        doc = _small_document()
        assert all(not n.is_root for n in doc.walk())

    def test_walk_rules(self):
        doc = _small_document()
        assert [n.selector for n in doc.walk_rules()] == ["a", "b", "c"]

    def test_walk_at_rules(self):
        doc = _small_document()
        assert [n.name for n in doc.walk_at_rules()] == ["media"]

    def test_parent_of_root_is_none(self):
        assert Document().parent_of(Document().root) is None

    def test_tree_depth(self):
        doc = _small_document()
        depths = {n.label: doc.tree_depth(n) for n in doc.walk()}
        assert depths == {
            "a": 0,
            "color: red": 1,
            "b": 1,
            "@media print": 0,
            "c": 1,
        }


class TestNodeLabel:
    def test_at_rule_without_params(self):
        node = Node(index=1, kind=NodeKind.AT_RULE, parent=0, name="font-face")
        assert node.label == "@font-face"

    def test_root_label(self):
        assert Document().root.label == "<root>"

    def test_default_position(self):
        assert Node(index=1, kind=NodeKind.RULE, parent=0).position == Position(1, 1)


# ---------------------------------------------------------------------------
# Diagnostic
# ---------------------------------------------------------------------------


class TestDiagnostic:
    def test_str_with_location(self):
        d = Diagnostic(
            rule="max-nesting-depth",
            severity=Severity.ERROR,
            message="Expected nesting depth to be no more than 2",
            line=4,
            column=7,
            source_name="app.scss",
        )
        assert str(d) == (
            "app.scss:4:7: error: Expected nesting depth to be no more than 2"
            " (max-nesting-depth)"
        )

    def test_str_without_location(self):
        d = Diagnostic(rule="r", severity=Severity.WARNING, message="m")
        assert str(d) == "warning: m (r)"

    def test_severity_flags(self):
        err = Diagnostic(rule="r", severity=Severity.ERROR, message="m")
        warn = Diagnostic(rule="r", severity=Severity.WARNING, message="m")
        assert err.is_error and not err.is_warning
        assert warn.is_warning and not warn.is_error
