"""Tests for selector splitting, pseudo detection and syntax checks."""

import re

import pytest

from nestlint.model.document import Node, NodeKind
from nestlint.options import Literal, Pattern, parse_matcher
from nestlint.selectors import (
    is_pseudo_only,
    is_standard_syntax_rule,
    is_standard_syntax_selector,
    matches_ignored_pseudo,
    pseudo_suffix_of,
    split_selector,
)


# ---------------------------------------------------------------------------
# split_selector
# ---------------------------------------------------------------------------


class TestSplitSelector:
    def test_single(self):
        assert split_selector("a") == ["a"]

    def test_commas(self):
        assert split_selector("a, b ,c") == ["a", "b", "c"]

    def test_whitespace_collapsed(self):
        assert split_selector("a\n   >  b,\n\tc") == ["a > b", "c"]

    def test_commas_in_parens_kept(self):
        assert split_selector("&:not(.a, .b), &:hover") == ["&:not(.a, .b)", "&:hover"]

    def test_commas_in_brackets_and_strings_kept(self):
        assert split_selector('a[title="x,y"], b') == ['a[title="x,y"]', "b"]

    def test_commas_in_interpolation_kept(self):
        assert split_selector("#{$a, $b}, c") == ["#{$a, $b}", "c"]

    def test_empty_parts_dropped(self):
        assert split_selector("a,,b,") == ["a", "b"]


# ---------------------------------------------------------------------------
# Pseudo classification
# ---------------------------------------------------------------------------


class TestPseudoSuffix:
    def test_parent_pseudo(self):
        assert pseudo_suffix_of("&:hover") == "hover"

    def test_pseudo_element(self):
        assert pseudo_suffix_of("&::before") == ":before"

    def test_remainder_accepted_as_is(self):
        assert pseudo_suffix_of("&:hover .icon") == "hover .icon"

    def test_no_marker(self):
        assert pseudo_suffix_of("a:hover") is None
        assert pseudo_suffix_of("& :hover") is None
        assert pseudo_suffix_of("&.active") is None

    def test_bare_marker_has_empty_suffix(self):
        assert pseudo_suffix_of("&:") == ""


class TestIsPseudoOnly:
    def test_single(self):
        assert is_pseudo_only("&:hover")

    def test_all_components(self):
        assert is_pseudo_only("&:hover, &:focus-visible")

    def test_mixed(self):
        assert not is_pseudo_only("&:hover, .active")

    def test_plain(self):
        assert not is_pseudo_only("a")

    def test_bare_marker_is_not_pseudo(self):
        assert not is_pseudo_only("&:")
        assert not is_pseudo_only("&:hover, &:")


class TestMatchesIgnoredPseudo:
    def test_literal(self):
        assert matches_ignored_pseudo("&:hover", [Literal("hover")])

    def test_literal_is_exact(self):
        assert not matches_ignored_pseudo("&:hover-ish", [Literal("hover")])

    def test_pattern(self):
        assert matches_ignored_pseudo("&:nth-child(2)", [parse_matcher("/^nth-/")])

    def test_compiled_pattern(self):
        assert matches_ignored_pseudo("&:FOCUS", [Pattern(re.compile("focus", re.I))])

    def test_not_pseudo(self):
        assert not matches_ignored_pseudo("a:hover", [Literal("hover")])

    def test_no_patterns(self):
        assert not matches_ignored_pseudo("&:hover", [])

    def test_bare_marker_never_matches(self):
        assert not matches_ignored_pseudo("&:", [parse_matcher("/.*/")])


# ---------------------------------------------------------------------------
# Standard syntax
# ---------------------------------------------------------------------------


class TestStandardSyntax:
    @pytest.mark.parametrize(
        "selector",
        [
            "a",
            ".card > .title",
            "&:hover",
            "a:not(.b)",
            "input[type=text]",
            "&::before",
        ],
    )
    def test_standard(self, selector):
        assert is_standard_syntax_selector(selector)

    @pytest.mark.parametrize(
        "selector",
        [
            ".icon-#{$name}",
            ".col-@{size}",
            ".a-$(var)",
            "%placeholder",
            "font:",
            "&:extend(.b all)",
            ".mixin().child",
            ".mixin()",
            ".mixin(@color: red)",
            "<% if x %>",
            "a // comment",
        ],
    )
    def test_non_standard(self, selector):
        assert not is_standard_syntax_selector(selector)

    def test_rule_node(self):
        node = Node(index=1, kind=NodeKind.RULE, parent=0, selector="%ph")
        assert not is_standard_syntax_rule(node)
        ok = Node(index=1, kind=NodeKind.RULE, parent=0, selector=".ok")
        assert is_standard_syntax_rule(ok)

    def test_at_rule_is_not_a_standard_rule(self):
        node = Node(index=1, kind=NodeKind.AT_RULE, parent=0, name="media")
        assert not is_standard_syntax_rule(node)
