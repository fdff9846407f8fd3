"""Selector analysis: splitting, pseudo-only detection and syntax checks.

All helpers work on raw selector text; nothing here parses a full
selector grammar.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from nestlint.model.document import Node
from nestlint.options import Matcher, matches_any

# Parent reference immediately followed by a pseudo-class: "&:hover".
PSEUDO_MARKER = "&:"

_WHITESPACE_RE = re.compile(r"\s+")

_OPENERS = {"(": ")", "[": "]"}

# Less @{var}, PostCSS-simple-vars $(var), SCSS #{var}, template {var}
_LESS_INTERPOLATION_RE = re.compile(r"@\{.+?\}", re.DOTALL)
_PSV_INTERPOLATION_RE = re.compile(r"\$\(.+?\)", re.DOTALL)
_SCSS_INTERPOLATION_RE = re.compile(r"#\{.+?\}", re.DOTALL)
_TPL_INTERPOLATION_RE = re.compile(r"\{.+?\}", re.DOTALL)

_LESS_EXTEND_RE = re.compile(r":extend(\(.*?\))?")
_LESS_MIXIN_CALL_RE = re.compile(r"\.[\w-]+\(.*\).+")
_LESS_PARAMETRIC_MIXIN_RE = re.compile(r"\(@.*\)$")


def split_selector(selector: str) -> list[str]:
    """Split *selector* on top-level commas into normalized components.

    Commas inside parentheses, attribute brackets, strings and
    ``#{}``/``@{}`` interpolations do not split.  Whitespace runs are
    collapsed and empty components are dropped.
    """
    parts: list[str] = []
    closers: list[str] = []
    quote = ""
    start = 0
    i = 0
    while i < len(selector):
        ch = selector[i]
        if quote:
            if ch == "\\":
                i += 1
            elif ch == quote:
                quote = ""
        elif ch in "\"'":
            quote = ch
        elif ch in _OPENERS:
            closers.append(_OPENERS[ch])
        elif ch == "{" and i > 0 and selector[i - 1] in "#@":
            closers.append("}")
        elif closers and ch == closers[-1]:
            closers.pop()
        elif ch == "," and not closers:
            parts.append(selector[start:i])
            start = i + 1
        i += 1
    parts.append(selector[start:])

    normalized = (_WHITESPACE_RE.sub(" ", part).strip() for part in parts)
    return [part for part in normalized if part]


def pseudo_suffix_of(selector: str) -> str | None:
    """Return what follows a leading ``&:`` marker, or None without one.

    Anything after the marker is accepted as-is, including further
    compound parts: ``"&:hover .icon"`` gives ``"hover .icon"``, and a
    bare ``"&:"`` gives ``""``.
    """
    if selector.startswith(PSEUDO_MARKER):
        return selector[len(PSEUDO_MARKER):]
    return None


def is_pseudo_only(selector: str) -> bool:
    """True if every comma-separated component is a ``&:pseudo`` selector.

    A bare ``&:`` names no pseudo-class and does not qualify.
    """
    components = split_selector(selector)
    if not components:
        return False
    return all(pseudo_suffix_of(c) for c in components)


def matches_ignored_pseudo(selector: str, patterns: Iterable[Matcher]) -> bool:
    """True if *selector* is ``&:pseudo`` and the pseudo part matches a pattern."""
    suffix = pseudo_suffix_of(selector)
    if not suffix:
        return False
    return matches_any(suffix, patterns)


def has_interpolation(selector: str) -> bool:
    """Check for Less, SCSS, PostCSS-simple-vars or template interpolation."""
    return bool(
        _LESS_INTERPOLATION_RE.search(selector)
        or _PSV_INTERPOLATION_RE.search(selector)
        or _SCSS_INTERPOLATION_RE.search(selector)
        or _TPL_INTERPOLATION_RE.search(selector)
    )


def is_standard_syntax_selector(selector: str) -> bool:
    """Return False for selectors that use preprocessor-only syntax."""
    if has_interpolation(selector):
        return False
    # SCSS placeholder selectors
    if selector.startswith("%"):
        return False
    # SCSS nested properties
    if selector.endswith(":"):
        return False
    # Less :extend()
    if _LESS_EXTEND_RE.search(selector):
        return False
    # Less mixin with resolved nested selectors, e.g. .foo().bar
    if _LESS_MIXIN_CALL_RE.search(selector):
        return False
    # Less non-outputting mixin definition, e.g. .mixin() {}
    if selector.endswith(")") and ":" not in selector:
        return False
    # Less parametric mixins, e.g. .mixin(@variable: x) {}
    if _LESS_PARAMETRIC_MIXIN_RE.search(selector):
        return False
    # ERB template tags
    if "<%" in selector or "%>" in selector:
        return False
    # SCSS and Less line comments
    if "//" in selector:
        return False
    return True


def is_standard_syntax_rule(node: Node) -> bool:
    """True if *node* is a style rule whose selector is standard syntax."""
    return node.is_rule and is_standard_syntax_selector(node.selector)
