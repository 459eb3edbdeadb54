"""CSS selector subset for element lookup.

Supported: type (``div``, ``*``), ``#id``, ``.class``, ``[attr]``,
``[attr=value]``, compound selectors, the descendant (space) and child
(``>``) combinators, and comma-separated groups. Parsed selectors are
cached.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING

from roost.errors import DOMError

if TYPE_CHECKING:
    from roost.dom.nodes import Element, Node

_SIMPLE_RE = re.compile(
    r"""
    (?P<tag>\*|[a-zA-Z][\w-]*)
    | \#(?P<id>[\w-]+)
    | \.(?P<cls>[\w-]+)
    | \[\s*(?P<attr>[\w:-]+)\s*(?:=\s*(?:"(?P<dq>[^"]*)"|'(?P<sq>[^']*)'|(?P<bare>[^\]\s]+))\s*)?\]
    """,
    re.VERBOSE,
)


@dataclass(frozen=True, slots=True)
class Compound:
    """One compound selector, e.g. ``div#main.wide[data-x]``."""

    tag: str | None = None
    id: str | None = None
    classes: tuple[str, ...] = ()
    attrs: tuple[tuple[str, str | None], ...] = ()

    def matches(self, el: Element) -> bool:
        if self.tag is not None and self.tag != "*" and el.tag != self.tag:
            return False
        if self.id is not None and el.id != self.id:
            return False
        if self.classes:
            have = el.class_list
            if any(c not in have for c in self.classes):
                return False
        for name, value in self.attrs:
            actual = el.attrs.get(name)
            if actual is None or (value is not None and actual != value):
                return False
        return True


# A complex selector: compounds paired with the combinator to their left.
# The first entry's combinator is always "".
type Complex = tuple[tuple[str, Compound], ...]


# Whitespace, or a child/group separator with optional surrounding whitespace
_SEPARATOR_RE = re.compile(r"\s*([>,])\s*|\s+")


def _tokenize(selector: str) -> list[re.Match[str] | str]:
    """Split into simple-selector matches and separators (" ", ">", ",")."""
    text = selector.strip()
    tokens: list[re.Match[str] | str] = []
    pos = 0
    while pos < len(text):
        m = _SIMPLE_RE.match(text, pos)
        if m is not None:
            tokens.append(m)
            pos = m.end()
            continue
        sep = _SEPARATOR_RE.match(text, pos)
        if sep is None:
            msg = f"Unsupported selector: {selector!r}"
            raise DOMError(msg)
        tokens.append(sep.group(1) or " ")
        pos = sep.end()
    return tokens


def _build_compound(run: list[re.Match[str]], selector: str) -> Compound:
    tag: str | None = None
    ident: str | None = None
    classes: list[str] = []
    attrs: list[tuple[str, str | None]] = []
    for i, m in enumerate(run):
        if m.group("tag"):
            if i != 0:
                msg = f"Type selector must come first: {selector!r}"
                raise DOMError(msg)
            tag = m.group("tag").lower()
        elif m.group("id"):
            ident = m.group("id")
        elif m.group("cls"):
            classes.append(m.group("cls"))
        else:
            value = m.group("dq")
            if value is None:
                value = m.group("sq")
            if value is None:
                value = m.group("bare")
            attrs.append((m.group("attr").lower(), value))
    return Compound(tag, ident, tuple(classes), tuple(attrs))


@lru_cache(maxsize=256)
def parse_selector(selector: str) -> tuple[Complex, ...]:
    """Parse a selector group into complex selectors."""
    groups: list[Complex] = []
    parts: list[tuple[str, Compound]] = []
    run: list[re.Match[str]] = []
    combinator = ""
    # Trailing "," closes the last group
    for token in [*_tokenize(selector), ","]:
        if isinstance(token, re.Match):
            run.append(token)
            continue
        if run:
            parts.append((combinator, _build_compound(run, selector)))
            run = []
            combinator = ""
        if not parts or combinator:
            msg = f"Empty or dangling selector: {selector!r}"
            raise DOMError(msg)
        if token == ",":
            groups.append(tuple(parts))
            parts = []
        else:
            combinator = token
    return tuple(groups)


def _matches_complex(el: Element, parts: Complex, scope: Node) -> bool:
    """Right-to-left match; ancestors are only searched inside *scope*."""
    index = len(parts) - 1
    if not parts[index][1].matches(el):
        return False
    node: Node | None = el
    while index > 0:
        combinator = parts[index][0]
        index -= 1
        target = parts[index][1]
        node = node.parent_node if node is not None else None
        if combinator == ">":
            if node is None or node is scope or not _is_element(node) or not target.matches(node):  # type: ignore[arg-type]
                return False
            continue
        while node is not None and node is not scope:
            if _is_element(node) and target.matches(node):  # type: ignore[arg-type]
                break
            node = node.parent_node
        else:
            return False
    return True


def _is_element(node: Node) -> bool:
    from roost.dom.nodes import Element

    return isinstance(node, Element)


def matches(el: Element, selector: str, scope: Node | None = None) -> bool:
    """True when *el* matches *selector*."""
    root = scope if scope is not None else el.root()
    return any(_matches_complex(el, parts, root) for parts in parse_selector(selector))


def select(selector: str, scope: Node) -> list[Element]:
    """All descendants of *scope* matching *selector*, in document order."""
    groups = parse_selector(selector)
    return [
        el
        for el in scope.iter_elements()
        if any(_matches_complex(el, parts, scope) for parts in groups)
    ]
