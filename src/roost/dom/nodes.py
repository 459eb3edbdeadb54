"""Mutable HTML node tree.

A small stand-in for the browser DOM: just enough structure for regions
to find their element, tell whether it is attached to a document, and
move view elements in and out of it.
"""

from __future__ import annotations

import html
from collections.abc import Iterator

from roost.errors import DOMError

VOID_ELEMENTS = frozenset(
    {
        "area", "base", "br", "col", "embed", "hr", "img", "input",
        "link", "meta", "param", "source", "track", "wbr",
    }
)


class Node:
    """Base node. Tracks its parent and an ordered list of children."""

    __slots__ = ("child_nodes", "parent_node")

    def __init__(self) -> None:
        self.parent_node: Node | None = None
        self.child_nodes: list[Node] = []

    # -- Tree mutation --

    def append_child(self, node: Node) -> Node:
        """Append *node*, detaching it from any previous parent first."""
        if node is self or node.contains(self):
            msg = "Cannot append a node to itself or one of its descendants"
            raise DOMError(msg)
        if node.parent_node is not None:
            node.parent_node.remove_child(node)
        self.child_nodes.append(node)
        node.parent_node = self
        return node

    def remove_child(self, node: Node) -> Node:
        if node.parent_node is not self:
            msg = "The node to be removed is not a child of this node"
            raise DOMError(msg)
        self.child_nodes.remove(node)
        node.parent_node = None
        return node

    def replace_child(self, new: Node, old: Node) -> Node:
        """Put *new* at the position of *old* and return *old*, now detached."""
        if old.parent_node is not self:
            msg = "The node to be replaced is not a child of this node"
            raise DOMError(msg)
        if new is old:
            return old
        if new.contains(self):
            msg = "Cannot insert a node into one of its descendants"
            raise DOMError(msg)
        if new.parent_node is not None:
            new.parent_node.remove_child(new)
        index = self.child_nodes.index(old)
        self.child_nodes[index] = new
        new.parent_node = self
        old.parent_node = None
        return old

    def remove(self) -> None:
        """Detach this node from its parent, if it has one."""
        if self.parent_node is not None:
            self.parent_node.remove_child(self)

    def clear(self) -> list[Node]:
        """Detach and return every child."""
        children = list(self.child_nodes)
        for child in children:
            child.parent_node = None
        self.child_nodes.clear()
        return children

    # -- Queries --

    def contains(self, other: Node | None) -> bool:
        """True when *other* is this node or one of its descendants."""
        node = other
        while node is not None:
            if node is self:
                return True
            node = node.parent_node
        return False

    def root(self) -> Node:
        node = self
        while node.parent_node is not None:
            node = node.parent_node
        return node

    def is_attached(self) -> bool:
        """True when this node lives inside a ``Document``."""
        return isinstance(self.root(), Document)

    def iter_elements(self) -> Iterator[Element]:
        """Yield descendant elements in document order (excluding self)."""
        stack = list(reversed(self.child_nodes))
        while stack:
            node = stack.pop()
            if isinstance(node, Element):
                yield node
            stack.extend(reversed(node.child_nodes))

    @property
    def text_content(self) -> str:
        return "".join(child.text_content for child in self.child_nodes)

    @property
    def inner_html(self) -> str:
        return "".join(child.outer_html for child in self.child_nodes)

    @inner_html.setter
    def inner_html(self, markup: str) -> None:
        from roost.dom.parser import parse_fragment

        self.clear()
        for node in parse_fragment(markup):
            self.append_child(node)

    @property
    def outer_html(self) -> str:
        return self.inner_html

    # -- Selectors --

    def query_selector_all(self, selector: str) -> list[Element]:
        from roost.dom.selectors import select

        return select(selector, self)

    def query_selector(self, selector: str) -> Element | None:
        found = self.query_selector_all(selector)
        return found[0] if found else None


class Text(Node):
    """A text node. Stores unescaped data."""

    __slots__ = ("data",)

    def __init__(self, data: str = "") -> None:
        super().__init__()
        self.data = data

    def append_child(self, node: Node) -> Node:
        msg = "Text nodes cannot have children"
        raise DOMError(msg)

    @property
    def text_content(self) -> str:
        return self.data

    @property
    def outer_html(self) -> str:
        return html.escape(self.data, quote=False)

    def __repr__(self) -> str:
        return f"<Text {self.data[:20]!r}>"


class Element(Node):
    """An HTML element with a tag name and attributes."""

    __slots__ = ("attrs", "tag")

    def __init__(self, tag: str, attrs: dict[str, str] | None = None) -> None:
        super().__init__()
        self.tag = tag.lower()
        self.attrs: dict[str, str] = dict(attrs or {})

    @property
    def id(self) -> str | None:
        return self.attrs.get("id")

    @property
    def class_list(self) -> list[str]:
        return self.attrs.get("class", "").split()

    def get_attribute(self, name: str) -> str | None:
        return self.attrs.get(name)

    def set_attribute(self, name: str, value: str) -> None:
        self.attrs[name] = value

    def append_child(self, node: Node) -> Node:
        if self.tag in VOID_ELEMENTS:
            msg = f"<{self.tag}> is a void element and cannot have children"
            raise DOMError(msg)
        return super().append_child(node)

    @property
    def outer_html(self) -> str:
        attrs = "".join(
            f' {name}="{html.escape(value)}"' if value != "" else f" {name}"
            for name, value in self.attrs.items()
        )
        if self.tag in VOID_ELEMENTS:
            return f"<{self.tag}{attrs}>"
        return f"<{self.tag}{attrs}>{self.inner_html}</{self.tag}>"

    def __repr__(self) -> str:
        ident = f"#{self.id}" if self.id else ""
        return f"<Element {self.tag}{ident}>"


class Document(Node):
    """Root of a live tree. Nodes under it report ``is_attached()``."""

    __slots__ = ()

    @classmethod
    def from_html(cls, markup: str) -> Document:
        """Parse *markup* into a new document.

        Fragments without an ``<html>`` root are wrapped in
        ``<html><body>...</body></html>``.
        """
        from roost.dom.parser import parse_fragment

        doc = cls()
        nodes = parse_fragment(markup)
        roots = [n for n in nodes if isinstance(n, Element)]
        if len(roots) == 1 and roots[0].tag == "html":
            doc.append_child(roots[0])
            return doc

        root = Element("html")
        body = Element("body")
        root.append_child(body)
        for node in nodes:
            body.append_child(node)
        doc.append_child(root)
        return doc

    @property
    def document_element(self) -> Element | None:
        for child in self.child_nodes:
            if isinstance(child, Element):
                return child
        return None

    @property
    def body(self) -> Element | None:
        return self.query_selector("body")

    def __repr__(self) -> str:
        return "<Document>"


def is_node_attached(node: Node | None) -> bool:
    """True when *node* is inside a document."""
    return node is not None and node.is_attached()
