"""HTML fragment parser built on the stdlib ``html.parser``.

Produces ``roost.dom.nodes`` trees. Lenient in the way browsers are:
void elements never take children, stray end tags are ignored, and
unclosed elements are closed at the end of input.
"""

from html.parser import HTMLParser

from roost.dom.nodes import VOID_ELEMENTS, Element, Node, Text
from roost.errors import DOMError


class _TreeBuilder(HTMLParser):
    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.root = Node()
        self._stack: list[Node] = [self.root]

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        element = Element(tag, {name: value or "" for name, value in attrs})
        self._stack[-1].append_child(element)
        if element.tag not in VOID_ELEMENTS:
            self._stack.append(element)

    def handle_startendtag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        element = Element(tag, {name: value or "" for name, value in attrs})
        self._stack[-1].append_child(element)

    def handle_endtag(self, tag: str) -> None:
        tag = tag.lower()
        for depth in range(len(self._stack) - 1, 0, -1):
            node = self._stack[depth]
            if isinstance(node, Element) and node.tag == tag:
                del self._stack[depth:]
                return
        # Unmatched end tag: ignored

    def handle_data(self, data: str) -> None:
        if not data:
            return
        parent = self._stack[-1]
        last = parent.child_nodes[-1] if parent.child_nodes else None
        if isinstance(last, Text):
            last.data += data
        else:
            parent.append_child(Text(data))


def parse_fragment(markup: str) -> list[Node]:
    """Parse *markup* and return its top-level nodes, detached.

    Usage::

        (el,) = parse_fragment('<div id="main"></div>')
    """
    builder = _TreeBuilder()
    builder.feed(markup)
    builder.close()
    return builder.root.clear()


def parse_element(markup: str) -> Element:
    """Parse markup that must contain exactly one top-level element.

    Whitespace-only text around the element is dropped.
    """
    nodes = [
        n for n in parse_fragment(markup) if not (isinstance(n, Text) and not n.data.strip())
    ]
    if len(nodes) != 1 or not isinstance(nodes[0], Element):
        msg = f"Expected a single root element, got {len(nodes)} nodes"
        raise DOMError(msg)
    return nodes[0]
