"""DOM — a minimal mutable HTML tree for regions and views.

    Node, Text, Element, Document -- the tree
    ElementQuery -- cached selector lookup that remembers its selector
    parse_fragment, parse_element -- HTML to nodes (stdlib html.parser)
    is_node_attached -- whether a node lives inside a Document
"""

from roost.dom.nodes import Document, Element, Node, Text, is_node_attached
from roost.dom.parser import parse_element, parse_fragment
from roost.dom.query import ElementQuery
from roost.dom.selectors import matches

__all__ = [
    "Document",
    "Element",
    "ElementQuery",
    "Node",
    "Text",
    "is_node_attached",
    "matches",
    "parse_element",
    "parse_fragment",
]
