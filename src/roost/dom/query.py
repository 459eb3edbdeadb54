"""ElementQuery — a cached selector lookup.

Regions resolve their ``el`` once and keep the resulting query. The
query remembers the selector it came from so a region can throw the
cached result away and look the element up again after the document
changes underneath it.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import overload

from roost.dom.nodes import Element, Node


class ElementQuery(Sequence[Element]):
    """Snapshot of the elements a selector matched within a context node.

    Usage::

        query = ElementQuery("#main", document)
        if query:
            query.first.append_child(child)
    """

    __slots__ = ("_elements", "context", "selector")

    def __init__(self, selector: str | None, context: Node | None) -> None:
        self.selector = selector
        self.context = context
        if selector is None or context is None:
            self._elements: tuple[Element, ...] = ()
        else:
            self._elements = tuple(context.query_selector_all(selector))

    @classmethod
    def of(cls, *elements: Element) -> ElementQuery:
        """Wrap already-resolved elements. The query has no selector."""
        query = cls(None, None)
        query._elements = elements
        return query

    @overload
    def __getitem__(self, index: int) -> Element: ...
    @overload
    def __getitem__(self, index: slice) -> Sequence[Element]: ...
    def __getitem__(self, index: int | slice) -> Element | Sequence[Element]:
        return self._elements[index]

    def __len__(self) -> int:
        return len(self._elements)

    def __iter__(self) -> Iterator[Element]:
        return iter(self._elements)

    @property
    def first(self) -> Element | None:
        return self._elements[0] if self._elements else None

    def contents(self) -> list[Node]:
        """Children of every matched element, in order."""
        return [child for el in self._elements for child in el.child_nodes]

    def detach_contents(self) -> list[Node]:
        """Detach and return the children of every matched element."""
        detached: list[Node] = []
        for el in self._elements:
            detached.extend(el.clear())
        return detached

    def __repr__(self) -> str:
        return f"<ElementQuery {self.selector!r} matched={len(self._elements)}>"
