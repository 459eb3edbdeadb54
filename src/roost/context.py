"""Document context via ContextVar.

Provides:
- ``document_var``: the ``Document`` regions resolve selectors against
  when no ``parent_el`` scope is configured.
- ``use_document()``: set the document for a block and restore it after.

Accessing the document when none was set raises ``LookupError``.

Thread safety:
    ``ContextVar`` is task-local under asyncio and thread-local under
    free-threading. No locks needed.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

from roost.dom.nodes import Document

document_var: ContextVar[Document] = ContextVar("roost_document")
"""The current document. Set by the application before regions are used."""


def get_document() -> Document:
    """Return the current document.

    Raises ``LookupError`` if no document has been set.
    """
    return document_var.get()


@contextmanager
def use_document(document: Document) -> Iterator[Document]:
    """Make *document* current for the duration of the block.

    Usage::

        with use_document(Document.from_html(page)):
            region = Region(el="#main")
            region.show(view)
    """
    token = document_var.set(document)
    try:
        yield document
    finally:
        document_var.reset(token)
