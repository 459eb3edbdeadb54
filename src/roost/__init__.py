"""Roost — view regions for server-side HTML trees.

A region owns one container element and shows one view inside it at a
time: it renders the view, attaches it, and tears the previous view down
in a well-defined order of lifecycle events.

Basic usage::

    from roost import Document, Region, View, use_document

    document = Document.from_html('<main id="app"></main>')

    with use_document(document):
        region = Region(el="#app")
        region.show(View(source="<h1>{{ title }}</h1>", context={"title": "Home"}))

    document.body.inner_html
    # '<main id="app"><div><h1>Home</h1></div></main>'
"""

__version__ = "0.1.0-dev"
__all__ = [
    "ConfigurationError",
    "Document",
    "Element",
    "ElementMissingError",
    "ElementQuery",
    "InvalidViewError",
    "PlainView",
    "Region",
    "RegionConfig",
    "RoostError",
    "ShowOptions",
    "View",
    "ViewDestroyedError",
    "ViewNotValidError",
    "get_document",
    "use_document",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import roost`` from importing kida until a view renders.
    """
    if name == "Region":
        from roost.region import Region

        return Region

    if name in ("RegionConfig", "ShowOptions"):
        from roost import config as _config

        return getattr(_config, name)

    if name in ("View", "PlainView"):
        from roost import views as _views

        return getattr(_views, name)

    if name in ("Document", "Element", "ElementQuery"):
        from roost import dom as _dom

        return getattr(_dom, name)

    if name in ("get_document", "use_document"):
        from roost import context as _ctx

        return getattr(_ctx, name)

    if name in (
        "ConfigurationError",
        "ElementMissingError",
        "InvalidViewError",
        "RoostError",
        "ViewDestroyedError",
        "ViewNotValidError",
    ):
        from roost import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
