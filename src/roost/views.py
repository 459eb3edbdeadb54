"""Views that regions can show.

A region talks to its view through a small capability interface
(``MountableView``). Two concrete variants ship with roost:

- ``View`` renders a kida template into its element and runs its own
  render and destroy lifecycle (``supports_*_lifecycle`` are True).
- ``PlainView`` only knows how to ``render()`` and ``remove()``. The
  region drives the lifecycle events for it and marks it destroyed.

Regions pick the teardown path by checking for ``DestroyableView``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from roost._internal.ids import unique_id
from roost.dom.nodes import Element, is_node_attached
from roost.errors import ViewDestroyedError
from roost.events import Events, trigger_method

if TYPE_CHECKING:
    from kida import Environment


@runtime_checkable
class MountableView(Protocol):
    """What a region needs from any view it shows.

    Views may also set ``supports_render_lifecycle`` and
    ``supports_destroy_lifecycle``. A missing flag counts as False, so the
    region fires those events itself.
    """

    cid: str
    el: Element
    parent: Any
    is_rendered: bool
    is_destroyed: bool

    def render(self) -> Any: ...
    def is_attached(self) -> bool: ...
    def on(self, name: str, callback: Any) -> Any: ...
    def once(self, name: str, callback: Any) -> Any: ...
    def off(self, name: str | None = None, callback: Any = None) -> Any: ...
    def trigger(self, name: str, *args: Any) -> Any: ...


@runtime_checkable
class DestroyableView(MountableView, Protocol):
    """A view that tears itself down."""

    def destroy(self) -> Any: ...


@runtime_checkable
class RemovableView(MountableView, Protocol):
    """A view that can only take its element out of the document."""

    def remove(self) -> Any: ...


class View(Events):
    """A view rendered from a kida template.

    Usage::

        view = View(source="<h1>{{ title }}</h1>", context={"title": "Home"})
        region.show(view)

    Subclasses can set ``template`` / ``template_source`` / ``tag_name``
    as class attributes and override ``serialize_data()``.
    """

    cid_prefix = "view"
    tag_name = "div"
    template: str | None = None
    template_source: str | None = None
    environment: Environment | None = None

    supports_render_lifecycle = True
    supports_destroy_lifecycle = True

    def __init__(
        self,
        *,
        el: Element | None = None,
        tag_name: str | None = None,
        attrs: Mapping[str, str] | None = None,
        template: str | None = None,
        source: str | None = None,
        context: Mapping[str, Any] | None = None,
        environment: Environment | None = None,
    ) -> None:
        self.cid = unique_id(self.cid_prefix)
        self.el = el if el is not None else Element(tag_name or self.tag_name, dict(attrs or {}))
        self.parent: Any = None
        self.context: dict[str, Any] = dict(context or {})
        if template is not None:
            self.template = template
        if source is not None:
            self.template_source = source
        if environment is not None:
            self.environment = environment
        self.is_rendered = False
        self.is_destroyed = False
        self._is_attached = False

    def serialize_data(self) -> dict[str, Any]:
        """Template context. Override to compute it."""
        return dict(self.context)

    def get_environment(self) -> Environment:
        if self.environment is not None:
            return self.environment
        from roost.templating import default_environment

        return default_environment()

    def render(self) -> View:
        """Render the template into ``el``, with its own render events.

        Re-rendering replaces the element's children.
        """
        if self.is_destroyed:
            raise ViewDestroyedError(self.cid)

        from roost.templating import render_view_template

        trigger_method(self, "before:render", self)

        markup = render_view_template(self.get_environment(), self)
        if markup is not None:
            self.el.inner_html = markup

        self.is_rendered = True
        trigger_method(self, "render", self)
        return self

    def is_attached(self) -> bool:
        return self._is_attached

    def destroy(self) -> View:
        """Remove the element, mark the view destroyed, drop all listeners.

        Triggers ``before:destroy`` / ``destroy`` itself, and
        ``before:detach`` / ``detach`` when it was attached.
        """
        if self.is_destroyed:
            return self

        trigger_method(self, "before:destroy", self)

        was_attached = self._is_attached
        if was_attached:
            trigger_method(self, "before:detach", self)

        self.el.remove()

        if was_attached:
            self._is_attached = False
            trigger_method(self, "detach", self)

        self.is_destroyed = True
        trigger_method(self, "destroy", self)
        self.off()
        return self

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.cid}>"


class PlainView(Events):
    """A bare view: ``render()`` and ``remove()``, nothing else.

    Its attached state is read from the document. Regions fire its
    lifecycle events and set ``is_destroyed`` when they tear it down.
    """

    cid_prefix = "view"
    tag_name = "div"

    supports_render_lifecycle = False
    supports_destroy_lifecycle = False

    def __init__(
        self,
        el: Element | None = None,
        *,
        tag_name: str | None = None,
        attrs: Mapping[str, str] | None = None,
        html: str | None = None,
    ) -> None:
        self.cid = unique_id(self.cid_prefix)
        self.el = el if el is not None else Element(tag_name or self.tag_name, dict(attrs or {}))
        self.parent: Any = None
        self.html = html
        self.is_rendered = False
        self.is_destroyed = False

    def render(self) -> PlainView:
        if self.html is not None:
            self.el.inner_html = self.html
        self.is_rendered = True
        return self

    def is_attached(self) -> bool:
        return is_node_attached(self.el)

    def remove(self) -> PlainView:
        """Take the element out of the document. Listeners stay registered."""
        self.el.remove()
        return self

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.cid}>"
