"""Region — manages the single view shown inside one container element.

The region decides when its view is rendered, attached, detached and
destroyed, and keeps the document consistent when a view replaces the
region's element instead of being inserted into it.

Lifecycle events (``trigger_method`` targets in parentheses):

- ``before:show`` / ``show`` (region): view, region, options
- ``before:render`` / ``render`` (view): unless the view runs its own
  render lifecycle
- ``before:attach`` / ``attach`` (view): only when the region's element
  is in a document and attach triggering is enabled
- ``before:empty`` / ``empty`` (region): view
- ``before:detach`` / ``detach`` (view): see ``_should_trigger_detach``
- ``before:destroy`` / ``destroy`` (view): unless the view runs its own
  destroy lifecycle

Everything runs synchronously. A view destroyed by outside code empties
the region through a one-shot ``destroy`` listener that the region
removes itself before any teardown it starts.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from roost._internal.ids import unique_id
from roost._internal.values import result
from roost.config import ElementRef, RegionConfig, ShowOptions
from roost.context import document_var
from roost.dom.nodes import Element, Node, is_node_attached
from roost.dom.query import ElementQuery
from roost.errors import (
    ConfigurationError,
    DOMError,
    ElementMissingError,
    NoElementError,
    ViewDestroyedError,
    ViewNotValidError,
)
from roost.events import Events, trigger_method, trigger_method_on_cond
from roost.monitor import monitor_view_events
from roost.views import DestroyableView, MountableView, RemovableView

logger = logging.getLogger("roost.region")

type Options = ShowOptions | Mapping[str, Any] | None


class Region(Events):
    """Shows one view at a time inside an element.

    Usage::

        with use_document(document):
            region = Region(el="#main")
            region.show(View(source="<p>{{ msg }}</p>", context={"msg": "hi"}))
            region.show(other_view)          # destroys the first view
            region.empty(prevent_destroy=True)

    Accepts either a ``RegionConfig`` or the same fields as keywords.
    """

    cid_prefix = "mnr"

    def __init__(self, config: RegionConfig | None = None, /, **options: Any) -> None:
        if config is None:
            config = RegionConfig.from_options(options)
        elif options:
            msg = "Pass either a RegionConfig or keyword options, not both"
            raise ConfigurationError(msg)

        self.config = config
        self.cid = unique_id(self.cid_prefix)
        self.trigger_attach = config.trigger_attach
        self.trigger_detach = config.trigger_detach

        el = config.el
        # Unwrap a query to its first element
        if isinstance(el, ElementQuery):
            el = el.first
        if not el:
            raise NoElementError()

        self.el: ElementRef = el
        self.query: ElementQuery | None = self.get_el(el)
        if not isinstance(el, Element) and self.query.first is not None:
            self.el = self.query.first

        self.current_view: MountableView | None = None
        self.is_destroyed = False
        self._is_replaced = False

    # -- Public API --

    def show(self, view: MountableView | None, options: Options = None, **kwargs: Any) -> Region:
        """Render and attach *view*, tearing down whatever was shown before.

        Showing the current view again does nothing. With
        ``allow_missing_el`` a missing element skips the call.

        ``before:show`` and ``show`` listeners receive the options exactly
        as passed (keywords as a dict), including keys the region ignores.
        """
        opts = _options(options, kwargs)
        payload = dict(kwargs) if kwargs else options

        if not self._ensure_element():
            return self
        view = self._ensure_view(view)

        if view is self.current_view:
            return self

        logger.debug("%s showing %r", self.cid, view)
        trigger_method(self, "before:show", view, self, payload)

        monitor_view_events(view)

        self.empty(opts)

        # Views destroyed outside the region must not stay current
        view.once("destroy", self._on_view_destroyed)

        # Parent is set before render so render-time events reach the region
        view.parent = self

        self._render_view(view)
        self._attach_view(view, opts)

        trigger_method(self, "show", view, self, payload)
        return self

    def empty(self, options: Options = None, **kwargs: Any) -> Region:
        """Detach or destroy the current view. No-op without one."""
        opts = _options(options, kwargs)
        view = self.current_view
        if view is None:
            return self

        logger.debug("%s emptying %r (prevent_destroy=%s)", self.cid, view, opts.prevent_destroy)
        view.off("destroy", self._on_view_destroyed)
        trigger_method(self, "before:empty", view)

        if self._is_replaced:
            self._restore_el()

        if opts.prevent_destroy:
            self._detach_view(view, opts)
        else:
            self._destroy_view(view, opts)

        view.parent = None
        self.current_view = None

        trigger_method(self, "empty", view)
        return self

    def reset(self) -> Region:
        """Empty the region and forget the resolved element.

        The next ``show()`` looks the element up again by selector.
        """
        self.empty()

        if self.query is not None and self.query.selector is not None:
            self.el = self.query.selector
        self.query = None
        logger.debug("%s reset", self.cid)
        return self

    def destroy(self) -> Region:
        """Reset the region and drop every listener on it."""
        if self.is_destroyed:
            return self

        trigger_method(self, "before:destroy", self)
        self.reset()
        self.is_destroyed = True
        trigger_method(self, "destroy", self)
        self.off()
        return self

    def has_view(self) -> bool:
        return self.current_view is not None

    def is_replaced(self) -> bool:
        return self._is_replaced

    # -- Overridable hooks --

    def get_el(self, el: ElementRef) -> ElementQuery:
        """Look up the region's element.

        Selectors are scoped to ``parent_el`` when configured, otherwise
        to the current document. Override to change how the region finds
        its element.
        """
        if isinstance(el, Element):
            return ElementQuery.of(el)
        context: Node | None = result(self.config.parent_el)
        if context is None:
            context = document_var.get(None)
        return ElementQuery(el, context)

    def attach_html(self, view: MountableView, should_replace: bool) -> None:
        """Put the view's element into the document.

        Override to change how the view's element is mounted.
        """
        if should_replace:
            self._replace_el(view)
        else:
            el = self._resolved_el()
            if self.query is not None:
                self.query.detach_contents()
            el.append_child(view.el)

    # -- Internals --

    def _on_view_destroyed(self, *_: Any) -> None:
        self.empty()

    def _ensure_element(self) -> bool:
        if self.query is None or not isinstance(self.el, Element):
            self.query = self.get_el(self.el)
            if self.query.first is not None:
                self.el = self.query.first

        if not self.query:
            if self.config.allow_missing_el:
                logger.debug("%s element %s missing, skipping", self.cid, self.query.selector)
                return False
            raise ElementMissingError(self.query.selector)
        return True

    def _resolved_el(self) -> Element:
        if not isinstance(self.el, Element):
            msg = f"Region {self.cid} element {self.el!r} has not been resolved"
            raise DOMError(msg)
        return self.el

    def _ensure_view(self, view: MountableView | None) -> MountableView:
        if view is None:
            raise ViewNotValidError()
        if not isinstance(view, MountableView) or not isinstance(
            view, (DestroyableView, RemovableView)
        ):
            msg = f"{view!r} is not a view. Views need render() and destroy() or remove()."
            raise ViewNotValidError(msg)
        if view.is_destroyed:
            raise ViewDestroyedError(view.cid)
        return view

    def _render_view(self, view: MountableView) -> None:
        if view.is_rendered:
            return

        # Views without the flag get their render events from the region
        region_fires = not getattr(view, "supports_render_lifecycle", False)

        trigger_method_on_cond(region_fires, view, "before:render", view)

        view.render()

        trigger_method_on_cond(region_fires, view, "render", view)

    def _attach_view(self, view: MountableView, opts: ShowOptions) -> None:
        should_trigger_attach = (
            opts.trigger_attach is not False
            and self.trigger_attach
            and isinstance(self.el, Node)
            and is_node_attached(self.el)
        )
        should_replace_el = bool(opts.replace_element)

        trigger_method_on_cond(should_trigger_attach, view, "before:attach", view)

        self.attach_html(view, should_replace_el)

        trigger_method_on_cond(should_trigger_attach, view, "attach", view)
        self.current_view = view

    def _replace_el(self, view: MountableView) -> None:
        # Never stack replacements: put our element back first
        if self._is_replaced:
            self._restore_el()

        el = self._resolved_el()
        parent = el.parent_node
        if parent is None:
            msg = f"Region {self.cid} element has no parent node and cannot be replaced"
            raise DOMError(msg)

        parent.replace_child(view.el, el)
        self._is_replaced = True

    def _restore_el(self) -> None:
        """Swap the region's element back in place of the current view's."""
        view = self.current_view
        if view is None:
            return

        parent = view.el.parent_node
        if parent is None:
            return

        parent.replace_child(self._resolved_el(), view.el)
        self._is_replaced = False
        logger.debug("%s restored element", self.cid)

    def _should_trigger_detach(self, view: MountableView, opts: ShowOptions) -> bool:
        # Reads the inverse of trigger_detach, unlike the attach check
        return opts.trigger_detach is not False and not self.trigger_detach and view.is_attached()

    def _detach_view(self, view: MountableView, opts: ShowOptions) -> None:
        should_trigger_detach = self._should_trigger_detach(view, opts)

        trigger_method_on_cond(should_trigger_detach, view, "before:detach", view)

        if self.query is not None:
            self.query.detach_contents()

        trigger_method_on_cond(should_trigger_detach, view, "detach", view)

    def _destroy_view(self, view: MountableView, opts: ShowOptions) -> None:
        if view.is_destroyed:
            return

        should_trigger_detach = self._should_trigger_detach(view, opts)
        region_fires = not getattr(view, "supports_destroy_lifecycle", False)

        trigger_method_on_cond(region_fires, view, "before:destroy", view)
        trigger_method_on_cond(should_trigger_detach, view, "before:detach", view)

        if isinstance(view, DestroyableView):
            view.destroy()
        else:
            view.remove()  # type: ignore[attr-defined]
            # Marked here so a later show() rejects it
            view.is_destroyed = True

        trigger_method_on_cond(should_trigger_detach, view, "detach", view)
        trigger_method_on_cond(region_fires, view, "destroy", view)

    def __repr__(self) -> str:
        target = self.query.selector if self.query is not None and self.query.selector else self.el
        return f"<Region {self.cid} el={target!r}>"


def _options(options: Options, kwargs: Mapping[str, Any]) -> ShowOptions:
    if kwargs:
        if options is not None:
            msg = "Pass options either as an argument or as keywords, not both"
            raise ConfigurationError(msg)
        return ShowOptions.coerce(kwargs)
    return ShowOptions.coerce(options)
