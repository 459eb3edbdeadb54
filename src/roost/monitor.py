"""View event monitoring.

Once a view is monitored, its own lifecycle events keep its attached
flag current and are relayed to whatever region is its parent at the
time, as ``view:<event>``. Listeners on a region therefore see a single
stream whether a transition was started by the region or by the view.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from roost.events import trigger_method

if TYPE_CHECKING:
    from roost.views import MountableView

RELAYED_EVENTS = (
    "before:render",
    "render",
    "before:attach",
    "attach",
    "before:detach",
    "detach",
    "before:destroy",
    "destroy",
)

_MONITORED_FLAG = "_are_view_events_monitored"


def _relay(view: MountableView, event: str) -> Any:
    def handler(*args: Any) -> None:
        parent = view.parent
        if parent is not None:
            trigger_method(parent, f"view:{event}", *args)

    return handler


def monitor_view_events(view: MountableView) -> None:
    """Start monitoring *view*. Calling it again is a no-op."""
    if getattr(view, _MONITORED_FLAG, False):
        return
    setattr(view, _MONITORED_FLAG, True)

    def handle_attach(*_: Any) -> None:
        if hasattr(view, "_is_attached"):
            view._is_attached = True  # type: ignore[attr-defined]
        trigger_method(view, "dom:refresh", view)

    def handle_detach(*_: Any) -> None:
        if hasattr(view, "_is_attached"):
            view._is_attached = False  # type: ignore[attr-defined]

    def handle_render(*_: Any) -> None:
        if view.is_attached():
            trigger_method(view, "dom:refresh", view)

    view.on("attach", handle_attach)
    view.on("detach", handle_detach)
    view.on("render", handle_render)

    for event in RELAYED_EVENTS:
        view.on(event, _relay(view, event))
