"""Synchronous named-event emitter and ``trigger_method``.

Listeners run in registration order, in the caller's thread, before
``trigger()`` returns. A listener that raises aborts the trigger and the
exception propagates to whoever fired the event.

``trigger_method`` is the lifecycle entry point: it first calls an
``on_<event>`` hook on the target (``before:show`` -> ``on_before_show``)
and then broadcasts the event to listeners.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

type Listener = Callable[..., Any]


@dataclass(slots=True, eq=False)
class _Handler:
    callback: Listener
    once: bool = False


class Events:
    """Mixin providing ``on`` / ``once`` / ``off`` / ``trigger``.

    Handlers live in the instance ``__dict__`` so subclasses need no
    ``__init__`` cooperation.
    """

    def _event_handlers(self) -> dict[str, list[_Handler]]:
        return vars(self).setdefault("_handlers", {})

    def on(self, name: str, callback: Listener) -> Any:
        """Register *callback* for *name*. Returns self for chaining."""
        self._event_handlers().setdefault(name, []).append(_Handler(callback))
        return self

    def once(self, name: str, callback: Listener) -> Any:
        """Register *callback* to run on the next *name* event only."""
        self._event_handlers().setdefault(name, []).append(_Handler(callback, once=True))
        return self

    def off(self, name: str | None = None, callback: Listener | None = None) -> Any:
        """Remove listeners.

        With no arguments every listener goes. With only *name*, every
        listener for that event goes. With *callback*, only matching
        registrations go (bound methods compare equal when they share a
        function and an instance).
        """
        handlers = self._event_handlers()
        if name is None and callback is None:
            handlers.clear()
            return self
        names = [name] if name is not None else list(handlers)
        for event in names:
            if event not in handlers:
                continue
            if callback is None:
                del handlers[event]
                continue
            kept = [h for h in handlers[event] if h.callback != callback]
            if kept:
                handlers[event] = kept
            else:
                del handlers[event]
        return self

    def listeners(self, name: str) -> list[Listener]:
        return [h.callback for h in self._event_handlers().get(name, ())]

    def trigger(self, name: str, *args: Any) -> Any:
        """Call every listener registered for *name* with *args*."""
        handlers = self._event_handlers()
        registered = handlers.get(name)
        if not registered:
            return self
        # Snapshot: listeners may add or remove listeners while running
        snapshot = list(registered)
        for handler in snapshot:
            if handler.once:
                current = handlers.get(name)
                if current is None or handler not in current:
                    continue
                current.remove(handler)
                if not current:
                    del handlers[name]
            handler.callback(*args)
        return self


def _hook_name(event: str) -> str:
    return "on_" + event.replace(":", "_").replace("-", "_")


def trigger_method(target: Any, event: str, *args: Any) -> Any:
    """Call ``target.on_<event>(*args)`` if defined, then trigger *event*.

    Returns the hook's return value, or ``None`` without a hook.
    """
    hook = getattr(target, _hook_name(event), None)
    result = hook(*args) if callable(hook) else None
    trigger = getattr(target, "trigger", None)
    if callable(trigger):
        trigger(event, *args)
    return result


def trigger_method_on_cond(cond: bool, target: Any, event: str, *args: Any) -> Any:
    """``trigger_method`` guarded by *cond*."""
    if not cond:
        return None
    return trigger_method(target, event, *args)
