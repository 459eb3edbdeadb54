"""Tests for roost.events — Events mixin and trigger_method."""

from typing import Any

import pytest

from roost.events import Events, trigger_method, trigger_method_on_cond


class Emitter(Events):
    pass


class TestOnTrigger:
    def test_listeners_called_in_order_with_args(self) -> None:
        emitter = Emitter()
        calls: list[tuple[str, tuple[Any, ...]]] = []
        emitter.on("ping", lambda *args: calls.append(("a", args)))
        emitter.on("ping", lambda *args: calls.append(("b", args)))

        emitter.trigger("ping", 1, "two")

        assert calls == [("a", (1, "two")), ("b", (1, "two"))]

    def test_trigger_without_listeners(self) -> None:
        emitter = Emitter()
        assert emitter.trigger("nothing") is emitter

    def test_on_returns_self(self) -> None:
        emitter = Emitter()
        assert emitter.on("x", print) is emitter

    def test_listener_exception_propagates(self) -> None:
        emitter = Emitter()

        def boom(*_: Any) -> None:
            raise RuntimeError("boom")

        emitter.on("x", boom)
        with pytest.raises(RuntimeError, match="boom"):
            emitter.trigger("x")

    def test_instances_do_not_share_handlers(self) -> None:
        a, b = Emitter(), Emitter()
        a.on("x", print)
        assert b.listeners("x") == []


class TestOnce:
    def test_once_fires_once(self) -> None:
        emitter = Emitter()
        calls: list[int] = []
        emitter.once("x", lambda: calls.append(1))

        emitter.trigger("x")
        emitter.trigger("x")

        assert calls == [1]
        assert emitter.listeners("x") == []

    def test_once_reentrant_trigger(self) -> None:
        emitter = Emitter()
        calls: list[int] = []

        def handler() -> None:
            calls.append(1)
            emitter.trigger("x")

        emitter.once("x", handler)
        emitter.trigger("x")

        assert calls == [1]

    def test_once_removed_by_off_before_trigger(self) -> None:
        emitter = Emitter()
        calls: list[int] = []

        def handler() -> None:
            calls.append(1)

        emitter.once("x", handler)
        emitter.off("x", handler)
        emitter.trigger("x")

        assert calls == []


class TestOff:
    def test_off_callback(self) -> None:
        emitter = Emitter()
        calls: list[str] = []

        def keep() -> None:
            calls.append("keep")

        def drop() -> None:
            calls.append("drop")

        emitter.on("x", keep)
        emitter.on("x", drop)
        emitter.off("x", drop)
        emitter.trigger("x")

        assert calls == ["keep"]

    def test_off_name(self) -> None:
        emitter = Emitter()
        emitter.on("x", print)
        emitter.on("y", print)
        emitter.off("x")
        assert emitter.listeners("x") == []
        assert emitter.listeners("y") == [print]

    def test_off_all(self) -> None:
        emitter = Emitter()
        emitter.on("x", print)
        emitter.on("y", print)
        emitter.off()
        assert emitter.listeners("x") == []
        assert emitter.listeners("y") == []

    def test_off_callback_across_events(self) -> None:
        emitter = Emitter()
        emitter.on("x", print)
        emitter.on("y", print)
        emitter.off(callback=print)
        assert emitter.listeners("x") == []
        assert emitter.listeners("y") == []

    def test_off_bound_method(self) -> None:
        class Owner:
            def __init__(self) -> None:
                self.calls = 0

            def handle(self) -> None:
                self.calls += 1

        emitter, owner = Emitter(), Owner()
        emitter.on("x", owner.handle)
        emitter.off("x", owner.handle)
        emitter.trigger("x")

        assert owner.calls == 0

    def test_listener_removed_during_trigger_still_runs_this_round(self) -> None:
        emitter = Emitter()
        calls: list[str] = []

        def second() -> None:
            calls.append("second")

        def first() -> None:
            calls.append("first")
            emitter.off("x", second)

        emitter.on("x", first)
        emitter.on("x", second)
        emitter.trigger("x")
        emitter.trigger("x")

        assert calls == ["first", "second", "first"]


class TestTriggerMethod:
    def test_calls_hook_then_listeners(self) -> None:
        order: list[str] = []

        class Hooked(Events):
            def on_before_show(self, value: int) -> str:
                order.append(f"hook:{value}")
                return "hooked"

        target = Hooked()
        target.on("before:show", lambda value: order.append(f"listener:{value}"))

        assert trigger_method(target, "before:show", 7) == "hooked"
        assert order == ["hook:7", "listener:7"]

    def test_without_hook_returns_none(self) -> None:
        target = Emitter()
        calls: list[str] = []
        target.on("render", lambda: calls.append("render"))

        assert trigger_method(target, "render") is None
        assert calls == ["render"]

    def test_target_without_trigger(self) -> None:
        class Bare:
            def on_ping(self) -> int:
                return 1

        assert trigger_method(Bare(), "ping") == 1

    def test_on_cond_false_skips(self) -> None:
        target = Emitter()
        calls: list[str] = []
        target.on("x", lambda: calls.append("x"))

        assert trigger_method_on_cond(False, target, "x") is None
        trigger_method_on_cond(True, target, "x")

        assert calls == ["x"]
