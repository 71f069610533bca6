"""Layer 2: EventTarget registry and dispatch."""

import logging

from ssestream.core.events import ErrorEvent, Event, EventKind, EventTarget, MessageEvent


def test_same_listener_registers_once():
    target = EventTarget()
    calls = []

    def listener(event):
        calls.append(event)

    target.add_event_listener("message", listener)
    target.addEventListener("message", listener)
    target.dispatch_event(MessageEvent(data="x"))

    assert target.get_listener_count("message") == 1
    assert len(calls) == 1


def test_removing_last_listener_drops_the_type():
    target = EventTarget()

    def first(event):
        pass

    def second(event):
        pass

    target.add_event_listener("message", first)
    target.add_event_listener("message", second)
    target.remove_event_listener("message", first)
    assert target.listener_types == ["message"]

    target.removeEventListener("message", second)
    assert target.listener_types == []
    assert target.get_stats()["total_event_types"] == 0


def test_removing_unknown_listener_is_silent():
    target = EventTarget()

    target.remove_event_listener("nothing", print)
    target.add_event_listener("message", len)
    target.remove_event_listener("message", print)

    assert target.get_listener_count("message") == 1


def test_listeners_run_in_registration_order():
    target = EventTarget()
    order = []
    target.add_event_listener("update", lambda e: order.append("a"))
    target.add_event_listener("update", lambda e: order.append("b"))
    target.add_event_listener("other", lambda e: order.append("other"))

    assert target.dispatch_event(MessageEvent(type="update")) is True
    assert order == ["a", "b"]


def test_dispatching_none_is_a_successful_no_op():
    assert EventTarget().dispatch_event(None) is True
    assert EventTarget().dispatchEvent(None) is True


def test_source_is_stamped():
    target = EventTarget()
    event = MessageEvent(data="x")

    target.dispatch_event(event)

    assert event.source is target


def test_all_listeners_run_after_cancellation():
    target = EventTarget()
    seen = []

    def cancelling(event):
        seen.append("first")
        event.prevent_default()

    target.add_event_listener("message", cancelling)
    target.add_event_listener("message", lambda e: seen.append("second"))

    assert target.dispatch_event(MessageEvent(data="x")) is False
    assert seen == ["first", "second"]


def test_primary_handler_runs_first_and_can_cancel():
    target = EventTarget()
    seen = []

    def handler(event):
        seen.append("handler")
        event.prevent_default()

    target.on_message = handler
    target.add_event_listener("message", lambda e: seen.append("listener"))

    assert target.dispatch_event(MessageEvent(data="x")) is False
    assert seen == ["handler"]


def test_primary_handler_then_listeners():
    target = EventTarget()
    seen = []
    target.on_error = lambda e: seen.append(("handler", e.data))
    target.add_event_listener("error", lambda e: seen.append(("listener", e.data)))

    assert target.dispatch_event(ErrorEvent(data="boom")) is True
    assert seen == [("handler", "boom"), ("listener", "boom")]


def test_each_kind_has_its_own_slot():
    target = EventTarget()
    seen = []
    target.on_open = lambda e: seen.append("open")
    target.on_load = lambda e: seen.append("load")
    target.on_abort = lambda e: seen.append("abort")
    target.on_readystatechange = lambda e: seen.append("readystatechange")
    target.set_handler(EventKind.MESSAGE, lambda e: seen.append("message"))

    for kind in ("open", "load", "abort", "message"):
        target.dispatch_event(Event(type=kind))

    assert seen == ["open", "load", "abort", "message"]
    assert target.get_handler("error") is None


def test_custom_types_use_the_custom_slot():
    target = EventTarget()
    seen = []
    target.on_custom = lambda e: seen.append(e.type)
    target.on_message = lambda e: seen.append("message")

    target.dispatch_event(MessageEvent(type="update"))
    target.dispatch_event(MessageEvent(type="onmessage"))

    assert seen == ["update", "onmessage"]
    assert target.get_handler("anything") is target.on_custom


def test_clearing_a_slot():
    target = EventTarget()
    target.on_message = lambda e: e.prevent_default()
    target.set_handler("message", None)

    assert target.dispatch_event(MessageEvent()) is True


def test_failing_listener_does_not_stop_the_others(caplog):
    target = EventTarget()
    seen = []

    def broken(event):
        raise RuntimeError("listener bug")

    target.add_event_listener("message", broken)
    target.add_event_listener("message", lambda e: seen.append(e.data))

    with caplog.at_level(logging.ERROR, logger="ssestream.core.events.target"):
        assert target.dispatch_event(MessageEvent(data="x")) is True

    assert seen == ["x"]
    assert "listener bug" in caplog.text


def test_listener_removed_during_dispatch_still_sees_current_event():
    target = EventTarget()
    seen = []

    def second(event):
        seen.append("second")

    def first(event):
        seen.append("first")
        target.remove_event_listener("message", second)

    target.add_event_listener("message", first)
    target.add_event_listener("message", second)
    target.dispatch_event(MessageEvent())
    target.dispatch_event(MessageEvent())

    assert seen == ["first", "second", "first"]
