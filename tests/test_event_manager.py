"""Tests for EventManager."""

from __future__ import annotations

import logging

import pytest

from resourcekit.events import EmitResult, Event, EventManager
from resourcekit.ports import IEventManager


@pytest.fixture
def manager() -> EventManager:
    return EventManager()


def test_satisfies_protocol(manager) -> None:
    assert isinstance(manager, IEventManager)


def test_emit_without_listeners(manager) -> None:
    result = manager.emit("nothing")

    assert result == EmitResult(responses=[], stopped=False)
    assert result.last is None


def test_listeners_receive_event(manager) -> None:
    received: list[Event] = []
    manager.attach("create.pre", received.append)
    target = object()

    manager.emit("create.pre", target=target, spec={"a": 1})

    assert len(received) == 1
    assert received[0].name == "create.pre"
    assert received[0].target is target
    assert received[0].params == {"spec": {"a": 1}}


def test_listeners_run_by_priority_then_registration(manager) -> None:
    order: list[str] = []
    manager.attach("evt", lambda e: order.append("late"), priority=10)
    manager.attach("evt", lambda e: order.append("first"))
    manager.attach("evt", lambda e: order.append("second"))
    manager.attach("evt", lambda e: order.append("early"), priority=-5)

    manager.emit("evt")

    assert order == ["early", "first", "second", "late"]


def test_emit_collects_responses(manager) -> None:
    manager.attach("evt", lambda e: 1)
    manager.attach("evt", lambda e: 2)

    result = manager.emit("evt")

    assert result.responses == [1, 2]
    assert result.last == 2
    assert result.stopped is False


def test_emit_until_stops_on_matching_result(manager) -> None:
    calls: list[str] = []

    def first(event):
        calls.append("first")

    def veto(event):
        calls.append("veto")
        return False

    def never(event):
        calls.append("never")
        return True

    manager.attach("delete.pre", first)
    manager.attach("delete.pre", veto)
    manager.attach("delete.pre", never)

    result = manager.emit_until("delete.pre", lambda r: isinstance(r, bool))

    assert result.stopped is True
    assert result.last is False
    assert calls == ["first", "veto"]


def test_emit_until_without_match_runs_everything(manager) -> None:
    manager.attach("evt", lambda e: "a")
    manager.attach("evt", lambda e: "b")

    result = manager.emit_until("evt", lambda r: isinstance(r, int))

    assert result.stopped is False
    assert result.responses == ["a", "b"]


def test_stop_propagation(manager) -> None:
    calls: list[str] = []

    def stopper(event):
        calls.append("stopper")
        event.stop_propagation()
        return "value"

    manager.attach("evt", stopper)
    manager.attach("evt", lambda e: calls.append("after"))

    result = manager.emit("evt")

    assert calls == ["stopper"]
    assert result.stopped is True
    assert result.last == "value"


def test_listeners_share_mutable_params(manager) -> None:
    manager.attach("update.pre", lambda e: e.params["spec"].update(author="hook"))
    spec = {"title": "x"}

    manager.emit("update.pre", spec=spec)

    assert spec == {"title": "x", "author": "hook"}


def test_listener_errors_are_logged_and_raised(manager, caplog) -> None:
    def broken(event):
        raise RuntimeError("boom")

    manager.attach("evt", broken)

    with caplog.at_level(logging.ERROR, logger="resourcekit.events"):
        with pytest.raises(RuntimeError, match="boom"):
            manager.emit("evt")
    assert "broken" in caplog.text


def test_duplicate_attach_is_ignored(manager) -> None:
    def listener(event):
        return 1

    manager.attach("evt", listener)
    manager.attach("evt", listener)

    assert manager.get_listeners("evt") == [listener]


def test_detach(manager) -> None:
    def listener(event):
        return 1

    manager.attach("evt", listener)

    assert manager.detach("evt", listener) is True
    assert manager.detach("evt", listener) is False
    assert manager.emit("evt").responses == []


def test_clear(manager) -> None:
    manager.attach("a", lambda e: 1)
    manager.attach("b", lambda e: 2)

    manager.clear("a")
    assert manager.get_listeners("a") == []
    assert len(manager.get_listeners("b")) == 1

    manager.clear()
    assert manager.get_listeners("b") == []
