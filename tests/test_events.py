# tests/test_events.py

from __future__ import annotations

import dataclasses

import pytest

from todotxt.core.events import CollectionReset, EventChannel, FieldChanged, TaskAdded, TaskAspect
from todotxt.tasks.task_models import Task


def test_handlers_called_in_registration_order() -> None:
    channel = EventChannel()
    seen: list[str] = []

    channel.subscribe(lambda sender, event: seen.append("first"))
    channel.subscribe(lambda sender, event: seen.append("second"))
    channel.publish(object(), CollectionReset())

    assert seen == ["first", "second"]


def test_subscribe_returns_handler_and_unsubscribe_stops_delivery() -> None:
    channel = EventChannel()
    seen: list[object] = []

    handler = channel.subscribe(lambda sender, event: seen.append(event))
    channel.publish(None, CollectionReset())
    channel.unsubscribe(handler)
    channel.publish(None, CollectionReset())

    assert seen == [CollectionReset()]
    assert channel.handler_count() == 0


def test_unsubscribe_unknown_handler_is_noop() -> None:
    channel = EventChannel()
    channel.unsubscribe(lambda sender, event: None)
    assert channel.handler_count() == 0


def test_subscribing_during_publish_takes_effect_next_time() -> None:
    channel = EventChannel()
    late: list[object] = []

    def late_handler(sender, event) -> None:
        late.append(event)

    def first(sender, event) -> None:
        channel.subscribe(late_handler)

    channel.subscribe(first)
    channel.publish(None, CollectionReset())
    assert late == []

    channel.unsubscribe(first)
    channel.publish(None, CollectionReset())
    assert late == [CollectionReset()]


def test_sender_is_passed_through() -> None:
    channel = EventChannel()
    senders: list[object] = []
    channel.subscribe(lambda sender, event: senders.append(sender))

    owner = object()
    channel.publish(owner, CollectionReset())

    assert senders == [owner]


def test_handler_exceptions_propagate() -> None:
    channel = EventChannel()

    def boom(sender, event) -> None:
        raise RuntimeError("boom")

    channel.subscribe(boom)
    with pytest.raises(RuntimeError):
        channel.publish(None, CollectionReset())


def test_event_payloads_are_immutable() -> None:
    task = Task("a")
    added = TaskAdded(task=task, index=0)
    changed = FieldChanged(task=task, aspect=TaskAspect.BODY)

    with pytest.raises(dataclasses.FrozenInstanceError):
        added.index = 1  # type: ignore[misc]
    with pytest.raises(dataclasses.FrozenInstanceError):
        changed.aspect = TaskAspect.COMPLETED  # type: ignore[misc]

    assert changed.aspect == "body"
