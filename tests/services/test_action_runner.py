"""Action Runner: tests for handler invocation on one (target, event name).

Tests cover:
    - source / target / name / target_name refreshed before handlers run
    - rc reset to True even after a prior rejection
    - Returns False when no handler is registered, True otherwise
    - Handlers share the event; exceptions propagate
"""

import pytest

from fieldscript.core.event_record import EventRecord
from fieldscript.services.action_runner import run_actions
from tests.services.fake_document import FakeField


def test_returns_false_without_handlers(registry):
    field = FakeField("A")
    event = EventRecord()
    assert run_actions(registry, field, field, event, "Validate") is False


def test_refreshes_event_before_running(registry):
    source = FakeField("S", name="Source Field")
    target = FakeField("T", name="Target Field")
    seen = {}

    def handler(event):
        seen.update(
            source=event.source, target=event.target,
            name=event.name, target_name=event.target_name, rc=event.rc,
        )

    registry.register("T", "Calculate", handler)
    event = EventRecord(name="Keystroke")
    event.rc = False

    assert run_actions(registry, source, target, event, "Calculate") is True
    assert seen == {
        "source": source, "target": target, "name": "Calculate",
        "target_name": "Target Field", "rc": True,
    }


def test_metadata_refreshed_even_without_handlers(registry):
    field = FakeField("A", name="Alpha")
    event = EventRecord()
    event.rc = False
    run_actions(registry, field, field, event, "Format")
    assert event.rc is True
    assert event.name == "Format"
    assert event.target_name == "Alpha"


def test_handlers_run_in_order_on_shared_event(registry):
    field = FakeField("A")
    registry.register("A", "Format", lambda e: setattr(e, "value", e.value + "1"))
    registry.register("A", "Format", lambda e: setattr(e, "value", e.value + "2"))
    event = EventRecord(value="x")
    run_actions(registry, field, field, event, "Format")
    assert event.value == "x12"


def test_later_handler_sees_earlier_rejection(registry):
    field = FakeField("A")
    observed = []
    registry.register("A", "Validate", lambda e: setattr(e, "rc", False))
    registry.register("A", "Validate", lambda e: observed.append(e.rc))
    event = EventRecord()
    run_actions(registry, field, field, event, "Validate")
    assert observed == [False]
    assert event.rc is False


def test_handler_exception_propagates(registry):
    field = FakeField("A")

    def boom(event):
        raise RuntimeError("script error")

    registry.register("A", "Action", boom)
    with pytest.raises(RuntimeError, match="script error"):
        run_actions(registry, field, field, EventRecord(), "Action")
