"""calculate_now: tests for the script-callable recalculation entry point.

Tests cover:
    - No-op without order, with calculation disabled, or while already calculating
    - Full pass seeded from the first field of the order
    - Nested calculate_now from a Calculate handler is a no-op; outer pass completes
    - Guard released when a handler raises, so the next call runs
    - Missing first field skips the pass
    - Calculation triggered by an Action also suppresses nested calculate_now
"""

import pytest

from tests.services.fake_document import build_fields


def test_noop_without_order(make_dispatcher, registry, abc_fields):
    dispatcher = make_dispatcher(abc_fields, order=None)
    registry.register("A", "Calculate", lambda e: setattr(e, "value", "x"))
    dispatcher.calculate_now()
    assert abc_fields["A"].value == "1"


def test_noop_with_empty_order(make_dispatcher, abc_fields):
    dispatcher = make_dispatcher(abc_fields, order=[])
    dispatcher.calculate_now()
    assert all(f.sent == [] for f in abc_fields.values())


def test_noop_when_document_disables_calculation(make_dispatcher, registry, abc_fields, document):
    dispatcher = make_dispatcher(abc_fields, order=["A"])
    document.calculate = False
    registry.register("A", "Calculate", lambda e: setattr(e, "value", "x"))
    dispatcher.calculate_now()
    assert abc_fields["A"].value == "1"


def test_pass_seeded_from_first_field(make_dispatcher, registry, abc_fields):
    dispatcher = make_dispatcher(abc_fields, order=["B", "A", "C"])
    sources = []
    for fid in ("A", "B", "C"):
        registry.register(fid, "Calculate", lambda e: sources.append(e.source.field_id))

    dispatcher.calculate_now()

    assert sources == ["B", "B", "B"]
    assert dispatcher.is_calculating is False


def test_fresh_event_record_per_call(make_dispatcher, registry, abc_fields):
    dispatcher = make_dispatcher(abc_fields, order=["A"])
    events = []
    registry.register("A", "Calculate", events.append)
    dispatcher.calculate_now()
    dispatcher.calculate_now()
    assert len(events) == 2
    assert events[0] is not events[1]
    assert events[0].change == ""


def test_nested_calculate_now_is_noop(make_dispatcher, registry, abc_fields, document):
    dispatcher = make_dispatcher(abc_fields, order=["A", "B", "C"])
    visits = []

    @registry.on("A", "Calculate")
    def calc_a(event):
        visits.append("A")
        event.value = "10"

    @registry.on("B", "Calculate")
    def calc_b(event):
        visits.append("B")
        document.calculate_now()
        event.value = str(int(abc_fields["A"].value) + 1)

    @registry.on("C", "Calculate")
    def calc_c(event):
        visits.append("C")
        event.value = str(int(abc_fields["B"].value) + 1)

    dispatcher.calculate_now()

    assert visits == ["A", "B", "C"]
    assert [abc_fields[f].value for f in "ABC"] == ["10", "11", "12"]
    assert dispatcher.is_calculating is False


def test_guard_released_after_handler_raises(make_dispatcher, registry, abc_fields):
    dispatcher = make_dispatcher(abc_fields, order=["A"])
    attempts = []

    def flaky(event):
        attempts.append(dispatcher.is_calculating)
        if len(attempts) == 1:
            raise RuntimeError("script fault")
        event.value = "ok"

    registry.register("A", "Calculate", flaky)

    with pytest.raises(RuntimeError, match="script fault"):
        dispatcher.calculate_now()
    assert dispatcher.is_calculating is False

    dispatcher.calculate_now()
    assert attempts == [True, True]
    assert abc_fields["A"].value == "ok"


def test_missing_first_field_skips_pass(make_dispatcher, registry, abc_fields):
    dispatcher = make_dispatcher(abc_fields, order=["gone", "A"])
    registry.register("A", "Calculate", lambda e: setattr(e, "value", "x"))
    dispatcher.calculate_now()
    assert abc_fields["A"].value == "1"


def test_action_triggered_pass_suppresses_nested_calculate_now(
    make_dispatcher, registry, document,
):
    objects = build_fields(document, ("btn", ""), ("A", "0"))
    dispatcher = make_dispatcher(objects, order=["A"])
    calc_runs = []

    def calc(event):
        calc_runs.append(dispatcher.is_calculating)
        document.calculate_now()

    registry.register("A", "Calculate", calc)
    dispatcher.dispatch({"id": "btn", "name": "Action"})

    assert calc_runs == [True]
    assert dispatcher.is_calculating is False
