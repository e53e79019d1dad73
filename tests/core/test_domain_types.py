"""Domain Types: tests for event name normalization and enums.

Tests cover:
    - Known names map to EventName members
    - Unknown names pass through unchanged
    - str Enums compare equal to raw interaction names
"""

from fieldscript.core.domain_types import (
    EventName, TargetKind, normalize_event_name,
)


def test_known_name_normalizes_to_enum():
    assert normalize_event_name("Keystroke") is EventName.KEYSTROKE
    assert normalize_event_name("Mouse Up") is EventName.MOUSE_UP


def test_enum_passes_through():
    assert normalize_event_name(EventName.FORMAT) is EventName.FORMAT


def test_unknown_name_is_returned_as_is():
    assert normalize_event_name("Whatever") == "Whatever"
    assert not isinstance(normalize_event_name("Whatever"), EventName)


def test_enum_equals_raw_name():
    assert EventName.VALIDATE == "Validate"
    assert "Blur" in (EventName.BLUR, EventName.FOCUS)


def test_target_kind_is_closed():
    assert {k.value for k in TargetKind} == {"plain", "button"}
