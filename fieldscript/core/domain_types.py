"""Domain Types: rich types that replace bare primitives across the engine.

Invariants:
    - FieldId wraps str: field identifiers are never confused with event names
    - Known event names encoded as EventName; unknown names pass through as str
    - TargetKind is closed: a target is either PLAIN or BUTTON
    - UNSET_SELECTION (-1) marks a selection bound that was never provided

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: compare equal to the raw names carried by incoming interactions
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

FieldId = NewType("FieldId", str)

# Pseudo-targets that are never present in the live field map
DOCUMENT_TARGET = "doc"
PAGE_TARGET = "page"
APP_TARGET = "app"


# ─── Value Types ─────────────────────────────────────────────────

UNSET_SELECTION = -1
CLEARED_SELECTION = (0, 0)


# ─── Enums ───────────────────────────────────────────────────────

class EventName(str, Enum):
    """Event names the pipeline treats specially or that documents raise."""
    # Field pipeline
    KEYSTROKE = "Keystroke"
    VALIDATE = "Validate"
    CALCULATE = "Calculate"
    FORMAT = "Format"
    # Field interaction
    ACTION = "Action"
    FOCUS = "Focus"
    BLUR = "Blur"
    MOUSE_DOWN = "Mouse Down"
    MOUSE_UP = "Mouse Up"
    MOUSE_ENTER = "Mouse Enter"
    MOUSE_EXIT = "Mouse Exit"
    # Document / page lifecycle
    OPEN = "Open"
    WILL_CLOSE = "WillClose"
    WILL_SAVE = "WillSave"
    DID_SAVE = "DidSave"
    WILL_PRINT = "WillPrint"
    DID_PRINT = "DidPrint"
    PAGE_OPEN = "PageOpen"
    PAGE_CLOSE = "PageClose"
    # App
    RESET_FORM = "ResetForm"

    def __str__(self) -> str:
        return self.value


class TargetKind(str, Enum):
    """Closed variant of field-like targets."""
    PLAIN = "plain"
    BUTTON = "button"


class KeystrokeOutcome(str, Enum):
    """Resolution states of a dispatched keystroke after its handlers ran."""
    MERGE = "merge"
    COMMIT = "commit"
    REJECT_NO_COMMIT = "reject_no_commit"
    REJECT_COMMIT = "reject_commit"


def normalize_event_name(name: str) -> EventName | str:
    """Map a raw name onto EventName when known, otherwise return it unchanged."""
    try:
        return EventName(name)
    except ValueError:
        return name
