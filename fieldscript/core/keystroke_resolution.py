"""Keystroke Resolution: pure decisions taken after Keystroke handlers ran.

Invariants:
    - rc False + will_commit False  → REJECT_NO_COMMIT (restore the snapshot)
    - rc False + will_commit True   → REJECT_COMMIT (clear the field)
    - rc True  + will_commit True   → COMMIT (hand over to validation)
    - rc True  + will_commit False  → MERGE (apply the edit, move the caret)
    - A handler-changed selection wins over the computed caret position
"""

from dataclasses import dataclass
from typing import Any

from fieldscript.core.domain_types import KeystrokeOutcome
from fieldscript.core.event_record import EventRecord


@dataclass(frozen=True)
class KeystrokeSnapshot:
    """Event state captured before Keystroke handlers run."""
    value: Any
    change: str
    sel_start: int
    sel_end: int

    @classmethod
    def capture(cls, event: EventRecord) -> "KeystrokeSnapshot":
        return cls(
            value=event.value,
            change=event.change,
            sel_start=event.sel_start,
            sel_end=event.sel_end,
        )

    @property
    def sel_range(self) -> list[int]:
        return [self.sel_start, self.sel_end]


def resolve_keystroke(rc: bool, will_commit: bool) -> KeystrokeOutcome:
    if rc:
        return KeystrokeOutcome.COMMIT if will_commit else KeystrokeOutcome.MERGE
    if will_commit:
        return KeystrokeOutcome.REJECT_COMMIT
    return KeystrokeOutcome.REJECT_NO_COMMIT


def merged_selection(snapshot: KeystrokeSnapshot, event: EventRecord) -> list[int]:
    """Selection to emit after a merged (uncommitted) keystroke."""
    if event.sel_start != snapshot.sel_start or event.sel_end != snapshot.sel_end:
        return [event.sel_start, event.sel_end]
    caret = snapshot.sel_start + len(event.change)
    return [caret, caret]
