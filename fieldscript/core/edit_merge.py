"""Edit Merge: reconstruct a field's prospective text from a keystroke delta.

Invariants:
    - PURE: reads the event, never mutates it
    - Rich content (list of runs) is returned unchanged, never text-merged
    - A bound outside its valid range contributes an empty prefix/postfix
    - Bounds are compared as numbers and truncated toward zero before slicing;
      a non-numeric bound counts as out of range
"""

import math

from fieldscript.core.event_record import EventRecord


def merge_change(event: EventRecord) -> str | list:
    """Return what the field's text becomes if the pending change is accepted."""
    value = event.value
    if isinstance(value, list):
        return value
    if not isinstance(value, str):
        value = str(value)

    start = _numeric_bound(event.sel_start)
    end = _numeric_bound(event.sel_end)

    prefix = (
        value[:int(min(start, len(value)))]
        if start is not None and start >= 0
        else ""
    )
    postfix = (
        value[int(end):]
        if end is not None and 0 <= end <= len(value)
        else ""
    )
    return f"{prefix}{event.change}{postfix}"


def _numeric_bound(bound) -> float | None:
    try:
        number = float(bound)
    except (TypeError, ValueError):
        return None
    return None if math.isnan(number) else number
