"""Handler Registry: explicit mapping from (field id, event name) to handlers.

Invariants:
    - Handlers for one key run in registration order
    - Lookup never raises: an unregistered key yields an empty tuple
    - Known event names are normalized through EventName, others stored as given

Design Decisions:
    - Resolved at registration time: the action runner does a single dict lookup,
      no attribute probing on the target object
    - Handlers are plain callables taking the EventRecord, so a script host can
      register closures that wrap its sandboxed code
"""

from collections import defaultdict
from typing import Callable

from fieldscript.core.domain_types import EventName, FieldId, normalize_event_name
from fieldscript.core.event_record import EventRecord

Handler = Callable[[EventRecord], None]


class HandlerRegistry:
    """Ordered handler lists keyed by (field id, event name)."""

    def __init__(self) -> None:
        self._handlers: dict[tuple[FieldId, EventName | str], list[Handler]] = defaultdict(list)

    def register(
        self, field_id: FieldId, event_name: EventName | str, handler: Handler,
    ) -> Handler:
        self._handlers[(field_id, normalize_event_name(event_name))].append(handler)
        return handler

    def on(
        self, field_id: FieldId, event_name: EventName | str,
    ) -> Callable[[Handler], Handler]:
        """Decorator form of register()."""
        def decorator(handler: Handler) -> Handler:
            return self.register(field_id, event_name, handler)
        return decorator

    def handlers_for(
        self, field_id: FieldId, event_name: EventName | str,
    ) -> tuple[Handler, ...]:
        key = (field_id, normalize_event_name(event_name))
        return tuple(self._handlers.get(key, ()))

    def has_handlers(self, field_id: FieldId, event_name: EventName | str) -> bool:
        return bool(self.handlers_for(field_id, event_name))

    def clear(self, field_id: FieldId | None = None) -> None:
        """Drop every handler, or only those registered for field_id."""
        if field_id is None:
            self._handlers.clear()
            return
        for key in [k for k in self._handlers if k[0] == field_id]:
            del self._handlers[key]
