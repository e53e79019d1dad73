"""Boundary Protocols: contracts between the engine and its document/field collaborators.

Invariants:
    - The engine NEVER imports concrete document or field classes
    - `value` on a FieldTarget is the in-memory object value; `send` is the only
      externally observable output
    - `wrapped` is what handler code sees in event.source / event.target

Design Decisions:
    - Protocol over ABC: structural subtyping, hosts keep their own class hierarchies
    - The EventRecord is passed to document-level dispatch explicitly instead of
      being published through a global slot
"""

from typing import Any, Protocol, Sequence

from fieldscript.core.domain_types import FieldId, TargetKind
from fieldscript.core.event_record import EventRecord


class FieldTarget(Protocol):
    """Structural contract for a form-field-like object owned by the document."""
    field_id: FieldId
    kind: TargetKind
    value: Any

    @property
    def display_name(self) -> str: ...

    @property
    def wrapped(self) -> Any: ...

    def export_value(self, raw: Any) -> Any: ...
    def reset(self) -> None: ...
    def send(self, patch: dict) -> None: ...


class DocumentLike(Protocol):
    """Structural contract for the document that owns the field set."""
    calculate: bool
    event_dispatcher: Any

    @property
    def wrapped(self) -> Any: ...

    def dispatch_document_event(self, name: str, event: EventRecord) -> None: ...
    def dispatch_page_event(
        self,
        name: str,
        actions: Any,
        page_number: int | None,
        event: EventRecord,
    ) -> None: ...


def export_value_for(target: FieldTarget, raw: Any) -> Any:
    """Apply the export-value transform; identity for plain fields."""
    if target.kind is TargetKind.BUTTON:
        return target.export_value(raw)
    return raw


CalculationOrder = Sequence[FieldId]
