"""Interaction Schemas: Pydantic models for raw interactions in and field patches out.

Invariants:
    - RawInteraction requires only `id` and `name`; everything else is optional and untyped
    - Incoming keys are camelCase (selStart, willCommit, pageNumber); snake_case also accepted
    - FieldPatch.to_patch() emits only the keys that were set, camelCased
      ({id, value, formattedValue, selRange})

Design Decisions:
    - Loose `Any` types for event attributes: defaulting happens in EventRecord,
      not here, so partial or odd input bags still dispatch
    - Separate input/output models: interactions are host-facing, patches are
      presentation-facing
"""

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class RawInteraction(BaseModel):
    """One interaction as raised by the host (keystroke, focus, page open, ...)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
        extra="allow",
    )

    id: str
    name: str

    # Event attributes
    value: Any = None
    change: Any = None
    change_ex: Any = None
    commit_key: Any = None
    field_full: Any = None
    key_down: Any = None
    modifier: Any = None
    shift: Any = None
    rich_change: Any = None
    rich_change_ex: Any = None
    rich_value: Any = None
    sel_start: Any = None
    sel_end: Any = None
    source: Any = None
    target: Any = None
    will_commit: Any = None

    # Page events
    actions: Any = None
    page_number: Any = None

    # App ResetForm
    ids: Any = None

    def event_fields(self) -> dict[str, Any]:
        """Snake_case bag suitable for EventRecord.from_interaction."""
        return self.model_dump(exclude={"id", "actions", "page_number", "ids"})


class FieldPatch(BaseModel):
    """Value/selection update sent to a field's presentation collaborator."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str | None
    value: Any = None
    formatted_value: Any = None
    sel_range: list | None = None

    def to_patch(self) -> dict:
        return self.model_dump(by_alias=True, exclude_unset=True)
