"""Event Dispatch: explicit routing of one interaction through the field pipeline.

Invariants:
    - Unknown ids are routing conditions (doc / page / app / ignored), never faults
    - ResetForm on the "app" pseudo-target builds no EventRecord
    - Button targets get their id stamped and event.value rewritten through export_value
    - Blur / Focus handlers may read event.value but not reassign it
    - Non-Keystroke events end after their own stage; nothing is entered implicitly
    - calculate_now releases the is_calculating guard even when a handler raises

Design Decisions:
    - Explicit if/elif on event names over a getattr table: every route visible in one place
    - The EventRecord is a local of dispatch() and is threaded through every call;
      a nested dispatch from handler code gets its own record
    - dispatch() returns the KeystrokeOutcome for keystrokes so hosts can observe it
"""

import logging
from typing import Any, Mapping

from pydantic import ValidationError

from fieldscript.config import Settings, get_settings
from fieldscript.core.collaborator_protocols import (
    CalculationOrder, DocumentLike, FieldTarget, export_value_for,
)
from fieldscript.core.domain_types import (
    APP_TARGET, DOCUMENT_TARGET, PAGE_TARGET,
    EventName, FieldId, KeystrokeOutcome, TargetKind,
)
from fieldscript.core.edit_merge import merge_change
from fieldscript.core.errors import ErrorContext, InvalidInteractionError
from fieldscript.core.event_record import EventRecord
from fieldscript.core.handler_registry import HandlerRegistry
from fieldscript.core.keystroke_resolution import (
    KeystrokeSnapshot, merged_selection, resolve_keystroke,
)
from fieldscript.schemas.interaction import RawInteraction
from fieldscript.services.action_runner import run_actions
from fieldscript.services.calculation_pass import run_calculate
from fieldscript.services.field_patches import send_cleared, send_patch
from fieldscript.services.pipeline_context import PipelineContext
from fieldscript.services.validation_pipeline import run_validation

logger = logging.getLogger(__name__)


class EventDispatcher:
    """Routes interactions to handlers and reconciles their outcomes."""

    def __init__(
        self,
        document: DocumentLike,
        calculation_order: CalculationOrder | None,
        objects: dict[FieldId, FieldTarget],
        registry: HandlerRegistry | None = None,
        settings: Settings | None = None,
    ):
        self._ctx = PipelineContext(
            document=document,
            calculation_order=(
                tuple(calculation_order) if calculation_order is not None else None
            ),
            objects=objects,
            registry=registry if registry is not None else HandlerRegistry(),
        )
        self._settings = settings or get_settings()

        document.event_dispatcher = self

    @property
    def registry(self) -> HandlerRegistry:
        return self._ctx.registry

    @property
    def is_calculating(self) -> bool:
        return self._ctx.is_calculating

    # -- Entry points -------------------------------------------------------

    def dispatch(
        self, raw: RawInteraction | Mapping[str, Any],
    ) -> KeystrokeOutcome | None:
        """Route one interaction. Returns the outcome for Keystroke events."""
        interaction = _parse_interaction(raw)
        target_id = interaction.id

        source = self._ctx.objects.get(target_id)
        if source is None:
            self._dispatch_non_field(interaction)
            return None
        return self._dispatch_field(source, interaction)

    def calculate_now(self) -> None:
        """Run one full calculation pass unless one is already running.

        Reachable from handler code (document scripts call it through the
        document's event_dispatcher), so a nested call is a no-op.
        """
        ctx = self._ctx
        if not ctx.calculation_order or not ctx.document.calculate:
            return
        if ctx.is_calculating:
            logger.debug("calculate_now ignored: calculation already in progress")
            return

        first_id = ctx.calculation_order[0]
        source = ctx.objects.get(first_id)
        if source is None:
            logger.warning(
                f"calculate_now skipped: first field {first_id} is not loaded",
                extra={"field_id": first_id},
            )
            return

        # run_calculate holds ctx.is_calculating and releases it on any exit
        run_calculate(ctx, source, EventRecord())

    # -- Document / page / app ---------------------------------------------

    def _dispatch_non_field(self, interaction: RawInteraction) -> None:
        document = self._ctx.document
        target_id, name = interaction.id, interaction.name

        if target_id in (DOCUMENT_TARGET, PAGE_TARGET):
            event = EventRecord.from_interaction(interaction.event_fields())
            event.source = event.target = document.wrapped
            event.name = name
            logger.debug(
                f"Dispatching {target_id} event {name}",
                extra={"event_name": name},
            )
            if target_id == DOCUMENT_TARGET:
                document.dispatch_document_event(name, event)
            else:
                document.dispatch_page_event(
                    name, interaction.actions, interaction.page_number, event,
                )
            return

        if target_id == APP_TARGET and name == EventName.RESET_FORM:
            for field_id in interaction.ids or ():
                obj = self._ctx.objects.get(field_id)
                if obj is not None:
                    obj.reset()
            return

        logger.debug(
            f"Ignored {name} interaction for unknown target {target_id}",
            extra={"field_id": target_id, "event_name": name},
        )

    # -- Fields -------------------------------------------------------------

    def _dispatch_field(
        self, source: FieldTarget, interaction: RawInteraction,
    ) -> KeystrokeOutcome | None:
        ctx = self._ctx
        name = interaction.name
        event = EventRecord.from_interaction(interaction.event_fields())

        if source.kind is TargetKind.BUTTON:
            source.field_id = FieldId(interaction.id)
            event.value = export_value_for(source, event.value)
            if name == EventName.ACTION:
                source.value = event.value

        if name == EventName.KEYSTROKE:
            snapshot = KeystrokeSnapshot.capture(event)
            run_actions(ctx.registry, source, source, event, name)
            return self._resolve_keystroke(source, event, snapshot)

        if name in (EventName.BLUR, EventName.FOCUS):
            event.lock_value(strict=self._settings.strict_value_lock)
        elif name == EventName.VALIDATE:
            run_validation(ctx, source, event)
            return None
        elif name == EventName.ACTION:
            run_actions(ctx.registry, source, source, event, name)
            run_calculate(ctx, source, event)
            return None

        run_actions(ctx.registry, source, source, event, name)
        return None

    def _resolve_keystroke(
        self,
        source: FieldTarget,
        event: EventRecord,
        snapshot: KeystrokeSnapshot,
    ) -> KeystrokeOutcome:
        outcome = resolve_keystroke(event.rc, event.will_commit)
        logger.debug(
            f"Keystroke on {source.field_id} resolved to {outcome.value}",
            extra={"field_id": source.field_id, "outcome": outcome.value},
        )

        if outcome is KeystrokeOutcome.COMMIT:
            run_validation(self._ctx, source, event)
        elif outcome is KeystrokeOutcome.MERGE:
            value = merge_change(event)
            source.value = value
            send_patch(
                source, value=value, sel_range=merged_selection(snapshot, event),
            )
        elif outcome is KeystrokeOutcome.REJECT_NO_COMMIT:
            send_patch(source, value=snapshot.value, sel_range=snapshot.sel_range)
        else:
            send_cleared(source)
        return outcome


def _parse_interaction(raw: RawInteraction | Mapping[str, Any]) -> RawInteraction:
    if isinstance(raw, RawInteraction):
        return raw
    if not isinstance(raw, Mapping):
        raise InvalidInteractionError(
            f"Interaction must be a mapping, got {type(raw).__name__}",
        )
    try:
        return RawInteraction.model_validate(dict(raw))
    except ValidationError as e:
        raise InvalidInteractionError(
            f"Invalid interaction: {e.error_count()} error(s)",
            ErrorContext(
                field_id=str(raw.get("id")) if raw.get("id") is not None else None,
                event_name=raw.get("name"),
                debug_info={"errors": e.errors(include_url=False)},
            ),
        ) from e
