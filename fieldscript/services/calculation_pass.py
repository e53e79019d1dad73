"""Calculation Pass: re-derive every field in calculation order, once.

Invariants:
    - No-op unless a calculation order exists AND document.calculate is true
    - Each field in the order is visited at most once per pass (single pass, no fixed point)
    - Ids missing from the live map are skipped; document.calculate turning false
      mid-pass stops the pass
    - The seeding source stays constant for every Calculate run of the pass
    - A Calculate handler leaving event.value as None means "no change"
    - Rejected re-validation rolls back only the EMITTED value; the in-memory
      field value keeps what the Calculate handler set
    - ctx.is_calculating is held for the whole pass and restored on any exit

Design Decisions:
    - run_calculate sets the guard but never checks it: nested Action/Validate
      dispatch still recalculates, only calculate_now is suppressed
"""

import logging

from fieldscript.core.collaborator_protocols import FieldTarget
from fieldscript.core.domain_types import EventName
from fieldscript.core.event_record import EventRecord
from fieldscript.services.action_runner import run_actions
from fieldscript.services.field_patches import send_patch
from fieldscript.services.pipeline_context import PipelineContext

logger = logging.getLogger(__name__)


def run_calculate(
    ctx: PipelineContext, source: FieldTarget, event: EventRecord,
) -> None:
    if not ctx.calculation_enabled:
        return

    logger.debug(
        f"Calculation pass seeded from {source.field_id}",
        extra={"field_id": source.field_id, "event_name": "Calculate"},
    )
    was_calculating = ctx.is_calculating
    ctx.is_calculating = True
    try:
        _run_pass(ctx, source, event)
    finally:
        ctx.is_calculating = was_calculating


def _run_pass(
    ctx: PipelineContext, source: FieldTarget, event: EventRecord,
) -> None:
    for target_id in ctx.calculation_order:
        target = ctx.objects.get(target_id)
        if target is None:
            continue

        # A handler may have switched calculation off during this pass
        if not ctx.document.calculate:
            logger.debug(
                f"Calculation disabled mid-pass before {target_id}",
                extra={"field_id": target_id},
            )
            break

        _calculate_target(ctx, source, target, event)


def _calculate_target(
    ctx: PipelineContext,
    source: FieldTarget,
    target: FieldTarget,
    event: EventRecord,
) -> None:
    event.value = None
    saved_value = target.value
    run_actions(ctx.registry, source, target, event, EventName.CALCULATE)
    if not event.rc:
        return

    if event.value is not None:
        target.value = event.value

    event.value = target.value
    run_actions(ctx.registry, target, target, event, EventName.VALIDATE)
    if not event.rc:
        if target.value != saved_value:
            send_patch(target, value=saved_value)
        return

    saved_value = event.value = target.value
    formatted_value = None
    if run_actions(ctx.registry, target, target, event, EventName.FORMAT):
        formatted_value = event.value

    send_patch(target, value=saved_value, formatted_value=formatted_value)
