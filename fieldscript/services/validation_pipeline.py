"""Validation Pipeline: Validate, then commit, recalculate, and Format one field.

Invariants:
    - Accepted value is committed to the field BEFORE the calculation pass runs
    - The emitted value is the field's value after recalculation, not the Format output
    - formattedValue is None unless at least one Format handler ran
    - Rejection clears the field only when a Validate handler actually ran
    - event.value holds the unformatted value again when the pipeline returns
"""

import logging

from fieldscript.core.collaborator_protocols import FieldTarget
from fieldscript.core.domain_types import EventName
from fieldscript.core.event_record import EventRecord
from fieldscript.services.action_runner import run_actions
from fieldscript.services.calculation_pass import run_calculate
from fieldscript.services.field_patches import send_cleared, send_patch
from fieldscript.services.pipeline_context import PipelineContext

logger = logging.getLogger(__name__)


def run_validation(
    ctx: PipelineContext, source: FieldTarget, event: EventRecord,
) -> None:
    did_validate_run = run_actions(
        ctx.registry, source, source, event, EventName.VALIDATE,
    )
    if event.rc:
        source.value = event.value

        run_calculate(ctx, source, event)

        saved_value = event.value = source.value
        formatted_value = None
        if run_actions(ctx.registry, source, source, event, EventName.FORMAT):
            formatted_value = event.value

        send_patch(source, value=saved_value, formatted_value=formatted_value)
        event.value = saved_value
    elif did_validate_run:
        logger.debug(
            f"Validation rejected value for {source.field_id}",
            extra={"field_id": source.field_id, "event_name": "Validate"},
        )
        send_cleared(source)
