"""Action Runner: invoke the handlers registered for one (target, event name) pair.

Invariants:
    - source / target / name / target_name refreshed and rc reset to True BEFORE handlers run
    - Handlers run in registration order with the same EventRecord
    - Handler exceptions propagate unchanged (no catch, no retry)
    - Returns True iff at least one handler ran
"""

import logging

from fieldscript.core.collaborator_protocols import FieldTarget
from fieldscript.core.domain_types import EventName
from fieldscript.core.event_record import EventRecord
from fieldscript.core.handler_registry import HandlerRegistry

logger = logging.getLogger(__name__)


def run_actions(
    registry: HandlerRegistry,
    source: FieldTarget,
    target: FieldTarget,
    event: EventRecord,
    event_name: EventName | str,
) -> bool:
    event.source = source.wrapped
    event.target = target.wrapped
    event.name = event_name
    event.target_name = target.display_name
    event.rc = True

    handlers = registry.handlers_for(target.field_id, event_name)
    if not handlers:
        return False

    logger.debug(
        f"Running {len(handlers)} {event_name} handler(s) on {target.field_id}",
        extra={
            "field_id": target.field_id,
            "event_name": str(event_name),
            "handler_count": len(handlers),
        },
    )
    for handler in handlers:
        handler(event)
    return True
