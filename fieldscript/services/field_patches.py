"""Field Patches: the only externally observable output of a dispatch.

Invariants:
    - Every patch carries the target's field_id
    - Only explicitly passed keys appear in the emitted dict
    - A cleared field is always {value: "", formattedValue: None, selRange: [0, 0]}
"""

import logging
from typing import Any

from fieldscript.core.collaborator_protocols import FieldTarget
from fieldscript.core.domain_types import CLEARED_SELECTION
from fieldscript.schemas.interaction import FieldPatch

logger = logging.getLogger(__name__)


def send_patch(target: FieldTarget, **fields: Any) -> dict:
    """Build a FieldPatch from keyword fields and send it to the target."""
    patch = FieldPatch(id=target.field_id, **fields).to_patch()
    logger.debug(
        f"Patch for {target.field_id}: {sorted(patch)}",
        extra={"field_id": target.field_id},
    )
    target.send(patch)
    return patch


def send_cleared(target: FieldTarget) -> dict:
    """Invalid entry: blank the field and collapse its selection."""
    return send_patch(
        target,
        value="",
        formatted_value=None,
        sel_range=list(CLEARED_SELECTION),
    )
