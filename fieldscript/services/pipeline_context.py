"""Pipeline Context: the dispatcher state shared by the pipeline stages.

Invariants:
    - calculation_order is fixed for the lifetime of the dispatcher
    - objects is the live map: ids may disappear between passes
    - is_calculating is the only re-entrancy guard, and only calculate_now reads it
"""

from dataclasses import dataclass, field

from fieldscript.core.collaborator_protocols import DocumentLike, FieldTarget
from fieldscript.core.domain_types import FieldId
from fieldscript.core.handler_registry import HandlerRegistry


@dataclass
class PipelineContext:
    document: DocumentLike
    calculation_order: tuple[FieldId, ...] | None
    objects: dict[FieldId, FieldTarget]
    registry: HandlerRegistry = field(default_factory=HandlerRegistry)

    # True while a calculation pass is on the stack
    is_calculating: bool = False

    @property
    def calculation_enabled(self) -> bool:
        """A calculation order exists and the document allows calculation."""
        return bool(self.calculation_order) and bool(self.document.calculate)
