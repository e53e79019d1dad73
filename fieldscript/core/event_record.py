"""Event Record: snapshot of one interaction's parameters, shared with handlers.

Invariants:
    - rc starts True; only handlers (and the action runner's reset) change it
    - sel_start / sel_end default to UNSET_SELECTION; only None means "absent"
    - Every other optional attribute falls back to its default when falsy
    - After lock_value(), assigning `value` raises (strict) or is ignored (lenient)
    - No module-level "current event": the record is passed as an explicit argument

Design Decisions:
    - Plain mutable dataclass: handlers communicate decisions only by mutating it
    - Value lock enforced in __setattr__ so handler code cannot bypass it by
      assigning the attribute directly
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping

from fieldscript.core.domain_types import UNSET_SELECTION
from fieldscript.core.errors import EventValueLockedError

logger = logging.getLogger(__name__)


@dataclass
class EventRecord:
    """Mutable event context handed to every handler of one dispatch."""

    name: str | None = None
    change: str = ""
    change_ex: Any = None
    commit_key: int = 0
    field_full: bool = False
    key_down: bool = False
    modifier: bool = False
    shift: bool = False
    rich_change: list = field(default_factory=list)
    rich_change_ex: list = field(default_factory=list)
    rich_value: list = field(default_factory=list)
    sel_start: int = UNSET_SELECTION
    sel_end: int = UNSET_SELECTION
    source: Any = None
    target: Any = None
    target_name: str = ""
    type: str = "Field"
    value: Any = ""
    rc: bool = True
    will_commit: bool = False

    _value_locked: bool = field(default=False, init=False, repr=False, compare=False)
    _strict_lock: bool = field(default=True, init=False, repr=False, compare=False)

    @classmethod
    def from_interaction(cls, data: Mapping[str, Any]) -> "EventRecord":
        """Build a record from a snake_case input bag, applying defaults."""
        sel_start = data.get("sel_start")
        sel_end = data.get("sel_end")
        return cls(
            name=data.get("name"),
            change=data.get("change") or "",
            change_ex=data.get("change_ex") or None,
            commit_key=data.get("commit_key") or 0,
            field_full=data.get("field_full") or False,
            key_down=data.get("key_down") or False,
            modifier=data.get("modifier") or False,
            shift=data.get("shift") or False,
            rich_change=data.get("rich_change") or [],
            rich_change_ex=data.get("rich_change_ex") or [],
            rich_value=data.get("rich_value") or [],
            sel_start=UNSET_SELECTION if sel_start is None else sel_start,
            sel_end=UNSET_SELECTION if sel_end is None else sel_end,
            source=data.get("source") or None,
            target=data.get("target") or None,
            value=data.get("value") or "",
            will_commit=data.get("will_commit") or False,
        )

    def lock_value(self, strict: bool = True) -> None:
        """Freeze `value` for the rest of this dispatch."""
        object.__setattr__(self, "_strict_lock", strict)
        object.__setattr__(self, "_value_locked", True)

    @property
    def value_locked(self) -> bool:
        return self._value_locked

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "value" and getattr(self, "_value_locked", False):
            if self._strict_lock:
                raise EventValueLockedError(self.name)
            logger.debug(
                f"Ignored write to locked event.value during {self.name}",
                extra={"event_name": self.name},
            )
            return
        object.__setattr__(self, name, value)
