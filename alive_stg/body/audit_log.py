"""
Append-only audit log for STG events.
Used for constitutional verification and forensics.

This module:
- Never deletes entries (clear() is TEST-profile only)
- Never modifies entries
- Provides read-only snapshots
"""

import copy
import logging
import threading
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, List, Mapping, Optional, Tuple

from alive_stg.config import is_test_build, get_build_profile
from alive_stg.core.gate_types import AuditEventType

from .errors import AuditLogSealed

logger = logging.getLogger("alive.stg.audit")


def freeze_value(value: Any) -> Any:
    """Deep read-only copy: mappings become proxies, lists and sets become
    tuples and frozensets, anything else is deep-copied."""
    if isinstance(value, Mapping):
        return MappingProxyType({k: freeze_value(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze_value(v) for v in value)
    if isinstance(value, (set, frozenset)):
        return frozenset(freeze_value(v) for v in value)
    return copy.deepcopy(value)


@dataclass(frozen=True)
class AuditEvent:
    """Immutable audit log entry.

    Metadata is deep-copied at construction and exposed read-only at every
    nesting level.
    """
    type: AuditEventType
    timestamp: int
    reason: str
    window_id: Optional[str] = None
    scope: Optional[str] = None
    metadata: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        object.__setattr__(self, "metadata", freeze_value(self.metadata))


class AuditLog:
    """
    Append-only event log.

    INVARIANTS:
    - append() is the only mutator
    - read_all() returns a snapshot, never the backing list
    - insertion order == chronological order
    """

    def __init__(self):
        self._events: List[AuditEvent] = []
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)

    def append(self, event: AuditEvent) -> None:
        """Append an event. This is the ONLY way to add entries."""
        if not isinstance(event, AuditEvent):
            raise TypeError(f"AuditLog accepts AuditEvent, got {type(event).__name__}")
        with self._lock:
            self._events.append(event)

    def read_all(self) -> Tuple[AuditEvent, ...]:
        """Read-only snapshot of every event, in insertion order."""
        with self._lock:
            return tuple(self._events)

    def filter(self, event_type: AuditEventType) -> Tuple[AuditEvent, ...]:
        return tuple(e for e in self.read_all() if e.type == event_type)

    def count(self, event_type: Optional[AuditEventType] = None) -> int:
        if event_type is None:
            return len(self)
        return len(self.filter(event_type))

    def last(self) -> Optional[AuditEvent]:
        with self._lock:
            return self._events[-1] if self._events else None

    def clear(self) -> None:
        """
        Clear the log.

        TEST PROFILE ONLY. Raises AuditLogSealed in any other build.
        """
        if not is_test_build():
            profile = get_build_profile()
            logger.warning(f"Refused audit log clear under {profile.value} profile")
            raise AuditLogSealed(
                f"Audit log is append-only under the {profile.value} profile. "
                f"clear() requires ALIVE_BUILD_PROFILE=TEST."
            )
        with self._lock:
            self._events = []
